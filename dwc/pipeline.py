"""The checklist transform, from raw records to the three output tables.

Each stage takes the previous list of taxa and returns a new one::

    extract_and_union -> assign_taxon_ids -> add_citations
        -> parse_names/enrich_taxa -> add_classification -> projections
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from engines.protocols import NameParser
from qc.report import QualityReport

from .citations import add_citations
from .errors import ChecklistError
from .hosts import extract_and_union
from .identifiers import assign_taxon_ids
from .mapper import (
    add_classification,
    build_distribution_rows,
    build_resource_relationship_rows,
    build_taxon_rows,
)
from .names import enrich_taxa, parse_names
from .schema import (
    DistributionRow,
    Interaction,
    RawRecord,
    ResourceRelationshipRow,
    Taxon,
    TaxonRow,
)
from .settings import ChecklistSettings

logger = logging.getLogger(__name__)


@dataclass
class ChecklistTables:
    taxa: List[Taxon]
    interactions: List[Interaction]
    taxon_rows: List[TaxonRow]
    distribution_rows: List[DistributionRow]
    resource_relationship_rows: List[ResourceRelationshipRow]
    report: QualityReport = field(default_factory=QualityReport)

    def counts(self) -> dict:
        return {
            "taxon": len(self.taxon_rows),
            "distribution": len(self.distribution_rows),
            "resourcerelationship": len(self.resource_relationship_rows),
            "parasites": sum(1 for t in self.taxa if t.is_parasite),
            "hosts": sum(1 for t in self.taxa if not t.is_parasite),
        }


def build_checklist(
    records: Iterable[RawRecord],
    parser: NameParser,
    settings: ChecklistSettings,
    report: QualityReport | None = None,
) -> ChecklistTables:
    """Run every stage and return the tables, or raise on fatal input errors."""

    report = report if report is not None else QualityReport()
    records = list(records)
    logger.info("Building checklist from %d records", len(records))

    taxa, interactions = extract_and_union(records, report)
    taxa = assign_taxon_ids(taxa, settings.dataset.short_name)
    taxa = add_citations(taxa, settings.references.parts, settings.references.host, report)

    parsed = parse_names((t.scientificName for t in taxa), parser)
    enriched = enrich_taxa(taxa, parsed, report)
    if len(enriched) != len(taxa):
        raise ChecklistError(
            "row_count_mismatch",
            f"Name parsing changed taxon count from {len(taxa)} to {len(enriched)}",
        )
    taxa = add_classification(enriched)

    tables = ChecklistTables(
        taxa=taxa,
        interactions=interactions,
        taxon_rows=build_taxon_rows(taxa, settings),
        distribution_rows=build_distribution_rows(taxa, settings, report),
        resource_relationship_rows=build_resource_relationship_rows(taxa, interactions),
        report=report,
    )
    logger.info(
        "Built %(taxon)d taxa (%(parasites)d parasites, %(hosts)d hosts), "
        "%(distribution)d distributions, %(resourcerelationship)d relationships",
        tables.counts(),
    )
    if report.warnings:
        logger.warning("%d data quality warnings: %s", len(report), report.summary())
    return tables
