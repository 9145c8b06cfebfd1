"""Projection of the unified taxa onto the three Darwin Core tables."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from qc.report import QualityReport

from .dates import normalize_range
from .errors import ChecklistError
from .normalize import normalize_establishment_means
from .schema import (
    DistributionRow,
    Interaction,
    ResourceRelation,
    ResourceRelationshipRow,
    Taxon,
    TaxonRow,
)
from .settings import ChecklistSettings

logger = logging.getLogger(__name__)

# kingdom, phylum, order per role
CLASSIFICATION: Dict[ResourceRelation, Tuple[str, Optional[str], Optional[str]]] = {
    ResourceRelation.PARASITE: ("Fungi", "Basidiomycota", "Uredinales"),
    ResourceRelation.HOST: ("Plantae", None, None),
}

RELATIONSHIP_OF_RESOURCE = "parasite of"


def add_classification(taxa: Iterable[Taxon]) -> List[Taxon]:
    """Fill ``kingdom``, ``phylum`` and ``order`` from the taxon role."""

    classified = []
    for taxon in taxa:
        kingdom, phylum, order = CLASSIFICATION[taxon.resourceRelation]
        classified.append(
            taxon.model_copy(update={"kingdom": kingdom, "phylum": phylum, "order": order})
        )
    return classified


def build_taxon_rows(taxa: Iterable[Taxon], settings: ChecklistSettings) -> List[TaxonRow]:
    dataset = settings.dataset
    return [
        TaxonRow(
            taxonID=taxon.taxonID,
            scientificName=taxon.scientificName,
            kingdom=taxon.kingdom,
            phylum=taxon.phylum,
            order=taxon.order,
            family=taxon.family,
            genus=taxon.genus,
            specificEpithet=taxon.specificEpithet,
            infraspecificEpithet=taxon.infraspecificEpithet,
            scientificNameAuthorship=taxon.scientificNameAuthorship,
            taxonRank=taxon.taxonRank,
            nomenclaturalCode=dataset.nomenclatural_code,
            language=dataset.language,
            license=dataset.license,
            rightsHolder=dataset.rights_holder,
            bibliographicCitation=taxon.bibliographicCitation,
            institutionID=dataset.institution_id,
            datasetID=dataset.id,
            datasetName=dataset.name,
        )
        for taxon in taxa
    ]


def build_distribution_rows(
    taxa: Iterable[Taxon],
    settings: ChecklistSettings,
    report: QualityReport | None = None,
) -> List[DistributionRow]:
    """One Belgian distribution per parasite; hosts get none."""

    location = settings.distribution
    rows = []
    for taxon in taxa:
        if not taxon.is_parasite:
            continue
        record = taxon.record
        rows.append(
            DistributionRow(
                taxonID=taxon.taxonID,
                locationID=location.location_id,
                locality=location.locality,
                countryCode=location.country_code,
                occurrenceStatus=record.occurrenceStatus if record else None,
                establishmentMeans=normalize_establishment_means(
                    record.establishmentMeans if record else None, report, taxon.scientificName
                ),
                eventDate=normalize_range(
                    record.date_from if record else None,
                    record.date_to if record else None,
                    report,
                    taxon.scientificName,
                ),
                source=taxon.bibliographicCitation,
            )
        )
    return rows


def build_resource_relationship_rows(
    taxa: Iterable[Taxon], interactions: Iterable[Interaction]
) -> List[ResourceRelationshipRow]:
    """One ``parasite of`` row per interaction.

    ``taxonID`` and ``relatedResourceID`` both hold the parasite ID,
    ``resourceID`` the host ID, and the parasite citation is the source of
    the relationship.
    """

    parasites: Dict[str, Taxon] = {}
    host_ids: Dict[str, str] = {}
    for taxon in taxa:
        if taxon.is_parasite:
            parasites[taxon.scientificName] = taxon
        else:
            host_ids[taxon.scientificName] = taxon.taxonID

    rows = []
    for interaction in interactions:
        parasite = parasites.get(interaction.parasite)
        host_id = host_ids.get(interaction.host)
        if parasite is None or host_id is None:
            raise ChecklistError(
                "unresolved_interaction",
                f"No taxon for interaction {interaction.parasite!r} -> {interaction.host!r}",
            )
        rows.append(
            ResourceRelationshipRow(
                taxonID=parasite.taxonID,
                resourceID=host_id,
                relatedResourceID=parasite.taxonID,
                relationshipOfResource=RELATIONSHIP_OF_RESOURCE,
                relationshipAccordingTo=parasite.bibliographicCitation,
            )
        )
    logger.debug("Built %d resource relationships", len(rows))
    return rows
