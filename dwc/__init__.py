from .schema import (
    TAXON_TERMS,
    DISTRIBUTION_TERMS,
    RESOURCE_RELATIONSHIP_TERMS,
    RawRecord,
    Taxon,
    Interaction,
    ResourceRelation,
    TaxonRow,
    DistributionRow,
    ResourceRelationshipRow,
)
from .errors import ChecklistError, InvalidInputError, UnparseableNameError
from .identifiers import taxon_id, assign_taxon_ids
from .names import ParsedName, format_authorship, is_hybrid, parse_names, enrich_taxa
from .hosts import extract_and_union, split_hosts
from .citations import resolve_citation, add_citations
from .dates import PartialDate, parse_date, normalize_range
from .normalize import normalize_rank, normalize_establishment_means
from .mapper import (
    build_taxon_rows,
    build_distribution_rows,
    build_resource_relationship_rows,
)
from .settings import ChecklistSettings, load_config
from .pipeline import ChecklistTables, build_checklist
from .archive import build_meta_xml, create_archive

__all__ = [
    "TAXON_TERMS",
    "DISTRIBUTION_TERMS",
    "RESOURCE_RELATIONSHIP_TERMS",
    "RawRecord",
    "Taxon",
    "Interaction",
    "ResourceRelation",
    "TaxonRow",
    "DistributionRow",
    "ResourceRelationshipRow",
    "ChecklistError",
    "InvalidInputError",
    "UnparseableNameError",
    "taxon_id",
    "assign_taxon_ids",
    "ParsedName",
    "format_authorship",
    "is_hybrid",
    "parse_names",
    "enrich_taxa",
    "extract_and_union",
    "split_hosts",
    "resolve_citation",
    "add_citations",
    "PartialDate",
    "parse_date",
    "normalize_range",
    "normalize_rank",
    "normalize_establishment_means",
    "build_taxon_rows",
    "build_distribution_rows",
    "build_resource_relationship_rows",
    "ChecklistSettings",
    "load_config",
    "ChecklistTables",
    "build_checklist",
    "build_meta_xml",
    "create_archive",
]
