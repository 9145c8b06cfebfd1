from __future__ import annotations

from enum import Enum
from typing import ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Column order of the three output tables.  ``taxonID`` is always first so
# that it can serve as the core id / coreid column of the archive.
TAXON_TERMS: List[str] = [
    "taxonID",
    "scientificName",
    "kingdom",
    "phylum",
    "order",
    "family",
    "genus",
    "specificEpithet",
    "infraspecificEpithet",
    "scientificNameAuthorship",
    "taxonRank",
    "nomenclaturalCode",
    "language",
    "license",
    "rightsHolder",
    "bibliographicCitation",
    "institutionID",
    "datasetID",
    "datasetName",
]

DISTRIBUTION_TERMS: List[str] = [
    "taxonID",
    "locationID",
    "locality",
    "countryCode",
    "occurrenceStatus",
    "establishmentMeans",
    "eventDate",
    "source",
]

RESOURCE_RELATIONSHIP_TERMS: List[str] = [
    "taxonID",
    "resourceID",
    "relatedResourceID",
    "relationshipOfResource",
    "relationshipAccordingTo",
]

# Header of the source checklist.
RAW_COLUMNS: List[str] = [
    "scientificName",
    "hostPlant",
    "family",
    "part",
    "page",
    "from",
    "to",
    "occurrenceStatus",
    "establishmentMeans",
]

# Cell values treated as missing when reading the source checklist.
MISSING_VALUES = {"", "NA"}


class ResourceRelation(str, Enum):
    """Role a taxon plays in the checklist."""

    PARASITE = "parasite"
    HOST = "host"


class RawRecord(BaseModel):
    """One row of the source checklist.

    Empty cells are stored as ``None``.  ``from`` and ``to`` are Python
    keywords and are exposed as ``date_from`` / ``date_to``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    scientificName: str
    hostPlant: Optional[str] = None
    family: Optional[str] = None
    part: Optional[str] = None
    page: Optional[str] = None
    date_from: Optional[str] = Field(default=None, alias="from")
    date_to: Optional[str] = Field(default=None, alias="to")
    occurrenceStatus: Optional[str] = None
    establishmentMeans: Optional[str] = None

    @field_validator("scientificName", mode="before")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> str:
        return (value or "").strip()

    @field_validator(
        "hostPlant",
        "family",
        "part",
        "page",
        "date_from",
        "date_to",
        "occurrenceStatus",
        "establishmentMeans",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return None if value in MISSING_VALUES else value


class Interaction(BaseModel):
    """A parasite → host pairing as listed in the source."""

    model_config = ConfigDict(frozen=True)

    parasite: str
    host: str


class Taxon(BaseModel):
    """Unified parasite-or-host taxon.

    Stages never mutate a taxon; they return copies made with
    ``model_copy(update=...)``.  Parasites keep their source row in
    ``record`` for the distribution projection.
    """

    model_config = ConfigDict(frozen=True)

    scientificName: str
    resourceRelation: ResourceRelation
    taxonID: Optional[str] = None
    kingdom: Optional[str] = None
    phylum: Optional[str] = None
    order: Optional[str] = None
    family: Optional[str] = None
    genus: Optional[str] = None
    specificEpithet: Optional[str] = None
    infraspecificEpithet: Optional[str] = None
    taxonRank: Optional[str] = None
    scientificNameAuthorship: Optional[str] = None
    bibliographicCitation: Optional[str] = None
    record: Optional[RawRecord] = None

    @property
    def is_parasite(self) -> bool:
        return self.resourceRelation is ResourceRelation.PARASITE


class _OutputRow(BaseModel):
    """Base for rows written to CSV; ``None`` is serialised as ``""``."""

    model_config = ConfigDict(frozen=True)

    TERMS: ClassVar[List[str]] = []

    def to_dict(self) -> Dict[str, str]:
        return {term: getattr(self, term) or "" for term in self.TERMS}


class TaxonRow(_OutputRow):
    TERMS: ClassVar[List[str]] = TAXON_TERMS

    taxonID: str
    scientificName: str
    kingdom: Optional[str] = None
    phylum: Optional[str] = None
    order: Optional[str] = None
    family: Optional[str] = None
    genus: Optional[str] = None
    specificEpithet: Optional[str] = None
    infraspecificEpithet: Optional[str] = None
    scientificNameAuthorship: Optional[str] = None
    taxonRank: Optional[str] = None
    nomenclaturalCode: Optional[str] = None
    language: Optional[str] = None
    license: Optional[str] = None
    rightsHolder: Optional[str] = None
    bibliographicCitation: Optional[str] = None
    institutionID: Optional[str] = None
    datasetID: Optional[str] = None
    datasetName: Optional[str] = None


class DistributionRow(_OutputRow):
    TERMS: ClassVar[List[str]] = DISTRIBUTION_TERMS

    taxonID: str
    locationID: Optional[str] = None
    locality: Optional[str] = None
    countryCode: Optional[str] = None
    occurrenceStatus: Optional[str] = None
    establishmentMeans: Optional[str] = None
    eventDate: Optional[str] = None
    source: Optional[str] = None


class ResourceRelationshipRow(_OutputRow):
    TERMS: ClassVar[List[str]] = RESOURCE_RELATIONSHIP_TERMS

    taxonID: str
    resourceID: str
    relatedResourceID: str
    relationshipOfResource: str
    relationshipAccordingTo: Optional[str] = None
