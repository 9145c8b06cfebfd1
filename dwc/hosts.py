"""Extraction of host plants and union with the parasite taxa.

Host plants are listed inside the ``hostPlant`` column of each parasite as
``", "``-separated names.  They are turned into their own taxa once, here;
later stages work from the resulting :class:`Interaction` list and never
re-read ``hostPlant``.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, NamedTuple, Optional

from qc.report import DUAL_ROLE_NAME, QualityReport

from .errors import InvalidInputError
from .schema import Interaction, RawRecord, ResourceRelation, Taxon

logger = logging.getLogger(__name__)

HOST_SEPARATOR = ", "


class HostUnion(NamedTuple):
    taxa: List[Taxon]
    interactions: List[Interaction]


def split_hosts(host_plant: Optional[str]) -> List[str]:
    """Return the host names listed in a ``hostPlant`` value, in order."""

    if not host_plant:
        return []
    hosts = [name.strip() for name in host_plant.split(HOST_SEPARATOR)]
    return [name for name in hosts if name]


def extract_interactions(records: Iterable[RawRecord]) -> List[Interaction]:
    """One interaction per host mention; duplicates across records are kept."""

    return [
        Interaction(parasite=record.scientificName, host=host)
        for record in records
        for host in split_hosts(record.hostPlant)
    ]


def distinct_hosts(interactions: Iterable[Interaction]) -> List[str]:
    """Distinct host names in order of first mention (exact, case-sensitive)."""

    return list(dict.fromkeys(interaction.host for interaction in interactions))


def _parasite_taxa(records: List[RawRecord]) -> List[Taxon]:
    seen = set()
    taxa = []
    for line, record in enumerate(records, start=1):
        name = record.scientificName
        if not name:
            raise InvalidInputError(f"Record {line} has an empty scientificName")
        if name in seen:
            raise InvalidInputError(f"Parasite '{name}' is listed more than once")
        seen.add(name)
        taxa.append(
            Taxon(
                scientificName=name,
                resourceRelation=ResourceRelation.PARASITE,
                family=record.family,
                record=record,
            )
        )
    return taxa


def extract_and_union(
    records: Iterable[RawRecord], report: QualityReport | None = None
) -> HostUnion:
    """Split hosts out of ``records`` and union them with the parasites.

    Returns the unified taxa (parasites first, then distinct hosts) and the
    full interaction list.  Names are not deduplicated across roles: a name
    used both as parasite and as host yields two taxa, which is reported.
    """

    records = list(records)
    parasites = _parasite_taxa(records)
    interactions = extract_interactions(records)
    host_names = distinct_hosts(interactions)
    hosts = [
        Taxon(scientificName=name, resourceRelation=ResourceRelation.HOST)
        for name in host_names
    ]

    if report is not None:
        parasite_names = {taxon.scientificName for taxon in parasites}
        for name in host_names:
            if name in parasite_names:
                report.warn(
                    DUAL_ROLE_NAME,
                    "scientificName",
                    name,
                    name,
                    "listed as parasite and host; both taxa share one taxonID",
                )

    logger.info(
        "Extracted %d hosts from %d host mentions across %d parasites",
        len(hosts),
        len(interactions),
        len(parasites),
    )
    return HostUnion(parasites + hosts, interactions)
