"""Normalisation of name parser output into taxon classification fields.

The parser itself is an external collaborator (see :mod:`engines`).  This
module turns its raw responses into :class:`ParsedName` records with no
missing values, derives ``taxonRank`` and ``scientificNameAuthorship`` and
applies them to the unified taxa.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from engines.protocols import NameParser
from qc.report import QualityReport

from .errors import UnparseableNameError
from .normalize import normalize_rank
from .schema import Taxon

logger = logging.getLogger(__name__)

# A lowercase "x" between two name parts, a leading "x " before the genus or
# the multiplication sign marks a hybrid, e.g. "Salix x rubens" or
# "Populus ×canadensis". A trailing "X" is a placeholder, as in "Pucciniaceae X".
HYBRID_MARKER_RE = re.compile(r"\S\s+x\s+\S|^x\s+\S|×")

DEFAULT_RANK = "genus"
HYBRID_RANK = "hybrid"


@dataclass(frozen=True)
class ParsedName:
    genus: str
    specificEpithet: str = ""
    infraspecificEpithet: str = ""
    authorship: str = ""
    bracketAuthorship: str = ""
    rankMarker: str = DEFAULT_RANK

    @property
    def scientific_name_authorship(self) -> str:
        return format_authorship(self.authorship, self.bracketAuthorship)


def is_hybrid(name: str) -> bool:
    """Return ``True`` when ``name`` contains a hybrid operator."""

    return bool(HYBRID_MARKER_RE.search(name))


def format_authorship(authorship: Optional[str], bracket_authorship: Optional[str]) -> str:
    """Combine authorships into ``(bracket) authorship``.

    An empty bracket authorship never yields empty parentheses, and a
    bracket authorship without authorship is dropped.
    """

    authorship = (authorship or "").strip()
    bracket_authorship = (bracket_authorship or "").strip()
    if authorship and bracket_authorship:
        return f"({bracket_authorship}) {authorship}"
    return authorship


def _text(result: Mapping[str, Any], key: str) -> str:
    value = result.get(key)
    return str(value).strip() if value is not None else ""


def normalize_parsed_name(raw_name: str, result: Mapping[str, Any]) -> ParsedName:
    """Build a :class:`ParsedName` from one parser response for ``raw_name``."""

    rank_marker = _text(result, "rankMarker")
    if not rank_marker:
        rank_marker = HYBRID_RANK if is_hybrid(raw_name) else DEFAULT_RANK
    return ParsedName(
        genus=_text(result, "genusOrAbove"),
        specificEpithet=_text(result, "specificEpithet"),
        infraspecificEpithet=_text(result, "infraSpecificEpithet"),
        authorship=_text(result, "authorship"),
        bracketAuthorship=_text(result, "bracketAuthorship"),
        rankMarker=rank_marker,
    )


def _is_parsed(response: Mapping[str, Any]) -> bool:
    """GBIF echoes names it cannot parse with ``parsed: false``."""
    return response.get("parsed", True) is not False and bool(_text(response, "genusOrAbove"))


def parse_names(names: Iterable[str], parser: NameParser) -> Dict[str, ParsedName]:
    """Parse every distinct name in ``names`` with ``parser``.

    Raises
    ------
    UnparseableNameError
        If the parser returned nothing, or an unparsed result, for one or
        more names.
    """

    unique = list(dict.fromkeys(names))
    responses = parser(unique)
    by_name: Dict[str, Mapping[str, Any]] = {}
    for response in responses:
        name = response.get("scientificName")
        if name and name not in by_name and _is_parsed(response):
            by_name[name] = response

    missing = [name for name in unique if name not in by_name]
    if missing:
        raise UnparseableNameError(missing)

    logger.info("Parsed %d distinct scientific names", len(unique))
    return {name: normalize_parsed_name(name, by_name[name]) for name in unique}


def enrich_taxa(
    taxa: List[Taxon],
    parsed: Mapping[str, ParsedName],
    report: QualityReport | None = None,
) -> List[Taxon]:
    """Copy the parsed components onto each taxon.

    Every taxon keeps its row.
    """

    enriched: List[Taxon] = []
    for taxon in taxa:
        name = parsed.get(taxon.scientificName)
        if name is None:
            raise UnparseableNameError([taxon.scientificName])
        enriched.append(
            taxon.model_copy(
                update={
                    "genus": name.genus,
                    "specificEpithet": name.specificEpithet,
                    "infraspecificEpithet": name.infraspecificEpithet,
                    "taxonRank": normalize_rank(name.rankMarker, report, taxon.scientificName),
                    "scientificNameAuthorship": name.scientific_name_authorship,
                }
            )
        )
    return enriched
