from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional
import tomllib

from qc.report import UNMAPPED_ESTABLISHMENT_MEANS, UNMAPPED_RANK, QualityReport

# Base directory for rule files
_RULES_DIR = Path(__file__).resolve().parent.parent / "config" / "rules"


@lru_cache(maxsize=None)
def _load_rules(name: str) -> Dict[str, Dict[str, str]]:
    """Load a TOML rule file from the configuration directory.

    Parameters
    ----------
    name: str
        Name of the rule file without extension.
    """

    path = _RULES_DIR / f"{name}.toml"
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def vocab_mapping(vocab: str) -> Dict[str, str]:
    """Return the lower-cased lookup table for ``vocab``."""

    section = _load_rules("vocab").get(vocab, {})
    return {k.lower(): v for k, v in section.items()}


def lookup_vocab(value: Optional[str], vocab: str) -> Optional[str]:
    """Return the controlled term for ``value`` or ``None`` when unmapped."""

    if not value:
        return None
    return vocab_mapping(vocab).get(value.lower())


def normalize_rank(
    rank_marker: str,
    report: QualityReport | None = None,
    scientific_name: str | None = None,
) -> str:
    """Recode a parser rank marker (``sp.``, ``var.``...) into a ``taxonRank``."""

    mapped = lookup_vocab(rank_marker, "taxonRank")
    if mapped is None:
        if report is not None:
            report.warn(UNMAPPED_RANK, "taxonRank", rank_marker, scientific_name)
        return rank_marker
    return mapped


def normalize_establishment_means(
    value: Optional[str],
    report: QualityReport | None = None,
    scientific_name: str | None = None,
) -> str:
    """Recode ``establishmentMeans``: ``alien`` becomes ``introduced``.

    Missing values become ``""``; values outside the vocabulary, including
    other spellings of its terms, are kept as-is and reported.
    """

    if not value:
        return ""
    # Matched exactly: "Native" is not "native"
    mapped = _load_rules("vocab").get("establishmentMeans", {}).get(value)
    if mapped is None:
        if report is not None:
            report.warn(UNMAPPED_ESTABLISHMENT_MEANS, "establishmentMeans", value, scientific_name)
        return value
    return mapped
