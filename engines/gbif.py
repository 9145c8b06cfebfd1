"""GBIF name parser client using pygbif.

Calls the GBIF ``/parser/name`` service through
:func:`pygbif.species.name_parser`, posting names in batches.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from pygbif import species

from . import register_parser

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class GbifNameParser:
    """Name parser backed by the GBIF API."""

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.batch_size = batch_size

    def __call__(self, names: Sequence[str]) -> List[Dict[str, Any]]:
        names = list(names)
        results: List[Dict[str, Any]] = []
        for start in range(0, len(names), self.batch_size):
            chunk = names[start : start + self.batch_size]
            logger.debug(
                "Parsing names %d-%d of %d with GBIF", start + 1, start + len(chunk), len(names)
            )
            response = species.name_parser(chunk)
            # A single name may come back as a bare mapping
            if isinstance(response, dict):
                response = [response]
            results.extend(response or [])
        logger.info("GBIF parsed %d of %d names", len(results), len(names))
        return results


register_parser("gbif", GbifNameParser)

__all__ = ["GbifNameParser", "DEFAULT_BATCH_SIZE"]
