"""Name parser reading previously stored parser responses.

``rust-fungi-dwc parse-names`` stores the GBIF responses of a checklist as a
JSON list; pointing ``build --parsed-names`` at that file makes a run
reproducible and independent of network access.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from . import register_parser

logger = logging.getLogger(__name__)


class FileNameParser:
    """Serve parser responses from a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"{self.path} must contain a JSON list of parser results")
        self._results: Dict[str, Dict[str, Any]] = {
            item["scientificName"]: item for item in data if item.get("scientificName")
        }
        logger.info("Loaded %d parsed names from %s", len(self._results), self.path)

    def __call__(self, names: Sequence[str]) -> List[Dict[str, Any]]:
        return [self._results[name] for name in names if name in self._results]


def dump_parser_results(path: Path, results: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(results, indent=2, ensure_ascii=False), encoding="utf-8")


register_parser("file", FileNameParser)

__all__ = ["FileNameParser", "dump_parser_results"]
