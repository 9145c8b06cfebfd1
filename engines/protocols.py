"""Protocol definitions for name parser call signatures.

Alternative parsers should implement these protocols so they can be
registered and selected by the :mod:`engines` plugin system.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, Sequence


class NameParser(Protocol):
    """Callable splitting scientific names into nomenclatural components.

    One mapping is returned per parsed name, shaped like a GBIF name parser
    response: ``scientificName`` (the input string), ``genusOrAbove``,
    ``specificEpithet``, ``infraSpecificEpithet``, ``authorship``,
    ``bracketAuthorship`` and ``rankMarker``.  Names the parser cannot
    handle are simply absent from the result.
    """

    def __call__(self, names: Sequence[str]) -> List[Dict[str, Any]]:
        ...


__all__ = ["NameParser"]
