"""Name parser registration and lookup.

Parsers register a factory under a short name when their module is imported.
Additional parsers can be discovered via the ``rust_fungi.parsers``
entry-point group.
"""

from importlib import import_module, metadata
from typing import Any, Callable, Dict, List

from .protocols import NameParser

# Registry mapping parser name -> factory
_REGISTRY: Dict[str, Callable[..., NameParser]] = {}


def register_parser(name: str, factory: Callable[..., NameParser]) -> None:
    """Register ``factory`` as the constructor of the parser called ``name``."""

    _REGISTRY[name] = factory


def available_parsers() -> List[str]:
    """Return a sorted list of registered parser names."""

    return sorted(_REGISTRY)


def _discover_entry_points() -> None:
    """Load parsers exposed via the ``rust_fungi.parsers`` entry point."""

    for ep in metadata.entry_points().select(group="rust_fungi.parsers"):
        ep.load()  # Importing registers the parser


def get_parser(name: str, **kwargs: Any) -> NameParser:
    """Instantiate the parser registered as ``name``.

    Raises
    ------
    ValueError
        If no parser is registered under ``name``.
    """

    if name not in _REGISTRY:
        available = ", ".join(available_parsers())
        raise ValueError(f"Unknown name parser '{name}'. Available: {available}")
    return _REGISTRY[name](**kwargs)


# Import built-in parsers so they register themselves on module import.
for _mod in ("gbif", "cached"):
    import_module(f"{__name__}.{_mod}")

_discover_entry_points()

__all__ = ["NameParser", "register_parser", "available_parsers", "get_parser"]
