from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ChecklistError(Exception):
    """Standard error raised by the checklist transform.

    Parameters
    ----------
    code:
        Short machine readable error code.
    message:
        Human readable error message.
    """

    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code}: {self.message}"


class InvalidInputError(ChecklistError):
    """A required raw field is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__("invalid_input", message)


class UnparseableNameError(ChecklistError):
    """The name parser returned no result for a scientific name."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        preview = ", ".join(repr(n) for n in names[:5])
        more = f" (+{len(names) - 5} more)" if len(names) > 5 else ""
        super().__init__("unparseable_name", f"No parser result for {preview}{more}")


__all__ = ["ChecklistError", "InvalidInputError", "UnparseableNameError"]
