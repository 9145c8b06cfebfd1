from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from qc.report import MISSING_PAGE, QualityReport

from .errors import InvalidInputError
from .schema import ResourceRelation, Taxon


def _part_key(part: str) -> str:
    """Normalise a volume number so ``"01"`` and ``"1"`` resolve alike."""

    part = part.strip()
    return str(int(part)) if part.isdigit() else part


def resolve_citation(
    role: ResourceRelation,
    part: Optional[str],
    page: Optional[str],
    references: Mapping[str, str],
    host_citation: str,
    report: QualityReport | None = None,
    scientific_name: Optional[str] = None,
) -> str:
    """Return the ``bibliographicCitation`` of a taxon.

    Hosts share one citation covering all volumes.  Parasites cite the
    volume they are described in followed by ``Page: {page}``.
    """

    if role is ResourceRelation.HOST:
        return host_citation

    if not part:
        raise InvalidInputError(f"Parasite '{scientific_name}' has no part (volume number)")
    full_reference = {_part_key(k): v for k, v in references.items()}.get(_part_key(part))
    if full_reference is None:
        raise InvalidInputError(
            f"Parasite '{scientific_name}' refers to unknown part {part!r}; "
            f"known parts: {', '.join(sorted(references))}"
        )
    if not page:
        if report is not None:
            report.warn(MISSING_PAGE, "page", page, scientific_name)
        return full_reference
    return f"{full_reference} Page: {page}"


def add_citations(
    taxa: Iterable[Taxon],
    references: Mapping[str, str],
    host_citation: str,
    report: QualityReport | None = None,
) -> List[Taxon]:
    cited = []
    for taxon in taxa:
        record = taxon.record
        citation = resolve_citation(
            taxon.resourceRelation,
            record.part if record else None,
            record.page if record else None,
            references,
            host_citation,
            report,
            taxon.scientificName,
        )
        cited.append(taxon.model_copy(update={"bibliographicCitation": citation}))
    return cited
