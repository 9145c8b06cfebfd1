"""Collection of non-fatal data quality observations.

Problems that should not abort a run (an unknown rank marker, a date that
cannot be read, an establishment means outside the vocabulary) are recorded
as :class:`DataQualityWarning` entries on a :class:`QualityReport`.  Each
entry is logged when it is recorded and the full report is written into
``manifest.json`` for manual review.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

UNMAPPED_RANK = "unmapped_rank"
UNMAPPED_ESTABLISHMENT_MEANS = "unmapped_establishment_means"
UNPARSEABLE_DATE = "unparseable_date"
INVERTED_DATE_RANGE = "inverted_date_range"
DUAL_ROLE_NAME = "dual_role_name"
MISSING_PAGE = "missing_page"


@dataclass(frozen=True)
class DataQualityWarning:
    """A single best-effort decision taken on a degraded value."""

    code: str
    field: str
    value: Optional[str]
    scientific_name: Optional[str] = None
    message: str = ""


@dataclass
class QualityReport:
    """Accumulates :class:`DataQualityWarning` entries during a run."""

    warnings: List[DataQualityWarning] = field(default_factory=list)

    def warn(
        self,
        code: str,
        field: str,
        value: Optional[str],
        scientific_name: Optional[str] = None,
        message: str = "",
    ) -> DataQualityWarning:
        entry = DataQualityWarning(code, field, value, scientific_name, message)
        self.warnings.append(entry)
        logger.warning(
            "%s: %s=%r%s%s",
            code,
            field,
            value,
            f" ({scientific_name})" if scientific_name else "",
            f" - {message}" if message else "",
        )
        return entry

    def by_code(self, code: str) -> List[DataQualityWarning]:
        return [w for w in self.warnings if w.code == code]

    def summary(self) -> Dict[str, int]:
        return dict(Counter(w.code for w in self.warnings))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": len(self.warnings),
            "by_code": self.summary(),
            "warnings": [asdict(w) for w in self.warnings],
        }

    def __len__(self) -> int:
        return len(self.warnings)
