"""Quality control for the checklist transform.

``QualityReport``
    Collects :class:`DataQualityWarning` entries for values the transform
    could only handle on a best-effort basis.  Warnings never abort a run;
    they are logged and written to ``manifest.json``.
"""

from .report import (
    DUAL_ROLE_NAME,
    INVERTED_DATE_RANGE,
    MISSING_PAGE,
    UNMAPPED_ESTABLISHMENT_MEANS,
    UNMAPPED_RANK,
    UNPARSEABLE_DATE,
    DataQualityWarning,
    QualityReport,
)

__all__ = [
    "DUAL_ROLE_NAME",
    "INVERTED_DATE_RANGE",
    "MISSING_PAGE",
    "UNMAPPED_ESTABLISHMENT_MEANS",
    "UNMAPPED_RANK",
    "UNPARSEABLE_DATE",
    "DataQualityWarning",
    "QualityReport",
]
