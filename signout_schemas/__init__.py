"""Public schema exports for the signout census engine."""

from .census import (
    AcuityLevel,
    CensusStats,
    DashboardRecord,
    DispoStatus,
    IDRRecord,
    PatientLines,
    PatientPlan,
    PatientSummary,
    Problem,
    SectionView,
    TableRecord,
    TaskProgress,
    Trend,
    Vitals,
)

__all__ = [
    "AcuityLevel",
    "CensusStats",
    "DashboardRecord",
    "DispoStatus",
    "IDRRecord",
    "PatientLines",
    "PatientPlan",
    "PatientSummary",
    "Problem",
    "SectionView",
    "TableRecord",
    "TaskProgress",
    "Trend",
    "Vitals",
]
