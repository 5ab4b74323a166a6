"""Pydantic models for the structured views derived from a census section.

Every record is a read-only projection of one section. The variants
(summary, IDR, dashboard, table) are all filled from the same extractors.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


# =============================================================================
# ENUMS
# =============================================================================

class DispoStatus(str, Enum):
    """Discharge disposition status, in classifier priority order."""
    HOME = "home"
    SNF = "snf"
    REHAB = "rehab"
    READY = "ready"
    BLOCKED = "blocked"
    PENDING = "pending"
    UNKNOWN = "unknown"


class AcuityLevel(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Trend(str, Enum):
    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"
    UNKNOWN = "unknown"


# =============================================================================
# FIELD VALUES
# =============================================================================

class Vitals(BaseModel):
    """Vitals parsed from a single line; sub-fields are None when not written."""

    model_config = ConfigDict(extra="ignore")
    text: str = ""
    bp: str | None = None
    hr: str | None = None
    temp: str | None = None
    o2: str | None = None
    rr: str | None = None


class TaskProgress(BaseModel):
    model_config = ConfigDict(extra="ignore")
    total: int = 0
    completed: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining(self) -> int:
        return self.total - self.completed

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress(self) -> float:
        """Percent complete, 0 when there are no tasks."""
        return (self.completed / self.total) * 100 if self.total else 0.0


class Problem(BaseModel):
    model_config = ConfigDict(extra="ignore")
    title: str
    details: list[str] = Field(default_factory=list)


# =============================================================================
# RECORDS
# =============================================================================

class PatientSummary(BaseModel):
    """Canonical per-patient record used by the dashboard and card views."""

    model_config = ConfigDict(extra="ignore")
    index: int
    key: str = ""
    room: str = ""
    name: str = ""
    age: str = ""
    gender: str = ""
    admitted_for: str = ""
    problems: list[str] = Field(default_factory=list)
    problem_count: int = 0
    critical_lab_values: list[str] = Field(
        default_factory=list,
        description="Critical lab hits, capped at the display limit.",
    )
    has_critical_labs: bool = False
    vitals: Vitals | None = None
    tasks: TaskProgress = Field(default_factory=TaskProgress)
    tasks_remaining: int = 0
    active_meds: int = 0
    code_status: str = ""
    dispo: str = ""
    dispo_status: DispoStatus = DispoStatus.UNKNOWN
    acuity: AcuityLevel = AcuityLevel.MEDIUM
    acuity_reason: str = ""
    trend: Trend = Trend.UNKNOWN
    los: str = ""
    key_labs: list[str] = Field(default_factory=list)
    status_badges: list[str] = Field(default_factory=list)
    clinical_keywords: list[str] = Field(default_factory=list)
    summary_snippet: str = ""
    resident: str = ""
    student: str = ""
    risk_scores: list[str] = Field(default_factory=list)
    raw_context: str = Field("", description="Header plus body text of the section.")


class IDRRecord(BaseModel):
    """Interdisciplinary rounds view: discharge planning and barriers."""

    model_config = ConfigDict(extra="ignore")
    index: int
    key: str = ""
    room: str = ""
    name: str = ""
    age: str = ""
    gender: str = ""
    admitted_for: str = ""
    social_barriers: list[str] = Field(default_factory=list)
    pt_status: str = ""
    ot_status: str = ""
    cm_notes: str = ""
    dispo: str = ""
    dispo_status: DispoStatus = DispoStatus.UNKNOWN


class DashboardRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")
    index: int
    key: str = ""
    name: str = ""
    room: str = ""
    vitals: str = ""
    critical_labs: list[str] = Field(default_factory=list)
    active_problems: list[str] = Field(default_factory=list)
    acuity: AcuityLevel = AcuityLevel.MEDIUM


class TableRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")
    index: int
    key: str = ""
    room: str = ""
    name: str = ""
    age: str = ""
    gender: str = ""
    admitted_for: str = ""
    acuity: AcuityLevel = AcuityLevel.MEDIUM
    dispo: str = ""
    dispo_status: DispoStatus = DispoStatus.UNKNOWN
    vitals: str = ""
    social_barriers: list[str] = Field(default_factory=list)
    pt_status: str = ""
    ot_status: str = ""
    cm_notes: str = ""


class CensusStats(BaseModel):
    model_config = ConfigDict(extra="ignore")
    total: int = 0
    critical: int = 0
    high: int = 0
    ready_for_discharge: int = 0
    blocked: int = 0
    total_tasks: int = 0
    with_critical_labs: int = 0
    improving: int = 0
    worsening: int = 0
    avg_problems: float = 0.0


class PatientPlan(BaseModel):
    """Problems of one patient with their plan lines."""

    model_config = ConfigDict(extra="ignore")
    index: int
    header: str
    problems: list[Problem] = Field(default_factory=list)


class PatientLines(BaseModel):
    """Lines of one patient picked out by a filter (critical labs, meds, labs)."""

    model_config = ConfigDict(extra="ignore")
    index: int
    header: str
    lines: list[str] = Field(default_factory=list)


class SectionView(BaseModel):
    """Serializable form of a parsed section."""

    model_config = ConfigDict(extra="ignore")
    key: str
    header: str
    lines: list[str] = Field(default_factory=list)
    is_preamble: bool = False

    @classmethod
    def from_section(cls, section: Any) -> "SectionView":
        return cls(
            key=section.key,
            header=section.header,
            lines=list(section.lines),
            is_preamble=section.is_preamble,
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
