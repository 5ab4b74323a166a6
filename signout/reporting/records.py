"""Per-patient records built from one census section.

All record variants share the same extractor calls, so the dashboard, IDR
and table views can never disagree about a patient's acuity or dispo.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from config.settings import ExtractionSettings, get_extraction_settings
from signout.extraction.classifiers import (
    classify_acuity,
    classify_dispo,
    classify_trend,
    extract_cm_notes,
    extract_social_barriers,
    extract_therapy_status,
)
from signout.extraction.clinical import (
    assessment_text,
    count_active_meds,
    extract_admitted_for,
    extract_clinical_keywords,
    extract_code_status,
    extract_critical_labs,
    extract_dispo,
    extract_key_labs,
    extract_los,
    extract_problems,
    extract_risk_scores,
    extract_status_badges,
    extract_summary_snippet,
    extract_team,
    extract_vitals,
)
from signout.extraction.header import extract_identity
from signout.extraction.tasks import extract_tasks
from signout.sectioning.segmenter import Section, parse_sections, patient_sections
from signout_schemas.census import (
    AcuityLevel,
    CensusStats,
    DashboardRecord,
    DispoStatus,
    IDRRecord,
    PatientSummary,
    TableRecord,
    Trend,
)

# Dispo statuses counted as "ready for discharge" in census stats.
READY_DISPO_STATUSES = frozenset({DispoStatus.READY, DispoStatus.HOME})


def _settings(settings: ExtractionSettings | None) -> ExtractionSettings:
    return settings or get_extraction_settings()


def _body(section: Section) -> str:
    return "\n".join(section.lines)


def build_patient_summary(
    section: Section,
    index: int,
    settings: ExtractionSettings | None = None,
) -> PatientSummary:
    """Canonical summary of one patient section; *index* is 1-based."""

    cfg = _settings(settings)
    lines = section.lines
    body = _body(section)

    identity = extract_identity(section.header, lines, room_max_length=cfg.room_max_length)
    problems = extract_problems(lines, max_length=cfg.problem_max_length)
    critical = extract_critical_labs(lines)
    tasks = extract_tasks(lines)
    dispo = extract_dispo(lines)
    acuity, reason = classify_acuity(
        body,
        has_critical_labs=bool(critical),
        problems=problems,
        problem_threshold=cfg.acuity_problem_threshold,
    )
    resident, student = extract_team(lines)

    return PatientSummary(
        index=index,
        key=section.key,
        room=identity.room,
        name=identity.name,
        age=identity.age,
        gender=identity.gender,
        admitted_for=extract_admitted_for(lines),
        problems=problems,
        problem_count=len(problems),
        critical_lab_values=critical[: cfg.critical_lab_display_limit],
        has_critical_labs=bool(critical),
        vitals=extract_vitals(lines),
        tasks=tasks,
        tasks_remaining=tasks.remaining,
        active_meds=count_active_meds(lines),
        code_status=extract_code_status(body),
        dispo=dispo,
        dispo_status=classify_dispo(dispo),
        acuity=acuity,
        acuity_reason=reason,
        trend=classify_trend(body),
        los=extract_los(body),
        key_labs=extract_key_labs(lines, limit=cfg.key_lab_limit),
        status_badges=extract_status_badges(lines),
        clinical_keywords=extract_clinical_keywords(assessment_text(lines) or body),
        summary_snippet=extract_summary_snippet(lines),
        resident=resident,
        student=student,
        risk_scores=extract_risk_scores(lines),
        raw_context=section.text,
    )


def build_idr_record(
    section: Section,
    index: int,
    settings: ExtractionSettings | None = None,
) -> IDRRecord:
    cfg = _settings(settings)
    body = _body(section)
    identity = extract_identity(section.header, section.lines, room_max_length=cfg.room_max_length)
    dispo = extract_dispo(section.lines)
    return IDRRecord(
        index=index,
        key=section.key,
        room=identity.room,
        name=identity.name,
        age=identity.age,
        gender=identity.gender,
        admitted_for=extract_admitted_for(section.lines),
        social_barriers=extract_social_barriers(body),
        pt_status=extract_therapy_status(body, "PT"),
        ot_status=extract_therapy_status(body, "OT"),
        cm_notes=extract_cm_notes(body),
        dispo=dispo,
        dispo_status=classify_dispo(dispo),
    )


def build_dashboard_record(
    section: Section,
    index: int,
    settings: ExtractionSettings | None = None,
) -> DashboardRecord:
    summary = build_patient_summary(section, index, settings)
    return DashboardRecord(
        index=index,
        key=section.key,
        name=summary.name,
        room=summary.room,
        vitals=summary.vitals.text if summary.vitals else "",
        critical_labs=summary.critical_lab_values,
        active_problems=summary.problems,
        acuity=summary.acuity,
    )


def build_table_record(
    section: Section,
    index: int,
    settings: ExtractionSettings | None = None,
) -> TableRecord:
    summary = build_patient_summary(section, index, settings)
    idr = build_idr_record(section, index, settings)
    return TableRecord(
        index=index,
        key=section.key,
        room=summary.room,
        name=summary.name,
        age=summary.age,
        gender=summary.gender,
        admitted_for=summary.admitted_for,
        acuity=summary.acuity,
        dispo=summary.dispo,
        dispo_status=summary.dispo_status,
        vitals=summary.vitals.text if summary.vitals else "",
        social_barriers=idr.social_barriers,
        pt_status=idr.pt_status,
        ot_status=idr.ot_status,
        cm_notes=idr.cm_notes,
    )


def _patients(content: str | Sequence[Section]) -> list[Section]:
    sections = parse_sections(content) if isinstance(content, str) else list(content)
    return patient_sections(sections)


def summarize_census(
    content: str | Sequence[Section], settings: ExtractionSettings | None = None
) -> list[PatientSummary]:
    """One summary per patient section, preamble excluded, numbered from 1."""

    return [
        build_patient_summary(section, idx, settings)
        for idx, section in enumerate(_patients(content), start=1)
    ]


def idr_census(
    content: str | Sequence[Section], settings: ExtractionSettings | None = None
) -> list[IDRRecord]:
    return [
        build_idr_record(section, idx, settings)
        for idx, section in enumerate(_patients(content), start=1)
    ]


def dashboard_census(
    content: str | Sequence[Section], settings: ExtractionSettings | None = None
) -> list[DashboardRecord]:
    return [
        build_dashboard_record(section, idx, settings)
        for idx, section in enumerate(_patients(content), start=1)
    ]


def table_census(
    content: str | Sequence[Section], settings: ExtractionSettings | None = None
) -> list[TableRecord]:
    return [
        build_table_record(section, idx, settings)
        for idx, section in enumerate(_patients(content), start=1)
    ]


def compute_census_stats(summaries: Iterable[PatientSummary]) -> CensusStats:
    """Aggregate counts over patient summaries in a single pass."""

    stats = CensusStats()
    total_problems = 0
    for summary in summaries:
        stats.total += 1
        if summary.acuity is AcuityLevel.CRITICAL:
            stats.critical += 1
        elif summary.acuity is AcuityLevel.HIGH:
            stats.high += 1

        if summary.dispo_status in READY_DISPO_STATUSES:
            stats.ready_for_discharge += 1
        elif summary.dispo_status is DispoStatus.BLOCKED:
            stats.blocked += 1

        if summary.trend is Trend.IMPROVING:
            stats.improving += 1
        elif summary.trend is Trend.WORSENING:
            stats.worsening += 1

        if summary.has_critical_labs:
            stats.with_critical_labs += 1
        stats.total_tasks += summary.tasks_remaining
        total_problems += summary.problem_count

    stats.avg_problems = round(total_problems / stats.total, 1) if stats.total else 0.0
    return stats


__all__ = [
    "READY_DISPO_STATUSES",
    "build_dashboard_record",
    "build_idr_record",
    "build_patient_summary",
    "build_table_record",
    "compute_census_stats",
    "dashboard_census",
    "idr_census",
    "summarize_census",
    "table_census",
]
