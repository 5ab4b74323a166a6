"""Whole-document views: plans, critical labs, meds, labs and keywords by patient."""

from __future__ import annotations

from typing import Callable, Sequence

from config.settings import ExtractionSettings, get_extraction_settings
from signout.common.patterns import KEYWORD_SCAN_PATTERNS
from signout.extraction.clinical import (
    extract_lab_lines,
    extract_med_lines,
    extract_plan,
    is_critical_lab_line,
)
from signout.sectioning.segmenter import Section, parse_sections, patient_sections
from signout_schemas.census import PatientLines, PatientPlan


def _patients(content: str | Sequence[Section]) -> list[Section]:
    sections = parse_sections(content) if isinstance(content, str) else list(content)
    return patient_sections(sections)


def _lines_by_patient(
    content: str | Sequence[Section],
    pick: Callable[[Sequence[str]], list[str]],
) -> list[PatientLines]:
    found: list[PatientLines] = []
    for idx, section in enumerate(_patients(content), start=1):
        lines = pick(section.lines)
        if lines:
            found.append(PatientLines(index=idx, header=section.header, lines=lines))
    return found


def extract_plans(
    content: str | Sequence[Section], settings: ExtractionSettings | None = None
) -> list[PatientPlan]:
    """Problem-by-problem plans; patients without problems are skipped."""

    cfg = settings or get_extraction_settings()
    plans: list[PatientPlan] = []
    for idx, section in enumerate(_patients(content), start=1):
        problems = extract_plan(section.lines, max_length=cfg.problem_max_length)
        if problems:
            plans.append(PatientPlan(index=idx, header=section.header, problems=problems))
    return plans


def extract_critical_patients(content: str | Sequence[Section]) -> list[PatientLines]:
    """Patients with at least one critical lab value, with the lines that carry them."""

    return _lines_by_patient(
        content, lambda lines: [line for line in lines if is_critical_lab_line(line)]
    )


def extract_meds(content: str | Sequence[Section]) -> list[PatientLines]:
    return _lines_by_patient(content, extract_med_lines)


def extract_labs(content: str | Sequence[Section]) -> list[PatientLines]:
    return _lines_by_patient(content, extract_lab_lines)


def extract_keywords(content: str) -> list[str]:
    """Lower-cased condition and status words found anywhere, first occurrence order."""

    keywords: list[str] = []
    for pattern in KEYWORD_SCAN_PATTERNS:
        for match in pattern.finditer(content or ""):
            word = match.group(0).lower()
            if word not in keywords:
                keywords.append(word)
    return keywords


__all__ = [
    "extract_critical_patients",
    "extract_keywords",
    "extract_labs",
    "extract_meds",
    "extract_plans",
]
