"""Line-oriented clinical field extractors.

Every function here is a pure, best-effort read of clinician free text: a
missing field comes back empty (``""``, ``[]`` or ``None``) and nothing
raises on malformed input.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Iterator, Sequence

from signout.common.patterns import (
    ADMISSION_DATE_LABEL_RE,
    ADMIT_LABEL_RE,
    ADMIT_PATTERNS,
    ANALYTE_ALIASES,
    ASSESSMENT_LABEL_RE,
    BOLD_MARKER_RE,
    BP_RE,
    CLINICAL_KEYWORD_PATTERNS,
    CRITICAL_LAB_RANGES,
    CRITICAL_LAB_RE,
    DATE_RE,
    DISPO_LABEL_RE,
    HR_RE,
    LABS_RE,
    LOS_RE,
    MEDS_RE,
    O2_RE,
    PROBLEM_PREFIX_RE,
    RESIDENT_LABEL_RE,
    RISK_CALCULATOR_RE,
    RR_RE,
    STATUS_KEYWORD_PATTERNS,
    STUDENT_LABEL_RE,
    SUMMARY_LABEL_RE,
    TEMP_RE,
    VITALS_LABEL_RE,
    VITALS_LINE_RE,
)
from signout_schemas.census import Problem, Vitals

DEFAULT_PROBLEM_MAX_LENGTH = 60

_CODE_STATUS_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("DNR/DNI", re.compile(r"\bdnr\s*/\s*dni\b|\bdnr\s+dni\b", re.IGNORECASE)),
    ("DNR", re.compile(r"\bdnr\b", re.IGNORECASE)),
    ("Comfort", re.compile(r"\bcomfort\s+care\b|\bcmo\b|\bhospice\b", re.IGNORECASE)),
    ("Full", re.compile(r"\bfull\s+code\b", re.IGNORECASE)),
)


def _unbold(line: str) -> str:
    return BOLD_MARKER_RE.sub("", line)


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


def _label_value(lines: Sequence[str], pattern: re.Pattern[str]) -> str:
    """Value of the first line matching *pattern*, or the next non-blank line."""

    for idx, line in enumerate(lines):
        match = pattern.match(line)
        if not match:
            continue
        value = _unbold(match.group("value")).strip()
        if value:
            return value
        for follow in lines[idx + 1 :]:
            if follow.strip():
                return _unbold(follow).strip()
        return ""
    return ""


# ---------------------------------------------------------------------------
# Vitals
# ---------------------------------------------------------------------------


def find_vitals_line(lines: Sequence[str]) -> str | None:
    for line in lines:
        plain = _unbold(line)
        if VITALS_LINE_RE.search(plain):
            return plain
    return None


def extract_vitals(lines: Sequence[str]) -> Vitals | None:
    """Parse BP, HR, Temp, SpO2 and RR from the first vitals line.

    Only that one line is read; vitals are never merged across lines.
    """

    line = find_vitals_line(lines)
    if line is None:
        return None
    text = VITALS_LABEL_RE.sub("", line, count=1).strip()
    return Vitals(
        text=text,
        bp=_first_group(BP_RE, text),
        hr=_first_group(HR_RE, text),
        temp=_first_group(TEMP_RE, text),
        o2=_first_group(O2_RE, text),
        rr=_first_group(RR_RE, text),
    )


# ---------------------------------------------------------------------------
# Labs
# ---------------------------------------------------------------------------


def is_critical_value(analyte: str, value: float) -> bool:
    canonical = ANALYTE_ALIASES.get(" ".join(analyte.lower().rstrip("+").split()), analyte)
    low, high = CRITICAL_LAB_RANGES.get(canonical, (None, None))
    if low is not None and value < low:
        return True
    return high is not None and value >= high


def iter_critical_labs(line: str) -> Iterator[str]:
    for match in CRITICAL_LAB_RE.finditer(line):
        try:
            value = float(match.group("value"))
        except ValueError:
            continue
        if is_critical_value(match.group("analyte"), value):
            yield match.group(0).strip()


def is_critical_lab_line(line: str) -> bool:
    return next(iter_critical_labs(line), None) is not None


def extract_critical_labs(lines: Sequence[str]) -> list[str]:
    """All critical lab hits across the section, in source order, deduplicated."""

    found: list[str] = []
    for line in lines:
        for hit in iter_critical_labs(line):
            if hit not in found:
                found.append(hit)
    return found


def extract_lab_lines(lines: Sequence[str]) -> list[str]:
    return [line for line in lines if LABS_RE.search(line) or is_critical_lab_line(line)]


def extract_key_labs(lines: Sequence[str], limit: int = 2) -> list[str]:
    return [line.strip()[:40] for line in lines if LABS_RE.search(line)][:limit]


# ---------------------------------------------------------------------------
# Meds
# ---------------------------------------------------------------------------


def is_med_line(line: str) -> bool:
    stripped = line.lstrip()
    if stripped.startswith("#") or VITALS_LABEL_RE.match(_unbold(stripped)):
        return False
    return bool(MEDS_RE.search(line))


def extract_med_lines(lines: Sequence[str]) -> list[str]:
    return [line for line in lines if is_med_line(line)]


def count_active_meds(lines: Sequence[str]) -> int:
    return len(extract_med_lines(lines))


# ---------------------------------------------------------------------------
# Problems
# ---------------------------------------------------------------------------


def is_problem_line(line: str) -> bool:
    return line.strip().startswith("#")


def _split_problem(line: str) -> tuple[str, str]:
    text = PROBLEM_PREFIX_RE.sub("", line.strip(), count=1)
    title, _, rest = text.partition(":")
    return title.strip(), rest.strip()


def problem_title(line: str) -> str:
    """Display title of a ``#`` problem line: no markers, cut at the first colon."""

    return _split_problem(line)[0]


def extract_problems(
    lines: Sequence[str], *, max_length: int = DEFAULT_PROBLEM_MAX_LENGTH
) -> list[str]:
    problems: list[str] = []
    for line in lines:
        if not is_problem_line(line):
            continue
        title = problem_title(line)
        if 0 < len(title) < max_length:
            problems.append(title)
    return problems


def extract_plan(
    lines: Sequence[str], *, max_length: int = DEFAULT_PROBLEM_MAX_LENGTH
) -> list[Problem]:
    """Group each problem with the non-blank lines that follow it."""

    plan: list[Problem] = []
    current: Problem | None = None
    for line in lines:
        if is_problem_line(line):
            title, rest = _split_problem(line)
            if 0 < len(title) < max_length:
                current = Problem(title=title, details=[rest] if rest else [])
                plan.append(current)
            else:
                current = None
        elif current is not None and line.strip():
            current.details.append(line.strip())
    return plan


# ---------------------------------------------------------------------------
# Labelled free-text fields
# ---------------------------------------------------------------------------


def extract_dispo(lines: Sequence[str]) -> str:
    """Disposition free text from a ``Dispo:``-style label, or ``""``."""

    return _label_value(lines, DISPO_LABEL_RE)


def extract_admitted_for(lines: Sequence[str]) -> str:
    for line in lines:
        match = ADMIT_LABEL_RE.search(line)
        if match and match.group("value").strip():
            return _unbold(match.group("value")).strip()
    content = "\n".join(lines)
    for pattern in ADMIT_PATTERNS:
        match = pattern.search(content)
        if match:
            value = _unbold(match.group("value")).strip()
            if value:
                return value
    return ""


def extract_summary_snippet(lines: Sequence[str]) -> str:
    for idx, line in enumerate(lines):
        match = SUMMARY_LABEL_RE.match(line)
        if not match:
            continue
        text = _unbold(line[match.end() :]).strip()
        if not text and idx + 1 < len(lines):
            text = _unbold(lines[idx + 1]).strip()
        return text
    return ""


def extract_team(lines: Sequence[str]) -> tuple[str, str]:
    """Return (resident, student) from ``Resident:``/``Student:`` labels."""

    resident = student = ""
    for line in lines:
        if not resident:
            match = RESIDENT_LABEL_RE.match(line)
            if match:
                resident = _unbold(match.group("value")).strip()
                continue
        if not student:
            match = STUDENT_LABEL_RE.match(line)
            if match:
                student = _unbold(match.group("value")).strip()
    return resident, student


def extract_code_status(text: str) -> str:
    for label, pattern in _CODE_STATUS_RULES:
        if pattern.search(text):
            return label
    return ""


def extract_los(text: str) -> str:
    match = LOS_RE.search(text)
    return f"Day {int(match.group('days'))}" if match else ""


def extract_status_badges(lines: Sequence[str]) -> list[str]:
    return [
        keyword
        for keyword, pattern in STATUS_KEYWORD_PATTERNS
        if any(pattern.search(line) for line in lines)
    ]


def extract_clinical_keywords(text: str) -> list[str]:
    """Known problem names mentioned in *text*, in vocabulary order."""

    return [keyword for keyword, pattern in CLINICAL_KEYWORD_PATTERNS if pattern.search(text)]


def assessment_text(lines: Sequence[str]) -> str:
    """Assessment label lines and problem lines, the text keywords are read from."""

    return "\n".join(
        line for line in lines if ASSESSMENT_LABEL_RE.search(line) or line.startswith("#")
    )


def extract_risk_scores(lines: Sequence[str]) -> list[str]:
    return [match.group(0) for line in lines for match in RISK_CALCULATOR_RE.finditer(line)]


def extract_admission_date(lines: Sequence[str]) -> date | None:
    """First ``Admitted: 10/12/24``-style date, or None when absent or invalid."""

    for line in lines:
        if not ADMISSION_DATE_LABEL_RE.search(line):
            continue
        match = DATE_RE.search(line)
        if not match:
            continue
        year = int(match.group("year"))
        if year < 100:
            year += 2000
        try:
            return date(year, int(match.group("month")), int(match.group("day")))
        except ValueError:
            return None
    return None


__all__ = [
    "DEFAULT_PROBLEM_MAX_LENGTH",
    "assessment_text",
    "count_active_meds",
    "extract_admission_date",
    "extract_admitted_for",
    "extract_clinical_keywords",
    "extract_code_status",
    "extract_critical_labs",
    "extract_dispo",
    "extract_key_labs",
    "extract_lab_lines",
    "extract_los",
    "extract_med_lines",
    "extract_plan",
    "extract_problems",
    "extract_risk_scores",
    "extract_status_badges",
    "extract_summary_snippet",
    "extract_team",
    "extract_vitals",
    "find_vitals_line",
    "is_critical_lab_line",
    "is_critical_value",
    "is_med_line",
    "is_problem_line",
    "iter_critical_labs",
    "problem_title",
]
