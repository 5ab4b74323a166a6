"""Keyword classifiers for disposition, acuity, trend and discharge barriers.

Each classifier is a fixed-priority cascade: rules are checked in order and
the first match wins. There is exactly one copy of each cascade, and every
record builder calls it, so no two views can disagree about a patient.
"""

from __future__ import annotations

import re
from typing import Sequence

from signout_schemas.census import AcuityLevel, DispoStatus, Trend

DEFAULT_ACUITY_PROBLEM_THRESHOLD = 4


def _rx(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


# Destinations outrank generic status words: "ready for SNF" is an SNF dispo.
DISPO_RULES: tuple[tuple[DispoStatus, re.Pattern[str]], ...] = (
    (DispoStatus.HOME, _rx(r"\bhome\b|\bd/c\s+home\b")),
    (DispoStatus.SNF, _rx(r"\bsnf\b|\bskilled\s+nursing\b")),
    (DispoStatus.REHAB, _rx(r"\brehab(?:ilitation)?\b|\bltach\b")),
    (DispoStatus.READY, _rx(r"\bready\b|\btoday\b|\btomorrow\b")),
    (DispoStatus.BLOCKED, _rx(r"\bblock\w*|\bbarriers?\b|\bwaiting\b")),
    (DispoStatus.PENDING, _rx(r"\bpending\b|\btbd\b|\bunclear\b")),
)

# Critical-care signals must outrank generic "unstable" phrasing.
_CRITICAL_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("ICU/Critical care", _rx(r"\b[mscnp]?icu\b|\bccu\b|\bintubat\w*|\bvasopressors?\b|\bcode\s+blue\b")),
    ("Sepsis", _rx(r"\w*seps[ie]s\b|\bseptic\b")),
    ("Respiratory failure", _rx(r"\bards\b|\brespiratory\s+failure\b")),
)
_HIGH_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Unstable condition", _rx(r"\bunstable\b|\bdeteriorat\w*")),
    ("AKI", _rx(r"\baki\b|\bacute\s+kidney\b")),
    ("Active bleeding", _rx(r"\bgi\s+bleed\w*|\bhemorrhag\w*")),
)
_STABLE_RE = _rx(r"\bstable\b")
_DISCHARGE_RE = _rx(r"\bdischarge\w*|\bd/c\b")
_IMPROVING_RE = _rx(r"\bimproving\b|\bresolved\b")

TREND_RULES: tuple[tuple[Trend, re.Pattern[str]], ...] = (
    (Trend.IMPROVING, _rx(r"↗|\bimproving\b|\bbetter\b|\bresolved\b")),
    (Trend.WORSENING, _rx(r"↘|\bworsening\b|\bdeteriorat\w*|\bdeclining\b")),
    (Trend.STABLE, _rx(r"→|↔|\bstable\b|\bunchanged\b")),
)

SOCIAL_BARRIER_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Housing", _rx(r"\bhomeless\w*|\bhousing\b")),
    ("Transportation", _rx(r"\btransport\w*|\brides?\b")),
    ("Insurance", _rx(r"\binsurance\b|\buninsured\b|\bmedicaid\s+pending\b")),
    ("Support System", _rx(r"\bfamily\b|\bcaregivers?\b|\bsupport\b")),
    ("Language", _rx(r"\blanguage\b|\binterpret\w*")),
    ("Safety", _rx(r"\bsafety\b|\babuse\b|\bshelter\b")),
    ("Substance Use", _rx(r"\bsubstance\b|\balcohol\b|\bdrugs?\b")),
)

_THERAPY_NAMES = {"PT": "physical therapy", "OT": "occupational therapy"}

# Later matches overwrite earlier ones, so home health wins.
_CM_KEYWORD_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Working on auth", _rx(r"\binsurance\s+auth\w*|\bprior\s+auth\w*")),
    ("Placement search", _rx(r"\bsnf\s+search\b|\bplacement\b")),
    ("Home health setup", _rx(r"\bhome\s+health\b")),
)
_CM_LABEL_RE = _rx(
    r"^\s*(?:[-*•]\s+)?(?:\*\*)?(?:CM|case\s+management|SW|social\s+work)\s*(?:\*\*)?\s*:"
    r"\s*(?:\*\*)?\s*(?P<value>[^\n]+?)\s*$"
)


def classify_dispo(text: str) -> DispoStatus:
    """Map disposition free text to a status; destinations are checked first."""

    for status, pattern in DISPO_RULES:
        if pattern.search(text or ""):
            return status
    return DispoStatus.UNKNOWN


def classify_acuity(
    text: str,
    *,
    has_critical_labs: bool = False,
    problems: Sequence[str] = (),
    problem_threshold: int = DEFAULT_ACUITY_PROBLEM_THRESHOLD,
) -> tuple[AcuityLevel, str]:
    """Return (acuity, reason) for a section's body text.

    Order: critical-care keywords, sepsis, respiratory failure, critical labs,
    then the high-acuity keywords, problem count, then the low-acuity cues.
    Anything left is medium.
    """

    text = text or ""
    for reason, pattern in _CRITICAL_RULES:
        if pattern.search(text):
            return AcuityLevel.CRITICAL, reason
    if has_critical_labs:
        return AcuityLevel.CRITICAL, "Critical lab values"

    for reason, pattern in _HIGH_RULES:
        if pattern.search(text):
            return AcuityLevel.HIGH, reason
    if len(problems) > problem_threshold:
        return AcuityLevel.HIGH, f"{len(problems)} active problems"

    if _STABLE_RE.search(text) and _DISCHARGE_RE.search(text):
        return AcuityLevel.LOW, "Stable, pending discharge"
    if _IMPROVING_RE.search(text):
        return AcuityLevel.LOW, "Improving"

    return AcuityLevel.MEDIUM, "Standard care"


def classify_trend(text: str) -> Trend:
    for trend, pattern in TREND_RULES:
        if pattern.search(text or ""):
            return trend
    return Trend.UNKNOWN


def extract_social_barriers(text: str) -> list[str]:
    return [label for label, pattern in SOCIAL_BARRIER_RULES if pattern.search(text or "")]


def extract_therapy_status(text: str, discipline: str) -> str:
    """Status of a PT or OT consult: Cleared, Following, Eval ordered, or the label text."""

    abbrev = discipline.upper()
    full = _THERAPY_NAMES.get(abbrev, abbrev)
    names = rf"(?:{re.escape(abbrev)}|{re.escape(full)})"
    text = text or ""

    if re.search(rf"\b{names}\s+(?:cleared|ok)\b", text, re.IGNORECASE):
        return "Cleared"
    if re.search(
        rf"\b{names}\s+following\b|\bworking\s+with\s+{names}\b", text, re.IGNORECASE
    ):
        return "Following"
    if re.search(rf"\b{names}\s+(?:eval\w*|consult\w*)", text, re.IGNORECASE):
        return "Eval ordered"

    label = re.search(
        rf"^\s*(?:[-*•]\s+)?(?:\*\*)?{names}\s*(?:\*\*)?\s*:\s*(?:\*\*)?\s*(?P<value>[^,;\n]+)",
        text,
        re.IGNORECASE | re.MULTILINE,
    )
    return label.group("value").strip() if label else ""


def extract_cm_notes(text: str) -> str:
    text = text or ""
    note = ""
    for line in text.splitlines():
        match = _CM_LABEL_RE.match(line)
        if match:
            note = match.group("value").replace("**", "").strip()
            break
    for label, pattern in _CM_KEYWORD_RULES:
        if pattern.search(text):
            note = label
    return note


__all__ = [
    "DEFAULT_ACUITY_PROBLEM_THRESHOLD",
    "DISPO_RULES",
    "SOCIAL_BARRIER_RULES",
    "TREND_RULES",
    "classify_acuity",
    "classify_dispo",
    "classify_trend",
    "extract_cm_notes",
    "extract_social_barriers",
    "extract_therapy_status",
]
