"""Compiled patterns and keyword tables shared by every extractor.

Everything here is process-wide immutable configuration: compiled once at
import time and never mutated.
"""

from __future__ import annotations

import re
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Document structure
# ---------------------------------------------------------------------------

PREAMBLE_HEADER = "### Preamble"

LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
SECTION_HEADER_RE = re.compile(r"^###\s")

HEADER_PREFIX_RE = re.compile(r"^\s*###\s*(?:\d+\.\s*)?")
HEADER_SEPARATOR_RE = re.compile(r"\s+[\u2013\u2014-]\s+")
HEADER_AGE_GENDER_RE = re.compile(
    r"\s*\(\s*(?P<age>\d{1,3})\s*(?:y/?o\s*)?(?P<gender>[MF])\s*\)",
    re.IGNORECASE,
)

BOLD_MARKER_RE = re.compile(r"\*\*")
BULLET_PREFIX_RE = re.compile(r"^\s*[-*\u2022]\s+")

TASK_OPEN = "- [ ]"
TASK_DONE = "- [x]"

PROBLEM_PREFIX_RE = re.compile(r"^#+\s*(?:\d+[.)]\s*)?")

# ---------------------------------------------------------------------------
# Bold labels
# ---------------------------------------------------------------------------

AGE_LABEL_RE = re.compile(r"\*\*Age:\*\*\s*", re.IGNORECASE)
AGE_GENDER_RE = re.compile(
    r"^\s*(?P<age>\d{1,3})\s*"
    r"(?:y/?o|yo|years?(?:\s+old)?|yrs?)?\s*[-,]?\s*"
    r"(?P<gender>male|female|man|woman|m|f)?\b",
    re.IGNORECASE,
)

ADMIT_LABEL_RE = re.compile(r"\*\*Admitted(?:\s+for)?:\*\*\s*(?P<value>.*)$", re.IGNORECASE)
ADMIT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"\b(?:(?:admitted\s+for|chief\s+complaint)[ \t]*:?|admission[ \t]*:|CC[ \t]*:)"
        r"[ \t]*(?P<value>[^\n.]+)",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:presenting|presents)\s+with\s*:?\s*(?P<value>[^\n.]+)", re.IGNORECASE),
    re.compile(r"\breason\s+for\s+admission\s*:?\s*(?P<value>[^\n.]+)", re.IGNORECASE),
)

DISPO_LABEL_RE = re.compile(
    r"^\s*(?:#+\s*)?(?:[-*\u2022]\s+)?(?:\*\*)?\s*"
    r"(?:dispo(?:sition)?|discharge\s+plan|d/c\s+plan)\b"
    r"\s*(?:\*\*)?\s*:?\s*(?:\*\*)?\s*(?P<value>.*)$",
    re.IGNORECASE,
)

SUMMARY_LABEL_RE = re.compile(
    r"^(?:#+\s|\*\*)?(?:Summary|Assessment|TL;DR|Impression)(?::)?(?:\*\*)?\s*:?\s*",
    re.IGNORECASE,
)
ASSESSMENT_LABEL_RE = re.compile(r"\*\*Assessment:\*\*", re.IGNORECASE)

RESIDENT_LABEL_RE = re.compile(
    r"^\s*(?:[-*\u2022]\s+)?(?:\*\*)?(?:Resident|Res|Intern|PGY-?[123])\s*(?:\*\*)?\s*:"
    r"\s*(?:\*\*)?\s*(?P<value>.+?)\s*(?:\*\*)?\s*$",
    re.IGNORECASE,
)
STUDENT_LABEL_RE = re.compile(
    r"^\s*(?:[-*\u2022]\s+)?(?:\*\*)?(?:Medical\s+Student|Med\s+Student|Student|MS[34])\s*(?:\*\*)?\s*:"
    r"\s*(?:\*\*)?\s*(?P<value>.+?)\s*(?:\*\*)?\s*$",
    re.IGNORECASE,
)

ADMISSION_DATE_LABEL_RE = re.compile(r"\b(?:Date|Admitted|Admit)\b", re.IGNORECASE)
DATE_RE = re.compile(r"\b(?P<month>\d{1,2})[/-](?P<day>\d{1,2})[/-](?P<year>\d{2,4})\b")

LOS_RE = re.compile(
    r"\b(?:LOS|length\s+of\s+stay|hospital\s+day|day)[:\s#]*(?P<days>\d{1,3})\b",
    re.IGNORECASE,
)

# ---------------------------------------------------------------------------
# Vitals
# ---------------------------------------------------------------------------

VITALS_LINE_RE = re.compile(
    r"^\s*(?:[-*\u2022]\s+)?(?:VS|Vitals)\s*:|\bBP:\s*\d{2,3}/\d{2,3}|^\s*T:\s*\d",
    re.IGNORECASE,
)
VITALS_LABEL_RE = re.compile(r"^\s*(?:[-*\u2022]\s+)?(?:VS|Vitals)\s*:\s*", re.IGNORECASE)
BP_RE = re.compile(r"\bBP:?\s*(\d{2,3}/\d{2,3})", re.IGNORECASE)
HR_RE = re.compile(r"\b(?:HR|Pulse):?\s*(\d{2,3})\b", re.IGNORECASE)
TEMP_RE = re.compile(r"\b(?:Tmax|Temp|T):?\s*(\d{2,3}(?:\.\d+)?)", re.IGNORECASE)
O2_RE = re.compile(r"\b(?:SpO2|SaO2|O2\s*sat|O2):?\s*(\d{2,3}%?)", re.IGNORECASE)
RR_RE = re.compile(r"\bRR:?\s*(\d{1,2})\b", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Labs and meds
# ---------------------------------------------------------------------------

CRITICAL_LAB_RE = re.compile(
    r"\b(?P<analyte>Potassium|K\+?|Sodium|Na\+?|Hemoglobin|Hgb|Hb|Lactic\s+acid|Lactate|INR|pH)"
    r"\s*[:=\-]?\s*(?P<value>\d{1,3}(?:\.\d+)?)(?!\d)",
    re.IGNORECASE,
)

_ANALYTE_ALIASES = {
    "k": "K",
    "potassium": "K",
    "na": "Na",
    "sodium": "Na",
    "hgb": "Hgb",
    "hb": "Hgb",
    "hemoglobin": "Hgb",
    "lactate": "Lactate",
    "lactic acid": "Lactate",
    "inr": "INR",
    "ph": "pH",
}
ANALYTE_ALIASES = MappingProxyType(_ANALYTE_ALIASES)

# analyte -> (critical below, critical at or above); None disables a bound.
CRITICAL_LAB_RANGES = MappingProxyType(
    {
        "K": (3.0, 5.6),
        "Na": (120.0, 156.0),
        "Hgb": (7.0, None),
        "Lactate": (None, 4.0),
        "INR": (None, 5.0),
        "pH": (7.30, None),
    }
)

MEDS_RE = re.compile(
    r"(?i:\b\d+(?:\.\d+)?\s*(?:mg|mcg|g|units?|L|mL|mEq)\b)"
    r"|\b(?:PO|IV|IM|SC|SQ|BID|TID|QID|QHS|Q\d+H|PRN)\b"
)
LABS_RE = re.compile(
    r"\b(?:WBC|Hgb|Hct|Plt|Na|K|Cl|HCO3|BUN|Cr|Glu|Ca|Mg|Phos|AST|ALT|Alk Phos|T Bili|"
    r"Albumin|Troponin|BNP|Lactate|INR|PTT|ABG|pH)\b"
)

# ---------------------------------------------------------------------------
# Keyword tables
# ---------------------------------------------------------------------------

TREND_INDICATOR_RE = re.compile("[\u2197\u2198\u2194]")
RISK_CALCULATOR_RE = re.compile(
    r"\b(?:HEART|TIMI|CHA2DS2-VASc|HAS-BLED)\s*Score:\s*\d+\b",
    re.IGNORECASE,
)

STATUS_KEYWORDS: tuple[str, ...] = (
    "Discharge",
    "DNR",
    "DNI",
    "Full Code",
    "Comfort Care",
    "Hospice",
)

CLINICAL_PROBLEM_KEYWORDS: tuple[str, ...] = (
    "Sepsis",
    "AKI",
    "CHF exacerbation",
    "Pneumonia",
    "UTI",
    "Diverticulitis",
    "ACS",
    "STEMI",
    "NSTEMI",
    "PE",
    "DVT",
    "GI Bleed",
    "CVA",
    "TIA",
    "Hyperkalemia",
    "Hyponatremia",
    "Anemia",
    "ARDS",
    "COPD exacerbation",
    "Asthma exacerbation",
    "Delirium",
    "Alcohol Withdrawal",
    "Diabetic Ketoacidosis",
    "Hyperglycemia",
    "Hypoglycemia",
    "Hypertension",
    "Hypotension",
    "Atrial Fibrillation",
    "CKD",
    "Cirrhosis",
    "Pancreatitis",
    "Cholecystitis",
    "Appendicitis",
    "SBO",
    "Ileus",
)


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(r"\b{}\b".format(re.escape(keyword)), re.IGNORECASE)


STATUS_KEYWORD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (kw, _keyword_pattern(kw)) for kw in STATUS_KEYWORDS
)
CLINICAL_KEYWORD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (kw, _keyword_pattern(kw)) for kw in CLINICAL_PROBLEM_KEYWORDS
)

KEYWORD_SCAN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(?:sepsis|pneumonia|uti|chf|copd|aki|ckd|dm|htn|cad|afib|dvt|pe)\b", re.IGNORECASE),
    re.compile(r"\b(?:critical|unstable|deteriorating|improving|stable)\b", re.IGNORECASE),
)

__all__ = [
    "ADMISSION_DATE_LABEL_RE",
    "ADMIT_LABEL_RE",
    "ADMIT_PATTERNS",
    "AGE_GENDER_RE",
    "AGE_LABEL_RE",
    "ANALYTE_ALIASES",
    "ASSESSMENT_LABEL_RE",
    "BOLD_MARKER_RE",
    "BP_RE",
    "BULLET_PREFIX_RE",
    "CLINICAL_KEYWORD_PATTERNS",
    "CLINICAL_PROBLEM_KEYWORDS",
    "CRITICAL_LAB_RANGES",
    "CRITICAL_LAB_RE",
    "DATE_RE",
    "DISPO_LABEL_RE",
    "HEADER_AGE_GENDER_RE",
    "HEADER_PREFIX_RE",
    "HEADER_SEPARATOR_RE",
    "HR_RE",
    "KEYWORD_SCAN_PATTERNS",
    "LABS_RE",
    "LINE_SPLIT_RE",
    "LOS_RE",
    "MEDS_RE",
    "O2_RE",
    "PREAMBLE_HEADER",
    "PROBLEM_PREFIX_RE",
    "RESIDENT_LABEL_RE",
    "RISK_CALCULATOR_RE",
    "RR_RE",
    "SECTION_HEADER_RE",
    "STATUS_KEYWORDS",
    "STATUS_KEYWORD_PATTERNS",
    "STUDENT_LABEL_RE",
    "SUMMARY_LABEL_RE",
    "TASK_DONE",
    "TASK_OPEN",
    "TEMP_RE",
    "TREND_INDICATOR_RE",
    "VITALS_LABEL_RE",
    "VITALS_LINE_RE",
]
