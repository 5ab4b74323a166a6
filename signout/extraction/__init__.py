"""Field extractors: pure reads of one section's header and body lines."""

from signout.extraction.classifiers import (
    classify_acuity,
    classify_dispo,
    classify_trend,
    extract_cm_notes,
    extract_social_barriers,
    extract_therapy_status,
)
from signout.extraction.header import HeaderFields, extract_age, extract_identity, parse_header
from signout.extraction.tasks import extract_tasks, toggle_task, toggle_task_line

__all__ = [
    "HeaderFields",
    "classify_acuity",
    "classify_dispo",
    "classify_trend",
    "extract_age",
    "extract_cm_notes",
    "extract_identity",
    "extract_social_barriers",
    "extract_tasks",
    "extract_therapy_status",
    "parse_header",
    "toggle_task",
    "toggle_task_line",
]
