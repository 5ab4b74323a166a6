"""Per-patient records and whole-document views over a census."""

from signout.reporting.document_views import (
    extract_critical_patients,
    extract_keywords,
    extract_labs,
    extract_meds,
    extract_plans,
)
from signout.reporting.records import (
    build_dashboard_record,
    build_idr_record,
    build_patient_summary,
    build_table_record,
    compute_census_stats,
    dashboard_census,
    idr_census,
    summarize_census,
    table_census,
)
from signout.reporting.templates import render_template

__all__ = [
    "build_dashboard_record",
    "build_idr_record",
    "build_patient_summary",
    "build_table_record",
    "compute_census_stats",
    "dashboard_census",
    "extract_critical_patients",
    "extract_keywords",
    "extract_labs",
    "extract_meds",
    "extract_plans",
    "idr_census",
    "render_template",
    "summarize_census",
    "table_census",
]
