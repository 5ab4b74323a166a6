"""Tests for whole-document views, EMR cleaning, templates and the sample census."""

from datetime import datetime

import pytest

from signout.reporting.document_views import (
    extract_critical_patients,
    extract_keywords,
    extract_labs,
    extract_meds,
    extract_plans,
)
from signout.reporting.records import summarize_census
from signout.reporting.templates import render_template, template_context
from signout.sample_census import generate_sample_census
from signout.sectioning.segmenter import parse_sections
from signout.text_cleaning.emr_cleaner import clean_text_for_emr
from signout_schemas.census import DispoStatus, PatientLines, PatientPlan, Problem
from tests.census_samples import JANE_DOE, PREAMBLE_AND_BOB, TWO_PATIENTS


class TestDocumentViews:
    def test_plans_by_patient(self):
        assert extract_plans(TWO_PATIENTS) == [
            PatientPlan(index=1, header="### 1. Alice Smith – 12", problems=[Problem(title="CHF exacerbation")]),
            PatientPlan(index=2, header="### 2. Carl Jones – 7A", problems=[Problem(title="Pneumonia")]),
        ]

    def test_patients_without_problems_are_skipped(self):
        assert extract_plans(PREAMBLE_AND_BOB) == []

    def test_critical_patients(self):
        content = "### 1. A\nK 6.2\nK 4.0\n\n### 2. B\nNa 140"

        assert extract_critical_patients(content) == [
            PatientLines(index=1, header="### 1. A", lines=["K 6.2"]),
        ]

    def test_meds_keep_patient_numbering(self):
        content = (
            "### 1. A\nVancomycin 1 g IV\n# HTN\n\n"
            "### 2. B\nno meds\n\n"
            "### 3. C\nMetoprolol 25 mg PO BID"
        )

        found = extract_meds(content)

        assert [(item.index, item.lines) for item in found] == [
            (1, ["Vancomycin 1 g IV"]),
            (3, ["Metoprolol 25 mg PO BID"]),
        ]

    def test_labs(self):
        found = extract_labs(parse_sections("### 1. A\nWBC 12\nplain"))

        assert found == [PatientLines(index=1, header="### 1. A", lines=["WBC 12"])]

    def test_keywords_are_lowercased_and_unique(self):
        text = "Sepsis, improving. AKI stable; sepsis again"

        assert extract_keywords(text) == ["sepsis", "aki", "improving", "stable"]
        assert extract_keywords("") == []


class TestEmrCleaner:
    def test_markdown_is_flattened(self):
        text = (
            "### 1. Jane – 4B\n"
            "**Age:** 78F\n"
            "- [ ] cultures\n"
            "- [x] echo\n"
            "* bullet\n"
            "• dot\n"
            "Cr ↗ __note__\n"
        )

        assert clean_text_for_emr(text) == (
            "1. Jane – 4B\nAge: 78F\n[ ] cultures\n[x] echo\n- bullet\n- dot\nCr  note"
        )

    def test_empty(self):
        assert clean_text_for_emr("") == ""


class TestTemplates:
    NOW = datetime(2024, 10, 12, 7, 5)

    def test_render_known_placeholders(self):
        section = parse_sections(JANE_DOE)[0]
        template = (
            "{{name}} ({{age}}{{gender}}) rm {{room}} | {{vitals}} | BP {{ vitals.bp }} | "
            "{{problems}} | {{date}} {{time}} | {{unknown}}"
        )

        rendered = render_template(template, section.header, section.lines, now=self.NOW)

        assert rendered == (
            "Jane Doe (78F) rm 4B | BP: 90/60 | BP 90/60 | Sepsis | 10/12/2024 07:05 | {{unknown}}"
        )

    def test_placeholders_are_case_insensitive(self):
        assert render_template("{{NAME}}", "### 1. Bob", [], now=self.NOW) == "Bob"

    def test_fallbacks_for_missing_fields(self):
        rendered = render_template("{{name}}: {{vitals}} [{{vitals.hr}}]", "### 1.", [], now=self.NOW)

        assert rendered == "Unknown Patient: No vitals recorded []"

    def test_context_keys(self):
        context = template_context("### 1. Bob", [], now=self.NOW)

        assert context["date"] == "10/12/2024"
        assert context["problems"] == ""
        assert {"room", "age", "gender", "vitals.temp", "vitals.o2"} <= set(context)


class TestSampleCensus:
    def test_same_seed_same_text(self):
        assert generate_sample_census(5, seed=42) == generate_sample_census(5, seed=42)

    def test_sample_parses_into_patients(self):
        summaries = summarize_census(generate_sample_census(4, seed=7))

        assert [s.index for s in summaries] == [1, 2, 3, 4]
        for summary in summaries:
            assert summary.room
            assert summary.gender in ("M", "F")
            assert summary.vitals is not None and summary.vitals.bp
            assert summary.tasks_remaining == 2
            assert summary.dispo_status is not DispoStatus.UNKNOWN

    def test_zero_patients(self):
        assert generate_sample_census(0) == ""

    def test_negative_count(self):
        with pytest.raises(ValueError):
            generate_sample_census(-1)
