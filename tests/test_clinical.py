"""Tests for the line-oriented clinical extractors."""

from datetime import date

import pytest

from signout.extraction.clinical import (
    count_active_meds,
    extract_admission_date,
    extract_admitted_for,
    extract_clinical_keywords,
    extract_code_status,
    extract_critical_labs,
    extract_dispo,
    extract_key_labs,
    extract_lab_lines,
    extract_los,
    extract_med_lines,
    extract_plan,
    extract_problems,
    extract_risk_scores,
    extract_status_badges,
    extract_summary_snippet,
    extract_team,
    extract_vitals,
    is_critical_lab_line,
    is_critical_value,
)
from signout_schemas.census import Problem


class TestVitals:
    def test_bold_bp_line(self):
        vitals = extract_vitals(["**Age:** 78F", "**BP:** 90/60"])

        assert vitals is not None
        assert vitals.bp == "90/60"
        assert vitals.hr is None

    def test_full_vitals_line(self):
        vitals = extract_vitals(["VS: BP: 120/80 HR: 88 RR: 16 SpO2: 97% T: 37.2"])

        assert vitals.text == "BP: 120/80 HR: 88 RR: 16 SpO2: 97% T: 37.2"
        assert vitals.bp == "120/80"
        assert vitals.hr == "88"
        assert vitals.rr == "16"
        assert vitals.o2 == "97%"
        assert vitals.temp == "37.2"

    def test_only_first_vitals_line_is_read(self):
        vitals = extract_vitals(["VS: HR: 90", "BP: 100/60"])

        assert vitals.hr == "90"
        assert vitals.bp is None

    def test_no_vitals(self):
        assert extract_vitals(["# Sepsis", "plan: fluids"]) is None


class TestCriticalLabs:
    def test_bold_potassium_is_critical(self):
        assert extract_critical_labs(["**K 6.2**"]) == ["K 6.2"]

    def test_normal_potassium_is_not_critical(self):
        assert extract_critical_labs(["K 4.0"]) == []
        assert not is_critical_lab_line("K 4.0")

    def test_source_order_and_dedup(self):
        lines = ["Na 118, K 2.8", "Hgb 6.5", "K 2.8"]

        assert extract_critical_labs(lines) == ["Na 118", "K 2.8", "Hgb 6.5"]

    @pytest.mark.parametrize(
        "line,critical",
        [
            ("Lactate 4.5", True),
            ("Lactate 2.1", False),
            ("pH 7.21", True),
            ("pH 7.35", False),
            ("INR 5.4", True),
            ("INR 2.5", False),
            ("Na 156", True),
            ("Na 155", False),
            ("Hgb 7.0", False),
            ("K: 5.6", True),
            ("CKD 3", False),
        ],
    )
    def test_critical_ranges(self, line, critical):
        assert is_critical_lab_line(line) is critical

    def test_analyte_aliases(self):
        assert is_critical_value("Potassium", 6.0)
        assert is_critical_value("K+", 2.5)
        assert is_critical_value("lactic acid", 5.0)
        assert not is_critical_value("WBC", 40.0)

    def test_lab_lines(self):
        lines = ["WBC 12.1", "K 6.0", "nothing here"]

        assert extract_lab_lines(lines) == ["WBC 12.1", "K 6.0"]

    def test_key_labs_limit_and_truncation(self):
        long_line = "Cr 1.2 " + "x" * 60
        lines = [long_line, "BUN 30", "WBC 9"]

        key_labs = extract_key_labs(lines, limit=2)

        assert len(key_labs) == 2
        assert key_labs[0] == long_line[:40]
        assert key_labs[1] == "BUN 30"


class TestMeds:
    def test_med_lines_skip_problems_and_vitals(self):
        lines = [
            "Vancomycin 1 g IV q12h",
            "VS: BP 120/80",
            "# HTN on lisinopril 10 mg",
            "Lisinopril 10 mg PO daily",
            "plain text",
        ]

        assert extract_med_lines(lines) == ["Vancomycin 1 g IV q12h", "Lisinopril 10 mg PO daily"]
        assert count_active_meds(lines) == 2


class TestProblems:
    def test_problem_titles(self):
        lines = ["# Sepsis", "## 2. AKI: Cr 2.1 from 1.0", "#", "# " + "x" * 70, "not a problem"]

        assert extract_problems(lines) == ["Sepsis", "AKI"]

    def test_problem_length_limit(self):
        lines = ["# " + "y" * 30]

        assert extract_problems(lines, max_length=20) == []
        assert extract_problems(lines) == ["y" * 30]

    def test_plan_groups_details(self):
        lines = ["intro", "# Sepsis: on vanc", "- cultures pending", "", "# AKI", "- trend Cr"]

        assert extract_plan(lines) == [
            Problem(title="Sepsis", details=["on vanc", "- cultures pending"]),
            Problem(title="AKI", details=["- trend Cr"]),
        ]


class TestLabelledFields:
    def test_dispo_inline(self):
        assert extract_dispo(["**Dispo:** Home tomorrow"]) == "Home tomorrow"

    def test_dispo_keeps_full_line(self):
        assert extract_dispo(["- Dispo: Rehab, pending auth"]) == "Rehab, pending auth"

    def test_dispo_on_next_line(self):
        assert extract_dispo(["Disposition:", "", "SNF when bed available"]) == "SNF when bed available"

    def test_dispo_missing(self):
        assert extract_dispo(["# Sepsis"]) == ""

    def test_admitted_for(self):
        assert extract_admitted_for(["**Admitted for:** CHF exacerbation"]) == "CHF exacerbation"
        assert extract_admitted_for(["Presents with chest pain. Trop neg"]) == "chest pain"
        assert extract_admitted_for(["# Sepsis"]) == ""

    @pytest.mark.parametrize(
        "lines,expected",
        [
            (["CC: chest pain"], "chest pain"),
            (["**CC:** syncope"], "syncope"),
            (["Chief complaint dyspnea"], "dyspnea"),
            (["give 10 cc NS bolus"], ""),
            (["drain put out 200 cc overnight"], ""),
        ],
    )
    def test_cc_label_needs_a_colon(self, lines, expected):
        assert extract_admitted_for(lines) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("DNR/DNI confirmed", "DNR/DNI"),
            ("DNR but ok to intubate", "DNR"),
            ("transition to comfort care", "Comfort"),
            ("Full code", "Full"),
            ("", ""),
        ],
    )
    def test_code_status(self, text, expected):
        assert extract_code_status(text) == expected

    def test_los(self):
        assert extract_los("LOS: 5") == "Day 5"
        assert extract_los("Hospital day 3") == "Day 3"
        assert extract_los("no stay info") == ""

    def test_status_badges(self):
        assert extract_status_badges(["Full Code", "plan discharge tomorrow"]) == ["Discharge", "Full Code"]

    def test_clinical_keywords_use_whole_words(self):
        assert extract_clinical_keywords("Pneumonia and AKI, presenting") == ["AKI", "Pneumonia"]

    def test_summary_snippet(self):
        assert extract_summary_snippet(["**Summary:** 78F with sepsis"]) == "78F with sepsis"
        assert extract_summary_snippet(["Summary:", "improving on abx"]) == "improving on abx"
        assert extract_summary_snippet(["nothing"]) == ""

    def test_team(self):
        assert extract_team(["Resident: Dr. Lee", "**Student:** Kim"]) == ("Dr. Lee", "Kim")
        assert extract_team(["# Sepsis"]) == ("", "")

    def test_risk_scores(self):
        assert extract_risk_scores(["HEART Score: 4", "TIMI score: 2 today"]) == [
            "HEART Score: 4",
            "TIMI score: 2",
        ]

    def test_admission_date(self):
        assert extract_admission_date(["Admitted: 10/12/24"]) == date(2024, 10, 12)
        assert extract_admission_date(["Admit date 1/2/2023"]) == date(2023, 1, 2)
        assert extract_admission_date(["Admitted: 13/45/24"]) is None
        assert extract_admission_date(["Follow up 10/12/24"]) is None
