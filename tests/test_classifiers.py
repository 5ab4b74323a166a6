"""Tests for dispo, acuity and trend classification and the IDR extractors."""

import pytest

from signout.extraction.classifiers import (
    classify_acuity,
    classify_dispo,
    classify_trend,
    extract_cm_notes,
    extract_social_barriers,
    extract_therapy_status,
)
from signout_schemas.census import AcuityLevel, DispoStatus, Trend


class TestDispo:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Ready for SNF tomorrow", DispoStatus.SNF),
            ("Home today with home health", DispoStatus.HOME),
            ("LTACH referral sent", DispoStatus.REHAB),
            ("Acute rehabilitation", DispoStatus.REHAB),
            ("Ready once cleared", DispoStatus.READY),
            ("Barrier: no ride", DispoStatus.BLOCKED),
            ("Waiting on auth", DispoStatus.BLOCKED),
            ("TBD", DispoStatus.PENDING),
            ("", DispoStatus.UNKNOWN),
            ("homeless shelter", DispoStatus.UNKNOWN),
        ],
    )
    def test_priority_order(self, text, expected):
        assert classify_dispo(text) is expected


class TestAcuity:
    def test_icu_is_critical(self):
        assert classify_acuity("Transferred to ICU overnight") == (
            AcuityLevel.CRITICAL,
            "ICU/Critical care",
        )

    def test_substrings_do_not_trigger(self):
        assert classify_acuity("Of particular concern is pain") == (
            AcuityLevel.MEDIUM,
            "Standard care",
        )

    def test_sepsis(self):
        assert classify_acuity("septic shock on fluids")[1] == "Sepsis"

    @pytest.mark.parametrize(
        "text,reason",
        [
            ("Admitted to MICU overnight", "ICU/Critical care"),
            ("SICU step-down pending", "ICU/Critical care"),
            ("Transfer to CCU for monitoring", "ICU/Critical care"),
            ("# Urosepsis\non ceftriaxone", "Sepsis"),
            ("Urosepsis, cultures pending", "Sepsis"),
        ],
    )
    def test_unit_and_sepsis_variants_are_critical(self, text, reason):
        assert classify_acuity(text) == (AcuityLevel.CRITICAL, reason)

    def test_towards_is_not_ards(self):
        level, reason = classify_acuity("moving towards discharge, stable")

        assert level is AcuityLevel.LOW
        assert reason == "Stable, pending discharge"

    def test_critical_labs(self):
        assert classify_acuity("routine day", has_critical_labs=True) == (
            AcuityLevel.CRITICAL,
            "Critical lab values",
        )

    def test_unstable_is_high_not_low(self):
        assert classify_acuity("hemodynamically unstable, d/c delayed") == (
            AcuityLevel.HIGH,
            "Unstable condition",
        )

    def test_aki_is_high(self):
        assert classify_acuity("# AKI") == (AcuityLevel.HIGH, "AKI")

    def test_problem_count(self):
        problems = ["A", "B", "C", "D", "E"]

        assert classify_acuity("", problems=problems) == (AcuityLevel.HIGH, "5 active problems")
        assert classify_acuity("", problems=problems[:4])[0] is AcuityLevel.MEDIUM
        assert classify_acuity("", problems=problems, problem_threshold=5)[0] is AcuityLevel.MEDIUM

    def test_improving_is_low(self):
        assert classify_acuity("pain improving") == (AcuityLevel.LOW, "Improving")


class TestTrend:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Cr ↗ improving", Trend.IMPROVING),
            ("symptoms better", Trend.IMPROVING),
            ("↘ worsening hypoxia", Trend.WORSENING),
            ("exam unchanged", Trend.STABLE),
            ("hemodynamically unstable", Trend.UNKNOWN),
            ("", Trend.UNKNOWN),
        ],
    )
    def test_classify_trend(self, text, expected):
        assert classify_trend(text) is expected


class TestIdrExtractors:
    def test_social_barriers(self):
        text = "Homeless, needs a ride, family unavailable"

        assert extract_social_barriers(text) == ["Housing", "Transportation", "Support System"]

    def test_social_barriers_use_whole_words(self):
        assert extract_social_barriers("takes pride in independence") == []

    @pytest.mark.parametrize(
        "text,discipline,expected",
        [
            ("PT cleared for home", "PT", "Cleared"),
            ("OT following", "OT", "Following"),
            ("physical therapy following daily", "PT", "Following"),
            ("PT eval ordered", "PT", "Eval ordered"),
            ("**PT:** recommends SNF", "PT", "recommends SNF"),
            ("PT cleared", "OT", ""),
            ("", "PT", ""),
        ],
    )
    def test_therapy_status(self, text, discipline, expected):
        assert extract_therapy_status(text, discipline) == expected

    def test_cm_notes_label(self):
        assert extract_cm_notes("CM: arranging transport") == "arranging transport"

    def test_cm_notes_keyword_overrides(self):
        assert extract_cm_notes("working on prior auth") == "Working on auth"
        assert extract_cm_notes("prior auth started; home health referral") == "Home health setup"

    def test_cm_notes_missing(self):
        assert extract_cm_notes("# Sepsis") == ""
