"""Unit tests for scenario library helpers."""

import re
from datetime import date

import pytest

from case_insight.content.models import ExtractionResult, LegalScenario
from case_insight.content.prompts import INITIAL_LEGAL_SCENARIOS
from case_insight.content.scenarios import (
    NO_SUGGESTION,
    UNKNOWN_PAIN_POINT,
    UNTITLED_CASE_NAME,
    evidence_strength_level,
    filter_scenarios,
    format_scenario_id,
    new_case_id,
    parse_triggers,
    scenario_from_extraction,
)


@pytest.fixture
def library():
    return [LegalScenario.model_validate(s) for s in INITIAL_LEGAL_SCENARIOS]


class TestFormatScenarioId:
    """Test suite for display ids."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("CON-01", "Contract-01"),
            ("PAY-12", "Payment-12"),
            ("CASE-0042", "Case-0042"),
            ("LIT-01-B", "Litigation-01-B"),
            ("XYZ-01", "XYZ-01"),
            ("CON", "CON"),
        ],
    )
    def test_format(self, raw, expected):
        assert format_scenario_id(raw) == expected


class TestFilterScenarios:
    """Test suite for library search."""

    def test_empty_term_returns_all(self, library):
        assert filter_scenarios(library, "") == library
        assert filter_scenarios(library, None) == library

    def test_matches_id_case_insensitively(self, library):
        results = filter_scenarios(library, "pay-01")
        assert [s.id for s in results] == ["PAY-01"]

    def test_matches_pain_point(self, library):
        results = filter_scenarios(library, "FINAL ACCOUNT")
        assert [s.id for s in results] == ["PAY-01"]

    def test_matches_case_name(self, library):
        custom = LegalScenario(id="CASE-0001", case_name="Tongzhou warehouse", pain_point="x")
        results = filter_scenarios([*library, custom], "tongzhou")
        assert results == [custom]

    def test_no_match(self, library):
        assert filter_scenarios(library, "maritime") == []


class TestParseTriggers:
    """Test suite for trigger form parsing."""

    def test_one_per_non_blank_line(self):
        assert parse_triggers("first\n\n  second  \n   \nthird") == ["first", "second", "third"]

    def test_empty(self):
        assert parse_triggers("") == []


class TestEvidenceStrength:
    """Test suite for evidence strength classification."""

    @pytest.mark.parametrize(
        "label,level",
        [
            ("Strong", "strong"),
            ("强", "strong"),
            ("Medium", "medium"),
            ("中等", "medium"),
            ("中 (补强证据)", "medium"),
            ("中（补强证据）", "medium"),
            ("Medium (needs corroboration, not strong yet)", "medium"),
            ("Strong evidence", "strong"),
            ("较强", "strong"),
            ("弱 (缺少强证据)", "weak"),
            ("Weak", "weak"),
            ("", "weak"),
            (None, "weak"),
        ],
    )
    def test_levels(self, label, level):
        assert evidence_strength_level(label) == level


class TestScenarioFromExtraction:
    """Test suite for auto-depositing analyses into the library."""

    def test_new_case_id_format(self):
        assert re.fullmatch(r"CASE-\d{4}", new_case_id())

    def test_full_result(self, sample_extraction):
        scenario = scenario_from_extraction("Zhang hearing.v2.docx", sample_extraction)

        assert re.fullmatch(r"CASE-\d{4}", scenario.id)
        assert scenario.case_name == "Zhang hearing.v2"
        assert scenario.pain_point == "Final account refused"
        assert scenario.triggers == [
            "They still will not settle the final account.",
            "Nobody signed the visa but we did the work.",
        ]
        assert scenario.ai_logic == (
            "[Construction contract dispute] Evidence analysis: "
            "Chat records show the owner ordered the extra work."
        )
        assert scenario.case_summary == sample_extraction.problem_summary
        assert scenario.follow_up == "Collect chat records and the handover certificate."
        assert scenario.marketing_action == "How to recover unpaid construction fees in Beijing"
        assert scenario.is_custom is True
        assert scenario.created_at == date.today()

    def test_explicit_id(self, sample_extraction):
        scenario = scenario_from_extraction("a.txt", sample_extraction, scenario_id="CASE-1234")
        assert scenario.id == "CASE-1234"

    def test_sparse_result_uses_fallbacks(self):
        result = ExtractionResult(problem_summary="Owner disappeared.")
        scenario = scenario_from_extraction(".txt", result)

        assert scenario.case_name == UNTITLED_CASE_NAME
        assert scenario.pain_point == UNKNOWN_PAIN_POINT
        assert scenario.triggers == []
        assert scenario.ai_logic == "Owner disappeared."
        assert scenario.follow_up == NO_SUGGESTION
        assert scenario.marketing_action == NO_SUGGESTION

    def test_filename_without_extension(self, sample_extraction):
        scenario = scenario_from_extraction("Pasted transcript", sample_extraction)
        assert scenario.case_name == "Pasted transcript"
