"""
Tests for backend/assessors/future.py.

Covers:
  - Only not-in-scope CSRD / CSDDD verdicts are augmented
  - Growth metrics and jurisdiction select the wording
  - Parent / ultimate-parent and franchising additions
  - Taxonomy follows CSRD
"""

from assessors.future import (
    TAXONOMY_CONSIDERATION,
    add_future_considerations,
    get_csddd_future_considerations,
    get_csrd_future_considerations,
)
from graph import assess

from conftest import LISTED_EU_LARGE, SMALL_EU


class TestAddFutureConsiderations:
    def test_no_growth_expected_leaves_assessment_unchanged(self):
        assessment = assess(SMALL_EU)
        assert add_future_considerations(assessment, SMALL_EU) is assessment
        assert assessment.csrd.future_considerations is None

    def test_growth_augments_not_in_scope_frameworks(self):
        answers = {**SMALL_EU, "future_thresholds": "yes", "growth_metrics": "multiple"}
        assessment = assess(answers)
        assert "might fall under CSRD obligations" in assessment.csrd.future_considerations
        assert "might fall under CSDDD obligations" in assessment.csddd.future_considerations
        assert assessment.taxonomy.future_considerations == TAXONOMY_CONSIDERATION

    def test_in_scope_frameworks_untouched(self):
        answers = {**LISTED_EU_LARGE, "future_thresholds": "maybe", "growth_metrics": "multiple"}
        assessment = assess(answers)
        assert assessment.csrd.future_considerations is None
        assert assessment.taxonomy.future_considerations is None

    def test_original_assessment_not_mutated(self):
        base = assess(SMALL_EU)
        answers = {**SMALL_EU, "future_thresholds": "yes", "growth_metrics": "turnover"}
        augmented = add_future_considerations(base, answers)
        assert augmented.csrd.future_considerations
        assert base.csrd.future_considerations is None

    def test_missing_growth_metric_adds_nothing(self):
        answers = {**SMALL_EU, "future_thresholds": "yes"}
        assessment = assess(answers)
        assert assessment.csrd.future_considerations is None
        assert assessment.csddd.future_considerations is None
        assert assessment.taxonomy.future_considerations is None


class TestCsrdConsiderations:
    def test_eu_wording(self):
        text = get_csrd_future_considerations("employees", True, {})
        assert "employs more than 250 people" in text

    def test_non_eu_wording(self):
        text = get_csrd_future_considerations("turnover", False, {})
        assert "EU turnover exceeding €150 million" in text

    def test_parent_adds_group_sentence(self):
        text = get_csrd_future_considerations("multiple", True, {"parent_status": "yes"})
        assert "As a parent company, your group might fall under CSRD" in text

    def test_unknown_metric(self):
        assert get_csrd_future_considerations("", True, {}) is None


class TestCsdddConsiderations:
    def test_balance_sheet_growth_is_irrelevant(self):
        assert get_csddd_future_considerations("balance_sheet", True, {}) is None

    def test_single_metric_note_for_eu(self):
        text = get_csddd_future_considerations("employees", True, {})
        assert "requires meeting both employee and turnover thresholds" in text

    def test_no_single_metric_note_for_non_eu(self):
        text = get_csddd_future_considerations("turnover", False, {})
        assert "simultaneously" not in text
        assert "EU turnover exceeding €450 million" in text

    def test_ultimate_parent(self):
        text = get_csddd_future_considerations("multiple", True, {"parent_status": "yes", "subsidiary_status": "no"})
        assert "As an ultimate parent company" in text

    def test_franchising_on_turnover_growth(self):
        answers = {"has_franchising_licensing": "yes", "franchising_licensing": "yes_meets_criteria"}
        text = get_csddd_future_considerations("turnover", True, answers)
        assert "through franchising/licensing criteria" in text
