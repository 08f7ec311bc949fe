"""
Tests for backend/tools/questions.py.

Covers:
  - Catalog shape (ten steps, unique keys, required selects)
  - Step and question visibility rules
  - Required-answer gating
  - Answer-dependent labels and help text
"""

import pytest

from assessors.csddd import assess_csddd
from tools.questions import (
    QUESTIONNAIRE,
    QUESTIONS_BY_KEY,
    can_advance,
    missing_required,
    needs_article40a_temporal,
    needs_csddd_temporal,
    resolve_step,
    visible_questions,
    visible_steps,
)

from conftest import LISTED_EU_LARGE, SMALL_EU

STEPS = {step.id: step for step in QUESTIONNAIRE}


def _visible_keys(step_id: str, answers: dict) -> list[str]:
    return [q.key for q in visible_questions(STEPS[step_id], answers)]


class TestCatalog:
    def test_ten_steps_in_order(self):
        assert [step.id for step in QUESTIONNAIRE] == [
            "entity_basics",
            "group_structure",
            "size_individual",
            "size_consolidated",
            "international_operations",
            "non_eu_csrd_scope",
            "business_model",
            "indirect_applicability",
            "temporal_verification",
            "timeline",
        ]

    def test_keys_are_unique(self):
        keys = [q.key for step in QUESTIONNAIRE for q in step.questions]
        assert len(keys) == len(set(keys)) == len(QUESTIONS_BY_KEY)

    def test_all_questions_required_selects(self):
        for question in QUESTIONS_BY_KEY.values():
            assert question.type == "select"
            assert question.required
            assert question.options


class TestStepVisibility:
    def test_empty_answers(self):
        ids = [step.id for step in visible_steps({})]
        assert "size_consolidated" not in ids
        assert "non_eu_csrd_scope" not in ids
        assert "temporal_verification" not in ids
        # Nothing is in scope yet, so the indirect-impact step is shown.
        assert "indirect_applicability" in ids

    def test_parent_sees_consolidated_size(self):
        assert STEPS["size_consolidated"].is_visible({"parent_status": "yes"})

    def test_non_eu_sees_article_40a_step(self):
        assert STEPS["non_eu_csrd_scope"].is_visible({"jurisdiction": "non_eu"})
        assert not STEPS["non_eu_csrd_scope"].is_visible({"jurisdiction": "eu"})

    def test_indirect_step_hidden_when_both_directives_apply(self):
        ids = [step.id for step in visible_steps(LISTED_EU_LARGE)]
        assert "indirect_applicability" not in ids

    def test_temporal_step_follows_csddd_thresholds(self):
        assert STEPS["temporal_verification"].is_visible(LISTED_EU_LARGE)
        assert not STEPS["temporal_verification"].is_visible(SMALL_EU)


class TestQuestionVisibility:
    def test_legal_form_only_for_non_financial(self):
        assert "non_financial_legal_form" in _visible_keys("entity_basics", {"undertaking_type": "non_financial"})
        assert "financial_type" in _visible_keys("entity_basics", {"undertaking_type": "financial"})

    def test_annex_ii_question_for_partnerships(self):
        keys = _visible_keys("entity_basics", {
            "undertaking_type": "non_financial",
            "non_financial_legal_form": "partnership_cooperative",
        })
        assert "annex_ii_member_structure" in keys

    def test_public_interest_for_unlisted_eu(self):
        assert "public_interest" in _visible_keys("entity_basics", {"jurisdiction": "eu", "listing_status": "not_listed"})
        assert "public_interest" not in _visible_keys("entity_basics", {"jurisdiction": "eu", "listing_status": "listed_eu"})
        assert "public_interest" not in _visible_keys("entity_basics", {"jurisdiction": "non_eu"})

    def test_article_40a_chain(self):
        answers = {"jurisdiction": "non_eu", "eu_securities_trading": "no"}
        assert _visible_keys("non_eu_csrd_scope", answers) == ["eu_securities_trading", "eu_turnover_threshold"]

        answers["eu_turnover_threshold"] = "both_over_150m"
        answers["eu_corporate_presence"] = "both_subsidiary_branch"
        assert "eu_subsidiary_qualification" in _visible_keys("non_eu_csrd_scope", answers)
        assert "eu_branch_turnover" not in _visible_keys("non_eu_csrd_scope", answers)

        answers["eu_subsidiary_qualification"] = "other_sme"
        assert "eu_branch_turnover" in _visible_keys("non_eu_csrd_scope", answers)

    def test_branch_only_presence(self):
        answers = {"eu_securities_trading": "no", "eu_turnover_threshold": "both_over_150m",
                   "eu_corporate_presence": "branch_only"}
        keys = _visible_keys("non_eu_csrd_scope", answers)
        assert "eu_branch_turnover" in keys
        assert "eu_subsidiary_qualification" not in keys

    @pytest.mark.parametrize("jurisdiction, royalty_key", [("eu", "franchise_royalties"),
                                                           ("non_eu", "franchise_eu_royalties")])
    def test_royalty_question_by_jurisdiction(self, jurisdiction, royalty_key):
        answers = {"jurisdiction": jurisdiction, "has_franchising_licensing": "yes",
                   "franchising_licensing": "yes_meets_criteria"}
        keys = _visible_keys("business_model", answers)
        assert royalty_key in keys
        assert len([k for k in keys if "royalties" in k]) == 1

    def test_growth_metrics_only_when_growth_expected(self):
        assert "growth_metrics" in _visible_keys("timeline", {"future_thresholds": "maybe"})
        assert "growth_metrics" not in _visible_keys("timeline", {"future_thresholds": "no"})


class TestTemporalTriggers:
    def test_individual_thresholds(self):
        assert needs_csddd_temporal({"employees_individual": "1000_2999", "turnover_individual": "450_900m"})

    def test_group_thresholds_need_ultimate_parent(self):
        group = {"employees_consolidated": "3000_plus", "turnover_consolidated": "900m_plus", "parent_status": "yes"}
        assert not needs_csddd_temporal({**group, "subsidiary_status": "yes_eu"})
        assert needs_csddd_temporal({**group, "subsidiary_status": "no"})

    def test_non_eu_turnover_without_employee_criterion(self):
        answers = {"jurisdiction": "non_eu", "employees_individual": "250_499", "turnover_individual": "450_900m"}
        assert needs_csddd_temporal(answers)
        assert "temporal_verification" in [step.id for step in visible_steps(answers)]

    def test_non_eu_ultimate_parent_group_turnover(self):
        answers = {"jurisdiction": "non_eu", "parent_status": "yes", "subsidiary_status": "no",
                   "turnover_individual": "150_450m", "turnover_consolidated": "450_900m"}
        assert needs_csddd_temporal(answers)
        assert not needs_csddd_temporal({**answers, "subsidiary_status": "yes_non_eu"})

    def test_non_eu_below_eu_turnover(self):
        assert not needs_csddd_temporal(
            {"jurisdiction": "non_eu", "employees_individual": "3000_plus", "turnover_individual": "150_450m"}
        )

    def test_article_40a_never_asked(self):
        assert not needs_article40a_temporal({"jurisdiction": "non_eu", "eu_turnover_threshold": "both_over_150m"})


class TestRequiredAnswers:
    def test_missing_required(self):
        step = STEPS["entity_basics"]
        assert missing_required(step, {}) == ["jurisdiction", "undertaking_type", "listing_status"]
        assert not can_advance(step, {})

    def test_step_complete(self):
        answers = {"jurisdiction": "eu", "undertaking_type": "financial", "financial_type": "asset_manager",
                   "listing_status": "listed_eu"}
        assert can_advance(STEPS["entity_basics"], answers)

    def test_revealed_question_becomes_required(self):
        answers = {"jurisdiction": "eu", "undertaking_type": "financial", "listing_status": "not_listed"}
        assert missing_required(STEPS["entity_basics"], answers) == ["financial_type", "public_interest"]


class TestResolveStep:
    def test_turnover_label_by_jurisdiction(self):
        eu = resolve_step(STEPS["size_individual"], {"jurisdiction": "eu"})
        non_eu = resolve_step(STEPS["size_individual"], {"jurisdiction": "non_eu"})
        assert "worldwide" in eu.questions[1].label
        assert "in the EU" in non_eu.questions[1].label
        assert "global turnover determines" in eu.questions[1].help

    def test_consecutive_years_label_names_met_threshold(self):
        step = resolve_step(STEPS["temporal_verification"], LISTED_EU_LARGE)
        label = step.questions[0].label
        assert label.startswith("Has your company met the following CSDDD thresholds for two consecutive")
        assert "1,000+ employees AND €450M+ global turnover (individual level)" in label

    def test_consecutive_years_label_non_eu_has_no_employee_criterion(self):
        answers = {"jurisdiction": "non_eu", "employees_individual": "250_499", "turnover_individual": "450_900m"}
        label = resolve_step(STEPS["temporal_verification"], answers).questions[0].label
        assert "€450M+ EU turnover (individual level)" in label
        assert "employees" not in label

    def test_non_eu_answers_reach_csddd_scope(self):
        answers = {"jurisdiction": "non_eu", "employees_individual": "250_499", "turnover_individual": "450_900m"}
        keys = [q.key for q in visible_questions(STEPS["temporal_verification"], answers)]
        assert keys == ["consecutive_years_csddd"]
        assert assess_csddd({**answers, "consecutive_years_csddd": "yes"}).in_scope

    def test_rendered_answer_and_options(self):
        step = resolve_step(STEPS["entity_basics"], {"jurisdiction": "eu"})
        jurisdiction = step.questions[0]
        assert jurisdiction.answer == "eu"
        assert [o.value for o in jurisdiction.options] == ["eu", "non_eu"]

    def test_hidden_questions_not_rendered(self):
        step = resolve_step(STEPS["entity_basics"], {})
        assert [q.key for q in step.questions] == ["jurisdiction", "undertaking_type", "listing_status"]
