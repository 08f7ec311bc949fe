"""
Tests for backend/tools/validation.py.
"""

import pytest

from tools.validation import AnswerValidationError, drop_non_string_answers, validate_answers

from conftest import LISTED_EU_LARGE, NON_EU_ARTICLE_40A, SMALL_EU


class TestValidateAnswers:
    @pytest.mark.parametrize("answers", [LISTED_EU_LARGE, SMALL_EU, NON_EU_ARTICLE_40A, {}])
    def test_catalog_answers_pass(self, answers):
        assert validate_answers(answers) == answers

    def test_unknown_key(self):
        with pytest.raises(AnswerValidationError) as exc_info:
            validate_answers({"jurisdiction": "eu", "headcount": "5000"})
        assert exc_info.value.unknown_keys == ["headcount"]
        assert "unknown question keys: headcount" in str(exc_info.value)

    def test_undeclared_option(self):
        with pytest.raises(AnswerValidationError) as exc_info:
            validate_answers({"employees_individual": "under_250"})
        assert exc_info.value.invalid_values == {"employees_individual": "under_250"}

    def test_non_string_value(self):
        with pytest.raises(AnswerValidationError):
            validate_answers({"jurisdiction": 1})

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            validate_answers({"nope": "x"})

    def test_hidden_question_answers_allowed(self):
        answers = {"jurisdiction": "eu", "eu_securities_trading": "yes"}
        assert validate_answers(answers) == answers


class TestDropNonStringAnswers:
    def test_keeps_strings_including_unknown_codes(self):
        answers = {"jurisdiction": "mars", "headcount": "lots"}
        assert drop_non_string_answers(answers) == answers

    def test_discards_lists_objects_and_numbers(self):
        answers = {"jurisdiction": "eu", "employees_individual": ["3000_plus"], "turnover_individual": {"eur": 1},
                   "balance_sheet_individual": 25}
        assert drop_non_string_answers(answers) == {"jurisdiction": "eu"}
