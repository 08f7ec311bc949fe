"""
Answer-set validation at the input boundary.

The assessors never raise: a missing or unrecognised answer simply leaves a
criterion unsatisfied. Callers that load answers from outside (the CLI, a
JSON file) run validate_answers() first so typos surface as errors instead
of silently negative verdicts.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from tools.questions import QUESTIONS_BY_KEY

logger = logging.getLogger("questionnaire")


class AnswerValidationError(ValueError):
    """Raised when an answer set does not conform to the question catalog."""

    def __init__(self, unknown_keys: list[str], invalid_values: dict[str, str]) -> None:
        self.unknown_keys = unknown_keys
        self.invalid_values = invalid_values
        problems = []
        if unknown_keys:
            problems.append(f"unknown question keys: {', '.join(unknown_keys)}")
        if invalid_values:
            problems.append(
                "undeclared option codes: "
                + ", ".join(f"{key}={value!r}" for key, value in invalid_values.items())
            )
        super().__init__("Invalid answers (" + "; ".join(problems) + ")")


def validate_answers(answers: Mapping[str, Any]) -> dict[str, str]:
    """
    Check every key against the catalog and every value against the
    question's declared options. Returns a plain dict copy on success.

    Visibility is not checked: answers to currently hidden questions are
    legal and ignored by the assessors.
    """
    unknown_keys: list[str] = []
    invalid_values: dict[str, str] = {}

    for key, value in answers.items():
        question = QUESTIONS_BY_KEY.get(key)
        if question is None:
            unknown_keys.append(key)
        elif not isinstance(value, str) or value not in question.option_values():
            invalid_values[key] = str(value)

    if unknown_keys or invalid_values:
        logger.warning("Answer validation failed: %d unknown, %d invalid", len(unknown_keys), len(invalid_values))
        raise AnswerValidationError(sorted(unknown_keys), invalid_values)

    return dict(answers)


def drop_non_string_answers(answers: Mapping[str, Any]) -> dict[str, str]:
    """
    Lenient counterpart of validate_answers(): keep only string values.

    Unknown keys and codes pass through and simply fail every predicate;
    lists, objects and numbers are discarded so they read as unanswered.
    """
    kept = {key: value for key, value in answers.items() if isinstance(value, str)}
    dropped = sorted(set(answers) - set(kept))
    if dropped:
        logger.warning("Ignoring non-string answers: %s", ", ".join(dropped))
    return kept
