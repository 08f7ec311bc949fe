"""
Ordered decision rules shared by the CSRD and CSDDD assessors.

A rule pairs an answer-set predicate with a verdict builder. Rule lists are
evaluated top to bottom and the first matching rule decides the verdict, so
list order encodes legal priority.
"""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Optional, Sequence

from schemas import Answers, AssessmentResult

logger = logging.getLogger("assessment")


class Rule(NamedTuple):
    pathway: str
    applies: Callable[[Answers], bool]
    build: Callable[[Answers], AssessmentResult]


def first_match(rules: Sequence[Rule], answers: Answers) -> Optional[AssessmentResult]:
    """Return the verdict of the first applicable rule, tagged with its pathway."""
    for rule in rules:
        if rule.applies(answers):
            logger.debug("Rule matched: %s", rule.pathway)
            return rule.build(answers).model_copy(update={"pathway": rule.pathway})
    return None
