"""UN Guiding Principles on Business and Human Rights: universal applicability."""

from __future__ import annotations

from schemas import AssessmentResult

REASON = "The UN Guiding Principles apply to all businesses regardless of size or location."
TIMELINE = "Applicable since 2011"


def assess_ungps() -> AssessmentResult:
    return AssessmentResult(in_scope=True, reason=REASON, timeline=TIMELINE)
