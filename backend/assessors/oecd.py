"""
OECD Guidelines for Multinational Enterprises: applicability check.

Applies to multinational enterprises operating in or from adherent countries.
Both facts come straight from the answers; there are no size thresholds.
"""

from __future__ import annotations

from schemas import Answers, AssessmentResult, Finding
from tools.explanation import render_reason
from tools.labels import NOT_SPECIFIED

IN_SCOPE_REASON = (
    "The OECD Guidelines for Multinational Enterprises on Responsible Business Conduct apply to "
    "multinational enterprises operating in or from adherent countries."
)
TIMELINE = "Applicable since 2023 (latest update)"


def _not_in_scope(answers: Answers) -> AssessmentResult:
    multinational = answers.get("multinational_enterprise")
    adherent = answers.get("oecd_adherent_countries")

    if multinational == "no":
        findings = [Finding(criterion="Multinational enterprise status", value="No",
                            requirement_note="operates domestically only", satisfied=False)]
        summary = "Guidelines apply to multinational enterprises only."
    elif multinational == "yes" and adherent == "no":
        findings = [
            Finding(criterion="Multinational enterprise status", value="Yes", satisfied=True),
            Finding(criterion="Adherent countries", value="No",
                    requirement_note="operates only in non-adherent countries", satisfied=False),
        ]
        summary = "Guidelines apply to enterprises operating in or from adherent countries."
    else:
        findings = [Finding(criterion="Multinational enterprise status",
                            value="Yes" if multinational == "yes" else NOT_SPECIFIED,
                            requirement_note="not determined or incomplete assessment")]
        if multinational == "yes":
            findings.append(Finding(criterion="Adherent countries", value=NOT_SPECIFIED))
        summary = None

    return AssessmentResult(
        in_scope=False,
        reason=render_reason("oecd", findings, summary),
        findings=tuple(findings),
    )


def assess_oecd(answers: Answers) -> AssessmentResult:
    if answers.get("multinational_enterprise") == "yes" and answers.get("oecd_adherent_countries") == "yes":
        return AssessmentResult(in_scope=True, reason=IN_SCOPE_REASON, timeline=TIMELINE)
    return _not_in_scope(answers)
