"""
EU Taxonomy Article 8 disclosure: derived from the CSRD verdict.

Taxonomy is never evaluated on its own. An undertaking discloses under
Article 8 exactly when it reports under CSRD Articles 19a/29a; Article 40a
third-country reports carry no Taxonomy obligation.
"""

from __future__ import annotations

from typing import Optional

from assessors.csrd import ARTICLE_40A
from schemas import Answers, AssessmentResult, Finding, PhaseIn, TaxonomyDetails
from tools.labels import TAXONOMY_KPIS, TAXONOMY_OBJECTIVES

LEGAL_BASIS = "Article 8 of Regulation (EU) 2020/852"
IN_SCOPE_REASON = "Subject to EU Taxonomy Article 8 as you are in scope of CSRD (Articles 19a/29a)."
ARTICLE_40A_REASON = (
    "EU Taxonomy assessment: Not subject to Article 8 as Article 40a companies are excluded from "
    "Taxonomy disclosure obligations under CSRD framework."
)
ARTICLE_40A_NOTE = (
    "Note: If your company voluntarily chooses to prepare consolidated sustainability statements in "
    "accordance with ESRS instead of Article 40a reports, EU subsidiaries can only be exempted from their "
    "reporting if you include their Taxonomy disclosures."
)
NOT_IN_CSRD_REASON = (
    "EU Taxonomy assessment: Not subject to Article 8 as you are not in scope of CSRD Articles 19a/29a. "
)
CSRD_EXCERPT_LENGTH = 150

# Phase-in schedule (Delegated Regulation (EU) 2021/2178)
NON_FINANCIAL_CURRENT = (
    "Since 2025 (for FY 2024): Full reporting on eligibility and alignment for all 6 environmental objectives."
)
FINANCIAL_CURRENT = "Since 2025 (for FY 2024): KPIs on alignment for objectives 1-2, eligibility for objectives 1-6."
FINANCIAL_FUTURE = "From 2026 (for FY 2025): Full reporting on eligibility and alignment for all 6 objectives."
CREDIT_INSTITUTION_ADDITIONAL = (
    "From 2026: Additionally report on alignment of trading book and fees/commissions for non-banking activities."
)

FINANCIAL_TYPE_NAMES: dict[str, str] = {
    "credit_institution": "Credit institution",
    "snci": "Small and non-complex institution",
    "insurance_company": "Insurance undertaking",
    "captive_insurance": "Captive insurance/reinsurance undertaking",
    "investment_firm": "Investment firm",
    "asset_manager": "Asset manager",
}


def get_phase_in(answers: Answers) -> Optional[PhaseIn]:
    undertaking_type = answers.get("undertaking_type")
    if undertaking_type == "non_financial":
        return PhaseIn(type="Non-financial undertaking", current=NON_FINANCIAL_CURRENT)
    if undertaking_type != "financial":
        return None

    financial_type = answers.get("financial_type")
    if financial_type not in FINANCIAL_TYPE_NAMES:
        return None
    return PhaseIn(
        type=FINANCIAL_TYPE_NAMES[financial_type],
        current=FINANCIAL_CURRENT,
        future=FINANCIAL_FUTURE,
        additional=CREDIT_INSTITUTION_ADDITIONAL if financial_type == "credit_institution" else None,
    )


def get_taxonomy_details(answers: Answers) -> TaxonomyDetails:
    return TaxonomyDetails(kpis=TAXONOMY_KPIS, objectives=TAXONOMY_OBJECTIVES, phase_in=get_phase_in(answers))


def derive_taxonomy(csrd: AssessmentResult, answers: Answers) -> AssessmentResult:
    """Taxonomy verdict from an already computed CSRD verdict."""
    if csrd.in_scope and csrd.legal_basis != ARTICLE_40A:
        return AssessmentResult(
            in_scope=True,
            reason=IN_SCOPE_REASON,
            timeline=csrd.timeline,
            legal_basis=LEGAL_BASIS,
            details=get_taxonomy_details(answers),
        )

    if csrd.in_scope:
        return AssessmentResult(
            in_scope=False,
            reason=ARTICLE_40A_REASON,
            note=ARTICLE_40A_NOTE,
            findings=(
                Finding(criterion="CSRD dependency", value="Article 40a report",
                        requirement_note="need CSRD Articles 19a/29a", satisfied=False),
            ),
        )

    reason = NOT_IN_CSRD_REASON
    if csrd.reason:
        reason += "CSRD status: " + csrd.reason[:CSRD_EXCERPT_LENGTH] + "..."
    return AssessmentResult(
        in_scope=False,
        reason=reason,
        findings=(
            Finding(criterion="CSRD dependency", value="Not in scope of CSRD Articles 19a/29a", satisfied=False),
        ),
    )
