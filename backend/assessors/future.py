"""
Future compliance considerations for companies expecting to grow.

Runs after all five frameworks are assessed. Only not-in-scope CSRD / CSDDD
verdicts are augmented, and only when the company answered that it may
cross thresholds (future_thresholds = yes | maybe). Results are immutable:
augmentation returns copies.
"""

from __future__ import annotations

from typing import Optional

from schemas import Answers, Assessment
from tools.thresholds import is_ultimate_parent

GROWTH_ANSWERS = frozenset({"yes", "maybe"})
CSRD_GROWTH_METRICS = frozenset({"multiple", "employees", "turnover", "balance_sheet"})
CSDDD_GROWTH_METRICS = frozenset({"multiple", "employees", "turnover"})

TAXONOMY_CONSIDERATION = (
    "Given your projected growth, your company might become subject to EU Taxonomy disclosure obligations "
    "if it falls under CSRD scope (Articles 19a/29a) in the future."
)


def get_csrd_future_considerations(growth_metrics: str, is_eu: bool, answers: Answers) -> Optional[str]:
    if growth_metrics not in CSRD_GROWTH_METRICS:
        return None

    if is_eu:
        threshold_text = (
            "employs more than 250 people, generates global turnover exceeding €50 million, and maintains "
            "global balance sheet totals above €25 million"
        )
    else:
        threshold_text = (
            "generates EU turnover exceeding €150 million for two consecutive financial years and has qualifying "
            "EU subsidiaries or branches exceeding €40 million EU turnover"
        )
    considerations = [
        "Given your projected growth, your company might fall under CSRD obligations if it meets at least two "
        f"of the following criteria for two consecutive financial years: {threshold_text}."
    ]

    if answers.get("parent_status") == "yes":
        if is_eu:
            group_text = (
                "employs more than 250 people (consolidated), generates global turnover exceeding €50 million "
                "(consolidated), and maintains global balance sheet totals above €25 million (consolidated)"
            )
        else:
            group_text = (
                "generates EU turnover exceeding €150 million for two consecutive financial years and has "
                "qualifying EU subsidiaries or branches"
            )
        considerations.append(
            "As a parent company, your group might fall under CSRD consolidated reporting obligations if it meets "
            f"at least two of the following criteria for two consecutive financial years: {group_text}."
        )

    return " ".join(considerations)


def get_csddd_future_considerations(growth_metrics: str, is_eu: bool, answers: Answers) -> Optional[str]:
    considerations = []

    if growth_metrics in CSDDD_GROWTH_METRICS:
        if is_eu:
            threshold_text = (
                "employs more than 1,000 people and generates global turnover exceeding €450 million for two "
                "consecutive financial years"
            )
        else:
            threshold_text = "generates EU turnover exceeding €450 million for two consecutive financial years"
        considerations.append(
            f"Given your projected growth, your company might fall under CSDDD obligations if it {threshold_text}."
        )
        # One metric alone can never satisfy the EU test.
        if is_eu and growth_metrics in ("employees", "turnover"):
            considerations.append("Note: CSDDD requires meeting both employee and turnover thresholds simultaneously.")

        if is_ultimate_parent(answers):
            if is_eu:
                group_text = (
                    "employs more than 1,000 people (consolidated) and generates global turnover exceeding "
                    "€450 million (consolidated) for two consecutive financial years"
                )
            else:
                group_text = (
                    "generates EU turnover exceeding €450 million (consolidated) for two consecutive financial years"
                )
            considerations.append(
                f"As an ultimate parent company, your group might fall under CSDDD obligations if it {group_text}."
            )

    if (
        answers.get("has_franchising_licensing") == "yes"
        and answers.get("franchising_licensing") == "yes_meets_criteria"
        and growth_metrics == "turnover"
    ):
        if is_eu:
            franchising_text = (
                "generates global turnover exceeding €80 million and receives royalties exceeding €22.5 million "
                "from qualifying franchising/licensing agreements"
            )
        else:
            franchising_text = (
                "generates EU turnover exceeding €80 million and receives EU royalties exceeding €22.5 million "
                "from qualifying franchising/licensing agreements"
            )
        considerations.append(
            "Your company might also fall under CSDDD through franchising/licensing criteria if it "
            f"{franchising_text} for two consecutive financial years."
        )

    return " ".join(considerations) if considerations else None


def add_future_considerations(assessment: Assessment, answers: Answers) -> Assessment:
    """Copy of the assessment with growth-related considerations attached."""
    if answers.get("future_thresholds") not in GROWTH_ANSWERS:
        return assessment

    growth_metrics = answers.get("growth_metrics") or ""
    is_eu = answers.get("jurisdiction") == "eu"
    csrd, csddd, taxonomy = assessment.csrd, assessment.csddd, assessment.taxonomy

    if not csrd.in_scope:
        text = get_csrd_future_considerations(growth_metrics, is_eu, answers)
        if text:
            csrd = csrd.model_copy(update={"future_considerations": text})

    if not csddd.in_scope:
        text = get_csddd_future_considerations(growth_metrics, is_eu, answers)
        if text:
            csddd = csddd.model_copy(update={"future_considerations": text})

    # Taxonomy follows CSRD.
    if not taxonomy.in_scope and csrd.future_considerations:
        taxonomy = taxonomy.model_copy(update={"future_considerations": TAXONOMY_CONSIDERATION})

    return assessment.model_copy(update={"csrd": csrd, "csddd": csddd, "taxonomy": taxonomy})
