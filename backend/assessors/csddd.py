"""
CSDDD scope assessment (Directive (EU) 2024/1760), following the decision matrix.

Per jurisdiction, four pathways are tried in order:
  1. individual company thresholds
  2. ultimate parent: group thresholds
  3. individual franchising / licensing
  4. ultimate parent: group franchising / licensing
Every pathway also requires the thresholds to have been met for two
consecutive financial years (consecutive_years_csddd = "yes").

Wave 1 (26 July 2028) needs the higher tier at the matched pathway's level:
3,000+ employees and €900M+ turnover for EU companies, €900M+ EU turnover for
non-EU companies. Everything else is Wave 2 (26 July 2029). Franchising
pathways have no higher tier.
"""

from __future__ import annotations

from functools import partial
from typing import Callable

from assessors.rules import Rule, first_match
from schemas import Answers, AssessmentResult, Finding
from tools.explanation import render_reason
from tools.labels import get_employee_label, get_turnover_label
from tools.thresholds import (
    CSDDD_EMPLOYEES_1000_PLUS,
    CSDDD_FRANCHISE_TURNOVER_80M_PLUS,
    CSDDD_TURNOVER_450M_PLUS,
    is_ultimate_parent,
    meets_csddd_group_franchising,
    meets_csddd_group_thresholds,
    meets_csddd_individual_franchising,
    meets_csddd_individual_thresholds,
    meets_csddd_non_eu_group_franchising,
    meets_csddd_non_eu_group_thresholds,
    meets_csddd_non_eu_individual_franchising,
    meets_csddd_non_eu_individual_thresholds,
)

LEGAL_BASIS = "Directive (EU) 2024/1760"
CONSECUTIVE_YEARS_NOTE = "Obligations begin only after meeting thresholds for two consecutive financial years."
JURISDICTION_UNKNOWN = "Jurisdiction not determined for CSDDD assessment."

WAVE_TIMELINES: dict[int, str] = {
    1: "Wave 1: From 26 July 2028",
    2: "Wave 2: From 26 July 2029",
}

# pathway -> (Wave 1 reason, Wave 2 reason)
PATHWAY_REASONS: dict[str, tuple[str, str]] = {
    "individual_eu_company": (
        "3,000+ employees and €900M+ global turnover (individual).",
        "1,000+ employees and €450M+ global turnover (individual).",
    ),
    "ultimate_parent_eu_group": (
        "3,000+ employees and €900M+ global turnover (group level).",
        "1,000+ employees and €450M+ global turnover (group level).",
    ),
    "individual_eu_franchising": (
        "EU franchising agreements with €22.5M+ royalties and €80M+ global turnover (individual).",
    ) * 2,
    "ultimate_parent_eu_franchising": (
        "EU franchising agreements with €22.5M+ royalties and €80M+ global turnover (group level).",
    ) * 2,
    "individual_non_eu_company": (
        "€900M+ EU turnover (individual).",
        "€450M+ EU turnover (individual).",
    ),
    "ultimate_parent_non_eu_group": (
        "€900M+ EU turnover (group level).",
        "€450M+ EU turnover (group level).",
    ),
    "individual_non_eu_franchising": (
        "EU franchising agreements with €22.5M+ EU royalties and €80M+ EU turnover (individual).",
    ) * 2,
    "ultimate_parent_non_eu_franchising": (
        "EU franchising agreements with €22.5M+ EU royalties and €80M+ EU turnover (group level).",
    ) * 2,
}


def _eu_higher_tier(employees_key: str, turnover_key: str) -> Callable[[Answers], bool]:
    def check(answers: Answers) -> bool:
        return answers.get(employees_key) == "3000_plus" and answers.get(turnover_key) == "900m_plus"
    return check


def _non_eu_higher_tier(turnover_key: str) -> Callable[[Answers], bool]:
    def check(answers: Answers) -> bool:
        return answers.get(turnover_key) == "900m_plus"
    return check


def _no_higher_tier(_answers: Answers) -> bool:
    return False


HIGHER_TIERS: dict[str, Callable[[Answers], bool]] = {
    "individual_eu_company": _eu_higher_tier("employees_individual", "turnover_individual"),
    "ultimate_parent_eu_group": _eu_higher_tier("employees_consolidated", "turnover_consolidated"),
    "individual_eu_franchising": _no_higher_tier,
    "ultimate_parent_eu_franchising": _no_higher_tier,
    "individual_non_eu_company": _non_eu_higher_tier("turnover_individual"),
    # Group tier reads consolidated turnover; earlier releases read the individual figure (always Wave 2).
    "ultimate_parent_non_eu_group": _non_eu_higher_tier("turnover_consolidated"),
    "individual_non_eu_franchising": _no_higher_tier,
    "ultimate_parent_non_eu_franchising": _no_higher_tier,
}


def assess_csddd_timeline(pathway: str, answers: Answers) -> AssessmentResult:
    """In-scope verdict for a matched pathway: wave, timeline and reason."""
    higher_tier = HIGHER_TIERS[pathway](answers)
    wave = 1 if higher_tier else 2
    wave1_reason, wave2_reason = PATHWAY_REASONS[pathway]
    return AssessmentResult(
        in_scope=True,
        wave=wave,
        timeline=WAVE_TIMELINES[wave],
        reason=wave1_reason if higher_tier else wave2_reason,
        legal_basis=LEGAL_BASIS,
        consecutive_years_note=CONSECUTIVE_YEARS_NOTE,
    )


# ---------------------------------------------------------------------------
# Pathway rules
# ---------------------------------------------------------------------------

def _consecutive_years_met(answers: Answers) -> bool:
    return answers.get("consecutive_years_csddd") == "yes"


def _pathway(name: str, predicate: Callable[[Answers], bool], group_level: bool = False) -> Rule:
    def applies(answers: Answers) -> bool:
        if group_level and not is_ultimate_parent(answers):
            return False
        return predicate(answers) and _consecutive_years_met(answers)
    return Rule(name, applies, partial(assess_csddd_timeline, name))


EU_RULES: tuple[Rule, ...] = (
    _pathway("individual_eu_company", meets_csddd_individual_thresholds),
    _pathway("ultimate_parent_eu_group", meets_csddd_group_thresholds, group_level=True),
    _pathway("individual_eu_franchising", meets_csddd_individual_franchising),
    _pathway("ultimate_parent_eu_franchising", meets_csddd_group_franchising, group_level=True),
)

NON_EU_RULES: tuple[Rule, ...] = (
    _pathway("individual_non_eu_company", meets_csddd_non_eu_individual_thresholds),
    _pathway("ultimate_parent_non_eu_group", meets_csddd_non_eu_group_thresholds, group_level=True),
    _pathway("individual_non_eu_franchising", meets_csddd_non_eu_individual_franchising),
    _pathway("ultimate_parent_non_eu_franchising", meets_csddd_non_eu_group_franchising, group_level=True),
)


# ---------------------------------------------------------------------------
# Not-in-scope explanation
# ---------------------------------------------------------------------------

CONSECUTIVE_YEARS_STATUS: dict[str, str] = {
    "yes": "Met",
    "no": "Not satisfied",
    "uncertain": "Uncertain",
}


def _threshold_findings(answers: Answers, eu: bool) -> list[Finding]:
    if eu:
        return [
            Finding(criterion="Employees", value=get_employee_label(answers.get("employees_individual")),
                    requirement_note="need 1,000+",
                    satisfied=answers.get("employees_individual") in CSDDD_EMPLOYEES_1000_PLUS),
            Finding(criterion="Global turnover", value=get_turnover_label(answers.get("turnover_individual")),
                    requirement_note="need €450M+",
                    satisfied=answers.get("turnover_individual") in CSDDD_TURNOVER_450M_PLUS),
        ]
    return [
        Finding(criterion="EU turnover", value=get_turnover_label(answers.get("turnover_individual")),
                requirement_note="need €450M+",
                satisfied=answers.get("turnover_individual") in CSDDD_TURNOVER_450M_PLUS),
    ]


def _group_findings(answers: Answers, eu: bool) -> list[Finding]:
    if not is_ultimate_parent(answers):
        status = "Parent but not ultimate parent" if answers.get("parent_status") == "yes" else "Not a parent company"
        return [Finding(criterion="Group status", value=status, satisfied=False)]

    findings = [Finding(criterion="Group status", value="Ultimate parent", satisfied=True)]
    if eu:
        findings.append(Finding(
            criterion="Consolidated employees", value=get_employee_label(answers.get("employees_consolidated")),
            requirement_note="need 1,000+",
            satisfied=answers.get("employees_consolidated") in CSDDD_EMPLOYEES_1000_PLUS,
        ))
        turnover_criterion = "Consolidated global turnover"
    else:
        turnover_criterion = "Consolidated EU turnover"
    findings.append(Finding(
        criterion=turnover_criterion, value=get_turnover_label(answers.get("turnover_consolidated")),
        requirement_note="need €450M+",
        satisfied=answers.get("turnover_consolidated") in CSDDD_TURNOVER_450M_PLUS,
    ))
    return findings


def _franchising_findings(answers: Answers, eu: bool) -> list[Finding]:
    if answers.get("has_franchising_licensing") != "yes":
        return [Finding(criterion="Franchising", value="No qualifying agreements", satisfied=False)]
    if answers.get("franchising_licensing") != "yes_meets_criteria":
        return [Finding(criterion="Franchising", value="Agreements exist but do not meet CSDDD criteria",
                        satisfied=False)]

    royalties_key = "franchise_royalties" if eu else "franchise_eu_royalties"
    return [
        Finding(criterion="Franchising", value="Qualifying agreements exist", satisfied=True),
        Finding(criterion="Franchising turnover", value=get_turnover_label(answers.get("turnover_individual")),
                requirement_note="need €80M+ global" if eu else "need €80M+ EU",
                satisfied=answers.get("turnover_individual") in CSDDD_FRANCHISE_TURNOVER_80M_PLUS),
        Finding(criterion="Franchising royalties", value="Yes" if answers.get(royalties_key) == "yes" else "No",
                requirement_note="need €22.5M+" if eu else "need €22.5M+ EU",
                satisfied=answers.get(royalties_key) == "yes"),
    ]


def _not_in_scope(answers: Answers, eu: bool) -> AssessmentResult:
    consecutive = answers.get("consecutive_years_csddd")
    findings = _threshold_findings(answers, eu)
    findings.append(Finding(
        criterion="Consecutive years",
        value=CONSECUTIVE_YEARS_STATUS.get(consecutive or "", "Not verified"),
        requirement_note="thresholds met in two consecutive financial years",
        satisfied=consecutive == "yes",
    ))
    findings += _group_findings(answers, eu)
    findings += _franchising_findings(answers, eu)
    return AssessmentResult(in_scope=False, reason=render_reason("csddd", findings), findings=tuple(findings))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def assess_csddd(answers: Answers) -> AssessmentResult:
    jurisdiction = answers.get("jurisdiction")
    if jurisdiction == "eu":
        return first_match(EU_RULES, answers) or _not_in_scope(answers, eu=True)
    if jurisdiction == "non_eu":
        return first_match(NON_EU_RULES, answers) or _not_in_scope(answers, eu=False)
    return AssessmentResult(in_scope=False, reason=JURISDICTION_UNKNOWN)
