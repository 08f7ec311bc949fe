"""
CSRD/ESRS scope assessment, following the European Commission decision matrix.

Branch 1 (EU-entity pathway): EU undertakings, plus non-EU undertakings whose
securities are admitted to an EU regulated market. The latter count as PIE and
as listed whatever their own listing answer says.
  1.1 parent of a large group      → consolidated statement, Art. 29a
  1.2 large undertaking            → individual statement, Art. 19a
  1.3 listed SME (non-micro)       → individual statement, Wave 3
  otherwise not in scope, with the 2-of-3 breakdown.

Branch 2 (Article 40a): non-EU undertakings without EU-listed securities that
reach €150M EU turnover and have a qualifying EU subsidiary or branch.

Waves:
  Wave 1: PIE with >500 employees (ex-NFRD), FY 2024
  Wave 2: other large undertakings / groups, FY 2027
  Wave 3: listed SMEs, specialised financial entities, Article 40a, FY 2028
"""

from __future__ import annotations

from assessors.rules import Rule, first_match
from schemas import Answers, AssessmentResult, Exemption, Finding, ReportingType
from tools.explanation import render_reason
from tools.labels import (
    EU_BRANCH_LABELS,
    EU_PRESENCE_LABELS,
    EU_SUBSIDIARY_LABELS,
    EU_TURNOVER_THRESHOLD_LABELS,
    NOT_SPECIFIED,
    SPECIALIZED_FINANCIAL_LABELS,
    get_balance_sheet_label,
    get_employee_label,
    get_label,
    get_turnover_label,
)
from tools.thresholds import (
    INDIVIDUAL_EMPLOYEE_BRACKETS,
    has_eu_securities,
    has_over_500_consolidated_employees,
    has_over_500_employees,
    has_qualifying_eu_subsidiary,
    is_large_undertaking,
    is_listed_eu,
    is_listed_sme,
    is_micro_undertaking,
    is_parent_of_large_group,
    is_pie,
    is_specialized_financial,
    is_third_country_in_scope,
    large_undertaking_criteria,
    parent_group_criteria,
)

WAVE_TIMELINES: dict[int, str] = {
    1: "Wave 1: Reporting started in 2025 for FY 2024",
    2: "Wave 2: Reporting starts in 2028 for FY starting ≥1 January 2027",
    3: "Wave 3: Reporting starts in 2029 for FY starting ≥1 January 2028",
}

ARTICLE_19A = "Article 19a Accounting Directive"
ARTICLE_29A = "Article 29a Accounting Directive"
ARTICLE_40A = "Article 40a Accounting Directive"
TRANSPARENCY_DIRECTIVE = " + Article 4(5) Transparency Directive"

JURISDICTION_UNKNOWN = "Jurisdiction not determined or insufficient information."


# ---------------------------------------------------------------------------
# 1. Effective status
# ---------------------------------------------------------------------------

def treat_as_eu_entity(answers: Answers) -> bool:
    return answers.get("jurisdiction") == "eu" or has_eu_securities(answers)


def is_effectively_pie(answers: Answers) -> bool:
    return is_pie(answers) or has_eu_securities(answers)


def is_effectively_listed(answers: Answers) -> bool:
    return is_listed_eu(answers) or has_eu_securities(answers)


def _is_non_eu(answers: Answers) -> bool:
    return answers.get("jurisdiction") == "non_eu"


def _legal_basis(article: str, answers: Answers) -> str:
    if is_effectively_listed(answers):
        return article + TRANSPARENCY_DIRECTIVE
    return article


def _in_scope(
    wave: int,
    reason: str,
    reporting_type: ReportingType,
    legal_basis: str,
    automatic: tuple[Exemption, ...] = (),
    possible: tuple[Exemption, ...] = (),
    **extra,
) -> AssessmentResult:
    return AssessmentResult(
        in_scope=True,
        wave=wave,
        timeline=WAVE_TIMELINES[wave],
        reason=reason,
        reporting_type=reporting_type,
        automatic_exemptions=automatic,
        possible_exemptions=possible,
        legal_basis=legal_basis,
        **extra,
    )


# ---------------------------------------------------------------------------
# 2. EU-entity pathway
# ---------------------------------------------------------------------------

def _parent_of_large_group(answers: Answers) -> AssessmentResult:
    non_eu = _is_non_eu(answers)
    if is_effectively_pie(answers) and has_over_500_consolidated_employees(answers):
        wave = 1
        reason = (
            "Non-EU parent of large group with securities on EU regulated market and >500 employees (consolidated)."
            if non_eu
            else "Parent of large group that is PIE with >500 employees (consolidated)."
        )
    else:
        wave = 2
        reason = (
            "Non-EU parent of large group with securities on EU regulated market."
            if non_eu
            else "Parent of large group."
        )
    return _in_scope(
        wave,
        reason,
        reporting_type="consolidated",
        legal_basis=_legal_basis(ARTICLE_29A, answers),
        automatic=("individual_reporting",),
        possible=() if is_effectively_listed(answers) else ("subsidiary_exemption_29a8",),
    )


def _large_undertaking(answers: Answers) -> AssessmentResult:
    non_eu = _is_non_eu(answers)
    pie_over_500 = is_effectively_pie(answers) and has_over_500_employees(answers)
    possible: tuple[Exemption, ...] = () if is_effectively_listed(answers) else ("subsidiary_exemption_19a9",)
    legal_basis = _legal_basis(ARTICLE_19A, answers)

    # Specialised financial entities report from FY 2028 whatever their size.
    if is_specialized_financial(answers):
        kind = SPECIALIZED_FINANCIAL_LABELS[answers["financial_type"]]
        reason = (
            f"Non-EU large {kind} with securities on EU regulated market."
            if non_eu
            else f"Large {kind}."
        )
        return _in_scope(
            3,
            reason,
            reporting_type="individual",
            legal_basis=legal_basis,
            possible=possible,
            specialized_timing=True,
            nfrd_transition=pie_over_500,
        )

    if pie_over_500:
        wave = 1
        reason = (
            "Non-EU large undertaking with securities on EU regulated market and >500 employees."
            if non_eu
            else "Large undertaking that is PIE with >500 employees."
        )
    else:
        wave = 2
        reason = (
            "Non-EU large undertaking with securities on EU regulated market."
            if non_eu
            else "Large undertaking."
        )
    return _in_scope(wave, reason, reporting_type="individual", legal_basis=legal_basis, possible=possible)


def _is_listed_sme_pathway(answers: Answers) -> bool:
    if is_listed_sme(answers):
        return True
    return (
        has_eu_securities(answers)
        and answers.get("employees_individual") in INDIVIDUAL_EMPLOYEE_BRACKETS
        and not is_micro_undertaking(answers)
        and not is_large_undertaking(answers)
    )


def _listed_sme(answers: Answers) -> AssessmentResult:
    specialized = is_specialized_financial(answers)
    suffix = f" ({SPECIALIZED_FINANCIAL_LABELS[answers['financial_type']]})" if specialized else ""
    if _is_non_eu(answers):
        reason = (
            "Non-EU SME (excluding micro-undertakings) with securities admitted to trading "
            f"on EU regulated market{suffix}."
        )
    else:
        reason = f"SME with securities admitted to trading on EU regulated market{suffix}."

    possible: tuple[Exemption, ...]
    if is_listed_sme(answers) or _is_non_eu(answers):
        possible = ("opt_out_fy2028_2029", "subsidiary_exemption_19a9")
    else:
        possible = ("subsidiary_exemption_19a9",)

    return _in_scope(
        3,
        reason,
        reporting_type="individual",
        legal_basis=_legal_basis(ARTICLE_19A, answers),
        possible=possible,
        specialized_timing=specialized,
    )


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _eu_entity_not_in_scope(answers: Answers) -> AssessmentResult:
    individual = large_undertaking_criteria(answers)
    findings = [
        Finding(criterion="Employees", value=get_employee_label(answers.get("employees_individual")),
                requirement_note="need 250+", satisfied=individual.employees),
        Finding(criterion="Turnover", value=get_turnover_label(answers.get("turnover_individual")),
                requirement_note="need €50M+", satisfied=individual.turnover),
        Finding(criterion="Balance sheet", value=get_balance_sheet_label(answers.get("balance_sheet_individual")),
                requirement_note="need €25M+", satisfied=individual.balance_sheet),
        Finding(criterion="Large undertaking criteria", value=f"meets {individual.count}/3",
                requirement_note="need 2 of 3", satisfied=is_large_undertaking(answers)),
    ]

    if answers.get("parent_status") == "yes":
        group = parent_group_criteria(answers)
        findings += [
            Finding(criterion="Consolidated employees",
                    value=get_employee_label(answers.get("employees_consolidated")),
                    requirement_note="need 250+", satisfied=group.employees),
            Finding(criterion="Consolidated turnover",
                    value=get_turnover_label(answers.get("turnover_consolidated")),
                    requirement_note="need €50M+", satisfied=group.turnover),
            Finding(criterion="Consolidated balance sheet",
                    value=get_balance_sheet_label(answers.get("balance_sheet_consolidated")),
                    requirement_note="need €25M+", satisfied=group.balance_sheet),
            Finding(criterion="Parent of large group criteria", value=f"meets {group.count}/3",
                    requirement_note="need 2 of 3", satisfied=is_parent_of_large_group(answers)),
        ]
    else:
        findings.append(Finding(criterion="Parent status", value="No"))

    findings += [
        Finding(criterion="Public Interest Entity", value=_yes_no(is_effectively_pie(answers))),
        Finding(criterion="Listed on EU market", value=_yes_no(is_effectively_listed(answers))),
    ]
    if is_micro_undertaking(answers):
        findings.append(Finding(criterion="Micro-undertaking status", value="Yes",
                                requirement_note="excluded from CSRD", satisfied=False))

    return AssessmentResult(in_scope=False, reason=render_reason("csrd", findings), findings=tuple(findings))


EU_ENTITY_RULES: tuple[Rule, ...] = (
    Rule("parent_of_large_group", is_parent_of_large_group, _parent_of_large_group),
    Rule("large_undertaking", is_large_undertaking, _large_undertaking),
    Rule("listed_sme", _is_listed_sme_pathway, _listed_sme),
)


# ---------------------------------------------------------------------------
# 3. Article 40a pathway
# ---------------------------------------------------------------------------

def _third_country(answers: Answers) -> AssessmentResult:
    if has_qualifying_eu_subsidiary(answers):
        presence = "qualifying EU subsidiary."
    else:
        presence = "EU branch >€40M (no qualifying subsidiary)."
    return _in_scope(
        3,
        f"Third-country undertaking (Article 40a): EU turnover >€150M for two consecutive years and {presence}",
        reporting_type="third_country_group_level",
        legal_basis=ARTICLE_40A,
        possible=("third_country_consolidated_alternative",),
    )


def _third_country_not_in_scope(answers: Answers) -> AssessmentResult:
    securities = answers.get("eu_securities_trading")
    threshold = answers.get("eu_turnover_threshold")
    findings = [
        Finding(criterion="Pathway", value="Article 40a (third-country undertaking)"),
        Finding(criterion="EU securities trading", value="No" if securities == "no" else NOT_SPECIFIED,
                satisfied=False),
        Finding(criterion="EU turnover", value=get_label(EU_TURNOVER_THRESHOLD_LABELS, threshold),
                requirement_note="need >€150M for two consecutive years",
                satisfied=threshold == "both_over_150m"),
    ]
    if threshold == "both_over_150m":
        findings.append(Finding(criterion="EU presence",
                                value=get_label(EU_PRESENCE_LABELS, answers.get("eu_corporate_presence"))))
        if answers.get("eu_subsidiary_qualification"):
            findings.append(Finding(
                criterion="EU subsidiary qualification",
                value=get_label(EU_SUBSIDIARY_LABELS, answers.get("eu_subsidiary_qualification")),
                requirement_note="need large undertaking or listed SME",
                satisfied=has_qualifying_eu_subsidiary(answers),
            ))
        if answers.get("eu_branch_turnover"):
            findings.append(Finding(
                criterion="EU branch turnover",
                value=get_label(EU_BRANCH_LABELS, answers.get("eu_branch_turnover")),
                requirement_note="need >€40M",
                satisfied=answers.get("eu_branch_turnover") == "over_40m",
            ))

    return AssessmentResult(
        in_scope=False,
        reason=render_reason("csrd", findings, "Article 40a thresholds not met."),
        findings=tuple(findings),
    )


THIRD_COUNTRY_RULES: tuple[Rule, ...] = (
    Rule("third_country_article_40a", is_third_country_in_scope, _third_country),
)


# ---------------------------------------------------------------------------
# 4. Entry point
# ---------------------------------------------------------------------------

def assess_csrd(answers: Answers) -> AssessmentResult:
    if treat_as_eu_entity(answers):
        return first_match(EU_ENTITY_RULES, answers) or _eu_entity_not_in_scope(answers)
    if _is_non_eu(answers):
        return first_match(THIRD_COUNTRY_RULES, answers) or _third_country_not_in_scope(answers)
    return AssessmentResult(in_scope=False, reason=render_reason("csrd", [], JURISDICTION_UNKNOWN))
