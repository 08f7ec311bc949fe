"""
Threshold predicates for CSRD and CSDDD scoping.

Every predicate is a pure function of the answer set and returns a bool.
Bracket codes already encode the legal thresholds, so all tests are closed-set
membership checks, never numeric comparisons. An absent or unrecognised
answer never satisfies a predicate (default-deny).

Provides:
  - CSDDD individual / group / non-EU / franchising thresholds
  - CSRD large-undertaking, listed-SME and parent-of-large-group tests (2-of-3)
  - Article 40a third-country scope
  - small status helpers (ultimate parent, PIE, EU securities, micro)
"""

from __future__ import annotations

from typing import Mapping, NamedTuple

Answers = Mapping[str, str]


# ---------------------------------------------------------------------------
# Bracket sets
# ---------------------------------------------------------------------------

INDIVIDUAL_EMPLOYEE_BRACKETS = frozenset(
    {"under_10", "10_49", "50_249", "250_499", "500_999", "1000_2999", "3000_plus"}
)
CONSOLIDATED_EMPLOYEE_BRACKETS = frozenset(
    {"under_250", "250_499", "500_999", "1000_2999", "3000_plus"}
)
INDIVIDUAL_TURNOVER_BRACKETS = frozenset(
    {"under_2m", "2_10m", "10_50m", "50_80m", "80_150m", "150_450m", "450_900m", "900m_plus"}
)
CONSOLIDATED_TURNOVER_BRACKETS = frozenset({"under_50m", "50_450m", "450_900m", "900m_plus"})

# CSRD (Accounting Directive Art. 3(4)): large undertaking criteria
CSRD_EMPLOYEES_250_PLUS = frozenset({"250_499", "500_999", "1000_2999", "3000_plus"})
CSRD_TURNOVER_BELOW_50M = frozenset({"under_2m", "2_10m", "10_50m"})
CSRD_GROUP_TURNOVER_50M_PLUS = frozenset({"50_450m", "450_900m", "900m_plus"})
CSRD_BALANCE_SHEET_25M_PLUS = "25m_plus"
EMPLOYEES_500_PLUS = frozenset({"500_999", "1000_2999", "3000_plus"})

# CSDDD (Directive (EU) 2024/1760 Art. 2)
CSDDD_EMPLOYEES_1000_PLUS = frozenset({"1000_2999", "3000_plus"})
CSDDD_TURNOVER_450M_PLUS = frozenset({"450_900m", "900m_plus"})
CSDDD_FRANCHISE_TURNOVER_80M_PLUS = frozenset({"80_150m", "150_450m", "450_900m", "900m_plus"})

SPECIALIZED_FINANCIAL_TYPES = frozenset({"snci", "captive_insurance"})
QUALIFYING_EU_SUBSIDIARIES = frozenset({"large_undertaking", "listed_sme"})

_SIZE_KEYS_INDIVIDUAL = ("employees_individual", "turnover_individual", "balance_sheet_individual")
_SIZE_KEYS_CONSOLIDATED = ("employees_consolidated", "turnover_consolidated", "balance_sheet_consolidated")


class SizeCriteria(NamedTuple):
    """Per-criterion outcome of a 2-of-3 size test."""

    employees: bool
    turnover: bool
    balance_sheet: bool

    @property
    def count(self) -> int:
        return sum((self.employees, self.turnover, self.balance_sheet))


def _answered(answers: Answers, keys: tuple[str, ...]) -> bool:
    return all(answers.get(key) is not None for key in keys)


# ---------------------------------------------------------------------------
# 1. Status helpers
# ---------------------------------------------------------------------------


def is_ultimate_parent(answers: Answers) -> bool:
    return answers.get("parent_status") == "yes" and answers.get("subsidiary_status") == "no"


def is_listed_eu(answers: Answers) -> bool:
    return answers.get("listing_status") == "listed_eu"


def is_pie(answers: Answers) -> bool:
    """Public Interest Entity as answered: EU-listed or self-declared PIE."""
    return is_listed_eu(answers) or answers.get("public_interest") == "yes"


def has_eu_securities(answers: Answers) -> bool:
    """Non-EU company whose securities are admitted to an EU regulated market."""
    return answers.get("jurisdiction") == "non_eu" and answers.get("eu_securities_trading") == "yes"


def is_micro_undertaking(answers: Answers) -> bool:
    return answers.get("employees_individual") == "under_10"


def has_over_500_employees(answers: Answers) -> bool:
    return answers.get("employees_individual") in EMPLOYEES_500_PLUS


def has_over_500_consolidated_employees(answers: Answers) -> bool:
    return answers.get("employees_consolidated") in EMPLOYEES_500_PLUS


def is_specialized_financial(answers: Answers) -> bool:
    return answers.get("financial_type") in SPECIALIZED_FINANCIAL_TYPES


# ---------------------------------------------------------------------------
# 2. CSDDD thresholds
# ---------------------------------------------------------------------------


def meets_csddd_individual_thresholds(answers: Answers) -> bool:
    """EU company: 1,000+ employees AND €450M+ global turnover."""
    return (
        answers.get("employees_individual") in CSDDD_EMPLOYEES_1000_PLUS
        and answers.get("turnover_individual") in CSDDD_TURNOVER_450M_PLUS
    )


def meets_csddd_group_thresholds(answers: Answers) -> bool:
    """Consolidated 1,000+ employees AND €450M+ turnover.

    Only meaningful for an ultimate parent; callers gate on
    is_ultimate_parent() themselves.
    """
    return (
        answers.get("employees_consolidated") in CSDDD_EMPLOYEES_1000_PLUS
        and answers.get("turnover_consolidated") in CSDDD_TURNOVER_450M_PLUS
    )


def meets_csddd_non_eu_individual_thresholds(answers: Answers) -> bool:
    """Non-EU company: €450M+ EU turnover, no employee criterion."""
    return answers.get("turnover_individual") in CSDDD_TURNOVER_450M_PLUS


def meets_csddd_non_eu_group_thresholds(answers: Answers) -> bool:
    return answers.get("turnover_consolidated") in CSDDD_TURNOVER_450M_PLUS


def _has_qualifying_franchising(answers: Answers) -> bool:
    return (
        answers.get("has_franchising_licensing") == "yes"
        and answers.get("franchising_licensing") == "yes_meets_criteria"
        and answers.get("turnover_individual") in CSDDD_FRANCHISE_TURNOVER_80M_PLUS
    )


def meets_csddd_individual_franchising(answers: Answers) -> bool:
    """€22.5M+ royalties AND €80M+ global turnover."""
    return _has_qualifying_franchising(answers) and answers.get("franchise_royalties") == "yes"


def meets_csddd_group_franchising(answers: Answers) -> bool:
    # The questionnaire collects no group-level franchising data; the
    # individual answers stand in for the group.
    return meets_csddd_individual_franchising(answers)


def meets_csddd_non_eu_individual_franchising(answers: Answers) -> bool:
    """€22.5M+ EU royalties AND €80M+ EU turnover."""
    return _has_qualifying_franchising(answers) and answers.get("franchise_eu_royalties") == "yes"


def meets_csddd_non_eu_group_franchising(answers: Answers) -> bool:
    return meets_csddd_non_eu_individual_franchising(answers)


def meets_csddd_franchising_thresholds(answers: Answers) -> bool:
    """Franchising test picking the EU or non-EU royalty question by jurisdiction."""
    if answers.get("jurisdiction") == "eu":
        return meets_csddd_individual_franchising(answers)
    return meets_csddd_non_eu_individual_franchising(answers)


# ---------------------------------------------------------------------------
# 3. CSRD size tests
# ---------------------------------------------------------------------------


def large_undertaking_criteria(answers: Answers) -> SizeCriteria:
    turnover = answers.get("turnover_individual")
    return SizeCriteria(
        employees=answers.get("employees_individual") in CSRD_EMPLOYEES_250_PLUS,
        # Exclusion of the low brackets: the individual scale has no single
        # "€50M+" code to include.
        turnover=turnover in INDIVIDUAL_TURNOVER_BRACKETS and turnover not in CSRD_TURNOVER_BELOW_50M,
        balance_sheet=answers.get("balance_sheet_individual") == CSRD_BALANCE_SHEET_25M_PLUS,
    )


def parent_group_criteria(answers: Answers) -> SizeCriteria:
    return SizeCriteria(
        employees=answers.get("employees_consolidated") in CSRD_EMPLOYEES_250_PLUS,
        turnover=answers.get("turnover_consolidated") in CSRD_GROUP_TURNOVER_50M_PLUS,
        balance_sheet=answers.get("balance_sheet_consolidated") == CSRD_BALANCE_SHEET_25M_PLUS,
    )


def is_large_undertaking(answers: Answers) -> bool:
    """At least 2 of 3: 250+ employees, €50M+ turnover, €25M+ balance sheet."""
    if not _answered(answers, _SIZE_KEYS_INDIVIDUAL):
        return False
    return large_undertaking_criteria(answers).count >= 2


def is_listed_sme(answers: Answers) -> bool:
    return (
        is_listed_eu(answers)
        and answers.get("employees_individual") in INDIVIDUAL_EMPLOYEE_BRACKETS
        and not is_micro_undertaking(answers)
        and not is_large_undertaking(answers)
    )


def is_parent_of_large_group(answers: Answers) -> bool:
    """Parent undertaking whose group meets 2 of 3 criteria on a consolidated basis."""
    if answers.get("parent_status") != "yes":
        return False
    if not _answered(answers, _SIZE_KEYS_CONSOLIDATED):
        return False
    return parent_group_criteria(answers).count >= 2


# ---------------------------------------------------------------------------
# 4. Article 40a third-country undertakings
# ---------------------------------------------------------------------------


def has_qualifying_eu_subsidiary(answers: Answers) -> bool:
    return answers.get("eu_subsidiary_qualification") in QUALIFYING_EU_SUBSIDIARIES


def is_third_country_in_scope(answers: Answers) -> bool:
    """
    Article 40a scope for a non-EU undertaking without EU-listed securities.

    Companies with EU-traded securities are handled by the EU-entity pathway
    and are excluded here. The eu_turnover_threshold answer already covers
    both consecutive years. A qualifying EU subsidiary takes priority; the
    EU branch is only consulted when no subsidiary qualifies.
    """
    if answers.get("eu_securities_trading") == "yes":
        return False
    if answers.get("eu_turnover_threshold") != "both_over_150m":
        return False
    if has_qualifying_eu_subsidiary(answers):
        return True
    return answers.get("eu_branch_turnover") == "over_40m"
