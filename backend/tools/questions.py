"""
Question catalog: the ordered, conditionally visible questionnaire.

Ten steps (QuestionGroup), each with select questions whose visibility,
label and help text may depend on earlier answers. Every question is
required. Visibility is re-evaluated against the full answer set each
time it is queried; stale answers to now-hidden questions are kept.

Provides:
  - QUESTIONNAIRE                            the catalog
  - visible_steps(answers)                   steps whose show predicate holds
  - visible_questions(step, answers)         questions whose condition holds
  - missing_required(step, answers)          unanswered visible required keys
  - can_advance(step, answers)               no missing required answers
  - resolve_step(step, answers)              labels / help rendered to strings
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from assessors.csddd import assess_csddd
from assessors.csrd import assess_csrd
from schemas import (
    Answers,
    AnswerPredicate,
    DerivedText,
    Question,
    QuestionGroup,
    QuestionOption,
    RenderedQuestion,
    RenderedStep,
    StaticText,
    Text,
)
from tools.thresholds import (
    is_ultimate_parent,
    meets_csddd_franchising_thresholds,
    meets_csddd_group_thresholds,
    meets_csddd_individual_thresholds,
    meets_csddd_non_eu_group_thresholds,
    meets_csddd_non_eu_individual_thresholds,
)

logger = logging.getLogger("questionnaire")

TextSource = Union[str, Callable[[Answers], str]]


def _text(source: Optional[TextSource]) -> Optional[Text]:
    if source is None:
        return None
    if isinstance(source, str):
        return StaticText(text=source)
    return DerivedText(derive=source)


def _select(
    key: str,
    label: TextSource,
    options: list[tuple[str, str]],
    help: Optional[TextSource] = None,
    condition: Optional[AnswerPredicate] = None,
) -> Question:
    extra = {"show_if": condition} if condition is not None else {}
    return Question(
        key=key,
        label=_text(label),
        options=tuple(QuestionOption(value=value, label=text) for value, text in options),
        help=_text(help),
        **extra,
    )


def _is_eu(answers: Answers) -> bool:
    return answers.get("jurisdiction") == "eu"


def _is_non_eu(answers: Answers) -> bool:
    return answers.get("jurisdiction") == "non_eu"


# ---------------------------------------------------------------------------
# Temporal verification triggers
# ---------------------------------------------------------------------------

def _meets_individual_thresholds(answers: Answers) -> bool:
    # Non-EU companies are measured on EU turnover alone.
    if _is_non_eu(answers):
        return meets_csddd_non_eu_individual_thresholds(answers)
    return meets_csddd_individual_thresholds(answers)


def _meets_group_thresholds(answers: Answers) -> bool:
    if not is_ultimate_parent(answers):
        return False
    if _is_non_eu(answers):
        return meets_csddd_non_eu_group_thresholds(answers)
    return meets_csddd_group_thresholds(answers)


def needs_csddd_temporal(answers: Answers) -> bool:
    """True when some CSDDD threshold is met and the consecutive-years question matters."""
    return (
        _meets_individual_thresholds(answers)
        or _meets_group_thresholds(answers)
        or meets_csddd_franchising_thresholds(answers)
    )


def needs_article40a_temporal(answers: Answers) -> bool:
    # eu_turnover_threshold already asks about both consecutive years.
    return False


def needs_temporal_verification(answers: Answers) -> bool:
    return needs_csddd_temporal(answers) or needs_article40a_temporal(answers)


def _consecutive_years_label(answers: Answers) -> str:
    region = "global" if _is_eu(answers) else "EU"
    size = "€450M+ EU turnover" if _is_non_eu(answers) else "1,000+ employees AND €450M+ global turnover"
    text = "Has your company met the following CSDDD thresholds for two consecutive financial years: "
    if _meets_individual_thresholds(answers):
        text += f"{size} (individual level)"
    elif _meets_group_thresholds(answers):
        text += f"{size} (consolidated group level)"
    elif meets_csddd_franchising_thresholds(answers):
        royalties = "" if _is_eu(answers) else "EU "
        text += (
            f"€22.5M+ {royalties}royalties from qualifying franchising/licensing agreements "
            f"AND €80M+ {region} turnover"
        )
    return text + "?"


def _not_directly_in_scope(answers: Answers) -> bool:
    return not assess_csddd(answers).in_scope or not assess_csrd(answers).in_scope


# ---------------------------------------------------------------------------
# 1. Company classification
# ---------------------------------------------------------------------------

ENTITY_BASICS = QuestionGroup(
    id="entity_basics",
    title="Company Classification",
    questions=(
        _select(
            "jurisdiction",
            "Where is your company incorporated?",
            [("eu", "EU Member State"), ("non_eu", "Non-EU Country")],
            help=(
                'A company is considered to be "EU" if it is governed by or formed in accordance with the '
                "legislation of a Member State, typically the country where it is incorporated or headquartered. "
                'A "non-EU company" is governed by or formed in accordance with the legislation of a third country, '
                "but may still be subject to EU law if it has significant operations within the EU."
            ),
        ),
        _select(
            "undertaking_type",
            "Is your company a financial or non-financial undertaking?",
            [
                ("financial", "Financial undertaking (bank, insurance company, investment firm, asset manager)"),
                ("non_financial", "Non-financial undertaking (all other commercial entities)"),
            ],
            help=(
                "Under EU law (Article 1(8) of Delegated Regulation (EU) 2021/2178), financial undertakings are "
                "specifically defined as credit institutions, insurance/reinsurance undertakings, investment firms, "
                "and asset managers. All other companies are non-financial undertakings, also referred to as real "
                "economy companies (directly producing goods or providing services)."
            ),
        ),
        _select(
            "non_financial_legal_form",
            "Legal form of your non-financial undertaking",
            [
                ("limited_company", "Limited Liability Company"),
                ("public_company", "Public Company"),
                ("partnership_cooperative",
                 "Partnership, cooperative, or similar entity (listed in Annexes I and II of the Accounting Directive)"),
                ("other_entity", "Other entity type (not listed in Annexes I and II of the Accounting Directive)"),
            ],
            help=(
                'The EU Accounting Directive defines specific entity types by Member State that qualify as '
                '"undertakings" in Article 1(1) and Annexes I and II. Examples include: Limited Liability Company '
                "(Ltd, GmbH, ApS, AB, etc.), Public Company (PLC, AG, SA, SpA, etc.), and Partnership, cooperative, "
                "or similar entity (OHG, société en nom collectif, eG, SCOP, etc.). For the full legal text, see "
                "Article 1(1) and Annexes 1 and 2 of the Accounting Directive: "
                "https://eur-lex.europa.eu/eli/dir/2013/34/oj/eng"
            ),
            condition=lambda a: a.get("undertaking_type") == "non_financial",
        ),
        _select(
            "annex_ii_member_structure",
            "Do all members of your partnership/cooperative who would otherwise have unlimited liability actually "
            "have limited liability because they are themselves limited liability companies, public companies, or "
            "comparable entities?",
            [
                ("yes", "Yes - all unlimited liability members are limited liability entities"),
                ("no", "No - some unlimited liability members are individuals or other unlimited liability entities"),
            ],
            help=(
                "This distinction is important for CSRD applicability. Under Article 1(1)(b) of the Accounting "
                "Directive, partnerships and cooperatives are only covered by CSRD if all members with unlimited "
                "liability actually have limited liability through being limited liability companies, public "
                "companies, or comparable entities."
            ),
            condition=lambda a: (
                a.get("undertaking_type") == "non_financial"
                and a.get("non_financial_legal_form") == "partnership_cooperative"
            ),
        ),
        _select(
            "financial_type",
            "What type of financial institution are you?",
            [
                ("credit_institution", "Credit Institution/Bank"),
                ("snci", "Small and Non-Complex Institution"),
                ("insurance_company", "Insurance Company"),
                ("captive_insurance", "Captive Insurance/Reinsurance"),
                ("investment_firm", "Investment Firm"),
                ("asset_manager", "Asset Manager"),
            ],
            help=(
                "Different types of financial institutions may have different reporting timelines and requirements "
                "under EU sustainability laws."
            ),
            condition=lambda a: a.get("undertaking_type") == "financial",
        ),
        _select(
            "listing_status",
            "Is your company listed on a regulated market?",
            [
                ("listed_eu", "Listed on EU regulated market"),
                ("listed_non_eu", "Listed on non-EU regulated market only"),
                ("not_listed", "Not listed"),
            ],
            help=(
                "A regulated market is an official stock exchange that is recognised and supervised by government "
                "authorities. Under EU law (Article 2(1)(a) of Directive 2013/34/EU), companies listed on any EU "
                "Member State regulated market are automatically classified as Public Interest Entities, which "
                "affects sustainability reporting timelines."
            ),
        ),
        _select(
            "public_interest",
            "Is your company a Public Interest Entity under EU law?",
            [
                ("yes", "Yes (bank, insurance company, or other designated entity)"),
                ("no", "No"),
                ("unsure", "Unsure"),
            ],
            help=(
                "Under Article 2(1) of Directive 2013/34/EU, Public Interest Entities are: (a) companies listed on "
                "EU regulated markets, (b) credit institutions, (c) insurance undertakings, or (d) companies "
                "designated by Member States as PIEs due to public relevance. Since you indicated you are not listed "
                "on an EU regulated market, this question asks whether you fall into categories (b), (c), or (d)."
            ),
            condition=lambda a: _is_eu(a) and a.get("listing_status") != "listed_eu",
        ),
    ),
)


# ---------------------------------------------------------------------------
# 2. Group structure
# ---------------------------------------------------------------------------

GROUP_STRUCTURE = QuestionGroup(
    id="group_structure",
    title="Group Structure",
    questions=(
        _select(
            "parent_status",
            "Is your company a parent undertaking that controls other entities?",
            [("yes", "Yes - we have subsidiaries"), ("no", "No - we do not control other entities")],
            help=(
                "Under EU law (Article 22 of Directive 2013/34/EU), you are a parent undertaking if you: (a) hold "
                "more than 50% of voting rights in another entity, (b) have the right to appoint/remove the majority "
                "of board members, (c) have controlling influence through agreements, or (d) exercise dominant "
                "influence through ownership. In simple terms: do you own or control other companies/subsidiaries?"
            ),
        ),
        _select(
            "subsidiary_status",
            "Is your company a subsidiary of another entity?",
            [
                ("yes_eu", "Yes - EU parent company"),
                ("yes_non_eu", "Yes - Non-EU parent company"),
                ("no", "No - we are not controlled by another entity"),
            ],
            help=(
                "Under EU law, you are a subsidiary if another entity (parent company) controls you through voting "
                "rights, board appointment rights, or other controlling mechanisms. This matters because "
                "subsidiaries may be exempt from certain reporting requirements if the parent company already "
                "complies."
            ),
        ),
    ),
)


# ---------------------------------------------------------------------------
# 3-4. Size (individual and consolidated)
# ---------------------------------------------------------------------------

EMPLOYEE_HELP = (
    "Average number of employees means the average number of persons employed by your undertaking during the "
    "financial year. Different calculation rules may apply under CSDDD and CSRD: CSRD principally draws on Member "
    "State rules, whereas CSDDD provides harmonised clarifications for specific categories of employees in "
    "Article 2(4) CSDDD. In case of doubt, consider the specific rules that are relevant for your company."
)
SPECIAL_TURNOVER_DEFINITIONS = (
    "Note: Special definitions apply for insurance undertakings, credit institutions, and certain third-country "
    "undertakings; consult sector-specific regulations if applicable."
)


def _turnover_individual_help(answers: Answers) -> str:
    region_note = (
        "For EU companies, global turnover determines threshold compliance."
        if _is_eu(answers)
        else "For non-EU companies, only EU-generated turnover is relevant for EU law applicability."
    )
    return (
        'Under EU law (Article 2(5) of Directive 2013/34/EU), "net turnover" means the amounts derived from the '
        "sale of products and provision of services, after deducting sales rebates, VAT and other taxes directly "
        f"linked to turnover. {SPECIAL_TURNOVER_DEFINITIONS} {region_note}"
    )


def _turnover_consolidated_help(answers: Answers) -> str:
    region_note = (
        "For EU companies, global consolidated turnover applies."
        if _is_eu(answers)
        else "For non-EU companies, only EU-generated consolidated turnover is relevant."
    )
    return (
        "Consolidated group turnover includes revenue from all entities within your group. "
        f"{SPECIAL_TURNOVER_DEFINITIONS} {region_note}"
    )


SIZE_INDIVIDUAL = QuestionGroup(
    id="size_individual",
    title="Company Size (Individual Level)",
    questions=(
        _select(
            "employees_individual",
            "Average number of employees in your company (most recent financial year)",
            [
                ("under_10", "Under 10 (Micro)"),
                ("10_49", "10-49 (Small)"),
                ("50_249", "50-249 (Medium)"),
                ("250_499", "250-499"),
                ("500_999", "500-999"),
                ("1000_2999", "1,000-2,999"),
                ("3000_plus", "3,000+"),
            ],
            help=EMPLOYEE_HELP,
        ),
        _select(
            "turnover_individual",
            lambda a: (
                "Annual net turnover generated by your company in the EU (most recent financial year)"
                if _is_non_eu(a)
                else "Annual net turnover of your company worldwide (most recent financial year)"
            ),
            [
                ("under_2m", "Under €2 million"),
                ("2_10m", "€2-10 million"),
                ("10_50m", "€10-50 million"),
                ("50_80m", "€50-80 million"),
                ("80_150m", "€80-150 million"),
                ("150_450m", "€150-450 million"),
                ("450_900m", "€450-900 million"),
                ("900m_plus", "€900 million+"),
            ],
            help=_turnover_individual_help,
        ),
        _select(
            "balance_sheet_individual",
            lambda a: (
                "Balance sheet total attributable to EU operations (most recent financial year)"
                if _is_non_eu(a)
                else "Balance sheet total of your company (most recent financial year)"
            ),
            [
                ("under_2m", "Under €2 million"),
                ("2_5m", "€2-5 million"),
                ("5_25m", "€5-25 million"),
                ("25m_plus", "€25 million+"),
            ],
            help=(
                "Balance sheet total means the total value of the main asset categories (subscribed capital unpaid, "
                "formation expenses, fixed assets, current assets, and prepayments and accrued income) as defined in "
                "Article 3(11) of the EU Accounting Directive and specified in the standard balance sheet layouts."
            ),
        ),
    ),
)

SIZE_CONSOLIDATED = QuestionGroup(
    id="size_consolidated",
    title="Group Size (Consolidated Level)",
    show_if=lambda a: a.get("parent_status") == "yes",
    questions=(
        _select(
            "employees_consolidated",
            "Average number of employees in your group (consolidated basis)",
            [
                ("under_250", "Under 250"),
                ("250_499", "250-499"),
                ("500_999", "500-999"),
                ("1000_2999", "1,000-2,999"),
                ("3000_plus", "3,000+"),
            ],
            help=(
                EMPLOYEE_HELP + " Consolidated employee count includes all employees across all subsidiaries and "
                "entities within your group."
            ),
        ),
        _select(
            "turnover_consolidated",
            lambda a: (
                "Annual net turnover of your group in the EU (consolidated basis)"
                if _is_non_eu(a)
                else "Annual net turnover of your group worldwide (consolidated basis)"
            ),
            [
                ("under_50m", "Under €50 million"),
                ("50_450m", "€50-450 million"),
                ("450_900m", "€450-900 million"),
                ("900m_plus", "€900 million+"),
            ],
            help=_turnover_consolidated_help,
        ),
        _select(
            "balance_sheet_consolidated",
            lambda a: (
                "Balance sheet total of your group attributable to EU operations (consolidated basis)"
                if _is_non_eu(a)
                else "Balance sheet total of your group (consolidated basis)"
            ),
            [("under_25m", "Under €25 million"), ("25m_plus", "€25 million+")],
            help=(
                "Consolidated balance sheet total means the total value of the main asset categories (subscribed "
                "capital unpaid, formation expenses, fixed assets, current assets, and prepayments and accrued "
                "income) across all entities within your group, as defined in Article 3(11) of the EU Accounting "
                "Directive."
            ),
        ),
    ),
)


# ---------------------------------------------------------------------------
# 5. International operations (OECD)
# ---------------------------------------------------------------------------

OECD_ADHERENT_COUNTRIES = (
    "Argentina, Australia, Austria, Belgium, Bulgaria, Brazil, Canada, Chile, Colombia, Costa Rica, Czech Republic, "
    "Croatia, Denmark, Egypt, Estonia, Finland, France, Germany, Greece, Hungary, Iceland, Ireland, Israel, Italy, "
    "Japan, Jordan, Kazakhstan, Korea, Latvia, Lithuania, Luxembourg, Mexico, Morocco, Netherlands, New Zealand, "
    "Norway, Peru, Poland, Portugal, Romania, Slovak Republic, Slovenia, Spain, Sweden, Switzerland, Tunisia, "
    "Türkiye, Ukraine, United Kingdom, United States, and Uruguay"
)

INTERNATIONAL_OPERATIONS = QuestionGroup(
    id="international_operations",
    title="International Operations",
    questions=(
        _select(
            "multinational_enterprise",
            "Does your company qualify as a multinational enterprise based on its structure or activities?",
            [
                ("yes", "Yes - we have international structure or activities"),
                ("no", "No - we operate domestically only"),
            ],
            help=(
                "Under the OECD Guidelines for Multinational Enterprises on Responsible Business Conduct, you "
                "qualify as a multinational enterprise if your company has international structure or activities, "
                "such as: entities established in multiple countries that coordinate operations, cross-border "
                "operational coordination (shared management, technology, or business strategies), significant "
                "international suppliers/customers, or contractual arrangements like franchising, licensing, joint "
                "ventures, or distribution agreements across countries. Examples: A German company with a French "
                "subsidiary; a UK firm sourcing from Asian suppliers; an Italian company licensing technology "
                "internationally."
            ),
        ),
        _select(
            "oecd_adherent_countries",
            "Do you operate in or from countries that adhere to the OECD Guidelines for Multinational Enterprises "
            "on Responsible Business Conduct?",
            [
                ("yes", "Yes - we operate in/from adherent countries"),
                ("no", "No - we do not operate in/from adherent countries"),
            ],
            help=(
                "Countries that adhere to the OECD Guidelines for Multinational Enterprises on Responsible Business "
                f"Conduct include: {OECD_ADHERENT_COUNTRIES}."
            ),
            condition=lambda a: a.get("multinational_enterprise") == "yes",
        ),
    ),
)


# ---------------------------------------------------------------------------
# 6. Article 40a (non-EU only)
# ---------------------------------------------------------------------------

def _reached_article40a_presence(answers: Answers) -> bool:
    return answers.get("eu_securities_trading") == "no" and answers.get("eu_turnover_threshold") == "both_over_150m"


def _asks_subsidiary(answers: Answers) -> bool:
    return _reached_article40a_presence(answers) and answers.get("eu_corporate_presence") in (
        "subsidiary_only",
        "both_subsidiary_branch",
    )


def _asks_branch(answers: Answers) -> bool:
    if not _reached_article40a_presence(answers):
        return False
    presence = answers.get("eu_corporate_presence")
    if presence == "branch_only":
        return True
    # Branch only matters when no subsidiary qualifies.
    return presence == "both_subsidiary_branch" and answers.get("eu_subsidiary_qualification") in (
        "other_sme",
        "micro_undertaking",
        "no_subsidiary",
    )


NON_EU_CSRD_SCOPE = QuestionGroup(
    id="non_eu_csrd_scope",
    title="CSRD Scope Assessment (Non-EU Companies)",
    show_if=_is_non_eu,
    questions=(
        _select(
            "eu_securities_trading",
            "Are your company's securities admitted to trading on any EU regulated market?",
            [
                ("yes", "Yes - admitted to trading on EU regulated market"),
                ("no", "No - not admitted to trading on EU regulated market"),
            ],
            help=(
                "Under CSRD Article 40a, third-country undertakings whose securities are admitted to trading on EU "
                "regulated markets are directly subject to CSRD requirements, regardless of other criteria. This "
                "includes stock exchanges in any EU Member State."
            ),
        ),
        _select(
            "eu_turnover_threshold",
            "What was your company's net turnover generated in the EU in each of the last two consecutive "
            "financial years?",
            [
                ("both_over_150m", "Both years: over €150 million"),
                ("one_over_150m", "One year over €150 million, one year under €150 million"),
                ("both_under_150m", "Both years: €150 million or under"),
            ],
            help=(
                "Under CSRD Article 40a, third-country undertakings must generate net turnover in the EU exceeding "
                "€150 million in each of the last two consecutive financial years to potentially fall within scope "
                "(in addition to having qualifying EU subsidiaries or branches)."
            ),
            condition=lambda a: a.get("eu_securities_trading") == "no",
        ),
        _select(
            "eu_corporate_presence",
            "What type of corporate presence does your company have in the EU?",
            [
                ("subsidiary_only", "EU subsidiary only"),
                ("branch_only", "EU branch only"),
                ("both_subsidiary_branch", "Both EU subsidiary and branch"),
                ("no_presence", "No EU corporate presence"),
            ],
            help=(
                "Third-country undertakings with EU turnover >€150M must have either qualifying EU subsidiaries or "
                "branches to fall within CSRD scope."
            ),
            condition=_reached_article40a_presence,
        ),
        _select(
            "eu_subsidiary_qualification",
            "Does your company have any EU subsidiary that qualifies under Article 40a?",
            [
                ("large_undertaking",
                 "Yes - Large undertaking (meets 2+ criteria: 250+ employees, €50M+ turnover, €25M+ balance sheet)"),
                ("listed_sme",
                 "Yes - Listed SME (securities admitted to trading on EU regulated market, not micro-undertaking)"),
                ("other_sme", "No - Only other SME (not listed, not micro-undertaking)"),
                ("micro_undertaking", "No - Only micro-undertaking"),
                ("no_subsidiary", "No - No EU subsidiary"),
            ],
            help=(
                "Under CSRD Article 40a, qualifying EU subsidiaries must be either: (1) large undertakings, or (2) "
                "small and medium-sized undertakings (excluding micro-undertakings) that are public-interest "
                "entities as defined in point (a) of Article 2(1) - meaning their securities are admitted to "
                'trading on EU regulated markets. If you have multiple EU subsidiaries, answer "Yes" if ANY '
                "subsidiary qualifies."
            ),
            condition=_asks_subsidiary,
        ),
        _select(
            "eu_branch_turnover",
            "What is your EU branch's net turnover generated in the EU in the preceding financial year?",
            [("over_40m", "Over €40 million"), ("under_40m", "€40 million or under")],
            help=(
                "Under CSRD Article 40a, EU branches are only relevant when there is no qualifying EU subsidiary. "
                "Branches must generate net turnover in the EU exceeding €40 million in the preceding financial "
                "year. This question only appears if you have no qualifying subsidiary."
            ),
            condition=_asks_branch,
        ),
    ),
)


# ---------------------------------------------------------------------------
# 7. Business model (franchising / licensing)
# ---------------------------------------------------------------------------

def _meets_franchising_criteria(answers: Answers) -> bool:
    return (
        answers.get("has_franchising_licensing") == "yes"
        and answers.get("franchising_licensing") == "yes_meets_criteria"
    )


BUSINESS_MODEL = QuestionGroup(
    id="business_model",
    title="Business Model Specifics",
    questions=(
        _select(
            "has_franchising_licensing",
            "Does your company have any franchising or licensing agreements?",
            [
                ("yes", "Yes - we have franchising or licensing agreements"),
                ("no", "No - we do not have franchising or licensing agreements"),
            ],
            help=(
                "This includes any agreements where you grant rights to use your brand, business methods, "
                "technology, or intellectual property to other parties, or where you operate under "
                "franchise/licensing arrangements from others."
            ),
        ),
        _select(
            "franchising_licensing",
            "Do your franchising or licensing agreements in the EU meet ALL of the following CSDDD criteria: "
            "(a) agreements with independent third parties, (b) in return for royalties, (c) ensuring common "
            "identity and business concept, (d) requiring uniform business methods?",
            [
                ("yes_meets_criteria", "Yes - meets all CSDDD criteria"),
                ("yes_not_criteria", "Yes - but does not meet all CSDDD criteria"),
                ("no", "No EU franchising/licensing agreements"),
            ],
            help=(
                "Under the CSDDD (Article 2(1)(c) and (2)(c)), relevant franchising/licensing agreements must be "
                "with independent third parties, in return for royalties, ensuring common identity and business "
                "concept, and requiring uniform business methods. The CSDDD covers such relationships because they "
                "create value chain connections that may involve human rights or environmental risks."
            ),
            condition=lambda a: a.get("has_franchising_licensing") == "yes",
        ),
        _select(
            "franchise_royalties",
            "Do these franchising/licensing agreements generate royalties exceeding €22.5 million in the last "
            "financial year for which annual financial statements have been or should have been adopted?",
            [("yes", "Yes - €22.5 million+"), ("no", "No - under €22.5 million")],
            help=(
                "For EU companies, CSDDD requires royalties to exceed €22.5 million in the last financial year for "
                "which annual financial statements have been or should have been adopted."
            ),
            condition=lambda a: _meets_franchising_criteria(a) and _is_eu(a),
        ),
        _select(
            "franchise_eu_royalties",
            "Do these EU franchising/licensing agreements generate royalties exceeding €22.5 million in the Union "
            "in the financial year preceding the last financial year?",
            [("yes", "Yes - €22.5 million+ EU royalties"), ("no", "No - under €22.5 million EU royalties")],
            help=(
                "For non-EU companies, CSDDD requires royalties exceeding €22.5 million in the Union in the "
                "financial year preceding the last financial year."
            ),
            condition=lambda a: _meets_franchising_criteria(a) and _is_non_eu(a),
        ),
    ),
)


# ---------------------------------------------------------------------------
# 8-10. Indirect impact, temporal verification, timeline
# ---------------------------------------------------------------------------

INDIRECT_APPLICABILITY = QuestionGroup(
    id="indirect_applicability",
    title="Indirect Impact Assessment",
    show_if=_not_directly_in_scope,
    questions=(
        _select(
            "indirect_business_relationships",
            "Do you have significant business relationships (as supplier, customer, partner, or investee) with "
            "large companies or multinational enterprises that may be subject to EU sustainability frameworks?",
            [
                ("yes", "Yes - we have relationships with large companies subject to EU frameworks"),
                ("no", "No - we do not have such relationships"),
                ("unsure", "Unsure - requires further analysis"),
            ],
            help=(
                "Based on your answers given, your company is likely not in scope of the CSRD and CSDDD. However, "
                "even where your company is not in scope, you may be indirectly affected through requirements that "
                "demand engagement with business partners. Large companies subject to these frameworks must request "
                "sustainability information, due diligence documentation, or compliance commitments from their "
                "suppliers, customers, and partners as part of their own compliance. This includes relationships "
                "with: companies subject to CSDDD (1,000+ employees and €450M+ turnover, ultimate parent companies "
                "whose groups meet these thresholds at the consolidated level, or companies with qualifying "
                "franchising/licensing agreements generating €22.5M+ royalties), companies subject to CSRD (large "
                "EU companies meeting 2+ criteria: 250+ employees, €50M+ turnover, €25M+ balance sheet), major "
                "multinational corporations, listed companies, or companies in specifically regulated industries."
            ),
        ),
    ),
)

TEMPORAL_VERIFICATION = QuestionGroup(
    id="temporal_verification",
    title="Temporal Requirements Verification",
    show_if=needs_temporal_verification,
    questions=(
        _select(
            "consecutive_years_csddd",
            _consecutive_years_label,
            [
                ("yes", "Yes - met these specific thresholds for two consecutive years"),
                ("no", "No - only met thresholds in one year or neither year"),
                ("uncertain", "Uncertain/requires further analysis"),
            ],
            help=(
                "CSDDD obligations only begin after a company meets the specific size and turnover thresholds for "
                'two consecutive financial years. This "consecutive years" requirement prevents temporary business '
                "fluctuations (like one-time contracts, acquisitions, or seasonal spikes) from triggering permanent "
                "legal compliance obligations. The law recognizes that sustainability due diligence requirements "
                "should only apply to companies with sustained, demonstrable scale rather than temporary threshold "
                "breaches."
            ),
            condition=needs_csddd_temporal,
        ),
    ),
)

TIMELINE = QuestionGroup(
    id="timeline",
    title="Timeline Assessment",
    questions=(
        _select(
            "future_thresholds",
            "Based on projected growth, do you expect to meet higher thresholds in consecutive financial years?",
            [
                ("yes", "Yes - significant growth expected"),
                ("maybe", "Possibly - moderate growth expected"),
                ("no", "No - stable size expected"),
            ],
            help=(
                "Many EU laws require companies to meet size thresholds for two consecutive financial years before "
                "obligations begin. This question helps assess whether you should prepare for future compliance "
                "even if not currently in scope."
            ),
        ),
        _select(
            "growth_metrics",
            "If growth is expected, which metrics will likely increase?",
            [
                ("employees", "Employee count"),
                ("turnover", "Turnover"),
                ("balance_sheet", "Balance sheet total"),
                ("multiple", "Multiple metrics"),
            ],
            help=(
                "Understanding which specific thresholds might be crossed helps determine when obligations might "
                "trigger and what preparation is needed."
            ),
            condition=lambda a: a.get("future_thresholds") in ("yes", "maybe"),
        ),
    ),
)


QUESTIONNAIRE: tuple[QuestionGroup, ...] = (
    ENTITY_BASICS,
    GROUP_STRUCTURE,
    SIZE_INDIVIDUAL,
    SIZE_CONSOLIDATED,
    INTERNATIONAL_OPERATIONS,
    NON_EU_CSRD_SCOPE,
    BUSINESS_MODEL,
    INDIRECT_APPLICABILITY,
    TEMPORAL_VERIFICATION,
    TIMELINE,
)

QUESTIONS_BY_KEY: dict[str, Question] = {q.key: q for step in QUESTIONNAIRE for q in step.questions}


# ---------------------------------------------------------------------------
# Navigation helpers
# ---------------------------------------------------------------------------

def visible_steps(answers: Answers) -> list[QuestionGroup]:
    steps = [step for step in QUESTIONNAIRE if step.is_visible(answers)]
    logger.debug("Visible steps: %s", [step.id for step in steps])
    return steps


def visible_questions(step: QuestionGroup, answers: Answers) -> list[Question]:
    return [q for q in step.questions if q.is_visible(answers)]


def missing_required(step: QuestionGroup, answers: Answers) -> list[str]:
    return [q.key for q in visible_questions(step, answers) if q.required and answers.get(q.key) is None]


def can_advance(step: QuestionGroup, answers: Answers) -> bool:
    return not missing_required(step, answers)


def resolve_step(step: QuestionGroup, answers: Answers) -> RenderedStep:
    """Render a step's visible questions with labels and help resolved against answers."""
    return RenderedStep(
        id=step.id,
        title=step.title,
        questions=[
            RenderedQuestion(
                key=q.key,
                label=q.label.render(answers),
                type=q.type,
                options=list(q.options),
                required=q.required,
                help=q.help.render(answers) if q.help is not None else None,
                answer=answers.get(q.key),
            )
            for q in visible_questions(step, answers)
        ],
    )
