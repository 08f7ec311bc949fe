"""
Static label tables and framework knowledge for the questionnaire.

Pure data: bracket-code → human label mappings used when building findings
and reports, plus the fixed EU Taxonomy KPI / objective lists.
"""

from __future__ import annotations

NOT_SPECIFIED = "Not specified"


# ---------------------------------------------------------------------------
# 1. Size brackets
# ---------------------------------------------------------------------------

EMPLOYEE_LABELS: dict[str, str] = {
    "under_10": "Under 10",
    "10_49": "10-49",
    "50_249": "50-249",
    "250_499": "250-499",
    "500_999": "500-999",
    "1000_2999": "1,000-2,999",
    "3000_plus": "3,000+",
    "under_250": "Under 250",
}

TURNOVER_LABELS: dict[str, str] = {
    "under_2m": "Under €2M",
    "2_10m": "€2-10M",
    "10_50m": "€10-50M",
    "50_80m": "€50-80M",
    "80_150m": "€80-150M",
    "150_450m": "€150-450M",
    "450_900m": "€450-900M",
    "900m_plus": "€900M+",
    "under_50m": "Under €50M",
    "50_450m": "€50-450M",
}

BALANCE_SHEET_LABELS: dict[str, str] = {
    "under_2m": "Under €2M",
    "2_5m": "€2-5M",
    "5_25m": "€5-25M",
    "25m_plus": "€25M+",
    "under_25m": "Under €25M",
}


# ---------------------------------------------------------------------------
# 2. Article 40a answers
# ---------------------------------------------------------------------------

EU_TURNOVER_THRESHOLD_LABELS: dict[str, str] = {
    "both_over_150m": "Both years over €150M",
    "one_over_150m": "One year over €150M",
    "both_under_150m": "Both years €150M or under",
}

EU_PRESENCE_LABELS: dict[str, str] = {
    "subsidiary_only": "EU subsidiary only",
    "branch_only": "EU branch only",
    "both_subsidiary_branch": "EU subsidiary and branch",
    "no_presence": "No EU corporate presence",
}

EU_SUBSIDIARY_LABELS: dict[str, str] = {
    "large_undertaking": "Large undertaking",
    "listed_sme": "Listed SME",
    "other_sme": "Other SME (not qualifying)",
    "micro_undertaking": "Micro-undertaking (not qualifying)",
    "no_subsidiary": "None",
}

EU_BRANCH_LABELS: dict[str, str] = {
    "over_40m": "Over €40M (qualifying)",
    "under_40m": "€40M or under (not qualifying)",
}


# ---------------------------------------------------------------------------
# 3. Framework names and descriptions
# ---------------------------------------------------------------------------

LAW_NAMES: dict[str, str] = {
    "ungps": "UN Guiding Principles",
    "oecd": "OECD Guidelines",
    "csrd": "CSRD/ESRS",
    "taxonomy": "EU Taxonomy",
    "csddd": "CSDDD",
}

LAW_DESCRIPTIONS: dict[str, str] = {
    "ungps": "International framework for business responsibility to respect human rights.",
    "oecd": "Guidelines for responsible business conduct by multinational enterprises.",
    "csrd": "EU directive requiring detailed sustainability reporting and third-party assurance.",
    "taxonomy": "EU classification system defining environmentally sustainable economic activities.",
    "csddd": "EU directive mandating human rights and environmental due diligence across value chains.",
}

LAW_DETAILS: dict[str, str] = {
    "ungps": (
        "The UN Guiding Principles on Business and Human Rights establish that all businesses have a "
        "responsibility to respect human rights. This includes conducting human rights due diligence to "
        "identify, prevent, and mitigate adverse impacts, and providing access to remedy when harm occurs. "
        "The principles apply regardless of company size, sector, operational context, ownership, or structure."
    ),
    "oecd": (
        "The OECD Guidelines for Multinational Enterprises provide recommendations for responsible business "
        "conduct. They cover human rights, employment relations, environment, bribery, consumer interests, and "
        "other areas. While voluntary, they represent the most comprehensive international framework for "
        "corporate responsibility and are backed by a unique grievance mechanism."
    ),
    "csrd": (
        "The Corporate Sustainability Reporting Directive requires companies to disclose information about their "
        "impact on people and the environment, and how sustainability matters affect their business. Reports must "
        "follow the European Sustainability Reporting Standards (ESRS) and undergo mandatory third-party assurance."
    ),
    "taxonomy": (
        "The EU Taxonomy Regulation establishes criteria for determining whether economic activities qualify as "
        "environmentally sustainable. Companies subject to CSRD must disclose the proportion of their activities "
        "that align with taxonomy criteria."
    ),
    "csddd": (
        "The Corporate Sustainability Due Diligence Directive requires companies to identify, prevent, mitigate, "
        "and account for negative human rights and environmental impacts in their operations and value chains. "
        "This includes establishing due diligence processes, engaging with stakeholders, and providing access "
        "to remedy."
    ),
}


# ---------------------------------------------------------------------------
# 4. Exemptions and reporting types
# ---------------------------------------------------------------------------

EXEMPTION_LABELS: dict[str, str] = {
    "individual_reporting": "Individual sustainability reporting",
    "subsidiary_exemption_19a9": "Subsidiary exemption (Art. 19a(9))",
    "subsidiary_exemption_29a8": "Subsidiary exemption (Art. 29a(8))",
    "opt_out_fy2028_2029": "Opt-out for FY 2028-2029",
    "third_country_consolidated_alternative": "Third-country consolidated alternative",
}

REPORTING_TYPE_LABELS: dict[str, str] = {
    "consolidated": "Consolidated Sustainability Statement (group-level reporting)",
    "individual": "Individual Sustainability Statement (entity-level reporting)",
    "third_country_group_level": "Group-level Sustainability Report published by EU subsidiary or branch",
}

SPECIALIZED_FINANCIAL_LABELS: dict[str, str] = {
    "snci": "small and non-complex institution",
    "captive_insurance": "captive insurance undertaking",
}


# ---------------------------------------------------------------------------
# 5. EU Taxonomy knowledge
# ---------------------------------------------------------------------------

TAXONOMY_OBJECTIVES: tuple[str, ...] = (
    "Climate change mitigation",
    "Climate change adaptation",
    "Sustainable use and protection of water and marine resources",
    "Transition to a circular economy",
    "Pollution prevention and control",
    "Protection and restoration of biodiversity and ecosystems",
)

TAXONOMY_KPIS: tuple[str, ...] = ("Turnover", "CapEx", "OpEx")


# ---------------------------------------------------------------------------
# 6. Lookups
# ---------------------------------------------------------------------------


def get_employee_label(code: str | None) -> str:
    return EMPLOYEE_LABELS.get(code or "", NOT_SPECIFIED)


def get_turnover_label(code: str | None) -> str:
    return TURNOVER_LABELS.get(code or "", NOT_SPECIFIED)


def get_balance_sheet_label(code: str | None) -> str:
    return BALANCE_SHEET_LABELS.get(code or "", NOT_SPECIFIED)


def get_label(table: dict[str, str], code: str | None, default: str = NOT_SPECIFIED) -> str:
    """Generic lookup used for the Article 40a and exemption tables."""
    return table.get(code or "", default)
