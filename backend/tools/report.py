"""
Report summary builder: Assessment + answers → ReportSummary.

One FrameworkSummary card per framework (display name, description, status
label, bullets, exemption labels), followed by "Summary & Next Steps"
sections for whatever is in scope and a fixed disclaimer.
"""

from __future__ import annotations

import logging

from schemas import FRAMEWORKS, Answers, Assessment, AssessmentResult, FrameworkSummary, ReportSection, ReportSummary
from tools.explanation import exemption_label, explain, reporting_type_label
from tools.labels import LAW_DESCRIPTIONS, LAW_DETAILS, LAW_NAMES
from tools.thresholds import is_ultimate_parent

logger = logging.getLogger("assessment")

APPLICABLE = "✓ APPLICABLE"
NOT_APPLICABLE = "✗ NOT APPLICABLE"
NFRD_TRANSITION_NOTE = "NFRD transition: Continue current non-financial reporting until FY 2028"
SPECIALIZED_TIMING_NOTE = "Specialized financial entity timing applies"

CSRD_NEXT_STEP = (
    "{timeline} - You will need to implement ESRS (European Sustainability Reporting Standards) and ensure "
    "external assurance of your sustainability statement."
)
TAXONOMY_NEXT_STEP = "{timeline} - You must disclose taxonomy-aligned proportions of your economic activities."
CSDDD_NEXT_STEP = (
    "{timeline} - You will need to implement human rights and environmental due diligence processes across your "
    "value chain and publish annual due diligence statements."
)
HOLDING_COMPANY_NOTE = (
    "Ultimate Parent Company Status: Your company meets the definition of an ultimate parent company under "
    "Article 3(1)(r) CSDDD, as it controls other entities but is not itself controlled by another entity."
)
VOLUNTARY_FRAMEWORKS = (
    "While not legally binding, implementing the UN Guiding Principles and OECD Guidelines demonstrates best "
    "practice, helps addressing sustainability risk and prepares your organisation for meaningful legal "
    "compliance with EU sustainability frameworks."
)
CSDDD_INDIRECT_EFFECTS = (
    "CSDDD Indirect Effects to Your Business: Large companies subject to CSDDD must conduct due diligence across "
    "their chain of activities. This may impact your business through various appropriate measures including: "
    "requests for supplier assessments, contractual clauses requiring human rights and environmental compliance, "
    "audits of your operations, potential exclusion from chains of activities if adequate policies are not "
    "demonstrated, as well as supportive measures such as financial support, targeted assistance for SMEs, and "
    "collaboration with other entities. A chain of activities covers upstream business partners involved in "
    "production and immediate downstream partners concerned with distribution, transport and storage "
    "(Art. 3(1)(g) CSDDD)."
)
CSRD_INDIRECT_EFFECTS = (
    "CSRD Indirect Effects to Your Business: Companies subject to CSRD must report detailed sustainability "
    "information including chain of activities data, which may result in: data requests about your environmental "
    "and social performance, requirements to complete sustainability questionnaires, demands to obtain "
    "sustainability certifications, and increased focus on your climate and sustainability metrics as part of "
    "their reporting obligations."
)
DISCLAIMER = (
    "This pre-assessment is based on the information provided and current legal frameworks. It is not a "
    "substitute for assessing the specific case of your company. Please note that regulations may change, and "
    "specific legal advice should be sought for implementation planning."
)


def status_label(result: AssessmentResult) -> str:
    label = APPLICABLE if result.in_scope else NOT_APPLICABLE
    if result.wave is not None:
        label += f" (Wave {result.wave})"
    return label


def _note(result: AssessmentResult) -> str | None:
    notes = [text for text in (
        result.note,
        NFRD_TRANSITION_NOTE if result.nfrd_transition else None,
        SPECIALIZED_TIMING_NOTE if result.specialized_timing else None,
        result.consecutive_years_note,
    ) if text]
    return " ".join(notes) if notes else None


def summarize_framework(framework: str, result: AssessmentResult) -> FrameworkSummary:
    return FrameworkSummary(
        framework=framework,
        name=LAW_NAMES[framework],
        description=LAW_DESCRIPTIONS[framework],
        details=LAW_DETAILS[framework],
        in_scope=result.in_scope,
        status_label=status_label(result),
        reason=result.reason,
        bullets=explain(result),
        timeline=result.timeline or None,
        legal_basis=result.legal_basis,
        reporting_type_label=reporting_type_label(result.reporting_type),
        automatic_exemption_labels=[exemption_label(code) for code in result.automatic_exemptions],
        possible_exemption_labels=[exemption_label(code) for code in result.possible_exemptions],
        future_considerations=result.future_considerations,
        note=_note(result),
    )


def _next_step_sections(assessment: Assessment, answers: Answers) -> list[ReportSection]:
    sections: list[ReportSection] = []

    csrd = assessment.csrd
    if csrd.in_scope:
        paragraphs = [CSRD_NEXT_STEP.format(timeline=csrd.timeline)]
        if csrd.legal_basis:
            paragraphs.append(f"Legal Basis: {csrd.legal_basis}")
        if csrd.reporting_type:
            paragraphs.append(f"Reporting Type: {reporting_type_label(csrd.reporting_type)}")
        sections.append(ReportSection(title="CSRD Compliance Timeline", paragraphs=paragraphs))

    taxonomy = assessment.taxonomy
    if taxonomy.in_scope:
        paragraphs = [TAXONOMY_NEXT_STEP.format(timeline=taxonomy.timeline)]
        if taxonomy.legal_basis:
            paragraphs.append(f"Legal Basis: {taxonomy.legal_basis}")
        sections.append(ReportSection(title="EU Taxonomy Disclosure Requirements", paragraphs=paragraphs))

    csddd = assessment.csddd
    if csddd.in_scope:
        paragraphs = [CSDDD_NEXT_STEP.format(timeline=csddd.timeline)]
        if csddd.legal_basis:
            paragraphs.append(f"Legal Basis: {csddd.legal_basis}")
        if is_ultimate_parent(answers):
            paragraphs.append(HOLDING_COMPANY_NOTE)
        sections.append(ReportSection(title="CSDDD Due Diligence Requirements", paragraphs=paragraphs))

    if assessment.ungps.in_scope or assessment.oecd.in_scope:
        sections.append(ReportSection(title="Voluntary Frameworks", paragraphs=[VOLUNTARY_FRAMEWORKS]))

    if answers.get("indirect_business_relationships") == "yes":
        sections.append(ReportSection(
            title="Potential Indirect Impact via Business Relationships",
            paragraphs=[CSDDD_INDIRECT_EFFECTS, CSRD_INDIRECT_EFFECTS],
        ))

    return sections


def build_report(assessment: Assessment, answers: Answers) -> ReportSummary:
    """Presentation summary for a completed assessment."""
    frameworks = [summarize_framework(name, assessment.get(name)) for name in FRAMEWORKS]
    sections = _next_step_sections(assessment, answers)
    logger.debug("Report built: %d framework cards, %d sections", len(frameworks), len(sections))
    return ReportSummary(frameworks=frameworks, sections=sections, disclaimer=DISCLAIMER)
