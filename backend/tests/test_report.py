"""
Tests for backend/tools/report.py.
"""

from graph import assess
from tools.report import (
    DISCLAIMER,
    HOLDING_COMPANY_NOTE,
    NFRD_TRANSITION_NOTE,
    VOLUNTARY_FRAMEWORKS,
    build_report,
    status_label,
)

from conftest import LISTED_EU_LARGE, SMALL_EU


def _sections(report) -> dict:
    return {section.title: section for section in report.sections}


class TestFrameworkCards:
    def test_one_card_per_framework(self):
        report = build_report(assess(LISTED_EU_LARGE), LISTED_EU_LARGE)
        assert [card.framework for card in report.frameworks] == ["ungps", "oecd", "csrd", "taxonomy", "csddd"]
        assert report.disclaimer == DISCLAIMER

    def test_status_label_with_wave(self):
        assessment = assess(LISTED_EU_LARGE)
        assert status_label(assessment.csrd) == "✓ APPLICABLE (Wave 1)"
        assert status_label(assess(SMALL_EU).csrd) == "✗ NOT APPLICABLE"

    def test_csrd_card(self):
        report = build_report(assess(LISTED_EU_LARGE), LISTED_EU_LARGE)
        csrd = report.frameworks[2]
        assert csrd.name == "CSRD/ESRS"
        assert csrd.reporting_type_label == "Individual Sustainability Statement (entity-level reporting)"

    def test_not_in_scope_card_has_bullets(self):
        report = build_report(assess(SMALL_EU), SMALL_EU)
        csddd = report.frameworks[4]
        assert not csddd.in_scope
        assert any(b.label == "Employees" and b.status == "not_met" for b in csddd.bullets)

    def test_nfrd_transition_note(self):
        answers = {**LISTED_EU_LARGE, "undertaking_type": "financial", "financial_type": "snci"}
        report = build_report(assess(answers), answers)
        assert NFRD_TRANSITION_NOTE in report.frameworks[2].note


class TestNextSteps:
    def test_in_scope_sections(self):
        report = build_report(assess(LISTED_EU_LARGE), LISTED_EU_LARGE)
        sections = _sections(report)
        assert "CSRD Compliance Timeline" in sections
        assert "EU Taxonomy Disclosure Requirements" in sections
        assert "CSDDD Due Diligence Requirements" in sections
        assert sections["Voluntary Frameworks"].paragraphs == [VOLUNTARY_FRAMEWORKS]
        assert sections["CSRD Compliance Timeline"].paragraphs[0].startswith("Wave 1: Reporting started in 2025")

    def test_holding_company_note_for_ultimate_parent(self):
        answers = {**LISTED_EU_LARGE, "parent_status": "yes"}
        report = build_report(assess(answers), answers)
        assert HOLDING_COMPANY_NOTE in _sections(report)["CSDDD Due Diligence Requirements"].paragraphs

    def test_no_holding_company_note_without_subsidiaries(self):
        report = build_report(assess(LISTED_EU_LARGE), LISTED_EU_LARGE)
        assert HOLDING_COMPANY_NOTE not in _sections(report)["CSDDD Due Diligence Requirements"].paragraphs

    def test_indirect_impact_section(self):
        report = build_report(assess(SMALL_EU), SMALL_EU)
        sections = _sections(report)
        assert "CSRD Compliance Timeline" not in sections
        indirect = sections["Potential Indirect Impact via Business Relationships"]
        assert len(indirect.paragraphs) == 2
