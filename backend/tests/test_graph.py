"""
Tests for backend/graph.py: the full assessment pipeline.

Covers:
  - Reference scenarios (listed EU company, non-EU below Article 40a,
    CSDDD temporal gate, domestic OECD, ultimate-parent CSDDD Wave 1)
  - Determinism and Taxonomy/CSRD coupling
  - Node logs and pipeline trace
  - camelCase JSON record
"""

import pytest

from graph import assess, run_assessment
from schemas import FRAMEWORKS

from conftest import LISTED_EU_LARGE, NON_EU_ARTICLE_40A, SMALL_EU


class TestScenarios:
    def test_listed_eu_large_company(self):
        assessment = assess({
            "jurisdiction": "eu",
            "undertaking_type": "non_financial",
            "employees_individual": "3000_plus",
            "turnover_individual": "900m_plus",
            "balance_sheet_individual": "25m_plus",
            "listing_status": "listed_eu",
            "parent_status": "no",
            "subsidiary_status": "no",
        })
        assert assessment.csrd.in_scope
        assert assessment.csrd.wave == 1
        assert assessment.csrd.reporting_type == "individual"
        assert assessment.taxonomy.in_scope
        assert assessment.taxonomy.details.phase_in.type == "Non-financial undertaking"

    def test_non_eu_below_article_40a(self):
        assessment = assess({
            "jurisdiction": "non_eu",
            "eu_securities_trading": "no",
            "eu_turnover_threshold": "both_under_150m",
        })
        assert not assessment.csrd.in_scope
        assert not assessment.taxonomy.in_scope

    def test_csddd_consecutive_years_gate(self):
        assessment = assess({
            "jurisdiction": "eu",
            "employees_individual": "1000_2999",
            "turnover_individual": "450_900m",
            "consecutive_years_csddd": "no",
        })
        assert not assessment.csddd.in_scope

    def test_domestic_company_outside_oecd(self):
        assessment = assess({"multinational_enterprise": "no"})
        assert not assessment.oecd.in_scope
        assert "operates domestically only" in assessment.oecd.reason

    def test_ultimate_parent_csddd_wave_1(self):
        assessment = assess({
            "jurisdiction": "eu",
            "parent_status": "yes",
            "subsidiary_status": "no",
            "employees_consolidated": "3000_plus",
            "turnover_consolidated": "900m_plus",
            "consecutive_years_csddd": "yes",
        })
        assert assessment.csddd.in_scope
        assert assessment.csddd.wave == 1
        assert assessment.csddd.legal_basis == "Directive (EU) 2024/1760"
        assert "reportingType" not in assessment.to_json_dict()["csddd"]


class TestProperties:
    @pytest.mark.parametrize("answers", [LISTED_EU_LARGE, SMALL_EU, NON_EU_ARTICLE_40A, {}])
    def test_deterministic(self, answers):
        assert assess(answers) == assess(answers)

    @pytest.mark.parametrize("answers", [LISTED_EU_LARGE, SMALL_EU, NON_EU_ARTICLE_40A, {}])
    def test_taxonomy_implies_csrd(self, answers):
        assessment = assess(answers)
        if assessment.taxonomy.in_scope:
            assert assessment.csrd.in_scope

    def test_article_40a_has_no_taxonomy(self):
        assessment = assess(NON_EU_ARTICLE_40A)
        assert assessment.csrd.in_scope
        assert assessment.csrd.pathway == "third_country_article_40a"
        assert not assessment.taxonomy.in_scope

    def test_ungps_always_applies(self):
        assert assess({}).ungps.in_scope

    def test_empty_answers_never_raise(self):
        assessment = assess({})
        assert not any(assessment.get(name).in_scope for name in ("oecd", "csrd", "taxonomy", "csddd"))


class TestPipelineTrace:
    def test_every_node_traced_in_order(self):
        final_state = run_assessment(SMALL_EU)
        agents = [entry["agent"] for entry in final_state["pipeline_trace"]]
        assert agents == ["oecd", "csrd", "taxonomy", "csddd", "ungps", "future"]
        assert all(entry["ms"] >= 0 for entry in final_state["pipeline_trace"])

    def test_logs_record_verdicts(self):
        final_state = run_assessment(SMALL_EU)
        messages = [entry["msg"] for entry in final_state["logs"]]
        assert "csrd: not in scope" in messages
        assert "ungps: in scope" in messages

    def test_answers_left_untouched(self):
        answers = dict(SMALL_EU)
        run_assessment(answers)
        assert answers == SMALL_EU


class TestJsonRecord:
    def test_camel_case_keys(self):
        record = assess(LISTED_EU_LARGE).to_json_dict()
        assert set(record) == set(FRAMEWORKS)
        csrd = record["csrd"]
        assert csrd["inScope"] is True
        assert csrd["reportingType"] == "individual"
        assert csrd["legalBasis"].startswith("Article 19a")
        assert record["taxonomy"]["details"]["phaseIn"]["type"] == "Non-financial undertaking"
