"""
Shared test fixtures for unit tests.
"""

import json
import os
import sys

# Ensure the backend directory is on the path so imports resolve correctly
# when pytest is run from the repo root or the backend directory.
_backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _backend_dir not in sys.path:
    sys.path.insert(0, _backend_dir)

import pytest


# ---------------------------------------------------------------------------
# Answer sets
# ---------------------------------------------------------------------------

# Large EU-listed non-financial company: CSRD Wave 1, Taxonomy in scope.
LISTED_EU_LARGE = {
    "jurisdiction": "eu",
    "undertaking_type": "non_financial",
    "non_financial_legal_form": "public_company",
    "listing_status": "listed_eu",
    "parent_status": "no",
    "subsidiary_status": "no",
    "employees_individual": "3000_plus",
    "turnover_individual": "900m_plus",
    "balance_sheet_individual": "25m_plus",
    "multinational_enterprise": "yes",
    "oecd_adherent_countries": "yes",
    "has_franchising_licensing": "no",
    "consecutive_years_csddd": "yes",
    "future_thresholds": "no",
}

# Small domestic EU company: only the UNGPs apply.
SMALL_EU = {
    "jurisdiction": "eu",
    "undertaking_type": "non_financial",
    "non_financial_legal_form": "limited_company",
    "listing_status": "not_listed",
    "public_interest": "no",
    "parent_status": "no",
    "subsidiary_status": "no",
    "employees_individual": "10_49",
    "turnover_individual": "2_10m",
    "balance_sheet_individual": "2_5m",
    "multinational_enterprise": "no",
    "has_franchising_licensing": "no",
    "indirect_business_relationships": "yes",
    "future_thresholds": "no",
}

# Non-EU company reaching CSRD through Article 40a via a large EU subsidiary.
NON_EU_ARTICLE_40A = {
    "jurisdiction": "non_eu",
    "undertaking_type": "non_financial",
    "non_financial_legal_form": "other_entity",
    "listing_status": "listed_non_eu",
    "parent_status": "yes",
    "subsidiary_status": "no",
    "employees_individual": "1000_2999",
    "turnover_individual": "150_450m",
    "balance_sheet_individual": "25m_plus",
    "employees_consolidated": "3000_plus",
    "turnover_consolidated": "50_450m",
    "balance_sheet_consolidated": "25m_plus",
    "multinational_enterprise": "yes",
    "oecd_adherent_countries": "yes",
    "eu_securities_trading": "no",
    "eu_turnover_threshold": "both_over_150m",
    "eu_corporate_presence": "subsidiary_only",
    "eu_subsidiary_qualification": "large_undertaking",
    "has_franchising_licensing": "no",
    "future_thresholds": "no",
}


@pytest.fixture
def listed_eu_large() -> dict:
    return dict(LISTED_EU_LARGE)


@pytest.fixture
def small_eu() -> dict:
    return dict(SMALL_EU)


@pytest.fixture
def non_eu_article_40a() -> dict:
    return dict(NON_EU_ARTICLE_40A)


@pytest.fixture
def answers_file(tmp_path):
    """Write an answer dict to a JSON file and return its path."""

    def _write(answers, name: str = "answers.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(answers), encoding="utf-8")
        return str(path)

    return _write
