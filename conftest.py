"""
Shared pytest fixtures for countryref tests.

Expected results in the tests can be checked against the fixture tables
in this file.
"""
from __future__ import annotations

import os
from typing import Dict, List

import pytest

from countryref.config import get_settings
from countryref.services.diagnostics import CollectingSink
from countryref.services.reference_data import ReferenceData, get_reference_data
from countryref.api import get_country_ref


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings and tables so env changes in a test take effect."""
    old_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("COUNTRYREF_"):
            del os.environ[key]
    get_settings.cache_clear()
    get_reference_data.cache_clear()
    get_country_ref.cache_clear()
    yield
    os.environ.clear()
    os.environ.update(old_env)
    get_settings.cache_clear()
    get_reference_data.cache_clear()
    get_country_ref.cache_clear()


# ============================================================================
# Data Fixtures
# ============================================================================

CURRENT: Dict[str, str] = {
    "FRA": "France",
    "DEU": "Germany",
    "USA": "United States",
    "GBR": "United Kingdom",
    "KOR": "South Korea",
    "PRK": "North Korea",
    "SAU": "Saudi Arabia",
    "RUS": "Russia",
    "CZE": "Czechia",
    "CIV": "Côte d'Ivoire",
}

CATEGORIES: Dict[str, List[str]] = {
    "AFRICA": ["CIV"],
    "AMERICAS": ["USA"],
    "ASIA": ["KOR", "PRK", "SAU"],
    "EUROPE": ["FRA", "DEU", "GBR", "CZE", "RUS"],
    "WESTERN_EUROPE": ["FRA", "DEU"],
    "NORTHERN_EUROPE": ["GBR"],
    "EASTERN_EUROPE": ["CZE", "RUS"],
    "EASTERN_ASIA": ["KOR", "PRK"],
    "WESTERN_ASIA": ["SAU"],
    "NORTHERN_AMERICA": ["USA"],
    "WESTERN_AFRICA": ["CIV"],
    "EU": ["FRA", "DEU", "CZE"],
    "CTR_LDR": ["USA", "DEU", "FRA", "GBR"],
    "CTR_FOL": [],
    "CTR": ["USA", "DEU", "FRA", "GBR"],
    "SMP_WLD": ["KOR"],
    "SMP_RLD": ["RUS", "SAU"],
    "SMP_FOL": ["CZE"],
    "SMP": ["KOR", "RUS", "SAU", "CZE"],
    "PERI": ["PRK", "CIV"],
    "HYD_EXP": ["SAU", "RUS"],
    "HYD_IMP": ["FRA", "DEU", "KOR"],
    "NRS_REN": ["SAU", "RUS", "CIV"],
}


@pytest.fixture
def reference_data() -> ReferenceData:
    """Small ReferenceData covering every tier and classification."""
    name_to_code = {name: code for code, name in CURRENT.items()}
    name_to_code.update({
        "Deutschland": "DEU",
        "Korea, Rep.": "KOR",
        "Korea, Dem. People's Rep.": "PRK",
        "Euro Area": "EMU",
        "Czechoslovakia": "CSK",
    })
    return ReferenceData.from_tables(
        name_to_code=name_to_code,
        code_to_name_current=CURRENT,
        code_to_name_special={"EMU": "Euro Area"},
        code_to_name_historical={"CSK": "Czechoslovakia"},
        category_to_codes=CATEGORIES,
        iso2_to_iso3={
            "FR": "FRA", "DE": "DEU", "US": "USA", "GB": "GBR", "UK": "GBR",
            "KR": "KOR", "KP": "PRK", "SA": "SAU", "RU": "RUS", "CZ": "CZE",
            "CI": "CIV", "CS": "CSK",
        },
        regions=["AFRICA", "AMERICAS", "ASIA", "EUROPE"],
        subregions=[
            "WESTERN_EUROPE", "NORTHERN_EUROPE", "EASTERN_EUROPE", "EASTERN_ASIA",
            "WESTERN_ASIA", "NORTHERN_AMERICA", "WESTERN_AFRICA",
        ],
    )


@pytest.fixture
def sink() -> CollectingSink:
    """Diagnostics sink that records events for assertions."""
    return CollectingSink()
