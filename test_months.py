"""
Test untuk kosakata nama bulan dan penentuan bulan forecast
"""

import pytest

from utils.months import MONTH_NAMES, UNKNOWN_MONTH, calculate_forecast_month, lookup_month


@pytest.mark.parametrize("token,expected", [
    ("Januari", "Januari"),
    ("jan", "Januari"),
    ("  FEB ", "Februari"),
    ("Agustus", "Agustus"),
    ("agu", "Agustus"),
    ("Ags", "Agustus"),
    ("sept", "September"),
    ("Oct", "Oktober"),
    ("dec", "Desember"),
    ("Mei", "Mei"),
])
def test_lookup_month_variants(token, expected):
    assert lookup_month(token).name == expected


@pytest.mark.parametrize("token", ["", "   ", "Janu", "Total", "may", None, 1, 3.0])
def test_lookup_month_rejects_non_months(token):
    assert lookup_month(token) is None


def test_every_canonical_name_resolves_to_its_own_index():
    for i, name in enumerate(MONTH_NAMES):
        assert lookup_month(name).index == i


def test_forecast_month_is_cyclic():
    assert calculate_forecast_month("Desember") == "Januari"
    assert calculate_forecast_month("November") == "Desember"
    assert calculate_forecast_month("Maret") == "April"


def test_forecast_month_unknown_is_soft_failure():
    assert calculate_forecast_month("Bulan13") == UNKNOWN_MONTH
