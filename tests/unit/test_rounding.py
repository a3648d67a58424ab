"""Unit tests for rounding helpers"""

import pytest
from bmc_finance.utils.rounding import round_clients, round_currency, round_half_up


@pytest.mark.parametrize(
    "value, expected",
    [(222.16666, 222.17), (2.675, 2.68), (0.125, 0.13), (1.004, 1.0), (0, 0)],
)
def test_round_currency(value, expected):
    """Test currency rounds half up to 2 decimals"""
    assert round_currency(value) == expected


def test_round_half_up_differs_from_bankers_rounding():
    """Test halves round away from zero"""
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -3
    assert round(2.5) == 2


def test_round_clients():
    """Test client counts are whole numbers"""
    assert round_clients(12.5) == 13
    assert round_clients(12.49) == 12
    assert isinstance(round_clients(7.0), int)
