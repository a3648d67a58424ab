"""Unit tests for snapshot building and plan evaluation"""

import pytest
from bmc_finance.domain.exceptions import InvalidFinancialDataError
from bmc_finance.domain.investment import InvestmentCalculator
from bmc_finance.domain.models import CostItem, Unavailable, UnavailableReason
from bmc_finance.domain.projections import MonthlyProjection
from bmc_finance.domain.report import build_snapshot, evaluate_plan


def test_build_snapshot(sample_items, plans):
    """Test snapshot assembles costs, totals, revenue and investment"""
    snapshot = build_snapshot(sample_items, plans, "SAR", year1_target_clients=120)

    assert snapshot.currency == "SAR"
    assert snapshot.totals.total == 14700
    assert set(snapshot.costs.by_phase) == {"launch", "growth", "scale"}
    assert snapshot.costs.by_phase["scale"].monthly_total == pytest.approx(14700 * 1.5)
    assert snapshot.costs.by_phase["scale"].total == pytest.approx(14700 * 1.5 * 6)
    assert snapshot.revenue.year1_target_clients == 120
    assert snapshot.revenue.average_annual_price == pytest.approx(5874)
    assert snapshot.investment.total_min == pytest.approx(96150)
    assert snapshot.investment.currency == "SAR"


def test_build_snapshot_is_fresh(sample_items, plans):
    """Test equal inputs produce equal but independent snapshots"""
    first = build_snapshot(sample_items, plans, "SAR")
    second = build_snapshot(sample_items, plans, "SAR")

    assert first == second
    assert first is not second


def test_build_snapshot_custom_investment(sample_items, plans):
    """Test investment calculator override"""
    calculator = InvestmentCalculator(one_time_costs={}, setup_buffer=0.0)
    snapshot = build_snapshot(sample_items, plans, "SAR", investment_calculator=calculator)

    assert snapshot.investment.total_min == pytest.approx(3 * 14700 + 1.5 * 14700)
    assert snapshot.investment.total_max == snapshot.investment.total_min


def test_build_snapshot_invalid_item(plans):
    """Test invalid cost items surface as invalid financial data"""
    items = [CostItem(label="Refund", amount=-50, category="operations")]

    with pytest.raises(InvalidFinancialDataError):
        build_snapshot(items, plans, "SAR")


def test_evaluate_plan(sample_items, plans):
    """Test evaluation of a selected plan"""
    snapshot = build_snapshot(sample_items, plans, "SAR", year1_target_clients=120)

    evaluation = evaluate_plan(snapshot, "subscription-standard")

    assert evaluation.available
    assert evaluation.plan.key == "subscription-standard"
    # 14700 * 12 / 3999 = 44.11
    assert evaluation.break_even.clients_per_year == 45
    # 14700 / (3999 / 18) = 66.17
    assert evaluation.recognized_break_even_clients == 67
    assert isinstance(evaluation.projection, MonthlyProjection)
    assert list(evaluation.projection)[-1].clients == 120
    assert evaluation.unit_economics.cac == 10


def test_evaluate_plan_target_override(sample_items, plans):
    """Test explicit target and horizon override the year-1 defaults"""
    snapshot = build_snapshot(sample_items, plans, "SAR", year1_target_clients=120)

    evaluation = evaluate_plan(snapshot, "subscription-basic", target_clients=48, horizon_months=24)
    points = list(evaluation.projection)

    assert len(points) == 24
    assert points[-1].clients == 48


@pytest.mark.parametrize(
    "key, reason",
    [
        (None, UnavailableReason.NO_PLAN_SELECTED),
        ("", UnavailableReason.NO_PLAN_SELECTED),
        ("enterprise", UnavailableReason.PLAN_NOT_FOUND),
    ],
)
def test_evaluate_plan_without_valid_selection(sample_items, plans, key, reason):
    """Test no fallback to a default plan"""
    snapshot = build_snapshot(sample_items, plans, "SAR")

    evaluation = evaluate_plan(snapshot, key)

    assert not evaluation.available
    for result in (
        evaluation.plan,
        evaluation.break_even,
        evaluation.recognized_break_even_clients,
        evaluation.projection,
        evaluation.unit_economics,
    ):
        assert isinstance(result, Unavailable)
        assert result.reason is reason
