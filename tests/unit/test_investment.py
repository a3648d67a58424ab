"""Unit tests for the initial investment estimate"""

import pytest
from bmc_finance.domain.aggregation import aggregate
from bmc_finance.domain.investment import SETUP_PHASE, InvestmentCalculator
from bmc_finance.domain.models import CostItem, PhaseAssumption


def test_investment_without_costs():
    """Test empty cost base still needs the one-time setup costs"""
    result = InvestmentCalculator().calculate(aggregate([]))

    assert result.total_min == 30000
    assert result.total_max == 37500
    assert result.total_min <= result.total_max
    assert [row.phase for row in result.breakdown] == ["launch", "growth", SETUP_PHASE]


def test_investment_with_costs(sample_items):
    """Test runway phases fund full then half of the operating costs"""
    result = InvestmentCalculator().calculate(aggregate(sample_items), currency="SAR")
    amounts = {row.phase: row.amount for row in result.breakdown}

    assert amounts["launch"] == 3 * 14700
    assert amounts["growth"] == 3 * 14700 * 0.5
    assert amounts[SETUP_PHASE] == 30000
    assert result.total_min == pytest.approx(96150)
    assert result.total_max == pytest.approx(96150 * 1.25)
    assert result.currency == "SAR"
    assert all(row.currency == "SAR" for row in result.breakdown)


def test_investment_breakdown_sums_to_minimum(sample_items):
    """Test breakdown rows add up to the minimum estimate"""
    result = InvestmentCalculator().calculate(aggregate(sample_items))
    assert sum(row.amount for row in result.breakdown) == pytest.approx(result.total_min)


def test_investment_grows_with_costs():
    """Test higher monthly costs never lower the estimate"""
    calculator = InvestmentCalculator()
    low = calculator.calculate(aggregate([CostItem(label="Team", amount=1000, category="technical")]))
    high = calculator.calculate(aggregate([CostItem(label="Team", amount=5000, category="technical")]))

    assert high.total_min > low.total_min
    assert high.total_max > low.total_max


def test_investment_custom_assumptions():
    """Test phases, one-time costs and buffer are overridable"""
    calculator = InvestmentCalculator(
        phases=(PhaseAssumption(name="runway", months=6, cost_scale=1.5, funded_share=0.5),),
        one_time_costs={},
        setup_buffer=0.0,
    )

    result = calculator.calculate(aggregate([CostItem(label="Ops", amount=1000, category="operations")]))

    assert calculator.runway_months == 6
    assert calculator.one_time_total == 0
    assert [row.phase for row in result.breakdown] == ["runway"]
    assert result.total_min == 4500
    assert result.total_max == 4500


@pytest.mark.parametrize(
    "kwargs",
    [
        {"setup_buffer": -0.1},
        {"one_time_costs": {"legal": -1.0}},
        {"phases": (PhaseAssumption(name="bad", months=-1),)},
        {"phases": (PhaseAssumption(name="bad", months=3, funded_share=1.5),)},
    ],
)
def test_investment_rejects_invalid_assumptions(kwargs):
    """Test invalid assumptions fail at construction"""
    with pytest.raises(ValueError):
        InvestmentCalculator(**kwargs)


def test_revenue_funded_phase_not_in_investment(sample_items):
    """Test the scale phase is planned but adds nothing to the investment"""
    calculator = InvestmentCalculator()

    result = calculator.calculate(aggregate(sample_items))

    assert [phase.name for phase in calculator.phases] == ["launch", "growth", "scale"]
    assert calculator.runway_months == 6
    assert "scale" not in {row.phase for row in result.breakdown}
    assert result.total_min == pytest.approx(96150)
