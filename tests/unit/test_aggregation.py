"""Unit tests for cost aggregation"""

import math
import pytest
from bmc_finance.domain.aggregation import (
    aggregate,
    calculate_category_total,
    calculate_finance_totals,
    summarize_by_phase,
)
from bmc_finance.domain.categories import CostBucket
from bmc_finance.domain.exceptions import InvalidCostItemError, UnknownCategoryError
from bmc_finance.domain.investment import InvestmentCalculator
from bmc_finance.domain.models import CostItem, PhaseAssumption


def test_fixed_only_costs_totals():
    """Test leadership + technical costs with no variable costs"""
    items = [
        CostItem(label="CEO", amount=5000, category="leadership"),
        CostItem(label="Developer", amount=3000, category="technical"),
    ]

    totals = calculate_finance_totals(aggregate(items))

    assert totals.total == 8000
    assert totals.fixed == 8000
    assert totals.variable == 0
    assert totals.by_category["leadership"] == 5000
    assert totals.by_category["technical"] == 3000
    assert totals.by_category["marketing"] == 0


def test_aggregate_groups_fixed_and_variable(sample_items):
    """Test items land in fixed/variable buckets by category"""
    costs = aggregate(sample_items)

    assert set(costs.fixed) == {
        CostBucket.LEADERSHIP,
        CostBucket.TECHNICAL,
        CostBucket.CONTENT,
        CostBucket.MARKETING_SALES,
        CostBucket.OPERATIONS,
        CostBucket.INFRASTRUCTURE,
        CostBucket.OVERHEAD,
    }
    assert set(costs.variable) == {CostBucket.MARKETING}
    assert [i.label for i in costs.variable[CostBucket.MARKETING].items] == ["Paid ads"]
    # "marketing-sales" external label and "hosting" sub-category are mapped
    assert costs.fixed[CostBucket.MARKETING_SALES].total == 1500
    assert costs.fixed[CostBucket.INFRASTRUCTURE].total == 300


def test_totals_invariant(sample_items):
    """Test total == fixed + variable == sum(by_category)"""
    totals = calculate_finance_totals(aggregate(sample_items))

    assert totals.total == 14700
    assert totals.fixed == 13500
    assert totals.variable == 1200
    assert totals.total == totals.fixed + totals.variable
    assert totals.total == sum(totals.by_category.values())


def test_totals_invariant_with_fractional_amounts():
    """Test invariant holds for amounts that are not exactly representable"""
    items = [
        CostItem(label=f"item {i}", amount=0.1 * (i + 1), category=category)
        for i, category in enumerate(["leadership", "content", "overhead", "marketing", "technical"])
    ]

    totals = calculate_finance_totals(aggregate(items))

    assert totals.total == totals.fixed + totals.variable
    assert totals.total == pytest.approx(sum(totals.by_category.values()))
    assert totals.total == pytest.approx(1.5)


def test_aggregation_idempotent(sample_items):
    """Test aggregating the same list twice gives identical totals"""
    first = calculate_finance_totals(aggregate(sample_items))
    second = calculate_finance_totals(aggregate(list(sample_items)))

    assert first == second


def test_empty_items():
    """Test empty item list yields zero totals for every bucket"""
    costs = aggregate([])
    totals = calculate_finance_totals(costs)

    assert totals.total == 0
    assert len(totals.by_category) == len(CostBucket)
    assert all(amount == 0 for amount in totals.by_category.values())


def test_calculate_category_total_empty():
    """Test empty bucket sums to zero"""
    assert calculate_category_total([]) == 0


@pytest.mark.parametrize("amount", [-1, math.nan, math.inf, "100"])
def test_invalid_amount_rejected(amount):
    """Test negative, non-finite and non-numeric amounts fail fast"""
    items = [
        CostItem(label="CEO", amount=5000, category="leadership"),
        CostItem(label="Broken", amount=amount, category="technical"),
    ]

    with pytest.raises(InvalidCostItemError) as exc_info:
        aggregate(items)

    assert exc_info.value.label == "Broken"


def test_zero_amount_accepted():
    """Test zero-cost items are valid"""
    totals = calculate_finance_totals(aggregate([CostItem(label="Free tier", amount=0, category="hosting")]))
    assert totals.total == 0


def test_unknown_category_rejected():
    """Test items with unmapped categories are not dropped silently"""
    with pytest.raises(UnknownCategoryError) as exc_info:
        aggregate([CostItem(label="Mystery", amount=100, category="catering")])

    assert exc_info.value.category == "catering"


def test_summarize_by_phase():
    """Test phase costs scale the monthly base by months and cost scale"""
    items = [
        CostItem(label="CEO", amount=5000, category="leadership"),
        CostItem(label="Ads", amount=1000, category="marketing"),
    ]
    phases = [
        PhaseAssumption(name="launch", months=3),
        PhaseAssumption(name="scale", months=6, cost_scale=2.0),
    ]

    summary = summarize_by_phase(aggregate(items), phases)

    assert summary["launch"].monthly_total == 6000
    assert summary["launch"].total == 18000
    assert summary["scale"].by_category["marketing"] == 2000
    assert summary["scale"].monthly_total == 12000
    assert summary["scale"].total == 72000


def test_summarize_by_phase_default_phases(sample_items):
    """Test the default plan covers launch, growth and scale phases"""
    summary = summarize_by_phase(aggregate(sample_items), InvestmentCalculator().phases)

    assert list(summary) == ["launch", "growth", "scale"]
    assert summary["launch"].monthly_total == 14700
    assert summary["scale"].by_category["marketing"] == pytest.approx(1800)
    assert summary["scale"].months == 6
