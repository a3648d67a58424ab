"""Cost aggregation - groups cost items into buckets and derives totals"""

import math
from typing import Dict, Iterable, List, Sequence

from bmc_finance.domain.categories import CostBucket, fixed_buckets, resolve_bucket, variable_buckets
from bmc_finance.domain.exceptions import InvalidCostItemError
from bmc_finance.domain.models import (
    CostCategoryBucket,
    CostItem,
    CostStructure,
    FinanceTotals,
    PhaseAssumption,
    PhaseCosts,
)


def validate_amount(item: CostItem) -> None:
    """
    Reject amounts that would corrupt a financial total.

    Raises:
        InvalidCostItemError: Amount is negative, NaN, infinite or not a number
    """
    amount = item.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidCostItemError(item.label, amount)
    if not math.isfinite(amount) or amount < 0:
        raise InvalidCostItemError(item.label, amount)


def calculate_category_total(items: Iterable[CostItem]) -> float:
    """Sum item amounts for a bucket (empty bucket -> 0)"""
    return sum(item.amount for item in items)


def aggregate(items: Sequence[CostItem]) -> CostStructure:
    """
    Group active cost items into the fixed/variable bucket structure.

    Every known bucket is present in the result, empty ones included.
    Items keep their input order inside each bucket.

    Raises:
        InvalidCostItemError: An item has a negative or non-finite amount
        UnknownCategoryError: An item's category maps to no bucket
    """
    grouped: Dict[CostBucket, List[CostItem]] = {bucket: [] for bucket in CostBucket}

    for item in items:
        validate_amount(item)
        grouped[resolve_bucket(item.category)].append(item)

    fixed = {b: CostCategoryBucket(key=b, items=tuple(grouped[b])) for b in fixed_buckets()}
    variable = {b: CostCategoryBucket(key=b, items=tuple(grouped[b])) for b in variable_buckets()}

    return CostStructure(fixed=fixed, variable=variable)


def calculate_finance_totals(costs: CostStructure) -> FinanceTotals:
    """
    Derive monthly totals from bucket items, never from stored totals.

    Invariant: total == fixed + variable == sum(by_category.values())
    """
    by_category: Dict[str, float] = {}
    fixed_total = 0.0
    variable_total = 0.0

    for bucket in costs.fixed.values():
        amount = calculate_category_total(bucket.items)
        by_category[bucket.key.value] = amount
        fixed_total += amount

    for bucket in costs.variable.values():
        amount = calculate_category_total(bucket.items)
        by_category[bucket.key.value] = amount
        variable_total += amount

    total = fixed_total + variable_total

    return FinanceTotals(
        total=total,
        fixed=fixed_total,
        variable=variable_total,
        by_category=by_category,
    )


def summarize_by_phase(costs: CostStructure, phases: Sequence[PhaseAssumption]) -> Dict[str, PhaseCosts]:
    """
    Project the monthly cost base onto business phases.

    Each phase scales the monthly base by its own factor and runs for its
    configured number of months.
    """
    totals = calculate_finance_totals(costs)
    summary: Dict[str, PhaseCosts] = {}

    for phase in phases:
        by_category = {key: amount * phase.cost_scale for key, amount in totals.by_category.items()}
        monthly_total = sum(by_category.values())
        summary[phase.name] = PhaseCosts(
            phase=phase.name,
            months=phase.months,
            by_category=by_category,
            monthly_total=monthly_total,
            total=monthly_total * phase.months,
        )

    return summary
