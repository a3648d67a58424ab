"""Revenue model - recognized revenue per plan and blended averages"""

import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from bmc_finance.domain.exceptions import DuplicatePlanError
from bmc_finance.domain.models import (
    PricingPlan,
    RevenueModel,
    Unavailable,
    UnavailableReason,
)


def plan_problem(plan: PricingPlan) -> Optional[str]:
    """Describe why a plan cannot be used for revenue math, or None if it is usable"""
    price = plan.annual_price
    if price is None or not math.isfinite(price) or price <= 0:
        return f"annual price must be positive, got {price!r}"

    recognition = plan.effective_recognition_months
    if recognition <= 0:
        return f"recognition period must be positive, got {recognition!r}"

    if plan.payment_period_months <= 0:
        return f"payment period must be positive, got {plan.payment_period_months!r}"

    # Delivers at least as many months as are paid for ("pay 12, get 18")
    if recognition < plan.payment_period_months:
        return (
            f"recognition period ({recognition} months) is shorter than "
            f"payment period ({plan.payment_period_months} months)"
        )

    return None


def monthly_recognized_revenue(plan: Optional[PricingPlan]) -> Union[float, Unavailable]:
    """
    Portion of the annual price recognized each month of service delivery.

    Divides by the plan's recognition period, never a fixed 12, so an 18-month
    plan at 3,999 recognizes 222.17 per month. A plan without recognition data
    falls back to 12 months.
    """
    if plan is None:
        return Unavailable(UnavailableReason.NO_PLAN_SELECTED, "No pricing plan selected")

    problem = plan_problem(plan)
    if problem:
        return Unavailable(UnavailableReason.INSUFFICIENT_PLAN_DATA, f"Plan {plan.key!r}: {problem}")

    return plan.annual_price / plan.effective_recognition_months


def split_plans(plans: Sequence[PricingPlan]) -> Tuple[List[PricingPlan], Dict[str, str]]:
    """
    Separate usable plans from incomplete ones (key -> problem).

    Raises:
        DuplicatePlanError: Two plans share a key
    """
    usable: List[PricingPlan] = []
    incomplete: Dict[str, str] = {}
    seen = set()
    for plan in plans:
        if plan.key in seen:
            raise DuplicatePlanError(plan.key)
        seen.add(plan.key)
        problem = plan_problem(plan)
        if problem:
            incomplete[plan.key] = problem
        else:
            usable.append(plan)
    return usable, incomplete


def _weighted_mean(
    values: Mapping[str, float],
    distribution: Optional[Mapping[str, float]],
) -> Union[float, Unavailable]:
    if not values:
        return Unavailable(
            UnavailableReason.INSUFFICIENT_PLAN_DATA,
            "No plan with complete pricing data",
        )

    if distribution is None:
        return sum(values.values()) / len(values)

    # Shares are renormalized over the usable plans only
    weights = {key: distribution.get(key, 0.0) for key in values}
    if any(w < 0 or not math.isfinite(w) for w in weights.values()):
        return Unavailable(
            UnavailableReason.INSUFFICIENT_PLAN_DATA,
            "Client distribution contains a negative or non-finite share",
        )

    total_weight = sum(weights.values())
    if total_weight <= 0:
        return Unavailable(
            UnavailableReason.INSUFFICIENT_PLAN_DATA,
            "Client distribution assigns no share to any plan with complete pricing data",
        )

    return sum(values[key] * weights[key] for key in values) / total_weight


def average_annual_price(
    plans: Sequence[PricingPlan],
    distribution: Optional[Mapping[str, float]] = None,
) -> Union[float, Unavailable]:
    """
    Blended annual price across plans.

    Simple arithmetic mean unless a client distribution (plan key -> share) is
    supplied, in which case it is the share-weighted mean. Incomplete plans are
    excluded.
    """
    usable, _ = split_plans(plans)
    return _weighted_mean({p.key: p.annual_price for p in usable}, distribution)


def average_monthly_per_client(
    plans: Sequence[PricingPlan],
    distribution: Optional[Mapping[str, float]] = None,
) -> Union[float, Unavailable]:
    """Blended monthly recognized revenue per client; same weighting rules as average_annual_price"""
    usable, _ = split_plans(plans)
    return _weighted_mean(
        {p.key: p.annual_price / p.effective_recognition_months for p in usable},
        distribution,
    )


def build_revenue_model(
    plans: Sequence[PricingPlan],
    distribution: Optional[Mapping[str, float]] = None,
    year1_target_clients: int = 0,
) -> RevenueModel:
    """Assemble the revenue model; unavailable averages are stored as None"""
    _, incomplete = split_plans(plans)
    avg_price = average_annual_price(plans, distribution)
    avg_monthly = average_monthly_per_client(plans, distribution)

    return RevenueModel(
        plans=tuple(plans),
        average_annual_price=None if isinstance(avg_price, Unavailable) else avg_price,
        average_monthly_per_client=None if isinstance(avg_monthly, Unavailable) else avg_monthly,
        year1_target_clients=year1_target_clients,
        incomplete_plans=incomplete,
    )


def find_plan(plans: Sequence[PricingPlan], key: Optional[str]) -> Union[PricingPlan, Unavailable]:
    """Look up the selected plan; there is no fallback to a default plan"""
    if not key:
        return Unavailable(UnavailableReason.NO_PLAN_SELECTED, "No pricing plan selected")

    for plan in plans:
        if plan.key == key:
            return plan

    return Unavailable(UnavailableReason.PLAN_NOT_FOUND, f"Pricing plan {key!r} not found")
