"""Break-even calculator for the annual-prepay subscription model"""

import math
from decimal import ROUND_CEILING, Decimal, localcontext
from typing import Optional, Union

from bmc_finance.domain.aggregation import calculate_finance_totals
from bmc_finance.domain.models import (
    MONTHS_PER_YEAR,
    BreakEvenResult,
    CostStructure,
    PricingPlan,
    Unavailable,
    UnavailableReason,
)
from bmc_finance.domain.revenue import monthly_recognized_revenue


def ceil_clients(amount: float, price_per_client: float) -> int:
    """
    Smallest whole number of clients whose payments cover amount.

    Divides in decimal on the shortest repr of each value, so 96000 / 2499
    or 0.3 / 0.1 are exact and any shortfall, however small, adds a client.
    """
    with localcontext() as ctx:
        ctx.prec = 50
        ratio = Decimal(repr(amount)) / Decimal(repr(price_per_client))
        return int(ratio.to_integral_value(rounding=ROUND_CEILING))


def calculate_break_even(costs: CostStructure, plan: Optional[PricingPlan]) -> Union[BreakEvenResult, Unavailable]:
    """
    Clients needed per year for annual subscriptions to cover annualized costs.

    Clients pay a full year upfront, so costs are annualized before dividing
    by the annual price:
    - annual_costs = monthly_costs * 12
    - clients_per_year = ceil(annual_costs / annual_price)
    - clients_per_month = clients_per_year / 12 (average acquisition rate, unrounded)

    Example:
        monthly costs 8,000, plan price 2,499
        annual costs 96,000 / 2,499 = 38.4 -> 39 clients/year, 3.25 clients/month
    """
    if plan is None:
        return Unavailable(UnavailableReason.NO_PLAN_SELECTED, "No pricing plan selected")

    annual_price = plan.annual_price
    if annual_price is None or not math.isfinite(annual_price) or annual_price <= 0:
        return Unavailable(
            UnavailableReason.INSUFFICIENT_PLAN_DATA,
            f"Plan {plan.key!r} has no positive annual price",
        )

    monthly_costs = calculate_finance_totals(costs).total
    annual_costs = monthly_costs * MONTHS_PER_YEAR

    clients_per_year = ceil_clients(annual_costs, annual_price)

    return BreakEvenResult(
        clients_per_year=clients_per_year,
        clients_per_month=clients_per_year / MONTHS_PER_YEAR,
        monthly_costs=monthly_costs,
        annual_costs=annual_costs,
        annual_price_per_client=annual_price,
    )


def recognized_break_even_clients(costs: CostStructure, plan: Optional[PricingPlan]) -> Union[int, Unavailable]:
    """
    Active clients whose monthly recognized revenue covers monthly costs.

    Uses the plan's recognition period, so an 18-month plan needs more active
    clients than the cash-basis break-even suggests.
    """
    monthly_revenue = monthly_recognized_revenue(plan)
    if isinstance(monthly_revenue, Unavailable):
        return monthly_revenue

    monthly_costs = calculate_finance_totals(costs).total
    # monthly_costs / (annual_price / months) without the intermediate division
    return ceil_clients(monthly_costs * plan.effective_recognition_months, plan.annual_price)
