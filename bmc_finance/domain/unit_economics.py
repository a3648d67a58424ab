"""Unit economics - acquisition cost, lifetime value and recognition summary"""

from typing import Optional, Union

from bmc_finance.domain.aggregation import calculate_category_total
from bmc_finance.domain.categories import CostBucket
from bmc_finance.domain.models import (
    CostStructure,
    PricingPlan,
    RevenueModel,
    Unavailable,
    UnitEconomics,
)
from bmc_finance.domain.revenue import monthly_recognized_revenue
from bmc_finance.utils.rounding import round_half_up


def calculate_unit_economics(
    costs: CostStructure,
    revenue: RevenueModel,
    plan: Optional[PricingPlan],
) -> Union[UnitEconomics, Unavailable]:
    """
    Marketing KPIs for the selected plan.

    - CAC: variable marketing spend / year-1 target clients (0 without a target)
    - LTV: the plan's annual price, one prepaid subscription per client
    - LTV:CAC: 0 when CAC is 0 rather than infinity
    - Year-1 recognized MRR: target clients * monthly recognized revenue
    - Extra months / extra value %: "pay 12, get 18" -> 6 months, 50%
    """
    monthly_revenue = monthly_recognized_revenue(plan)
    if isinstance(monthly_revenue, Unavailable):
        return monthly_revenue

    marketing_spend = calculate_category_total(costs.variable[CostBucket.MARKETING].items)
    target = revenue.year1_target_clients
    cac = marketing_spend / target if target > 0 else 0.0

    ltv = plan.annual_price
    ltv_cac_ratio = ltv / cac if cac > 0 else 0.0

    extra_months = plan.effective_recognition_months - plan.payment_period_months

    return UnitEconomics(
        cac=cac,
        ltv=ltv,
        ltv_cac_ratio=ltv_cac_ratio,
        year1_monthly_recognized_revenue=target * monthly_revenue,
        extra_months=extra_months,
        extra_value_percent=int(round_half_up(extra_months / plan.payment_period_months * 100)),
    )
