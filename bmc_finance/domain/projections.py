"""Month-by-month client growth and recognized revenue projections"""

import math
from typing import Callable, Iterator, List, Optional, Union

from bmc_finance.domain.aggregation import calculate_finance_totals
from bmc_finance.domain.models import (
    MONTHS_PER_YEAR,
    CostStructure,
    PricingPlan,
    ProjectionPoint,
    Unavailable,
)
from bmc_finance.domain.revenue import monthly_recognized_revenue
from bmc_finance.utils.rounding import round_clients

# (month, horizon_months, target_clients) -> client count for that month
GrowthCurve = Callable[[int, int, int], float]


def linear_ramp(month: int, horizon: int, target: int) -> float:
    """Equal client growth every month, reaching target at the horizon"""
    return target * month / horizon


def logistic_ramp(steepness: float = 10.0) -> GrowthCurve:
    """
    S-curve growth: slow start, fast middle, saturation near the target.

    The logistic function is rescaled so month 0 maps to 0 clients and the
    horizon maps exactly to the target.
    """

    def _sigmoid(x: float) -> float:
        return 1.0 / (1.0 + math.exp(-steepness * (x - 0.5)))

    low, high = _sigmoid(0.0), _sigmoid(1.0)

    def curve(month: int, horizon: int, target: int) -> float:
        return target * (_sigmoid(month / horizon) - low) / (high - low)

    return curve


s_curve = logistic_ramp()


def step_ramp(steps: int = 4) -> GrowthCurve:
    """Clients arrive in equal batches, e.g. quarterly onboarding cohorts"""
    if steps <= 0:
        raise ValueError(f"steps must be positive, got {steps}")

    def curve(month: int, horizon: int, target: int) -> float:
        return target * math.ceil(month * steps / horizon) / steps

    return curve


GROWTH_CURVES = {
    "linear": linear_ramp,
    "s_curve": s_curve,
    "quarterly": step_ramp(4),
}


class MonthlyProjection:
    """
    Finite, restartable sequence of ProjectionPoint for months 1..horizon.

    Points are computed lazily on each iteration; iterating twice yields the
    same series for a deterministic growth curve.

    Clients are tracked as monthly acquisition cohorts. A cohort prepays the
    annual price when it signs up, and that payment buys service_months of
    delivery. Clients still active when their service term ends renew and
    prepay again. When the client count drops, the newest cohorts leave first.
    """

    def __init__(
        self,
        monthly_revenue_per_client: float,
        annual_price: float,
        monthly_costs: float,
        target_clients: int,
        horizon_months: int,
        growth: GrowthCurve,
        service_months: int = MONTHS_PER_YEAR,
    ):
        if service_months <= 0:
            raise ValueError(f"service_months must be positive, got {service_months}")
        self.monthly_revenue_per_client = monthly_revenue_per_client
        self.annual_price = annual_price
        self.monthly_costs = monthly_costs
        self.target_clients = target_clients
        self.horizon_months = horizon_months
        self.growth = growth
        self.service_months = service_months

    def __len__(self) -> int:
        return self.horizon_months

    @staticmethod
    def _churn(cohorts: List[List[int]], count: int) -> None:
        while count > 0 and cohorts:
            newest = cohorts[-1]
            leaving = min(count, newest[1])
            newest[1] -= leaving
            count -= leaving
            if newest[1] == 0:
                cohorts.pop()

    def __iter__(self) -> Iterator[ProjectionPoint]:
        cohorts: List[List[int]] = []  # [signup month, active clients]
        previous_clients = 0
        cumulative_recognized = 0.0
        # Client-months paid for but not yet delivered
        undelivered_months = 0

        for month in range(1, self.horizon_months + 1):
            clients = max(0, round_clients(self.growth(month, self.horizon_months, self.target_clients)))
            new_clients = max(0, clients - previous_clients)

            if clients < previous_clients:
                self._churn(cohorts, previous_clients - clients)
            renewal_clients = sum(size for signup, size in cohorts if (month - signup) % self.service_months == 0)
            if new_clients:
                cohorts.append([month, new_clients])

            payments = new_clients + renewal_clients
            undelivered_months += payments * self.service_months - clients

            recognized = clients * self.monthly_revenue_per_client
            cash_collected = payments * self.annual_price
            cumulative_recognized += recognized

            yield ProjectionPoint(
                month=month,
                clients=clients,
                new_clients=new_clients,
                renewal_clients=renewal_clients,
                monthly_recognized_revenue=recognized,
                cumulative_annual_revenue=cumulative_recognized,
                cash_collected=cash_collected,
                deferred_revenue=undelivered_months * self.monthly_revenue_per_client,
                net_income=recognized - self.monthly_costs,
            )
            previous_clients = clients


def project_months(
    costs: Optional[CostStructure],
    plan: Optional[PricingPlan],
    target_clients: int,
    horizon_months: int,
    growth: GrowthCurve = linear_ramp,
) -> Union[MonthlyProjection, Unavailable]:
    """
    Project clients and recognized revenue toward target_clients.

    Each month's recognized revenue is clients(month) times the plan's
    monthly recognized revenue; cumulative_annual_revenue is the running sum.
    When costs are given, net_income is recognized revenue minus monthly costs.
    Each payment buys the plan's recognition period of service, so active
    clients renew once per recognition period and deferred revenue never
    goes negative.

    Raises:
        ValueError: horizon_months is not positive or target_clients is negative
    """
    if horizon_months <= 0:
        raise ValueError(f"horizon_months must be positive, got {horizon_months}")
    if target_clients < 0:
        raise ValueError(f"target_clients must be non-negative, got {target_clients}")

    monthly_revenue = monthly_recognized_revenue(plan)
    if isinstance(monthly_revenue, Unavailable):
        return monthly_revenue

    monthly_costs = calculate_finance_totals(costs).total if costs is not None else 0.0

    return MonthlyProjection(
        monthly_revenue_per_client=monthly_revenue,
        annual_price=plan.annual_price,
        monthly_costs=monthly_costs,
        target_clients=target_clients,
        horizon_months=horizon_months,
        growth=growth,
        service_months=plan.effective_recognition_months,
    )
