"""Finance report - entry points that build a snapshot and evaluate a selected plan"""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Union

from bmc_finance.domain.aggregation import aggregate, calculate_finance_totals, summarize_by_phase
from bmc_finance.domain.break_even import calculate_break_even, recognized_break_even_clients
from bmc_finance.domain.investment import InvestmentCalculator
from bmc_finance.domain.models import (
    BreakEvenResult,
    CostItem,
    CostStructure,
    FinanceSnapshot,
    PricingPlan,
    Unavailable,
    UnitEconomics,
)
from bmc_finance.domain.projections import GrowthCurve, MonthlyProjection, linear_ramp, project_months
from bmc_finance.domain.revenue import build_revenue_model, find_plan
from bmc_finance.domain.unit_economics import calculate_unit_economics


@dataclass(frozen=True)
class PlanEvaluation:
    """All plan-dependent results; each is a value or an explicit Unavailable"""

    plan: Union[PricingPlan, Unavailable]
    break_even: Union[BreakEvenResult, Unavailable]
    recognized_break_even_clients: Union[int, Unavailable]
    projection: Union[MonthlyProjection, Unavailable]
    unit_economics: Union[UnitEconomics, Unavailable]

    @property
    def available(self) -> bool:
        return not isinstance(self.plan, Unavailable)


def build_snapshot(
    items: Sequence[CostItem],
    plans: Sequence[PricingPlan],
    currency: str,
    distribution: Optional[Mapping[str, float]] = None,
    year1_target_clients: int = 0,
    investment_calculator: Optional[InvestmentCalculator] = None,
) -> FinanceSnapshot:
    """
    Main entry point: aggregate costs and assemble the revenue model.

    The snapshot is a fresh value on every call; nothing is cached or mutated.

    Raises:
        InvalidFinancialDataError: A cost item is invalid or uncategorized, or two plans share a key
    """
    calculator = investment_calculator or InvestmentCalculator()

    structure = aggregate(items)
    costs = CostStructure(
        fixed=structure.fixed,
        variable=structure.variable,
        by_phase=summarize_by_phase(structure, calculator.phases),
    )

    return FinanceSnapshot(
        currency=currency,
        costs=costs,
        totals=calculate_finance_totals(costs),
        revenue=build_revenue_model(plans, distribution, year1_target_clients),
        investment=calculator.calculate(costs, currency),
    )


def evaluate_plan(
    snapshot: FinanceSnapshot,
    selected_plan_key: Optional[str],
    target_clients: Optional[int] = None,
    horizon_months: int = 12,
    growth: GrowthCurve = linear_ramp,
) -> PlanEvaluation:
    """
    Evaluate the snapshot against the plan the caller selected.

    A missing or unknown plan key yields Unavailable results throughout;
    there is no fallback to a default plan. The projection targets the
    year-1 client target unless target_clients is given.
    """
    plan = find_plan(snapshot.revenue.plans, selected_plan_key)
    selected = None if isinstance(plan, Unavailable) else plan

    if target_clients is None:
        target_clients = snapshot.revenue.year1_target_clients

    if selected is None:
        return PlanEvaluation(
            plan=plan,
            break_even=plan,
            recognized_break_even_clients=plan,
            projection=plan,
            unit_economics=plan,
        )

    return PlanEvaluation(
        plan=selected,
        break_even=calculate_break_even(snapshot.costs, selected),
        recognized_break_even_clients=recognized_break_even_clients(snapshot.costs, selected),
        projection=project_months(snapshot.costs, selected, target_clients, horizon_months, growth),
        unit_economics=calculate_unit_economics(snapshot.costs, snapshot.revenue, selected),
    )
