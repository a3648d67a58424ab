"""Convert domain results into response schemas; currency is rounded to 2 decimals here"""

from typing import Dict, Union

from bmc_finance.api.v1.schemas import (
    BreakEvenSchema,
    BucketSchema,
    CostItemSchema,
    CostsSchema,
    InvestmentPhaseSchema,
    InvestmentSchema,
    PhaseCostsSchema,
    PlanSummarySchema,
    ProjectionPointSchema,
    ProjectionSchema,
    RecognizedBreakEvenSchema,
    RevenueSchema,
    SnapshotResponse,
    TotalsSchema,
    UnavailableSchema,
    UnitEconomicsSchema,
)
from bmc_finance.domain.categories import CostBucket
from bmc_finance.domain.models import (
    BreakEvenResult,
    CostCategoryBucket,
    FinanceSnapshot,
    InvestmentBreakdown,
    PricingPlan,
    Unavailable,
    UnitEconomics,
)
from bmc_finance.domain.projections import MonthlyProjection
from bmc_finance.domain.revenue import monthly_recognized_revenue
from bmc_finance.utils.rounding import round_currency


def _money_map(values: Dict[str, float]) -> Dict[str, float]:
    return {key: round_currency(value) for key, value in values.items()}


def unavailable_schema(result: Unavailable) -> UnavailableSchema:
    return UnavailableSchema(reason=result.reason.value, detail=result.detail)


def _bucket_schema(bucket: CostCategoryBucket) -> BucketSchema:
    return BucketSchema(
        key=bucket.key.value,
        cost_type=bucket.key.cost_type.value,
        total=round_currency(bucket.total),
        items=[
            CostItemSchema(label=i.label, amount=round_currency(i.amount), category=i.category, details=i.details)
            for i in bucket.items
        ],
    )


def _buckets(buckets: Dict[CostBucket, CostCategoryBucket]) -> Dict[str, BucketSchema]:
    return {key.value: _bucket_schema(bucket) for key, bucket in buckets.items()}


def _plan_summary(plan: PricingPlan) -> PlanSummarySchema:
    monthly = monthly_recognized_revenue(plan)
    return PlanSummarySchema(
        key=plan.key,
        label=plan.label,
        annual_price=round_currency(plan.annual_price),
        recognition_period_months=plan.recognition_period_months,
        payment_period_months=plan.payment_period_months,
        monthly_recognized_revenue=None if isinstance(monthly, Unavailable) else round_currency(monthly),
    )


def investment_schema(investment: InvestmentBreakdown) -> InvestmentSchema:
    return InvestmentSchema(
        total_min=round_currency(investment.total_min),
        total_max=round_currency(investment.total_max),
        currency=investment.currency,
        breakdown=[
            InvestmentPhaseSchema(
                phase=row.phase,
                amount=round_currency(row.amount),
                currency=row.currency,
                description=row.description,
            )
            for row in investment.breakdown
        ],
    )


def snapshot_schema(snapshot: FinanceSnapshot) -> SnapshotResponse:
    costs = snapshot.costs
    revenue = snapshot.revenue

    by_phase = {
        name: PhaseCostsSchema(
            phase=phase.phase,
            months=phase.months,
            by_category=_money_map(phase.by_category),
            monthly_total=round_currency(phase.monthly_total),
            total=round_currency(phase.total),
        )
        for name, phase in (costs.by_phase or {}).items()
    }

    return SnapshotResponse(
        currency=snapshot.currency,
        costs=CostsSchema(fixed=_buckets(costs.fixed), variable=_buckets(costs.variable), by_phase=by_phase),
        totals=TotalsSchema(
            total=round_currency(snapshot.totals.total),
            fixed=round_currency(snapshot.totals.fixed),
            variable=round_currency(snapshot.totals.variable),
            by_category=_money_map(snapshot.totals.by_category),
        ),
        revenue=RevenueSchema(
            plans=[_plan_summary(p) for p in revenue.plans],
            average_annual_price=(
                None if revenue.average_annual_price is None else round_currency(revenue.average_annual_price)
            ),
            average_monthly_per_client=(
                None if revenue.average_monthly_per_client is None else round_currency(revenue.average_monthly_per_client)
            ),
            year1_target_clients=revenue.year1_target_clients,
            incomplete_plans=dict(revenue.incomplete_plans),
        ),
        investment=investment_schema(snapshot.investment) if snapshot.investment else None,
    )


def break_even_schema(result: Union[BreakEvenResult, Unavailable]) -> Union[BreakEvenSchema, UnavailableSchema]:
    if isinstance(result, Unavailable):
        return unavailable_schema(result)
    return BreakEvenSchema(
        clients_per_year=result.clients_per_year,
        clients_per_month=result.clients_per_month,
        monthly_costs=round_currency(result.monthly_costs),
        annual_costs=round_currency(result.annual_costs),
        annual_price_per_client=round_currency(result.annual_price_per_client),
    )


def recognized_break_even_schema(
    result: Union[int, Unavailable],
) -> Union[RecognizedBreakEvenSchema, UnavailableSchema]:
    if isinstance(result, Unavailable):
        return unavailable_schema(result)
    return RecognizedBreakEvenSchema(clients=result)


def projection_schema(
    result: Union[MonthlyProjection, Unavailable],
    plan_key: str,
    curve: str,
) -> Union[ProjectionSchema, UnavailableSchema]:
    if isinstance(result, Unavailable):
        return unavailable_schema(result)
    return ProjectionSchema(
        plan_key=plan_key,
        curve=curve,
        points=[
            ProjectionPointSchema(
                month=point.month,
                clients=point.clients,
                new_clients=point.new_clients,
                renewal_clients=point.renewal_clients,
                monthly_recognized_revenue=round_currency(point.monthly_recognized_revenue),
                cumulative_annual_revenue=round_currency(point.cumulative_annual_revenue),
                cash_collected=round_currency(point.cash_collected),
                deferred_revenue=round_currency(point.deferred_revenue),
                net_income=round_currency(point.net_income),
            )
            for point in result
        ],
    )


def unit_economics_schema(result: Union[UnitEconomics, Unavailable]) -> Union[UnitEconomicsSchema, UnavailableSchema]:
    if isinstance(result, Unavailable):
        return unavailable_schema(result)
    return UnitEconomicsSchema(
        cac=round_currency(result.cac),
        ltv=round_currency(result.ltv),
        ltv_cac_ratio=round(result.ltv_cac_ratio, 2),
        year1_monthly_recognized_revenue=round_currency(result.year1_monthly_recognized_revenue),
        extra_months=result.extra_months,
        extra_value_percent=result.extra_value_percent,
    )
