"""Finance endpoints - snapshot, break-even, projection, investment and stateless evaluation"""

import time
import logging
from typing import Optional, Union
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from bmc_finance.api.dependencies import get_investment_calculator, get_request_id
from bmc_finance.api.v1 import serializers
from bmc_finance.api.v1.schemas import (
    BreakEvenSchema,
    CurveName,
    EvaluateRequest,
    EvaluateResponse,
    InvestmentSchema,
    ProjectionSchema,
    SnapshotResponse,
    UnavailableSchema,
)
from bmc_finance.config import settings
from bmc_finance.domain.break_even import calculate_break_even
from bmc_finance.domain.exceptions import InvalidFinancialDataError
from bmc_finance.domain.investment import InvestmentCalculator
from bmc_finance.domain.models import CostItem, FinanceSnapshot, PricingPlan, Unavailable
from bmc_finance.domain.projections import GROWTH_CURVES, project_months
from bmc_finance.domain.report import build_snapshot, evaluate_plan
from bmc_finance.domain.revenue import find_plan
from bmc_finance.infrastructure.database.repositories import CostRepository, PricingPlanRepository
from bmc_finance.infrastructure.database.session import get_db
from bmc_finance.infrastructure.observability.logging import log_evaluation
from bmc_finance.infrastructure.observability.metrics import (
    record_evaluation,
    record_invalid_data,
    record_snapshot,
    record_unavailable,
)

router = APIRouter()


def _reject_invalid_data(error: InvalidFinancialDataError, request_id: str) -> HTTPException:
    record_invalid_data(error)
    logging.warning(f"Invalid financial data: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=422, detail=f"Invalid financial data: {error}")


def _track_unavailable(calculation: str, result: object) -> None:
    if isinstance(result, Unavailable):
        record_unavailable(calculation, result.reason.value)


def load_snapshot(db: Session, calculator: InvestmentCalculator, request_id: str) -> FinanceSnapshot:
    """Read the stores once and build a fresh snapshot"""
    items = CostRepository(db).list_active_items()
    plans = PricingPlanRepository(db).list_active_plans()

    try:
        snapshot = build_snapshot(
            items,
            plans,
            currency=settings.currency,
            year1_target_clients=settings.year1_target_clients,
            investment_calculator=calculator,
        )
    except InvalidFinancialDataError as e:
        raise _reject_invalid_data(e, request_id)

    record_snapshot(snapshot.totals.total)
    return snapshot


@router.get("/finance/snapshot", response_model=SnapshotResponse)
def get_snapshot(
    request: Request,
    db: Session = Depends(get_db),
    calculator: InvestmentCalculator = Depends(get_investment_calculator),
):
    """
    Aggregated costs, totals, revenue model and investment estimate.

    Built from the current cost items and active subscription plans.
    """
    snapshot = load_snapshot(db, calculator, get_request_id(request))
    return serializers.snapshot_schema(snapshot)


@router.get("/finance/break-even", response_model=Union[BreakEvenSchema, UnavailableSchema])
def get_break_even(
    request: Request,
    plan_key: Optional[str] = Query(None, description="Selected pricing plan key"),
    db: Session = Depends(get_db),
    calculator: InvestmentCalculator = Depends(get_investment_calculator),
):
    """Clients needed per year/month for the selected plan to cover annualized costs"""
    snapshot = load_snapshot(db, calculator, get_request_id(request))

    plan = find_plan(snapshot.revenue.plans, plan_key)
    result = plan if isinstance(plan, Unavailable) else calculate_break_even(snapshot.costs, plan)

    _track_unavailable("break_even", result)
    return serializers.break_even_schema(result)


@router.get("/finance/projection", response_model=Union[ProjectionSchema, UnavailableSchema])
def get_projection(
    request: Request,
    plan_key: Optional[str] = Query(None, description="Selected pricing plan key"),
    target_clients: Optional[int] = Query(None, ge=0, description="Clients at the end of the horizon"),
    horizon_months: int = Query(settings.projection_horizon_months, gt=0, le=120),
    curve: CurveName = Query("linear"),
    db: Session = Depends(get_db),
    calculator: InvestmentCalculator = Depends(get_investment_calculator),
):
    """Month-by-month clients, recognized revenue and deferred revenue for the selected plan"""
    snapshot = load_snapshot(db, calculator, get_request_id(request))
    target = snapshot.revenue.year1_target_clients if target_clients is None else target_clients

    plan = find_plan(snapshot.revenue.plans, plan_key)
    result = (
        plan
        if isinstance(plan, Unavailable)
        else project_months(snapshot.costs, plan, target, horizon_months, GROWTH_CURVES[curve])
    )

    _track_unavailable("projection", result)
    return serializers.projection_schema(result, plan_key or "", curve)


@router.get("/finance/investment", response_model=InvestmentSchema)
def get_investment(
    request: Request,
    db: Session = Depends(get_db),
    calculator: InvestmentCalculator = Depends(get_investment_calculator),
):
    """One-time initial investment range and phase breakdown"""
    snapshot = load_snapshot(db, calculator, get_request_id(request))
    return serializers.investment_schema(snapshot.investment)


@router.post("/finance/evaluate", response_model=EvaluateResponse)
def evaluate(
    request_body: EvaluateRequest,
    request: Request,
    calculator: InvestmentCalculator = Depends(get_investment_calculator),
):
    """
    Stateless evaluation of caller-supplied cost items and plans.

    Flow:
    1. Build snapshot from request items/plans (rejects invalid items with 422)
    2. Evaluate the selected plan (missing/unknown plan -> unavailable results)
    3. Record metrics and logs
    4. Return snapshot plus plan-dependent results
    """
    start_time = time.time()
    request_id = get_request_id(request)

    items = [CostItem(label=i.label, amount=i.amount, category=i.category, details=i.details) for i in request_body.items]
    plans = [
        PricingPlan(
            key=p.key,
            label=p.label,
            annual_price=p.annual_price,
            recognition_period_months=p.recognition_period_months,
            payment_period_months=p.payment_period_months,
        )
        for p in request_body.plans
    ]

    try:
        snapshot = build_snapshot(
            items,
            plans,
            currency=request_body.currency,
            distribution=request_body.distribution,
            year1_target_clients=request_body.year1_target_clients,
            investment_calculator=calculator,
        )
        evaluation = evaluate_plan(
            snapshot,
            request_body.selected_plan_key,
            target_clients=request_body.target_clients,
            horizon_months=request_body.horizon_months,
            growth=GROWTH_CURVES[request_body.curve],
        )
        response = EvaluateResponse(
            selected_plan_key=request_body.selected_plan_key,
            snapshot=serializers.snapshot_schema(snapshot),
            break_even=serializers.break_even_schema(evaluation.break_even),
            recognized_break_even=serializers.recognized_break_even_schema(evaluation.recognized_break_even_clients),
            projection=serializers.projection_schema(
                evaluation.projection, request_body.selected_plan_key or "", request_body.curve
            ),
            unit_economics=serializers.unit_economics_schema(evaluation.unit_economics),
        )

    except InvalidFinancialDataError as e:
        raise _reject_invalid_data(e, request_id)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_snapshot(snapshot.totals.total)
    record_evaluation(evaluation.available)
    _track_unavailable("break_even", evaluation.break_even)
    _track_unavailable("projection", evaluation.projection)
    _track_unavailable("unit_economics", evaluation.unit_economics)

    reason = None if evaluation.available else evaluation.plan.reason.value
    duration_ms = (time.time() - start_time) * 1000
    log_evaluation(request_id, request_body.selected_plan_key, evaluation.available, reason, duration_ms)

    return response
