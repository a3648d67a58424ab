"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional, Union

CurveName = Literal["linear", "s_curve", "quarterly"]


class CostItemSchema(BaseModel):
    """Single cost item; amount is validated by the engine, not here"""

    label: str = Field(..., min_length=1, description="Cost item label")
    amount: float = Field(..., description="Monthly amount in currency units")
    category: str = Field(..., min_length=1, description="Category key or external label")
    details: Optional[str] = None


class PricingPlanSchema(BaseModel):
    """Subscription plan definition"""

    key: str = Field(..., min_length=1)
    label: str
    annual_price: float
    recognition_period_months: Optional[int] = None
    payment_period_months: int = 12


class EvaluateRequest(BaseModel):
    """Request body for POST /v1/finance/evaluate"""

    currency: str = Field("SAR", min_length=3, max_length=3)
    items: List[CostItemSchema] = Field(default_factory=list)
    plans: List[PricingPlanSchema] = Field(default_factory=list)
    selected_plan_key: Optional[str] = None
    distribution: Optional[Dict[str, float]] = Field(None, description="Client share per plan key")
    year1_target_clients: int = Field(0, ge=0)
    target_clients: Optional[int] = Field(None, ge=0, description="Projection target, defaults to year-1 target")
    horizon_months: int = Field(12, gt=0, le=120)
    curve: CurveName = "linear"


class UnavailableSchema(BaseModel):
    """Calculation could not be performed; render a data-missing state"""

    available: Literal[False] = False
    reason: str
    detail: str


class TotalsSchema(BaseModel):
    total: float
    fixed: float
    variable: float
    by_category: Dict[str, float]


class BucketSchema(BaseModel):
    key: str
    cost_type: str
    total: float
    items: List[CostItemSchema]


class PhaseCostsSchema(BaseModel):
    phase: str
    months: int
    by_category: Dict[str, float]
    monthly_total: float
    total: float


class CostsSchema(BaseModel):
    fixed: Dict[str, BucketSchema]
    variable: Dict[str, BucketSchema]
    by_phase: Dict[str, PhaseCostsSchema] = Field(default_factory=dict)


class PlanSummarySchema(PricingPlanSchema):
    """Plan with its monthly recognized revenue (None when plan data is incomplete)"""

    monthly_recognized_revenue: Optional[float] = None


class RevenueSchema(BaseModel):
    plans: List[PlanSummarySchema]
    average_annual_price: Optional[float] = None
    average_monthly_per_client: Optional[float] = None
    year1_target_clients: int
    incomplete_plans: Dict[str, str] = Field(default_factory=dict)


class InvestmentPhaseSchema(BaseModel):
    phase: str
    amount: float
    currency: Optional[str] = None
    description: Optional[str] = None


class InvestmentSchema(BaseModel):
    total_min: float
    total_max: float
    currency: Optional[str] = None
    breakdown: List[InvestmentPhaseSchema]


class SnapshotResponse(BaseModel):
    """Response for GET /v1/finance/snapshot"""

    currency: str
    costs: CostsSchema
    totals: TotalsSchema
    revenue: RevenueSchema
    investment: Optional[InvestmentSchema] = None


class BreakEvenSchema(BaseModel):
    available: Literal[True] = True
    clients_per_year: int
    clients_per_month: float
    monthly_costs: float
    annual_costs: float
    annual_price_per_client: float


class RecognizedBreakEvenSchema(BaseModel):
    available: Literal[True] = True
    clients: int


class ProjectionPointSchema(BaseModel):
    month: int
    clients: int
    new_clients: int
    renewal_clients: int
    monthly_recognized_revenue: float
    cumulative_annual_revenue: float
    cash_collected: float
    deferred_revenue: float
    net_income: float


class ProjectionSchema(BaseModel):
    available: Literal[True] = True
    plan_key: str
    curve: str
    points: List[ProjectionPointSchema]


class UnitEconomicsSchema(BaseModel):
    available: Literal[True] = True
    cac: float
    ltv: float
    ltv_cac_ratio: float
    year1_monthly_recognized_revenue: float
    extra_months: int
    extra_value_percent: int


class EvaluateResponse(BaseModel):
    """Response for POST /v1/finance/evaluate"""

    selected_plan_key: Optional[str] = None
    snapshot: SnapshotResponse
    break_even: Union[BreakEvenSchema, UnavailableSchema]
    recognized_break_even: Union[RecognizedBreakEvenSchema, UnavailableSchema]
    projection: Union[ProjectionSchema, UnavailableSchema]
    unit_economics: Union[UnitEconomicsSchema, UnavailableSchema]
