"""Domain models - pure Python dataclasses representing financial entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from bmc_finance.domain.categories import CostBucket

DEFAULT_RECOGNITION_MONTHS = 12
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class CostItem:
    """Single cost record supplied by the cost item store"""

    label: str
    amount: float  # Monthly amount in currency units
    category: str  # Internal bucket key or external category label
    details: Optional[str] = None


@dataclass(frozen=True)
class CostCategoryBucket:
    """Items aggregated under one cost bucket"""

    key: CostBucket
    items: Tuple[CostItem, ...] = ()

    @property
    def total(self) -> float:
        return sum(item.amount for item in self.items)


@dataclass(frozen=True)
class PhaseAssumption:
    """Operating runway phase: how long it lasts and how it scales the monthly cost base"""

    name: str
    months: int
    cost_scale: float = 1.0  # Multiplier on the monthly cost base during this phase
    funded_share: float = 1.0  # Share of phase costs the initial investment must cover
    description: Optional[str] = None


@dataclass(frozen=True)
class PhaseCosts:
    """Cost base for one business phase (launch, growth, scale)"""

    phase: str
    months: int
    by_category: Dict[str, float]
    monthly_total: float
    total: float


@dataclass(frozen=True)
class CostStructure:
    """Nested cost structure: fixed and variable buckets keyed by CostBucket"""

    fixed: Dict[CostBucket, CostCategoryBucket]
    variable: Dict[CostBucket, CostCategoryBucket]
    by_phase: Optional[Dict[str, PhaseCosts]] = None

    def buckets(self) -> Dict[CostBucket, CostCategoryBucket]:
        return {**self.fixed, **self.variable}

    @property
    def total(self) -> float:
        return sum(bucket.total for bucket in self.buckets().values())


@dataclass(frozen=True)
class FinanceTotals:
    """Monthly cost totals; total == fixed + variable == sum(by_category)"""

    total: float
    fixed: float
    variable: float
    by_category: Dict[str, float]


@dataclass(frozen=True)
class PricingPlan:
    """Subscription tier: paid for payment_period_months, delivered for recognition_period_months"""

    key: str
    label: str
    annual_price: float
    recognition_period_months: Optional[int] = None
    payment_period_months: int = MONTHS_PER_YEAR

    @property
    def effective_recognition_months(self) -> int:
        if self.recognition_period_months is None:
            return DEFAULT_RECOGNITION_MONTHS
        return self.recognition_period_months


@dataclass(frozen=True)
class RevenueModel:
    """Active plans and blended per-client revenue"""

    plans: Tuple[PricingPlan, ...]
    average_annual_price: Optional[float]
    average_monthly_per_client: Optional[float]
    year1_target_clients: int = 0
    incomplete_plans: Dict[str, str] = field(default_factory=dict)  # plan key -> problem


@dataclass(frozen=True)
class BreakEvenResult:
    """Clients needed for annual subscription revenue to cover annualized costs"""

    clients_per_year: int
    clients_per_month: float
    monthly_costs: float
    annual_costs: float
    annual_price_per_client: float


@dataclass(frozen=True)
class InvestmentPhase:
    """One row of the initial investment breakdown"""

    phase: str
    amount: float
    currency: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class InvestmentBreakdown:
    """One-time initial investment estimate"""

    total_min: float
    total_max: float
    breakdown: Tuple[InvestmentPhase, ...]
    currency: Optional[str] = None


@dataclass(frozen=True)
class ProjectionPoint:
    """Client count and revenue for a single projected month"""

    month: int
    clients: int
    new_clients: int
    renewal_clients: int  # Active clients prepaying another service term
    monthly_recognized_revenue: float
    cumulative_annual_revenue: float
    cash_collected: float
    deferred_revenue: float  # Cash collected but not yet recognized
    net_income: float  # Recognized revenue minus monthly costs


@dataclass(frozen=True)
class UnitEconomics:
    """Acquisition cost, lifetime value and recognition summary for a plan"""

    cac: float
    ltv: float
    ltv_cac_ratio: float
    year1_monthly_recognized_revenue: float
    extra_months: int
    extra_value_percent: int


class UnavailableReason(str, Enum):
    """Why a calculation could not produce a value"""

    NO_PLAN_SELECTED = "no_plan_selected"
    PLAN_NOT_FOUND = "plan_not_found"
    INSUFFICIENT_PLAN_DATA = "insufficient_plan_data"


@dataclass(frozen=True)
class Unavailable:
    """Explicit 'cannot compute' result returned instead of NaN, Infinity or a default"""

    reason: UnavailableReason
    detail: str

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class FinanceSnapshot:
    """Aggregate the engine operates on; rebuilt on every read"""

    currency: str
    costs: CostStructure
    totals: FinanceTotals
    revenue: RevenueModel
    investment: Optional[InvestmentBreakdown] = None
