"""Initial investment estimate derived from the aggregated cost base"""

import math
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from bmc_finance.domain.aggregation import summarize_by_phase
from bmc_finance.domain.models import (
    CostStructure,
    InvestmentBreakdown,
    InvestmentPhase,
    PhaseAssumption,
)

DEFAULT_PHASES: Tuple[PhaseAssumption, ...] = (
    PhaseAssumption(name="launch", months=3, funded_share=1.0, description="Months 1-3: full operating costs before revenue"),
    PhaseAssumption(name="growth", months=3, funded_share=0.5, description="Months 4-6: half of operating costs while revenue ramps"),
    PhaseAssumption(name="scale", months=6, cost_scale=1.5, funded_share=0.0, description="Months 7-12: expanded team funded by revenue"),
)

DEFAULT_ONE_TIME_COSTS = {
    "platform_setup": 15_000.0,
    "legal_and_registration": 10_000.0,
    "branding_and_launch": 5_000.0,
}

SETUP_PHASE = "setup"


@dataclass(frozen=True)
class InvestmentCalculator:
    """
    Estimate the one-time investment needed to launch.

    The estimate is a runway of operating costs plus fixed one-time setup
    categories:
    - each runway phase funds monthly_total * cost_scale * months * funded_share
    - phases with funded_share 0 are planned from revenue and get no row
    - one-time categories are added as a single "setup" row
    - total_min = sum of all rows
    - total_max = total_min * (1 + setup_buffer)

    All assumptions are constructor parameters so they can be overridden
    per call or from Settings.
    """

    phases: Tuple[PhaseAssumption, ...] = DEFAULT_PHASES
    one_time_costs: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_ONE_TIME_COSTS))
    setup_buffer: float = 0.25

    def __post_init__(self) -> None:
        if not math.isfinite(self.setup_buffer) or self.setup_buffer < 0:
            raise ValueError(f"setup_buffer must be a non-negative number, got {self.setup_buffer!r}")
        for name, amount in self.one_time_costs.items():
            if not math.isfinite(amount) or amount < 0:
                raise ValueError(f"one-time cost {name!r} must be non-negative, got {amount!r}")
        for phase in self.phases:
            if phase.months < 0 or phase.cost_scale < 0 or not 0 <= phase.funded_share <= 1:
                raise ValueError(f"invalid phase assumption {phase!r}")

    @property
    def runway_months(self) -> int:
        return sum(phase.months for phase in self.phases if phase.funded_share > 0)

    @property
    def one_time_total(self) -> float:
        return sum(self.one_time_costs.values())

    def calculate(self, costs: CostStructure, currency: Optional[str] = None) -> InvestmentBreakdown:
        """Build the min/max range and phase-by-phase breakdown for a cost structure"""
        phase_costs = summarize_by_phase(costs, self.phases)
        breakdown: List[InvestmentPhase] = []

        for phase in self.phases:
            if phase.funded_share == 0:
                continue
            funded = phase_costs[phase.name].total * phase.funded_share
            breakdown.append(
                InvestmentPhase(
                    phase=phase.name,
                    amount=funded,
                    currency=currency,
                    description=phase.description,
                )
            )

        if self.one_time_costs:
            breakdown.append(
                InvestmentPhase(
                    phase=SETUP_PHASE,
                    amount=self.one_time_total,
                    currency=currency,
                    description="One-time: " + ", ".join(self.one_time_costs),
                )
            )

        total_min = sum(row.amount for row in breakdown)

        return InvestmentBreakdown(
            total_min=total_min,
            total_max=total_min * (1 + self.setup_buffer),
            breakdown=tuple(breakdown),
            currency=currency,
        )
