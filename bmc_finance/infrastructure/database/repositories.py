"""Data access layer for cost items and pricing plans"""

from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from bmc_finance.infrastructure.database.models import CostCategory, CostRecord, IncomeSource
from bmc_finance.domain.models import CostItem, PricingPlan


class CostRepository:
    """Read access to the cost item store"""

    def __init__(self, db: Session):
        self.db = db

    def _root_keys(self) -> Dict[str, str]:
        """Map every category key to its top-level ancestor key"""
        parents = {c.key: c.parent_key for c in self.db.query(CostCategory).all()}
        roots: Dict[str, str] = {}
        for key in parents:
            current, seen = key, set()
            while parents.get(current) and current not in seen:
                seen.add(current)
                current = parents[current]
            roots[key] = current
        return roots

    def list_active_items(self, cost_type: Optional[str] = None) -> List[CostItem]:
        """
        Fetch all active cost items as domain objects.

        Sub-category items are reported under their top-level category so the
        engine sees admin-defined children of known categories.
        """
        query = self.db.query(CostRecord).filter(CostRecord.is_active.is_(True))
        if cost_type:
            query = query.filter(CostRecord.cost_type == cost_type.upper())

        records = query.order_by(CostRecord.category_key, CostRecord.created_at).all()
        roots = self._root_keys()

        return [
            CostItem(
                label=record.name,
                amount=record.amount,
                category=roots.get(record.category_key, record.category_key),
                details=record.description,
            )
            for record in records
        ]

    def add_cost(
        self,
        name: str,
        amount: float,
        category_key: str,
        cost_type: str = "FIXED",
        description: Optional[str] = None,
    ) -> CostRecord:
        """Persist a cost record (used by the `bmc-finance seed --costs` command)"""
        record = CostRecord(
            name=name,
            amount=amount,
            category_key=category_key,
            cost_type=cost_type,
            description=description,
        )
        self.db.add(record)
        self.db.flush()
        return record


class PricingPlanRepository:
    """Read access to subscription plans in the income source store"""

    def __init__(self, db: Session):
        self.db = db

    def list_active_plans(self) -> List[PricingPlan]:
        """Fetch active subscription plans ordered by price"""
        sources = (
            self.db.query(IncomeSource)
            .filter(IncomeSource.is_active.is_(True))
            .filter(IncomeSource.type == "SUBSCRIPTION")
            .order_by(IncomeSource.annual_price)
            .all()
        )
        return [
            PricingPlan(
                key=source.key,
                label=source.name,
                annual_price=source.annual_price,
                recognition_period_months=source.recognition_period_months,
                payment_period_months=source.payment_period_months,
            )
            for source in sources
        ]
