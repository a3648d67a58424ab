"""Reference data: cost category tree and subscription plans"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session
from bmc_finance.infrastructure.database.models import CostCategory, IncomeSource

logger = logging.getLogger(__name__)

# (key, label, parent_key)
CATEGORIES: List[Tuple[str, str, str | None]] = [
    ("leadership", "Leadership team", None),
    ("technical", "Technical team", None),
    ("content", "Content team", None),
    ("marketing-sales", "Marketing & sales", None),
    ("operations", "Operations team", None),
    ("infrastructure", "Infrastructure & technology", None),
    ("overhead", "Administrative overhead", None),
    ("marketing", "Marketing & advertising", None),
    ("hosting", "Hosting", "infrastructure"),
    ("database", "Database", "infrastructure"),
    ("storage", "Storage", "infrastructure"),
    ("seo-tools", "SEO tools", "infrastructure"),
    ("analytics", "Analytics", "infrastructure"),
    ("development", "Development tools", "infrastructure"),
    ("monitoring", "Monitoring", "infrastructure"),
    ("project-management", "Project management", "infrastructure"),
]

# Annual prepay, 18 months of content delivery ("pay 12, get 18")
SUBSCRIPTION_PLANS = [
    ("subscription-basic", "Basic", "2 articles/month for 18 months", 2499.0),
    ("subscription-standard", "Standard", "4 articles/month for 18 months", 3999.0),
    ("subscription-pro", "Pro", "8 articles/month for 18 months", 6999.0),
    ("subscription-premium", "Premium", "12 articles/month for 18 months", 9999.0),
]

RECOGNITION_PERIOD_MONTHS = 18
PAYMENT_PERIOD_MONTHS = 12


def seed_reference_data(db: Session) -> None:
    """Insert missing categories and subscription plans; existing rows are left untouched"""
    existing_categories = {key for (key,) in db.query(CostCategory.key).all()}
    for order, (key, label, parent_key) in enumerate(CATEGORIES, start=1):
        if key in existing_categories:
            continue
        db.add(CostCategory(key=key, label=label, parent_key=parent_key, order=order))
        logger.info("Seeded cost category", extra={"category_key": key})

    db.flush()

    existing_plans = {key for (key,) in db.query(IncomeSource.key).all()}
    for key, name, description, price in SUBSCRIPTION_PLANS:
        if key in existing_plans:
            continue
        db.add(
            IncomeSource(
                key=key,
                name=name,
                description=description,
                type="SUBSCRIPTION",
                annual_price=price,
                recognition_period_months=RECOGNITION_PERIOD_MONTHS,
                payment_period_months=PAYMENT_PERIOD_MONTHS,
            )
        )
        logger.info("Seeded subscription plan", extra={"plan_key": key})

    db.flush()
