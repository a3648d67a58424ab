"""Command line tools for preparing the cost and income stores"""

import json
import logging
from typing import Any, Dict, List

import click
from sqlalchemy.orm import Session

from bmc_finance.config import settings
from bmc_finance.domain.aggregation import validate_amount
from bmc_finance.domain.categories import resolve_bucket
from bmc_finance.domain.exceptions import InvalidFinancialDataError
from bmc_finance.domain.models import CostItem
from bmc_finance.infrastructure.database.models import Base
from bmc_finance.infrastructure.database.repositories import CostRepository
from bmc_finance.infrastructure.database.seed import seed_reference_data
from bmc_finance.infrastructure.database.session import SessionLocal, engine
from bmc_finance.infrastructure.observability.logging import setup_logging

logger = logging.getLogger(__name__)


def load_costs(db: Session, records: List[Dict[str, Any]]) -> int:
    """
    Persist cost records read from a JSON file.

    Each record needs name, amount and category; cost_type and description
    are optional. Records are checked with the engine's own rules first, so
    the store never holds an item the engine would reject.

    Raises:
        InvalidFinancialDataError: A record has an invalid amount or unknown category
    """
    repo = CostRepository(db)
    for record in records:
        item = CostItem(label=record["name"], amount=record["amount"], category=record["category"])
        validate_amount(item)
        resolve_bucket(item.category)

        repo.add_cost(
            name=item.label,
            amount=item.amount,
            category_key=item.category,
            cost_type=record.get("cost_type", "FIXED").upper(),
            description=record.get("description"),
        )
        logger.info("Loaded cost record", extra={"category_key": item.category})

    return len(records)


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level")
def main(log_level):
    """BMC finance maintenance commands."""
    setup_logging(log_level or settings.log_level)


@main.command()
@click.option("--costs", "costs_file", type=click.File("r"), default=None, help="JSON list of cost records to load")
def seed(costs_file):
    """Create tables, seed categories and plans, optionally load cost records."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_reference_data(db)
        loaded = load_costs(db, json.load(costs_file)) if costs_file else 0
        db.commit()
    except InvalidFinancialDataError as e:
        db.rollback()
        raise click.ClickException(f"Invalid cost record: {e}")
    finally:
        db.close()

    click.echo(f"Reference data seeded, {loaded} cost records loaded")


if __name__ == "__main__":
    main()
