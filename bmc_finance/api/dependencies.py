"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from bmc_finance.config import settings
from bmc_finance.domain.investment import InvestmentCalculator


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_investment_calculator() -> InvestmentCalculator:
    """Provide investment calculator built from configured assumptions"""
    return settings.investment_calculator()
