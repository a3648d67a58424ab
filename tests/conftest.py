"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from bmc_finance.api.main import create_app
from bmc_finance.infrastructure.database.models import Base
from bmc_finance.infrastructure.database.session import get_db
from bmc_finance.domain.models import CostItem, PricingPlan


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_items() -> list[CostItem]:
    """Monthly cost base of a small content agency"""
    return [
        CostItem(label="CEO", amount=5000, category="leadership"),
        CostItem(label="Full-stack developer", amount=3000, category="technical"),
        CostItem(label="Content writers", amount=2500, category="content"),
        CostItem(label="Sales lead", amount=1500, category="marketing-sales"),
        CostItem(label="Customer support", amount=800, category="operations"),
        CostItem(label="Cloud hosting", amount=300, category="hosting"),
        CostItem(label="Accounting", amount=400, category="overhead"),
        CostItem(label="Paid ads", amount=1200, category="marketing"),
    ]


@pytest.fixture
def plans() -> list[PricingPlan]:
    """Annual-prepay plans delivering 18 months of content"""
    return [
        PricingPlan(key="subscription-basic", label="Basic", annual_price=2499, recognition_period_months=18),
        PricingPlan(key="subscription-standard", label="Standard", annual_price=3999, recognition_period_months=18),
        PricingPlan(key="subscription-pro", label="Pro", annual_price=6999, recognition_period_months=18),
        PricingPlan(key="subscription-premium", label="Premium", annual_price=9999, recognition_period_months=18),
    ]
