"""SQLAlchemy ORM models for the cost item and income source stores"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Integer, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class CostCategory(Base):
    """Admin-managed cost category; sub-categories point at a parent key"""

    __tablename__ = "cost_category"

    key = Column(String(64), primary_key=True)
    label = Column(Text, nullable=False)
    parent_key = Column(String(64), ForeignKey("cost_category.key"), nullable=True)
    order = Column(Integer, nullable=False, default=0)

    costs = relationship("CostRecord", back_populates="category")


class CostRecord(Base):
    """Monthly cost line item"""

    __tablename__ = "cost"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    category_key = Column(String(64), ForeignKey("cost_category.key"), nullable=False, index=True)
    cost_type = Column(String(16), nullable=False, default="FIXED")  # FIXED | VARIABLE
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    category = relationship("CostCategory", back_populates="costs")


class IncomeSource(Base):
    """Source of income: subscription plans and one-time add-ons"""

    __tablename__ = "source_of_income"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    key = Column(String(64), nullable=False, unique=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(16), nullable=False, default="SUBSCRIPTION")  # SUBSCRIPTION | ONE_TIME
    annual_price = Column(Float, nullable=False, default=0.0)
    recognition_period_months = Column(Integer, nullable=True)
    payment_period_months = Column(Integer, nullable=False, default=12)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
