"""Database session management for the cost and income stores"""

from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from bmc_finance.config import settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """Pooling for server databases; SQLite gets a thread-agnostic connection instead"""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 5,
        "max_overflow": 5,
        "pool_recycle": 3600,
    }


engine = create_engine(settings.database_url, **engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """Dependency injection for read-only database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
