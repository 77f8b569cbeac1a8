"""
Pytest configuration and fixtures for campus access control tests.

The audit database is pointed at in-memory SQLite before any project
module is imported, so CLI tests never touch the on-disk trail.
"""

import os

os.environ.setdefault("CAMPUS_ACCESS_DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.access_manager import AccessManager
from core.audit import MemoryAccessLogger, MonotonicClock
from core.policy import DefaultAccessPolicy
from models.database import Base
from models.entities import AuditEvent  # noqa: F401 - registers the table
from scenarios.demo_data import DemoCast, build_demo_cast


class SteppingClock:
    """Time source that advances by one second per call."""

    def __init__(self, start: datetime = datetime(2026, 1, 15, 9, 0, 0)):
        self.start = start
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.start + timedelta(seconds=self.calls)
        self.calls += 1
        return value


@pytest.fixture
def clock() -> MonotonicClock:
    return MonotonicClock(SteppingClock())


@pytest.fixture
def cast() -> DemoCast:
    return build_demo_cast()


@pytest.fixture
def memory_logger(clock: MonotonicClock) -> MemoryAccessLogger:
    return MemoryAccessLogger(clock=clock)


@pytest.fixture
def manager(memory_logger: MemoryAccessLogger) -> AccessManager:
    return AccessManager(DefaultAccessPolicy(), memory_logger)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """A session on a private in-memory database with the audit tables created."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
