# tests/conftest.py
from datetime import datetime

import pytest
from sqlalchemy import Column, Integer, String, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from core.errors import ErrorHandler

Base = declarative_base()


class ProfileRow(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    email = Column(String, nullable=False, unique=True)


FIXED_NOW = datetime(2026, 3, 15, 10, 30)


class RecordingSink:
    def __init__(self, fail: bool = False):
        self.events = []
        self._fail = fail

    def emit_event(self, *, event_type, message, level="INFO", trace_id=None, data=None):
        if self._fail:
            raise OSError("disk full")
        self.events.append(
            {"event_type": event_type, "message": message, "level": level, "data": dict(data or {})}
        )
        return trace_id or "trace-test"


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def handler(sink):
    return ErrorHandler(event_sink=sink)


@pytest.fixture
def failing_sink():
    return RecordingSink(fail=True)


@pytest.fixture
def profile_model():
    return ProfileRow
