"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from radicados_gateway.api.dependencies import get_today
from radicados_gateway.api.main import create_app
from radicados_gateway.domain.calendar import BusinessCalendar, StaticHolidaySource
from radicados_gateway.domain.models import DeadlinePolicy, Document
from radicados_gateway.infrastructure.database.models import Base
from radicados_gateway.infrastructure.database.session import build_engine, get_db

# Monday 3 March 2025; San José falls on Monday 24 March
TODAY = date(2025, 3, 3)

# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = build_engine(TEST_DATABASE_URL)
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
    """Create FastAPI test client with test database and a fixed 'today'"""
    app = create_app(refresh_interval_seconds=0)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def policy() -> DeadlinePolicy:
    return DeadlinePolicy()


@pytest.fixture
def calendar() -> BusinessCalendar:
    """Calendar over the embedded Colombian holidays"""
    return BusinessCalendar(StaticHolidaySource.colombia())


@pytest.fixture
def pending_documents() -> list[Document]:
    """One pending document per alert tier plus the cases that never alert"""
    return [
        Document(id="overdue", number="2025-001", intake_date=date(2025, 2, 3), deadline=date(2025, 2, 28)),
        Document(id="critical", number="2025-002", intake_date=date(2025, 2, 10), deadline=date(2025, 3, 5)),
        Document(id="warning", number="2025-003", intake_date=date(2025, 2, 17), deadline=date(2025, 3, 12)),
        Document(id="info", number="2025-004", intake_date=date(2025, 2, 24), deadline=date(2025, 3, 17)),
        Document(id="calm", number="2025-005", intake_date=date(2025, 2, 25), deadline=date(2025, 3, 18), alert_flag=True),
        Document(id="undated", number="2025-006", alert_flag=True),
        Document(
            id="answered",
            number="2025-007",
            intake_date=date(2025, 1, 2),
            deadline=date(2025, 1, 20),
            response_date=date(2025, 1, 15),
            alert_flag=True,
        ),
    ]
