import os

os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from traffic_billing import schema
from traffic_billing.models.base import Base, Officer
from traffic_billing.scripts.seed_reference_data import seed_reference_data
from traffic_billing.service.citation_service import CitationService

engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

ISSUED_AT = datetime(2026, 3, 2, 10, 0, 0)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    seed_reference_data(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def officer(db):
    return Officer.get_by_badge_number(db, "PD-1234")


@pytest.fixture
def issue_citation(db, officer):
    """Issue a citation against the seeded driver DL-12345678 / KCC-123K."""

    def _issue(violation_code="SPD10", issued_at=ISSUED_AT, license_number="DL-12345678",
               license_plate="KCC-123K", officer_id=None):
        request = schema.IssueCitationSchema(
            license_number=license_number,
            license_plate=license_plate,
            officer_id=officer_id if officer_id is not None else officer.id,
            violation_code=violation_code,
            violation_date=issued_at - timedelta(hours=1),
            location="Main St & 5th Ave",
            notes="Driver was speeding in school zone",
        )
        return CitationService.issue_citation(db, request, issued_at=issued_at)

    return _issue


@pytest.fixture
def client(db):
    from traffic_billing.main import app
    from traffic_billing.dependencies.deps import get_db

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
