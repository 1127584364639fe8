"""
Pytest configuration and fixtures.
Provides test database, client, and common test utilities.
"""

import os
from typing import Dict, Generator

# Settings require a signing key at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from estimator.core.config import settings  # noqa: E402
from estimator.db.session import get_session  # noqa: E402
from estimator.main import app  # noqa: E402
from estimator.models.profile import Profile  # noqa: E402
from estimator.schemas.profile import ProfileCreate  # noqa: E402
from estimator.services.profile_service import ProfileService  # noqa: E402

CONTRACTOR_PASSWORD = "testpassword123"


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="contractor")
def contractor_fixture(session: Session) -> Profile:
    """
    Create a test contractor with an hourly rate.
    """
    profile = ProfileService.create(
        session,
        ProfileCreate(
            email="contractor@example.com",
            password=CONTRACTOR_PASSWORD,
            company_name="Acme Drywall",
            trade_type="drywall",
            phone="555-0100",
        ),
    )
    profile.hourly_rate = 50
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


@pytest.fixture(name="other_contractor")
def other_contractor_fixture(session: Session) -> Profile:
    return ProfileService.create(
        session,
        ProfileCreate(email="other@example.com", password="otherpassword123", company_name="Other Co"),
    )


def login(client: TestClient, email: str, password: str) -> Dict[str, str]:
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/login",
        data={"username": email, "password": password},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(client: TestClient, contractor: Profile) -> Dict[str, str]:
    """
    Bearer headers for the test contractor.
    """
    return login(client, contractor.email, CONTRACTOR_PASSWORD)


@pytest.fixture(name="other_headers")
def other_headers_fixture(client: TestClient, other_contractor: Profile) -> Dict[str, str]:
    return login(client, other_contractor.email, "otherpassword123")
