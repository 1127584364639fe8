"""
Tests for authentication endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from pydantic import ValidationError

from estimator.core.config import Settings, settings
from estimator.core.security import create_access_token
from estimator.models.profile import Profile


def test_register_contractor(client: TestClient) -> None:
    """Test contractor registration."""
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/register",
        json={
            "email": "newcontractor@example.com",
            "password": "newpassword123",
            "company_name": "New Painting Co",
            "trade_type": "painting",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "newcontractor@example.com"
    assert data["company_name"] == "New Painting Co"
    assert data["templates_onboarded"] is False
    assert "id" in data
    assert "hashed_password" not in data


def test_register_duplicate_email(client: TestClient, contractor: Profile) -> None:
    """Test that duplicate email registration fails."""
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/register",
        json={"email": contractor.email, "password": "password123", "company_name": "Dup"},
    )
    assert response.status_code == 400
    assert "already registered" in response.json()["detail"].lower()


def test_register_short_password(client: TestClient) -> None:
    """Test that passwords under 8 characters are rejected."""
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/register",
        json={"email": "short@example.com", "password": "short"},
    )
    assert response.status_code == 422


def test_login_success(client: TestClient, contractor: Profile) -> None:
    """Test successful login."""
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/login",
        data={"username": "contractor@example.com", "password": "testpassword123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"


def test_login_wrong_password(client: TestClient, contractor: Profile) -> None:
    """Test login with wrong password."""
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/login",
        data={"username": "contractor@example.com", "password": "wrongpassword"},
    )
    assert response.status_code == 401


def test_login_nonexistent_contractor(client: TestClient) -> None:
    """Test login with non-existent account."""
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/login",
        data={"username": "nonexistent@example.com", "password": "password123"},
    )
    assert response.status_code == 401


def test_protected_route_requires_token(client: TestClient) -> None:
    """Test that profile routes reject anonymous requests."""
    response = client.get(f"{settings.API_V1_PREFIX}/profile/me")
    assert response.status_code == 401


def test_token_for_missing_profile_rejected(client: TestClient) -> None:
    """Test that a well-signed token for an unknown profile is rejected."""
    token = create_access_token(subject=9999)
    response = client.get(
        f"{settings.API_V1_PREFIX}/profile/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


def test_garbage_token_rejected(client: TestClient) -> None:
    response = client.get(
        f"{settings.API_V1_PREFIX}/profile/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


def test_token_signed_with_other_key_rejected(client: TestClient, contractor: Profile) -> None:
    """A token for a real profile is refused unless it carries our signature."""
    forged = jwt.encode({"sub": str(contractor.id)}, "change-me-in-production", algorithm=settings.ALGORITHM)
    response = client.get(
        f"{settings.API_V1_PREFIX}/profile/me", headers={"Authorization": f"Bearer {forged}"}
    )
    assert response.status_code == 401


def test_settings_require_secret_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
