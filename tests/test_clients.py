"""
Tests for client endpoints and ownership scoping.
"""

from typing import Dict

from fastapi.testclient import TestClient
from sqlmodel import Session

from estimator.core.config import settings
from estimator.models.estimate import Estimate
from estimator.models.profile import Profile

CLIENTS_URL = f"{settings.API_V1_PREFIX}/clients"


def _create(client: TestClient, headers: Dict[str, str], **fields: str) -> dict:
    response = client.post(CLIENTS_URL, headers=headers, json={"name": "Jane Doe", **fields})
    assert response.status_code == 201
    return response.json()


def test_create_and_get_client(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test creating a client and fetching it back."""
    created = _create(client, auth_headers, email="jane@example.com", city="Denver")
    assert created["email"] == "jane@example.com"

    response = client.get(f"{CLIENTS_URL}/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["city"] == "Denver"


def test_blank_client_email_is_none(client: TestClient, auth_headers: Dict[str, str]) -> None:
    created = _create(client, auth_headers, email="  ")
    assert created["email"] is None


def test_list_clients_ordered_and_searchable(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test name ordering and search."""
    _create(client, auth_headers, name="Zed Zimmer")
    _create(client, auth_headers, name="Amy Adams", email="amy@example.com")

    names = [c["name"] for c in client.get(CLIENTS_URL, headers=auth_headers).json()]
    assert names == ["Amy Adams", "Zed Zimmer"]

    found = client.get(CLIENTS_URL, headers=auth_headers, params={"search": "AMY@"}).json()
    assert [c["name"] for c in found] == ["Amy Adams"]


def test_update_client(client: TestClient, auth_headers: Dict[str, str]) -> None:
    created = _create(client, auth_headers)
    response = client.patch(f"{CLIENTS_URL}/{created['id']}", headers=auth_headers, json={"phone": "555-0199"})
    assert response.status_code == 200
    assert response.json()["phone"] == "555-0199"
    assert response.json()["name"] == "Jane Doe"


def test_clients_are_scoped_to_contractor(
    client: TestClient, auth_headers: Dict[str, str], other_headers: Dict[str, str]
) -> None:
    """Test that another contractor cannot see or change a client."""
    created = _create(client, auth_headers)

    assert client.get(f"{CLIENTS_URL}/{created['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"{CLIENTS_URL}/{created['id']}", headers=other_headers).status_code == 404
    assert client.get(CLIENTS_URL, headers=other_headers).json() == []


def test_delete_client_unlinks_estimates(
    client: TestClient, session: Session, contractor: Profile, auth_headers: Dict[str, str]
) -> None:
    """Test that deleting a client keeps its estimates."""
    created = _create(client, auth_headers, email="jane@example.com")
    estimate = client.post(
        f"{settings.API_V1_PREFIX}/estimates",
        headers=auth_headers,
        json={"template_type": "drywall", "client_id": created["id"], "range_low": 100, "range_high": 200},
    ).json()
    assert estimate["homeowner_name"] == "Jane Doe"

    response = client.delete(f"{CLIENTS_URL}/{created['id']}", headers=auth_headers)
    assert response.status_code == 204

    stored = session.get(Estimate, estimate["id"])
    assert stored is not None
    session.refresh(stored)
    assert stored.client_id is None
    assert stored.homeowner_name == "Jane Doe"
