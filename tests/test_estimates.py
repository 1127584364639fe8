"""
Tests for estimate endpoints: range resolution, updates and PDF export.
"""

from datetime import datetime
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from estimator.core.config import settings
from estimator.models.profile import Profile

ESTIMATES_URL = f"{settings.API_V1_PREFIX}/estimates"
HOMEOWNER = {"homeowner_name": "Jane Doe", "homeowner_email": "jane@example.com"}


def _create(client: TestClient, headers: Dict[str, str], **fields: object) -> dict:
    response = client.post(ESTIMATES_URL, headers=headers, json={**HOMEOWNER, **fields})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.smoke
def test_create_from_default_template(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test pricing with a built-in template at the contractor's hourly rate."""
    estimate = _create(
        client,
        auth_headers,
        template_type="drywall",
        template_id="default-drywall-contract",
        parameters={"sheet_count": 10},
    )
    # 0.5h x $50 + $15 material + 10 sheets x $25
    assert estimate["range_low"] == estimate["range_high"] == pytest.approx(290)
    assert estimate["template_id"] is None
    assert estimate["parameters"]["default_template_id"] == "default-drywall-contract"
    assert estimate["parameters"]["complexity"] == "standard"
    assert estimate["status"] == "draft"


def test_create_from_calculator(client: TestClient, auth_headers: Dict[str, str]) -> None:
    estimate = _create(
        client,
        auth_headers,
        template_type="painting",
        parameters={"wall_sqft": 1000, "ceiling_sqft": 200},
    )
    assert estimate["range_low"] == pytest.approx(2770 * 0.85)
    assert estimate["range_high"] == pytest.approx(2770 * 1.15)


def test_calculator_uses_contractor_rates(
    client: TestClient, session: Session, contractor: Profile, auth_headers: Dict[str, str]
) -> None:
    contractor.custom_rates = {"framing": {"labor_per_linear_ft": 10}}
    session.add(contractor)
    session.commit()

    estimate = _create(client, auth_headers, template_type="framing", parameters={"linear_feet": 10})
    # The range is priced at industry low and high rates
    assert estimate["range_low"] == pytest.approx(50)
    assert estimate["range_high"] == pytest.approx(120)


def test_create_with_explicit_range(client: TestClient, auth_headers: Dict[str, str]) -> None:
    estimate = _create(client, auth_headers, template_type="tile", range_low=1000, range_high=1500)
    assert (estimate["range_low"], estimate["range_high"]) == (1000, 1500)

    created = datetime.fromisoformat(estimate["created_at"])
    expires = datetime.fromisoformat(estimate["expires_at"])
    assert (expires - created).days == settings.ESTIMATE_VALID_DAYS


def test_create_without_any_range_is_rejected(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(ESTIMATES_URL, headers=auth_headers, json={**HOMEOWNER, "template_type": "tile"})
    assert response.status_code == 400


def test_unknown_template_is_rejected(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(
        ESTIMATES_URL,
        headers=auth_headers,
        json={**HOMEOWNER, "template_type": "painting", "template_id": "default-roofing"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Template not found"


def test_invalid_calculator_parameters_are_rejected(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(
        ESTIMATES_URL,
        headers=auth_headers,
        json={**HOMEOWNER, "template_type": "framing", "parameters": {"addons": [{"id": "roofing"}]}},
    )
    assert response.status_code == 400


def test_homeowner_required_without_client(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(
        ESTIMATES_URL,
        headers=auth_headers,
        json={"template_type": "tile", "range_low": 1, "range_high": 2, "homeowner_email": "bad-email"},
    )
    assert response.status_code == 422


def test_range_must_be_ordered(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(
        ESTIMATES_URL,
        headers=auth_headers,
        json={**HOMEOWNER, "template_type": "tile", "range_low": 2000, "range_high": 1000},
    )
    assert response.status_code == 422


def test_homeowner_filled_from_client(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test that a linked client supplies the homeowner details."""
    created = client.post(
        f"{settings.API_V1_PREFIX}/clients",
        headers=auth_headers,
        json={"name": "Bob Builder", "email": "bob@example.com", "phone": "555-0199"},
    ).json()

    response = client.post(
        ESTIMATES_URL,
        headers=auth_headers,
        json={"template_type": "tile", "client_id": created["id"], "range_low": 100, "range_high": 200},
    )
    assert response.status_code == 201
    estimate = response.json()
    assert estimate["homeowner_name"] == "Bob Builder"
    assert estimate["homeowner_email"] == "bob@example.com"
    assert estimate["homeowner_phone"] == "555-0199"

    listed = client.get(ESTIMATES_URL, headers=auth_headers, params={"client_id": created["id"]}).json()
    assert [e["id"] for e in listed] == [estimate["id"]]


def test_unknown_client_is_rejected(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(
        ESTIMATES_URL,
        headers=auth_headers,
        json={"template_type": "tile", "client_id": 999, "range_low": 1, "range_high": 2},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Client not found"


def test_calculate_without_saving(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(
        f"{ESTIMATES_URL}/calculate",
        headers=auth_headers,
        json={
            "template_id": "default-drywall-contract",
            "parameters": {"sheet_count": 2},
            "complexity": "complex",
            "hourly_rate": 100,
        },
    )
    assert response.status_code == 200
    assert response.json()["total"] == pytest.approx(0.5 * 100 * 1.3 + 15 * 1.3 + 2 * 25)
    assert client.get(ESTIMATES_URL, headers=auth_headers).json() == []


def test_calculate_unknown_template(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(f"{ESTIMATES_URL}/calculate", headers=auth_headers, json={"template_id": 999})
    assert response.status_code == 404


def test_update_reprices_template_estimate(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test that new parameters keep the default template and re-price."""
    estimate = _create(
        client,
        auth_headers,
        template_type="drywall",
        template_id="default-drywall-contract",
        parameters={"sheet_count": 10},
    )
    response = client.patch(
        f"{ESTIMATES_URL}/{estimate['id']}", headers=auth_headers, json={"parameters": {"sheet_count": 20}}
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["range_high"] == pytest.approx(540)
    assert updated["parameters"]["default_template_id"] == "default-drywall-contract"


def test_update_status_and_bad_range(client: TestClient, auth_headers: Dict[str, str]) -> None:
    estimate = _create(client, auth_headers, template_type="tile", range_low=100, range_high=200)
    url = f"{ESTIMATES_URL}/{estimate['id']}"

    response = client.patch(url, headers=auth_headers, json={"status": "accepted"})
    assert response.json()["status"] == "accepted"

    response = client.patch(url, headers=auth_headers, json={"range_low": 500})
    assert response.status_code == 400
    assert client.get(url, headers=auth_headers).json()["range_low"] == 100


def test_list_filters_by_status(client: TestClient, auth_headers: Dict[str, str]) -> None:
    first = _create(client, auth_headers, template_type="tile", range_low=1, range_high=2)
    _create(client, auth_headers, template_type="tile", range_low=1, range_high=2)
    client.patch(f"{ESTIMATES_URL}/{first['id']}", headers=auth_headers, json={"status": "sent"})

    sent = client.get(ESTIMATES_URL, headers=auth_headers, params={"status": "sent"}).json()
    assert [e["id"] for e in sent] == [first["id"]]
    assert len(client.get(ESTIMATES_URL, headers=auth_headers).json()) == 2


def test_estimates_are_scoped_to_contractor(
    client: TestClient, auth_headers: Dict[str, str], other_headers: Dict[str, str]
) -> None:
    estimate = _create(client, auth_headers, template_type="tile", range_low=1, range_high=2)
    url = f"{ESTIMATES_URL}/{estimate['id']}"

    assert client.get(url, headers=other_headers).status_code == 404
    assert client.delete(url, headers=other_headers).status_code == 404
    assert client.get(ESTIMATES_URL, headers=other_headers).json() == []


def test_delete_estimate(client: TestClient, auth_headers: Dict[str, str]) -> None:
    estimate = _create(client, auth_headers, template_type="tile", range_low=1, range_high=2)
    url = f"{ESTIMATES_URL}/{estimate['id']}"
    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.get(url, headers=auth_headers).status_code == 404


@pytest.mark.parametrize("detail_level", ["simple", "detailed", "extra_detailed", "unknown"])
def test_estimate_pdf(client: TestClient, auth_headers: Dict[str, str], detail_level: str) -> None:
    estimate = _create(
        client,
        auth_headers,
        template_type="drywall_finishing",
        parameters={
            "line_items": [{"type": "sqft_standard", "quantity": 800}, {"type": "hourly", "quantity": 3}],
            "addons": [{"id": "sanding"}],
        },
    )
    response = client.get(
        f"{ESTIMATES_URL}/{estimate['id']}/pdf", headers=auth_headers, params={"detail_level": detail_level}
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
