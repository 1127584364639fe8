"""
Tests for estimate templates and template pricing.
"""

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from estimator.core.config import settings
from estimator.trades.templates import (
    DEFAULT_WIZARD_TEMPLATES,
    WizardTemplate,
    calculate_estimate_range,
    get_default_template,
)

TEMPLATES_URL = f"{settings.API_V1_PREFIX}/templates"


def _template(**overrides: object) -> WizardTemplate:
    values: dict = {
        "id": "t",
        "template_name": "Test",
        "trade_type": "painting",
        "pricing_type": "contract",
        "description": "",
        "base_labor_hours": 2,
        "base_material_cost": 100,
        "complexity_multipliers": {"room_count": 150},
    }
    values.update(overrides)
    return WizardTemplate(**values)


@pytest.mark.smoke
def test_range_scales_labor_and_material_by_complexity() -> None:
    """Test hours x rate x multiplier plus material x multiplier."""
    result = calculate_estimate_range(_template(complexity_multipliers={}), {}, "complex", 50)
    assert result is not None
    assert result.total == pytest.approx(2 * 50 * 1.3 + 100 * 1.3)
    assert result.low == result.high == result.total


def test_range_adds_per_parameter_amounts() -> None:
    result = calculate_estimate_range(_template(), {"room_count": 3, "paint_type": "premium"}, "standard", 50)
    assert result is not None
    assert result.total == pytest.approx(100 + 100 + 3 * 150)


def test_range_ignores_non_numeric_and_unknown_complexity() -> None:
    """Test that bools and strings are skipped and unknown levels count as 1.0."""
    result = calculate_estimate_range(_template(), {"room_count": True, "other": 5}, "extreme", 50)
    assert result is not None
    assert result.total == pytest.approx(200)


def test_range_without_template_is_none() -> None:
    assert calculate_estimate_range(None, {"room_count": 1}, "standard", 50) is None


def test_default_templates_cover_each_trade() -> None:
    """Test hourly and contract built-ins per trade."""
    trades = {t.trade_type for t in DEFAULT_WIZARD_TEMPLATES}
    assert trades == {"framing", "drywall", "drywall_finishing", "painting"}
    for trade in trades:
        kinds = {t.pricing_type for t in DEFAULT_WIZARD_TEMPLATES if t.trade_type == trade}
        assert kinds == {"hourly", "contract"}
    assert get_default_template("default-painting-contract") is not None
    assert get_default_template("missing") is None


def test_list_includes_defaults(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.get(TEMPLATES_URL, headers=auth_headers)
    assert response.status_code == 200
    ids = {t["id"] for t in response.json()}
    assert {t.id for t in DEFAULT_WIZARD_TEMPLATES} <= ids
    assert all(t["is_default"] for t in response.json())


def test_own_template_replaces_defaults_for_trade(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test that built-ins disappear for trades with an own template."""
    response = client.post(
        TEMPLATES_URL,
        headers=auth_headers,
        json={
            "template_name": "My Painting",
            "trade_type": "painting",
            "pricing_type": "contract",
            "base_labor_hours": 3,
            "base_material_cost": 80,
            "complexity_multipliers": {"room_count": 100},
        },
    )
    assert response.status_code == 201
    own_id = response.json()["id"]

    listed = client.get(TEMPLATES_URL, headers=auth_headers, params={"trade_type": "painting"}).json()
    assert [t["id"] for t in listed] == [own_id]
    assert listed[0]["is_default"] is False


def test_hide_and_unhide_default(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(
        f"{TEMPLATES_URL}/hide", headers=auth_headers, json={"template_ids": ["default-framing-hourly"]}
    )
    assert response.status_code == 200
    assert response.json()["hidden_template_ids"] == ["default-framing-hourly"]

    ids = {t["id"] for t in client.get(TEMPLATES_URL, headers=auth_headers).json()}
    assert "default-framing-hourly" not in ids

    with_hidden = client.get(TEMPLATES_URL, headers=auth_headers, params={"include_hidden": True}).json()
    assert "default-framing-hourly" in {t["id"] for t in with_hidden}

    client.post(f"{TEMPLATES_URL}/unhide", headers=auth_headers, json={"template_ids": ["default-framing-hourly"]})
    ids = {t["id"] for t in client.get(TEMPLATES_URL, headers=auth_headers).json()}
    assert "default-framing-hourly" in ids


def test_hide_requires_ids(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(f"{TEMPLATES_URL}/hide", headers=auth_headers, json={"template_ids": []})
    assert response.status_code == 422


def test_complete_onboarding(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(f"{TEMPLATES_URL}/onboarding/complete", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["templates_onboarded"] is True


def test_copy_default_template(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.post(f"{TEMPLATES_URL}/default-drywall-contract/copy", headers=auth_headers)
    assert response.status_code == 201
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["complexity_multipliers"] == {"sheet_count": 25}


def test_get_default_and_missing_template(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.get(f"{TEMPLATES_URL}/default-painting-hourly", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["is_default"] is True
    assert client.get(f"{TEMPLATES_URL}/9999", headers=auth_headers).status_code == 404


def test_templates_scoped_to_contractor(
    client: TestClient, auth_headers: Dict[str, str], other_headers: Dict[str, str]
) -> None:
    created = client.post(
        TEMPLATES_URL,
        headers=auth_headers,
        json={"template_name": "Mine", "trade_type": "framing"},
    ).json()
    assert client.get(f"{TEMPLATES_URL}/{created['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"{TEMPLATES_URL}/{created['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"{TEMPLATES_URL}/{created['id']}", headers=auth_headers).status_code == 204
