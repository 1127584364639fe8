"""
Tests for multi-trade projects: rooms, trades and combined totals.
"""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from estimator.core.config import settings
from estimator.trades.geometry import RoomOverride
from estimator.trades.project import (
    ProjectRoomData,
    ProjectTradeData,
    calculate_project_estimate,
)

PROJECTS_URL = f"{settings.API_V1_PREFIX}/projects"

KITCHEN = {"name": "Kitchen", "length_feet": 12, "width_feet": 10, "height_feet": 8}


def _create(
    client: TestClient,
    headers: Dict[str, str],
    rooms: Optional[List[dict]] = None,
    **fields: object,
) -> dict:
    body = {
        "name": "Smith Remodel",
        "homeowner_name": "Jane Smith",
        "homeowner_email": "jane@example.com",
        "rooms": rooms if rooms is not None else [KITCHEN],
        **fields,
    }
    response = client.post(PROJECTS_URL, headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.smoke
def test_project_estimate_sums_trades() -> None:
    """Test hanging and painting priced over one shared room."""
    result = calculate_project_estimate(
        [ProjectRoomData(name="Kitchen")],
        [ProjectTradeData(trade_type="drywall_hanging"), ProjectTradeData(trade_type="painting")],
    )
    assert result.trades["drywall_hanging"].total == pytest.approx(17 * 41)
    # 352 wall sqft x 1.75 + 120 ceiling sqft x 1.75 x 1.2 labor, 472 sqft x 0.50 paint
    assert result.trades["painting"].total == pytest.approx(1104)
    assert result.combined_total == pytest.approx(697 + 1104)
    assert result.range_low == pytest.approx(697 + 1104 * 0.85)
    assert result.range_high == pytest.approx(697 + 1104 * 1.15)


def test_disabled_trades_are_skipped() -> None:
    result = calculate_project_estimate(
        [ProjectRoomData(name="Kitchen")],
        [ProjectTradeData(trade_type="painting"), ProjectTradeData(trade_type="drywall_hanging", enabled=False)],
    )
    assert list(result.trades) == ["painting"]


def test_disabled_entry_does_not_shadow_enabled_one() -> None:
    result = calculate_project_estimate(
        [ProjectRoomData(name="Kitchen")],
        [
            ProjectTradeData(trade_type="painting", enabled=False, parameters={"coat_count": 3}),
            ProjectTradeData(trade_type="painting"),
        ],
    )
    assert result.trades["painting"].total == pytest.approx(1104)


def test_room_override_excludes_room_for_one_trade() -> None:
    room = ProjectRoomData(name="Garage", trade_overrides={"painting": RoomOverride(excluded=True)})
    result = calculate_project_estimate(
        [room], [ProjectTradeData(trade_type="painting"), ProjectTradeData(trade_type="drywall_finishing")]
    )
    assert result.trades["painting"].total == 0
    # Level 4 finishing at 0.55/sqft over the whole room
    assert result.trades["drywall_finishing"].total == pytest.approx(472 * 0.55)


def test_project_needs_an_enabled_trade() -> None:
    with pytest.raises(ValueError):
        calculate_project_estimate([], [ProjectTradeData(trade_type="painting", enabled=False)])
    with pytest.raises(ValueError):
        calculate_project_estimate([], [ProjectTradeData(trade_type="framing")])


def test_create_project_with_rooms(client: TestClient, auth_headers: Dict[str, str]) -> None:
    project = _create(client, auth_headers)
    assert project["status"] == "draft"
    assert [t["trade_type"] for t in project["trades"]] == ["drywall_hanging", "drywall_finishing", "painting"]

    room = project["rooms"][0]
    assert room["wall_sqft"] == 352
    assert room["ceiling_sqft"] == 120
    assert room["total_sqft"] == 472
    assert project["range_high"] > project["range_low"] > 0


def test_create_project_validation(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test the wizard rules on project creation."""
    base = {"name": "Remodel", "homeowner_name": "Jane", "homeowner_email": "jane@example.com"}

    no_trades = {**base, "trades": [{"trade_type": "painting", "enabled": False}]}
    assert client.post(PROJECTS_URL, headers=auth_headers, json=no_trades).status_code == 422

    duplicate = {**base, "trades": [{"trade_type": "painting"}, {"trade_type": "painting"}]}
    assert client.post(PROJECTS_URL, headers=auth_headers, json=duplicate).status_code == 422

    bad_room = {**base, "rooms": [{**KITCHEN, "length_feet": 0}]}
    assert client.post(PROJECTS_URL, headers=auth_headers, json=bad_room).status_code == 422

    no_name = {**base, "name": " "}
    assert client.post(PROJECTS_URL, headers=auth_headers, json=no_name).status_code == 422


def test_rooms_are_recalculated(client: TestClient, auth_headers: Dict[str, str]) -> None:
    project = _create(client, auth_headers, rooms=[])
    url = f"{PROJECTS_URL}/{project['id']}/rooms"

    response = client.post(url, headers=auth_headers, json=KITCHEN)
    assert response.status_code == 201
    room = response.json()
    assert room["total_sqft"] == 472

    updated = client.put(
        f"{url}/{room['id']}",
        headers=auth_headers,
        json={**KITCHEN, "doors": [{"width": 36, "height": 80}], "include_ceiling": False},
    ).json()
    assert updated["openings_sqft"] == 20
    assert updated["wall_sqft"] == 332
    assert updated["total_sqft"] == 332

    assert client.delete(f"{url}/{room['id']}", headers=auth_headers).status_code == 204
    assert client.delete(f"{url}/{room['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"{PROJECTS_URL}/{project['id']}", headers=auth_headers).json()["rooms"] == []


def test_totals(client: TestClient, auth_headers: Dict[str, str]) -> None:
    project = _create(client, auth_headers, trades=[{"trade_type": "drywall_hanging"}, {"trade_type": "painting"}])

    response = client.get(f"{PROJECTS_URL}/{project['id']}/totals", headers=auth_headers)
    assert response.status_code == 200
    totals = response.json()
    assert set(totals["trades"]) == {"drywall_hanging", "painting"}
    assert totals["combined_total"] == pytest.approx(1801)
    assert totals["total_sqft"] == 472
    assert totals["range_low"] == pytest.approx(project["range_low"])


def test_set_and_remove_trade(client: TestClient, auth_headers: Dict[str, str]) -> None:
    project = _create(client, auth_headers, trades=[{"trade_type": "painting"}])
    url = f"{PROJECTS_URL}/{project['id']}/trades"

    response = client.put(
        url, headers=auth_headers, json={"trade_type": "drywall_finishing", "parameters": {"finish_level": 5}}
    )
    assert response.status_code == 200
    assert response.json()["range_high"] == pytest.approx(round(472 * 0.65))

    response = client.put(url, headers=auth_headers, json={"trade_type": "painting", "parameters": {"coat_count": 1}})
    assert response.status_code == 200

    trades = client.get(f"{PROJECTS_URL}/{project['id']}", headers=auth_headers).json()["trades"]
    assert [t["trade_type"] for t in trades] == ["painting", "drywall_finishing"]
    assert trades[0]["parameters"] == {"coat_count": 1}

    assert client.delete(f"{url}/painting", headers=auth_headers).status_code == 204
    assert client.delete(f"{url}/painting", headers=auth_headers).status_code == 404


def test_last_enabled_trade_cannot_be_removed(client: TestClient, auth_headers: Dict[str, str]) -> None:
    project = _create(client, auth_headers, trades=[{"trade_type": "painting"}])
    url = f"{PROJECTS_URL}/{project['id']}/trades"

    assert client.delete(f"{url}/painting", headers=auth_headers).status_code == 400
    disabled = client.put(url, headers=auth_headers, json={"trade_type": "painting", "enabled": False})
    assert disabled.status_code == 400

    trades = client.get(f"{PROJECTS_URL}/{project['id']}", headers=auth_headers).json()["trades"]
    assert [(t["trade_type"], t["enabled"]) for t in trades] == [("painting", True)]


def test_project_pdf(client: TestClient, auth_headers: Dict[str, str]) -> None:
    project = _create(client, auth_headers)
    response = client.get(f"{PROJECTS_URL}/{project['id']}/pdf", headers=auth_headers)
    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


def test_update_and_delete_project(client: TestClient, auth_headers: Dict[str, str]) -> None:
    project = _create(client, auth_headers)
    url = f"{PROJECTS_URL}/{project['id']}"

    response = client.patch(url, headers=auth_headers, json={"name": "Smith Kitchen", "status": "sent"})
    assert response.status_code == 200
    assert response.json()["name"] == "Smith Kitchen"

    sent = client.get(PROJECTS_URL, headers=auth_headers, params={"status": "sent"}).json()
    assert [p["id"] for p in sent] == [project["id"]]

    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.get(url, headers=auth_headers).status_code == 404


def test_projects_are_scoped_to_contractor(
    client: TestClient, auth_headers: Dict[str, str], other_headers: Dict[str, str]
) -> None:
    project = _create(client, auth_headers)
    url = f"{PROJECTS_URL}/{project['id']}"

    assert client.get(url, headers=other_headers).status_code == 404
    assert client.get(f"{url}/totals", headers=other_headers).status_code == 404
    assert client.post(f"{url}/rooms", headers=other_headers, json=KITCHEN).status_code == 404
    assert client.get(PROJECTS_URL, headers=other_headers).json() == []
