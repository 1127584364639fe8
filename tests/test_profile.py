"""
Tests for profile and pricing settings.
"""

from typing import Dict

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError
from sqlmodel import Session

from estimator.core.config import settings
from estimator.models.profile import Profile
from estimator.schemas.profile import SettingsForm
from estimator.schemas.rates import CustomRates, TradeComplexity
from estimator.services.profile_service import ProfileService
from estimator.trades import drywall_finishing


def test_read_profile(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test reading the current profile."""
    response = client.get(f"{settings.API_V1_PREFIX}/profile/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "contractor@example.com"
    assert data["company_name"] == "Acme Drywall"
    assert data["hourly_rate"] == 50


def test_update_profile(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test partial profile update."""
    response = client.patch(
        f"{settings.API_V1_PREFIX}/profile/me",
        headers=auth_headers,
        json={"company_name": "Acme Walls", "service_areas": ["Denver", "Boulder"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["company_name"] == "Acme Walls"
    assert data["service_areas"] == ["Denver", "Boulder"]
    assert data["hourly_rate"] == 50


def test_settings_defaults_to_industry_rates(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test that unset rates show the industry mid rates."""
    response = client.get(f"{settings.API_V1_PREFIX}/profile/settings", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["sqft_standard"] == drywall_finishing.RATES["sqft_standard"].mid
    assert data["addon_sanding"] == 150
    assert data["hanging_delivery"] == 150
    assert data["hourly_rate"] == 50


def test_save_settings(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Test saving the settings form and reading it back."""
    response = client.put(
        f"{settings.API_V1_PREFIX}/profile/settings",
        headers=auth_headers,
        json={"hourly_rate": 65, "sqft_standard": 2.1, "hanging_delivery": 99},
    )
    assert response.status_code == 200
    assert response.json()["sqft_standard"] == 2.1

    response = client.get(f"{settings.API_V1_PREFIX}/profile/settings", headers=auth_headers)
    data = response.json()
    assert data["hourly_rate"] == 65
    assert data["sqft_standard"] == 2.1
    assert data["hanging_delivery"] == 99


def test_save_settings_rejects_negative_rate(client: TestClient, auth_headers: Dict[str, str]) -> None:
    response = client.put(
        f"{settings.API_V1_PREFIX}/profile/settings",
        headers=auth_headers,
        json={"sqft_standard": -1},
    )
    assert response.status_code == 422


def test_settings_form_messages() -> None:
    """Test the settings form error message and blank hourly rate."""
    with pytest.raises(ValidationError, match="Must be 0 or greater"):
        SettingsForm(linear_joints=-0.5)
    assert SettingsForm(hourly_rate="").hourly_rate is None


def test_save_settings_keeps_other_sections(session: Session, contractor: Profile) -> None:
    """Test that saving the form keeps overrides it does not edit."""
    contractor.custom_rates = CustomRates(
        painting_complexity=TradeComplexity(complex=1.5),
        finishing_material_prices={"joint_compound_bucket": 21.0},
    ).model_dump(exclude_none=True)
    session.add(contractor)
    session.commit()

    ProfileService.save_settings(session, contractor, SettingsForm(sqft_standard=2.0))

    rates = ProfileService.custom_rates(contractor)
    assert rates.painting_complexity is not None
    assert rates.painting_complexity.complex == 1.5
    assert rates.finishing_material_prices == {"joint_compound_bucket": 21.0}
    assert rates.drywall_finishing is not None
    assert rates.drywall_finishing.sqft_standard == 2.0
