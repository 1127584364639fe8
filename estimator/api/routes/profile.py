"""
Profile routes: the authenticated contractor's account and pricing settings.
"""

from fastapi import APIRouter

from estimator.api.deps import CurrentProfile, SessionDep
from estimator.schemas.profile import ProfileResponse, ProfileUpdate, SettingsForm
from estimator.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
def read_profile(profile: CurrentProfile) -> ProfileResponse:
    """Get the current contractor's profile."""
    return ProfileResponse.model_validate(profile)


@router.patch("/me", response_model=ProfileResponse)
def update_profile(profile_in: ProfileUpdate, profile: CurrentProfile, session: SessionDep) -> ProfileResponse:
    """Update company details, hourly rate or raw rate overrides."""
    updated = ProfileService.update(session, profile, profile_in)
    return ProfileResponse.model_validate(updated)


@router.get("/settings", response_model=SettingsForm)
def read_settings(profile: CurrentProfile) -> SettingsForm:
    """
    Pricing settings as shown on the settings form.

    Unset rates are filled with the industry defaults.
    """
    return ProfileService.get_settings(profile)


@router.put("/settings", response_model=SettingsForm)
def save_settings(form: SettingsForm, profile: CurrentProfile, session: SessionDep) -> SettingsForm:
    """Save the settings form; rate sections it does not edit are kept."""
    updated = ProfileService.save_settings(session, profile, form)
    return ProfileService.get_settings(updated)
