"""
Contractor profile service: accounts, authentication and pricing settings.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlmodel import Session, select

from estimator.core.logging import get_logger
from estimator.core.security import get_password_hash, verify_password
from estimator.models.profile import Profile
from estimator.schemas.profile import ProfileCreate, ProfileUpdate, SettingsForm
from estimator.schemas.rates import CustomRates

logger = get_logger(__name__)


class ProfileService:
    """Service class for contractor profile operations."""

    @staticmethod
    def get_by_email(session: Session, email: str) -> Optional[Profile]:
        """
        Retrieve a profile by email address.

        Args:
            session: Database session
            email: Email address to search for

        Returns:
            Profile if found, None otherwise
        """
        statement = select(Profile).where(Profile.email == email)
        return session.exec(statement).first()

    @staticmethod
    def get_by_id(session: Session, profile_id: int) -> Optional[Profile]:
        return session.get(Profile, profile_id)

    @staticmethod
    def create(session: Session, profile_create: ProfileCreate) -> Profile:
        """
        Create a new contractor profile with a hashed password.

        Args:
            session: Database session
            profile_create: Registration data

        Returns:
            Created profile
        """
        profile = Profile(
            email=profile_create.email,
            hashed_password=get_password_hash(profile_create.password),
            company_name=profile_create.company_name,
            trade_type=profile_create.trade_type,
            phone=profile_create.phone,
        )
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    @staticmethod
    def authenticate(session: Session, email: str, password: str) -> Optional[Profile]:
        """
        Authenticate a contractor by email and password.

        Returns:
            Profile if the credentials match an active account, None otherwise
        """
        profile = ProfileService.get_by_email(session, email)
        if not profile:
            return None
        if not verify_password(password, profile.hashed_password):
            return None
        if not profile.is_active:
            return None
        return profile

    @staticmethod
    def update(session: Session, profile: Profile, profile_update: ProfileUpdate) -> Profile:
        """Apply the fields present in ``profile_update``."""
        data = profile_update.model_dump(exclude_unset=True)
        if "custom_rates" in data:
            rates = profile_update.custom_rates
            data["custom_rates"] = rates.model_dump(exclude_none=True) if rates else None
        for key, value in data.items():
            setattr(profile, key, value)
        return ProfileService._save(session, profile)

    @staticmethod
    def custom_rates(profile: Profile) -> CustomRates:
        return CustomRates.from_json(profile.custom_rates)

    @staticmethod
    def get_settings(profile: Profile) -> SettingsForm:
        return SettingsForm.from_profile(
            profile.company_name, profile.hourly_rate, ProfileService.custom_rates(profile)
        )

    @staticmethod
    def save_settings(session: Session, profile: Profile, form: SettingsForm) -> Profile:
        """
        Store the settings form.

        The form's rates are merged into the existing overrides so sections
        it does not edit survive.
        """
        rates = form.to_custom_rates(ProfileService.custom_rates(profile))
        profile.custom_rates = rates.model_dump(exclude_none=True)
        profile.hourly_rate = form.hourly_rate
        if form.company_name is not None:
            profile.company_name = form.company_name
        logger.info(f"Pricing settings updated for profile {profile.id}")
        return ProfileService._save(session, profile)

    @staticmethod
    def hide_templates(session: Session, profile: Profile, template_ids: List[str]) -> Profile:
        hidden = list(profile.hidden_template_ids or [])
        for template_id in template_ids:
            if template_id not in hidden:
                hidden.append(template_id)
        profile.hidden_template_ids = hidden
        return ProfileService._save(session, profile)

    @staticmethod
    def unhide_templates(session: Session, profile: Profile, template_ids: List[str]) -> Profile:
        profile.hidden_template_ids = [t for t in (profile.hidden_template_ids or []) if t not in template_ids]
        return ProfileService._save(session, profile)

    @staticmethod
    def complete_template_onboarding(session: Session, profile: Profile) -> Profile:
        profile.templates_onboarded = True
        return ProfileService._save(session, profile)

    @staticmethod
    def _save(session: Session, profile: Profile) -> Profile:
        profile.updated_at = datetime.now(timezone.utc)
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile
