"""
Authentication routes for contractor registration and login.
Provides JWT token-based authentication.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from estimator.api.deps import SessionDep
from estimator.core.logging import get_logger
from estimator.core.security import create_access_token
from estimator.schemas.profile import ProfileCreate, ProfileResponse
from estimator.schemas.token import Token
from estimator.services.profile_service import ProfileService

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def register(profile_in: ProfileCreate, session: SessionDep) -> ProfileResponse:
    """
    Register a new contractor.

    Args:
        profile_in: Registration data
        session: Database session

    Returns:
        Created profile

    Raises:
        HTTPException: If the email is already registered
    """
    existing = ProfileService.get_by_email(session, email=profile_in.email)
    if existing:
        logger.warning(f"Registration attempt with existing email: {profile_in.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    profile = ProfileService.create(session, profile_create=profile_in)
    logger.info(f"New contractor registered: {profile.email} (ID: {profile.id})")

    return ProfileResponse.model_validate(profile)


@router.post("/login", response_model=Token)
def login(
    session: SessionDep,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
) -> Token:
    """
    OAuth2 compatible token login.

    Args:
        session: Database session
        form_data: OAuth2 form with username (email) and password

    Returns:
        Access token

    Raises:
        HTTPException: If credentials are invalid
    """
    profile = ProfileService.authenticate(session, email=form_data.username, password=form_data.password)
    if not profile:
        logger.warning(f"Failed login attempt for email: {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    access_token = create_access_token(subject=profile.id)
    logger.info(f"Contractor logged in: {profile.email} (ID: {profile.id})")

    return Token(access_token=access_token)
