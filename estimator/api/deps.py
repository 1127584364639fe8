"""
API dependencies for FastAPI dependency injection.
Provides the authenticated contractor profile to routes.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlmodel import Session

from estimator.core.config import settings
from estimator.core.logging import get_logger
from estimator.core.security import decode_access_token
from estimator.db.session import get_session
from estimator.models.profile import Profile
from estimator.schemas.token import TokenPayload
from estimator.services.profile_service import ProfileService

logger = get_logger(__name__)

# OAuth2 scheme for token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/login", auto_error=False)

SessionDep = Annotated[Session, Depends(get_session)]


def _profile_from_token(session: Session, token: str) -> Optional[Profile]:
    """
    Resolve a token to an active profile.

    Returns:
        The profile, or None when the token is invalid or the account is
        missing or inactive
    """
    try:
        subject = decode_access_token(token)
        if subject is None:
            logger.warning("Token missing subject claim")
            return None
        token_data = TokenPayload(sub=int(subject))
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        return None
    except ValueError:
        logger.warning("Invalid profile ID in token")
        return None

    profile = ProfileService.get_by_id(session, profile_id=token_data.sub)  # type: ignore[arg-type]
    if profile is None:
        logger.warning(f"Profile {token_data.sub} not found")
        return None
    if not profile.is_active:
        logger.warning(f"Inactive profile {profile.id} attempted access")
        return None
    return profile


def get_current_profile(
    session: SessionDep,
    token: Annotated[str, Depends(oauth2_scheme)],
) -> Profile:
    """
    Dependency to get the authenticated contractor from the JWT.

    Raises:
        HTTPException: If the token is invalid or the profile is missing or
            inactive
    """
    profile = _profile_from_token(session, token)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return profile


def get_optional_profile(
    session: SessionDep,
    token: Annotated[Optional[str], Depends(optional_oauth2_scheme)],
) -> Optional[Profile]:
    """Like ``get_current_profile`` but returns None instead of raising."""
    if not token:
        return None
    return _profile_from_token(session, token)


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
