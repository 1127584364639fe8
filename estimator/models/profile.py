"""
Contractor profile model.
A profile is both the login account and the owner of every other record.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Column, Field, SQLModel


class TradeType(str, Enum):
    """Trade identifiers used across profiles, templates and estimates."""

    DRYWALL = "drywall"
    DRYWALL_FINISHING = "drywall_finishing"
    PAINTING = "painting"
    FRAMING = "framing"


class Profile(SQLModel, table=True):
    """
    Contractor profile with login credentials and pricing settings.

    Attributes:
        id: Primary key
        email: Unique email address (used for login and as reply-to on emails)
        hashed_password: Password hash
        company_name: Name shown on estimates and emails
        trade_type: Primary trade of the contractor
        hourly_rate: Labor rate used by hourly templates
        custom_rates: Per-trade rate overrides (see ``CustomRates``)
        service_areas: Cities or zip codes the contractor serves
        hidden_template_ids: Default template ids the contractor hid
        templates_onboarded: Whether the template onboarding step was finished
    """

    __tablename__ = "profiles"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str
    company_name: str = Field(default="", max_length=255)
    trade_type: Optional[str] = Field(default=None, max_length=50)
    phone: Optional[str] = Field(default=None, max_length=50)
    logo_url: Optional[str] = Field(default=None, max_length=1024)
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    custom_rates: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    service_areas: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    hidden_template_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    templates_onboarded: bool = Field(default=False)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
