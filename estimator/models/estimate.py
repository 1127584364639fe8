"""
Estimate model and the status lifecycle shared with projects.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from sqlmodel import JSON, Column, Field, SQLModel


class EstimateStatus(str, Enum):
    """Lifecycle of an estimate or project sent to a homeowner."""

    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class Estimate(SQLModel, table=True):
    """
    Single-trade estimate.

    ``parameters`` holds the trade calculator input (line items, sheets,
    addons...) so the estimate can be recalculated and rendered later.
    """

    __tablename__ = "estimates"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="profiles.id", index=True)
    client_id: Optional[int] = Field(default=None, foreign_key="clients.id")
    template_id: Optional[int] = Field(default=None, foreign_key="estimate_templates.id")
    template_type: str = Field(max_length=50)
    homeowner_name: str = Field(max_length=255)
    homeowner_email: Optional[str] = Field(default=None, max_length=255)
    homeowner_phone: Optional[str] = Field(default=None, max_length=50)
    project_description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    range_low: float = Field(default=0)
    range_high: float = Field(default=0)
    status: EstimateStatus = Field(default=EstimateStatus.DRAFT)
    expires_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
