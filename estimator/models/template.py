"""
Estimate template model.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from sqlmodel import JSON, Column, Field, SQLModel


class PricingType(str, Enum):
    """How a template prices the job."""

    HOURLY = "hourly"
    CONTRACT = "contract"
    HYBRID = "hybrid"


class EstimateTemplate(SQLModel, table=True):
    """
    A reusable pricing recipe for one trade.

    ``complexity_multipliers`` maps a numeric job parameter (``room_count``,
    ``square_feet``...) to a dollar amount added per unit.
    """

    __tablename__ = "estimate_templates"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="profiles.id", index=True)
    template_name: str = Field(max_length=255)
    trade_type: str = Field(max_length=50, index=True)
    pricing_type: PricingType = Field(default=PricingType.CONTRACT)
    description: Optional[str] = None
    base_labor_hours: float = Field(default=0, ge=0)
    base_material_cost: float = Field(default=0, ge=0)
    complexity_multipliers: Dict[str, float] = Field(default_factory=dict, sa_column=Column(JSON))
    required_fields: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
