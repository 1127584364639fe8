"""
Estimate template schemas.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from estimator.models.template import PricingType


class TemplateBase(BaseModel):
    template_name: str = Field(min_length=1, max_length=255)
    trade_type: str = Field(min_length=1, max_length=50)
    pricing_type: PricingType = PricingType.CONTRACT
    description: Optional[str] = None
    base_labor_hours: float = Field(default=0, ge=0)
    base_material_cost: float = Field(default=0, ge=0)
    complexity_multipliers: Dict[str, float] = Field(default_factory=dict)
    required_fields: Dict[str, Any] = Field(default_factory=dict)


class TemplateCreate(TemplateBase):
    pass


class TemplateUpdate(BaseModel):
    template_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    pricing_type: Optional[PricingType] = None
    description: Optional[str] = None
    base_labor_hours: Optional[float] = Field(default=None, ge=0)
    base_material_cost: Optional[float] = Field(default=None, ge=0)
    complexity_multipliers: Optional[Dict[str, float]] = None
    required_fields: Optional[Dict[str, Any]] = None


class TemplateResponse(TemplateBase):
    """
    A template as listed to the contractor.

    Built-in templates have string ids (``default-painting-hourly``) and
    ``is_default`` set; the contractor's own templates have integer ids.
    """

    id: Union[int, str]
    is_default: bool = False
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HideTemplatesRequest(BaseModel):
    template_ids: list[str] = Field(min_length=1)
