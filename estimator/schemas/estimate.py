"""
Estimate schemas for API request/response validation.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, model_validator

from estimator.models.estimate import EstimateStatus
from estimator.schemas.wizard import SendEstimateForm, validate_email_address


class EstimateCreate(BaseModel):
    """
    New estimate.

    The range comes from, in order: the template (``template_id``), the trade
    calculator when ``template_type`` names one, or the explicit range.
    Without a client the homeowner name and a valid email are required.
    """

    template_type: str = Field(min_length=1, max_length=50)
    client_id: Optional[int] = None
    template_id: Optional[Union[int, str]] = None
    complexity: str = "standard"
    homeowner_name: Optional[str] = None
    homeowner_email: Optional[str] = None
    homeowner_phone: Optional[str] = None
    project_description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)
    range_low: Optional[float] = Field(default=None, ge=0)
    range_high: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def recipient_required_without_client(self) -> "EstimateCreate":
        if self.client_id is None:
            form = SendEstimateForm(
                homeowner_name=self.homeowner_name,
                homeowner_email=self.homeowner_email,
                homeowner_phone=self.homeowner_phone,
                project_description=self.project_description,
            )
            self.homeowner_name = form.homeowner_name
            self.homeowner_email = form.homeowner_email
        elif self.homeowner_email:
            self.homeowner_email = validate_email_address(self.homeowner_email)
        return self

    @model_validator(mode="after")
    def range_is_ordered(self) -> "EstimateCreate":
        if self.range_low is not None and self.range_high is not None and self.range_low > self.range_high:
            raise ValueError("range_low must not exceed range_high")
        return self


class EstimateUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    client_id: Optional[int] = None
    homeowner_name: Optional[str] = Field(default=None, min_length=1)
    homeowner_email: Optional[str] = None
    homeowner_phone: Optional[str] = None
    project_description: Optional[str] = None
    status: Optional[EstimateStatus] = None
    complexity: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    range_low: Optional[float] = Field(default=None, ge=0)
    range_high: Optional[float] = Field(default=None, ge=0)


class EstimateResponse(BaseModel):
    id: int
    contractor_id: int
    client_id: Optional[int] = None
    template_id: Optional[int] = None
    template_type: str
    homeowner_name: str
    homeowner_email: Optional[str] = None
    homeowner_phone: Optional[str] = None
    project_description: Optional[str] = None
    parameters: Dict[str, Any]
    range_low: float
    range_high: float
    status: EstimateStatus
    expires_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EstimateCalculateRequest(BaseModel):
    """Price a template without saving anything."""

    template_id: Union[int, str]
    parameters: Dict[str, Any] = Field(default_factory=dict)
    complexity: str = "standard"
    hourly_rate: Optional[float] = Field(default=None, ge=0)


class EstimateRangeResponse(BaseModel):
    low: float
    high: float
    total: float
