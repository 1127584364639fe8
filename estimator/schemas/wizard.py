"""
Validation for the estimate and project wizard steps.

The create endpoints reuse these rules, so a request that would fail a
wizard step fails the API call the same way.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

ProjectTradeType = Literal["drywall_hanging", "drywall_finishing", "painting"]


def _required(value: Optional[str], message: str) -> str:
    if value is None or not value.strip():
        raise ValueError(message)
    return value.strip()


class SendEstimateWithClientForm(BaseModel):
    """Recipient step when an existing client is selected."""

    estimate_name: Optional[str] = None
    project_description: Optional[str] = None


class SendEstimateForm(SendEstimateWithClientForm):
    """Recipient step with a homeowner typed in by hand."""

    homeowner_name: str
    homeowner_email: str
    homeowner_phone: Optional[str] = None

    @field_validator("homeowner_name", mode="before")
    @classmethod
    def name_required(cls, v: Optional[str]) -> str:
        return _required(v, "Name is required")

    @field_validator("homeowner_email", mode="before")
    @classmethod
    def email_required(cls, v: Optional[str]) -> str:
        email = _required(v, "Email is required")
        return validate_email_address(email)


class TemplateStepForm(BaseModel):
    template_id: str
    estimate_name: Optional[str] = None

    @field_validator("template_id", mode="before")
    @classmethod
    def template_required(cls, v: object) -> str:
        return _required(None if v is None else str(v), "Please select a template")


class ComplexityStepForm(BaseModel):
    complexity: Literal["simple", "standard", "complex"]


class ProjectSendEstimateWithClientForm(BaseModel):
    project_name: str
    project_description: Optional[str] = None

    @field_validator("project_name", mode="before")
    @classmethod
    def project_name_required(cls, v: Optional[str]) -> str:
        return _required(v, "Project name is required")


class ProjectSendEstimateForm(ProjectSendEstimateWithClientForm):
    homeowner_name: str
    homeowner_email: str
    homeowner_phone: Optional[str] = None

    @field_validator("homeowner_name", mode="before")
    @classmethod
    def name_required(cls, v: Optional[str]) -> str:
        return _required(v, "Name is required")

    @field_validator("homeowner_email", mode="before")
    @classmethod
    def email_required(cls, v: Optional[str]) -> str:
        email = _required(v, "Email is required")
        return validate_email_address(email)


class TradeSelectionForm(BaseModel):
    enabled_trades: List[ProjectTradeType] = Field(min_length=1)
    project_name: Optional[str] = None


class RoomForm(BaseModel):
    name: str
    length_feet: int = Field(ge=1)
    length_inches: int = Field(default=0, ge=0, le=11)
    width_feet: int = Field(ge=1)
    width_inches: int = Field(default=0, ge=0, le=11)
    height_feet: int = Field(ge=1)
    height_inches: int = Field(default=0, ge=0, le=11)

    @field_validator("name", mode="before")
    @classmethod
    def room_name_required(cls, v: Optional[str]) -> str:
        return _required(v, "Room name is required")


class RoomsStepForm(BaseModel):
    rooms: List[RoomForm] = Field(min_length=1)


class _EmailCheck(BaseModel):
    email: EmailStr


def validate_email_address(value: str) -> str:
    """Validate with the same email rules as the rest of the API."""
    try:
        return str(_EmailCheck(email=value).email)
    except ValueError:
        raise ValueError("Please enter a valid email") from None
