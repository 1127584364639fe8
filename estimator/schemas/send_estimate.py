"""
Request and response bodies of the send-estimate endpoint.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from estimator.schemas.pdf import DETAIL_LEVELS, EstimatePDFData

REQUIRED_FIELDS = ("recipientEmail", "recipientName", "pdfData")


class SendEstimateRequest(BaseModel):
    """Checked for required fields and email format before validation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    estimate_id: Optional[int] = None
    project_id: Optional[int] = None
    recipient_email: str
    recipient_name: str
    recipient_phone: Optional[str] = None
    project_name: Optional[str] = None
    project_description: Optional[str] = None
    range_low: float = Field(default=0, ge=0)
    range_high: float = Field(default=0, ge=0)
    pdf_data: EstimatePDFData
    detail_level: str = "detailed"

    @field_validator("detail_level", mode="before")
    @classmethod
    def default_detail_level(cls, v: Optional[str]) -> str:
        """Missing or unknown levels render the detailed layout."""
        return v if v in DETAIL_LEVELS else "detailed"


class SendEstimateResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message_id: Optional[str] = None
