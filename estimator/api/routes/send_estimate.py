"""
Send an estimate PDF to a homeowner by email.

Errors are returned as ``{"error": message}`` bodies, matching what the
browser client displays.
"""

import re
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from estimator.api.deps import SessionDep, get_optional_profile
from estimator.core.logging import get_logger
from estimator.models.profile import Profile
from estimator.schemas.send_estimate import REQUIRED_FIELDS, SendEstimateRequest, SendEstimateResponse
from estimator.services.email_service import EmailService, EmailServiceError, attachment_filename, render_estimate_email
from estimator.services.estimate_service import EstimateService
from estimator.services.pdf_service import generate_pdf
from estimator.services.profile_service import ProfileService
from estimator.services.project_service import ProjectService

logger = get_logger(__name__)

router = APIRouter(tags=["send-estimate"])

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _validation_message(e: ValidationError) -> str:
    first = e.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid {location}: {first.get('msg')}" if location else str(first.get("msg"))


@router.post("/send-estimate")
async def send_estimate(
    request: Request,
    session: SessionDep,
    profile: Annotated[Optional[Profile], Depends(get_optional_profile)],
) -> JSONResponse:
    """
    Render the estimate PDF, email it to the recipient and mark the linked
    estimate or project as sent.

    Responses:
        200 ``{"success": true, "messageId": ...}``;
        400 for missing fields, a bad email or an invalid body;
        401 without a valid token;
        500 when the profile, PDF or email provider fails
    """
    try:
        if profile is None:
            return _error("Unauthorized", status.HTTP_401_UNAUTHORIZED)

        body: Any = await request.json()
        if not isinstance(body, dict) or any(not body.get(field) for field in REQUIRED_FIELDS):
            return _error(
                "Missing required fields: recipientEmail, recipientName, pdfData", status.HTTP_400_BAD_REQUEST
            )

        if not isinstance(body["recipientEmail"], str) or not EMAIL_PATTERN.fullmatch(body["recipientEmail"]):
            return _error("Invalid email format", status.HTTP_400_BAD_REQUEST)

        try:
            send_request = SendEstimateRequest.model_validate(body)
        except ValidationError as e:
            return _error(_validation_message(e), status.HTTP_400_BAD_REQUEST)

        # Database, PDF rendering and the provider call all block
        return await run_in_threadpool(_deliver, session, profile.id, send_request)  # type: ignore[arg-type]
    except Exception:
        logger.exception("Send estimate failed")
        return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


def _deliver(session: Session, profile_id: int, send_request: SendEstimateRequest) -> JSONResponse:
    try:
        contractor = ProfileService.get_by_id(session, profile_id)
    except SQLAlchemyError as e:
        logger.error(f"Profile lookup failed for {profile_id}: {e}")
        contractor = None
    if contractor is None:
        return _error("Could not fetch contractor profile", status.HTTP_500_INTERNAL_SERVER_ERROR)

    email = EmailService()
    if not email.enabled:
        return _error(
            "Email service not configured. Please set RESEND_API_KEY.", status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    try:
        pdf_bytes = generate_pdf(send_request.pdf_data, send_request.detail_level)
    except Exception:
        logger.exception("PDF generation failed")
        return _error("Failed to generate PDF", status.HTTP_500_INTERNAL_SERVER_ERROR)

    html = render_estimate_email(
        company_name=contractor.company_name,
        contractor_email=contractor.email,
        contractor_phone=contractor.phone,
        logo_url=contractor.logo_url,
        recipient_name=send_request.recipient_name,
        range_low=send_request.range_low,
        range_high=send_request.range_high,
        project_name=send_request.project_name,
        project_description=send_request.project_description,
        valid_until=send_request.pdf_data.valid_until,
    )

    try:
        message_id = email.send_estimate(
            company_name=contractor.company_name,
            reply_to=contractor.email,
            to=send_request.recipient_email,
            html=html,
            pdf_bytes=pdf_bytes,
            filename=attachment_filename(send_request.recipient_name),
        )
    except EmailServiceError as e:
        return _error(f"Failed to send email: {e}", status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("Email send failed")
        return _error("Failed to send email", status.HTTP_500_INTERNAL_SERVER_ERROR)

    if send_request.estimate_id is not None:
        EstimateService(session, contractor).mark_sent(send_request.estimate_id)
    if send_request.project_id is not None:
        ProjectService(session, contractor).mark_sent(send_request.project_id)

    response = SendEstimateResponse(message_id=message_id)
    return JSONResponse(response.model_dump(by_alias=True))
