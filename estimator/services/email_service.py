"""
Estimate email delivery through the Resend HTTP API.
"""

import base64
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape

from estimator.core.config import settings
from estimator.core.logging import get_logger
from estimator.services.pdf_service import format_currency, format_date, format_range

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=select_autoescape(["html"]))


class EmailServiceError(Exception):
    """The email provider rejected the message or could not be reached."""


def attachment_filename(recipient_name: str, sent_on: Optional[datetime] = None) -> str:
    """``estimate-jane-doe-2026-01-05.pdf``"""
    sent_on = sent_on or datetime.now(timezone.utc)
    slug = re.sub(r"\s+", "-", recipient_name.strip().lower())
    return f"estimate-{slug}-{sent_on.strftime('%Y-%m-%d')}.pdf"


def render_estimate_email(
    company_name: str,
    contractor_email: str,
    recipient_name: str,
    range_low: float,
    range_high: float,
    project_name: Optional[str] = None,
    project_description: Optional[str] = None,
    valid_until: Optional[datetime] = None,
    contractor_phone: Optional[str] = None,
    logo_url: Optional[str] = None,
) -> str:
    is_range = round(range_low) != round(range_high)
    amount = format_range(range_low, range_high, range_high) if is_range else format_currency(range_high)
    return _env.get_template("estimate_email.html").render(
        company_name=company_name,
        contractor_email=contractor_email,
        contractor_phone=contractor_phone,
        logo_url=logo_url,
        recipient_name=recipient_name,
        project_name=project_name,
        project_description=project_description,
        is_range=is_range,
        amount=amount,
        valid_until=format_date(valid_until),
    )


class EmailService:
    """Sends estimate emails; one instance per request."""

    def __init__(self, api_key: Optional[str] = None, client: Optional[httpx.Client] = None):
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.client = client

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def send_estimate(
        self,
        *,
        company_name: str,
        reply_to: str,
        to: str,
        html: str,
        pdf_bytes: bytes,
        filename: str,
    ) -> str:
        """
        Send an estimate with its PDF attached.

        Args:
            company_name: Shown as the sender name and in the subject
            reply_to: Contractor email replies go to
            to: Recipient email
            html: Rendered message body
            pdf_bytes: Attachment content
            filename: Attachment file name

        Returns:
            Provider message id

        Raises:
            EmailServiceError: If email is not configured or the provider
                rejects the message
            httpx.HTTPError: If the provider cannot be reached
        """
        if not self.enabled:
            raise EmailServiceError("Email service not configured")

        payload: Dict[str, Any] = {
            "from": f"{company_name} <{settings.RESEND_FROM_EMAIL}>",
            "to": [to],
            "reply_to": reply_to,
            "subject": f"Your Estimate from {company_name}",
            "html": html,
            "attachments": [{"filename": filename, "content": base64.b64encode(pdf_bytes).decode("ascii")}],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        if self.client is not None:
            resp = self.client.post(settings.RESEND_API_URL, json=payload, headers=headers)
        else:
            resp = httpx.post(
                settings.RESEND_API_URL,
                json=payload,
                headers=headers,
                timeout=settings.RESEND_TIMEOUT_SECONDS,
            )

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.error(f"Email provider returned {resp.status_code}: {message}")
            raise EmailServiceError(message)

        message_id = resp.json().get("id")
        logger.info(f"Estimate email sent to {to} (message {message_id})")
        return message_id


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    return body.get("message") or body.get("error") or f"HTTP {resp.status_code}"
