"""
Tests for estimate email rendering and delivery.
"""

import base64
import json
from datetime import datetime

import httpx
import pytest

from estimator.core.config import settings
from estimator.services.email_service import (
    EmailService,
    EmailServiceError,
    attachment_filename,
    render_estimate_email,
)


def _service(handler) -> EmailService:
    return EmailService(api_key="re_test", client=httpx.Client(transport=httpx.MockTransport(handler)))


def _send(service: EmailService) -> str:
    return service.send_estimate(
        company_name="Acme Drywall",
        reply_to="acme@example.com",
        to="jane@example.com",
        html="<p>Hi</p>",
        pdf_bytes=b"%PDF-1.4",
        filename="estimate-jane-doe-2026-01-05.pdf",
    )


def test_attachment_filename() -> None:
    assert attachment_filename("  Jane  Doe ", datetime(2026, 1, 5)) == "estimate-jane-doe-2026-01-05.pdf"


def test_render_range_email() -> None:
    html = render_estimate_email(
        company_name="Acme & Sons",
        contractor_email="acme@example.com",
        recipient_name="Jane",
        range_low=1000,
        range_high=1500,
        project_name="Kitchen",
        valid_until=datetime(2026, 2, 4),
        contractor_phone="555-0100",
    )
    assert "Acme &amp; Sons" in html
    assert "ESTIMATED RANGE" in html
    assert "$1,000 - $1,500" in html
    assert "February 4, 2026" in html
    assert "555-0100" in html


def test_render_single_amount_email() -> None:
    html = render_estimate_email(
        company_name="Acme", contractor_email="acme@example.com", recipient_name="Jane", range_low=900, range_high=900
    )
    assert "ESTIMATED TOTAL" in html
    assert "$900" in html
    assert "valid until" not in html


@pytest.mark.smoke
def test_send_posts_message_with_attachment() -> None:
    """Test the request sent to the email provider."""
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "msg_123"})

    assert _send(_service(handler)) == "msg_123"
    assert captured["url"] == settings.RESEND_API_URL
    assert captured["auth"] == "Bearer re_test"

    body = captured["body"]
    assert body["from"] == f"Acme Drywall <{settings.RESEND_FROM_EMAIL}>"
    assert body["to"] == ["jane@example.com"]
    assert body["reply_to"] == "acme@example.com"
    assert body["subject"] == "Your Estimate from Acme Drywall"
    assert base64.b64decode(body["attachments"][0]["content"]) == b"%PDF-1.4"


def test_provider_error_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "Invalid `to` field"})

    with pytest.raises(EmailServiceError, match="Invalid `to` field"):
        _send(_service(handler))


def test_provider_error_without_json() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="")

    with pytest.raises(EmailServiceError, match="HTTP 502"):
        _send(_service(handler))


def test_disabled_without_api_key() -> None:
    service = EmailService(api_key="")
    assert not service.enabled
    with pytest.raises(EmailServiceError):
        _send(service)
