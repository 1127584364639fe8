"""
Tests for PDF formatting helpers and rendering.
"""

from datetime import datetime

import pytest

from estimator.schemas.pdf import (
    EstimatePDFData,
    PDFAddon,
    PDFContractor,
    PDFLineItem,
    PDFRecipient,
    PDFRoom,
    PDFSingleTrade,
    PDFTradeBreakdown,
)
from estimator.services.pdf_service import format_currency, format_date, format_range, generate_pdf, room_table


def _data(**overrides: object) -> EstimatePDFData:
    values: dict = {
        "contractor": PDFContractor(company_name="Acme Drywall", email="acme@example.com", phone="555-0100"),
        "recipient": PDFRecipient(name="José Núñez", email="jose@example.com"),
        "project_name": "Kitchen Remodel",
        "total": 2500,
        "range_low": 2000,
        "range_high": 3000,
        "created_at": datetime(2026, 1, 5),
        "valid_until": datetime(2026, 2, 4),
    }
    values.update(overrides)
    return EstimatePDFData(**values)


def test_format_currency() -> None:
    assert format_currency(1234.4) == "$1,234"
    assert format_currency(0) == "$0"
    assert format_currency(-50) == "($50)"


def test_format_currency_rounds_halves_up() -> None:
    assert format_currency(2.5) == "$3"
    assert format_currency(1234.5) == "$1,235"
    assert format_currency(-2.5) == "($3)"
    assert format_range(999.5, 1500.5, 1250) == "$1,000 - $1,501"


def test_room_table_omits_subtotal_for_unpriced_rooms() -> None:
    rooms = [PDFRoom(name="Kitchen", wall_sqft=352, ceiling_sqft=120, total_sqft=472)]
    headers, widths, rows = room_table(rooms, 100)
    assert headers[-1] == "Total (sqft)"
    assert len(widths) == 4
    assert rows == [["Kitchen", "352", "120", "472"]]


def test_room_table_shows_priced_rooms() -> None:
    rooms = [
        PDFRoom(name="Kitchen", wall_sqft=352, ceiling_sqft=120, total_sqft=472, subtotal=697.4),
        PDFRoom(name="Hall", wall_sqft=80.5, ceiling_sqft=0, total_sqft=80.5),
    ]
    headers, widths, rows = room_table(rooms, 100)
    assert headers[-1] == "Subtotal"
    assert sum(widths) == pytest.approx(100)
    assert rows[0][-1] == "$697"
    assert rows[1] == ["Hall", "80.50", "0", "80.50", ""]


def test_format_date_and_range() -> None:
    assert format_date(datetime(2026, 1, 5)) == "January 5, 2026"
    assert format_date(None) == ""
    assert format_range(1000, 1500, 1250) == "$1,000 - $1,500"
    assert format_range(1000.2, 999.9, 1000) == "$1,000"
    assert format_range(None, None, 1250) == "$1,250"


def test_camel_case_fields_are_accepted() -> None:
    data = EstimatePDFData.model_validate(
        {
            "contractor": {"companyName": "Acme", "email": "a@example.com", "logoUrl": "https://x/logo.png"},
            "recipient": {"name": "Jane", "email": "jane@example.com"},
            "total": 10,
            "rangeLow": 8,
            "createdAt": "2026-01-05T00:00:00",
        }
    )
    assert data.contractor.logo_url == "https://x/logo.png"
    assert data.range_low == 8


@pytest.mark.parametrize("detail_level", ["simple", "detailed", "extra_detailed", "bogus"])
def test_single_trade_pdf(detail_level: str) -> None:
    data = _data(
        single_trade=PDFSingleTrade(
            trade_type="drywall_finishing",
            trade_label="Drywall Finishing",
            line_items=[
                PDFLineItem(description="Standard Area", quantity=800, unit="sqft", rate=0.5, amount=400),
                PDFLineItem(description="Hourly Work", quantity=2.5, unit="hours", rate=50, amount=125),
            ],
            material_subtotal=120,
            labor_subtotal=405,
            addons_subtotal=50,
            addons=[PDFAddon(label="Extra Sanding", quantity=1, total=50)],
            complexity_label="Complex (1.25x)",
            complexity_adjustment=143.75,
        ),
        subtotal=575,
    )
    assert generate_pdf(data, detail_level).startswith(b"%PDF")


@pytest.mark.parametrize("detail_level", ["simple", "detailed", "extra_detailed"])
def test_project_pdf(detail_level: str) -> None:
    room = PDFRoom(name="Kitchen", wall_sqft=352, ceiling_sqft=120, total_sqft=472, subtotal=697)
    data = _data(
        trades=[
            PDFTradeBreakdown(trade_type="drywall_hanging", label="Drywall Hanging", rooms=[room], total=697),
            PDFTradeBreakdown(
                trade_type="painting",
                label="Painting",
                line_items=[PDFLineItem(description="Walls", amount=1104)],
                total=1104,
            ),
        ],
        rooms=[room],
        total=1801,
    )
    assert generate_pdf(data, detail_level).startswith(b"%PDF")


def test_pdf_without_range_or_details() -> None:
    data = _data(range_low=None, range_high=None, valid_until=None, project_name=None)
    assert generate_pdf(data).startswith(b"%PDF")
