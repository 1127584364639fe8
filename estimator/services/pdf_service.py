"""
Estimate PDF rendering with fpdf2.

Three layouts share a header, a range box and a footer:

- ``simple``: totals only
- ``detailed``: line items and subtotals
- ``extra_detailed``: room-by-room breakdown plus a project summary
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO
from typing import Iterable, List, Optional, Sequence, Tuple

from fpdf import FPDF

from estimator.core.logging import get_logger
from estimator.models.estimate import Estimate
from estimator.models.profile import Profile
from estimator.models.project import Project
from estimator.schemas.pdf import (
    DETAIL_LEVELS,
    EstimatePDFData,
    PDFAddon,
    PDFContractor,
    PDFLineItem,
    PDFRecipient,
    PDFRoom,
    PDFSingleTrade,
    PDFTradeBreakdown,
)
from estimator.schemas.rates import CustomRates
from estimator.services.estimate_service import CALCULATOR_TRADES, TradeEstimate, calculate_trade
from estimator.trades import drywall_finishing, drywall_hanging, framing, painting
from estimator.trades.project import TRADE_LABELS, ProjectEstimate
from estimator.trades.shared import AddonLine

logger = get_logger(__name__)

ACCENT = (37, 99, 235)
MUTED = (110, 110, 110)
RULE = (200, 200, 200)


def whole_dollars(amount: float) -> int:
    """Round half away from zero, as invoices print it."""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(amount: float) -> str:
    """Whole dollars with thousands separators; negatives in parentheses."""
    value = f"${abs(whole_dollars(amount)):,}"
    return f"({value})" if amount < 0 else value


def format_date(value: Optional[datetime]) -> str:
    """``January 5, 2026``"""
    if value is None:
        return ""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_range(low: Optional[float], high: Optional[float], total: float) -> str:
    if low is None or high is None or whole_dollars(low) == whole_dollars(high):
        return format_currency(total if low is None else low)
    return f"{format_currency(low)} - {format_currency(high)}"


def _latin1(text: object) -> str:
    # Core PDF fonts only cover latin-1
    return str(text).encode("latin-1", "replace").decode("latin-1")


def _quantity(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"


def _rate(value: Optional[float]) -> str:
    return "" if value is None else f"${value:,.2f}"


def room_table(rooms: Sequence[PDFRoom], width: float) -> Tuple[List[str], List[float], List[List[str]]]:
    """Room breakdown columns; the subtotal column only appears when rooms are priced."""
    headers = ["Room", "Walls (sqft)", "Ceiling (sqft)", "Total (sqft)"]
    widths = [width * 0.34, width * 0.22, width * 0.22, width * 0.22]
    priced = any(room.subtotal is not None for room in rooms)
    if priced:
        headers.append("Subtotal")
        widths = [width * 0.3, width * 0.175, width * 0.175, width * 0.175, width * 0.175]
    rows = []
    for room in rooms:
        row = [room.name, _quantity(room.wall_sqft), _quantity(room.ceiling_sqft), _quantity(room.total_sqft)]
        if priced:
            row.append(format_currency(room.subtotal) if room.subtotal is not None else "")
        rows.append(row)
    return headers, widths, rows


class EstimatePDF(FPDF):
    """Letter-size estimate document."""

    def __init__(self, data: EstimatePDFData):
        super().__init__(orientation="P", unit="mm", format="Letter")
        self.data = data
        self.set_auto_page_break(auto=True, margin=22)
        self.set_margins(left=18, top=16, right=18)

    @property
    def content_w(self) -> float:
        return self.w - self.l_margin - self.r_margin

    def footer(self) -> None:
        contractor = self.data.contractor
        self.set_y(-18)
        self.set_draw_color(*RULE)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_font("Helvetica", "", 8)
        self.set_text_color(*MUTED)
        if self.data.valid_until:
            self.cell(0, 5, _latin1(f"This estimate is valid until {format_date(self.data.valid_until)}."),
                      align="L", new_x="LMARGIN", new_y="NEXT")
        contact = " | ".join(v for v in (contractor.email, contractor.phone) if v)
        self.cell(self.content_w - 20, 5, _latin1(f"Questions? Contact {contractor.company_name}: {contact}"))
        self.cell(20, 5, f"Page {self.page_no()}/{{nb}}", align="R")
        self.set_text_color(0, 0, 0)

    # Building blocks

    def header_block(self) -> None:
        data = self.data
        top = self.get_y()

        self.set_font("Helvetica", "B", 18)
        self.cell(self.content_w / 2, 9, _latin1(data.contractor.company_name), new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "", 9)
        self.set_text_color(*MUTED)
        for line in (data.contractor.email, data.contractor.phone):
            if line:
                self.cell(self.content_w / 2, 4.5, _latin1(line), new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        bottom = self.get_y()

        self.set_xy(self.l_margin + self.content_w / 2, top)
        self.set_font("Helvetica", "B", 16)
        self.set_text_color(*ACCENT)
        self.cell(self.content_w / 2, 9, "ESTIMATE", align="R", new_x="LEFT", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.set_font("Helvetica", "", 9)
        if data.estimate_id:
            self.cell(self.content_w / 2, 4.5, _latin1(f"Estimate #{data.estimate_id}"), align="R",
                      new_x="LEFT", new_y="NEXT")
        self.cell(self.content_w / 2, 4.5, f"Date: {format_date(data.created_at)}", align="R",
                  new_x="LEFT", new_y="NEXT")

        self.set_y(max(bottom, self.get_y()) + 4)
        self.rule()

    def recipient_block(self) -> None:
        data = self.data
        self.set_font("Helvetica", "B", 8)
        self.set_text_color(*MUTED)
        self.cell(0, 5, "PREPARED FOR", new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.set_font("Helvetica", "B", 11)
        self.cell(0, 6, _latin1(data.recipient.name), new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "", 9)
        for line in (data.recipient.email, data.recipient.phone):
            if line:
                self.cell(0, 4.5, _latin1(line), new_x="LMARGIN", new_y="NEXT")
        self.ln(3)

        if data.project_name:
            self.set_font("Helvetica", "B", 12)
            self.cell(0, 7, _latin1(data.project_name), new_x="LMARGIN", new_y="NEXT")
        if data.project_description:
            self.set_font("Helvetica", "", 9)
            self.multi_cell(0, 4.5, _latin1(data.project_description), new_x="LMARGIN", new_y="NEXT")
        self.ln(2)

    def range_box(self) -> None:
        data = self.data
        has_range = (
            data.range_low is not None
            and data.range_high is not None
            and whole_dollars(data.range_low) != whole_dollars(data.range_high)
        )
        label = "ESTIMATED RANGE" if has_range else "ESTIMATED TOTAL"
        amount = format_range(data.range_low, data.range_high, data.total) if has_range else format_currency(data.total)

        top = self.get_y()
        self.set_fill_color(239, 246, 255)
        self.set_draw_color(*ACCENT)
        self.rect(self.l_margin, top, self.content_w, 20, style="DF")
        self.set_xy(self.l_margin, top + 3)
        self.set_font("Helvetica", "B", 8)
        self.set_text_color(*ACCENT)
        self.cell(self.content_w, 4, label, align="C", new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "B", 18)
        self.set_text_color(0, 0, 0)
        self.cell(self.content_w, 10, amount, align="C", new_x="LMARGIN", new_y="NEXT")
        self.set_draw_color(0, 0, 0)
        self.set_y(top + 24)

    def section_title(self, title: str) -> None:
        if self.get_y() + 20 > self.h - 25:
            self.add_page()
        self.set_font("Helvetica", "B", 11)
        self.set_text_color(*ACCENT)
        self.cell(0, 7, _latin1(title), new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.rule()

    def rule(self) -> None:
        self.set_draw_color(*RULE)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_draw_color(0, 0, 0)
        self.ln(2)

    def table(self, headers: Sequence[str], widths: Sequence[float], rows: Iterable[Sequence[str]]) -> None:
        """Left-aligned first column, right-aligned numbers."""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(243, 244, 246)
        for i, (header, width) in enumerate(zip(headers, widths)):
            self.cell(width, 6, header, align="L" if i == 0 else "R", fill=True)
        self.ln(6)
        self.set_font("Helvetica", "", 9)
        for row in rows:
            for i, (value, width) in enumerate(zip(row, widths)):
                self.cell(width, 5.5, _latin1(value), align="L" if i == 0 else "R")
            self.ln(5.5)
        self.ln(1)

    def amount_row(self, label: str, amount: float, bold: bool = False) -> None:
        self.set_font("Helvetica", "B" if bold else "", 10 if bold else 9)
        self.cell(self.content_w - 40, 6, _latin1(label), align="R")
        self.cell(40, 6, format_currency(amount), align="R", new_x="LMARGIN", new_y="NEXT")

    def line_items(self, items: Optional[List[PDFLineItem]]) -> None:
        if not items:
            return
        w = self.content_w
        self.table(
            ("Description", "Qty", "Unit", "Rate", "Amount"),
            (w * 0.44, w * 0.12, w * 0.12, w * 0.14, w * 0.18),
            (
                (item.description, _quantity(item.quantity), item.unit or "", _rate(item.rate),
                 format_currency(item.amount))
                for item in items
            ),
        )

    def addons(self, addons: Optional[List[PDFAddon]]) -> None:
        if not addons:
            return
        w = self.content_w
        self.table(
            ("Add-on", "Qty", "Amount"),
            (w * 0.64, w * 0.16, w * 0.2),
            ((a.label, _quantity(a.quantity), format_currency(a.total)) for a in addons),
        )

    def rooms(self, rooms: Optional[List[PDFRoom]]) -> None:
        if not rooms:
            return
        headers, widths, rows = room_table(rooms, self.content_w)
        self.table(headers, widths, rows)

    def subtotals(
        self,
        material: Optional[float],
        labor: Optional[float],
        addons: Optional[float],
        complexity_label: Optional[str],
        complexity_adjustment: Optional[float],
    ) -> None:
        if material:
            self.amount_row("Materials", material)
        if labor:
            self.amount_row("Labor", labor)
        if addons:
            self.amount_row("Add-ons", addons)
        if complexity_adjustment:
            self.amount_row(complexity_label or "Complexity adjustment", complexity_adjustment)


def _render_simple(pdf: EstimatePDF) -> None:
    data = pdf.data
    pdf.section_title("Summary")
    if data.trades:
        for trade in data.trades:
            pdf.amount_row(trade.label, trade.total)
    elif data.single_trade:
        pdf.amount_row(data.single_trade.trade_label, data.total)
    pdf.amount_row("Total", data.total, bold=True)


def _render_detailed(pdf: EstimatePDF, with_rooms: bool = False) -> None:
    data = pdf.data
    if data.single_trade:
        trade = data.single_trade
        pdf.section_title(trade.trade_label)
        pdf.line_items(trade.line_items)
        pdf.addons(trade.addons)
        pdf.subtotals(
            trade.material_subtotal,
            trade.labor_subtotal,
            trade.addons_subtotal,
            trade.complexity_label,
            trade.complexity_adjustment,
        )
    for breakdown in data.trades or []:
        pdf.section_title(breakdown.label)
        if with_rooms:
            pdf.rooms(breakdown.rooms)
        pdf.line_items(breakdown.line_items)
        pdf.subtotals(
            breakdown.material_subtotal,
            breakdown.labor_subtotal,
            breakdown.addons_subtotal,
            breakdown.complexity_label,
            breakdown.complexity_adjustment,
        )
        pdf.amount_row(f"{breakdown.label} total", breakdown.total, bold=True)
    pdf.ln(2)
    if data.subtotal is not None and whole_dollars(data.subtotal) != whole_dollars(data.total):
        pdf.amount_row("Subtotal", data.subtotal)
    pdf.amount_row("Total", data.total, bold=True)


def _render_extra_detailed(pdf: EstimatePDF) -> None:
    data = pdf.data
    if data.rooms:
        pdf.section_title("Rooms")
        pdf.rooms(data.rooms)
    _render_detailed(pdf, with_rooms=True)

    pdf.section_title("Project Summary")
    if data.rooms:
        pdf.set_font("Helvetica", "", 9)
        total_sqft = sum(room.total_sqft for room in data.rooms)
        pdf.cell(0, 5, f"{len(data.rooms)} rooms, {_quantity(total_sqft)} sqft total", new_x="LMARGIN", new_y="NEXT")
    for trade in data.trades or []:
        pdf.amount_row(trade.label, trade.total)
    pdf.amount_row("Project total", data.total, bold=True)


def generate_pdf(data: EstimatePDFData, detail_level: str = "detailed") -> bytes:
    """
    Render an estimate to PDF.

    Args:
        data: Everything shown on the document
        detail_level: ``simple``, ``detailed`` or ``extra_detailed``;
            anything else renders the detailed layout

    Returns:
        PDF file bytes
    """
    if detail_level not in DETAIL_LEVELS:
        detail_level = "detailed"

    pdf = EstimatePDF(data)
    pdf.add_page()
    pdf.header_block()
    pdf.recipient_block()
    pdf.range_box()

    if detail_level == "simple":
        _render_simple(pdf)
    elif detail_level == "extra_detailed":
        _render_extra_detailed(pdf)
    else:
        _render_detailed(pdf)

    buf = BytesIO()
    pdf.output(buf)
    logger.debug(f"Rendered {detail_level} PDF for {data.recipient.name} ({buf.tell()} bytes)")
    return buf.getvalue()


# Building PDF data from stored records


def _contractor(profile: Profile) -> PDFContractor:
    return PDFContractor(
        company_name=profile.company_name,
        email=profile.email,
        phone=profile.phone,
        logo_url=profile.logo_url,
    )


def _complexity_label(estimate: TradeEstimate, level: str) -> Optional[str]:
    if not estimate.complexity_adjustment:
        return None
    return f"{level.title()} complexity (x{estimate.complexity_multiplier:g})"


def _addons(lines: List[AddonLine]) -> List[PDFAddon]:
    return [PDFAddon(label=line.name, quantity=line.quantity, total=line.total) for line in lines]


def trade_line_items(estimate: TradeEstimate) -> List[PDFLineItem]:
    """Line items of a priced trade, as shown on the detailed layout."""
    if isinstance(estimate, drywall_hanging.HangingEstimate):
        return [
            PDFLineItem(
                description=f"{sheet.label} ({sheet.size})",
                quantity=sheet.quantity,
                unit="sheet",
                rate=sheet.total_per_sheet,
                amount=sheet.subtotal,
            )
            for sheet in estimate.sheets
        ]
    if isinstance(estimate, drywall_finishing.FinishingEstimate):
        items = [
            PDFLineItem(
                description=item.description,
                quantity=item.quantity,
                unit=item.unit,
                rate=item.material_rate + item.labor_rate,
                amount=item.total,
            )
            for item in estimate.line_items
        ]
        items.extend(
            PDFLineItem(
                description=material.name,
                quantity=material.quantity,
                unit="each",
                rate=material.unit_price,
                amount=material.subtotal,
            )
            for material in estimate.materials
        )
        return items
    if isinstance(estimate, painting.PaintingEstimate):
        items = [
            PDFLineItem(description="Painting labor", quantity=estimate.total_sqft, unit="sqft",
                        amount=estimate.labor_subtotal),
            PDFLineItem(description="Paint and materials", quantity=estimate.total_sqft, unit="sqft",
                        amount=estimate.material_subtotal),
        ]
        if estimate.prep_subtotal:
            items.append(PDFLineItem(description="Surface preparation", amount=estimate.prep_subtotal))
        return items
    if isinstance(estimate, framing.FramingEstimate):
        return [
            PDFLineItem(description="Framing labor", amount=estimate.labor_cost),
            PDFLineItem(description="Lumber and hardware", amount=estimate.material_cost),
        ]
    return []


def _single_trade(trade_type: str, estimate: TradeEstimate, complexity: str) -> PDFSingleTrade:
    totals = estimate.to_trade_totals()
    return PDFSingleTrade(
        trade_type=trade_type,
        trade_label=TRADE_LABELS.get(trade_type, trade_type.replace("_", " ").title()),
        line_items=trade_line_items(estimate),
        material_subtotal=totals.material_cost,
        labor_subtotal=totals.labor_cost,
        addons_subtotal=totals.addons_cost,
        addons=_addons(estimate.addons),
        complexity_label=_complexity_label(estimate, complexity),
        complexity_adjustment=totals.complexity_adjustment,
    )


def build_estimate_pdf_data(estimate: Estimate, profile: Profile) -> EstimatePDFData:
    """
    PDF data for a stored single-trade estimate.

    Calculator estimates are re-priced for their line items; template
    estimates show a single line at the high end of the range.
    """
    trade_type = estimate.template_type
    label = TRADE_LABELS.get(trade_type, trade_type.replace("_", " ").title())
    parameters = estimate.parameters or {}

    total = estimate.range_high
    subtotal: Optional[float] = None
    if trade_type in CALCULATOR_TRADES and parameters and estimate.template_id is None \
            and "default_template_id" not in parameters:
        priced = calculate_trade(
            trade_type, parameters, CustomRates.from_json(profile.custom_rates), profile.hourly_rate or 0
        )
        single = _single_trade(trade_type, priced, parameters.get("complexity", "standard"))
        total = priced.total
        subtotal = priced.subtotal
    else:
        single = PDFSingleTrade(
            trade_type=trade_type,
            trade_label=label,
            line_items=[PDFLineItem(description=estimate.project_description or label, amount=estimate.range_high)],
        )

    return EstimatePDFData(
        contractor=_contractor(profile),
        recipient=PDFRecipient(
            name=estimate.homeowner_name,
            email=estimate.homeowner_email or "",
            phone=estimate.homeowner_phone,
        ),
        estimate_id=str(estimate.id),
        project_name=f"{label} Estimate",
        project_description=estimate.project_description,
        single_trade=single,
        subtotal=subtotal,
        total=total,
        range_low=estimate.range_low,
        range_high=estimate.range_high,
        created_at=estimate.created_at,
        valid_until=estimate.expires_at,
    )


def build_project_pdf_data(project: Project, profile: Profile, result: ProjectEstimate) -> EstimatePDFData:
    """PDF data for a priced multi-trade project."""
    breakdowns = []
    for trade_type, estimate in result.estimates.items():
        totals = result.trades[trade_type]
        views = result.room_views.get(trade_type, [])
        complexity = next(
            (t.parameters.get("complexity", "standard") for t in project.trades if t.trade_type == trade_type),
            "standard",
        )
        breakdowns.append(
            PDFTradeBreakdown(
                trade_type=trade_type,
                label=TRADE_LABELS.get(trade_type, trade_type),
                rooms=[
                    PDFRoom(
                        name=view.name,
                        wall_sqft=view.effective_wall_sqft,
                        ceiling_sqft=view.effective_ceiling_sqft,
                        total_sqft=view.effective_total_sqft,
                    )
                    for view in views
                    if not view.excluded
                ],
                line_items=trade_line_items(estimate),
                material_subtotal=totals.material_cost,
                labor_subtotal=totals.labor_cost,
                addons_subtotal=totals.addons_cost,
                complexity_label=_complexity_label(estimate, complexity),
                complexity_adjustment=totals.complexity_adjustment,
                total=totals.total,
            )
        )

    return EstimatePDFData(
        contractor=_contractor(profile),
        recipient=PDFRecipient(
            name=project.homeowner_name,
            email=project.homeowner_email or "",
            phone=project.homeowner_phone,
        ),
        estimate_id=str(project.id),
        project_name=project.name,
        project_description=project.project_description,
        trades=breakdowns,
        rooms=[
            PDFRoom(name=room.name, wall_sqft=room.wall_sqft, ceiling_sqft=room.ceiling_sqft,
                    total_sqft=room.total_sqft)
            for room in project.rooms
        ],
        subtotal=sum(t.subtotal for t in result.trades.values()),
        total=result.combined_total,
        range_low=result.range_low,
        range_high=result.range_high,
        created_at=project.created_at,
        valid_until=project.expires_at,
    )
