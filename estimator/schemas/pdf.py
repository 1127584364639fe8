"""
Data rendered into an estimate PDF.

Field names are accepted in either snake_case or the camelCase used by the
browser client (``companyName``, ``rangeLow``...).
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DetailLevel = Literal["simple", "detailed", "extra_detailed"]

DETAIL_LEVELS: tuple[str, ...] = ("simple", "detailed", "extra_detailed")

DETAIL_LEVEL_INFO = {
    "simple": ("Simple", "Totals only"),
    "detailed": ("Detailed", "Line items + subtotals"),
    "extra_detailed": ("Extra Detailed", "Room-by-room breakdown"),
}


class PDFModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PDFContractor(PDFModel):
    company_name: str
    email: str
    phone: Optional[str] = None
    logo_url: Optional[str] = None


class PDFRecipient(PDFModel):
    name: str
    email: str
    phone: Optional[str] = None


class PDFLineItem(PDFModel):
    description: str
    quantity: Optional[float] = None
    unit: Optional[str] = None
    rate: Optional[float] = None
    amount: float


class PDFRoom(PDFModel):
    name: str
    wall_sqft: float
    ceiling_sqft: float
    total_sqft: float
    subtotal: Optional[float] = None


class PDFAddon(PDFModel):
    label: str
    quantity: float
    total: float


class PDFTradeBreakdown(PDFModel):
    trade_type: str
    label: str
    rooms: Optional[List[PDFRoom]] = None
    line_items: Optional[List[PDFLineItem]] = None
    material_subtotal: float = 0
    labor_subtotal: float = 0
    addons_subtotal: float = 0
    complexity_label: Optional[str] = None
    complexity_adjustment: float = 0
    total: float


class PDFSingleTrade(PDFModel):
    trade_type: str
    trade_label: str
    line_items: Optional[List[PDFLineItem]] = None
    material_subtotal: Optional[float] = None
    labor_subtotal: Optional[float] = None
    addons_subtotal: Optional[float] = None
    addons: Optional[List[PDFAddon]] = None
    complexity_label: Optional[str] = None
    complexity_adjustment: Optional[float] = None


class EstimatePDFData(PDFModel):
    contractor: PDFContractor
    recipient: PDFRecipient

    estimate_id: Optional[str] = None
    project_name: Optional[str] = None
    project_description: Optional[str] = None

    single_trade: Optional[PDFSingleTrade] = None
    trades: Optional[List[PDFTradeBreakdown]] = None
    rooms: Optional[List[PDFRoom]] = None

    subtotal: Optional[float] = None
    total: float
    range_low: Optional[float] = None
    range_high: Optional[float] = None

    created_at: datetime
    valid_until: Optional[datetime] = None
