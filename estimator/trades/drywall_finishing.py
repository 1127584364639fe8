"""
Drywall finishing (tape, mud, sand) pricing.

Finishing is priced from line items: hours, square feet at a standard or
premium rate, or linear feet of joints and corners. A contractor's combined
rate is split 30% material / 70% labor.
"""

from typing import Dict, List, Literal, NamedTuple, Optional

from pydantic import BaseModel, Field

from estimator.schemas.rates import CustomRates
from estimator.trades.shared import (
    AddonDefinition,
    AddonLine,
    AddonUnit,
    ComplexityLevel,
    CustomAddon,
    RateRange,
    SelectedAddon,
    TradeTotals,
    pick,
    price_addons,
    round_money,
)

TRADE_TYPE = "drywall_finishing"

LineItemType = Literal["hourly", "sqft_standard", "sqft_premium", "linear_joints", "linear_corners", "addon"]
RatedType = Literal["sqft_standard", "sqft_premium", "linear_joints", "linear_corners"]
FinishLevel = Literal[3, 4, 5]

MATERIAL_SHARE = 0.3
LABOR_SHARE = 0.7


class FinishLevelInfo(NamedTuple):
    level: int
    label: str
    sqft_rate: float


FINISH_LEVELS: Dict[int, FinishLevelInfo] = {
    3: FinishLevelInfo(3, "Level 3 - Standard", 0.45),
    4: FinishLevelInfo(4, "Level 4 - Light Texture", 0.55),
    5: FinishLevelInfo(5, "Level 5 - Smooth/Skim", 0.95),
}
DEFAULT_FINISH_LEVEL = 4

LINE_ITEM_UNITS: Dict[str, str] = {
    "hourly": "hours",
    "sqft_standard": "sqft",
    "sqft_premium": "sqft",
    "linear_joints": "linear ft",
    "linear_corners": "linear ft",
    "addon": "each",
}

LINE_ITEM_LABELS: Dict[str, str] = {
    "hourly": "Hourly Work",
    "sqft_standard": "Standard Area",
    "sqft_premium": "Premium Area",
    "linear_joints": "Joints (Tape & Mud)",
    "linear_corners": "Corner Bead",
    "addon": "Add-on",
}

ADDONS: Dict[str, AddonDefinition] = {
    a.id: a
    for a in (
        AddonDefinition("sanding", "Extra Sanding", 50, AddonUnit.FLAT),
        AddonDefinition("primer", "Prime Coat", 0.15, AddonUnit.SQFT),
        AddonDefinition("repair_holes", "Hole Repair", 25, AddonUnit.EACH),
        AddonDefinition("texture_match", "Texture Matching", 75, AddonUnit.FLAT),
        AddonDefinition("high_ceiling", "High Ceiling Premium", 0.10, AddonUnit.SQFT),
        AddonDefinition("dust_barrier", "Dust Barrier Setup", 100, AddonUnit.FLAT),
    )
}

RATES: Dict[str, RateRange] = {
    "sqft_standard": RateRange(0.35, 0.5, 0.65),
    "sqft_premium": RateRange(0.75, 0.9, 1.1),
    "linear_joints": RateRange(1.22, 1.35, 1.48),
    "linear_corners": RateRange(3.96, 4.35, 4.76),
}

COMPLEXITY_MULTIPLIERS: Dict[str, float] = {"simple": 0.85, "standard": 1.0, "complex": 1.25}


class FinishingMaterial(NamedTuple):
    id: str
    name: str
    category: str
    unit: str
    price: float


MATERIALS: Dict[str, FinishingMaterial] = {
    m.id: m
    for m in (
        FinishingMaterial("all_purpose_mud", "All-Purpose Joint Compound (4.5 gal)", "mud", "bucket", 18),
        FinishingMaterial("lightweight_mud", "Lightweight Joint Compound (4.5 gal)", "mud", "bucket", 20),
        FinishingMaterial("setting_compound", "Setting Compound (18 lb)", "mud", "bag", 15),
        FinishingMaterial("paper_tape", "Paper Tape (500 ft)", "tape", "roll", 5),
        FinishingMaterial("mesh_tape", "Mesh Tape (300 ft)", "tape", "roll", 8),
        FinishingMaterial("metal_corner_bead", "Metal Corner Bead (8 ft)", "corner_bead", "piece", 4),
        FinishingMaterial("vinyl_corner_bead", "Vinyl Corner Bead (8 ft)", "corner_bead", "piece", 5),
        FinishingMaterial("sanding_sponge", "Sanding Sponge", "other", "each", 3),
    )
}


# -- contractor rates --------------------------------------------------------


def user_rate(rate_type: str, custom_rates: Optional[CustomRates]) -> float:
    """Combined (material + labor) rate for a rated line type."""
    finishing = custom_rates.drywall_finishing if custom_rates else None
    default = RATES[rate_type].mid if rate_type in RATES else 0
    return pick(getattr(finishing, rate_type, None) if finishing else None, default)


def user_rates(custom_rates: Optional[CustomRates]) -> Dict[str, float]:
    return {rate_type: user_rate(rate_type, custom_rates) for rate_type in RATES}


def is_rate_customized(rate_type: str, custom_rates: Optional[CustomRates]) -> bool:
    finishing = custom_rates.drywall_finishing if custom_rates else None
    return finishing is not None and getattr(finishing, rate_type, None) is not None


def user_addon_price(addon_id: str, custom_rates: Optional[CustomRates]) -> float:
    prices = custom_rates.drywall_addons if custom_rates else None
    user_price = getattr(prices, addon_id, None) if prices else None
    if user_price is not None:
        return user_price
    definition = ADDONS.get(addon_id)
    return definition.price if definition else 0


def user_material_price(material_id: str, custom_rates: Optional[CustomRates]) -> float:
    prices = (custom_rates.finishing_material_prices if custom_rates else None) or {}
    if prices.get(material_id) is not None:
        return prices[material_id]
    material = MATERIALS.get(material_id)
    return material.price if material else 0


def complexity_multiplier(level: ComplexityLevel, custom_rates: Optional[CustomRates]) -> float:
    user = custom_rates.drywall_finishing_complexity if custom_rates else None
    return pick(getattr(user, level, None) if user else None, COMPLEXITY_MULTIPLIERS[level])


def material_rate(rate_type: str, custom_rates: Optional[CustomRates]) -> float:
    return user_rate(rate_type, custom_rates) * MATERIAL_SHARE


def labor_rate(rate_type: str, custom_rates: Optional[CustomRates]) -> float:
    return user_rate(rate_type, custom_rates) * LABOR_SHARE


# -- estimate ----------------------------------------------------------------


class FinishingLineItem(BaseModel):
    type: LineItemType
    description: str = ""
    quantity: float = Field(ge=0)
    include_material: bool = True
    material_rate_override: Optional[float] = Field(default=None, ge=0)
    # For ``addon`` lines this is the unit price
    labor_rate_override: Optional[float] = Field(default=None, ge=0)


class MaterialEntry(BaseModel):
    material_id: str = "custom"
    name: Optional[str] = None
    unit_price: Optional[float] = Field(default=None, ge=0)
    quantity: float = Field(default=1, ge=0)
    price_override: Optional[float] = Field(default=None, ge=0)


class PricedLineItem(BaseModel):
    type: str
    description: str
    unit: str
    quantity: float
    material_rate: float
    labor_rate: float
    material_total: float
    labor_total: float
    total: float


class PricedMaterial(BaseModel):
    material_id: str
    name: str
    unit_price: float
    quantity: float
    subtotal: float


class FinishingEstimateInput(BaseModel):
    finish_level: FinishLevel = DEFAULT_FINISH_LEVEL
    line_items: List[FinishingLineItem] = Field(default_factory=list)
    materials: List[MaterialEntry] = Field(default_factory=list)
    complexity: ComplexityLevel = "standard"
    addons: List[SelectedAddon] = Field(default_factory=list)
    custom_addons: List[CustomAddon] = Field(default_factory=list)


class FinishingEstimate(BaseModel):
    line_items_subtotal: float
    material_subtotal: float
    labor_subtotal: float
    materials_subtotal: float
    addons_subtotal: float
    subtotal: float
    complexity_multiplier: float
    complexity_adjustment: float
    total: float
    range_low: float
    range_high: float
    line_items: List[PricedLineItem] = Field(default_factory=list)
    materials: List[PricedMaterial] = Field(default_factory=list)
    addons: List[AddonLine] = Field(default_factory=list)

    def to_trade_totals(self) -> TradeTotals:
        return TradeTotals(
            trade_type=TRADE_TYPE,
            material_cost=round_money(self.material_subtotal + self.materials_subtotal),
            labor_cost=self.labor_subtotal,
            addons_cost=self.addons_subtotal,
            subtotal=self.subtotal,
            complexity_adjustment=self.complexity_adjustment,
            total=self.total,
            range_low=self.range_low,
            range_high=self.range_high,
        )


def price_line_item(
    item: FinishingLineItem,
    custom_rates: Optional[CustomRates],
    hourly_rate: float = 0,
) -> PricedLineItem:
    """Split one line into material and labor; hourly work is all labor."""
    if item.type == "hourly":
        default_material, default_labor = 0.0, hourly_rate
    elif item.type == "addon":
        default_material, default_labor = 0.0, 0.0
    else:
        default_material = material_rate(item.type, custom_rates)
        default_labor = labor_rate(item.type, custom_rates)

    mat_rate = item.material_rate_override if item.material_rate_override is not None else default_material
    lab_rate = item.labor_rate_override if item.labor_rate_override is not None else default_labor

    material_total = mat_rate * item.quantity if item.include_material else 0
    labor_total = lab_rate * item.quantity
    return PricedLineItem(
        type=item.type,
        description=item.description or LINE_ITEM_LABELS[item.type],
        unit=LINE_ITEM_UNITS[item.type],
        quantity=item.quantity,
        material_rate=mat_rate,
        labor_rate=lab_rate,
        material_total=round_money(material_total),
        labor_total=round_money(labor_total),
        total=round_money(material_total + labor_total),
    )


def price_material(entry: MaterialEntry, custom_rates: Optional[CustomRates]) -> PricedMaterial:
    preset = MATERIALS.get(entry.material_id)
    if preset is None and entry.unit_price is None and entry.price_override is None:
        raise ValueError(f"Unknown material: {entry.material_id}")

    if entry.price_override is not None:
        unit_price = entry.price_override
    elif entry.unit_price is not None:
        unit_price = entry.unit_price
    else:
        unit_price = user_material_price(entry.material_id, custom_rates)

    return PricedMaterial(
        material_id=entry.material_id,
        name=entry.name or (preset.name if preset else "Custom material"),
        unit_price=unit_price,
        quantity=entry.quantity,
        subtotal=round_money(unit_price * entry.quantity),
    )


def sqft_line_item(total_sqft: float, finish_level: int = DEFAULT_FINISH_LEVEL) -> FinishingLineItem:
    """Standard-area line covering a project's walls and ceilings at the finish level rate."""
    level = FINISH_LEVELS.get(finish_level)
    rate = level.sqft_rate if level else FINISH_LEVELS[DEFAULT_FINISH_LEVEL].sqft_rate
    return FinishingLineItem(
        type="sqft_standard",
        description="Wall & Ceiling Finishing",
        quantity=total_sqft,
        material_rate_override=rate * MATERIAL_SHARE,
        labor_rate_override=rate * LABOR_SHARE,
    )


def with_project_sqft(data: FinishingEstimateInput, total_sqft: float) -> FinishingEstimateInput:
    """
    Point the area line of an estimate at a project's square footage.

    The first standard or premium area line is replaced; otherwise a new
    line is put in front.
    """
    if total_sqft <= 0:
        return data
    line = sqft_line_item(total_sqft, data.finish_level)
    items = list(data.line_items)
    for index, item in enumerate(items):
        if item.type in ("sqft_standard", "sqft_premium"):
            items[index] = item.model_copy(
                update={
                    "quantity": total_sqft,
                    "material_rate_override": line.material_rate_override,
                    "labor_rate_override": line.labor_rate_override,
                }
            )
            break
    else:
        items.insert(0, line)
    return data.model_copy(update={"line_items": items})


def calculate_finishing_estimate(
    data: FinishingEstimateInput,
    custom_rates: Optional[CustomRates] = None,
    hourly_rate: float = 0,
) -> FinishingEstimate:
    """
    Price a drywall finishing job.

    Args:
        data: Line items, materials and addons
        custom_rates: Contractor overrides
        hourly_rate: Contractor hourly rate, used by hourly lines

    Returns:
        Totals rounded to cents; the range is rounded to whole dollars

    Raises:
        ValueError: If an addon or material id is unknown
    """
    items = [price_line_item(item, custom_rates, hourly_rate) for item in data.line_items]
    materials = [price_material(entry, custom_rates) for entry in data.materials]
    addon_prices = {addon_id: user_addon_price(addon_id, custom_rates) for addon_id in ADDONS}
    addon_lines = price_addons(data.addons, data.custom_addons, ADDONS, addon_prices)

    line_items_subtotal = sum(i.total for i in items)
    materials_subtotal = sum(m.subtotal for m in materials)
    addons_subtotal = sum(a.total for a in addon_lines)

    subtotal = line_items_subtotal + materials_subtotal + addons_subtotal
    multiplier = complexity_multiplier(data.complexity, custom_rates)
    adjustment = subtotal * (multiplier - 1)

    range_low = range_high = 0.0
    for item in items:
        rate_range = RATES.get(item.type)
        if rate_range is not None:
            range_low += item.quantity * rate_range.low
            range_high += item.quantity * rate_range.high
        else:
            range_low += item.total
            range_high += item.total
    range_low = (range_low + addons_subtotal + materials_subtotal) * multiplier
    range_high = (range_high + addons_subtotal + materials_subtotal) * multiplier

    return FinishingEstimate(
        line_items_subtotal=round_money(line_items_subtotal),
        material_subtotal=round_money(sum(i.material_total for i in items)),
        labor_subtotal=round_money(sum(i.labor_total for i in items)),
        materials_subtotal=round_money(materials_subtotal),
        addons_subtotal=round_money(addons_subtotal),
        subtotal=round_money(subtotal),
        complexity_multiplier=multiplier,
        complexity_adjustment=round_money(adjustment),
        total=round_money(subtotal + adjustment),
        range_low=round(range_low),
        range_high=round(range_high),
        line_items=items,
        materials=materials,
        addons=addon_lines,
    )
