"""
Drywall hanging pricing.

Three ways to describe the job:

* ``calculator``: rooms are measured and one sheet line is sized to cover
  their area plus waste.
* ``direct``: the contractor lists sheet entries explicitly.
* ``labor_only`` with ``per_sqft`` pricing: square footage times the labor
  rate, no material and no sheets.
"""

import math
from typing import Dict, List, Literal, NamedTuple, Optional

from pydantic import BaseModel, Field

from estimator.schemas.rates import CustomRates
from estimator.trades.geometry import Room, SheetSize, calculate_rooms_totals
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

TRADE_TYPE = "drywall_hanging"

InputMode = Literal["calculator", "direct", "labor_only"]
PricingMethod = Literal["per_sheet", "per_sqft"]
CeilingFactor = Literal["standard", "nine_ft", "ten_ft", "cathedral"]
SheetTypeId = Literal[
    "standard_half",
    "standard_5_8",
    "lightweight_half",
    "moisture_half",
    "moisture_5_8",
    "fire_5_8",
    "soundproof_5_8",
    "mold_half",
]


class SheetType(NamedTuple):
    id: str
    label: str
    thickness: float
    material_cost: float
    labor_cost: float


class OpeningPreset(NamedTuple):
    id: str
    label: str
    width: int
    height: int


SHEET_SIZES: Dict[str, int] = {"4x8": 32, "4x10": 40, "4x12": 48}

SHEET_TYPES: Dict[str, SheetType] = {
    t.id: t
    for t in (
        SheetType("standard_half", 'Standard 1/2"', 0.5, 12, 10),
        SheetType("standard_5_8", 'Standard 5/8"', 0.625, 15, 11),
        SheetType("lightweight_half", 'Lightweight 1/2"', 0.5, 14, 10),
        SheetType("moisture_half", 'Moisture Resistant 1/2"', 0.5, 18, 12),
        SheetType("moisture_5_8", 'Moisture Resistant 5/8"', 0.625, 20, 13),
        SheetType("fire_5_8", 'Fire-Rated (Type X) 5/8"', 0.625, 16, 12),
        SheetType("soundproof_5_8", 'Soundproof 5/8"', 0.625, 55, 15),
        SheetType("mold_half", 'Mold Resistant 1/2"', 0.5, 18, 12),
    )
}

# Labor cost of the standard 1/2" sheet; other types scale against it
BASELINE_SHEET_LABOR = 10

OPENING_PRESETS: Dict[str, List[OpeningPreset]] = {
    "doors": [
        OpeningPreset("standard_door", 'Standard Door (36")', 36, 80),
        OpeningPreset("interior_door", 'Interior Door (32")', 32, 80),
        OpeningPreset("double_door", "Double Door", 72, 80),
        OpeningPreset("sliding_door", "Sliding Glass Door", 72, 80),
    ],
    "windows": [
        OpeningPreset("small_window", "Small Window (2'x3')", 24, 36),
        OpeningPreset("medium_window", "Medium Window (3'x4')", 36, 48),
        OpeningPreset("large_window", "Large Window (4'x5')", 48, 60),
        OpeningPreset("picture_window", "Picture Window (6'x4')", 72, 48),
    ],
}

CEILING_HEIGHT_FACTORS: Dict[str, float] = {
    "standard": 1.0,
    "nine_ft": 1.1,
    "ten_ft": 1.15,
    "cathedral": 1.35,
}

WASTE_FACTORS = (0.10, 0.12, 0.15)
DEFAULT_WASTE_FACTOR = 0.12

COMPLEXITY_MULTIPLIERS: Dict[str, float] = {"simple": 0.85, "standard": 1.0, "complex": 1.25}

ADDONS: Dict[str, AddonDefinition] = {
    a.id: a
    for a in (
        AddonDefinition("delivery", "Delivery", 75, AddonUnit.FLAT),
        AddonDefinition("stocking", "Stocking (carry in)", 0.10, AddonUnit.SQFT),
        AddonDefinition("debris_removal", "Debris Removal", 150, AddonUnit.FLAT),
        AddonDefinition("corner_bead", "Corner Bead", 4.5, AddonUnit.LINEAR_FT),
        AddonDefinition("insulation", "Insulation (R-13)", 1.2, AddonUnit.SQFT),
        AddonDefinition("vapor_barrier", "Vapor Barrier", 0.4, AddonUnit.SQFT),
    )
}

RATES: Dict[str, RateRange] = {
    "labor_per_sheet": RateRange(8, 12, 18),
    "labor_per_sqft": RateRange(0.5, 0.85, 1.5),
    "material_markup": RateRange(0, 15, 30),  # percent
}


# -- contractor rates --------------------------------------------------------


def user_rates(custom_rates: Optional[CustomRates]) -> Dict[str, float]:
    """Effective labor rate, markup and waste factor for a contractor."""
    hanging = custom_rates.drywall_hanging if custom_rates else None
    return {
        "labor_per_sqft": pick(hanging and hanging.labor_per_sqft, RATES["labor_per_sqft"].mid),
        "material_markup": pick(hanging and hanging.material_markup, RATES["material_markup"].mid),
        "default_waste_factor": pick(hanging and hanging.default_waste_factor, DEFAULT_WASTE_FACTOR),
    }


def is_rate_customized(rate: str, custom_rates: Optional[CustomRates]) -> bool:
    hanging = custom_rates.drywall_hanging if custom_rates else None
    return hanging is not None and getattr(hanging, rate, None) is not None


def user_addon_price(addon_id: str, custom_rates: Optional[CustomRates]) -> float:
    """Contractor price for a preset addon; unknown ids price at 0."""
    prices = custom_rates.drywall_hanging_addons if custom_rates else None
    user_price = getattr(prices, addon_id, None) if prices else None
    if user_price is not None:
        return user_price
    definition = ADDONS.get(addon_id)
    return definition.price if definition else 0


def complexity_multiplier(level: ComplexityLevel, custom_rates: Optional[CustomRates]) -> float:
    user = custom_rates.drywall_hanging_complexity if custom_rates else None
    return pick(getattr(user, level, None) if user else None, COMPLEXITY_MULTIPLIERS[level])


def ceiling_height_multiplier(factor: str, custom_rates: Optional[CustomRates]) -> float:
    hanging = custom_rates.drywall_hanging if custom_rates else None
    multipliers = hanging.ceiling_height_multipliers if hanging else None
    user_value = getattr(multipliers, factor, None) if multipliers else None
    return pick(user_value, CEILING_HEIGHT_FACTORS.get(factor, 1.0))


def ceiling_multiplier_applies_to(custom_rates: Optional[CustomRates]) -> str:
    hanging = custom_rates.drywall_hanging if custom_rates else None
    return (hanging and hanging.ceiling_multiplier_applies_to) or "all"


# -- sheet math --------------------------------------------------------------


def sheets_needed(sqft: float, size: str, waste_factor: float) -> int:
    """Sheets to cover ``sqft`` plus waste; an unknown size needs none."""
    size_sqft = SHEET_SIZES.get(size)
    if not size_sqft:
        return 0
    return math.ceil(sqft * (1 + waste_factor) / size_sqft)


def sheet_material_cost(type_id: str, custom_rates: Optional[CustomRates]) -> float:
    """Base sheet price with the contractor's material markup applied."""
    sheet_type = SHEET_TYPES.get(type_id)
    if sheet_type is None:
        return 0
    markup = user_rates(custom_rates)["material_markup"]
    return sheet_type.material_cost * (1 + markup / 100)


def sheet_labor_cost(type_id: str, custom_rates: Optional[CustomRates], size: str = "4x8") -> float:
    """Labor per sheet: rate per sqft x sheet area x sheet difficulty."""
    sheet_type = SHEET_TYPES.get(type_id)
    if sheet_type is None:
        return 0
    size_sqft = SHEET_SIZES.get(size, 32)
    difficulty = sheet_type.labor_cost / BASELINE_SHEET_LABOR
    return user_rates(custom_rates)["labor_per_sqft"] * size_sqft * difficulty


def cost_per_sqft(sheets: int, material_per_sheet: float, labor_per_sheet: float, size: str) -> float:
    size_sqft = SHEET_SIZES.get(size)
    if not size_sqft or sheets == 0:
        return 0
    return round_money(sheets * (material_per_sheet + labor_per_sheet) / (sheets * size_sqft))


# -- estimate ----------------------------------------------------------------


class SheetEntry(BaseModel):
    type_id: SheetTypeId = "standard_half"
    size: SheetSize = "4x8"
    quantity: int = Field(default=1, ge=0)
    # None follows the estimate-wide client_supplies_materials switch
    include_material: Optional[bool] = None
    material_cost_override: Optional[float] = Field(default=None, ge=0)
    labor_cost_override: Optional[float] = Field(default=None, ge=0)


class PricedSheet(BaseModel):
    type_id: str
    label: str
    size: str
    quantity: int
    include_material: bool
    material_cost: float
    labor_cost: float
    total_per_sheet: float
    subtotal: float


class HangingEstimateInput(BaseModel):
    input_mode: InputMode = "calculator"
    pricing_method: PricingMethod = "per_sheet"
    client_supplies_materials: bool = False
    rooms: List[Room] = Field(default_factory=list)
    sheets: List[SheetEntry] = Field(default_factory=list)
    direct_sqft: float = Field(default=0, ge=0)
    ceiling_factor: CeilingFactor = "standard"
    waste_factor: Optional[float] = Field(default=None, ge=0, le=1)
    complexity: ComplexityLevel = "standard"
    addons: List[SelectedAddon] = Field(default_factory=list)
    custom_addons: List[CustomAddon] = Field(default_factory=list)


class HangingEstimate(BaseModel):
    total_sqft: float
    sheets_needed: int
    material_subtotal: float
    labor_subtotal: float
    addons_subtotal: float
    subtotal: float
    complexity_multiplier: float
    complexity_adjustment: float
    total: float
    cost_per_sqft: float
    cost_per_sheet: float
    sheets: List[PricedSheet] = Field(default_factory=list)
    addons: List[AddonLine] = Field(default_factory=list)

    @property
    def range_low(self) -> float:
        return self.total

    @property
    def range_high(self) -> float:
        return self.total

    def to_trade_totals(self) -> TradeTotals:
        return TradeTotals(
            trade_type=TRADE_TYPE,
            material_cost=self.material_subtotal,
            labor_cost=self.labor_subtotal,
            addons_cost=self.addons_subtotal,
            subtotal=self.subtotal,
            complexity_adjustment=self.complexity_adjustment,
            total=self.total,
            range_low=self.range_low,
            range_high=self.range_high,
        )


def _price_sheet(entry: SheetEntry, data: HangingEstimateInput, custom_rates: Optional[CustomRates]) -> PricedSheet:
    include_material = (
        entry.include_material if entry.include_material is not None else not data.client_supplies_materials
    )
    material = (
        entry.material_cost_override
        if entry.material_cost_override is not None
        else sheet_material_cost(entry.type_id, custom_rates)
    )
    labor = (
        entry.labor_cost_override
        if entry.labor_cost_override is not None
        else sheet_labor_cost(entry.type_id, custom_rates, entry.size)
    )
    per_sheet = (material if include_material else 0) + labor
    return PricedSheet(
        type_id=entry.type_id,
        label=SHEET_TYPES[entry.type_id].label,
        size=entry.size,
        quantity=entry.quantity,
        include_material=include_material,
        material_cost=round_money(material),
        labor_cost=round_money(labor),
        total_per_sheet=round_money(per_sheet),
        subtotal=round_money(per_sheet * entry.quantity),
    )


def _calculator_sheet(data: HangingEstimateInput, total_sqft: float, waste_factor: float) -> SheetEntry:
    """One sheet line sized for the area, keeping the current selection if any."""
    current = data.sheets[0] if data.sheets else SheetEntry()
    return current.model_copy(update={"quantity": sheets_needed(total_sqft, current.size, waste_factor)})


def calculate_hanging_estimate(
    data: HangingEstimateInput,
    custom_rates: Optional[CustomRates] = None,
    area: Optional[tuple[float, float]] = None,
) -> HangingEstimate:
    """
    Price a drywall hanging job.

    Args:
        data: Estimate input
        custom_rates: Contractor overrides
        area: ``(wall_sqft, ceiling_sqft)`` supplied by a project; when set
            it replaces the rooms of calculator mode

    Returns:
        Totals rounded to cents

    Raises:
        ValueError: If an addon id is not in the hanging catalog
    """
    addon_prices = {addon_id: user_addon_price(addon_id, custom_rates) for addon_id in ADDONS}
    addon_lines = price_addons(data.addons, data.custom_addons, ADDONS, addon_prices)
    addons_subtotal = sum(line.total for line in addon_lines)

    ceiling_multiplier = ceiling_height_multiplier(data.ceiling_factor, custom_rates)
    multiplier = complexity_multiplier(data.complexity, custom_rates)

    if data.input_mode == "labor_only" and data.pricing_method == "per_sqft":
        labor_per_sqft = user_rates(custom_rates)["labor_per_sqft"]
        total_sqft = data.direct_sqft
        labor_subtotal = total_sqft * labor_per_sqft * ceiling_multiplier
        subtotal = labor_subtotal + addons_subtotal
        adjustment = subtotal * (multiplier - 1)
        return HangingEstimate(
            total_sqft=round_money(total_sqft),
            sheets_needed=0,
            material_subtotal=0,
            labor_subtotal=round_money(labor_subtotal),
            addons_subtotal=round_money(addons_subtotal),
            subtotal=round_money(subtotal),
            complexity_multiplier=multiplier,
            complexity_adjustment=round_money(adjustment),
            total=round_money(subtotal + adjustment),
            cost_per_sqft=labor_per_sqft * ceiling_multiplier * multiplier,
            cost_per_sheet=0,
            addons=addon_lines,
        )

    waste_factor = data.waste_factor
    if waste_factor is None:
        waste_factor = user_rates(custom_rates)["default_waste_factor"]
    wall_sqft = ceiling_sqft = 0.0
    from_rooms = area is not None or data.input_mode == "calculator"

    if area is not None:
        wall_sqft, ceiling_sqft = area
        total_sqft = round_money(wall_sqft + ceiling_sqft)
        entries = [_calculator_sheet(data, total_sqft, waste_factor)]
    elif data.input_mode == "calculator":
        totals = calculate_rooms_totals(data.rooms)
        wall_sqft, ceiling_sqft = totals.total_wall_sqft, totals.total_ceiling_sqft
        total_sqft = totals.grand_total_sqft
        entries = [_calculator_sheet(data, total_sqft, waste_factor)]
    else:
        entries = data.sheets
        total_sqft = sum(SHEET_SIZES.get(e.size, 0) * e.quantity for e in entries)

    priced = [_price_sheet(entry, data, custom_rates) for entry in entries]
    sheet_count = sum(p.quantity for p in priced)

    material_subtotal = sum(
        _effective_material(entry, custom_rates) * entry.quantity
        for entry, p in zip(entries, priced)
        if p.include_material
    )
    base_labor = sum(_effective_labor(entry, custom_rates) * entry.quantity for entry in entries)
    labor_subtotal = base_labor * _ceiling_share(
        ceiling_multiplier,
        ceiling_multiplier_applies_to(custom_rates) if from_rooms else "all",
        wall_sqft,
        ceiling_sqft,
    )

    subtotal = material_subtotal + labor_subtotal + addons_subtotal
    adjustment = subtotal * (multiplier - 1)
    total = subtotal + adjustment

    return HangingEstimate(
        total_sqft=round_money(total_sqft),
        sheets_needed=sheet_count,
        material_subtotal=round_money(material_subtotal),
        labor_subtotal=round_money(labor_subtotal),
        addons_subtotal=round_money(addons_subtotal),
        subtotal=round_money(subtotal),
        complexity_multiplier=multiplier,
        complexity_adjustment=round_money(adjustment),
        total=round_money(total),
        cost_per_sqft=round_money(total / total_sqft) if total_sqft > 0 else 0,
        cost_per_sheet=round_money(total / sheet_count) if sheet_count > 0 else 0,
        sheets=priced,
        addons=addon_lines,
    )


def _effective_material(entry: SheetEntry, custom_rates: Optional[CustomRates]) -> float:
    if entry.material_cost_override is not None:
        return entry.material_cost_override
    return sheet_material_cost(entry.type_id, custom_rates)


def _effective_labor(entry: SheetEntry, custom_rates: Optional[CustomRates]) -> float:
    if entry.labor_cost_override is not None:
        return entry.labor_cost_override
    return sheet_labor_cost(entry.type_id, custom_rates, entry.size)


def _ceiling_share(multiplier: float, applies_to: str, wall_sqft: float, ceiling_sqft: float) -> float:
    """
    Factor applied to labor for tall ceilings.

    ``walls_only`` and ``ceiling_only`` scale just that share of the area;
    without a wall/ceiling split the whole labor is scaled.
    """
    area = wall_sqft + ceiling_sqft
    if applies_to == "all" or area <= 0:
        return multiplier
    wall_share = wall_sqft / area
    ceiling_share = ceiling_sqft / area
    if applies_to == "walls_only":
        return wall_share * multiplier + ceiling_share
    return wall_share + ceiling_share * multiplier
