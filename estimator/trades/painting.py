"""
Interior painting pricing over wall and ceiling square footage.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from estimator.schemas.rates import CustomRates, PaintingRates
from estimator.trades.geometry import Room, TradeRoomView, calculate_rooms_totals
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

TRADE_TYPE = "painting"

CoatCount = Literal[1, 2, 3]
PaintQuality = Literal["standard", "premium", "specialty"]
SurfacePrep = Literal["none", "light", "heavy"]

COAT_MULTIPLIERS: Dict[int, float] = {1: 0.7, 2: 1.0, 3: 1.35}
QUALITY_MULTIPLIERS: Dict[str, float] = {"standard": 1.0, "premium": 1.4, "specialty": 2.0}
PREP_COST_PER_SQFT: Dict[str, float] = {"none": 0, "light": 0.15, "heavy": 0.35}

ADDONS: Dict[str, AddonDefinition] = {
    a.id: a
    for a in (
        AddonDefinition("trim_paint", "Trim & Baseboards", 2.5, AddonUnit.LINEAR_FT),
        AddonDefinition("door_paint", "Door Painting", 75, AddonUnit.EACH),
        AddonDefinition("cabinet_paint", "Cabinet Painting", 150, AddonUnit.EACH),
        AddonDefinition("ceiling_texture", "Ceiling Texture", 0.5, AddonUnit.SQFT),
        AddonDefinition("accent_wall", "Accent Wall (different color)", 0.25, AddonUnit.SQFT),
        AddonDefinition("wallpaper_removal", "Wallpaper Removal", 1.5, AddonUnit.SQFT),
        AddonDefinition("high_ceiling", "High Ceiling Premium (10ft+)", 0.2, AddonUnit.SQFT),
        AddonDefinition("furniture_moving", "Furniture Moving", 100, AddonUnit.FLAT),
    )
}

RATES: Dict[str, RateRange] = {
    "labor_per_sqft": RateRange(1.25, 1.75, 2.5),
    "material_per_sqft": RateRange(0.35, 0.5, 0.75),
    "ceiling_modifier": RateRange(1.1, 1.2, 1.35),
}

COMPLEXITY_MULTIPLIERS: Dict[str, float] = {"simple": 0.85, "standard": 1.0, "complex": 1.3}

RANGE_SPREAD = 0.15


def user_rates(custom_rates: Optional[CustomRates]) -> PaintingRates:
    painting = custom_rates.painting if custom_rates else None
    return PaintingRates(
        labor_per_sqft=pick(painting and painting.labor_per_sqft, RATES["labor_per_sqft"].mid),
        material_per_sqft=pick(painting and painting.material_per_sqft, RATES["material_per_sqft"].mid),
        ceiling_modifier=pick(painting and painting.ceiling_modifier, RATES["ceiling_modifier"].mid),
    )


def is_rate_customized(rate: str, custom_rates: Optional[CustomRates]) -> bool:
    painting = custom_rates.painting if custom_rates else None
    return painting is not None and getattr(painting, rate, None) is not None


def user_addon_price(addon_id: str, custom_rates: Optional[CustomRates]) -> float:
    prices = custom_rates.painting_addons if custom_rates else None
    user_price = getattr(prices, addon_id, None) if prices else None
    if user_price is not None:
        return user_price
    definition = ADDONS.get(addon_id)
    return definition.price if definition else 0


def complexity_multiplier(level: ComplexityLevel, custom_rates: Optional[CustomRates]) -> float:
    user = custom_rates.painting_complexity if custom_rates else None
    return pick(getattr(user, level, None) if user else None, COMPLEXITY_MULTIPLIERS[level])


class PaintingEstimateInput(BaseModel):
    wall_sqft: float = Field(default=0, ge=0)
    ceiling_sqft: float = Field(default=0, ge=0)
    # When rooms are given they replace the entered square footage
    rooms: List[Room] = Field(default_factory=list)
    coat_count: CoatCount = 2
    paint_quality: PaintQuality = "standard"
    surface_prep: SurfacePrep = "none"
    complexity: ComplexityLevel = "standard"
    addons: List[SelectedAddon] = Field(default_factory=list)
    custom_addons: List[CustomAddon] = Field(default_factory=list)


class PaintingEstimate(BaseModel):
    total_sqft: float
    wall_sqft: float
    ceiling_sqft: float
    labor_subtotal: float
    material_subtotal: float
    prep_subtotal: float
    addons_subtotal: float
    subtotal: float
    complexity_multiplier: float
    complexity_adjustment: float
    total: float
    cost_per_sqft: float
    range_low: float
    range_high: float
    addons: List[AddonLine] = Field(default_factory=list)

    def to_trade_totals(self) -> TradeTotals:
        return TradeTotals(
            trade_type=TRADE_TYPE,
            material_cost=self.material_subtotal,
            labor_cost=round_money(self.labor_subtotal + self.prep_subtotal),
            addons_cost=self.addons_subtotal,
            subtotal=self.subtotal,
            complexity_adjustment=self.complexity_adjustment,
            total=self.total,
            range_low=self.range_low,
            range_high=self.range_high,
        )


def from_rooms(room_views: List[TradeRoomView]) -> tuple[float, float]:
    """Effective ``(wall_sqft, ceiling_sqft)`` across a project's rooms."""
    walls = sum(view.effective_wall_sqft for view in room_views)
    ceilings = sum(view.effective_ceiling_sqft for view in room_views)
    return round_money(walls), round_money(ceilings)


def _area(data: PaintingEstimateInput) -> tuple[float, float]:
    if data.rooms:
        totals = calculate_rooms_totals(data.rooms)
        return totals.total_wall_sqft, totals.total_ceiling_sqft
    return data.wall_sqft, data.ceiling_sqft


def calculate_painting_estimate(
    data: PaintingEstimateInput,
    custom_rates: Optional[CustomRates] = None,
    rates: Optional[PaintingRates] = None,
    area: Optional[tuple[float, float]] = None,
) -> PaintingEstimate:
    """
    Price a painting job.

    Labor covers walls and, at the ceiling modifier, ceilings; material
    covers all surfaces at the paint quality multiplier; both scale with
    the number of coats.

    Args:
        data: Estimate input
        custom_rates: Contractor overrides (rates, addon prices, complexity)
        rates: Explicit rates; takes precedence over ``custom_rates``
        area: ``(wall_sqft, ceiling_sqft)`` supplied by a project

    Raises:
        ValueError: If an addon id is not in the painting catalog
    """
    wall_sqft, ceiling_sqft = area if area is not None else _area(data)
    total_sqft = wall_sqft + ceiling_sqft

    effective = rates or user_rates(custom_rates)
    labor_rate = pick(effective.labor_per_sqft, RATES["labor_per_sqft"].mid)
    material_rate = pick(effective.material_per_sqft, RATES["material_per_sqft"].mid)
    ceiling_modifier = pick(effective.ceiling_modifier, RATES["ceiling_modifier"].mid)

    coat = COAT_MULTIPLIERS[data.coat_count]
    labor = wall_sqft * labor_rate * coat + ceiling_sqft * labor_rate * coat * ceiling_modifier
    material = total_sqft * material_rate * coat * QUALITY_MULTIPLIERS[data.paint_quality]
    prep = total_sqft * PREP_COST_PER_SQFT[data.surface_prep]

    addon_prices = {addon_id: user_addon_price(addon_id, custom_rates) for addon_id in ADDONS}
    addon_lines = price_addons(data.addons, data.custom_addons, ADDONS, addon_prices)
    addons_subtotal = sum(line.total for line in addon_lines)

    subtotal = labor + material + prep + addons_subtotal
    multiplier = complexity_multiplier(data.complexity, custom_rates)
    adjustment = subtotal * (multiplier - 1)
    total = subtotal + adjustment

    return PaintingEstimate(
        total_sqft=round_money(total_sqft),
        wall_sqft=round_money(wall_sqft),
        ceiling_sqft=round_money(ceiling_sqft),
        labor_subtotal=round_money(labor),
        material_subtotal=round_money(material),
        prep_subtotal=round_money(prep),
        addons_subtotal=round_money(addons_subtotal),
        subtotal=round_money(subtotal),
        complexity_multiplier=multiplier,
        complexity_adjustment=round_money(adjustment),
        total=round_money(total),
        cost_per_sqft=round_money(total / total_sqft) if total_sqft > 0 else 0,
        range_low=round_money(total * (1 - RANGE_SPREAD)),
        range_high=round_money(total * (1 + RANGE_SPREAD)),
        addons=addon_lines,
    )


def calculate_painting_range(
    data: PaintingEstimateInput,
    custom_rates: Optional[CustomRates] = None,
    area: Optional[tuple[float, float]] = None,
) -> tuple[float, float]:
    """Totals at the low and high industry rates."""
    low = PaintingRates(**{name: r.low for name, r in RATES.items()})
    high = PaintingRates(**{name: r.high for name, r in RATES.items()})
    return (
        calculate_painting_estimate(data, custom_rates, rates=low, area=area).total,
        calculate_painting_estimate(data, custom_rates, rates=high, area=area).total,
    )
