"""
Wall framing pricing: linear feet of wall, plus area when ceiling or
floor framing is part of the job.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from estimator.schemas.rates import CustomRates, FramingRates
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

TRADE_TYPE = "framing"

STUD_SPACING_OPTIONS = (16, 24)

RATES: Dict[str, RateRange] = {
    "labor_per_linear_ft": RateRange(5, 8, 12),
    "labor_per_sqft": RateRange(2.5, 4, 6),
    "material_markup": RateRange(10, 15, 25),  # percent
}

ADDONS: Dict[str, AddonDefinition] = {
    a.id: a
    for a in (
        AddonDefinition("blocking", "Blocking", 15, AddonUnit.EACH),
        AddonDefinition("header_upgrade", "Header Upgrade (LVL)", 75, AddonUnit.EACH),
        AddonDefinition("fire_blocking", "Fire Blocking", 2, AddonUnit.LINEAR_FT),
        AddonDefinition("demolition", "Demolition", 1.5, AddonUnit.SQFT),
    )
}

COMPLEXITY_MULTIPLIERS: Dict[str, float] = {"simple": 0.85, "standard": 1.0, "complex": 1.3}


def user_rates(custom_rates: Optional[CustomRates]) -> FramingRates:
    framing = custom_rates.framing if custom_rates else None
    return FramingRates(
        labor_per_linear_ft=pick(framing and framing.labor_per_linear_ft, RATES["labor_per_linear_ft"].mid),
        labor_per_sqft=pick(framing and framing.labor_per_sqft, RATES["labor_per_sqft"].mid),
        material_markup=pick(framing and framing.material_markup, RATES["material_markup"].mid),
    )


def is_rate_customized(rate: str, custom_rates: Optional[CustomRates]) -> bool:
    framing = custom_rates.framing if custom_rates else None
    return framing is not None and getattr(framing, rate, None) is not None


def user_addon_price(addon_id: str, custom_rates: Optional[CustomRates]) -> float:
    prices = custom_rates.framing_addons if custom_rates else None
    user_price = getattr(prices, addon_id, None) if prices else None
    if user_price is not None:
        return user_price
    definition = ADDONS.get(addon_id)
    return definition.price if definition else 0


def complexity_multiplier(level: ComplexityLevel, custom_rates: Optional[CustomRates]) -> float:
    user = custom_rates.framing_complexity if custom_rates else None
    return pick(getattr(user, level, None) if user else None, COMPLEXITY_MULTIPLIERS[level])


class FramingEstimateInput(BaseModel):
    linear_feet: float = Field(default=0, ge=0)
    sqft: float = Field(default=0, ge=0)
    stud_spacing: Literal[16, 24] = 16
    include_ceiling: bool = False
    include_floor: bool = False
    # Lumber and hardware cost before markup
    material_cost: float = Field(default=0, ge=0)
    complexity: ComplexityLevel = "standard"
    addons: List[SelectedAddon] = Field(default_factory=list)
    custom_addons: List[CustomAddon] = Field(default_factory=list)


class FramingEstimate(BaseModel):
    labor_cost: float
    material_cost: float
    addons_cost: float
    subtotal: float
    complexity_multiplier: float
    complexity_adjustment: float
    total: float
    range_low: float
    range_high: float
    addons: List[AddonLine] = Field(default_factory=list)

    def to_trade_totals(self) -> TradeTotals:
        return TradeTotals(
            trade_type=TRADE_TYPE,
            material_cost=self.material_cost,
            labor_cost=self.labor_cost,
            addons_cost=self.addons_cost,
            subtotal=self.subtotal,
            complexity_adjustment=self.complexity_adjustment,
            total=self.total,
            range_low=self.range_low,
            range_high=self.range_high,
        )


def _total(data: FramingEstimateInput, rates: FramingRates, addons_cost: float, multiplier: float) -> dict:
    labor = data.linear_feet * rates.labor_per_linear_ft
    if data.include_ceiling or data.include_floor:
        labor += data.sqft * rates.labor_per_sqft
    material = data.material_cost * (1 + rates.material_markup / 100)
    subtotal = labor + material + addons_cost
    adjustment = subtotal * (multiplier - 1)
    return {
        "labor_cost": labor,
        "material_cost": material,
        "subtotal": subtotal,
        "complexity_adjustment": adjustment,
        "total": subtotal + adjustment,
    }


def calculate_framing_estimate(
    data: FramingEstimateInput, custom_rates: Optional[CustomRates] = None
) -> FramingEstimate:
    """
    Price a framing job.

    The range is the same job priced at the low and high industry rates.

    Raises:
        ValueError: If an addon id is not in the framing catalog
    """
    addon_prices = {addon_id: user_addon_price(addon_id, custom_rates) for addon_id in ADDONS}
    addon_lines = price_addons(data.addons, data.custom_addons, ADDONS, addon_prices)
    addons_cost = sum(line.total for line in addon_lines)
    multiplier = complexity_multiplier(data.complexity, custom_rates)

    result = _total(data, user_rates(custom_rates), addons_cost, multiplier)
    low = _total(data, FramingRates(**{k: r.low for k, r in RATES.items()}), addons_cost, multiplier)
    high = _total(data, FramingRates(**{k: r.high for k, r in RATES.items()}), addons_cost, multiplier)

    return FramingEstimate(
        labor_cost=round_money(result["labor_cost"]),
        material_cost=round_money(result["material_cost"]),
        addons_cost=round_money(addons_cost),
        subtotal=round_money(result["subtotal"]),
        complexity_multiplier=multiplier,
        complexity_adjustment=round_money(result["complexity_adjustment"]),
        total=round_money(result["total"]),
        range_low=round_money(low["total"]),
        range_high=round_money(high["total"]),
        addons=addon_lines,
    )
