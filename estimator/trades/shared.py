"""
Building blocks shared by every trade calculator: addon units and totals,
rate ranges and money rounding.
"""

from enum import Enum
from typing import Dict, Literal, NamedTuple, Optional

from pydantic import BaseModel, Field

ComplexityLevel = Literal["simple", "standard", "complex"]


class AddonUnit(str, Enum):
    FLAT = "flat"
    SQFT = "sqft"
    LINEAR_FT = "linear_ft"
    EACH = "each"


class RateRange(NamedTuple):
    """Industry low / mid / high rate for one pricing dimension."""

    low: float
    mid: float
    high: float


class AddonDefinition(NamedTuple):
    """A preset addon in a trade catalog."""

    id: str
    name: str
    price: float
    unit: AddonUnit


class SelectedAddon(BaseModel):
    """A preset addon chosen on an estimate, with an optional price override."""

    id: str
    quantity: float = Field(default=1, ge=0)
    price_override: Optional[float] = Field(default=None, ge=0)


class CustomAddon(BaseModel):
    """A free-form addon defined by the contractor on a single estimate."""

    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    unit: AddonUnit = AddonUnit.FLAT
    quantity: float = Field(default=1, ge=0)


class AddonLine(BaseModel):
    """A priced addon, ready for totals and PDF rendering."""

    id: Optional[str] = None
    name: str
    unit: AddonUnit
    price: float
    quantity: float
    total: float


def round_money(value: float) -> float:
    """Round to cents."""
    return round(value * 100) / 100


def addon_total(price: float, unit: AddonUnit, quantity: float) -> float:
    """Flat addons cost their price once; the rest scale with quantity."""
    if unit == AddonUnit.FLAT:
        return price
    return price * quantity


def pick(user_value: Optional[float], default: float) -> float:
    """Return the contractor's value when it is set, else the default."""
    return default if user_value is None else user_value


def price_addons(
    selected: list[SelectedAddon],
    custom: list[CustomAddon],
    catalog: Dict[str, AddonDefinition],
    prices: Dict[str, float],
) -> list[AddonLine]:
    """
    Price preset and custom addons.

    Args:
        selected: Preset addons chosen on the estimate
        custom: Contractor-defined addons
        catalog: The trade's preset addon catalog, keyed by id
        prices: Effective contractor price per preset addon id

    Returns:
        One priced line per addon, presets first

    Raises:
        ValueError: If a selected addon id is not in the catalog
    """
    lines: list[AddonLine] = []
    for addon in selected:
        definition = catalog.get(addon.id)
        if definition is None:
            raise ValueError(f"Unknown addon: {addon.id}")
        price = addon.price_override if addon.price_override is not None else prices[addon.id]
        lines.append(
            AddonLine(
                id=definition.id,
                name=definition.name,
                unit=definition.unit,
                price=price,
                quantity=addon.quantity,
                total=addon_total(price, definition.unit, addon.quantity),
            )
        )
    for addon in custom:
        lines.append(
            AddonLine(
                name=addon.name,
                unit=addon.unit,
                price=addon.price,
                quantity=addon.quantity,
                total=addon_total(addon.price, addon.unit, addon.quantity),
            )
        )
    return lines


class TradeTotals(BaseModel):
    """Common result shape every trade calculator reduces to."""

    trade_type: str
    material_cost: float = 0
    labor_cost: float = 0
    addons_cost: float = 0
    subtotal: float = 0
    complexity_adjustment: float = 0
    total: float = 0
    range_low: float = 0
    range_high: float = 0
