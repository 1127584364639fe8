"""
Per-contractor rate overrides, stored as JSON on the profile.

Every field is optional: a missing value means "use the industry default".
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

CeilingMultiplierAppliesTo = Literal["all", "ceiling_only", "walls_only"]


class _Rates(BaseModel):
    model_config = ConfigDict(extra="ignore")


class DrywallFinishingRates(_Rates):
    sqft_standard: Optional[float] = Field(default=None, ge=0)
    sqft_premium: Optional[float] = Field(default=None, ge=0)
    linear_joints: Optional[float] = Field(default=None, ge=0)
    linear_corners: Optional[float] = Field(default=None, ge=0)


class DrywallAddonPrices(_Rates):
    sanding: Optional[float] = Field(default=None, ge=0)  # flat
    primer: Optional[float] = Field(default=None, ge=0)  # per sqft
    repair_holes: Optional[float] = Field(default=None, ge=0)  # each
    texture_match: Optional[float] = Field(default=None, ge=0)  # flat
    high_ceiling: Optional[float] = Field(default=None, ge=0)  # per sqft
    dust_barrier: Optional[float] = Field(default=None, ge=0)  # flat


class CeilingHeightMultipliers(_Rates):
    standard: Optional[float] = Field(default=None, ge=0)
    nine_ft: Optional[float] = Field(default=None, ge=0)
    ten_ft: Optional[float] = Field(default=None, ge=0)
    cathedral: Optional[float] = Field(default=None, ge=0)


class DrywallHangingRates(_Rates):
    labor_per_sheet: Optional[float] = Field(default=None, ge=0)
    labor_per_sqft: Optional[float] = Field(default=None, ge=0)
    material_markup: Optional[float] = Field(default=None, ge=0)  # percent
    default_waste_factor: Optional[float] = Field(default=None, ge=0, le=1)
    ceiling_height_multipliers: Optional[CeilingHeightMultipliers] = None
    ceiling_multiplier_applies_to: Optional[CeilingMultiplierAppliesTo] = None


class DrywallHangingAddonPrices(_Rates):
    delivery: Optional[float] = Field(default=None, ge=0)
    stocking: Optional[float] = Field(default=None, ge=0)
    debris_removal: Optional[float] = Field(default=None, ge=0)
    corner_bead: Optional[float] = Field(default=None, ge=0)
    insulation: Optional[float] = Field(default=None, ge=0)
    vapor_barrier: Optional[float] = Field(default=None, ge=0)


class PaintingRates(_Rates):
    labor_per_sqft: Optional[float] = Field(default=None, ge=0)
    material_per_sqft: Optional[float] = Field(default=None, ge=0)
    ceiling_modifier: Optional[float] = Field(default=None, ge=0)


class PaintingAddonPrices(_Rates):
    trim_paint: Optional[float] = Field(default=None, ge=0)
    door_paint: Optional[float] = Field(default=None, ge=0)
    cabinet_paint: Optional[float] = Field(default=None, ge=0)
    ceiling_texture: Optional[float] = Field(default=None, ge=0)
    accent_wall: Optional[float] = Field(default=None, ge=0)
    wallpaper_removal: Optional[float] = Field(default=None, ge=0)
    high_ceiling: Optional[float] = Field(default=None, ge=0)
    furniture_moving: Optional[float] = Field(default=None, ge=0)


class FramingRates(_Rates):
    labor_per_linear_ft: Optional[float] = Field(default=None, ge=0)
    labor_per_sqft: Optional[float] = Field(default=None, ge=0)
    material_markup: Optional[float] = Field(default=None, ge=0)


class FramingAddonPrices(_Rates):
    blocking: Optional[float] = Field(default=None, ge=0)
    header_upgrade: Optional[float] = Field(default=None, ge=0)
    fire_blocking: Optional[float] = Field(default=None, ge=0)
    demolition: Optional[float] = Field(default=None, ge=0)


class TradeComplexity(_Rates):
    simple: Optional[float] = Field(default=None, ge=0)
    standard: Optional[float] = Field(default=None, ge=0)
    complex: Optional[float] = Field(default=None, ge=0)


class CustomRates(_Rates):
    """All contractor overrides, grouped by trade."""

    drywall_finishing: Optional[DrywallFinishingRates] = None
    drywall_addons: Optional[DrywallAddonPrices] = None
    drywall_hanging: Optional[DrywallHangingRates] = None
    drywall_hanging_addons: Optional[DrywallHangingAddonPrices] = None
    painting: Optional[PaintingRates] = None
    painting_addons: Optional[PaintingAddonPrices] = None
    framing: Optional[FramingRates] = None
    framing_addons: Optional[FramingAddonPrices] = None
    # Preset finishing material id -> price
    finishing_material_prices: Optional[dict[str, float]] = None
    drywall_hanging_complexity: Optional[TradeComplexity] = None
    drywall_finishing_complexity: Optional[TradeComplexity] = None
    painting_complexity: Optional[TradeComplexity] = None
    framing_complexity: Optional[TradeComplexity] = None

    @classmethod
    def from_json(cls, data: Optional[dict]) -> "CustomRates":
        """Build from the raw JSON column; ``None`` means no overrides."""
        return cls.model_validate(data or {})
