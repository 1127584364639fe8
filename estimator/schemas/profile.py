"""
Contractor profile schemas, including the pricing settings form.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from estimator.schemas.rates import (
    CustomRates,
    DrywallAddonPrices,
    DrywallFinishingRates,
    DrywallHangingAddonPrices,
    DrywallHangingRates,
    FramingRates,
    PaintingRates,
)
from estimator.trades import drywall_finishing, drywall_hanging, framing, painting


class ProfileBase(BaseModel):
    """Base profile schema with common fields."""

    email: EmailStr
    company_name: str = ""
    trade_type: Optional[str] = None
    phone: Optional[str] = None


class ProfileCreate(ProfileBase):
    """Schema for contractor registration."""

    password: str = Field(min_length=8)


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    company_name: Optional[str] = None
    trade_type: Optional[str] = None
    phone: Optional[str] = None
    logo_url: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    service_areas: Optional[List[str]] = None
    custom_rates: Optional[CustomRates] = None


class ProfileResponse(ProfileBase):
    """
    Schema for profile data in API responses.
    Excludes the password hash.
    """

    id: int
    logo_url: Optional[str] = None
    hourly_rate: Optional[float] = None
    custom_rates: Optional[Dict[str, Any]] = None
    service_areas: List[str] = []
    hidden_template_ids: List[str] = []
    templates_onboarded: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SettingsForm(BaseModel):
    """
    Pricing settings as edited on the settings page.

    Every rate must be 0 or greater. Defaults are the industry mid rates.
    """

    company_name: Optional[str] = None
    hourly_rate: Optional[float] = None

    # Drywall finishing
    sqft_standard: float = drywall_finishing.RATES["sqft_standard"].mid
    sqft_premium: float = drywall_finishing.RATES["sqft_premium"].mid
    linear_joints: float = drywall_finishing.RATES["linear_joints"].mid
    linear_corners: float = drywall_finishing.RATES["linear_corners"].mid

    # Drywall finishing add-ons
    addon_sanding: float = 150
    addon_primer: float = 0.35
    addon_repair_holes: float = 45
    addon_texture_match: float = 200
    addon_high_ceiling: float = 0.25
    addon_dust_barrier: float = 75

    # Drywall hanging
    hanging_labor_per_sheet: float = drywall_hanging.RATES["labor_per_sheet"].mid
    hanging_labor_per_sqft: float = drywall_hanging.RATES["labor_per_sqft"].mid
    hanging_material_markup: float = drywall_hanging.RATES["material_markup"].mid
    hanging_default_waste: float = drywall_hanging.DEFAULT_WASTE_FACTOR

    # Drywall hanging add-ons
    hanging_delivery: float = 150
    hanging_stocking: float = 0.15
    hanging_debris_removal: float = 200
    hanging_corner_bead: float = 2.5
    hanging_insulation: float = 1.25
    hanging_vapor_barrier: float = 0.45

    # Painting
    painting_labor_per_sqft: float = painting.RATES["labor_per_sqft"].mid
    painting_material_per_sqft: float = painting.RATES["material_per_sqft"].mid
    painting_ceiling_modifier: float = painting.RATES["ceiling_modifier"].mid

    # Framing
    framing_labor_per_linear_ft: float = framing.RATES["labor_per_linear_ft"].mid
    framing_labor_per_sqft: float = framing.RATES["labor_per_sqft"].mid
    framing_material_markup: float = framing.RATES["material_markup"].mid

    @field_validator("hourly_rate", mode="before")
    @classmethod
    def blank_hourly_rate(cls, v: Any) -> Any:
        """An empty input means no hourly rate."""
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("*", mode="after")
    @classmethod
    def non_negative(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and v < 0:
            raise ValueError("Must be 0 or greater")
        return v

    def to_custom_rates(self, existing: Optional[CustomRates] = None) -> CustomRates:
        """
        Merge the form into a contractor's overrides.

        Sections the form does not edit (complexity maps, painting and
        framing add-ons, finishing material prices) are kept from ``existing``.
        """
        base = existing or CustomRates()
        existing_hanging = base.drywall_hanging or DrywallHangingRates()
        return base.model_copy(
            update={
                "drywall_finishing": DrywallFinishingRates(
                    sqft_standard=self.sqft_standard,
                    sqft_premium=self.sqft_premium,
                    linear_joints=self.linear_joints,
                    linear_corners=self.linear_corners,
                ),
                "drywall_addons": DrywallAddonPrices(
                    sanding=self.addon_sanding,
                    primer=self.addon_primer,
                    repair_holes=self.addon_repair_holes,
                    texture_match=self.addon_texture_match,
                    high_ceiling=self.addon_high_ceiling,
                    dust_barrier=self.addon_dust_barrier,
                ),
                "drywall_hanging": existing_hanging.model_copy(
                    update={
                        "labor_per_sheet": self.hanging_labor_per_sheet,
                        "labor_per_sqft": self.hanging_labor_per_sqft,
                        "material_markup": self.hanging_material_markup,
                        "default_waste_factor": self.hanging_default_waste,
                    }
                ),
                "drywall_hanging_addons": DrywallHangingAddonPrices(
                    delivery=self.hanging_delivery,
                    stocking=self.hanging_stocking,
                    debris_removal=self.hanging_debris_removal,
                    corner_bead=self.hanging_corner_bead,
                    insulation=self.hanging_insulation,
                    vapor_barrier=self.hanging_vapor_barrier,
                ),
                "painting": PaintingRates(
                    labor_per_sqft=self.painting_labor_per_sqft,
                    material_per_sqft=self.painting_material_per_sqft,
                    ceiling_modifier=self.painting_ceiling_modifier,
                ),
                "framing": FramingRates(
                    labor_per_linear_ft=self.framing_labor_per_linear_ft,
                    labor_per_sqft=self.framing_labor_per_sqft,
                    material_markup=self.framing_material_markup,
                ),
            }
        )

    @classmethod
    def from_profile(
        cls, company_name: str, hourly_rate: Optional[float], custom_rates: Optional[CustomRates]
    ) -> "SettingsForm":
        """Fill the form from stored settings; unset values keep their defaults."""
        rates = custom_rates or CustomRates()
        values: Dict[str, Any] = {"company_name": company_name, "hourly_rate": hourly_rate}

        sections = {
            "drywall_finishing": ("", ["sqft_standard", "sqft_premium", "linear_joints", "linear_corners"]),
            "drywall_addons": (
                "addon_",
                ["sanding", "primer", "repair_holes", "texture_match", "high_ceiling", "dust_barrier"],
            ),
            "drywall_hanging_addons": (
                "hanging_",
                ["delivery", "stocking", "debris_removal", "corner_bead", "insulation", "vapor_barrier"],
            ),
            "painting": ("painting_", ["labor_per_sqft", "material_per_sqft", "ceiling_modifier"]),
            "framing": ("framing_", ["labor_per_linear_ft", "labor_per_sqft", "material_markup"]),
        }
        for section, (prefix, names) in sections.items():
            stored = getattr(rates, section)
            for name in names:
                value = getattr(stored, name, None) if stored else None
                if value is not None:
                    values[f"{prefix}{name}"] = value

        hanging = rates.drywall_hanging
        if hanging:
            for field_name, attr in (
                ("hanging_labor_per_sheet", "labor_per_sheet"),
                ("hanging_labor_per_sqft", "labor_per_sqft"),
                ("hanging_material_markup", "material_markup"),
                ("hanging_default_waste", "default_waste_factor"),
            ):
                value = getattr(hanging, attr)
                if value is not None:
                    values[field_name] = value

        return cls(**values)
