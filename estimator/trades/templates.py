"""
Template-based estimates: a base labor/material recipe scaled by a
complexity level, plus per-parameter dollar amounts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, NamedTuple, Optional, Protocol


class ComplexityInfo(NamedTuple):
    value: str
    label: str
    multiplier: float


COMPLEXITY_LEVELS: Dict[str, ComplexityInfo] = {
    c.value: c
    for c in (
        ComplexityInfo("simple", "Simple", 0.8),
        ComplexityInfo("standard", "Standard", 1.0),
        ComplexityInfo("complex", "Complex", 1.3),
        ComplexityInfo("premium", "Premium", 1.6),
    )
}


class PricedTemplate(Protocol):
    base_labor_hours: float
    base_material_cost: float
    complexity_multipliers: Optional[Mapping[str, float]]


class EstimateRange(NamedTuple):
    low: float
    high: float
    total: float


def calculate_estimate_range(
    template: Optional[PricedTemplate],
    parameters: Mapping[str, Any],
    complexity: str,
    hourly_rate: float,
) -> Optional[EstimateRange]:
    """
    Price a template estimate.

    Labor (hours x hourly rate) and material both scale with the complexity
    multiplier. Each numeric parameter with a matching template multiplier
    adds ``value x multiplier``; other parameters are ignored.

    Args:
        template: Template to price, or None
        parameters: Wizard answers, e.g. ``{"room_count": 3}``
        complexity: Complexity level; unknown levels count as standard
        hourly_rate: Contractor hourly rate

    Returns:
        The range (low == high == total), or None when there is no template
    """
    if template is None:
        return None

    level = COMPLEXITY_LEVELS.get(complexity)
    multiplier = level.multiplier if level else 1.0

    cost = template.base_labor_hours * hourly_rate * multiplier + template.base_material_cost * multiplier

    multipliers = template.complexity_multipliers or {}
    for key, value in parameters.items():
        per_unit = multipliers.get(key)
        if not per_unit or isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        cost += value * per_unit

    return EstimateRange(low=cost, high=cost, total=cost)


@dataclass(frozen=True)
class WizardTemplate:
    """A built-in template offered when a contractor has none of their own."""

    id: str
    template_name: str
    trade_type: str
    pricing_type: str
    description: str
    base_labor_hours: float
    base_material_cost: float
    required_fields: Dict[str, Any] = field(default_factory=dict)
    complexity_multipliers: Dict[str, float] = field(default_factory=dict)


def _hours_field() -> Dict[str, Any]:
    return {
        "estimated_hours": {"type": "number", "label": "Estimated Hours", "min": 1, "max": 100, "unit": "hours"}
    }


def _select(label: str, options: list[tuple[str, str]]) -> Dict[str, Any]:
    return {"type": "select", "label": label, "options": [{"value": v, "label": lbl} for v, lbl in options]}


DEFAULT_WIZARD_TEMPLATES: tuple[WizardTemplate, ...] = (
    WizardTemplate(
        id="default-framing-hourly",
        template_name="Framing - Hourly",
        trade_type="framing",
        pricing_type="hourly",
        description="Hourly rate for framing work",
        base_labor_hours=1,
        base_material_cost=0,
        required_fields=_hours_field(),
    ),
    WizardTemplate(
        id="default-framing-contract",
        template_name="Framing - Per Wall",
        trade_type="framing",
        pricing_type="contract",
        description="Fixed price per wall section",
        base_labor_hours=4,
        base_material_cost=150,
        required_fields={
            "wall_count": {"type": "number", "label": "Number of Walls", "min": 1, "max": 20},
            "wall_height": _select("Wall Height", [("8", "8 ft (Standard)"), ("9", "9 ft"), ("10", "10 ft")]),
        },
        complexity_multipliers={"wall_count": 75},
    ),
    WizardTemplate(
        id="default-drywall-hourly",
        template_name="Drywall - Hourly",
        trade_type="drywall",
        pricing_type="hourly",
        description="Hourly rate for drywall installation",
        base_labor_hours=1,
        base_material_cost=0,
        required_fields=_hours_field(),
    ),
    WizardTemplate(
        id="default-drywall-contract",
        template_name="Drywall - Per Sheet",
        trade_type="drywall",
        pricing_type="contract",
        description="Fixed price per sheet installed",
        base_labor_hours=0.5,
        base_material_cost=15,
        required_fields={
            "sheet_count": {"type": "number", "label": "Number of Sheets", "min": 1, "max": 200},
            "sheet_type": _select(
                "Drywall Type",
                [("regular", 'Regular 1/2"'), ("moisture", "Moisture Resistant"), ("fire", "Fire Rated")],
            ),
        },
        complexity_multipliers={"sheet_count": 25},
    ),
    WizardTemplate(
        id="default-finishing-hourly",
        template_name="Finishing - Hourly",
        trade_type="drywall_finishing",
        pricing_type="hourly",
        description="Hourly rate for taping and finishing",
        base_labor_hours=1,
        base_material_cost=0,
        required_fields=_hours_field(),
    ),
    WizardTemplate(
        id="default-finishing-contract",
        template_name="Finishing - Per Room",
        trade_type="drywall_finishing",
        pricing_type="contract",
        description="Fixed price per room",
        base_labor_hours=3,
        base_material_cost=50,
        required_fields={
            "room_count": {"type": "number", "label": "Number of Rooms", "min": 1, "max": 20},
            "finish_level": _select(
                "Finish Level",
                [("level3", "Level 3 (Standard)"), ("level4", "Level 4 (Paint Ready)"), ("level5", "Level 5 (Premium)")],
            ),
        },
        complexity_multipliers={"room_count": 120},
    ),
    WizardTemplate(
        id="default-painting-hourly",
        template_name="Painting - Hourly",
        trade_type="painting",
        pricing_type="hourly",
        description="Hourly rate for painting work",
        base_labor_hours=1,
        base_material_cost=0,
        required_fields=_hours_field(),
    ),
    WizardTemplate(
        id="default-painting-contract",
        template_name="Painting - Per Room",
        trade_type="painting",
        pricing_type="contract",
        description="Fixed price per room including paint",
        base_labor_hours=2,
        base_material_cost=75,
        required_fields={
            "room_count": {"type": "number", "label": "Number of Rooms", "min": 1, "max": 20},
            "paint_type": _select(
                "Paint Quality", [("standard", "Standard"), ("premium", "Premium"), ("specialty", "Specialty")]
            ),
        },
        complexity_multipliers={"room_count": 150},
    ),
)


def get_default_template(template_id: str) -> Optional[WizardTemplate]:
    return next((t for t in DEFAULT_WIZARD_TEMPLATES if t.id == template_id), None)
