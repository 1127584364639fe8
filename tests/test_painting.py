"""
Tests for painting pricing.
"""

import pytest

from estimator.schemas.rates import CustomRates
from estimator.trades.geometry import Room
from estimator.trades.painting import (
    PaintingEstimateInput,
    calculate_painting_estimate,
    calculate_painting_range,
)
from estimator.trades.shared import SelectedAddon


def _input(**overrides: object) -> PaintingEstimateInput:
    values: dict = {"wall_sqft": 1000, "ceiling_sqft": 200}
    values.update(overrides)
    return PaintingEstimateInput(**values)


@pytest.mark.smoke
def test_two_coats_standard_paint() -> None:
    estimate = calculate_painting_estimate(_input())
    # Ceilings cost 1.2x the wall labor rate
    assert estimate.labor_subtotal == pytest.approx(1000 * 1.75 + 200 * 1.75 * 1.2)
    assert estimate.material_subtotal == pytest.approx(600)
    assert estimate.total == pytest.approx(2770)
    assert estimate.cost_per_sqft == 2.31
    assert estimate.range_low == pytest.approx(2770 * 0.85)
    assert estimate.range_high == pytest.approx(2770 * 1.15)


def test_coats_and_quality() -> None:
    estimate = calculate_painting_estimate(_input(coat_count=1, paint_quality="premium"))
    assert estimate.labor_subtotal == pytest.approx(2170 * 0.7)
    assert estimate.material_subtotal == pytest.approx(600 * 0.7 * 1.4)


def test_surface_prep() -> None:
    estimate = calculate_painting_estimate(_input(surface_prep="heavy"))
    assert estimate.prep_subtotal == pytest.approx(1200 * 0.35)
    assert estimate.to_trade_totals().labor_cost == pytest.approx(2170 + 420)


def test_addons_and_complexity() -> None:
    data = _input(
        complexity="complex",
        addons=[SelectedAddon(id="door_paint", quantity=2), SelectedAddon(id="furniture_moving")],
    )
    estimate = calculate_painting_estimate(data)
    assert estimate.addons_subtotal == 250
    assert estimate.total == pytest.approx((2770 + 250) * 1.3)


def test_rooms_replace_entered_area() -> None:
    estimate = calculate_painting_estimate(_input(rooms=[Room()]))
    assert estimate.wall_sqft == 352
    assert estimate.ceiling_sqft == 120


def test_custom_rates() -> None:
    rates = CustomRates.from_json({"painting": {"labor_per_sqft": 2, "ceiling_modifier": 1}})
    estimate = calculate_painting_estimate(_input(), rates)
    assert estimate.labor_subtotal == pytest.approx(2400)


def test_range_at_industry_rates() -> None:
    low, high = calculate_painting_range(_input())
    assert low == pytest.approx(1000 * 1.25 + 200 * 1.25 * 1.1 + 1200 * 0.35)
    assert high == pytest.approx(1000 * 2.5 + 200 * 2.5 * 1.35 + 1200 * 0.75)


def test_no_area_has_zero_cost_per_sqft() -> None:
    estimate = calculate_painting_estimate(PaintingEstimateInput())
    assert estimate.total == 0
    assert estimate.cost_per_sqft == 0
