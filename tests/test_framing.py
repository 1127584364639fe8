"""
Tests for framing pricing.
"""

import pytest

from estimator.schemas.rates import CustomRates
from estimator.trades.framing import FramingEstimateInput, calculate_framing_estimate
from estimator.trades.shared import SelectedAddon


@pytest.mark.smoke
def test_walls_with_marked_up_material() -> None:
    estimate = calculate_framing_estimate(FramingEstimateInput(linear_feet=100, material_cost=500))
    assert estimate.labor_cost == 800
    assert estimate.material_cost == pytest.approx(575)
    assert estimate.total == pytest.approx(1375)
    assert estimate.range_low == pytest.approx(500 + 550)
    assert estimate.range_high == pytest.approx(1200 + 625)


def test_area_counts_only_for_ceiling_or_floor() -> None:
    walls = calculate_framing_estimate(FramingEstimateInput(linear_feet=100, sqft=200))
    ceiling = calculate_framing_estimate(FramingEstimateInput(linear_feet=100, sqft=200, include_ceiling=True))
    assert walls.labor_cost == 800
    assert ceiling.labor_cost == 800 + 200 * 4


def test_addons_and_complexity() -> None:
    data = FramingEstimateInput(
        linear_feet=100,
        complexity="complex",
        addons=[SelectedAddon(id="blocking", quantity=4), SelectedAddon(id="fire_blocking", quantity=50)],
    )
    estimate = calculate_framing_estimate(data)
    assert estimate.addons_cost == 160
    assert estimate.subtotal == 960
    assert estimate.total == pytest.approx(960 * 1.3)


def test_custom_rates() -> None:
    rates = CustomRates.from_json(
        {"framing": {"labor_per_linear_ft": 10}, "framing_complexity": {"complex": 2}}
    )
    estimate = calculate_framing_estimate(FramingEstimateInput(linear_feet=10, complexity="complex"), rates)
    assert estimate.labor_cost == 100
    assert estimate.total == 200


def test_unknown_addon_is_rejected() -> None:
    with pytest.raises(ValueError):
        calculate_framing_estimate(FramingEstimateInput(addons=[SelectedAddon(id="roofing")]))
