"""
Multi-trade project estimate.

Rooms are measured once and shared. Each enabled trade sees the rooms
through its own overrides, is priced by its calculator, and the project
total and range are the sums over enabled trades.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from estimator.schemas.rates import CustomRates
from estimator.trades import drywall_finishing, drywall_hanging, painting
from estimator.trades.geometry import (
    Room,
    RoomOverride,
    RoomsTotals,
    TradeRoomView,
    calculate_room_sqft,
    calculate_rooms_totals,
    trade_room_view,
)
from estimator.trades.shared import TradeTotals, round_money

PROJECT_TRADE_TYPES = ("drywall_hanging", "drywall_finishing", "painting")

TRADE_LABELS: Dict[str, str] = {
    "drywall_hanging": "Drywall Hanging",
    "drywall_finishing": "Drywall Finishing",
    "painting": "Painting",
    "framing": "Framing",
    "drywall": "Drywall",
}

TRADE_DEFAULT_INCLUDE_CEILING: Dict[str, bool] = {
    "drywall_hanging": True,
    "drywall_finishing": True,
    "painting": True,
}

TradeEstimate = Union[
    drywall_hanging.HangingEstimate,
    drywall_finishing.FinishingEstimate,
    painting.PaintingEstimate,
]


class ProjectRoomData(Room):
    """A shared room plus its per-trade overrides."""

    trade_overrides: Dict[str, RoomOverride] = Field(default_factory=dict)


class ProjectTradeData(BaseModel):
    trade_type: str
    enabled: bool = True
    parameters: Dict[str, Any] = Field(default_factory=dict)


class ProjectEstimate(BaseModel):
    rooms_totals: RoomsTotals
    trades: Dict[str, TradeTotals]
    estimates: Dict[str, TradeEstimate]
    room_views: Dict[str, List[TradeRoomView]]
    combined_total: float
    range_low: float
    range_high: float


def validate_trades(trades: List[ProjectTradeData]) -> List[str]:
    """
    Return the enabled trade types.

    Raises:
        ValueError: On an unsupported trade or when no trade is enabled
    """
    for trade in trades:
        if trade.trade_type not in PROJECT_TRADE_TYPES:
            raise ValueError(f"Unsupported project trade: {trade.trade_type}")
    enabled = [t.trade_type for t in trades if t.enabled]
    if not enabled:
        raise ValueError("A project needs at least one enabled trade")
    return enabled


def trade_room_views(rooms: List[ProjectRoomData], trade_type: str) -> List[TradeRoomView]:
    return [
        trade_room_view(
            room.name,
            calculate_room_sqft(room),
            trade_type,
            room.trade_overrides.get(trade_type),
            TRADE_DEFAULT_INCLUDE_CEILING.get(trade_type, True),
        )
        for room in rooms
    ]


def _effective_area(views: List[TradeRoomView]) -> tuple[float, float]:
    return (
        round_money(sum(v.effective_wall_sqft for v in views)),
        round_money(sum(v.effective_ceiling_sqft for v in views)),
    )


def price_trade(
    trade: ProjectTradeData,
    views: List[TradeRoomView],
    custom_rates: Optional[CustomRates],
    hourly_rate: float = 0,
) -> TradeEstimate:
    """Run one trade's calculator over its view of the rooms."""
    wall_sqft, ceiling_sqft = _effective_area(views)

    if trade.trade_type == "drywall_hanging":
        data = drywall_hanging.HangingEstimateInput.model_validate(trade.parameters)
        return drywall_hanging.calculate_hanging_estimate(
            data.model_copy(update={"input_mode": "calculator"}),
            custom_rates,
            area=(wall_sqft, ceiling_sqft),
        )
    if trade.trade_type == "drywall_finishing":
        data = drywall_finishing.FinishingEstimateInput.model_validate(trade.parameters)
        data = drywall_finishing.with_project_sqft(data, round_money(wall_sqft + ceiling_sqft))
        return drywall_finishing.calculate_finishing_estimate(data, custom_rates, hourly_rate)
    if trade.trade_type == "painting":
        data = painting.PaintingEstimateInput.model_validate(trade.parameters)
        return painting.calculate_painting_estimate(data, custom_rates, area=painting.from_rooms(views))
    raise ValueError(f"Unsupported project trade: {trade.trade_type}")


def calculate_project_estimate(
    rooms: List[ProjectRoomData],
    trades: List[ProjectTradeData],
    custom_rates: Optional[CustomRates] = None,
    hourly_rate: float = 0,
) -> ProjectEstimate:
    """
    Price every enabled trade of a project and combine the results.

    Args:
        rooms: Shared rooms with per-trade overrides
        trades: Trades of the project; disabled ones are skipped
        custom_rates: Contractor overrides
        hourly_rate: Contractor hourly rate (finishing hourly lines)

    Raises:
        ValueError: When no trade is enabled, a trade is unsupported, or a
            trade's parameters are invalid
    """
    validate_trades(trades)

    totals: Dict[str, TradeTotals] = {}
    estimates: Dict[str, TradeEstimate] = {}
    views_by_trade: Dict[str, List[TradeRoomView]] = {}

    for trade in trades:
        if not trade.enabled or trade.trade_type in estimates:
            continue
        views = trade_room_views(rooms, trade.trade_type)
        estimate = price_trade(trade, views, custom_rates, hourly_rate)
        views_by_trade[trade.trade_type] = views
        estimates[trade.trade_type] = estimate
        totals[trade.trade_type] = estimate.to_trade_totals()

    return ProjectEstimate(
        rooms_totals=calculate_rooms_totals(rooms),
        trades=totals,
        estimates=estimates,
        room_views=views_by_trade,
        combined_total=round_money(sum(t.total for t in totals.values())),
        range_low=round_money(sum(t.range_low for t in totals.values())),
        range_high=round_money(sum(t.range_high for t in totals.values())),
    )
