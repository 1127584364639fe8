"""
Trade calculator routes. Nothing is saved; prices use the contractor's
rate overrides.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from estimator.api.deps import CurrentProfile
from estimator.schemas.rates import CustomRates
from estimator.trades import drywall_finishing, drywall_hanging, framing, painting
from estimator.trades.geometry import Room, RoomSqft, RoomsTotals, calculate_room_sqft, calculate_rooms_totals

router = APIRouter(prefix="/calculators", tags=["calculators"])


class RoomsRequest(BaseModel):
    rooms: List[Room]


class RoomsResponse(BaseModel):
    rooms: List[RoomSqft]
    totals: RoomsTotals


def _rates(profile: CurrentProfile) -> CustomRates:
    return CustomRates.from_json(profile.custom_rates)


def _bad_request(e: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/rooms", response_model=RoomsResponse)
def measure_rooms(body: RoomsRequest, profile: CurrentProfile) -> RoomsResponse:
    """Wall, ceiling and opening areas per room and in total."""
    return RoomsResponse(
        rooms=[calculate_room_sqft(room) for room in body.rooms],
        totals=calculate_rooms_totals(body.rooms),
    )


@router.post("/drywall-hanging", response_model=drywall_hanging.HangingEstimate)
def drywall_hanging_estimate(
    data: drywall_hanging.HangingEstimateInput, profile: CurrentProfile
) -> drywall_hanging.HangingEstimate:
    try:
        return drywall_hanging.calculate_hanging_estimate(data, _rates(profile))
    except ValueError as e:
        raise _bad_request(e)


@router.post("/drywall-finishing", response_model=drywall_finishing.FinishingEstimate)
def drywall_finishing_estimate(
    data: drywall_finishing.FinishingEstimateInput, profile: CurrentProfile
) -> drywall_finishing.FinishingEstimate:
    """Hourly line items use the contractor's hourly rate."""
    try:
        return drywall_finishing.calculate_finishing_estimate(data, _rates(profile), profile.hourly_rate or 0)
    except ValueError as e:
        raise _bad_request(e)


@router.post("/painting", response_model=painting.PaintingEstimate)
def painting_estimate(data: painting.PaintingEstimateInput, profile: CurrentProfile) -> painting.PaintingEstimate:
    try:
        return painting.calculate_painting_estimate(data, _rates(profile))
    except ValueError as e:
        raise _bad_request(e)


@router.post("/framing", response_model=framing.FramingEstimate)
def framing_estimate(data: framing.FramingEstimateInput, profile: CurrentProfile) -> framing.FramingEstimate:
    try:
        return framing.calculate_framing_estimate(data, _rates(profile))
    except ValueError as e:
        raise _bad_request(e)
