"""
Project routes: multi-trade projects, their rooms, trades and totals.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from estimator.api.deps import CurrentProfile, SessionDep
from estimator.core.logging import get_logger
from estimator.models.estimate import EstimateStatus
from estimator.schemas.pdf import DETAIL_LEVELS
from estimator.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectTotalsResponse,
    ProjectTradeCreate,
    ProjectTradeResponse,
    ProjectUpdate,
    RoomCreate,
    RoomResponse,
)
from estimator.services.pdf_service import build_project_pdf_data, generate_pdf
from estimator.services.project_service import ProjectService
from estimator.trades.project import ProjectEstimate

logger = get_logger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])

PROJECT_NOT_FOUND = "Project not found"


def _not_found(detail: str = PROJECT_NOT_FOUND) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def _bad_request(e: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _totals(result: ProjectEstimate) -> ProjectTotalsResponse:
    return ProjectTotalsResponse(
        trades=result.trades,
        combined_total=result.combined_total,
        range_low=result.range_low,
        range_high=result.range_high,
        total_sqft=result.rooms_totals.grand_total_sqft,
        total_wall_sqft=result.rooms_totals.total_wall_sqft,
        total_ceiling_sqft=result.rooms_totals.total_ceiling_sqft,
    )


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    session: SessionDep,
    profile: CurrentProfile,
    status_filter: Annotated[Optional[EstimateStatus], Query(alias="status")] = None,
) -> List[ProjectResponse]:
    projects = ProjectService(session, profile).list_projects(status_filter)
    return [ProjectResponse.model_validate(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(project_in: ProjectCreate, session: SessionDep, profile: CurrentProfile) -> ProjectResponse:
    """Create a draft project with its trades and rooms, priced up front."""
    try:
        project = ProjectService(session, profile).create_project(project_in)
    except ValueError as e:
        logger.warning(f"Project rejected for contractor {profile.id}: {e}")
        raise _bad_request(e)
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int, session: SessionDep, profile: CurrentProfile) -> ProjectResponse:
    project = ProjectService(session, profile).get_project(project_id)
    if not project:
        raise _not_found()
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int, project_in: ProjectUpdate, session: SessionDep, profile: CurrentProfile
) -> ProjectResponse:
    try:
        project = ProjectService(session, profile).update_project(project_id, project_in)
    except ValueError as e:
        raise _bad_request(e)
    if not project:
        raise _not_found()
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, session: SessionDep, profile: CurrentProfile) -> Response:
    if not ProjectService(session, profile).delete_project(project_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Rooms


@router.post("/{project_id}/rooms", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def add_room(project_id: int, room_in: RoomCreate, session: SessionDep, profile: CurrentProfile) -> RoomResponse:
    try:
        room = ProjectService(session, profile).add_room(project_id, room_in)
    except ValueError as e:
        raise _bad_request(e)
    if not room:
        raise _not_found()
    return RoomResponse.model_validate(room)


@router.put("/{project_id}/rooms/{room_id}", response_model=RoomResponse)
def update_room(
    project_id: int, room_id: int, room_in: RoomCreate, session: SessionDep, profile: CurrentProfile
) -> RoomResponse:
    try:
        room = ProjectService(session, profile).update_room(project_id, room_id, room_in)
    except ValueError as e:
        raise _bad_request(e)
    if not room:
        raise _not_found("Room not found")
    return RoomResponse.model_validate(room)


@router.delete("/{project_id}/rooms/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(project_id: int, room_id: int, session: SessionDep, profile: CurrentProfile) -> Response:
    try:
        deleted = ProjectService(session, profile).delete_room(project_id, room_id)
    except ValueError as e:
        raise _bad_request(e)
    if not deleted:
        raise _not_found("Room not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Trades


@router.put("/{project_id}/trades", response_model=ProjectTradeResponse)
def set_trade(
    project_id: int, trade_in: ProjectTradeCreate, session: SessionDep, profile: CurrentProfile
) -> ProjectTradeResponse:
    """Add a trade to the project or replace its settings."""
    try:
        trade = ProjectService(session, profile).set_trade(project_id, trade_in)
    except ValueError as e:
        raise _bad_request(e)
    if not trade:
        raise _not_found()
    return ProjectTradeResponse.model_validate(trade)


@router.delete("/{project_id}/trades/{trade_type}", status_code=status.HTTP_204_NO_CONTENT)
def remove_trade(project_id: int, trade_type: str, session: SessionDep, profile: CurrentProfile) -> Response:
    try:
        removed = ProjectService(session, profile).remove_trade(project_id, trade_type)
    except ValueError as e:
        raise _bad_request(e)
    if not removed:
        raise _not_found("Trade not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Pricing


@router.get("/{project_id}/totals", response_model=ProjectTotalsResponse)
def project_totals(project_id: int, session: SessionDep, profile: CurrentProfile) -> ProjectTotalsResponse:
    """Re-price the project and return per-trade and combined totals."""
    try:
        result = ProjectService(session, profile).calculate_totals(project_id)
    except ValueError as e:
        raise _bad_request(e)
    if result is None:
        raise _not_found()
    return _totals(result)


@router.get("/{project_id}/pdf")
def download_project_pdf(
    project_id: int,
    session: SessionDep,
    profile: CurrentProfile,
    detail_level: str = "extra_detailed",
) -> Response:
    service = ProjectService(session, profile)
    project = service.get_project(project_id)
    if not project:
        raise _not_found()
    if detail_level not in DETAIL_LEVELS:
        detail_level = "detailed"
    try:
        result = service.calculate_totals(project_id)
    except ValueError as e:
        raise _bad_request(e)

    pdf_bytes = generate_pdf(build_project_pdf_data(project, profile, result), detail_level)  # type: ignore[arg-type]
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="project-{project.id}.pdf"'},
    )
