"""
Estimate routes: single-trade estimates, template pricing and PDF export.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from estimator.api.deps import CurrentProfile, SessionDep
from estimator.core.logging import get_logger
from estimator.models.estimate import EstimateStatus
from estimator.schemas.estimate import (
    EstimateCalculateRequest,
    EstimateCreate,
    EstimateRangeResponse,
    EstimateResponse,
    EstimateUpdate,
)
from estimator.schemas.pdf import DETAIL_LEVELS
from estimator.services.estimate_service import EstimateService
from estimator.services.pdf_service import build_estimate_pdf_data, generate_pdf

logger = get_logger(__name__)

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.get("", response_model=List[EstimateResponse])
def list_estimates(
    session: SessionDep,
    profile: CurrentProfile,
    status_filter: Annotated[Optional[EstimateStatus], Query(alias="status")] = None,
    client_id: Optional[int] = None,
) -> List[EstimateResponse]:
    """List the contractor's estimates, newest first."""
    estimates = EstimateService(session, profile).list_estimates(status_filter, client_id)
    return [EstimateResponse.model_validate(e) for e in estimates]


@router.post("/calculate", response_model=EstimateRangeResponse)
def calculate_estimate(
    body: EstimateCalculateRequest, session: SessionDep, profile: CurrentProfile
) -> EstimateRangeResponse:
    """
    Price a template without saving.

    The contractor's hourly rate is used unless the request supplies one.
    """
    result = EstimateService(session, profile).calculate(
        body.template_id, body.parameters, body.complexity, body.hourly_rate
    )
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return EstimateRangeResponse(low=result.low, high=result.high, total=result.total)


@router.post("", response_model=EstimateResponse, status_code=status.HTTP_201_CREATED)
def create_estimate(estimate_in: EstimateCreate, session: SessionDep, profile: CurrentProfile) -> EstimateResponse:
    """
    Create a draft estimate.

    Raises:
        HTTPException: 400 when the client or template is unknown or no
            range can be derived
    """
    try:
        estimate = EstimateService(session, profile).create_estimate(estimate_in)
    except ValueError as e:
        logger.warning(f"Estimate rejected for contractor {profile.id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return EstimateResponse.model_validate(estimate)


@router.get("/{estimate_id}", response_model=EstimateResponse)
def get_estimate(estimate_id: int, session: SessionDep, profile: CurrentProfile) -> EstimateResponse:
    estimate = EstimateService(session, profile).get_estimate(estimate_id)
    if not estimate:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Estimate not found")
    return EstimateResponse.model_validate(estimate)


@router.patch("/{estimate_id}", response_model=EstimateResponse)
def update_estimate(
    estimate_id: int, estimate_in: EstimateUpdate, session: SessionDep, profile: CurrentProfile
) -> EstimateResponse:
    try:
        estimate = EstimateService(session, profile).update_estimate(estimate_id, estimate_in)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not estimate:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Estimate not found")
    return EstimateResponse.model_validate(estimate)


@router.delete("/{estimate_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_estimate(estimate_id: int, session: SessionDep, profile: CurrentProfile) -> Response:
    if not EstimateService(session, profile).delete_estimate(estimate_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Estimate not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{estimate_id}/pdf")
def download_estimate_pdf(
    estimate_id: int,
    session: SessionDep,
    profile: CurrentProfile,
    detail_level: str = "detailed",
) -> Response:
    """Render the estimate as a PDF; unknown detail levels render detailed."""
    estimate = EstimateService(session, profile).get_estimate(estimate_id)
    if not estimate:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Estimate not found")
    if detail_level not in DETAIL_LEVELS:
        detail_level = "detailed"

    try:
        pdf_bytes = generate_pdf(build_estimate_pdf_data(estimate, profile), detail_level)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="estimate-{estimate.id}.pdf"'},
    )
