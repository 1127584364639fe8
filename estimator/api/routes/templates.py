"""
Estimate template routes: the contractor's templates plus built-in ones.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Response, status

from estimator.api.deps import CurrentProfile, SessionDep
from estimator.schemas.profile import ProfileResponse
from estimator.schemas.template import HideTemplatesRequest, TemplateCreate, TemplateResponse, TemplateUpdate
from estimator.services.profile_service import ProfileService
from estimator.services.template_service import TemplateService
from estimator.trades.templates import WizardTemplate

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=List[TemplateResponse])
def list_templates(
    session: SessionDep,
    profile: CurrentProfile,
    trade_type: Optional[str] = None,
    include_hidden: bool = False,
) -> List[TemplateResponse]:
    """
    Templates available in the estimate wizard.

    Built-in templates appear for trades the contractor has no template
    for, unless hidden.
    """
    return TemplateService(session, profile).list_templates(trade_type, include_hidden)


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(template_in: TemplateCreate, session: SessionDep, profile: CurrentProfile) -> TemplateResponse:
    template = TemplateService(session, profile).create_template(template_in)
    return TemplateResponse.model_validate(template)


@router.post("/hide", response_model=ProfileResponse)
def hide_templates(body: HideTemplatesRequest, session: SessionDep, profile: CurrentProfile) -> ProfileResponse:
    """Hide built-in templates from the wizard."""
    updated = ProfileService.hide_templates(session, profile, body.template_ids)
    return ProfileResponse.model_validate(updated)


@router.post("/unhide", response_model=ProfileResponse)
def unhide_templates(body: HideTemplatesRequest, session: SessionDep, profile: CurrentProfile) -> ProfileResponse:
    updated = ProfileService.unhide_templates(session, profile, body.template_ids)
    return ProfileResponse.model_validate(updated)


@router.post("/onboarding/complete", response_model=ProfileResponse)
def complete_onboarding(session: SessionDep, profile: CurrentProfile) -> ProfileResponse:
    updated = ProfileService.complete_template_onboarding(session, profile)
    return ProfileResponse.model_validate(updated)


@router.post("/{template_id}/copy", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def copy_default_template(template_id: str, session: SessionDep, profile: CurrentProfile) -> TemplateResponse:
    """Save a built-in template as an editable template of the contractor."""
    template = TemplateService(session, profile).copy_default(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return TemplateResponse.model_validate(template)


@router.get("/{template_id}", response_model=TemplateResponse)
def get_template(template_id: str, session: SessionDep, profile: CurrentProfile) -> TemplateResponse:
    service = TemplateService(session, profile)
    template = service.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    if isinstance(template, WizardTemplate):
        return service.default_response(template)
    return TemplateResponse.model_validate(template)


@router.patch("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: int, template_in: TemplateUpdate, session: SessionDep, profile: CurrentProfile
) -> TemplateResponse:
    template = TemplateService(session, profile).update_template(template_id, template_in)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return TemplateResponse.model_validate(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: int, session: SessionDep, profile: CurrentProfile) -> Response:
    if not TemplateService(session, profile).delete_template(template_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
