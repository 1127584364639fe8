"""
Estimate template service: the contractor's own templates plus the
built-in wizard templates.
"""

from typing import List, Optional, Union

from sqlmodel import Session, select

from estimator.core.logging import get_logger
from estimator.models.profile import Profile
from estimator.models.template import EstimateTemplate
from estimator.schemas.template import TemplateCreate, TemplateResponse, TemplateUpdate
from estimator.trades.templates import DEFAULT_WIZARD_TEMPLATES, WizardTemplate, get_default_template

logger = get_logger(__name__)

AnyTemplate = Union[EstimateTemplate, WizardTemplate]


class TemplateService:
    """Service for estimate templates owned by one contractor."""

    def __init__(self, session: Session, profile: Profile):
        self.session = session
        self.profile = profile

    def list_own(self, trade_type: Optional[str] = None) -> List[EstimateTemplate]:
        query = select(EstimateTemplate).where(EstimateTemplate.contractor_id == self.profile.id)
        if trade_type:
            query = query.where(EstimateTemplate.trade_type == trade_type)
        query = query.order_by(EstimateTemplate.created_at)
        return list(self.session.exec(query))

    def list_templates(self, trade_type: Optional[str] = None, include_hidden: bool = False) -> List[TemplateResponse]:
        """
        Templates offered in the estimate wizard.

        Built-in templates fill in for every trade where the contractor has
        none of their own, minus the ones the contractor hid.
        """
        own = self.list_own(trade_type)
        own_trades = {t.trade_type for t in own}
        hidden = set(self.profile.hidden_template_ids or [])

        result = [TemplateResponse.model_validate(t) for t in own]
        for default in DEFAULT_WIZARD_TEMPLATES:
            if trade_type and default.trade_type != trade_type:
                continue
            if default.trade_type in own_trades:
                continue
            if default.id in hidden and not include_hidden:
                continue
            result.append(self.default_response(default))
        return result

    def get_template(self, template_id: Union[int, str]) -> Optional[AnyTemplate]:
        """
        Resolve an owned template by integer id or a built-in one by its
        string id. Returns None when not found or not owned.
        """
        if isinstance(template_id, str) and not template_id.isdigit():
            return get_default_template(template_id)
        template = self.session.get(EstimateTemplate, int(template_id))
        if template is None or template.contractor_id != self.profile.id:
            return None
        return template

    def create_template(self, template_in: TemplateCreate) -> EstimateTemplate:
        template = EstimateTemplate(contractor_id=self.profile.id, **template_in.model_dump())
        self.session.add(template)
        self.session.commit()
        self.session.refresh(template)
        logger.info(f"Created template {template.id} ({template.trade_type}) for contractor {self.profile.id}")
        return template

    def update_template(self, template_id: int, template_in: TemplateUpdate) -> Optional[EstimateTemplate]:
        template = self.get_template(template_id)
        if not isinstance(template, EstimateTemplate):
            return None
        for key, value in template_in.model_dump(exclude_unset=True).items():
            setattr(template, key, value)
        self.session.add(template)
        self.session.commit()
        self.session.refresh(template)
        return template

    def delete_template(self, template_id: int) -> bool:
        template = self.get_template(template_id)
        if not isinstance(template, EstimateTemplate):
            return False
        self.session.delete(template)
        self.session.commit()
        return True

    def copy_default(self, template_id: str) -> Optional[EstimateTemplate]:
        """Save a built-in template as the contractor's own, editable copy."""
        default = get_default_template(template_id)
        if default is None:
            return None
        return self.create_template(
            TemplateCreate(
                template_name=default.template_name,
                trade_type=default.trade_type,
                pricing_type=default.pricing_type,
                description=default.description,
                base_labor_hours=default.base_labor_hours,
                base_material_cost=default.base_material_cost,
                complexity_multipliers=dict(default.complexity_multipliers),
                required_fields=dict(default.required_fields),
            )
        )

    @staticmethod
    def default_response(default: WizardTemplate) -> TemplateResponse:
        return TemplateResponse(
            id=default.id,
            is_default=True,
            template_name=default.template_name,
            trade_type=default.trade_type,
            pricing_type=default.pricing_type,
            description=default.description,
            base_labor_hours=default.base_labor_hours,
            base_material_cost=default.base_material_cost,
            complexity_multipliers=dict(default.complexity_multipliers),
            required_fields=dict(default.required_fields),
        )
