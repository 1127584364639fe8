"""
Estimate service: single-trade estimates scoped to one contractor.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from sqlmodel import Session, select

from estimator.core.config import settings
from estimator.core.logging import get_logger
from estimator.models.estimate import Estimate, EstimateStatus
from estimator.models.profile import Profile
from estimator.models.template import EstimateTemplate
from estimator.schemas.estimate import EstimateCreate, EstimateUpdate
from estimator.schemas.rates import CustomRates
from estimator.services.client_service import ClientService
from estimator.services.template_service import TemplateService
from estimator.trades import drywall_finishing, drywall_hanging, framing, painting
from estimator.trades.templates import EstimateRange, calculate_estimate_range

logger = get_logger(__name__)

CALCULATOR_TRADES = (
    drywall_hanging.TRADE_TYPE,
    drywall_finishing.TRADE_TYPE,
    painting.TRADE_TYPE,
    framing.TRADE_TYPE,
)


TradeEstimate = Union[
    drywall_hanging.HangingEstimate,
    drywall_finishing.FinishingEstimate,
    painting.PaintingEstimate,
    framing.FramingEstimate,
]


def calculate_trade(
    trade_type: str,
    parameters: Mapping[str, Any],
    custom_rates: Optional[CustomRates] = None,
    hourly_rate: float = 0,
) -> TradeEstimate:
    """
    Run a trade calculator over stored estimate parameters.

    Raises:
        ValueError: On an unknown trade or invalid parameters
    """
    if trade_type == drywall_hanging.TRADE_TYPE:
        hanging = drywall_hanging.HangingEstimateInput.model_validate(parameters)
        return drywall_hanging.calculate_hanging_estimate(hanging, custom_rates)
    if trade_type == drywall_finishing.TRADE_TYPE:
        finishing = drywall_finishing.FinishingEstimateInput.model_validate(parameters)
        return drywall_finishing.calculate_finishing_estimate(finishing, custom_rates, hourly_rate)
    if trade_type == painting.TRADE_TYPE:
        paint = painting.PaintingEstimateInput.model_validate(parameters)
        return painting.calculate_painting_estimate(paint, custom_rates)
    if trade_type == framing.TRADE_TYPE:
        frame = framing.FramingEstimateInput.model_validate(parameters)
        return framing.calculate_framing_estimate(frame, custom_rates)
    raise ValueError(f"No calculator for trade: {trade_type}")


class EstimateService:
    """Service for managing a contractor's estimates."""

    def __init__(self, session: Session, profile: Profile):
        self.session = session
        self.profile = profile
        self.templates = TemplateService(session, profile)

    @property
    def contractor_id(self) -> int:
        return self.profile.id  # type: ignore[return-value]

    @property
    def hourly_rate(self) -> float:
        return self.profile.hourly_rate or 0

    def list_estimates(
        self, status: Optional[EstimateStatus] = None, client_id: Optional[int] = None
    ) -> List[Estimate]:
        """List estimates, newest first."""
        query = select(Estimate).where(Estimate.contractor_id == self.contractor_id)
        if status is not None:
            query = query.where(Estimate.status == status)
        if client_id is not None:
            query = query.where(Estimate.client_id == client_id)
        query = query.order_by(Estimate.created_at.desc())  # type: ignore[attr-defined]
        return list(self.session.exec(query))

    def get_estimate(self, estimate_id: int) -> Optional[Estimate]:
        """Get an estimate owned by the contractor, or None."""
        estimate = self.session.get(Estimate, estimate_id)
        if estimate is None or estimate.contractor_id != self.contractor_id:
            return None
        return estimate

    def calculate(
        self,
        template_id: Union[int, str],
        parameters: Mapping[str, Any],
        complexity: str = "standard",
        hourly_rate: Optional[float] = None,
    ) -> Optional[EstimateRange]:
        """Price a template without saving; None when the template is unknown."""
        template = self.templates.get_template(template_id)
        if template is None:
            return None
        rate = self.hourly_rate if hourly_rate is None else hourly_rate
        return calculate_estimate_range(template, parameters, complexity, rate)

    def resolve_range(
        self,
        template_type: str,
        template_id: Optional[Union[int, str]],
        parameters: Mapping[str, Any],
        complexity: str = "standard",
        range_low: Optional[float] = None,
        range_high: Optional[float] = None,
    ) -> tuple[float, float]:
        """
        Work out an estimate's range.

        A template wins, then the trade calculator for ``template_type``, then
        the explicit range.

        Raises:
            ValueError: On an unknown template, invalid calculator
                parameters, or when no range can be derived
        """
        if template_id is not None:
            result = self.calculate(template_id, parameters, complexity)
            if result is None:
                raise ValueError("Template not found")
            return result.low, result.high

        if template_type in CALCULATOR_TRADES and parameters:
            estimate = calculate_trade(template_type, parameters, self._custom_rates(), self.hourly_rate)
            return estimate.range_low, estimate.range_high

        if range_low is None and range_high is None:
            raise ValueError("An estimate needs a template, calculator parameters or a range")
        low = range_low if range_low is not None else range_high
        high = range_high if range_high is not None else range_low
        return low, high  # type: ignore[return-value]

    def create_estimate(self, estimate_in: EstimateCreate) -> Estimate:
        """
        Create a draft estimate valid for ``ESTIMATE_VALID_DAYS``.

        Raises:
            ValueError: When the client or template is not found or the
                range cannot be derived
        """
        homeowner: Dict[str, Optional[str]] = {
            "homeowner_name": estimate_in.homeowner_name,
            "homeowner_email": estimate_in.homeowner_email,
            "homeowner_phone": estimate_in.homeowner_phone,
        }
        if estimate_in.client_id is not None:
            homeowner = self._homeowner_from_client(estimate_in.client_id, homeowner)

        low, high = self.resolve_range(
            estimate_in.template_type,
            estimate_in.template_id,
            estimate_in.parameters,
            estimate_in.complexity,
            estimate_in.range_low,
            estimate_in.range_high,
        )

        parameters = dict(estimate_in.parameters)
        template_db_id: Optional[int] = None
        if estimate_in.template_id is not None:
            template = self.templates.get_template(estimate_in.template_id)
            if isinstance(template, EstimateTemplate):
                template_db_id = template.id
            else:
                parameters["default_template_id"] = estimate_in.template_id
            parameters.setdefault("complexity", estimate_in.complexity)

        now = datetime.now(timezone.utc)
        estimate = Estimate(
            contractor_id=self.contractor_id,
            client_id=estimate_in.client_id,
            template_id=template_db_id,
            template_type=estimate_in.template_type,
            project_description=estimate_in.project_description,
            parameters=parameters,
            range_low=low,
            range_high=high,
            status=EstimateStatus.DRAFT,
            expires_at=now + timedelta(days=settings.ESTIMATE_VALID_DAYS),
            created_at=now,
            updated_at=now,
            **homeowner,
        )
        self.session.add(estimate)
        self.session.commit()
        self.session.refresh(estimate)
        logger.info(
            f"Created estimate {estimate.id} ({estimate.template_type}) for contractor {self.contractor_id}: "
            f"{low:.2f}-{high:.2f}"
        )
        return estimate

    def update_estimate(self, estimate_id: int, estimate_in: EstimateUpdate) -> Optional[Estimate]:
        """
        Apply a partial update. New parameters or complexity re-price the
        estimate the same way it was created.

        Raises:
            ValueError: When the client is not found or the new range is
                invalid
        """
        estimate = self.get_estimate(estimate_id)
        if estimate is None:
            return None

        data = estimate_in.model_dump(exclude_unset=True)
        if data.get("client_id") is not None:
            self._homeowner_from_client(data["client_id"], {})

        reprice = "parameters" in data or "complexity" in data
        parameters = dict(estimate.parameters or {})
        if "parameters" in data:
            kept = {k: parameters[k] for k in ("default_template_id", "complexity") if k in parameters}
            parameters = {**kept, **(data.pop("parameters") or {})}
        complexity = data.pop("complexity", None)
        if complexity is not None:
            parameters["complexity"] = complexity

        for key, value in data.items():
            setattr(estimate, key, value)

        try:
            if reprice:
                estimate.parameters = parameters
                template_id: Optional[Union[int, str]] = estimate.template_id or parameters.get("default_template_id")
                estimate.range_low, estimate.range_high = self.resolve_range(
                    estimate.template_type,
                    template_id,
                    parameters,
                    parameters.get("complexity", "standard"),
                    estimate.range_low,
                    estimate.range_high,
                )
            if estimate.range_low > estimate.range_high:
                raise ValueError("range_low must not exceed range_high")
        except ValueError:
            self.session.rollback()
            raise

        estimate.updated_at = datetime.now(timezone.utc)
        self.session.add(estimate)
        self.session.commit()
        self.session.refresh(estimate)
        return estimate

    def delete_estimate(self, estimate_id: int) -> bool:
        estimate = self.get_estimate(estimate_id)
        if estimate is None:
            return False
        self.session.delete(estimate)
        self.session.commit()
        logger.info(f"Deleted estimate {estimate_id} for contractor {self.contractor_id}")
        return True

    def mark_sent(self, estimate_id: int) -> Optional[Estimate]:
        """Set the status to sent; None when the estimate is not owned."""
        return self._set_status(estimate_id, EstimateStatus.SENT)

    def mark_viewed(self, estimate_id: int) -> Optional[Estimate]:
        estimate = self._set_status(estimate_id, EstimateStatus.VIEWED)
        if estimate is not None and estimate.viewed_at is None:
            estimate.viewed_at = datetime.now(timezone.utc)
            self.session.add(estimate)
            self.session.commit()
            self.session.refresh(estimate)
        return estimate

    def _set_status(self, estimate_id: int, status: EstimateStatus) -> Optional[Estimate]:
        estimate = self.get_estimate(estimate_id)
        if estimate is None:
            return None
        estimate.status = status
        estimate.updated_at = datetime.now(timezone.utc)
        self.session.add(estimate)
        self.session.commit()
        self.session.refresh(estimate)
        logger.info(f"Estimate {estimate_id} marked {status.value}")
        return estimate

    def _custom_rates(self) -> CustomRates:
        return CustomRates.from_json(self.profile.custom_rates)

    def _homeowner_from_client(
        self, client_id: int, homeowner: Dict[str, Optional[str]]
    ) -> Dict[str, Optional[str]]:
        """Fill missing homeowner fields from an owned client."""
        client = ClientService(self.session, self.contractor_id).get_client(client_id)
        if client is None:
            raise ValueError("Client not found")
        return {
            "homeowner_name": homeowner.get("homeowner_name") or client.name,
            "homeowner_email": homeowner.get("homeowner_email") or client.email,
            "homeowner_phone": homeowner.get("homeowner_phone") or client.phone,
        }
