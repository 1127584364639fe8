"""
Project schemas: projects, their shared rooms and their trades.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from estimator.models.estimate import EstimateStatus
from estimator.schemas.wizard import ProjectSendEstimateForm, ProjectTradeType, RoomForm, TradeSelectionForm
from estimator.trades.geometry import Room, RoomOverride
from estimator.trades.shared import TradeTotals


class RoomCreate(Room):
    trade_overrides: Dict[ProjectTradeType, RoomOverride] = Field(default_factory=dict)

    @model_validator(mode="after")
    def rectangular_dimensions(self) -> "RoomCreate":
        if self.shape == "rectangular":
            RoomForm.model_validate(self.model_dump(include=set(RoomForm.model_fields)))
        return self


class RoomResponse(Room):
    trade_overrides: Dict[str, RoomOverride] = Field(default_factory=dict)
    id: int
    project_id: int
    wall_sqft: float
    ceiling_sqft: float
    openings_sqft: float
    total_sqft: float
    sort_order: int

    model_config = {"from_attributes": True}


class ProjectTradeCreate(BaseModel):
    trade_type: ProjectTradeType
    enabled: bool = True
    parameters: Dict[str, Any] = Field(default_factory=dict)


class ProjectTradeResponse(ProjectTradeCreate):
    id: int
    project_id: int
    range_low: float
    range_high: float
    sort_order: int

    model_config = {"from_attributes": True}


def _default_trades() -> List[ProjectTradeCreate]:
    return [
        ProjectTradeCreate(trade_type="drywall_hanging"),
        ProjectTradeCreate(trade_type="drywall_finishing"),
        ProjectTradeCreate(trade_type="painting"),
    ]


class ProjectCreate(BaseModel):
    """
    New project. Without a client the homeowner name and a valid email are
    required; at least one trade must be enabled.
    """

    name: str
    client_id: Optional[int] = None
    homeowner_name: Optional[str] = None
    homeowner_email: Optional[str] = None
    homeowner_phone: Optional[str] = None
    project_description: Optional[str] = None
    trades: List[ProjectTradeCreate] = Field(default_factory=_default_trades)
    rooms: List[RoomCreate] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_steps(self) -> "ProjectCreate":
        if self.client_id is None:
            form = ProjectSendEstimateForm(
                project_name=self.name,
                homeowner_name=self.homeowner_name,
                homeowner_email=self.homeowner_email,
                homeowner_phone=self.homeowner_phone,
            )
            self.homeowner_name = form.homeowner_name
            self.homeowner_email = form.homeowner_email
            self.name = form.project_name
        elif not self.name or not self.name.strip():
            raise ValueError("Project name is required")

        TradeSelectionForm(enabled_trades=[t.trade_type for t in self.trades if t.enabled], project_name=self.name)
        trade_types = [t.trade_type for t in self.trades]
        if len(trade_types) != len(set(trade_types)):
            raise ValueError("Each trade can only be added once")
        return self


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    client_id: Optional[int] = None
    homeowner_name: Optional[str] = Field(default=None, min_length=1)
    homeowner_email: Optional[str] = None
    homeowner_phone: Optional[str] = None
    project_description: Optional[str] = None
    status: Optional[EstimateStatus] = None


class ProjectResponse(BaseModel):
    id: int
    contractor_id: int
    client_id: Optional[int] = None
    name: str
    homeowner_name: str
    homeowner_email: Optional[str] = None
    homeowner_phone: Optional[str] = None
    project_description: Optional[str] = None
    status: EstimateStatus
    range_low: float
    range_high: float
    expires_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    rooms: List[RoomResponse] = []
    trades: List[ProjectTradeResponse] = []

    model_config = {"from_attributes": True}


class ProjectTotalsResponse(BaseModel):
    trades: Dict[str, TradeTotals]
    combined_total: float
    range_low: float
    range_high: float
    total_sqft: float
    total_wall_sqft: float
    total_ceiling_sqft: float
