"""
Multi-trade project models: the project, its rooms and its trades.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Column, Field, Relationship, SQLModel

from estimator.models.estimate import EstimateStatus


class Project(SQLModel, table=True):
    """A multi-trade estimate priced over a shared set of rooms."""

    __tablename__ = "projects"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="profiles.id", index=True)
    client_id: Optional[int] = Field(default=None, foreign_key="clients.id")
    name: str = Field(max_length=255)
    homeowner_name: str = Field(max_length=255)
    homeowner_email: Optional[str] = Field(default=None, max_length=255)
    homeowner_phone: Optional[str] = Field(default=None, max_length=50)
    project_description: Optional[str] = None
    status: EstimateStatus = Field(default=EstimateStatus.DRAFT)
    range_low: float = Field(default=0)
    range_high: float = Field(default=0)
    expires_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    rooms: List["ProjectRoom"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProjectRoom.sort_order"},
    )
    trades: List["ProjectTrade"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProjectTrade.sort_order"},
    )


class ProjectRoom(SQLModel, table=True):
    """
    A room shared by every trade of a project.

    Dimensions are stored as entered (feet + inches); the calculated square
    footage columns are refreshed whenever the room is written.
    """

    __tablename__ = "project_rooms"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True)
    name: str = Field(max_length=255)
    shape: str = Field(default="rectangular", max_length=20)

    length_feet: int = Field(default=0, ge=0)
    length_inches: int = Field(default=0, ge=0, le=11)
    width_feet: int = Field(default=0, ge=0)
    width_inches: int = Field(default=0, ge=0, le=11)
    height_feet: int = Field(default=8, ge=0)
    height_inches: int = Field(default=0, ge=0, le=11)

    # L-shape: {"main_length_feet": .., "extension_width_inches": ..}
    l_shape_dimensions: Optional[Dict[str, int]] = Field(default=None, sa_column=Column(JSON))
    # Custom shape: [{"length_feet": .., "length_inches": ..}]
    custom_walls: Optional[List[Dict[str, Any]]] = Field(default=None, sa_column=Column(JSON))
    custom_ceiling_sqft: Optional[float] = None

    include_ceiling: bool = Field(default=True)
    doors: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    windows: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    # trade_type -> {"include_ceiling": bool, "include_walls": bool, "excluded": bool}
    trade_overrides: Dict[str, Dict[str, bool]] = Field(default_factory=dict, sa_column=Column(JSON))

    wall_sqft: float = Field(default=0)
    ceiling_sqft: float = Field(default=0)
    openings_sqft: float = Field(default=0)
    total_sqft: float = Field(default=0)
    sort_order: int = Field(default=0)

    project: Optional[Project] = Relationship(back_populates="rooms")


class ProjectTrade(SQLModel, table=True):
    """One enabled trade of a project and its calculator input."""

    __tablename__ = "project_trades"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True)
    trade_type: str = Field(max_length=50)
    enabled: bool = Field(default=True)
    parameters: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    range_low: float = Field(default=0)
    range_high: float = Field(default=0)
    sort_order: int = Field(default=0)

    project: Optional[Project] = Relationship(back_populates="trades")
