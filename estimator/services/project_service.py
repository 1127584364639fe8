"""
Project service: multi-trade projects with shared rooms.

Room areas are recalculated on every room write, and the project range is
re-priced whenever its rooms or trades change.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlmodel import Session, select

from estimator.core.config import settings
from estimator.core.logging import get_logger
from estimator.models.estimate import EstimateStatus
from estimator.models.profile import Profile
from estimator.models.project import Project, ProjectRoom, ProjectTrade
from estimator.schemas.project import ProjectCreate, ProjectTradeCreate, ProjectUpdate, RoomCreate
from estimator.schemas.rates import CustomRates
from estimator.services.client_service import ClientService
from estimator.trades.geometry import calculate_room_sqft
from estimator.trades.project import (
    ProjectEstimate,
    ProjectRoomData,
    ProjectTradeData,
    calculate_project_estimate,
)

logger = get_logger(__name__)


class ProjectService:
    """Service for managing a contractor's projects."""

    def __init__(self, session: Session, profile: Profile):
        self.session = session
        self.profile = profile

    @property
    def contractor_id(self) -> int:
        return self.profile.id  # type: ignore[return-value]

    def list_projects(self, status: Optional[EstimateStatus] = None) -> List[Project]:
        query = select(Project).where(Project.contractor_id == self.contractor_id)
        if status is not None:
            query = query.where(Project.status == status)
        query = query.order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        return list(self.session.exec(query))

    def get_project(self, project_id: int) -> Optional[Project]:
        """Get a project owned by the contractor, or None."""
        project = self.session.get(Project, project_id)
        if project is None or project.contractor_id != self.contractor_id:
            return None
        return project

    def create_project(self, project_in: ProjectCreate) -> Project:
        """
        Create a draft project with its rooms and trades, priced up front.

        Raises:
            ValueError: When the client is not found or a trade's parameters
                are invalid
        """
        homeowner_name = project_in.homeowner_name
        homeowner_email = project_in.homeowner_email
        homeowner_phone = project_in.homeowner_phone
        if project_in.client_id is not None:
            client = ClientService(self.session, self.contractor_id).get_client(project_in.client_id)
            if client is None:
                raise ValueError("Client not found")
            homeowner_name = homeowner_name or client.name
            homeowner_email = homeowner_email or client.email
            homeowner_phone = homeowner_phone or client.phone

        now = datetime.now(timezone.utc)
        project = Project(
            contractor_id=self.contractor_id,
            client_id=project_in.client_id,
            name=project_in.name,
            homeowner_name=homeowner_name or "",
            homeowner_email=homeowner_email,
            homeowner_phone=homeowner_phone,
            project_description=project_in.project_description,
            status=EstimateStatus.DRAFT,
            expires_at=now + timedelta(days=settings.ESTIMATE_VALID_DAYS),
            created_at=now,
            updated_at=now,
        )
        project.trades = [
            ProjectTrade(trade_type=t.trade_type, enabled=t.enabled, parameters=t.parameters, sort_order=i)
            for i, t in enumerate(project_in.trades)
        ]
        project.rooms = [self._build_room(room_in, sort_order=i) for i, room_in in enumerate(project_in.rooms)]

        self._price(project)
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        logger.info(
            f"Created project {project.id} with {len(project.rooms)} rooms and "
            f"{len(project.trades)} trades for contractor {self.contractor_id}"
        )
        return project

    def update_project(self, project_id: int, project_in: ProjectUpdate) -> Optional[Project]:
        project = self.get_project(project_id)
        if project is None:
            return None
        data = project_in.model_dump(exclude_unset=True)
        if data.get("client_id") is not None:
            if ClientService(self.session, self.contractor_id).get_client(data["client_id"]) is None:
                raise ValueError("Client not found")
        for key, value in data.items():
            setattr(project, key, value)
        return self._save(project)

    def delete_project(self, project_id: int) -> bool:
        project = self.get_project(project_id)
        if project is None:
            return False
        self.session.delete(project)
        self.session.commit()
        logger.info(f"Deleted project {project_id} for contractor {self.contractor_id}")
        return True

    # Rooms

    def add_room(self, project_id: int, room_in: RoomCreate) -> Optional[ProjectRoom]:
        project = self.get_project(project_id)
        if project is None:
            return None
        sort_order = max((r.sort_order for r in project.rooms), default=-1) + 1
        room = self._build_room(room_in, sort_order=sort_order)
        project.rooms.append(room)
        self._reprice(project)
        self.session.refresh(room)
        return room

    def update_room(self, project_id: int, room_id: int, room_in: RoomCreate) -> Optional[ProjectRoom]:
        """Replace a room's measurements and recalculate its areas."""
        project = self.get_project(project_id)
        room = self._get_room(project, room_id)
        if project is None or room is None:
            return None
        for key, value in self._room_values(room_in).items():
            setattr(room, key, value)
        self._reprice(project)
        self.session.refresh(room)
        return room

    def delete_room(self, project_id: int, room_id: int) -> bool:
        project = self.get_project(project_id)
        room = self._get_room(project, room_id)
        if project is None or room is None:
            return False
        project.rooms.remove(room)
        self._reprice(project)
        return True

    # Trades

    def set_trade(self, project_id: int, trade_in: ProjectTradeCreate) -> Optional[ProjectTrade]:
        """
        Add a trade or replace the settings of an existing one.

        Raises:
            ValueError: When the change leaves no trade enabled or the
                parameters are invalid
        """
        project = self.get_project(project_id)
        if project is None:
            return None
        trade = next((t for t in project.trades if t.trade_type == trade_in.trade_type), None)
        if trade is None:
            sort_order = max((t.sort_order for t in project.trades), default=-1) + 1
            trade = ProjectTrade(trade_type=trade_in.trade_type, sort_order=sort_order)
            project.trades.append(trade)
        trade.enabled = trade_in.enabled
        trade.parameters = trade_in.parameters
        self._reprice(project)
        self.session.refresh(trade)
        return trade

    def remove_trade(self, project_id: int, trade_type: str) -> bool:
        project = self.get_project(project_id)
        if project is None:
            return False
        trade = next((t for t in project.trades if t.trade_type == trade_type), None)
        if trade is None:
            return False
        project.trades.remove(trade)
        self._reprice(project)
        return True

    # Pricing

    def calculate_totals(self, project_id: int) -> Optional[ProjectEstimate]:
        """Re-price a project and persist the trade and project ranges."""
        project = self.get_project(project_id)
        if project is None:
            return None
        result = self._price(project)
        self._save(project)
        return result

    def mark_sent(self, project_id: int) -> Optional[Project]:
        """Set the status to sent; None when the project is not owned."""
        project = self.get_project(project_id)
        if project is None:
            return None
        project.status = EstimateStatus.SENT
        self._save(project)
        logger.info(f"Project {project_id} marked sent")
        return project

    def estimate_input(self, project: Project) -> tuple[List[ProjectRoomData], List[ProjectTradeData]]:
        rooms = [ProjectRoomData.model_validate(room.model_dump()) for room in project.rooms]
        trades = [
            ProjectTradeData(trade_type=t.trade_type, enabled=t.enabled, parameters=t.parameters or {})
            for t in project.trades
        ]
        return rooms, trades

    def _price(self, project: Project) -> ProjectEstimate:
        """
        Price the project in place.

        Raises:
            ValueError: When no trade is enabled or parameters are invalid
        """
        rooms, trades = self.estimate_input(project)
        result = calculate_project_estimate(
            rooms,
            trades,
            CustomRates.from_json(self.profile.custom_rates),
            self.profile.hourly_rate or 0,
        )
        for trade in project.trades:
            totals = result.trades.get(trade.trade_type)
            trade.range_low = totals.range_low if totals else 0
            trade.range_high = totals.range_high if totals else 0
        project.range_low = result.range_low
        project.range_high = result.range_high
        return result

    def _reprice(self, project: Project) -> Project:
        """Price and save a changed project; unsaved changes are rolled back on error."""
        try:
            self._price(project)
        except ValueError:
            self.session.rollback()
            raise
        return self._save(project)

    def _save(self, project: Project) -> Project:
        project.updated_at = datetime.now(timezone.utc)
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        return project

    @staticmethod
    def _get_room(project: Optional[Project], room_id: int) -> Optional[ProjectRoom]:
        if project is None:
            return None
        return next((r for r in project.rooms if r.id == room_id), None)

    @staticmethod
    def _room_values(room_in: RoomCreate) -> dict:
        sqft = calculate_room_sqft(room_in)
        values = room_in.model_dump()
        values.update(
            wall_sqft=sqft.wall_sqft,
            ceiling_sqft=sqft.ceiling_sqft,
            openings_sqft=sqft.openings_sqft,
            total_sqft=sqft.total_sqft,
        )
        return values

    def _build_room(self, room_in: RoomCreate, sort_order: int) -> ProjectRoom:
        return ProjectRoom(sort_order=sort_order, **self._room_values(room_in))
