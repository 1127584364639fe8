"""
Client service. Every query is scoped to the owning contractor.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlmodel import Session, select

from estimator.core.logging import get_logger
from estimator.models.client import Client
from estimator.models.estimate import Estimate
from estimator.models.project import Project
from estimator.schemas.client import ClientCreate, ClientUpdate

logger = get_logger(__name__)


class ClientService:
    """Service for managing a contractor's clients."""

    def __init__(self, session: Session, contractor_id: int):
        self.session = session
        self.contractor_id = contractor_id

    def list_clients(self, search: Optional[str] = None) -> List[Client]:
        """
        List clients ordered by name.

        Args:
            search: Optional case-insensitive match on name or email
        """
        query = select(Client).where(Client.contractor_id == self.contractor_id)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                (Client.name.ilike(pattern)) | (Client.email.ilike(pattern))  # type: ignore[union-attr]
            )
        query = query.order_by(Client.name)
        return list(self.session.exec(query))

    def get_client(self, client_id: int) -> Optional[Client]:
        """Get a client owned by the contractor, or None."""
        client = self.session.get(Client, client_id)
        if client is None or client.contractor_id != self.contractor_id:
            return None
        return client

    def create_client(self, client_in: ClientCreate) -> Client:
        client = Client(contractor_id=self.contractor_id, **client_in.model_dump())
        self.session.add(client)
        self.session.commit()
        self.session.refresh(client)
        logger.info(f"Created client {client.id} for contractor {self.contractor_id}")
        return client

    def update_client(self, client_id: int, client_in: ClientUpdate) -> Optional[Client]:
        client = self.get_client(client_id)
        if client is None:
            return None
        for key, value in client_in.model_dump(exclude_unset=True).items():
            setattr(client, key, value)
        client.updated_at = datetime.now(timezone.utc)
        self.session.add(client)
        self.session.commit()
        self.session.refresh(client)
        return client

    def delete_client(self, client_id: int) -> bool:
        """
        Delete a client. Estimates and projects keep their homeowner details
        but lose the link.

        Returns:
            False when the client does not exist or is not owned
        """
        client = self.get_client(client_id)
        if client is None:
            return False

        for model in (Estimate, Project):
            linked = self.session.exec(select(model).where(model.client_id == client_id))
            for record in linked:
                record.client_id = None
                self.session.add(record)

        self.session.delete(client)
        self.session.commit()
        logger.info(f"Deleted client {client_id} for contractor {self.contractor_id}")
        return True
