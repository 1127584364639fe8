"""
Client routes. Every route is scoped to the authenticated contractor.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Response, status

from estimator.api.deps import CurrentProfile, SessionDep
from estimator.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from estimator.services.client_service import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


def _service(session: SessionDep, profile: CurrentProfile) -> ClientService:
    return ClientService(session, profile.id)  # type: ignore[arg-type]


@router.get("", response_model=List[ClientResponse])
def list_clients(session: SessionDep, profile: CurrentProfile, search: Optional[str] = None) -> List[ClientResponse]:
    """List clients ordered by name, optionally filtered by name or email."""
    clients = _service(session, profile).list_clients(search)
    return [ClientResponse.model_validate(c) for c in clients]


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(client_in: ClientCreate, session: SessionDep, profile: CurrentProfile) -> ClientResponse:
    client = _service(session, profile).create_client(client_in)
    return ClientResponse.model_validate(client)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(client_id: int, session: SessionDep, profile: CurrentProfile) -> ClientResponse:
    client = _service(session, profile).get_client(client_id)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return ClientResponse.model_validate(client)


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: int, client_in: ClientUpdate, session: SessionDep, profile: CurrentProfile
) -> ClientResponse:
    client = _service(session, profile).update_client(client_id, client_in)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return ClientResponse.model_validate(client)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(client_id: int, session: SessionDep, profile: CurrentProfile) -> Response:
    """Delete a client; linked estimates and projects keep their details."""
    if not _service(session, profile).delete_client(client_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
