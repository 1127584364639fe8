"""
Client (homeowner / customer) model.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Client(SQLModel, table=True):
    """A contractor's customer. Estimates and projects may reference one."""

    __tablename__ = "clients"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="profiles.id", index=True)
    name: str = Field(max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    street: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=50)
    zip: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
