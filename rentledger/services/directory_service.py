"""Tenant and room directory lookups consumed by the ledger.

The ledger depends on the TenantDirectory and RoomDirectory protocols only.
SqlDirectory answers them from the occupancy tables in the same database.
"""

import logging
from typing import NamedTuple, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from rentledger.models.directory import Room, RoomAssignment, Tenant

logger = logging.getLogger(__name__)


class TenantInfo(NamedTuple):
    """Tenant display fields."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class RoomInfo(NamedTuple):
    """Room display fields."""

    id: int
    number: str
    type: str
    floor: int


class TenantDirectory(Protocol):
    def is_assigned(self, tenant_id: int, room_id: int) -> bool: ...

    def get_tenant(self, tenant_id: int) -> TenantInfo | None: ...


class RoomDirectory(Protocol):
    def get_room(self, room_id: int) -> RoomInfo | None: ...


class Directory(TenantDirectory, RoomDirectory, Protocol):
    """Both lookups, as needed for invoices."""


class SqlDirectory:
    """Directory backed by the tenants, rooms and room_assignments tables."""

    def __init__(self, db_session: Session):
        """Initialize with database session."""
        self.db = db_session

    def is_assigned(self, tenant_id: int, room_id: int) -> bool:
        """Check whether the tenant currently occupies the room.

        Args:
            tenant_id: Tenant ID
            room_id: Room ID

        Returns:
            True if an active assignment exists, False otherwise
        """
        stmt = select(RoomAssignment.id).where(
            RoomAssignment.tenant_id == tenant_id,
            RoomAssignment.room_id == room_id,
            RoomAssignment.is_active.is_(True),
        )
        return self.db.execute(stmt).first() is not None

    def get_tenant(self, tenant_id: int) -> TenantInfo | None:
        tenant = self.db.get(Tenant, tenant_id)
        if not tenant:
            return None
        return TenantInfo(
            id=tenant.id,
            first_name=tenant.first_name,
            last_name=tenant.last_name,
            email=tenant.email,
            phone=tenant.phone,
        )

    def get_room(self, room_id: int) -> RoomInfo | None:
        room = self.db.get(Room, room_id)
        if not room:
            return None
        return RoomInfo(id=room.id, number=room.number, type=room.type, floor=room.floor)


__all__ = [
    "TenantInfo",
    "RoomInfo",
    "TenantDirectory",
    "RoomDirectory",
    "Directory",
    "SqlDirectory",
]
