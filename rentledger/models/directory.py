"""Tenant and room directory models.

These tables belong to the occupancy side of the system. The ledger only reads
them (display fields, invoice numbering, assignment checks) and never writes.
"""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentledger.models import Base, BaseModel


class Tenant(Base, BaseModel):
    """Person renting a room."""

    __tablename__ = "tenants"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    assignments: Mapped[list["RoomAssignment"]] = relationship(
        "RoomAssignment",
        back_populates="tenant",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name={self.full_name}, email={self.email})>"


class Room(Base, BaseModel):
    """Rentable room."""

    __tablename__ = "rooms"

    number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        index=True,
        comment="Room number used for display and invoice numbering (e.g., '101', 'A-2')",
    )
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Room type: SINGLE, DOUBLE, TRIPLE, FOUR",
    )
    floor: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    assignments: Mapped[list["RoomAssignment"]] = relationship(
        "RoomAssignment",
        back_populates="room",
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.number}, type={self.type}, floor={self.floor})>"


class RoomAssignment(Base, BaseModel):
    """Tenant-to-room occupancy fact.

    Only rows with is_active=True count as a current assignment.
    """

    __tablename__ = "room_assignments"

    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenants.id"), nullable=False)
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id"), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="assignments")
    room: Mapped["Room"] = relationship("Room", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("tenant_id", "room_id", name="uq_room_assignment_tenant_room"),
        Index("idx_room_assignment_room", "room_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<RoomAssignment(id={self.id}, tenant_id={self.tenant_id}, "
            f"room_id={self.room_id}, is_active={self.is_active})>"
        )


__all__ = ["Tenant", "Room", "RoomAssignment"]
