"""Declarative base, the shared id/timestamp columns and model exports."""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware now, used for every created_at/updated_at write."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Metadata owner for the ledger tables."""


class BaseModel:
    """Surrogate key plus audit timestamps, mixed into every table."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    # Bulk updates bypass onupdate and set updated_at themselves
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


# Table modules import Base from here, so they are registered last
from rentledger.models.audit_log import AuditLog  # noqa: E402
from rentledger.models.directory import Room, RoomAssignment, Tenant  # noqa: E402
from rentledger.models.rent import PaymentMethod, Rent, RentPayment, RentStatus  # noqa: E402

__all__ = [
    "Base",
    "BaseModel",
    "utcnow",
    "AuditLog",
    "Tenant",
    "Room",
    "RoomAssignment",
    "Rent",
    "RentPayment",
    "RentStatus",
    "PaymentMethod",
]
