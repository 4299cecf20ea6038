"""Audit log model for tracking rent lifecycle events."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from rentledger.models import Base, BaseModel


class AuditLog(Base, BaseModel):
    """Audit log entry for tracking changes to ledger entities.

    Records who (actor_id) did what (action) to which entity (entity_type, entity_id)
    and an optional snapshot of the changed fields (changes).
    """

    __tablename__ = "audit_logs"

    entity_type: Mapped[str] = mapped_column(String(50), index=False)
    """Entity type being audited: "rent", "rent_payment"."""

    entity_id: Mapped[int] = mapped_column(index=False)
    """Primary key of the entity being audited (0 for batch actions)."""

    action: Mapped[str] = mapped_column(String(50), index=False)
    """Action performed: "create", "update", "delete", "payment", "sweep"."""

    actor_id: Mapped[str | None] = mapped_column(String(100), nullable=True, index=False)
    """Actor who performed the action. None for system actions (scheduled sweep)."""

    changes: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True, index=False)
    """Optional JSON snapshot of changed fields: {"status": "PAID", "paid_amount": "1000.00"}."""

    def __repr__(self) -> str:
        return (
            f"<AuditLog(id={self.id}, entity_type={self.entity_type}, entity_id={self.entity_id}, "
            f"action={self.action}, actor_id={self.actor_id}, created_at={self.created_at})>"
        )


__all__ = ["AuditLog"]
