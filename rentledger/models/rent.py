"""Rent and rent payment ORM models."""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentledger.models import Base, BaseModel


class RentStatus(str, Enum):
    """Payment status of a rent obligation."""

    PENDING = "PENDING"
    """Nothing paid yet, not past due"""

    PARTIAL = "PARTIAL"
    """Some but not all of the amount paid"""

    PAID = "PAID"
    """Fully paid"""

    OVERDUE = "OVERDUE"
    """Past due date with an outstanding balance (set by the daily sweep only)"""


class PaymentMethod(str, Enum):
    """How a payment was settled."""

    CASH = "CASH"
    CARD = "CARD"
    UPI = "UPI"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHEQUE = "CHEQUE"


class Rent(Base, BaseModel):
    """One billing obligation for a tenant-room pair over a fixed period.

    paid_amount always equals the sum of the rent's payments and never exceeds
    amount. Deleted rents are flagged with is_deleted and kept for audit.
    """

    __tablename__ = "rents"

    tenant_id: Mapped[int] = mapped_column(
        ForeignKey("tenants.id"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[int] = mapped_column(
        ForeignKey("rooms.id"),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        comment="Total owed for the period",
    )
    paid_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
        comment="Sum of all payments recorded against this rent",
    )

    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    status: Mapped[RentStatus] = mapped_column(
        SQLEnum(RentStatus),
        nullable=False,
        default=RentStatus.PENDING,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
        comment="Soft delete flag; deleted rents are excluded from every read path",
    )

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant")  # noqa: F821
    room: Mapped["Room"] = relationship("Room")  # noqa: F821
    payments: Mapped[list["RentPayment"]] = relationship(
        "RentPayment",
        back_populates="rent",
        cascade="all, delete-orphan",
        order_by="desc(RentPayment.paid_at)",
    )

    __table_args__ = (
        Index("idx_rent_tenant_room", "tenant_id", "room_id"),
        Index("idx_rent_status_due", "status", "due_date"),
    )

    @property
    def outstanding_amount(self) -> Decimal:
        """Amount still owed (derived, not persisted)."""
        return self.amount - self.paid_amount

    def __repr__(self) -> str:
        return (
            f"<Rent(id={self.id}, tenant_id={self.tenant_id}, room_id={self.room_id}, "
            f"amount={self.amount}, paid_amount={self.paid_amount}, status={self.status})>"
        )


class RentPayment(Base, BaseModel):
    """Immutable settlement record against a rent."""

    __tablename__ = "rent_payments"

    rent_id: Mapped[int] = mapped_column(
        ForeignKey("rents.id"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    paid_at: Mapped[date] = mapped_column(Date, nullable=False)
    method: Mapped[PaymentMethod] = mapped_column(SQLEnum(PaymentMethod), nullable=False)
    reference: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)

    rent: Mapped["Rent"] = relationship("Rent", back_populates="payments")

    def __repr__(self) -> str:
        return (
            f"<RentPayment(id={self.id}, rent_id={self.rent_id}, amount={self.amount}, "
            f"method={self.method}, paid_at={self.paid_at})>"
        )


__all__ = ["Rent", "RentPayment", "RentStatus", "PaymentMethod"]
