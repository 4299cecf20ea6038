"""Invoice generation from a rent's current ledger state."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from rentledger.models.rent import Rent, RentStatus
from rentledger.services.directory_service import Directory, SqlDirectory
from rentledger.services.errors import NotFoundError
from rentledger.services.rent_service import RentService

logger = logging.getLogger(__name__)


@dataclass
class InvoiceTenant:
    name: str
    email: str
    phone: str | None


@dataclass
class InvoiceRoom:
    number: str
    type: str
    floor: int


@dataclass
class InvoicePayment:
    id: int
    date: date
    amount: Decimal
    method: str
    reference: str | None


@dataclass
class Invoice:
    """Read-only snapshot of a rent for billing."""

    rent_id: int
    invoice_number: str
    tenant: InvoiceTenant
    room: InvoiceRoom
    period_start: date
    period_end: date
    amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    due_date: date
    status: RentStatus
    payments: list[InvoicePayment] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def format_invoice_number(room_number: str, period_start: date) -> str:
    """Build invoice number: INV-{room}-{year}-{month:02d} of the period start."""
    return f"INV-{room_number}-{period_start.year}-{period_start.month:02d}"


class InvoiceGenerator:
    """Builds invoices. Never writes to the database."""

    def __init__(self, db_session: Session, directory: Directory | None = None):
        self.db = db_session
        self.directory = directory or SqlDirectory(db_session)
        self.rents = RentService(db_session, self.directory)

    def generate_invoice(self, rent_id: int) -> Invoice:
        """Generate invoice for a rent.

        Args:
            rent_id: Rent to invoice

        Returns:
            Invoice with payments newest first

        Raises:
            NotFoundError: Rent, or the tenant or room it references, is missing
        """
        rent: Rent = self.rents.get_rent_by_id(rent_id)

        tenant = self.directory.get_tenant(rent.tenant_id)
        room = self.directory.get_room(rent.room_id)
        if tenant is None or room is None:
            logger.error(
                "Rent %d references missing tenant %d or room %d",
                rent_id,
                rent.tenant_id,
                rent.room_id,
            )
            raise NotFoundError("Tenant or room for this rent no longer exists")

        payments = sorted(rent.payments, key=lambda p: (p.paid_at, p.id), reverse=True)

        invoice = Invoice(
            rent_id=rent.id,
            invoice_number=format_invoice_number(room.number, rent.period_start),
            tenant=InvoiceTenant(name=tenant.full_name, email=tenant.email, phone=tenant.phone),
            room=InvoiceRoom(number=room.number, type=room.type, floor=room.floor),
            period_start=rent.period_start,
            period_end=rent.period_end,
            amount=rent.amount,
            paid_amount=rent.paid_amount,
            outstanding_amount=rent.outstanding_amount,
            due_date=rent.due_date,
            status=rent.status,
            payments=[
                InvoicePayment(
                    id=p.id,
                    date=p.paid_at,
                    amount=p.amount,
                    method=p.method.value,
                    reference=p.reference,
                )
                for p in payments
            ],
        )
        logger.debug("Generated invoice %s for rent %d", invoice.invoice_number, rent_id)
        return invoice


__all__ = [
    "Invoice",
    "InvoiceTenant",
    "InvoiceRoom",
    "InvoicePayment",
    "InvoiceGenerator",
    "format_invoice_number",
]
