"""Single entry point to the rent ledger operations for one database session."""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from rentledger.models.rent import PaymentMethod, Rent
from rentledger.services.directory_service import Directory, SqlDirectory
from rentledger.services.invoice_service import Invoice, InvoiceGenerator
from rentledger.services.overdue_service import OverdueSweeper
from rentledger.services.payment_service import PaymentLedger, PaymentResult
from rentledger.services.rent_service import RentFilters, RentPage, RentService
from rentledger.services.summary_service import MonthlyAggregator, MonthlySummary


class RentLedger:
    """Facade over the rent, payment, sweep, invoice and summary services.

    Used by the API router, the scheduler job and the CLI so they share one
    wiring of session and directory.
    """

    def __init__(self, db_session: Session, directory: Directory | None = None):
        self.db = db_session
        self.directory = directory or SqlDirectory(db_session)
        self.rents = RentService(db_session, self.directory)
        self.payments = PaymentLedger(db_session)
        self.sweeper = OverdueSweeper(db_session)
        self.invoices = InvoiceGenerator(db_session, self.directory)
        self.summaries = MonthlyAggregator(db_session)

    def create_rent(
        self,
        tenant_id: int,
        room_id: int,
        amount: Decimal,
        period_start: date,
        period_end: date,
        due_date: date,
        actor: str,
        notes: str | None = None,
    ) -> Rent:
        return self.rents.create_rent(
            tenant_id=tenant_id,
            room_id=room_id,
            amount=amount,
            period_start=period_start,
            period_end=period_end,
            due_date=due_date,
            actor=actor,
            notes=notes,
        )

    def update_rent(self, rent_id: int, changes: dict, actor: str | None = None) -> Rent:
        return self.rents.update_rent(rent_id, changes, actor)

    def delete_rent(self, rent_id: int, actor: str | None = None) -> None:
        self.rents.delete_rent(rent_id, actor)

    def get_rent_by_id(self, rent_id: int) -> Rent:
        return self.rents.get_rent_by_id(rent_id)

    def list_rents(self, filters: RentFilters | None = None) -> RentPage:
        return self.rents.list_rents(filters)

    def add_payment(
        self,
        rent_id: int,
        amount: Decimal,
        paid_at: date,
        method: PaymentMethod | str,
        actor: str,
        reference: str | None = None,
        notes: str | None = None,
    ) -> PaymentResult:
        return self.payments.add_payment(
            rent_id,
            amount=amount,
            paid_at=paid_at,
            method=method,
            actor=actor,
            reference=reference,
            notes=notes,
        )

    def generate_invoice(self, rent_id: int) -> Invoice:
        return self.invoices.generate_invoice(rent_id)

    def monthly_summary(self, month: int, year: int) -> MonthlySummary:
        return self.summaries.monthly_summary(month, year)

    def sweep_overdue(self, today: date | None = None) -> int:
        return self.sweeper.sweep_overdue(today)


__all__ = ["RentLedger"]
