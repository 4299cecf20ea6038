"""Integration tests for a rent's life: creation, payments, overdue, summary."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from rentledger.models import AuditLog, RentPayment, RentStatus
from rentledger.services.errors import NotFoundError, OverpaymentError, ValidationError


class TestRentLifecycle:
    """Create, pay in parts, settle."""

    def test_create_is_pending_with_full_outstanding(self, make_rent):
        rent = make_rent(amount="1000", due_date=date.today() + timedelta(days=1))

        assert rent.status == RentStatus.PENDING
        assert rent.paid_amount == Decimal("0.00")
        assert rent.outstanding_amount == Decimal("1000.00")
        assert rent.created_by == "admin-1"
        assert rent.tenant.first_name == "Alice"
        assert rent.room.number == "101"
        assert rent.payments == []

    def test_partial_then_full_payment(self, ledger, make_rent):
        rent = make_rent(amount="1000", due_date=date.today() + timedelta(days=1))

        first = ledger.add_payment(rent.id, Decimal("400"), date.today(), "UPI", "admin-1")
        assert first.rent.paid_amount == Decimal("400.00")
        assert first.rent.status == RentStatus.PARTIAL
        assert first.rent.outstanding_amount == Decimal("600.00")
        assert first.payment.amount == Decimal("400.00")

        second = ledger.add_payment(rent.id, Decimal("600"), date.today(), "CASH", "admin-1")
        assert second.rent.paid_amount == Decimal("1000.00")
        assert second.rent.status == RentStatus.PAID
        assert second.rent.outstanding_amount == Decimal("0.00")

    def test_overpayment_rejected_and_state_unchanged(self, ledger, make_rent, db_session):
        rent = make_rent(amount="1000")
        ledger.add_payment(rent.id, Decimal("400"), date(2025, 3, 2), "UPI", "admin-1")

        with pytest.raises(OverpaymentError):
            ledger.add_payment(rent.id, Decimal("700"), date(2025, 3, 3), "UPI", "admin-1")

        reloaded = ledger.get_rent_by_id(rent.id)
        assert reloaded.paid_amount == Decimal("400.00")
        assert reloaded.status == RentStatus.PARTIAL
        assert db_session.scalar(select(func.count(RentPayment.id))) == 1

    def test_exact_outstanding_is_accepted(self, ledger, make_rent):
        rent = make_rent(amount="1000.50")
        result = ledger.add_payment(rent.id, Decimal("1000.50"), date(2025, 3, 2), "CARD", "a")
        assert result.rent.status == RentStatus.PAID

    def test_paid_amount_matches_sum_of_payments(self, ledger, make_rent, db_session):
        rent = make_rent(amount="100.00")
        for amount in ("0.10", "0.20", "33.33", "66.37"):
            ledger.add_payment(rent.id, Decimal(amount), date(2025, 3, 2), "CASH", "admin-1")

        total = db_session.scalar(
            select(func.sum(RentPayment.amount)).where(RentPayment.rent_id == rent.id)
        )
        reloaded = ledger.get_rent_by_id(rent.id)
        assert reloaded.paid_amount == Decimal("100.00")
        assert Decimal(str(total)).quantize(Decimal("0.01")) == reloaded.paid_amount
        assert reloaded.status == RentStatus.PAID

    def test_payment_on_overdue_rent(self, ledger, make_rent):
        rent = make_rent(amount="1000", due_date=date(2025, 3, 5))
        ledger.sweep_overdue(today=date(2025, 3, 6))

        result = ledger.add_payment(rent.id, Decimal("300"), date(2025, 3, 7), "UPI", "admin-1")
        assert result.rent.status == RentStatus.PARTIAL

        result = ledger.add_payment(rent.id, Decimal("700"), date(2025, 3, 8), "UPI", "admin-1")
        assert result.rent.status == RentStatus.PAID

    def test_zero_payment_keeps_overdue(self, ledger, make_rent, db_session):
        """A zero correction entry is recorded but does not move an OVERDUE rent."""
        rent = make_rent(amount="1000", due_date=date(2025, 3, 5))
        ledger.sweep_overdue(today=date(2025, 3, 6))

        result = ledger.add_payment(
            rent.id, Decimal("0"), date(2025, 3, 7), "CASH", "admin-1", notes="correction"
        )

        assert result.rent.status == RentStatus.OVERDUE
        assert result.rent.paid_amount == Decimal("0.00")
        assert result.payment.notes == "correction"
        assert db_session.scalar(select(func.count(RentPayment.id))) == 1

    def test_payment_validation(self, ledger, make_rent):
        rent = make_rent()
        with pytest.raises(ValidationError):
            ledger.add_payment(rent.id, Decimal("-5"), date(2025, 3, 2), "CASH", "admin-1")
        with pytest.raises(ValidationError):
            ledger.add_payment(rent.id, Decimal("5"), None, "CASH", "admin-1")
        with pytest.raises(ValidationError):
            ledger.add_payment(rent.id, Decimal("5"), date(2025, 3, 2), "GOLD", "admin-1")

    def test_payment_on_missing_rent(self, ledger):
        with pytest.raises(NotFoundError):
            ledger.add_payment(999, Decimal("5"), date(2025, 3, 2), "CASH", "admin-1")

    def test_payment_keeps_reference(self, ledger, make_rent):
        rent = make_rent()
        result = ledger.add_payment(
            rent.id, Decimal("10"), date(2025, 3, 2), "BANK_TRANSFER", "admin-1", reference="TX-42"
        )
        assert result.payment.reference == "TX-42"
        assert result.payment.created_by == "admin-1"
        assert result.payment.rent_id == rent.id

    def test_create_and_payment_are_audited(self, ledger, make_rent, db_session):
        rent = make_rent()
        ledger.add_payment(rent.id, Decimal("250"), date(2025, 3, 2), "UPI", "admin-2")

        entries = db_session.execute(
            select(AuditLog).where(AuditLog.entity_id == rent.id).order_by(AuditLog.id)
        ).scalars().all()

        assert [e.action for e in entries] == ["create", "payment"]
        assert entries[0].actor_id == "admin-1"
        assert entries[1].actor_id == "admin-2"
        assert entries[1].changes["paid_amount"] == "250.00"
        assert entries[1].changes["status"] == "PARTIAL"


class TestMonthlySummary:
    def test_march_totals(self, ledger, make_rent):
        first = make_rent(amount="1000", due_date=date(2025, 3, 5))
        second = make_rent(
            amount="2000",
            period_start=date(2025, 4, 1),
            period_end=date(2025, 4, 30),
            due_date=date(2025, 3, 28),
        )
        ledger.add_payment(first.id, Decimal("1000"), date(2025, 3, 4), "UPI", "admin-1")
        ledger.add_payment(second.id, Decimal("500"), date(2025, 3, 20), "UPI", "admin-1")

        summary = ledger.monthly_summary(3, 2025)

        assert summary.month == "March"
        assert summary.year == 2025
        assert summary.total_expected == Decimal("3000.00")
        assert summary.total_collected == Decimal("1500.00")
        assert summary.total_outstanding == Decimal("1500.00")
        assert summary.total_overdue == Decimal("0.00")
        assert summary.paid_count == 1
        assert summary.partial_count == 1
        assert summary.pending_count == 0
        assert summary.overdue_count == 0

    def test_overdue_outstanding(self, ledger, make_rent):
        rent = make_rent(amount="1200", due_date=date(2025, 3, 5))
        ledger.add_payment(rent.id, Decimal("200"), date(2025, 3, 4), "UPI", "admin-1")
        ledger.sweep_overdue(today=date(2025, 3, 10))

        summary = ledger.monthly_summary(3, 2025)

        assert summary.overdue_count == 1
        assert summary.partial_count == 0
        assert summary.total_overdue == Decimal("1000.00")

    def test_excludes_other_months_and_deleted(self, ledger, make_rent):
        make_rent(amount="1000", due_date=date(2025, 3, 31))
        make_rent(
            amount="500",
            period_start=date(2025, 4, 1),
            period_end=date(2025, 4, 30),
            due_date=date(2025, 4, 1),
        )
        deleted = make_rent(
            amount="700",
            period_start=date(2025, 5, 1),
            period_end=date(2025, 5, 31),
            due_date=date(2025, 3, 1),
        )
        ledger.delete_rent(deleted.id, "admin-1")

        summary = ledger.monthly_summary(3, 2025)

        assert summary.total_expected == Decimal("1000.00")
        assert summary.pending_count == 1

    def test_empty_month(self, ledger):
        summary = ledger.monthly_summary(1, 2030)
        assert summary.month == "January"
        assert summary.total_expected == Decimal("0.00")
        assert summary.paid_count == 0

    def test_invalid_month(self, ledger):
        with pytest.raises(ValidationError):
            ledger.monthly_summary(13, 2025)
