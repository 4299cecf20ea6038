"""Integration tests for the guarded payment write and its retry loop."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select, update

from rentledger.models import Rent, RentPayment, RentStatus
from rentledger.services import payment_service
from rentledger.services.errors import ConcurrencyConflictError, OverpaymentError
from rentledger.services.payment_service import PaymentLedger, StaleRentError


class TestGuardedWrite:
    def test_lost_race_is_retried(self, db_session, make_rent, monkeypatch):
        """paid_amount changing after the read makes the write miss; the retry succeeds."""
        rent_id = make_rent(amount="1000").id
        real_next_status = payment_service.next_status
        races = []

        def racing_next_status(prev_status, paid_amount, amount):
            if not races:
                races.append(paid_amount)
                db_session.execute(
                    update(Rent)
                    .where(Rent.id == rent_id)
                    .values(paid_amount=Decimal("100.00"))
                    .execution_options(synchronize_session=False)
                )
            return real_next_status(prev_status, paid_amount, amount)

        monkeypatch.setattr(payment_service, "next_status", racing_next_status)

        result = PaymentLedger(db_session).add_payment(
            rent_id, Decimal("400"), date(2025, 3, 2), "UPI", "admin-1"
        )

        assert len(races) == 1
        assert result.rent.paid_amount == Decimal("400.00")
        assert result.rent.status == RentStatus.PARTIAL
        assert db_session.scalar(select(func.count(RentPayment.id))) == 1

    def test_retries_exhausted(self, db_session, make_rent, monkeypatch):
        rent_id = make_rent(amount="1000").id
        attempts = []

        def always_stale(self, rent_id, *args):
            attempts.append(rent_id)
            raise StaleRentError("changed")

        monkeypatch.setattr(PaymentLedger, "_apply_payment", always_stale)

        with pytest.raises(ConcurrencyConflictError):
            PaymentLedger(db_session, max_retries=3).add_payment(
                rent_id, Decimal("400"), date(2025, 3, 2), "UPI", "admin-1"
            )

        assert len(attempts) == 3
        stored = db_session.get(Rent, rent_id)
        assert stored.paid_amount == Decimal("0.00")
        assert stored.status == RentStatus.PENDING
        assert db_session.scalar(select(func.count(RentPayment.id))) == 0

    def test_retry_count_defaults_to_settings(self, db_session, monkeypatch):
        monkeypatch.setattr(payment_service.settings, "payment_max_retries", 7)
        assert PaymentLedger(db_session).max_retries == 7

    def test_explicit_retry_count_overrides_settings(self, db_session, make_rent, monkeypatch):
        rent_id = make_rent(amount="1000").id
        attempts = []

        def always_stale(self, rent_id, *args):
            attempts.append(rent_id)
            raise StaleRentError("changed")

        monkeypatch.setattr(payment_service.settings, "payment_max_retries", 7)
        monkeypatch.setattr(PaymentLedger, "_apply_payment", always_stale)

        with pytest.raises(ConcurrencyConflictError):
            PaymentLedger(db_session, max_retries=1).add_payment(
                rent_id, Decimal("400"), date(2025, 3, 2), "UPI", "admin-1"
            )

        assert len(attempts) == 1

    def test_zero_retries_is_kept(self, db_session, make_rent, monkeypatch):
        rent_id = make_rent(amount="1000").id
        monkeypatch.setattr(payment_service.settings, "payment_max_retries", 7)
        payments = PaymentLedger(db_session, max_retries=0)

        with pytest.raises(ConcurrencyConflictError):
            payments.add_payment(rent_id, Decimal("400"), date(2025, 3, 2), "UPI", "admin-1")

        assert payments.max_retries == 0
        assert db_session.scalar(select(func.count(RentPayment.id))) == 0

    def test_sequential_payments_never_exceed_amount(self, ledger, make_rent):
        rent = make_rent(amount="300")
        for _ in range(3):
            ledger.add_payment(rent.id, Decimal("100"), date(2025, 3, 2), "CASH", "admin-1")

        with pytest.raises(OverpaymentError):
            ledger.add_payment(rent.id, Decimal("0.01"), date(2025, 3, 2), "CASH", "admin-1")

        assert ledger.get_rent_by_id(rent.id).paid_amount == Decimal("300.00")
