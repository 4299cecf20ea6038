"""Payment ledger: applies settled payments to rents.

Each payment runs in one transaction:
- Read the rent (row lock where the database supports it)
- Reject the payment if it would exceed the outstanding balance
- Insert the immutable RentPayment row
- Write paid_amount and status guarded by the paid_amount that was read

If the guarded write matches no row another payment got there first; the
transaction is rolled back and the whole read-check-write is retried.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from rentledger.config import settings
from rentledger.models import utcnow
from rentledger.models.rent import PaymentMethod, Rent, RentPayment
from rentledger.services.audit_service import AuditService
from rentledger.services.errors import (
    ConcurrencyConflictError,
    NotFoundError,
    OverpaymentError,
)
from rentledger.services.rent_status import next_status
from rentledger.services.validation import require_date, to_money, to_payment_method

logger = logging.getLogger(__name__)


class StaleRentError(Exception):
    """The rent changed between the read and the guarded write."""


@dataclass
class PaymentResult:
    """Created payment and the rent after it was applied."""

    payment: RentPayment
    rent: Rent


class PaymentLedger:
    """Records payments against rents."""

    def __init__(self, db_session: Session, max_retries: int | None = None):
        """Initialize with database session.

        Args:
            db_session: SQLAlchemy session
            max_retries: Attempts before ConcurrencyConflictError (default from settings)
        """
        self.db = db_session
        self.max_retries = settings.payment_max_retries if max_retries is None else max_retries

    def add_payment(
        self,
        rent_id: int,
        amount: Decimal | int | str,
        paid_at: date,
        method: PaymentMethod | str,
        actor: str,
        reference: str | None = None,
        notes: str | None = None,
    ) -> PaymentResult:
        """Apply a settled payment to a rent.

        A zero amount is accepted as a correction entry: it is recorded but
        leaves the status unchanged.

        Args:
            rent_id: Rent to pay
            amount: Payment amount (exact decimal)
            paid_at: Settlement date
            method: Payment method
            actor: Who recorded the payment
            reference: Optional external reference (receipt, transaction id)
            notes: Optional notes

        Returns:
            PaymentResult with the created payment and the updated rent

        Raises:
            ValidationError: Malformed amount, date or method
            NotFoundError: Rent missing or deleted
            OverpaymentError: Amount exceeds the outstanding balance
            ConcurrencyConflictError: Concurrent payments kept winning the race
        """
        amount = to_money(amount, "amount")
        paid_at = require_date(paid_at, "paid_at")
        method = to_payment_method(method)

        for attempt in range(1, self.max_retries + 1):
            try:
                result = self._apply_payment(
                    rent_id, amount, paid_at, method, actor, reference, notes
                )
                self.db.commit()
            except StaleRentError:
                self.db.rollback()
                logger.warning(
                    "Concurrent update on rent %d, retrying payment (attempt %d/%d)",
                    rent_id,
                    attempt,
                    self.max_retries,
                )
                continue
            except Exception:
                self.db.rollback()
                raise

            self.db.refresh(result.rent)
            self.db.refresh(result.payment)
            logger.info(
                "Recorded payment %d on rent %d: amount=%s method=%s paid=%s/%s status=%s",
                result.payment.id,
                rent_id,
                amount,
                method.value,
                result.rent.paid_amount,
                result.rent.amount,
                result.rent.status.value,
            )
            return result

        logger.error("Payment on rent %d abandoned after %d attempts", rent_id, self.max_retries)
        raise ConcurrencyConflictError()

    def _apply_payment(
        self,
        rent_id: int,
        amount: Decimal,
        paid_at: date,
        method: PaymentMethod,
        actor: str,
        reference: str | None,
        notes: str | None,
    ) -> PaymentResult:
        stmt = (
            select(Rent)
            .where(Rent.id == rent_id, Rent.is_deleted.is_(False))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        rent = self.db.execute(stmt).scalar_one_or_none()
        if not rent:
            raise NotFoundError()

        observed_paid = rent.paid_amount
        new_paid = observed_paid + amount
        if new_paid > rent.amount:
            logger.warning(
                "Overpayment rejected on rent %d: amount=%s outstanding=%s",
                rent_id,
                amount,
                rent.outstanding_amount,
            )
            raise OverpaymentError(
                f"Payment amount {amount} exceeds outstanding balance {rent.outstanding_amount}"
            )

        new_status = next_status(rent.status, new_paid, rent.amount)

        payment = RentPayment(
            rent_id=rent_id,
            amount=amount,
            paid_at=paid_at,
            method=method,
            reference=reference,
            notes=notes,
            created_by=actor,
        )
        self.db.add(payment)

        result = self.db.execute(
            update(Rent)
            .where(
                Rent.id == rent_id,
                Rent.paid_amount == observed_paid,
                Rent.is_deleted.is_(False),
            )
            .values(
                paid_amount=new_paid,
                status=new_status,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise StaleRentError(f"Rent {rent_id} changed since paid_amount={observed_paid}")

        self.db.flush()

        AuditService.log(
            self.db,
            "rent",
            rent_id,
            "payment",
            actor,
            {
                "payment_id": payment.id,
                "amount": str(amount),
                "paid_amount": str(new_paid),
                "status": new_status.value,
            },
        )
        return PaymentResult(payment=payment, rent=rent)


__all__ = ["PaymentLedger", "PaymentResult", "StaleRentError"]
