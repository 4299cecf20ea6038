"""Input checks shared by the ledger services.

All of these run before a transaction is opened and raise ValidationError.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from rentledger.models.rent import PaymentMethod, RentStatus
from rentledger.services.errors import ValidationError

CENTS = Decimal("0.01")

# Numeric(12, 2) leaves 10 digits before the decimal point
MAX_INTEGER_DIGITS = 10


def to_money(value, field: str = "amount", allow_zero: bool = True) -> Decimal:
    """Convert a monetary input to a 2-place Decimal.

    Floats are rejected; pass Decimal, int or a numeric string.

    Args:
        value: Raw input value
        field: Field name used in the error message
        allow_zero: Whether 0 is acceptable

    Returns:
        Decimal quantized to cents

    Raises:
        ValidationError: Missing, non-numeric, negative, zero (when not allowed),
            wider than the amount columns or more precise than cents
    """
    if value is None:
        raise ValidationError(f"{field} is required")
    if isinstance(value, (float, bool)):
        raise ValidationError(f"{field} must be an exact decimal value, got {type(value).__name__}")
    try:
        money = Decimal(str(value)) if not isinstance(value, Decimal) else value
    except InvalidOperation as e:
        raise ValidationError(f"{field} must be a number") from e
    if not money.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if money < 0:
        raise ValidationError(f"{field} cannot be negative")
    if money == 0 and not allow_zero:
        raise ValidationError(f"{field} must be positive")
    if money and money.adjusted() >= MAX_INTEGER_DIGITS:
        raise ValidationError(
            f"{field} cannot have more than {MAX_INTEGER_DIGITS} digits before the decimal point"
        )
    try:
        quantized = money.quantize(CENTS)
    except InvalidOperation as e:
        raise ValidationError(f"{field} is out of range") from e
    if money != quantized:
        raise ValidationError(f"{field} cannot have more than 2 decimal places")
    return quantized


def require_date(value: date | None, field: str) -> date:
    if value is None:
        raise ValidationError(f"{field} is required")
    # datetime is a date subclass but does not compare with plain dates
    if isinstance(value, datetime) or not isinstance(value, date):
        raise ValidationError(f"{field} must be a date")
    return value


def validate_period(period_start: date, period_end: date) -> None:
    """Reject periods that do not start strictly before they end."""
    if period_start >= period_end:
        raise ValidationError("period_start must be before period_end")


def to_payment_method(value) -> PaymentMethod:
    if value is None:
        raise ValidationError("method is required")
    try:
        return PaymentMethod(value)
    except ValueError as e:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(f"method must be one of: {allowed}") from e


def to_rent_status(value) -> RentStatus:
    try:
        return RentStatus(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in RentStatus)
        raise ValidationError(f"status must be one of: {allowed}") from e


__all__ = [
    "CENTS",
    "MAX_INTEGER_DIGITS",
    "to_money",
    "require_date",
    "validate_period",
    "to_payment_method",
    "to_rent_status",
]
