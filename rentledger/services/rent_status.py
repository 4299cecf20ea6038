"""Rent payment-status transitions.

OVERDUE is never produced here; only the daily sweep sets it.
"""

from decimal import Decimal

from rentledger.models.rent import RentStatus


def next_status(prev_status: RentStatus, paid_amount: Decimal, amount: Decimal) -> RentStatus:
    """Map the paid total of a rent to its new status.

    Args:
        prev_status: Status before the payment was applied
        paid_amount: Total paid after the payment
        amount: Total owed for the period

    Returns:
        PAID when fully paid, PARTIAL when something but not everything is paid,
        otherwise prev_status unchanged (a zero correction keeps OVERDUE).
    """
    if paid_amount >= amount:
        return RentStatus.PAID
    if paid_amount > 0:
        return RentStatus.PARTIAL
    return prev_status


__all__ = ["next_status"]
