"""Monthly collection summary over rents due in a calendar month.

Totals are accumulated as Decimal in Python rather than with SQL SUM, which
returns floats on SQLite.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from rentledger.models.rent import Rent, RentStatus
from rentledger.services.errors import ValidationError

logger = logging.getLogger(__name__)

# Fixed English names; calendar.month_name follows the process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass
class MonthlySummary:
    """Collection totals and status counts for one month."""

    month: str
    year: int
    total_expected: Decimal = Decimal("0.00")
    total_collected: Decimal = Decimal("0.00")
    total_outstanding: Decimal = Decimal("0.00")
    total_overdue: Decimal = Decimal("0.00")
    paid_count: int = 0
    pending_count: int = 0
    overdue_count: int = 0
    partial_count: int = 0


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """Get first and last day of a month.

    Raises:
        ValidationError: month outside 1..12 or year outside 1..9999
    """
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise ValidationError("year must be between 1 and 9999")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class MonthlyAggregator:
    """Read-only monthly rollup of the ledger."""

    def __init__(self, db_session: Session):
        """Initialize with database session."""
        self.db = db_session

    def monthly_summary(self, month: int, year: int) -> MonthlySummary:
        """Summarize non-deleted rents whose due date falls in the month.

        Args:
            month: Month number (1-12)
            year: Four-digit year

        Returns:
            MonthlySummary with totals and per-status counts
        """
        first_day, last_day = month_bounds(month, year)

        rents = self.db.execute(
            select(Rent).where(
                Rent.is_deleted.is_(False),
                Rent.due_date >= first_day,
                Rent.due_date <= last_day,
            )
        ).scalars().all()

        summary = MonthlySummary(month=MONTH_NAMES[month - 1], year=year)
        for rent in rents:
            outstanding = rent.amount - rent.paid_amount
            summary.total_expected += rent.amount
            summary.total_collected += rent.paid_amount
            summary.total_outstanding += outstanding

            if rent.status == RentStatus.PAID:
                summary.paid_count += 1
            elif rent.status == RentStatus.PENDING:
                summary.pending_count += 1
            elif rent.status == RentStatus.OVERDUE:
                summary.overdue_count += 1
                summary.total_overdue += outstanding
            elif rent.status == RentStatus.PARTIAL:
                summary.partial_count += 1

        logger.debug(
            "Monthly summary %s %d: %d rents, expected=%s collected=%s",
            summary.month,
            year,
            len(rents),
            summary.total_expected,
            summary.total_collected,
        )
        return summary


__all__ = ["MonthlySummary", "MonthlyAggregator", "month_bounds", "MONTH_NAMES"]
