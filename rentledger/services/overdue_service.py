"""Overdue sweep: moves unpaid rents past their due date to OVERDUE."""

import logging
from datetime import date

from sqlalchemy import update
from sqlalchemy.orm import Session

from rentledger.models import utcnow
from rentledger.models.rent import Rent, RentStatus
from rentledger.services.audit_service import AuditService

logger = logging.getLogger(__name__)

SWEEPABLE_STATUSES = (RentStatus.PENDING, RentStatus.PARTIAL)


class OverdueSweeper:
    """Batch status transition run once a day by the scheduler."""

    def __init__(self, db_session: Session):
        """Initialize with database session."""
        self.db = db_session

    def sweep_overdue(self, today: date | None = None) -> int:
        """Mark PENDING and PARTIAL rents due before today as OVERDUE.

        The eligibility predicate is part of the UPDATE itself, so a rent that a
        concurrent payment has just completed no longer matches and keeps PAID.
        Running the sweep again without new eligible rents updates nothing.

        Args:
            today: Day boundary to compare due dates with (default: server's local date)

        Returns:
            Number of rents moved to OVERDUE
        """
        today = today or date.today()
        try:
            result = self.db.execute(
                update(Rent)
                .where(
                    Rent.is_deleted.is_(False),
                    Rent.status.in_(SWEEPABLE_STATUSES),
                    Rent.due_date < today,
                )
                .values(status=RentStatus.OVERDUE, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            count = result.rowcount
            if count:
                AuditService.log(
                    self.db,
                    "rent",
                    0,
                    "sweep",
                    None,
                    {"status": RentStatus.OVERDUE.value, "count": count, "as_of": today.isoformat()},
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        # Objects already loaded in this session may hold the old status
        self.db.expire_all()

        logger.info("Overdue sweep as of %s: %d rent(s) marked OVERDUE", today, count)
        return count


__all__ = ["OverdueSweeper", "SWEEPABLE_STATUSES"]
