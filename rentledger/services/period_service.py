"""Rent period validation for new rents."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from rentledger.models.rent import Rent
from rentledger.services.directory_service import TenantDirectory
from rentledger.services.errors import NotAssignedError, OverlapError

logger = logging.getLogger(__name__)


class PeriodValidator:
    """Gate for rent creation.

    A rent may only be created for a tenant currently assigned to the room, and
    its period may not overlap any other non-deleted rent for the same pair.
    Callers run validate() inside the transaction that inserts the rent.
    """

    def __init__(self, db_session: Session, directory: TenantDirectory):
        """Initialize with database session and tenant directory."""
        self.db = db_session
        self.directory = directory

    def find_overlapping(
        self,
        tenant_id: int,
        room_id: int,
        period_start: date,
        period_end: date,
    ) -> Rent | None:
        """Get first non-deleted rent whose period overlaps the given one.

        Bounds are inclusive: a rent ending on the day another starts overlaps it.

        Args:
            tenant_id: Tenant ID
            room_id: Room ID
            period_start: Proposed period start
            period_end: Proposed period end

        Returns:
            Overlapping Rent or None
        """
        stmt = (
            select(Rent)
            .where(
                Rent.tenant_id == tenant_id,
                Rent.room_id == room_id,
                Rent.is_deleted.is_(False),
                Rent.period_start <= period_end,
                Rent.period_end >= period_start,
            )
            .order_by(Rent.period_start)
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def validate(self, tenant_id: int, room_id: int, period_start: date, period_end: date) -> None:
        """Check that a rent for this tenant, room and period may be created.

        Raises:
            NotAssignedError: Tenant is not currently assigned to the room
            OverlapError: Period overlaps an existing non-deleted rent
        """
        if not self.directory.is_assigned(tenant_id, room_id):
            logger.warning(
                "Rent rejected: tenant %d is not assigned to room %d", tenant_id, room_id
            )
            raise NotAssignedError()

        existing = self.find_overlapping(tenant_id, room_id, period_start, period_end)
        if existing:
            logger.warning(
                "Rent rejected: period %s to %s overlaps rent %d (%s to %s)",
                period_start,
                period_end,
                existing.id,
                existing.period_start,
                existing.period_end,
            )
            raise OverlapError(
                f"Rent period overlaps with an existing rent entry "
                f"({existing.period_start} to {existing.period_end})"
            )


__all__ = ["PeriodValidator"]
