"""Rent management service: creation, edits, soft delete and listing."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from rentledger.config import settings
from rentledger.models import utcnow
from rentledger.models.directory import Room, Tenant
from rentledger.models.rent import Rent, RentStatus
from rentledger.services.audit_service import AuditService
from rentledger.services.directory_service import SqlDirectory, TenantDirectory
from rentledger.services.errors import NotFoundError, ValidationError
from rentledger.services.period_service import PeriodValidator
from rentledger.services.validation import (
    require_date,
    to_money,
    to_rent_status,
    validate_period,
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "due_date": Rent.due_date,
    "amount": Rent.amount,
    "status": Rent.status,
    "created_at": Rent.created_at,
}

# Fields a direct edit may change; paid_amount is owned by the payment ledger
EDITABLE_FIELDS = ("amount", "period_start", "period_end", "due_date", "status", "notes")


@dataclass
class RentFilters:
    """Listing filters, sort order and page window."""

    tenant_id: int | None = None
    room_id: int | None = None
    status: RentStatus | str | None = None
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None
    page: int = 1
    limit: int | None = None
    sort_by: str = "due_date"
    sort_order: str = "desc"


@dataclass
class Pagination:
    total: int
    page: int
    limit: int
    total_pages: int


@dataclass
class RentPage:
    """One page of rents plus pagination info."""

    rents: list[Rent]
    pagination: Pagination


class RentService:
    """Service for rent database operations.

    Every read path filters out soft-deleted rents.
    """

    def __init__(self, db_session: Session, directory: TenantDirectory | None = None):
        """Initialize with database session and optional tenant directory."""
        self.db = db_session
        self.directory = directory or SqlDirectory(db_session)
        self.period_validator = PeriodValidator(db_session, self.directory)

    def _active_rent_query(self):
        return (
            select(Rent)
            .where(Rent.is_deleted.is_(False))
            .options(
                selectinload(Rent.tenant),
                selectinload(Rent.room),
                selectinload(Rent.payments),
            )
        )

    def get_rent_by_id(self, rent_id: int) -> Rent:
        """Get non-deleted rent with tenant, room and payments loaded.

        Raises:
            NotFoundError: Rent missing or deleted
        """
        rent = self.db.execute(
            self._active_rent_query().where(Rent.id == rent_id)
        ).scalar_one_or_none()
        if not rent:
            raise NotFoundError()
        return rent

    def create_rent(
        self,
        tenant_id: int,
        room_id: int,
        amount: Decimal | int | str,
        period_start: date,
        period_end: date,
        due_date: date,
        actor: str,
        notes: str | None = None,
    ) -> Rent:
        """Create a PENDING rent after the period validator passes.

        The room row is locked before the overlap check so two concurrent
        creations for the same room cannot both pass it.

        Args:
            tenant_id: Tenant being billed
            room_id: Room the rent is for
            amount: Total owed for the period
            period_start: First day of the period
            period_end: Last day of the period
            due_date: Date payment is expected by
            actor: Administrator creating the rent
            notes: Optional notes

        Returns:
            Created Rent

        Raises:
            ValidationError: Malformed amount or dates
            NotAssignedError: Tenant not assigned to the room
            OverlapError: Period overlaps an existing rent
        """
        amount = to_money(amount, "amount")
        period_start = require_date(period_start, "period_start")
        period_end = require_date(period_end, "period_end")
        due_date = require_date(due_date, "due_date")
        validate_period(period_start, period_end)

        try:
            self.db.execute(select(Room.id).where(Room.id == room_id).with_for_update())
            self.period_validator.validate(tenant_id, room_id, period_start, period_end)

            rent = Rent(
                tenant_id=tenant_id,
                room_id=room_id,
                amount=amount,
                paid_amount=Decimal("0.00"),
                period_start=period_start,
                period_end=period_end,
                due_date=due_date,
                status=RentStatus.PENDING,
                notes=notes,
                created_by=actor,
            )
            self.db.add(rent)
            self.db.flush()

            AuditService.log(
                self.db,
                "rent",
                rent.id,
                "create",
                actor,
                {"amount": str(amount), "due_date": due_date.isoformat()},
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Created rent %d: tenant=%d room=%d amount=%s period=%s to %s due=%s",
            rent.id,
            tenant_id,
            room_id,
            amount,
            period_start,
            period_end,
            due_date,
        )
        return self.get_rent_by_id(rent.id)

    def update_rent(self, rent_id: int, changes: dict, actor: str | None = None) -> Rent:
        """Apply direct field edits to a rent.

        Overlap is not re-validated here. paid_amount cannot be edited, and the
        amount cannot drop below what has already been paid.

        Args:
            rent_id: Rent to edit
            changes: Subset of amount, period_start, period_end, due_date, status, notes
            actor: Who made the edit (audit only)

        Returns:
            Updated Rent

        Raises:
            ValidationError: Unknown field or invalid value
            NotFoundError: Rent missing or deleted
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        values = dict(changes)
        if "amount" in values:
            values["amount"] = to_money(values["amount"], "amount")
        for field in ("period_start", "period_end", "due_date"):
            if field in values:
                values[field] = require_date(values[field], field)
        if "status" in values:
            values["status"] = to_rent_status(values["status"])

        try:
            rent = self.db.execute(
                select(Rent)
                .where(Rent.id == rent_id, Rent.is_deleted.is_(False))
                .with_for_update()
            ).scalar_one_or_none()
            if not rent:
                raise NotFoundError()

            validate_period(
                values.get("period_start", rent.period_start),
                values.get("period_end", rent.period_end),
            )
            if "amount" in values and values["amount"] < rent.paid_amount:
                raise ValidationError(
                    f"amount cannot be less than the already paid {rent.paid_amount}"
                )

            for field, value in values.items():
                setattr(rent, field, value)
            rent.updated_at = utcnow()

            AuditService.log(
                self.db,
                "rent",
                rent_id,
                "update",
                actor,
                {
                    k: v.value if isinstance(v, RentStatus) else str(v) if v is not None else None
                    for k, v in values.items()
                },
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Updated rent %d: fields=%s", rent_id, ",".join(sorted(values)))
        return self.get_rent_by_id(rent_id)

    def delete_rent(self, rent_id: int, actor: str | None = None) -> None:
        """Soft delete a rent; its payments stay for audit.

        Raises:
            NotFoundError: Rent missing or already deleted
        """
        try:
            rent = self.db.execute(
                select(Rent).where(Rent.id == rent_id, Rent.is_deleted.is_(False))
            ).scalar_one_or_none()
            if not rent:
                raise NotFoundError()

            rent.is_deleted = True
            rent.updated_at = utcnow()
            AuditService.log(self.db, "rent", rent_id, "delete", actor)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Soft deleted rent %d", rent_id)

    def list_rents(self, filters: RentFilters | None = None) -> RentPage:
        """List non-deleted rents with filters, sorting and pagination.

        search matches tenant first name, last name, email and room number,
        case-insensitively.

        Args:
            filters: RentFilters (defaults: page 1, default page size, due_date desc)

        Returns:
            RentPage with rents and pagination

        Raises:
            ValidationError: Bad page, limit, sort field or sort order
        """
        filters = filters or RentFilters()
        limit = filters.limit if filters.limit is not None else settings.default_page_size

        if filters.page < 1:
            raise ValidationError("page must be at least 1")
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        limit = min(limit, settings.max_page_size)
        if filters.sort_by not in SORT_COLUMNS:
            raise ValidationError(f"sort_by must be one of: {', '.join(SORT_COLUMNS)}")
        if filters.sort_order not in ("asc", "desc"):
            raise ValidationError("sort_order must be 'asc' or 'desc'")

        conditions = [Rent.is_deleted.is_(False)]
        if filters.tenant_id is not None:
            conditions.append(Rent.tenant_id == filters.tenant_id)
        if filters.room_id is not None:
            conditions.append(Rent.room_id == filters.room_id)
        if filters.status is not None:
            conditions.append(Rent.status == to_rent_status(filters.status))
        if filters.start_date is not None:
            conditions.append(Rent.due_date >= filters.start_date)
        if filters.end_date is not None:
            conditions.append(Rent.due_date <= filters.end_date)
        if filters.search and filters.search.strip():
            pattern = f"%{_escape_like(filters.search.strip())}%"
            conditions.append(
                or_(
                    Tenant.first_name.ilike(pattern, escape="\\"),
                    Tenant.last_name.ilike(pattern, escape="\\"),
                    Tenant.email.ilike(pattern, escape="\\"),
                    Room.number.ilike(pattern, escape="\\"),
                )
            )

        count_stmt = (
            select(func.count(Rent.id))
            .join(Tenant, Rent.tenant_id == Tenant.id)
            .join(Room, Rent.room_id == Room.id)
            .where(*conditions)
        )
        total = self.db.execute(count_stmt).scalar_one()

        sort_column = SORT_COLUMNS[filters.sort_by]
        order = sort_column.asc() if filters.sort_order == "asc" else sort_column.desc()
        stmt = (
            self._active_rent_query()
            .join(Tenant, Rent.tenant_id == Tenant.id)
            .join(Room, Rent.room_id == Room.id)
            .where(*conditions)
            .order_by(order, Rent.id.desc())
            .offset((filters.page - 1) * limit)
            .limit(limit)
        )
        rents = list(self.db.execute(stmt).scalars().all())

        return RentPage(
            rents=rents,
            pagination=Pagination(
                total=total,
                page=filters.page,
                limit=limit,
                total_pages=math.ceil(total / limit),
            ),
        )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


__all__ = ["RentService", "RentFilters", "RentPage", "Pagination", "SORT_COLUMNS"]
