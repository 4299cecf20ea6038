"""Rent ledger API endpoints (administrator only; authentication is upstream)."""

import logging
import time
from datetime import date

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from rentledger.api.errors import raise_app_error, raise_internal_error
from rentledger.config import settings
from rentledger.models.rent import RentStatus
from rentledger.schemas.rent import (
    InvoiceResponse,
    MonthlySummaryResponse,
    PaymentCreatePayload,
    PaymentResultResponse,
    RentCreatePayload,
    RentListResponse,
    RentResponse,
    RentUpdatePayload,
    SortField,
    SortOrder,
    SweepResponse,
)
from rentledger.services import get_db
from rentledger.services.errors import AppError
from rentledger.services.ledger import RentLedger
from rentledger.services.rent_service import RentFilters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/rents", tags=["rents"])


def get_ledger(db: Session = Depends(get_db)) -> RentLedger:  # noqa: B008
    """Build a ledger bound to the request's session."""
    return RentLedger(db)


def _log_debug(endpoint: str, start_time: float, **kwargs) -> None:
    duration_ms = int((time.time() - start_time) * 1000)
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.debug("rents.%s: %s duration_ms=%d", endpoint, extra, duration_ms)


# Must be registered before /{rent_id}
@router.get("/summary/monthly", response_model=MonthlySummaryResponse)
def monthly_summary(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1, le=9999),
    ledger: RentLedger = Depends(get_ledger),  # noqa: B008
) -> MonthlySummaryResponse:
    """Collection totals for rents due in the given month."""
    try:
        summary = ledger.monthly_summary(month, year)
        return MonthlySummaryResponse.model_validate(summary)
    except AppError as e:
        raise_app_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("GET /summary/monthly", e)


@router.post("/update-overdue", response_model=SweepResponse)
def update_overdue(ledger: RentLedger = Depends(get_ledger)) -> SweepResponse:  # noqa: B008
    """Run the overdue sweep now (same operation as the daily job)."""
    try:
        count = ledger.sweep_overdue()
        return SweepResponse(message=f"Updated {count} overdue rent(s)", count=count)
    except Exception as e:
        raise_internal_error("POST /update-overdue", e)


@router.get("", response_model=RentListResponse)
def list_rents(
    tenant_id: int | None = None,
    room_id: int | None = None,
    status_filter: RentStatus | None = Query(None, alias="status"),  # noqa: B008
    start_date: date | None = None,
    end_date: date | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1),
    sort_by: SortField = "due_date",
    sort_order: SortOrder = "desc",
    ledger: RentLedger = Depends(get_ledger),  # noqa: B008
) -> RentListResponse:
    """List rents with filters, search, sorting and pagination.

    limit above the configured maximum is capped, not rejected.
    """
    start_time = time.time()
    try:
        result = ledger.list_rents(
            RentFilters(
                tenant_id=tenant_id,
                room_id=room_id,
                status=status_filter,
                start_date=start_date,
                end_date=end_date,
                search=search,
                page=page,
                limit=limit,
                sort_by=sort_by,
                sort_order=sort_order,
            )
        )
        _log_debug("list", start_time, count=len(result.rents), total=result.pagination.total)
        return RentListResponse.model_validate(result)
    except AppError as e:
        raise_app_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("GET /rents", e)


@router.post("", response_model=RentResponse, status_code=status.HTTP_201_CREATED)
def create_rent(
    payload: RentCreatePayload,
    actor: str = Header(..., alias="X-Actor-Id"),  # noqa: B008
    ledger: RentLedger = Depends(get_ledger),  # noqa: B008
) -> RentResponse:
    """
    Create a rent entry.

    Returns:
        201: Created rent (status PENDING, paid_amount 0)
        400: Validation error
        409: Tenant not assigned to room, or period overlaps an existing rent
    """
    try:
        rent = ledger.create_rent(
            tenant_id=payload.tenant_id,
            room_id=payload.room_id,
            amount=payload.amount,
            period_start=payload.period_start,
            period_end=payload.period_end,
            due_date=payload.due_date,
            actor=actor,
            notes=payload.notes,
        )
        return RentResponse.model_validate(rent)
    except AppError as e:
        raise_app_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("POST /rents", e)


@router.get("/{rent_id}", response_model=RentResponse)
def get_rent(rent_id: int, ledger: RentLedger = Depends(get_ledger)) -> RentResponse:  # noqa: B008
    try:
        return RentResponse.model_validate(ledger.get_rent_by_id(rent_id))
    except AppError as e:
        raise_app_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("GET /rents/{id}", e)


@router.put("/{rent_id}", response_model=RentResponse)
def update_rent(
    rent_id: int,
    payload: RentUpdatePayload,
    actor: str | None = Header(None, alias="X-Actor-Id"),  # noqa: B008
    ledger: RentLedger = Depends(get_ledger),  # noqa: B008
) -> RentResponse:
    """Edit amount, dates, status or notes. Overlap is not re-checked."""
    try:
        rent = ledger.update_rent(rent_id, payload.model_dump(exclude_unset=True), actor)
        return RentResponse.model_validate(rent)
    except AppError as e:
        raise_app_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("PUT /rents/{id}", e)


@router.delete("/{rent_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rent(
    rent_id: int,
    actor: str | None = Header(None, alias="X-Actor-Id"),  # noqa: B008
    ledger: RentLedger = Depends(get_ledger),  # noqa: B008
) -> Response:
    try:
        ledger.delete_rent(rent_id, actor)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except AppError as e:
        raise_app_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("DELETE /rents/{id}", e)


@router.post(
    "/{rent_id}/payments",
    response_model=PaymentResultResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_payment(
    rent_id: int,
    payload: PaymentCreatePayload,
    actor: str = Header(..., alias="X-Actor-Id"),  # noqa: B008
    ledger: RentLedger = Depends(get_ledger),  # noqa: B008
) -> PaymentResultResponse:
    """
    Record a settled payment against a rent.

    Returns:
        201: Created payment and updated rent
        404: Rent not found
        409: Payment exceeds outstanding balance, or concurrent update conflict
    """
    try:
        result = ledger.add_payment(
            rent_id,
            amount=payload.amount,
            paid_at=payload.paid_at,
            method=payload.method,
            actor=actor,
            reference=payload.reference,
            notes=payload.notes,
        )
        return PaymentResultResponse.model_validate(result)
    except AppError as e:
        raise_app_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("POST /rents/{id}/payments", e)


@router.get("/{rent_id}/invoice", response_model=InvoiceResponse)
def generate_invoice(
    rent_id: int, ledger: RentLedger = Depends(get_ledger)  # noqa: B008
) -> InvoiceResponse:
    try:
        return InvoiceResponse.model_validate(ledger.generate_invoice(rent_id))
    except AppError as e:
        raise_app_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise_internal_error("GET /rents/{id}/invoice", e)


__all__ = ["router", "get_ledger"]
