"""Pydantic schemas for the rent ledger API."""

import datetime as dt
from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rentledger.models.rent import PaymentMethod, RentStatus

Money = Decimal


class RentCreatePayload(BaseModel):
    """Request payload for POST /api/admin/rents."""

    tenant_id: int = Field(..., description="Tenant being billed")
    room_id: int = Field(..., description="Room the rent is for")
    amount: Money = Field(..., gt=0, max_digits=12, decimal_places=2, description="Total owed")
    period_start: date
    period_end: date
    due_date: date
    notes: str | None = None

    @model_validator(mode="after")
    def check_period(self) -> "RentCreatePayload":
        if self.period_start >= self.period_end:
            raise ValueError("period_start must be before period_end")
        return self


class RentUpdatePayload(BaseModel):
    """Request payload for PUT /api/admin/rents/{id}. Only sent fields change."""

    amount: Money | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    period_start: date | None = None
    period_end: date | None = None
    due_date: date | None = None
    status: RentStatus | None = None
    notes: str | None = None

    model_config = ConfigDict(extra="forbid")


class PaymentCreatePayload(BaseModel):
    """Request payload for POST /api/admin/rents/{id}/payments."""

    amount: Money = Field(..., gt=0, max_digits=12, decimal_places=2)
    paid_at: date
    method: PaymentMethod
    reference: str | None = Field(None, max_length=255)
    notes: str | None = None


class TenantSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)


class RoomSummary(BaseModel):
    id: int
    number: str
    type: str
    floor: int

    model_config = ConfigDict(from_attributes=True)


class PaymentResponse(BaseModel):
    """Response schema for a single rent payment."""

    id: int
    rent_id: int
    amount: Money
    paid_at: date
    method: PaymentMethod
    reference: str | None = None
    notes: str | None = None
    created_by: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RentResponse(BaseModel):
    """Response schema for a rent with its tenant, room and payments."""

    id: int
    tenant_id: int
    room_id: int
    amount: Money
    paid_amount: Money
    outstanding_amount: Money
    period_start: date
    period_end: date
    due_date: date
    status: RentStatus
    notes: str | None = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    tenant: TenantSummary | None = None
    room: RoomSummary | None = None
    payments: list[PaymentResponse] = []

    model_config = ConfigDict(from_attributes=True)


class PaymentResultResponse(BaseModel):
    payment: PaymentResponse
    rent: RentResponse

    model_config = ConfigDict(from_attributes=True)


class PaginationResponse(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

    model_config = ConfigDict(from_attributes=True)


class RentListResponse(BaseModel):
    """Response schema for GET /api/admin/rents."""

    rents: list[RentResponse]
    pagination: PaginationResponse

    model_config = ConfigDict(from_attributes=True)


class InvoiceTenantResponse(BaseModel):
    name: str
    email: str
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)


class InvoiceRoomResponse(BaseModel):
    number: str
    type: str
    floor: int

    model_config = ConfigDict(from_attributes=True)


class InvoicePaymentResponse(BaseModel):
    id: int
    date: dt.date
    amount: Money
    method: str
    reference: str | None = None

    model_config = ConfigDict(from_attributes=True)


class InvoiceResponse(BaseModel):
    """Response schema for GET /api/admin/rents/{id}/invoice."""

    rent_id: int
    invoice_number: str
    tenant: InvoiceTenantResponse
    room: InvoiceRoomResponse
    period_start: date
    period_end: date
    amount: Money
    paid_amount: Money
    outstanding_amount: Money
    due_date: date
    status: RentStatus
    payments: list[InvoicePaymentResponse]
    generated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MonthlySummaryResponse(BaseModel):
    """Response schema for GET /api/admin/rents/summary/monthly."""

    month: str
    year: int
    total_expected: Money
    total_collected: Money
    total_outstanding: Money
    total_overdue: Money
    paid_count: int
    pending_count: int
    overdue_count: int
    partial_count: int

    model_config = ConfigDict(from_attributes=True)


class SweepResponse(BaseModel):
    message: str
    count: int


SortField = Literal["due_date", "amount", "status", "created_at"]
SortOrder = Literal["asc", "desc"]


__all__ = [
    "RentCreatePayload",
    "RentUpdatePayload",
    "PaymentCreatePayload",
    "RentResponse",
    "PaymentResponse",
    "PaymentResultResponse",
    "PaginationResponse",
    "RentListResponse",
    "InvoiceResponse",
    "MonthlySummaryResponse",
    "SweepResponse",
    "SortField",
    "SortOrder",
]
