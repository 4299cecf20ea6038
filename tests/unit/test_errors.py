"""Tests for the ledger error taxonomy."""

import pytest

from rentledger.services.errors import (
    AppError,
    ConcurrencyConflictError,
    NotAssignedError,
    NotFoundError,
    OverlapError,
    OverpaymentError,
    ValidationError,
    error_response,
)


@pytest.mark.parametrize(
    "error_cls,code,http_status",
    [
        (ValidationError, "validation_error", 400),
        (NotAssignedError, "not_assigned", 409),
        (OverlapError, "period_overlap", 409),
        (NotFoundError, "not_found", 404),
        (OverpaymentError, "overpayment", 409),
        (ConcurrencyConflictError, "concurrency_conflict", 409),
    ],
)
def test_error_codes_and_status(error_cls, code, http_status):
    error = error_cls()
    assert isinstance(error, AppError)
    assert error.code == code
    assert error.http_status == http_status
    assert error.message


def test_custom_message_is_kept():
    error = NotFoundError("Tenant or room missing")
    assert str(error) == "Tenant or room missing"
    assert error.message == "Tenant or room missing"


def test_error_response_shape():
    assert error_response(OverpaymentError("too much")) == {
        "error": {"code": "overpayment", "message": "too much"}
    }
