"""Tests for the declarative base and shared columns."""

from datetime import timedelta, timezone

from rentledger.models import (
    AuditLog,
    Base,
    Rent,
    RentPayment,
    Room,
    RoomAssignment,
    Tenant,
    utcnow,
)


class TestUtcNow:
    def test_is_timezone_aware_utc(self):
        now = utcnow()

        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)
        assert now.tzinfo == timezone.utc


class TestSharedColumns:
    def test_every_table_has_id_and_timestamps(self):
        for model in (AuditLog, Tenant, Room, RoomAssignment, Rent, RentPayment):
            columns = model.__table__.columns
            assert columns["id"].primary_key
            assert not columns["created_at"].nullable
            assert columns["updated_at"].onupdate is not None

    def test_tables_share_one_metadata(self):
        assert {"tenants", "rooms", "rents", "rent_payments"} <= set(Base.metadata.tables)

    def test_timestamps_filled_on_insert(self, db_session):
        tenant = Tenant(first_name="Carol", last_name="White", email="carol@example.com")
        db_session.add(tenant)
        db_session.commit()
        db_session.refresh(tenant)

        assert tenant.created_at is not None
        assert tenant.updated_at is not None
