"""Pytest configuration: in-memory database, seeded directory and API client."""

import os
from datetime import date
from decimal import Decimal

# Set test environment BEFORE any imports from rentledger
# This ensures the module-level engine and settings never touch a real database
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SCHEDULER_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from rentledger.models import Base, Room, RoomAssignment, Tenant  # noqa: E402
from rentledger.services.ledger import RentLedger  # noqa: E402


@pytest.fixture
def db_session():
    """Create a fresh in-memory database session per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def tenant(db_session):
    """Tenant assigned to room 101."""
    tenant = Tenant(
        first_name="Alice",
        last_name="Smith",
        email="alice@example.com",
        phone="+1-555-0100",
    )
    db_session.add(tenant)
    db_session.commit()
    return tenant


@pytest.fixture
def room(db_session):
    room = Room(number="101", type="SINGLE", floor=1)
    db_session.add(room)
    db_session.commit()
    return room


@pytest.fixture
def assignment(db_session, tenant, room):
    assignment = RoomAssignment(tenant_id=tenant.id, room_id=room.id, is_active=True)
    db_session.add(assignment)
    db_session.commit()
    return assignment


@pytest.fixture
def other_tenant(db_session):
    """Second tenant assigned to room 202."""
    tenant = Tenant(first_name="Bob", last_name="Jones", email="bob@example.com", phone=None)
    room = Room(number="202", type="DOUBLE", floor=2)
    db_session.add_all([tenant, room])
    db_session.commit()
    db_session.add(RoomAssignment(tenant_id=tenant.id, room_id=room.id, is_active=True))
    db_session.commit()
    return tenant, room


@pytest.fixture
def ledger(db_session, assignment):
    """Ledger over a database with one assigned tenant."""
    return RentLedger(db_session)


@pytest.fixture
def make_rent(ledger, tenant, room):
    """Factory creating March 2025 rents for the assigned tenant by default."""

    def _make(
        amount="1000.00",
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 31),
        due_date=date(2025, 3, 5),
        tenant_id=None,
        room_id=None,
        notes=None,
    ):
        return ledger.create_rent(
            tenant_id=tenant_id or tenant.id,
            room_id=room_id or room.id,
            amount=Decimal(amount),
            period_start=period_start,
            period_end=period_end,
            due_date=due_date,
            actor="admin-1",
            notes=notes,
        )

    return _make


@pytest.fixture
def client(db_session, assignment):
    """API client with the database dependency overridden."""
    from rentledger.api.app import app
    from rentledger.services import get_db

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
