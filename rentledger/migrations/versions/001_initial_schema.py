"""Initial schema: directory tables, rents, rent payments and audit log.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

RENT_STATUS = sa.Enum("PENDING", "PARTIAL", "PAID", "OVERDUE", name="rentstatus")
PAYMENT_METHOD = sa.Enum("CASH", "CARD", "UPI", "BANK_TRANSFER", "CHEQUE", name="paymentmethod")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
    ]


def upgrade() -> None:
    # Create tenants table
    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.Index("ix_tenants_email", "email"),
    )

    # Create rooms table
    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "number",
            sa.String(length=20),
            nullable=False,
            comment="Room number used for display and invoice numbering (e.g., '101', 'A-2')",
        ),
        sa.Column(
            "type",
            sa.String(length=20),
            nullable=False,
            comment="Room type: SINGLE, DOUBLE, TRIPLE, FOUR",
        ),
        sa.Column("floor", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("number"),
        sa.Index("ix_rooms_number", "number"),
    )

    # Create room_assignments table
    op.create_table(
        "room_assignments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("room_id", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "room_id", name="uq_room_assignment_tenant_room"),
        sa.Index("idx_room_assignment_room", "room_id"),
    )

    # Create rents table
    op.create_table(
        "rents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("room_id", sa.Integer(), nullable=False),
        sa.Column(
            "amount",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            comment="Total owed for the period",
        ),
        sa.Column(
            "paid_amount",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
            comment="Sum of all payments recorded against this rent",
        ),
        sa.Column("period_start", sa.Date(), nullable=False),
        sa.Column("period_end", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("status", RENT_STATUS, nullable=False, server_default="PENDING"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=100), nullable=False),
        sa.Column(
            "is_deleted",
            sa.Boolean(),
            nullable=False,
            server_default="0",
            comment="Soft delete flag; deleted rents are excluded from every read path",
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_rents_tenant_id", "tenant_id"),
        sa.Index("ix_rents_room_id", "room_id"),
        sa.Index("ix_rents_due_date", "due_date"),
        sa.Index("ix_rents_status", "status"),
        sa.Index("ix_rents_is_deleted", "is_deleted"),
        sa.Index("idx_rent_tenant_room", "tenant_id", "room_id"),
        sa.Index("idx_rent_status_due", "status", "due_date"),
    )

    # Create rent_payments table
    op.create_table(
        "rent_payments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("rent_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("paid_at", sa.Date(), nullable=False),
        sa.Column("method", PAYMENT_METHOD, nullable=False),
        sa.Column("reference", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["rent_id"], ["rents.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_rent_payments_rent_id", "rent_id"),
    )

    # Create audit_logs table
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("actor_id", sa.String(length=100), nullable=True),
        sa.Column("changes", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("rent_payments")
    op.drop_table("rents")
    op.drop_table("room_assignments")
    op.drop_table("rooms")
    op.drop_table("tenants")
    RENT_STATUS.drop(op.get_bind(), checkfirst=True)
    PAYMENT_METHOD.drop(op.get_bind(), checkfirst=True)
