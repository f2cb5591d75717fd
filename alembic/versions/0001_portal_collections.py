"""portal collections

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_STATUS_CLAUSE = sa.text("status IN ('pending', 'approved', 'assigned')")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("first_name", sa.String(120)),
        sa.Column("last_name", sa.String(120)),
        sa.Column("name", sa.String(200)),
        sa.Column("phone", sa.String(40)),
        sa.Column("address", sa.Text()),
        sa.Column("role", sa.String(40), nullable=False, server_default="customer"),
        sa.Column("email_verified", sa.Boolean(), server_default=sa.false()),
        sa.Column("password_hash", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("customer_id", sa.String(128), nullable=False),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_email", sa.String(255)),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("preferred_time", sa.String(40), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("service_type", sa.String(80), nullable=False),
        sa.Column("estimated_price", sa.Numeric(10, 2)),
        sa.Column("final_price", sa.Numeric(10, 2)),
        sa.Column("is_price_set", sa.Boolean(), server_default=sa.false()),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("bin_size", sa.String(40)),
        sa.Column("carpet_size", sa.String(40)),
        sa.Column("special_request", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_bookings_customer_id", "bookings", ["customer_id"])
    op.create_index(
        "uq_bookings_active_customer_date",
        "bookings",
        ["customer_id", "booking_date"],
        unique=True,
        postgresql_where=ACTIVE_STATUS_CLAUSE,
        sqlite_where=ACTIVE_STATUS_CLAUSE,
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("customer_id", sa.String(128), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="info"),
        sa.Column("is_read", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_notifications_customer_id", "notifications", ["customer_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("customer_id", sa.String(128), nullable=False),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("booking_id", sa.String(64)),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("method", sa.String(40), nullable=False),
        sa.Column("reference", sa.String(120), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("payment_date", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_payments_customer_id", "payments", ["customer_id"])

    op.create_table(
        "support_tickets",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("customer_id", sa.String(128), nullable=False),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("subject", sa.String(200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("priority", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_support_tickets_customer_id", "support_tickets", ["customer_id"])


def downgrade() -> None:
    op.drop_table("support_tickets")
    op.drop_table("payments")
    op.drop_table("notifications")
    op.drop_index("uq_bookings_active_customer_date", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("users")
