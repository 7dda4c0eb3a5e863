"""initial_schema

Revision ID: 5c1e9f0a7b21
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e9f0a7b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="user"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_profiles_email", "profiles", ["email"], unique=True)

    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("code", sa.String(50), nullable=False, unique=True),
        sa.Column("guest_name", sa.String(255), nullable=False),
        sa.Column("room_number", sa.String(20), nullable=False),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bookings_status", "bookings", ["status"])
    op.create_index("ix_bookings_check_in_date", "bookings", ["check_in_date"])

    # Identity columns keep their historical camelCase names.
    op.create_table(
        "guests",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("booking_id", sa.Uuid(), sa.ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True),
        sa.Column("booking_code", sa.String(50), nullable=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_main_guest", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("firstName", sa.String(100), nullable=False),
        sa.Column("lastName", sa.String(100), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("documentType", sa.String(50), nullable=False),
        sa.Column("documentNumber", sa.String(50), nullable=False),
        sa.Column("stayDuration", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('"stayDuration" >= 1', name="ck_guests_stay_duration_positive"),
        sa.CheckConstraint("status IN ('draft', 'submitted')", name="ck_guests_status"),
    )
    op.create_index("ix_guests_booking_id", "guests", ["booking_id"])
    op.create_index("ix_guests_booking_code", "guests", ["booking_code"])
    op.create_index("ix_guests_user_id", "guests", ["user_id"])
    op.create_index("ix_guests_status", "guests", ["status"])


def downgrade() -> None:
    op.drop_table("guests")
    op.drop_table("bookings")
    op.drop_index("ix_profiles_email", table_name="profiles")
    op.drop_table("profiles")
