"""initial schema and access code seed

Revision ID: 20261017_initial
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

import uuid
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from guestgate.core.config import get_settings

# revision identifiers, used by Alembic.
revision: str = "20261017_initial"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables and seed one access code per role."""
    op.create_table(
        "identities",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Identity ID (UUID)"),
        sa.Column("email", sa.String(length=255), nullable=False, comment="Login email address"),
        sa.Column("password_hash", sa.String(length=255), nullable=False, comment="Hashed password (argon2)"),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("last_login", sa.DateTime(), nullable=True, comment="Timestamp of last successful login"),
        sa.Column("role_revoked_at", sa.DateTime(), nullable=True, comment="Set once a role is revoked; blocks further code redemption"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_identities_email", "identities", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["identities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False, comment="Identity holding the role"),
        sa.Column("role", sa.String(length=20), nullable=False, comment="Role name (admin, staff, reception)"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["identities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        # At most one role per user
        sa.UniqueConstraint("user_id", name="uq_user_roles_user_id"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"], unique=False)

    access_codes = op.create_table(
        "access_codes",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, comment="Role granted by the code"),
        sa.Column("code", sa.String(length=255), nullable=False, comment="Registration secret"),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_by", sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(["updated_by"], ["identities.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("role"),
    )
    op.create_index("ix_access_codes_code", "access_codes", ["code"], unique=True)

    op.create_table(
        "events",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("date", sa.String(length=50), nullable=True),
        sa.Column("wifi_ssid", sa.String(length=255), nullable=True),
        sa.Column("wifi_pass", sa.String(length=255), nullable=True),
        sa.Column("wifi_img_url", sa.String(length=1024), nullable=True),
        sa.Column("photo_url", sa.String(length=1024), nullable=True),
        sa.Column("photo_img_url", sa.String(length=1024), nullable=True),
        sa.Column("event_logo_url", sa.String(length=1024), nullable=True),
        sa.Column("primary_color", sa.String(length=20), nullable=False),
        sa.Column("secondary_color", sa.String(length=20), nullable=True),
        sa.Column("tertiary_color", sa.String(length=20), nullable=True),
        sa.Column("event_logo_size", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False, comment="Identity that created the event"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["identities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_events_user_id", "events", ["user_id"], unique=False)

    op.create_table(
        "guests",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("event_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=255), nullable=True, comment="Job title of the guest, unrelated to access roles"),
        sa.Column("checked_in", sa.Boolean(), nullable=False),
        sa.Column("checkin_time", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_guests_event_id", "guests", ["event_id"], unique=False)

    op.create_table(
        "event_staff",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("event_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=255), nullable=True, comment="Function at the event, unrelated to access roles"),
        sa.Column("checked_in", sa.Boolean(), nullable=False),
        sa.Column("checkin_time", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_event_staff_event_id", "event_staff", ["event_id"], unique=False)

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("event_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=True),
        sa.Column("user_email", sa.String(length=255), nullable=True),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["identities.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_logs_event_id", "activity_logs", ["event_id"], unique=False)
    op.create_index("ix_activity_logs_created_at", "activity_logs", ["created_at"], unique=False)

    op.bulk_insert(
        access_codes,
        [
            {"id": str(uuid.uuid4()), "role": role, "code": code}
            for role, code in get_settings().default_access_codes.items()
        ],
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_activity_logs_created_at", table_name="activity_logs")
    op.drop_index("ix_activity_logs_event_id", table_name="activity_logs")
    op.drop_table("activity_logs")
    op.drop_index("ix_event_staff_event_id", table_name="event_staff")
    op.drop_table("event_staff")
    op.drop_index("ix_guests_event_id", table_name="guests")
    op.drop_table("guests")
    op.drop_index("ix_events_user_id", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_access_codes_code", table_name="access_codes")
    op.drop_table("access_codes")
    op.drop_index("ix_user_roles_user_id", table_name="user_roles")
    op.drop_table("user_roles")
    op.drop_index("ix_profiles_user_id", table_name="profiles")
    op.drop_table("profiles")
    op.drop_index("ix_identities_email", table_name="identities")
    op.drop_table("identities")
