"""create accounts, events, registrations, settings and officer logs

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1a2b3c4d5e6f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


account_role = sa.Enum("member", "officer", name="account_role")
account_gender = sa.Enum("Male", "Female", "Other", name="account_gender")
event_type = sa.Enum("onsite", "online", "hybrid", name="event_type")
event_status = sa.Enum("upcoming", "canceled", "completed", name="event_status")
event_restriction = sa.Enum("public", "members", "officers", name="event_restriction")
attendance_status = sa.Enum("registered", "attended", "absent", name="attendance_status")
officer_action = sa.Enum(
    "CREATE_EVENT", "UPDATE_EVENT", "DELETE_EVENT", "SET_ATTENDANCE",
    "TOGGLE_ACTIVE", "CREATE_OFFICER", "SET_SCHOOL_YEAR",
    name="officer_action",
)


def upgrade():
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("middle_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("name_suffix", sa.String(20), nullable=True),
        sa.Column("birthdate", sa.Date(), nullable=True),
        sa.Column("gender", account_gender, nullable=True),
        sa.Column("student_no", sa.String(30), nullable=True),
        sa.Column("year_level", sa.String(20), nullable=True),
        sa.Column("college", sa.String(150), nullable=True),
        sa.Column("program", sa.String(150), nullable=True),
        sa.Column("section", sa.String(50), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("facebook_link", sa.String(255), nullable=True),
        sa.Column("profile_image_path", sa.String(255), nullable=True),
        sa.Column("role", account_role, nullable=False, server_default="member"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("membership_id", sa.String(30), nullable=True),
        sa.Column("refresh_token_version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"], unique=True)
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)
    op.create_index("ix_accounts_membership_id", "accounts", ["membership_id"], unique=True)
    op.create_index("ix_accounts_role", "accounts", ["role"])

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_name", sa.String(200), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("event_time_start", sa.Time(), nullable=False),
        sa.Column("event_time_end", sa.Time(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("event_type", event_type, nullable=False, server_default="onsite"),
        sa.Column("event_status", event_status, nullable=False, server_default="upcoming"),
        sa.Column("event_restriction", event_restriction, nullable=False, server_default="public"),
        sa.Column("registration_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_events_event_date", "events", ["event_date"])

    op.create_table(
        "event_registrations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("attendance_status", attendance_status, nullable=False, server_default="registered"),
        sa.Column("registered_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("event_id", "account_id", name="uq_event_registrations_event_account"),
    )
    op.create_index("ix_event_registrations_account_id", "event_registrations", ["account_id"])

    op.create_table(
        "settings",
        sa.Column("key_name", sa.String(100), primary_key=True),
        sa.Column("value", sa.String(255), nullable=False),
    )

    op.create_table(
        "membership_sequences",
        sa.Column("role", sa.String(20), primary_key=True),
        sa.Column("scope", sa.String(10), primary_key=True),
        sa.Column("last_value", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "officer_action_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("actor_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("target_account_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=True),
        sa.Column("target_event_id", sa.Integer(), nullable=True),
        sa.Column("action", officer_action, nullable=False),
        sa.Column("detail", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table("officer_action_logs")
    op.drop_table("membership_sequences")
    op.drop_table("settings")
    op.drop_index("ix_event_registrations_account_id", table_name="event_registrations")
    op.drop_table("event_registrations")
    op.drop_index("ix_events_event_date", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_accounts_role", table_name="accounts")
    op.drop_index("ix_accounts_membership_id", table_name="accounts")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")

    bind = op.get_bind()
    for enum in (officer_action, attendance_status, event_restriction, event_status, event_type, account_gender, account_role):
        enum.drop(bind, checkfirst=True)
