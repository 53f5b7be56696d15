"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:12:31.402117

"""

from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    # Journey plans; the named unique constraint is what conflict detection looks for
    op.create_table(
        "journey_plans",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("journey_plan_number", sa.Integer(), nullable=False),
        sa.Column("departure_date", sa.Date(), nullable=True),
        sa.Column("vehicle_number", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("driver_name", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("from_location", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("from_departure_time", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("to_location", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("to_arrival_time", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("call_journey_manager", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("signature_date", sa.Date(), nullable=True),
        sa.Column("journey_plan_number_hint", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("passengers", JSON_TYPE, nullable=False),
        sa.Column("rest_stops", JSON_TYPE, nullable=False),
        sa.Column("route_snapshot", JSON_TYPE, nullable=False),
        sa.Column("notes", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("journey_plan_number", name="uq_journey_plans_journey_plan_number"),
    )
    op.create_index(
        op.f("ix_journey_plans_journey_plan_number"), "journey_plans", ["journey_plan_number"], unique=False
    )

    # Key/value settings (journey plan counter)
    op.create_table(
        "settings",
        sa.Column("key", sqlmodel.sql.sqltypes.AutoString(length=128), nullable=False),
        sa.Column("value", JSON_TYPE, nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("password_hash", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("full_name", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("must_change_password", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("action", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("journey_plan_number", sa.Integer(), nullable=True),
        sa.Column("details", JSON_TYPE, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_activity_logs_action"), "activity_logs", ["action"], unique=False)
    op.create_index(op.f("ix_activity_logs_created_at"), "activity_logs", ["created_at"], unique=False)

    # Form options
    op.create_table(
        "drivers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("code", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("gsm", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_drivers_name"), "drivers", ["name"], unique=True)

    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("number", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_vehicles_number"), "vehicles", ["number"], unique=True)

    for table in ("locations", "rest_types"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f(f"ix_{table}_name"), table, ["name"], unique=True)


def downgrade() -> None:
    for table in ("rest_types", "locations"):
        op.drop_index(op.f(f"ix_{table}_name"), table_name=table)
        op.drop_table(table)
    op.drop_index(op.f("ix_vehicles_number"), table_name="vehicles")
    op.drop_table("vehicles")
    op.drop_index(op.f("ix_drivers_name"), table_name="drivers")
    op.drop_table("drivers")
    op.drop_index(op.f("ix_activity_logs_created_at"), table_name="activity_logs")
    op.drop_index(op.f("ix_activity_logs_action"), table_name="activity_logs")
    op.drop_table("activity_logs")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
    op.drop_table("settings")
    op.drop_index(op.f("ix_journey_plans_journey_plan_number"), table_name="journey_plans")
    op.drop_table("journey_plans")
