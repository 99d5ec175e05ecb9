"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:12:31.204518

"""

from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("password_hash", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    # Create edi_orders table (ULID as UUID)
    op.create_table(
        "edi_orders",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("order_number", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("product_code", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("product_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("product_spec", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("order_quantity", sa.Integer(), nullable=False),
        sa.Column("delivery_date", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("status_updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("uploaded_by", sa.Integer(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_edi_orders_order_number"), "edi_orders", ["order_number"], unique=True)
    op.create_index(op.f("ix_edi_orders_product_code"), "edi_orders", ["product_code"], unique=False)
    op.create_index(op.f("ix_edi_orders_delivery_date"), "edi_orders", ["delivery_date"], unique=False)
    op.create_index(op.f("ix_edi_orders_status"), "edi_orders", ["status"], unique=False)
    op.create_index(op.f("ix_edi_orders_uploaded_at"), "edi_orders", ["uploaded_at"], unique=False)

    # Create forecasts table
    op.create_table(
        "forecasts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("drawing_number", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("month_date", sa.Date(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("updated_by", sa.Integer(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["updated_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("drawing_number", "month_date", name="uq_forecasts_drawing_month"),
    )
    op.create_index(op.f("ix_forecasts_drawing_number"), "forecasts", ["drawing_number"], unique=False)
    op.create_index(op.f("ix_forecasts_month_date"), "forecasts", ["month_date"], unique=False)
    op.create_index(op.f("ix_forecasts_updated_at"), "forecasts", ["updated_at"], unique=False)

    # Create activity_logs table
    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("session_id", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("action", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("ip_address", sqlmodel.sql.sqltypes.AutoString(length=45), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_activity_logs_session_id"), "activity_logs", ["session_id"], unique=False)
    op.create_index(op.f("ix_activity_logs_action"), "activity_logs", ["action"], unique=False)
    op.create_index(op.f("ix_activity_logs_timestamp"), "activity_logs", ["timestamp"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_activity_logs_timestamp"), table_name="activity_logs")
    op.drop_index(op.f("ix_activity_logs_action"), table_name="activity_logs")
    op.drop_index(op.f("ix_activity_logs_session_id"), table_name="activity_logs")
    op.drop_table("activity_logs")

    op.drop_index(op.f("ix_forecasts_updated_at"), table_name="forecasts")
    op.drop_index(op.f("ix_forecasts_month_date"), table_name="forecasts")
    op.drop_index(op.f("ix_forecasts_drawing_number"), table_name="forecasts")
    op.drop_table("forecasts")

    op.drop_index(op.f("ix_edi_orders_uploaded_at"), table_name="edi_orders")
    op.drop_index(op.f("ix_edi_orders_status"), table_name="edi_orders")
    op.drop_index(op.f("ix_edi_orders_delivery_date"), table_name="edi_orders")
    op.drop_index(op.f("ix_edi_orders_product_code"), table_name="edi_orders")
    op.drop_index(op.f("ix_edi_orders_order_number"), table_name="edi_orders")
    op.drop_table("edi_orders")

    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
