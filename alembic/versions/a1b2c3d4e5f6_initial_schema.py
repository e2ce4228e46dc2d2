"""initial_schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, vehicles, maintenance_records and fuel_logs."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("passwordHash", sa.String(length=255), nullable=False),
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "vehicles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("ownerId", sa.Uuid(), nullable=False),
        sa.Column("registrationNumber", sa.String(length=32), nullable=False),
        sa.Column("make", sa.String(length=100), nullable=False),
        sa.Column("model", sa.String(length=100), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("color", sa.String(length=50), nullable=False),
        sa.Column("fuelType", sa.String(length=50), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=False),
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updatedAt", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["ownerId"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_vehicles_ownerId", "vehicles", ["ownerId"])
    op.create_index("ix_vehicles_registrationNumber", "vehicles", ["registrationNumber"], unique=True)

    op.create_table(
        "maintenance_records",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("vehicleId", sa.Uuid(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("dueDate", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=True),
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updatedAt", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["vehicleId"], ["vehicles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_maintenance_records_vehicleId", "maintenance_records", ["vehicleId"])
    op.create_index("ix_maintenance_records_dueDate", "maintenance_records", ["dueDate"])

    op.create_table(
        "fuel_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("vehicleId", sa.Uuid(), nullable=True),
        sa.Column("litres", sa.Numeric(10, 2), nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("odometer", sa.Integer(), nullable=True),
        sa.Column("date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["vehicleId"], ["vehicles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_fuel_logs_vehicleId", "fuel_logs", ["vehicleId"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("fuel_logs", if_exists=True)
    op.drop_table("maintenance_records", if_exists=True)
    op.drop_table("vehicles", if_exists=True)
    op.drop_table("users", if_exists=True)
