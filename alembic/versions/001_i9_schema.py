"""Create employees and i9_forms tables

Revision ID: 001_i9_schema
Revises:
Create Date: 2026-10-17

Mirrors the DDL applied by db.Store.init_db so managed deployments and
local startup agree on the schema.
"""

from alembic import op
import sqlalchemy as sa

revision = "001_i9_schema"
down_revision = None
branch_labels = None
depends_on = None

_FORM_STATUSES = "'in_progress', 'completed', 'needs_correction', 'data_approved', 'verified'"


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("phone", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("phone", name="uq_employees_phone"),
    )
    op.create_table(
        "i9_forms",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("employee_id", sa.Text(), nullable=False),
        sa.Column("last_name", sa.String(100), server_default="", nullable=False),
        sa.Column("first_name", sa.String(100), server_default="", nullable=False),
        sa.Column("middle_initial", sa.String(10), nullable=True),
        sa.Column("other_last_names", sa.String(255), nullable=True),
        sa.Column("address", sa.String(255), server_default="", nullable=False),
        sa.Column("apt_number", sa.String(20), nullable=True),
        sa.Column("city", sa.String(100), server_default="", nullable=False),
        sa.Column("state", sa.String(2), server_default="CA", nullable=False),
        sa.Column("zip_code", sa.String(10), server_default="00000", nullable=False),
        sa.Column("date_of_birth", sa.Text(), server_default="1990-01-01", nullable=False),
        sa.Column("ssn", sa.Text(), nullable=True),
        sa.Column("email", sa.String(255), server_default="", nullable=False),
        sa.Column("phone", sa.Text(), server_default="", nullable=False),
        sa.Column("citizenship_status", sa.Text(), server_default="us_citizen", nullable=False),
        sa.Column("uscis_a_number", sa.String(50), nullable=True),
        sa.Column("alien_expiration_date", sa.Text(), nullable=True),
        sa.Column("form_i94_number", sa.String(50), nullable=True),
        sa.Column("foreign_passport_number", sa.String(50), nullable=True),
        sa.Column("country_of_issuance", sa.String(100), nullable=True),
        sa.Column("status", sa.Text(), server_default="in_progress", nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("employer_notes", sa.Text(), nullable=True),
        sa.Column("employer_reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("employer_reviewed_by", sa.Text(), nullable=True),
        sa.Column("employee_signature_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("employee_signature_method", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.CheckConstraint(f"status IN ({_FORM_STATUSES})", name="ck_i9_forms_status"),
    )
    op.create_index("ix_i9_forms_employee_id", "i9_forms", ["employee_id"])
    op.create_index("ix_i9_forms_status", "i9_forms", ["status"])


def downgrade() -> None:
    op.drop_index("ix_i9_forms_status", table_name="i9_forms")
    op.drop_index("ix_i9_forms_employee_id", table_name="i9_forms")
    op.drop_table("i9_forms")
    op.drop_table("employees")
