"""create task_letters table

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "task_letters",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("register_number", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("recipient_name", sa.Text(), nullable=False),
        sa.Column("recipient_position", sa.Text(), nullable=False),
        sa.Column("destination_place", sa.Text(), nullable=False),
        sa.Column("purpose", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("transportation", sa.Text(), nullable=False),
        sa.Column("advance_money", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("signatory_name", sa.Text(), nullable=False),
        sa.Column("signatory_position", sa.Text(), nullable=False),
        sa.Column("creation_place", sa.Text(), nullable=False),
        sa.Column("creation_date", sa.Date(), nullable=False),
        sa.Column("arrival_date", sa.Date(), nullable=True),
        sa.Column("return_date", sa.Date(), nullable=True),
        sa.Column("ticket_taken", sa.Boolean(), nullable=True),
        sa.Column("official_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("end_date > start_date", name="chk_task_letters_date_range"),
        sa.CheckConstraint("advance_money >= 0", name="chk_task_letters_advance_money"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("register_number", name="uq_task_letters_register_number"),
    )
    op.create_index("ix_task_letters_created_at", "task_letters", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_task_letters_created_at", table_name="task_letters")
    op.drop_table("task_letters")
