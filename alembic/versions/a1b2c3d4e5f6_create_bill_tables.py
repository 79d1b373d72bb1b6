"""create bills, bill_items, people and item_splits

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None

MONEY = sa.Numeric(24, 10)
RATE = sa.Numeric(7, 4)


def upgrade() -> None:
    op.create_table(
        "bills",
        sa.Column("place_name", sa.String(255), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("discount_percentage", RATE, nullable=False),
        sa.Column("service_charge_percentage", RATE, nullable=False),
        sa.Column("tax_percentage", RATE, nullable=False),
        sa.Column("currency_code", sa.String(3), nullable=False),
        sa.Column("pay_to_name", sa.String(255), nullable=False),
        sa.Column("pay_to_method", sa.String(255), nullable=False),
        sa.Column("pay_to_details", sa.String(255), nullable=False),
        sa.Column("is_archived", sa.Boolean(), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_bills_id"), "bills", ["id"], unique=False)
    op.create_index(op.f("ix_bills_date"), "bills", ["date"], unique=False)
    op.create_index(op.f("ix_bills_is_archived"), "bills", ["is_archived"], unique=False)

    op.create_table(
        "bill_items",
        sa.Column("bill_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["bill_id"], ["bills.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_bill_items_id"), "bill_items", ["id"], unique=False)
    op.create_index(op.f("ix_bill_items_bill_id"), "bill_items", ["bill_id"], unique=False)

    op.create_table(
        "people",
        sa.Column("bill_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=False),
        sa.Column("payment_method", sa.String(255), nullable=False),
        sa.Column("payment_details", sa.String(255), nullable=False),
        sa.Column("is_contact", sa.Boolean(), nullable=False),
        sa.Column("has_paid", sa.Boolean(), nullable=False),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        sa.Column("payment_method_used", sa.String(255), nullable=True),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["bill_id"], ["bills.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_people_id"), "people", ["id"], unique=False)
    op.create_index(op.f("ix_people_bill_id"), "people", ["bill_id"], unique=False)
    op.create_index(op.f("ix_people_is_contact"), "people", ["is_contact"], unique=False)

    op.create_table(
        "item_splits",
        sa.Column("item_id", sa.Uuid(), nullable=False),
        sa.Column("person_id", sa.Uuid(), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("percentage", MONEY, nullable=False),
        sa.Column("is_manual_amount", sa.Boolean(), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["item_id"], ["bill_items.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["person_id"], ["people.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_item_splits_id"), "item_splits", ["id"], unique=False)
    op.create_index(op.f("ix_item_splits_item_id"), "item_splits", ["item_id"], unique=False)
    op.create_index(op.f("ix_item_splits_person_id"), "item_splits", ["person_id"], unique=False)


def downgrade() -> None:
    op.drop_table("item_splits")
    op.drop_table("people")
    op.drop_table("bill_items")
    op.drop_table("bills")
