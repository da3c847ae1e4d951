"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

requisite_type = sa.Enum("Card", "Yoomoney", "Phone", "Crypto", name="requisitetype")
partner_bonus_status = sa.Enum("NONE", "PENDING", "COMPLETED", name="partnerbonusstatus")
request_status = sa.Enum("PENDING", "APPROVED", "REJECTED", "IN_PROGRESS", name="requeststatus")
payment_status = sa.Enum("PENDING", "COMPLETED", name="paymentstatus")


def timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "partners",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("requisites", sa.String(length=500), nullable=False),
        sa.Column("requisite_type", requisite_type, nullable=False),
        sa.Column("bonus_status", partner_bonus_status, nullable=False),
        *timestamps(),
    )
    op.create_index("ix_partners_username", "partners", ["username"], unique=True)
    op.create_index("ix_partners_code", "partners", ["code"], unique=True)
    op.create_index("ix_partners_created_at", "partners", ["created_at"])

    op.create_table(
        "requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("telegram", sa.String(length=50), nullable=True),
        sa.Column("partner_code", sa.String(length=50), nullable=True),
        sa.Column("source", sa.String(length=100), nullable=False),
        sa.Column("status", request_status, nullable=False),
        *timestamps(),
    )
    op.create_index("ix_requests_partner_code", "requests", ["partner_code"])
    op.create_index("ix_requests_created_at", "requests", ["created_at"])

    op.create_table(
        "promo_codes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("discount_percent", sa.Integer(), nullable=True),
        sa.Column("discount_amount", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("usage_limit", sa.Integer(), nullable=True),
        sa.Column("usage_count", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        *timestamps(),
    )
    op.create_index("ix_promo_codes_code", "promo_codes", ["code"], unique=True)
    op.create_index("ix_promo_codes_created_at", "promo_codes", ["created_at"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("source", sa.String(length=100), nullable=False),
        sa.Column("product", sa.String(length=100), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column(
            "promo_code_id",
            sa.Integer(),
            sa.ForeignKey("promo_codes.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("status", payment_status, nullable=False),
        *timestamps(),
    )
    op.create_index("ix_payments_email", "payments", ["email"])
    op.create_index("ix_payments_created_at", "payments", ["created_at"])

    op.create_table(
        "visitors",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("traffic_source", sa.String(length=200), nullable=False),
        sa.Column("utm_tags", sa.String(length=500), nullable=True),
        sa.Column("country", sa.String(length=100), nullable=False),
        sa.Column("device", sa.String(length=50), nullable=False),
        sa.Column("browser", sa.String(length=100), nullable=False),
        sa.Column("pages_viewed", sa.Integer(), nullable=False),
        sa.Column("time_on_site", sa.String(length=20), nullable=False),
        sa.Column("cookie_file", sa.String(length=200), nullable=False),
        *timestamps(),
    )
    op.create_index("ix_visitors_created_at", "visitors", ["created_at"])

    op.create_table(
        "buttons",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("url", sa.String(length=500), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("click_count", sa.Integer(), nullable=False),
        *timestamps(),
    )
    op.create_index("ix_buttons_name", "buttons", ["name"])
    op.create_index("ix_buttons_created_at", "buttons", ["created_at"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("end", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("buttons")
    op.drop_table("visitors")
    op.drop_table("payments")
    op.drop_table("promo_codes")
    op.drop_table("requests")
    op.drop_table("partners")

    bind = op.get_bind()
    for enum in (payment_status, request_status, partner_bonus_status, requisite_type):
        enum.drop(bind, checkfirst=True)
