"""Initial schema - users, roles, permissions, sample products, pools, donations.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

LIVE = sa.text("deleted_at IS NULL")


def _timestamps(soft_delete: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    if soft_delete:
        columns.append(sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True))
    return columns


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("resource", sa.String(50), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_permission_name", "permission", ["name"], unique=True, postgresql_where=LIVE)

    op.create_table(
        "role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_role_name", "role", ["name"], unique=True, postgresql_where=LIVE)

    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_id", sa.UUID(), sa.ForeignKey("permission.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(soft_delete=False),
    )
    op.create_index("ix_app_user_email", "app_user", [sa.text("lower(email)")], unique=True)

    op.create_table(
        "user_role",
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "sample_product",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_sample_product_name", "sample_product", ["name"], unique=True, postgresql_where=LIVE)
    op.create_index("ix_sample_product_code", "sample_product", ["code"], unique=True, postgresql_where=LIVE)

    op.create_table(
        "pool",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sample_source", sa.String(255), nullable=False),
        sa.Column("batch_number", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.UUID(), sa.ForeignKey("sample_product.id"), nullable=False),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("app_user.id"), nullable=False),
        sa.Column("pool_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("amount_received", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("total_contributors", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(50), nullable=False, server_default="Created"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint("amount_received >= 0", name="ck_pool_amount_received"),
        sa.CheckConstraint(
            "status IN ('Created', 'Funding', 'Target Reached', 'Sent to Lab', 'Results Ready')",
            name="ck_pool_status",
        ),
    )
    op.create_index(
        "ix_pool_batch_category", "pool", ["batch_number", "category_id"], unique=True, postgresql_where=LIVE
    )
    op.create_index("ix_pool_user_id", "pool", ["user_id"])

    op.create_table(
        "donation",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("pool_id", sa.UUID(), sa.ForeignKey("pool.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Pending"),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("anonymous_donor_name", sa.String(255), nullable=True),
        sa.Column("anonymous_donor_email", sa.String(255), nullable=True),
        sa.Column("anonymous_donor_phone", sa.String(50), nullable=True),
        sa.Column("payment_order_id", sa.String(100), nullable=True),
        sa.Column("payment_id", sa.String(100), nullable=True),
        sa.Column("payment_signature", sa.String(255), nullable=True),
        *_timestamps(soft_delete=False),
        sa.CheckConstraint("amount > 0", name="ck_donation_amount"),
        sa.CheckConstraint("status IN ('Pending', 'Success', 'Failed')", name="ck_donation_status"),
    )
    op.create_index("ix_donation_payment_order_id", "donation", ["payment_order_id"], unique=True)
    op.create_index("ix_donation_pool_status", "donation", ["pool_id", "status"])
    op.create_index("ix_donation_user_id", "donation", ["user_id"])


def downgrade() -> None:
    op.drop_table("donation")
    op.drop_table("pool")
    op.drop_table("sample_product")
    op.drop_table("user_role")
    op.drop_table("app_user")
    op.drop_table("role_permission")
    op.drop_table("role")
    op.drop_table("permission")
