"""Table definitions of the tracker (SQLAlchemy Core).

The Alembic revision in ``migrations/versions`` mirrors these tables for
PostgreSQL deployments; ``ensure_domain_tables`` is used by tests and local
SQLite setups.
"""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncEngine

from core.repositories.activities import ActivityType
from core.repositories.products import ProductType
from core.repositories.stock_movements import StockMovementSource

metadata = sa.MetaData()


def _in_enum(table: str, column: str, enum_cls) -> sa.CheckConstraint:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return sa.CheckConstraint(f"{column} IN ({values})", name=f"ck_{table}_{column}")


products = sa.Table(
    "products",
    metadata,
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("name", sa.Text),
    sa.Column("type", sa.Text),
    sa.Column("coloris", sa.Text),
    sa.Column("model_id", sa.String(36), sa.ForeignKey("product_models.id")),
    sa.Column("coloris_id", sa.String(36), sa.ForeignKey("product_coloris.id")),
    sa.Column("unit_cost", sa.Numeric(10, 2), nullable=False),
    sa.Column("sale_price", sa.Numeric(10, 2), nullable=False),
    sa.Column("stock", sa.Numeric(10, 2), nullable=False, server_default="0"),
    sa.Column("weight", sa.Numeric(10, 2)),
    sa.Column("created_at", sa.DateTime, server_default=sa.func.current_timestamp()),
    sa.CheckConstraint("unit_cost > 0", name="ck_products_unit_cost"),
    sa.CheckConstraint("sale_price > 0", name="ck_products_sale_price"),
    sa.CheckConstraint("stock >= 0", name="ck_products_stock"),
)

product_models = sa.Table(
    "product_models",
    metadata,
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("type", sa.Text, nullable=False),
    sa.Column("name", sa.Text, nullable=False),
    sa.UniqueConstraint("type", "name", name="uq_product_models_type_name"),
    _in_enum("product_models", "type", ProductType),
)

product_coloris = sa.Table(
    "product_coloris",
    metadata,
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column(
        "model_id",
        sa.String(36),
        sa.ForeignKey("product_models.id", ondelete="CASCADE"),
        nullable=False,
    ),
    sa.Column("coloris", sa.Text, nullable=False),
    sa.UniqueConstraint("model_id", "coloris", name="uq_product_coloris_model_coloris"),
)

activities = sa.Table(
    "activities",
    metadata,
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("product_id", sa.String(36), sa.ForeignKey("products.id", ondelete="SET NULL")),
    sa.Column("type", sa.Text, nullable=False),
    sa.Column("date", sa.Text, nullable=False),
    sa.Column("quantity", sa.Numeric(10, 2), nullable=False),
    sa.Column("amount", sa.Numeric(10, 2), nullable=False),
    sa.Column("note", sa.Text),
    _in_enum("activities", "type", ActivityType),
)

stock_movements = sa.Table(
    "stock_movements",
    metadata,
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column(
        "product_id",
        sa.String(36),
        sa.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    ),
    sa.Column("quantity", sa.Numeric(10, 2), nullable=False),
    sa.Column("source", sa.Text, nullable=False),
    sa.Column("created_at", sa.DateTime, server_default=sa.func.current_timestamp()),
    _in_enum("stock_movements", "source", StockMovementSource),
)

monthly_costs = sa.Table(
    "monthly_costs",
    metadata,
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("month", sa.Text, nullable=False, unique=True),
    sa.Column("shipping_cost", sa.Numeric(10, 2), nullable=False, server_default="0"),
    sa.Column("marketing_cost", sa.Numeric(10, 2), nullable=False, server_default="0"),
    sa.Column("overhead_cost", sa.Numeric(10, 2), nullable=False, server_default="0"),
    sa.CheckConstraint("shipping_cost >= 0", name="ck_monthly_costs_shipping"),
    sa.CheckConstraint("marketing_cost >= 0", name="ck_monthly_costs_marketing"),
    sa.CheckConstraint("overhead_cost >= 0", name="ck_monthly_costs_overhead"),
)

sa.Index("idx_activities_date", activities.c.date)
sa.Index("idx_activities_product_id", activities.c.product_id)
sa.Index("idx_stock_movements_product_id", stock_movements.c.product_id)
sa.Index("idx_product_coloris_model_id", product_coloris.c.model_id)


async def ensure_domain_tables(engine: AsyncEngine) -> None:
    """Create the tracker tables when they do not exist yet."""

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


__all__ = [
    "metadata",
    "products",
    "product_models",
    "product_coloris",
    "activities",
    "stock_movements",
    "monthly_costs",
    "ensure_domain_tables",
]
