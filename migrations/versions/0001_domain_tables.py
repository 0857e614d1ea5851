"""Tracker domain tables: products, catalogue, activities, stock movements, monthly costs"""

from alembic import op
import sqlalchemy as sa

revision = '0001_domain_tables'
down_revision = None
branch_labels = None
depends_on = None

PRODUCT_TYPES = (
    'SAC_BANANE',
    'POCHETTE_ORDINATEUR',
    'TROUSSE_TOILETTE',
    'POCHETTE_VOLANTS',
    'TROUSSE_ZIPPEE',
    'ACCESSOIRES_DIVERS',
)
ACTIVITY_TYPES = ('CREATION', 'SALE', 'STOCK_CORRECTION', 'OTHER')
MOVEMENT_SOURCES = ('CREATION', 'SALE', 'INVENTORY_ADJUSTMENT')


def _in(column, values):
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def upgrade():
    op.create_table(
        'product_models',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('type', sa.Text, nullable=False),
        sa.Column('name', sa.Text, nullable=False),
        sa.UniqueConstraint('type', 'name', name='uq_product_models_type_name'),
        sa.CheckConstraint(_in('type', PRODUCT_TYPES), name='ck_product_models_type'),
    )

    op.create_table(
        'product_coloris',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('model_id', sa.String(36), sa.ForeignKey('product_models.id', ondelete='CASCADE'), nullable=False),
        sa.Column('coloris', sa.Text, nullable=False),
        sa.UniqueConstraint('model_id', 'coloris', name='uq_product_coloris_model_coloris'),
    )
    op.create_index('idx_product_coloris_model_id', 'product_coloris', ['model_id'])

    op.create_table(
        'products',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.Text),
        sa.Column('type', sa.Text),
        sa.Column('coloris', sa.Text),
        sa.Column('model_id', sa.String(36), sa.ForeignKey('product_models.id')),
        sa.Column('coloris_id', sa.String(36), sa.ForeignKey('product_coloris.id')),
        sa.Column('unit_cost', sa.Numeric(10, 2), nullable=False),
        sa.Column('sale_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('stock', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('weight', sa.Numeric(10, 2)),
        sa.Column('created_at', sa.DateTime, server_default=sa.text('now()')),
        sa.CheckConstraint('unit_cost > 0', name='ck_products_unit_cost'),
        sa.CheckConstraint('sale_price > 0', name='ck_products_sale_price'),
        sa.CheckConstraint('stock >= 0', name='ck_products_stock'),
    )

    op.create_table(
        'activities',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('product_id', sa.String(36), sa.ForeignKey('products.id', ondelete='SET NULL')),
        sa.Column('type', sa.Text, nullable=False),
        sa.Column('date', sa.Text, nullable=False),
        sa.Column('quantity', sa.Numeric(10, 2), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('note', sa.Text),
        sa.CheckConstraint(_in('type', ACTIVITY_TYPES), name='ck_activities_type'),
    )
    op.create_index('idx_activities_date', 'activities', ['date'])
    op.create_index('idx_activities_product_id', 'activities', ['product_id'])

    op.create_table(
        'stock_movements',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('product_id', sa.String(36), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Numeric(10, 2), nullable=False),
        sa.Column('source', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime, server_default=sa.text('now()')),
        sa.CheckConstraint(_in('source', MOVEMENT_SOURCES), name='ck_stock_movements_source'),
    )
    op.create_index('idx_stock_movements_product_id', 'stock_movements', ['product_id'])

    op.create_table(
        'monthly_costs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('month', sa.Text, nullable=False, unique=True),
        sa.Column('shipping_cost', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('marketing_cost', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('overhead_cost', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.CheckConstraint('shipping_cost >= 0', name='ck_monthly_costs_shipping'),
        sa.CheckConstraint('marketing_cost >= 0', name='ck_monthly_costs_marketing'),
        sa.CheckConstraint('overhead_cost >= 0', name='ck_monthly_costs_overhead'),
        sa.CheckConstraint("month ~ '^[0-9]{4}-[0-9]{2}$'", name='ck_monthly_costs_month'),
    )


def downgrade():
    op.drop_table('monthly_costs')
    op.drop_index('idx_stock_movements_product_id', table_name='stock_movements')
    op.drop_table('stock_movements')
    op.drop_index('idx_activities_product_id', table_name='activities')
    op.drop_index('idx_activities_date', table_name='activities')
    op.drop_table('activities')
    op.drop_table('products')
    op.drop_index('idx_product_coloris_model_id', table_name='product_coloris')
    op.drop_table('product_coloris')
    op.drop_table('product_models')
