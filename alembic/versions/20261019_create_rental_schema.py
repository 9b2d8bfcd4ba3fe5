"""create_rental_schema

Revision ID: 001_rental_schema
Revises:
Create Date: 2026-10-19

Creates users, sessions, addresses, delivery zones, products with their
day and quantity price tiers, and orders with items and status history.

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_rental_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('phone_number', sa.String(20), nullable=False, unique=True),
        sa.Column('name', sa.String(100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        'sessions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('session_token', sa.String(255), nullable=False, unique=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('expires', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('idx_sessions_user', 'sessions', ['user_id'])

    op.create_table(
        'addresses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(100), nullable=True),
        sa.Column('full_address', sa.String(500), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('district', sa.String(100), nullable=True),
        sa.Column('street', sa.String(255), nullable=True),
        sa.Column('building', sa.String(50), nullable=True),
        sa.Column('apartment', sa.String(50), nullable=True),
        sa.Column('entrance', sa.String(50), nullable=True),
        sa.Column('floor', sa.String(50), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('idx_addresses_user', 'addresses', ['user_id'])

    op.create_table(
        'delivery_zones',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('photos', sa.JSON(), nullable=False),
        sa.Column('daily_price', sa.Integer(), nullable=False),
        sa.Column('total_stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint('total_stock >= 0', name='chk_product_stock_non_negative'),
        sa.CheckConstraint('daily_price >= 0', name='chk_product_daily_price_non_negative'),
    )
    op.create_index('idx_products_active', 'products', ['is_active'])

    op.create_table(
        'pricing_tiers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('product_id', sa.Uuid(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('days', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.Integer(), nullable=False),
        sa.UniqueConstraint('product_id', 'days', name='uq_pricing_tier_product_days'),
        sa.CheckConstraint('days > 0', name='chk_pricing_tier_days'),
    )

    op.create_table(
        'quantity_pricing',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('product_id', sa.Uuid(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.Integer(), nullable=False),
        sa.UniqueConstraint('product_id', 'quantity', name='uq_quantity_pricing_product_quantity'),
        sa.CheckConstraint('quantity > 0', name='chk_quantity_pricing_quantity'),
    )

    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), primary_key=True),
        # Unique so a duplicated daily sequence fails the insert
        sa.Column('order_number', sa.String(20), nullable=False, unique=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('delivery_type', sa.String(20), nullable=False),
        sa.Column('delivery_address_id', sa.Uuid(), sa.ForeignKey('addresses.id'), nullable=True),
        sa.Column('delivery_fee', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('subtotal', sa.BigInteger(), nullable=False),
        sa.Column('total_amount', sa.BigInteger(), nullable=False),
        sa.Column('total_savings', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('rental_start_date', sa.Date(), nullable=False),
        sa.Column('rental_end_date', sa.Date(), nullable=False),
        sa.Column('payment_method', sa.String(20), nullable=False),
        sa.Column('payment_status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('rental_end_date > rental_start_date', name='chk_order_rental_period'),
    )
    op.create_index('idx_orders_user_created', 'orders', ['user_id', 'created_at'])
    # Reservation overlap lookups filter on status and both period bounds
    op.create_index(
        'idx_orders_status_period', 'orders', ['status', 'rental_start_date', 'rental_end_date']
    )

    op.create_table(
        'order_items',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Uuid(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('product_name', sa.String(255), nullable=False),
        sa.Column('product_photo', sa.String(500), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('daily_price', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.BigInteger(), nullable=False),
        sa.Column('savings', sa.BigInteger(), nullable=False, server_default='0'),
        sa.CheckConstraint('quantity > 0', name='chk_order_item_quantity_positive'),
    )
    op.create_index('idx_order_items_product', 'order_items', ['product_id'])

    op.create_table(
        'order_status_history',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('order_status_history')
    op.drop_index('idx_order_items_product', table_name='order_items')
    op.drop_table('order_items')
    op.drop_index('idx_orders_status_period', table_name='orders')
    op.drop_index('idx_orders_user_created', table_name='orders')
    op.drop_table('orders')
    op.drop_table('quantity_pricing')
    op.drop_table('pricing_tiers')
    op.drop_index('idx_products_active', table_name='products')
    op.drop_table('products')
    op.drop_table('delivery_zones')
    op.drop_index('idx_addresses_user', table_name='addresses')
    op.drop_table('addresses')
    op.drop_index('idx_sessions_user', table_name='sessions')
    op.drop_table('sessions')
    op.drop_table('users')
