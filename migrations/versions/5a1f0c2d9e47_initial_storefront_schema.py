"""initial storefront schema

Revision ID: 5a1f0c2d9e47
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5a1f0c2d9e47'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100)),
        sa.Column('last_name', sa.String(100)),
        sa.Column('phone', sa.String(30)),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'user_sessions',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(512), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_user_sessions_user_id', 'user_sessions', ['user_id'])

    op.create_table(
        'categories',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('description', sa.Text()),
        sa.Column('display_order', sa.Integer(), server_default='0'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('brand', sa.String(100)),
        sa.Column('description', sa.Text()),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('original_price', sa.Numeric(10, 2)),
        sa.Column('image', sa.String(500)),
        sa.Column('category', sa.String(100)),
        sa.Column('rating', sa.Numeric(3, 2)),
        sa.Column('reviews', sa.Integer(), server_default='0'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_products_category', 'products', ['category'])

    op.create_table(
        'cart_items',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.BigInteger(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'product_id', name='uq_cart_items_user_product'),
    )
    op.create_index('ix_cart_items_user_id', 'cart_items', ['user_id'])

    op.create_table(
        'user_addresses',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='shipping'),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(30), nullable=False),
        sa.Column('address', sa.String(255), nullable=False),
        sa.Column('additional_info', sa.String(255)),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('county', sa.String(100)),
        sa.Column('region', sa.String(100)),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_user_addresses_user_type_default', 'user_addresses', ['user_id', 'type', 'is_default'])

    op.create_table(
        'orders',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_number', sa.String(40), unique=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2)),
        sa.Column('payment_intent_id', sa.String(255), unique=True),
        sa.Column('shipping_address', sa.JSON()),
        sa.Column('shipping_first_name', sa.String(100)),
        sa.Column('shipping_last_name', sa.String(100)),
        sa.Column('shipping_phone', sa.String(30)),
        sa.Column('shipping_address_line_1', sa.String(255)),
        sa.Column('shipping_address_line_2', sa.String(255)),
        sa.Column('shipping_city', sa.String(100)),
        sa.Column('shipping_state', sa.String(100)),
        sa.Column('shipping_postal_code', sa.String(20)),
        sa.Column('shipping_country', sa.String(100)),
        sa.Column('billing_first_name', sa.String(100)),
        sa.Column('billing_last_name', sa.String(100)),
        sa.Column('billing_phone', sa.String(30)),
        sa.Column('billing_address_line_1', sa.String(255)),
        sa.Column('billing_city', sa.String(100)),
        sa.Column('billing_state', sa.String(100)),
        sa.Column('billing_postal_code', sa.String(20)),
        sa.Column('billing_country', sa.String(100)),
        sa.Column('tracking_number', sa.String(100)),
        sa.Column('admin_notes', sa.Text()),
        sa.Column('shipped_at', sa.DateTime()),
        sa.Column('delivered_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])
    op.create_index('ix_orders_status_created', 'orders', ['status', 'created_at'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.BigInteger(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('product_name', sa.String(255)),
        sa.Column('product_image', sa.String(500)),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])
    op.create_index('ix_order_items_product_id', 'order_items', ['product_id'])

    op.create_table(
        'banners',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('subtitle', sa.String(255)),
        sa.Column('description', sa.Text()),
        sa.Column('image_url', sa.String(500), nullable=False),
        sa.Column('button_text', sa.String(100)),
        sa.Column('button_link', sa.String(500)),
        sa.Column('background_color', sa.String(20), server_default='#ffffff'),
        sa.Column('text_color', sa.String(20), server_default='#000000'),
        sa.Column('display_order', sa.Integer(), server_default='0'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_by', sa.BigInteger(), sa.ForeignKey('users.id', ondelete='SET NULL')),
        *_timestamps(),
    )

    op.create_table(
        'testimonials',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.BigInteger(), sa.ForeignKey('products.id', ondelete='SET NULL')),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('is_verified_purchase', sa.Boolean(), server_default=sa.false()),
        sa.Column('is_featured', sa.Boolean(), server_default=sa.false()),
        sa.Column('admin_notes', sa.Text()),
        sa.Column('approved_at', sa.DateTime()),
        sa.Column('approved_by', sa.BigInteger(), sa.ForeignKey('users.id')),
        *_timestamps(),
    )
    op.create_index('ix_testimonials_user_id', 'testimonials', ['user_id'])
    op.create_index('ix_testimonials_status_product', 'testimonials', ['status', 'product_id'])


def downgrade():
    op.drop_index('ix_testimonials_status_product', table_name='testimonials')
    op.drop_index('ix_testimonials_user_id', table_name='testimonials')
    op.drop_table('testimonials')
    op.drop_table('banners')
    op.drop_index('ix_order_items_product_id', table_name='order_items')
    op.drop_index('ix_order_items_order_id', table_name='order_items')
    op.drop_table('order_items')
    op.drop_index('ix_orders_status_created', table_name='orders')
    op.drop_index('ix_orders_user_id', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_user_addresses_user_type_default', table_name='user_addresses')
    op.drop_table('user_addresses')
    op.drop_index('ix_cart_items_user_id', table_name='cart_items')
    op.drop_table('cart_items')
    op.drop_index('ix_products_category', table_name='products')
    op.drop_table('products')
    op.drop_table('categories')
    op.drop_index('ix_user_sessions_user_id', table_name='user_sessions')
    op.drop_table('user_sessions')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
