"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-02-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum types store member names
userrole = sa.Enum('STUDENT', 'ADMIN', name='userrole')
productstatus = sa.Enum('PENDING', 'ACTIVE', 'REJECTED', 'SOLD', name='productstatus')
productcondition = sa.Enum('NEW', 'LIKE_NEW', 'GOOD', 'FAIR', 'POOR', name='productcondition')
tutorapplicationstatus = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='tutorapplicationstatus')
supportpriority = sa.Enum('LOW', 'NORMAL', 'HIGH', 'URGENT', name='supportpriority')
supportstatus = sa.Enum('PENDING', 'IN_PROGRESS', 'RESOLVED', 'CLOSED', name='supportstatus')
orderstatus = sa.Enum('PENDING', 'COMPLETED', 'CANCELLED', name='orderstatus')


def _jsonb():
    return postgresql.JSONB(astext_type=sa.Text())


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('university', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_picture_url', sa.String(length=500), nullable=True),
        sa.Column('student_card_url', sa.String(length=500), nullable=True),
        sa.Column('id_document_url', sa.String(length=500), nullable=True),
        sa.Column('documents_uploaded', sa.Boolean(), nullable=False),
        sa.Column('admin_verified', sa.Boolean(), nullable=False),
        sa.Column('verification_notes', sa.Text(), nullable=True),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('email_verified', sa.Boolean(), nullable=False),
        sa.Column('role', userrole, nullable=False),
        sa.Column('admin_permissions', _jsonb(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_tutor', sa.Boolean(), nullable=False),
        sa.Column('tutor_verified', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'], unique=False)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_categories_id', 'categories', ['id'], unique=False)
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)

    # Products table
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('condition', productcondition, nullable=False),
        sa.Column('status', productstatus, nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('university', sa.String(length=255), nullable=True),
        sa.Column('images', _jsonb(), nullable=True),
        sa.Column('pdf_file', sa.String(length=500), nullable=True),
        sa.Column('seller_id', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('admin_approved', sa.Boolean(), nullable=False),
        sa.Column('approved_by_id', sa.Integer(), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('verification_notes', sa.Text(), nullable=True),
        sa.Column('sold_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['seller_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id']),
        sa.ForeignKeyConstraint(['approved_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_products_id', 'products', ['id'], unique=False)
    op.create_index('ix_products_title', 'products', ['title'], unique=False)
    op.create_index('ix_products_status', 'products', ['status'], unique=False)
    op.create_index('ix_products_seller_id', 'products', ['seller_id'], unique=False)
    op.create_index('ix_products_category_id', 'products', ['category_id'], unique=False)
    op.create_index('ix_products_status_created', 'products', ['status', 'created_at'], unique=False)

    # Tutor applications table
    op.create_table(
        'tutor_applications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('institution', sa.String(length=255), nullable=False),
        sa.Column('modules', _jsonb(), nullable=True),
        sa.Column('qualification', sa.String(length=255), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('profile_picture_url', sa.String(length=500), nullable=True),
        sa.Column('proof_of_registration_url', sa.String(length=500), nullable=True),
        sa.Column('transcript_url', sa.String(length=500), nullable=True),
        sa.Column('status', tutorapplicationstatus, nullable=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('verification_notes', sa.Text(), nullable=True),
        sa.Column('reviewed_by_id', sa.Integer(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reviewed_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tutor_applications_id', 'tutor_applications', ['id'], unique=False)
    op.create_index('ix_tutor_applications_user_id', 'tutor_applications', ['user_id'], unique=False)
    op.create_index('ix_tutor_applications_status', 'tutor_applications', ['status'], unique=False)

    # Support messages table
    op.create_table(
        'support_messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('priority', supportpriority, nullable=False),
        sa.Column('status', supportstatus, nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.Column('admin_response', sa.Text(), nullable=True),
        sa.Column('responded_by_id', sa.Integer(), nullable=True),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['responded_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_support_messages_id', 'support_messages', ['id'], unique=False)
    op.create_index('ix_support_messages_user_id', 'support_messages', ['user_id'], unique=False)
    op.create_index('ix_support_messages_status', 'support_messages', ['status'], unique=False)

    # Notifications table
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.Column('metadata', _jsonb(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_notifications_id', 'notifications', ['id'], unique=False)
    op.create_index('ix_notifications_user_read', 'notifications', ['user_id', 'read'], unique=False)

    # Messages table
    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('receiver_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['receiver_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_messages_id', 'messages', ['id'], unique=False)
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'], unique=False)
    op.create_index('ix_messages_receiver_id', 'messages', ['receiver_id'], unique=False)
    op.create_index('ix_messages_pair', 'messages', ['sender_id', 'receiver_id'], unique=False)

    # Wishlist table
    op.create_table(
        'wishlist_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'product_id', name='uq_wishlist_user_product')
    )
    op.create_index('ix_wishlist_items_id', 'wishlist_items', ['id'], unique=False)
    op.create_index('ix_wishlist_items_user_id', 'wishlist_items', ['user_id'], unique=False)

    # Orders tables
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('buyer_id', sa.Integer(), nullable=False),
        sa.Column('status', orderstatus, nullable=False),
        sa.Column('subtotal', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('shipping_fee', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('total', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('shipping_address', _jsonb(), nullable=True),
        sa.Column('payment_reference', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['buyer_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_orders_id', 'orders', ['id'], unique=False)
    op.create_index('ix_orders_buyer_id', 'orders', ['buyer_id'], unique=False)

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=True),
        sa.Column('seller_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('unit_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_order_items_id', 'order_items', ['id'], unique=False)
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'], unique=False)
    op.create_index('ix_order_items_product_id', 'order_items', ['product_id'], unique=False)

    # Admin audit log
    op.create_table(
        'admin_audit_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('admin_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=100), nullable=False),
        sa.Column('target_type', sa.String(length=50), nullable=False),
        sa.Column('target_id', sa.Integer(), nullable=True),
        sa.Column('old_values', _jsonb(), nullable=True),
        sa.Column('new_values', _jsonb(), nullable=True),
        sa.Column('ip_address', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['admin_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_admin_audit_logs_id', 'admin_audit_logs', ['id'], unique=False)
    op.create_index('ix_admin_audit_logs_admin_id', 'admin_audit_logs', ['admin_id'], unique=False)
    op.create_index('ix_admin_audit_logs_target', 'admin_audit_logs', ['target_type', 'target_id'], unique=False)


def downgrade() -> None:
    op.drop_table('admin_audit_logs')
    op.drop_table('order_items')
    op.drop_table('orders')
    op.drop_table('wishlist_items')
    op.drop_table('messages')
    op.drop_table('notifications')
    op.drop_table('support_messages')
    op.drop_table('tutor_applications')
    op.drop_table('products')
    op.drop_table('categories')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (
        orderstatus,
        supportstatus,
        supportpriority,
        tutorapplicationstatus,
        productcondition,
        productstatus,
        userrole,
    ):
        enum_type.drop(bind, checkfirst=True)
