"""initial storefront tables

Revision ID: 4b2d9e7a1c30
Revises:
Create Date: 2026-10-19 09:12:44.201934

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4b2d9e7a1c30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'profile',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=True),
        sa.Column('auth_provider', sa.String(), nullable=False),
        sa.Column('discord_user_id', sa.String(), nullable=True),
        sa.Column('discord_webhook_url', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profile_email', 'profile', ['email'], unique=True)
    op.create_index('ix_profile_discord_user_id', 'profile', ['discord_user_id'], unique=True)

    op.create_table(
        'category',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_category_name', 'category', ['name'], unique=True)

    op.create_table(
        'item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('file_url', sa.String(), nullable=False),
        sa.Column('downloads', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('ratings_count', sa.Integer(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['category_id'], ['category.id']),
        sa.ForeignKeyConstraint(['created_by'], ['profile.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_item_name', 'item', ['name'], unique=False)

    op.create_table(
        'payment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('pending', 'completed', 'failed', name='paymentstatus'),
            nullable=False,
        ),
        sa.Column('order_id', sa.String(), nullable=False),
        sa.Column('payment_url', sa.String(), nullable=True),
        sa.Column('deposit_address', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['item_id'], ['item.id']),
        sa.ForeignKeyConstraint(['user_id'], ['profile.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payment_user_id', 'payment', ['user_id'], unique=False)
    op.create_index('ix_payment_item_id', 'payment', ['item_id'], unique=False)
    op.create_index('ix_payment_order_id', 'payment', ['order_id'], unique=False)

    op.create_table(
        'favorite',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['item_id'], ['item.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profile.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'item_id', name='uq_favorite_user_item'),
    )

    op.create_table(
        'rating',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['item_id'], ['item.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profile.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'item_id', name='uq_rating_user_item'),
    )

    op.create_table(
        'download',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['item_id'], ['item.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profile.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_download_user_id', 'download', ['user_id'], unique=False)

    op.create_table(
        'ad',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.String(), nullable=False),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_ad_expires_at', 'ad', ['expires_at'], unique=False)


def downgrade():
    op.drop_index('ix_ad_expires_at', table_name='ad')
    op.drop_table('ad')
    op.drop_index('ix_download_user_id', table_name='download')
    op.drop_table('download')
    op.drop_table('rating')
    op.drop_table('favorite')
    op.drop_index('ix_payment_order_id', table_name='payment')
    op.drop_index('ix_payment_item_id', table_name='payment')
    op.drop_index('ix_payment_user_id', table_name='payment')
    op.drop_table('payment')
    sa.Enum(name='paymentstatus').drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_item_name', table_name='item')
    op.drop_table('item')
    op.drop_index('ix_category_name', table_name='category')
    op.drop_table('category')
    op.drop_index('ix_profile_discord_user_id', table_name='profile')
    op.drop_index('ix_profile_email', table_name='profile')
    op.drop_table('profile')
