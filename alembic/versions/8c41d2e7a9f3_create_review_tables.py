"""create_review_tables

Revision ID: 8c41d2e7a9f3
Revises:
Create Date: 2026-10-19 10:12:44.301118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c41d2e7a9f3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'businesses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('type', sa.String(length=25), nullable=True),
        sa.Column('address', sa.String(length=50), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('state', sa.String(length=25), nullable=False),
        sa.Column('postal_code', sa.String(length=11), nullable=False),
        # Nullable with no default: NULL means "never set"
        sa.Column('purchased', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'address', 'city', 'state', 'postal_code', name='uq_businesses_name_address'),
    )
    op.create_index('ix_businesses_name', 'businesses', ['name'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('username_key', sa.String(length=300), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username_key', 'users', ['username_key'], unique=True)

    # user_id has no foreign key: reviews outlive their authors
    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('business_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('text', sa.String(length=300), nullable=False),
        sa.CheckConstraint('score >= 0 AND score <= 10', name='ck_reviews_score_range'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reviews_business_id', 'reviews', ['business_id'])
    op.create_index('ix_reviews_user_id', 'reviews', ['user_id'])
    op.create_index('ix_reviews_business_date', 'reviews', ['business_id', 'date'])

    op.create_table(
        'photos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('business_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('caption', sa.String(length=300), nullable=True),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('business_id', 'position', name='uq_photos_business_position'),
    )
    op.create_index('ix_photos_business_id', 'photos', ['business_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_photos_business_id', table_name='photos')
    op.drop_table('photos')
    op.drop_index('ix_reviews_business_date', table_name='reviews')
    op.drop_index('ix_reviews_user_id', table_name='reviews')
    op.drop_index('ix_reviews_business_id', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('ix_users_username_key', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_businesses_name', table_name='businesses')
    op.drop_table('businesses')
