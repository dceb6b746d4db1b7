"""create users, properties, offers, wishlists and reviews

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

WINNER_CONDITION = "status IN ('accepted', 'bought')"


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('photo_url', sa.String(), nullable=True),
        sa.Column('firebase_uid', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_firebase_uid', 'users', ['firebase_uid'])
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'properties',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('min_price', sa.Float(), nullable=False),
        sa.Column('max_price', sa.Float(), nullable=False),
        sa.Column('agent_name', sa.String(), nullable=True),
        sa.Column('agent_email', sa.String(), nullable=False),
        sa.Column('agent_image', sa.String(), nullable=True),
        sa.Column('verification_status', sa.String(), nullable=False),
        sa.Column('advertised', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_properties_location', 'properties', ['location'])
    op.create_index('ix_properties_agent_email', 'properties', ['agent_email'])
    op.create_index('ix_properties_verification_status', 'properties', ['verification_status'])
    op.create_index('ix_properties_advertised', 'properties', ['advertised'])
    op.create_index('ix_properties_created_at', 'properties', ['created_at'])
    op.create_index('idx_property_agent_status', 'properties', ['agent_email', 'verification_status'])

    op.create_table(
        'offers',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('property_id', sa.String(), nullable=False),
        sa.Column('property_title', sa.String(), nullable=True),
        sa.Column('property_location', sa.String(), nullable=True),
        sa.Column('property_image', sa.String(), nullable=True),
        sa.Column('agent_name', sa.String(), nullable=True),
        sa.Column('agent_email', sa.String(), nullable=False),
        sa.Column('buyer_email', sa.String(), nullable=False),
        sa.Column('buyer_name', sa.String(), nullable=True),
        sa.Column('offer_amount', sa.Float(), nullable=False),
        sa.Column('buying_date', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('transaction_id', sa.String(), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_offers_property_id', 'offers', ['property_id'])
    op.create_index('ix_offers_agent_email', 'offers', ['agent_email'])
    op.create_index('ix_offers_buyer_email', 'offers', ['buyer_email'])
    op.create_index('ix_offers_status', 'offers', ['status'])
    op.create_index('ix_offers_created_at', 'offers', ['created_at'])
    op.create_index('idx_offers_agent_status', 'offers', ['agent_email', 'status'])
    op.create_index('idx_offers_property_status', 'offers', ['property_id', 'status'])
    op.create_index(
        'uq_offers_property_winner',
        'offers',
        ['property_id'],
        unique=True,
        postgresql_where=sa.text(WINNER_CONDITION),
        sqlite_where=sa.text(WINNER_CONDITION),
    )

    op.create_table(
        'wishlists',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_email', sa.String(), nullable=False),
        sa.Column('property_id', sa.String(), nullable=False),
        sa.Column('property_title', sa.String(), nullable=True),
        sa.Column('property_location', sa.String(), nullable=True),
        sa.Column('property_image', sa.String(), nullable=True),
        sa.Column('agent_name', sa.String(), nullable=True),
        sa.Column('agent_email', sa.String(), nullable=True),
        sa.Column('agent_image', sa.String(), nullable=True),
        sa.Column('min_price', sa.Float(), nullable=True),
        sa.Column('max_price', sa.Float(), nullable=True),
        sa.Column('added_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_email', 'property_id', name='uq_wishlist_user_property'),
    )
    op.create_index('ix_wishlists_user_email', 'wishlists', ['user_email'])
    op.create_index('ix_wishlists_property_id', 'wishlists', ['property_id'])
    op.create_index('ix_wishlists_added_at', 'wishlists', ['added_at'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('property_id', sa.String(), nullable=False),
        sa.Column('property_title', sa.String(), nullable=True),
        sa.Column('user_email', sa.String(), nullable=False),
        sa.Column('user_name', sa.String(), nullable=True),
        sa.Column('user_image', sa.String(), nullable=True),
        sa.Column('agent_name', sa.String(), nullable=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('posted_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_reviews_property_id', 'reviews', ['property_id'])
    op.create_index('ix_reviews_user_email', 'reviews', ['user_email'])
    op.create_index('ix_reviews_posted_at', 'reviews', ['posted_at'])


def downgrade() -> None:
    op.drop_table('reviews')
    op.drop_table('wishlists')
    op.drop_index('uq_offers_property_winner', table_name='offers')
    op.drop_table('offers')
    op.drop_table('properties')
    op.drop_table('users')
