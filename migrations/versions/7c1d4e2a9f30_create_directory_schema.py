"""create_directory_schema

Revision ID: 7c1d4e2a9f30
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c1d4e2a9f30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, services, reviews, messages, notifications and the visit counter."""

    # --- profiles ---
    op.create_table('profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('identity_id', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False,
                  server_default='client'),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('location_type', sa.String(length=20), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('profile_image_url', sa.String(length=500), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('review_count', sa.Integer(), nullable=False,
                  server_default='0'),
        sa.Column('username_changed_at', sa.DateTime(), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False,
                  server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.CheckConstraint("role IN ('client', 'provider')",
                           name='ck_profiles_role'),
        sa.CheckConstraint(
            "location_type IN ('studio', 'house', 'apartment', 'rented_space', 'mobile')",
            name='ck_profiles_location_type',
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('identity_id'),
    )
    op.create_index('ix_profiles_username_lower', 'profiles',
                    [sa.text('lower(username)')], unique=True)
    op.create_index('ix_profiles_role_location_type', 'profiles',
                    ['role', 'location_type'])

    # --- services ---
    op.create_table('services',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.ForeignKeyConstraint(['provider_id'], ['profiles.id'],
                                ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('provider_id', 'name',
                            name='uq_services_provider_name'),
    )
    op.create_index('ix_services_provider_id', 'services', ['provider_id'])
    op.create_index('ix_services_name_lower', 'services',
                    [sa.text('lower(name)')])

    # --- reviews ---
    op.create_table('reviews',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.CheckConstraint('client_id <> provider_id',
                           name='ck_reviews_not_self'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reviews_rating'),
        sa.ForeignKeyConstraint(['client_id'], ['profiles.id'],
                                ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['provider_id'], ['profiles.id'],
                                ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('client_id', 'provider_id',
                            name='uq_reviews_client_provider'),
    )
    op.create_index('ix_reviews_provider_id', 'reviews', ['provider_id'])

    # --- messages ---
    op.create_table('messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('receiver_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.ForeignKeyConstraint(['sender_id'], ['profiles.id'],
                                ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['receiver_id'], ['profiles.id'],
                                ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_messages_sender_receiver', 'messages',
                    ['sender_id', 'receiver_id'])
    op.create_index('ix_messages_receiver_sender', 'messages',
                    ['receiver_id', 'sender_id'])

    # --- notifications ---
    op.create_table('notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('link', sa.String(length=500), nullable=True),
        sa.Column('read', sa.Boolean(), nullable=False,
                  server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'],
                                ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_profile_read', 'notifications',
                    ['profile_id', 'read'])

    # --- page_visits (single-row counter) ---
    op.create_table('page_visits',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.execute("INSERT INTO page_visits (id, count) VALUES (1, 0)")


def downgrade() -> None:
    """Drop all directory tables."""
    op.drop_table('page_visits')
    op.drop_index('ix_notifications_profile_read', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_messages_receiver_sender', table_name='messages')
    op.drop_index('ix_messages_sender_receiver', table_name='messages')
    op.drop_table('messages')
    op.drop_index('ix_reviews_provider_id', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('ix_services_name_lower', table_name='services')
    op.drop_index('ix_services_provider_id', table_name='services')
    op.drop_table('services')
    op.drop_index('ix_profiles_role_location_type', table_name='profiles')
    op.drop_index('ix_profiles_username_lower', table_name='profiles')
    op.drop_table('profiles')
