"""Initial schema - ComicHub

Revision ID: 0001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Profiles table (accounts, roles, ban and ban-appeal state)
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False, index=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('username', sa.String(30), unique=True, nullable=False, index=True),
        sa.Column('display_name', sa.String(50), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, default='user', index=True),
        sa.Column('is_banned', sa.Boolean(), nullable=False, default=False),
        sa.Column('ban_reason', sa.Text(), nullable=True),
        sa.Column('banned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('banned_by', sa.Uuid(), nullable=True),
        sa.Column('appeal_status', sa.String(20), nullable=False, default='none'),
        sa.Column('appeal_text', sa.Text(), nullable=True),
        sa.Column('appeal_submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Recommendations table
    op.create_table(
        'recommendations',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('profiles.id'), nullable=False, index=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('genres', sa.JSON(), nullable=False),
        sa.Column('official_platforms', sa.JSON(), nullable=False),
        sa.Column('content_rating', sa.String(20), nullable=False, default='all'),
        sa.Column('cover_url', sa.Text(), nullable=True),
        sa.Column('why_recommend', sa.Text(), nullable=True),
        sa.Column('author', sa.String(100), nullable=True),
        sa.Column('artist', sa.String(100), nullable=True),
        sa.Column('year_released', sa.Integer(), nullable=True),
        sa.Column('chapter_count', sa.Integer(), nullable=True),
        sa.Column('upvotes', sa.Integer(), nullable=False, default=0),
        sa.Column('downvotes', sa.Integer(), nullable=False, default=0),
        sa.Column('score', sa.Integer(), nullable=False, default=0, index=True),
        sa.Column('save_count', sa.Integer(), nullable=False, default=0),
        sa.Column('review_count', sa.Integer(), nullable=False, default=0),
        sa.Column('is_approved', sa.Boolean(), nullable=False, default=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('rejected_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejected_by', sa.Uuid(), nullable=True),
        sa.Column('is_featured', sa.Boolean(), nullable=False, default=False),
        sa.Column('featured_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('featured_by', sa.Uuid(), nullable=True),
        sa.Column('appeal_status', sa.String(20), nullable=False, default='none'),
        sa.Column('appeal_text', sa.Text(), nullable=True),
        sa.Column('appeal_submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        'ix_recommendations_approved_created',
        'recommendations',
        ['is_approved', 'created_at'],
    )

    # Reviews table
    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('profiles.id'), nullable=False, index=True),
        sa.Column('recommendation_id', sa.Uuid(), sa.ForeignKey('recommendations.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('contains_spoilers', sa.Boolean(), nullable=False, default=False),
        sa.Column('is_approved', sa.Boolean(), nullable=False, default=True),
        sa.Column('is_edited', sa.Boolean(), nullable=False, default=False),
        sa.Column('edited_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'recommendation_id', name='uq_reviews_user_recommendation'),
    )

    # Votes table
    op.create_table(
        'votes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('profiles.id'), nullable=False, index=True),
        sa.Column('recommendation_id', sa.Uuid(), sa.ForeignKey('recommendations.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('vote_type', sa.String(10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'recommendation_id', name='uq_votes_user_recommendation'),
    )

    # Saves table
    op.create_table(
        'saves',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('profiles.id'), nullable=False, index=True),
        sa.Column('recommendation_id', sa.Uuid(), sa.ForeignKey('recommendations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'recommendation_id', name='uq_saves_user_recommendation'),
    )

    # Reports table
    op.create_table(
        'reports',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('reporter_id', sa.Uuid(), sa.ForeignKey('profiles.id'), nullable=False, index=True),
        sa.Column('entity_type', sa.String(30), nullable=False),
        sa.Column('entity_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('reason', sa.String(200), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, default='pending', index=True),
        sa.Column('resolved_by', sa.Uuid(), nullable=True),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('resolution_note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, index=True),
    )

    # News table
    op.create_table(
        'news',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(260), unique=True, nullable=False, index=True),
        sa.Column('excerpt', sa.String(500), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('source_name', sa.String(200), nullable=False),
        sa.Column('source_url', sa.Text(), nullable=False),
        sa.Column('category', sa.String(30), nullable=False, index=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('cover_url', sa.Text(), nullable=True),
        sa.Column('is_affiliate', sa.Boolean(), nullable=False, default=False),
        sa.Column('affiliate_url', sa.Text(), nullable=True),
        sa.Column('affiliate_disclaimer', sa.Text(), nullable=False, default=''),
        sa.Column('view_count', sa.Integer(), nullable=False, default=0),
        sa.Column('is_published', sa.Boolean(), nullable=False, default=False),
        sa.Column('published_by', sa.Uuid(), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Notifications table
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, default=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_notifications_user_time', 'notifications', ['user_id', 'created_at'])

    # Activity log (append-only audit trail)
    op.create_table(
        'activity_logs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Uuid(), nullable=True, index=True),
        sa.Column('action', sa.String(200), nullable=False),
        sa.Column('entity_type', sa.String(30), nullable=False),
        sa.Column('entity_id', sa.Uuid(), nullable=True, index=True),
        sa.Column('target_label', sa.Text(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, index=True),
    )
    op.create_index('ix_activity_logs_entity', 'activity_logs', ['entity_type', 'entity_id'])


def downgrade() -> None:
    op.drop_index('ix_activity_logs_entity', table_name='activity_logs')
    op.drop_table('activity_logs')
    op.drop_index('ix_notifications_user_time', table_name='notifications')
    op.drop_table('notifications')
    op.drop_table('news')
    op.drop_table('reports')
    op.drop_table('saves')
    op.drop_table('votes')
    op.drop_table('reviews')
    op.drop_index('ix_recommendations_approved_created', table_name='recommendations')
    op.drop_table('recommendations')
    op.drop_table('profiles')
