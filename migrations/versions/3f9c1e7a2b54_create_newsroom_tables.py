"""create newsroom tables

Revision ID: 3f9c1e7a2b54
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9c1e7a2b54'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'category',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('slug', sa.String(length=140), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_category_slug', 'category', ['slug'], unique=True)

    op.create_table(
        'article',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('slug', sa.String(length=320), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('featured_image_url', sa.String(length=1000), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('seo_title', sa.String(length=300), nullable=True),
        sa.Column('seo_description', sa.Text(), nullable=True),
        sa.Column('focus_keyphrase', sa.String(length=200), nullable=True),
        sa.Column('published_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('views_last_24h', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('views_last_7d', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('trending_score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('is_trending', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_manually_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('seo_score', sa.Integer(), nullable=True),
        sa.Column('readability_score', sa.Integer(), nullable=True),
        sa.Column('ai_readiness_score', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_article_slug', 'article', ['slug'], unique=True)
    op.create_index('ix_article_published_at', 'article', ['published_at'], unique=False)
    op.create_index('ix_article_trending_score', 'article', ['trending_score'], unique=False)
    op.create_index('ix_article_is_trending', 'article', ['is_trending'], unique=False)

    op.create_table(
        'article_category',
        sa.Column('article_id', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['article_id'], ['article.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['category.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('article_id', 'category_id')
    )

    op.create_table(
        'page_view',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('article_id', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('referrer', sa.String(length=16), nullable=False),
        sa.Column('device', sa.String(length=16), nullable=False),
        sa.Column('session_hash', sa.String(length=16), nullable=False),
        sa.ForeignKeyConstraint(['article_id'], ['article.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_page_view_article_session_ts', 'page_view',
                    ['article_id', 'session_hash', 'timestamp'], unique=False)
    op.create_index('ix_page_view_article_ts', 'page_view', ['article_id', 'timestamp'], unique=False)
    op.create_index('ix_page_view_timestamp', 'page_view', ['timestamp'], unique=False)

    op.create_table(
        'subscriber',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index('ix_subscriber_status', 'subscriber', ['status'], unique=False)


def downgrade():
    op.drop_index('ix_subscriber_status', table_name='subscriber')
    op.drop_table('subscriber')
    op.drop_index('ix_page_view_timestamp', table_name='page_view')
    op.drop_index('ix_page_view_article_ts', table_name='page_view')
    op.drop_index('ix_page_view_article_session_ts', table_name='page_view')
    op.drop_table('page_view')
    op.drop_table('article_category')
    op.drop_index('ix_article_is_trending', table_name='article')
    op.drop_index('ix_article_trending_score', table_name='article')
    op.drop_index('ix_article_published_at', table_name='article')
    op.drop_index('ix_article_slug', table_name='article')
    op.drop_table('article')
    op.drop_index('ix_category_slug', table_name='category')
    op.drop_table('category')
