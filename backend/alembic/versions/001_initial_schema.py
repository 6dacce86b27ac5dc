"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19

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


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Create enum types
    op.execute("CREATE TYPE subscriptiontier AS ENUM ('starter', 'pro', 'enterprise')")
    op.execute("CREATE TYPE userrole AS ENUM ('admin', 'editor', 'viewer')")
    op.execute("CREATE TYPE sitestatus AS ENUM ('draft', 'published', 'archived')")
    op.execute("CREATE TYPE subscriberstatus AS ENUM ('active', 'unsubscribed', 'bounced')")
    op.execute("CREATE TYPE navigationbasetype AS ENUM ('global', 'direct-response', 'minimal')")

    # Create tenants table
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('subscription_tier', postgresql.ENUM(name='subscriptiontier', create_type=False),
                  nullable=False, server_default='starter'),
        sa.Column('settings', postgresql.JSONB, server_default='{}'),
        sa.Column('max_sites', sa.Integer, server_default='10'),
        sa.Column('max_users', sa.Integer, server_default='5'),
        *_timestamps(),
    )

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36),
                  sa.ForeignKey('tenants.id', ondelete='SET NULL'), nullable=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', postgresql.ENUM(name='userrole', create_type=False),
                  nullable=False, server_default='editor'),
        sa.Column('permissions', postgresql.JSONB, server_default='[]'),
        sa.Column('last_login_at', sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index('ix_users_tenant_id', 'users', ['tenant_id'])
    op.create_index('ix_users_email', 'users', ['email'])

    # Create sites table
    op.create_table(
        'sites',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36),
                  sa.ForeignKey('tenants.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('subdomain', sa.String(100), unique=True),
        sa.Column('domain', sa.String(255), unique=True),
        sa.Column('theme', sa.String(50), nullable=False, server_default='medical'),
        sa.Column('settings', postgresql.JSONB, server_default='{}'),
        sa.Column('brand_profile', postgresql.JSONB, server_default='{}'),
        sa.Column('content_profile', postgresql.JSONB, server_default='{}'),
        sa.Column('page_config', postgresql.JSONB, server_default='{}'),
        sa.Column('status', postgresql.ENUM(name='sitestatus', create_type=False),
                  nullable=False, server_default='draft'),
        sa.Column('created_by', sa.String(36)),
        sa.Column('published_at', sa.DateTime(timezone=True)),
        sa.Column('version', sa.Integer, nullable=False, server_default='1'),
        *_timestamps(),
    )
    op.create_index('ix_sites_tenant_id', 'sites', ['tenant_id'])
    op.create_index('ix_sites_status', 'sites', ['status'])

    # Create articles table
    op.create_table(
        'articles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('site_id', sa.String(36),
                  sa.ForeignKey('sites.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('excerpt', sa.Text),
        sa.Column('content', sa.Text),
        sa.Column('category', sa.String(100)),
        sa.Column('image', sa.String(1000)),
        sa.Column('featured', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('trending', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('hero', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('boosted', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('published', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('published_at', sa.DateTime(timezone=True)),
        sa.Column('read_time', sa.Integer, nullable=False, server_default='5'),
        sa.Column('views', sa.Integer, nullable=False, server_default='0'),
        sa.Column('author_name', sa.String(255)),
        sa.Column('author_image', sa.String(1000)),
        sa.Column('tags', postgresql.JSONB, server_default='[]'),
        sa.Column('seo_title', sa.String(500)),
        sa.Column('seo_description', sa.Text),
        sa.Column('canonical_url', sa.String(1000)),
        sa.Column('tracking_config', postgresql.JSONB),
        sa.Column('version', sa.Integer, nullable=False, server_default='1'),
        *_timestamps(),
        sa.UniqueConstraint('site_id', 'slug', name='uq_article_site_slug'),
    )
    op.create_index('ix_articles_site_id', 'articles', ['site_id'])
    op.create_index('ix_articles_category', 'articles', ['category'])
    op.create_index('idx_articles_site_published', 'articles', ['site_id', 'published'])

    # Create pages table
    op.create_table(
        'pages',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('site_id', sa.String(36),
                  sa.ForeignKey('sites.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('content', sa.Text),
        sa.Column('template', sa.String(100), nullable=False, server_default='default'),
        sa.Column('published', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('published_at', sa.DateTime(timezone=True)),
        sa.Column('seo_title', sa.String(500)),
        sa.Column('seo_description', sa.Text),
        sa.Column('version', sa.Integer, nullable=False, server_default='1'),
        *_timestamps(),
        sa.UniqueConstraint('site_id', 'slug', name='uq_page_site_slug'),
    )
    op.create_index('ix_pages_site_id', 'pages', ['site_id'])
    op.create_index('idx_pages_site_published', 'pages', ['site_id', 'published'])

    # Create widget tables
    op.create_table(
        'widget_categories',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('site_id', sa.String(36),
                  sa.ForeignKey('sites.id', ondelete='CASCADE'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('description', sa.Text),
        sa.Column('color_bg', sa.String(100), nullable=False, server_default='bg-gray-500/10'),
        sa.Column('color_text', sa.String(100), nullable=False, server_default='text-gray-400'),
        sa.Column('color_border', sa.String(100), nullable=False, server_default='border-gray-500/30'),
        sa.Column('icon', sa.String(100)),
        sa.Column('sort_order', sa.Integer, nullable=False, server_default='0'),
        sa.Column('is_global', sa.Boolean, nullable=False, server_default='false'),
        *_timestamps(),
    )
    op.create_index('ix_widget_categories_site_id', 'widget_categories', ['site_id'])

    op.create_table(
        'widget_definitions',
        sa.Column('id', sa.String(100), primary_key=True),
        sa.Column('widget_type', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text),
        sa.Column('category', sa.String(50), nullable=False, server_default='content'),
        sa.Column('category_id', sa.String(36),
                  sa.ForeignKey('widget_categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('version', sa.String(20), nullable=False, server_default='1.0.0'),
        sa.Column('template', sa.Text, nullable=False),
        sa.Column('styles', sa.Text),
        sa.Column('script', sa.Text),
        sa.Column('default_config', postgresql.JSONB, server_default='{}'),
        sa.Column('config_schema', postgresql.JSONB, server_default='{}'),
        sa.Column('triggers', postgresql.JSONB),
        sa.Column('active', sa.Boolean, nullable=False, server_default='true'),
        sa.Column('is_global', sa.Boolean, nullable=False, server_default='true'),
        *_timestamps(),
    )
    op.create_index('ix_widget_definitions_widget_type', 'widget_definitions', ['widget_type'])
    op.create_index('ix_widget_definitions_category', 'widget_definitions', ['category'])

    op.create_table(
        'widget_instances',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('definition_id', sa.String(100),
                  sa.ForeignKey('widget_definitions.id'), nullable=False),
        sa.Column('site_id', sa.String(36),
                  sa.ForeignKey('sites.id', ondelete='CASCADE'), nullable=False),
        sa.Column('page_id', sa.String(36),
                  sa.ForeignKey('pages.id', ondelete='CASCADE'), nullable=True),
        sa.Column('config', postgresql.JSONB, nullable=False, server_default='{}'),
        sa.Column('sort_order', sa.Integer, nullable=False, server_default='0'),
        sa.Column('enabled', sa.Boolean, nullable=False, server_default='true'),
        sa.Column('version', sa.Integer, nullable=False, server_default='1'),
        *_timestamps(),
    )
    op.create_index('ix_widget_instances_definition_id', 'widget_instances', ['definition_id'])
    op.create_index('idx_widget_instances_scope_order', 'widget_instances',
                    ['site_id', 'page_id', 'sort_order'])

    # Create email_subscribers table
    op.create_table(
        'email_subscribers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('site_id', sa.String(36),
                  sa.ForeignKey('sites.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column('source', sa.String(100), nullable=False, server_default='website'),
        sa.Column('tags', postgresql.JSONB, server_default='[]'),
        sa.Column('status', postgresql.ENUM(name='subscriberstatus', create_type=False),
                  nullable=False, server_default='active'),
        sa.Column('ip_address', sa.String(100)),
        sa.Column('user_agent', sa.Text),
        sa.Column('page_url', sa.String(2000)),
        sa.Column('subscribed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('unsubscribed_at', sa.DateTime(timezone=True)),
        *_timestamps(),
        sa.UniqueConstraint('site_id', 'email', name='uq_subscriber_site_email'),
    )
    op.create_index('ix_email_subscribers_site_id', 'email_subscribers', ['site_id'])

    # Create event tables
    op.create_table(
        'view_events',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('article_id', sa.String(36),
                  sa.ForeignKey('articles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('site_id', sa.String(36),
                  sa.ForeignKey('sites.id', ondelete='CASCADE'), nullable=False),
        sa.Column('visitor_hash', sa.String(64)),
        sa.Column('user_agent', sa.Text),
        sa.Column('referrer', sa.String(2000)),
        sa.Column('viewed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_view_events_site_time', 'view_events', ['site_id', 'viewed_at'])
    op.create_index('idx_view_events_article_time', 'view_events', ['article_id', 'viewed_at'])

    op.create_table(
        'click_events',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('site_id', sa.String(36),
                  sa.ForeignKey('sites.id', ondelete='CASCADE'), nullable=False),
        sa.Column('article_id', sa.String(36),
                  sa.ForeignKey('articles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('widget_type', sa.String(100), nullable=False),
        sa.Column('widget_id', sa.String(100)),
        sa.Column('widget_name', sa.String(255)),
        sa.Column('click_type', sa.String(50), nullable=False, server_default='cta'),
        sa.Column('destination_url', sa.String(2000)),
        sa.Column('is_external', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('session_id', sa.String(64)),
        sa.Column('visitor_hash', sa.String(64)),
        sa.Column('user_agent', sa.Text),
        sa.Column('clicked_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_click_events_site_time', 'click_events', ['site_id', 'clicked_at'])
    op.create_index('idx_click_events_article_time', 'click_events', ['article_id', 'clicked_at'])
    op.create_index('idx_click_events_widget', 'click_events', ['site_id', 'widget_type', 'widget_id'])

    # Create navigation_templates table
    op.create_table(
        'navigation_templates',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text),
        sa.Column('base_type', postgresql.ENUM(name='navigationbasetype', create_type=False),
                  nullable=False),
        sa.Column('is_system', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('config', postgresql.JSONB, nullable=False, server_default='{}'),
        *_timestamps(),
    )
    op.create_index('ix_navigation_templates_base_type', 'navigation_templates', ['base_type'])

    # Create activity_log table
    op.create_table(
        'activity_log',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36)),
        sa.Column('user_id', sa.String(36)),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('resource_type', sa.String(100), nullable=False),
        sa.Column('resource_id', sa.String(100)),
        sa.Column('details', postgresql.JSONB, server_default='{}'),
        sa.Column('ip_address', sa.String(100)),
        sa.Column('user_agent', sa.String(500)),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_activity_log_tenant_id', 'activity_log', ['tenant_id'])


def downgrade() -> None:
    op.drop_table('activity_log')
    op.drop_table('navigation_templates')
    op.drop_table('click_events')
    op.drop_table('view_events')
    op.drop_table('email_subscribers')
    op.drop_table('widget_instances')
    op.drop_table('widget_definitions')
    op.drop_table('widget_categories')
    op.drop_table('pages')
    op.drop_table('articles')
    op.drop_table('sites')
    op.drop_table('users')
    op.drop_table('tenants')

    op.execute("DROP TYPE IF EXISTS navigationbasetype")
    op.execute("DROP TYPE IF EXISTS subscriberstatus")
    op.execute("DROP TYPE IF EXISTS sitestatus")
    op.execute("DROP TYPE IF EXISTS userrole")
    op.execute("DROP TYPE IF EXISTS subscriptiontier")
