from newsroom import db
from newsroom.lib.time import utcnow_naive
from unidecode import unidecode
from sqlalchemy.orm import validates

import re


def generate_slug(name):
    """Generate a URL-friendly slug from a string."""
    if not name:
        return ""

    name = unidecode(str(name).lower())
    name = re.sub(r'[^a-z0-9]+', '-', name)
    name = name.strip('-')
    return re.sub(r'-+', '-', name)


article_category = db.Table(
    'article_category',
    db.Column('article_id', db.Integer, db.ForeignKey('article.id', ondelete='CASCADE'), primary_key=True),
    db.Column('category_id', db.Integer, db.ForeignKey('category.id', ondelete='CASCADE'), primary_key=True),
)


class Category(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    slug = db.Column(db.String(140), nullable=False, unique=True, index=True)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.slug and self.name:
            self.slug = generate_slug(self.name)

    def __repr__(self):
        return f'<Category {self.slug}>'


class Article(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(300), nullable=False)
    slug = db.Column(db.String(320), nullable=False, unique=True, index=True)
    excerpt = db.Column(db.Text)
    body = db.Column(db.Text)
    featured_image_url = db.Column(db.String(1000))
    tags = db.Column(db.JSON, default=list)

    # Editor-provided overrides for search snippets
    seo_title = db.Column(db.String(300))
    seo_description = db.Column(db.Text)
    focus_keyphrase = db.Column(db.String(200))

    # Null until published; drafts are invisible to every metric
    published_at = db.Column(db.DateTime, index=True)
    created_at = db.Column(db.DateTime, default=utcnow_naive)
    updated_at = db.Column(db.DateTime, default=utcnow_naive, onupdate=utcnow_naive)

    # Engagement metrics, written by view tracking and the trending job
    view_count = db.Column(db.Integer, default=0, nullable=False)
    views_last_24h = db.Column(db.Integer, default=0, nullable=False)
    views_last_7d = db.Column(db.Integer, default=0, nullable=False)
    trending_score = db.Column(db.Float, default=0.0, nullable=False, index=True)
    is_trending = db.Column(db.Boolean, default=False, nullable=False, index=True)
    is_manually_featured = db.Column(db.Boolean, default=False, nullable=False)

    # Content analysis results (0-100)
    seo_score = db.Column(db.Integer)
    readability_score = db.Column(db.Integer)
    ai_readiness_score = db.Column(db.Integer)

    categories = db.relationship(
        'Category',
        secondary=article_category,
        order_by='Category.id',
        lazy='selectin',
        backref=db.backref('articles', lazy='dynamic'),
    )
    page_views = db.relationship('PageView', backref='article', lazy='dynamic',
                                 cascade='all, delete-orphan')

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.slug and self.title:
            self.slug = generate_slug(self.title)

    @validates('tags')
    def validate_tags(self, key, value):
        if not value:
            return []
        return [str(tag).strip() for tag in value if str(tag).strip()]

    @property
    def is_published(self):
        return self.published_at is not None

    @property
    def primary_category(self):
        return self.categories[0] if self.categories else None

    def __repr__(self):
        return f'<Article {self.id} {self.slug}>'


class PageView(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    article_id = db.Column(db.Integer, db.ForeignKey('article.id', ondelete='CASCADE'), nullable=False)
    timestamp = db.Column(db.DateTime, default=utcnow_naive, nullable=False)
    referrer = db.Column(db.String(16), nullable=False, default='direct')  # direct|search|social|referral
    device = db.Column(db.String(16), nullable=False, default='desktop')  # mobile|tablet|desktop
    session_hash = db.Column(db.String(16), nullable=False)

    __table_args__ = (
        db.Index('ix_page_view_article_session_ts', 'article_id', 'session_hash', 'timestamp'),
        db.Index('ix_page_view_article_ts', 'article_id', 'timestamp'),
        db.Index('ix_page_view_timestamp', 'timestamp'),
    )

    def __repr__(self):
        return f'<PageView article={self.article_id} at {self.timestamp}>'


class Subscriber(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, unique=True)
    status = db.Column(db.String(20), nullable=False, default='pending', index=True)  # pending|active|unsubscribed
    created_at = db.Column(db.DateTime, default=utcnow_naive)

    @validates('email')
    def validate_email(self, key, value):
        return value.strip().lower() if value else value
