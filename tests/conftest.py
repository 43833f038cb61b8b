"""
Pytest configuration and shared fixtures.
"""

import pytest
import os
import sys
from datetime import datetime, timedelta

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set DATABASE_URL before Config class is imported (it validates at class-definition time)
os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ['FLASK_ENV'] = 'testing'

# Fixed clock for window calculations
NOW = datetime(2026, 3, 10, 12, 0, 0)


@pytest.fixture
def app():
    """Create application for testing."""
    from newsroom import create_app
    app = create_app()
    app.config['TESTING'] = True
    return app


@pytest.fixture
def app_context(app):
    """Application context for testing."""
    with app.app_context():
        yield


@pytest.fixture
def db(app, app_context):
    """Database for testing."""
    from newsroom import db as _db

    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture
def client(app, db):
    """Flask test client with database tables created."""
    return app.test_client()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_category(db):
    """Factory for categories."""
    from newsroom.models import Category

    def _make(name, **kwargs):
        category = Category(name=name, **kwargs)
        db.session.add(category)
        db.session.commit()
        return category
    return _make


@pytest.fixture
def make_article(db):
    """
    Factory for articles.

    `published_days_ago` of None creates a draft.
    """
    from newsroom.models import Article

    counter = {'n': 0}

    def _make(title=None, published_days_ago=1, categories=None, tags=None,
              published_at=None, **kwargs):
        counter['n'] += 1
        if published_at is None and published_days_ago is not None:
            published_at = NOW - timedelta(days=published_days_ago)
        article = Article(
            title=title or f'Test article {counter["n"]}',
            published_at=published_at,
            tags=tags or [],
            **kwargs
        )
        article.categories = list(categories or [])
        db.session.add(article)
        db.session.commit()
        return article
    return _make


@pytest.fixture
def make_views(db):
    """Factory inserting raw page views at given ages (hours before NOW)."""
    from newsroom.models import PageView

    def _make(article, hours_ago_list, referrer='direct', device='desktop', now=NOW):
        for index, hours in enumerate(hours_ago_list):
            db.session.add(PageView(
                article_id=article.id,
                timestamp=now - timedelta(hours=hours),
                referrer=referrer,
                device=device,
                session_hash=f'{article.id:04d}{index:012d}'[:16],
            ))
        db.session.commit()
    return _make
