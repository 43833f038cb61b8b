"""
Analytics Reporting Service.

Read-only aggregates over page views, articles and subscribers for the
analytics dashboard and per-article stats.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func

from newsroom import db
from newsroom.analytics.tracker import count_views, count_unique_sessions
from newsroom.lib.time import hours_ago, days_ago, isoformat_or_none, utcnow_naive
from newsroom.models import Article, PageView, Subscriber


class AnalyticsStats:
    """Site-wide and per-article view statistics."""

    BREAKDOWN_DAYS = 30
    TOP_ARTICLES_LIMIT = 10

    @staticmethod
    def _breakdown(column, since: datetime, key: str) -> List[Dict[str, Any]]:
        rows = db.session.query(
            column,
            func.count(PageView.id)
        ).filter(
            PageView.timestamp >= since
        ).group_by(column).order_by(func.count(PageView.id).desc(), column).all()
        return [{key: value, 'count': count} for value, count in rows]

    @classmethod
    def get_overview(cls, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or utcnow_naive()
        last24h = hours_ago(24, now)
        last7d = days_ago(7, now)
        last30d = days_ago(cls.BREAKDOWN_DAYS, now)

        total_articles = Article.query.filter(Article.published_at.isnot(None)).count()
        total_subscribers = Subscriber.query.filter_by(status='active').count()

        return {
            'views': {
                'last24h': count_views(None, last24h),
                'last7d': count_views(None, last7d),
                'last30d': count_views(None, last30d),
            },
            'uniqueVisitors': {
                'last24h': count_unique_sessions(last24h),
            },
            'totalArticles': total_articles,
            'totalSubscribers': total_subscribers,
            'referrerBreakdown': cls._breakdown(PageView.referrer, last30d, 'referrer'),
            'deviceBreakdown': cls._breakdown(PageView.device, last30d, 'device'),
        }

    @classmethod
    def get_article_stats(cls, article_id: int, now: Optional[datetime] = None) -> Optional[Dict[str, Any]]:
        """Live window counts for one article, or None if it doesn't exist."""
        article = db.session.get(Article, article_id)
        if article is None:
            return None

        now = now or utcnow_naive()
        return {
            'articleId': article.id,
            'totalViews': article.view_count or 0,
            'views24h': count_views(article.id, hours_ago(24, now)),
            'views7d': count_views(article.id, days_ago(7, now)),
            'trendingScore': article.trending_score or 0,
        }

    @classmethod
    def get_top_articles(cls, limit: int = TOP_ARTICLES_LIMIT) -> List[Dict[str, Any]]:
        """Published articles with the highest stored trending score, flagged or not."""
        articles = Article.query.filter(
            Article.published_at.isnot(None)
        ).order_by(
            Article.trending_score.desc(), Article.published_at.desc()
        ).limit(limit).all()

        return [
            {
                'id': article.id,
                'title': article.title,
                'slug': article.slug,
                'categories': [{'id': c.id, 'name': c.name, 'slug': c.slug} for c in article.categories],
                'viewCount': article.view_count or 0,
                'viewsLast24h': article.views_last_24h or 0,
                'trendingScore': article.trending_score or 0,
                'isTrending': bool(article.is_trending),
                'publishedAt': isoformat_or_none(article.published_at),
            }
            for article in articles
        ]
