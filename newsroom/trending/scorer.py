"""
Trending Scorer

Recomputes each article's trending score from page views in the trailing
24 hours, the 24-48 hour band and the trailing week, decayed by article age.

Two batch variants share calculate_trending_scores():
- manual (HTTP / CLI): every published article; an article already flagged
  trending stays flagged
- scheduled (hourly): articles published in the last RECENT_WINDOW_DAYS; the
  operator's is_manually_featured choice keeps an article flagged

Each article is read, scored and committed in its own step so one failure
doesn't abort the run.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from newsroom import db
from newsroom.analytics.tracker import count_views
from newsroom.lib.time import age_in_days, days_ago, hours_ago, isoformat_or_none, utcnow_naive
from newsroom.models import Article
from newsroom.trending.constants import (
    VIEWS_24H_WEIGHT, VIEWS_48H_WEIGHT, AGE_DECAY_PER_DAY, TRENDING_THRESHOLD,
    SCORE_PRECISION, RECENT_WINDOW_DAYS, DEFAULT_LIST_LIMIT, UNCATEGORIZED,
)
from newsroom.utils import round_half_up

logger = logging.getLogger(__name__)


def compute_trending_score(views_24h: int, views_48h: int, article_age_days: float) -> float:
    """
    Decaying popularity score, never negative, rounded to 2 decimals.

    >>> compute_trending_score(10, 4, 2)
    21.8
    """
    raw = (
        views_24h * VIEWS_24H_WEIGHT
        + views_48h * VIEWS_48H_WEIGHT
        - article_age_days * AGE_DECAY_PER_DAY
    )
    return round_half_up(max(0.0, raw), SCORE_PRECISION)


def resolve_trending_flag(score: float, override: bool) -> bool:
    return score > TRENDING_THRESHOLD or bool(override)


def growth_percent(views_24h: int, views_7d: int) -> int:
    """Last 24h views relative to the 7-day daily average, as a whole percent."""
    daily_average = (views_7d or 0) / 7
    if daily_average <= 0:
        return 0
    # Halves round toward +infinity, so -12.5 reports as -12
    return math.floor(((views_24h or 0) - daily_average) / daily_average * 100 + 0.5)


def _score_article(article: Article, now: datetime, recent_only: bool) -> None:
    # Read the override before anything is written for this article
    override = article.is_manually_featured if recent_only else article.is_trending

    views_24h = count_views(article.id, hours_ago(24, now))
    views_48h = count_views(article.id, hours_ago(48, now), hours_ago(24, now))
    views_7d = count_views(article.id, days_ago(7, now))

    score = compute_trending_score(views_24h, views_48h, age_in_days(article.published_at, now))

    article.views_last_24h = views_24h
    article.views_last_7d = views_7d
    article.trending_score = score
    article.is_trending = resolve_trending_flag(score, override)


def calculate_trending_scores(recent_only: bool = False, now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Rescore published articles and persist their metrics.

    Args:
        recent_only: Scheduled variant; only articles published within the
            last RECENT_WINDOW_DAYS, overridden by is_manually_featured
        now: Override for the current time

    Returns:
        {'processed': n, 'updated': n, 'failed': n}
    """
    now = now or utcnow_naive()
    variant = 'scheduled' if recent_only else 'manual'

    query = db.session.query(Article.id).filter(Article.published_at.isnot(None))
    if recent_only:
        query = query.filter(Article.published_at >= days_ago(RECENT_WINDOW_DAYS, now))
    article_ids = [row.id for row in query.order_by(Article.id).all()]

    logger.info(f"Trending calculation ({variant}) started for {len(article_ids)} articles")

    summary = {'processed': 0, 'updated': 0, 'failed': 0}
    for article_id in article_ids:
        summary['processed'] += 1
        try:
            article = db.session.get(Article, article_id)
            if article is None:
                continue
            _score_article(article, now, recent_only)
            db.session.commit()
            summary['updated'] += 1
        except Exception as e:
            db.session.rollback()
            summary['failed'] += 1
            logger.error(f"Failed to update trending score for article {article_id}: {e}", exc_info=True)

    logger.info(
        f"Trending calculation ({variant}) complete: {summary['updated']} updated, "
        f"{summary['failed']} failed"
    )
    return summary


def toggle_manual_trending(article_id: int) -> Optional[Article]:
    """
    Flip an article's trending flag regardless of its score.

    Returns the updated article, or None if it doesn't exist.
    """
    article = db.session.get(Article, article_id)
    if article is None:
        return None

    article.is_trending = not article.is_trending
    article.is_manually_featured = article.is_trending
    db.session.commit()

    logger.info(f"Article {article_id} manually {'marked' if article.is_trending else 'removed from'} trending")
    return article


def list_trending(limit: int = DEFAULT_LIST_LIMIT) -> List[Dict[str, Any]]:
    articles = Article.query.filter(
        Article.published_at.isnot(None),
        Article.is_trending.is_(True)
    ).order_by(
        Article.trending_score.desc()
    ).limit(limit).all()

    results = []
    for article in articles:
        primary = article.primary_category
        views_24h = article.views_last_24h or 0
        results.append({
            'id': article.id,
            'title': article.title,
            'slug': article.slug,
            'excerpt': article.excerpt,
            'category': primary.name if primary else UNCATEGORIZED,
            'views24h': views_24h,
            'trendingScore': article.trending_score or 0,
            'growthPercent': growth_percent(views_24h, article.views_last_7d),
            'publishedAt': isoformat_or_none(article.published_at),
        })
    return results
