"""
Relatedness Ranker

Candidates are published articles sharing at least one category with the
source, newest first, capped at twice the requested count. Each candidate
scores:

- +2 per shared category
- +1 per source tag found among the candidate's tags (case-insensitive)
- +1 if published within the last RECENT_BONUS_DAYS

Candidates are then stable-sorted by score so ties stay newest first.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from newsroom import db
from newsroom.lib.time import age_in_days, isoformat_or_none, utcnow_naive
from newsroom.models import Article, Category

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 4
MAX_LIMIT = 20
CANDIDATE_MULTIPLIER = 2

CATEGORY_MATCH_POINTS = 2
TAG_MATCH_POINTS = 1
RECENCY_POINTS = 1
RECENT_BONUS_DAYS = 7

UNCATEGORIZED = 'Uncategorized'
UNCATEGORIZED_SLUG = 'uncategorized'


def similarity_score(
    source_category_ids: Iterable[int],
    source_tags: Iterable[str],
    candidate_category_ids: Iterable[int],
    candidate_tags: Iterable[str],
    candidate_age_days: float
) -> int:
    """
    Score one candidate against the source article.

    >>> similarity_score([1, 2], ['election', 'Budget'], [1], ['budget', 'ELECTION'], 3)
    5
    """
    candidate_categories = set(candidate_category_ids)
    score = sum(CATEGORY_MATCH_POINTS for cid in source_category_ids if cid in candidate_categories)

    candidate_tag_set = {str(tag).lower() for tag in (candidate_tags or [])}
    score += sum(TAG_MATCH_POINTS for tag in (source_tags or []) if str(tag).lower() in candidate_tag_set)

    if candidate_age_days < RECENT_BONUS_DAYS:
        score += RECENCY_POINTS
    return score


def rank_candidates(source: Article, candidates: Sequence[Article], limit: int,
                    now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Score, stable-sort and truncate candidates already in newest-first order."""
    now = now or utcnow_naive()
    source_category_ids = [category.id for category in source.categories]
    source_tags = source.tags or []

    scored = [
        (similarity_score(
            source_category_ids,
            source_tags,
            [category.id for category in candidate.categories],
            candidate.tags or [],
            age_in_days(candidate.published_at, now),
        ), candidate)
        for candidate in candidates
    ]
    # sorted() is stable, so equal scores keep publish order
    scored = sorted(scored, key=lambda item: item[0], reverse=True)[:limit]

    return [_serialize(candidate, score) for score, candidate in scored]


def _serialize(article: Article, score: int) -> Dict[str, Any]:
    primary = article.primary_category
    return {
        'id': article.id,
        'title': article.title,
        'slug': article.slug,
        'excerpt': article.excerpt,
        'category': primary.name if primary else UNCATEGORIZED,
        'categorySlug': primary.slug if primary else UNCATEGORIZED_SLUG,
        'featuredImage': article.featured_image_url,
        'publishedAt': isoformat_or_none(article.published_at),
        'similarityScore': score,
    }


def get_related_articles(article_id: int, limit: int = DEFAULT_LIMIT,
                         now: Optional[datetime] = None) -> Optional[List[Dict[str, Any]]]:
    """
    Top `limit` articles related to `article_id`.

    Returns None when the source article doesn't exist, and an empty list
    when it has no categories.
    """
    source = db.session.get(Article, article_id)
    if source is None:
        return None

    category_ids = [category.id for category in source.categories]
    if not category_ids:
        return []

    candidates = Article.query.filter(
        Article.id != source.id,
        Article.published_at.isnot(None),
        Article.categories.any(Category.id.in_(category_ids))
    ).order_by(
        Article.published_at.desc(), Article.id.desc()
    ).limit(limit * CANDIDATE_MULTIPLIER).all()

    return rank_candidates(source, candidates, limit, now)


def related_articles_for_page(article_id: int, limit: int = DEFAULT_LIMIT) -> List[Dict[str, Any]]:
    """Related articles for page rendering; never raises."""
    try:
        return get_related_articles(article_id, limit) or []
    except Exception as e:
        logger.error(f"Related articles lookup failed for article {article_id}: {e}")
        db.session.rollback()
        return []
