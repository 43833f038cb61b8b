"""
SEO Score Service

Loads articles, runs the content analyzer and persists the three scores.
Also aggregates stored scores for the SEO dashboard.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func

from newsroom import db
from newsroom.lib.time import isoformat_or_none
from newsroom.models import Article
from newsroom.seo.analyzer import SEOAnalysis, analyze_model, score_label
from newsroom.utils import round_half_up

logger = logging.getLogger(__name__)

OPTIMIZED_MIN_SCORE = 70
NEEDS_IMPROVEMENT_MIN_SCORE = 40

UNCATEGORIZED = 'Uncategorized'


def _published_articles():
    return Article.query.filter(Article.published_at.isnot(None))


def analyze_stored_article(article_id: int) -> Optional[Dict[str, Any]]:
    """Analysis of a stored article, or None if it doesn't exist."""
    article = db.session.get(Article, article_id)
    if article is None:
        return None

    return {
        'articleId': article.id,
        'title': article.title,
        **analyze_model(article).to_dict(),
    }


def _apply_scores(article: Article, analysis: SEOAnalysis) -> None:
    article.seo_score = analysis.seo_score
    article.readability_score = analysis.readability_score
    article.ai_readiness_score = analysis.ai_readiness_score


def update_article_scores(article_id: int) -> Optional[SEOAnalysis]:
    """Re-analyze one article and persist its scores; None if it doesn't exist."""
    article = db.session.get(Article, article_id)
    if article is None:
        return None

    analysis = analyze_model(article)
    _apply_scores(article, analysis)
    db.session.commit()

    logger.debug(f"SEO scores updated for article {article_id}: {analysis.seo_score}/"
                 f"{analysis.readability_score}/{analysis.ai_readiness_score}")
    return analysis


def update_all_scores() -> Dict[str, int]:
    """
    Re-analyze every published article.

    Each article is committed on its own; failures are logged and skipped.

    Returns:
        {'processed': n, 'updated': n, 'failed': n}
    """
    article_ids = [row.id for row in db.session.query(Article.id).filter(
        Article.published_at.isnot(None)
    ).order_by(Article.id).all()]

    logger.info(f"SEO score update started for {len(article_ids)} articles")

    summary = {'processed': 0, 'updated': 0, 'failed': 0}
    for article_id in article_ids:
        summary['processed'] += 1
        try:
            if update_article_scores(article_id) is not None:
                summary['updated'] += 1
        except Exception as e:
            db.session.rollback()
            summary['failed'] += 1
            logger.error(f"Failed to update SEO scores for article {article_id}: {e}", exc_info=True)

    logger.info(f"SEO score update complete: {summary['updated']} updated, {summary['failed']} failed")
    return summary


def get_seo_overview() -> Dict[str, Any]:
    """Bucket stored SEO scores of published articles; unscored counts as 0."""
    scores = [score or 0 for (score,) in db.session.query(Article.seo_score).filter(
        Article.published_at.isnot(None)
    ).all()]

    optimized = sum(1 for score in scores if score >= OPTIMIZED_MIN_SCORE)
    needs_improvement = sum(
        1 for score in scores if NEEDS_IMPROVEMENT_MIN_SCORE <= score < OPTIMIZED_MIN_SCORE
    )
    poor = len(scores) - optimized - needs_improvement

    total = len(scores)
    return {
        'totalArticles': total,
        'averageSeoScore': round_half_up(sum(scores) / total) if total else 0,
        'optimizedPercent': round_half_up(optimized / max(total, 1) * 100),
        'breakdown': {
            'optimized': optimized,
            'needsImprovement': needs_improvement,
            'poor': poor,
        },
    }


def list_articles_by_seo(limit: int, offset: int = 0) -> List[Dict[str, Any]]:
    """Published articles, worst SEO score first."""
    # Unscored articles sort with the zeros
    articles = _published_articles().order_by(
        func.coalesce(Article.seo_score, 0).asc(), Article.id.asc()
    ).offset(offset).limit(limit).all()

    results = []
    for article in articles:
        primary = article.primary_category
        seo_score = article.seo_score or 0
        results.append({
            'id': article.id,
            'title': article.title,
            'slug': article.slug,
            'category': primary.name if primary else UNCATEGORIZED,
            'seoScore': seo_score,
            'readabilityScore': article.readability_score or 0,
            'aiReadinessScore': article.ai_readiness_score or 0,
            'label': score_label(seo_score),
            'publishedAt': isoformat_or_none(article.published_at),
        })
    return results


def count_published_articles() -> int:
    return _published_articles().count()
