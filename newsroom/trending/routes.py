"""
Trending API Endpoints

Manual recalculation, the trending list, and the operator toggle.
"""
import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from newsroom import db, limiter
from newsroom.api.errors import api_error
from newsroom.api.utils import InvalidParameter, parse_limit
from newsroom.decorators import operator_required
from newsroom.trending import trending_bp
from newsroom.trending.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT
from newsroom.trending.scorer import calculate_trending_scores, list_trending, toggle_manual_trending

logger = logging.getLogger(__name__)


@trending_bp.route('/trending/calculate', methods=['POST'])
@limiter.limit("10 per minute")
def calculate():
    """Rescore every published article now."""
    try:
        summary = calculate_trending_scores()
    except SQLAlchemyError:
        db.session.rollback()
        logger.error("Trending calculation failed", exc_info=True)
        return api_error('internal_error', 'Failed to calculate trending.', 500)

    return jsonify({
        'success': True,
        'message': f"Updated {summary['updated']} articles",
        **summary,
    })


@trending_bp.route('/trending/list', methods=['GET'])
def trending_list():
    """
    Articles currently flagged as trending.

    Query Parameters:
        limit (optional): 1-50, default 10
    """
    try:
        limit = parse_limit(DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT)
    except InvalidParameter as e:
        return api_error(e.code, e.message, 400)

    try:
        articles = list_trending(limit)
    except SQLAlchemyError:
        db.session.rollback()
        logger.error("Failed to list trending articles", exc_info=True)
        return api_error('internal_error', 'Failed to get trending.', 500)

    return jsonify({'success': True, 'data': articles})


@trending_bp.route('/trending/toggle/<int:article_id>', methods=['POST'])
@operator_required
def toggle(article_id):
    try:
        article = toggle_manual_trending(article_id)
    except SQLAlchemyError:
        db.session.rollback()
        logger.error(f"Failed to toggle trending for article {article_id}", exc_info=True)
        return api_error('internal_error', 'Failed to toggle trending.', 500)

    if article is None:
        return api_error('article_not_found', 'Article not found.', 404)

    return jsonify({
        'success': True,
        'isTrending': article.is_trending,
        'message': 'Article marked as trending' if article.is_trending else 'Article removed from trending',
    })
