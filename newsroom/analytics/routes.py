"""
Analytics API Endpoints

Public view tracking plus read-only dashboard statistics.
"""
import logging

from flask import request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from newsroom import db, limiter, cache
from newsroom.analytics import analytics_bp
from newsroom.analytics.stats import AnalyticsStats
from newsroom.analytics.tracker import record_view, ARTICLE_NOT_FOUND, ALREADY_TRACKED
from newsroom.api.errors import api_error
from newsroom.api.utils import InvalidParameter, parse_article_id, get_client_fingerprint_parts

logger = logging.getLogger(__name__)

OVERVIEW_CACHE_KEY = 'analytics:overview'


@analytics_bp.route('/analytics/track', methods=['POST'])
@limiter.limit("60 per minute")
def track_view():
    """
    Record a page view.

    Body (JSON):
        articleId (required): Article being viewed
        referrer (optional): Referer URL or referrer category
        device (optional): Device category; derived from User-Agent otherwise

    Returns:
        200: {"success": true} or {"success": true, "message": "Already tracked"}
        400: Missing or invalid articleId
        404: Unknown or unpublished article
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return api_error('bad_request', 'Request body must be a JSON object.', 400)

    try:
        article_id = parse_article_id(data.get('articleId'))
    except InvalidParameter as e:
        return api_error(e.code, e.message, 400)

    referrer = data.get('referrer') or request.referrer
    device = data.get('device')
    ip, user_agent = get_client_fingerprint_parts()

    try:
        outcome = record_view(
            article_id,
            ip,
            user_agent,
            referrer=referrer if isinstance(referrer, str) else None,
            device=device if isinstance(device, str) else None,
            site_domains=current_app.config.get('SITE_DOMAINS', []),
        )
    except SQLAlchemyError:
        db.session.rollback()
        logger.error(f"Failed to track view for article {article_id}", exc_info=True)
        return api_error('internal_error', 'Failed to track view.', 500)

    if outcome == ARTICLE_NOT_FOUND:
        return api_error('article_not_found', 'Article not found.', 404)
    if outcome == ALREADY_TRACKED:
        return jsonify({'success': True, 'message': 'Already tracked'})
    return jsonify({'success': True})


@analytics_bp.route('/analytics/overview', methods=['GET'])
def overview():
    """Site-wide view counts, audience and traffic breakdowns."""
    cached = cache.get(OVERVIEW_CACHE_KEY)
    if cached:
        return jsonify(cached)

    try:
        data = AnalyticsStats.get_overview()
    except SQLAlchemyError:
        db.session.rollback()
        logger.error("Failed to build analytics overview", exc_info=True)
        return api_error('internal_error', 'Failed to load analytics overview.', 500)

    response_data = {'success': True, **data}
    cache.set(OVERVIEW_CACHE_KEY, response_data,
              timeout=current_app.config.get('ANALYTICS_CACHE_TIMEOUT', 60))
    return jsonify(response_data)


@analytics_bp.route('/analytics/trending', methods=['GET'])
def top_articles():
    """Published articles with the highest stored trending score."""
    try:
        articles = AnalyticsStats.get_top_articles()
    except SQLAlchemyError:
        db.session.rollback()
        logger.error("Failed to load top articles", exc_info=True)
        return api_error('internal_error', 'Failed to load trending articles.', 500)

    return jsonify({'success': True, 'data': articles})


@analytics_bp.route('/analytics/article/<int:article_id>', methods=['GET'])
def article_stats(article_id):
    try:
        stats = AnalyticsStats.get_article_stats(article_id)
    except SQLAlchemyError:
        db.session.rollback()
        logger.error(f"Failed to load stats for article {article_id}", exc_info=True)
        return api_error('internal_error', 'Failed to load article stats.', 500)

    if stats is None:
        return api_error('article_not_found', 'Article not found.', 404)
    return jsonify({'success': True, **stats})
