"""
SEO API Endpoints
"""
import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from newsroom import db
from newsroom.api.errors import api_error
from newsroom.api.utils import InvalidParameter, parse_limit, parse_offset
from newsroom.decorators import operator_required
from newsroom.seo import seo_bp
from newsroom.seo.service import (
    analyze_stored_article, update_article_scores, get_seo_overview,
    list_articles_by_seo, count_published_articles,
)

logger = logging.getLogger(__name__)

DEFAULT_ARTICLES_LIMIT = 50
MAX_ARTICLES_LIMIT = 200


@seo_bp.route('/seo/analyze/<int:article_id>', methods=['GET'])
def analyze(article_id):
    """Run the analyzer on a stored article without saving anything."""
    try:
        analysis = analyze_stored_article(article_id)
    except SQLAlchemyError:
        db.session.rollback()
        logger.error(f"SEO analysis failed for article {article_id}", exc_info=True)
        return api_error('internal_error', 'Failed to analyze.', 500)

    if analysis is None:
        return api_error('article_not_found', 'Article not found.', 404)
    return jsonify({'success': True, **analysis})


@seo_bp.route('/seo/overview', methods=['GET'])
def overview():
    try:
        data = get_seo_overview()
    except SQLAlchemyError:
        db.session.rollback()
        logger.error("Failed to build SEO overview", exc_info=True)
        return api_error('internal_error', 'Failed to get overview.', 500)

    return jsonify({'success': True, **data})


@seo_bp.route('/seo/articles', methods=['GET'])
def articles():
    """
    Published articles ordered by SEO score, worst first.

    Query Parameters:
        limit (optional): 1-200, default 50
        offset (optional): default 0
    """
    try:
        limit = parse_limit(DEFAULT_ARTICLES_LIMIT, MAX_ARTICLES_LIMIT)
        offset = parse_offset()
    except InvalidParameter as e:
        return api_error(e.code, e.message, 400)

    try:
        data = list_articles_by_seo(limit, offset)
        total = count_published_articles()
    except SQLAlchemyError:
        db.session.rollback()
        logger.error("Failed to list articles by SEO score", exc_info=True)
        return api_error('internal_error', 'Failed to get articles.', 500)

    return jsonify({
        'success': True,
        'data': data,
        'total': total,
        'limit': limit,
        'offset': offset,
    })


@seo_bp.route('/seo/update/<int:article_id>', methods=['POST'])
@operator_required
def update(article_id):
    try:
        analysis = update_article_scores(article_id)
    except SQLAlchemyError:
        db.session.rollback()
        logger.error(f"Failed to update SEO scores for article {article_id}", exc_info=True)
        return api_error('internal_error', 'Failed to update scores.', 500)

    if analysis is None:
        return api_error('article_not_found', 'Article not found.', 404)
    return jsonify({'success': True, **analysis.to_dict()})
