import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from newsroom import db
from newsroom.api.errors import api_error
from newsroom.api.utils import InvalidParameter, parse_limit
from newsroom.related import related_bp
from newsroom.related.ranker import DEFAULT_LIMIT, MAX_LIMIT, get_related_articles

logger = logging.getLogger(__name__)


@related_bp.route('/related/<int:article_id>', methods=['GET'])
def related(article_id):
    """
    Articles related to the given one by shared categories and tags.

    Query Parameters:
        limit (optional): 1-20, default 4
    """
    try:
        limit = parse_limit(DEFAULT_LIMIT, MAX_LIMIT)
    except InvalidParameter as e:
        return api_error(e.code, e.message, 400)

    try:
        articles = get_related_articles(article_id, limit)
    except SQLAlchemyError:
        db.session.rollback()
        logger.error(f"Related articles lookup failed for article {article_id}", exc_info=True)
        return api_error('internal_error', 'Failed to get related articles.', 500)

    if articles is None:
        return api_error('article_not_found', 'Article not found.', 404)
    return jsonify({'success': True, 'data': articles})
