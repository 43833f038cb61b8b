"""
Standardized API Error Responses

All API errors return: {"success": false, "error": "code", "message": "human readable message"}
"""
from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException


def api_error(code: str, message: str, status_code: int = 400):
    """
    Build a JSON error response.

    Args:
        code: Machine-readable error code (e.g., 'invalid_limit', 'article_not_found')
        message: Human-readable error message
        status_code: HTTP status code (default 400)

    Example:
        return api_error('article_not_found', 'Article not found.', 404)
    """
    response = jsonify({
        'success': False,
        'error': code,
        'message': message
    })
    response.status_code = status_code
    return response


def register_error_handlers(blueprint):
    """
    Turn errors raised inside an API blueprint into JSON.

    Validation and not-found cases return api_error() directly from the
    views; these handlers cover what escapes them: Flask-Limiter's 429,
    unhandled exceptions and any other HTTPException.
    """

    @blueprint.errorhandler(429)
    def rate_limited(e):
        return api_error('rate_limited', 'Too many requests. Please retry later.', 429)

    @blueprint.errorhandler(500)
    def internal_error(e):
        original = getattr(e, 'original_exception', None) or e
        current_app.logger.error(f'Unhandled API error on {blueprint.name}: {original}')
        return api_error('internal_error', 'An internal error occurred.', 500)

    @blueprint.errorhandler(HTTPException)
    def http_error(e):
        return api_error(e.name.lower().replace(' ', '_'), e.description or e.name, e.code)
