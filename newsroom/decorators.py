"""
Shared Decorators

Common decorators used across multiple blueprints.
"""

import hmac
from functools import wraps

from flask import current_app, request

from newsroom.api.errors import api_error


def operator_required(f):
    """
    Require the operator API key for write endpoints.

    The key is sent in the X-API-Key header and compared in constant time
    against OPERATOR_API_KEY. When no key is configured the endpoint is open
    (local development and tests).

        @bp.route('/trending/toggle/<int:article_id>', methods=['POST'])
        @operator_required
        def toggle(article_id):
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        expected = current_app.config.get('OPERATOR_API_KEY')
        if expected:
            provided = request.headers.get('X-API-Key', '')
            if not hmac.compare_digest(provided.encode('utf-8'), expected.encode('utf-8')):
                current_app.logger.warning(
                    f"Rejected operator request to {request.path} from {request.remote_addr}"
                )
                return api_error('unauthorized', 'A valid operator API key is required.', 401)
        return f(*args, **kwargs)
    return decorated_function
