from functools import wraps
from flask import request, current_app
from newsroom import db
from newsroom.analytics.tracker import record_view
from newsroom.api.utils import get_client_fingerprint_parts


def track_article_view(f):
    """
    Record a page view for the article being rendered.

    The wrapped view must take an `article_id` keyword argument. Tracking is
    best-effort: failures are logged and the page still renders.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        article_id = kwargs.get('article_id')
        if article_id:
            try:
                ip, user_agent = get_client_fingerprint_parts()
                outcome = record_view(
                    article_id,
                    ip,
                    user_agent,
                    referrer=request.referrer,
                    site_domains=current_app.config.get('SITE_DOMAINS', []),
                )
                current_app.logger.debug(f"View tracking for article {article_id}: {outcome}")
            except Exception as e:
                # Log the error but don't break page rendering
                current_app.logger.error(f"Failed to track view for article {article_id}: {e}")
                db.session.rollback()
        return f(*args, **kwargs)
    return decorated_function
