"""
JSON API

Registers the analytics, trending, SEO and related-articles blueprints under
/api. All endpoints:
- Return JSON with the standardized error format
- Allow cross-origin reads from the configured frontend origins
- Apply rate limiting where writes are public
"""
from flask_cors import CORS

from newsroom.api.errors import register_error_handlers


def init_api(app):
    """
    Register every API blueprint with CORS and JSON error handlers.

    Args:
        app: Flask application instance
    """
    from newsroom.analytics import analytics_bp
    from newsroom.trending import trending_bp
    from newsroom.seo import seo_bp
    from newsroom.related import related_bp

    for blueprint in (analytics_bp, trending_bp, seo_bp, related_bp):
        # Blueprint objects are module singletons; guard against re-registering
        # handlers when create_app() is called multiple times in tests.
        if not getattr(blueprint, "_newsroom_error_handlers_registered", False):
            register_error_handlers(blueprint)
            blueprint._newsroom_error_handlers_registered = True
        app.register_blueprint(blueprint, url_prefix='/api')

    # Operator writes send X-API-Key from the admin frontend
    CORS(
        app,
        resources={
            r"/api/*": {
                "origins": app.config.get('CORS_ORIGINS') or '*',
                "methods": ['GET', 'POST', 'OPTIONS'],
                "allow_headers": ['Content-Type', 'X-Requested-With', 'X-API-Key'],
                "max_age": 86400,
            }
        },
        supports_credentials=False,
    )

    app.logger.info("API blueprints registered")


__all__ = ['init_api']
