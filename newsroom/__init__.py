from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_caching import Cache
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from config import Config, config_dict
import os
import time
import logging
from logging.config import dictConfig
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration


db = SQLAlchemy()
migrate = Migrate()
cache = Cache()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per hour"]
)

logger = logging.getLogger(__name__)


def try_connect_db(app, retries=3):
    for attempt in range(retries):
        try:
            with app.app_context():
                with db.engine.connect():
                    return True
        except Exception as e:
            app.logger.error(f"Database connection attempt {attempt + 1} failed: {e}")
            time.sleep(1)
    return False


def _init_cache(app):
    """Use the configured cache type, else Redis when available, else SimpleCache."""
    if app.config.get('CACHE_TYPE'):
        cache.init_app(app)
        return

    redis_url = app.config.get('REDIS_URL')
    if redis_url and redis_url.strip():
        try:
            cache.init_app(app, config={
                'CACHE_TYPE': 'RedisCache',
                'CACHE_REDIS_URL': redis_url,
                'CACHE_DEFAULT_TIMEOUT': 300,
                'CACHE_KEY_PREFIX': 'newsroom_',
                'CACHE_OPTIONS': {
                    'socket_timeout': 5,
                    'socket_connect_timeout': 5
                }
            })
            app.logger.info("Cache initialized with Redis URL")
            return
        except Exception as e:
            app.logger.warning(f"Redis cache initialization failed: {e}, falling back to simple cache")

    app.logger.warning("No REDIS_URL available, using simple cache")
    cache.init_app(app, config={'CACHE_TYPE': 'SimpleCache'})


def create_app():
    env = os.getenv('FLASK_ENV', 'development')
    config_class = config_dict.get(env, Config)

    if env == 'production' and config_class.SENTRY_DSN:
        sentry_sdk.init(
            dsn=config_class.SENTRY_DSN,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.2,
        )

    app = Flask(__name__)

    dictConfig(config_class.LOGGING_CONFIG)
    app.config.from_object(config_class)
    app.config['RATELIMIT_STORAGE_URI'] = app.config.get('RATELIMIT_STORAGE_URL', 'memory://')

    _init_cache(app)
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # Import models so Flask-Migrate and create_all() see every table
    from newsroom import models  # noqa: F401

    if not app.config.get('TESTING') and not try_connect_db(app):
        raise RuntimeError("Could not establish database connection")

    from newsroom.api import init_api
    init_api(app)

    from newsroom.commands import init_commands
    init_commands(app)

    @app.route('/health')
    def health():
        return jsonify({'ok': True})

    @app.errorhandler(404)
    def page_not_found(e):
        app.logger.warning(f"404 Not Found: {e}")
        return jsonify({'success': False, 'error': 'not_found',
                        'message': 'The requested resource does not exist.'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'success': False, 'error': 'method_not_allowed',
                        'message': 'The method is not allowed for the requested URL.'}), 405

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"500 Internal Server Error: {e}")
        return jsonify({'success': False, 'error': 'internal_error',
                        'message': 'An internal error occurred.'}), 500

    if app.config.get('SCHEDULER_ENABLED') and not app.config.get('TESTING'):
        from newsroom.scheduler import init_scheduler, start_scheduler
        try:
            init_scheduler(app)
            start_scheduler()
            app.logger.info("Background scheduler started successfully")
        except Exception as e:
            app.logger.error(f"Failed to start scheduler: {e}")

    return app
