from dotenv import load_dotenv
import os
import logging

load_dotenv()


def _env_list(name, default=''):
    """Split a comma-separated environment variable into a clean list."""
    raw = os.getenv(name, default) or ''
    return [item.strip().lower() for item in raw.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')

    if not SQLALCHEMY_DATABASE_URI:
        raise ValueError("DATABASE_URL environment variable not set")

    # Heroku-style URLs use the deprecated postgres:// scheme
    if SQLALCHEMY_DATABASE_URI.startswith('postgres://'):
        SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'pool_size': 5,
        'max_overflow': 10,
        'pool_timeout': 30,
        'connect_args': {
            'connect_timeout': 10,
        }
    }

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    LOGGING_CONFIG = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': LOG_LEVEL,
                'formatter': 'default',
            },
        },
        'loggers': {
            'apscheduler': {
                'level': 'WARNING',
            },
            'sqlalchemy.engine': {
                'level': 'WARNING',
            },
        },
        'root': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
        }
    }

    # Shared storage for Flask-Caching and Flask-Limiter; both fall back to
    # process-local storage when unset
    REDIS_URL = os.getenv('REDIS_URL')
    RATELIMIT_STORAGE_URL = REDIS_URL or 'memory://'
    RATELIMIT_HEADERS_ENABLED = True
    ANALYTICS_CACHE_TIMEOUT = int(os.getenv('ANALYTICS_CACHE_TIMEOUT', '60'))

    # Hosts treated as same-site when classifying referrers
    SITE_DOMAINS = _env_list('SITE_DOMAINS', 'localhost')

    # Operator endpoints (trending toggle, SEO score writes) require this key
    # in the X-API-Key header when set
    OPERATOR_API_KEY = os.getenv('OPERATOR_API_KEY')

    CORS_ORIGINS = _env_list('CORS_ORIGINS', '*') or ['*']

    SCHEDULER_ENABLED = os.getenv('SCHEDULER_ENABLED', 'True').lower() == 'true'

    SENTRY_DSN = os.getenv('SENTRY_DSN')


class DevelopmentConfig(Config):
    FLASK_ENV = 'development'
    DEBUG = True
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'False').lower() == 'true'


class ProductionConfig(Config):
    FLASK_ENV = 'production'
    DEBUG = False
    PREFERRED_URL_SCHEME = 'https'
    CACHE_DEFAULT_TIMEOUT = 300


class TestingConfig(Config):
    FLASK_ENV = 'testing'
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # SQLite does not accept pool sizing or connect timeouts
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}
    CACHE_TYPE = 'NullCache'
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URL = 'memory://'
    SCHEDULER_ENABLED = False
    OPERATOR_API_KEY = None
    SITE_DOMAINS = ['localhost', 'newsroom.test']


if Config.OPERATOR_API_KEY is None and os.getenv('FLASK_ENV') == 'production':
    logging.warning("OPERATOR_API_KEY is not set; operator endpoints are unprotected")


config_dict = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
