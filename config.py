import os
import secrets
from dotenv import load_dotenv
from typing import Optional

import pytz

# Find the absolute path of the root directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load the .env file from the root directory
load_dotenv(os.path.join(basedir, '.env'))


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid"""
    pass


def _database_uri(*env_keys: str, default: Optional[str] = None) -> Optional[str]:
    """First database URL found in the environment, normalized for SQLAlchemy"""
    for key in env_keys:
        uri = os.environ.get(key)
        if uri:
            # Heroku-style URLs use a scheme SQLAlchemy 2 no longer accepts
            if uri.startswith('postgres://'):
                uri = 'postgresql://' + uri[len('postgres://'):]
            return uri
    return default


class Config:
    """
    Settings shared by every environment. Each value can be overridden
    from the environment or the .env file at the project root.
    """
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)
    FLASK_ENV = os.environ.get('FLASK_ENV')

    @classmethod
    def validate_required_config(cls) -> None:
        """Validate that all required configuration is present"""
        if os.environ.get('FLASK_ENV') == 'testing' or os.environ.get('SKIP_ENV_VALIDATION'):
            return

        required_vars = ['SECRET_KEY', 'MAIL_SERVER']
        if not (os.environ.get('DATABASE_URL') or os.environ.get('POSTGRES_URI')):
            required_vars.append('DATABASE_URL')

        missing_vars = [var for var in required_vars if not os.environ.get(var)]
        if missing_vars:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )

    @staticmethod
    def validate_timezone(name: str) -> str:
        if name not in pytz.all_timezones_set:
            raise ConfigurationError(f"CASA_TIMEZONE {name!r} is not a known time zone")
        return name

    # Database
    SQLALCHEMY_DATABASE_URI = _database_uri(
        'POSTGRES_URI', 'DATABASE_URL',
        default='sqlite:///' + os.path.join(basedir, 'casa.db')
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Outgoing mail (fund request notices)
    MAIL_SERVER = os.environ.get('MAIL_SERVER')
    MAIL_PORT = int(os.environ.get('MAIL_PORT') or 587)
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS', 'true').lower() == 'true'
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'noreply@casavolunteertracking.org')

    # Used when an organization has no fund_request_email of its own
    FUND_REQUEST_RECIPIENT_EMAIL = os.environ.get('FUND_REQUEST_RECIPIENT_EMAIL')

    # "Today" for contact recency is the calendar date in this zone
    CASA_TIMEZONE = os.environ.get('CASA_TIMEZONE', 'America/New_York')

    # Session cookie
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_NAME = 'casa_session'
    PERMANENT_SESSION_LIFETIME = 86400  # 24 hours

    BCRYPT_LOG_ROUNDS = 12

    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    @classmethod
    def init_app(cls, app):
        cls.validate_timezone(app.config['CASA_TIMEZONE'])


class DevelopmentConfig(Config):
    """Local development: sqlite by default, mail is not delivered"""
    DEBUG = True
    TESTING = False

    SQLALCHEMY_DATABASE_URI = _database_uri('DEV_DATABASE_URL', default=Config.SQLALCHEMY_DATABASE_URI)

    MAIL_SUPPRESS_SEND = True

    BCRYPT_LOG_ROUNDS = 8


class TestingConfig(Config):
    TESTING = True
    DEBUG = True

    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    # Flask-Mail records outbox messages instead of sending them
    MAIL_SUPPRESS_SEND = True
    MAIL_SERVER = 'localhost'
    FUND_REQUEST_RECIPIENT_EMAIL = 'fund-requests@example.org'
    CASA_TIMEZONE = 'America/New_York'

    BCRYPT_LOG_ROUNDS = 4


class ProductionConfig(Config):
    """Production: Postgres, secure cookies, strict validation"""
    DEBUG = False
    TESTING = False

    SQLALCHEMY_DATABASE_URI = _database_uri('DATABASE_URL', 'POSTGRES_URI')

    SESSION_COOKIE_SECURE = True

    BCRYPT_LOG_ROUNDS = 14

    @classmethod
    def init_app(cls, app):
        cls.validate_required_config()
        if not app.config.get('SQLALCHEMY_DATABASE_URI'):
            raise ConfigurationError("Required environment variable DATABASE_URL is not set")
        super().init_app(app)


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name: Optional[str] = None) -> type[Config]:
    """Get configuration class based on environment"""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    return config.get(config_name, DevelopmentConfig)
