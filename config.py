import os
from datetime import timedelta

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes')


class Config:
    """Base configuration"""

    APP_NAME = os.environ.get('APP_NAME') or 'ExpenseTracker Pro'
    APP_VERSION = '1.0.0'

    # Secret key for session management
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    # DATABASE_PATH is what the desktop shell passes to the child process
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or \
        os.path.join(BASE_DIR, 'instance', 'expensetracker.db')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + DATABASE_PATH
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False  # Set to True for SQL query logging during development
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }

    # Backups
    BACKUP_DIR = os.environ.get('BACKUP_DIR') or os.path.join(BASE_DIR, 'backups')
    BACKUP_ENCRYPTION_ENABLED = _env_bool('BACKUP_ENCRYPTION_ENABLED')
    ENCRYPTION_KEY = os.environ.get('ENCRYPTION_KEY', '')

    # Session configuration
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # CSRF Protection (JSON API blueprints are exempted in create_app)
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = None

    # Rate Limiting
    RATELIMIT_STORAGE_URI = 'memory://'
    RATELIMIT_STRATEGY = 'fixed-window'
    RATELIMIT_HEADERS_ENABLED = True
    LOGIN_RATE_LIMIT = '10 per minute'

    # Security Headers
    SECURITY_HEADERS = {
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'SAMEORIGIN',
        'X-XSS-Protection': '1; mode=block',
        'Referrer-Policy': 'strict-origin-when-cross-origin'
    }

    # Login Security
    PASSWORD_MIN_LENGTH = 8
    MAX_LOGIN_ATTEMPTS = int(os.environ.get('MAX_LOGIN_ATTEMPTS', 3))
    LOCKOUT_DURATION = timedelta(minutes=int(os.environ.get('LOCKOUT_MINUTES', 15)))

    # User defaults for the first-run profile
    DEFAULT_CURRENCY = os.environ.get('DEFAULT_CURRENCY', 'USD')
    DEFAULT_THEME = os.environ.get('DEFAULT_THEME', 'light')
    DEFAULT_DATE_FORMAT = os.environ.get('DEFAULT_DATE_FORMAT', 'MM/DD/YYYY')

    # Paging
    MAX_RECORDS_PER_PAGE = int(os.environ.get('MAX_RECORDS_PER_PAGE', 100))

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    SLOW_REQUEST_SECONDS = 2.0

    @classmethod
    def init_app(cls, app):
        pass


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    # MUST set these environment variables in production
    SECRET_KEY = os.environ.get('SECRET_KEY')

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)

        if not app.config.get('SECRET_KEY'):
            raise ValueError("SECRET_KEY environment variable must be set in production!")

        if app.config.get('BACKUP_ENCRYPTION_ENABLED') and not app.config.get('ENCRYPTION_KEY'):
            raise ValueError("ENCRYPTION_KEY must be set when BACKUP_ENCRYPTION_ENABLED is true!")


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    BACKUP_ENCRYPTION_ENABLED = False
    ENCRYPTION_KEY = ''


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
