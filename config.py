"""
Application configuration with environment-specific settings.

Usage:
    from config import get_config
    app.config.from_object(get_config())
"""
import os
from pathlib import Path
from dotenv import load_dotenv

from models.constants import DEFAULT_TEAM_TEMPLATES

# Load environment variables from .env file
load_dotenv()

# Base directory of the application
BASE_DIR = Path(__file__).parent.resolve()


def _optional_float(name):
    value = os.environ.get(name)
    return float(value) if value else None


class Config:
    """Base configuration with common settings."""

    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError(
            "SECRET_KEY environment variable is required!\n"
            "Generate one with: python -c 'import secrets; print(secrets.token_hex(32))'"
        )

    # Session configuration
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour

    # Request size limit for JSON rosters
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_REQUEST_SIZE', 1 * 1024 * 1024))  # 1MB default

    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', f'sqlite:///{BASE_DIR / "matchday.db"}')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False  # Set to True for SQL query debugging

    # Rate limiting
    RATELIMIT_ENABLED = True
    BALANCE_RATE_LIMIT = os.environ.get('BALANCE_RATE_LIMIT', '30 per minute')

    # Balancing engine
    BALANCE_MAX_ATTEMPTS = int(os.environ.get('BALANCE_MAX_ATTEMPTS', 8400))
    BALANCE_EARLY_EXIT_THRESHOLD = float(os.environ.get('BALANCE_EARLY_EXIT_THRESHOLD', 0.05))
    BALANCE_RESHUFFLE_INTERVAL = int(os.environ.get('BALANCE_RESHUFFLE_INTERVAL', 50))
    BALANCE_TIMEOUT_SECONDS = _optional_float('BALANCE_TIMEOUT_SECONDS')  # None = no wall-clock limit

    # Pool size limits for random splits
    MIN_POOL_PLAYERS = 2
    MAX_POOL_PLAYERS = 40

    # Default per-team formations, keyed by team size
    TEAM_TEMPLATES = DEFAULT_TEAM_TEMPLATES

    # Application settings
    JSON_SORT_KEYS = False
    JSONIFY_PRETTYPRINT_REGULAR = False


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    TESTING = False
    SESSION_COOKIE_SECURE = False  # Allow HTTP in development


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True  # Require HTTPS

    # Production-specific settings
    PREFERRED_URL_SCHEME = 'https'
    BALANCE_TIMEOUT_SECONDS = _optional_float('BALANCE_TIMEOUT_SECONDS') or 10.0

    # Additional validation for production
    if not os.environ.get('SECRET_KEY'):
        raise ValueError("SECRET_KEY must be explicitly set in production!")


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG = True
    TESTING = True
    SESSION_COOKIE_SECURE = False
    WTF_CSRF_ENABLED = False  # Disable CSRF for testing
    RATELIMIT_ENABLED = False

    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    # Keep searches short in tests
    BALANCE_MAX_ATTEMPTS = 500
    BALANCE_TIMEOUT_SECONDS = None


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env_name=None):
    """
    Get configuration class for specified environment.

    Args:
        env_name (str): Environment name (development/production/testing)
                       If None, uses FLASK_ENV environment variable

    Returns:
        Config class for the specified environment
    """
    if env_name is None:
        env_name = os.environ.get('FLASK_ENV', 'development')

    return config.get(env_name, config['default'])
