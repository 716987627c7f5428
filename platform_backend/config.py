"""
Configuration module for the Flask application.
All deployment-specific values (database URL, CORS origins, limits) are read from environment variables.
"""
import os
import logging

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "https://theplatform-lyart.vercel.app",
    "https://theplatform.vercel.app",
]

SUPPORTED_SCHEMES = ("sqlite://", "postgres://", "postgresql://")


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_origins(value) -> list:
    """Split a comma-separated origin list, falling back to the default front ends."""
    if not value:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class BaseConfig:
    """Base configuration - production-ready settings."""
    DEBUG = False
    TESTING = False

    # Database
    DB_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../database"))
    DATABASE_URL = (os.environ.get("DATABASE_URL") or "").strip() or f"sqlite:///{os.path.join(DB_DIR, 'platform.db')}"
    DB_POOL_MIN = int(os.environ.get("DB_POOL_MIN", 0))
    DB_POOL_MAX = int(os.environ.get("DB_POOL_MAX", 10))
    DB_PREFER_IPV4 = _env_bool("DB_PREFER_IPV4", True)
    DB_SSLMODE = os.environ.get("DB_SSLMODE", "require")
    INIT_DB = _env_bool("INIT_DB", True)

    # Front ends allowed to call the API
    CORS_ORIGINS = parse_origins(os.environ.get("CORS_ORIGINS"))

    # Request body limit; inline images and receipts travel as data URIs
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", 50 * 1024 * 1024))  # 50 MB default

    # Server
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", 5000))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE")


class DevelopmentConfig(BaseConfig):
    """Development-specific config."""
    DEBUG = False  # Even in dev, keep False; use FLASK_DEBUG explicitly
    DB_SSLMODE = os.environ.get("DB_SSLMODE", "prefer")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    """Testing configuration."""
    TESTING = True
    DEBUG = False
    DATABASE_URL = "sqlite:///:memory:"
    LOG_FILE = None


def check_database_url(app) -> bool:
    """
    Warn when DATABASE_URL is missing or uses an unsupported scheme.
    The service still starts; requests fail until the database is reachable.
    """
    url = app.config.get("DATABASE_URL") or ""
    if not url:
        logging.warning("DATABASE_URL is not set or is empty.")
        return False
    if not url.startswith(SUPPORTED_SCHEMES):
        logging.warning(f"DATABASE_URL scheme not supported (expected one of {', '.join(SUPPORTED_SCHEMES)})")
        return False
    return True


def get_config(env=None):
    """Get configuration object based on environment."""
    env = env or os.environ.get("FLASK_ENV", "production")
    if env == "development":
        return DevelopmentConfig()
    elif env == "testing":
        return TestingConfig()
    else:
        return BaseConfig()
