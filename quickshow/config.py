# quickshow/config.py
import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name, default):
    value = os.environ.get(name)
    return int(value) if value else default


def _env_float(name, default):
    value = os.environ.get(name)
    return float(value) if value else default


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me-in-production")

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///quickshow.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Flask-Caching. SimpleCache is per-process; point CACHE_TYPE at Redis when scaling out.
    CACHE_TYPE = os.environ.get("CACHE_TYPE", "SimpleCache")
    CACHE_DEFAULT_TIMEOUT = 300

    # Upstream catalogs
    TRAKT_CLIENT_ID = os.environ.get("TRAKT_CLIENT_ID", "")
    OMDB_KEY = os.environ.get("OMDB_KEY", "")
    TRAKT_BASE_URL = os.environ.get("TRAKT_BASE_URL", "https://api.trakt.tv")
    OMDB_BASE_URL = os.environ.get("OMDB_BASE_URL", "https://www.omdbapi.com/")
    UPSTREAM_TIMEOUT = _env_float("UPSTREAM_TIMEOUT", 6)
    UPSTREAM_RETRIES = _env_int("UPSTREAM_RETRIES", 3)
    UPSTREAM_BACKOFF = _env_float("UPSTREAM_BACKOFF", 0.5)
    CATALOG_MAX_WORKERS = _env_int("CATALOG_MAX_WORKERS", 8)

    SEATS_PER_SHOW = _env_int("SEATS_PER_SHOW", 90)
    ADMIN_API_KEY = os.environ.get("ADMIN_API_KEY") or None

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    CACHE_TYPE = "NullCache"
    TRAKT_CLIENT_ID = "test-trakt-id"
    OMDB_KEY = "test-omdb-key"
    UPSTREAM_RETRIES = 0
    ADMIN_API_KEY = None
