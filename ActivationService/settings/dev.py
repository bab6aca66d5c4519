"""
Development settings for ActivationService.
"""

import os

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET", "dev-session-secret-change-me-0123456789abcdef")
os.environ.setdefault("LICENSE_TOKEN_SECRET", "dev-license-secret-change-me-0123456789abcdef")

from .base import *  # noqa: E402, F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Override with DB_ENGINE=sqlite for a local file database
if os.environ.get("DB_ENGINE") == "sqlite":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
        }
    }

if not os.environ.get("REDIS_URL"):
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    }
