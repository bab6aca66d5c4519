"""
Base Django settings for ActivationService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .env import (
    DEFAULT_PUBLIC_LICENSE_RATE_LIMIT,
    activation_app_name,
    activation_token_ttl_days,
    positive_int,
    require_secret,
)
from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-3v#k1q!p8m0z@r6t2w$y9x5c7b4n^h&j*e(l)s-a+d_f=g"
)

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "ActivationService.apps.ActivationServiceConfig",
    "core",
    "catalog",
    "licenses",
    "activations",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.metrics.MetricsMiddleware",
    "core.middleware.rate_limit.RateLimitMiddleware",
    "core.middleware.auth.AdminSessionAuthenticationMiddleware",
]

ROOT_URLCONF = "ActivationService.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "ActivationService.wsgi.application"
ASGI_APPLICATION = "ActivationService.asgi.application"

# Database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "activation_service"),
        "USER": os.environ.get("DB_USER", "postgres"),
        "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "UNAUTHENTICATED_USER": None,
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "License Activation Service API",
    "DESCRIPTION": (
        "Issues license keys, binds them to client machines and proves "
        "those bindings with signed activation tokens."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api",
    "TAGS": [
        {"name": "License API", "description": "Client-facing activate, validate and deactivate"},
        {"name": "Licenses", "description": "Administrator license management"},
        {"name": "Apps", "description": "Administrator app catalog"},
        {"name": "Activations", "description": "Administrator activation ledger"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# Cache (rate limit counters)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/1"),
        "OPTIONS": {
            "socket_connect_timeout": 5,
            "socket_timeout": 5,
        },
    }
}

# Licensing
JWT_SECRET = require_secret("JWT_SECRET")
LICENSE_TOKEN_SECRET = require_secret("LICENSE_TOKEN_SECRET")
ACTIVATION_TOKEN_TTL_DAYS = activation_token_ttl_days()
ACTIVATION_APP_NAME = activation_app_name()
PUBLIC_LICENSE_RATE_LIMIT = positive_int(
    "PUBLIC_LICENSE_RATE_LIMIT", DEFAULT_PUBLIC_LICENSE_RATE_LIMIT
)
PUBLIC_LICENSE_RATE_WINDOW = 60

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "production"))
