"""
Environment-derived configuration.

Everything the licensing core reads from the environment is parsed
here once, when settings load.
"""

import os
from typing import Mapping, Optional

from django.core.exceptions import ImproperlyConfigured

MIN_SECRET_LENGTH = 32
DEFAULT_ACTIVATION_TOKEN_TTL_DAYS = 30
MAX_ACTIVATION_TOKEN_TTL_DAYS = 365
DEFAULT_ACTIVATION_APP_NAME = "com.ahmedlotfy.mobilemanagement"
DEFAULT_PUBLIC_LICENSE_RATE_LIMIT = 60


def require_secret(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Read a signing secret.

    Raises:
        ImproperlyConfigured: If the secret is missing or shorter than 32 characters
    """
    environ = os.environ if environ is None else environ
    value = (environ.get(name) or "").strip()
    if not value:
        raise ImproperlyConfigured(f"{name} environment variable is required")
    if len(value) < MIN_SECRET_LENGTH:
        raise ImproperlyConfigured(f"{name} must be at least {MIN_SECRET_LENGTH} characters")
    return value


def positive_int(
    name: str,
    default: int,
    maximum: Optional[int] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Read a positive integer, falling back to ``default`` and clamping to ``maximum``."""
    environ = os.environ if environ is None else environ
    raw = (environ.get(name) or "").strip()
    try:
        value = int(raw)
    except ValueError:
        value = default
    if value <= 0:
        value = default
    if maximum is not None:
        value = min(value, maximum)
    return value


def activation_token_ttl_days(environ: Optional[Mapping[str, str]] = None) -> int:
    return positive_int(
        "ACTIVATION_TOKEN_TTL_DAYS",
        DEFAULT_ACTIVATION_TOKEN_TTL_DAYS,
        maximum=MAX_ACTIVATION_TOKEN_TTL_DAYS,
        environ=environ,
    )


def activation_app_name(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return (environ.get("ACTIVATION_APP_NAME") or "").strip() or DEFAULT_ACTIVATION_APP_NAME
