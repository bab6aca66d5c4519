"""
Rate limiting middleware.

Implements a fixed-window limit per client IP on the public license API.
"""

import hashlib
import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import rate_limited_total

PUBLIC_PREFIX = "/api/v1/license"


def client_ip(request: HttpRequest) -> str:
    """
    Client IP for rate limiting and audit logs.

    First ``X-Forwarded-For`` entry, then ``X-Real-IP``, then ``REMOTE_ADDR``.
    """
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.META.get("HTTP_X_REAL_IP", "").strip()
    if real_ip:
        return real_ip
    return request.META.get("REMOTE_ADDR") or "unknown"


class RateLimitMiddleware:
    """
    Rate limiting middleware per client IP.

    Counters live in the Django cache so every worker sharing the cache
    shares the limit. Defaults to 60 requests per minute.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    @property
    def limit(self) -> int:
        return settings.PUBLIC_LICENSE_RATE_LIMIT

    @property
    def window(self) -> int:
        return settings.PUBLIC_LICENSE_RATE_WINDOW

    def _get_rate_limit_key(self, ip: str, window_start: int) -> str:
        """
        Generate cache key for rate limiting.

        Args:
            ip: Client IP
            window_start: Index of the current window

        Returns:
            Cache key string
        """
        ip_hash = hashlib.sha256(ip.encode()).hexdigest()[:16]
        return f"rate_limit:license:{ip_hash}:{window_start}"

    def _check_rate_limit(self, ip: str) -> Tuple[bool, int, int]:
        """
        Count this request and check it is within the limit.

        Args:
            ip: Client IP

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.window)
        reset_time = (window_start + 1) * self.window
        key = self._get_rate_limit_key(ip, window_start)

        if cache.add(key, 1, timeout=self.window):
            count = 1
        else:
            try:
                count = cache.incr(key, 1)
            except ValueError:
                # Expired between add and incr
                cache.set(key, 1, timeout=self.window)
                count = 1

        if count > self.limit:
            return False, 0, reset_time
        return True, self.limit - count, reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not request.path.startswith(PUBLIC_PREFIX):
            return self.get_response(request)

        is_allowed, remaining, reset_time = self._check_rate_limit(client_ip(request))

        if not is_allowed:
            rate_limited_total.labels(endpoint=request.path).inc()
            response = JsonResponse(
                {"success": False, "error": "Too many requests. Please try again later."},
                status=429,
            )
            response["Retry-After"] = str(max(1, reset_time - int(time.time())))
        else:
            response = self.get_response(request)

        # Add rate limit headers (RFC 6585)
        response["X-RateLimit-Limit"] = str(self.limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)

        return response
