"""
Administrator session authentication middleware.

This middleware guards the dashboard API with signed session tokens
whose referenced server-side session must still be live.
"""

import logging
from typing import Optional

from django.contrib.sessions.models import Session
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils import timezone
from django.utils.deprecation import MiddlewareMixin

from core.infrastructure.tokens import get_session_token_codec

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES = ("/api/licenses", "/api/apps", "/api/activations")


def _unauthorized(message: str) -> JsonResponse:
    return JsonResponse({"error": {"code": "UNAUTHORIZED", "message": message}}, status=401)


class AdminSessionAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for administrator session tokens.

    This middleware:
    1. Reads ``Authorization: Bearer <token>`` on dashboard API paths
    2. Verifies the token signature and expiry
    3. Checks the session named in the token exists and is unexpired
    4. Returns 401 Unauthorized if any check fails
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not request.path.startswith(PROTECTED_PREFIXES):
            return None

        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return _unauthorized("Missing bearer token")

        claims = get_session_token_codec().read_claims(header[7:].strip())
        if claims is None:
            logger.warning("Rejected admin token", extra={"path": request.path})
            return _unauthorized("Invalid or expired token")

        # pylint: disable=no-member
        live = Session.objects.filter(
            session_key=claims.session_token, expire_date__gt=timezone.now()
        ).exists()
        if not live:
            logger.warning(
                "Admin session expired or revoked",
                extra={"path": request.path, "user_id": claims.user_id},
            )
            return _unauthorized("Session expired")

        request.admin_claims = claims  # type: ignore
        return None
