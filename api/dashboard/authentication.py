"""
DRF authentication for the dashboard API.

``AdminSessionAuthenticationMiddleware`` rejects requests without a live
admin session before they reach a view; this class exposes the verified
claims as ``request.auth`` and documents the scheme in the schema.
"""

from rest_framework.authentication import BaseAuthentication


class AdminSessionAuthentication(BaseAuthentication):
    """Expose the admin session claims verified by the middleware."""

    def authenticate(self, request):
        claims = getattr(request._request, "admin_claims", None)  # pylint: disable=protected-access
        if claims is None:
            return None
        return (None, claims)

    def authenticate_header(self, request):
        return "Bearer"
