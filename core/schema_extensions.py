"""
Custom schema extensions for drf-spectacular to document admin session tokens.
"""

from drf_spectacular.extensions import OpenApiAuthenticationExtension
from drf_spectacular.plumbing import build_bearer_security_scheme_object


class AdminSessionAuthenticationExtension(OpenApiAuthenticationExtension):
    """Extension to add the dashboard bearer token to the OpenAPI schema."""

    target_class = "api.dashboard.authentication.AdminSessionAuthentication"
    name = "AdminSessionAuth"

    def get_security_definition(self, auto_schema):
        """Return security scheme definition."""
        return build_bearer_security_scheme_object(
            header_name="AUTHORIZATION",
            token_prefix="Bearer",
            bearer_format="JWT",
        )
