"""
Activation token verification shared by validate and deactivate.
"""

from typing import Optional

from catalog.application.services.app_resolver import AppResolver
from catalog.ports.app_repository import AppRepository
from core.domain.exceptions import InvalidActivationTokenError, TokenContextMismatchError
from core.infrastructure.tokens import (
    ActivationClaims,
    ActivationTokenCodec,
    get_activation_token_codec,
)


class TokenContextResolver:
    """Verify a token and check it was minted for the requesting app and machine."""

    def __init__(self, app_repository: AppRepository, token_codec: Optional[ActivationTokenCodec] = None):
        self.app_resolver = AppResolver(app_repository)
        self.token_codec = token_codec or get_activation_token_codec()

    async def verify(self, token: str, app_identifier: str, machine_id: str) -> ActivationClaims:
        """
        Args:
            token: Activation token from the client
            app_identifier: App the client says it is
            machine_id: Machine the client says it is

        Returns:
            Verified claims

        Raises:
            InvalidActivationTokenError: If the token fails verification
            TokenContextMismatchError: If the token belongs to another app or machine
        """
        app_name = await self.app_resolver.canonical_name(app_identifier)
        claims = self.token_codec.read_claims(token)
        if claims is None:
            raise InvalidActivationTokenError()
        if claims.app_name != app_name or claims.machine_id != machine_id:
            raise TokenContextMismatchError()
        return claims
