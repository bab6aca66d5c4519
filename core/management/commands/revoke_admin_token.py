"""
Django management command to revoke a dashboard bearer token.

Deletes the server-side session the token points at; every token minted
for that session stops working at once.
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from core.infrastructure.admin_sessions import close_admin_session
from core.infrastructure.tokens import get_session_token_codec

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to revoke an administrator session token."""

    help = "Revoke a bearer token issued for the dashboard API"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("--token", type=str, required=True, help="Session token to revoke")

    def handle(self, *args, **options):
        """Execute the command."""
        claims = get_session_token_codec().read_claims(options["token"].strip())
        if claims is None:
            raise CommandError("Invalid or expired session token")

        close_admin_session(claims.session_token)
        logger.info("Revoked admin session token", extra={"admin_user_id": claims.user_id})
        self.stdout.write(self.style.SUCCESS(f"Revoked session for {claims.email}"))
