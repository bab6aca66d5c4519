"""
Django management command to issue a dashboard bearer token.

Creates the staff user when it does not exist yet, opens a server-side
session for it and prints the signed session token.
"""

import logging

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from core.infrastructure.admin_sessions import open_admin_session

logger = logging.getLogger(__name__)
User = get_user_model()


class Command(BaseCommand):
    """Command to issue an administrator session token."""

    help = "Issue a bearer token for the dashboard API"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--email",
            type=str,
            required=True,
            help="Administrator email (user is created if missing)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        email = options["email"].strip().lower()
        if "@" not in email:
            raise CommandError(f"Invalid email: {options['email']}")

        # pylint: disable=no-member
        user, created = User.objects.get_or_create(
            username=email,
            defaults={"email": email, "is_staff": True},
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=["password"])
            self.stdout.write(self.style.SUCCESS(f"Created administrator: {email}"))

        token = open_admin_session(user)
        logger.info("Issued admin session token", extra={"admin_user_id": str(user.pk)})
        self.stdout.write(token)
