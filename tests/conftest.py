"""
Pytest configuration and shared fixtures.

Repository calls are async and run their ORM work through
``sync_to_async``. Database tests drive them with ``async_to_sync`` so
the queries stay on the test thread and inside its transaction.
"""

from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.utils import timezone

from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from catalog.infrastructure.repositories.django_app_repository import DjangoAppRepository
from core.infrastructure.admin_sessions import open_admin_session
from core.infrastructure.tokens import ActivationTokenCodec, SessionTokenCodec
from licenses.application.commands.license_commands import IssueLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

TEST_SECRET = "unit-test-secret-0123456789abcdefghijklmnop"


@pytest.fixture(autouse=True)
def clear_cache():
    """Rate limit counters live in the cache; start every test empty."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def app_repository():
    """Fixture for AppRepository."""
    return DjangoAppRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def activation_repository():
    """Fixture for ActivationRepository."""
    return DjangoActivationRepository()


@pytest.fixture
def activation_codec():
    """Activation token codec with a fixed test secret."""
    return ActivationTokenCodec(TEST_SECRET)


@pytest.fixture
def session_codec():
    """Session token codec with a fixed test secret."""
    return SessionTokenCodec(TEST_SECRET)


@pytest.fixture
def issue_license(db, app_repository, license_repository):
    """Issue licenses through the real handler; returns a LicenseDTO."""
    handler = IssueLicenseHandler(app_repository=app_repository, license_repository=license_repository)

    def _issue(app_name="Widget", max_activations=1, locked_machine_id=None, expires_at=None):
        return async_to_sync(handler.handle)(
            IssueLicenseCommand(
                app_name=app_name,
                max_activations=max_activations,
                locked_machine_id=locked_machine_id,
                expires_at=expires_at,
            )
        )

    return _issue


@pytest.fixture
def widget_license(issue_license):
    """A two-seat Widget license valid for a year."""
    return issue_license(
        app_name="Widget",
        max_activations=2,
        expires_at=timezone.now() + timedelta(days=365),
    )


@pytest.fixture
def admin_user(db):
    """Staff user for the dashboard API."""
    User = get_user_model()
    return User.objects.create_user(
        username="admin@example.com", email="admin@example.com", is_staff=True
    )


@pytest.fixture
def admin_token(admin_user):
    """Bearer token backed by a live database session."""
    return open_admin_session(admin_user)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client(api_client, admin_token):
    """API client sending the admin bearer token."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {admin_token}")
    return api_client
