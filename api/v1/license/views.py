"""
Public license API views.

These endpoints are called by client applications to:
- Activate a license on a machine
- Validate an activation token
- Deactivate (give the seat back)

They need no authentication and are rate limited per client IP.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activation_commands import (
    ActivateLicenseCommand,
    DeactivateActivationCommand,
    ValidateActivationCommand,
)
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.application.handlers.deactivate_activation_handler import (
    DeactivateActivationHandler,
)
from activations.application.handlers.validate_activation_handler import (
    ValidateActivationHandler,
)
from activations.domain.activation_log import RequestContext
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from api.v1.license.serializers import (
    ActivateLicenseRequestSerializer,
    ActivateLicenseResponseSerializer,
    ActivationFailureSerializer,
    DeactivationRejectedSerializer,
    DeactivationResponseSerializer,
    TokenRequestSerializer,
    ValidationRejectedSerializer,
    ValidationResponseSerializer,
)
from catalog.infrastructure.repositories.django_app_repository import DjangoAppRepository
from core.instrumentation import Status, StatusCode, get_tracer
from core.middleware.rate_limit import client_ip
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_app_repo = DjangoAppRepository()
_license_repo = DjangoLicenseRepository()
_activation_repo = DjangoActivationRepository()

tracer = get_tracer(__name__)


def _request_context(request: Request) -> RequestContext:
    return RequestContext(
        ip_address=client_ip(request),
        user_agent=request.META.get("HTTP_USER_AGENT") or None,
    )


def _invalid_input(errors, flag: str) -> Response:
    """400 body for a request that failed serializer validation."""
    return Response(
        {flag: False, "error": "Invalid request", "details": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class ActivateLicenseView(APIView):
    """View for activating a license on a machine."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind a machine to a license and return a signed activation token. "
            "Re-activating the same machine reuses its seat."
        ),
        tags=["License API"],
        request=ActivateLicenseRequestSerializer,
        responses={
            200: ActivateLicenseResponseSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "License revoked, expired or locked to another machine"},
            404: {"description": "License not found"},
            409: {"description": "Activation limit reached"},
            429: {"description": "Too many requests"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a license."""
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        """Async handler for activate."""
        with tracer.start_as_current_span("activate_license") as span:
            span.set_attribute("operation", "activate_license")

            serializer = ActivateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _invalid_input(serializer.errors, "success")

            data = serializer.validated_data
            span.set_attribute("machine_id", data["machineId"])

            handler = ActivateLicenseHandler(
                app_repository=_app_repo,
                license_repository=_license_repo,
                activation_repository=_activation_repo,
            )
            result = await handler.handle(
                ActivateLicenseCommand(
                    license_key=data["licenseKey"],
                    machine_id=data["machineId"],
                    app_version=data["appVersion"],
                    app_name=data.get("appName"),
                    metadata=data.get("metadata"),
                    context=_request_context(request),
                )
            )

            if not result.success:
                span.set_attribute("error", result.code)
                span.set_status(Status(StatusCode.ERROR, result.error))
                return Response(ActivationFailureSerializer(result).data, status=result.status_code)

            span.set_attribute("activation.id", str(result.activation_id))
            span.set_attribute("license.id", str(result.license_id))
            span.set_attribute("reactivated", result.reactivated)
            span.set_status(Status(StatusCode.OK))
            return Response(ActivateLicenseResponseSerializer(result).data, status=status.HTTP_200_OK)


class ValidateActivationView(APIView):
    """View for validating an activation token."""

    @extend_schema(
        operation_id="validate_activation",
        summary="Validate Activation",
        description=(
            "Check an activation token against the current license and activation state. "
            "Rejections are reported as valid=false with a reason, not as an error status."
        ),
        tags=["License API"],
        request=TokenRequestSerializer,
        responses={
            200: ValidationResponseSerializer,
            400: {"description": "Bad Request"},
            429: {"description": "Too many requests"},
        },
    )
    def post(self, request: Request) -> Response:
        """Validate an activation token."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        """Async handler for validate."""
        with tracer.start_as_current_span("validate_activation") as span:
            span.set_attribute("operation", "validate_activation")

            serializer = TokenRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _invalid_input(serializer.errors, "valid")

            data = serializer.validated_data
            handler = ValidateActivationHandler(
                app_repository=_app_repo,
                license_repository=_license_repo,
                activation_repository=_activation_repo,
            )
            outcome = await handler.handle(
                ValidateActivationCommand(
                    machine_id=data["machineId"],
                    activation_token=data["activationToken"],
                    app_name=data.get("appName"),
                )
            )

            span.set_attribute("valid", outcome.valid)
            span.set_status(Status(StatusCode.OK))
            if not outcome.valid:
                span.set_attribute("reason", outcome.reason)
                return Response(ValidationRejectedSerializer(outcome).data, status=status.HTTP_200_OK)
            return Response(ValidationResponseSerializer(outcome).data, status=status.HTTP_200_OK)


class DeactivateActivationView(APIView):
    """View for giving a seat back."""

    @extend_schema(
        operation_id="deactivate_activation",
        summary="Deactivate Activation",
        description=(
            "Revoke the activation named by the token so its seat can be used by "
            "another machine. The activation row is kept for the audit trail."
        ),
        tags=["License API"],
        request=TokenRequestSerializer,
        responses={
            200: DeactivationResponseSerializer,
            400: DeactivationRejectedSerializer,
            429: {"description": "Too many requests"},
        },
    )
    def post(self, request: Request) -> Response:
        """Deactivate an activation."""
        return async_to_sync(self._handle_deactivate)(request)

    async def _handle_deactivate(self, request: Request) -> Response:
        """Async handler for deactivate."""
        with tracer.start_as_current_span("deactivate_activation") as span:
            span.set_attribute("operation", "deactivate_activation")

            serializer = TokenRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _invalid_input(serializer.errors, "success")

            data = serializer.validated_data
            handler = DeactivateActivationHandler(
                app_repository=_app_repo,
                license_repository=_license_repo,
                activation_repository=_activation_repo,
            )
            outcome = await handler.handle(
                DeactivateActivationCommand(
                    machine_id=data["machineId"],
                    activation_token=data["activationToken"],
                    app_name=data.get("appName"),
                    context=_request_context(request),
                )
            )

            if not outcome.success:
                span.set_attribute("reason", outcome.reason)
                span.set_status(Status(StatusCode.ERROR, outcome.reason))
                return Response(
                    DeactivationRejectedSerializer(outcome).data,
                    status=status.HTTP_400_BAD_REQUEST,
                )

            span.set_status(Status(StatusCode.OK))
            return Response(DeactivationResponseSerializer(outcome).data, status=status.HTTP_200_OK)
