"""
Administrator dashboard API views.

All routes require a bearer session token; the check itself runs in
AdminSessionAuthenticationMiddleware before the view is reached.
Domain errors raised by the handlers are rendered by
api.exceptions.custom_exception_handler.
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activation_commands import (
    ChangeActivationStatusCommand,
    CreatePendingActivationCommand,
)
from activations.application.handlers.activation_admin_handlers import (
    ActivationQueryHandler,
    ChangeActivationStatusHandler,
    CreatePendingActivationHandler,
)
from activations.application.queries.activation_queries import GetActivationQuery
from activations.domain.activation_log import RequestContext
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from api.dashboard.authentication import AdminSessionAuthentication
from api.dashboard.serializers import (
    ActivationDetailSerializer,
    ActivationSerializer,
    ActivationStatsSerializer,
    AppSerializer,
    CreateAppRequestSerializer,
    CreatePendingActivationRequestSerializer,
    IssueLicenseRequestSerializer,
    LicenseSerializer,
    UpdateAppRequestSerializer,
    UpdateLicenseRequestSerializer,
)
from catalog.application.commands.app_commands import (
    CreateAppCommand,
    DeleteAppCommand,
    UpdateAppCommand,
)
from catalog.application.handlers.app_handlers import (
    AppQueryHandler,
    CreateAppHandler,
    DeleteAppHandler,
    UpdateAppHandler,
)
from catalog.infrastructure.repositories.django_app_repository import DjangoAppRepository
from core.domain.value_objects import AppStatus, LicenseStatus
from core.instrumentation import Status, StatusCode, get_tracer
from core.middleware.rate_limit import client_ip
from licenses.application.commands.license_commands import (
    DeleteLicenseCommand,
    IssueLicenseCommand,
    UpdateLicenseCommand,
)
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.license_admin_handlers import (
    DeleteLicenseHandler,
    GetLicenseHandler,
    ListLicensesHandler,
    UpdateLicenseHandler,
)
from licenses.application.queries.license_queries import GetLicenseQuery, ListLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)

_app_repo = DjangoAppRepository()
_license_repo = DjangoLicenseRepository()
_activation_repo = DjangoActivationRepository()

tracer = get_tracer(__name__)

_SUCCESS = inline_serializer(name="SuccessResponse", fields={"success": serializers.BooleanField()})


def _success_with(name: str, field_name: str, serializer):
    return inline_serializer(
        name=name,
        fields={"success": serializers.BooleanField(), field_name: serializer},
    )


def _message_response(name: str):
    return inline_serializer(
        name=name,
        fields={"success": serializers.BooleanField(), "message": serializers.CharField()},
    )


def _admin_id(request: Request):
    claims = request.auth
    return getattr(claims, "user_id", None)


class DashboardAPIView(APIView):
    """Base view for dashboard routes."""

    authentication_classes = [AdminSessionAuthentication]


# Licenses


class LicenseListView(DashboardAPIView):
    """List and issue licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List licenses with seat usage, newest first.",
        tags=["Licenses"],
        parameters=[
            OpenApiParameter(
                name="appName",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Case-insensitive substring of the app name",
            ),
        ],
        responses={
            200: inline_serializer(
                name="LicenseListResponse",
                fields={"licenses": LicenseSerializer(many=True)},
            ),
            401: {"description": "Unauthorized"},
        },
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_licenses") as span:
            app_name = request.query_params.get("appName") or None
            if app_name:
                span.set_attribute("app_name", app_name)
            handler = ListLicensesHandler(license_repository=_license_repo)
            licenses = await handler.handle(ListLicensesQuery(app_name=app_name))
            span.set_attribute("result_count", len(licenses))
            span.set_status(Status(StatusCode.OK))
            return Response({"licenses": LicenseSerializer(licenses, many=True).data})

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Issue a license with a fresh key. The app is matched by name, slug or id "
            "and created when nothing matches."
        ),
        tags=["Licenses"],
        request=IssueLicenseRequestSerializer,
        responses={
            200: _success_with("IssueLicenseResponse", "license", LicenseSerializer()),
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized"},
        },
    )
    def post(self, request: Request) -> Response:
        """Issue a license."""
        return async_to_sync(self._handle_issue)(request)

    async def _handle_issue(self, request: Request) -> Response:
        with tracer.start_as_current_span("issue_license") as span:
            serializer = IssueLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            app_name = data.get("appName") or settings.ACTIVATION_APP_NAME
            span.set_attribute("app_name", app_name)
            span.set_attribute("max_activations", data["maxActivations"])

            handler = IssueLicenseHandler(app_repository=_app_repo, license_repository=_license_repo)
            license_dto = await handler.handle(
                IssueLicenseCommand(
                    app_name=app_name,
                    max_activations=data["maxActivations"],
                    locked_machine_id=data.get("lockedMachineId") or None,
                    metadata=data.get("metadata"),
                    expires_at=data.get("expiresAt"),
                )
            )
            logger.info(
                "License issued from dashboard",
                extra={"license_id": str(license_dto.id), "admin_user_id": _admin_id(request)},
            )
            span.set_attribute("license.id", str(license_dto.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "license": LicenseSerializer(license_dto).data},
                status=status.HTTP_200_OK,
            )


class LicenseDetailView(DashboardAPIView):
    """Read, edit and delete one license."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        tags=["Licenses"],
        responses={
            200: _success_with("GetLicenseResponse", "license", LicenseSerializer()),
            404: {"description": "License not found"},
        },
    )
    def get(self, request: Request, license_id) -> Response:
        """Get a license."""
        return async_to_sync(self._handle_get)(license_id)

    async def _handle_get(self, license_id) -> Response:
        with tracer.start_as_current_span("get_license") as span:
            span.set_attribute("license.id", str(license_id))
            handler = GetLicenseHandler(license_repository=_license_repo)
            license_dto = await handler.handle(GetLicenseQuery(license_id=license_id))
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "license": LicenseSerializer(license_dto).data})

    @extend_schema(
        operation_id="update_license",
        summary="Update License",
        description="Change the seat count and/or status of a license.",
        tags=["Licenses"],
        request=UpdateLicenseRequestSerializer,
        responses={
            200: _success_with("UpdateLicenseResponse", "license", LicenseSerializer()),
            400: {"description": "Bad Request"},
            404: {"description": "License not found"},
        },
    )
    def patch(self, request: Request, license_id) -> Response:
        """Update a license."""
        return async_to_sync(self._handle_update)(request, license_id)

    async def _handle_update(self, request: Request, license_id) -> Response:
        with tracer.start_as_current_span("update_license") as span:
            span.set_attribute("license.id", str(license_id))
            serializer = UpdateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            new_status = data.get("status")
            handler = UpdateLicenseHandler(license_repository=_license_repo)
            license_dto = await handler.handle(
                UpdateLicenseCommand(
                    license_id=license_id,
                    max_activations=data.get("maxActivations"),
                    status=LicenseStatus(new_status) if new_status else None,
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "license": LicenseSerializer(license_dto).data})

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description="Delete a license together with its activations.",
        tags=["Licenses"],
        responses={200: _SUCCESS, 404: {"description": "License not found"}},
    )
    def delete(self, request: Request, license_id) -> Response:
        """Delete a license."""
        return async_to_sync(self._handle_delete)(request, license_id)

    async def _handle_delete(self, request: Request, license_id) -> Response:
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("license.id", str(license_id))
            handler = DeleteLicenseHandler(license_repository=_license_repo)
            removed = await handler.handle(DeleteLicenseCommand(license_id=license_id))
            span.set_attribute("activations_deleted", removed)
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True})


class LicenseStatusView(DashboardAPIView):
    """Set a license's status to a fixed value."""

    target_status: LicenseStatus = LicenseStatus.ACTIVE

    def patch(self, request: Request, license_id) -> Response:
        """Change the license status."""
        return async_to_sync(self._handle_status)(license_id)

    async def _handle_status(self, license_id) -> Response:
        with tracer.start_as_current_span(f"set_license_{self.target_status.value}") as span:
            span.set_attribute("license.id", str(license_id))
            handler = UpdateLicenseHandler(license_repository=_license_repo)
            await handler.set_status(license_id, self.target_status)
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True})


@extend_schema(
    operation_id="revoke_license",
    summary="Revoke License",
    tags=["Licenses"],
    request=None,
    responses={200: _SUCCESS, 404: {"description": "License not found"}},
)
class RevokeLicenseView(LicenseStatusView):
    """Revoke a license."""

    target_status = LicenseStatus.REVOKED


@extend_schema(
    operation_id="activate_license_status",
    summary="Reactivate License",
    tags=["Licenses"],
    request=None,
    responses={200: _SUCCESS, 404: {"description": "License not found"}},
)
class ReinstateLicenseView(LicenseStatusView):
    """Set a revoked license back to active."""

    target_status = LicenseStatus.ACTIVE


# Apps


class AppListView(DashboardAPIView):
    """List and create apps."""

    @extend_schema(
        operation_id="list_apps",
        summary="List Apps",
        tags=["Apps"],
        responses={
            200: inline_serializer(name="AppListResponse", fields={"apps": AppSerializer(many=True)}),
        },
    )
    def get(self, request: Request) -> Response:
        """List apps."""
        return async_to_sync(self._handle_list)()

    async def _handle_list(self) -> Response:
        with tracer.start_as_current_span("list_apps") as span:
            apps = await AppQueryHandler(app_repository=_app_repo).list_apps()
            span.set_attribute("result_count", len(apps))
            span.set_status(Status(StatusCode.OK))
            return Response({"apps": AppSerializer(apps, many=True).data})

    @extend_schema(
        operation_id="create_app",
        summary="Create App",
        description="Add an app to the catalog. Creating an existing name returns that app.",
        tags=["Apps"],
        request=CreateAppRequestSerializer,
        responses={
            200: _success_with("CreateAppResponse", "app", AppSerializer()),
            400: {"description": "Bad Request"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create an app."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_app") as span:
            serializer = CreateAppRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            name = serializer.validated_data["name"]
            span.set_attribute("app_name", name)

            app_dto = await CreateAppHandler(app_repository=_app_repo).handle(CreateAppCommand(name=name))
            span.set_attribute("app.id", str(app_dto.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "app": AppSerializer(app_dto).data},
                status=status.HTTP_200_OK,
            )


class AppDetailView(DashboardAPIView):
    """Read, rename and delete one app."""

    @extend_schema(
        operation_id="get_app",
        summary="Get App",
        tags=["Apps"],
        responses={
            200: _success_with("GetAppResponse", "app", AppSerializer()),
            404: {"description": "App not found"},
        },
    )
    def get(self, request: Request, app_id) -> Response:
        """Get an app."""
        return async_to_sync(self._handle_get)(app_id)

    async def _handle_get(self, app_id) -> Response:
        with tracer.start_as_current_span("get_app") as span:
            span.set_attribute("app.id", str(app_id))
            app_dto = await AppQueryHandler(app_repository=_app_repo).get_app(app_id)
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "app": AppSerializer(app_dto).data})

    @extend_schema(
        operation_id="update_app",
        summary="Update App",
        description=(
            "Rename an app and/or change its status. A rename is applied to every "
            "license and activation of the app."
        ),
        tags=["Apps"],
        request=UpdateAppRequestSerializer,
        responses={
            200: _success_with("UpdateAppResponse", "app", AppSerializer()),
            404: {"description": "App not found"},
            409: {"description": "App name already in use"},
        },
    )
    def patch(self, request: Request, app_id) -> Response:
        """Update an app."""
        return async_to_sync(self._handle_update)(request, app_id)

    async def _handle_update(self, request: Request, app_id) -> Response:
        with tracer.start_as_current_span("update_app") as span:
            span.set_attribute("app.id", str(app_id))
            serializer = UpdateAppRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            new_status = data.get("status")
            app_dto = await UpdateAppHandler(app_repository=_app_repo).handle(
                UpdateAppCommand(
                    app_id=app_id,
                    name=data.get("name"),
                    status=AppStatus(new_status) if new_status else None,
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "app": AppSerializer(app_dto).data})

    @extend_schema(
        operation_id="delete_app",
        summary="Delete App",
        description="Delete an app with all of its licenses, activations and activation logs.",
        tags=["Apps"],
        responses={200: _SUCCESS, 404: {"description": "App not found"}},
    )
    def delete(self, request: Request, app_id) -> Response:
        """Delete an app."""
        return async_to_sync(self._handle_delete)(request, app_id)

    async def _handle_delete(self, request: Request, app_id) -> Response:
        with tracer.start_as_current_span("delete_app") as span:
            span.set_attribute("app.id", str(app_id))
            result = await DeleteAppHandler(app_repository=_app_repo).handle(DeleteAppCommand(app_id=app_id))
            logger.info(
                "App deleted from dashboard",
                extra={
                    "app_id": str(app_id),
                    "admin_user_id": _admin_id(request),
                    "licenses_deleted": result.licenses,
                    "activations_deleted": result.activations,
                },
            )
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True})


# Activations


def _request_context(request: Request) -> RequestContext:
    return RequestContext(
        ip_address=client_ip(request),
        user_agent=request.META.get("HTTP_USER_AGENT") or None,
    )


class ActivationListView(DashboardAPIView):
    """List activations and create pending ones."""

    @extend_schema(
        operation_id="list_activations",
        summary="List Activations",
        tags=["Activations"],
        responses={
            200: inline_serializer(
                name="ActivationListResponse",
                fields={"activations": ActivationSerializer(many=True)},
            ),
        },
    )
    def get(self, request: Request) -> Response:
        """List activations."""
        return async_to_sync(self._handle_list)()

    async def _handle_list(self) -> Response:
        with tracer.start_as_current_span("list_activations") as span:
            activations = await ActivationQueryHandler(_activation_repo).list_activations()
            span.set_attribute("result_count", len(activations))
            span.set_status(Status(StatusCode.OK))
            return Response({"activations": ActivationSerializer(activations, many=True).data})

    @extend_schema(
        operation_id="create_pending_activation",
        summary="Create Pending Activation",
        description="Create an activation in pending state, to be approved later.",
        tags=["Activations"],
        request=CreatePendingActivationRequestSerializer,
        responses={
            200: _success_with("CreateActivationResponse", "activation", ActivationSerializer()),
            400: {"description": "Bad Request"},
            409: {"description": "Activation already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a pending activation."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_pending_activation") as span:
            serializer = CreatePendingActivationRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("machine_id", data["machineId"])

            activation = await CreatePendingActivationHandler(_activation_repo).handle(
                CreatePendingActivationCommand(
                    app_name=data["appName"],
                    app_version=data["appVersion"],
                    license_key=data["licenseKey"],
                    machine_id=data["machineId"],
                    metadata=data.get("metadata"),
                    context=_request_context(request),
                )
            )
            span.set_attribute("activation.id", str(activation.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "activation": ActivationSerializer(activation).data},
                status=status.HTTP_200_OK,
            )


class ActivationStatsView(DashboardAPIView):
    """Ledger counters."""

    @extend_schema(
        operation_id="activation_stats",
        summary="Activation Stats",
        tags=["Activations"],
        responses={
            200: inline_serializer(name="ActivationStatsResponse", fields={"stats": ActivationStatsSerializer()}),
        },
    )
    def get(self, request: Request) -> Response:
        """Get activation counts by status."""
        return async_to_sync(self._handle_stats)()

    async def _handle_stats(self) -> Response:
        with tracer.start_as_current_span("activation_stats") as span:
            stats = await ActivationQueryHandler(_activation_repo).stats()
            span.set_status(Status(StatusCode.OK))
            return Response({"stats": ActivationStatsSerializer(stats).data})


class ActivationDetailView(DashboardAPIView):
    """One activation with its audit log."""

    @extend_schema(
        operation_id="get_activation",
        summary="Get Activation",
        tags=["Activations"],
        responses={200: ActivationDetailSerializer, 404: {"description": "Activation not found"}},
    )
    def get(self, request: Request, activation_id) -> Response:
        """Get an activation and its log."""
        return async_to_sync(self._handle_get)(activation_id)

    async def _handle_get(self, activation_id) -> Response:
        with tracer.start_as_current_span("get_activation") as span:
            span.set_attribute("activation.id", str(activation_id))
            detail = await ActivationQueryHandler(_activation_repo).get_activation(
                GetActivationQuery(activation_id=activation_id)
            )
            span.set_attribute("log_count", len(detail.logs))
            span.set_status(Status(StatusCode.OK))
            return Response(ActivationDetailSerializer(detail).data)


@extend_schema(
    operation_id="approve_activation",
    summary="Approve Activation",
    tags=["Activations"],
    request=None,
    responses={
        200: _message_response("ApproveActivationResponse"),
        404: {"description": "Activation not found"},
    },
)
class ApproveActivationView(DashboardAPIView):
    """Approve a pending or revoked activation."""

    def patch(self, request: Request, activation_id) -> Response:
        """Approve an activation."""
        return async_to_sync(self._handle_approve)(request, activation_id)

    async def _handle_approve(self, request: Request, activation_id) -> Response:
        with tracer.start_as_current_span("approve_activation") as span:
            span.set_attribute("activation.id", str(activation_id))
            await ChangeActivationStatusHandler(_activation_repo).approve(
                ChangeActivationStatusCommand(activation_id=activation_id, context=_request_context(request))
            )
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "message": "Activation approved"})


@extend_schema(
    operation_id="revoke_activation",
    summary="Revoke Activation",
    tags=["Activations"],
    request=None,
    responses={
        200: _message_response("RevokeActivationResponse"),
        404: {"description": "Activation not found"},
    },
)
class RevokeActivationView(DashboardAPIView):
    """Revoke an activation, freeing its seat."""

    def patch(self, request: Request, activation_id) -> Response:
        """Revoke an activation."""
        return async_to_sync(self._handle_revoke)(request, activation_id)

    async def _handle_revoke(self, request: Request, activation_id) -> Response:
        with tracer.start_as_current_span("revoke_activation") as span:
            span.set_attribute("activation.id", str(activation_id))
            await ChangeActivationStatusHandler(_activation_repo).revoke(
                ChangeActivationStatusCommand(activation_id=activation_id, context=_request_context(request))
            )
            span.set_status(Status(StatusCode.OK))
            return Response({"success": True, "message": "Activation revoked"})
