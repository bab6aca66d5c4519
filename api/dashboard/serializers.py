"""
Serializers for the administrator dashboard API.
"""

from rest_framework import serializers

from core.domain.value_objects import AppStatus, LicenseStatus


class IssueLicenseRequestSerializer(serializers.Serializer):
    """Serializer for issue license request."""

    appName = serializers.CharField(required=False, min_length=2, max_length=120)
    maxActivations = serializers.IntegerField(required=False, default=1, min_value=1, max_value=10000)
    lockedMachineId = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=256
    )
    metadata = serializers.DictField(required=False, allow_null=True)
    expiresAt = serializers.DateTimeField(required=False, allow_null=True)


class UpdateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for license seat-count and status edits."""

    maxActivations = serializers.IntegerField(required=False, min_value=1, max_value=10000)
    status = serializers.ChoiceField(required=False, choices=[s.value for s in LicenseStatus])


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    appName = serializers.CharField(source="app_name")
    licenseKey = serializers.CharField(source="license_key")
    status = serializers.CharField()
    maxActivations = serializers.IntegerField(source="max_activations")
    activationType = serializers.CharField(source="activation_type")
    expiresAt = serializers.DateTimeField(source="expires_at", allow_null=True)
    metadata = serializers.JSONField(allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    activeActivations = serializers.IntegerField(source="active_activations", allow_null=True)
    remainingActivations = serializers.IntegerField(source="remaining_activations", allow_null=True)


class CreateAppRequestSerializer(serializers.Serializer):
    """Serializer for create app request."""

    name = serializers.CharField(min_length=2, max_length=120)


class UpdateAppRequestSerializer(serializers.Serializer):
    """Serializer for rename and status change."""

    name = serializers.CharField(required=False, min_length=2, max_length=120)
    status = serializers.ChoiceField(required=False, choices=[s.value for s in AppStatus])


class AppSerializer(serializers.Serializer):
    """Serializer for AppDTO."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    slug = serializers.CharField()
    status = serializers.CharField()
    metadata = serializers.JSONField()
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class CreatePendingActivationRequestSerializer(serializers.Serializer):
    """Serializer for creating a pending activation."""

    appName = serializers.CharField(min_length=2, max_length=120)
    appVersion = serializers.CharField(min_length=1, max_length=64)
    licenseKey = serializers.CharField(min_length=10, max_length=128)
    machineId = serializers.CharField(min_length=6, max_length=256)
    metadata = serializers.DictField(required=False, allow_null=True)


class ActivationSerializer(serializers.Serializer):
    """Serializer for ActivationDTO."""

    id = serializers.UUIDField()
    appName = serializers.CharField(source="app_name")
    appVersion = serializers.CharField(source="app_version")
    licenseKey = serializers.CharField(source="license_key")
    machineId = serializers.CharField(source="machine_id")
    shopName = serializers.CharField(source="shop_name", allow_null=True)
    status = serializers.CharField()
    activatedAt = serializers.DateTimeField(source="activated_at", allow_null=True)
    expiresAt = serializers.DateTimeField(source="expires_at", allow_null=True)
    metadata = serializers.JSONField(allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class ActivationLogSerializer(serializers.Serializer):
    """Serializer for ActivationLogDTO."""

    id = serializers.UUIDField()
    activationId = serializers.UUIDField(source="activation_id")
    action = serializers.CharField()
    ipAddress = serializers.CharField(source="ip_address", allow_null=True)
    userAgent = serializers.CharField(source="user_agent", allow_null=True)
    metadata = serializers.JSONField(allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")


class ActivationDetailSerializer(serializers.Serializer):
    """Serializer for ActivationDetailDTO."""

    activation = ActivationSerializer()
    logs = ActivationLogSerializer(many=True)


class ActivationStatsSerializer(serializers.Serializer):
    """Serializer for ActivationStatsDTO."""

    total = serializers.IntegerField()
    active = serializers.IntegerField()
    pending = serializers.IntegerField()
    revoked = serializers.IntegerField()
