"""
Serializers for the public license API.

Field names are camelCase on the wire; deployed clients depend on them.
"""

from rest_framework import serializers


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate request."""

    appName = serializers.CharField(required=False, min_length=2, max_length=120)
    licenseKey = serializers.CharField(min_length=10, max_length=128)
    machineId = serializers.CharField(min_length=6, max_length=256)
    appVersion = serializers.CharField(min_length=1, max_length=64)
    metadata = serializers.DictField(required=False, allow_null=True)


class TokenRequestSerializer(serializers.Serializer):
    """Serializer for validate and deactivate requests."""

    appName = serializers.CharField(required=False, min_length=2, max_length=120)
    machineId = serializers.CharField(min_length=6, max_length=256)
    activationToken = serializers.CharField(min_length=20, max_length=4096, trim_whitespace=True)


class SeatUsageSerializer(serializers.Serializer):
    """Seat usage fields shared by every successful response."""

    activationType = serializers.CharField(source="usage.activation_type")
    maxActivations = serializers.IntegerField(source="usage.max_activations")
    usedActivations = serializers.IntegerField(source="usage.used_activations")
    remainingActivations = serializers.IntegerField(source="usage.remaining_activations")


class ActivationSummarySerializer(serializers.Serializer):
    """Activation part of the activate response."""

    id = serializers.UUIDField(source="activation_id")
    appName = serializers.CharField(source="app_name")
    machineId = serializers.CharField(source="machine_id")
    status = serializers.CharField()


class ActivatedLicenseSerializer(serializers.Serializer):
    """License part of the activate response."""

    id = serializers.UUIDField(source="license_id")
    appName = serializers.CharField(source="app_name")
    maxActivations = serializers.IntegerField(source="usage.max_activations")
    expiresAt = serializers.DateTimeField(source="license_expires_at", allow_null=True)


class ActivateLicenseResponseSerializer(SeatUsageSerializer):
    """Serializer for ActivationResult."""

    success = serializers.BooleanField()
    appName = serializers.CharField(source="app_name")
    activationToken = serializers.CharField(source="activation_token")
    tokenExpiresAt = serializers.DateTimeField(source="token_expires_at")
    activation = ActivationSummarySerializer(source="*")
    license = ActivatedLicenseSerializer(source="*")


class ActivationFailureSerializer(serializers.Serializer):
    """Serializer for ActivationFailure."""

    success = serializers.BooleanField()
    error = serializers.CharField()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.usage is not None:
            data.update(SeatUsageSerializer(instance).data)
        return data


class ValidatedLicenseSerializer(serializers.Serializer):
    """License part of the validate response."""

    id = serializers.UUIDField(source="license_id")
    appName = serializers.CharField(source="app_name")
    expiresAt = serializers.DateTimeField(source="license_expires_at", allow_null=True)


class ValidatedActivationSerializer(serializers.Serializer):
    """Activation part of the validate response."""

    id = serializers.UUIDField(source="activation_id")
    status = serializers.CharField(source="activation_status")
    expiresAt = serializers.DateTimeField(source="activation_expires_at", allow_null=True)


class ValidationResponseSerializer(SeatUsageSerializer):
    """Serializer for a positive ValidationOutcome."""

    valid = serializers.BooleanField()
    license = ValidatedLicenseSerializer(source="*")
    activation = ValidatedActivationSerializer(source="*")


class ValidationRejectedSerializer(serializers.Serializer):
    """Serializer for a negative ValidationOutcome."""

    valid = serializers.BooleanField()
    reason = serializers.CharField()


class DeactivationResponseSerializer(SeatUsageSerializer):
    """Serializer for a successful DeactivationOutcome."""

    success = serializers.BooleanField()


class DeactivationRejectedSerializer(serializers.Serializer):
    """Serializer for a failed DeactivationOutcome."""

    success = serializers.BooleanField()
    reason = serializers.CharField()
