import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Activation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("app_name", models.CharField(max_length=120)),
                ("app_version", models.CharField(max_length=64)),
                ("license_key", models.CharField(max_length=128)),
                ("machine_id", models.CharField(max_length=256)),
                ("shop_name", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("active", "Active"), ("revoked", "Revoked")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("activated_at", models.DateTimeField(blank=True, null=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "db_table": "activations",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["app_name", "license_key", "status"], name="activations_seat_count_idx"
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("app_name", "license_key", "machine_id"),
                        name="activations_app_key_machine_uniq",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ActivationLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("activated", "Activated"),
                            ("reactivated", "Reactivated"),
                            ("created", "Created"),
                            ("approved", "Approved"),
                            ("revoked", "Revoked"),
                            ("deactivated", "Deactivated"),
                        ],
                        max_length=20,
                    ),
                ),
                ("ip_address", models.CharField(blank=True, max_length=64, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField()),
                (
                    "activation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="logs",
                        to="activations.activation",
                    ),
                ),
            ],
            options={
                "db_table": "activation_logs",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["activation", "created_at"], name="activation_logs_lookup_idx")
                ],
            },
        ),
    ]
