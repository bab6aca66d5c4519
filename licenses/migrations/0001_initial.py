import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("app_name", models.CharField(db_index=True, max_length=120)),
                ("license_key", models.CharField(max_length=64)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("revoked", "Revoked")],
                        default="active",
                        max_length=20,
                    ),
                ),
                (
                    "max_activations",
                    models.PositiveIntegerField(default=1, help_text="Maximum concurrent activations"),
                ),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("metadata", models.JSONField(blank=True, help_text="May carry lockedMachineId", null=True)),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status"], name="licenses_status_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("app_name", "license_key"), name="licenses_app_name_license_key_uniq"
                    )
                ],
            },
        ),
    ]
