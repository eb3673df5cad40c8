import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("institutions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ClientConnection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("exam_id", models.BigIntegerField(blank=True, db_index=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("UNDEFINED", "Undefined"),
                            ("CONNECTION_REQUESTED", "Connection Requested"),
                            ("AUTHENTICATED", "Authenticated"),
                            ("ESTABLISHED", "Established"),
                            ("CLOSED", "Closed"),
                            ("DISABLED", "Disabled"),
                        ],
                        default="UNDEFINED",
                        max_length=32,
                    ),
                ),
                ("connection_token", models.CharField(max_length=255, unique=True)),
                ("user_session_id", models.CharField(blank=True, default="", max_length=255)),
                ("client_address", models.CharField(blank=True, default="", max_length=45)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "institution",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="client_connections",
                        to="institutions.institution",
                    ),
                ),
            ],
            options={
                "verbose_name": "Client Connection",
                "verbose_name_plural": "Client Connections",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ClientEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type",
                    models.PositiveSmallIntegerField(
                        choices=[
                            (0, "Unknown"),
                            (1, "Debug Log"),
                            (2, "Info Log"),
                            (3, "Warn Log"),
                            (4, "Error Log"),
                            (5, "Last Ping"),
                        ],
                        default=0,
                    ),
                ),
                ("timestamp", models.BigIntegerField(db_index=True)),
                ("numeric_value", models.DecimalField(blank=True, decimal_places=4, max_digits=18, null=True)),
                ("text", models.TextField(blank=True, default="")),
                (
                    "connection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="events",
                        to="monitoring.clientconnection",
                    ),
                ),
            ],
            options={
                "verbose_name": "Client Event",
                "verbose_name_plural": "Client Events",
                "ordering": ["connection", "timestamp"],
            },
        ),
    ]
