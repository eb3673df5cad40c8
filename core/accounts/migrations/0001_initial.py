import uuid

import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import core.accounts.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
        ("institutions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="UserAccount",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        error_messages={"unique": "A user with that username already exists."},
                        help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.",
                        max_length=150,
                        unique=True,
                        validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
                        verbose_name="username",
                    ),
                ),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.",
                        verbose_name="active",
                    ),
                ),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("uuid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("language", models.CharField(default="en", max_length=10, verbose_name="Language")),
                ("timezone", models.CharField(default="UTC", max_length=64, verbose_name="Time zone")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "institution",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="users",
                        to="institutions.institution",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "User Account",
                "verbose_name_plural": "User Accounts",
                "ordering": ["username"],
            },
            managers=[
                ("objects", core.accounts.models.UserAccountManager()),
            ],
        ),
        migrations.CreateModel(
            name="UserRoleAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "role_name",
                    models.CharField(
                        choices=[
                            ("SEB_SERVER_ADMIN", "SEB Server Administrator"),
                            ("INSTITUTIONAL_ADMIN", "Institutional Administrator"),
                            ("EXAM_ADMIN", "Exam Administrator"),
                            ("EXAM_SUPPORTER", "Exam Supporter"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="role_assignments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "User Role",
                "verbose_name_plural": "User Roles",
                "db_table": "user_role",
                "unique_together": {("user", "role_name")},
            },
        ),
        migrations.CreateModel(
            name="UserActivityLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("timestamp", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "activity_type",
                    models.CharField(
                        choices=[
                            ("CREATE", "Create"),
                            ("IMPORT", "Import"),
                            ("EXPORT", "Export"),
                            ("MODIFY", "Modify"),
                            ("PASSWORD_CHANGE", "Password Change"),
                            ("DEACTIVATE", "Deactivate"),
                            ("ACTIVATE", "Activate"),
                            ("ARCHIVE", "Archive"),
                            ("DELETE", "Delete"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "entity_type_name",
                    models.CharField(
                        choices=[
                            ("INSTITUTION", "Institution"),
                            ("USER", "User Account"),
                            ("USER_ACTIVITY_LOG", "User Activity Log"),
                            ("CONFIGURATION_NODE", "Configuration Node"),
                            ("CONFIGURATION", "Configuration"),
                            ("CONFIGURATION_VALUE", "Configuration Value"),
                            ("CONFIGURATION_ATTRIBUTE", "Configuration Attribute"),
                            ("VIEW", "View"),
                            ("ORIENTATION", "Orientation"),
                            ("CLIENT_CONNECTION", "Client Connection"),
                            ("CLIENT_EVENT", "Client Event"),
                        ],
                        db_column="entity_type",
                        max_length=32,
                        verbose_name="entity type",
                    ),
                ),
                ("entity_id", models.CharField(max_length=255)),
                ("message", models.TextField(blank=True, default="")),
                (
                    "user",
                    models.ForeignKey(
                        db_column="user_uuid",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activity_logs",
                        to=settings.AUTH_USER_MODEL,
                        to_field="uuid",
                    ),
                ),
            ],
            options={
                "verbose_name": "User Activity Log",
                "verbose_name_plural": "User Activity Logs",
                "ordering": ["-timestamp"],
            },
        ),
    ]
