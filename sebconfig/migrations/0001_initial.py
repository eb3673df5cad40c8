import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("institutions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ConfigurationAttribute",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, unique=True, verbose_name="Name")),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("TEXT_FIELD", "Text Field"),
                            ("PASSWORD_FIELD", "Password Field"),
                            ("TEXT_AREA", "Text Area"),
                            ("CHECKBOX", "Checkbox"),
                            ("INTEGER", "Integer"),
                            ("DECIMAL", "Decimal"),
                            ("SINGLE_SELECTION", "Single Selection"),
                            ("COMBO_SELECTION", "Combo Selection"),
                            ("RADIO_SELECTION", "Radio Selection"),
                            ("MULTI_SELECTION", "Multi Selection"),
                            ("MULTI_CHECKBOX_SELECTION", "Multi Checkbox Selection"),
                            ("FILE_UPLOAD", "File Upload"),
                            ("TABLE", "Table"),
                            ("INLINE_TABLE", "Inline Table"),
                            ("COMPOSITE_TABLE", "Composite Table"),
                        ],
                        max_length=32,
                    ),
                ),
                ("resources", models.CharField(blank=True, default="", max_length=4000)),
                ("validator", models.CharField(blank=True, default="", max_length=255)),
                ("dependencies", models.CharField(blank=True, default="", max_length=4000)),
                ("default_value", models.TextField(blank=True, null=True)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="children",
                        to="sebconfig.configurationattribute",
                    ),
                ),
            ],
            options={
                "verbose_name": "Configuration Attribute",
                "verbose_name_plural": "Configuration Attributes",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ConfigurationNode",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("template_id", models.PositiveBigIntegerField(default=0)),
                ("owner", models.CharField(db_index=True, max_length=36)),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                (
                    "type",
                    models.CharField(
                        choices=[("TEMPLATE", "Template"), ("EXAM_CONFIG", "Exam Configuration")],
                        default="EXAM_CONFIG",
                        max_length=32,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("CONSTRUCTION", "Under Construction"),
                            ("READY_TO_USE", "Ready To Use"),
                            ("IN_USE", "In Use"),
                        ],
                        default="CONSTRUCTION",
                        max_length=32,
                    ),
                ),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "institution",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="configuration_nodes",
                        to="institutions.institution",
                    ),
                ),
            ],
            options={
                "verbose_name": "Configuration Node",
                "verbose_name_plural": "Configuration Nodes",
                "ordering": ["name"],
                "unique_together": {("institution", "name")},
            },
        ),
        migrations.CreateModel(
            name="Configuration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("version", models.CharField(blank=True, max_length=255, null=True)),
                ("version_date", models.DateTimeField(blank=True, null=True)),
                ("followup", models.BooleanField(default=False)),
                (
                    "configuration_node",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="configurations",
                        to="sebconfig.configurationnode",
                    ),
                ),
                (
                    "institution",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="configurations",
                        to="institutions.institution",
                    ),
                ),
            ],
            options={
                "verbose_name": "Configuration",
                "verbose_name_plural": "Configurations",
                "ordering": ["configuration_node", "version_date", "pk"],
            },
        ),
        migrations.CreateModel(
            name="ConfigurationValue",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("list_index", models.PositiveIntegerField(default=0)),
                ("value", models.TextField(blank=True, null=True)),
                (
                    "attribute",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="values",
                        to="sebconfig.configurationattribute",
                    ),
                ),
                (
                    "configuration",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="values",
                        to="sebconfig.configuration",
                    ),
                ),
                (
                    "institution",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="configuration_values",
                        to="institutions.institution",
                    ),
                ),
            ],
            options={
                "verbose_name": "Configuration Value",
                "verbose_name_plural": "Configuration Values",
                "ordering": ["configuration", "attribute__name", "list_index"],
                "unique_together": {("configuration", "attribute", "list_index")},
            },
        ),
        migrations.CreateModel(
            name="View",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("columns", models.PositiveSmallIntegerField(default=1)),
                ("position", models.PositiveSmallIntegerField(default=0)),
                ("template_id", models.PositiveBigIntegerField(default=0)),
            ],
            options={
                "verbose_name": "View",
                "verbose_name_plural": "Views",
                "ordering": ["template_id", "position"],
                "unique_together": {("name", "template_id")},
            },
        ),
        migrations.CreateModel(
            name="Orientation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("template_id", models.PositiveBigIntegerField(default=0)),
                ("group_id", models.CharField(blank=True, default="", max_length=255)),
                ("x_position", models.PositiveSmallIntegerField(default=0)),
                ("y_position", models.PositiveSmallIntegerField(default=0)),
                ("width", models.PositiveSmallIntegerField(default=1)),
                ("height", models.PositiveSmallIntegerField(default=1)),
                (
                    "title",
                    models.CharField(
                        choices=[("NONE", "None"), ("LEFT", "Left"), ("TOP", "Top")],
                        default="LEFT",
                        max_length=16,
                    ),
                ),
                (
                    "attribute",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="orientations",
                        to="sebconfig.configurationattribute",
                    ),
                ),
                (
                    "view",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="orientations",
                        to="sebconfig.view",
                    ),
                ),
            ],
            options={
                "verbose_name": "Orientation",
                "verbose_name_plural": "Orientations",
                "ordering": ["view", "y_position", "x_position"],
                "unique_together": {("attribute", "template_id")},
            },
        ),
    ]
