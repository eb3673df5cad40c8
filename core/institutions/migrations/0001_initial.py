from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Institution",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, unique=True, verbose_name="Name")),
                ("url_suffix", models.CharField(blank=True, default="", max_length=255, verbose_name="URL suffix")),
                ("logo_image", models.TextField(blank=True, default="", verbose_name="Logo (base64)")),
                ("theme_name", models.CharField(blank=True, default="", max_length=100, verbose_name="Theme")),
                ("active", models.BooleanField(default=True, verbose_name="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Institution",
                "verbose_name_plural": "Institutions",
                "ordering": ["name"],
            },
        ),
    ]
