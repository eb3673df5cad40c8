"""
Management Console Application Configuration

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class GuiConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "gui"
    verbose_name = "Management Console"
