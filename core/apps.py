"""
Core App Configuration - SEB Server Admin Backend

The core app holds the entity framework shared by all administration
apps: entity primitives, authorization, filtering, pagination, bulk actions,
activity logging and the generic entity controllers.

Features:
- Generic entity controllers (entity, activatable, read-only)
- Role based privileges and grant checks
- Bulk action processing with dependency resolution
- Info endpoints (institution logo, privileges)

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
