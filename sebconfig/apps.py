"""
Exam Configuration Application Configuration

Registers the exam configuration app and its bulk action supports.

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class SebconfigConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sebconfig"
    verbose_name = "Exam Configurations"

    def ready(self) -> None:
        from core.accounts.activity import register_entity_serializer
        from core.bulkaction import register_bulk_action_support
        from core.entities import EntityType

        from . import serializers
        from .bulk import (
            ConfigurationAttributeBulkActionSupport,
            ConfigurationNodeBulkActionSupport,
            ConfigurationValueBulkActionSupport,
        )

        register_bulk_action_support(ConfigurationNodeBulkActionSupport())
        register_bulk_action_support(ConfigurationValueBulkActionSupport())
        register_bulk_action_support(ConfigurationAttributeBulkActionSupport())

        for entity_type, serializer_class in (
            (EntityType.CONFIGURATION_NODE, serializers.ConfigurationNodeSerializer),
            (EntityType.CONFIGURATION, serializers.ConfigurationSerializer),
            (EntityType.CONFIGURATION_VALUE, serializers.ConfigurationValueSerializer),
            (EntityType.CONFIGURATION_ATTRIBUTE, serializers.ConfigurationAttributeSerializer),
            (EntityType.VIEW, serializers.ViewSerializer),
            (EntityType.ORIENTATION, serializers.OrientationSerializer),
        ):
            register_entity_serializer(entity_type, serializer_class)
