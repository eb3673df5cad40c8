"""
Configuration Service - SEB Server Admin Backend

Lifecycle and value handling of exam configurations.

Features:
- Initial stable version "v0" and an editable follow-up per configuration node
- Saving the follow-up to history as a new stable version
- Undo of follow-up changes back to the last stable version
- Type based value validation and follow-up only value editing
- Ordered table values and the attribute mapping of a template

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple

from django.db import transaction
from django.utils import timezone

from core.exceptions import APIMessageException, ErrorMessage
from core.utils import get_list_from_string

from ..converters.base import order_table_values
from ..models import (
    AttributeType,
    Configuration,
    ConfigurationAttribute,
    ConfigurationNode,
    ConfigurationValue,
    Orientation,
    View,
)

logger = logging.getLogger(__name__)

INITIAL_VERSION = "v0"
FOLLOWUP_ONLY = "Only the follow-up configuration can be modified"

SELECTION_TYPES = (
    AttributeType.SINGLE_SELECTION,
    AttributeType.RADIO_SELECTION,
)
MULTI_SELECTION_TYPES = (
    AttributeType.MULTI_SELECTION,
    AttributeType.MULTI_CHECKBOX_SELECTION,
)


@dataclass
class AttributeMapping:
    """Attributes, views and orientations of a template."""

    template_id: int
    attributes: Dict[int, ConfigurationAttribute] = field(default_factory=dict)
    views: List[View] = field(default_factory=list)
    orientations: Dict[int, Orientation] = field(default_factory=dict)

    def get_view_attributes(self, view: View) -> List[Tuple[ConfigurationAttribute, Orientation]]:
        """Attributes placed on the view with their orientation, row by row."""
        placed = [
            (self.attributes[attribute_id], orientation)
            for attribute_id, orientation in self.orientations.items()
            if orientation.view_id == view.pk and attribute_id in self.attributes
        ]
        return sorted(placed, key=lambda item: (item[1].y_position, item[1].x_position))

    def get_child_attributes(self, attribute: ConfigurationAttribute) -> List[ConfigurationAttribute]:
        return sorted(
            (a for a in self.attributes.values() if a.parent_id == attribute.pk),
            key=lambda a: a.name,
        )


class ConfigurationService:
    @transaction.atomic
    def init_configurations(self, node: ConfigurationNode) -> Configuration:
        """
        Creates the initial stable configuration and the follow-up of a new node.
        Values of the node's template are copied into both.

        Returns:
            The follow-up configuration
        """
        now = timezone.now()
        initial = Configuration.objects.create(
            institution_id=node.institution_id,
            configuration_node=node,
            version=INITIAL_VERSION,
            version_date=now,
            followup=False,
        )
        followup = Configuration.objects.create(
            institution_id=node.institution_id,
            configuration_node=node,
            followup=True,
        )
        if node.template_id:
            template = ConfigurationNode.objects.filter(pk=node.template_id).first()
            template_config = self.get_last_stable(template) if template else None
            if template_config is not None:
                self.copy_values(template_config, initial)
                self.copy_values(template_config, followup)
        return followup

    def get_followup(self, node: ConfigurationNode) -> Configuration:
        return node.configurations.get(followup=True)

    def get_last_stable(self, node: ConfigurationNode) -> Optional[Configuration]:
        return (
            node.configurations.filter(followup=False)
            .order_by("-version_date", "-pk")
            .first()
        )

    def copy_values(self, source: Configuration, target: Configuration) -> int:
        values = [
            ConfigurationValue(
                institution_id=target.institution_id,
                configuration=target,
                attribute_id=value.attribute_id,
                list_index=value.list_index,
                value=value.value,
            )
            for value in source.values.all()
        ]
        ConfigurationValue.objects.bulk_create(values)
        return len(values)

    @transaction.atomic
    def save_to_history(self, node: ConfigurationNode) -> Configuration:
        """Stores the follow-up state as new stable version. Returns the follow-up."""
        followup = self.get_followup(node)
        version_count = node.configurations.filter(followup=False).count()
        stable = Configuration.objects.create(
            institution_id=node.institution_id,
            configuration_node=node,
            version=f"v{version_count}",
            version_date=timezone.now(),
            followup=False,
        )
        self.copy_values(followup, stable)
        logger.info("Configuration node %s saved to history as %s", node.pk, stable.version)
        return followup

    @transaction.atomic
    def undo(self, node: ConfigurationNode) -> Configuration:
        """Resets the follow-up to the last stable version. Returns the follow-up."""
        followup = self.get_followup(node)
        stable = self.get_last_stable(node)
        followup.values.all().delete()
        if stable is not None:
            self.copy_values(stable, followup)
        return followup

    def get_value(
        self, configuration: Configuration, attribute: ConfigurationAttribute, list_index: int = 0
    ) -> Optional[ConfigurationValue]:
        return configuration.values.filter(attribute=attribute, list_index=list_index).first()

    def get_values(self, configuration: Configuration) -> Dict[Tuple[int, int], ConfigurationValue]:
        return {(v.attribute_id, v.list_index): v for v in configuration.values.all()}

    def check_followup(self, configuration: Configuration) -> None:
        if not configuration.followup:
            raise APIMessageException(ErrorMessage.ILLEGAL_API_ARGUMENT, FOLLOWUP_ONLY)

    def validate_value(self, attribute: ConfigurationAttribute, value: Optional[str]) -> None:
        """
        Validates a value against the attribute type, resources and validator.

        Raises:
            APIMessageException: FIELD_VALIDATION with the attribute name as field
        """
        if attribute.is_table:
            raise APIMessageException.field_validation(
                attribute.name, "Table attributes have no own value"
            )
        if value is None or value == "":
            return

        message = None
        if attribute.type == AttributeType.INTEGER:
            try:
                int(value)
            except ValueError:
                message = "Invalid integer value"
        elif attribute.type == AttributeType.DECIMAL:
            try:
                if not Decimal(value).is_finite():
                    message = "Invalid decimal value"
            except InvalidOperation:
                message = "Invalid decimal value"
        elif attribute.type == AttributeType.CHECKBOX:
            if value.lower() not in ("true", "false"):
                message = "Invalid boolean value"
        elif attribute.type in SELECTION_TYPES and attribute.resource_list:
            if value not in attribute.resource_list:
                message = "Value is not one of the selectable options"
        elif attribute.type in MULTI_SELECTION_TYPES and attribute.resource_list:
            if not set(get_list_from_string(value)) <= set(attribute.resource_list):
                message = "Values are not all selectable options"

        if message is None and attribute.validator:
            try:
                if not re.fullmatch(attribute.validator, value):
                    message = "Value does not match the expected format"
            except re.error:
                logger.warning("Invalid validator pattern on attribute %s", attribute.name)

        if message is not None:
            raise APIMessageException.field_validation(attribute.name, message)

    def save_value(
        self,
        configuration: Configuration,
        attribute: ConfigurationAttribute,
        value: Optional[str],
        list_index: int = 0,
    ) -> ConfigurationValue:
        """Validates and stores a value on the follow-up configuration."""
        self.check_followup(configuration)
        self.validate_value(attribute, value)
        config_value, _ = ConfigurationValue.objects.update_or_create(
            configuration=configuration,
            attribute=attribute,
            list_index=list_index,
            defaults={"institution_id": configuration.institution_id, "value": value},
        )
        return config_value

    def get_ordered_table_values(
        self, configuration: Configuration, table_attribute: ConfigurationAttribute
    ) -> List[List[ConfigurationValue]]:
        children = {child.pk: child.name for child in table_attribute.children.all()}
        values = configuration.values.filter(attribute_id__in=children.keys())
        return order_table_values(values, children)

    def get_attribute_mapping(self, template_id: int = 0) -> AttributeMapping:
        views = list(View.objects.filter(template_id=template_id).order_by("position"))
        orientations = Orientation.objects.filter(template_id=template_id)
        if not views:
            views = list(View.objects.filter(template_id=0).order_by("position"))
            orientations = Orientation.objects.filter(template_id=0)
        return AttributeMapping(
            template_id=template_id,
            attributes={a.pk: a for a in ConfigurationAttribute.objects.all()},
            views=views,
            orientations={o.attribute_id: o for o in orientations},
        )
