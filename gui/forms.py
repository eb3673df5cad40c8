"""
Console Forms - SEB Server Admin Backend

Forms:
- ExamConfigPropertiesForm: One input per oriented attribute of a template,
  grouped in tabs per view and saved on the follow-up configuration

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from django import forms
from django.db import transaction

from core.exceptions import APIMessageException
from core.utils import get_list_from_string
from sebconfig.models import (
    AttributeType,
    Configuration,
    ConfigurationAttribute,
    ConfigurationValue,
    Orientation,
)
from sebconfig.services import AttributeMapping, ConfigurationService

logger = logging.getLogger(__name__)

FIELD_PREFIX = "attribute_"


def field_name(attribute: ConfigurationAttribute) -> str:
    return f"{FIELD_PREFIX}{attribute.pk}"


def create_field(attribute: ConfigurationAttribute) -> forms.Field:
    options = [(resource, resource) for resource in attribute.resource_list]
    label = attribute.name
    if attribute.type == AttributeType.CHECKBOX:
        return forms.BooleanField(label=label, required=False)
    if attribute.type == AttributeType.TEXT_AREA:
        return forms.CharField(label=label, required=False, widget=forms.Textarea(attrs={"rows": 3}))
    if attribute.type == AttributeType.PASSWORD_FIELD:
        return forms.CharField(
            label=label, required=False, widget=forms.PasswordInput(render_value=True)
        )
    if attribute.type == AttributeType.SINGLE_SELECTION and options:
        return forms.ChoiceField(label=label, required=False, choices=[("", "---")] + options)
    if attribute.type == AttributeType.RADIO_SELECTION and options:
        return forms.ChoiceField(
            label=label, required=False, choices=options, widget=forms.RadioSelect
        )
    if attribute.type == AttributeType.MULTI_SELECTION and options:
        return forms.MultipleChoiceField(label=label, required=False, choices=options)
    if attribute.type == AttributeType.MULTI_CHECKBOX_SELECTION and options:
        return forms.MultipleChoiceField(
            label=label, required=False, choices=options, widget=forms.CheckboxSelectMultiple
        )
    return forms.CharField(label=label, required=False)


def to_initial(attribute: ConfigurationAttribute, value: Optional[str]) -> Any:
    if value is None:
        value = attribute.default_value
    if attribute.type == AttributeType.CHECKBOX:
        return (value or "").lower() == "true"
    if attribute.type in (AttributeType.MULTI_SELECTION, AttributeType.MULTI_CHECKBOX_SELECTION):
        return get_list_from_string(value)
    return value or ""


def to_value(attribute: ConfigurationAttribute, cleaned: Any) -> str:
    if attribute.type == AttributeType.CHECKBOX:
        return "true" if cleaned else "false"
    if isinstance(cleaned, (list, tuple)):
        return ",".join(cleaned)
    return "" if cleaned is None else str(cleaned)


class ExamConfigPropertiesForm(forms.Form):
    """
    Properties of an exam configuration.

    Table attributes are shown as read-only rows and are not part of the
    submitted data.
    """

    def __init__(
        self,
        *args,
        mapping: AttributeMapping,
        configuration: Configuration,
        **kwargs,
    ):
        self.mapping = mapping
        self.configuration = configuration
        self.service = ConfigurationService()
        self.values: Dict[Tuple[int, int], ConfigurationValue] = self.service.get_values(configuration)
        self.attributes: Dict[str, ConfigurationAttribute] = {}

        initial = {}
        fields = {}
        for view in mapping.views:
            for attribute, _ in mapping.get_view_attributes(view):
                if attribute.is_table:
                    continue
                name = field_name(attribute)
                fields[name] = create_field(attribute)
                current = self.values.get((attribute.pk, 0))
                initial[name] = to_initial(attribute, current.value if current else None)
                self.attributes[name] = attribute

        kwargs.setdefault("initial", initial)
        super().__init__(*args, **kwargs)
        self.fields.update(fields)

    @property
    def tabs(self) -> List[Dict[str, Any]]:
        tabs = []
        for view in self.mapping.views:
            cells = []
            for attribute, orientation in self.mapping.get_view_attributes(view):
                cells.append(self._cell(attribute, orientation))
            tabs.append({"view": view, "columns": max(view.columns, 1), "cells": cells})
        return tabs

    def _cell(self, attribute: ConfigurationAttribute, orientation: Orientation) -> Dict[str, Any]:
        cell = {
            "attribute": attribute,
            "orientation": orientation,
            "style": (
                f"grid-column: {orientation.x_position + 1} / span {orientation.width}; "
                f"grid-row: {orientation.y_position + 1} / span {orientation.height};"
            ),
            "field": None,
            "rows": None,
        }
        if attribute.is_table:
            children = self.mapping.get_child_attributes(attribute)
            cell["columns"] = [child.name for child in children]
            cell["rows"] = [
                [value.value for value in row]
                for row in self.service.get_ordered_table_values(self.configuration, attribute)
            ]
        else:
            cell["field"] = self[field_name(attribute)]
        return cell

    def get_changed_values(self) -> Dict[str, Tuple[ConfigurationAttribute, str]]:
        changed = {}
        for name in self.changed_data:
            attribute = self.attributes[name]
            changed[name] = (attribute, to_value(attribute, self.cleaned_data.get(name)))
        return changed

    def save(self) -> int:
        """
        Validates and stores the changed values on the follow-up.

        Returns:
            Number of saved values, 0 when a value was rejected (errors are
            added to the form)
        """
        changed = self.get_changed_values()
        for name, (attribute, value) in changed.items():
            try:
                self.service.validate_value(attribute, value)
            except APIMessageException as e:
                self.add_error(name, e.messages[0].details)
        if self.errors:
            return 0

        with transaction.atomic():
            for attribute, value in changed.values():
                self.service.save_value(self.configuration, attribute, value)
        logger.info(
            "Saved %d values on configuration %s", len(changed), self.configuration.pk
        )
        return len(changed)
