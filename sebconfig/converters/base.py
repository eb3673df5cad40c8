"""
Attribute Value Converter Base - SEB Server Admin Backend

Converters render one configuration attribute with its value as a SEB
configuration fragment, either as XML property-list entries or as JSON
members. Values are read through a value context so that table converters
can reach the rows of their child attributes.

Author: SEB Server Development Team
Version: 1.0.0
"""

import json
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple
from xml.sax.saxutils import escape

from ..models import AttributeType, ConfigurationAttribute, ConfigurationValue

XML_KEY_TEMPLATE = "<key>%s</key>"
JSON_KEY_TEMPLATE = '"%s":'


def extract_name(attribute: ConfigurationAttribute) -> str:
    """Attribute name without the parent prefix (``table.column`` -> ``column``)."""
    name = attribute.name
    index = name.rfind(".")
    return name[index + 1:] if index >= 0 else name


def xml_key(attribute: ConfigurationAttribute) -> str:
    return XML_KEY_TEMPLATE % escape(extract_name(attribute))


def json_key(attribute: ConfigurationAttribute) -> str:
    return JSON_KEY_TEMPLATE % json.dumps(extract_name(attribute))[1:-1]


def order_table_values(values: Iterable[ConfigurationValue], attribute_names: Dict[int, str]) -> List[List[ConfigurationValue]]:
    """Groups table cell values into rows by list_index, cells sorted by attribute name."""
    rows: Dict[int, List[ConfigurationValue]] = defaultdict(list)
    for value in values:
        rows[value.list_index].append(value)
    return [
        sorted(rows[index], key=lambda value: attribute_names.get(value.attribute_id, ""))
        for index in sorted(rows)
    ]


class ValueContext:
    """
    Supplies attribute values of one configuration to the converters.

    Built from all values of a configuration and the attribute catalogue so
    an export runs on preloaded data.
    """

    def __init__(
        self,
        values: Iterable[ConfigurationValue],
        attributes: Iterable[ConfigurationAttribute],
    ):
        self.attributes: Dict[int, ConfigurationAttribute] = {a.pk: a for a in attributes}
        self.values: Dict[Tuple[int, int], ConfigurationValue] = {
            (value.attribute_id, value.list_index): value for value in values
        }
        self.children: Dict[int, List[ConfigurationAttribute]] = defaultdict(list)
        for attribute in sorted(self.attributes.values(), key=lambda a: a.name):
            if attribute.parent_id is not None:
                self.children[attribute.parent_id].append(attribute)

    def get_value(self, attribute: ConfigurationAttribute) -> Optional[str]:
        value = self.values.get((attribute.pk, 0))
        if value is None or value.value is None:
            return attribute.default_value
        return value.value

    def get_child_attributes(self, attribute: ConfigurationAttribute) -> List[ConfigurationAttribute]:
        return self.children.get(attribute.pk, [])

    def get_table_rows(self, attribute: ConfigurationAttribute) -> List[List[ConfigurationValue]]:
        child_ids = {child.pk for child in self.get_child_attributes(attribute)}
        cells = [value for (attribute_id, _), value in self.values.items() if attribute_id in child_ids]
        names = {attribute_id: self.attributes[attribute_id].name for attribute_id in child_ids}
        return order_table_values(cells, names)

    def get_attribute(self, attribute_id: int) -> ConfigurationAttribute:
        return self.attributes[attribute_id]


class CellContext:
    """Value context of a single table cell."""

    def __init__(self, value: ConfigurationValue):
        self.value = value

    def get_value(self, attribute: ConfigurationAttribute) -> Optional[str]:
        if self.value.value is None:
            return attribute.default_value
        return self.value.value

    def get_table_rows(self, attribute: ConfigurationAttribute) -> List[List[ConfigurationValue]]:
        return []


class AttributeValueConverter:
    """
    Base converter. Simple converters implement ``to_xml``/``to_json`` on the
    resolved value; table converters override ``convert_to_xml``/``convert_to_json``.
    """

    types: Tuple[AttributeType, ...] = ()

    def init(self, converter_service) -> None:
        self.converter_service = converter_service

    def convert_to_xml(self, attribute: ConfigurationAttribute, context) -> str:
        return self.to_xml(attribute, context.get_value(attribute))

    def convert_to_json(self, attribute: ConfigurationAttribute, context) -> str:
        return self.to_json(attribute, context.get_value(attribute))

    def to_xml(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        raise NotImplementedError

    def to_json(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        raise NotImplementedError
