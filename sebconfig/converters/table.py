"""
Table Converter - SEB Server Admin Backend

Renders TABLE, INLINE_TABLE and COMPOSITE_TABLE attributes. Every row of a
table becomes one dictionary holding the converted cell values of the
row's child attributes.

Output:
- TABLE / INLINE_TABLE: key followed by an array of row dictionaries,
  ``<array />`` / ``[]`` for tables without rows
- COMPOSITE_TABLE: key followed by the row dictionaries without an array,
  nothing at all for tables without rows

Author: SEB Server Development Team
Version: 1.0.0
"""

from typing import List

from ..models import AttributeType, ConfigurationAttribute, ConfigurationValue
from .base import AttributeValueConverter, CellContext, json_key, xml_key

XML_ARRAY_START = "<array>"
XML_ARRAY_END = "</array>"
XML_DICT_START = "<dict>"
XML_DICT_END = "</dict>"
XML_EMPTY_ARRAY = "<array />"

JSON_ARRAY_START = "["
JSON_ARRAY_END = "]"
JSON_DICT_START = "{"
JSON_DICT_END = "}"
JSON_EMPTY_ARRAY = "[]"

LIST_SEPARATOR = ","


class TableConverter(AttributeValueConverter):
    types = (
        AttributeType.TABLE,
        AttributeType.INLINE_TABLE,
        AttributeType.COMPOSITE_TABLE,
    )

    def convert_to_xml(self, attribute: ConfigurationAttribute, context) -> str:
        return self.convert(attribute, context, xml=True)

    def convert_to_json(self, attribute: ConfigurationAttribute, context) -> str:
        return self.convert(attribute, context, xml=False)

    def convert(self, attribute: ConfigurationAttribute, context, xml: bool) -> str:
        rows = context.get_table_rows(attribute)
        key = xml_key(attribute) if xml else json_key(attribute)

        if attribute.type != AttributeType.COMPOSITE_TABLE:
            if not rows:
                return key + (XML_EMPTY_ARRAY if xml else JSON_EMPTY_ARRAY)
            return (
                key
                + (XML_ARRAY_START if xml else JSON_ARRAY_START)
                + self.write_rows(rows, context, xml)
                + (XML_ARRAY_END if xml else JSON_ARRAY_END)
            )

        if not rows:
            return ""
        return key + self.write_rows(rows, context, xml)

    def write_rows(self, rows: List[List[ConfigurationValue]], context, xml: bool) -> str:
        rendered_rows = []
        for row in rows:
            cells = []
            for value in row:
                attribute = context.get_attribute(value.attribute_id)
                converter = self.converter_service.get_converter(attribute)
                cell_context = CellContext(value)
                if xml:
                    cells.append(converter.convert_to_xml(attribute, cell_context))
                else:
                    cells.append(converter.convert_to_json(attribute, cell_context))
            separator = "" if xml else LIST_SEPARATOR
            rendered_rows.append(
                (XML_DICT_START if xml else JSON_DICT_START)
                + separator.join(cells)
                + (XML_DICT_END if xml else JSON_DICT_END)
            )
        return ("" if xml else LIST_SEPARATOR).join(rendered_rows)
