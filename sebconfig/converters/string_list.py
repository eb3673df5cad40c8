import json
from typing import Optional
from xml.sax.saxutils import escape

from core.utils import get_list_from_string

from ..models import AttributeType, ConfigurationAttribute
from .base import AttributeValueConverter, json_key, xml_key


class StringListConverter(AttributeValueConverter):
    """Comma separated selections rendered as string arrays."""

    types = (AttributeType.MULTI_SELECTION, AttributeType.MULTI_CHECKBOX_SELECTION)

    def to_xml(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        values = get_list_from_string(value)
        if not values:
            return f"{xml_key(attribute)}<array />"
        items = "".join(f"<string>{escape(item)}</string>" for item in values)
        return f"{xml_key(attribute)}<array>{items}</array>"

    def to_json(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        items = json.dumps(get_list_from_string(value), separators=(",", ":"))
        return f"{json_key(attribute)}{items}"
