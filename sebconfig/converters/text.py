"""String and data converters."""

import json
from typing import Optional
from xml.sax.saxutils import escape

from ..models import AttributeType, ConfigurationAttribute
from .base import AttributeValueConverter, json_key, xml_key


class StringConverter(AttributeValueConverter):
    types = (
        AttributeType.TEXT_FIELD,
        AttributeType.PASSWORD_FIELD,
        AttributeType.TEXT_AREA,
        AttributeType.COMBO_SELECTION,
    )
    xml_tag = "string"

    def to_xml(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        if not value:
            return f"{xml_key(attribute)}<{self.xml_tag} />"
        return f"{xml_key(attribute)}<{self.xml_tag}>{escape(value)}</{self.xml_tag}>"

    def to_json(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        return f"{json_key(attribute)}{json.dumps(value or '')}"


class DataConverter(StringConverter):
    """Base64 encoded file content."""

    types = (AttributeType.FILE_UPLOAD,)
    xml_tag = "data"
