from typing import Optional

from ..models import AttributeType, ConfigurationAttribute
from .base import AttributeValueConverter, json_key, xml_key


def to_bool(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


class BooleanConverter(AttributeValueConverter):
    types = (AttributeType.CHECKBOX,)

    def to_xml(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        return f"{xml_key(attribute)}<{'true' if to_bool(value) else 'false'} />"

    def to_json(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        return f"{json_key(attribute)}{'true' if to_bool(value) else 'false'}"
