"""Integer and decimal converters. Blank values fall back to the attribute default, then 0."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..models import AttributeType, ConfigurationAttribute
from .base import AttributeValueConverter, json_key, xml_key

logger = logging.getLogger(__name__)


def _resolve(attribute: ConfigurationAttribute, value: Optional[str]) -> Optional[str]:
    if value is not None and value.strip():
        return value.strip()
    if attribute.default_value is not None and attribute.default_value.strip():
        return attribute.default_value.strip()
    return None


class IntegerConverter(AttributeValueConverter):
    types = (
        AttributeType.INTEGER,
        AttributeType.SINGLE_SELECTION,
        AttributeType.RADIO_SELECTION,
    )

    def to_int(self, attribute: ConfigurationAttribute, value: Optional[str]) -> int:
        resolved = _resolve(attribute, value)
        if resolved is None:
            return 0
        try:
            return int(resolved)
        except ValueError:
            logger.warning("Invalid integer value for attribute %s: %s", attribute.name, resolved)
            return 0

    def to_xml(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        return f"{xml_key(attribute)}<integer>{self.to_int(attribute, value)}</integer>"

    def to_json(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        return f"{json_key(attribute)}{self.to_int(attribute, value)}"


class DecimalConverter(AttributeValueConverter):
    types = (AttributeType.DECIMAL,)

    def to_decimal(self, attribute: ConfigurationAttribute, value: Optional[str]) -> Decimal:
        """First finite decimal of value and default, else 0.0."""
        for candidate in (value, attribute.default_value):
            if candidate is None or not candidate.strip():
                continue
            try:
                number = Decimal(candidate.strip())
            except InvalidOperation:
                number = None
            if number is not None and number.is_finite():
                return number
            logger.warning("Invalid decimal value for attribute %s: %s", attribute.name, candidate)
        return Decimal("0.0")

    def to_xml(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        return f"{xml_key(attribute)}<real>{self.to_decimal(attribute, value)}</real>"

    def to_json(self, attribute: ConfigurationAttribute, value: Optional[str]) -> str:
        return f"{json_key(attribute)}{self.to_decimal(attribute, value)}"
