"""
Attribute Value Converter Service

Registry of the converters, dispatching on the attribute type.
"""

from typing import Dict, Iterable, Optional

from ..models import AttributeType, ConfigurationAttribute
from .base import AttributeValueConverter
from .boolean import BooleanConverter
from .numbers import DecimalConverter, IntegerConverter
from .string_list import StringListConverter
from .table import TableConverter
from .text import DataConverter, StringConverter


def default_converters():
    return [
        BooleanConverter(),
        IntegerConverter(),
        DecimalConverter(),
        StringConverter(),
        DataConverter(),
        StringListConverter(),
        TableConverter(),
    ]


class AttributeValueConverterService:
    def __init__(self, converters: Optional[Iterable[AttributeValueConverter]] = None):
        self.converters: Dict[str, AttributeValueConverter] = {}
        for converter in converters if converters is not None else default_converters():
            converter.init(self)
            for attribute_type in converter.types:
                self.converters[str(attribute_type)] = converter

    def get_converter(self, attribute: ConfigurationAttribute) -> AttributeValueConverter:
        try:
            return self.converters[str(attribute.type)]
        except KeyError:
            raise ValueError(f"No converter for attribute type {attribute.type}")

    def supports(self, attribute_type: AttributeType) -> bool:
        return str(attribute_type) in self.converters
