"""
Configuration Export Service - SEB Server Admin Backend

Renders the last stable version of a configuration node as SEB
configuration file, either as XML property list or as JSON object.

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging
from enum import Enum
from typing import List

from core.exceptions import APIMessageException, ErrorMessage

from ..converters import AttributeValueConverterService, ValueContext
from ..models import Configuration, ConfigurationAttribute, ConfigurationNode
from .configuration_service import ConfigurationService

logger = logging.getLogger(__name__)

XML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" '
    '"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
)
XML_PLIST_START = '<plist version="1.0"><dict>'
XML_PLIST_END = "</dict></plist>"


class ExportFormat(Enum):
    XML = ("xml", "application/xml")
    JSON = ("json", "application/json")

    def __init__(self, key: str, content_type: str):
        self.key = key
        self.content_type = content_type

    @classmethod
    def of(cls, key: str) -> "ExportFormat":
        for export_format in cls:
            if export_format.key == (key or "").lower():
                return export_format
        raise APIMessageException(
            ErrorMessage.ILLEGAL_API_ARGUMENT, f"Unsupported export format: {key}"
        )


class ExportService:
    def __init__(self, converter_service: AttributeValueConverterService = None):
        self.converter_service = converter_service or AttributeValueConverterService()
        self.configuration_service = ConfigurationService()

    def export_node(self, node: ConfigurationNode, export_format: ExportFormat) -> str:
        configuration = self.configuration_service.get_last_stable(node)
        if configuration is None:
            raise APIMessageException(
                ErrorMessage.RESOURCE_NOT_FOUND,
                f"No stable configuration for configuration node {node.pk}",
            )
        return self.export_configuration(configuration, export_format)

    def export_configuration(self, configuration: Configuration, export_format: ExportFormat) -> str:
        attributes = list(ConfigurationAttribute.objects.all())
        context = ValueContext(configuration.values.all(), attributes)
        top_level = sorted((a for a in attributes if a.parent_id is None), key=lambda a: a.name)

        xml = export_format is ExportFormat.XML
        entries: List[str] = []
        for attribute in top_level:
            converter = self.converter_service.get_converter(attribute)
            if xml:
                entry = converter.convert_to_xml(attribute, context)
            else:
                entry = converter.convert_to_json(attribute, context)
            if entry:
                entries.append(entry)

        logger.debug(
            "Exported configuration %s with %d attributes as %s",
            configuration.pk,
            len(entries),
            export_format.key,
        )
        if xml:
            return XML_HEADER + XML_PLIST_START + "".join(entries) + XML_PLIST_END
        return "{" + ",".join(entries) + "}"
