from .configuration_service import AttributeMapping, ConfigurationService
from .export_service import ExportFormat, ExportService

__all__ = ["AttributeMapping", "ConfigurationService", "ExportFormat", "ExportService"]
