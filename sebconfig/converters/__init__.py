from .base import CellContext, ValueContext, extract_name
from .service import AttributeValueConverterService

__all__ = ["AttributeValueConverterService", "CellContext", "ValueContext", "extract_name"]
