from .attribute_views import ConfigurationAttributeController, OrientationController, ViewController
from .node_views import ConfigurationController, ConfigurationNodeController
from .value_views import ConfigurationValueController

__all__ = [
    "ConfigurationNodeController",
    "ConfigurationController",
    "ConfigurationValueController",
    "ConfigurationAttributeController",
    "ViewController",
    "OrientationController",
]
