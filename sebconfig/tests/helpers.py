"""Exam configuration fixtures."""

from sebconfig.models import AttributeType, ConfigurationAttribute, ConfigurationNode, ConfigurationType
from sebconfig.services import ConfigurationService


def create_attribute(name: str, attribute_type: AttributeType, parent=None, **kwargs) -> ConfigurationAttribute:
    return ConfigurationAttribute.objects.create(name=name, type=attribute_type, parent=parent, **kwargs)


def create_node(institution, owner, name: str = "Exam Config", **kwargs) -> ConfigurationNode:
    """Configuration node with its initial stable version and follow-up."""
    kwargs.setdefault("type", ConfigurationType.EXAM_CONFIG)
    node = ConfigurationNode.objects.create(
        institution=institution, owner=str(owner.uuid), name=name, **kwargs
    )
    ConfigurationService().init_configurations(node)
    return node
