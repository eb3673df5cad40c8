"""
Exam Configuration Serializers - SEB Server Admin Backend

Serializers:
- ConfigurationNodeSerializer: Configuration nodes, unique name per institution
- ConfigurationSerializer: Versions of a node (read-only)
- ConfigurationAttributeSerializer: Attribute catalogue, children only below tables
- ConfigurationValueSerializer: Values of the follow-up configuration
- ViewSerializer / OrientationSerializer: Editor layout (read-only)

Author: SEB Server Development Team
Version: 1.0.0
"""

from typing import Any, Dict

from rest_framework import serializers

from core.exceptions import APIMessageException
from core.institutions.models import Institution

from .models import (
    Configuration,
    ConfigurationAttribute,
    ConfigurationNode,
    ConfigurationType,
    ConfigurationValue,
    Orientation,
    View,
)
from .services import ConfigurationService


class ConfigurationNodeSerializer(serializers.ModelSerializer):
    institution_id = serializers.PrimaryKeyRelatedField(
        source="institution", queryset=Institution.objects.all()
    )

    class Meta:
        model = ConfigurationNode
        fields = [
            "id",
            "institution_id",
            "template_id",
            "owner",
            "name",
            "description",
            "type",
            "status",
            "active",
            "created_at",
        ]
        read_only_fields = ["id", "owner", "active", "created_at"]
        # uniqueness per institution is checked in validate()
        validators = []

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise serializers.ValidationError("Name must have at least 3 characters")
        return value

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        institution = attrs.get("institution") or getattr(self.instance, "institution", None)
        name = attrs.get("name") or getattr(self.instance, "name", None)
        duplicates = ConfigurationNode.objects.filter(institution=institution, name=name)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError(
                {"name": "A configuration with this name already exists"}
            )
        template_id = attrs.get("template_id")
        if template_id and not ConfigurationNode.objects.filter(
            pk=template_id, type=ConfigurationType.TEMPLATE
        ).exists():
            raise serializers.ValidationError({"template_id": "Unknown configuration template"})
        return attrs


class ConfigurationSerializer(serializers.ModelSerializer):
    institution_id = serializers.IntegerField(read_only=True)
    configuration_node_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Configuration
        fields = ["id", "institution_id", "configuration_node_id", "version", "version_date", "followup"]
        read_only_fields = fields


class ConfigurationAttributeSerializer(serializers.ModelSerializer):
    parent_id = serializers.PrimaryKeyRelatedField(
        source="parent",
        queryset=ConfigurationAttribute.objects.all(),
        allow_null=True,
        required=False,
    )

    class Meta:
        model = ConfigurationAttribute
        fields = [
            "id",
            "name",
            "type",
            "parent_id",
            "resources",
            "validator",
            "dependencies",
            "default_value",
        ]
        read_only_fields = ["id"]

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        parent = attrs.get("parent")
        if parent is not None and not parent.is_table:
            raise serializers.ValidationError({"parent_id": "Parent attribute must be a table"})
        return attrs


class ConfigurationValueSerializer(serializers.ModelSerializer):
    institution_id = serializers.IntegerField(read_only=True)
    configuration_id = serializers.PrimaryKeyRelatedField(
        source="configuration", queryset=Configuration.objects.all()
    )
    attribute_id = serializers.PrimaryKeyRelatedField(
        source="attribute", queryset=ConfigurationAttribute.objects.all()
    )

    class Meta:
        model = ConfigurationValue
        fields = ["id", "institution_id", "configuration_id", "attribute_id", "list_index", "value"]
        read_only_fields = ["id", "institution_id"]
        validators = []

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        if self.instance is not None:
            # a value stays bound to its configuration, attribute and row
            attrs.pop("configuration", None)
            attrs.pop("attribute", None)
            attrs.pop("list_index", None)
        configuration = attrs.get("configuration") or self.instance.configuration
        attribute = attrs.get("attribute") or self.instance.attribute
        service = ConfigurationService()
        try:
            service.check_followup(configuration)
            service.validate_value(attribute, attrs.get("value"))
        except APIMessageException as e:
            raise serializers.ValidationError({"value": e.messages[0].details})
        if self.instance is None and ConfigurationValue.objects.filter(
            configuration=configuration,
            attribute=attribute,
            list_index=attrs.get("list_index", 0),
        ).exists():
            raise serializers.ValidationError({"attribute_id": "Value already exists"})
        return attrs

    def create(self, validated_data: Dict[str, Any]) -> ConfigurationValue:
        validated_data["institution_id"] = validated_data["configuration"].institution_id
        return super().create(validated_data)


class ViewSerializer(serializers.ModelSerializer):
    class Meta:
        model = View
        fields = ["id", "name", "columns", "position", "template_id"]
        read_only_fields = fields


class OrientationSerializer(serializers.ModelSerializer):
    attribute_id = serializers.IntegerField(read_only=True)
    view_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Orientation
        fields = [
            "id",
            "attribute_id",
            "template_id",
            "view_id",
            "group_id",
            "x_position",
            "y_position",
            "width",
            "height",
            "title",
        ]
        read_only_fields = fields
