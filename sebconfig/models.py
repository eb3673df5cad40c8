"""
Exam Configuration Models - SEB Server Admin Backend

Models describing SEB exam configurations and the attribute catalogue they
are built from.

Models:
- ConfigurationNode: A named exam configuration (or template) of an institution
- Configuration: One version of a node; exactly one follow-up per node is editable
- ConfigurationAttribute: Catalogue entry of a SEB setting, tables have child attributes
- ConfigurationValue: Value of an attribute in a configuration, list_index addresses table rows
- View: Tab of the configuration editor
- Orientation: Position of an attribute within a view

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.entities import EntityType, GrantEntityMixin
from core.institutions.models import Institution


class ConfigurationType(models.TextChoices):
    TEMPLATE = "TEMPLATE", _("Template")
    EXAM_CONFIG = "EXAM_CONFIG", _("Exam Configuration")


class ConfigurationStatus(models.TextChoices):
    CONSTRUCTION = "CONSTRUCTION", _("Under Construction")
    READY_TO_USE = "READY_TO_USE", _("Ready To Use")
    IN_USE = "IN_USE", _("In Use")


class AttributeType(models.TextChoices):
    TEXT_FIELD = "TEXT_FIELD", _("Text Field")
    PASSWORD_FIELD = "PASSWORD_FIELD", _("Password Field")
    TEXT_AREA = "TEXT_AREA", _("Text Area")
    CHECKBOX = "CHECKBOX", _("Checkbox")
    INTEGER = "INTEGER", _("Integer")
    DECIMAL = "DECIMAL", _("Decimal")
    SINGLE_SELECTION = "SINGLE_SELECTION", _("Single Selection")
    COMBO_SELECTION = "COMBO_SELECTION", _("Combo Selection")
    RADIO_SELECTION = "RADIO_SELECTION", _("Radio Selection")
    MULTI_SELECTION = "MULTI_SELECTION", _("Multi Selection")
    MULTI_CHECKBOX_SELECTION = "MULTI_CHECKBOX_SELECTION", _("Multi Checkbox Selection")
    FILE_UPLOAD = "FILE_UPLOAD", _("File Upload")
    TABLE = "TABLE", _("Table")
    INLINE_TABLE = "INLINE_TABLE", _("Inline Table")
    COMPOSITE_TABLE = "COMPOSITE_TABLE", _("Composite Table")


TABLE_TYPES = (AttributeType.TABLE, AttributeType.INLINE_TABLE, AttributeType.COMPOSITE_TABLE)


class TitleOrientation(models.TextChoices):
    NONE = "NONE", _("None")
    LEFT = "LEFT", _("Left")
    TOP = "TOP", _("Top")


class ConfigurationNode(GrantEntityMixin, models.Model):
    entity_type = EntityType.CONFIGURATION_NODE
    grant_owner_field = "owner"

    institution = models.ForeignKey(
        Institution, on_delete=models.CASCADE, related_name="configuration_nodes"
    )
    # 0 for the default template
    template_id = models.PositiveBigIntegerField(default=0)
    owner = models.CharField(max_length=36, db_index=True)
    name = models.CharField(_("Name"), max_length=255)
    description = models.TextField(_("Description"), blank=True, default="")
    type = models.CharField(
        max_length=32, choices=ConfigurationType.choices, default=ConfigurationType.EXAM_CONFIG
    )
    status = models.CharField(
        max_length=32, choices=ConfigurationStatus.choices, default=ConfigurationStatus.CONSTRUCTION
    )
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        unique_together = ("institution", "name")
        verbose_name = _("Configuration Node")
        verbose_name_plural = _("Configuration Nodes")

    def __str__(self):
        return self.name


class Configuration(GrantEntityMixin, models.Model):
    entity_type = EntityType.CONFIGURATION
    grant_owner_field = "configuration_node__owner"

    institution = models.ForeignKey(
        Institution, on_delete=models.CASCADE, related_name="configurations"
    )
    configuration_node = models.ForeignKey(
        ConfigurationNode, on_delete=models.CASCADE, related_name="configurations"
    )
    version = models.CharField(max_length=255, null=True, blank=True)
    version_date = models.DateTimeField(null=True, blank=True)
    followup = models.BooleanField(default=False)

    class Meta:
        ordering = ["configuration_node", "version_date", "pk"]
        verbose_name = _("Configuration")
        verbose_name_plural = _("Configurations")

    def __str__(self):
        label = "follow-up" if self.followup else self.version
        return f"{self.configuration_node.name} [{label}]"


class ConfigurationAttribute(GrantEntityMixin, models.Model):
    entity_type = EntityType.CONFIGURATION_ATTRIBUTE
    grant_institution_field = None

    name = models.CharField(_("Name"), max_length=255, unique=True)
    type = models.CharField(max_length=32, choices=AttributeType.choices)
    parent = models.ForeignKey(
        "self", on_delete=models.CASCADE, null=True, blank=True, related_name="children"
    )
    resources = models.CharField(max_length=4000, blank=True, default="")
    validator = models.CharField(max_length=255, blank=True, default="")
    dependencies = models.CharField(max_length=4000, blank=True, default="")
    default_value = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ["name"]
        verbose_name = _("Configuration Attribute")
        verbose_name_plural = _("Configuration Attributes")

    def __str__(self):
        return self.name

    @property
    def is_table(self) -> bool:
        return self.type in TABLE_TYPES

    @property
    def resource_list(self):
        return [resource for resource in self.resources.split(",") if resource]


class ConfigurationValue(GrantEntityMixin, models.Model):
    entity_type = EntityType.CONFIGURATION_VALUE
    grant_owner_field = "configuration__configuration_node__owner"

    institution = models.ForeignKey(
        Institution, on_delete=models.CASCADE, related_name="configuration_values"
    )
    configuration = models.ForeignKey(
        Configuration, on_delete=models.CASCADE, related_name="values"
    )
    attribute = models.ForeignKey(
        ConfigurationAttribute, on_delete=models.CASCADE, related_name="values"
    )
    list_index = models.PositiveIntegerField(default=0)
    value = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ["configuration", "attribute__name", "list_index"]
        unique_together = ("configuration", "attribute", "list_index")
        verbose_name = _("Configuration Value")
        verbose_name_plural = _("Configuration Values")

    def __str__(self):
        return f"{self.attribute.name}[{self.list_index}]={self.value}"


class View(GrantEntityMixin, models.Model):
    entity_type = EntityType.VIEW
    grant_institution_field = None

    name = models.CharField(max_length=255)
    columns = models.PositiveSmallIntegerField(default=1)
    position = models.PositiveSmallIntegerField(default=0)
    template_id = models.PositiveBigIntegerField(default=0)

    class Meta:
        ordering = ["template_id", "position"]
        unique_together = ("name", "template_id")
        verbose_name = _("View")
        verbose_name_plural = _("Views")

    def __str__(self):
        return self.name


class Orientation(GrantEntityMixin, models.Model):
    entity_type = EntityType.ORIENTATION
    grant_institution_field = None

    attribute = models.ForeignKey(
        ConfigurationAttribute, on_delete=models.CASCADE, related_name="orientations"
    )
    template_id = models.PositiveBigIntegerField(default=0)
    view = models.ForeignKey(View, on_delete=models.CASCADE, related_name="orientations")
    group_id = models.CharField(max_length=255, blank=True, default="")
    x_position = models.PositiveSmallIntegerField(default=0)
    y_position = models.PositiveSmallIntegerField(default=0)
    width = models.PositiveSmallIntegerField(default=1)
    height = models.PositiveSmallIntegerField(default=1)
    title = models.CharField(
        max_length=16, choices=TitleOrientation.choices, default=TitleOrientation.LEFT
    )

    class Meta:
        ordering = ["view", "y_position", "x_position"]
        unique_together = ("attribute", "template_id")
        verbose_name = _("Orientation")
        verbose_name_plural = _("Orientations")

    def __str__(self):
        return f"{self.attribute.name} @ {self.view.name} ({self.x_position},{self.y_position})"
