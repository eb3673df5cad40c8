from django.contrib import admin

from .models import (
    Configuration,
    ConfigurationAttribute,
    ConfigurationNode,
    ConfigurationValue,
    Orientation,
    View,
)


class ConfigurationInline(admin.TabularInline):
    model = Configuration
    extra = 0
    fields = ["version", "version_date", "followup"]
    readonly_fields = fields
    can_delete = False


@admin.register(ConfigurationNode)
class ConfigurationNodeAdmin(admin.ModelAdmin):
    list_display = ["name", "institution", "type", "status", "owner", "active", "created_at"]
    list_filter = ["type", "status", "active", "institution"]
    search_fields = ["name", "description", "owner"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [ConfigurationInline]


@admin.register(Configuration)
class ConfigurationAdmin(admin.ModelAdmin):
    list_display = ["configuration_node", "version", "version_date", "followup"]
    list_filter = ["followup", "institution"]
    search_fields = ["configuration_node__name", "version"]


@admin.register(ConfigurationAttribute)
class ConfigurationAttributeAdmin(admin.ModelAdmin):
    list_display = ["name", "type", "parent", "default_value"]
    list_filter = ["type"]
    search_fields = ["name"]


@admin.register(ConfigurationValue)
class ConfigurationValueAdmin(admin.ModelAdmin):
    list_display = ["configuration", "attribute", "list_index", "value"]
    list_filter = ["configuration__followup"]
    search_fields = ["attribute__name", "value"]
    list_select_related = ["configuration__configuration_node", "attribute"]


@admin.register(View)
class ViewAdmin(admin.ModelAdmin):
    list_display = ["name", "template_id", "position", "columns"]
    list_filter = ["template_id"]


@admin.register(Orientation)
class OrientationAdmin(admin.ModelAdmin):
    list_display = ["attribute", "view", "template_id", "x_position", "y_position", "width", "height", "title"]
    list_filter = ["template_id", "view"]
    search_fields = ["attribute__name", "group_id"]
