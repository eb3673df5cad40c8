from django.contrib import admin

from .models import Institution


@admin.register(Institution)
class InstitutionAdmin(admin.ModelAdmin):
    list_display = ["name", "url_suffix", "theme_name", "active", "created_at"]
    list_filter = ["active"]
    search_fields = ["name", "url_suffix"]
    readonly_fields = ["created_at", "updated_at"]
    fieldsets = (
        (None, {"fields": ("name", "url_suffix", "active")}),
        ("Appearance", {"fields": ("theme_name", "logo_image")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )
