from django.contrib import admin

from .models import ClientConnection, ClientEvent


class ClientEventInline(admin.TabularInline):
    model = ClientEvent
    extra = 0
    fields = ["type", "timestamp", "numeric_value", "text"]
    readonly_fields = fields
    can_delete = False


@admin.register(ClientConnection)
class ClientConnectionAdmin(admin.ModelAdmin):
    list_display = ["user_session_id", "institution", "exam_id", "status", "client_address", "created_at"]
    list_filter = ["status", "institution"]
    search_fields = ["user_session_id", "connection_token", "client_address"]
    readonly_fields = ["created_at"]
    inlines = [ClientEventInline]


@admin.register(ClientEvent)
class ClientEventAdmin(admin.ModelAdmin):
    list_display = ["connection", "type", "timestamp", "numeric_value", "text"]
    list_filter = ["type"]
    search_fields = ["text", "connection__user_session_id"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
