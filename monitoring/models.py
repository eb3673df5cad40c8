"""
Monitoring Models - SEB Server Admin Backend

Records of SEB client connections and the events they sent. Both are read
through the administration API only.

Models:
- ClientConnection: A SEB client connected to an exam of an institution
- ClientEvent: Log or ping event of a connection, timestamp in epoch millis

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.entities import EntityType, GrantEntityMixin
from core.institutions.models import Institution
from core.utils import to_datetime_utc


class ConnectionStatus(models.TextChoices):
    UNDEFINED = "UNDEFINED", _("Undefined")
    CONNECTION_REQUESTED = "CONNECTION_REQUESTED", _("Connection Requested")
    AUTHENTICATED = "AUTHENTICATED", _("Authenticated")
    ESTABLISHED = "ESTABLISHED", _("Established")
    CLOSED = "CLOSED", _("Closed")
    DISABLED = "DISABLED", _("Disabled")


class EventType(models.IntegerChoices):
    UNKNOWN = 0, _("Unknown")
    DEBUG_LOG = 1, _("Debug Log")
    INFO_LOG = 2, _("Info Log")
    WARN_LOG = 3, _("Warn Log")
    ERROR_LOG = 4, _("Error Log")
    LAST_PING = 5, _("Last Ping")


class ClientConnection(GrantEntityMixin, models.Model):
    entity_type = EntityType.CLIENT_CONNECTION

    institution = models.ForeignKey(
        Institution, on_delete=models.CASCADE, related_name="client_connections"
    )
    exam_id = models.BigIntegerField(null=True, blank=True, db_index=True)
    status = models.CharField(
        max_length=32, choices=ConnectionStatus.choices, default=ConnectionStatus.UNDEFINED
    )
    connection_token = models.CharField(max_length=255, unique=True)
    user_session_id = models.CharField(max_length=255, blank=True, default="")
    client_address = models.CharField(max_length=45, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = _("Client Connection")
        verbose_name_plural = _("Client Connections")

    def __str__(self):
        return f"{self.user_session_id or self.connection_token} ({self.status})"

    @property
    def entity_name(self) -> str:
        return self.user_session_id or self.connection_token


class ClientEvent(GrantEntityMixin, models.Model):
    entity_type = EntityType.CLIENT_EVENT
    grant_institution_field = "connection__institution_id"

    connection = models.ForeignKey(
        ClientConnection, on_delete=models.CASCADE, related_name="events"
    )
    type = models.PositiveSmallIntegerField(choices=EventType.choices, default=EventType.UNKNOWN)
    # epoch millis, UTC
    timestamp = models.BigIntegerField(db_index=True)
    numeric_value = models.DecimalField(max_digits=18, decimal_places=4, null=True, blank=True)
    text = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["connection", "timestamp"]
        verbose_name = _("Client Event")
        verbose_name_plural = _("Client Events")

    def __str__(self):
        return f"{self.get_type_display()} @ {self.timestamp}"

    @property
    def entity_name(self) -> str:
        return f"{self.get_type_display()} {self.timestamp}"

    @property
    def time(self):
        return to_datetime_utc(self.timestamp)
