"""
Institution Models - SEB Server Admin Backend

Institutions are the tenants of the server. Users, exam configurations and
client connections belong to exactly one institution.

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.entities import EntityType, GrantEntityMixin


class Institution(GrantEntityMixin, models.Model):
    entity_type = EntityType.INSTITUTION
    grant_institution_field = "id"

    name = models.CharField(_("Name"), max_length=255, unique=True)
    url_suffix = models.CharField(_("URL suffix"), max_length=255, blank=True, default="")
    logo_image = models.TextField(_("Logo (base64)"), blank=True, default="")
    theme_name = models.CharField(_("Theme"), max_length=100, blank=True, default="")
    active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = _("Institution")
        verbose_name_plural = _("Institutions")

    def __str__(self):
        return self.name
