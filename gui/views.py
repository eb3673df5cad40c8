"""
Management Console Views - SEB Server Admin Backend

Server rendered pages for administrators, authenticated with the Django
session.

Pages:
- /                                    Navigation
- /activity-logs/                      User activity log table
- /activity-logs/{id}/                 Activity log details
- /exam-configurations/                Exam configuration table
- /exam-configurations/{id}/           Exam configuration properties form
- /account/                            Current account and password change

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging
from datetime import timedelta

from django.contrib import messages
from django.contrib.auth import update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.contrib.auth.forms import PasswordChangeForm
from django.core.exceptions import PermissionDenied
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.utils.functional import cached_property
from django.views.generic import TemplateView, View

from core.accounts.activity import UserActivityLogService, filter_activity_logs
from core.accounts.models import ActivityType, UserAccount, UserActivityLog
from core.accounts.views.user_views import revoke_tokens
from core.authorization import AuthorizationService, PrivilegeType
from core.entities import EntityType
from core.exceptions import PermissionDeniedException
from core.filters import FilterMap
from core.utils import format_line_breaks
from sebconfig.models import ConfigurationNode, ConfigurationStatus, ConfigurationType
from sebconfig.services import ConfigurationService

from .forms import ExamConfigPropertiesForm
from .tables import ColumnDefinition, CriteriaType, EntityTable, TableFilterAttribute

logger = logging.getLogger(__name__)

DEFAULT_ACTIVITY_LOG_RANGE = timedelta(days=365)


class ConsoleMixin:
    """Authorization helpers for console pages. Denied grants answer with 403."""

    @cached_property
    def authorization(self) -> AuthorizationService:
        return AuthorizationService(self.request.user)

    def check_privilege(self, entity_type: EntityType, privilege_type: PrivilegeType) -> None:
        try:
            self.authorization.check_privilege(
                entity_type,
                privilege_type,
                self.request.user.institution_id,
                include_ownership=True,
            )
        except PermissionDeniedException as e:
            raise PermissionDenied(str(e))

    def can_read(self, entity_type: EntityType) -> bool:
        try:
            self.check_privilege(entity_type, PrivilegeType.READ_ONLY)
        except PermissionDenied:
            return False
        return True

    def check_grant(self, entity, privilege_type: PrivilegeType):
        if not self.authorization.has_grant(entity, privilege_type):
            raise PermissionDenied(
                f"No grant: {privilege_type} on type: {entity.entity_type}"
            )
        return entity


@method_decorator(login_required, name="dispatch")
class IndexView(ConsoleMixin, TemplateView):
    template_name = "gui/index.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["privileges"] = {
            "activity_logs": self.can_read(EntityType.USER_ACTIVITY_LOG),
            "exam_configurations": self.can_read(EntityType.CONFIGURATION_NODE),
        }
        return context


@method_decorator(login_required, name="dispatch")
class ActivityLogListView(ConsoleMixin, TemplateView):
    template_name = "gui/activity_log_list.html"

    def get_user_resources(self):
        users = self.authorization.filter_granted(
            UserAccount.objects.all(), EntityType.USER, PrivilegeType.READ_ONLY
        ).order_by("username")
        return [(str(user.uuid), user.username) for user in users]

    def get_table(self) -> EntityTable:
        now = timezone.now()
        queryset = self.authorization.filter_granted(
            UserActivityLog.objects.select_related("user"),
            EntityType.USER_ACTIVITY_LOG,
            PrivilegeType.READ_ONLY,
        )
        columns = [
            ColumnDefinition(
                "user",
                "User",
                lambda log: log.user.username,
                TableFilterAttribute(CriteriaType.SINGLE_SELECTION, "user", "User", self.get_user_resources()),
                sortable=True,
            ),
            ColumnDefinition(
                "activity_type",
                "Activity",
                lambda log: log.get_activity_type_display(),
                TableFilterAttribute(
                    CriteriaType.SINGLE_SELECTION, "activity_types", "Activity", ActivityType.choices
                ),
                sortable=True,
            ),
            ColumnDefinition(
                "entity_type",
                "Domain Type",
                lambda log: EntityType(log.entity_type_name).label
                if log.entity_type_name in EntityType.values
                else log.entity_type_name,
                TableFilterAttribute(
                    CriteriaType.SINGLE_SELECTION, "entity_types", "Domain Type", EntityType.choices
                ),
                sortable=True,
            ),
            ColumnDefinition(
                "timestamp",
                "Date",
                lambda log: log.timestamp,
                TableFilterAttribute(
                    CriteriaType.DATE_RANGE,
                    "timestamp",
                    "Date",
                    default=(now - DEFAULT_ACTIVITY_LOG_RANGE, now),
                ),
                sortable=True,
            ),
        ]
        return EntityTable(
            self.request,
            queryset,
            columns,
            filter_function=filter_activity_logs,
            sort_columns={
                "user": "user__username",
                "activity_type": "activity_type",
                "entity_type": "entity_type_name",
                "timestamp": "timestamp",
            },
            default_sort="-timestamp",
            empty_message="No user activity logs found",
            row_link=lambda log: reverse("gui:activity-log-detail", args=[log.pk]),
        ).build()

    def get_context_data(self, **kwargs):
        self.check_privilege(EntityType.USER_ACTIVITY_LOG, PrivilegeType.READ_ONLY)
        context = super().get_context_data(**kwargs)
        context["table"] = self.get_table()
        return context


@method_decorator(login_required, name="dispatch")
class ActivityLogDetailView(ConsoleMixin, TemplateView):
    template_name = "gui/activity_log_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        log = self.check_grant(
            get_object_or_404(UserActivityLog.objects.select_related("user"), pk=kwargs["pk"]),
            PrivilegeType.READ_ONLY,
        )
        context["log"] = log
        context["message"] = format_line_breaks(log.message)
        return context


@method_decorator(login_required, name="dispatch")
class ConfigNodeListView(ConsoleMixin, TemplateView):
    template_name = "gui/config_node_list.html"

    def filter_nodes(self, queryset, filter_map: FilterMap):
        if filter_map.name:
            queryset = queryset.filter(name__icontains=filter_map.name)
        status = filter_map.get_string("status")
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    def get_table(self) -> EntityTable:
        queryset = self.authorization.filter_granted(
            ConfigurationNode.objects.filter(type=ConfigurationType.EXAM_CONFIG),
            EntityType.CONFIGURATION_NODE,
            PrivilegeType.READ_ONLY,
        )
        columns = [
            ColumnDefinition(
                "name",
                "Name",
                lambda node: node.name,
                TableFilterAttribute(CriteriaType.TEXT, "name", "Name"),
                sortable=True,
            ),
            ColumnDefinition("description", "Description", lambda node: node.description),
            ColumnDefinition(
                "status",
                "Status",
                lambda node: node.get_status_display(),
                TableFilterAttribute(
                    CriteriaType.SINGLE_SELECTION, "status", "Status", ConfigurationStatus.choices
                ),
                sortable=True,
            ),
        ]
        return EntityTable(
            self.request,
            queryset,
            columns,
            filter_function=self.filter_nodes,
            default_sort="name",
            empty_message="No exam configurations found",
            row_link=lambda node: reverse("gui:exam-config-properties", args=[node.pk]),
        ).build()

    def get_context_data(self, **kwargs):
        self.check_privilege(EntityType.CONFIGURATION_NODE, PrivilegeType.READ_ONLY)
        context = super().get_context_data(**kwargs)
        context["table"] = self.get_table()
        return context


@method_decorator(login_required, name="dispatch")
class ExamConfigPropertiesView(ConsoleMixin, View):
    template_name = "gui/exam_config_properties.html"

    def get_form(self, node: ConfigurationNode, data=None) -> ExamConfigPropertiesForm:
        service = ConfigurationService()
        return ExamConfigPropertiesForm(
            data,
            mapping=service.get_attribute_mapping(node.template_id),
            configuration=service.get_followup(node),
        )

    def render_form(self, node: ConfigurationNode, form: ExamConfigPropertiesForm):
        return render(
            self.request,
            self.template_name,
            {
                "node": node,
                "form": form,
                "editable": self.authorization.has_grant(node, PrivilegeType.MODIFY),
            },
        )

    def get(self, request, pk):
        node = self.check_grant(get_object_or_404(ConfigurationNode, pk=pk), PrivilegeType.READ_ONLY)
        return self.render_form(node, self.get_form(node))

    def post(self, request, pk):
        node = self.check_grant(get_object_or_404(ConfigurationNode, pk=pk), PrivilegeType.MODIFY)
        form = self.get_form(node, request.POST)
        if form.is_valid():
            changed = sorted(attribute.name for attribute, _ in form.get_changed_values().values())
            if not changed or form.save():
                if changed:
                    UserActivityLogService(request.user).log(
                        ActivityType.MODIFY, node, {"changed": changed}
                    )
                    messages.success(request, "Exam configuration saved.")
                return redirect("gui:exam-config-properties", pk=node.pk)
        messages.error(request, "Please correct the marked values.")
        return self.render_form(node, form)


@method_decorator(login_required, name="dispatch")
class AccountView(View):
    template_name = "gui/account.html"

    def render_account(self, form: PasswordChangeForm):
        return render(self.request, self.template_name, {"account": self.request.user, "form": form})

    def get(self, request):
        return self.render_account(PasswordChangeForm(request.user))

    def post(self, request):
        form = PasswordChangeForm(request.user, request.POST)
        if not form.is_valid():
            return self.render_account(form)
        user = form.save()
        update_session_auth_hash(request, user)
        revoked = revoke_tokens(user)
        UserActivityLogService(user).log(ActivityType.PASSWORD_CHANGE, user)
        logger.info("Password changed for %s in console, %d refresh tokens revoked", user.username, revoked)
        messages.success(request, "Your password has been changed.")
        return redirect("gui:account")
