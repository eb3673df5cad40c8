"""
User Account Views - SEB Server Admin Backend

Endpoints:
- /useraccount/                  Activatable entity controller endpoints (lookup by uuid)
- GET /useraccount/me/           Account of the current user
- PUT /useraccount/password/     Password change, revokes the user's tokens
- /useractivity/                 Read-only activity log endpoints

Features:
- Users can only be created or modified within active institutions
- SEB_SERVER_ADMIN role can only be granted by SEB Server administrators
- Old password verification and confirmation check on password change

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging
from typing import Optional

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import QuerySet
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken

from core.authorization import PrivilegeType, UserRole
from core.controllers import ActivatableEntityController, ReadonlyEntityController
from core.entities import EntityType
from core.exceptions import (
    APIMessage,
    APIMessageException,
    ErrorMessage,
    PermissionDeniedException,
)
from core.filters import FilterMap

from ..activity import filter_activity_logs
from ..models import ActivityType, UserAccount, UserActivityLog
from ..serializers import (
    PasswordChangeSerializer,
    UserAccountSerializer,
    UserActivityLogSerializer,
)

logger = logging.getLogger(__name__)

INACTIVE_INSTITUTION = "User within an inactive institution cannot be created nor modified"


def revoke_tokens(user: UserAccount) -> int:
    """Blacklists all outstanding refresh tokens of the user."""
    revoked = 0
    for token in OutstandingToken.objects.filter(user=user):
        _, created = BlacklistedToken.objects.get_or_create(token=token)
        revoked += int(created)
    return revoked


class UserAccountController(ActivatableEntityController):
    entity_type = EntityType.USER
    queryset = UserAccount.objects.select_related("institution")
    serializer_class = UserAccountSerializer
    lookup_field = "uuid"
    active_field = "is_active"
    name_filter_field = "first_name__icontains"
    sort_columns = {
        "name": "first_name",
        "surname": "last_name",
        "username": "username",
        "email": "email",
        "language": "language",
        "active": "is_active",
    }
    default_sort = "username"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        username = filter_map.get_string("username")
        if username:
            queryset = queryset.filter(username__icontains=username)
        email = filter_map.get_string("email")
        if email:
            queryset = queryset.filter(email__icontains=email)
        language = filter_map.get_string("language")
        if language:
            queryset = queryset.filter(language=language)
        role = filter_map.get_string("role")
        if role:
            queryset = queryset.filter(role_assignments__role_name=role).distinct()
        return queryset

    def valid_for_save(self, serializer, instance: Optional[UserAccount]) -> None:
        data = serializer.validated_data
        institution = data.get("institution") or (instance.institution if instance else None)
        if institution is None or not institution.active:
            raise APIMessageException(ErrorMessage.ILLEGAL_API_ARGUMENT, INACTIVE_INSTITUTION)

        roles = data.get("roles")
        if roles is None:
            return
        if UserRole.SEB_SERVER_ADMIN in roles and not self.authorization.has_role(
            UserRole.SEB_SERVER_ADMIN
        ):
            raise PermissionDeniedException(
                EntityType.USER, PrivilegeType.WRITE, self.authorization.user_uuid
            )
        if (
            instance is not None
            and sorted(roles) != instance.roles
            and not self.authorization.has_privilege(
                EntityType.USER, PrivilegeType.WRITE, instance.institution_id
            )
        ):
            raise PermissionDeniedException(
                EntityType.USER, PrivilegeType.WRITE, self.authorization.user_uuid
            )

    @action(detail=False, methods=["get"], url_path="me")
    def me(self, request: Request, *args, **kwargs) -> Response:
        return Response(self.get_serializer(request.user).data)

    @action(detail=False, methods=["put"], url_path="password")
    def change_password(self, request: Request, *args, **kwargs) -> Response:
        """
        Change the password of a user account.

        Expected Request Data:
            - model_id: UUID of the account, defaults to the current user
            - password: Current password of that account
            - new_password / confirm_new_password: The new password, twice
        """
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        model_id = data.get("model_id") or request.user.uuid
        user = self.check_modify_access(self.load_entity(str(model_id)))

        if not user.check_password(data["password"]):
            raise APIMessageException.field_validation("password", "Wrong password")
        if data["new_password"] != data["confirm_new_password"]:
            raise APIMessageException(
                ErrorMessage.FIELD_VALIDATION,
                messages=[
                    APIMessage.field_validation_error(
                        "confirm_new_password", "New password and confirmation do not match"
                    )
                ],
            )
        try:
            validate_password(data["new_password"], user)
        except DjangoValidationError as e:
            raise APIMessageException(
                ErrorMessage.FIELD_VALIDATION,
                messages=[
                    APIMessage.field_validation_error("new_password", message)
                    for message in e.messages
                ],
            )

        with transaction.atomic():
            user.set_password(data["new_password"])
            user.save(update_fields=["password"])
            revoked = revoke_tokens(user)
            self.activity_log.log(ActivityType.PASSWORD_CHANGE, user)

        logger.info("Password changed for %s, %d refresh tokens revoked", user.username, revoked)
        return Response(self.get_serializer(user).data)


class UserActivityLogController(ReadonlyEntityController):
    entity_type = EntityType.USER_ACTIVITY_LOG
    queryset = UserActivityLog.objects.select_related("user")
    serializer_class = UserActivityLogSerializer
    name_filter_field = None
    sort_columns = {
        "user": "user__username",
        "timestamp": "timestamp",
        "activity_type": "activity_type",
        "entity_type": "entity_type_name",
        "entity_id": "entity_id",
    }
    default_sort = "-timestamp"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        return filter_activity_logs(super().apply_filter(queryset, filter_map), filter_map)
