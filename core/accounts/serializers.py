"""
User Account Serializers - SEB Server Admin Backend

Serializers:
- SEBTokenObtainPairSerializer: JWT pair with role and institution claims
- UserAccountSerializer: User account data, password on creation only
- PasswordChangeSerializer: Password change request
- UserActivityLogSerializer: Activity log entries

Author: SEB Server Development Team
Version: 1.0.0
"""

from typing import Any, Dict
from zoneinfo import available_timezones

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from rest_framework import exceptions, serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from core.authorization.privileges import UserRole
from core.institutions.models import Institution

from .models import UserAccount, UserActivityLog


class SEBTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    JWT pair serializer adding user metadata to the token payload.

    Token Payload Includes:
    - username
    - uuid
    - institution_id
    - roles
    """

    @classmethod
    def get_token(cls, user: UserAccount) -> RefreshToken:
        token = super().get_token(user)
        token["username"] = user.username
        token["uuid"] = str(user.uuid)
        token["institution_id"] = user.institution_id
        token["roles"] = user.roles
        return token

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, str]:
        data = super().validate(attrs)
        institution = self.user.institution
        if institution is not None and not institution.active:
            raise exceptions.AuthenticationFailed(
                "User within an inactive institution cannot sign in", code="inactive_institution"
            )
        return data


class UserAccountSerializer(serializers.ModelSerializer):
    institution_id = serializers.PrimaryKeyRelatedField(
        source="institution", queryset=Institution.objects.all()
    )
    name = serializers.CharField(source="first_name", max_length=150)
    surname = serializers.CharField(source="last_name", max_length=150, required=False, allow_blank=True)
    active = serializers.BooleanField(source="is_active", read_only=True)
    roles = serializers.ListField(
        child=serializers.ChoiceField(choices=UserRole.choices), allow_empty=False
    )
    new_password = serializers.CharField(write_only=True, required=False, style={"input_type": "password"})
    confirm_new_password = serializers.CharField(
        write_only=True, required=False, style={"input_type": "password"}
    )

    class Meta:
        model = UserAccount
        fields = [
            "uuid",
            "institution_id",
            "name",
            "surname",
            "username",
            "email",
            "language",
            "timezone",
            "active",
            "roles",
            "created_at",
            "new_password",
            "confirm_new_password",
        ]
        read_only_fields = ["uuid", "active", "created_at"]

    def validate_timezone(self, value: str) -> str:
        if value not in available_timezones():
            raise serializers.ValidationError(f"Unknown time zone: {value}")
        return value

    def validate_roles(self, value):
        return sorted(set(value))

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        if self.instance is not None:
            attrs.pop("new_password", None)
            attrs.pop("confirm_new_password", None)
            return attrs

        new_password = attrs.get("new_password")
        if not new_password:
            raise serializers.ValidationError({"new_password": "This field is required."})
        if new_password != attrs.get("confirm_new_password"):
            raise serializers.ValidationError(
                {"confirm_new_password": "New password and confirmation do not match."}
            )
        try:
            validate_password(new_password)
        except DjangoValidationError as e:
            raise serializers.ValidationError({"new_password": list(e.messages)})
        return attrs

    @transaction.atomic
    def create(self, validated_data: Dict[str, Any]) -> UserAccount:
        roles = validated_data.pop("roles")
        password = validated_data.pop("new_password")
        validated_data.pop("confirm_new_password", None)
        user = UserAccount(**validated_data)
        user.set_password(password)
        user.save()
        user.set_roles(roles)
        return user

    @transaction.atomic
    def update(self, instance: UserAccount, validated_data: Dict[str, Any]) -> UserAccount:
        roles = validated_data.pop("roles", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        if roles is not None:
            instance.set_roles(roles)
        return instance


class PasswordChangeSerializer(serializers.Serializer):
    model_id = serializers.UUIDField(required=False)
    password = serializers.CharField(style={"input_type": "password"})
    new_password = serializers.CharField(style={"input_type": "password"})
    confirm_new_password = serializers.CharField(style={"input_type": "password"})


class UserActivityLogSerializer(serializers.ModelSerializer):
    user_uuid = serializers.UUIDField(source="user_id", read_only=True)
    username = serializers.CharField(source="user.username", read_only=True)
    entity_type = serializers.CharField(source="entity_type_name", read_only=True)

    class Meta:
        model = UserActivityLog
        fields = [
            "id",
            "user_uuid",
            "username",
            "timestamp",
            "activity_type",
            "entity_type",
            "entity_id",
            "message",
        ]
        read_only_fields = fields
