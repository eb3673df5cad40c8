"""
API Messages and Exception Handling - SEB Server Admin Backend

This module defines the structured API message format used for every error
response and the exception types raised by the entity framework, together
with the DRF exception handler translating them into JSON responses.

Features:
- ErrorMessage catalogue with message codes and HTTP status
- APIMessage value object (code, system message, details, attributes)
- APIMessageException, PermissionDeniedException, IllegalAPIArgumentException
- api_exception_handler registered as DRF EXCEPTION_HANDLER

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class ErrorMessage(Enum):
    UNEXPECTED = ("0", status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected internal server-side error")
    UNAUTHORIZED = ("1000", status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED")
    FORBIDDEN = ("1001", status.HTTP_403_FORBIDDEN, "FORBIDDEN")
    RESOURCE_NOT_FOUND = ("1002", status.HTTP_404_NOT_FOUND, "resource not found")
    ILLEGAL_API_ARGUMENT = ("1010", status.HTTP_400_BAD_REQUEST, "Illegal API request argument")
    UNSUPPORTED_OPERATION = ("1020", status.HTTP_405_METHOD_NOT_ALLOWED, "Unsupported operation")
    FIELD_VALIDATION = ("1200", status.HTTP_400_BAD_REQUEST, "Field validation error")
    INTEGRITY_VALIDATION = ("1201", status.HTTP_400_BAD_REQUEST, "Action would lead to an integrity violation")
    PASSWORD_MISMATCH = ("1300", status.HTTP_400_BAD_REQUEST, "new password do not match confirmed password")

    def __init__(self, message_code: str, http_status: int, system_message: str):
        self.message_code = message_code
        self.http_status = http_status
        self.system_message = system_message

    def of(self, details: Optional[str] = None, *attributes: str) -> "APIMessage":
        return APIMessage(
            message_code=self.message_code,
            system_message=self.system_message,
            details=details,
            attributes=[str(attribute) for attribute in attributes],
        )


@dataclass
class APIMessage:
    message_code: str
    system_message: str
    details: Optional[str] = None
    attributes: List[str] = field(default_factory=list)

    @classmethod
    def field_validation_error(cls, field_name: str, message: str) -> "APIMessage":
        return ErrorMessage.FIELD_VALIDATION.of(message, field_name, message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message_code": self.message_code,
            "system_message": self.system_message,
            "details": self.details,
            "attributes": self.attributes,
        }


class APIMessageException(Exception):
    """Carries one or more API messages and the HTTP status to answer with."""

    def __init__(
        self,
        error_message: ErrorMessage,
        details: Optional[str] = None,
        *attributes: str,
        messages: Optional[Iterable[APIMessage]] = None,
    ):
        self.error_message = error_message
        self.http_status = error_message.http_status
        if messages is not None:
            self.messages = list(messages)
        else:
            self.messages = [error_message.of(details, *attributes)]
        super().__init__(details or error_message.system_message)

    @classmethod
    def field_validation(cls, field_name: str, message: str) -> "APIMessageException":
        return cls(
            ErrorMessage.FIELD_VALIDATION,
            messages=[APIMessage.field_validation_error(field_name, message)],
        )


class IllegalAPIArgumentException(APIMessageException):
    def __init__(self, details: str):
        super().__init__(ErrorMessage.ILLEGAL_API_ARGUMENT, details)


class UnsupportedOperationException(APIMessageException):
    def __init__(self, details: str):
        super().__init__(ErrorMessage.UNSUPPORTED_OPERATION, details)


class ResourceNotFoundException(APIMessageException):
    def __init__(self, entity_type, model_id: str):
        super().__init__(
            ErrorMessage.RESOURCE_NOT_FOUND,
            f"Resource {entity_type} with ID: {model_id} not found",
            str(entity_type),
            str(model_id),
        )


class PermissionDeniedException(APIMessageException):
    """Raised when the current user lacks a privilege or grant."""

    def __init__(self, entity_type, privilege_type, user_uuid: Optional[str]):
        self.entity_type = entity_type
        self.privilege_type = privilege_type
        self.user_uuid = user_uuid
        super().__init__(
            ErrorMessage.FORBIDDEN,
            f"No grant: {privilege_type} on type: {entity_type} for user: {user_uuid}",
            str(entity_type),
            str(privilege_type),
        )


def _validation_messages(detail: Any, prefix: str = "") -> List[APIMessage]:
    """Flattens a DRF validation error detail into field validation messages."""
    messages = []
    if isinstance(detail, dict):
        for field_name, errors in detail.items():
            name = f"{prefix}.{field_name}" if prefix else str(field_name)
            messages.extend(_validation_messages(errors, name))
    elif isinstance(detail, list):
        for error in detail:
            messages.extend(_validation_messages(error, prefix))
    else:
        messages.append(
            APIMessage.field_validation_error(prefix or "non_field_errors", str(detail))
        )
    return messages


def _response(messages: List[APIMessage], http_status: int) -> Response:
    return Response([message.to_dict() for message in messages], status=http_status)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """
    Translates exceptions raised inside API views into API message lists.

    Args:
        exc: Exception raised by the view
        context: DRF handler context (view, request)

    Returns:
        Response with a JSON list of API messages
    """
    if isinstance(exc, APIMessageException):
        return _response(exc.messages, exc.http_status)

    if isinstance(exc, exceptions.ValidationError):
        return _response(_validation_messages(exc.detail), status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, (Http404, ObjectDoesNotExist, exceptions.NotFound)):
        return _response(
            [ErrorMessage.RESOURCE_NOT_FOUND.of(str(exc))], status.HTTP_404_NOT_FOUND
        )

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response = _response(
            [ErrorMessage.UNAUTHORIZED.of(str(exc.detail))], status.HTTP_401_UNAUTHORIZED
        )
        authenticate_header = _authenticate_header(context)
        if authenticate_header:
            response["WWW-Authenticate"] = authenticate_header
        return response

    if isinstance(exc, (PermissionDenied, exceptions.PermissionDenied)):
        return _response([ErrorMessage.FORBIDDEN.of(str(exc))], status.HTTP_403_FORBIDDEN)

    if isinstance(exc, exceptions.MethodNotAllowed):
        return _response(
            [ErrorMessage.UNSUPPORTED_OPERATION.of(str(exc.detail))],
            status.HTTP_405_METHOD_NOT_ALLOWED,
        )

    if isinstance(exc, exceptions.APIException):
        return _response(
            [ErrorMessage.ILLEGAL_API_ARGUMENT.of(str(exc.detail))], exc.status_code
        )

    logger.error("Unexpected error while processing API request", exc_info=exc)
    return _response([ErrorMessage.UNEXPECTED.of(str(exc))], status.HTTP_500_INTERNAL_SERVER_ERROR)


def _authenticate_header(context: Dict[str, Any]) -> Optional[str]:
    view = context.get("view")
    request = context.get("request")
    if view is None or request is None:
        return None
    return view.get_authenticate_header(request)
