from django.core.exceptions import ObjectDoesNotExist
from django.test import SimpleTestCase
from rest_framework import exceptions, status

from core.entities import EntityType
from core.exceptions import (
    APIMessageException,
    ErrorMessage,
    PermissionDeniedException,
    ResourceNotFoundException,
    UnsupportedOperationException,
    api_exception_handler,
)


class ApiExceptionHandlerTests(SimpleTestCase):
    def handle(self, exc):
        return api_exception_handler(exc, {})

    def test_api_message_exception(self):
        response = self.handle(ResourceNotFoundException(EntityType.INSTITUTION, "42"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data[0]["message_code"], "1002")
        self.assertEqual(response.data[0]["attributes"], ["INSTITUTION", "42"])

    def test_permission_denied(self):
        response = self.handle(
            PermissionDeniedException(EntityType.USER, "WRITE", "3f2a")
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data[0]["message_code"], "1001")

    def test_unsupported_operation(self):
        response = self.handle(UnsupportedOperationException("read only"))
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(response.data[0]["details"], "read only")

    def test_field_validation_messages_are_flattened(self):
        response = self.handle(
            exceptions.ValidationError({"name": ["Too short"], "address": {"city": ["Missing"]}})
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            [message["attributes"] for message in response.data],
            [["name", "Too short"], ["address.city", "Missing"]],
        )
        self.assertTrue(all(message["message_code"] == "1200" for message in response.data))

    def test_field_validation_factory(self):
        exc = APIMessageException.field_validation("password", "Wrong password")
        self.assertIs(exc.error_message, ErrorMessage.FIELD_VALIDATION)
        self.assertEqual(exc.messages[0].attributes, ["password", "Wrong password"])

    def test_not_found_and_unauthorized(self):
        self.assertEqual(self.handle(ObjectDoesNotExist("gone")).status_code, 404)
        self.assertEqual(self.handle(exceptions.NotAuthenticated()).data[0]["message_code"], "1000")

    def test_unexpected_errors_answer_500(self):
        with self.assertLogs("core.exceptions", level="ERROR"):
            response = self.handle(RuntimeError("boom"))
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data[0]["message_code"], "0")
