from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.test import APITestCase

from core.authorization import UserRole
from core.exceptions import IllegalAPIArgumentException
from core.tests.helpers import API, create_institution, create_user
from core.utils import to_timestamp_utc
from monitoring.models import ClientConnection, ClientEvent, ConnectionStatus, EventType
from monitoring.views import parse_event_types

CONNECTION_URL = f"{API}/client_connection/"
EVENT_URL = f"{API}/client_event/"


def millis(*args):
    return to_timestamp_utc(datetime(*args, tzinfo=dt_timezone.utc))


class ParseEventTypesTests(SimpleTestCase):
    def test_names_and_numbers(self):
        self.assertEqual(parse_event_types(["error_log", "5", "INFO_LOG"]), [4, 5, 2])

    def test_unknown_type(self):
        with self.assertRaises(IllegalAPIArgumentException):
            parse_event_types(["PANIC"])
        with self.assertRaises(IllegalAPIArgumentException):
            parse_event_types(["42"])


class MonitoringApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.eth = create_institution("ETH Zurich")
        cls.uzh = create_institution("UZH")
        cls.supporter = create_user("supporter", cls.eth, UserRole.EXAM_SUPPORTER)
        cls.admin = create_user("admin", cls.uzh, UserRole.SEB_SERVER_ADMIN)

        cls.established = ClientConnection.objects.create(
            institution=cls.eth,
            exam_id=1,
            status=ConnectionStatus.ESTABLISHED,
            connection_token="token-1",
            user_session_id="student-anna",
            client_address="10.0.0.1",
        )
        cls.closed = ClientConnection.objects.create(
            institution=cls.eth,
            exam_id=2,
            status=ConnectionStatus.CLOSED,
            connection_token="token-2",
            user_session_id="student-ben",
        )
        ClientConnection.objects.create(
            institution=cls.uzh, exam_id=1, connection_token="token-3"
        )

        cls.error = ClientEvent.objects.create(
            connection=cls.established,
            type=EventType.ERROR_LOG,
            timestamp=millis(2024, 6, 1, 10, 0),
            text="Browser crashed",
        )
        cls.ping = ClientEvent.objects.create(
            connection=cls.established,
            type=EventType.LAST_PING,
            timestamp=millis(2024, 6, 1, 9, 0),
            numeric_value=Decimal("12.5"),
        )
        ClientEvent.objects.create(
            connection=cls.closed,
            type=EventType.INFO_LOG,
            timestamp=millis(2024, 6, 2, 8, 0),
            text="Quit",
        )

    def test_connections_of_own_institution(self):
        self.client.force_authenticate(self.supporter)
        response = self.client.get(CONNECTION_URL, {"sort": "user_session_id"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [c["connection_token"] for c in response.json()["content"]], ["token-1", "token-2"]
        )

    def test_connection_filters(self):
        self.client.force_authenticate(self.supporter)
        response = self.client.get(CONNECTION_URL, {"status": "CLOSED"})
        self.assertEqual([c["id"] for c in response.json()["content"]], [self.closed.pk])
        response = self.client.get(CONNECTION_URL, {"exam_id": 1})
        self.assertEqual([c["id"] for c in response.json()["content"]], [self.established.pk])
        response = self.client.get(CONNECTION_URL, {"name": "anna"})
        self.assertEqual([c["id"] for c in response.json()["content"]], [self.established.pk])

    def test_admin_reads_other_institution(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get(CONNECTION_URL, {"institution_id": self.eth.pk})
        self.assertEqual(len(response.json()["content"]), 2)

    def test_connection_names(self):
        self.client.force_authenticate(self.supporter)
        response = self.client.get(f"{CONNECTION_URL}names/")
        self.assertEqual([n["name"] for n in response.json()], ["student-anna", "student-ben"])

    def test_events_sorted_by_time(self):
        self.client.force_authenticate(self.supporter)
        response = self.client.get(EVENT_URL, {"connection_id": self.established.pk})
        content = response.json()["content"]
        self.assertEqual([e["type"] for e in content], ["Last Ping", "Error Log"])
        self.assertEqual(Decimal(content[0]["numeric_value"]), Decimal("12.5"))

    def test_event_filters(self):
        self.client.force_authenticate(self.supporter)
        response = self.client.get(EVENT_URL, {"types": "ERROR_LOG,2"})
        self.assertEqual([e["text"] for e in response.json()["content"]], ["Browser crashed", "Quit"])

        response = self.client.get(EVENT_URL, {"from": "2024-06-01T09:30:00Z", "to": "2024-06-01T23:00:00Z"})
        self.assertEqual([e["id"] for e in response.json()["content"]], [self.error.pk])

        response = self.client.get(EVENT_URL, {"name": "crash"})
        self.assertEqual([e["id"] for e in response.json()["content"]], [self.error.pk])

        response = self.client.get(EVENT_URL, {"types": "PANIC"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_events_of_other_institution_are_hidden(self):
        other = create_user("uzh-supporter", self.uzh, UserRole.EXAM_SUPPORTER)
        self.client.force_authenticate(other)
        response = self.client.get(EVENT_URL)
        self.assertEqual(response.json()["content"], [])
        response = self.client.get(f"{EVENT_URL}{self.error.pk}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_read_only(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(CONNECTION_URL, {"connection_token": "new"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        response = self.client.delete(f"{EVENT_URL}{self.ping.pk}/")
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_event_time(self):
        self.assertEqual(self.error.time, datetime(2024, 6, 1, 10, 0, tzinfo=dt_timezone.utc))
