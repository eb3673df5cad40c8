import json

from django.test import TestCase

from core.accounts.models import ActivityType, UserAccount, UserActivityLog
from core.authorization import UserRole
from core.bulkaction import BulkAction, BulkActionService, BulkActionType
from core.entities import EntityKey, EntityType
from core.institutions.models import Institution
from monitoring.models import ClientConnection
from sebconfig.models import ConfigurationNode

from .helpers import create_institution, create_user


class BulkActionServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.eth = create_institution("ETH Zurich")
        cls.uzh = create_institution("UZH")
        cls.admin = create_user("admin", cls.eth, UserRole.SEB_SERVER_ADMIN)
        cls.uzh_user = create_user("uzh-admin", cls.uzh, UserRole.INSTITUTIONAL_ADMIN)
        cls.uzh_node = ConfigurationNode.objects.create(
            institution=cls.uzh, owner=str(cls.uzh_user.uuid), name="UZH Exam"
        )
        cls.connection = ClientConnection.objects.create(institution=cls.uzh, connection_token="token-1")

    def run_action(self, action_type, *keys):
        return BulkActionService(self.admin).create_report(
            BulkAction(action_type, keys[0].entity_type, set(keys))
        )

    def test_deactivate_institution_cascades_to_users_and_nodes(self):
        report = self.run_action(BulkActionType.DEACTIVATE, self.uzh.entity_key)

        self.assertEqual(report.errors, [])
        self.assertEqual(report.source, {self.uzh.entity_key})
        self.assertEqual(
            report.results,
            {self.uzh.entity_key, self.uzh_user.entity_key, self.uzh_node.entity_key},
        )
        self.assertFalse(Institution.objects.get(pk=self.uzh.pk).active)
        self.assertFalse(UserAccount.objects.get(pk=self.uzh_user.pk).is_active)
        self.assertFalse(ConfigurationNode.objects.get(pk=self.uzh_node.pk).active)
        self.assertEqual(
            UserActivityLog.objects.filter(
                user=self.admin, activity_type=ActivityType.DEACTIVATE
            ).count(),
            3,
        )

    def test_activate_does_not_cascade(self):
        self.run_action(BulkActionType.DEACTIVATE, self.uzh.entity_key)
        report = self.run_action(BulkActionType.ACTIVATE, self.uzh.entity_key)

        self.assertEqual(report.results, {self.uzh.entity_key})
        self.assertTrue(Institution.objects.get(pk=self.uzh.pk).active)
        self.assertFalse(UserAccount.objects.get(pk=self.uzh_user.pk).is_active)

    def test_hard_delete_institution_removes_dependants(self):
        report = self.run_action(BulkActionType.HARD_DELETE, self.uzh.entity_key)

        self.assertEqual(report.errors, [])
        self.assertEqual(
            report.results,
            {
                self.uzh.entity_key,
                self.uzh_user.entity_key,
                self.uzh_node.entity_key,
                self.connection.entity_key,
            },
        )
        self.assertFalse(Institution.objects.filter(pk=self.uzh.pk).exists())
        self.assertFalse(UserAccount.objects.filter(pk=self.uzh_user.pk).exists())
        self.assertFalse(ConfigurationNode.objects.filter(pk=self.uzh_node.pk).exists())
        self.assertFalse(ClientConnection.objects.exists())

    def test_log_messages_hold_the_processed_entities(self):
        self.run_action(BulkActionType.DEACTIVATE, self.uzh.entity_key)
        logs = UserActivityLog.objects.filter(activity_type=ActivityType.DEACTIVATE)

        institution = json.loads(logs.get(entity_type_name=EntityType.INSTITUTION).message)
        self.assertEqual((institution["name"], institution["active"]), ("UZH", False))
        account = json.loads(logs.get(entity_type_name=EntityType.USER).message)
        self.assertEqual((account["username"], account["active"]), ("uzh-admin", False))
        self.assertNotIn("password", account)

    def test_delete_log_messages_are_taken_before_deletion(self):
        self.run_action(BulkActionType.HARD_DELETE, self.uzh.entity_key)
        logs = UserActivityLog.objects.filter(activity_type=ActivityType.DELETE)

        node = json.loads(logs.get(entity_type_name=EntityType.CONFIGURATION_NODE).message)
        self.assertEqual((node["id"], node["name"]), (self.uzh_node.pk, "UZH Exam"))
        connection = json.loads(logs.get(entity_type_name=EntityType.CLIENT_CONNECTION).message)
        self.assertEqual(connection["connection_token"], "token-1")

    def test_own_institution_is_rejected(self):
        report = self.run_action(BulkActionType.HARD_DELETE, self.eth.entity_key)

        self.assertEqual(report.results, set())
        self.assertEqual(len(report.errors), 1)
        self.assertEqual(report.errors[0].entity_key, self.eth.entity_key)
        self.assertEqual(report.errors[0].error_message.message_code, "1201")
        self.assertTrue(Institution.objects.filter(pk=self.eth.pk).exists())

    def test_unsupported_action_is_reported(self):
        report = self.run_action(
            BulkActionType.DEACTIVATE, EntityKey("1", EntityType.CONFIGURATION_VALUE)
        )
        self.assertEqual(report.errors[0].error_message.message_code, "1020")

    def test_missing_entity_is_reported(self):
        report = self.run_action(
            BulkActionType.HARD_DELETE, EntityKey("99999", EntityType.CLIENT_CONNECTION)
        )
        self.assertEqual(report.errors[0].error_message.message_code, "1002")

    def test_report_dict_is_sorted(self):
        report = self.run_action(BulkActionType.DEACTIVATE, self.uzh.entity_key)
        results = report.to_dict()["results"]
        self.assertEqual([r["entity_type"] for r in results], ["CONFIGURATION_NODE", "INSTITUTION", "USER"])
