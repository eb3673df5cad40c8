from django.test import TestCase

from core.authorization import UserRole
from core.exceptions import APIMessageException
from core.tests.helpers import create_institution, create_user
from sebconfig.models import AttributeType, Configuration, ConfigurationType, Orientation, View
from sebconfig.services import ConfigurationService

from .helpers import create_attribute, create_node


class ConfigurationLifecycleTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.eth = create_institution("ETH Zurich")
        cls.user = create_user("exam-admin", cls.eth, UserRole.EXAM_ADMIN)
        cls.allow_quit = create_attribute("allowQuit", AttributeType.CHECKBOX, default_value="true")
        cls.quit_url = create_attribute("quitURL", AttributeType.TEXT_FIELD)

    def setUp(self):
        self.service = ConfigurationService()
        self.node = create_node(self.eth, self.user)

    def test_init_creates_stable_version_and_followup(self):
        configurations = list(self.node.configurations.order_by("pk"))
        self.assertEqual(len(configurations), 2)
        self.assertEqual(configurations[0].version, "v0")
        self.assertFalse(configurations[0].followup)
        self.assertTrue(configurations[1].followup)
        self.assertIsNone(configurations[1].version)
        self.assertEqual(self.service.get_followup(self.node), configurations[1])
        self.assertEqual(self.service.get_last_stable(self.node), configurations[0])

    def test_init_copies_template_values(self):
        template = create_node(self.eth, self.user, "Template", type=ConfigurationType.TEMPLATE)
        self.service.save_value(self.service.get_followup(template), self.quit_url, "https://ethz.ch")
        self.service.save_to_history(template)

        node = create_node(self.eth, self.user, "From Template", template_id=template.pk)
        for configuration in node.configurations.all():
            self.assertEqual(
                self.service.get_value(configuration, self.quit_url).value, "https://ethz.ch"
            )

    def test_only_followup_is_editable(self):
        stable = self.service.get_last_stable(self.node)
        with self.assertRaises(APIMessageException) as context:
            self.service.save_value(stable, self.allow_quit, "false")
        self.assertEqual(context.exception.messages[0].message_code, "1010")

    def test_save_value_updates_existing(self):
        followup = self.service.get_followup(self.node)
        self.service.save_value(followup, self.allow_quit, "false")
        self.service.save_value(followup, self.allow_quit, "true")
        self.assertEqual(followup.values.count(), 1)
        self.assertEqual(self.service.get_value(followup, self.allow_quit).value, "true")

    def test_save_to_history(self):
        followup = self.service.get_followup(self.node)
        self.service.save_value(followup, self.quit_url, "https://seb.ethz.ch")

        result = self.service.save_to_history(self.node)

        self.assertEqual(result, followup)
        stable = self.service.get_last_stable(self.node)
        self.assertEqual(stable.version, "v1")
        self.assertEqual(self.service.get_value(stable, self.quit_url).value, "https://seb.ethz.ch")
        self.assertEqual(Configuration.objects.filter(configuration_node=self.node).count(), 3)

    def test_undo_resets_followup(self):
        followup = self.service.get_followup(self.node)
        self.service.save_value(followup, self.quit_url, "https://seb.ethz.ch")
        self.service.save_to_history(self.node)
        self.service.save_value(followup, self.quit_url, "https://changed.ch")
        self.service.save_value(followup, self.allow_quit, "false")

        self.service.undo(self.node)

        self.assertEqual(self.service.get_value(followup, self.quit_url).value, "https://seb.ethz.ch")
        self.assertIsNone(self.service.get_value(followup, self.allow_quit))


class ValueValidationTests(TestCase):
    def setUp(self):
        self.service = ConfigurationService()

    def assertInvalid(self, attribute, value):
        with self.assertRaises(APIMessageException) as context:
            self.service.validate_value(attribute, value)
        message = context.exception.messages[0]
        self.assertEqual(message.message_code, "1200")
        self.assertEqual(message.attributes[0], attribute.name)

    def test_type_checks(self):
        self.assertInvalid(create_attribute("taskBarHeight", AttributeType.INTEGER), "4.5")
        self.assertInvalid(create_attribute("zoom", AttributeType.DECIMAL), "one")
        self.assertInvalid(create_attribute("allowQuit", AttributeType.CHECKBOX), "maybe")

    def test_decimal_must_be_finite(self):
        zoom = create_attribute("zoom", AttributeType.DECIMAL)
        self.service.validate_value(zoom, "1.25")
        for text in ("NaN", "sNaN", "Infinity", "-Infinity"):
            self.assertInvalid(zoom, text)

    def test_selections(self):
        mode = create_attribute("browserViewMode", AttributeType.RADIO_SELECTION, resources="0,1,2")
        self.service.validate_value(mode, "1")
        self.assertInvalid(mode, "3")

        processes = create_attribute(
            "permittedProcesses", AttributeType.MULTI_SELECTION, resources="calculator,notes"
        )
        self.service.validate_value(processes, "notes,calculator")
        self.assertInvalid(processes, "notes,terminal")

    def test_validator_pattern(self):
        height = create_attribute("taskBarHeight", AttributeType.TEXT_FIELD, validator=r"\d+")
        self.service.validate_value(height, "40")
        self.assertInvalid(height, "40px")

    def test_empty_values_pass(self):
        height = create_attribute("taskBarHeight", AttributeType.INTEGER, validator=r"\d+")
        self.service.validate_value(height, None)
        self.service.validate_value(height, "")

    def test_table_has_no_own_value(self):
        self.assertInvalid(create_attribute("URLFilterRules", AttributeType.TABLE), "x")


class TableValuesAndMappingTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.eth = create_institution("ETH Zurich")
        cls.user = create_user("exam-admin", cls.eth, UserRole.EXAM_ADMIN)
        cls.table = create_attribute("URLFilterRules", AttributeType.TABLE)
        cls.expression = create_attribute("URLFilterRules.expression", AttributeType.TEXT_FIELD, cls.table)
        cls.active = create_attribute("URLFilterRules.active", AttributeType.CHECKBOX, cls.table)
        cls.allow_quit = create_attribute("allowQuit", AttributeType.CHECKBOX)

    def test_ordered_table_values(self):
        service = ConfigurationService()
        followup = service.get_followup(create_node(self.eth, self.user))
        service.save_value(followup, self.expression, "uzh.ch", list_index=1)
        service.save_value(followup, self.expression, "ethz.ch", list_index=0)
        service.save_value(followup, self.active, "true", list_index=0)
        service.save_value(followup, self.active, "false", list_index=1)

        rows = service.get_ordered_table_values(followup, self.table)

        self.assertEqual(
            [[(v.attribute.name, v.value) for v in row] for row in rows],
            [
                [("URLFilterRules.active", "true"), ("URLFilterRules.expression", "ethz.ch")],
                [("URLFilterRules.active", "false"), ("URLFilterRules.expression", "uzh.ch")],
            ],
        )

    def test_attribute_mapping_falls_back_to_default_template(self):
        view = View.objects.create(name="general", columns=2, template_id=0)
        Orientation.objects.create(attribute=self.table, view=view, x_position=0, y_position=1)
        Orientation.objects.create(attribute=self.allow_quit, view=view, x_position=1, y_position=0)

        mapping = ConfigurationService().get_attribute_mapping(template_id=42)

        self.assertEqual(mapping.views, [view])
        self.assertEqual(
            [attribute.name for attribute, _ in mapping.get_view_attributes(view)],
            ["allowQuit", "URLFilterRules"],
        )
        self.assertEqual(
            [a.name for a in mapping.get_child_attributes(self.table)],
            ["URLFilterRules.active", "URLFilterRules.expression"],
        )
