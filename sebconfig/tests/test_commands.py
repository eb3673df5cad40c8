from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from sebconfig.management.commands.seed_exam_attributes import ATTRIBUTES, ORIENTATIONS
from sebconfig.models import ConfigurationAttribute, Orientation, View


class SeedExamAttributesCommandTests(TestCase):
    def seed(self, *args):
        out = StringIO()
        call_command("seed_exam_attributes", *args, stdout=out)
        return out.getvalue()

    def test_seeds_attributes_and_layout(self):
        output = self.seed()
        self.assertIn(f"{len(ATTRIBUTES)} attributes seeded ({len(ATTRIBUTES)} new)", output)
        table = ConfigurationAttribute.objects.get(name="URLFilterRules")
        self.assertEqual(table.children.count(), 4)
        view = View.objects.get(name="general", template_id=0)
        self.assertEqual(view.orientations.count(), len(ORIENTATIONS))

    def test_is_idempotent(self):
        self.seed()
        output = self.seed()
        self.assertIn("(0 new)", output)
        self.assertEqual(ConfigurationAttribute.objects.count(), len(ATTRIBUTES))
        self.assertEqual(Orientation.objects.count(), len(ORIENTATIONS))

    def test_template_layout(self):
        self.seed()
        self.seed("--template-id", "7", "--view-name", "exam")
        self.assertTrue(View.objects.filter(name="exam", template_id=7).exists())
        self.assertEqual(Orientation.objects.filter(template_id=7).count(), len(ORIENTATIONS))
