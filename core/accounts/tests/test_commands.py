from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase

from core.accounts.models import UserAccount
from core.authorization import UserRole
from core.institutions.models import Institution
from core.tests.helpers import PASSWORD


class InitAdminAccountCommandTests(TestCase):
    def call(self, *args):
        out = StringIO()
        call_command("init_admin_account", *args, stdout=out)
        return out.getvalue()

    def test_creates_institution_and_admin(self):
        output = self.call("--institution", "ETH Zurich", "--username", "root", "--password", PASSWORD)
        self.assertIn("Created SEB Server administrator 'root'", output)
        self.assertNotIn("Generated password", output)
        user = UserAccount.objects.get(username="root")
        self.assertEqual(user.roles, [UserRole.SEB_SERVER_ADMIN])
        self.assertEqual(user.institution, Institution.objects.get(name="ETH Zurich"))
        self.assertTrue(user.check_password(PASSWORD))

    def test_generates_password(self):
        output = self.call("--username", "root")
        self.assertIn("Generated password:", output)

    def test_skips_when_admin_exists(self):
        self.call("--username", "root")
        output = self.call("--username", "other")
        self.assertIn("already exists", output)
        self.assertFalse(UserAccount.objects.filter(username="other").exists())

    def test_force_with_existing_username(self):
        self.call("--username", "root")
        with self.assertRaises(CommandError):
            self.call("--username", "root", "--force")
