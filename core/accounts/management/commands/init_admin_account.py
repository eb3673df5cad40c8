"""
Initial Admin Account Management Command - SEB Server Admin Backend

Creates the initial institution and SEB Server administrator account of a
fresh installation.

Features:
- Skips when an SEB_SERVER_ADMIN account already exists (unless --force)
- Generates a random password when none is given and prints it once
- Institution and account names configurable via options or settings

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging
import secrets

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from core.authorization.privileges import UserRole
from core.institutions.models import Institution

from ...models import UserAccount, UserRoleAssignment

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Creates the initial institution and SEB Server administrator account."

    def add_arguments(self, parser):
        parser.add_argument(
            "--institution",
            default=getattr(settings, "INIT_ADMIN_INSTITUTION", "SEB Server"),
            help="Name of the initial institution",
        )
        parser.add_argument(
            "--username",
            default=getattr(settings, "INIT_ADMIN_USERNAME", "sebserver-admin"),
            help="Username of the administrator account",
        )
        parser.add_argument("--email", default="", help="E-Mail of the administrator account")
        parser.add_argument("--password", default=None, help="Password, generated when omitted")
        parser.add_argument(
            "--force",
            action="store_true",
            help="Create the account even if an administrator already exists",
        )

    def handle(self, *args, **options):
        admin_exists = UserRoleAssignment.objects.filter(
            role_name=UserRole.SEB_SERVER_ADMIN
        ).exists()
        if admin_exists and not options["force"]:
            self.stdout.write("SEB Server administrator account already exists, nothing to do.")
            return

        username = options["username"]
        if UserAccount.objects.filter(username=username).exists():
            raise CommandError(f"User '{username}' already exists.")

        password = options["password"] or secrets.token_urlsafe(16)
        with transaction.atomic():
            institution, created = Institution.objects.get_or_create(
                name=options["institution"], defaults={"active": True}
            )
            if created:
                self.stdout.write(f"Created institution '{institution.name}'.")

            user = UserAccount(
                username=username,
                email=options["email"],
                first_name=username,
                institution=institution,
                is_staff=True,
            )
            user.set_password(password)
            user.save()
            user.set_roles([UserRole.SEB_SERVER_ADMIN])

        logger.info("Initial SEB Server administrator '%s' created", username)
        self.stdout.write(self.style.SUCCESS(f"Created SEB Server administrator '{username}'."))
        if not options["password"]:
            self.stdout.write(f"Generated password: {password}")
            self.stdout.write(self.style.WARNING("Change this password after the first login."))
