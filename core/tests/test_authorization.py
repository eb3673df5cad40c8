from django.test import TestCase

from core.accounts.models import UserAccount
from core.authorization import AuthorizationService, PrivilegeType, UserRole
from core.authorization.privileges import get_all_privileges, get_privilege
from core.entities import EntityType
from core.exceptions import PermissionDeniedException
from core.institutions.models import Institution
from sebconfig.models import ConfigurationNode

from .helpers import create_institution, create_user


class PrivilegeTableTests(TestCase):
    def test_write_implies_modify_and_read(self):
        self.assertTrue(PrivilegeType.WRITE.has_implicit(PrivilegeType.MODIFY))
        self.assertTrue(PrivilegeType.MODIFY.has_implicit(PrivilegeType.READ_ONLY))
        self.assertFalse(PrivilegeType.READ_ONLY.has_implicit(PrivilegeType.MODIFY))
        self.assertTrue(PrivilegeType.NONE.has_implicit(PrivilegeType.NONE))

    def test_admin_writes_institutions(self):
        privilege = get_privilege(EntityType.INSTITUTION, UserRole.SEB_SERVER_ADMIN)
        self.assertTrue(privilege.has_base_privilege(PrivilegeType.WRITE))

    def test_institutional_admin_modifies_own_institution_only(self):
        privilege = get_privilege(EntityType.INSTITUTION, UserRole.INSTITUTIONAL_ADMIN)
        self.assertFalse(privilege.has_base_privilege(PrivilegeType.READ_ONLY))
        self.assertTrue(privilege.has_institutional_privilege(PrivilegeType.MODIFY))
        self.assertFalse(privilege.has_institutional_privilege(PrivilegeType.WRITE))

    def test_every_role_has_a_privilege_per_entity_type(self):
        privileges = get_all_privileges()
        self.assertEqual(len(privileges), len(EntityType) * len(UserRole))
        self.assertEqual(
            privileges[0].to_dict().keys(),
            {"entity_type", "role", "base_privilege", "institutional_privilege", "ownership_privilege"},
        )


class AuthorizationServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.eth = create_institution("ETH Zurich")
        cls.uzh = create_institution("UZH")
        cls.admin = create_user("admin", cls.eth, UserRole.SEB_SERVER_ADMIN)
        cls.inst_admin = create_user("inst-admin", cls.eth, UserRole.INSTITUTIONAL_ADMIN)
        cls.supporter = create_user("supporter", cls.eth, UserRole.EXAM_SUPPORTER)
        cls.other_supporter = create_user("other-supporter", cls.eth, UserRole.EXAM_SUPPORTER)

    def test_roles_of_anonymous_user_are_empty(self):
        from django.contrib.auth.models import AnonymousUser

        self.assertEqual(AuthorizationService(AnonymousUser()).roles, set())

    def test_base_privilege_covers_all_institutions(self):
        service = AuthorizationService(self.admin)
        self.assertTrue(service.has_privilege(EntityType.INSTITUTION, PrivilegeType.WRITE, self.uzh.pk))
        self.assertTrue(service.has_grant(self.uzh, PrivilegeType.WRITE))

    def test_institutional_privilege_is_limited_to_own_institution(self):
        service = AuthorizationService(self.inst_admin)
        self.assertTrue(service.has_grant(self.eth, PrivilegeType.MODIFY))
        self.assertFalse(service.has_grant(self.uzh, PrivilegeType.READ_ONLY))
        with self.assertRaises(PermissionDeniedException):
            service.check_grant_on_entity(self.uzh, PrivilegeType.READ_ONLY)

    def test_ownership_privilege(self):
        service = AuthorizationService(self.supporter)
        self.assertTrue(service.has_grant(self.supporter, PrivilegeType.MODIFY))
        self.assertFalse(service.has_grant(self.other_supporter, PrivilegeType.READ_ONLY))

    def test_check_privilege_with_ownership(self):
        service = AuthorizationService(self.supporter)
        with self.assertRaises(PermissionDeniedException):
            service.check_privilege(EntityType.USER, PrivilegeType.READ_ONLY, self.eth.pk)
        service.check_privilege(
            EntityType.USER, PrivilegeType.READ_ONLY, self.eth.pk, include_ownership=True
        )

    def test_grant_filter_on_querysets(self):
        self.assertEqual(
            AuthorizationService(self.admin)
            .filter_granted(Institution.objects.all(), EntityType.INSTITUTION, PrivilegeType.READ_ONLY)
            .count(),
            2,
        )
        self.assertEqual(
            list(
                AuthorizationService(self.inst_admin).filter_granted(
                    Institution.objects.all(), EntityType.INSTITUTION, PrivilegeType.READ_ONLY
                )
            ),
            [self.eth],
        )
        self.assertEqual(
            list(
                AuthorizationService(self.supporter).filter_granted(
                    UserAccount.objects.all(), EntityType.USER, PrivilegeType.READ_ONLY
                )
            ),
            [self.supporter],
        )

    def test_grant_filter_combines_institution_and_ownership(self):
        own = ConfigurationNode.objects.create(
            institution=self.eth, owner=str(self.supporter.uuid), name="Own"
        )
        ConfigurationNode.objects.create(institution=self.uzh, owner=str(self.supporter.uuid), name="Foreign")
        other = ConfigurationNode.objects.create(institution=self.eth, owner="someone", name="Other")

        service = AuthorizationService(self.supporter)
        readable = service.filter_granted(
            ConfigurationNode.objects.all(), EntityType.CONFIGURATION_NODE, PrivilegeType.READ_ONLY
        )
        modifiable = service.filter_granted(
            ConfigurationNode.objects.all(), EntityType.CONFIGURATION_NODE, PrivilegeType.MODIFY
        )
        self.assertCountEqual(readable, [own, other, ConfigurationNode.objects.get(name="Foreign")])
        self.assertCountEqual(modifiable, [own, ConfigurationNode.objects.get(name="Foreign")])

    def test_no_privilege_gives_empty_filter(self):
        service = AuthorizationService(self.supporter)
        self.assertFalse(
            service.filter_granted(
                Institution.objects.all(), EntityType.INSTITUTION, PrivilegeType.WRITE
            ).exists()
        )
