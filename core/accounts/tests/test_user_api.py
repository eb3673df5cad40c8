import json

from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken

from core.accounts.models import ActivityType, UserAccount, UserActivityLog
from core.authorization import UserRole
from core.tests.helpers import API, PASSWORD, create_institution, create_user

URL = f"{API}/useraccount/"
NEW_PASSWORD = "Another-Seb-Secret-2025#"


class UserAccountApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.eth = create_institution("ETH Zurich")
        cls.uzh = create_institution("UZH")
        cls.admin = create_user("admin", cls.eth, UserRole.SEB_SERVER_ADMIN, first_name="Ada")
        cls.inst_admin = create_user("inst-admin", cls.uzh, UserRole.INSTITUTIONAL_ADMIN)
        cls.exam_admin = create_user("exam-admin", cls.uzh, UserRole.EXAM_ADMIN, first_name="Erik")

    def payload(self, **overrides):
        data = {
            "institution_id": self.uzh.pk,
            "name": "Anna",
            "surname": "Meier",
            "username": "anna",
            "email": "anna@example.org",
            "language": "de",
            "timezone": "Europe/Zurich",
            "roles": ["EXAM_SUPPORTER"],
            "new_password": PASSWORD,
            "confirm_new_password": PASSWORD,
        }
        data.update(overrides)
        return data

    def test_create_user(self):
        self.client.force_authenticate(self.inst_admin)
        response = self.client.post(URL, self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        self.assertEqual(body["roles"], ["EXAM_SUPPORTER"])
        self.assertTrue(body["active"])
        self.assertNotIn("new_password", body)
        user = UserAccount.objects.get(username="anna")
        self.assertTrue(user.check_password(PASSWORD))
        self.assertEqual(str(user.uuid), body["uuid"])

    def test_create_password_confirmation_mismatch(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            URL, self.payload(confirm_new_password="something-else"), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()[0]["attributes"][0], "confirm_new_password")

    def test_create_with_unknown_timezone(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(URL, self.payload(timezone="Mars/Olympus"), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()[0]["attributes"][0], "timezone")

    def test_create_in_inactive_institution(self):
        inactive = create_institution("Closed", active=False)
        self.client.force_authenticate(self.admin)
        response = self.client.post(URL, self.payload(institution_id=inactive.pk), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()[0]["message_code"], "1010")

    def test_only_admin_grants_admin_role(self):
        self.client.force_authenticate(self.inst_admin)
        response = self.client.post(URL, self.payload(roles=["SEB_SERVER_ADMIN"]), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.post(URL, self.payload(roles=["SEB_SERVER_ADMIN"]), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_institutional_admin_cannot_create_in_other_institution(self):
        self.client.force_authenticate(self.inst_admin)
        response = self.client.post(URL, self.payload(institution_id=self.eth.pk), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_retrieve_by_uuid(self):
        self.client.force_authenticate(self.exam_admin)
        response = self.client.get(f"{URL}{self.exam_admin.uuid}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["username"], "exam-admin")

        response = self.client.get(f"{URL}{self.inst_admin.uuid}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.get(f"{URL}not-a-uuid/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_me(self):
        self.client.force_authenticate(self.exam_admin)
        response = self.client.get(f"{URL}me/")
        self.assertEqual(response.json()["uuid"], str(self.exam_admin.uuid))
        self.assertEqual(response.json()["institution_id"], self.uzh.pk)

    def test_list_filters(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get(URL, {"institution_id": self.uzh.pk})
        self.assertEqual(
            [u["username"] for u in response.json()["content"]], ["exam-admin", "inst-admin"]
        )
        response = self.client.get(URL, {"institution_id": self.uzh.pk, "role": "EXAM_ADMIN"})
        self.assertEqual([u["username"] for u in response.json()["content"]], ["exam-admin"])
        response = self.client.get(URL, {"name": "ad"})
        self.assertEqual([u["username"] for u in response.json()["content"]], ["admin"])

    def test_owner_modifies_own_account(self):
        self.client.force_authenticate(self.exam_admin)
        response = self.client.put(
            f"{URL}{self.exam_admin.uuid}/", {"language": "fr"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(UserAccount.objects.get(pk=self.exam_admin.pk).language, "fr")
        self.assertTrue(
            UserActivityLog.objects.filter(
                user=self.exam_admin, activity_type=ActivityType.MODIFY
            ).exists()
        )

    def test_owner_cannot_change_own_roles(self):
        self.client.force_authenticate(self.exam_admin)
        response = self.client.put(
            f"{URL}{self.exam_admin.uuid}/", {"roles": ["INSTITUTIONAL_ADMIN"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(UserAccount.objects.get(pk=self.exam_admin.pk).roles, ["EXAM_ADMIN"])

    def test_institutional_admin_changes_roles(self):
        self.client.force_authenticate(self.inst_admin)
        response = self.client.put(
            f"{URL}{self.exam_admin.uuid}/",
            {"roles": ["EXAM_SUPPORTER", "EXAM_ADMIN"]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["roles"], ["EXAM_ADMIN", "EXAM_SUPPORTER"])

    def test_deactivate_own_account_is_rejected(self):
        self.client.force_authenticate(self.inst_admin)
        response = self.client.post(f"{URL}{self.inst_admin.uuid}/inactive/")
        self.assertEqual(response.json()["errors"][0]["error_message"]["message_code"], "1201")

        response = self.client.post(f"{URL}{self.exam_admin.uuid}/inactive/")
        self.assertEqual(response.json()["errors"], [])
        self.assertFalse(UserAccount.objects.get(pk=self.exam_admin.pk).is_active)

    def test_deactivate_logs_the_account(self):
        self.client.force_authenticate(self.admin)
        self.client.post(f"{URL}{self.exam_admin.uuid}/inactive/")
        log = UserActivityLog.objects.get(activity_type=ActivityType.DEACTIVATE)
        self.assertEqual(log.entity_id, str(self.exam_admin.uuid))
        account = json.loads(log.message)
        self.assertEqual(account["username"], "exam-admin")
        self.assertFalse(account["active"])


class PasswordChangeTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.eth = create_institution("ETH Zurich")
        cls.user = create_user("exam-admin", cls.eth, UserRole.EXAM_ADMIN)
        cls.admin = create_user(
            "admin", cls.eth, UserRole.SEB_SERVER_ADMIN, password="Admin-Own-Secret-2025#"
        )

    def change(self, **overrides):
        data = {
            "password": PASSWORD,
            "new_password": NEW_PASSWORD,
            "confirm_new_password": NEW_PASSWORD,
        }
        data.update(overrides)
        return self.client.put(f"{URL}password/", data, format="json")

    def test_change_password(self):
        self.client.force_authenticate(self.user)
        response = self.change()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(UserAccount.objects.get(pk=self.user.pk).check_password(NEW_PASSWORD))
        log = UserActivityLog.objects.get(activity_type=ActivityType.PASSWORD_CHANGE)
        self.assertEqual(json.loads(log.message)["username"], "exam-admin")

    def test_admin_changes_password_with_old_password_of_account(self):
        self.client.force_authenticate(self.admin)
        response = self.change(model_id=str(self.user.uuid), password="Admin-Own-Secret-2025#")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()[0]["attributes"], ["password", "Wrong password"])

        response = self.change(model_id=str(self.user.uuid))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(UserAccount.objects.get(pk=self.user.pk).check_password(NEW_PASSWORD))
        self.assertTrue(UserAccount.objects.get(pk=self.admin.pk).check_password("Admin-Own-Secret-2025#"))

    def test_wrong_current_password(self):
        self.client.force_authenticate(self.user)
        response = self.change(password="wrong")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()[0]["attributes"][0], "password")

    def test_confirmation_mismatch(self):
        self.client.force_authenticate(self.user)
        response = self.change(confirm_new_password="Different-Secret-2025#")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()[0]["attributes"][0], "confirm_new_password")

    def test_weak_new_password(self):
        self.client.force_authenticate(self.user)
        response = self.change(new_password="1234", confirm_new_password="1234")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()[0]["attributes"][0], "new_password")

    def test_password_change_revokes_tokens(self):
        tokens = self.client.post(
            f"{API}/token/", {"username": "exam-admin", "password": PASSWORD}, format="json"
        ).json()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        self.assertEqual(self.change().status_code, status.HTTP_200_OK)
        self.assertEqual(BlacklistedToken.objects.count(), 1)

        response = self.client.get(f"{URL}me/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
