from rest_framework import status
from rest_framework.test import APITestCase

from core.authorization import UserRole

from .helpers import API, create_institution, create_user


class InstitutionLogoTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        create_institution("ETH Zurich", url_suffix="eth", logo_image="aW1hZ2U=")
        create_institution("Inactive", url_suffix="old", logo_image="b2xk", active=False)

    def test_logo_is_public(self):
        response = self.client.get(f"{API}/info/logo/eth/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.content.decode(), "aW1hZ2U=")

    def test_suffix_matches_end_of_value(self):
        response = self.client.get(f"{API}/info/logo/exam.eth/")
        self.assertEqual(response.content.decode(), "aW1hZ2U=")

    def test_unknown_or_inactive_institution_has_no_logo(self):
        self.assertEqual(self.client.get(f"{API}/info/logo/none/").status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.get(f"{API}/info/logo/old/").status_code, status.HTTP_204_NO_CONTENT)


class PrivilegesViewTests(APITestCase):
    def test_requires_authentication(self):
        response = self.client.get(f"{API}/info/privileges/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_lists_privilege_table(self):
        user = create_user("supporter", create_institution(), UserRole.EXAM_SUPPORTER)
        self.client.force_authenticate(user)
        response = self.client.get(f"{API}/info/privileges/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn(
            {
                "entity_type": "INSTITUTION",
                "role": "SEB_SERVER_ADMIN",
                "base_privilege": "WRITE",
                "institutional_privilege": "NONE",
                "ownership_privilege": "NONE",
            },
            response.json(),
        )
