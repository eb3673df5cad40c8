from django.test import TestCase, override_settings

from core.exceptions import IllegalAPIArgumentException
from core.institutions.models import Institution
from core.pagination import PaginationService

SORT_COLUMNS = {"name": "name", "active": "active"}


class PaginationServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        for index in range(12):
            Institution.objects.create(name=f"Institution {index:02d}", active=index % 2 == 0)

    def test_first_page_with_default_size(self):
        page = PaginationService(default_page_size=10).get_page_from_params(
            Institution.objects.all(), {}, SORT_COLUMNS, "name"
        )
        self.assertEqual(page.page_number, 1)
        self.assertEqual(page.page_size, 10)
        self.assertEqual(page.number_of_pages, 2)
        self.assertEqual(len(page.content), 10)
        self.assertEqual(page.content[0].name, "Institution 00")

    def test_descending_sort_and_second_page(self):
        page = PaginationService().get_page_from_params(
            Institution.objects.all(),
            {"page_number": "2", "page_size": "5", "sort": "-name"},
            SORT_COLUMNS,
        )
        self.assertEqual([i.name for i in page.content][0], "Institution 06")
        self.assertEqual(page.sort, "-name")
        self.assertEqual(page.number_of_pages, 3)

    def test_page_beyond_last_is_empty(self):
        page = PaginationService().get_page(Institution.objects.all(), 9, 5, None, SORT_COLUMNS)
        self.assertTrue(page.is_empty)

    @override_settings(PAGINATION_MAX_PAGE_SIZE=4)
    def test_page_size_is_clamped(self):
        page = PaginationService().get_page(Institution.objects.all(), 1, 100, None, SORT_COLUMNS)
        self.assertEqual(page.page_size, 4)
        self.assertEqual(page.number_of_pages, 3)

    def test_invalid_arguments(self):
        service = PaginationService()
        with self.assertRaises(IllegalAPIArgumentException):
            service.get_page(Institution.objects.all(), 0, 5, None, SORT_COLUMNS)
        with self.assertRaises(IllegalAPIArgumentException):
            service.get_page(Institution.objects.all(), 1, 5, "unknown", SORT_COLUMNS)
        with self.assertRaises(IllegalAPIArgumentException):
            service.get_page_from_params(Institution.objects.all(), {"page_size": "x"}, SORT_COLUMNS)

    def test_empty_result_has_one_page(self):
        page = PaginationService().get_page(Institution.objects.none(), 1, 5, None, SORT_COLUMNS)
        self.assertEqual(page.number_of_pages, 1)
        self.assertEqual(page.to_dict()["content"], [])
