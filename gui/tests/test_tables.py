from datetime import datetime, timezone as dt_timezone

from django.test import RequestFactory, TestCase

from core.institutions.models import Institution
from core.tests.helpers import create_institution
from gui.tables import ColumnDefinition, CriteriaType, EntityTable, TableFilterAttribute


def filter_institutions(queryset, filter_map):
    if filter_map.name:
        queryset = queryset.filter(name__icontains=filter_map.name)
    return queryset


class EntityTableTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        for name in ("ETH Zurich", "EPFL", "UZH", "Uni Basel", "Uni Bern"):
            create_institution(name)

    def table(self, **params):
        request = RequestFactory().get("/institutions/", params)
        columns = [
            ColumnDefinition(
                "name",
                "Name",
                lambda institution: institution.name,
                TableFilterAttribute(CriteriaType.TEXT, "name", "Name"),
                sortable=True,
            ),
            ColumnDefinition("active", "Active", lambda institution: institution.active),
        ]
        return EntityTable(
            request,
            Institution.objects.all(),
            columns,
            filter_function=filter_institutions,
            default_sort="name",
            page_size=2,
            row_link=lambda institution: f"/institutions/{institution.pk}/",
        ).build()

    def test_first_page(self):
        table = self.table()
        self.assertEqual([row["cells"][0] for row in table.rows], ["EPFL", "ETH Zurich"])
        self.assertEqual(table.page.number_of_pages, 3)
        self.assertIsNone(table.previous_query)
        self.assertEqual(table.next_query, "page_number=2")
        self.assertTrue(table.rows[0]["link"].startswith("/institutions/"))

    def test_filter_and_paging(self):
        table = self.table(name="uni", page_number="2")
        self.assertEqual([row["cells"][0] for row in table.rows], [])
        table = self.table(name="uni")
        self.assertEqual([row["cells"][0] for row in table.rows], ["Uni Basel", "Uni Bern"])
        self.assertEqual(table.filter_inputs[0]["value"], "uni")

    def test_sort_headers(self):
        name_header, active_header = self.table().headers
        self.assertTrue(name_header.active)
        self.assertFalse(name_header.descending)
        self.assertEqual(name_header.query, "sort=-name")
        self.assertIsNone(active_header.query)

        table = self.table(sort="-name", page_number="2")
        self.assertEqual(table.headers[0].query, "sort=name")
        self.assertEqual([row["cells"][0] for row in table.rows], ["UZH", "ETH Zurich"])

    def test_date_range_defaults(self):
        request = RequestFactory().get("/logs/")
        date_filter = TableFilterAttribute(
            CriteriaType.DATE_RANGE,
            "timestamp",
            default=(
                datetime(2024, 1, 1, 12, tzinfo=dt_timezone.utc),
                datetime(2024, 12, 31, 23, tzinfo=dt_timezone.utc),
            ),
        )
        table = EntityTable(request, Institution.objects.all(), [], filters=[date_filter])
        self.assertEqual(table.get_filter_values(), {"from": "2024-01-01", "to": "2024-12-31"})
