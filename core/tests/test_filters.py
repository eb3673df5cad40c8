from datetime import datetime, timezone as dt_timezone

from django.test import SimpleTestCase

from core.exceptions import IllegalAPIArgumentException
from core.filters import FilterMap, parse_utc


class FilterMapTests(SimpleTestCase):
    def test_paging_params_are_not_criteria(self):
        filter_map = FilterMap({"page_number": "2", "page_size": "5", "sort": "name", "name": "eth"})
        self.assertNotIn("page_number", filter_map)
        self.assertNotIn("sort", filter_map)
        self.assertEqual(filter_map.name, "eth")

    def test_institution_id_argument_overrides_params(self):
        filter_map = FilterMap({"institution_id": "1"}, institution_id=7)
        self.assertEqual(filter_map.institution_id, 7)

    def test_typed_access(self):
        filter_map = FilterMap({"active": "true", "count": "12", "types": "A,B", "empty": "  "})
        self.assertTrue(filter_map.active)
        self.assertEqual(filter_map.get_int("count"), 12)
        self.assertEqual(filter_map.get_list("types"), ["A", "B"])
        self.assertIsNone(filter_map.get_string("empty"))
        self.assertIsNone(filter_map.get_int("missing"))

    def test_invalid_values_are_illegal_arguments(self):
        filter_map = FilterMap({"count": "twelve", "active": "maybe"})
        with self.assertRaises(IllegalAPIArgumentException):
            filter_map.get_int("count")
        with self.assertRaises(IllegalAPIArgumentException):
            filter_map.get_bool("active")

    def test_from_to_pair(self):
        filter_map = FilterMap({"from_to": "2024-01-01,2024-02-01T10:00:00Z"})
        from_time, to_time = filter_map.get_from_to()
        self.assertEqual(from_time, datetime(2024, 1, 1, tzinfo=dt_timezone.utc))
        self.assertEqual(to_time, datetime(2024, 2, 1, 10, tzinfo=dt_timezone.utc))

    def test_from_to_pair_needs_two_values(self):
        with self.assertRaises(IllegalAPIArgumentException):
            FilterMap({"from_to": "2024-01-01"}).get_from_to()

    def test_parse_utc(self):
        self.assertIsNone(parse_utc(None))
        self.assertEqual(
            parse_utc("2024-05-02T08:00:00"), datetime(2024, 5, 2, 8, tzinfo=dt_timezone.utc)
        )
        with self.assertRaises(IllegalAPIArgumentException):
            parse_utc("yesterday", "from")
