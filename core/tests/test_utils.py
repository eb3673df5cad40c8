from datetime import datetime, timezone as dt_timezone

from django.test import SimpleTestCase

from core.utils import (
    convert_carriage_return_to_list_separator,
    convert_list_separator_to_carriage_return,
    format_line_breaks,
    get_list_from_string,
    get_list_of_lines,
    streamline_carriage_return,
    to_datetime_utc,
    to_singleton,
    to_timestamp_utc,
)


class UtilsTests(SimpleTestCase):
    def test_to_singleton(self):
        self.assertEqual(to_singleton(["one"]), "one")
        with self.assertRaises(ValueError):
            to_singleton([])
        with self.assertRaises(ValueError):
            to_singleton([1, 2])

    def test_get_list_from_string_skips_blanks(self):
        self.assertEqual(get_list_from_string("a, b,,c "), ["a", "b", "c"])
        self.assertEqual(get_list_from_string(None), [])
        self.assertEqual(get_list_from_string(""), [])

    def test_carriage_return_conversions(self):
        self.assertEqual(streamline_carriage_return("a\r\nb\rc"), "a\nb\nc")
        self.assertEqual(convert_carriage_return_to_list_separator(" a\r\nb\n"), "a,b")
        self.assertEqual(convert_list_separator_to_carriage_return("a,b"), "a\nb")
        self.assertEqual(get_list_of_lines("a\r\n\nb"), ["a", "b"])
        self.assertIsNone(streamline_carriage_return(None))

    def test_format_line_breaks(self):
        self.assertEqual(format_line_breaks('{"a":1,"b":2}'), '{"a":1,\n"b":2}')
        self.assertEqual(format_line_breaks(None), "")

    def test_utc_millis_round_trip(self):
        moment = datetime(2024, 3, 1, 12, 30, tzinfo=dt_timezone.utc)
        millis = to_timestamp_utc(moment)
        self.assertEqual(millis, 1709296200000)
        self.assertEqual(to_datetime_utc(millis), moment)
        self.assertIsNone(to_datetime_utc(None))

    def test_naive_datetime_is_taken_as_utc(self):
        self.assertEqual(to_timestamp_utc(datetime(1970, 1, 1, 0, 0, 1)), 1000)
