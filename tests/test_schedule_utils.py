import unittest

from pensum_tracker.utils.schedule_utils import (
    day_index,
    format_time_12_hour,
    parse_time,
    slot_sort_key,
    validate_slot,
)


class TimeTests(unittest.TestCase):
    def test_parse_time(self):
        self.assertEqual(parse_time("07:30"), (7, 30))
        self.assertEqual(parse_time("23:59"), (23, 59))

    def test_parse_time_rejects_bad_values(self):
        for value in ("24:00", "12:60", "7:5", "siete", "", None):
            with self.assertRaises(ValueError, msg=value):
                parse_time(value)

    def test_format_12_hour(self):
        self.assertEqual(format_time_12_hour("00:15"), "12:15 AM")
        self.assertEqual(format_time_12_hour("09:05"), "09:05 AM")
        self.assertEqual(format_time_12_hour("12:00"), "12:00 PM")
        self.assertEqual(format_time_12_hour("13:05"), "01:05 PM")
        self.assertEqual(format_time_12_hour(""), "")


class SlotTests(unittest.TestCase):
    def test_validate_slot(self):
        validate_slot("Lunes", "08:00", "09:30")
        with self.assertRaises(ValueError):
            validate_slot("Lunes", "10:00", "09:00")
        with self.assertRaises(ValueError):
            validate_slot("Lunes", "10:00", "10:00")
        with self.assertRaises(ValueError):
            validate_slot("Monday", "08:00", "09:00")

    def test_sort_by_day_then_time(self):
        slots = [("Miércoles", "08:00"), ("Lunes", "10:00"), ("Lunes", "07:30"), ("Domingo", "06:00")]
        ordered = sorted(slots, key=lambda s: slot_sort_key(*s))
        self.assertEqual(ordered, [("Lunes", "07:30"), ("Lunes", "10:00"), ("Miércoles", "08:00"), ("Domingo", "06:00")])
        self.assertEqual(day_index("Sábado"), 5)
