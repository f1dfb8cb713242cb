"""Tests parts and days."""

import unittest
from datetime import date, time, timedelta

from reti.STORAGE.model import Day, Part, format_factor


class PartTest(unittest.TestCase):

    def test_duration(self):
        self.assertEqual(Part(time(8, 0), time(12, 30)).duration,
                         timedelta(hours=4, minutes=30))
        self.assertEqual(Part(time(8, 0)).duration, timedelta(0))
        self.assertEqual(Part(time(8, 0), time(8, 0)).duration, timedelta(0))

    def test_credited(self):
        part = Part(time(13, 0), time(17, 0), 0.5)
        self.assertTrue(part.is_break)
        self.assertEqual(part.credited, timedelta(hours=2))
        self.assertEqual(Part(time(13, 0), time(17, 0)).credited, timedelta(0))

    def test_stop_before_start(self):
        with self.assertRaises(ValueError):
            Part(time(12, 0), time(8, 0))

    def test_factor_range(self):
        for factor in (0, -0.5, 1.01):
            with self.subTest(factor=factor):
                with self.assertRaises(ValueError):
                    Part(time(8, 0), time(9, 0), factor)
        self.assertEqual(Part(time(8, 0), time(9, 0), 1).factor, 1.0)

    def test_open_part_rejects_factor(self):
        with self.assertRaises(ValueError):
            Part(time(13, 0), None, 0.5)

    def test_seconds_dropped(self):
        part = Part(time(8, 0, 42), time(9, 0, 1))
        self.assertEqual(part.start, time(8, 0))
        self.assertEqual(part.stop, time(9, 0))

    def test_as_legacy(self):
        self.assertEqual(Part(time(8, 0)).as_legacy(), '08:00')
        self.assertEqual(Part(time(8, 0), time(9, 5)).as_legacy(), '08:00-09:05')
        self.assertEqual(Part(time(8, 0), time(9, 5), 0.5).as_legacy(),
                         '08:00-09:05-0.5')

    def test_to_dict(self):
        self.assertEqual(Part(time(8, 0)).to_dict(),
                         {'start': '08:00', 'stop': None, 'factor': None})

    def test_format_factor(self):
        self.assertEqual(format_factor(1.0), '1')
        self.assertEqual(format_factor(0.25), '0.25')


class DayTest(unittest.TestCase):

    def setUp(self):
        self.day = Day(date(2016, 4, 25), [
            Part(time(8, 0), time(12, 0)),
            Part(time(12, 0), time(12, 30), 1),
            Part(time(13, 0), time(17, 0), 0.5),
            Part(time(18, 0)),
        ])

    def test_sums(self):
        self.assertEqual(self.day.worked_duration, timedelta(hours=4))
        self.assertEqual(self.day.credited_break_duration,
                         timedelta(hours=2, minutes=30))
        self.assertEqual(self.day.total_duration,
                         timedelta(hours=8, minutes=30))

    def test_credited_never_exceeds_total(self):
        day = self.day
        self.assertLess(day.worked_duration + day.credited_break_duration,
                        day.total_duration)
        full = Day(day.date, [p for p in day.parts if p.factor in (None, 1.0)])
        self.assertEqual(full.worked_duration + full.credited_break_duration,
                         full.total_duration)

    def test_open_part_counts_zero(self):
        day = Day(date(2016, 4, 25), [Part(time(8, 0))])
        self.assertEqual(day.worked_duration, timedelta(0))
        self.assertEqual(day.credited_break_duration, timedelta(0))

    def test_as_legacy(self):
        self.assertEqual(
            self.day.as_legacy(),
            '2016-04-25 08:00-12:00 12:00-12:30-1 13:00-17:00-0.5 18:00')

    def test_today(self):
        day = Day.today()
        self.assertEqual(day.parts, [])
        self.assertIsInstance(day.date, date)


if __name__ == '__main__':
    unittest.main()
