import unittest
from datetime import date, timedelta

import helpers  # noqa: F401

from app.exceptions import ConflictingParameters, InvalidRange, MissingParameters
from app.services.date_range import (
    ALLOWED_RANGES,
    month_start,
    resolve_date_range,
    week_start,
)


class WeekStartTests(unittest.TestCase):
    def test_monday_is_its_own_week_start(self):
        self.assertEqual(week_start(date(2025, 9, 1)), date(2025, 9, 1))

    def test_sunday_belongs_to_the_preceding_monday(self):
        # 2025-09-07 is a Sunday
        self.assertEqual(week_start(date(2025, 9, 7)), date(2025, 9, 1))

    def test_week_crossing_year_boundary(self):
        # 2026-01-01 is a Thursday
        self.assertEqual(week_start(date(2026, 1, 1)), date(2025, 12, 29))

    def test_month_start(self):
        self.assertEqual(month_start(date(2025, 2, 28)), date(2025, 2, 1))


class ResolveKeywordTests(unittest.TestCase):
    today = date(2025, 9, 10)  # Wednesday

    def test_daily(self):
        period = resolve_date_range("daily", today=self.today)
        self.assertEqual((period.from_date, period.to_date), (self.today, self.today))

    def test_weekly_starts_on_monday(self):
        period = resolve_date_range("weekly", today=self.today)
        self.assertEqual(period.from_date, date(2025, 9, 8))
        self.assertEqual(period.to_date, self.today)

    def test_monthly(self):
        period = resolve_date_range("monthly", today=self.today)
        self.assertEqual(period.from_date, date(2025, 9, 1))
        self.assertEqual(period.to_date, self.today)

    def test_keyword_periods_end_today_and_are_ordered(self):
        start = date(2025, 12, 25)
        for offset in range(14):
            today = start + timedelta(days=offset)
            for keyword in ALLOWED_RANGES:
                period = resolve_date_range(keyword, today=today)
                self.assertLessEqual(period.from_date, period.to_date)
                self.assertEqual(period.to_date, today)

    def test_as_dict_uses_iso_strings(self):
        period = resolve_date_range("weekly", today=self.today)
        self.assertEqual(period.as_dict(), {"from": "2025-09-08", "to": "2025-09-10"})


class ResolveErrorTests(unittest.TestCase):
    def test_unknown_keyword_lists_allowed_values(self):
        with self.assertRaises(InvalidRange) as ctx:
            resolve_date_range("yearly")
        self.assertEqual(ctx.exception.allowed, ["daily", "weekly", "monthly"])
        self.assertEqual(ctx.exception.to_dict()["allowed"], ["daily", "weekly", "monthly"])

    def test_nothing_given(self):
        with self.assertRaises(MissingParameters) as ctx:
            resolve_date_range()
        self.assertIn("examples", ctx.exception.to_dict())

    def test_only_from_given(self):
        with self.assertRaises(MissingParameters):
            resolve_date_range(from_date=date(2025, 9, 1))

    def test_keyword_with_explicit_dates_conflicts(self):
        with self.assertRaises(ConflictingParameters):
            resolve_date_range("weekly", from_date=date(2025, 9, 1), to_date=date(2025, 9, 7))

    def test_explicit_pair_passes_through(self):
        period = resolve_date_range(from_date=date(2025, 9, 1), to_date=date(2025, 9, 7))
        self.assertEqual(period.as_dict(), {"from": "2025-09-01", "to": "2025-09-07"})


if __name__ == "__main__":
    unittest.main()
