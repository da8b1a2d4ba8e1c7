"""Unit tests for stats_service aggregation."""

import unittest
from datetime import datetime, timedelta, timezone

from adapter.memory.storage import InMemoryStorage
from domain.model.project import ProjectInputs
from domain.model.stats import WEEKDAY_LABELS
from domain.model.time_entry import TimeEntryInputs
from domain.model.user import UserInputs
from services.stats_service import _round, get_stats, start_of_week

MONDAY = datetime(2026, 3, 9, 10, 0, tzinfo=timezone.utc)
WEEK_START = datetime(2026, 3, 9, tzinfo=timezone.utc)
WEEK_END = datetime(2026, 3, 15, 23, 59, 59, tzinfo=timezone.utc)


class TestStartOfWeek(unittest.TestCase):

    def test_midweek_returns_previous_monday_midnight(self):
        wednesday = datetime(2026, 3, 11, 15, 42, 7, 123, tzinfo=timezone.utc)

        self.assertEqual(start_of_week(wednesday), WEEK_START)

    def test_sunday_belongs_to_week_started_six_days_earlier(self):
        sunday = datetime(2026, 3, 15, 8, 0, tzinfo=timezone.utc)

        self.assertEqual(start_of_week(sunday), WEEK_START)

    def test_monday_returns_same_day(self):
        self.assertEqual(start_of_week(MONDAY), WEEK_START)


class TestGetStats(unittest.TestCase):

    def setUp(self):
        self.storage = InMemoryStorage()
        self.user = self.storage.create_user(UserInputs(
            username='demo', password='x', name='Demo', email='d@x.io', hourly_rate=100,
        ))
        self.web = self.storage.create_project(ProjectInputs(name='Web', color='#10b981'))
        self.app = self.storage.create_project(ProjectInputs(name='App', color='#3b82f6'))

    def _add(self, project_id: int, duration: int, days: int = 0, billable: bool = True, user_id: int | None = None):
        return self.storage.create_time_entry(TimeEntryInputs(
            project_id=project_id,
            user_id=user_id or self.user.id,
            task='Work',
            date=MONDAY + timedelta(days=days),
            duration=duration,
            is_billable=billable,
        ))

    def _stats(self, user_id: int | None = None):
        return get_stats(self.storage, user_id or self.user.id, WEEK_START, WEEK_END)

    def test_same_day_billable_entries(self):
        self._add(self.web.id, 135)
        self._add(self.web.id, 105)

        stats = self._stats()

        self.assertEqual(stats.weekly_hours, 4.0)
        self.assertEqual(stats.billable_hours, 4.0)
        self.assertEqual(stats.utilization_rate, 100.0)
        self.assertEqual(stats.billable_amount, 400.0)

    def test_no_entries_yields_zeros(self):
        stats = self._stats()

        self.assertEqual(stats.weekly_hours, 0)
        self.assertEqual(stats.billable_hours, 0)
        self.assertEqual(stats.billable_amount, 0)
        self.assertEqual(stats.utilization_rate, 0)
        self.assertEqual(stats.project_breakdown, [])
        self.assertEqual([d.day for d in stats.daily_activity], list(WEEKDAY_LABELS))
        self.assertTrue(all(d.hours == 0 for d in stats.daily_activity))

    def test_zero_duration_entries_do_not_divide_by_zero(self):
        self._add(self.web.id, 0)
        self._add(self.app.id, 0, billable=False)

        stats = self._stats()

        self.assertEqual(stats.utilization_rate, 0)
        self.assertEqual(len(stats.project_breakdown), 2)
        for project_stats in stats.project_breakdown:
            self.assertEqual(project_stats.percentage, 0)

    def test_utilization_and_billable_amount(self):
        self._add(self.web.id, 90)
        self._add(self.app.id, 30, billable=False)

        stats = self._stats()

        self.assertEqual(stats.weekly_hours, 2.0)
        self.assertEqual(stats.billable_hours, 1.5)
        self.assertEqual(stats.billable_amount, 150.0)
        self.assertEqual(stats.utilization_rate, 75.0)

    def test_rounding(self):
        self._add(self.web.id, 100)  # 1.666... hours

        stats = self._stats()

        self.assertEqual(stats.weekly_hours, 1.7)
        self.assertEqual(stats.billable_amount, 166.67)

    def test_rounding_halves_round_up(self):
        self._add(self.web.id, 15)  # 0.25 hours
        self._add(self.app.id, 225, billable=False)

        stats = self._stats()

        self.assertEqual(stats.weekly_hours, 4.0)
        self.assertEqual(stats.billable_hours, 0.3)
        self.assertEqual(stats.billable_amount, 25.0)
        self.assertEqual(stats.utilization_rate, 6.3)  # 6.25%

    def test_round_helper_uses_decimal_value(self):
        self.assertEqual(_round(0.25, 1), 0.3)
        self.assertEqual(_round(2.675, 2), 2.68)
        self.assertEqual(_round(0, 1), 0)

    def test_missing_user_uses_default_rate(self):
        self._add(self.web.id, 60, user_id=7)

        stats = self._stats(user_id=7)

        self.assertEqual(stats.billable_amount, 150.0)

    def test_user_without_rate_uses_default_rate(self):
        other = self.storage.create_user(UserInputs(username='b', password='x', name='B', email='b@x.io'))
        self._add(self.web.id, 120, user_id=other.id)

        stats = self._stats(user_id=other.id)

        self.assertEqual(stats.billable_amount, 300.0)

    def test_project_breakdown_sorted_and_sums_to_hundred(self):
        self._add(self.web.id, 60)
        self._add(self.app.id, 120)
        self._add(self.app.id, 60, days=1)

        breakdown = self._stats().project_breakdown

        self.assertEqual([p.name for p in breakdown], ['App', 'Web'])
        self.assertEqual(breakdown[0].hours, 3.0)
        self.assertEqual(breakdown[0].color, '#3b82f6')
        self.assertAlmostEqual(breakdown[0].percentage, 75.0)
        self.assertAlmostEqual(sum(p.percentage for p in breakdown), 100.0)

    def test_breakdown_skips_missing_projects(self):
        self._add(self.web.id, 60)
        self._add(99, 60)

        breakdown = self._stats().project_breakdown

        self.assertEqual([p.id for p in breakdown], [self.web.id])
        self.assertAlmostEqual(breakdown[0].percentage, 50.0)

    def test_daily_activity_buckets_by_weekday(self):
        self._add(self.web.id, 90, days=0)   # Mon
        self._add(self.app.id, 30, days=0)   # Mon
        self._add(self.web.id, 180, days=4)  # Fri
        self._add(self.web.id, 60, days=6)   # Sun

        stats = self._stats()
        hours = {d.day: d.hours for d in stats.daily_activity}

        self.assertEqual([d.day for d in stats.daily_activity], list(WEEKDAY_LABELS))
        self.assertEqual(hours['Mon'], 2.0)
        self.assertEqual(hours['Fri'], 3.0)
        self.assertEqual(hours['Sun'], 1.0)
        self.assertEqual(hours['Tue'], 0)
        self.assertAlmostEqual(sum(hours.values()), stats.weekly_hours, places=1)

    def test_entries_outside_range_and_other_users_are_ignored(self):
        self._add(self.web.id, 60)
        self._add(self.web.id, 60, days=7)
        self._add(self.web.id, 60, days=-1)
        self._add(self.web.id, 60, user_id=2)

        self.assertEqual(self._stats().weekly_hours, 1.0)

    def test_weekly_hours_matches_minutes(self):
        durations = [17, 43, 61, 5]
        for i, minutes in enumerate(durations):
            self._add(self.web.id, minutes, days=i)

        stats = self._stats()

        self.assertAlmostEqual(stats.weekly_hours * 60, sum(durations), delta=3)

    def test_daily_activity_sums_to_weekly_hours(self):
        cases = [
            [(0, 15)],
            [(0, 135), (0, 105), (1, 190), (2, 240), (3, 300)],
            [(0, 7), (1, 13), (2, 29), (3, 31), (4, 47), (5, 53), (6, 59)],
            [(6, 1), (6, 1), (6, 1), (2, 0), (4, 89)],
        ]
        for entries in cases:
            with self.subTest(entries=entries):
                self.storage = InMemoryStorage()
                self.user = self.storage.create_user(UserInputs(
                    username='demo', password='x', name='Demo', email='d@x.io',
                ))
                self.web = self.storage.create_project(ProjectInputs(name='Web'))
                for days, minutes in entries:
                    self._add(self.web.id, minutes, days=days, billable=minutes % 2 == 0)

                stats = self._stats()

                self.assertEqual(len(stats.daily_activity), 7)
                daily_total = sum(d.hours for d in stats.daily_activity)
                self.assertAlmostEqual(daily_total, stats.weekly_hours, delta=0.05)

    def test_does_not_mutate_storage(self):
        self._add(self.web.id, 60)
        before = list(self.storage.time_entries.values())

        self._stats()

        self.assertEqual(list(self.storage.time_entries.values()), before)


if __name__ == '__main__':
    unittest.main()
