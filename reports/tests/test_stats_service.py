from datetime import date

from django.contrib.auth.models import User
from django.core.cache import cache
from django.test import TestCase

from reports.services.daily import submit_daily_report
from reports.services.stats import get_activity_calendar, get_dashboard_stats, intensity_level


def _work(lines):
    return '\n'.join(f'item {i}' for i in range(lines))


class DashboardStatsServiceTest(TestCase):
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_superuser(username='admin', password='pass', email='admin@example.com')
        self.alice = User.objects.create_user(username='alice@example.com', password='pass')
        self.bob = User.objects.create_user(username='bob@example.com', password='pass')
        for day in (8, 9, 10):
            submit_daily_report(self.alice, date=date(2024, 1, day), today_work=_work(2))
        submit_daily_report(self.bob, date=date(2024, 1, 10), today_work=_work(1), problems='数据库连接超时问题')
        submit_daily_report(self.bob, date=date(2024, 1, 10), today_work=_work(1))

    def test_counts_exclude_admins(self):
        stats = get_dashboard_stats(today=date(2024, 1, 10))
        self.assertEqual(stats['total_members'], 2)
        self.assertEqual(stats['submitted_count'], 2)
        self.assertEqual(stats['pending_count'], 0)

    def test_weekly_rate_counts_member_days(self):
        # Thu..Wed holds 5 work days for 2 members; 4 distinct member-days reported
        stats = get_dashboard_stats(today=date(2024, 1, 10))
        self.assertEqual(stats['weekly_submission_rate'], 40)

    def test_recent_activity_and_risks(self):
        stats = get_dashboard_stats(today=date(2024, 1, 10))
        self.assertEqual(len(stats['recent_activity']), 5)
        self.assertEqual(stats['risk_count'], 1)

    def test_pending_members(self):
        stats = get_dashboard_stats(today=date(2024, 1, 9))
        self.assertEqual(stats['submitted_count'], 1)
        self.assertEqual(stats['pending_count'], 1)

    def test_no_work_days_rate_zero(self):
        stats = get_dashboard_stats(today=date(2024, 1, 7))
        self.assertEqual(stats['submitted_count'], 0)
        self.assertGreaterEqual(stats['weekly_submission_rate'], 0)


class ActivityCalendarTest(TestCase):
    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(username='alice@example.com', password='pass')
        submit_daily_report(self.user, date=date(2024, 1, 8), today_work=_work(8))
        submit_daily_report(self.user, date=date(2024, 1, 8), today_work=_work(1))
        submit_daily_report(self.user, date=date(2024, 1, 9), today_work=_work(4))
        submit_daily_report(self.user, date=date(2024, 1, 10), today_work=_work(1))

    def test_levels(self):
        data = get_activity_calendar(self.user.id, 2024, 1)
        days = {d['day']: d for d in data['days']}
        self.assertEqual(len(data['days']), 31)
        self.assertEqual(data['first_weekday'], 1)
        self.assertEqual(days[8]['task_count'], 9)
        self.assertEqual(days[8]['level'], 'high')
        self.assertEqual(days[9]['level'], 'medium')
        self.assertEqual(days[10]['level'], 'low')
        self.assertEqual(days[11]['level'], 'none')
        self.assertFalse(days[11]['submitted'])
        self.assertEqual(data['total_tasks'], 14)
        self.assertEqual(data['submitted_days'], 3)

    def test_other_month_empty(self):
        data = get_activity_calendar(self.user.id, 2024, 2)
        self.assertEqual(len(data['days']), 29)
        self.assertEqual(data['submitted_days'], 0)

    def test_intensity_level(self):
        self.assertEqual(intensity_level(None), 'none')
        self.assertEqual(intensity_level(0), 'low')
        self.assertEqual(intensity_level(4), 'medium')
        self.assertEqual(intensity_level(8), 'high')
