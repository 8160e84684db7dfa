from datetime import date, timedelta

from django.contrib.auth.models import User
from django.core.cache import cache
from django.db import connection
from django.test import TestCase
from django.test.utils import CaptureQueriesContext
from django.urls import reverse

from reports.services.daily import submit_daily_report


class TeamWallPerformanceTest(TestCase):
    def setUp(self):
        cache.clear()
        self.viewer = User.objects.create_user(username='viewer@example.com', password='pass')
        start = date(2024, 1, 1)
        for i in range(5):
            user = User.objects.create_user(username=f'u{i}@example.com', password='pass', first_name=f'U{i}')
            for d in range(4):
                report = submit_daily_report(user, date=start + timedelta(days=d), today_work='a\nb').report
                report.likes.add(self.viewer)
        self.client.force_login(self.viewer)

    def test_wall_query_count_constant(self):
        with CaptureQueriesContext(connection) as ctx:
            response = self.client.get(reverse('reports:reports_api'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['count'], 20)
        self.assertTrue(all(r['liked'] for r in response.json()['reports']))
        self.assertLess(len(ctx), 8)
