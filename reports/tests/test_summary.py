from datetime import date
from unittest import mock

from django.contrib.auth.models import User
from django.core.cache import cache
from django.test import TestCase

from reports.models import TeamSummary
from reports.services.daily import submit_daily_report
from reports.services.summary import NoReportsError, generate_summary, get_summary, serialize_summary
from reports.tasks import generate_team_summary_task

AI_RESULT = {
    'summary': '团队进展顺利',
    'risks': '接口延期',
    'recommendations': '提前联调',
    'keywords': ['API', '联调'],
}


class TeamSummaryServiceTest(TestCase):
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_superuser(username='admin', password='pass', email='admin@example.com')
        self.user = User.objects.create_user(username='alice@example.com', password='pass')
        submit_daily_report(self.user, date=date(2024, 1, 8), today_work='api\n联调')

    def test_no_reports_raises(self):
        with self.assertRaises(NoReportsError):
            generate_summary(date(2024, 1, 9))
        self.assertIsNone(get_summary(date(2024, 1, 9)))

    @mock.patch('reports.services.summary.ai.generate_team_summary', return_value=AI_RESULT)
    def test_generate_and_replace(self, mocked):
        first = generate_summary(date(2024, 1, 8), created_by=self.admin)
        self.assertEqual(first.report_count, 1)
        self.assertEqual(first.keywords, ['API', '联调'])
        self.assertEqual(mocked.call_args.args[1], '2024-01-08')

        submit_daily_report(self.admin, date=date(2024, 1, 8), today_work='review')
        second = generate_summary(date(2024, 1, 8), created_by=self.admin)
        self.assertEqual(second.id, first.id)
        self.assertEqual(second.report_count, 2)
        self.assertEqual(TeamSummary.objects.count(), 1)

        payload = serialize_summary(get_summary(date(2024, 1, 8)))
        self.assertEqual(payload['summary'], '团队进展顺利')
        self.assertEqual(payload['created_by'], self.admin.id)

    @mock.patch('reports.services.summary.ai.generate_team_summary', return_value=AI_RESULT)
    def test_task_returns_summary_id(self, mocked):
        summary_id = generate_team_summary_task('2024-01-08')
        self.assertEqual(TeamSummary.objects.get(pk=summary_id).date, date(2024, 1, 8))
        self.assertIsNone(generate_team_summary_task('2024-01-09'))

    def test_serialize_none(self):
        self.assertIsNone(serialize_summary(None))
