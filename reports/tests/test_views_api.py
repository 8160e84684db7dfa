import json
from datetime import date, timedelta
from unittest import mock

from django.contrib.auth.models import User
from django.core.cache import cache
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from reports.models import TeamSummary
from reports.services.daily import submit_daily_report
from work_logs.models import DailyReport


class ReportsApiViewsTest(TestCase):
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_superuser(
            username='admin', password='pass', email='admin@example.com'
        )
        self.user = User.objects.create_user(username='alice@example.com', password='pass', first_name='Alice')
        self.client.force_login(self.user)

    def _post(self, name, payload, **kwargs):
        return self.client.post(
            reverse(name, kwargs=kwargs or None),
            data=json.dumps(payload),
            content_type='application/json',
        )

    def test_login_required(self):
        self.client.logout()
        response = self.client.get(reverse('reports:reports_api'))
        self.assertEqual(response.status_code, 401)
        self.assertIn('error', response.json())

    def test_submit_report_with_tags(self):
        response = self._post('reports:reports_api', {
            'date': '2024-01-08',
            'status': '专注',
            'today_work': 'a\nb\nc',
            'tags': ['后端'],
        })
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload['streak'], 1)
        self.assertEqual(payload['report']['task_count'], 3)
        self.assertEqual(payload['report']['tags'], ['后端'])
        self.assertEqual(payload['unlocked_achievements'], [])

    def test_submit_without_tags_uses_ai(self):
        with mock.patch('reports.daily_report_views.ai.analyze_single_report',
                        return_value={'tags': ['API'], 'feedback': None}) as mocked:
            response = self._post('reports:reports_api', {'date': '2024-01-08', 'today_work': 'api'})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['report']['tags'], ['API'])
        mocked.assert_called_once()

    def test_submit_validation(self):
        response = self._post('reports:reports_api', {'date': '2024-01-08', 'today_work': '', 'tags': []})
        self.assertEqual(response.status_code, 400)
        response = self._post('reports:reports_api', {'date': '2024-13-45', 'today_work': 'x', 'tags': []})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(DailyReport.objects.exists())

    def test_submit_non_string_values(self):
        response = self._post('reports:reports_api', {'date': 20240108, 'today_work': 'x', 'tags': []})
        self.assertEqual(response.status_code, 400)
        self.assertIn('error', response.json())
        response = self._post('reports:reports_api', {'date': '2024-01-08', 'today_work': ['a'], 'tags': []})
        self.assertEqual(response.status_code, 400)
        response = self._post('reports:reports_api', {'date': '2024-01-08', 'today_work': ['a']})
        self.assertEqual(response.status_code, 400)
        response = self._post('reports:report_analyze_api', {'today_work': 5})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(DailyReport.objects.exists())

    def test_submit_out_of_order_dates(self):
        response = self._post('reports:reports_api', {'date': '2024-01-09', 'today_work': 'x', 'tags': []})
        self.assertEqual(response.status_code, 201)
        response = self._post('reports:reports_api', {'date': '2024-01-02', 'today_work': 'x', 'tags': []})
        self.assertEqual(response.status_code, 400)
        tomorrow = (timezone.localdate() + timedelta(days=1)).isoformat()
        response = self._post('reports:reports_api', {'date': tomorrow, 'today_work': 'x', 'tags': []})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(DailyReport.objects.count(), 1)

    def test_invalid_json(self):
        response = self.client.post(reverse('reports:reports_api'), data='{bad', content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_list_and_like(self):
        report = submit_daily_report(self.admin, date=date(2024, 1, 8), today_work='review', tags=['评审']).report
        response = self.client.get(reverse('reports:reports_api'), {'date': '2024-01-08'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['count'], 1)
        self.assertFalse(response.json()['reports'][0]['liked'])

        response = self._post('reports:report_like_api', {}, pk=report.id)
        self.assertEqual(response.json(), {'id': report.id, 'liked': True, 'like_count': 1})

        response = self.client.get(reverse('reports:report_detail_api', kwargs={'pk': report.id}))
        self.assertTrue(response.json()['liked'])

    def test_like_missing_report(self):
        response = self._post('reports:report_like_api', {}, pk=999)
        self.assertEqual(response.status_code, 404)

    def test_method_not_allowed(self):
        response = self.client.get(reverse('reports:report_like_api', kwargs={'pk': 1}))
        self.assertEqual(response.status_code, 405)

    def test_analyze(self):
        with mock.patch('reports.daily_report_views.ai.analyze_single_report',
                        return_value={'tags': ['API'], 'feedback': 'ok'}):
            response = self._post('reports:report_analyze_api', {'today_work': 'api'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['feedback'], 'ok')

    def test_dashboard_endpoints(self):
        submit_daily_report(self.user, date=date(2024, 1, 8), today_work='x')
        response = self.client.get(reverse('reports:dashboard_stats_api'))
        self.assertEqual(response.status_code, 200)
        self.assertIn('weekly_submission_rate', response.json())

        response = self.client.get(reverse('reports:dashboard_users_api'))
        users = {u['id']: u for u in response.json()['users']}
        self.assertEqual(users[self.user.id]['streak'], 1)

        response = self.client.get(reverse('reports:activity_calendar_api'),
                                   {'user_id': self.user.id, 'year': 2024, 'month': 1})
        self.assertEqual(response.json()['submitted_days'], 1)

        response = self.client.get(reverse('reports:activity_calendar_api'), {'month': 13})
        self.assertEqual(response.status_code, 400)

    def test_summary_generate_requires_admin(self):
        response = self._post('reports:summary_generate_api', {'date': '2024-01-08'})
        self.assertEqual(response.status_code, 403)

    def test_summary_generate_and_fetch(self):
        self.client.force_login(self.admin)
        response = self._post('reports:summary_generate_api', {'date': '2024-01-08'})
        self.assertEqual(response.status_code, 400)

        submit_daily_report(self.user, date=date(2024, 1, 8), today_work='x')
        fake = {'summary': 'ok', 'risks': '-', 'recommendations': '-', 'keywords': ['x']}
        with mock.patch('reports.services.summary.ai.generate_team_summary', return_value=fake):
            response = self._post('reports:summary_generate_api', {'date': '2024-01-08'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(TeamSummary.objects.count(), 1)

        response = self.client.get(reverse('reports:summary_api'), {'date': '2024-01-08'})
        self.assertEqual(response.json()['summary']['summary'], 'ok')
        response = self.client.get(reverse('reports:summary_api'), {'date': '2024-01-09'})
        self.assertIsNone(response.json()['summary'])

    def test_summary_non_string_date(self):
        self.client.force_login(self.admin)
        response = self._post('reports:summary_generate_api', {'date': 20240108})
        self.assertEqual(response.status_code, 400)
        self.assertIn('error', response.json())

    def test_root_redirects_to_current_user(self):
        response = self.client.get('/')
        self.assertRedirects(response, reverse('core:me_api'))

        self.client.logout()
        response = self.client.get('/')
        self.assertRedirects(response, reverse('core:me_api'), fetch_redirect_response=False)
