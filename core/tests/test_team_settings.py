from django.core.cache import cache
from django.test import TestCase, override_settings

from core.models import Profile, SystemSetting, TeamGroup
from core.services.team_settings import (
    SettingsValidationError,
    clean_work_days,
    ensure_default_groups,
    get_schedule_config,
    get_team_settings,
    replace_groups,
    update_team_settings,
)
from django.contrib.auth.models import User


class TeamSettingsServiceTest(TestCase):
    def setUp(self):
        cache.clear()

    @override_settings(TEAM_NAME_DEFAULT='Alpha')
    def test_defaults(self):
        data = get_team_settings()
        self.assertEqual(data['team_name'], 'Alpha')
        self.assertEqual(data['work_days'], [1, 2, 3, 4, 5])
        self.assertEqual(data['achievement_rules']['daily_task_threshold'], 8)

    def test_update_partial(self):
        data = update_team_settings({'work_days': [5, 1, 1, '3'], 'achievement_rules': {'daily_task_threshold': 5}})
        self.assertEqual(data['work_days'], [1, 3, 5])
        self.assertEqual(data['achievement_rules']['daily_task_threshold'], 5)
        self.assertEqual(data['achievement_rules']['weekly_high_perf_days'], 4)
        self.assertTrue(SystemSetting.objects.filter(key='work_days').exists())

    def test_empty_work_days_allowed(self):
        data = update_team_settings({'work_days': []})
        self.assertEqual(data['work_days'], [])
        self.assertEqual(get_schedule_config().work_days, frozenset())

    def test_invalid_values(self):
        with self.assertRaises(SettingsValidationError):
            clean_work_days([7])
        with self.assertRaises(SettingsValidationError):
            clean_work_days('1,2')
        with self.assertRaises(SettingsValidationError):
            update_team_settings({'team_name': '  '})
        with self.assertRaises(SettingsValidationError):
            update_team_settings({'achievement_rules': {'daily_task_threshold': -1}})

    def test_direct_setting_change_invalidates_cache(self):
        get_team_settings()
        SystemSetting.objects.create(key='team_name', value='Beta')
        self.assertEqual(get_team_settings()['team_name'], 'Beta')

    def test_malformed_stored_value_ignored(self):
        SystemSetting.objects.create(key='work_days', value='not-json')
        self.assertEqual(get_team_settings()['work_days'], [1, 2, 3, 4, 5])

    def test_schedule_config(self):
        update_team_settings({'work_days': [0, 6], 'achievement_rules': {'daily_task_threshold': 3}})
        schedule = get_schedule_config()
        self.assertEqual(schedule.work_days, frozenset({0, 6}))
        self.assertEqual(schedule.achievement_rules.daily_task_threshold, 3)


class GroupsServiceTest(TestCase):
    def test_ensure_default_groups_once(self):
        created = ensure_default_groups()
        self.assertEqual([g.name for g in created], ['开发组', '设计组', '市场组'])
        self.assertEqual(ensure_default_groups(), [])

    def test_replace_groups(self):
        dev = TeamGroup.objects.create(name='开发组')
        ops = TeamGroup.objects.create(name='运维组')
        user = User.objects.create_user(username='alice@example.com', password='pass')
        Profile.objects.filter(user=user).update(group=ops)

        groups = replace_groups([{'id': dev.id, 'name': '研发组'}, {'name': '产品组'}])
        self.assertEqual([g['name'] for g in groups], ['研发组', '产品组'])
        self.assertFalse(TeamGroup.objects.filter(pk=ops.pk).exists())
        self.assertIsNone(Profile.objects.get(user=user).group_id)

    def test_replace_groups_validation(self):
        with self.assertRaises(SettingsValidationError):
            replace_groups([{'name': ''}])
        with self.assertRaises(SettingsValidationError):
            replace_groups('abc')
