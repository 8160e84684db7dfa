import json
import logging

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

from core.constants import SETTING_ACHIEVEMENT_RULES, SETTING_TEAM_NAME, SETTING_WORK_DAYS
from core.models import SystemSetting, TeamGroup
from core.utils import clean_str
from reports.services.streaks import AchievementRules, ScheduleConfig

logger = logging.getLogger(__name__)

TEAM_SETTINGS_CACHE_KEY = "team_settings_v1"
RULE_FIELDS = ('daily_task_threshold', 'weekly_high_perf_days', 'monthly_high_perf_days')


class SettingsValidationError(ValueError):
    pass


def _default_settings():
    return {
        'team_name': getattr(settings, 'TEAM_NAME_DEFAULT', '我的超强团队'),
        'work_days': list(getattr(settings, 'TEAM_WORK_DAYS_DEFAULT', [1, 2, 3, 4, 5])),
        'achievement_rules': dict(getattr(settings, 'TEAM_ACHIEVEMENT_RULES_DEFAULT', {
            'daily_task_threshold': 8,
            'weekly_high_perf_days': 4,
            'monthly_high_perf_days': 20,
        })),
    }


def clean_work_days(value):
    """校验工作日列表：0-6 的整数，去重排序。允许为空（此时连签永远重置）。"""
    if not isinstance(value, (list, tuple)):
        raise SettingsValidationError("work_days 必须是列表 / work_days must be a list")
    days = set()
    for item in value:
        if isinstance(item, bool):
            raise SettingsValidationError(f"无效的工作日: {item}")
        try:
            day = int(item)
        except (TypeError, ValueError):
            raise SettingsValidationError(f"无效的工作日: {item}")
        if not 0 <= day <= 6:
            raise SettingsValidationError(f"工作日必须在 0-6 之间: {day}")
        days.add(day)
    return sorted(days)


def clean_achievement_rules(value, base=None):
    if not isinstance(value, dict):
        raise SettingsValidationError("achievement_rules 必须是对象 / achievement_rules must be an object")
    rules = dict(base or {})
    for key in RULE_FIELDS:
        if key not in value:
            continue
        raw = value[key]
        if isinstance(raw, bool):
            raise SettingsValidationError(f"{key} 必须是非负整数")
        try:
            number = int(raw)
        except (TypeError, ValueError):
            raise SettingsValidationError(f"{key} 必须是非负整数")
        if number < 0:
            raise SettingsValidationError(f"{key} 必须是非负整数")
        rules[key] = number
    return rules


def _parse_stored(rows):
    """Merge stored SystemSetting rows over defaults, dropping malformed values."""
    result = _default_settings()
    if rows.get(SETTING_TEAM_NAME):
        result['team_name'] = rows[SETTING_TEAM_NAME]

    if rows.get(SETTING_WORK_DAYS) is not None:
        try:
            result['work_days'] = clean_work_days(json.loads(rows[SETTING_WORK_DAYS]))
        except (ValueError, TypeError):
            logger.warning(f"Ignoring malformed work_days setting: {rows[SETTING_WORK_DAYS]!r}")

    if rows.get(SETTING_ACHIEVEMENT_RULES):
        try:
            result['achievement_rules'] = clean_achievement_rules(
                json.loads(rows[SETTING_ACHIEVEMENT_RULES]), base=result['achievement_rules']
            )
        except (ValueError, TypeError):
            logger.warning(f"Ignoring malformed achievement_rules setting: {rows[SETTING_ACHIEVEMENT_RULES]!r}")
    return result


def get_team_settings():
    """返回团队设置（团队名、工作日、成就规则），缓存 5 分钟。"""
    cached = cache.get(TEAM_SETTINGS_CACHE_KEY)
    if cached is not None:
        return cached

    keys = (SETTING_TEAM_NAME, SETTING_WORK_DAYS, SETTING_ACHIEVEMENT_RULES)
    rows = dict(SystemSetting.objects.filter(key__in=keys).values_list('key', 'value'))
    result = _parse_stored(rows)
    cache.set(TEAM_SETTINGS_CACHE_KEY, result, 300)
    return result


def invalidate_team_settings_cache():
    cache.delete(TEAM_SETTINGS_CACHE_KEY)


def update_team_settings(data, changed_by=None):
    """
    Validate and persist a partial team settings payload.
    Returns the full settings after the update.
    """
    current = get_team_settings()
    updates = {}

    if 'team_name' in data:
        team_name = clean_str(data.get('team_name'), 'team_name', SettingsValidationError)
        if not team_name:
            raise SettingsValidationError("团队名称不能为空 / Team name is required")
        if len(team_name) > 200:
            raise SettingsValidationError("团队名称过长 / Team name too long")
        updates[SETTING_TEAM_NAME] = team_name

    if 'work_days' in data:
        updates[SETTING_WORK_DAYS] = json.dumps(clean_work_days(data.get('work_days')))

    if 'achievement_rules' in data:
        rules = clean_achievement_rules(data.get('achievement_rules'), base=current['achievement_rules'])
        updates[SETTING_ACHIEVEMENT_RULES] = json.dumps(rules)

    with transaction.atomic():
        for key, value in updates.items():
            SystemSetting.objects.update_or_create(key=key, defaults={'value': value})

    invalidate_team_settings_cache()
    if updates:
        logger.info(f"Team settings updated ({', '.join(sorted(updates))}) by {changed_by}")
    return get_team_settings()


def get_schedule_config(team_settings=None):
    """Typed schedule for the streak evaluator."""
    data = team_settings or get_team_settings()
    rules = data['achievement_rules']
    return ScheduleConfig(
        work_days=frozenset(data['work_days']),
        achievement_rules=AchievementRules(
            daily_task_threshold=rules['daily_task_threshold'],
            weekly_high_perf_days=rules['weekly_high_perf_days'],
            monthly_high_perf_days=rules['monthly_high_perf_days'],
        ),
    )


def serialize_group(group):
    return {'id': group.id, 'name': group.name}


def list_groups():
    return [serialize_group(g) for g in TeamGroup.objects.all()]


def replace_groups(items, changed_by=None):
    """
    Replace the group list with ``items`` (``[{'id'?: int, 'name': str}]``).
    Items with an existing id are renamed, items without one are created and
    groups missing from the payload are deleted (members become ungrouped).
    """
    if not isinstance(items, list):
        raise SettingsValidationError("groups 必须是列表 / groups must be a list")

    cleaned = []
    for item in items:
        if not isinstance(item, dict):
            raise SettingsValidationError("无效的小组数据 / Invalid group entry")
        name = clean_str(item.get('name'), 'name', SettingsValidationError)
        if not name:
            raise SettingsValidationError("小组名称不能为空 / Group name is required")
        group_id = item.get('id')
        if group_id is not None:
            try:
                group_id = int(group_id)
            except (TypeError, ValueError):
                raise SettingsValidationError(f"无效的小组 ID: {group_id}")
        cleaned.append((group_id, name[:100]))

    with transaction.atomic():
        existing = {g.id: g for g in TeamGroup.objects.select_for_update()}
        keep_ids = set()
        for group_id, name in cleaned:
            group = existing.get(group_id)
            if group is None:
                group = TeamGroup.objects.create(name=name)
            elif group.name != name:
                group.name = name
                group.save(update_fields=['name'])
            keep_ids.add(group.id)
        removed = [gid for gid in existing if gid not in keep_ids]
        if removed:
            TeamGroup.objects.filter(id__in=removed).delete()

    logger.info(f"Groups replaced by {changed_by}: kept {len(keep_ids)}, removed {len(removed)}")
    return list_groups()


def ensure_default_groups():
    """首次初始化时创建默认小组；已有小组时不做改动。"""
    if TeamGroup.objects.exists():
        return []
    names = getattr(settings, 'TEAM_DEFAULT_GROUPS', [])
    return [TeamGroup.objects.create(name=name) for name in names]
