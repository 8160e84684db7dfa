import calendar
from datetime import date as date_cls, timedelta

from django.core.cache import cache
from django.db.models import Sum
from django.utils import timezone

from core.constants import UserRole
from core.models import Profile
from core.services.team_settings import get_team_settings
from reports.services.daily import serialize_report
from reports.services.streaks import weekday_number
from work_logs.models import DailyReport

STATS_CACHE_PREFIX = "dashboard_stats_v1"
RECENT_ACTIVITY_SIZE = 5
RISK_PROBLEM_MIN_LENGTH = 5
WEEKLY_WINDOW_DAYS = 7

# 热力图强度：与成就阈值一致的高产线
INTENSITY_HIGH = 8
INTENSITY_MEDIUM = 4


def stats_cache_key(today):
    return f"{STATS_CACHE_PREFIX}_{today}"


def weekly_submission_rate(today, member_ids, work_days):
    """
    近 7 天（含今天）工作日的提交率：实际提交人天 / 应提交人天，取整百分比。
    """
    window = [today - timedelta(days=i) for i in range(WEEKLY_WINDOW_DAYS)]
    expected_days = [d for d in window if weekday_number(d) in work_days]
    expected = len(expected_days) * len(member_ids)
    if not expected:
        return 0
    actual = DailyReport.objects.filter(
        user_id__in=member_ids, date__in=expected_days
    ).values('user_id', 'date').distinct().count()
    return round(actual / expected * 100)


def get_dashboard_stats(today=None):
    today = today or timezone.localdate()
    cache_key = stats_cache_key(today)
    cached = cache.get(cache_key)
    if cached:
        return cached

    member_ids = list(Profile.objects.filter(role=UserRole.USER).values_list('user_id', flat=True))
    total_members = len(member_ids)
    submitted_count = DailyReport.objects.filter(
        date=today, user_id__in=member_ids
    ).values('user_id').distinct().count()

    recent = list(DailyReport.objects.select_related('user').order_by('-created_at', '-id')[:RECENT_ACTIVITY_SIZE])
    work_days = set(get_team_settings()['work_days'])

    result = {
        'date': today.isoformat(),
        'submitted_count': submitted_count,
        'total_members': total_members,
        'pending_count': max(total_members - submitted_count, 0),
        'weekly_submission_rate': weekly_submission_rate(today, member_ids, work_days),
        'risk_count': sum(1 for r in recent if len(r.problems or '') > RISK_PROBLEM_MIN_LENGTH),
        'recent_activity': [serialize_report(r) for r in recent],
    }
    cache.set(cache_key, result, 300)
    return result


def invalidate_dashboard_stats(today=None):
    today = today or timezone.localdate()
    cache.delete(stats_cache_key(today))


def intensity_level(task_count):
    if task_count is None:
        return 'none'
    if task_count >= INTENSITY_HIGH:
        return 'high'
    if task_count >= INTENSITY_MEDIUM:
        return 'medium'
    return 'low'


def get_activity_calendar(user_id, year, month):
    """
    成员某月每日工作量：同一天多份日报累加事项数。
    Returns {'year', 'month', 'first_weekday', 'days': [...]}, first_weekday uses Sunday=0.
    """
    days_in_month = calendar.monthrange(year, month)[1]
    start = date_cls(year, month, 1)
    end = date_cls(year, month, days_in_month)

    totals = dict(
        DailyReport.objects.filter(user_id=user_id, date__gte=start, date__lte=end)
        .values('date').annotate(total=Sum('task_count')).values_list('date', 'total')
    )

    days = []
    for day_num in range(1, days_in_month + 1):
        day = date_cls(year, month, day_num)
        task_count = totals.get(day)
        days.append({
            'date': day.isoformat(),
            'day': day_num,
            'submitted': task_count is not None,
            'task_count': task_count or 0,
            'level': intensity_level(task_count),
        })
    return {
        'user_id': user_id,
        'year': year,
        'month': month,
        'first_weekday': weekday_number(start),
        'total_tasks': sum(d['task_count'] for d in days),
        'submitted_days': sum(1 for d in days if d['submitted']),
        'days': days,
    }
