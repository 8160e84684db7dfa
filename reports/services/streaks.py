"""
Streak & achievement evaluation for daily report submissions.

Pure functions over typed records: callers load the member, the report and
the team schedule from storage, call ``evaluate`` and persist the result.
Nothing in this module touches the database or reads settings.
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, timezone
from typing import FrozenSet, Optional, Tuple

# Fixed bound on the backward search for the previous working day.
STREAK_LOOKBACK_DAYS = 14

STREAK_MILESTONES = (
    (5, 'streak_5', '本周全勤', '🔥', '连续打卡 5 天'),
    (20, 'streak_20', '月度模范', '🏆', '连续打卡 20 天'),
)

DAILY_HERO = 'daily_hero'


@dataclass(frozen=True)
class AchievementRecord:
    id: str
    name: str
    icon: str
    description: str
    unlocked_at: datetime


@dataclass(frozen=True)
class AchievementRules:
    daily_task_threshold: int = 8
    # Stored and exposed in team settings; not evaluated below.
    weekly_high_perf_days: int = 4
    monthly_high_perf_days: int = 20


@dataclass(frozen=True)
class ScheduleConfig:
    work_days: FrozenSet[int] = frozenset({1, 2, 3, 4, 5})
    achievement_rules: AchievementRules = field(default_factory=AchievementRules)


@dataclass(frozen=True)
class ReportRecord:
    date: date
    task_count: int = 0


@dataclass(frozen=True)
class UserRecord:
    user_id: Optional[int] = None
    streak: int = 0
    last_submit_date: Optional[date] = None
    achievements: Tuple[AchievementRecord, ...] = ()

    def has_achievement(self, achievement_id: str) -> bool:
        return any(a.id == achievement_id for a in self.achievements)


def weekday_number(day: date) -> int:
    """Weekday with Sunday=0 ... Saturday=6."""
    return day.isoweekday() % 7


def previous_work_day(day: date, work_days) -> Optional[date]:
    """
    Most recent working day strictly before ``day``, looking back at most
    STREAK_LOOKBACK_DAYS calendar days. None when nothing qualifies.
    """
    for offset in range(1, STREAK_LOOKBACK_DAYS + 1):
        candidate = day - timedelta(days=offset)
        if weekday_number(candidate) in work_days:
            return candidate
    return None


def next_streak(user: UserRecord, report_date: date, work_days) -> Tuple[int, Optional[date]]:
    """Return (streak, last_submit_date) after a submission on ``report_date``."""
    if user.last_submit_date == report_date:
        return user.streak, user.last_submit_date

    if user.last_submit_date is not None and previous_work_day(report_date, work_days) == user.last_submit_date:
        return user.streak + 1, report_date
    return 1, report_date


def _unlock(achievements, achievement_id, name, icon, description, now):
    if any(a.id == achievement_id for a in achievements):
        return achievements
    return achievements + (AchievementRecord(achievement_id, name, icon, description, now),)


def evaluate(user: UserRecord, report: ReportRecord, schedule: ScheduleConfig,
             now: Optional[datetime] = None) -> UserRecord:
    """
    Apply one report submission to a member record.

    The streak continues when the previous working day before the report
    date is exactly the member's last submission date, and restarts at 1
    otherwise. A second report on the same date leaves the streak alone.
    Achievements are checked against the updated streak and the report's
    task count; unlocked ones are never duplicated or removed.
    """
    now = now or datetime.now(timezone.utc)
    streak, last_submit_date = next_streak(user, report.date, schedule.work_days)

    achievements = tuple(user.achievements)
    threshold = schedule.achievement_rules.daily_task_threshold
    if report.task_count >= threshold:
        achievements = _unlock(
            achievements, DAILY_HERO, '卷王之王', '🚀',
            f'单日完成超过 {threshold} 项工作', now,
        )
    for target, achievement_id, name, icon, description in STREAK_MILESTONES:
        if streak >= target:
            achievements = _unlock(achievements, achievement_id, name, icon, description, now)

    return replace(
        user,
        streak=streak,
        last_submit_date=last_submit_date,
        achievements=achievements,
    )
