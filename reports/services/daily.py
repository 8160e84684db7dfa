import logging
from dataclasses import dataclass

from django.db import transaction
from django.db.models import Count, Exists, OuterRef
from django.utils import timezone

from core.models import Profile
from core.services.members import load_user_record, save_user_record, serialize_achievement
from core.services.team_settings import get_schedule_config
from core.utils import clean_str
from reports.services.streaks import ReportRecord, evaluate
from work_logs.models import DailyReport

logger = logging.getLogger(__name__)

MAX_TAGS = 10


class ReportValidationError(ValueError):
    pass


@dataclass
class SubmissionResult:
    report: DailyReport
    streak: int
    unlocked: list


def _clean_tags(tags):
    if tags in (None, ''):
        return []
    if isinstance(tags, str):
        tags = tags.split(',')
    if not isinstance(tags, (list, tuple)):
        raise ReportValidationError("标签格式不正确 / Invalid tags")
    cleaned = []
    for tag in tags:
        text = str(tag).strip()[:50]
        if text and text not in cleaned:
            cleaned.append(text)
    return cleaned[:MAX_TAGS]


def submit_daily_report(user, date=None, status='', today_work='', problems='', tomorrow_plan='', tags=None):
    """
    Store a new daily report and apply it to the member's streak and achievements.

    Report append, profile lock, evaluation and profile save share one
    transaction so concurrent submissions by the same member are serialized.
    The report date may not lie in the future nor before the member's last
    submission date.
    """
    today_work = clean_str(today_work, 'today_work', ReportValidationError)
    status = clean_str(status, 'status', ReportValidationError)
    problems = clean_str(problems, 'problems', ReportValidationError)
    tomorrow_plan = clean_str(tomorrow_plan, 'tomorrow_plan', ReportValidationError)
    if not today_work:
        raise ReportValidationError("请至少填写一项今日工作内容 / At least one work item is required")
    today = timezone.localdate()
    date = date or today
    if date > today:
        raise ReportValidationError("不能提交未来日期的日报 / Report date cannot be in the future")
    tags = _clean_tags(tags)

    try:
        profile = user.profile
    except Profile.DoesNotExist:
        raise ReportValidationError("用户不存在 / User not found")

    with transaction.atomic():
        # lock the member row first; the evaluator below reads its streak state
        record = load_user_record(user.id, for_update=True)
        if record.last_submit_date is not None and date < record.last_submit_date:
            raise ReportValidationError(
                f"日报日期早于最近一次提交（{record.last_submit_date}） / "
                f"Report date is before the last submission ({record.last_submit_date})"
            )
        report = DailyReport.objects.create(
            user=user,
            group_id=profile.group_id,
            date=date,
            status=status[:50],
            today_work=today_work,
            problems=problems,
            tomorrow_plan=tomorrow_plan,
            task_count=DailyReport.count_tasks(today_work),
            tags=tags,
        )
        schedule = get_schedule_config()
        updated = evaluate(record, ReportRecord(date=report.date, task_count=report.task_count), schedule)
        unlocked = save_user_record(updated)

    logger.info(
        f"Daily report {report.id} submitted by {user.username} for {report.date}: "
        f"{report.task_count} items, streak {record.streak} -> {updated.streak}"
    )
    for achievement in unlocked:
        logger.info(f"Achievement {achievement.id} unlocked for {user.username}")
    return SubmissionResult(report=report, streak=updated.streak, unlocked=list(unlocked))


def filtered_reports(date=None, user_id=None, group_id=None, q=None, viewer=None):
    """团队墙查询：按日期 / 成员 / 小组 / 关键词（姓名或标签）筛选，最新在前。"""
    qs = DailyReport.objects.select_related('user', 'user__profile').annotate(
        like_count=Count('likes', distinct=True)
    ).order_by('-created_at', '-id')
    if viewer is not None and viewer.is_authenticated:
        qs = qs.annotate(viewer_liked=Exists(
            DailyReport.likes.through.objects.filter(dailyreport_id=OuterRef('pk'), user_id=viewer.pk)
        ))
    if date:
        qs = qs.filter(date=date)
    if user_id:
        qs = qs.filter(user_id=user_id)
    if group_id:
        qs = qs.filter(group_id=group_id)

    reports = list(qs)
    q = (q or '').strip().lower()
    if q:
        # tags live in a JSON list; filter in Python to stay backend-neutral
        reports = [
            r for r in reports
            if q in (r.user.get_full_name() or r.user.username).lower()
            or any(q in str(t).lower() for t in (r.tags or []))
        ]
    return reports


def toggle_like(report, user):
    """点赞 / 取消点赞，返回 (是否已点赞, 点赞总数)。"""
    with transaction.atomic():
        if report.likes.filter(pk=user.pk).exists():
            report.likes.remove(user)
            liked = False
        else:
            report.likes.add(user)
            liked = True
    return liked, report.likes.count()


def serialize_report(report, viewer=None):
    name = report.user.get_full_name() or report.user.username
    like_count = getattr(report, 'like_count', None)
    if like_count is None:
        like_count = report.likes.count()
    data = {
        'id': report.id,
        'user_id': report.user_id,
        'user_name': name,
        'user_avatar': name[:2],
        'group_id': report.group_id,
        'date': report.date.isoformat(),
        'status': report.status,
        'today_work': report.today_work,
        'problems': report.problems,
        'tomorrow_plan': report.tomorrow_plan,
        'task_count': report.task_count,
        'tags': report.tags or [],
        'like_count': like_count,
        'created_at': report.created_at.isoformat(),
    }
    if viewer is not None and viewer.is_authenticated:
        liked = getattr(report, 'viewer_liked', None)
        if liked is None:
            liked = report.likes.filter(pk=viewer.pk).exists()
        data['liked'] = liked
    return data


def serialize_submission(result: SubmissionResult):
    return {
        'report': serialize_report(result.report),
        'streak': result.streak,
        'unlocked_achievements': [serialize_achievement(a) for a in result.unlocked],
    }
