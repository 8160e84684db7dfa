import logging

from reports.models import TeamSummary
from reports.services import ai
from work_logs.models import DailyReport

logger = logging.getLogger(__name__)


class NoReportsError(ValueError):
    pass


def get_summary(date):
    return TeamSummary.objects.filter(date=date).first()


def generate_summary(date, created_by=None):
    """
    Build the AI summary for ``date`` and store it, replacing any earlier
    summary of the same day. Raises NoReportsError when nobody reported.
    """
    reports = list(DailyReport.objects.filter(date=date).select_related('user').order_by('created_at', 'id'))
    if not reports:
        raise NoReportsError("该日期暂无日报提交，无法生成总结。/ No reports for this date.")

    data = ai.generate_team_summary(reports, date.isoformat())
    summary, created = TeamSummary.objects.update_or_create(
        date=date,
        defaults={
            'summary': data['summary'],
            'risks': data['risks'],
            'recommendations': data['recommendations'],
            'keywords': data['keywords'],
            'report_count': len(reports),
            'created_by': created_by,
        },
    )
    logger.info(f"Team summary for {date} {'created' if created else 'regenerated'} from {len(reports)} reports")
    return summary


def serialize_summary(summary):
    if summary is None:
        return None
    return {
        'id': summary.id,
        'date': summary.date.isoformat(),
        'summary': summary.summary,
        'risks': summary.risks,
        'recommendations': summary.recommendations,
        'keywords': summary.keywords or [],
        'report_count': summary.report_count,
        'created_by': summary.created_by_id,
        'created_at': summary.created_at.isoformat(),
    }
