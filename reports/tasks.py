import logging

from celery import shared_task
from django.utils import timezone
from django.utils.dateparse import parse_date

from reports.services.summary import NoReportsError, generate_summary

logger = logging.getLogger(__name__)


@shared_task
def generate_team_summary_task(date_str=None):
    """
    Async wrapper for the daily team summary. Defaults to today.
    Returns the summary id, or None when the day has no reports.
    """
    target = parse_date(date_str or '') or timezone.localdate()
    try:
        summary = generate_summary(target)
    except NoReportsError:
        logger.info(f"No reports on {target}, summary skipped")
        return None
    return summary.id
