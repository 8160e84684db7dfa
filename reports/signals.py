from django.db.models.signals import post_save, post_delete, m2m_changed
from django.dispatch import receiver

from core.models import Profile
from reports.services.stats import invalidate_dashboard_stats
from work_logs.models import DailyReport


@receiver(post_save, sender=DailyReport)
def clear_cache_on_report_change(sender, **kwargs):
    invalidate_dashboard_stats()


@receiver(post_delete, sender=DailyReport)
def clear_cache_on_report_delete(sender, **kwargs):
    invalidate_dashboard_stats()


@receiver(m2m_changed, sender=DailyReport.likes.through)
def clear_cache_on_report_like(sender, **kwargs):
    invalidate_dashboard_stats()


@receiver(post_save, sender=Profile)
def clear_cache_on_member_change(sender, **kwargs):
    # member counts depend on profile roles
    invalidate_dashboard_stats()
