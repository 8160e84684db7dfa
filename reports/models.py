from django.db import models
from django.contrib.auth.models import User


class TeamSummary(models.Model):
    """AI 生成的团队日报总结，每个日期仅保留最新一份。"""
    date = models.DateField(unique=True, verbose_name="日期")
    summary = models.TextField(blank=True, verbose_name="团队总结")
    risks = models.TextField(blank=True, verbose_name="主要风险")
    recommendations = models.TextField(blank=True, verbose_name="改进建议")
    keywords = models.JSONField(default=list, blank=True, verbose_name="关键词")
    report_count = models.PositiveIntegerField(default=0, verbose_name="日报数量")
    created_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='team_summaries', verbose_name="生成人")
    created_at = models.DateTimeField(auto_now=True, verbose_name="生成时间")

    class Meta:
        ordering = ['-date']
        verbose_name = "团队总结"
        verbose_name_plural = "团队总结"

    def __str__(self):
        return f"Summary {self.date}"
