from django.db import models
from django.contrib.auth.models import User

from core.models import TeamGroup


class DailyReport(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='daily_reports', verbose_name="用户")
    group = models.ForeignKey(TeamGroup, null=True, blank=True, on_delete=models.SET_NULL, related_name='reports', verbose_name="提交时所属小组")
    date = models.DateField(verbose_name="日期")
    status = models.CharField(max_length=50, blank=True, verbose_name="今日状态")

    today_work = models.TextField(verbose_name="今日工作")
    problems = models.TextField(blank=True, verbose_name="遇到问题")
    tomorrow_plan = models.TextField(blank=True, verbose_name="明日计划")
    task_count = models.PositiveIntegerField(default=0, verbose_name="完成事项数")
    tags = models.JSONField(default=list, blank=True, verbose_name="标签")
    likes = models.ManyToManyField(User, blank=True, related_name='liked_reports', verbose_name="点赞")

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'date'], name='report_user_date_idx'),
            models.Index(fields=['date'], name='report_date_idx'),
            models.Index(fields=['group', 'date'], name='report_group_date_idx'),
        ]
        verbose_name = "日报"
        verbose_name_plural = "日报"

    def __str__(self):
        return f"{self.user.username} - {self.date}"

    @staticmethod
    def count_tasks(text):
        """每个非空行计为一项工作。"""
        return len([line for line in (text or '').splitlines() if line.strip()])
