from django.db import models
from django.contrib.auth.models import User

from core.constants import UserRole


class TeamGroup(models.Model):
    """团队小组，成员与日报按小组归类。"""
    name = models.CharField(max_length=100, verbose_name="小组名称")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        ordering = ['id']
        verbose_name = "小组"
        verbose_name_plural = "小组"

    def __str__(self):
        return self.name


class Profile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile', verbose_name="用户")
    role = models.CharField(max_length=10, choices=UserRole.choices, default=UserRole.USER, verbose_name="角色")
    group = models.ForeignKey(TeamGroup, null=True, blank=True, on_delete=models.SET_NULL, related_name='members', verbose_name="所属小组")
    streak = models.PositiveIntegerField(default=0, verbose_name="连续打卡天数")
    last_submit_date = models.DateField(null=True, blank=True, verbose_name="最近提交日期")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        verbose_name = "用户资料"
        verbose_name_plural = "用户资料"

    def __str__(self):
        return f"{self.user.username} - {self.get_role_display()}"

    @property
    def display_name(self):
        return self.user.get_full_name() or self.user.username

    @property
    def avatar(self):
        return self.display_name[:2]


class Achievement(models.Model):
    """已解锁的成就徽章，同一成员同一 code 只会出现一次。"""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='achievements', verbose_name="用户")
    code = models.CharField(max_length=50, verbose_name="成就标识")
    name = models.CharField(max_length=100, verbose_name="名称")
    icon = models.CharField(max_length=16, blank=True, verbose_name="图标")
    description = models.CharField(max_length=200, blank=True, verbose_name="描述")
    unlocked_at = models.DateTimeField(verbose_name="解锁时间")

    class Meta:
        ordering = ['unlocked_at', 'id']
        unique_together = ('user', 'code')
        verbose_name = "成就"
        verbose_name_plural = "成就"

    def __str__(self):
        return f"{self.user.username} - {self.name}"


class SystemSetting(models.Model):
    """简单的键值配置存储，保存团队名称、工作日与成就规则。"""
    key = models.CharField(max_length=100, unique=True, verbose_name="键")
    value = models.CharField(max_length=200, blank=True, verbose_name="值")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        ordering = ['key']
        verbose_name = "系统设置"
        verbose_name_plural = "系统设置"

    def __str__(self):
        return f"{self.key}={self.value}"
