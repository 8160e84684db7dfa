from django.contrib.auth.models import User
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from core.constants import UserRole
from core.models import Profile, SystemSetting
from core.services.team_settings import invalidate_team_settings_cache


@receiver(post_save, sender=User)
def ensure_profile(sender, instance, created, **kwargs):
    """新建用户时自动创建资料；超级用户/staff 默认为管理员。"""
    if not created:
        return
    role = UserRole.ADMIN if (instance.is_superuser or instance.is_staff) else UserRole.USER
    Profile.objects.get_or_create(user=instance, defaults={'role': role})


@receiver(post_save, sender=SystemSetting)
def clear_cache_on_setting_change(sender, **kwargs):
    invalidate_team_settings_cache()


@receiver(post_delete, sender=SystemSetting)
def clear_cache_on_setting_delete(sender, **kwargs):
    invalidate_team_settings_cache()
