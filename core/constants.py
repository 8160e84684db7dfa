from django.db import models


class UserRole(models.TextChoices):
    ADMIN = 'admin', '管理员 / Admin'
    USER = 'user', '成员 / Member'


# SystemSetting keys
SETTING_TEAM_NAME = 'team_name'
SETTING_WORK_DAYS = 'work_days'
SETTING_ACHIEVEMENT_RULES = 'achievement_rules'

WEEKDAY_LABELS = ['周日', '周一', '周二', '周三', '周四', '周五', '周六']
