from django.apps import AppConfig


class WorkLogsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'work_logs'
    verbose_name = '日报'
