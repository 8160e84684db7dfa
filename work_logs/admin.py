from django.contrib import admin
from .models import DailyReport

@admin.register(DailyReport)
class DailyReportAdmin(admin.ModelAdmin):
    list_display = ('user', 'date', 'group', 'status', 'task_count', 'created_at')
    list_filter = ('date', 'group')
    search_fields = ('user__username', 'today_work', 'problems')
