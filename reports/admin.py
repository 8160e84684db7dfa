from django.contrib import admin
from .models import TeamSummary

@admin.register(TeamSummary)
class TeamSummaryAdmin(admin.ModelAdmin):
    list_display = ('date', 'report_count', 'created_by', 'created_at')
    search_fields = ('summary', 'risks')
