from django.contrib import admin
from .models import (
    Achievement,
    Profile,
    SystemSetting,
    TeamGroup,
)

@admin.register(TeamGroup)
class TeamGroupAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)

@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'group', 'streak', 'last_submit_date')
    list_filter = ('role', 'group')
    search_fields = ('user__username', 'user__first_name')

@admin.register(Achievement)
class AchievementAdmin(admin.ModelAdmin):
    list_display = ('user', 'code', 'name', 'unlocked_at')
    list_filter = ('code',)
    search_fields = ('user__username', 'name')

@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    list_display = ('key', 'value', 'updated_at')
    search_fields = ('key', 'value')
