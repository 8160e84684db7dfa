from django.urls import path
from . import daily_report_views
from . import statistics_views
from . import summary_views

app_name = 'reports'

urlpatterns = [
    # Daily reports / team wall
    path('api/reports/', daily_report_views.reports_api, name='reports_api'),
    path('api/reports/analyze/', daily_report_views.report_analyze_api, name='report_analyze_api'),
    path('api/reports/<int:pk>/', daily_report_views.report_detail_api, name='report_detail_api'),
    path('api/reports/<int:pk>/like/', daily_report_views.report_like_api, name='report_like_api'),

    # Dashboard
    path('api/dashboard/stats/', statistics_views.dashboard_stats_api, name='dashboard_stats_api'),
    path('api/dashboard/users/', statistics_views.dashboard_users_api, name='dashboard_users_api'),
    path('api/dashboard/calendar/', statistics_views.activity_calendar_api, name='activity_calendar_api'),

    # AI summary
    path('api/summary/', summary_views.summary_api, name='summary_api'),
    path('api/summary/generate/', summary_views.summary_generate_api, name='summary_generate_api'),
]
