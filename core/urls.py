from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('api/register/', views.register_api, name='register_api'),
    path('api/login/', views.login_api, name='login_api'),
    path('api/logout/', views.logout_api, name='logout_api'),
    path('api/me/', views.me_api, name='me_api'),
    path('api/settings/', views.team_settings_api, name='team_settings_api'),
    path('api/groups/', views.groups_api, name='groups_api'),
    path('api/invite/', views.invite_member_api, name='invite_member_api'),
]
