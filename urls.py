from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('accounts/', include('core.urls')),
    path('reports/', include('reports.urls')),
    path('', RedirectView.as_view(pattern_name='core:me_api', permanent=False)),
]
