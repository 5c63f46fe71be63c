"""
URL configuration for the atolye project.

Every app mounts its endpoints under /api/v1/.
"""
from django.contrib import admin
from django.urls import path, include

admin.site.site_header = "Atölye Üretim Takip Yönetim Paneli"
admin.site.site_title = "Atölye Yönetim"
admin.site.index_title = "Üretim Takip Yönetimine Hoş Geldiniz"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('atolye.core.urls')),
    path('api/v1/', include('atolye.companies.urls')),
    path('api/v1/', include('atolye.catalog.urls')),
    path('api/v1/', include('atolye.orders.urls')),
    path('api/v1/', include('atolye.production.urls')),
    path('api/v1/', include('atolye.labels.urls')),
    path('api/v1/', include('atolye.reports.urls')),
]
