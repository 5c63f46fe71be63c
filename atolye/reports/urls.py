from django.urls import path
from .views import (
    dashboard_stats, dashboard_summary,
    production_summary, orders_summary, inventory_summary,
)

urlpatterns = [
    path('dashboard/stats/', dashboard_stats, name='dashboard-stats'),
    path('dashboard/summary/', dashboard_summary, name='dashboard-summary'),
    path('reports/production-summary/', production_summary, name='report-production-summary'),
    path('reports/orders-summary/', orders_summary, name='report-orders-summary'),
    path('reports/inventory-summary/', inventory_summary, name='report-inventory-summary'),
]
