from django.urls import path
from .views import (
    category_list_create, category_detail,
    product_list_create, product_detail,
    inventory_list, product_stock_adjustments,
)

urlpatterns = [
    # Category endpoints
    path('categories/', category_list_create, name='category-list-create'),
    path('categories/<int:pk>/', category_detail, name='category-detail'),

    # Product endpoints
    path('products/', product_list_create, name='product-list-create'),
    path('products/<int:pk>/', product_detail, name='product-detail'),
    path('products/<int:pk>/stock-adjustments/', product_stock_adjustments, name='product-stock-adjustments'),

    # Inventory endpoints
    path('inventory/', inventory_list, name='inventory-list'),
]
