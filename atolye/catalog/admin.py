from django.contrib import admin
from .models import Category, Product, StockAdjustment


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'company', 'created_at']
    list_filter = ['company']
    search_fields = ['name', 'description']
    ordering = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'model', 'company', 'category', 'stock_quantity', 'min_stock_level', 'fabric_status', 'updated_at']
    list_filter = ['company', 'fabric_status', 'category']
    search_fields = ['name', 'model', 'sku', 'fabric_number']
    ordering = ['name']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(StockAdjustment)
class StockAdjustmentAdmin(admin.ModelAdmin):
    list_display = ['product', 'adjustment_type', 'quantity', 'resulting_quantity', 'reason', 'created_by', 'created_at']
    list_filter = ['adjustment_type', 'reason', 'created_at']
    search_fields = ['product__name', 'notes']
    ordering = ['-created_at']
    readonly_fields = ['created_at']
