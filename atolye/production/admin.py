from django.contrib import admin
from .models import ProductionRecord


@admin.register(ProductionRecord)
class ProductionRecordAdmin(admin.ModelAdmin):
    list_display = ['product', 'company', 'quantity_produced', 'defective_quantity', 'production_date', 'created_by']
    list_filter = ['company', 'production_date']
    search_fields = ['product__name', 'product__model', 'notes']
    ordering = ['-production_date', '-created_at']
    readonly_fields = ['created_at']
