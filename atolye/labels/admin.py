from django.contrib import admin
from .models import Label


@admin.register(Label)
class LabelAdmin(admin.ModelAdmin):
    list_display = ['product', 'company', 'order_status', 'brand', 'count_quantity', 'received_quantity', 'order_date', 'delivery_date']
    list_filter = ['order_status', 'company']
    search_fields = ['product__name', 'brand', 'attached_model', 'model_owner']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']
