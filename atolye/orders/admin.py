from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['total_price']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_number', 'customer_name', 'company', 'status', 'total_amount', 'order_date', 'delivery_date']
    list_filter = ['status', 'company', 'order_date']
    search_fields = ['order_number', 'customer_name', 'customer_email']
    ordering = ['-order_date', '-created_at']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [OrderItemInline]
