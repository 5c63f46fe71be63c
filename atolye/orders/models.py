from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Order(models.Model):
    """Customer orders"""
    STATUS_PENDING = 'pending'
    STATUS_PROCESSING = 'processing'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Bekliyor'),
        (STATUS_PROCESSING, 'İşleniyor'),
        (STATUS_COMPLETED, 'Tamamlandı'),
        (STATUS_CANCELLED, 'İptal'),
    ]

    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='orders')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='orders')
    order_number = models.CharField(max_length=100)
    customer_name = models.CharField(max_length=200)
    customer_email = models.EmailField(blank=True, null=True)
    customer_phone = models.CharField(max_length=30, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)])
    total_delivery_quantity = models.IntegerField(null=True, blank=True, validators=[MinValueValidator(0)])
    order_date = models.DateField(default=timezone.localdate)
    delivery_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.order_number

    def get_items_total(self):
        """Sum of item totals"""
        total = Decimal('0.00')
        for item in self.items.all():
            total += item.total_price
        return total

    class Meta:
        db_table = 'orders'
        ordering = ['-order_date', '-created_at']
        constraints = [
            models.UniqueConstraint(fields=['company', 'order_number'], name='uniq_order_number_per_company'),
        ]


class OrderItem(models.Model):
    """Products in an order"""
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('catalog.Product', on_delete=models.PROTECT, related_name='order_items')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='order_items')
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    total_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    created_at = models.DateTimeField(auto_now_add=True)

    def get_line_total(self):
        return Decimal(self.quantity) * self.unit_price

    def save(self, *args, **kwargs):
        self.total_price = self.get_line_total()
        super().save(*args, **kwargs)

    class Meta:
        db_table = 'order_items'
