from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Label(models.Model):
    """Label orders placed with a label maker for a product"""
    STATUS_ORDERED = 'ordered'
    STATUS_ARRIVED = 'arrived'

    ORDER_STATUS_CHOICES = [
        (STATUS_ORDERED, 'Sipariş Verildi'),
        (STATUS_ARRIVED, 'Teslim Alındı'),
    ]

    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='labels')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='labels')
    product = models.ForeignKey('catalog.Product', on_delete=models.PROTECT, related_name='labels')
    order_status = models.CharField(max_length=20, choices=ORDER_STATUS_CHOICES, default=STATUS_ORDERED, db_index=True)
    received_quantity = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    brand = models.CharField(max_length=200, blank=True, null=True)
    count_quantity = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    attached_model = models.CharField(max_length=200, blank=True, null=True)
    model_owner = models.CharField(max_length=200, blank=True, null=True)
    order_date = models.DateField(null=True, blank=True)
    delivery_date = models.DateField(null=True, blank=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.product} - {self.get_order_status_display()}"

    class Meta:
        db_table = 'labels'
        ordering = ['-created_at']
