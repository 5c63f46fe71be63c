from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class ProductionRecord(models.Model):
    """Daily production output of a product"""
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='production_records')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='production_records')
    product = models.ForeignKey('catalog.Product', on_delete=models.PROTECT, related_name='production_records')
    quantity_produced = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    defective_quantity = models.PositiveIntegerField(null=True, blank=True)
    production_date = models.DateField(default=timezone.localdate, db_index=True)
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.product} - {self.quantity_produced} ({self.production_date})"

    @property
    def net_quantity(self):
        return self.quantity_produced - (self.defective_quantity or 0)

    class Meta:
        db_table = 'production_records'
        ordering = ['-production_date', '-created_at']
