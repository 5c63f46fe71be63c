from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q

FABRIC_ORDERED = 'kumaş sipariş edildi'
FABRIC_ARRIVED = 'kumaş geldi'
FABRIC_CUTTING = 'kumaş kesime girdi'
FABRIC_READY = 'kumaş hazır'

# Order matters: the dashboard lists the steps in production sequence
FABRIC_STATUS_CHOICES = [
    (FABRIC_ORDERED, 'Kumaş Sipariş Edildi'),
    (FABRIC_ARRIVED, 'Kumaş Geldi'),
    (FABRIC_CUTTING, 'Kumaş Kesime Girdi'),
    (FABRIC_READY, 'Kumaş Hazır'),
]


class Category(models.Model):
    """Product categories"""
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='categories')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='categories')
    name = models.CharField(max_length=200, db_index=True)
    description = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'categories'
        verbose_name_plural = 'categories'
        ordering = ['name']


class ProductQuerySet(models.QuerySet):
    def stock_alerts(self):
        """Products at or below their minimum level, or out of stock when no minimum is set"""
        below_minimum = Q(min_stock_level__gt=0) & (
            Q(stock_quantity__lte=F('min_stock_level')) | Q(stock_quantity__isnull=True)
        )
        no_minimum = (Q(min_stock_level__isnull=True) | Q(min_stock_level=0)) & (
            Q(stock_quantity=0) | Q(stock_quantity__isnull=True)
        )
        return self.filter(below_minimum | no_minimum)


class Product(models.Model):
    """Product / model master"""
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='products')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='products')
    name = models.CharField(max_length=200, db_index=True)
    model = models.CharField(max_length=200, blank=True, null=True)
    sku = models.CharField(max_length=100, blank=True, null=True, db_index=True)
    description = models.TextField(blank=True, null=True)
    color = models.CharField(max_length=100, blank=True, null=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)])
    cost = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)])
    stock_quantity = models.IntegerField(null=True, blank=True, default=0, validators=[MinValueValidator(0)])
    min_stock_level = models.IntegerField(null=True, blank=True, validators=[MinValueValidator(0)])
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name='products')
    fabric_number = models.CharField(max_length=100, blank=True, null=True)
    fabric_status = models.CharField(max_length=50, choices=FABRIC_STATUS_CHOICES, blank=True, null=True, db_index=True)
    order_number = models.CharField(max_length=100, blank=True, null=True)
    ordering_brand = models.CharField(max_length=200, blank=True, null=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        return f"{self.name} - {self.model}" if self.model else self.name

    class Meta:
        db_table = 'products'
        ordering = ['name']
        indexes = [
            models.Index(fields=['company', 'name'], name='idx_product_company_name'),
        ]


class StockAdjustment(models.Model):
    """Stock adjustments (in/out) applied to a product's stock quantity"""
    ADJUSTMENT_TYPE_CHOICES = [
        ('in', 'Stok Girişi'),
        ('out', 'Stok Çıkışı'),
    ]

    REASON_CHOICES = [
        ('production', 'Üretim'),
        ('sale', 'Satış'),
        ('damaged', 'Hasarlı'),
        ('found', 'Bulundu'),
        ('correction', 'Düzeltme'),
        ('other', 'Diğer'),
    ]

    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='stock_adjustments')
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='adjustments')
    adjustment_type = models.CharField(max_length=10, choices=ADJUSTMENT_TYPE_CHOICES)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    reason = models.CharField(max_length=50, choices=REASON_CHOICES, default='correction')
    notes = models.TextField(blank=True)
    resulting_quantity = models.IntegerField(default=0)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='stock_adjustments')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'stock_adjustments'
        ordering = ['-created_at']
