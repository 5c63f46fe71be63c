import django_filters
from django.db.models import Q
from .models import Product, FABRIC_STATUS_CHOICES


class ProductFilter(django_filters.FilterSet):
    """Filter for Product model using django-filter"""

    # Searches name, model, SKU and fabric number
    search = django_filters.CharFilter(method='filter_search', label='Search')

    category = django_filters.NumberFilter(field_name='category_id', lookup_expr='exact')
    fabric_status = django_filters.ChoiceFilter(choices=FABRIC_STATUS_CHOICES)
    critical = django_filters.BooleanFilter(method='filter_critical', label='Stock alert')

    class Meta:
        model = Product
        fields = ['search', 'category', 'fabric_status', 'critical']

    def filter_search(self, queryset, name, value):
        search = (value or '').strip()
        if not search:
            return queryset
        return queryset.filter(
            Q(name__icontains=search) |
            Q(model__icontains=search) |
            Q(sku__icontains=search) |
            Q(fabric_number__icontains=search)
        )

    def filter_critical(self, queryset, name, value):
        if value is None:
            return queryset
        alerts = queryset.stock_alerts()
        if value:
            return alerts
        return queryset.exclude(pk__in=alerts.values('pk'))
