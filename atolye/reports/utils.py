"""
Dashboard computations, cached per company by the reports views
"""
from django.db.models import Count, Value
from django.db.models.functions import Coalesce

from atolye.catalog.models import Product, FABRIC_STATUS_CHOICES
from atolye.catalog.utils import get_stock_level
from atolye.orders.models import Order

CRITICAL_STOCK_LIMIT = 5


def build_dashboard_stats(company):
    """Headline counters of the dashboard cards"""
    orders = Order.objects.filter(company=company)
    return {
        'total_orders': orders.count(),
        # Everything that is not finished yet, cancelled orders included
        'active_production': orders.exclude(status=Order.STATUS_COMPLETED).count(),
        'stock_alerts': Product.objects.filter(company=company).stock_alerts().count(),
        'completed_orders': orders.filter(status=Order.STATUS_COMPLETED).count(),
    }


def build_fabric_statuses(company):
    counts = dict(
        Product.objects.filter(company=company, fabric_status__isnull=False)
        .order_by()
        .values_list('fabric_status')
        .annotate(count=Count('id'))
    )
    return [
        {'step': label, 'status': status, 'count': counts.get(status, 0)}
        for status, label in FABRIC_STATUS_CHOICES
    ]


def build_critical_stocks(company, limit=CRITICAL_STOCK_LIMIT):
    products = (
        Product.objects.filter(company=company)
        .stock_alerts()
        .annotate(level=Coalesce('stock_quantity', Value(0)))
        .order_by('level', 'name')[:limit]
    )
    return [
        {
            'product_id': product.id,
            'item': product.display_name,
            'level': product.stock_quantity or 0,
            'minimum': product.min_stock_level or 0,
            'status': get_stock_level(product.stock_quantity, product.min_stock_level),
        }
        for product in products
    ]


def build_dashboard_summary(company):
    """Fabric status board and the most critical stocks"""
    return {
        'fabric_statuses': build_fabric_statuses(company),
        'critical_stocks': build_critical_stocks(company),
    }
