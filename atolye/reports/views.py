import logging
from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, DecimalField, ExpressionWrapper, F, IntegerField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from atolye.catalog.models import Product, FABRIC_STATUS_CHOICES
from atolye.core.cache_utils import get_or_compute, STATS_CACHE_PREFIX, DASHBOARD_CACHE_PREFIX
from atolye.core.permissions import HasCompany, get_user_company
from atolye.core.utils import parse_date_param, INVALID_DATE_MESSAGE
from atolye.orders.models import Order
from atolye.production.models import ProductionRecord
from .utils import build_dashboard_stats, build_dashboard_summary

logger = logging.getLogger('atolye.reports')

DEFAULT_REPORT_DAYS = 30


def _wants_refresh(request):
    return request.query_params.get('refresh', '').lower() in ('1', 'true', 'yes')


def _report_period(request):
    """(date_from, date_to) of a report; defaults to the last 30 days"""
    date_from = parse_date_param(request.query_params.get('date_from'))
    date_to = parse_date_param(request.query_params.get('date_to'))
    if not date_to:
        date_to = timezone.localdate()
    if not date_from:
        date_from = date_to - timedelta(days=DEFAULT_REPORT_DAYS)
    return date_from, date_to


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def dashboard_stats(request):
    """Order and stock counters of the dashboard cards"""
    company = get_user_company(request.user)
    try:
        data = get_or_compute(
            STATS_CACHE_PREFIX,
            company.id,
            lambda: build_dashboard_stats(company),
            refresh=_wants_refresh(request),
        )
        return Response(data)
    except Exception as e:
        logger.error(f"Error in dashboard_stats for company {company.id}: {str(e)}", exc_info=True)
        return Response(
            {'error': 'İstatistikler yüklenirken hata oluştu'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def dashboard_summary(request):
    """Fabric status board and critical stocks"""
    company = get_user_company(request.user)
    try:
        data = get_or_compute(
            DASHBOARD_CACHE_PREFIX,
            company.id,
            lambda: build_dashboard_summary(company),
            refresh=_wants_refresh(request),
        )
        return Response(data)
    except Exception as e:
        logger.error(f"Error in dashboard_summary for company {company.id}: {str(e)}", exc_info=True)
        return Response(
            {'error': 'Veriler yüklenirken hata oluştu'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def production_summary(request):
    """Produced and defective quantities over a period"""
    company = get_user_company(request.user)
    try:
        date_from, date_to = _report_period(request)
    except ValueError:
        return Response({'error': INVALID_DATE_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)

    logger.info(f"User {request.user.email} requested production summary ({date_from} - {date_to})")

    records = ProductionRecord.objects.filter(
        company=company,
        production_date__gte=date_from,
        production_date__lte=date_to,
    )

    totals = records.aggregate(
        produced=Coalesce(Sum('quantity_produced'), Value(0), output_field=IntegerField()),
        defective=Coalesce(Sum('defective_quantity'), Value(0), output_field=IntegerField()),
        record_count=Count('id'),
    )
    total_produced = totals['produced']
    total_defective = totals['defective']
    defect_rate = round(total_defective * 100 / total_produced, 2) if total_produced else 0

    daily = records.values('production_date').annotate(
        produced=Sum('quantity_produced'),
        defective=Coalesce(Sum('defective_quantity'), Value(0), output_field=IntegerField()),
        count=Count('id'),
    ).order_by('production_date')

    by_product = records.values(
        'product_id', 'product__name', 'product__model'
    ).annotate(
        produced=Sum('quantity_produced'),
        defective=Coalesce(Sum('defective_quantity'), Value(0), output_field=IntegerField()),
    ).order_by('-produced', 'product__name')

    return Response({
        'period': {
            'from': date_from.isoformat(),
            'to': date_to.isoformat()
        },
        'summary': {
            'total_produced': total_produced,
            'total_defective': total_defective,
            'net_produced': total_produced - total_defective,
            'defect_rate': defect_rate,
            'record_count': totals['record_count'],
        },
        'daily_breakdown': [
            {
                'date': row['production_date'].isoformat(),
                'produced': row['produced'],
                'defective': row['defective'],
                'count': row['count'],
            }
            for row in daily
        ],
        'by_product': [
            {
                'product_id': row['product_id'],
                'product_name': (
                    f"{row['product__name']} - {row['product__model']}"
                    if row['product__model'] else row['product__name']
                ),
                'produced': row['produced'],
                'defective': row['defective'],
            }
            for row in by_product
        ],
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def orders_summary(request):
    """Order counts and amounts by status over a period"""
    company = get_user_company(request.user)
    try:
        date_from, date_to = _report_period(request)
    except ValueError:
        return Response({'error': INVALID_DATE_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)

    orders = Order.objects.filter(
        company=company,
        order_date__gte=date_from,
        order_date__lte=date_to,
    )

    totals = orders.aggregate(
        amount=Sum('total_amount', output_field=DecimalField()),
        delivery_quantity=Sum('total_delivery_quantity'),
        count=Count('id'),
    )

    status_rows = {
        row['status']: row
        for row in orders.order_by().values('status').annotate(
            count=Count('id'),
            amount=Sum('total_amount', output_field=DecimalField()),
        )
    }
    by_status = []
    for value, label in Order.STATUS_CHOICES:
        row = status_rows.get(value, {})
        by_status.append({
            'status': value,
            'label': label,
            'count': row.get('count', 0),
            'amount': float(row.get('amount') or Decimal('0.00')),
        })

    return Response({
        'period': {
            'from': date_from.isoformat(),
            'to': date_to.isoformat()
        },
        'summary': {
            'total_orders': totals['count'],
            'total_amount': float(totals['amount'] or Decimal('0.00')),
            'total_delivery_quantity': totals['delivery_quantity'] or 0,
        },
        'by_status': by_status,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def inventory_summary(request):
    """Stock units, stock value and alert counts of the company's products"""
    company = get_user_company(request.user)
    try:
        products = Product.objects.filter(company=company)
        stock = Coalesce(F('stock_quantity'), Value(0), output_field=IntegerField())
        totals = products.aggregate(
            total_products=Count('id'),
            total_units=Coalesce(Sum('stock_quantity'), Value(0), output_field=IntegerField()),
            value_at_cost=Sum(
                ExpressionWrapper(stock * F('cost'), output_field=DecimalField()),
                filter=Q(cost__isnull=False),
            ),
            value_at_price=Sum(
                ExpressionWrapper(stock * F('price'), output_field=DecimalField()),
                filter=Q(price__isnull=False),
            ),
        )
        out_of_stock_count = products.filter(Q(stock_quantity=0) | Q(stock_quantity__isnull=True)).count()

        fabric_counts = dict(
            products.filter(fabric_status__isnull=False).order_by()
            .values_list('fabric_status').annotate(count=Count('id'))
        )

        logger.debug(f"Inventory summary for company {company.id}: {totals}")

        return Response({
            'summary': {
                'total_products': totals['total_products'],
                'total_units': totals['total_units'],
                'stock_value_at_cost': float(totals['value_at_cost'] or Decimal('0.00')),
                'stock_value_at_price': float(totals['value_at_price'] or Decimal('0.00')),
                'stock_alert_count': products.stock_alerts().count(),
                'out_of_stock_count': out_of_stock_count,
            },
            'fabric_statuses': [
                {'status': value, 'label': label, 'count': fabric_counts.get(value, 0)}
                for value, label in FABRIC_STATUS_CHOICES
            ],
        })
    except Exception as e:
        logger.error(f"Error in inventory_summary: {str(e)}", exc_info=True)
        return Response(
            {'error': 'Envanter özeti oluşturulurken hata oluştu'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
