"""
Test suite for the dashboard and report endpoints
Tests: dashboard stats, fabric statuses, critical stocks, caching, production/order/inventory summaries
"""
from datetime import timedelta
from decimal import Decimal
from unittest import mock
from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from atolye.core.cache_utils import company_cache_key, STATS_CACHE_PREFIX, DASHBOARD_CACHE_PREFIX
from atolye.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from atolye.catalog.models import FABRIC_ORDERED, FABRIC_ARRIVED, FABRIC_CUTTING, FABRIC_READY
from atolye.orders.models import Order


class DashboardTestCase(TestCase):

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.company = TestDataFactory.create_company(owner=self.user)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)


class DashboardStatsTests(DashboardTestCase):
    """GET /dashboard/stats/"""

    def test_empty_company(self):
        response = self.client.get('/api/v1/dashboard/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {
            'total_orders': 0,
            'active_production': 0,
            'stock_alerts': 0,
            'completed_orders': 0,
        })

    def test_counts(self):
        TestDataFactory.create_order(self.company, status=Order.STATUS_PENDING)
        TestDataFactory.create_order(self.company, status=Order.STATUS_PROCESSING)
        TestDataFactory.create_order(self.company, status=Order.STATUS_CANCELLED)
        TestDataFactory.create_order(self.company, status=Order.STATUS_COMPLETED)
        TestDataFactory.create_product(self.company, stock_quantity=0)
        TestDataFactory.create_product(self.company, stock_quantity=4, min_stock_level=5)
        TestDataFactory.create_product(self.company, stock_quantity=40, min_stock_level=5)

        other_company = TestDataFactory.create_company()
        TestDataFactory.create_order(other_company)
        TestDataFactory.create_product(other_company, stock_quantity=0)

        response = self.client.get('/api/v1/dashboard/stats/')
        self.assertEqual(response.data['total_orders'], 4)
        self.assertEqual(response.data['active_production'], 3)
        self.assertEqual(response.data['completed_orders'], 1)
        self.assertEqual(response.data['stock_alerts'], 2)

    def test_result_is_cached_until_data_changes(self):
        order = TestDataFactory.create_order(self.company)
        self.client.get('/api/v1/dashboard/stats/')
        self.assertIsNotNone(cache.get(company_cache_key(STATS_CACHE_PREFIX, self.company.id)))

        # Queryset updates bypass the signals, so the cached counters stay
        Order.objects.filter(id=order.id).update(status=Order.STATUS_COMPLETED)
        response = self.client.get('/api/v1/dashboard/stats/')
        self.assertEqual(response.data['completed_orders'], 0)

        response = self.client.get('/api/v1/dashboard/stats/', {'refresh': '1'})
        self.assertEqual(response.data['completed_orders'], 1)

        with self.captureOnCommitCallbacks(execute=True):
            TestDataFactory.create_order(self.company)
        self.assertIsNone(cache.get(company_cache_key(STATS_CACHE_PREFIX, self.company.id)))
        response = self.client.get('/api/v1/dashboard/stats/')
        self.assertEqual(response.data['total_orders'], 2)

    def test_invalidation_waits_for_commit(self):
        self.client.get('/api/v1/dashboard/stats/')
        cache_key = company_cache_key(STATS_CACHE_PREFIX, self.company.id)

        with self.captureOnCommitCallbacks() as callbacks:
            TestDataFactory.create_order(self.company)
            # Still cached while the write is uncommitted
            self.assertIsNotNone(cache.get(cache_key))

        self.assertTrue(callbacks)
        for callback in callbacks:
            callback()
        self.assertIsNone(cache.get(cache_key))

    def test_stock_adjustment_invalidates_after_commit(self):
        product = TestDataFactory.create_product(self.company, stock_quantity=0, min_stock_level=5)
        response = self.client.get('/api/v1/dashboard/stats/')
        self.assertEqual(response.data['stock_alerts'], 1)

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(f'/api/v1/products/{product.id}/stock-adjustments/', {
                'adjustment_type': 'in',
                'quantity': 20,
                'reason': 'correction',
            }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.get('/api/v1/dashboard/stats/')
        self.assertEqual(response.data['stock_alerts'], 0)

    def test_error_response(self):
        with mock.patch('atolye.reports.views.build_dashboard_stats', side_effect=RuntimeError('db down')):
            response = self.client.get('/api/v1/dashboard/stats/')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'İstatistikler yüklenirken hata oluştu')


class DashboardSummaryTests(DashboardTestCase):
    """GET /dashboard/summary/"""

    def test_fabric_statuses_always_has_four_steps(self):
        response = self.client.get('/api/v1/dashboard/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [row['status'] for row in response.data['fabric_statuses']],
            [FABRIC_ORDERED, FABRIC_ARRIVED, FABRIC_CUTTING, FABRIC_READY]
        )
        self.assertEqual(response.data['fabric_statuses'][0]['step'], 'Kumaş Sipariş Edildi')
        self.assertTrue(all(row['count'] == 0 for row in response.data['fabric_statuses']))
        self.assertEqual(response.data['critical_stocks'], [])

    def test_fabric_status_counts(self):
        TestDataFactory.create_product(self.company, fabric_status=FABRIC_ARRIVED)
        TestDataFactory.create_product(self.company, fabric_status=FABRIC_ARRIVED)
        TestDataFactory.create_product(self.company, fabric_status=FABRIC_READY)
        TestDataFactory.create_product(self.company)
        TestDataFactory.create_product(TestDataFactory.create_company(), fabric_status=FABRIC_READY)

        response = self.client.get('/api/v1/dashboard/summary/')
        counts = {row['status']: row['count'] for row in response.data['fabric_statuses']}
        self.assertEqual(counts, {FABRIC_ORDERED: 0, FABRIC_ARRIVED: 2, FABRIC_CUTTING: 0, FABRIC_READY: 1})

    def test_critical_stocks(self):
        TestDataFactory.create_product(self.company, name='Gömlek', model='G-1', stock_quantity=0, min_stock_level=10)
        TestDataFactory.create_product(self.company, name='Etek', stock_quantity=8, min_stock_level=10)
        TestDataFactory.create_product(self.company, name='Ceket', stock_quantity=50, min_stock_level=10)

        response = self.client.get('/api/v1/dashboard/summary/')
        critical = response.data['critical_stocks']
        self.assertEqual(len(critical), 2)
        self.assertEqual(critical[0]['item'], 'Gömlek - G-1')
        self.assertEqual(critical[0]['level'], 0)
        self.assertEqual(critical[0]['minimum'], 10)
        self.assertEqual(critical[0]['status'], 'critical')
        self.assertEqual(critical[1]['item'], 'Etek')
        self.assertEqual(critical[1]['status'], 'warning')

    def test_critical_stocks_limited_to_five(self):
        for i in range(7):
            TestDataFactory.create_product(self.company, name=f'Ürün {i}', stock_quantity=None)
        response = self.client.get('/api/v1/dashboard/summary/')
        self.assertEqual(len(response.data['critical_stocks']), 5)
        self.assertTrue(all(row['level'] == 0 and row['minimum'] == 0 for row in response.data['critical_stocks']))

    def test_product_change_invalidates_cache(self):
        self.client.get('/api/v1/dashboard/summary/')
        self.assertIsNotNone(cache.get(company_cache_key(DASHBOARD_CACHE_PREFIX, self.company.id)))

        with self.captureOnCommitCallbacks(execute=True):
            TestDataFactory.create_product(self.company, fabric_status=FABRIC_CUTTING)
        self.assertIsNone(cache.get(company_cache_key(DASHBOARD_CACHE_PREFIX, self.company.id)))
        response = self.client.get('/api/v1/dashboard/summary/')
        counts = {row['status']: row['count'] for row in response.data['fabric_statuses']}
        self.assertEqual(counts[FABRIC_CUTTING], 1)

    def test_error_response(self):
        with mock.patch('atolye.reports.views.build_dashboard_summary', side_effect=RuntimeError('db down')):
            response = self.client.get('/api/v1/dashboard/summary/')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Veriler yüklenirken hata oluştu')


class ReportsTests(DashboardTestCase):
    """Test report endpoints"""

    def test_production_summary(self):
        today = timezone.localdate()
        shirt = TestDataFactory.create_product(self.company, name='Gömlek')
        pants = TestDataFactory.create_product(self.company, name='Pantolon')
        TestDataFactory.create_production_record(self.company, shirt, quantity_produced=100, defective_quantity=5, production_date=today)
        TestDataFactory.create_production_record(self.company, shirt, quantity_produced=50, production_date=today - timedelta(days=1))
        TestDataFactory.create_production_record(self.company, pants, quantity_produced=30, defective_quantity=4, production_date=today)
        # Outside the default 30 day window
        TestDataFactory.create_production_record(self.company, pants, quantity_produced=999, production_date=today - timedelta(days=60))

        response = self.client.get('/api/v1/reports/production-summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data['summary']
        self.assertEqual(summary['total_produced'], 180)
        self.assertEqual(summary['total_defective'], 9)
        self.assertEqual(summary['net_produced'], 171)
        self.assertEqual(summary['defect_rate'], 5.0)
        self.assertEqual(summary['record_count'], 3)
        self.assertEqual(len(response.data['daily_breakdown']), 2)
        self.assertEqual(response.data['daily_breakdown'][-1]['produced'], 130)
        self.assertEqual([row['product_name'] for row in response.data['by_product']], ['Gömlek', 'Pantolon'])

    def test_production_summary_empty_and_invalid_dates(self):
        response = self.client.get('/api/v1/reports/production-summary/?date_from=2024-01-01&date_to=2024-12-31')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['summary']['defect_rate'], 0)
        self.assertEqual(response.data['period'], {'from': '2024-01-01', 'to': '2024-12-31'})

        response = self.client.get('/api/v1/reports/production-summary/?date_from=01-01-2024')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_orders_summary(self):
        TestDataFactory.create_order(self.company, status=Order.STATUS_PENDING, total_amount=Decimal('100.00'), total_delivery_quantity=10)
        TestDataFactory.create_order(self.company, status=Order.STATUS_COMPLETED, total_amount=Decimal('250.50'), total_delivery_quantity=5)
        TestDataFactory.create_order(self.company, status=Order.STATUS_COMPLETED)

        response = self.client.get('/api/v1/reports/orders-summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['summary']['total_orders'], 3)
        self.assertEqual(response.data['summary']['total_amount'], 350.5)
        self.assertEqual(response.data['summary']['total_delivery_quantity'], 15)
        by_status = {row['status']: row for row in response.data['by_status']}
        self.assertEqual(len(by_status), 4)
        self.assertEqual(by_status[Order.STATUS_COMPLETED]['count'], 2)
        self.assertEqual(by_status[Order.STATUS_COMPLETED]['amount'], 250.5)
        self.assertEqual(by_status[Order.STATUS_CANCELLED]['count'], 0)

    def test_inventory_summary(self):
        TestDataFactory.create_product(self.company, stock_quantity=10, min_stock_level=2,
                                       cost=Decimal('20.00'), price=Decimal('50.00'), fabric_status=FABRIC_READY)
        TestDataFactory.create_product(self.company, stock_quantity=0, cost=Decimal('5.00'))
        TestDataFactory.create_product(self.company, stock_quantity=None)

        response = self.client.get('/api/v1/reports/inventory-summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data['summary']
        self.assertEqual(summary['total_products'], 3)
        self.assertEqual(summary['total_units'], 10)
        self.assertEqual(summary['stock_value_at_cost'], 200.0)
        self.assertEqual(summary['stock_value_at_price'], 500.0)
        self.assertEqual(summary['stock_alert_count'], 2)
        self.assertEqual(summary['out_of_stock_count'], 2)
        counts = {row['status']: row['count'] for row in response.data['fabric_statuses']}
        self.assertEqual(counts[FABRIC_READY], 1)
