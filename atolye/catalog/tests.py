"""
Tests for categories, products, stock alerts and stock adjustments
"""
from io import StringIO
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from rest_framework import status
from atolye.core.models import AuditLog
from atolye.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from atolye.catalog.management.commands.seed_categories import DEFAULT_CATEGORIES
from atolye.catalog.models import Category, Product, StockAdjustment, FABRIC_ARRIVED, FABRIC_READY
from atolye.catalog.utils import (
    is_stock_alert, get_stock_level, apply_stock_adjustment,
    STOCK_LEVEL_CRITICAL, STOCK_LEVEL_WARNING, STOCK_LEVEL_GOOD,
)


class StockRuleTests(TestCase):
    """Stock alert rule and level classification"""

    def test_alert_with_minimum(self):
        self.assertTrue(is_stock_alert(5, 5))
        self.assertTrue(is_stock_alert(3, 5))
        self.assertFalse(is_stock_alert(6, 5))
        self.assertTrue(is_stock_alert(None, 5))

    def test_alert_without_minimum(self):
        self.assertTrue(is_stock_alert(0, None))
        self.assertTrue(is_stock_alert(None, 0))
        self.assertFalse(is_stock_alert(1, None))
        self.assertFalse(is_stock_alert(3, 0))

    def test_stock_level(self):
        self.assertEqual(get_stock_level(0, 10), STOCK_LEVEL_CRITICAL)
        self.assertEqual(get_stock_level(5, 10), STOCK_LEVEL_CRITICAL)
        self.assertEqual(get_stock_level(6, 10), STOCK_LEVEL_WARNING)
        self.assertEqual(get_stock_level(11, 10), STOCK_LEVEL_GOOD)
        self.assertEqual(get_stock_level(None, None), STOCK_LEVEL_CRITICAL)

    def test_apply_stock_adjustment(self):
        self.assertEqual(apply_stock_adjustment(5, 'in', 3), 8)
        self.assertEqual(apply_stock_adjustment(5, 'out', 3), 2)
        self.assertEqual(apply_stock_adjustment(2, 'out', 5), 0)
        self.assertEqual(apply_stock_adjustment(None, 'in', 4), 4)

    def test_stock_alerts_queryset_matches_rule(self):
        company = TestDataFactory.create_company()
        cases = [(0, None), (None, None), (4, 0), (3, 5), (5, 5), (8, 5), (None, 2)]
        for stock, minimum in cases:
            TestDataFactory.create_product(company, stock_quantity=stock, min_stock_level=minimum)

        alerting = set(Product.objects.filter(company=company).stock_alerts().values_list('id', flat=True))
        for product in Product.objects.filter(company=company):
            self.assertEqual(
                product.id in alerting,
                is_stock_alert(product.stock_quantity, product.min_stock_level),
                (product.stock_quantity, product.min_stock_level)
            )


class ProductModelTests(TestCase):

    def test_display_name(self):
        company = TestDataFactory.create_company()
        self.assertEqual(TestDataFactory.create_product(company, name='Gömlek', model='G-12').display_name, 'Gömlek - G-12')
        self.assertEqual(TestDataFactory.create_product(company, name='Etek').display_name, 'Etek')


class CategoryAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.company = TestDataFactory.create_company(owner=self.user)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_and_list(self):
        response = self.client.post('/api/v1/categories/', {'name': '  Pantolon '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Pantolon')

        TestDataFactory.create_category(TestDataFactory.create_company(), name='Başkasının')
        response = self.client.get('/api/v1/categories/')
        self.assertEqual([c['name'] for c in response.data], ['Pantolon'])

    def test_update_and_delete(self):
        category = TestDataFactory.create_category(self.company, name='Elbise')
        response = self.client.patch(f'/api/v1/categories/{category.id}/', {'description': 'Yazlık'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['description'], 'Yazlık')

        response = self.client.delete(f'/api/v1/categories/{category.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Category.objects.filter(id=category.id).exists())

    def test_other_company_category_is_404(self):
        category = TestDataFactory.create_category(TestDataFactory.create_company())
        response = self.client.get(f'/api/v1/categories/{category.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ProductAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.company = TestDataFactory.create_company(owner=self.user)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_product(self):
        category = TestDataFactory.create_category(self.company, name='Gömlek')
        response = self.client.post('/api/v1/products/', {
            'name': 'Keten Gömlek',
            'model': 'KG-01',
            'category': category.id,
            'price': '450.00',
            'stock_quantity': 20,
            'min_stock_level': 5,
            'fabric_status': FABRIC_ARRIVED,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['display_name'], 'Keten Gömlek - KG-01')
        self.assertEqual(response.data['category_name'], 'Gömlek')
        self.assertEqual(response.data['fabric_status_display'], 'Kumaş Geldi')
        self.assertFalse(response.data['is_stock_alert'])

        product = Product.objects.get(id=response.data['id'])
        self.assertEqual(product.company, self.company)
        self.assertEqual(product.created_by, self.user)
        self.assertEqual(product.updated_by, self.user)
        self.assertTrue(AuditLog.objects.filter(model_name='Product', action='create', object_id=str(product.id)).exists())

    def test_create_product_validation(self):
        response = self.client.post('/api/v1/products/', {
            'name': 'Bozuk',
            'stock_quantity': -1,
            'price': '-5',
            'fabric_status': 'bilinmiyor',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ('stock_quantity', 'price', 'fabric_status'):
            self.assertIn(field, response.data)

    def test_category_of_other_company_rejected(self):
        foreign_category = TestDataFactory.create_category(TestDataFactory.create_company())
        response = self.client.post('/api/v1/products/', {
            'name': 'Tişört',
            'category': foreign_category.id,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('category', response.data)

    def test_list_filters(self):
        TestDataFactory.create_product(self.company, name='Mavi Gömlek', stock_quantity=0, fabric_status=FABRIC_READY)
        TestDataFactory.create_product(self.company, name='Siyah Pantolon', stock_quantity=50, min_stock_level=10)
        TestDataFactory.create_product(TestDataFactory.create_company(), name='Mavi Etek')

        response = self.client.get('/api/v1/products/', {'search': 'mavi'})
        self.assertEqual([p['name'] for p in response.data], ['Mavi Gömlek'])

        response = self.client.get('/api/v1/products/', {'critical': 'true'})
        self.assertEqual([p['name'] for p in response.data], ['Mavi Gömlek'])

        response = self.client.get('/api/v1/products/', {'fabric_status': FABRIC_READY})
        self.assertEqual(len(response.data), 1)

        response = self.client.get('/api/v1/products/', {'fabric_status': 'yok'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_sets_updated_by(self):
        product = TestDataFactory.create_product(self.company, name='Ceket')
        other_user = TestDataFactory.create_user()
        TestDataFactory.add_member(self.company, other_user)
        self.client.authenticate_user(other_user)

        response = self.client.patch(f'/api/v1/products/{product.id}/', {'stock_quantity': 2}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        product.refresh_from_db()
        self.assertEqual(product.stock_quantity, 2)
        self.assertEqual(product.updated_by, other_user)

    def test_other_company_product_is_404(self):
        product = TestDataFactory.create_product(TestDataFactory.create_company())
        self.assertEqual(self.client.get(f'/api/v1/products/{product.id}/').status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(f'/api/v1/products/{product.id}/').status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Product.objects.filter(id=product.id).exists())

    def test_delete_product_used_in_order(self):
        product = TestDataFactory.create_product(self.company)
        TestDataFactory.create_order_item(TestDataFactory.create_order(self.company), product)
        response = self.client.delete(f'/api/v1/products/{product.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Product.objects.filter(id=product.id).exists())

        self.assertEqual(
            response.data['error'],
            'Bu ürün siparişlerde, üretim kayıtlarında veya etiketlerde kullanıldığı için silinemez.'
        )

        unused = TestDataFactory.create_product(self.company)
        response = self.client.delete(f'/api/v1/products/{unused.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertTrue(AuditLog.objects.filter(model_name='Product', action='delete', object_id=str(unused.id)).exists())

    def test_delete_product_with_production_records_or_labels(self):
        produced = TestDataFactory.create_product(self.company)
        TestDataFactory.create_production_record(self.company, produced, quantity_produced=10)
        labelled = TestDataFactory.create_product(self.company)
        TestDataFactory.create_label(company=self.company, product=labelled)

        for product in [produced, labelled]:
            response = self.client.delete(f'/api/v1/products/{product.id}/')
            self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
            self.assertTrue(Product.objects.filter(id=product.id).exists())
        self.assertEqual(produced.production_records.count(), 1)
        self.assertEqual(labelled.labels.count(), 1)

    def test_inventory_list(self):
        TestDataFactory.create_product(self.company, name='Mont', stock_quantity=3, min_stock_level=10)
        response = self.client.get('/api/v1/inventory/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['stock_level'], STOCK_LEVEL_CRITICAL)
        self.assertTrue(response.data[0]['is_stock_alert'])


class StockAdjustmentAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.company = TestDataFactory.create_company(owner=self.user)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.product = TestDataFactory.create_product(self.company, stock_quantity=10)
        self.url = f'/api/v1/products/{self.product.id}/stock-adjustments/'

    def test_stock_in(self):
        response = self.client.post(self.url, {'adjustment_type': 'in', 'quantity': 5, 'reason': 'production'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['resulting_quantity'], 15)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 15)
        self.assertTrue(AuditLog.objects.filter(action='stock_adjust').exists())

    def test_stock_out_clamps_at_zero(self):
        response = self.client.post(self.url, {'adjustment_type': 'out', 'quantity': 25}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 0)

    def test_invalid_quantity(self):
        response = self.client.post(self.url, {'adjustment_type': 'out', 'quantity': 0}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(StockAdjustment.objects.exists())

    def test_list_adjustments(self):
        self.client.post(self.url, {'adjustment_type': 'in', 'quantity': 1}, format='json')
        self.client.post(self.url, {'adjustment_type': 'out', 'quantity': 2}, format='json')
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)


class SeedCategoriesCommandTests(TestCase):

    def setUp(self):
        self.company = TestDataFactory.create_company()

    def test_seed_categories(self):
        out = StringIO()
        call_command('seed_categories', company=self.company.company_code.lower(), stdout=out)
        self.assertEqual(Category.objects.filter(company=self.company).count(), len(DEFAULT_CATEGORIES))

        # Running again adds nothing
        call_command('seed_categories', company=self.company.company_code, stdout=out)
        self.assertEqual(Category.objects.filter(company=self.company).count(), len(DEFAULT_CATEGORIES))

    def test_clear(self):
        TestDataFactory.create_category(self.company, name='Eski')
        call_command('seed_categories', company=self.company.company_code, clear=True, stdout=StringIO())
        self.assertFalse(Category.objects.filter(company=self.company, name='Eski').exists())

    def test_unknown_company(self):
        with self.assertRaises(CommandError):
            call_command('seed_categories', company='YOKYOK00', stdout=StringIO())
