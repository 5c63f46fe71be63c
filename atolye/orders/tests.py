"""
Test suite for the orders module
Tests: order numbers, nested items, totals, filters and company scoping
"""
from datetime import date
from decimal import Decimal
from django.test import TestCase
from rest_framework import status
from atolye.core.models import AuditLog
from atolye.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from atolye.orders.models import Order, OrderItem
from atolye.orders.utils import generate_order_number


class OrderModelTests(TestCase):

    def setUp(self):
        self.company = TestDataFactory.create_company()
        self.product = TestDataFactory.create_product(self.company)

    def test_item_total_price(self):
        order = TestDataFactory.create_order(self.company)
        item = TestDataFactory.create_order_item(order, self.product, quantity=3, unit_price=Decimal('12.50'))
        self.assertEqual(item.total_price, Decimal('37.50'))

        item.quantity = 4
        item.save()
        item.refresh_from_db()
        self.assertEqual(item.total_price, Decimal('50.00'))

    def test_items_total(self):
        order = TestDataFactory.create_order(self.company)
        TestDataFactory.create_order_item(order, self.product, quantity=2, unit_price=Decimal('100.00'))
        TestDataFactory.create_order_item(order, self.product, quantity=1, unit_price=Decimal('49.90'))
        self.assertEqual(order.get_items_total(), Decimal('249.90'))

    def test_generate_order_number_is_unique_per_company(self):
        first = TestDataFactory.create_order(self.company)
        number = generate_order_number(self.company)
        self.assertTrue(number.startswith('SIP-'))
        self.assertNotEqual(number, first.order_number)


class OrderAPITests(TestCase):
    """Test Order API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.company = TestDataFactory.create_company(owner=self.user)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.product = TestDataFactory.create_product(self.company, name='Keten Gömlek')
        self.other_product = TestDataFactory.create_product(self.company, name='Kot Pantolon')

    def test_create_order_with_items(self):
        data = {
            'customer_name': 'Butik Ada',
            'customer_email': 'ada@example.com',
            'delivery_date': '2024-06-30',
            'items': [
                {'product': self.product.id, 'quantity': 10, 'unit_price': '150.00'},
                {'product': self.other_product.id, 'quantity': 5, 'unit_price': '200.00'},
            ]
        }
        response = self.client.post('/api/v1/orders/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['order_number'].startswith('SIP-'))
        self.assertEqual(response.data['status'], Order.STATUS_PENDING)
        self.assertEqual(len(response.data['items']), 2)
        self.assertEqual(Decimal(response.data['total_amount']), Decimal('2500.00'))

        order = Order.objects.get(id=response.data['id'])
        self.assertEqual(order.company, self.company)
        self.assertEqual(order.created_by, self.user)
        self.assertEqual(order.updated_by, self.user)
        self.assertTrue(AuditLog.objects.filter(model_name='Order', action='create', object_id=str(order.id)).exists())

    def test_create_order_without_items(self):
        response = self.client.post('/api/v1/orders/', {
            'customer_name': 'Butik Ada',
            'order_number': 'SIP-ELLE-1',
            'total_amount': '999.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['order_number'], 'SIP-ELLE-1')
        self.assertEqual(Decimal(response.data['total_amount']), Decimal('999.00'))
        self.assertEqual(response.data['items'], [])

    def test_customer_name_required(self):
        response = self.client.post('/api/v1/orders/', {'customer_name': '  '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('customer_name', response.data)

    def test_duplicate_order_number(self):
        existing = TestDataFactory.create_order(self.company)
        response = self.client.post('/api/v1/orders/', {
            'customer_name': 'Butik Ada',
            'order_number': existing.order_number,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('order_number', response.data)

    def test_same_order_number_in_other_company(self):
        other_order = TestDataFactory.create_order(TestDataFactory.create_company())
        response = self.client.post('/api/v1/orders/', {
            'customer_name': 'Butik Ada',
            'order_number': other_order.order_number,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_item_validation(self):
        response = self.client.post('/api/v1/orders/', {
            'customer_name': 'Butik Ada',
            'items': [{'product': self.product.id, 'quantity': 0, 'unit_price': '-1'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('items', response.data)
        self.assertFalse(Order.objects.exists())

    def test_product_of_other_company_rejected(self):
        foreign_product = TestDataFactory.create_product(TestDataFactory.create_company())
        response = self.client.post('/api/v1/orders/', {
            'customer_name': 'Butik Ada',
            'items': [{'product': foreign_product.id, 'quantity': 1, 'unit_price': '10.00'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    def test_update_replaces_items(self):
        order = TestDataFactory.create_order(self.company, user=self.user)
        TestDataFactory.create_order_item(order, self.product, quantity=1, unit_price=Decimal('10.00'))

        response = self.client.patch(f'/api/v1/orders/{order.id}/', {
            'status': Order.STATUS_PROCESSING,
            'items': [{'product': self.other_product.id, 'quantity': 3, 'unit_price': '20.00'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], Order.STATUS_PROCESSING)
        self.assertEqual(len(response.data['items']), 1)
        self.assertEqual(response.data['items'][0]['product'], self.other_product.id)
        self.assertEqual(Decimal(response.data['total_amount']), Decimal('60.00'))
        self.assertEqual(OrderItem.objects.filter(order=order).count(), 1)

    def test_update_without_items_keeps_them(self):
        order = TestDataFactory.create_order(self.company, user=self.user)
        TestDataFactory.create_order_item(order, self.product, quantity=2, unit_price=Decimal('10.00'))
        other_user = TestDataFactory.create_user()
        TestDataFactory.add_member(self.company, other_user)
        self.client.authenticate_user(other_user)

        response = self.client.patch(f'/api/v1/orders/{order.id}/', {'notes': 'Acil'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['items']), 1)

        order.refresh_from_db()
        self.assertEqual(order.notes, 'Acil')
        self.assertEqual(order.updated_by, other_user)
        self.assertEqual(order.created_by, self.user)

    def test_total_amount_follows_items_on_update(self):
        order = TestDataFactory.create_order(self.company, user=self.user)
        TestDataFactory.create_order_item(order, self.product, quantity=2, unit_price=Decimal('10.00'))

        response = self.client.patch(f'/api/v1/orders/{order.id}/', {'total_amount': '999.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data['total_amount']), Decimal('20.00'))
        order.refresh_from_db()
        self.assertEqual(order.total_amount, Decimal('20.00'))

    def test_total_amount_editable_without_items(self):
        order = TestDataFactory.create_order(self.company, user=self.user)
        response = self.client.patch(f'/api/v1/orders/{order.id}/', {'total_amount': '450.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data['total_amount']), Decimal('450.00'))

    def test_delete_order(self):
        order = TestDataFactory.create_order(self.company)
        TestDataFactory.create_order_item(order, self.product)
        response = self.client.delete(f'/api/v1/orders/{order.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Order.objects.filter(id=order.id).exists())
        self.assertFalse(OrderItem.objects.filter(order_id=order.id).exists())

    def test_other_company_order_is_404(self):
        order = TestDataFactory.create_order(TestDataFactory.create_company())
        response = self.client.get(f'/api/v1/orders/{order.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_filters_and_ordering(self):
        old = TestDataFactory.create_order(self.company, customer_name='Eski Müşteri', order_date=date(2024, 1, 10))
        new = TestDataFactory.create_order(self.company, customer_name='Yeni Müşteri', order_date=date(2024, 3, 5),
                                           status=Order.STATUS_COMPLETED)
        TestDataFactory.create_order(TestDataFactory.create_company(), customer_name='Yeni Yabancı')

        response = self.client.get('/api/v1/orders/')
        self.assertEqual([o['id'] for o in response.data], [new.id, old.id])

        response = self.client.get('/api/v1/orders/', {'status': Order.STATUS_COMPLETED})
        self.assertEqual([o['id'] for o in response.data], [new.id])

        response = self.client.get('/api/v1/orders/', {'search': 'eski'})
        self.assertEqual([o['id'] for o in response.data], [old.id])

        response = self.client.get('/api/v1/orders/', {'date_from': '2024-02-01', 'date_to': '2024-12-31'})
        self.assertEqual([o['id'] for o in response.data], [new.id])

        response = self.client.get('/api/v1/orders/', {'date_from': 'dün'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
