"""
Tests for production records
"""
from datetime import date
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from atolye.core.models import AuditLog
from atolye.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from atolye.production.models import ProductionRecord


class ProductionRecordAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.company = TestDataFactory.create_company(owner=self.user)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.product = TestDataFactory.create_product(self.company, name='Keten Gömlek', model='KG-01', stock_quantity=7)

    def test_create_record(self):
        response = self.client.post('/api/v1/production-records/', {
            'product': self.product.id,
            'quantity_produced': 120,
            'defective_quantity': 4,
            'notes': 'Sabah vardiyası',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['product_name'], 'Keten Gömlek')
        self.assertEqual(response.data['product_display_name'], 'Keten Gömlek - KG-01')
        self.assertEqual(response.data['net_quantity'], 116)
        self.assertEqual(response.data['production_date'], timezone.localdate().isoformat())

        record = ProductionRecord.objects.get(id=response.data['id'])
        self.assertEqual(record.company, self.company)
        self.assertEqual(record.created_by, self.user)
        self.assertTrue(AuditLog.objects.filter(model_name='ProductionRecord', action='create').exists())

        # Recording production does not move stock
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 7)

    def test_product_required(self):
        response = self.client.post('/api/v1/production-records/', {'quantity_produced': 5}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['product'], ['Lütfen bir ürün seçin.'])

        response = self.client.post('/api/v1/production-records/', {'product': '', 'quantity_produced': 5}, format='json')
        self.assertEqual(response.data['product'], ['Lütfen bir ürün seçin.'])

    def test_quantity_must_be_positive(self):
        for quantity in (0, -3, 'abc'):
            response = self.client.post('/api/v1/production-records/', {
                'product': self.product.id,
                'quantity_produced': quantity,
            }, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data['quantity_produced'], ['Lütfen geçerli bir üretilen miktar girin.'])

    def test_negative_defective_quantity(self):
        response = self.client.post('/api/v1/production-records/', {
            'product': self.product.id,
            'quantity_produced': 10,
            'defective_quantity': -1,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['defective_quantity'], ['Hatalı miktar negatif olamaz.'])

    def test_product_of_other_company_rejected(self):
        foreign_product = TestDataFactory.create_product(TestDataFactory.create_company())
        response = self.client.post('/api/v1/production-records/', {
            'product': foreign_product.id,
            'quantity_produced': 10,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('product', response.data)

    def test_list_ordering_and_filters(self):
        pants = TestDataFactory.create_product(self.company, name='Kot Pantolon')
        older = TestDataFactory.create_production_record(self.company, self.product, production_date=date(2024, 5, 1))
        newer = TestDataFactory.create_production_record(self.company, pants, production_date=date(2024, 5, 20))
        TestDataFactory.create_production_record(
            TestDataFactory.create_company(),
            TestDataFactory.create_product(TestDataFactory.create_company(), name='Keten Etek'),
        )

        response = self.client.get('/api/v1/production-records/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r['id'] for r in response.data], [newer.id, older.id])

        response = self.client.get('/api/v1/production-records/', {'search': 'keten'})
        self.assertEqual([r['id'] for r in response.data], [older.id])

        response = self.client.get('/api/v1/production-records/', {'product': pants.id})
        self.assertEqual([r['id'] for r in response.data], [newer.id])

        response = self.client.get('/api/v1/production-records/', {'date_from': '2024-05-10'})
        self.assertEqual([r['id'] for r in response.data], [newer.id])

        response = self.client.get('/api/v1/production-records/', {'date_to': '2024-05-10'})
        self.assertEqual([r['id'] for r in response.data], [older.id])

    def test_update_and_delete(self):
        record = TestDataFactory.create_production_record(self.company, self.product, quantity_produced=10)
        response = self.client.patch(f'/api/v1/production-records/{record.id}/', {'defective_quantity': 2}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['net_quantity'], 8)

        response = self.client.delete(f'/api/v1/production-records/{record.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ProductionRecord.objects.filter(id=record.id).exists())

    def test_other_company_record_is_404(self):
        other_company = TestDataFactory.create_company()
        record = TestDataFactory.create_production_record(other_company, TestDataFactory.create_product(other_company))
        response = self.client.get(f'/api/v1/production-records/{record.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
