"""
Tests for label orders
"""
from django.test import TestCase
from rest_framework import status
from atolye.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from atolye.labels.models import Label


class LabelAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.company = TestDataFactory.create_company(owner=self.user)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.product = TestDataFactory.create_product(self.company, name='Keten Gömlek')

    def test_create_label_defaults(self):
        response = self.client.post('/api/v1/labels/', {
            'product': self.product.id,
            'brand': 'Etiket A.Ş.',
            'attached_model': 'KG-01',
            'order_date': '2024-04-01',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['order_status'], Label.STATUS_ORDERED)
        self.assertEqual(response.data['order_status_display'], 'Sipariş Verildi')
        self.assertEqual(response.data['received_quantity'], 0)
        self.assertEqual(response.data['count_quantity'], 0)
        self.assertEqual(response.data['product_name'], 'Keten Gömlek')

        label = Label.objects.get(id=response.data['id'])
        self.assertEqual(label.company, self.company)
        self.assertEqual(label.created_by, self.user)

    def test_product_required(self):
        response = self.client.post('/api/v1/labels/', {'brand': 'Etiket A.Ş.'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['product'], ['Lütfen bir ürün seçin.'])

    def test_invalid_status_and_quantity(self):
        response = self.client.post('/api/v1/labels/', {
            'product': self.product.id,
            'order_status': 'lost',
            'received_quantity': -5,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('order_status', response.data)
        self.assertIn('received_quantity', response.data)

    def test_mark_arrived(self):
        label = TestDataFactory.create_label(self.company, self.product, count_quantity=500)
        response = self.client.patch(f'/api/v1/labels/{label.id}/', {
            'order_status': Label.STATUS_ARRIVED,
            'received_quantity': 480,
            'delivery_date': '2024-04-15',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        label.refresh_from_db()
        self.assertEqual(label.order_status, Label.STATUS_ARRIVED)
        self.assertEqual(label.received_quantity, 480)
        self.assertEqual(label.updated_by, self.user)

    def test_list_filters(self):
        pants = TestDataFactory.create_product(self.company, name='Kot Pantolon')
        shirt_label = TestDataFactory.create_label(self.company, self.product, brand='Yıldız Etiket')
        pants_label = TestDataFactory.create_label(self.company, pants, brand='Ay Etiket',
                                                   order_status=Label.STATUS_ARRIVED, attached_model='KP-7')
        other_company = TestDataFactory.create_company()
        TestDataFactory.create_label(other_company, TestDataFactory.create_product(other_company), brand='Ay Etiket')

        response = self.client.get('/api/v1/labels/')
        self.assertEqual(len(response.data), 2)

        response = self.client.get('/api/v1/labels/', {'order_status': Label.STATUS_ARRIVED})
        self.assertEqual([row['id'] for row in response.data], [pants_label.id])

        response = self.client.get('/api/v1/labels/', {'product': self.product.id})
        self.assertEqual([row['id'] for row in response.data], [shirt_label.id])

        response = self.client.get('/api/v1/labels/', {'search': 'kp-7'})
        self.assertEqual([row['id'] for row in response.data], [pants_label.id])

    def test_delete_and_scoping(self):
        label = TestDataFactory.create_label(self.company, self.product)
        other_company = TestDataFactory.create_company()
        foreign_label = TestDataFactory.create_label(other_company, TestDataFactory.create_product(other_company))

        self.assertEqual(self.client.delete(f'/api/v1/labels/{foreign_label.id}/').status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(f'/api/v1/labels/{label.id}/').status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Label.objects.filter(id=label.id).exists())
