"""
Tests for authentication, the current-user endpoint and the audit log
"""
from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken
from atolye.core.models import AuditLog
from atolye.core.permissions import NO_COMPANY_MESSAGE, get_user_company
from atolye.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from atolye.core.utils import create_audit_log, parse_date_param, serialize_changes
from atolye.companies.models import Profile

User = get_user_model()


class AuthAPITests(TestCase):
    """Registration, login and token refresh"""

    def setUp(self):
        self.client = APIClient()

    def test_register_creates_user_and_profile(self):
        response = self.client.post('/api/v1/auth/register/', {
            'email': 'Ayse@Example.com',
            'password': 'gizli123',
            'full_name': 'Ayşe Yılmaz',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['email'], 'ayse@example.com')

        profile = Profile.objects.get(user__email='ayse@example.com')
        self.assertEqual(profile.full_name, 'Ayşe Yılmaz')
        self.assertIsNone(profile.company)

    def test_register_duplicate_email(self):
        TestDataFactory.create_user(email='dup@example.com')
        response = self.client.post('/api/v1/auth/register/', {
            'email': 'DUP@example.com',
            'password': 'gizli123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Bu e-posta adresi zaten kayıtlı.', response.data['email'])

    def test_register_short_password(self):
        response = self.client.post('/api/v1/auth/register/', {
            'email': 'short@example.com',
            'password': '123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_login_with_email(self):
        TestDataFactory.create_user(email='login@example.com', password='gizli123')
        response = self.client.post('/api/v1/auth/login/', {
            'email': 'Login@Example.com',
            'password': 'gizli123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)

    def test_login_user_created_with_mixed_case_email(self):
        user = User.objects.create_user(username='karma', email='  Karma@Example.COM', password='gizli123')
        self.assertEqual(user.email, 'karma@example.com')

        response = self.client.post('/api/v1/auth/login/', {
            'email': 'KARMA@example.com',
            'password': 'gizli123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_token_claims(self):
        user = TestDataFactory.create_user(email='claims@example.com', password='gizli123')
        TestDataFactory.create_company(owner=user)
        response = self.client.post('/api/v1/auth/login/', {
            'email': 'claims@example.com',
            'password': 'gizli123',
        }, format='json')
        token = AccessToken(response.data['access'])
        self.assertEqual(token['email'], 'claims@example.com')
        self.assertNotIn('company_id', token.payload)

    def test_login_wrong_password(self):
        TestDataFactory.create_user(email='login@example.com', password='gizli123')
        response = self.client.post('/api/v1/auth/login/', {
            'email': 'login@example.com',
            'password': 'yanlis',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(str(response.data['detail']), 'Geçersiz e-posta veya şifre.')

    def test_login_inactive_user(self):
        user = TestDataFactory.create_user(email='inactive@example.com', password='gizli123')
        user.is_active = False
        user.save()
        response = self.client.post('/api/v1/auth/login/', {
            'email': 'inactive@example.com',
            'password': 'gizli123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_token(self):
        TestDataFactory.create_user(email='refresh@example.com', password='gizli123')
        login = self.client.post('/api/v1/auth/login/', {
            'email': 'refresh@example.com',
            'password': 'gizli123',
        }, format='json')
        response = self.client.post('/api/v1/auth/refresh/', {
            'refresh': login.data['refresh'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_refresh_token_of_deleted_user(self):
        user = TestDataFactory.create_user(email='silinen@example.com', password='gizli123')
        login = self.client.post('/api/v1/auth/login/', {
            'email': 'silinen@example.com',
            'password': 'gizli123',
        }, format='json')
        self.assertEqual(login.status_code, status.HTTP_200_OK)
        user.delete()

        response = self.client.post('/api/v1/auth/refresh/', {
            'refresh': login.data['refresh'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertNotIn('access', response.data)

    def test_refresh_with_garbage_token(self):
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': 'not-a-token'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class CurrentUserAPITests(TestCase):
    """GET /auth/me/"""

    def setUp(self):
        self.user = TestDataFactory.create_user(full_name='Mehmet Demir')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_me_without_company(self):
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], self.user.email)
        self.assertEqual(response.data['profile']['full_name'], 'Mehmet Demir')
        self.assertFalse(response.data['has_company'])
        self.assertIsNone(response.data['company'])

    def test_me_with_company(self):
        company = TestDataFactory.create_company(owner=self.user, name='Moda Tekstil')
        response = self.client.get('/api/v1/auth/me/')
        self.assertTrue(response.data['has_company'])
        self.assertEqual(response.data['company']['company_code'], company.company_code)

    def test_me_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class HasCompanyPermissionTests(TestCase):
    """Tenant-data endpoints refuse users without a company"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_tenant_endpoints_return_403(self):
        for url in ['/api/v1/products/', '/api/v1/orders/', '/api/v1/production-records/',
                    '/api/v1/labels/', '/api/v1/dashboard/stats/', '/api/v1/audit-logs/']:
            response = self.client.get(url)
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, url)
            self.assertEqual(str(response.data['detail']), NO_COMPANY_MESSAGE)

    def test_get_user_company(self):
        self.assertIsNone(get_user_company(self.user))
        company = TestDataFactory.create_company(owner=self.user)
        self.user.refresh_from_db()
        self.assertEqual(get_user_company(self.user), company)


class AuditLogTests(TestCase):
    """Audit log helper and endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.company = TestDataFactory.create_company(owner=self.user)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_mutations_are_logged(self):
        response = self.client.post('/api/v1/categories/', {'name': 'Gömlek'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        log = AuditLog.objects.get(model_name='Category', action='create')
        self.assertEqual(log.company, self.company)
        self.assertEqual(log.user, self.user)
        self.assertEqual(log.object_name, 'Gömlek')

    def test_list_is_company_scoped(self):
        other_user = TestDataFactory.create_user()
        other_company = TestDataFactory.create_company(owner=other_user)
        create_audit_log(action='create', model_name='Product', object_id=1, company=self.company, user=self.user)
        create_audit_log(action='create', model_name='Product', object_id=2, company=other_company, user=other_user)

        response = self.client.get('/api/v1/audit-logs/', {'model': 'Product'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['object_id'], '1')

    def test_detail_of_other_company_is_404(self):
        other_company = TestDataFactory.create_company()
        log = create_audit_log(action='delete', model_name='Order', object_id=5, company=other_company)
        response = self.client.get(f'/api/v1/audit-logs/{log.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_invalid_date_filter(self):
        response = self.client.get('/api/v1/audit-logs/', {'date_from': '2024-13-45'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_fields_skip_logging(self):
        self.assertIsNone(create_audit_log(action='create', model_name='Product'))
        self.assertEqual(AuditLog.objects.count(), 0)

    def test_serialize_changes(self):
        category = TestDataFactory.create_category(self.company)
        changes = serialize_changes({'category': category, 'items': [1, 2], 'name': 'X', 'stock_quantity': 3})
        self.assertEqual(changes, {'category': category.pk, 'items': 2, 'name': 'X', 'stock_quantity': 3})

    def test_parse_date_param(self):
        self.assertIsNone(parse_date_param(None))
        self.assertEqual(parse_date_param('2024-02-29').isoformat(), '2024-02-29')
        with self.assertRaises(ValueError):
            parse_date_param('29.02.2024')
