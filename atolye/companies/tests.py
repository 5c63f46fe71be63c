"""
Tests for company creation, joining and profiles
"""
from django.test import TestCase
from rest_framework import status
from atolye.core.models import AuditLog
from atolye.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from atolye.companies.models import Company, Profile
from atolye.companies.utils import (
    COMPANY_CODE_ALPHABET, COMPANY_CODE_LENGTH, generate_company_code, normalize_company_code
)


class CompanyUtilsTests(TestCase):

    def test_generate_company_code(self):
        code = generate_company_code()
        self.assertEqual(len(code), COMPANY_CODE_LENGTH)
        self.assertTrue(all(ch in COMPANY_CODE_ALPHABET for ch in code))

    def test_normalize_company_code(self):
        self.assertEqual(normalize_company_code('  ab12cd34 '), 'AB12CD34')
        self.assertEqual(normalize_company_code(None), '')

    def test_company_code_stored_uppercase(self):
        company = Company.objects.create(name='Test', company_code='abc123xy')
        self.assertEqual(company.company_code, 'ABC123XY')

    def test_profile_created_for_new_user(self):
        user = TestDataFactory.create_user(email='signal@example.com')
        profile = Profile.objects.get(user=user)
        self.assertEqual(profile.email, 'signal@example.com')
        self.assertIsNone(profile.company)


class CompanyAPITests(TestCase):
    """Create, join and inspect companies"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_company(self):
        response = self.client.post('/api/v1/companies/', {'name': 'Moda Tekstil'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        company = Company.objects.get(name='Moda Tekstil')
        self.assertEqual(response.data['company']['company_code'], company.company_code)
        self.assertEqual(response.data['message'], f'Şirket oluşturuldu. Şirket kodu: {company.company_code}')
        self.assertEqual(company.created_by, self.user)
        self.assertEqual(Profile.objects.get(user=self.user).company, company)
        self.assertTrue(AuditLog.objects.filter(action='company_create', company=company).exists())

    def test_create_company_blank_name(self):
        response = self.client.post('/api/v1/companies/', {'name': '   '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Company.objects.exists())

    def test_create_company_when_already_member(self):
        TestDataFactory.create_company(owner=self.user)
        response = self.client.post('/api/v1/companies/', {'name': 'İkinci'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Zaten bir şirkete üyesiniz.')

    def test_join_company(self):
        company = TestDataFactory.create_company(owner=TestDataFactory.create_user(), name='Atölye A')
        response = self.client.post('/api/v1/companies/join/', {
            'company_code': company.company_code.lower(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Atölye A şirketine katıldınız.')
        self.assertEqual(Profile.objects.get(user=self.user).company, company)
        self.assertTrue(AuditLog.objects.filter(action='company_join', company=company, user=self.user).exists())

    def test_join_with_invalid_code(self):
        response = self.client.post('/api/v1/companies/join/', {'company_code': 'NOPE0000'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Geçersiz şirket kodu.')
        self.assertIsNone(Profile.objects.get(user=self.user).company)

    def test_join_when_already_member(self):
        TestDataFactory.create_company(owner=self.user)
        other = TestDataFactory.create_company()
        response = self.client.post('/api/v1/companies/join/', {'company_code': other.company_code}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_current_company(self):
        response = self.client.get('/api/v1/companies/current/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        company = TestDataFactory.create_company(owner=self.user)
        response = self.client.get('/api/v1/companies/current/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], company.id)
        self.assertEqual(response.data['member_count'], 1)

    def test_members(self):
        company = TestDataFactory.create_company(owner=self.user)
        TestDataFactory.add_member(company, TestDataFactory.create_user())
        TestDataFactory.create_company(owner=TestDataFactory.create_user())

        response = self.client.get('/api/v1/companies/current/members/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)


class ProfileAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_get_profile(self):
        response = self.client.get('/api/v1/profile/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], self.user.email)

    def test_update_profile_cannot_change_company(self):
        company = TestDataFactory.create_company()
        response = self.client.patch('/api/v1/profile/', {
            'full_name': 'Zeynep Kaya',
            'company': company.id,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        profile = Profile.objects.get(user=self.user)
        self.assertEqual(profile.full_name, 'Zeynep Kaya')
        self.assertIsNone(profile.company)
