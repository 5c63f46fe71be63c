"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from atolye.companies.models import Company
from atolye.companies.utils import generate_unique_company_code
from atolye.catalog.models import Category, Product
from atolye.orders.models import Order, OrderItem
from atolye.orders.utils import generate_order_number
from atolye.production.models import ProductionRecord
from atolye.labels.models import Label
from decimal import Decimal
from django.utils import timezone
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(email=None, password='testpass123', full_name=None, is_staff=False, is_superuser=False):
        """Create a test user (the profile comes from the post_save signal)"""
        if not email:
            email = f'testuser_{TestDataFactory.random_string(6).lower()}@test.com'
        user = User.objects.create_user(
            username=email[:150],
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser
        )
        if full_name:
            user.profile.full_name = full_name
            user.profile.save()
        return user

    @staticmethod
    def create_company(owner=None, name=None):
        """Create a test company; the owner becomes a member"""
        if not name:
            name = f'Company_{TestDataFactory.random_string(6)}'
        company = Company.objects.create(
            name=name,
            company_code=generate_unique_company_code(),
            created_by=owner
        )
        if owner is not None:
            TestDataFactory.add_member(company, owner)
        return company

    @staticmethod
    def add_member(company, user):
        """Put a user into a company"""
        profile = user.profile
        profile.company = company
        profile.save()
        return profile

    @staticmethod
    def create_category(company, name=None, description=None, user=None):
        """Create a test category"""
        if not name:
            name = f'Category_{TestDataFactory.random_string(6)}'
        return Category.objects.create(
            company=company,
            user=user,
            name=name,
            description=description or f'Test category {name}'
        )

    @staticmethod
    def create_product(company, name=None, model=None, stock_quantity=10, min_stock_level=None,
                       category=None, fabric_status=None, price=None, cost=None, user=None):
        """Create a test product"""
        if not name:
            name = f'Product_{TestDataFactory.random_string(6)}'
        return Product.objects.create(
            company=company,
            user=user,
            name=name,
            model=model,
            stock_quantity=stock_quantity,
            min_stock_level=min_stock_level,
            category=category,
            fabric_status=fabric_status,
            price=price,
            cost=cost,
            created_by=user,
            updated_by=user
        )

    @staticmethod
    def create_order(company, user=None, customer_name=None, status=Order.STATUS_PENDING,
                     order_date=None, total_amount=None, total_delivery_quantity=None):
        """Create a test order"""
        return Order.objects.create(
            company=company,
            user=user,
            order_number=generate_order_number(company),
            customer_name=customer_name or f'Customer_{TestDataFactory.random_string(6)}',
            status=status,
            order_date=order_date or timezone.localdate(),
            total_amount=total_amount,
            total_delivery_quantity=total_delivery_quantity,
            created_by=user,
            updated_by=user
        )

    @staticmethod
    def create_order_item(order, product, quantity=1, unit_price=None):
        """Create a test order item"""
        if unit_price is None:
            unit_price = Decimal('100.00')
        return OrderItem.objects.create(
            order=order,
            product=product,
            user=order.user,
            quantity=quantity,
            unit_price=unit_price
        )

    @staticmethod
    def create_production_record(company, product, quantity_produced=10, defective_quantity=None,
                                 production_date=None, user=None):
        """Create a test production record"""
        return ProductionRecord.objects.create(
            company=company,
            user=user,
            product=product,
            quantity_produced=quantity_produced,
            defective_quantity=defective_quantity,
            production_date=production_date or timezone.localdate(),
            created_by=user,
            updated_by=user
        )

    @staticmethod
    def create_label(company, product, order_status=Label.STATUS_ORDERED, brand=None, user=None, **kwargs):
        """Create a test label order"""
        return Label.objects.create(
            company=company,
            user=user,
            product=product,
            order_status=order_status,
            brand=brand or f'Brand_{TestDataFactory.random_string(6)}',
            created_by=user,
            updated_by=user,
            **kwargs
        )


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
