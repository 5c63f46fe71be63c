import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import transaction
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404

from atolye.core.permissions import HasCompany, get_user_company
from atolye.core.utils import create_audit_log, serialize_changes
from .models import Category, Product, StockAdjustment
from .filters import ProductFilter
from .serializers import (
    CategorySerializer, ProductSerializer, InventoryItemSerializer, StockAdjustmentSerializer
)
from .utils import apply_stock_adjustment

logger = logging.getLogger(__name__)


# Category views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasCompany])
def category_list_create(request):
    """List the company's categories or create a new category"""
    company = get_user_company(request.user)
    if request.method == 'GET':
        categories = Category.objects.filter(company=company).order_by('name')
        serializer = CategorySerializer(categories, many=True)
        return Response(serializer.data)
    else:
        serializer = CategorySerializer(data=request.data)
        if serializer.is_valid():
            category = serializer.save(company=company, user=request.user)
            create_audit_log(
                request=request,
                action='create',
                model_name='Category',
                object_id=category.id,
                object_name=category.name,
                company=company,
            )
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, HasCompany])
def category_detail(request, pk):
    """Retrieve, update or delete a category"""
    company = get_user_company(request.user)
    category = get_object_or_404(Category, pk=pk, company=company)

    if request.method == 'GET':
        serializer = CategorySerializer(category)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = CategorySerializer(category, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(
                request=request,
                action='update',
                model_name='Category',
                object_id=category.id,
                object_name=category.name,
                company=company,
                changes=serialize_changes(serializer.validated_data),
            )
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(
            request=request,
            action='delete',
            model_name='Category',
            object_id=category.id,
            object_name=category.name,
            company=company,
        )
        category.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# Product views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasCompany])
def product_list_create(request):
    """List the company's products or create a new product"""
    company = get_user_company(request.user)
    if request.method == 'GET':
        queryset = Product.objects.filter(company=company).select_related('category')
        filterset = ProductFilter(request.query_params, queryset=queryset)
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        serializer = ProductSerializer(filterset.qs.order_by('name'), many=True)
        return Response(serializer.data)
    else:
        serializer = ProductSerializer(data=request.data, context={'company': company})
        if serializer.is_valid():
            product = serializer.save(
                company=company,
                user=request.user,
                created_by=request.user,
                updated_by=request.user,
            )
            logger.info(f"Product {product.id} created in company {company.id}")
            create_audit_log(
                request=request,
                action='create',
                model_name='Product',
                object_id=product.id,
                object_name=product.display_name,
                company=company,
                changes=serialize_changes(serializer.validated_data),
            )
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, HasCompany])
def product_detail(request, pk):
    """Retrieve, update or delete a product"""
    company = get_user_company(request.user)
    product = get_object_or_404(Product.objects.select_related('category'), pk=pk, company=company)

    if request.method == 'GET':
        serializer = ProductSerializer(product)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ProductSerializer(
            product,
            data=request.data,
            partial=request.method == 'PATCH',
            context={'company': company}
        )
        if serializer.is_valid():
            serializer.save(updated_by=request.user)
            create_audit_log(
                request=request,
                action='update',
                model_name='Product',
                object_id=product.id,
                object_name=product.display_name,
                company=company,
                changes=serialize_changes(serializer.validated_data),
            )
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            product.delete()
        except ProtectedError:
            return Response(
                {'error': 'Bu ürün siparişlerde, üretim kayıtlarında veya etiketlerde kullanıldığı için silinemez.'},
                status=status.HTTP_409_CONFLICT
            )
        create_audit_log(
            request=request,
            action='delete',
            model_name='Product',
            object_id=pk,
            object_name=product.display_name,
            company=company,
        )
        logger.info(f"Product {pk} deleted from company {company.id}")
        return Response(status=status.HTTP_204_NO_CONTENT)


# Inventory views
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def inventory_list(request):
    """Stock overview of the company's products"""
    company = get_user_company(request.user)
    queryset = Product.objects.filter(company=company).select_related('category')
    filterset = ProductFilter(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
    serializer = InventoryItemSerializer(filterset.qs.order_by('name'), many=True)
    return Response(serializer.data)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasCompany])
def product_stock_adjustments(request, pk):
    """List a product's stock adjustments or apply a new one"""
    company = get_user_company(request.user)
    product = get_object_or_404(Product, pk=pk, company=company)

    if request.method == 'GET':
        adjustments = product.adjustments.select_related('product').order_by('-created_at')
        serializer = StockAdjustmentSerializer(adjustments, many=True)
        return Response(serializer.data)

    serializer = StockAdjustmentSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        product = Product.objects.select_for_update().get(pk=product.pk)
        previous_quantity = product.stock_quantity or 0
        new_quantity = apply_stock_adjustment(
            previous_quantity,
            serializer.validated_data['adjustment_type'],
            serializer.validated_data['quantity'],
        )
        product.stock_quantity = new_quantity
        product.updated_by = request.user
        product.save(update_fields=['stock_quantity', 'updated_by', 'updated_at'])
        adjustment = serializer.save(
            company=company,
            product=product,
            resulting_quantity=new_quantity,
            created_by=request.user,
        )

    create_audit_log(
        request=request,
        action='stock_adjust',
        model_name='StockAdjustment',
        object_id=adjustment.id,
        object_name=product.display_name,
        company=company,
        changes={
            'adjustment_type': adjustment.adjustment_type,
            'quantity': adjustment.quantity,
            'reason': adjustment.reason,
            'previous_stock_quantity': previous_quantity,
            'new_stock_quantity': new_quantity,
        }
    )

    return Response(StockAdjustmentSerializer(adjustment).data, status=status.HTTP_201_CREATED)
