import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from atolye.core.permissions import HasCompany, get_user_company
from atolye.core.utils import create_audit_log, serialize_changes
from .models import Label
from .serializers import LabelSerializer

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasCompany])
def label_list_create(request):
    """List the company's label orders or create a new one"""
    company = get_user_company(request.user)
    if request.method == 'GET':
        queryset = Label.objects.filter(company=company).select_related('product')

        order_status = request.query_params.get('order_status')
        if order_status:
            queryset = queryset.filter(order_status=order_status)

        product_id = request.query_params.get('product')
        if product_id:
            if not product_id.isdigit():
                return Response({'error': 'Geçersiz ürün.'}, status=status.HTTP_400_BAD_REQUEST)
            queryset = queryset.filter(product_id=product_id)

        search = request.query_params.get('search')
        if search:
            search = search.strip()
            queryset = queryset.filter(
                Q(product__name__icontains=search) |
                Q(brand__icontains=search) |
                Q(attached_model__icontains=search)
            )

        serializer = LabelSerializer(queryset.order_by('-created_at'), many=True)
        return Response(serializer.data)

    serializer = LabelSerializer(data=request.data, context={'company': company})
    if serializer.is_valid():
        label = serializer.save(
            company=company,
            user=request.user,
            created_by=request.user,
            updated_by=request.user,
        )
        logger.info(f"Label {label.id} created in company {company.id}")
        create_audit_log(
            request=request,
            action='create',
            model_name='Label',
            object_id=label.id,
            object_name=label.product.display_name,
            company=company,
            changes=serialize_changes(serializer.validated_data),
        )
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, HasCompany])
def label_detail(request, pk):
    """Retrieve, update or delete a label order"""
    company = get_user_company(request.user)
    label = get_object_or_404(Label.objects.select_related('product'), pk=pk, company=company)

    if request.method == 'GET':
        serializer = LabelSerializer(label)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = LabelSerializer(
            label,
            data=request.data,
            partial=request.method == 'PATCH',
            context={'company': company}
        )
        if serializer.is_valid():
            serializer.save(updated_by=request.user)
            create_audit_log(
                request=request,
                action='update',
                model_name='Label',
                object_id=label.id,
                object_name=label.product.display_name,
                company=company,
                changes=serialize_changes(serializer.validated_data),
            )
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(
            request=request,
            action='delete',
            model_name='Label',
            object_id=label.id,
            object_name=label.product.display_name,
            company=company,
        )
        label.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
