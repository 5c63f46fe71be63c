import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from atolye.core.permissions import HasCompany, get_user_company
from atolye.core.utils import create_audit_log, serialize_changes, parse_date_param, INVALID_DATE_MESSAGE
from .models import ProductionRecord
from .serializers import ProductionRecordSerializer

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasCompany])
def production_record_list_create(request):
    """List the company's production records or record new output"""
    company = get_user_company(request.user)
    if request.method == 'GET':
        queryset = ProductionRecord.objects.filter(company=company).select_related('product')

        search = request.query_params.get('search')
        if search:
            queryset = queryset.filter(product__name__icontains=search.strip())

        product_id = request.query_params.get('product')
        if product_id:
            if not product_id.isdigit():
                return Response({'error': 'Geçersiz ürün.'}, status=status.HTTP_400_BAD_REQUEST)
            queryset = queryset.filter(product_id=product_id)

        try:
            date_from = parse_date_param(request.query_params.get('date_from'))
            date_to = parse_date_param(request.query_params.get('date_to'))
        except ValueError:
            return Response({'error': INVALID_DATE_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)
        if date_from:
            queryset = queryset.filter(production_date__gte=date_from)
        if date_to:
            queryset = queryset.filter(production_date__lte=date_to)

        serializer = ProductionRecordSerializer(queryset.order_by('-production_date', '-created_at'), many=True)
        return Response(serializer.data)

    serializer = ProductionRecordSerializer(data=request.data, context={'company': company})
    if serializer.is_valid():
        record = serializer.save(
            company=company,
            user=request.user,
            created_by=request.user,
            updated_by=request.user,
        )
        logger.info(f"Production record {record.id} ({record.quantity_produced} units) created in company {company.id}")
        create_audit_log(
            request=request,
            action='create',
            model_name='ProductionRecord',
            object_id=record.id,
            object_name=record.product.display_name,
            company=company,
            changes=serialize_changes(serializer.validated_data),
        )
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, HasCompany])
def production_record_detail(request, pk):
    """Retrieve, update or delete a production record"""
    company = get_user_company(request.user)
    record = get_object_or_404(ProductionRecord.objects.select_related('product'), pk=pk, company=company)

    if request.method == 'GET':
        serializer = ProductionRecordSerializer(record)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ProductionRecordSerializer(
            record,
            data=request.data,
            partial=request.method == 'PATCH',
            context={'company': company}
        )
        if serializer.is_valid():
            serializer.save(updated_by=request.user)
            create_audit_log(
                request=request,
                action='update',
                model_name='ProductionRecord',
                object_id=record.id,
                object_name=record.product.display_name,
                company=company,
                changes=serialize_changes(serializer.validated_data),
            )
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(
            request=request,
            action='delete',
            model_name='ProductionRecord',
            object_id=record.id,
            object_name=record.product.display_name,
            company=company,
        )
        record.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
