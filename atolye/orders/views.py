import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from atolye.core.permissions import HasCompany, get_user_company
from atolye.core.utils import create_audit_log, serialize_changes, parse_date_param, INVALID_DATE_MESSAGE
from .models import Order
from .serializers import OrderSerializer

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasCompany])
def order_list_create(request):
    """List the company's orders or create a new order"""
    company = get_user_company(request.user)
    if request.method == 'GET':
        queryset = Order.objects.filter(company=company).prefetch_related('items__product')

        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)

        search = request.query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(order_number__icontains=search) | Q(customer_name__icontains=search)
            )

        try:
            date_from = parse_date_param(request.query_params.get('date_from'))
            date_to = parse_date_param(request.query_params.get('date_to'))
        except ValueError:
            return Response({'error': INVALID_DATE_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)
        if date_from:
            queryset = queryset.filter(order_date__gte=date_from)
        if date_to:
            queryset = queryset.filter(order_date__lte=date_to)

        serializer = OrderSerializer(queryset.order_by('-order_date', '-created_at'), many=True)
        return Response(serializer.data)

    serializer = OrderSerializer(data=request.data, context={'company': company})
    if serializer.is_valid():
        order = serializer.save(
            company=company,
            user=request.user,
            created_by=request.user,
            updated_by=request.user,
        )
        logger.info(f"Order {order.order_number} created in company {company.id}")
        create_audit_log(
            request=request,
            action='create',
            model_name='Order',
            object_id=order.id,
            object_name=order.order_number,
            company=company,
            changes=serialize_changes(serializer.validated_data),
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, HasCompany])
def order_detail(request, pk):
    """Retrieve, update or delete an order"""
    company = get_user_company(request.user)
    order = get_object_or_404(Order, pk=pk, company=company)

    if request.method == 'GET':
        serializer = OrderSerializer(order)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = OrderSerializer(
            order,
            data=request.data,
            partial=request.method == 'PATCH',
            context={'company': company}
        )
        if serializer.is_valid():
            order = serializer.save(updated_by=request.user)
            create_audit_log(
                request=request,
                action='update',
                model_name='Order',
                object_id=order.id,
                object_name=order.order_number,
                company=company,
                changes=serialize_changes(serializer.validated_data),
            )
            return Response(OrderSerializer(order).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(
            request=request,
            action='delete',
            model_name='Order',
            object_id=order.id,
            object_name=order.order_number,
            company=company,
        )
        order.delete()
        logger.info(f"Order {pk} deleted from company {company.id}")
        return Response(status=status.HTTP_204_NO_CONTENT)
