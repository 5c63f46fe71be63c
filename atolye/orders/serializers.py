from django.db import transaction
from rest_framework import serializers

from atolye.catalog.models import Product
from atolye.core.serializers import CompanyScopedPrimaryKeyRelatedField
from .models import Order, OrderItem
from .utils import generate_order_number


class OrderItemSerializer(serializers.ModelSerializer):
    product = CompanyScopedPrimaryKeyRelatedField(queryset=Product.objects.all())
    product_name = serializers.CharField(source='product.display_name', read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'product_name', 'quantity', 'unit_price', 'total_price', 'created_at']
        read_only_fields = ['total_price', 'created_at']


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, required=False)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'customer_name', 'customer_email', 'customer_phone',
            'status', 'status_display', 'total_amount', 'total_delivery_quantity',
            'order_date', 'delivery_date', 'notes', 'items', 'item_count',
            'user', 'created_by', 'updated_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['user', 'created_by', 'updated_by', 'created_at', 'updated_at']
        extra_kwargs = {
            'order_number': {'required': False, 'allow_blank': True},
            'order_date': {'required': False},
        }
        # Uniqueness per company is checked in validate_order_number
        validators = []

    def get_item_count(self, obj):
        return len(obj.items.all())

    def validate_customer_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Müşteri adı boş olamaz.')
        return value

    def validate_order_number(self, value):
        value = (value or '').strip()
        if not value:
            return value
        company = self.context.get('company')
        queryset = Order.objects.filter(company=company, order_number=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError('Bu sipariş numarası zaten kullanılıyor.')
        return value

    def _save_items(self, order, items_data):
        for item_data in items_data:
            OrderItem.objects.create(order=order, user=order.user, **item_data)
        if items_data:
            order.total_amount = order.get_items_total()
            order.save(update_fields=['total_amount', 'updated_at'])

    def create(self, validated_data):
        items_data = validated_data.pop('items', [])
        if not validated_data.get('order_number'):
            validated_data['order_number'] = generate_order_number(validated_data['company'])

        with transaction.atomic():
            order = super().create(validated_data)
            self._save_items(order, items_data)
        return order

    def update(self, instance, validated_data):
        items_data = validated_data.pop('items', None)
        if 'order_number' in validated_data and not validated_data['order_number']:
            # A blank number keeps the current one
            validated_data.pop('order_number')

        with transaction.atomic():
            order = super().update(instance, validated_data)
            if items_data is not None:
                # Supplied items replace the existing ones
                order.items.all().delete()
                self._save_items(order, items_data)
            elif order.items.exists():
                # Orders with items always carry the items total
                order.total_amount = order.get_items_total()
                order.save(update_fields=['total_amount', 'updated_at'])
        return order
