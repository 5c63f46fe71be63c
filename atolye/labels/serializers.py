from rest_framework import serializers

from atolye.catalog.models import Product
from atolye.core.serializers import CompanyScopedPrimaryKeyRelatedField
from .models import Label


class LabelSerializer(serializers.ModelSerializer):
    product = CompanyScopedPrimaryKeyRelatedField(
        queryset=Product.objects.all(),
        error_messages={
            'required': 'Lütfen bir ürün seçin.',
            'null': 'Lütfen bir ürün seçin.',
        }
    )
    product_name = serializers.CharField(source='product.display_name', read_only=True)
    order_status_display = serializers.CharField(source='get_order_status_display', read_only=True)

    class Meta:
        model = Label
        fields = [
            'id', 'product', 'product_name', 'order_status', 'order_status_display',
            'received_quantity', 'count_quantity', 'brand', 'attached_model', 'model_owner',
            'order_date', 'delivery_date',
            'user', 'created_by', 'updated_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['user', 'created_by', 'updated_by', 'created_at', 'updated_at']

