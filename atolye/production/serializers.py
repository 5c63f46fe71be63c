from rest_framework import serializers

from atolye.catalog.models import Product
from atolye.core.serializers import CompanyScopedPrimaryKeyRelatedField
from .models import ProductionRecord


class ProductionRecordSerializer(serializers.ModelSerializer):
    product = CompanyScopedPrimaryKeyRelatedField(
        queryset=Product.objects.all(),
        error_messages={
            'required': 'Lütfen bir ürün seçin.',
            'null': 'Lütfen bir ürün seçin.',
        }
    )
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_display_name = serializers.CharField(source='product.display_name', read_only=True)
    quantity_produced = serializers.IntegerField(
        error_messages={
            'required': 'Lütfen geçerli bir üretilen miktar girin.',
            'invalid': 'Lütfen geçerli bir üretilen miktar girin.',
            'null': 'Lütfen geçerli bir üretilen miktar girin.',
        }
    )
    defective_quantity = serializers.IntegerField(required=False, allow_null=True)
    net_quantity = serializers.IntegerField(read_only=True)

    class Meta:
        model = ProductionRecord
        fields = [
            'id', 'product', 'product_name', 'product_display_name',
            'quantity_produced', 'defective_quantity', 'net_quantity',
            'production_date', 'notes',
            'user', 'created_by', 'updated_by', 'created_at',
        ]
        read_only_fields = ['user', 'created_by', 'updated_by', 'created_at']
        extra_kwargs = {
            'production_date': {'required': False},
        }

    def validate_quantity_produced(self, value):
        if value <= 0:
            raise serializers.ValidationError('Lütfen geçerli bir üretilen miktar girin.')
        return value

    def validate_defective_quantity(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError('Hatalı miktar negatif olamaz.')
        return value
