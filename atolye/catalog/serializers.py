from rest_framework import serializers
from atolye.core.serializers import CompanyScopedPrimaryKeyRelatedField
from .models import Category, Product, StockAdjustment
from .utils import is_stock_alert, get_stock_level


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Kategori adı boş olamaz.')
        return value


class ProductSerializer(serializers.ModelSerializer):
    category = CompanyScopedPrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        required=False,
        allow_null=True
    )
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    display_name = serializers.CharField(read_only=True)
    fabric_status_display = serializers.CharField(source='get_fabric_status_display', read_only=True, default=None)
    is_stock_alert = serializers.SerializerMethodField()
    stock_level = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'model', 'display_name', 'sku', 'description', 'color',
            'price', 'cost', 'stock_quantity', 'min_stock_level',
            'category', 'category_name',
            'fabric_number', 'fabric_status', 'fabric_status_display',
            'order_number', 'ordering_brand',
            'is_stock_alert', 'stock_level',
            'user', 'created_by', 'updated_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['user', 'created_by', 'updated_by', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Ürün adı boş olamaz.')
        return value

    def get_is_stock_alert(self, obj):
        return is_stock_alert(obj.stock_quantity, obj.min_stock_level)

    def get_stock_level(self, obj):
        return get_stock_level(obj.stock_quantity, obj.min_stock_level)


class InventoryItemSerializer(serializers.ModelSerializer):
    """Compact stock view of a product"""
    display_name = serializers.CharField(read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    is_stock_alert = serializers.SerializerMethodField()
    stock_level = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ['id', 'name', 'model', 'display_name', 'category_name', 'stock_quantity',
                  'min_stock_level', 'is_stock_alert', 'stock_level', 'updated_at']

    def get_is_stock_alert(self, obj):
        return is_stock_alert(obj.stock_quantity, obj.min_stock_level)

    def get_stock_level(self, obj):
        return get_stock_level(obj.stock_quantity, obj.min_stock_level)


class StockAdjustmentSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.display_name', read_only=True)

    class Meta:
        model = StockAdjustment
        fields = ['id', 'product', 'product_name', 'adjustment_type', 'quantity', 'reason', 'notes',
                  'resulting_quantity', 'created_by', 'created_at']
        read_only_fields = ['product', 'resulting_quantity', 'created_by', 'created_at']
