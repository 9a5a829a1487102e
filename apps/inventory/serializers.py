from decimal import Decimal

from rest_framework import serializers

from apps.common.serializers import OptionalTextField
from apps.inventory.models import MAX_STOCK_QUANTITY, Product

SKU_PATTERN = r"^[A-Z]{3}-[0-9]{4}\Z"


class ProductSerializer(serializers.ModelSerializer):
    sku = serializers.RegexField(
        SKU_PATTERN,
        error_messages={"invalid": "SKU must be 3 uppercase letters, a hyphen and 4 digits (e.g. PRD-0001)."},
    )
    name = serializers.CharField(min_length=3, max_length=100)
    description = OptionalTextField(max_length=500)
    quantity = serializers.IntegerField(min_value=0, max_value=MAX_STOCK_QUANTITY)
    minStock = serializers.IntegerField(source="min_stock", min_value=0, max_value=MAX_STOCK_QUANTITY)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    lowStock = serializers.BooleanField(source="needs_restock", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "description",
            "quantity",
            "minStock",
            "price",
            "lowStock",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]


class ProductUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=3, max_length=100)
    description = OptionalTextField(max_length=500)
    minStock = serializers.IntegerField(source="min_stock", min_value=0, max_value=MAX_STOCK_QUANTITY)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))


class StockQuantityQuerySerializer(serializers.Serializer):
    cantidad = serializers.IntegerField(min_value=1, max_value=MAX_STOCK_QUANTITY)


class NameSearchQuerySerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=100, trim_whitespace=True, allow_blank=True)


class PriceRangeQuerySerializer(serializers.Serializer):
    min = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    max = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
