from rest_framework import serializers
from apps.catalog.serializers import CatalogItemReadSerializer
from .codec import MAX_QUANTITY


class CartLineSerializer(serializers.Serializer):
    item = CatalogItemReadSerializer()
    quantity = serializers.IntegerField()
    subtotal = serializers.CharField()


class CartReadSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True)
    totalPrice = serializers.CharField(source="total_price")
    totalDisplay = serializers.CharField(source="total_display")
    itemCount = serializers.IntegerField(source="item_count")


class CartItemWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, trim_whitespace=False)


class CartTransportSerializer(serializers.Serializer):
    # Shape of the serialized cart text, for schema docs only.
    items = serializers.DictField(
        child=serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)
    )
