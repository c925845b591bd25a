from rest_framework import serializers


class CatalogItemReadSerializer(serializers.Serializer):
    # Matches CatalogItemDTO shapes used for responses
    name = serializers.CharField()
    price = serializers.CharField()
    image = serializers.CharField(allow_blank=True)

    def to_representation(self, instance):
        if instance is None:
            return None
        # If it's already a dataclass DTO, extract attributes directly for speed
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "name": getattr(instance, "name"),
                "price": getattr(instance, "price"),
                "image": getattr(instance, "image"),
            }
        return super().to_representation(instance)
