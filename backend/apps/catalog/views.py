from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema

from .container import build_catalog_service
from .serializers import CatalogItemReadSerializer
from apps.common import get_logger

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class CatalogItemListView(APIView):
    permission_classes = [AllowAny]
    service = build_catalog_service()
    log = logger.bind(view="CatalogItemListView")

    @extend_schema(
        operation_id="catalog_items_list",
        summary="List bakery items",
        description="Returns the fixed storefront catalog in display order.",
        responses={200: CatalogItemReadSerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Handling catalog list request")
        data = self.service.list_item_dtos()
        return Response(CatalogItemReadSerializer(data, many=True).data)
