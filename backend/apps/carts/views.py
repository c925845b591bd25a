from django.http import HttpResponse
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import ensure_csrf_cookie
from django.utils.translation import gettext as _
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from .container import build_cart_service
from .codec import CartParseError, UnresolvedItemError
from .services import CartQuantityLimitError
from .serializers import (
    CartReadSerializer,
    CartItemWriteSerializer,
    CartTransportSerializer,
)
from apps.api.exceptions import ApplicationError
from apps.api.schemas import ErrorResponseSerializer
from apps.catalog.services import CatalogItemNotFoundError
from apps.common import get_logger

logger = get_logger(__name__).bind(component="carts", layer="view")


@method_decorator(ensure_csrf_cookie, name="dispatch")
@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get cart",
        description="Order summary for the current session: lines, quantities and the running total.",
        responses={200: CartReadSerializer},
    )
    def get(self, request):
        dto = self.service.get_cart(request.session)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Reset cart",
        description="Removes every line and sets the total to zero. Safe to repeat.",
        responses={200: CartReadSerializer},
    )
    def delete(self, request):
        self.log.info("Resetting cart via API")
        dto = self.service.reset_cart(request.session)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemListView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartItemListView")

    @extend_schema(
        summary="Add item to cart",
        description="Adds one unit of a catalog item, creating the line if needed.",
        request=CartItemWriteSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CartItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        name = serializer.validated_data["name"]
        try:
            dto = self.service.add_item(request.session, name)
        except CatalogItemNotFoundError as exc:
            raise ApplicationError(
                "NOT_FOUND", _("Catalog item not found"), details={"name": exc.name}
            ) from exc
        except CartQuantityLimitError as exc:
            raise ApplicationError(
                "VALIDATION_ERROR",
                _("Cart quantity limit reached"),
                details={"name": exc.name, "limit": exc.limit},
            ) from exc
        self.log.debug("Item added via API", name=name, total=dto.total_price)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartItemDetailView")

    @extend_schema(
        summary="Remove item from cart",
        description=(
            "Removes one unit of the named item; the line disappears when its quantity "
            "reaches zero. Removing an item that is not in the cart changes nothing."
        ),
        parameters=[OpenApiParameter("name", str, OpenApiParameter.PATH)],
        responses={200: CartReadSerializer},
    )
    def delete(self, request, name: str):
        dto = self.service.remove_item(request.session, name)
        self.log.debug("Item removal handled via API", name=name, total=dto.total_price)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartExportView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartExportView")

    @extend_schema(
        summary="Export cart",
        description="Serialized cart keyed by item name. Prices and images are not included.",
        responses={200: CartTransportSerializer},
    )
    def get(self, request):
        text = self.service.export_cart(request.session)
        return HttpResponse(text, content_type="application/json; charset=utf-8")


@extend_schema(tags=["Cart"])
class CartImportView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartImportView")

    @extend_schema(
        summary="Import cart",
        description=(
            "Replaces the session cart with a serialized cart. Names are resolved against "
            "the catalog; names it does not know follow the configured unresolved-name policy."
        ),
        request=CartTransportSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            422: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        # Read the raw body: the serialized cart is parsed by the cart codec, not DRF.
        try:
            dto = self.service.import_cart(request.session, request.body)
        except CartParseError as exc:
            self.log.info("Cart import rejected: malformed payload", error=str(exc))
            raise ApplicationError(
                "VALIDATION_ERROR", _("Malformed cart payload"), details={"detail": str(exc)}
            ) from exc
        except UnresolvedItemError as exc:
            self.log.info("Cart import rejected: unknown items", names=exc.names)
            raise ApplicationError(
                "UNPROCESSABLE_ENTITY",
                _("Cart contains items that are not in the catalog"),
                details={"names": exc.names},
            ) from exc
        return Response(CartReadSerializer(dto).data)
