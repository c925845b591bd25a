from django.conf import settings
from django.urls import reverse
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import ensure_csrf_cookie
from django.utils.translation import gettext as _
from rest_framework import serializers, status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.api.exceptions import ApplicationError
from apps.api.schemas import ErrorResponseSerializer
from apps.carts.container import build_cart_service
from apps.common import get_logger

logger = get_logger(__name__).bind(component="storefront", layer="view")

DEFAULT_STORE_NAME = "Bakery"


class NavigationLinkSerializer(serializers.Serializer):
    label = serializers.CharField()
    href = serializers.CharField()


class StartPageSerializer(serializers.Serializer):
    store = serializers.CharField()
    greeting = serializers.CharField()
    links = NavigationLinkSerializer(many=True)


class AboutSerializer(serializers.Serializer):
    store = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    links = NavigationLinkSerializer(many=True)


def _store_name() -> str:
    return getattr(settings, "STORE_NAME", DEFAULT_STORE_NAME)


def _home_link():
    return {"label": _("Back to start page"), "href": reverse("api-storefront-start")}


@method_decorator(ensure_csrf_cookie, name="dispatch")
@extend_schema(tags=["Storefront"])
class StartPageView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(summary="Start page", responses={200: StartPageSerializer})
    def get(self, request):
        payload = {
            "store": _store_name(),
            "greeting": _("welcome!"),
            "links": [
                {"label": _("make an order"), "href": reverse("api-catalog-items-list")},
                {"label": _("about"), "href": reverse("api-storefront-about")},
            ],
        }
        return Response(StartPageSerializer(payload).data)


@extend_schema(tags=["Storefront"])
class AboutView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(summary="About the store", responses={200: AboutSerializer})
    def get(self, request):
        payload = {
            "store": _store_name(),
            "title": _("About us"),
            "description": getattr(settings, "STORE_DESCRIPTION", ""),
            "links": [_home_link()],
        }
        return Response(AboutSerializer(payload).data)


@extend_schema(tags=["Storefront"])
class PaymentView(APIView):
    permission_classes = [AllowAny]
    cart_service = build_cart_service()
    log = logger.bind(view="PaymentView")

    @extend_schema(
        summary="Pay for the order",
        description="Payment is not available yet; always answers 501 with the amount due.",
        request=None,
        responses={501: OpenApiResponse(response=ErrorResponseSerializer)},
    )
    def post(self, request):
        cart = self.cart_service.get_cart(request.session)
        self.log.info(
            "Payment requested but not implemented",
            total=cart.total_price,
            item_count=cart.item_count,
        )
        raise ApplicationError(
            "NOT_IMPLEMENTED",
            _("Payment is not implemented yet"),
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            details={"totalPrice": cart.total_price, "totalDisplay": cart.total_display},
            hint=_("Return to the start page"),
            extra={"links": [_home_link()]},
        )
