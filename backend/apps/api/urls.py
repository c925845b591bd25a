from django.urls import path, include

urlpatterns = [
    path("catalog/", include("apps.catalog.urls")),
    path("cart/", include("apps.carts.urls")),
    # Start page, about and payment screens
    path("", include("apps.storefront.urls")),
]
