from django.urls import path
from .views import StartPageView, AboutView, PaymentView

urlpatterns = [
    path("storefront/", StartPageView.as_view(), name="api-storefront-start"),
    path("storefront/about/", AboutView.as_view(), name="api-storefront-about"),
    path("payment/", PaymentView.as_view(), name="api-payment"),
]
