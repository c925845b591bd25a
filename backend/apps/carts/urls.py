from django.urls import path
from .views import (
    CartView,
    CartItemListView,
    CartItemDetailView,
    CartExportView,
    CartImportView,
)

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("items/", CartItemListView.as_view(), name="api-cart-items"),
    path("items/<str:name>/", CartItemDetailView.as_view(), name="api-cart-item-detail"),
    path("export/", CartExportView.as_view(), name="api-cart-export"),
    path("import/", CartImportView.as_view(), name="api-cart-import"),
]
