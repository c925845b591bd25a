from django.urls import path
from .views import CatalogItemListView

urlpatterns = [
    path('items/', CatalogItemListView.as_view(), name='api-catalog-items-list'),
]
