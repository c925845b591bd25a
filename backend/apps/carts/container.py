from __future__ import annotations

from django.conf import settings

from apps.catalog.container import build_catalog_service
from apps.catalog.mappers import CatalogItemMapper

from .codec import UnresolvedNamePolicy
from .mappers import CartLineMapper, CartMapper
from .repositories import SessionCartRepository
from .services import CartService


def build_cart_service() -> CartService:
    cart_line_mapper = CartLineMapper(CatalogItemMapper())
    cart_mapper = CartMapper(cart_line_mapper)
    return CartService(
        carts=SessionCartRepository(),
        catalog=build_catalog_service(),
        cart_mapper=cart_mapper,
        unresolved_policy=getattr(
            settings, "CART_UNRESOLVED_NAME_POLICY", UnresolvedNamePolicy.SYNTHESIZE
        ),
    )
