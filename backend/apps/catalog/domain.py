"""Catalog domain types and the fixed bakery assortment."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class CatalogItem:
    """A purchasable bakery item. Immutable for the lifetime of the process."""

    name: str
    unit_price: Decimal
    image: str

    def __post_init__(self):
        # Accept ints/strings from callers; arithmetic in the cart is Decimal only.
        if not isinstance(self.unit_price, Decimal):
            object.__setattr__(self, "unit_price", Decimal(str(self.unit_price)))
        if self.unit_price < 0:
            raise ValueError("unit_price must not be negative")


# Fixed storefront catalog, in display order.
BAKERY_ITEMS: Tuple[CatalogItem, ...] = (
    CatalogItem("Багет", Decimal("40.00"), "baget"),
    CatalogItem("Круассан", Decimal("50.00"), "kruassan"),
    CatalogItem("Пирог с вишней", Decimal("150.00"), "vishnya_pirog"),
    CatalogItem("Сырники", Decimal("80.00"), "syrniki"),
    CatalogItem("Торт Наполеон", Decimal("350.00"), "napoleon_tort"),
)
