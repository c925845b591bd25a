from typing import Optional

from django.conf import settings

from apps.catalog.domain import CatalogItem
from apps.catalog.mappers import CatalogItemMapper, format_amount
from .dtos import CartDTO, CartLineDTO
from .ledger import CartLedger

DEFAULT_CURRENCY_LABEL = "руб."


class CartLineMapper:
    def __init__(self, item_mapper: Optional[CatalogItemMapper] = None) -> None:
        self.item_mapper = item_mapper or CatalogItemMapper()

    def to_dto(self, item: CatalogItem, quantity: int) -> CartLineDTO:
        return CartLineDTO(
            item=self.item_mapper.to_dto(item),
            quantity=quantity,
            subtotal=format_amount(item.unit_price * quantity),
        )


class CartMapper:
    def __init__(
        self,
        line_mapper: Optional[CartLineMapper] = None,
        currency_label: Optional[str] = None,
    ) -> None:
        self.line_mapper = line_mapper or CartLineMapper()
        self.currency_label = currency_label or getattr(
            settings, "CURRENCY_LABEL", DEFAULT_CURRENCY_LABEL
        )

    def to_dto(self, ledger: CartLedger) -> CartDTO:
        lines = [self.line_mapper.to_dto(item, qty) for item, qty in ledger.entries()]
        total = format_amount(ledger.total_price)
        return CartDTO(
            items=lines,
            total_price=total,
            total_display=f"{total} {self.currency_label}",
            item_count=ledger.item_count,
        )
