from decimal import Decimal
from typing import Iterable, List

from .domain import CatalogItem
from .dtos import CatalogItemDTO

CENTS = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    return str(amount.quantize(CENTS))


class CatalogItemMapper:
    @staticmethod
    def to_dto(item: CatalogItem) -> CatalogItemDTO:
        return CatalogItemDTO(
            name=item.name,
            price=format_amount(item.unit_price),
            image=item.image,
        )

    @staticmethod
    def many_to_dto(items: Iterable[CatalogItem]) -> List[CatalogItemDTO]:
        return [CatalogItemMapper.to_dto(i) for i in items]
