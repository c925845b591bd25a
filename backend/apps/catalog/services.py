from __future__ import annotations

from typing import List, Sequence

from apps.common import get_logger
from .domain import CatalogItem
from .dtos import CatalogItemDTO
from .mappers import CatalogItemMapper
from .protocols import CatalogRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class CatalogItemNotFoundError(LookupError):
    """Raised when a name does not match any item of the catalog."""

    def __init__(self, name: str):
        super().__init__(f"Catalog item not found: {name}")
        self.name = name


class CatalogService:
    def __init__(self, items: CatalogRepositoryProtocol):
        self.items = items
        self.logger = logger.bind(service="CatalogService")

    def list_items(self) -> Sequence[CatalogItem]:
        return self.items.list()

    def list_item_dtos(self) -> List[CatalogItemDTO]:
        items = self.list_items()
        self.logger.debug("Listing catalog items", count=len(items))
        return CatalogItemMapper.many_to_dto(items)

    def get_item(self, name: str) -> CatalogItem:
        item = self.items.get(name)
        if item is None:
            self.logger.info("Catalog item not found", name=name)
            raise CatalogItemNotFoundError(name)
        return item
