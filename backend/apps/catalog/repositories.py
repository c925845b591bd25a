from typing import Dict, Iterable, Optional, Tuple

from .domain import BAKERY_ITEMS, CatalogItem


class FixedCatalogRepository:
    """Read-only catalog backed by an in-code item list."""

    def __init__(self, items: Iterable[CatalogItem] = BAKERY_ITEMS):
        self._items: Tuple[CatalogItem, ...] = tuple(items)
        self._by_name: Dict[str, CatalogItem] = {}
        for item in self._items:
            if item.name in self._by_name:
                raise ValueError(f"Duplicate catalog item name: {item.name}")
            self._by_name[item.name] = item

    def list(self) -> Tuple[CatalogItem, ...]:
        return self._items

    def get(self, name: str) -> Optional[CatalogItem]:
        return self._by_name.get(name)
