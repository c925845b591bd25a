from __future__ import annotations

from typing import Any, MutableMapping, Optional, Protocol, Sequence, TYPE_CHECKING

from apps.catalog.domain import CatalogItem

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO
    from apps.carts.ledger import CartLedger


class CartStorageProtocol(Protocol):
    def load(self, session: MutableMapping[str, Any]) -> Optional[str]:
        ...

    def save(self, session: MutableMapping[str, Any], text: str) -> None:
        ...

    def clear(self, session: MutableMapping[str, Any]) -> None:
        ...


class CatalogProviderProtocol(Protocol):
    def list_items(self) -> Sequence[CatalogItem]:
        ...

    def get_item(self, name: str) -> CatalogItem:
        """Return the named item or raise ``CatalogItemNotFoundError``."""
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, ledger: "CartLedger") -> "CartDTO":
        ...
