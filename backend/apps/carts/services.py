from __future__ import annotations

from typing import Any, MutableMapping, Optional, Union

from apps.catalog.domain import CatalogItem
from apps.common import get_logger
from .codec import (
    MAX_QUANTITY,
    CartParseError,
    UnresolvedItemError,
    UnresolvedNamePolicy,
    deserialize,
)
from .dtos import CartDTO
from .ledger import CartLedger
from .protocols import (
    CartMapperProtocol,
    CartStorageProtocol,
    CatalogProviderProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

Session = MutableMapping[str, Any]


class CartQuantityLimitError(ValueError):
    """Raised when adding would push a line past the largest transportable quantity."""

    def __init__(self, name: str, limit: int = MAX_QUANTITY):
        super().__init__(f"Cart already holds the maximum of {limit} x {name}")
        self.name = name
        self.limit = limit


class CartService:
    """
    Runs one cart operation per call against the cart stored in ``session``.

    Each call rebuilds a ledger from the stored text, applies the operation
    and writes the serialized result back.
    """

    def __init__(
        self,
        carts: CartStorageProtocol,
        catalog: CatalogProviderProtocol,
        cart_mapper: CartMapperProtocol,
        unresolved_policy: Union[str, UnresolvedNamePolicy] = UnresolvedNamePolicy.SYNTHESIZE,
    ):
        self.carts = carts
        self.catalog = catalog
        self.cart_mapper = cart_mapper
        self.unresolved_policy = UnresolvedNamePolicy.from_setting(unresolved_policy)
        self.logger = logger.bind(service="CartService")

    def load_ledger(self, session: Session) -> CartLedger:
        text = self.carts.load(session)
        if not text:
            return CartLedger()
        try:
            entries = deserialize(text, self.catalog.list_items(), self.unresolved_policy)
        except (CartParseError, UnresolvedItemError) as exc:
            # A broken session cart must not lock the visitor out of the store.
            self.logger.warning("Discarding unreadable session cart", error=str(exc))
            self.carts.clear(session)
            return CartLedger()
        return CartLedger.from_entries(entries)

    def _store(self, session: Session, ledger: CartLedger) -> None:
        if ledger.is_empty:
            self.carts.clear(session)
        else:
            self.carts.save(session, ledger.serialize())

    def get_cart(self, session: Session) -> CartDTO:
        ledger = self.load_ledger(session)
        self.logger.debug("Fetching cart", lines=len(ledger))
        return self.cart_mapper.to_dto(ledger)

    def add_item(self, session: Session, name: str) -> CartDTO:
        item = self.catalog.get_item(name)
        ledger = self.load_ledger(session)
        if ledger.quantity_of(item) >= MAX_QUANTITY:
            self.logger.info("Cart add rejected: quantity limit reached", name=name)
            raise CartQuantityLimitError(name)
        ledger.add(item)
        self._store(session, ledger)
        self.logger.info(
            "Item added to cart",
            name=name,
            quantity=ledger.quantity_of(item),
            total=ledger.total_price,
        )
        return self.cart_mapper.to_dto(ledger)

    def remove_item(self, session: Session, name: str) -> CartDTO:
        ledger = self.load_ledger(session)
        item = self._find_line_item(ledger, name)
        if item is None:
            self.logger.debug("Cart remove ignored: item not in cart", name=name)
            return self.cart_mapper.to_dto(ledger)
        ledger.remove(item)
        self._store(session, ledger)
        self.logger.info(
            "Item removed from cart",
            name=name,
            quantity=ledger.quantity_of(item),
            total=ledger.total_price,
        )
        return self.cart_mapper.to_dto(ledger)

    def reset_cart(self, session: Session) -> CartDTO:
        ledger = self.load_ledger(session)
        ledger.reset()
        self._store(session, ledger)
        self.logger.info("Cart reset")
        return self.cart_mapper.to_dto(ledger)

    def export_cart(self, session: Session) -> str:
        return self.load_ledger(session).serialize()

    def import_cart(self, session: Session, text: Union[str, bytes]) -> CartDTO:
        """Replace the session cart with ``text``. Parse and resolution errors propagate."""
        entries = deserialize(text, self.catalog.list_items(), self.unresolved_policy)
        ledger = CartLedger.from_entries(entries)
        self._store(session, ledger)
        self.logger.info(
            "Cart imported",
            lines=len(ledger),
            total=ledger.total_price,
            policy=self.unresolved_policy.value,
        )
        return self.cart_mapper.to_dto(ledger)

    @staticmethod
    def _find_line_item(ledger: CartLedger, name: str) -> Optional[CatalogItem]:
        # Placeholder lines from an import are not in the catalog, so look in the cart.
        for item, _quantity in ledger.entries():
            if item.name == name:
                return item
        return None
