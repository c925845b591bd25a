from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Mapping, Tuple

from apps.catalog.domain import CatalogItem
from . import codec

ZERO = Decimal("0")


@dataclass
class CartEntry:
    item: CatalogItem
    quantity: int


class CartLedger:
    """
    Per-session cart state: catalog items mapped to quantities plus a running total.

    Lines are keyed by item name, so two item objects sharing a name land on the
    same line. A line keeps the item it was created with and every price change
    on that line uses that item's unit price, which keeps ``total_price`` equal
    to the sum of ``quantity * unit_price`` over all lines.

    State changes only through ``add``, ``remove`` and ``reset``; they hold the
    ledger lock so a ledger shared between threads stays consistent.
    """

    def __init__(self):
        self._entries: Dict[str, CartEntry] = {}
        self._total_price: Decimal = ZERO
        self._lock = threading.Lock()

    @classmethod
    def from_entries(cls, entries: Mapping[CatalogItem, int]) -> "CartLedger":
        """Build a ledger from resolved entries, recomputing the total."""
        ledger = cls()
        for item, quantity in entries.items():
            if quantity < 1:
                continue
            entry = ledger._entries.get(item.name)
            if entry is None:
                entry = ledger._entries[item.name] = CartEntry(item, 0)
            entry.quantity += quantity
            ledger._total_price += entry.item.unit_price * quantity
        return ledger

    def add(self, item: CatalogItem) -> None:
        with self._lock:
            entry = self._entries.get(item.name)
            if entry is None:
                entry = self._entries[item.name] = CartEntry(item, 0)
            entry.quantity += 1
            self._total_price += entry.item.unit_price

    def remove(self, item: CatalogItem) -> None:
        with self._lock:
            entry = self._entries.get(item.name)
            if entry is None:
                return
            if entry.quantity > 1:
                entry.quantity -= 1
            else:
                del self._entries[item.name]
            self._total_price -= entry.item.unit_price

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total_price = ZERO

    @property
    def total_price(self) -> Decimal:
        return self._total_price

    @property
    def item_count(self) -> int:
        return sum(e.quantity for e in self._entries.values())

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def entries(self) -> List[Tuple[CatalogItem, int]]:
        # Snapshot in insertion order; callers never see the live mapping.
        return [(e.item, e.quantity) for e in self._entries.values()]

    def serialize(self) -> str:
        return codec.serialize(self.entries())

    def quantity_of(self, item: CatalogItem) -> int:
        entry = self._entries.get(item.name)
        return entry.quantity if entry else 0

    def __contains__(self, item: object) -> bool:
        return isinstance(item, CatalogItem) and item.name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        lines = ", ".join(f"{name}={e.quantity}" for name, e in self._entries.items())
        return f"CartLedger({lines}; total={self._total_price})"
