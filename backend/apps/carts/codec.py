"""
Text transport for carts.

The serialized form is JSON keyed by item name::

    {"items": {"Багет": 2, "Круассан": 1}}

Only names and quantities travel; prices and images are resolved again from
the catalog on the way back in.
"""
from __future__ import annotations

import json
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from apps.catalog.domain import CatalogItem

ITEMS_FIELD = "items"
PLACEHOLDER_IMAGE = ""
MAX_QUANTITY = 999

Entries = Union[Mapping[CatalogItem, int], Iterable[Tuple[CatalogItem, int]]]


class CartParseError(ValueError):
    """Raised when cart text cannot be parsed into name/quantity pairs."""


class UnresolvedItemError(LookupError):
    """Raised under the FAIL policy when cart names are missing from the catalog."""

    def __init__(self, names: Sequence[str]):
        super().__init__("Unknown catalog items: " + ", ".join(names))
        self.names = list(names)


class UnresolvedNamePolicy(str, Enum):
    SYNTHESIZE = "synthesize"
    FAIL = "fail"
    SKIP = "skip"

    @classmethod
    def from_setting(cls, value: Union[str, "UnresolvedNamePolicy"]) -> "UnresolvedNamePolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(
                f"Unknown unresolved-name policy '{value}'. Allowed: {allowed}"
            ) from None


def placeholder_item(name: str) -> CatalogItem:
    return CatalogItem(name, Decimal("0"), PLACEHOLDER_IMAGE)


def serialize(entries: Entries) -> str:
    if isinstance(entries, Mapping):
        entries = entries.items()
    items: Dict[str, int] = {}
    for item, quantity in entries:
        items[item.name] = items.get(item.name, 0) + int(quantity)
    return json.dumps({ITEMS_FIELD: items}, ensure_ascii=False)


def parse(text: Union[str, bytes]) -> Dict[str, int]:
    """Parse cart text into an ordered name -> quantity mapping."""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CartParseError("Cart text is not valid UTF-8") from exc
    if not isinstance(text, str):
        raise CartParseError("Cart text must be a string")
    try:
        payload: Any = json.loads(text)
    except ValueError as exc:
        raise CartParseError(f"Cart text is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise CartParseError("Cart text must be a JSON object")

    # Unknown fields are ignored; a missing items field is an empty cart.
    raw_items = payload.get(ITEMS_FIELD)
    if raw_items is None:
        return {}
    if not isinstance(raw_items, dict):
        raise CartParseError("'items' must be an object mapping names to quantities")

    result: Dict[str, int] = {}
    for name, quantity in raw_items.items():
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise CartParseError(f"Quantity for '{name}' must be an integer")
        if quantity < 1:
            raise CartParseError(f"Quantity for '{name}' must be at least 1")
        if quantity > MAX_QUANTITY:
            raise CartParseError(
                f"Quantity for '{name}' must not exceed {MAX_QUANTITY}"
            )
        result[name] = quantity
    return result


def deserialize(
    text: Union[str, bytes],
    catalog: Sequence[CatalogItem],
    policy: Union[str, UnresolvedNamePolicy] = UnresolvedNamePolicy.SYNTHESIZE,
) -> Dict[CatalogItem, int]:
    """
    Parse cart text and resolve each name against ``catalog`` by exact match.

    Names missing from the catalog follow ``policy``: synthesize a zero-priced
    placeholder item, fail with ``UnresolvedItemError``, or skip the entry.
    The caller rebuilds the total from the returned entries.
    """
    policy = UnresolvedNamePolicy.from_setting(policy)
    quantities = parse(text)

    by_name: Dict[str, CatalogItem] = {}
    for item in catalog:
        # first match wins, as with a linear search
        by_name.setdefault(item.name, item)

    resolved: Dict[CatalogItem, int] = {}
    unresolved: List[str] = []
    for name, quantity in quantities.items():
        item = by_name.get(name)
        if item is None:
            if policy is UnresolvedNamePolicy.SKIP:
                continue
            if policy is UnresolvedNamePolicy.FAIL:
                unresolved.append(name)
                continue
            item = placeholder_item(name)
        resolved[item] = quantity
    if unresolved:
        raise UnresolvedItemError(unresolved)
    return resolved
