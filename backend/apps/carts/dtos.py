from dataclasses import dataclass
from typing import List
from apps.catalog.dtos import CatalogItemDTO

@dataclass
class CartLineDTO:
    item: CatalogItemDTO
    quantity: int
    subtotal: str

@dataclass
class CartDTO:
    items: List[CartLineDTO]
    total_price: str
    total_display: str
    item_count: int
"""DTO dataclasses only. Mapping logic moved to mappers.py."""
