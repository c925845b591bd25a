"""DTO dataclasses only. Mapping logic lives in mappers.py."""
from dataclasses import dataclass


@dataclass
class CatalogItemDTO:
    name: str
    price: str
    image: str
