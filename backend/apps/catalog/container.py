from __future__ import annotations

from .repositories import FixedCatalogRepository
from .services import CatalogService


def build_catalog_service() -> CatalogService:
    return CatalogService(items=FixedCatalogRepository())
