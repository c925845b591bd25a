from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .domain import CatalogItem


class CatalogRepositoryProtocol(Protocol):
    def list(self) -> Sequence[CatalogItem]:
        ...

    def get(self, name: str) -> Optional[CatalogItem]:
        ...
