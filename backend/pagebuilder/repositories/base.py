"""
Persistence contracts used by the page builder core.

Services only ever talk to these abstract, async repositories; the
storage engine behind them is an implementation detail.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pagebuilder.models import Asset, Page, Section

T = TypeVar("T")


class Repository(ABC, Generic[T]):

    @abstractmethod
    async def find_all(self) -> List[T]:
        ...

    @abstractmethod
    async def find_by_id(self, id: str) -> Optional[T]:
        ...

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> T:
        ...

    @abstractmethod
    async def update(self, id: str, data: Dict[str, Any]) -> T:
        ...

    @abstractmethod
    async def delete(self, id: str) -> T:
        ...


class PageRepository(Repository[Page]):

    @abstractmethod
    async def find_by_slug_and_parent(self, slug: str, parent_id: Optional[str]) -> Optional[Page]:
        """The unique page with `slug` among the children of `parent_id` (None = roots)."""

    @abstractmethod
    async def find_children(self, parent_id: str) -> List[Page]:
        """Direct children of a page, in insertion order."""

    @abstractmethod
    async def find_roots(self) -> List[Page]:
        ...


class SectionRepository(Repository[Section]):

    @abstractmethod
    async def find_by_page_id(self, page_id: str) -> List[Section]:
        """Sections of a page ordered by `order`."""


class AssetRepository(Repository[Asset]):

    @abstractmethod
    async def find_by_type(self, type: str) -> List[Asset]:
        ...
