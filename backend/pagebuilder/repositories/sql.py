"""
Flask-SQLAlchemy backed repositories.

The methods are coroutines to honour the repository contract; the
underlying session work is synchronous and never yields mid-operation.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pagebuilder.domain.exceptions import NotFound
from pagebuilder.extensions import db
from pagebuilder.models import Asset, Page, Section
from pagebuilder.utils.transaction import transactional

from .base import AssetRepository, PageRepository, SectionRepository

M = TypeVar("M", Page, Section, Asset)


class SqlRepositoryMixin(Generic[M]):
    model: Type[M]
    entity_name = "Record"
    conflict_message = "Record conflicts with an existing one"

    def _get_or_raise(self, id: str) -> M:
        record = db.session.get(self.model, id)
        if record is None:
            raise NotFound(f"{self.entity_name} with ID {id} not found")
        return record

    async def find_all(self) -> List[M]:
        return self.model.query.order_by(self.model.created_at.asc()).all()

    async def find_by_id(self, id: str) -> Optional[M]:
        return db.session.get(self.model, id)

    async def create(self, data: Dict[str, Any]) -> M:
        record = self.model(**data)
        with transactional(self.conflict_message):
            db.session.add(record)
        return record

    async def update(self, id: str, data: Dict[str, Any]) -> M:
        record = self._get_or_raise(id)
        with transactional(self.conflict_message):
            for field, value in data.items():
                setattr(record, field, value)
        return record

    async def delete(self, id: str) -> M:
        record = self._get_or_raise(id)
        with transactional():
            db.session.delete(record)
        return record


class SqlPageRepository(SqlRepositoryMixin[Page], PageRepository):
    model = Page
    entity_name = "Page"
    conflict_message = "Page with this slug already exists under the same parent"

    async def find_by_slug_and_parent(self, slug: str, parent_id: Optional[str]) -> Optional[Page]:
        return Page.query.filter_by(slug=slug, parent_id=parent_id).first()

    async def find_children(self, parent_id: str) -> List[Page]:
        return (
            Page.query.filter_by(parent_id=parent_id)
            .order_by(Page.created_at.asc())
            .all()
        )

    async def find_roots(self) -> List[Page]:
        return (
            Page.query.filter_by(parent_id=None)
            .order_by(Page.created_at.asc())
            .all()
        )


class SqlSectionRepository(SqlRepositoryMixin[Section], SectionRepository):
    model = Section
    entity_name = "Section"
    conflict_message = "A section with this order already exists on this page"

    async def find_all(self) -> List[Section]:
        return Section.query.order_by(Section.page_id.asc(), Section.order.asc()).all()

    async def find_by_page_id(self, page_id: str) -> List[Section]:
        return (
            Section.query.filter_by(page_id=page_id)
            .order_by(Section.order.asc())
            .all()
        )


class SqlAssetRepository(SqlRepositoryMixin[Asset], AssetRepository):
    model = Asset
    entity_name = "Asset"

    async def find_all(self) -> List[Asset]:
        return Asset.query.order_by(Asset.uploaded_at.desc()).all()

    async def find_by_type(self, type: str) -> List[Asset]:
        return (
            Asset.query.filter_by(type=type)
            .order_by(Asset.uploaded_at.desc())
            .all()
        )
