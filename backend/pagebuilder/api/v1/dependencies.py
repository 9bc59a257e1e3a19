"""Per-request wiring of services onto the SQLAlchemy repositories."""
from flask import current_app

from pagebuilder.repositories import SqlAssetRepository, SqlPageRepository, SqlSectionRepository
from pagebuilder.services import (
    AssetLifecycleCoordinator,
    AssetService,
    PageHierarchyResolver,
    PageService,
    SectionService,
)


def _coordinator(sections):
    return AssetLifecycleCoordinator(sections, base_dir=current_app.config["MEDIA_ROOT"])


def page_service() -> PageService:
    pages = SqlPageRepository()
    resolver = PageHierarchyResolver(pages, max_depth=current_app.config["MAX_PAGE_DEPTH"])
    return PageService(pages, _coordinator(SqlSectionRepository()), resolver)


def section_service() -> SectionService:
    sections = SqlSectionRepository()
    return SectionService(sections, SqlPageRepository(), _coordinator(sections))


def upload_coordinator() -> AssetLifecycleCoordinator:
    return _coordinator(SqlSectionRepository())


def asset_service() -> AssetService:
    return AssetService(SqlAssetRepository())
