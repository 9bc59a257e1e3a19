import logging
from typing import Any, Dict, List, Mapping, Optional

from pagebuilder.domain.exceptions import Conflict, ContentValidationError, NotFound
from pagebuilder.models import Page
from pagebuilder.repositories import PageRepository

from .asset_lifecycle import AssetLifecycleCoordinator
from .hierarchy import PageHierarchyResolver

logger = logging.getLogger(__name__)

ALLOWED_UPDATE_FIELDS = ("title", "slug", "parent_id")


def _assert_page_fields(title: Optional[str], slug: Optional[str]) -> None:
    values = (("title", title), ("slug", slug))

    not_text = [name for name, value in values if value is not None and not isinstance(value, str)]
    if not_text:
        raise ContentValidationError(
            "Invalid page", [f"{name}: must be a string" for name in not_text], not_text
        )

    missing = [name for name, value in values if not value]
    if missing:
        raise ContentValidationError(
            "Both title and slug are required",
            [f"{name}: Field required" for name in missing],
            missing,
        )
    if "/" in slug:
        raise ContentValidationError(
            "Invalid page slug", ["slug: must be a single path segment"], ["slug"]
        )


class PageService:

    def __init__(
        self,
        pages: PageRepository,
        coordinator: AssetLifecycleCoordinator,
        resolver: Optional[PageHierarchyResolver] = None,
    ):
        self.pages = pages
        self.coordinator = coordinator
        self.resolver = resolver or PageHierarchyResolver(pages)

    # ------------------------
    # Lookups
    # ------------------------

    async def find_all(self) -> List[Page]:
        return await self.pages.find_all()

    async def find_by_id(self, id: str) -> Page:
        page = await self.pages.find_by_id(id)
        if page is None:
            raise NotFound(f"Page with ID {id} not found")
        return page

    async def find_by_slug(self, slug: str) -> Page:
        """Root pages only; nested pages are addressed by full path."""
        return await self.resolver.find_root_by_slug(slug)

    async def find_by_path(self, path: str) -> Page:
        return await self.resolver.resolve_path_string(path)

    async def get_children(self, id: str) -> List[Page]:
        await self.find_by_id(id)
        return await self.pages.find_children(id)

    async def get_roots(self) -> List[Page]:
        return await self.pages.find_roots()

    async def get_all_slugs(self) -> List[str]:
        return [page.slug for page in await self.pages.find_all()]

    async def get_all_full_paths(self) -> List[str]:
        paths = await self.resolver.compute_full_paths()
        return sorted(paths.values())

    async def full_path(self, page: Page) -> str:
        return await self.resolver.compute_full_path(page)

    async def full_paths(self, pages: List[Page]) -> Dict[str, str]:
        return await self.resolver.compute_full_paths(pages)

    # ------------------------
    # Mutations
    # ------------------------

    async def create(self, *, title: str, slug: str, parent_id: Optional[str] = None) -> Page:
        """
        Create a page under an existing parent (or as a root).

        Edge cases handled:
        - Missing title/slug, slugs spanning several path segments
        - Unknown parent
        - Duplicate slug among siblings
        """
        _assert_page_fields(title, slug)
        await self.resolver.assert_valid_parent(None, parent_id)
        await self.resolver.assert_unique_slug(parent_id, slug)

        page = await self.pages.create({"title": title, "slug": slug, "parent_id": parent_id})
        logger.info(f"page.create {page.id} slug={page.slug} parent={page.parent_id}")
        return page

    async def update(self, id: str, data: Mapping[str, Any]) -> Page:
        """
        Update mutable fields on a page.

        Design rules:
        - Only whitelisted fields are mutable
        - No silent no-op updates
        - Slug uniqueness is checked against the (possibly new) parent
        """
        page = await self.find_by_id(id)

        changes: Dict[str, Any] = {
            field: data[field]
            for field in ALLOWED_UPDATE_FIELDS
            if field in data and getattr(page, field) != data[field]
        }
        if not changes:
            raise ContentValidationError("No valid fields provided for update")

        title = changes.get("title", page.title)
        slug = changes.get("slug", page.slug)
        parent_id = changes.get("parent_id", page.parent_id)
        _assert_page_fields(title, slug)

        if "parent_id" in changes:
            await self.resolver.assert_valid_parent(page.id, parent_id)
        if "slug" in changes or "parent_id" in changes:
            await self.resolver.assert_unique_slug(parent_id, slug, exclude_id=page.id)

        page = await self.pages.update(id, changes)
        logger.info(f"page.update {page.id} fields={sorted(changes)}")
        return page

    async def delete(self, id: str) -> Page:
        """
        Delete a page, its sections and their files.

        File cleanup never blocks the deletion; pages that still have child
        pages are refused so a subtree is never orphaned.
        """
        page = await self.find_by_id(id)

        if await self.pages.find_children(page.id):
            raise Conflict("Page has child pages; delete or move them first")

        report = await self.coordinator.cleanup_for_page(page.id)
        deleted = await self.pages.delete(page.id)

        if report.failed:
            logger.warning(
                f"page.delete {page.id}: {len(report.failed)} file(s) could not be removed"
            )
        logger.info(f"page.delete {page.id}")
        return deleted
