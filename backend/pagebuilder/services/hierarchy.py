"""
Page hierarchy resolution.

Pages form a tree through `parent_id` references. Paths are the slugs from a
root down to a page, joined with ``/`` and prefixed with ``/``
(``/media/gallery``). All walks are iterative lookups by id, never recursion
over live object graphs.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from pagebuilder.domain.exceptions import Conflict, HierarchyError, NotFound
from pagebuilder.models import Page
from pagebuilder.repositories import PageRepository

DEFAULT_MAX_DEPTH = 64


def split_path(path: str) -> List[str]:
    """'/media/gallery/' -> ['media', 'gallery']; separators only -> []."""
    return [segment for segment in (path or "").split("/") if segment]


def join_path(slugs: Sequence[str]) -> str:
    return "/" + "/".join(slugs)


class PageHierarchyResolver:

    def __init__(self, pages: PageRepository, max_depth: int = DEFAULT_MAX_DEPTH):
        self.pages = pages
        self.max_depth = max_depth

    async def resolve_path(self, segments: Sequence[str]) -> Page:
        """
        Walk `segments` from the roots down and return the page they name.

        Raises NotFound at the first segment without a matching child, and
        for an empty segment list.
        """
        if not segments:
            raise NotFound("Page path is empty")

        parent_id: Optional[str] = None
        page: Optional[Page] = None
        walked: List[str] = []

        for segment in segments:
            walked.append(segment)
            page = await self.pages.find_by_slug_and_parent(segment, parent_id)
            if page is None:
                raise NotFound(f"Page with path {join_path(walked)} not found")
            parent_id = page.id

        return page

    async def resolve_path_string(self, path: str) -> Page:
        return await self.resolve_path(split_path(path))

    async def find_root_by_slug(self, slug: str) -> Page:
        # Only roots: a nested page sharing the slug must never match here
        page = await self.pages.find_by_slug_and_parent(slug, None)
        if page is None:
            raise NotFound(f"Page with slug {slug} not found")
        return page

    async def compute_full_path(self, page: Page) -> str:
        slugs = [page.slug]
        seen = {page.id}
        current = page

        while current.parent_id is not None:
            if len(slugs) >= self.max_depth:
                raise HierarchyError(
                    f"Page {page.id} is nested deeper than {self.max_depth} levels"
                )
            if current.parent_id in seen:
                raise HierarchyError(f"Page {page.id} has a cyclic parent chain")

            parent = await self.pages.find_by_id(current.parent_id)
            if parent is None:
                raise HierarchyError(
                    f"Page {current.id} references missing parent {current.parent_id}"
                )

            seen.add(parent.id)
            slugs.append(parent.slug)
            current = parent

        slugs.reverse()
        return join_path(slugs)

    async def compute_full_paths(self, pages: Optional[Iterable[Page]] = None) -> Dict[str, str]:
        """
        Full paths for many pages at once, keyed by page id.

        Loads the page table once and walks an in-memory id -> page map;
        paths already computed for an ancestor are reused.
        """
        everything = await self.pages.find_all()
        by_id = {p.id: p for p in everything}
        targets = list(pages) if pages is not None else everything

        paths: Dict[str, str] = {}
        for target in targets:
            chain: List[Page] = []
            seen = set()
            current: Optional[Page] = target
            prefix = ""

            while current is not None:
                if current.id in paths:
                    prefix = paths[current.id]
                    break
                if current.id in seen or len(chain) >= self.max_depth:
                    raise HierarchyError(f"Page {target.id} has a corrupted parent chain")
                seen.add(current.id)
                chain.append(current)

                if current.parent_id is None:
                    current = None
                else:
                    current = by_id.get(current.parent_id)
                    if current is None:
                        raise HierarchyError(
                            f"Page {chain[-1].id} references missing parent {chain[-1].parent_id}"
                        )

            for node in reversed(chain):
                prefix = f"{prefix}/{node.slug}"
                paths[node.id] = prefix

        return paths

    async def assert_unique_slug(
        self,
        parent_id: Optional[str],
        slug: str,
        exclude_id: Optional[str] = None,
    ) -> None:
        existing = await self.pages.find_by_slug_and_parent(slug, parent_id)
        if existing is not None and existing.id != exclude_id:
            raise Conflict("Page with this slug already exists under the same parent")

    async def assert_valid_parent(self, page_id: Optional[str], parent_id: Optional[str]) -> None:
        """
        `parent_id` must name an existing page and, for an existing page
        being moved, must not be the page itself or one of its descendants.
        """
        if parent_id is None:
            return

        parent = await self.pages.find_by_id(parent_id)
        if parent is None:
            raise NotFound(f"Parent page with ID {parent_id} not found")

        if page_id is None:
            return

        # Walk up from the new parent; meeting the page means a cycle
        current: Optional[Page] = parent
        depth = 0
        while current is not None:
            if current.id == page_id:
                raise Conflict("A page cannot be moved under itself or one of its descendants")
            depth += 1
            if depth > self.max_depth or current.parent_id is None:
                break
            current = await self.pages.find_by_id(current.parent_id)
