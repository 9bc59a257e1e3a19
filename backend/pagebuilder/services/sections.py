import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pagebuilder.domain.content import dump_content
from pagebuilder.domain.exceptions import Conflict, ContentValidationError, DomainError, NotFound
from pagebuilder.domain.uploads import UploadedFile
from pagebuilder.domain.validation import validate_content
from pagebuilder.models import Section
from pagebuilder.repositories import PageRepository, SectionRepository

from .asset_lifecycle import AssetLifecycleCoordinator
from .catalog import section_types
from .content_processor import SectionContentProcessor, parse_int

logger = logging.getLogger(__name__)

REQUIRED_FORM_KEYS = ("type", "pageId", "order")


class SectionService:

    def __init__(
        self,
        sections: SectionRepository,
        pages: PageRepository,
        coordinator: AssetLifecycleCoordinator,
        processor: Optional[SectionContentProcessor] = None,
    ):
        self.sections = sections
        self.pages = pages
        self.coordinator = coordinator
        self.processor = processor or SectionContentProcessor()

    def get_section_types(self) -> List[Dict[str, Any]]:
        return section_types()

    async def find_all(self) -> List[Section]:
        return await self.sections.find_all()

    async def find_by_id(self, id: str) -> Section:
        section = await self.sections.find_by_id(id)
        if section is None:
            raise NotFound(f"Section with ID {id} not found")
        return section

    async def find_by_page_id(self, page_id: str) -> List[Section]:
        return await self.sections.find_by_page_id(page_id)

    # ------------------------
    # Invariants
    # ------------------------

    async def _assert_page_exists(self, page_id: str) -> None:
        if await self.pages.find_by_id(page_id) is None:
            raise NotFound(f"Page with ID {page_id} not found")

    async def assert_unique_order(self, page_id: str, order: int, exclude_id: Optional[str] = None) -> None:
        for section in await self.sections.find_by_page_id(page_id):
            if section.order == order and section.id != exclude_id:
                raise Conflict(
                    f"A section with order {order} already exists on this page. "
                    "Please choose a different order number."
                )

    # ------------------------
    # Create
    # ------------------------

    async def create(self, *, type: str, page_id: str, order: Any, content: Any) -> Section:
        order = parse_int(order, "order")
        await self._assert_page_exists(page_id)
        validated = validate_content(type, content)
        await self.assert_unique_order(page_id, order)

        section = await self.sections.create({
            "page_id": page_id,
            "type": type,
            "order": order,
            "content": dump_content(validated),
        })
        logger.info(f"section.create {section.id} page={page_id} type={type} order={order}")
        return section

    async def create_from_form(self, form: Mapping[str, Any], files: Sequence[UploadedFile]) -> Section:
        """
        Create a section from a multipart submission.

        Uploads of a rejected submission are removed again so nothing is
        left behind for a section that never existed.
        """
        try:
            missing = [key for key in REQUIRED_FORM_KEYS if form.get(key) in (None, "")]
            if missing:
                raise ContentValidationError(
                    "type, pageId, and order are required fields",
                    [f"{key}: Field required" for key in missing],
                    missing,
                )

            order = parse_int(form["order"], "order")
            await self._assert_page_exists(form["pageId"])
            await self.assert_unique_order(form["pageId"], order)

            candidate = self.processor.build(form["type"], files, form)
            return await self.create(
                type=form["type"], page_id=form["pageId"], order=order, content=candidate
            )
        except DomainError:
            await self.coordinator.discard_uploads(files)
            raise

    # ------------------------
    # Update
    # ------------------------

    async def update(
        self,
        id: str,
        *,
        type: Optional[str] = None,
        content: Any = None,
        order: Any = None,
        page_id: Optional[str] = None,
    ) -> Section:
        """
        Update a section.

        Content is replaced wholesale and re-validated whenever the type or
        the content changes. Order uniqueness is checked against the target
        page. Files the old content referenced and the new one drops are
        cleaned up once the record is saved.
        """
        section = await self.find_by_id(id)
        previous_type, previous_content = section.type, section.content

        target_page = page_id or section.page_id
        target_order = parse_int(order, "order") if order is not None else section.order
        changes: Dict[str, Any] = {}

        if target_page != section.page_id:
            await self._assert_page_exists(target_page)
            changes["page_id"] = target_page
        if target_order != section.order:
            changes["order"] = target_order
        if changes:
            await self.assert_unique_order(target_page, target_order, exclude_id=section.id)

        validated = None
        if type is not None or content is not None:
            new_type = type or section.type
            validated = validate_content(new_type, content if content is not None else previous_content)
            changes["type"] = new_type
            changes["content"] = dump_content(validated)

        if not changes:
            raise ContentValidationError("No valid fields provided for update")

        section = await self.sections.update(id, changes)
        logger.info(f"section.update {section.id} fields={sorted(changes)}")

        if validated is not None:
            await self.coordinator.cleanup_replaced_files(previous_type, previous_content, validated)
        return section

    async def update_from_form(
        self,
        id: str,
        form: Mapping[str, Any],
        files: Sequence[UploadedFile],
    ) -> Section:
        """Partial update from a multipart submission; absent fields keep their stored values."""
        try:
            section = await self.find_by_id(id)
            section_type = form.get("type") or section.type
            existing = section.content if section_type == section.type else {}

            candidate = self.processor.build_for_update(section_type, files, form, existing)
            return await self.update(
                id,
                type=section_type,
                content=candidate,
                order=form.get("order") or None,
                page_id=form.get("pageId") or None,
            )
        except DomainError:
            await self.coordinator.discard_uploads(files)
            raise

    # ------------------------
    # Delete
    # ------------------------

    async def delete(self, id: str) -> Section:
        section = await self.find_by_id(id)

        # File cleanup never raises, so it cannot stop the record delete
        _, deleted = await asyncio.gather(
            self.coordinator.cleanup_for_section(section),
            self.sections.delete(section.id),
        )
        logger.info(f"section.delete {section.id} page={section.page_id}")
        return deleted
