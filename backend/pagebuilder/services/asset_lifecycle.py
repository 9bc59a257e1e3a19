"""
Lifecycle coupling between section content and the media files it
references.

File cleanup is always a side effect of deleting (or replacing) content:
every path is attempted independently, a missing file is a no-op and an
I/O failure is logged and reported, never raised to the caller.
"""
import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence, assert_never

import aiofiles.os

from pagebuilder.domain.content import (
    ContactFormContent,
    GalleryContent,
    HeroContent,
    ImageTextContent,
    SectionContent,
    SliderContent,
    TextBlockContent,
)
from pagebuilder.domain.exceptions import ContentValidationError
from pagebuilder.domain.uploads import UploadedFile
from pagebuilder.domain.validation import validate_content
from pagebuilder.models import Section
from pagebuilder.repositories import SectionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileCleanupFailure:
    path: str
    reason: str


@dataclass
class CleanupReport:
    deleted: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    failed: List[FileCleanupFailure] = field(default_factory=list)

    @property
    def attempted(self) -> List[str]:
        return self.deleted + self.missing + [f.path for f in self.failed]

    def merge(self, other: "CleanupReport") -> "CleanupReport":
        self.deleted.extend(other.deleted)
        self.missing.extend(other.missing)
        self.failed.extend(other.failed)
        return self


def extract_file_refs(content: SectionContent) -> List[str]:
    """Every uploaded-file reference embedded in a content variant."""
    if isinstance(content, ImageTextContent):
        return [content.image_url] if content.image_url else []
    elif isinstance(content, HeroContent):
        return [content.background_image] if content.background_image else []
    elif isinstance(content, GalleryContent):
        return [image.url for image in content.images if image.url]
    elif isinstance(content, SliderContent):
        return [slide.image_url for slide in content.slides if slide.image_url]
    elif isinstance(content, (TextBlockContent, ContactFormContent)):
        return []
    else:
        assert_never(content)


def extract_raw_file_refs(raw_content: Any) -> List[str]:
    """
    File references read straight from stored JSON, without a schema.

    Used for content that no longer validates so its files are still
    cleaned up.
    """
    if not isinstance(raw_content, Mapping):
        return []

    refs = [
        raw_content[key]
        for key in ("imageUrl", "backgroundImage")
        if isinstance(raw_content.get(key), str) and raw_content[key]
    ]
    for list_key, url_key in (("images", "url"), ("slides", "imageUrl")):
        items = raw_content.get(list_key)
        if not isinstance(items, list):
            continue
        refs.extend(
            item[url_key]
            for item in items
            if isinstance(item, Mapping) and isinstance(item.get(url_key), str) and item[url_key]
        )
    return refs


class AssetLifecycleCoordinator:

    def __init__(self, sections: SectionRepository, base_dir: Optional[str] = None):
        self.sections = sections
        self.base_dir = base_dir

    def resolve_file_path(self, file_ref: str) -> str:
        """
        '/uploads/a.png' -> '<base_dir>/uploads/a.png'.

        Only a single leading slash is stripped. References escaping the
        base directory are refused.
        """
        base_dir = os.path.abspath(self.base_dir or os.getcwd())
        relative = file_ref[1:] if file_ref.startswith("/") else file_ref
        absolute = os.path.abspath(os.path.join(base_dir, relative))

        if os.path.commonpath([base_dir, absolute]) != base_dir:
            raise ValueError(f"{file_ref} points outside of {base_dir}")
        return absolute

    async def _delete_file(self, file_ref: str, report: CleanupReport) -> None:
        try:
            absolute = self.resolve_file_path(file_ref)
            await aiofiles.os.remove(absolute)
        except FileNotFoundError:
            logger.warning(f"File not found, nothing to delete: {file_ref}")
            report.missing.append(file_ref)
        except Exception as e:
            logger.error(f"Failed to delete file {file_ref}: {e}")
            report.failed.append(FileCleanupFailure(path=file_ref, reason=str(e)))
        else:
            logger.info(f"Deleted file: {absolute}")
            report.deleted.append(file_ref)

    async def delete_files(self, file_refs: Iterable[str]) -> CleanupReport:
        report = CleanupReport()
        await asyncio.gather(*(self._delete_file(ref, report) for ref in file_refs))
        return report

    def stored_file_refs(self, section_type: str, raw_content: Any) -> List[str]:
        """File references of stored content, read leniently when it no longer validates."""
        try:
            return extract_file_refs(validate_content(section_type, raw_content))
        except ContentValidationError as e:
            logger.warning(f"Stored {section_type} content is invalid, reading file references as-is: {e}")
            return extract_raw_file_refs(raw_content)

    async def cleanup_for_section(self, section: Section) -> CleanupReport:
        return await self.delete_files(self.stored_file_refs(section.type, section.content))

    async def cleanup_for_page(self, page_id: str) -> CleanupReport:
        """
        Remove every section of a page together with its files.

        File cleanups run concurrently and never fail; section record
        deletions follow and do propagate their errors.
        """
        sections = await self.sections.find_by_page_id(page_id)

        reports = await asyncio.gather(
            *(self.cleanup_for_section(section) for section in sections)
        )
        await asyncio.gather(*(self.sections.delete(section.id) for section in sections))

        report = CleanupReport()
        for section_report in reports:
            report.merge(section_report)
        return report

    async def cleanup_replaced_files(
        self,
        previous_type: str,
        previous_content: Any,
        current: SectionContent,
    ) -> CleanupReport:
        """Delete files the previous stored content referenced and the current no longer does."""
        still_used = set(extract_file_refs(current))
        stale = [
            ref for ref in self.stored_file_refs(previous_type, previous_content)
            if ref not in still_used
        ]
        return await self.delete_files(stale)

    async def discard_uploads(self, files: Sequence[UploadedFile]) -> CleanupReport:
        """Remove freshly stored uploads of a rejected request."""
        return await self.delete_files([f.url for f in files])
