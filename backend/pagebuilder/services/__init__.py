from .asset_lifecycle import (
    AssetLifecycleCoordinator,
    CleanupReport,
    FileCleanupFailure,
    extract_file_refs,
    extract_raw_file_refs,
)
from .assets import AssetService
from .content_processor import SectionContentProcessor
from .hierarchy import PageHierarchyResolver, join_path, split_path
from .pages import PageService
from .sections import SectionService
