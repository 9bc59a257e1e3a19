from .base import AssetRepository, PageRepository, Repository, SectionRepository
from .sql import SqlAssetRepository, SqlPageRepository, SqlSectionRepository
