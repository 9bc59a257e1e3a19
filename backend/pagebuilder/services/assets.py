import logging
from typing import Any, Dict, List, Mapping, Optional

from pagebuilder.domain.exceptions import ContentValidationError, NotFound
from pagebuilder.models import Asset
from pagebuilder.repositories import AssetRepository

logger = logging.getLogger(__name__)

ASSET_TYPES = ("image", "video", "file")
ALLOWED_UPDATE_FIELDS = ("url", "type", "filename", "uploaded_by")


def _assert_asset_fields(url: Optional[str], type: Optional[str], filename: Optional[str]) -> None:
    missing = [name for name, value in (("url", url), ("type", type), ("filename", filename)) if not value]
    if missing:
        raise ContentValidationError(
            "Invalid asset",
            [f"{name}: Field required" for name in missing],
            missing,
        )
    if type not in ASSET_TYPES:
        raise ContentValidationError(
            "Invalid asset", [f"type: must be one of {', '.join(ASSET_TYPES)}"], ["type"]
        )


class AssetService:
    """
    Catalog of uploaded media.

    Catalog rows are independent of the file references stored inside
    section content; neither side updates the other.
    """

    def __init__(self, assets: AssetRepository):
        self.assets = assets

    async def find_all(self) -> List[Asset]:
        return await self.assets.find_all()

    async def find_by_id(self, id: str) -> Asset:
        asset = await self.assets.find_by_id(id)
        if asset is None:
            raise NotFound(f"Asset with ID {id} not found")
        return asset

    async def find_by_type(self, type: str) -> List[Asset]:
        return await self.assets.find_by_type(type)

    async def create(
        self,
        *,
        url: str,
        type: str,
        filename: str,
        uploaded_by: Optional[str] = None,
    ) -> Asset:
        _assert_asset_fields(url, type, filename)
        asset = await self.assets.create({
            "url": url,
            "type": type,
            "filename": filename,
            "uploaded_by": uploaded_by,
        })
        logger.info(f"asset.create {asset.id} url={asset.url}")
        return asset

    async def update(self, id: str, data: Mapping[str, Any]) -> Asset:
        asset = await self.find_by_id(id)

        changes: Dict[str, Any] = {
            field: data[field] for field in ALLOWED_UPDATE_FIELDS if field in data
        }
        if not changes:
            raise ContentValidationError("No valid fields provided for update")

        _assert_asset_fields(
            changes.get("url", asset.url),
            changes.get("type", asset.type),
            changes.get("filename", asset.filename),
        )
        return await self.assets.update(id, changes)

    async def delete(self, id: str) -> Asset:
        await self.find_by_id(id)
        asset = await self.assets.delete(id)
        logger.info(f"asset.delete {asset.id}")
        return asset
