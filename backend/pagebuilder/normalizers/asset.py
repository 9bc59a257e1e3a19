from .section import _iso

def normalize_asset(asset):
    return {
        "id": asset.id,
        "url": asset.url,
        "type": asset.type,
        "filename": asset.filename,
        "uploadedAt": _iso(asset.uploaded_at),
        "uploadedBy": asset.uploaded_by,
    }
