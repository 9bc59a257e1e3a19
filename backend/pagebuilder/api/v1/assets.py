# pagebuilder/api/v1/assets.py
from flask import request, jsonify
from pagebuilder.domain.exceptions import InvalidUpload
from pagebuilder.normalizers.asset import normalize_asset
from pagebuilder.utils.media import get_file_type, save_file
from .dependencies import asset_service, upload_coordinator
from . import v1_bp

# JSON keys accepted on create/update, mapped to model fields
ASSET_KEYS = {"url": "url", "type": "type", "filename": "filename", "uploadedBy": "uploaded_by"}

# ------------------------
# Assets
# ------------------------

@v1_bp.route("/assets", methods=["GET"])
async def list_assets():
    service = asset_service()
    asset_type = request.args.get("type")

    if asset_type:
        assets = await service.find_by_type(asset_type)
    else:
        assets = await service.find_all()
    return jsonify([normalize_asset(a) for a in assets])


@v1_bp.route("/assets/<asset_id>", methods=["GET"])
async def get_asset(asset_id):
    asset = await asset_service().find_by_id(asset_id)
    return jsonify(normalize_asset(asset))


@v1_bp.route("/assets", methods=["POST"])
async def create_asset():
    """
    Register a catalog entry, either for a file uploaded in the `file`
    part of a multipart request or for an already stored URL (JSON).
    """
    service = asset_service()

    if request.mimetype == "multipart/form-data":
        file = request.files.get("file")
        if file is None:
            raise InvalidUpload("No file uploaded")

        upload = save_file(file, "file")
        try:
            asset = await service.create(
                url=upload.url,
                type=get_file_type(upload.original_name),
                filename=upload.original_name,
                uploaded_by=request.form.get("uploadedBy"),
            )
        except Exception:
            await upload_coordinator().discard_uploads([upload])
            raise
    else:
        data = request.get_json(silent=True) or {}
        asset = await service.create(
            url=data.get("url"),
            type=data.get("type"),
            filename=data.get("filename"),
            uploaded_by=data.get("uploadedBy"),
        )

    return jsonify(normalize_asset(asset)), 201


@v1_bp.route("/assets/<asset_id>", methods=["PATCH"])
async def update_asset(asset_id):
    data = request.get_json(silent=True) or {}
    changes = {field: data[key] for key, field in ASSET_KEYS.items() if key in data}

    asset = await asset_service().update(asset_id, changes)
    return jsonify(normalize_asset(asset))


@v1_bp.route("/assets/<asset_id>", methods=["DELETE"])
async def delete_asset(asset_id):
    asset = await asset_service().delete(asset_id)
    return jsonify({"id": asset.id, "message": "Asset deleted successfully"})
