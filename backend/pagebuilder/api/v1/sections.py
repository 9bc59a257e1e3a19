# pagebuilder/api/v1/sections.py
from flask import request, jsonify
from pagebuilder.normalizers.section import normalize_section
from pagebuilder.utils.media import save_request_files
from .dependencies import section_service
from . import v1_bp

FORM_MIMETYPES = {"multipart/form-data", "application/x-www-form-urlencoded"}


def _is_form_submission():
    return request.mimetype in FORM_MIMETYPES

# ------------------------
# Sections
# ------------------------

@v1_bp.route("/sections/types", methods=["GET"])
def list_section_types():
    return jsonify(section_service().get_section_types())


@v1_bp.route("/sections", methods=["GET"])
async def list_sections():
    sections = await section_service().find_all()
    return jsonify([normalize_section(s) for s in sections])


@v1_bp.route("/sections/<section_id>", methods=["GET"])
async def get_section(section_id):
    section = await section_service().find_by_id(section_id)
    return jsonify(normalize_section(section))


@v1_bp.route("/sections", methods=["POST"])
async def create_section():
    """
    Accepts either a JSON body with the full content, or a multipart form
    where text_1..text_4 and the uploaded files are mapped onto the content.
    """
    service = section_service()

    if _is_form_submission():
        uploads = save_request_files(request.files)
        section = await service.create_from_form(request.form, uploads)
    else:
        data = request.get_json(silent=True) or {}
        section = await service.create(
            type=data.get("type"),
            page_id=data.get("pageId"),
            order=data.get("order"),
            content=data.get("content"),
        )

    return jsonify(normalize_section(section)), 201


@v1_bp.route("/sections/<section_id>", methods=["PUT"])
async def update_section(section_id):
    service = section_service()

    if _is_form_submission():
        uploads = save_request_files(request.files)
        section = await service.update_from_form(section_id, request.form, uploads)
    else:
        data = request.get_json(silent=True) or {}
        section = await service.update(
            section_id,
            type=data.get("type"),
            content=data.get("content"),
            order=data.get("order"),
            page_id=data.get("pageId"),
        )

    return jsonify(normalize_section(section))


@v1_bp.route("/sections/<section_id>", methods=["DELETE"])
async def delete_section(section_id):
    section = await section_service().delete(section_id)
    return jsonify({"id": section.id, "message": "Section deleted successfully"})
