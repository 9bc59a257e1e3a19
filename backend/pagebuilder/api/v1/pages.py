# pagebuilder/api/v1/pages.py
from flask import request, jsonify
from pagebuilder.normalizers.page import normalize_page
from pagebuilder.normalizers.section import normalize_section
from .dependencies import page_service, section_service
from . import v1_bp

# JSON keys accepted on update, mapped to model fields
PAGE_UPDATE_KEYS = {"title": "title", "slug": "slug", "parentId": "parent_id"}


async def _page_payload(service, page, *, embed=False):
    full_path = await service.full_path(page)
    if not embed:
        return normalize_page(page, full_path=full_path)

    sections = await section_service().find_by_page_id(page.id)
    children = await service.get_children(page.id)
    return normalize_page(page, full_path=full_path, sections=sections, children=children)


async def _page_list(service, pages):
    paths = await service.full_paths(pages)
    return [normalize_page(p, full_path=paths.get(p.id)) for p in pages]

# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["POST"])
async def create_page():
    data = request.get_json(silent=True) or {}
    service = page_service()

    page = await service.create(
        title=data.get("title"),
        slug=data.get("slug"),
        parent_id=data.get("parentId"),
    )
    return jsonify(await _page_payload(service, page)), 201


@v1_bp.route("/pages", methods=["GET"])
async def list_pages():
    service = page_service()
    return jsonify(await _page_list(service, await service.find_all()))


@v1_bp.route("/pages/roots", methods=["GET"])
async def list_root_pages():
    service = page_service()
    return jsonify(await _page_list(service, await service.get_roots()))


@v1_bp.route("/pages/slugs", methods=["GET"])
async def list_page_slugs():
    return jsonify(await page_service().get_all_slugs())


@v1_bp.route("/pages/paths", methods=["GET"])
async def list_page_paths():
    return jsonify(await page_service().get_all_full_paths())


@v1_bp.route("/pages/slug/<slug>", methods=["GET"])
async def get_page_by_slug(slug):
    service = page_service()
    page = await service.find_by_slug(slug)
    return jsonify(await _page_payload(service, page, embed=True))


@v1_bp.route("/pages/path/<path:path>", methods=["GET"])
async def get_page_by_path(path):
    service = page_service()
    page = await service.find_by_path(path)
    return jsonify(await _page_payload(service, page, embed=True))


@v1_bp.route("/pages/<page_id>", methods=["GET"])
async def get_page(page_id):
    service = page_service()
    page = await service.find_by_id(page_id)
    return jsonify(await _page_payload(service, page, embed=True))


@v1_bp.route("/pages/<page_id>/children", methods=["GET"])
async def list_child_pages(page_id):
    service = page_service()
    return jsonify(await _page_list(service, await service.get_children(page_id)))


@v1_bp.route("/pages/<page_id>", methods=["PATCH"])
async def update_page(page_id):
    data = request.get_json(silent=True) or {}
    changes = {field: data[key] for key, field in PAGE_UPDATE_KEYS.items() if key in data}

    service = page_service()
    page = await service.update(page_id, changes)
    return jsonify(await _page_payload(service, page))


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
async def delete_page(page_id):
    page = await page_service().delete(page_id)
    return jsonify({"id": page.id, "message": "Page deleted successfully"})

# ------------------------
# Page sections
# ------------------------

@v1_bp.route("/pages/<page_id>/sections", methods=["GET"])
async def list_page_sections(page_id):
    await page_service().find_by_id(page_id)
    sections = await section_service().find_by_page_id(page_id)
    return jsonify([normalize_section(s) for s in sections])
