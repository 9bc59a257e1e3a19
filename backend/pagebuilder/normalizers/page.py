from .section import _iso, normalize_section

def normalize_page(page, full_path=None, sections=None, children=None):
    """
    Page as returned by the API. Sections and children are only embedded
    when the caller loaded them.
    """
    data = {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "parentId": page.parent_id,
        "fullPath": full_path,
        "createdAt": _iso(page.created_at),
        "updatedAt": _iso(page.updated_at),
    }

    if sections is not None:
        data["sections"] = [
            normalize_section(s) for s in sorted(sections, key=lambda s: s.order)
        ]

    if children is not None:
        data["children"] = [
            {"id": c.id, "title": c.title, "slug": c.slug} for c in children
        ]

    return data
