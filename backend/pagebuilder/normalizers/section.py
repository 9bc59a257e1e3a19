def _iso(value):
    return value.isoformat() if value else None

def normalize_section(section):
    return {
        "id": section.id,
        "type": section.type,
        "order": section.order,
        "pageId": section.page_id,
        "content": section.content or {},
        "createdAt": _iso(section.created_at),
        "updatedAt": _iso(section.updated_at),
    }
