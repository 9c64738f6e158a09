from .section import normalize_section


def _iso(value):
    return value.isoformat() if value else None


def normalize_page(page, admin=False):
    data = {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "meta_title": page.meta_title,
        "meta_description": page.meta_description,
        "meta_keywords": page.meta_keywords,
        "og_image": page.og_image,
        "content": page.content,
        "layout": page.layout,
        "is_published": bool(page.is_published),
        "published_at": _iso(page.published_at),
        "updated_at": _iso(page.updated_at),
        "sections": [
            normalize_section(s, admin=admin)
            for s in page.section_list
        ],
    }

    if admin:
        data["custom_css"] = page.custom_css
        data["custom_js"] = page.custom_js
        data["tracking_code"] = page.tracking_code
        data["created_at"] = _iso(page.created_at)

    return data


def normalize_page_summary(page):
    return {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "is_published": bool(page.is_published),
        "published_at": _iso(page.published_at),
        "updated_at": _iso(page.updated_at),
    }
