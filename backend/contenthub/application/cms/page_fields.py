from typing import Any, Dict, List

from contenthub.domain.invariants.exceptions import InvariantViolation
from contenthub.domain.lifecycle.page import toggle_publication
from contenthub.domain.section import sections_from_json
from contenthub.utils.slug import slugify

TEXT_FIELDS = (
    "title",
    "meta_title",
    "meta_description",
    "meta_keywords",
    "og_image",
    "content",
    "layout",
    "custom_css",
    "custom_js",
    "tracking_code",
)

EDITABLE_FIELDS = {*TEXT_FIELDS, "slug", "sections", "is_published"}


def apply_page_fields(page, data: Dict[str, Any]) -> List[str]:
    """
    Copy whitelisted editor fields from ``data`` onto ``page``.

    Returns the names of fields whose value actually changed. The slug is
    normalized on every write; ``is_published`` goes through the lifecycle
    toggle so publication time stays consistent.
    """
    changed: List[str] = []

    for field in TEXT_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if value is not None and not isinstance(value, str):
            raise InvariantViolation(f"{field} must be a string")
        if field == "title":
            value = (value or "").strip()
        if getattr(page, field) != value:
            setattr(page, field, value)
            changed.append(field)

    if "slug" in data:
        slug = slugify(data["slug"] or "")
        if page.slug != slug:
            page.slug = slug
            changed.append("slug")

    if "sections" in data:
        raw = data["sections"]
        if raw is not None and not isinstance(raw, list):
            raise InvariantViolation("sections must be a list")
        sections = sections_from_json(raw)
        if page.section_list != sections:
            page.section_list = sections
            changed.append("sections")

    if "is_published" in data:
        wanted = bool(data["is_published"])
        if bool(page.is_published) != wanted:
            page.is_published, page.published_at = toggle_publication(bool(page.is_published))
            changed.append("is_published")

    return changed


def apply_meta_defaults(page) -> None:
    if not page.meta_title:
        page.meta_title = page.title
    if page.meta_description is None:
        page.meta_description = ""
