from contenthub.utils.slug import is_valid_slug
from .section import assert_section_order, assert_section_ids
from .exceptions import InvariantViolation

LAYOUTS = ("default", "full-width", "sidebar-right", "sidebar-left", "landing")


def assert_page_fields(title, slug):
    if not title or not slug:
        raise InvariantViolation("Title and slug are required")

    if not is_valid_slug(slug):
        raise InvariantViolation(
            f"Slug must contain only lowercase letters, digits and hyphens: {slug!r}"
        )


def assert_page(page):
    assert_page_fields(page.title, page.slug)

    if page.layout not in LAYOUTS:
        raise InvariantViolation(
            f"Invalid layout {page.layout!r}. Allowed: {', '.join(LAYOUTS)}"
        )

    sections = page.section_list
    assert_section_ids(sections)
    assert_section_order(sections)
