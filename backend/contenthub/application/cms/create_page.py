from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from contenthub.extensions import db
from contenthub.models.page import Page
from contenthub.domain.invariants.page import assert_page, assert_page_fields
from contenthub.application.errors import SlugConflict
from contenthub.utils.audit import log_action
from contenthub.utils.slug import slugify
from contenthub.utils.transaction import transactional
from .page_fields import apply_page_fields, apply_meta_defaults


def create_page(
    *,
    data: Dict[str, Any],
) -> Page:
    """
    Create a new content page in DRAFT state.

    Edge cases handled:
    - Missing required fields (checked before touching the database)
    - Slug derived from the title when none is given
    - Duplicate slug
    """
    title = (data.get("title") or "").strip()
    slug = slugify(data.get("slug") or title)

    assert_page_fields(title, slug)

    page = Page()
    page.title = title
    page.slug = slug
    page.content = ""
    page.layout = "default"
    page.sections = []
    page.is_published = False

    apply_page_fields(page, {**data, "title": title, "slug": slug, "is_published": False})
    apply_meta_defaults(page)

    try:
        with transactional():
            db.session.add(page)
            db.session.flush()  # ensures page.id is available

            # 🔒 Domain invariants (single source of truth)
            assert_page(page)

            log_action(
                action="page.create",
                entity_type="page",
                entity_id=page.id,
                payload={
                    "title": page.title,
                    "slug": page.slug,
                },
            )

        return page

    except IntegrityError as exc:
        raise SlugConflict(f"A page with slug {slug!r} already exists") from exc
