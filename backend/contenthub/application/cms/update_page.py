from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from contenthub.models.page import Page
from contenthub.domain.invariants.exceptions import InvariantViolation
from contenthub.domain.invariants.page import assert_page
from contenthub.application.errors import SlugConflict
from contenthub.utils.audit import log_action
from contenthub.utils.transaction import transactional
from .load_page import load_page
from .page_fields import EDITABLE_FIELDS, apply_page_fields, apply_meta_defaults


def update_page(
    *,
    page_id: str,
    data: Dict[str, Any],
) -> Page:
    """
    Save the editable aggregate of a page.

    Design rules:
    - Only whitelisted fields are mutable
    - A payload without any editable field is rejected
    - Invariants always revalidated
    - Last write wins (optimistic locking is opt-in at the API layer)
    """
    if not EDITABLE_FIELDS.intersection(data):
        raise InvariantViolation("No valid fields provided for update")

    page = load_page(page_id)

    try:
        with transactional():
            changed_fields = apply_page_fields(page, data)
            apply_meta_defaults(page)

            # 🔒 Domain invariant enforcement
            assert_page(page)

            if changed_fields:
                log_action(
                    action="page.update",
                    entity_type="page",
                    entity_id=page.id,
                    payload={
                        "fields": sorted(changed_fields),
                    },
                )
    except IntegrityError as exc:
        raise SlugConflict(f"A page with slug {page.slug!r} already exists") from exc

    return page
