from contenthub.models.page import Page
from contenthub.domain.lifecycle.page import toggle_publication
from contenthub.utils.transaction import transactional
from contenthub.utils.audit import log_action
from .load_page import load_page


def toggle_publish(
    *,
    page_id: str,
) -> Page:
    """
    Publish a draft page or take a published page back to draft.

    Publishing stamps ``published_at``; unpublishing clears it.
    """
    page = load_page(page_id)

    with transactional():
        page.is_published, page.published_at = toggle_publication(bool(page.is_published))

        log_action(
            action="page.publish" if page.is_published else "page.unpublish",
            entity_type="page",
            entity_id=page.id,
            payload={
                "published_at": page.published_at.isoformat() if page.published_at else None,
            },
        )

    return page
