from typing import Optional

from contenthub.application.cms.load_page import load_page
from contenthub.sync.adapter import SyncResult
from contenthub.utils.audit import log_action
from contenthub.utils.transaction import transactional
from .service import build_sync


def sync_page(
    *,
    page_id: str,
    message: Optional[str] = None,
) -> SyncResult:
    """
    Publish the persisted state of a page to the configured repository.

    Sync errors propagate unchanged; the adapter has already logged the
    precise cause.
    """
    page = load_page(page_id)
    result = build_sync().publish(page, message=message)

    with transactional():
        log_action(
            action="page.sync",
            entity_type="page",
            entity_id=page.id,
            payload=result.to_dict(),
        )

    return result
