import logging
from typing import Any, Dict

from contenthub.extensions import db
from contenthub.models.media_asset import MediaAsset
from contenthub.models.media_orphan import MediaOrphan, STORAGE_DELETE_FAILED
from contenthub.storage.base import StorageError
from contenthub.storage.factory import get_storage
from contenthub.utils.audit import log_action
from contenthub.utils.transaction import transactional
from .load_page import load_page

logger = logging.getLogger(__name__)


def delete_page(
    *,
    page_id: str,
    storage=None,
) -> Dict[str, Any]:
    """
    Hard-delete a page together with its media.

    Notes:
    - Sections are embedded in the page row and go with it
    - Media rows are deleted in the same transaction as the page
    - Storage objects are removed after commit; failures are recorded as
      orphans for reconciliation instead of failing the request
    """
    page = load_page(page_id)
    storage = storage or get_storage()

    assets = MediaAsset.query.filter_by(page_id=page.id).all()
    paths = [asset.file_path for asset in assets]
    asset_ids = {asset.file_path: asset.id for asset in assets}

    with transactional():
        for asset in assets:
            db.session.delete(asset)

        db.session.delete(page)

        log_action(
            action="page.delete",
            entity_type="page",
            entity_id=page_id,
            payload={"media_count": len(paths)},
        )

    # Cleanup media outside transaction
    orphaned = []
    if paths:
        try:
            storage.remove(paths)
        except StorageError as exc:
            logger.warning(
                "Page %s deleted but %d storage objects could not be removed: %s",
                page_id,
                len(paths),
                exc,
            )
            orphaned = paths
            with transactional():
                for path in paths:
                    orphan = MediaOrphan()
                    orphan.asset_id = asset_ids[path]
                    orphan.page_id = page_id
                    orphan.file_path = path
                    orphan.reason = STORAGE_DELETE_FAILED
                    orphan.detail = str(exc)
                    db.session.add(orphan)

    return {
        "page_id": page_id,
        "media_deleted": len(paths),
        "orphaned": orphaned,
    }
