import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from contenthub.extensions import db
from contenthub.models.base import utc_now
from contenthub.models.media_asset import MediaAsset
from contenthub.models.media_orphan import (
    MediaOrphan,
    DATABASE_DELETE_FAILED,
    STORAGE_DELETE_FAILED,
)
from contenthub.storage.base import Storage, StorageError
from contenthub.storage.factory import get_storage
from contenthub.utils.transaction import transactional

logger = logging.getLogger(__name__)


def list_orphans():
    return (
        MediaOrphan.query
        .filter(MediaOrphan.resolved_at.is_(None))
        .order_by(MediaOrphan.created_at.asc())
        .all()
    )


def _resolve(orphan: MediaOrphan, storage: Storage) -> None:
    if orphan.reason == STORAGE_DELETE_FAILED:
        storage.remove([orphan.file_path])
        with transactional():
            orphan.resolved_at = utc_now()
        return

    if orphan.reason == DATABASE_DELETE_FAILED:
        with transactional():
            asset = db.session.get(MediaAsset, orphan.asset_id)
            if asset is not None:
                db.session.delete(asset)
            orphan.resolved_at = utc_now()
        return

    raise ValueError(f"Unknown orphan reason: {orphan.reason}")


def reconcile_orphans(*, storage: Optional[Storage] = None) -> Dict[str, int]:
    """Retry cleanup for every unresolved orphan; each is handled on its own."""
    storage = storage or get_storage()
    resolved = failed = 0

    for orphan in list_orphans():
        try:
            _resolve(orphan, storage)
            resolved += 1
        except (StorageError, SQLAlchemyError, ValueError) as exc:
            failed += 1
            logger.warning("Could not reconcile orphan %s (%s): %s", orphan.id, orphan.file_path, exc)

    if resolved or failed:
        logger.info("Media reconciliation finished: %d resolved, %d still pending", resolved, failed)

    return {"resolved": resolved, "pending": failed}
