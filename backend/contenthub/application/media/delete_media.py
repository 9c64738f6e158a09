import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from contenthub.extensions import db
from contenthub.models.media_asset import MediaAsset
from contenthub.models.media_orphan import MediaOrphan, DATABASE_DELETE_FAILED
from contenthub.application.errors import MediaError, MediaNotFound
from contenthub.storage.base import Storage, StorageError
from contenthub.storage.factory import get_storage
from contenthub.utils.audit import log_action
from contenthub.utils.transaction import transactional

logger = logging.getLogger(__name__)

# Attempts at the database step once the storage object is gone.
RECORD_DELETE_ATTEMPTS = 2


@dataclass(frozen=True)
class DeleteResult:
    asset_id: str
    file_path: str
    orphaned: bool

    def to_dict(self):
        return {
            "id": self.asset_id,
            "file_path": self.file_path,
            "orphaned": self.orphaned,
        }


def _delete_record(asset_id: str) -> bool:
    """Delete the asset row; False when it is already gone."""
    with transactional():
        asset = db.session.get(MediaAsset, asset_id)
        if asset is None:
            return False

        db.session.delete(asset)

        log_action(
            action="media.delete",
            entity_type="media",
            entity_id=asset_id,
            payload={"page_id": asset.page_id, "file_path": asset.file_path},
        )
    return True


def _record_orphan(asset_id: str, page_id: str, file_path: str, detail: str) -> None:
    try:
        with transactional():
            orphan = MediaOrphan()
            orphan.asset_id = asset_id
            orphan.page_id = page_id
            orphan.file_path = file_path
            orphan.reason = DATABASE_DELETE_FAILED
            orphan.detail = detail
            db.session.add(orphan)
    except SQLAlchemyError as exc:
        logger.error("Could not record orphaned media %s (%s): %s", asset_id, file_path, exc)


def delete_media(
    *,
    asset_id: str,
    storage: Optional[Storage] = None,
) -> DeleteResult:
    """
    Remove a media asset: storage object first, then its row.

    If the storage step fails nothing has changed and MediaError is raised.
    If the row cannot be deleted after the object is gone, the delete is
    retried once and then recorded as a MediaOrphan for reconciliation;
    the caller gets ``orphaned=True`` instead of an exception.
    """
    asset = db.session.get(MediaAsset, asset_id)
    if asset is None:
        raise MediaNotFound(f"Media {asset_id} not found")

    storage = storage or get_storage()
    page_id, file_path = asset.page_id, asset.file_path

    try:
        storage.remove([file_path])
    except StorageError as exc:
        logger.error("Failed to delete storage object %s for media %s: %s", file_path, asset_id, exc)
        raise MediaError(f"Failed to delete media {asset_id}") from exc

    last_error: Optional[Exception] = None
    for attempt in range(1, RECORD_DELETE_ATTEMPTS + 1):
        try:
            _delete_record(asset_id)
            return DeleteResult(asset_id=asset_id, file_path=file_path, orphaned=False)
        except SQLAlchemyError as exc:
            last_error = exc
            logger.warning(
                "Attempt %d to delete media row %s failed: %s",
                attempt,
                asset_id,
                exc,
            )

    logger.warning(
        "Media %s orphaned: storage object %s removed but its row could not be deleted: %s",
        asset_id,
        file_path,
        last_error,
    )
    _record_orphan(asset_id, page_id, file_path, str(last_error))
    return DeleteResult(asset_id=asset_id, file_path=file_path, orphaned=True)
