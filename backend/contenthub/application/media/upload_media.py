import io
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from contenthub.extensions import db
from contenthub.models.media_asset import MediaAsset
from contenthub.storage.base import Storage, StorageError
from contenthub.storage.factory import get_storage
from contenthub.application.cms.load_page import load_page
from contenthub.utils.audit import log_action
from contenthub.utils.media import allowed_file, guess_content_type, storage_path
from contenthub.utils.transaction import transactional

logger = logging.getLogger(__name__)


@dataclass
class PendingUpload:
    index: int
    file_name: str
    content_type: str
    data: bytes
    path: str


@dataclass
class FailedUpload:
    index: int
    file_name: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"file_name": self.file_name, "error": self.error}


@dataclass
class BatchUploadResult:
    uploaded: List[MediaAsset] = field(default_factory=list)
    failed: List[FailedUpload] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.uploaded) and bool(self.failed)


def _prepare(page_id: str, files: Iterable[Any], max_bytes: int):
    pending: List[PendingUpload] = []
    failed: List[FailedUpload] = []

    for index, upload in enumerate(files):
        file_name = getattr(upload, "filename", None) or ""

        if not allowed_file(file_name):
            failed.append(FailedUpload(index, file_name, "File type not allowed"))
            continue

        # One byte past the limit is enough to reject the file
        data = upload.read(max_bytes + 1)
        if len(data) > max_bytes:
            failed.append(FailedUpload(index, file_name, f"File exceeds {max_bytes} bytes"))
            continue

        pending.append(PendingUpload(
            index=index,
            file_name=file_name,
            content_type=guess_content_type(file_name, getattr(upload, "mimetype", None)),
            data=data,
            path=storage_path(page_id, file_name),
        ))

    return pending, failed


def _store(storage: Storage, item: PendingUpload) -> int:
    return storage.upload(item.path, io.BytesIO(item.data), item.content_type)


def _record(page_id: str, item: PendingUpload, size: int, public_url: str) -> MediaAsset:
    with transactional():
        asset = MediaAsset()
        asset.page_id = page_id
        asset.file_name = item.file_name
        asset.file_path = item.path
        asset.file_type = item.content_type
        asset.file_size = size
        asset.public_url = public_url

        db.session.add(asset)
        db.session.flush()

        log_action(
            action="media.upload",
            entity_type="media",
            entity_id=asset.id,
            payload={"page_id": page_id, "file_name": item.file_name},
        )

    return asset


def upload_media(
    *,
    page_id: str,
    files: Iterable[Any],
    storage: Optional[Storage] = None,
    max_workers: Optional[int] = None,
    max_bytes: Optional[int] = None,
) -> BatchUploadResult:
    """
    Upload a batch of files for a page.

    Storage uploads fan out over a small thread pool; database records are
    written afterwards on this thread, one commit per file, in input order.
    A failed file never cancels its siblings and never rolls back files that
    already succeeded, so partial success is a normal outcome.
    """
    page = load_page(page_id)
    storage = storage or get_storage()
    max_workers = max_workers or current_app.config.get("MEDIA_UPLOAD_WORKERS", 3)
    max_bytes = max_bytes or current_app.config.get("MAX_MEDIA_BYTES", 10 * 1024 * 1024)

    pending, failed = _prepare(page.id, files, max_bytes)
    result = BatchUploadResult(failed=failed)

    if pending:
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            futures: List[Future] = [pool.submit(_store, storage, item) for item in pending]

        for item, future in zip(pending, futures):
            try:
                size = future.result()
            except StorageError as exc:
                result.failed.append(FailedUpload(item.index, item.file_name, str(exc)))
                continue

            try:
                asset = _record(page.id, item, size or len(item.data), storage.public_url(item.path))
            except SQLAlchemyError as exc:
                logger.error(
                    "Stored %s for page %s but could not record it: %s",
                    item.path,
                    page.id,
                    exc,
                )
                try:
                    storage.remove([item.path])
                except StorageError as cleanup_exc:
                    logger.warning(
                        "Could not remove unrecorded storage object %s: %s",
                        item.path,
                        cleanup_exc,
                    )
                result.failed.append(FailedUpload(item.index, item.file_name, "Failed to record media"))
                continue

            result.uploaded.append(asset)

    for failure in result.failed:
        logger.error("Failed to upload %s for page %s: %s", failure.file_name, page.id, failure.error)

    result.failed.sort(key=lambda f: f.index)
    return result
