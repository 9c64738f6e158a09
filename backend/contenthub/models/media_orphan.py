from contenthub.extensions import db
from .base import BaseModel

DATABASE_DELETE_FAILED = "database_delete_failed"
STORAGE_DELETE_FAILED = "storage_delete_failed"


class MediaOrphan(BaseModel):
    """
    Reconciliation record for a media delete that did not complete.

    No foreign keys: the asset row or the page may already be gone.
    """
    __tablename__ = "media_orphans"

    asset_id = db.Column(db.String(36), nullable=False, index=True)
    page_id = db.Column(db.String(36), nullable=True)
    file_path = db.Column(db.String(512), nullable=False)
    reason = db.Column(db.String(50), nullable=False)
    detail = db.Column(db.Text, nullable=True)
    resolved_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
