from contenthub.extensions import db
from .base import BaseModel


class MediaAsset(BaseModel):
    __tablename__ = "content_media"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("content_pages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    file_name = db.Column(db.String(255), nullable=False)
    file_path = db.Column(db.String(512), nullable=False, unique=True)
    file_type = db.Column(db.String(100), nullable=False)
    file_size = db.Column(db.Integer, nullable=False, default=0)
    public_url = db.Column(db.String(1024), nullable=False)

    page = db.relationship("Page", back_populates="media")
