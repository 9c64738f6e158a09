from contenthub.extensions import db
from contenthub.domain.section import sections_from_json, sections_to_json
from .base import BaseModel


class Page(BaseModel):
    __tablename__ = "content_pages"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)

    meta_title = db.Column(db.String(200), nullable=True)
    meta_description = db.Column(db.Text, nullable=True)
    meta_keywords = db.Column(db.String(500), nullable=True)
    og_image = db.Column(db.String(512), nullable=True)

    content = db.Column(db.Text, nullable=False, default="")
    # Ordered array of Section dicts; see contenthub.domain.section
    sections = db.Column(db.JSON, nullable=False, default=list)

    layout = db.Column(db.String(50), nullable=False, default="default")
    is_published = db.Column(db.Boolean, nullable=False, default=False, index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    custom_css = db.Column(db.Text, nullable=True)
    custom_js = db.Column(db.Text, nullable=True)
    tracking_code = db.Column(db.Text, nullable=True)

    media = db.relationship(
        "MediaAsset",
        back_populates="page",
        cascade="all, delete-orphan",
    )

    @property
    def section_list(self):
        return sections_from_json(self.sections)

    @section_list.setter
    def section_list(self, value):
        self.sections = sections_to_json(value)
