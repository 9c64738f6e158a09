from contenthub.extensions import db
from contenthub.models.page import Page
from contenthub.application.errors import PageNotFound


def load_page(page_id: str) -> Page:
    page = db.session.get(Page, page_id)
    if not page:
        raise PageNotFound(f"Page {page_id} not found")
    return page


def load_published_page(slug: str) -> Page:
    page = Page.query.filter_by(slug=slug, is_published=True).first()
    if not page:
        raise PageNotFound(f"Page {slug!r} not found")
    return page
