from typing import Optional

from markupsafe import escape

from contenthub.extensions import db
from contenthub.domain import composer
from contenthub.domain.invariants.exceptions import InvariantViolation
from contenthub.models.media_asset import MediaAsset
from contenthub.models.page import Page
from contenthub.application.errors import MediaNotFound
from contenthub.application.cms.load_page import load_page
from contenthub.utils.audit import log_action
from contenthub.utils.transaction import transactional


def media_markup(asset: MediaAsset) -> str:
    url = escape(asset.public_url)
    name = escape(asset.file_name)

    if asset.file_type.startswith("image/"):
        return f'<img src="{url}" alt="Media" />'
    if asset.file_type.startswith("video/"):
        return f'<video src="{url}" controls></video>'
    return f'<a href="{url}">{name}</a>'


def insert_media(
    *,
    page_id: str,
    media_id: str,
    section_id: Optional[str] = None,
) -> Page:
    """
    Append a media reference to the page body, or to one section's content
    when ``section_id`` is given.
    """
    page = load_page(page_id)
    asset = db.session.get(MediaAsset, media_id)
    if asset is None or asset.page_id != page.id:
        raise MediaNotFound(f"Media {media_id} not found on page {page_id}")

    snippet = f"\n{media_markup(asset)}\n"

    with transactional():
        if section_id is None:
            page.content = (page.content or "") + snippet
        else:
            sections = page.section_list
            target = next((s for s in sections if s.id == section_id), None)
            if target is None:
                raise InvariantViolation(f"Section {section_id!r} not found")
            page.section_list = composer.update_section_field(
                sections, section_id, "content", target.content + snippet
            )

        log_action(
            action="media.insert",
            entity_type="page",
            entity_id=page.id,
            payload={"media_id": media_id, "section_id": section_id},
        )

    return page
