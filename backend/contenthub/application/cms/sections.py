from typing import Any, Callable, Dict, List, Optional, Tuple

from contenthub.domain import composer
from contenthub.domain.invariants.exceptions import InvariantViolation
from contenthub.domain.invariants.page import assert_page
from contenthub.domain.section import Section
from contenthub.models.page import Page
from contenthub.utils.audit import log_action
from contenthub.utils.transaction import transactional
from .load_page import load_page

SectionOp = Callable[[List[Section]], List[Section]]


def _apply(
    page_id: str,
    op: SectionOp,
    *,
    action: str,
    payload: Dict[str, Any],
) -> Page:
    """Load, apply a composer operation, re-check invariants, persist, audit."""
    page = load_page(page_id)

    with transactional():
        page.section_list = op(page.section_list)
        assert_page(page)

        log_action(
            action=action,
            entity_type="page",
            entity_id=page.id,
            payload=payload,
        )

    return page


def append_section(*, page_id: str) -> Tuple[Page, Section]:
    created: List[Section] = []

    def op(sections):
        updated, section = composer.append_section(sections)
        created.append(section)
        return updated

    page = _apply(page_id, op, action="section.create", payload={})
    return page, created[0]


def remove_section(*, page_id: str, index: int) -> Page:
    return _apply(
        page_id,
        lambda sections: composer.remove_section(sections, index),
        action="section.delete",
        payload={"index": index},
    )


def move_section(*, page_id: str, index: int, direction: str) -> Page:
    if direction == "up":
        op = composer.move_section_up
    elif direction == "down":
        op = composer.move_section_down
    else:
        raise InvariantViolation(f"Invalid move direction: {direction}")

    return _apply(
        page_id,
        lambda sections: op(sections, index),
        action="section.reorder",
        payload={"index": index, "direction": direction},
    )


def update_section(
    *,
    page_id: str,
    section_id: str,
    changes: Dict[str, Any],
) -> Tuple[Page, Optional[Section]]:
    """
    Apply one or more field updates to a single section.

    ``type`` is applied first so that switching to ``custom`` and setting
    ``custom_css`` can happen in one request.
    """
    if not changes:
        raise InvariantViolation("No section fields provided for update")

    fields = sorted(changes, key=lambda f: (f != "type", f))

    def op(sections):
        for field in fields:
            sections = composer.update_section_field(sections, section_id, field, changes[field])
        return sections

    page = _apply(
        page_id,
        op,
        action="section.update",
        payload={"section_id": section_id, "fields": fields},
    )
    section = next((s for s in page.section_list if s.id == section_id), None)
    return page, section
