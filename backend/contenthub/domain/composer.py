from __future__ import annotations

from dataclasses import replace
from typing import Any, List, Optional, Sequence, Tuple

from contenthub.utils.order import compact_order
from .invariants.exceptions import InvariantViolation
from .section import Section, SectionType, editable_fields, new_section_id

# Fields a caller may set through update_section_field; the per-type subset
# comes from editable_fields().
UPDATABLE_FIELDS = {"type", "title", "content", "custom_css"}


def _check_index(sections: Sequence[Section], index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvariantViolation(f"Section index must be an integer: {index!r}")
    if index < 0 or index >= len(sections):
        raise InvariantViolation(
            f"Section index {index} out of range (0..{len(sections) - 1})"
        )


def append_section(
    sections: Sequence[Section],
    *,
    now: Optional[float] = None,
) -> Tuple[List[Section], Section]:
    """Append a default text section; it becomes the active section."""
    section = Section(
        id=new_section_id(sections, now=now),
        type=SectionType.TEXT,
        title="New Section",
        content="",
        order=len(sections),
    )
    return compact_order([*sections, section]), section


def remove_section(sections: Sequence[Section], index: int) -> List[Section]:
    _check_index(sections, index)
    remaining = [s for i, s in enumerate(sections) if i != index]
    return compact_order(remaining)


def move_section_up(sections: Sequence[Section], index: int) -> List[Section]:
    _check_index(sections, index)
    updated = list(sections)
    if index > 0:
        updated[index - 1], updated[index] = updated[index], updated[index - 1]
    return compact_order(updated)


def move_section_down(sections: Sequence[Section], index: int) -> List[Section]:
    _check_index(sections, index)
    updated = list(sections)
    if index < len(updated) - 1:
        updated[index + 1], updated[index] = updated[index], updated[index + 1]
    return compact_order(updated)


def update_section_field(
    sections: Sequence[Section],
    section_id: str,
    field: str,
    value: Any,
) -> List[Section]:
    """
    Replace one field of the section matching ``section_id``.

    Order is never touched here. ``custom_css`` is only accepted for
    section types that expose it.
    """
    if field not in UPDATABLE_FIELDS:
        raise InvariantViolation(f"Section field {field!r} cannot be updated")

    updated: List[Section] = []
    found = False
    for section in sections:
        if section.id != section_id:
            updated.append(section)
            continue

        found = True
        if field == "type":
            updated.append(replace(section, type=SectionType.parse(value)))
            continue

        if field not in editable_fields(section.type):
            raise InvariantViolation(
                f"Field {field!r} is not editable on {section.type.value} sections"
            )
        if value is None and field != "custom_css":
            value = ""
        if value is not None and not isinstance(value, str):
            raise InvariantViolation(f"Section {field} must be a string")
        updated.append(replace(section, **{field: value}))

    if not found:
        raise InvariantViolation(f"Section {section_id!r} not found")

    return updated
