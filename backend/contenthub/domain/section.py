from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, assert_never

from .invariants.exceptions import InvariantViolation


class SectionType(str, Enum):
    TEXT = "text"
    HERO = "hero"
    GALLERY = "gallery"
    FEATURES = "features"
    CTA = "cta"
    TESTIMONIALS = "testimonials"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Any) -> "SectionType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(t.value for t in cls)
            raise InvariantViolation(
                f"Invalid section type {value!r}. Allowed: {allowed}"
            ) from None


COMMON_FIELDS: FrozenSet[str] = frozenset({"type", "title", "content"})
CUSTOM_FIELDS: FrozenSet[str] = COMMON_FIELDS | {"custom_css"}


def editable_fields(section_type: SectionType) -> FrozenSet[str]:
    """
    Fields the editor exposes for a section type.

    Every enumerated type is listed explicitly so adding a new type fails
    type checking until it is handled here.
    """
    match section_type:
        case (
            SectionType.TEXT
            | SectionType.HERO
            | SectionType.GALLERY
            | SectionType.FEATURES
            | SectionType.CTA
            | SectionType.TESTIMONIALS
        ):
            return COMMON_FIELDS
        case SectionType.CUSTOM:
            return CUSTOM_FIELDS
        case _:
            assert_never(section_type)


def renders_custom_css(section_type: SectionType) -> bool:
    return "custom_css" in editable_fields(section_type)


@dataclass(frozen=True)
class Section:
    id: str
    type: SectionType = SectionType.TEXT
    title: str = "New Section"
    content: str = ""
    order: int = 0
    custom_css: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        if not isinstance(data, dict):
            raise InvariantViolation("Section must be an object")

        section_id = data.get("id")
        if section_id in (None, ""):
            raise InvariantViolation("Section id is required")

        order = data.get("order", 0)
        if isinstance(order, bool) or not isinstance(order, int):
            raise InvariantViolation(f"Section order must be an integer: {order!r}")

        return cls(
            id=str(section_id),
            type=SectionType.parse(data.get("type", SectionType.TEXT.value)),
            title=data.get("title") or "",
            content=data.get("content") or "",
            order=order,
            custom_css=data.get("custom_css"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "content": self.content,
            "order": self.order,
        }
        if self.custom_css is not None:
            data["custom_css"] = self.custom_css
        return data


def new_section_id(existing: Iterable[Section], now: Optional[float] = None) -> str:
    """
    Time-based id (epoch milliseconds), bumped until unique within the page.
    """
    taken = {s.id for s in existing}
    candidate = int((time.time() if now is None else now) * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def sections_from_json(raw) -> list[Section]:
    sections = [Section.from_dict(item) for item in (raw or [])]
    return sorted(sections, key=lambda s: s.order)


def sections_to_json(sections: Iterable[Section]) -> list[Dict[str, Any]]:
    return [s.to_dict() for s in sorted(sections, key=lambda s: s.order)]
