"""
Compose a stored page into an HTML document.

Editor-authored HTML, CSS and JS are injected according to a RenderPolicy.
Deciding who may author that content is the job of the role gate on the
write endpoints, not of this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from flask import current_app, render_template
from markupsafe import Markup

from contenthub.domain.section import renders_custom_css


class RenderPolicy(str, Enum):
    TRUSTED = "trusted"
    NO_SCRIPTS = "no-scripts"
    ESCAPED = "escaped"

    @classmethod
    def from_config(cls, value: Optional[str]) -> "RenderPolicy":
        try:
            return cls(value or cls.TRUSTED.value)
        except ValueError:
            current_app.logger.warning("Unknown RENDER_POLICY %r, falling back to escaped", value)
            return cls.ESCAPED

    @property
    def allows_markup(self) -> bool:
        return self is not RenderPolicy.ESCAPED

    @property
    def allows_scripts(self) -> bool:
        return self is RenderPolicy.TRUSTED


@dataclass(frozen=True)
class RenderedSection:
    id: str
    type: str
    title: str
    content: Any
    custom_css: Any


def _markup(value: Optional[str], policy: RenderPolicy) -> Any:
    """Trusted markup passes through verbatim; otherwise Jinja escapes it."""
    if not value:
        return ""
    return Markup(value) if policy.allows_markup else value


def _style(value: Optional[str], policy: RenderPolicy) -> Optional[Markup]:
    if not value or not policy.allows_markup:
        return None
    return Markup(value)


def _script(value: Optional[str], policy: RenderPolicy) -> Optional[Markup]:
    if not value or not policy.allows_scripts:
        return None
    return Markup(value)


def page_context(page, policy: RenderPolicy) -> Dict[str, Any]:
    sections: List[RenderedSection] = [
        RenderedSection(
            id=section.id,
            type=section.type.value,
            title=section.title,
            content=_markup(section.content, policy),
            custom_css=(
                _style(section.custom_css, policy)
                if renders_custom_css(section.type)
                else None
            ),
        )
        for section in page.section_list
    ]

    return {
        "title": page.title,
        "document_title": page.meta_title or page.title,
        "meta_description": page.meta_description,
        "meta_keywords": page.meta_keywords,
        "og_image": page.og_image,
        "layout": page.layout,
        "body": _markup(page.content, policy),
        "sections": sections,
        "custom_css": _style(page.custom_css, policy),
        "custom_js": _script(page.custom_js, policy),
        "tracking_code": _script(page.tracking_code, policy),
    }


def render_page(page, *, policy: Optional[RenderPolicy] = None) -> str:
    policy = policy or RenderPolicy.from_config(current_app.config.get("RENDER_POLICY"))
    return render_template("page.html", page=page_context(page, policy))
