from datetime import datetime, timezone
from typing import Optional, Set, Tuple

# Explicit allowed state transitions
ALLOWED_PAGE_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"published"},
    "published": {"draft"},
}


def assert_page_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards page lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_PAGE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise ValueError(
            f"Illegal page transition: {from_status} → {to_status}"
        )


def toggle_publication(
    is_published: bool,
    now: Optional[datetime] = None,
) -> Tuple[bool, Optional[datetime]]:
    """
    Flip the published flag.

    Publishing stamps the publication time; unpublishing clears it.
    """
    from_status = "published" if is_published else "draft"
    to_status = "draft" if is_published else "published"
    assert_page_transition(from_status=from_status, to_status=to_status)

    if to_status == "published":
        return True, now or datetime.now(timezone.utc)
    return False, None
