import re

_WHITESPACE = re.compile(r"\s+")
_NOT_SLUG = re.compile(r"[^a-z0-9-]")

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def slugify(text: str) -> str:
    """
    Convert arbitrary title text into a URL-safe slug.

    Lowercases, collapses whitespace runs into single hyphens and drops
    everything outside ``[a-z0-9-]``. Total and idempotent; uniqueness is
    left to the database constraint.
    """
    value = (text or "").lower()
    value = _WHITESPACE.sub("-", value)
    return _NOT_SLUG.sub("", value)


def is_valid_slug(value: str) -> bool:
    return bool(value) and SLUG_PATTERN.match(value) is not None
