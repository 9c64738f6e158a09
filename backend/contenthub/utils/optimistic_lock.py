from flask import request
from datetime import timezone
from dateutil.parser import parse, ParserError

from contenthub.domain.invariants.exceptions import InvariantViolation


class StaleWriteError(Exception):
    """The entity changed after the client last read it."""


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity):
    """
    Enforces optimistic locking using the If-Unmodified-Since header.
    Raises StaleWriteError if the entity has been modified since.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ParserError, OverflowError, ValueError):
        raise InvariantViolation("Invalid If-Unmodified-Since header")

    if entity.updated_at is None:
        return

    server_ts = normalize_ts(entity.updated_at)

    if server_ts > client_ts:
        raise StaleWriteError("Conflict detected. Resource has been modified.")
