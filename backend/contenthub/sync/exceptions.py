class SyncError(Exception):
    """Base class for repository sync failures."""

    reason = "failed"
    status_code = 502

    def __init__(self, message, *, status=None):
        super().__init__(message)
        self.status = status


class SyncConfigurationError(SyncError):
    """Token, owner or repository missing; raised before any network call."""

    reason = "configuration"
    status_code = 400


class SyncAuthenticationError(SyncError):
    reason = "authentication"


class SyncRateLimitError(SyncError):
    reason = "rate_limited"


class SyncConflictError(SyncError):
    """The remote file changed after its version token was read."""

    reason = "conflict"
    status_code = 409


class SyncNotFoundError(SyncError):
    reason = "not_found"


class SyncTransportError(SyncError):
    reason = "transport"
