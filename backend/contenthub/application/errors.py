class PageNotFound(Exception):
    pass


class MediaNotFound(Exception):
    pass


class SlugConflict(Exception):
    """Another page already uses the slug (unique constraint)."""


class MediaError(Exception):
    """A media operation failed as a whole (validation or storage)."""

    status_code = 502

    def __init__(self, message, *, status_code=None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
