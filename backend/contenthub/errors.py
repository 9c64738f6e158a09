from flask import current_app, jsonify
from werkzeug.exceptions import RequestEntityTooLarge
from contenthub.domain.invariants.exceptions import InvariantViolation
from contenthub.application.errors import MediaError, MediaNotFound, PageNotFound, SlugConflict
from contenthub.sync.exceptions import SyncConfigurationError, SyncError
from contenthub.utils.optimistic_lock import StaleWriteError


def _error(name, message, status, **extra):
    response = jsonify({"error": name, "message": message, **extra})
    response.status_code = status
    return response


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error("InvariantViolation", str(error), 400)

    @app.errorhandler(PageNotFound)
    def handle_page_not_found(error):
        return _error("NotFound", str(error), 404)

    @app.errorhandler(MediaNotFound)
    def handle_media_not_found(error):
        return _error("NotFound", str(error), 404)

    @app.errorhandler(SlugConflict)
    def handle_slug_conflict(error):
        current_app.logger.warning("Page save rejected: %s (cause: %s)", error, error.__cause__)
        return _error("SlugConflict", str(error), 409)

    @app.errorhandler(StaleWriteError)
    def handle_stale_write(error):
        return _error("Conflict", str(error), 409)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_request_too_large(error):
        limit = current_app.config.get("MAX_CONTENT_LENGTH")
        current_app.logger.warning("Request body over %s bytes rejected", limit)
        return _error("MediaError", f"Request body exceeds {limit} bytes", 413)

    @app.errorhandler(MediaError)
    def handle_media_error(error):
        return _error("MediaError", str(error), error.status_code)

    @app.errorhandler(SyncError)
    def handle_sync_error(error):
        # Full cause is logged by the adapter; clients only see the reason code
        if isinstance(error, SyncConfigurationError):
            current_app.logger.info("Repository sync not attempted: %s", error)
            message = str(error)
        else:
            message = "Failed to sync with the repository"
        return _error("SyncFailed", message, error.status_code, reason=error.reason)
