class InvariantViolation(Exception):
    """Raised when a page or section breaks a domain rule."""
