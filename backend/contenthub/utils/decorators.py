from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt

EDITOR_ROLES = ("admin", "editor")


def roles_required(*allowed_roles):
    """
    Gate a route on the ``role`` claim of an already-verified JWT.

    Token issuance lives outside this service; only the claim is consumed.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
