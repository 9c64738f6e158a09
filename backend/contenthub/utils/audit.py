from typing import Optional
from flask import has_request_context
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from contenthub.extensions import db
from contenthub.models.audit_log import AuditLog


def current_actor_id() -> Optional[str]:
    """JWT subject of the current request, if any."""
    if not has_request_context():
        return None
    verify_jwt_in_request(optional=True)
    return get_jwt_identity()


def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    log = AuditLog()

    log.actor_id = current_actor_id()
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)
