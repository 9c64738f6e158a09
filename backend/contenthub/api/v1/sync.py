# contenthub/api/v1/sync.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from contenthub.utils.decorators import roles_required, EDITOR_ROLES
from contenthub.domain.invariants.exceptions import InvariantViolation
from contenthub.application.sync.service import build_sync, current_settings, update_settings
from contenthub.application.sync.sync_page import sync_page as sync_page_service
from . import v1_bp


@v1_bp.route("/sync/settings", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def get_sync_settings():
    return jsonify(current_settings().public())


@v1_bp.route("/sync/settings", methods=["PUT"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def save_sync_settings():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvariantViolation("Sync settings must be a JSON object")

    settings = update_settings(data)
    return jsonify({"message": "Sync settings saved", "settings": settings.public()}), 200


@v1_bp.route("/sync/repositories", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def list_repositories():
    return jsonify({"items": build_sync().list_repositories()})


@v1_bp.route("/sync/branches", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def list_branches():
    return jsonify({"items": build_sync().list_branches()})


@v1_bp.route("/pages/<page_id>/sync", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def sync_page(page_id):
    data = request.get_json(silent=True) or {}
    result = sync_page_service(page_id=page_id, message=data.get("message"))

    return jsonify({
        "message": "Successfully synced with the repository",
        **result.to_dict(),
    }), 200
