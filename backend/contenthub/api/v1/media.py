# contenthub/api/v1/media.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from contenthub.utils.decorators import roles_required, EDITOR_ROLES
from contenthub.models.media_asset import MediaAsset
from contenthub.normalizers.media import normalize_media, normalize_orphan
from contenthub.normalizers.page import normalize_page
from contenthub.application.errors import MediaError
from contenthub.application.cms.load_page import load_page
from contenthub.application.media.upload_media import upload_media as upload_media_service
from contenthub.application.media.delete_media import delete_media as delete_media_service
from contenthub.application.media.insert_media import insert_media as insert_media_service
from contenthub.application.media.reconcile_orphans import list_orphans, reconcile_orphans
from . import v1_bp


@v1_bp.route("/pages/<page_id>/media", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def list_media(page_id):
    page = load_page(page_id)
    assets = MediaAsset.query.filter_by(page_id=page.id).all()
    return jsonify({"items": [normalize_media(a) for a in assets]})


@v1_bp.route("/pages/<page_id>/media", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def upload_media(page_id):
    files = request.files.getlist("files") or request.files.getlist("file")
    if not files:
        raise MediaError("No files provided", status_code=400)

    result = upload_media_service(page_id=page_id, files=files)

    if not result.uploaded:
        status = 400
    elif result.failed:
        status = 207  # partial success
    else:
        status = 201

    return jsonify({
        "uploaded": [normalize_media(a) for a in result.uploaded],
        "failed": [f.to_dict() for f in result.failed],
    }), status


@v1_bp.route("/pages/<page_id>/media/<media_id>/insert", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def insert_media(page_id, media_id):
    data = request.get_json(silent=True) or {}
    page = insert_media_service(
        page_id=page_id,
        media_id=media_id,
        section_id=data.get("section_id"),
    )
    return jsonify(normalize_page(page, admin=True)), 200


@v1_bp.route("/media/<media_id>", methods=["DELETE"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def delete_media(media_id):
    result = delete_media_service(asset_id=media_id)

    message = (
        "Media deleted; record flagged for reconciliation"
        if result.orphaned
        else "Media deleted successfully"
    )
    return jsonify({"message": message, **result.to_dict()}), 200


@v1_bp.route("/media/orphans", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_orphans():
    return jsonify({"items": [normalize_orphan(o) for o in list_orphans()]})


@v1_bp.route("/media/orphans/reconcile", methods=["POST"])
@jwt_required()
@roles_required("admin")
def reconcile_media_orphans():
    return jsonify(reconcile_orphans()), 200
