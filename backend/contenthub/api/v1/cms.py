# contenthub/api/v1/cms.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from contenthub.utils.decorators import roles_required, EDITOR_ROLES
from contenthub.utils.optimistic_lock import enforce_optimistic_lock
from contenthub.models.page import Page
from contenthub.normalizers.page import normalize_page, normalize_page_summary
from contenthub.normalizers.section import normalize_section
from contenthub.application.cms.load_page import load_page
from contenthub.application.cms.create_page import create_page as create_page_service
from contenthub.application.cms.update_page import update_page as update_page_service
from contenthub.application.cms.delete_page import delete_page as delete_page_service
from contenthub.application.cms.publish_page import toggle_publish
from contenthub.application.cms import sections as section_service
from contenthub.rendering.renderer import render_page
from . import v1_bp # import the versioned blueprint


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def list_pages():
    pages = Page.query.order_by(Page.title.asc()).all()
    return jsonify({"items": [normalize_page_summary(p) for p in pages]})


@v1_bp.route("/pages", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def create_page():
    data = request.get_json(silent=True) or {}
    page = create_page_service(data=data)

    return jsonify({
        "id": page.id,
        "message": "Page created successfully",
        "page": normalize_page(page, admin=True),
    }), 201


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def get_page(page_id):
    page = load_page(page_id)
    return jsonify(normalize_page(page, admin=True))


@v1_bp.route("/pages/<page_id>", methods=["PUT"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def update_page(page_id):
    page = load_page(page_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(page)

    data = request.get_json(silent=True) or {}
    page = update_page_service(page_id=page_id, data=data)

    return jsonify({
        "message": "Page updated successfully",
        "page": normalize_page(page, admin=True),
    }), 200


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_page(page_id):
    result = delete_page_service(page_id=page_id)
    return jsonify({"message": "Page deleted successfully", **result}), 200


@v1_bp.route("/pages/<page_id>/publish", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def publish_page(page_id):
    page = toggle_publish(page_id=page_id)

    return jsonify({
        "message": "Page published" if page.is_published else "Page unpublished",
        "is_published": bool(page.is_published),
        "published_at": page.published_at.isoformat() if page.published_at else None,
    }), 200


@v1_bp.route("/pages/<page_id>/preview", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def preview_page(page_id):
    page = load_page(page_id)
    return render_page(page), 200, {"Content-Type": "text/html; charset=utf-8"}


# ------------------------
# Sections
# ------------------------

@v1_bp.route("/pages/<page_id>/sections", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def append_section(page_id):
    page, section = section_service.append_section(page_id=page_id)

    return jsonify({
        "id": section.id,
        "message": "Section created successfully",
        "active_section": normalize_section(section, admin=True),
        "sections": [normalize_section(s, admin=True) for s in page.section_list],
    }), 201


@v1_bp.route("/pages/<page_id>/sections/<section_id>", methods=["PATCH"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def update_section(page_id, section_id):
    data = request.get_json(silent=True) or {}

    # Either {"field": ..., "value": ...} or a partial section object
    if "field" in data:
        changes = {data["field"]: data.get("value")}
    else:
        changes = data

    page, section = section_service.update_section(
        page_id=page_id,
        section_id=section_id,
        changes=changes,
    )

    return jsonify({
        "message": "Section updated successfully",
        "section": normalize_section(section, admin=True),
    }), 200


@v1_bp.route("/pages/<page_id>/sections/<int:index>", methods=["DELETE"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def remove_section(page_id, index):
    page = section_service.remove_section(page_id=page_id, index=index)

    return jsonify({
        "message": "Section deleted and order re-compacted",
        "active_section": None,
        "sections": [normalize_section(s, admin=True) for s in page.section_list],
    }), 200


@v1_bp.route("/pages/<page_id>/sections/<int:index>/move-up", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def move_section_up(page_id, index):
    page = section_service.move_section(page_id=page_id, index=index, direction="up")
    return jsonify({"sections": [normalize_section(s, admin=True) for s in page.section_list]}), 200


@v1_bp.route("/pages/<page_id>/sections/<int:index>/move-down", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def move_section_down(page_id, index):
    page = section_service.move_section(page_id=page_id, index=index, direction="down")
    return jsonify({"sections": [normalize_section(s, admin=True) for s in page.section_list]}), 200
