from flask import Blueprint, abort

from contenthub.application.cms.load_page import load_published_page
from contenthub.application.errors import PageNotFound
from contenthub.rendering.renderer import render_page

public_bp = Blueprint("public", __name__)


@public_bp.route("/p/<slug>", methods=["GET"])
def show_page(slug):
    try:
        page = load_published_page(slug)
    except PageNotFound:
        abort(404)

    return render_page(page), 200, {"Content-Type": "text/html; charset=utf-8"}
