from flask import Flask, send_file, send_from_directory, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .api.public import public_bp
from .errors import register_error_handlers
from .storage.factory import init_storage
from .application.sync.service import init_sync
from .utils.logger import configure_logging
from flask_swagger_ui import get_swaggerui_blueprint
import os


def create_app(
    config_name: str = "development",
    *,
    storage=None,
    sync_store=None,
    github_client_factory=None,
) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # Register models on the metadata for migrations
    from .models import page, media_asset, media_orphan, audit_log  # noqa: F401

    # -------------------------------------------------
    # Media storage & repository sync boundaries
    # -------------------------------------------------
    init_storage(app, storage)
    init_sync(app, store=sync_store, client_factory=github_client_factory)

    # -------------------------------------------------
    # Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    app.register_blueprint(public_bp)
    register_error_handlers(app)

    if app.config.get("STORAGE_BACKEND") == "local":
        @app.route("/uploads/<path:filename>", methods=["GET"], endpoint="uploaded_media")
        def uploaded_media(filename):
            return send_from_directory(
                os.path.abspath(current_app.config["UPLOAD_FOLDER"]),
                filename,
            )

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC)
    # -------------------------------------------------
    @app.route("/openapi/cms.yaml", methods=["GET"], endpoint="openapi_cms")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "cms_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("cms_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/cms.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Content Hub API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    app.logger.debug("contenthub app created with %s config", config_name)
    return app
