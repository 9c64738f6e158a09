from flask import current_app

from .base import Storage, StorageError
from .local import LocalStorage
from .s3 import S3Storage

EXTENSION_KEY = "contenthub.storage"


def build_storage(config) -> Storage:
    backend = config.get("STORAGE_BACKEND", "local")

    if backend == "local":
        return LocalStorage(
            root=config.get("UPLOAD_FOLDER", "uploads"),
            base_url=config.get("MEDIA_BASE_URL", "/uploads"),
        )

    if backend == "s3":
        return S3Storage(
            bucket=config.get("S3_BUCKET"),
            endpoint_url=config.get("S3_ENDPOINT_URL"),
            region=config.get("S3_REGION", "us-east-1"),
        )

    raise StorageError(f"Unknown storage backend: {backend}")


def init_storage(app, storage: Storage | None = None) -> None:
    app.extensions[EXTENSION_KEY] = storage or build_storage(app.config)


def get_storage() -> Storage:
    return current_app.extensions[EXTENSION_KEY]
