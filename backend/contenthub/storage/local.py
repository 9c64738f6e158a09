"""Filesystem storage backend (development and single-host deployments)."""

import os
import logging
import shutil
from typing import BinaryIO, Iterable

from .base import Storage, StorageError

logger = logging.getLogger(__name__)


class LocalStorage(Storage):
    def __init__(self, root: str, base_url: str = "/uploads"):
        self.root = os.path.abspath(root)
        self.base_url = base_url.rstrip("/")

    def _resolve(self, path: str) -> str:
        full_path = os.path.abspath(os.path.join(self.root, path.lstrip("/")))
        if os.path.commonpath([self.root, full_path]) != self.root:
            raise StorageError(f"Path escapes storage root: {path}")
        return full_path

    def upload(self, path: str, stream: BinaryIO, content_type: str | None = None) -> int:
        full_path = self._resolve(path)
        try:
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, "wb") as fh:
                shutil.copyfileobj(stream, fh)
            size = os.path.getsize(full_path)
        except OSError as exc:
            raise StorageError(f"Failed to store {path}: {exc}") from exc

        logger.debug("Stored %s (%d bytes)", path, size)
        return size

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def remove(self, paths: Iterable[str]) -> None:
        for path in paths:
            full_path = self._resolve(path)
            if not os.path.exists(full_path):
                continue
            try:
                os.remove(full_path)
            except OSError as exc:
                raise StorageError(f"Failed to delete file {path}: {exc}") from exc
