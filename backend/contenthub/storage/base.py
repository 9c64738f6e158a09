"""Object storage boundary for media assets."""

from abc import ABC, abstractmethod
from typing import BinaryIO, Iterable


class StorageError(Exception):
    """Raised when the storage backend rejects an operation."""


class Storage(ABC):
    """
    Minimal object storage contract.

    Paths are relative keys of the form ``<page_id>/<random>.<ext>``.
    """

    @abstractmethod
    def upload(self, path: str, stream: BinaryIO, content_type: str | None = None) -> int:
        """Store the stream under ``path`` and return the byte count written."""

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Public URL for a stored object."""

    @abstractmethod
    def remove(self, paths: Iterable[str]) -> None:
        """Remove the given objects. Missing objects are not an error."""
