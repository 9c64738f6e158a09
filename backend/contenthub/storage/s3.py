"""S3-compatible object storage backend."""

import logging
from typing import BinaryIO, Iterable

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .base import Storage, StorageError

logger = logging.getLogger(__name__)


class S3Storage(Storage):
    """
    Works with AWS S3, MinIO, LocalStack, and other S3-compatible services.
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: str | None = None,
        region: str = "us-east-1",
        client=None,
    ):
        if not bucket:
            raise StorageError("S3_BUCKET is required for the s3 storage backend")

        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.region = region

        if client is None:
            client_kwargs = {
                "service_name": "s3",
                "region_name": region,
                "config": Config(signature_version="s3v4"),
            }
            if endpoint_url:
                client_kwargs["endpoint_url"] = endpoint_url
            client = boto3.client(**client_kwargs)

        self.client = client

        logger.info("S3 storage initialized bucket=%s endpoint=%s", bucket, endpoint_url)

    def upload(self, path: str, stream: BinaryIO, content_type: str | None = None) -> int:
        key = path.lstrip("/")
        extra_args = {"ContentType": content_type} if content_type else None

        try:
            self.client.upload_fileobj(stream, self.bucket, key, ExtraArgs=extra_args)
            head = self.client.head_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Failed to upload {key}: {exc}") from exc

        return int(head.get("ContentLength", 0))

    def public_url(self, path: str) -> str:
        key = path.lstrip("/")
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def remove(self, paths: Iterable[str]) -> None:
        objects = [{"Key": path.lstrip("/")} for path in paths]
        if not objects:
            return

        try:
            response = self.client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": objects, "Quiet": True},
            )
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Failed to delete objects: {exc}") from exc

        errors = response.get("Errors") or []
        if errors:
            keys = ", ".join(e.get("Key", "?") for e in errors)
            raise StorageError(f"Failed to delete objects: {keys}")
