"""Thin GitHub REST client for the contents, repos and branches endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from requests import Response

from .exceptions import (
    SyncAuthenticationError,
    SyncConflictError,
    SyncError,
    SyncNotFoundError,
    SyncRateLimitError,
    SyncTransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 10.0
API_VERSION = "2022-11-28"


def _error_message(resp: Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500]
    if isinstance(body, dict):
        return str(body.get("message") or body)[:500]
    return str(body)[:500]


def classify_error(resp: Response) -> SyncError:
    """Map a failed GitHub response onto the sync error taxonomy."""
    status = resp.status_code
    message = _error_message(resp)
    detail = f"HTTP {status}: {message}"

    if status == 401:
        return SyncAuthenticationError(detail, status=status)

    if status in (403, 429):
        remaining = resp.headers.get("X-RateLimit-Remaining")
        if (
            status == 429
            or remaining == "0"
            or "Retry-After" in resp.headers
            or "rate limit" in message.lower()
        ):
            return SyncRateLimitError(detail, status=status)
        return SyncAuthenticationError(detail, status=status)

    if status == 404:
        return SyncNotFoundError(detail, status=status)

    if status == 409 or (status == 422 and "sha" in message.lower()):
        return SyncConflictError(detail, status=status)

    return SyncTransportError(detail, status=status)


class GitHubClient:
    def __init__(
        self,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": API_VERSION,
        })

    def _url(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            resp = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise SyncTransportError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise classify_error(resp)

        try:
            return resp.json()
        except ValueError as exc:
            raise SyncTransportError(f"{method} {path} returned invalid JSON") from exc

    @staticmethod
    def _contents_path(owner: str, repo: str, path: str) -> str:
        return f"repos/{quote(owner)}/{quote(repo)}/contents/{quote(path.lstrip('/'))}"

    def get_file(self, owner: str, repo: str, path: str, ref: str) -> Optional[Dict[str, Any]]:
        """
        Fetch file metadata; ``None`` when the file does not exist yet.
        """
        try:
            data = self._request(
                "GET",
                self._contents_path(owner, repo, path),
                params={"ref": ref},
            )
        except SyncNotFoundError:
            return None

        if isinstance(data, list):
            raise SyncTransportError(f"{path} is a directory, not a file")
        return data

    def put_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        message: str,
        content: str,
        branch: str,
        sha: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "message": message,
            "content": content,
            "branch": branch,
        }
        if sha:
            payload["sha"] = sha

        return self._request("PUT", self._contents_path(owner, repo, path), json=payload)

    def list_repositories(self) -> List[Dict[str, Any]]:
        return self._request(
            "GET",
            "user/repos",
            params={"sort": "updated", "per_page": 100},
        )

    def list_branches(self, owner: str, repo: str) -> List[Dict[str, Any]]:
        return self._request(
            "GET",
            f"repos/{quote(owner)}/{quote(repo)}/branches",
            params={"per_page": 100},
        )
