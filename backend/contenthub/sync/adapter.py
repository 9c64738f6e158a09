"""
Mirror a page into a GitHub repository as a JSON document.

The write is guarded by the blob sha read just before it: the contents API
refuses the update when the sha is stale, and that refusal is surfaced as
SyncConflictError rather than retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .client import GitHubClient, DEFAULT_API_URL, DEFAULT_TIMEOUT
from .exceptions import SyncConfigurationError, SyncError
from .serializer import encode_content, serialize_page
from .settings import SyncSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    path: str
    branch: str
    created: bool
    previous_sha: Optional[str]
    content_sha: Optional[str]
    commit_sha: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "branch": self.branch,
            "created": self.created,
            "previous_sha": self.previous_sha,
            "content_sha": self.content_sha,
            "commit_sha": self.commit_sha,
        }


def default_path(slug: str) -> str:
    return f"content/{slug}.json"


def default_message(title: str) -> str:
    return f"Update {title} page"


class RepositorySync:
    def __init__(
        self,
        settings: SyncSettings,
        client: Optional[GitHubClient] = None,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.settings = settings
        self._client = client
        self._api_url = api_url
        self._timeout = timeout

    @property
    def client(self) -> GitHubClient:
        if self._client is None:
            self._client = GitHubClient(
                self.settings.token,
                api_url=self._api_url,
                timeout=self._timeout,
            )
        return self._client

    def _log_failure(self, operation: str, path: str, exc: SyncError) -> None:
        logger.warning(
            "Repository sync %s failed [%s] status=%s repo=%s/%s branch=%s path=%s: %s",
            operation,
            type(exc).__name__,
            exc.status,
            self.settings.owner,
            self.settings.repo,
            self.settings.branch,
            path,
            exc,
        )

    def target_path(self, page) -> str:
        return self.settings.path or default_path(page.slug)

    def publish(self, page, *, message: Optional[str] = None, now=None) -> SyncResult:
        """
        Serialize ``page`` and create or update its file in the repository.

        1. serialize and base64-encode the document
        2. read the current blob sha (absent file means create)
        3. write with that sha so a concurrent change is rejected
        """
        settings = self.settings
        settings.require_complete()

        path = self.target_path(page)
        commit_message = message or settings.commit_message or default_message(page.title)
        encoded = encode_content(serialize_page(page, now=now))

        try:
            existing = self.client.get_file(settings.owner, settings.repo, path, ref=settings.branch)
            sha = existing.get("sha") if existing else None

            response = self.client.put_file(
                settings.owner,
                settings.repo,
                path,
                message=commit_message,
                content=encoded,
                branch=settings.branch,
                sha=sha,
            )
        except SyncError as exc:
            self._log_failure("publish", path, exc)
            raise

        result = SyncResult(
            path=path,
            branch=settings.branch,
            created=sha is None,
            previous_sha=sha,
            content_sha=(response.get("content") or {}).get("sha"),
            commit_sha=(response.get("commit") or {}).get("sha"),
        )

        logger.info(
            "Synced page %s to %s/%s@%s:%s (%s)",
            page.slug,
            settings.owner,
            settings.repo,
            settings.branch,
            path,
            "created" if result.created else "updated",
        )
        return result

    def list_repositories(self) -> List[Dict[str, str]]:
        if not self.settings.token:
            raise SyncConfigurationError(
                "A repository access token is required to list repositories. "
                "Complete the sync settings and try again."
            )

        try:
            repos = self.client.list_repositories()
        except SyncError as exc:
            self._log_failure("list_repositories", "-", exc)
            raise

        return [
            {
                "name": repo["name"],
                "full_name": repo["full_name"],
                "owner": repo["owner"]["login"],
            }
            for repo in repos
        ]

    def list_branches(self) -> List[str]:
        self.settings.require_complete()

        try:
            branches = self.client.list_branches(self.settings.owner, self.settings.repo)
        except SyncError as exc:
            self._log_failure("list_branches", "-", exc)
            raise

        return [branch["name"] for branch in branches]
