"""Pytest configuration and fixtures."""

import io

import pytest
from flask_jwt_extended import create_access_token
from werkzeug.datastructures import FileStorage

from contenthub import create_app
from contenthub.extensions import db
from contenthub.storage.base import Storage, StorageError
from contenthub.sync.exceptions import SyncConflictError
from contenthub.sync.settings import InMemorySettingsStore


class InMemoryStorage(Storage):
    """Storage fake; uploads whose bytes start with ``fail_marker`` are rejected."""

    fail_marker = b"FAIL"

    def __init__(self):
        self.objects = {}
        self.remove_error = None
        self.removed = []

    def upload(self, path, stream, content_type=None):
        data = stream.read()
        if data.startswith(self.fail_marker):
            raise StorageError(f"Upload rejected for {path}")
        self.objects[path] = data
        return len(data)

    def public_url(self, path):
        return f"https://cdn.test/{path}"

    def remove(self, paths):
        if self.remove_error is not None:
            raise self.remove_error
        for path in paths:
            self.objects.pop(path, None)
            self.removed.append(path)


class FakeGitHubClient:
    """
    Contents API fake keeping one blob sha per path.

    ``stale_reads`` makes get_file report an outdated sha, as if another
    writer committed between the read and the write.
    """

    def __init__(self):
        self.files = {}
        self.calls = []
        self.stale_reads = False
        self.get_error = None
        self._version = 0
        self.repositories = [
            {"name": "site", "full_name": "acme/site", "owner": {"login": "acme"}},
        ]
        self.branches = [{"name": "main"}, {"name": "preview"}]

    def get_file(self, owner, repo, path, ref):
        self.calls.append(("get", owner, repo, path, ref))
        if self.get_error is not None:
            raise self.get_error
        stored = self.files.get(path)
        if stored is None:
            return None
        if self.stale_reads:
            return {"sha": "stale-sha", "path": path}
        return {"sha": stored["sha"], "path": path}

    def put_file(self, owner, repo, path, *, message, content, branch, sha=None):
        self.calls.append(("put", owner, repo, path, sha))
        current = self.files.get(path)
        if (current is None and sha) or (current is not None and current["sha"] != sha):
            raise SyncConflictError(f"HTTP 409: {path} does not match {sha}", status=409)

        self._version += 1
        new_sha = f"blob-{self._version}"
        self.files[path] = {
            "sha": new_sha,
            "content": content,
            "message": message,
            "branch": branch,
        }
        return {
            "content": {"sha": new_sha, "path": path},
            "commit": {"sha": f"commit-{self._version}"},
        }

    def list_repositories(self):
        self.calls.append(("repos",))
        return self.repositories

    def list_branches(self, owner, repo):
        self.calls.append(("branches", owner, repo))
        return self.branches


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def settings_store():
    return InMemorySettingsStore()


@pytest.fixture
def github():
    return FakeGitHubClient()


@pytest.fixture
def app(storage, settings_store, github):
    """Application on in-memory SQLite with fakes at every outbound boundary."""
    app = create_app(
        "testing",
        storage=storage,
        sync_store=settings_store,
        github_client_factory=lambda settings: github,
    )

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _headers(role):
    token = create_access_token(identity="user-1", additional_claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers(app):
    return _headers("editor")


@pytest.fixture
def admin_headers(app):
    return _headers("admin")


@pytest.fixture
def viewer_headers(app):
    return _headers("viewer")


@pytest.fixture
def make_page(app):
    """Factory creating persisted draft pages through the service layer."""
    from contenthub.application.cms.create_page import create_page

    def _make(title="Kitchen Tips", **fields):
        return create_page(data={"title": title, **fields})

    return _make


@pytest.fixture
def file_upload():
    """Factory for werkzeug FileStorage objects as the upload route receives them."""

    def _upload(name, data=b"data", content_type=None):
        return FileStorage(stream=io.BytesIO(data), filename=name, content_type=content_type)

    return _upload
