"""Tests for the repository sync adapter, its serializer and the GitHub client."""

import json
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
import requests

from contenthub.domain.section import Section, SectionType
from contenthub.sync.adapter import RepositorySync, default_path
from contenthub.sync.client import GitHubClient, classify_error
from contenthub.sync.exceptions import (
    SyncAuthenticationError,
    SyncConfigurationError,
    SyncConflictError,
    SyncNotFoundError,
    SyncRateLimitError,
    SyncTransportError,
)
from contenthub.sync.serializer import (
    SYNC_FIELDS,
    decode_content,
    encode_content,
    page_document,
    parse_document,
    serialize_page,
)
from contenthub.sync.settings import (
    SETTINGS_KEY,
    InMemorySettingsStore,
    JsonFileSettingsStore,
    SyncSettings,
    load_settings,
    save_settings,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _page(**overrides):
    values = {
        "title": "Kitchen Tips",
        "slug": "kitchen-tips",
        "meta_title": "Kitchen Tips",
        "meta_description": "Ideas for a tidy kitchen",
        "content": "<p>Welcome</p>",
        "section_list": [
            Section(id="1", type=SectionType.HERO, title="Hero", content="<h1>Hi</h1>", order=0),
            Section(id="2", type=SectionType.CUSTOM, title="", content="<div>é</div>",
                    order=1, custom_css=".x{}"),
        ],
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def _settings(**overrides):
    values = {"token": "ghp_secret1234", "owner": "acme", "repo": "site"}
    values.update(overrides)
    return SyncSettings(**values)


def _response(status, body=None, headers=None):
    resp = requests.Response()
    resp.status_code = status
    resp._content = json.dumps(body or {}).encode("utf-8")
    for key, value in (headers or {}).items():
        resp.headers[key] = value
    return resp


class TestSerializer:
    def test_round_trip(self):
        page = _page()
        document = parse_document(decode_content(encode_content(serialize_page(page, now=NOW))))

        for field in SYNC_FIELDS:
            assert document[field] == getattr(page, field)
        assert [(s["content"], s["order"]) for s in document["sections"]] == [
            ("<h1>Hi</h1>", 0),
            ("<div>é</div>", 1),
        ]
        assert document["updated_at"] == NOW.isoformat()

    def test_pretty_printed_and_unicode_kept(self):
        text = serialize_page(_page(), now=NOW)
        assert "\n  \"title\": \"Kitchen Tips\"" in text
        assert "é" in text

    def test_sections_emitted_in_order(self):
        page = _page(section_list=[
            Section(id="b", order=1),
            Section(id="a", order=0),
        ])
        assert [s["id"] for s in page_document(page, now=NOW)["sections"]] == ["a", "b"]

    def test_decode_ignores_line_wrapping(self):
        encoded = encode_content("x" * 200)
        wrapped = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60))
        assert decode_content(wrapped) == "x" * 200


class TestPublish:
    def test_create_then_update_with_returned_sha(self, github):
        sync = RepositorySync(_settings(), client=github)

        first = sync.publish(_page(), now=NOW)
        assert first.created is True
        assert first.previous_sha is None
        assert first.path == "content/kitchen-tips.json"
        assert first.branch == "main"
        assert github.calls[1] == ("put", "acme", "site", "content/kitchen-tips.json", None)

        second = sync.publish(_page(), now=NOW)
        assert second.created is False
        assert second.previous_sha == first.content_sha
        assert github.calls[-1][-1] == first.content_sha

    def test_default_commit_message_and_content(self, github):
        RepositorySync(_settings(), client=github).publish(_page(), now=NOW)

        stored = github.files[default_path("kitchen-tips")]
        assert stored["message"] == "Update Kitchen Tips page"
        assert json.loads(decode_content(stored["content"]))["slug"] == "kitchen-tips"

    def test_configured_path_branch_and_message(self, github):
        settings = _settings(path="pages/home.json", branch="preview", commit_message="Sync")
        result = RepositorySync(settings, client=github).publish(_page())

        assert result.path == "pages/home.json"
        assert github.files["pages/home.json"]["branch"] == "preview"
        assert github.files["pages/home.json"]["message"] == "Sync"

    def test_explicit_message_wins(self, github):
        RepositorySync(_settings(commit_message="Sync"), client=github).publish(_page(), message="Hotfix")
        assert github.files["content/kitchen-tips.json"]["message"] == "Hotfix"

    def test_stale_sha_is_conflict_and_not_retried(self, github):
        sync = RepositorySync(_settings(), client=github)
        sync.publish(_page(), now=NOW)
        github.stale_reads = True
        puts_before = sum(1 for c in github.calls if c[0] == "put")

        with pytest.raises(SyncConflictError):
            sync.publish(_page(), now=NOW)

        assert sum(1 for c in github.calls if c[0] == "put") == puts_before + 1

    @pytest.mark.parametrize("missing", ["token", "owner", "repo"])
    def test_missing_configuration_fails_before_network(self, github, missing):
        sync = RepositorySync(_settings(**{missing: ""}), client=github)

        with pytest.raises(SyncConfigurationError) as exc_info:
            sync.publish(_page())

        assert missing in str(exc_info.value)
        assert github.calls == []

    def test_read_failure_does_not_write(self, github):
        github.get_error = SyncAuthenticationError("HTTP 401: Bad credentials", status=401)

        with pytest.raises(SyncAuthenticationError):
            RepositorySync(_settings(), client=github).publish(_page())

        assert [c for c in github.calls if c[0] == "put"] == []

    def test_failure_is_logged_with_class_and_coordinates(self, github, caplog):
        github.get_error = SyncRateLimitError("HTTP 403: API rate limit exceeded", status=403)

        with caplog.at_level("WARNING", logger="contenthub.sync.adapter"):
            with pytest.raises(SyncRateLimitError):
                RepositorySync(_settings(), client=github).publish(_page())

        message = caplog.records[-1].getMessage()
        assert "SyncRateLimitError" in message
        assert "acme/site" in message
        assert "ghp_secret1234" not in message


class TestListing:
    def test_repositories(self, github):
        repos = RepositorySync(_settings(owner="", repo=""), client=github).list_repositories()
        assert repos == [{"name": "site", "full_name": "acme/site", "owner": "acme"}]

    def test_repositories_need_token(self, github):
        with pytest.raises(SyncConfigurationError):
            RepositorySync(_settings(token=""), client=github).list_repositories()
        assert github.calls == []

    def test_branches(self, github):
        assert RepositorySync(_settings(), client=github).list_branches() == ["main", "preview"]


class TestClassifyError:
    def test_401_is_authentication(self):
        assert isinstance(classify_error(_response(401, {"message": "Bad credentials"})), SyncAuthenticationError)

    def test_403_without_rate_markers_is_authentication(self):
        error = classify_error(_response(403, {"message": "Resource not accessible by integration"}))
        assert isinstance(error, SyncAuthenticationError)

    def test_403_with_exhausted_quota_is_rate_limit(self):
        error = classify_error(_response(
            403,
            {"message": "API rate limit exceeded"},
            {"X-RateLimit-Remaining": "0"},
        ))
        assert isinstance(error, SyncRateLimitError)
        assert error.status == 403

    def test_403_with_retry_after_is_rate_limit(self):
        error = classify_error(_response(403, {"message": "secondary"}, {"Retry-After": "60"}))
        assert isinstance(error, SyncRateLimitError)

    def test_429_is_rate_limit(self):
        assert isinstance(classify_error(_response(429)), SyncRateLimitError)

    def test_409_is_conflict(self):
        assert isinstance(classify_error(_response(409, {"message": "is at abc"})), SyncConflictError)

    def test_422_missing_sha_is_conflict(self):
        error = classify_error(_response(422, {"message": "Invalid request. \"sha\" wasn't supplied."}))
        assert isinstance(error, SyncConflictError)

    def test_404_is_not_found(self):
        assert isinstance(classify_error(_response(404)), SyncNotFoundError)

    def test_500_is_transport(self):
        assert isinstance(classify_error(_response(500)), SyncTransportError)


class _Session:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.requests = []

    def request(self, method, url, timeout=None, **kwargs):
        self.requests.append((method, url, timeout, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


class TestGitHubClient:
    def test_headers_and_timeout(self):
        session = _Session(response=_response(200, {"sha": "abc"}))
        client = GitHubClient("tok", api_url="https://gh.test/", timeout=3, session=session)

        assert client.get_file("acme", "site", "content/a.json", ref="main") == {"sha": "abc"}
        assert session.headers["Authorization"] == "Bearer tok"
        method, url, timeout, kwargs = session.requests[0]
        assert (method, url, timeout) == ("GET", "https://gh.test/repos/acme/site/contents/content/a.json", 3)
        assert kwargs["params"] == {"ref": "main"}

    def test_missing_file_is_none(self):
        client = GitHubClient("tok", session=_Session(response=_response(404, {"message": "Not Found"})))
        assert client.get_file("acme", "site", "content/a.json", ref="main") is None

    def test_put_omits_sha_on_create(self):
        session = _Session(response=_response(201, {"content": {"sha": "n"}}))
        GitHubClient("tok", session=session).put_file(
            "acme", "site", "content/a.json", message="m", content="e30=", branch="main"
        )
        assert "sha" not in session.requests[0][3]["json"]

    def test_connection_error_is_transport(self):
        client = GitHubClient("tok", session=_Session(error=requests.ConnectionError("refused")))
        with pytest.raises(SyncTransportError):
            client.list_repositories()


class TestSettings:
    def test_wire_format_round_trip(self):
        store = InMemorySettingsStore()
        save_settings(store, _settings(commit_message="Sync"))

        raw = json.loads(store.read(SETTINGS_KEY))
        assert raw["commitMessage"] == "Sync"
        assert load_settings(store) == _settings(commit_message="Sync")

    def test_defaults_when_absent(self):
        settings = load_settings(InMemorySettingsStore())
        assert settings.branch == "main"
        assert settings.missing_fields() == ["token", "owner", "repo"]

    def test_corrupt_value_falls_back_to_defaults(self):
        store = InMemorySettingsStore({SETTINGS_KEY: "{not json"})
        assert load_settings(store) == SyncSettings()

    def test_public_masks_token(self):
        public = _settings().public()
        assert public["token"] == "********1234"
        assert public["configured"] is True

    def test_merge_keeps_token_when_masked_value_sent_back(self):
        settings = _settings()
        merged = settings.merge({"token": settings.public()["token"], "branch": "preview"})
        assert merged.token == "ghp_secret1234"
        assert merged.branch == "preview"

    def test_json_file_store(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        store = JsonFileSettingsStore(str(path))
        save_settings(store, _settings())

        assert load_settings(JsonFileSettingsStore(str(path))).owner == "acme"
        assert SETTINGS_KEY in json.loads(path.read_text())
