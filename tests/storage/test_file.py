"""Tests for the object client."""

import io
import json

import pytest
import requests

from supastore.infra.http.errors import (
    StorageApiError,
    StorageError,
    StorageTransportError,
)
from supastore.storage.file import StorageFile
from supastore.storage.models import FileOptions, SearchOptions, SortBy

BASE_URL = "https://proj-ref.supabase.co/storage/v1"


@pytest.fixture
def client():
    return StorageFile.from_api_key("service-key", "proj-ref", "avatars")


def _sent(mock_http):
    args, kwargs = mock_http.call_args
    return args[0], args[1], kwargs["headers"], kwargs["data"]


class TestUpload:
    def test_upload_bytes(self, client, mock_http, make_response):
        mock_http.return_value = make_response(
            200, json_body={"Key": "avatars/folder/me.png"}
        )

        result = client.upload(
            "folder/me.png",
            b"\x89PNG",
            FileOptions(content_type="image/png", cache_control="60", upsert=True),
        )

        assert result == {"Key": "avatars/folder/me.png"}
        method, url, headers, data = _sent(mock_http)
        assert method == "POST"
        assert url == f"{BASE_URL}/object/avatars/folder/me.png"
        assert data == b"\x89PNG"
        assert headers["cache-control"] == "max-age=60"
        assert headers["x-upsert"] == "true"
        assert headers["Authorization"] == "Bearer service-key"

    def test_per_call_content_type_overrides_default(self, client, mock_http):
        client.upload("me.png", b"data", {"contentType": "image/png"})

        _, _, headers, _ = _sent(mock_http)
        assert headers["content-type"] == "image/png"
        assert "Content-Type" not in headers

    def test_upload_default_options(self, client, mock_http):
        client.upload("notes.txt", b"hello")

        _, _, headers, _ = _sent(mock_http)
        assert headers["cache-control"] == "max-age=3600"
        assert headers["content-type"] == "text/plain;charset=UTF-8"
        assert headers["x-upsert"] == "false"

    def test_upload_from_filesystem_path(self, client, mock_http, make_response, tmp_path):
        source = tmp_path / "me.png"
        source.write_bytes(b"file-bytes")
        seen = {}

        def fake_request(method, url, headers=None, data=None):
            seen["body"] = data.read()
            return make_response(200, json_body={"Key": "avatars/me.png"})

        mock_http.side_effect = fake_request

        client.upload("me.png", source)

        assert seen["body"] == b"file-bytes"

    def test_upload_file_object(self, client, mock_http):
        stream = io.BytesIO(b"stream")

        client.upload("me.png", stream)

        _, _, _, data = _sent(mock_http)
        assert data is stream

    def test_update_uses_put(self, client, mock_http):
        client.update("me.png", b"new")

        method, url, _, _ = _sent(mock_http)
        assert (method, url) == ("PUT", f"{BASE_URL}/object/avatars/me.png")

    def test_upload_error_surfaces(self, client, mock_http, make_response):
        mock_http.return_value = make_response(
            400, json_body={"error": "Duplicate", "message": "The resource already exists"}
        )

        with pytest.raises(StorageApiError, match="The resource already exists"):
            client.upload("me.png", b"data")


class TestDownload:
    def test_download_returns_raw_bytes(self, client, mock_http, make_response):
        mock_http.return_value = make_response(200, content=b'{"not": "decoded"}')

        data = client.download("folder/me.json")

        assert data == b'{"not": "decoded"}'
        method, url, _, _ = _sent(mock_http)
        assert (method, url) == ("GET", f"{BASE_URL}/object/avatars/folder/me.json")

    def test_download_with_transform(self, client, mock_http, make_response):
        mock_http.return_value = make_response(200, content=b"img")

        client.download("me.png", {"width": 100, "height": 50})

        _, url, _, _ = _sent(mock_http)
        assert url == (
            f"{BASE_URL}/render/image/authenticated/avatars/me.png?width=100&height=50"
        )

    def test_path_segments_are_quoted(self, client, mock_http, make_response):
        mock_http.return_value = make_response(200, content=b"x")

        client.download("/my folder//me.png")

        _, url, _, _ = _sent(mock_http)
        assert url == f"{BASE_URL}/object/avatars/my%20folder/me.png"


class TestListMoveCopyRemove:
    def test_list_defaults(self, client, mock_http, make_response):
        mock_http.return_value = make_response(200, json_body=[{"name": "me.png"}])

        assert client.list("folder") == [{"name": "me.png"}]
        method, url, _, data = _sent(mock_http)
        assert (method, url) == ("POST", f"{BASE_URL}/object/list/avatars")
        assert json.loads(data) == {
            "prefix": "folder",
            "limit": 100,
            "offset": 0,
            "sortBy": {"column": "name", "order": "asc"},
        }

    def test_list_with_options(self, client, mock_http):
        options = SearchOptions(
            limit=10,
            offset=20,
            sort_by=SortBy(column="created_at", order="desc"),
            search="me",
        )

        client.list(options=options)

        _, _, _, data = _sent(mock_http)
        assert json.loads(data) == {
            "prefix": "",
            "limit": 10,
            "offset": 20,
            "sortBy": {"column": "created_at", "order": "desc"},
            "search": "me",
        }

    def test_list_rejects_invalid_limit(self, client, mock_http):
        with pytest.raises(ValueError):
            client.list(options={"limit": 0})

        mock_http.assert_not_called()

    @pytest.mark.parametrize("operation", ["move", "copy"])
    def test_move_and_copy(self, client, mock_http, operation):
        getattr(client, operation)("a/me.png", "b/me.png")

        method, url, _, data = _sent(mock_http)
        assert (method, url) == ("POST", f"{BASE_URL}/object/{operation}")
        assert json.loads(data) == {
            "bucketId": "avatars",
            "sourceKey": "a/me.png",
            "destinationKey": "b/me.png",
        }

    def test_remove_single_path(self, client, mock_http):
        client.remove("a/me.png")

        method, url, _, data = _sent(mock_http)
        assert (method, url) == ("DELETE", f"{BASE_URL}/object/avatars")
        assert json.loads(data) == {"prefixes": ["a/me.png"]}

    def test_remove_many_paths(self, client, mock_http):
        client.remove(["a.png", "b.png"])

        _, _, _, data = _sent(mock_http)
        assert json.loads(data) == {"prefixes": ["a.png", "b.png"]}

    def test_remove_requires_a_path(self, client, mock_http):
        with pytest.raises(ValueError):
            client.remove([])

        mock_http.assert_not_called()


class TestSignedAndPublicUrls:
    def test_create_signed_url(self, client, mock_http, make_response):
        mock_http.return_value = make_response(
            200, json_body={"signedURL": "/object/sign/avatars/me.png?token=abc"}
        )

        result = client.create_signed_url("me.png", 60)

        assert result["signedURL"] == f"{BASE_URL}/object/sign/avatars/me.png?token=abc"
        method, url, _, data = _sent(mock_http)
        assert (method, url) == ("POST", f"{BASE_URL}/object/sign/avatars/me.png")
        assert json.loads(data) == {"expiresIn": 60}

    @pytest.mark.parametrize(
        ("download", "suffix"),
        [(True, "&download="), ("photo.png", "&download=photo.png")],
    )
    def test_create_signed_url_download(
        self, client, mock_http, make_response, download, suffix
    ):
        mock_http.return_value = make_response(
            200, json_body={"signedURL": "/object/sign/avatars/me.png?token=abc"}
        )

        result = client.create_signed_url("me.png", 60, download=download)

        assert result["signedURL"].endswith("?token=abc" + suffix)

    def test_create_signed_url_with_transform(self, client, mock_http, make_response):
        mock_http.return_value = make_response(
            200, json_body={"signedURL": "/render/image/sign/avatars/me.png?token=t"}
        )

        client.create_signed_url("me.png", 60, transform={"width": 32, "resize": "cover"})

        _, _, _, data = _sent(mock_http)
        assert json.loads(data) == {
            "expiresIn": 60,
            "transform": {"width": 32, "resize": "cover"},
        }

    def test_create_signed_url_missing_url(self, client, mock_http, make_response):
        mock_http.return_value = make_response(200, json_body={})

        with pytest.raises(StorageError, match="missing signedURL"):
            client.create_signed_url("me.png", 60)

    @pytest.mark.parametrize("expires_in", [0, -5, 1.5, True])
    def test_create_signed_url_rejects_bad_expiry(self, client, mock_http, expires_in):
        with pytest.raises(ValueError):
            client.create_signed_url("me.png", expires_in)

        mock_http.assert_not_called()

    def test_create_signed_urls(self, client, mock_http, make_response):
        mock_http.return_value = make_response(
            200,
            json_body=[
                {"path": "a.png", "error": None, "signedURL": "/object/sign/avatars/a.png?token=1"},
                {"path": "b.png", "error": "Either the object does not exist or you do not have access to it", "signedURL": None},
            ],
        )

        result = client.create_signed_urls(["a.png", "b.png"], 120)

        method, url, _, data = _sent(mock_http)
        assert (method, url) == ("POST", f"{BASE_URL}/object/sign/avatars")
        assert json.loads(data) == {"expiresIn": 120, "paths": ["a.png", "b.png"]}
        assert result[0]["signedURL"] == f"{BASE_URL}/object/sign/avatars/a.png?token=1"
        assert result[1]["signedURL"] is None
        assert result[1]["error"]

    def test_get_public_url_makes_no_request(self, client, mock_http):
        url = client.get_public_url("folder/me.png")

        assert url == f"{BASE_URL}/object/public/avatars/folder/me.png"
        mock_http.assert_not_called()

    def test_get_public_url_download_and_transform(self, client, mock_http):
        assert client.get_public_url("me.png", download=True) == (
            f"{BASE_URL}/object/public/avatars/me.png?download="
        )
        assert client.get_public_url("me.png", transform={"width": 10, "quality": 80}) == (
            f"{BASE_URL}/render/image/public/avatars/me.png?width=10&quality=80"
        )
        mock_http.assert_not_called()


def test_bucket_id_is_required():
    with pytest.raises(ValueError):
        StorageFile("https://example.com/storage/v1", {}, "")


def test_upload_text_is_sent_as_utf8(client, mock_http):
    client.upload("notes.txt", "héllo world")

    _, url, headers, data = _sent(mock_http)
    assert url == f"{BASE_URL}/object/avatars/notes.txt"
    assert data == "héllo world".encode("utf-8")
    assert headers["content-type"] == "text/plain;charset=UTF-8"


def test_bucket_id_is_quoted_as_one_segment(mock_http):
    client = StorageFile.from_api_key("service-key", "proj-ref", "team/avatars")

    client.download("me.png")

    _, url, _, _ = _sent(mock_http)
    assert url == f"{BASE_URL}/object/team%2Favatars/me.png"


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.upload("me.png", b"data"),
        lambda c: c.download("me.png"),
        lambda c: c.list("folder"),
        lambda c: c.remove(["me.png"]),
        lambda c: c.create_signed_url("me.png", 60),
    ],
)
def test_no_connectivity_raises_transport_error(client, mock_http, call):
    mock_http.side_effect = requests.exceptions.ConnectionError("unreachable")

    with pytest.raises(StorageTransportError) as excinfo:
        call(client)

    assert not isinstance(excinfo.value, StorageApiError)
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)
