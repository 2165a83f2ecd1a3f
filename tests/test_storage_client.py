"""Tests for the object storage REST client."""

import pytest
import requests

from storefront.domain.errors import StorageError
from storefront.services.storage_client import StorageClient
from helpers import RecordingStorage

BASE = "http://storage.test/storage/v1"


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def client():
    return StorageClient(base_url=BASE + "/", api_key="secret", timeout=1)


class TestUrls:
    def test_public_url(self, client):
        assert client.public_url("products", "/123-cake.png") == f"{BASE}/object/public/products/123-cake.png"

    def test_split_own_url(self, client):
        assert client.split_public_url(f"{BASE}/object/public/news/1-post.jpg") == ("news", "1-post.jpg")

    @pytest.mark.parametrize(
        "url",
        [
            "",
            None,
            "https://placehold.co/400x300",
            f"{BASE}/object/public/avatars/1.png",
            f"{BASE}/object/public/products/",
        ],
    )
    def test_split_foreign_url(self, client, url):
        assert client.split_public_url(url) is None


class TestUpload:
    def test_upload_posts_with_upsert(self, client, monkeypatch):
        calls = []

        def fake_post(url, data, headers, timeout):
            calls.append((url, data, headers, timeout))
            return FakeResponse()

        monkeypatch.setattr(requests, "post", fake_post)

        url = client.upload("categories", "1-cookies.png", b"png-bytes", "image/png")

        assert url == f"{BASE}/object/public/categories/1-cookies.png"
        posted_url, data, headers, timeout = calls[0]
        assert posted_url == f"{BASE}/object/categories/1-cookies.png"
        assert data == b"png-bytes"
        assert headers["x-upsert"] == "true"
        assert headers["Authorization"] == "Bearer secret"
        assert timeout == 1

    def test_upload_failure_raises_storage_error(self, client, monkeypatch):
        monkeypatch.setattr(requests, "post", lambda *args, **kwargs: FakeResponse(500))

        with pytest.raises(StorageError, match="upload failed"):
            client.upload("products", "1-cake.png", b"x")

    def test_unknown_bucket(self, client):
        with pytest.raises(ValueError):
            client.upload("avatars", "x.png", b"x")


class TestRemove:
    def test_remove_urls_groups_by_bucket(self):
        storage = RecordingStorage()
        urls = [
            storage.public_url("products", "1-a.png"),
            storage.public_url("products", "2-b.png"),
            storage.public_url("news", "3-c.png"),
            "https://placehold.co/400x300",
        ]

        assert storage.remove_urls(urls) == 3
        assert sorted(storage.removed) == [("news", ["3-c.png"]), ("products", ["1-a.png", "2-b.png"])]

    def test_remove_nothing(self):
        storage = RecordingStorage()

        assert storage.remove_urls([None, ""]) == 0
        assert storage.removed == []

    def test_delete_failure_raises_storage_error(self, client, monkeypatch):
        monkeypatch.setattr(requests, "delete", lambda *args, **kwargs: FakeResponse(503))

        with pytest.raises(StorageError, match="delete failed"):
            client.remove("news", ["1.png"])


class TestRetryPolicy:
    @pytest.fixture
    def posts(self, monkeypatch):
        calls = []

        def install(*responses):
            def fake_post(*args, **kwargs):
                calls.append(args)
                result = responses[min(len(calls), len(responses)) - 1]
                if isinstance(result, Exception):
                    raise result
                return result

            monkeypatch.setattr(requests, "post", fake_post)
            return calls

        return install

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 413])
    def test_client_error_fails_on_first_attempt(self, client, posts, status):
        calls = posts(FakeResponse(status))

        with pytest.raises(StorageError, match=str(status)):
            client.upload("products", "1-cake.png", b"x")

        assert len(calls) == 1

    def test_server_error_is_retried(self, client, posts):
        calls = posts(FakeResponse(503), FakeResponse(200))

        url = client.upload("products", "1-cake.png", b"x")

        assert url.endswith("/products/1-cake.png")
        assert len(calls) == 2

    def test_connection_error_is_retried_until_limit(self, client, posts):
        calls = posts(requests.ConnectionError("connection refused"))

        with pytest.raises(StorageError, match="connection refused"):
            client.upload("news", "1.png", b"x")

        assert len(calls) == 3
