# storefront/services/storage_client.py
from typing import Iterable, List, Tuple

import requests
from requests import RequestException

from storefront.domain.errors import StorageError
from storefront.utils.retry import http_retry
from storefront.utils.settings import STORAGE_URL, STORAGE_API_KEY, STORAGE_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

BUCKETS = ("products", "categories", "news")


class StorageClient:
    """
    Klient REST do object storage platformy (bucket per typ tresci: products / categories / news).
    Upload jest z upsertem, wiec retry jest bezpieczny.
    """

    def __init__(self, base_url: str | None = None, api_key: str | None = None, timeout: int = STORAGE_TIMEOUT_SECONDS):
        self.base_url = (base_url or STORAGE_URL).rstrip("/")
        self.api_key = STORAGE_API_KEY if api_key is None else api_key
        self.timeout = timeout

    def _headers(self, extra: dict | None = None) -> dict:
        headers = {"Authorization": f"Bearer {self.api_key}", "apikey": self.api_key}
        if extra:
            headers.update(extra)
        return headers

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/object/public/{bucket}/{path.lstrip('/')}"

    def split_public_url(self, url: str) -> Tuple[str, str] | None:
        """Zwraca (bucket, path) dla naszego publicznego URL, None dla obcych adresow."""
        prefix = f"{self.base_url}/object/public/"
        if not url or not url.startswith(prefix):
            return None
        bucket, _, path = url[len(prefix):].partition("/")
        if bucket not in BUCKETS or not path:
            return None
        return bucket, path

    @http_retry()
    def _put(self, bucket: str, path: str, data: bytes, content_type: str) -> None:
        url = f"{self.base_url}/object/{bucket}/{path.lstrip('/')}"
        logger.info(f"StorageClient POST {url}")
        resp = requests.post(
            url,
            data=data,
            headers=self._headers({"Content-Type": content_type, "x-upsert": "true"}),
            timeout=self.timeout,
        )
        resp.raise_for_status()

    @http_retry()
    def _delete(self, bucket: str, paths: List[str]) -> None:
        url = f"{self.base_url}/object/{bucket}"
        logger.info(f"StorageClient DELETE {url} {paths}")
        resp = requests.delete(url, json={"prefixes": paths}, headers=self._headers(), timeout=self.timeout)
        resp.raise_for_status()

    def upload(self, bucket: str, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        if bucket not in BUCKETS:
            raise ValueError(f"Unknown storage bucket: {bucket}")
        try:
            self._put(bucket, path, data, content_type)
        except RequestException as e:
            logger.error(f"Upload of {bucket}/{path} failed: {e}")
            raise StorageError(f"Image upload failed: {e}") from e
        return self.public_url(bucket, path)

    def remove(self, bucket: str, paths: Iterable[str]) -> None:
        paths = [p for p in paths if p]
        if not paths:
            return
        try:
            self._delete(bucket, paths)
        except RequestException as e:
            logger.error(f"Delete of {bucket}/{paths} failed: {e}")
            raise StorageError(f"Image delete failed: {e}") from e

    def remove_urls(self, urls: Iterable[str]) -> int:
        """Usuwa obrazy po publicznych URL-ach, obce adresy (np. placeholdery) pomija."""
        grouped: dict = {}
        for url in urls:
            parsed = self.split_public_url(url)
            if parsed:
                grouped.setdefault(parsed[0], []).append(parsed[1])

        for bucket, paths in grouped.items():
            self.remove(bucket, paths)
        return sum(len(p) for p in grouped.values())
