from __future__ import annotations

from typing import Any, Mapping

from supastore.common.config import Settings
from supastore.storage.base import config_from_api_key, config_from_settings
from supastore.storage.bucket import StorageBucket
from supastore.storage.file import StorageFile
from supastore.storage.models import BucketOptions, ClientConfig


class StorageClient:
    """Entry point to the storage API.

    Bucket operations are available directly on the client; object
    operations go through :meth:`from_`::

        client = StorageClient.from_api_key(api_key, reference_id)
        client.create_bucket("avatars", {"public": True})
        client.from_("avatars").upload("me.png", png_bytes)
    """

    def __init__(self, url: str, headers: Mapping[str, str] | None = None):
        self._buckets = StorageBucket(url, headers)

    @classmethod
    def from_api_key(cls, api_key: str, reference_id: str) -> "StorageClient":
        return cls._from_config(config_from_api_key(api_key, reference_id))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "StorageClient":
        return cls._from_config(config_from_settings(settings))

    @classmethod
    def _from_config(cls, config: ClientConfig) -> "StorageClient":
        return cls(config.url, config.headers)

    @property
    def url(self) -> str:
        return self._buckets.url

    @property
    def headers(self) -> Mapping[str, str]:
        return self._buckets.headers

    @property
    def buckets(self) -> StorageBucket:
        return self._buckets

    def from_(self, bucket_id: str) -> StorageFile:
        """Return an object client bound to ``bucket_id``."""
        return StorageFile(self.url, self.headers, bucket_id)

    def create_bucket(
        self,
        bucket_id: str,
        options: BucketOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        return self._buckets.create_bucket(bucket_id, options)

    def get_bucket(self, bucket_id: str) -> Any:
        return self._buckets.get_bucket(bucket_id)

    def list_buckets(self) -> Any:
        return self._buckets.list_buckets()

    def update_bucket(
        self,
        bucket_id: str,
        options: BucketOptions | Mapping[str, Any],
    ) -> Any:
        return self._buckets.update_bucket(bucket_id, options)

    def delete_bucket(self, bucket_id: str) -> Any:
        return self._buckets.delete_bucket(bucket_id)

    def empty_bucket(self, bucket_id: str) -> Any:
        return self._buckets.empty_bucket(bucket_id)
