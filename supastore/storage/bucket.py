"""Bucket-level operations of the storage API."""

from __future__ import annotations

from typing import Any, Mapping

from supastore.common.config import Settings
from supastore.storage.base import (
    BaseStorageApi,
    bucket_segment,
    config_from_api_key,
    config_from_settings,
)
from supastore.storage.models import BucketOptions, BucketPayload, coerce_options

JSON_HEADERS = {"Content-Type": "application/json"}


class StorageBucket(BaseStorageApi):
    """Create, inspect, update, empty and delete storage buckets.

    All methods return the decoded service response and raise
    :class:`~supastore.infra.http.errors.StorageError` on failure.
    """

    @classmethod
    def from_api_key(cls, api_key: str, reference_id: str) -> "StorageBucket":
        """Build a client for the hosted project ``reference_id``."""
        return cls._from_config(config_from_api_key(api_key, reference_id))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "StorageBucket":
        return cls._from_config(config_from_settings(settings))

    def _bucket_url(self, bucket_id: str, *suffix: str) -> str:
        return self._endpoint("bucket", bucket_segment(bucket_id), *suffix)

    def create_bucket(
        self,
        bucket_id: str,
        options: BucketOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """Create a new bucket.

        Args:
            bucket_id: Identifier of the bucket; also used as its name.
            options: Visibility of the bucket. Buckets are private by default.

        Returns:
            The service response, typically ``{"name": bucket_id}``.
        """
        opts = coerce_options(BucketOptions, options)
        payload = BucketPayload(id=bucket_id, name=bucket_id, public=opts.public)
        return self._request(
            "POST",
            self._endpoint("bucket"),
            json_body=payload.model_dump(),
            headers=JSON_HEADERS,
        )

    def get_bucket(self, bucket_id: str) -> Any:
        """Retrieve the details of an existing bucket."""
        return self._request("GET", self._bucket_url(bucket_id))

    def list_buckets(self) -> Any:
        """Retrieve the details of every bucket in the project."""
        return self._request("GET", self._endpoint("bucket"))

    def update_bucket(
        self,
        bucket_id: str,
        options: BucketOptions | Mapping[str, Any],
    ) -> Any:
        """Change the visibility of a bucket.

        ``public`` is sent as a JSON boolean, the same as in ``create_bucket``.
        """
        opts = coerce_options(BucketOptions, options)
        payload = BucketPayload(id=bucket_id, name=bucket_id, public=opts.public)
        return self._request(
            "PUT",
            self._bucket_url(bucket_id),
            json_body=payload.model_dump(),
            headers=JSON_HEADERS,
        )

    def delete_bucket(self, bucket_id: str) -> Any:
        """Delete a bucket.

        The service refuses to delete a bucket that still holds objects; call
        :meth:`empty_bucket` first.
        """
        return self._request("DELETE", self._bucket_url(bucket_id))

    def empty_bucket(self, bucket_id: str) -> Any:
        """Remove every object inside a bucket, keeping the bucket itself."""
        return self._request("POST", self._bucket_url(bucket_id, "empty"))
