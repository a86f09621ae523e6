from __future__ import annotations

import json
from typing import Any, Mapping
from urllib.parse import quote

from supastore.common.config import Settings, get_settings, storage_url_for
from supastore.common.constants import default_headers, merge_headers
from supastore.infra.http import request
from supastore.infra.http.errors import StorageConfigError, StorageSerializationError
from supastore.storage.models import ClientConfig


def bearer_headers(api_key: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


def config_from_api_key(api_key: str, reference_id: str) -> ClientConfig:
    if not api_key:
        raise StorageConfigError("api_key is required")
    if not reference_id:
        raise StorageConfigError("reference_id is required")
    return ClientConfig(storage_url_for(reference_id), bearer_headers(api_key))


def config_from_settings(settings: Settings | None = None) -> ClientConfig:
    settings = settings or get_settings()
    if not settings.SUPABASE_API_KEY:
        raise StorageConfigError("SUPABASE_API_KEY is required")
    url = settings.storage_url
    if not url:
        raise StorageConfigError(
            "Either STORAGE_URL or SUPABASE_REFERENCE_ID is required"
        )
    return ClientConfig(url, bearer_headers(settings.SUPABASE_API_KEY))


class PathId(str):
    """A path piece quoted as one segment, slashes included."""


def bucket_segment(bucket_id: str) -> PathId:
    if not bucket_id:
        raise ValueError("bucket_id is required")
    return PathId(bucket_id)


def join_path(*parts: str) -> str:
    """Join URL path pieces, dropping empty segments and duplicate slashes.

    ``PathId`` parts are never split.
    """
    segments: list[str] = []
    for part in parts:
        if isinstance(part, PathId):
            segments.append(quote(part, safe=""))
            continue
        segments.extend(quote(s, safe="") for s in str(part).split("/") if s)
    return "/".join(segments)


class BaseStorageApi:
    """Holds the immutable client configuration and issues requests."""

    def __init__(self, url: str, headers: Mapping[str, str] | None = None):
        self._config = ClientConfig(url, merge_headers(default_headers(), headers))

    @classmethod
    def _from_config(cls, config: ClientConfig, *args: Any):
        return cls(config.url, config.headers, *args)

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def headers(self) -> Mapping[str, str]:
        return self._config.headers

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _endpoint(self, *parts: str) -> str:
        return f"{self._config.url}/{join_path(*parts)}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        json_body: Any = None,
        body: request.RequestBody = None,
        headers: Mapping[str, str] | None = None,
        raw: bool = False,
    ) -> Any:
        if json_body is not None:
            body = self._encode(json_body)
        return request.request(
            method,
            url,
            self._config.merged_headers(headers),
            body,
            raw=raw,
        )

    @staticmethod
    def _encode(payload: Any) -> str:
        try:
            return json.dumps(payload)
        except (TypeError, ValueError) as exc:
            raise StorageSerializationError(
                f"Failed to encode request body: {exc}"
            ) from exc
