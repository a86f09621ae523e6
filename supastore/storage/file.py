"""Object-level operations scoped to a single bucket.

Dependencies:
    - requests (through ``supastore.infra.http.request``)
"""

from __future__ import annotations

import os
from typing import IO, Any, Mapping, Sequence
from urllib.parse import urlencode

from supastore.common.config import Settings
from supastore.infra.http.errors import StorageError
from supastore.storage.base import (
    BaseStorageApi,
    bucket_segment,
    config_from_api_key,
    config_from_settings,
)
from supastore.storage.models import (
    FileOptions,
    SearchOptions,
    TransformOptions,
    coerce_options,
)

FileBody = bytes | str | os.PathLike | IO[bytes]

JSON_HEADERS = {"Content-Type": "application/json"}


def _check_expires_in(expires_in: int) -> int:
    if isinstance(expires_in, bool) or not isinstance(expires_in, int):
        raise ValueError("expires_in must be an integer number of seconds")
    if expires_in <= 0:
        raise ValueError("expires_in must be positive")
    return expires_in


def _download_param(download: bool | str | None) -> dict[str, str]:
    if download is None or download is False:
        return {}
    if download is True:
        return {"download": ""}
    return {"download": download}


class StorageFile(BaseStorageApi):
    """Upload, download, list, move, copy, remove and sign objects in a bucket."""

    def __init__(
        self,
        url: str,
        headers: Mapping[str, str] | None,
        bucket_id: str,
    ):
        self._bucket_segment = bucket_segment(bucket_id)
        super().__init__(url, headers)
        self._bucket_id = bucket_id

    @classmethod
    def from_api_key(
        cls, api_key: str, reference_id: str, bucket_id: str
    ) -> "StorageFile":
        return cls._from_config(config_from_api_key(api_key, reference_id), bucket_id)

    @classmethod
    def from_settings(
        cls, bucket_id: str, settings: Settings | None = None
    ) -> "StorageFile":
        return cls._from_config(config_from_settings(settings), bucket_id)

    @property
    def bucket_id(self) -> str:
        return self._bucket_id

    def _upload_or_update(
        self,
        method: str,
        path: str,
        file: FileBody,
        options: FileOptions | Mapping[str, Any] | None,
    ) -> Any:
        opts = coerce_options(FileOptions, options)
        headers = {
            "cache-control": f"max-age={opts.cache_control}",
            "content-type": opts.content_type,
            "x-upsert": str(opts.upsert).lower(),
        }
        url = self._endpoint("object", self._bucket_segment, path)
        if isinstance(file, os.PathLike):
            with open(file, "rb") as handle:
                return self._request(method, url, body=handle, headers=headers)
        if isinstance(file, str):
            file = file.encode("utf-8")
        return self._request(method, url, body=file, headers=headers)

    def upload(
        self,
        path: str,
        file: FileBody,
        options: FileOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """Upload a file to ``path`` inside the bucket.

        Args:
            path: Object path, e.g. ``"folder/avatar.png"``.
            file: Raw bytes, text (sent as UTF-8), an open binary file, or an
                ``os.PathLike`` path to read from disk.
            options: Cache control, content type and upsert flag.

        Returns:
            The service response, typically ``{"Key": "<bucket>/<path>"}``.
        """
        return self._upload_or_update("POST", path, file, options)

    def update(
        self,
        path: str,
        file: FileBody,
        options: FileOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """Replace the object stored at ``path``."""
        return self._upload_or_update("PUT", path, file, options)

    def download(
        self,
        path: str,
        transform: TransformOptions | Mapping[str, Any] | None = None,
    ) -> bytes:
        """Download an object and return its bytes.

        With ``transform`` the image render endpoint is used instead.
        """
        if transform is None:
            url = self._endpoint("object", self._bucket_segment, path)
        else:
            opts = coerce_options(TransformOptions, transform)
            url = self._endpoint("render/image/authenticated", self._bucket_segment, path)
            params = opts.as_params()
            if params:
                url = f"{url}?{urlencode(params)}"
        return self._request("GET", url, raw=True)

    def move(self, from_path: str, to_path: str) -> Any:
        """Move an object, optionally renaming it."""
        return self._request(
            "POST",
            self._endpoint("object", "move"),
            json_body={
                "bucketId": self._bucket_id,
                "sourceKey": from_path,
                "destinationKey": to_path,
            },
            headers=JSON_HEADERS,
        )

    def copy(self, from_path: str, to_path: str) -> Any:
        """Copy an object to ``to_path`` within the same bucket."""
        return self._request(
            "POST",
            self._endpoint("object", "copy"),
            json_body={
                "bucketId": self._bucket_id,
                "sourceKey": from_path,
                "destinationKey": to_path,
            },
            headers=JSON_HEADERS,
        )

    def remove(self, paths: str | Sequence[str]) -> Any:
        """Delete one or more objects.

        Returns the list of removed object records.
        """
        prefixes = [paths] if isinstance(paths, str) else [p for p in paths]
        if not prefixes:
            raise ValueError("At least one path is required")
        return self._request(
            "DELETE",
            self._endpoint("object", self._bucket_segment),
            json_body={"prefixes": prefixes},
            headers=JSON_HEADERS,
        )

    def create_signed_url(
        self,
        path: str,
        expires_in: int,
        download: bool | str | None = None,
        transform: TransformOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create a time-limited URL for ``path``.

        Args:
            path: Object path inside the bucket.
            expires_in: Seconds until the URL expires.
            download: ``True`` to force a download, or a file name to download as.
            transform: Optional image transformation.

        Returns:
            The service response with ``signedURL`` made absolute.
        """
        body: dict[str, Any] = {"expiresIn": _check_expires_in(expires_in)}
        if transform is not None:
            body["transform"] = coerce_options(TransformOptions, transform).as_params()
        data = self._request(
            "POST",
            self._endpoint("object", "sign", self._bucket_segment, path),
            json_body=body,
            headers=JSON_HEADERS,
        )
        if not isinstance(data, dict) or not data.get("signedURL"):
            raise StorageError("Storage response missing signedURL")
        result = dict(data)
        result["signedURL"] = self._absolute_signed_url(data["signedURL"], download)
        return result

    def create_signed_urls(
        self,
        paths: Sequence[str],
        expires_in: int,
        download: bool | str | None = None,
    ) -> list[dict[str, Any]]:
        """Create signed URLs for several objects in one call.

        Entries the service could not sign keep their ``error`` field and a
        ``None`` ``signedURL``.
        """
        paths = [p for p in paths]
        if not paths:
            raise ValueError("At least one path is required")
        data = self._request(
            "POST",
            self._endpoint("object", "sign", self._bucket_segment),
            json_body={"expiresIn": _check_expires_in(expires_in), "paths": paths},
            headers=JSON_HEADERS,
        )
        if not isinstance(data, list):
            raise StorageError("Storage response is not a list of signed URLs")
        results = []
        for item in data:
            entry = dict(item)
            signed = entry.get("signedURL")
            entry["signedURL"] = (
                self._absolute_signed_url(signed, download) if signed else None
            )
            results.append(entry)
        return results

    def get_public_url(
        self,
        path: str,
        download: bool | str | None = None,
        transform: TransformOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Return the public URL of an object.

        Only meaningful for public buckets; no request is made.
        """
        params: dict[str, Any] = {}
        if transform is not None:
            params.update(coerce_options(TransformOptions, transform).as_params())
            prefix = "render/image/public"
        else:
            prefix = "object/public"
        params.update(_download_param(download))
        url = self._endpoint(prefix, self._bucket_segment, path)
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def _absolute_signed_url(self, signed: str, download: bool | str | None) -> str:
        url = signed if signed.startswith("http") else f"{self.url}/{signed.lstrip('/')}"
        params = _download_param(download)
        if params:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode(params)}"
        return url

    def list(
        self,
        path: str | None = None,
        options: SearchOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """List objects under the ``path`` prefix.

        Args:
            path: Folder prefix; the bucket root when omitted.
            options: Limit, offset, sort order and search string.
        """
        opts = coerce_options(SearchOptions, options)
        body = opts.model_dump(by_alias=True, exclude_none=True)
        body["prefix"] = path or ""
        return self._request(
            "POST",
            self._endpoint("object", "list", self._bucket_segment),
            json_body=body,
            headers=JSON_HEADERS,
        )
