"""Single-shot HTTP helper shared by the bucket and object clients.

Dependencies:
    - requests
"""

from __future__ import annotations

import logging
import time
from typing import IO, Any, Mapping
from urllib.parse import urlsplit

import requests

from supastore.common.config import get_settings
from supastore.common.logging import mask_mapping, mask_text
from supastore.infra.http.errors import StorageApiError, StorageTransportError
from supastore.infra.observability.metrics import LATENCY, REQUESTS, endpoint_template

logger = logging.getLogger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD"})

RequestBody = str | bytes | IO[bytes] | None


def request(
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: RequestBody = None,
    *,
    raw: bool = False,
) -> Any:
    """Send one request and return the decoded response.

    Args:
        method: HTTP verb.
        url: Fully qualified URL.
        headers: Complete header set for this call.
        body: Pre-serialized body (JSON text, bytes or a binary file object).
        raw: Return ``response.content`` untouched instead of decoding JSON.

    Returns:
        The decoded JSON document, the response text when the body is not
        JSON, ``None`` for an empty body, or bytes when ``raw`` is set.

    Raises:
        ValueError: If ``method`` is not a supported verb.
        StorageTransportError: If no HTTP response was received.
        StorageApiError: If the service answered with a 4xx/5xx status.
    """
    method = method.upper()
    if method not in ALLOWED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")

    settings = get_settings()
    endpoint = endpoint_template(urlsplit(url).path)
    if settings.STORAGE_TRACE_HTTP:
        logger.debug(
            "storage_request method=%s url=%s headers=%s",
            method,
            mask_text(url),
            mask_mapping(dict(headers)),
        )

    start = time.perf_counter()
    try:
        response = requests.request(method, url, headers=dict(headers), data=body)
    except requests.exceptions.RequestException as exc:
        elapsed = time.perf_counter() - start
        _observe(settings.STORAGE_ENABLE_METRICS, method, endpoint, "error", elapsed)
        logger.error(
            "storage_transport_error method=%s endpoint=%s duration_ms=%.3f error=%s",
            method,
            endpoint,
            round(elapsed * 1000, 3),
            exc,
            extra={"extra": _log_fields(method, endpoint, "error", elapsed)},
        )
        raise StorageTransportError(
            f"{method} {mask_text(url)} failed: {exc}", method=method, url=url
        ) from exc

    elapsed = time.perf_counter() - start
    status = response.status_code
    _observe(settings.STORAGE_ENABLE_METRICS, method, endpoint, str(status), elapsed)

    if status >= 400:
        error = _api_error(response)
        logger.log(
            logging.WARNING if status < 500 else logging.ERROR,
            "storage_request method=%s endpoint=%s status=%s duration_ms=%.3f message=%s",
            method,
            endpoint,
            status,
            round(elapsed * 1000, 3),
            error.message,
            extra={"extra": _log_fields(method, endpoint, status, elapsed)},
        )
        raise error

    logger.debug(
        "storage_request method=%s endpoint=%s status=%s duration_ms=%.3f",
        method,
        endpoint,
        status,
        round(elapsed * 1000, 3),
        extra={"extra": _log_fields(method, endpoint, status, elapsed)},
    )
    if raw:
        return response.content
    return _decode(response)


def _log_fields(
    method: str, endpoint: str, status: int | str, elapsed: float
) -> dict[str, Any]:
    return {
        "method": method,
        "endpoint": endpoint,
        "status": status,
        "duration_ms": round(elapsed * 1000, 3),
    }


def _observe(
    enabled: bool, method: str, endpoint: str, status: str, elapsed: float
) -> None:
    if not enabled:
        return
    REQUESTS.labels(method=method, endpoint=endpoint, status=status).inc()
    LATENCY.labels(method=method, endpoint=endpoint).observe(elapsed)


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _api_error(response: requests.Response) -> StorageApiError:
    """Build a StorageApiError from a failed response."""
    error: Any = None
    if response.content:
        try:
            error = response.json()
        except ValueError:
            error = response.text

    message: str | None = None
    if isinstance(error, dict):
        for key in ("message", "error", "msg"):
            value = error.get(key)
            if isinstance(value, str) and value:
                message = value
                break
    elif isinstance(error, str) and error.strip():
        message = error.strip()

    return StorageApiError(
        message or response.reason or "HTTP error",
        status_code=response.status_code,
        error=error,
    )
