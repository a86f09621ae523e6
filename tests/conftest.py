from __future__ import annotations

import json
from unittest.mock import patch

import pytest
import requests

from supastore.common.config import get_settings

SETTINGS_ENV = (
    "SUPABASE_API_KEY",
    "SUPABASE_REFERENCE_ID",
    "STORAGE_URL",
    "STORAGE_TRACE_HTTP",
    "STORAGE_ENABLE_METRICS",
)


def _build_response(
    status_code: int = 200,
    *,
    json_body=None,
    content: bytes | None = None,
    reason: str | None = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason if reason is not None else ("OK" if status_code < 400 else "Error")
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = content or b""
    return response


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("supastore.common.config.ENV_FILE", tmp_path / ".env")
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture
def make_response():
    """Factory for real ``requests.Response`` objects with a canned body."""
    return _build_response


@pytest.fixture
def mock_http():
    """Patch the outbound ``requests.request`` call."""
    with patch("supastore.infra.http.request.requests.request") as mock_request:
        mock_request.return_value = _build_response(200, json_body={})
        yield mock_request
