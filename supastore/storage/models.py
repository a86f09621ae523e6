"""Typed options and payloads for storage operations.

These replace free-form option dictionaries: every field is named and
validated, and unknown keys are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

from supastore.common.constants import merge_headers


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Storage root and header set shared by a client and its children."""

    url: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", self.url.rstrip("/"))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def merged_headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return the client headers with ``extra`` applied on top."""
        return merge_headers(self.headers, extra)


class _Options(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class BucketOptions(_Options):
    """Bucket visibility.

    Public buckets don't require an authorization token to download objects,
    but still require a valid token for all other operations.
    """

    public: bool = False


class BucketPayload(_Options):
    """Request body for bucket create and update calls."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    public: bool


class FileOptions(_Options):
    cache_control: str = Field(default="3600", alias="cacheControl")
    content_type: str = Field(default="text/plain;charset=UTF-8", alias="contentType")
    upsert: bool = False


class SortBy(_Options):
    column: str = "name"
    order: Literal["asc", "desc"] = "asc"


class SearchOptions(_Options):
    limit: int = Field(default=100, ge=1)
    offset: int = Field(default=0, ge=0)
    sort_by: SortBy = Field(default_factory=SortBy, alias="sortBy")
    search: str | None = None


class TransformOptions(_Options):
    """Image transformation applied by the render endpoints."""

    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)
    resize: Literal["cover", "contain", "fill"] | None = None
    quality: int | None = Field(default=None, ge=20, le=100)
    format: Literal["origin"] | None = None

    def as_params(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def coerce_options(model: type[_Options], value: Any) -> Any:
    """Accept either a model instance or a mapping and return the model."""
    if value is None:
        return model()
    if isinstance(value, model):
        return value
    return model.model_validate(value)
