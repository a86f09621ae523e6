"""Bucket and object clients for the storage API."""

from .bucket import StorageBucket
from .client import StorageClient
from .file import StorageFile
from .models import (
    BucketOptions,
    BucketPayload,
    ClientConfig,
    FileOptions,
    SearchOptions,
    SortBy,
    TransformOptions,
)

__all__ = [
    "BucketOptions",
    "BucketPayload",
    "ClientConfig",
    "FileOptions",
    "SearchOptions",
    "SortBy",
    "StorageBucket",
    "StorageClient",
    "StorageFile",
    "TransformOptions",
]
