"""Client library for the Supabase Storage REST API."""

from supastore.common.constants import CLIENT_VERSION
from supastore.infra.http.errors import (
    StorageApiError,
    StorageConfigError,
    StorageError,
    StorageSerializationError,
    StorageTransportError,
)
from supastore.storage import (
    BucketOptions,
    FileOptions,
    SearchOptions,
    SortBy,
    StorageBucket,
    StorageClient,
    StorageFile,
    TransformOptions,
)

__version__ = CLIENT_VERSION

__all__ = [
    "BucketOptions",
    "FileOptions",
    "SearchOptions",
    "SortBy",
    "StorageApiError",
    "StorageBucket",
    "StorageClient",
    "StorageConfigError",
    "StorageError",
    "StorageFile",
    "StorageSerializationError",
    "StorageTransportError",
    "TransformOptions",
    "__version__",
]
