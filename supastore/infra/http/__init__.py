"""HTTP transport and error types.

The ``request`` helper lives in :mod:`supastore.infra.http.request`.
"""

from .errors import (
    StorageApiError,
    StorageConfigError,
    StorageError,
    StorageSerializationError,
    StorageTransportError,
)

__all__ = [
    "StorageApiError",
    "StorageConfigError",
    "StorageError",
    "StorageSerializationError",
    "StorageTransportError",
]
