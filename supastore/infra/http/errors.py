"""Exceptions raised by the storage client.

Every public operation either returns the decoded response or raises one of
these. ``StorageError`` is the common base so callers can catch everything the
library raises with a single clause.
"""

from __future__ import annotations

from typing import Any


class StorageError(RuntimeError):
    """Raised when a storage operation fails."""


class StorageConfigError(StorageError):
    """Raised when the client cannot be built from the given configuration."""


class StorageSerializationError(StorageError):
    """Raised when a request body cannot be encoded as JSON."""


class StorageTransportError(StorageError):
    """Raised when the request never produced an HTTP response.

    Covers DNS failures, refused connections and timeouts.
    """

    def __init__(self, message: str, *, method: str, url: str) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class StorageApiError(StorageError):
    """Raised when the service answers with a 4xx or 5xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error: Any = None,
    ) -> None:
        super().__init__(f"Storage API error (status {status_code}): {message}")
        self.status_code = status_code
        self.message = message
        self.error = error

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500
