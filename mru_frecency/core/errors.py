"""Error taxonomy for the frecency store.

Only ``StoreNotInitializedError`` is meant to reach callers of the public API.
The storage-level errors are carried as ``Err`` results (see
``mru_frecency.core.result``) and turned into booleans or empty lists at the
store boundary, so an unreadable or corrupt document never crashes the editor.
"""

from __future__ import annotations

from typing import Optional


class FrecencyError(Exception):
    """Base class for all frecency store errors."""

    code: str = "FRECENCY_ERROR"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class IOUnavailableError(FrecencyError):
    """The document or its directory cannot be read or written."""

    code = "IO_UNAVAILABLE"


class CorruptDocumentError(FrecencyError):
    """The document exists but is not a valid versioned entry list."""

    code = "CORRUPT_DOCUMENT"


class LockTimeoutError(FrecencyError):
    """The lock file could not be acquired within the configured budget."""

    code = "LOCK_TIMEOUT"


class StoreNotInitializedError(FrecencyError):
    """The process-wide store was used before ``setup()``."""

    code = "STORE_NOT_INITIALIZED"

    def __init__(self, message: str = "frecency store is not initialized, call setup() first"):
        super().__init__(message)


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (IOUnavailableError, CorruptDocumentError, LockTimeoutError)
}
