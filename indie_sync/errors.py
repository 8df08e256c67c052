"""
Exception types for the sync pipeline.

Extraction misses are not errors; they are covered by per-field defaults.
"""

from typing import Any, Optional


class SyncError(Exception):
    """Base class for all pipeline errors."""


class ConfigError(SyncError):
    """Required configuration is missing."""


class PageLoadError(SyncError):
    """A page could not be loaded, even after retrying."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        super().__init__(f"Could not load {url}: {cause}")


class StoreError(SyncError):
    """The Notion API rejected a request."""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        self.status = status
        self.body = body
        super().__init__(f"{message} (status={status})" if status else message)


class LLMError(SyncError):
    """The LLM provider failed or returned no usable text."""


class NoProductsError(SyncError):
    """The listing page loaded but no product entries were found."""
