"""Error types raised by postboard."""

from typing import Optional


class PostboardError(Exception):
    """Base class for postboard errors."""


class ValidationError(PostboardError):
    """A user action was rejected before any state changed."""


class FetchError(PostboardError):
    """Retrieving the remote collection failed (transport, status or payload)."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


NO_FILTER_CRITERIA = "Enter at least one filter value."
