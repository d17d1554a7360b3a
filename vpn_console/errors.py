"""Error taxonomy for panel operations."""

from typing import Optional


class PanelError(Exception):
    """Base error for anything the panel layer raises."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class AuthFailure(PanelError):
    """Login rejected or session missing."""


class ValidationFailure(PanelError):
    """Input rejected before any network call."""


class TransportFailure(PanelError):
    """Network error, timeout or unexpected server status."""


class NotFound(PanelError):
    """Server has no such record."""


class Conflict(PanelError):
    """Server refused the change because of current state."""
