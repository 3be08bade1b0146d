from __future__ import annotations

from typing import Optional


class RadioBrowserError(Exception):
    """Base class for everything this connector raises."""


class InvalidArgument(RadioBrowserError, ValueError):
    """Malformed paging window, view or connection parameters. Never retried."""


class RemoteError(RadioBrowserError):
    """The server answered with a non-success status after all attempts."""

    def __init__(self, status: int, reason: str = ""):
        super().__init__(f"HTTP {status} {reason}".rstrip())
        self.status = int(status)
        self.reason = reason or ""

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status < 600


class TransportError(RadioBrowserError):
    """Network- or decode-level failure. Never retried."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
