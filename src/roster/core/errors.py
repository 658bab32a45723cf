"""Exceptions raised by the Roster core.

RecordsApi raises these; SyncController catches them at the call site and
turns them into an OperationResult. ValidationError lives in validation.py.
"""

from __future__ import annotations

from typing import Optional

__all__ = ["RosterError", "NetworkFailure", "BadResponseShape", "ConfigError"]


class RosterError(Exception):
    """Base class for all Roster errors."""


class NetworkFailure(RosterError):
    """A request could not complete, or the server answered with a non-2xx status.

    Attributes:
        url: URL that was requested
        status_code: HTTP status if a response arrived, else None
    """

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"Request to {self.url} failed with HTTP {self.status_code}: {self.reason}"
        return f"Request to {self.url} failed: {self.reason}"


class BadResponseShape(RosterError):
    """A response arrived but its body was not the expected array or object."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Unexpected response from {url}: {detail}")


class ConfigError(RosterError):
    """Required startup configuration is missing or unusable."""
