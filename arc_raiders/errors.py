"""
Exception hierarchy for the Arc Raiders client.

Nothing in the client retries. Errors propagate to the caller unchanged,
except inside ``ArcRaidersClient.get_maps()`` where a failed map is dropped.
"""

from __future__ import annotations

from typing import Optional


class ArcRaidersError(Exception):
    """Base class for all errors raised by this package."""


class TransportError(ArcRaidersError):
    """A request failed: non-2xx status or network failure.

    Attributes:
        status_code: HTTP status, or ``None`` when no response was received.
        url: The requested URL, when known.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class ParseError(ArcRaidersError):
    """A response body could not be interpreted as JSON."""


class ExportError(ArcRaidersError):
    """An export was requested that cannot be written (e.g. empty CSV)."""
