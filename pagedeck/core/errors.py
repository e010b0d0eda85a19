"""
Exception types shared across PageDeck.
"""

from __future__ import annotations


class PageDeckError(RuntimeError):
    """Base class for every error raised by PageDeck."""


class ContentExtractionError(PageDeckError):
    """Raised when the source page could not be scraped."""


class AlaiAPIError(PageDeckError):
    """Raised when a request/response call to Alai fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SessionError(PageDeckError):
    """Base class for streaming session failures."""


class TransportError(SessionError):
    """Raised when the duplex channel fails to open or errors mid-session."""


class EmptySessionError(SessionError):
    """Raised when a session ends without accumulating a usable result."""

    def __init__(self, message: str, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


class PipelineStepFailedError(PageDeckError):
    """Raised when a stage the pipeline cannot recover from has failed."""

    def __init__(self, step: str, message: str) -> None:
        super().__init__(message)
        self.step = step
