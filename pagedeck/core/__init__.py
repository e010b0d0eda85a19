"""
Core components for PageDeck
"""

from .deadline import RaceResult, race_deadline
from .errors import (
    AlaiAPIError,
    ContentExtractionError,
    EmptySessionError,
    PageDeckError,
    PipelineStepFailedError,
    SessionError,
    TransportError,
)
from .session import SessionOutcome, SessionSpec, StreamingSession, run_session

__all__ = [
    "AlaiAPIError",
    "ContentExtractionError",
    "EmptySessionError",
    "PageDeckError",
    "PipelineStepFailedError",
    "RaceResult",
    "SessionError",
    "SessionOutcome",
    "SessionSpec",
    "StreamingSession",
    "TransportError",
    "race_deadline",
    "run_session",
]
