"""Core BrowserSnapshot components."""

from .errors import (
    BrowserSnapshotError,
    InvalidReferenceFormatError,
    FrameNotFoundError,
    NoAccessibilityDataError,
    ElementNotFoundError,
    SerializationFailureError,
    CDPError,
    ConfigurationError,
)
from .config import SnapshotConfig
from .session import SnapshotSession, NO_PAGE_MESSAGE
from .tools import BrowserSessionAccessor, SnapshotTools, format_snapshot_envelope

__all__ = [
    # Main classes
    "SnapshotConfig",
    "SnapshotSession",
    "SnapshotTools",
    "BrowserSessionAccessor",
    "format_snapshot_envelope",
    "NO_PAGE_MESSAGE",
    # Errors
    "BrowserSnapshotError",
    "InvalidReferenceFormatError",
    "FrameNotFoundError",
    "NoAccessibilityDataError",
    "ElementNotFoundError",
    "SerializationFailureError",
    "CDPError",
    "ConfigurationError",
]
