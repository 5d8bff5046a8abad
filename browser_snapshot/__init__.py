"""
BrowserSnapshot - accessibility snapshots with re-addressable element references.

Captures a compact textual description of everything interactive on a
Playwright page (including iframes) and resolves the reference IDs in that
description back to elements on a later turn.
"""

__version__ = "0.1.0"

from .core import (
    SnapshotConfig,
    SnapshotSession,
    SnapshotTools,
    BrowserSessionAccessor,
    format_snapshot_envelope,
    BrowserSnapshotError,
    InvalidReferenceFormatError,
    FrameNotFoundError,
    NoAccessibilityDataError,
    ElementNotFoundError,
    SerializationFailureError,
    CDPError,
    ConfigurationError,
)

from .a11y import (
    Resolver,
    Serializer,
    TreeSimplifier,
    decode,
    encode,
    find_node,
    format_accessibility_tree,
)

from .types import (
    RawAccessibilityNode,
    ReferenceId,
    ResolvedElement,
    SimplifiedNode,
    ToolResult,
)

__all__ = [
    # Version
    "__version__",
    # Main classes
    "SnapshotConfig",
    "SnapshotSession",
    "SnapshotTools",
    "BrowserSessionAccessor",
    "Resolver",
    "Serializer",
    "TreeSimplifier",
    # Functions
    "decode",
    "encode",
    "find_node",
    "format_accessibility_tree",
    "format_snapshot_envelope",
    # Common types
    "RawAccessibilityNode",
    "ReferenceId",
    "ResolvedElement",
    "SimplifiedNode",
    "ToolResult",
    # Common errors
    "BrowserSnapshotError",
    "InvalidReferenceFormatError",
    "FrameNotFoundError",
    "NoAccessibilityDataError",
    "ElementNotFoundError",
    "SerializationFailureError",
    "CDPError",
    "ConfigurationError",
]
