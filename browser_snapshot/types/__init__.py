"""Type definitions for BrowserSnapshot."""

from .models import (
    FrameTree,
    MatchStrategy,
    RawAccessibilityNode,
    RawTreeInput,
    ReferenceId,
    ResolvedElement,
    SimplifiedNode,
    TextContent,
    ToolResult,
)

__all__ = [
    "FrameTree",
    "MatchStrategy",
    "RawAccessibilityNode",
    "RawTreeInput",
    "ReferenceId",
    "ResolvedElement",
    "SimplifiedNode",
    "TextContent",
    "ToolResult",
]
