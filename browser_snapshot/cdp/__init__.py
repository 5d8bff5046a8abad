"""CDP (Chrome DevTools Protocol) utilities for BrowserSnapshot."""

from .manager import CDPSessionPool, find_frame_id, send

__all__ = [
    "CDPSessionPool",
    "find_frame_id",
    "send",
]
