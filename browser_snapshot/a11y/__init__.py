"""Accessibility tree capture, simplification, rendering and resolution."""

from .refs import decode, encode, parse_prefix, prefix
from .simplifier import (
    FILTER_POLICIES,
    STRUCTURAL_ROLES,
    FilterPolicy,
    TreeSimplifier,
    keep_all,
    keep_structural,
)
from .serializer import (
    OutputStyle,
    Serializer,
    escape_string,
    format_accessibility_tree,
    parse_lines,
)
from .capture import AccessibilitySource, CDPAccessibilitySource, build_raw_tree
from .frames import capture_frame_trees, frame_at, list_frames
from .resolver import INTERACTIVE_ROLES, Resolver, find_node

__all__ = [
    "decode",
    "encode",
    "parse_prefix",
    "prefix",
    "FILTER_POLICIES",
    "STRUCTURAL_ROLES",
    "FilterPolicy",
    "TreeSimplifier",
    "keep_all",
    "keep_structural",
    "OutputStyle",
    "Serializer",
    "escape_string",
    "format_accessibility_tree",
    "parse_lines",
    "AccessibilitySource",
    "CDPAccessibilitySource",
    "build_raw_tree",
    "capture_frame_trees",
    "frame_at",
    "list_frames",
    "INTERACTIVE_ROLES",
    "Resolver",
    "find_node",
]
