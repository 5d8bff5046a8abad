"""Custom exception hierarchy for BrowserSnapshot."""

from typing import Optional, Any, Dict


class BrowserSnapshotError(Exception):
    """Base exception for all BrowserSnapshot errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def error_code(self) -> Optional[str]:
        return self.details.get("error_code")


class InvalidReferenceFormatError(BrowserSnapshotError):
    """Raised when an element reference ID does not match the grammar."""

    def __init__(self, ref_id: Any):
        super().__init__(
            f"Invalid element reference ID format: {ref_id}",
            {"ref_id": str(ref_id), "error_code": "INVALID_REFERENCE_FORMAT"}
        )


class FrameNotFoundError(BrowserSnapshotError):
    """Raised when a decoded frame index is outside the live frame list."""

    def __init__(self, frame_index: int, frame_count: int):
        super().__init__(
            f"Frame not found: index {frame_index} (page has {frame_count} frame(s))",
            {
                "frame_index": frame_index,
                "frame_count": frame_count,
                "error_code": "FRAME_NOT_FOUND",
            }
        )
        self.frame_index = frame_index
        self.frame_count = frame_count


class NoAccessibilityDataError(BrowserSnapshotError):
    """Raised when the host returns no accessibility tree for a frame."""

    def __init__(self, frame_url: Optional[str] = None, reason: Optional[str] = None):
        message = "No accessibility tree available"
        if frame_url:
            message += f" for frame {frame_url}"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            {"frame_url": frame_url, "reason": reason, "error_code": "NO_ACCESSIBILITY_DATA"}
        )


class ElementNotFoundError(BrowserSnapshotError):
    """Raised when no node matches the role hint or the interactive roles."""

    def __init__(self, ref_id: str, role_hint: Optional[str] = None):
        message = f"Element not found: {ref_id}"
        if role_hint:
            message += f" (role hint: {role_hint})"
        super().__init__(
            message,
            {"ref_id": ref_id, "role_hint": role_hint, "error_code": "ELEMENT_NOT_FOUND"}
        )


class SerializationFailureError(BrowserSnapshotError):
    """Raised when a simplified tree cannot be rendered to text."""

    def __init__(self, style: str, reason: str):
        super().__init__(
            f"Snapshot formatting failed ({style}): {reason}",
            {"style": style, "reason": reason, "error_code": "SERIALIZATION_FAILURE"}
        )


class CDPError(BrowserSnapshotError):
    """Raised when Chrome DevTools Protocol operations fail."""

    def __init__(self, command: str, reason: str):
        super().__init__(
            f"CDP command '{command}' failed: {reason}",
            {"command": command, "reason": reason, "error_code": "CDP_ERROR"}
        )


class ConfigurationError(BrowserSnapshotError):
    """Raised when configuration is invalid."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid configuration: {reason}",
            {"reason": reason, "error_code": "CONFIGURATION_ERROR"}
        )
