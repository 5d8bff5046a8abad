"""Element reference IDs: ``f<frame>s<snapshot>e<element>`` or ``s<snapshot>e<element>``."""

import re
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from ..core.errors import InvalidReferenceFormatError
from ..types import ReferenceId

# ASCII digits only; str.isdigit() and \d both accept other scripts
_FRAME_REF = re.compile(r"f([0-9]+)s([0-9]+)e([0-9]+)")
_MAIN_REF = re.compile(r"s([0-9]+)e([0-9]+)")
_FRAME_PREFIX = re.compile(r"f([0-9]+)s([0-9]+)")
_MAIN_PREFIX = re.compile(r"s([0-9]+)")


def prefix(frame_index: Optional[int], snapshot_index: int) -> str:
    """Prefix shared by every ID of one frame capture, e.g. ``s1`` or ``f0s1``."""
    if frame_index is None:
        return f"s{snapshot_index}"
    return f"f{frame_index}s{snapshot_index}"


def encode(frame_index: Optional[int], snapshot_index: int, element_index: int) -> str:
    """
    Encode a reference ID.

    A frame index of 0 is encoded as ``f0``; only ``None`` means the main
    frame without a frame segment.
    """
    return f"{prefix(frame_index, snapshot_index)}e{element_index}"


def decode(ref_id: Any) -> ReferenceId:
    """
    Decode a reference ID string.

    Raises:
        InvalidReferenceFormatError: for anything outside the two grammars,
            including missing segments and zero snapshot/element indices.
    """
    if not isinstance(ref_id, str):
        raise InvalidReferenceFormatError(ref_id)

    match = _FRAME_REF.fullmatch(ref_id)
    if match:
        frame, snapshot, element = (int(group) for group in match.groups())
        return _build(ref_id, frame, snapshot, element)

    match = _MAIN_REF.fullmatch(ref_id)
    if match:
        snapshot, element = (int(group) for group in match.groups())
        return _build(ref_id, None, snapshot, element)

    raise InvalidReferenceFormatError(ref_id)


def parse_prefix(text: Any) -> Tuple[Optional[int], int]:
    """Inverse of :func:`prefix`: ``"f0s1"`` -> ``(0, 1)``, ``"s1"`` -> ``(None, 1)``."""
    if isinstance(text, str):
        match = _FRAME_PREFIX.fullmatch(text)
        if match and int(match.group(2)) >= 1:
            return int(match.group(1)), int(match.group(2))
        match = _MAIN_PREFIX.fullmatch(text)
        if match and int(match.group(1)) >= 1:
            return None, int(match.group(1))
    raise InvalidReferenceFormatError(text)


def _build(ref_id: str, frame: Optional[int], snapshot: int, element: int) -> ReferenceId:
    try:
        return ReferenceId(frame_index=frame, snapshot_index=snapshot, element_index=element)
    except ValidationError as e:
        raise InvalidReferenceFormatError(ref_id) from e
