"""Frame enumeration and concurrent per-frame capture."""

import asyncio
from typing import List

from playwright.async_api import Frame, Page

from ..core.errors import FrameNotFoundError
from ..types import FrameTree
from ..utils.logger import BrowserSnapshotLogger
from .capture import AccessibilitySource


def list_frames(page: Page) -> List[Frame]:
    """Live frames in Playwright's order; index 0 is the main frame."""
    return list(page.frames)


def frame_at(page: Page, frame_index: int) -> Frame:
    """
    Map a frame index to the live frame.

    Raises:
        FrameNotFoundError: when the page currently has fewer frames
    """
    frames = list_frames(page)
    if frame_index < 0 or frame_index >= len(frames):
        raise FrameNotFoundError(frame_index, len(frames))
    return frames[frame_index]


async def capture_frame_trees(
    page: Page,
    source: AccessibilitySource,
    logger: BrowserSnapshotLogger,
) -> List[FrameTree]:
    """
    Capture every frame concurrently, keeping only the successes.

    Frames that fail (detached, navigating) or report no tree are dropped.
    The result is ordered by frame index regardless of completion order.
    """
    frames = list_frames(page)
    results = await asyncio.gather(
        *(source.capture(frame) for frame in frames),
        return_exceptions=True,
    )

    trees: List[FrameTree] = []
    for index, (frame, result) in enumerate(zip(frames, results)):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warn(
                "frames:capture",
                "Skipping frame that failed to capture",
                frame_index=index,
                frame_url=frame.url,
                error=str(result),
            )
            continue
        if result is None:
            logger.debug(
                "frames:capture",
                "Skipping frame without accessibility data",
                frame_index=index,
                frame_url=frame.url,
            )
            continue
        trees.append(FrameTree(frame_index=index, frame=frame, tree=result))
    return trees
