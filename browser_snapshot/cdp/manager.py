"""CDP session pool scoped to one snapshot session."""

import asyncio
import weakref
from typing import Any, Awaitable, Callable, Dict, Optional

from playwright.async_api import CDPSession, Error as PlaywrightError, Frame, Page

from ..core.errors import CDPError
from ..utils.logger import BrowserSnapshotLogger

# Playwright's messages for frames that live in their parent's renderer
_SHARED_SESSION_MARKERS = (
    "does not have a separate CDP session",
    "not an OOPIF",
)


class CDPSessionPool:
    """
    Caches CDP sessions per page and per out-of-process frame.

    Same-process iframes have no session of their own and are mapped to
    their page's session; callers address them with a ``frameId``.
    """

    def __init__(self, logger: Optional[BrowserSnapshotLogger] = None):
        self._logger = logger
        self.frame_sessions: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()
        self.page_sessions: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()
        # Page or frame -> in-flight session creation, shared by concurrent callers
        self._pending: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()

    async def get_session(self, page: Page, frame: Optional[Frame] = None) -> CDPSession:
        """
        Get or create the CDP session that owns ``frame``.

        Concurrent calls for the same target await a single creation, so a
        page never ends up with two attached sessions.

        Args:
            page: Page the frame belongs to
            frame: Frame, or None for the main frame

        Returns:
            CDP session
        """
        if frame is None or frame == page.main_frame:
            if page in self.page_sessions:
                return self.page_sessions[page]
            return await self._await_creation(page, lambda: self._open_page_session(page))

        if frame in self.frame_sessions:
            return self.frame_sessions[frame]
        return await self._await_creation(frame, lambda: self._open_frame_session(page, frame))

    async def _await_creation(
        self, target: Any, create: Callable[[], Awaitable[CDPSession]]
    ) -> CDPSession:
        task = self._pending.get(target)
        if task is None:
            task = asyncio.ensure_future(create())
            self._pending[target] = task
        try:
            return await asyncio.shield(task)
        finally:
            if task.done() and self._pending.get(target) is task:
                del self._pending[target]

    async def _open_page_session(self, page: Page) -> CDPSession:
        try:
            session = await page.context.new_cdp_session(page)
        except PlaywrightError as e:
            raise CDPError("Target.attachToTarget", str(e)) from e
        self.page_sessions[page] = session
        return session

    async def _open_frame_session(self, page: Page, frame: Frame) -> CDPSession:
        try:
            session = await page.context.new_cdp_session(frame)
        except PlaywrightError as e:
            if not any(marker in str(e) for marker in _SHARED_SESSION_MARKERS):
                raise CDPError("Target.attachToTarget", str(e)) from e
            session = await self.get_session(page)
            if self._logger:
                self._logger.debug(
                    "cdp:session",
                    "Frame shares its page session",
                    frame_url=frame.url,
                )
        self.frame_sessions[frame] = session
        return session

    def owns_separate_session(self, page: Page, frame: Frame) -> bool:
        """True when ``frame`` was given its own (out-of-process) session."""
        if frame == page.main_frame:
            return True
        session = self.frame_sessions.get(frame)
        return session is not None and session is not self.page_sessions.get(page)

    async def cleanup(self) -> None:
        """Detach every cached session."""
        sessions = {id(s): s for s in self.page_sessions.values()}
        sessions.update({id(s): s for s in self.frame_sessions.values()})
        for session in sessions.values():
            try:
                await session.detach()
            except PlaywrightError as e:
                # Already closed with its target
                if self._logger:
                    self._logger.debug("cdp:cleanup", "Session detach failed", error=str(e))
        self.page_sessions.clear()
        self.frame_sessions.clear()


async def send(session: CDPSession, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Send a CDP command, wrapping Playwright errors in CDPError."""
    try:
        return await session.send(method, params or {})
    except PlaywrightError as e:
        raise CDPError(method, str(e)) from e


def _frame_depth(frame: Frame) -> int:
    depth = 0
    parent = frame.parent_frame
    while parent:
        depth += 1
        parent = parent.parent_frame
    return depth


async def find_frame_id(session: CDPSession, frame: Frame) -> Optional[str]:
    """
    Look up the CDP frame ID of a Playwright frame.

    Playwright does not expose frame IDs, so the frame is matched in
    ``Page.getFrameTree`` by depth and URL, then by name when several
    frames at that depth share a URL.
    """
    response = await send(session, "Page.getFrameTree")
    depth = _frame_depth(frame)
    candidates = []

    def walk(node: Dict[str, Any], current_depth: int) -> None:
        info = node.get("frame", {})
        if current_depth == depth and info.get("url") == frame.url:
            candidates.append(info)
        for child in node.get("childFrames", []):
            walk(child, current_depth + 1)

    walk(response.get("frameTree", {}), 0)
    if not candidates:
        return None
    for info in candidates:
        if frame.name and info.get("name") == frame.name:
            return info.get("id")
    return candidates[0].get("id")
