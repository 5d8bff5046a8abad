"""Tool-facing entry points: snapshot envelope and reference resolution."""

from typing import Any, Optional, Protocol

from playwright.async_api import Error as PlaywrightError

from ..types import ToolResult
from .errors import BrowserSnapshotError, InvalidReferenceFormatError
from .session import SnapshotSession


class BrowserSessionAccessor(Protocol):
    """Supplies the live page; connection and relaunch live elsewhere."""

    async def get_current_page(self) -> Any:
        ...


def format_snapshot_envelope(url: str, title: str, snapshot: str) -> str:
    """Wrap serialized output in the text block handed to the agent."""
    return "\n".join([
        f"- Page URL: {url}",
        f"- Page Title: {title}",
        "- Page Snapshot",
        "```yaml",
        snapshot.rstrip("\n"),
        "```",
    ])


class SnapshotTools:
    """
    Tool handlers built on a SnapshotSession.

    Failures come back as error-flagged results; only malformed reference
    IDs propagate to the caller.
    """

    def __init__(self, accessor: BrowserSessionAccessor, session: SnapshotSession):
        self.accessor = accessor
        self.session = session
        self.logger = session.logger.child(component="tools")

    async def browser_snapshot(self, all_frames: bool = False) -> ToolResult:
        """Capture the current page and return it inside the snapshot envelope."""
        try:
            page = await self.accessor.get_current_page()
            if all_frames:
                snapshot = await self.session.capture_all_frames(page)
            else:
                snapshot = await self.session.capture_snapshot(page)
            if page is None:
                return ToolResult.error(snapshot)
            text = format_snapshot_envelope(page.url, await page.title(), snapshot)
        except (BrowserSnapshotError, PlaywrightError) as e:
            message = getattr(e, "message", None) or str(e)
            self.logger.error("tools:snapshot", "Snapshot failed", error=message)
            return ToolResult.error(f"Failed to capture accessibility snapshot: {message}")
        return ToolResult.ok(text)

    async def browser_resolve(self, ref: str, role_hint: Optional[str] = None) -> ToolResult:
        """
        Resolve a reference ID on the current page.

        Raises:
            InvalidReferenceFormatError: for malformed references
        """
        try:
            page = await self.accessor.get_current_page()
            if page is None:
                return ToolResult.error("Error: No page provided")
            element = await self.session.resolve(page, ref, role_hint)
        except InvalidReferenceFormatError:
            raise
        except (BrowserSnapshotError, PlaywrightError) as e:
            message = getattr(e, "message", None) or str(e)
            self.logger.warn("tools:resolve", "Resolve failed", ref=ref, error=message)
            return ToolResult.error(f"Failed to resolve {ref}: {message}")

        name = f' "{element.name}"' if element.name else ""
        return ToolResult.ok(
            f"Resolved {ref} in frame {element.frame_index}: "
            f"{element.role}{name} (matched by {element.strategy.replace('_', ' ')})"
        )
