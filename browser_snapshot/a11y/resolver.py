"""Re-locate a previously described element from its reference ID."""

from typing import Optional, Tuple

from playwright.async_api import Error as PlaywrightError, Frame, Page

from ..core.errors import ElementNotFoundError, NoAccessibilityDataError
from ..types import MatchStrategy, RawAccessibilityNode, RawTreeInput, ResolvedElement
from ..utils.logger import BrowserSnapshotLogger
from .capture import AccessibilitySource
from .frames import frame_at
from .refs import decode
from .simplifier import to_raw_node

INTERACTIVE_ROLES = frozenset({
    "button", "link", "checkbox", "combobox", "menuitem",
    "menuitemcheckbox", "menuitemradio", "option", "radio",
    "scrollbar", "searchbox", "slider", "spinbutton", "switch",
    "tab", "textbox", "treeitem",
})

DEFAULT_READINESS_TIMEOUT_MS = 2000


def _walk(root: RawAccessibilityNode):
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _role(node: RawAccessibilityNode) -> str:
    return (node.role or "").lower()


def find_node(
    tree: RawTreeInput,
    role_hint: Optional[str] = "button",
) -> Optional[Tuple[RawAccessibilityNode, MatchStrategy]]:
    """
    First pre-order node whose role equals ``role_hint`` (case-insensitive),
    else the first node with an interactive role.
    """
    root = to_raw_node(tree)
    if root is None:
        return None

    if role_hint:
        wanted = role_hint.lower()
        for node in _walk(root):
            if _role(node) == wanted:
                return node, "role_hint"

    for node in _walk(root):
        if _role(node) in INTERACTIVE_ROLES:
            return node, "interactive"
    return None


class Resolver:
    """
    Best-effort re-matching of reference IDs against a freshly captured tree.

    The element index of a reference is not used for matching: the tree it
    was issued against is stale by the time a caller acts on it.
    """

    def __init__(
        self,
        source: AccessibilitySource,
        logger: BrowserSnapshotLogger,
        readiness_timeout_ms: int = DEFAULT_READINESS_TIMEOUT_MS,
    ):
        self.source = source
        self.logger = logger
        self.readiness_timeout_ms = readiness_timeout_ms

    async def resolve(self, page: Page, ref_id: str, role_hint: Optional[str] = "button") -> ResolvedElement:
        """
        Resolve ``ref_id`` on ``page``.

        Raises:
            InvalidReferenceFormatError: malformed reference
            FrameNotFoundError: frame index out of range for the current page
            NoAccessibilityDataError: the frame reported no tree
            ElementNotFoundError: nothing matched the hint or the interactive roles
        """
        ref = decode(ref_id)

        if ref.frame_index is None:
            frame, frame_index = page.main_frame, 0
        else:
            frame, frame_index = frame_at(page, ref.frame_index), ref.frame_index

        await self._wait_until_ready(frame)

        tree = await self.source.capture(frame)
        if tree is None:
            raise NoAccessibilityDataError(frame.url)

        found = find_node(tree, role_hint)
        if found is None:
            raise ElementNotFoundError(ref_id, role_hint)

        node, strategy = found
        self.logger.debug(
            "resolve:match",
            "Resolved reference",
            ref=ref_id,
            frame_index=frame_index,
            role=node.role,
            name=node.name,
            strategy=strategy,
        )
        return ResolvedElement(
            ref=ref,
            frame=frame,
            frame_index=frame_index,
            node=node,
            strategy=strategy,
        )

    async def _wait_until_ready(self, frame: Frame) -> None:
        try:
            await frame.wait_for_selector("*", timeout=self.readiness_timeout_ms)
        except PlaywrightError as e:
            # Covers TimeoutError; capture whatever is there
            self.logger.debug(
                "resolve:frame",
                "Frame not ready, proceeding",
                frame_url=frame.url,
                timeout_ms=self.readiness_timeout_ms,
                error=str(e),
            )
