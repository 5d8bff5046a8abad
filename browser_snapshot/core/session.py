"""SnapshotSession: explicit context for capture and resolve calls."""

from typing import List, Optional

from playwright.async_api import Page

from ..a11y.capture import AccessibilitySource, CDPAccessibilitySource
from ..a11y.frames import capture_frame_trees
from ..a11y.resolver import Resolver
from ..a11y.serializer import Serializer
from ..a11y.simplifier import FILTER_POLICIES, TreeSimplifier
from ..cdp import CDPSessionPool
from ..types import ResolvedElement
from ..utils.logger import BrowserSnapshotLogger
from .config import SnapshotConfig
from .errors import NoAccessibilityDataError

NO_PAGE_MESSAGE = "Error: No page provided"


class SnapshotSession:
    """
    Holds everything a capture or resolve call needs.

    Several sessions can run side by side; none of them keeps trees between
    calls. The only state is the CDP session pool.
    """

    def __init__(
        self,
        config: Optional[SnapshotConfig] = None,
        logger: Optional[BrowserSnapshotLogger] = None,
        source: Optional[AccessibilitySource] = None,
    ):
        self.config = config or SnapshotConfig()
        base_logger = logger or BrowserSnapshotLogger.create(self.config.verbose)
        self.logger = base_logger.child(component="snapshot")
        self.pool = CDPSessionPool(self.logger)
        self.source = source or CDPAccessibilitySource(
            self.pool,
            self.logger,
            include_ignored=self.config.include_ignored,
        )
        self.simplifier = TreeSimplifier(FILTER_POLICIES[self.config.filter_policy])
        self.serializer = Serializer(self.config.output_style, self.config.indent)
        self.resolver = Resolver(
            self.source,
            self.logger,
            readiness_timeout_ms=self.config.readiness_timeout_ms,
        )

    async def __aenter__(self) -> 'SnapshotSession':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def capture_snapshot(self, page: Optional[Page]) -> str:
        """
        Render the main frame's tree.

        Returns:
            Serialized tree, or ``"Error: No page provided"`` when page is None

        Raises:
            NoAccessibilityDataError: the main frame reported no tree
        """
        if page is None:
            return NO_PAGE_MESSAGE

        tree = await self.source.capture(page.main_frame)
        if tree is None:
            raise NoAccessibilityDataError(page.url)

        simplified = self.simplifier.simplify(tree, None, self.config.snapshot_index)
        text = self.serializer.serialize(simplified)
        self.logger.info(
            "snapshot:capture",
            "Generated snapshot",
            url=page.url,
            size=len(text),
        )
        return text

    async def capture_all_frames(self, page: Optional[Page]) -> str:
        """
        Render every frame that could be captured, in frame order.

        Each block starts with a ``# frame <i>: <url>`` comment and its IDs
        carry the ``f<i>`` segment.
        """
        if page is None:
            return NO_PAGE_MESSAGE

        frame_trees = await capture_frame_trees(page, self.source, self.logger)
        if not frame_trees:
            raise NoAccessibilityDataError(page.url)

        blocks: List[str] = []
        for frame_tree in frame_trees:
            simplified = self.simplifier.simplify(
                frame_tree.tree,
                frame_tree.frame_index,
                self.config.snapshot_index,
            )
            body = self.serializer.serialize(simplified).rstrip("\n")
            header = f"# frame {frame_tree.frame_index}: {frame_tree.frame.url}"
            blocks.append(f"{header}\n{body}" if body else header)

        self.logger.info(
            "snapshot:capture",
            "Generated multi-frame snapshot",
            url=page.url,
            frames=len(frame_trees),
        )
        return "\n".join(blocks)

    async def resolve(self, page: Page, ref_id: str, role_hint: Optional[str] = None) -> ResolvedElement:
        """Resolve ``ref_id``; the hint defaults to ``config.default_role_hint``."""
        if role_hint is None:
            role_hint = self.config.default_role_hint
        return await self.resolver.resolve(page, ref_id, role_hint)

    async def close(self) -> None:
        """Detach CDP sessions opened by this session."""
        await self.pool.cleanup()
