"""Shared fixtures: fake pages, frames and accessibility sources."""

import os
import sys
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from browser_snapshot.types import RawAccessibilityNode
from browser_snapshot.utils.logger import BrowserSnapshotLogger


BUTTON_PAGE_TREE = {
    "role": "RootWebArea",
    "name": "",
    "children": [
        {"role": "button", "name": "Test Button", "children": [
            {"role": "StaticText", "name": "Test Button"},
        ]},
    ],
}


def make_frame(url: str = "about:blank", name: str = "", parent=None) -> MagicMock:
    frame = MagicMock(name=f"frame:{url}")
    frame.url = url
    frame.name = name
    frame.parent_frame = parent
    frame.wait_for_selector = AsyncMock(return_value=None)
    return frame


def make_page(frames: List[MagicMock], url: str = "https://example.test/", title: str = "Example") -> MagicMock:
    page = MagicMock(name="page")
    page.url = url
    page.frames = frames
    page.main_frame = frames[0]
    page.title = AsyncMock(return_value=title)
    for frame in frames:
        frame.page = page
    return page


class FakeSource:
    """AccessibilitySource returning canned trees per frame."""

    def __init__(self, trees: Optional[Dict[int, object]] = None):
        self.trees = trees or {}
        self.calls: List[object] = []

    async def capture(self, frame) -> Optional[RawAccessibilityNode]:
        self.calls.append(frame)
        tree = self.trees.get(id(frame))
        if isinstance(tree, Exception):
            raise tree
        if tree is None:
            return None
        return RawAccessibilityNode.model_validate(tree)

    def set(self, frame, tree) -> None:
        self.trees[id(frame)] = tree


@pytest.fixture
def logger() -> BrowserSnapshotLogger:
    return BrowserSnapshotLogger(MagicMock(name="structlog"), verbose=3)


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def button_page(source):
    main = make_frame("https://example.test/")
    page = make_page([main])
    source.set(main, BUTTON_PAGE_TREE)
    return page
