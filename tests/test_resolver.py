"""Tests for reference resolution."""

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from browser_snapshot.a11y.resolver import Resolver, find_node
from browser_snapshot.core.errors import (
    ElementNotFoundError,
    FrameNotFoundError,
    InvalidReferenceFormatError,
    NoAccessibilityDataError,
)

from conftest import make_frame, make_page

MOCK_TREE = {
    "role": "RootWebArea",
    "children": [
        {"role": "heading", "name": "Title"},
        {"role": "button", "name": "Click Me", "children": [
            {"role": "text", "name": "Click Me"},
        ]},
    ],
}


class TestFindNode:
    """Pure matching over a raw tree"""

    def test_find_by_role(self):
        node, strategy = find_node(MOCK_TREE, "button")
        assert (node.role, node.name, strategy) == ("button", "Click Me", "role_hint")

    def test_find_nested_role(self):
        node, _ = find_node(MOCK_TREE, "heading")
        assert node.name == "Title"

    def test_role_hint_case_insensitive(self):
        node, _ = find_node(MOCK_TREE, "BUTTON")
        assert node.role == "button"

    def test_falls_back_to_interactive_role(self):
        tree = {"role": "RootWebArea", "children": [
            {"role": "paragraph", "name": "p"},
            {"role": "link", "name": "Home"},
            {"role": "textbox", "name": "Search"},
        ]}
        node, strategy = find_node(tree, "button")
        assert (node.name, strategy) == ("Home", "interactive")

    def test_first_match_in_pre_order(self):
        tree = {"role": "RootWebArea", "children": [
            {"role": "group", "children": [{"role": "button", "name": "deep"}]},
            {"role": "button", "name": "shallow"},
        ]}
        node, _ = find_node(tree, "button")
        assert node.name == "deep"

    def test_no_match(self):
        tree = {"role": "RootWebArea", "children": [{"role": "heading", "name": "Title"}]}
        assert find_node(tree, "nonexistent") is None

    def test_empty_tree(self):
        assert find_node(None, "button") is None


class TestResolver:
    """End-to-end resolution against fake frames"""

    @pytest.mark.asyncio
    async def test_main_frame_button(self, button_page, source, logger):
        element = await Resolver(source, logger).resolve(button_page, "s1e1")
        assert element.role == "button"
        assert element.name == "Test Button"
        assert element.frame is button_page.main_frame
        assert element.frame_index == 0
        assert element.ref.frame_index is None

    @pytest.mark.asyncio
    async def test_iframe_reference(self, source, logger):
        main = make_frame("https://example.test/")
        child = make_frame("https://example.test/frame", parent=main)
        page = make_page([main, child])
        source.set(main, {"role": "RootWebArea", "children": [{"role": "button", "name": "Outer"}]})
        source.set(child, {"role": "RootWebArea", "children": [{"role": "button", "name": "Inner"}]})

        element = await Resolver(source, logger).resolve(page, "f1s1e2")
        assert element.name == "Inner"
        assert element.frame is child

        element = await Resolver(source, logger).resolve(page, "f0s1e2")
        assert element.name == "Outer"

    @pytest.mark.asyncio
    async def test_frame_out_of_range(self, button_page, source, logger):
        with pytest.raises(FrameNotFoundError):
            await Resolver(source, logger).resolve(button_page, "f1s1e1")
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_invalid_reference_propagates(self, button_page, source, logger):
        with pytest.raises(InvalidReferenceFormatError):
            await Resolver(source, logger).resolve(button_page, "button-1")

    @pytest.mark.asyncio
    async def test_readiness_timeout_does_not_abort(self, button_page, source, logger):
        button_page.main_frame.wait_for_selector.side_effect = PlaywrightTimeoutError(
            "Timeout 2000ms exceeded."
        )
        element = await Resolver(source, logger, readiness_timeout_ms=50).resolve(button_page, "s1e1")
        assert element.name == "Test Button"
        button_page.main_frame.wait_for_selector.assert_awaited_once_with("*", timeout=50)

    @pytest.mark.asyncio
    async def test_recaptures_every_call(self, button_page, source, logger):
        resolver = Resolver(source, logger)
        await resolver.resolve(button_page, "s1e1")
        await resolver.resolve(button_page, "s1e1")
        assert len(source.calls) == 2

    @pytest.mark.asyncio
    async def test_no_accessibility_data(self, button_page, source, logger):
        source.set(button_page.main_frame, None)
        with pytest.raises(NoAccessibilityDataError):
            await Resolver(source, logger).resolve(button_page, "s1e1")

    @pytest.mark.asyncio
    async def test_element_not_found(self, button_page, source, logger):
        source.set(button_page.main_frame, {"role": "RootWebArea", "children": [{"role": "heading", "name": "x"}]})
        with pytest.raises(ElementNotFoundError) as exc_info:
            await Resolver(source, logger).resolve(button_page, "s1e2", "checkbox")
        assert exc_info.value.details["role_hint"] == "checkbox"

    @pytest.mark.asyncio
    async def test_locator_uses_role_and_name(self, button_page, source, logger):
        element = await Resolver(source, logger).resolve(button_page, "s1e1")
        element.locator()
        button_page.main_frame.get_by_role.assert_called_once_with("button", name="Test Button", exact=True)
