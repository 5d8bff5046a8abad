"""Raw accessibility tree capture over the Chrome DevTools Protocol."""

from typing import Any, Dict, List, Optional, Protocol

from playwright.async_api import Frame
from pydantic import ValidationError

from ..cdp import CDPSessionPool, find_frame_id, send
from ..core.errors import NoAccessibilityDataError
from ..types import RawAccessibilityNode
from ..utils.logger import BrowserSnapshotLogger

_BOOLEAN_STATES = ("selected", "disabled", "required", "focused")


class AccessibilitySource(Protocol):
    """Anything that can produce a fresh raw tree for a frame."""

    async def capture(self, frame: Frame) -> Optional[RawAccessibilityNode]:
        ...


def _ax_value(node: Dict[str, Any], key: str) -> Any:
    return (node.get(key) or {}).get("value")


def ax_node_to_dict(node: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert one CDP ``AXNode`` into RawAccessibilityNode fields.

    Children are attached by the caller.
    """
    data: Dict[str, Any] = {
        "role": _ax_value(node, "role") or None,
        "name": _ax_value(node, "name") or None,
        "value": _ax_value(node, "value"),
        "description": _ax_value(node, "description") or None,
    }
    if data["value"] == "":
        data["value"] = None

    for prop in node.get("properties", []):
        prop_name = prop.get("name")
        prop_value = (prop.get("value") or {}).get("value")
        if prop_name in _BOOLEAN_STATES:
            data[prop_name] = bool(prop_value) or None
        elif prop_name == "checked":
            # tristate: "true" | "false" | "mixed"
            data["checked"] = True if prop_value in ("true", "mixed", True) else None
        elif prop_name == "level" and prop_value is not None:
            try:
                data["level"] = int(prop_value)
            except (TypeError, ValueError):
                # Non-numeric levels are omitted
                pass
    return data


def build_raw_tree(ax_nodes: List[Dict[str, Any]], include_ignored: bool = True) -> Optional[RawAccessibilityNode]:
    """
    Rebuild the hierarchy of a flat ``Accessibility.getFullAXTree`` node list.

    Child order follows ``childIds``; nodes listed only through ``parentId``
    are appended in list order. Ignored nodes are spliced out when
    ``include_ignored`` is false.
    """
    if not ax_nodes:
        return None

    by_id = {node["nodeId"]: node for node in ax_nodes if "nodeId" in node}
    children: Dict[str, List[str]] = {}
    root_id = None
    for node in ax_nodes:
        node_id = node.get("nodeId")
        if node_id is None:
            continue
        children[node_id] = [cid for cid in node.get("childIds", []) if cid in by_id]
        if root_id is None and not node.get("parentId"):
            root_id = node_id
    for node in ax_nodes:
        parent_id = node.get("parentId")
        node_id = node.get("nodeId")
        if parent_id in children and node_id not in children[parent_id]:
            children[parent_id].append(node_id)

    if root_id is None:
        return None

    def expand(node_id: str, seen: set) -> List[Dict[str, Any]]:
        if node_id in seen:
            return []
        seen.add(node_id)
        node = by_id[node_id]
        kids: List[Dict[str, Any]] = []
        for child_id in children.get(node_id, []):
            kids.extend(expand(child_id, seen))
        if node.get("ignored") and not include_ignored:
            return kids
        data = ax_node_to_dict(node)
        data["children"] = kids
        return [data]

    expanded = expand(root_id, set())
    if len(expanded) != 1:
        return None
    return RawAccessibilityNode.model_validate(expanded[0])


class CDPAccessibilitySource:
    """
    Captures one frame's full accessibility tree with ``Accessibility.getFullAXTree``.

    Out-of-process frames are queried through their own session, others
    through the page session with an explicit ``frameId``.
    """

    def __init__(
        self,
        pool: CDPSessionPool,
        logger: BrowserSnapshotLogger,
        include_ignored: bool = True,
    ):
        self.pool = pool
        self.logger = logger
        self.include_ignored = include_ignored

    async def capture(self, frame: Frame) -> Optional[RawAccessibilityNode]:
        page = frame.page
        session = await self.pool.get_session(page, frame)

        params: Dict[str, Any] = {}
        if not self.pool.owns_separate_session(page, frame):
            frame_id = await find_frame_id(session, frame)
            if frame_id is None:
                self.logger.warn(
                    "capture:frame",
                    "Frame not present in CDP frame tree",
                    frame_url=frame.url,
                )
                return None
            params["frameId"] = frame_id

        # Left enabled: sibling frames may be mid-capture on the same session
        await send(session, "Accessibility.enable")
        response = await send(session, "Accessibility.getFullAXTree", params)

        ax_nodes = response.get("nodes", [])
        self.logger.debug(
            "capture:frame",
            "Captured accessibility tree",
            frame_url=frame.url,
            node_count=len(ax_nodes),
        )
        try:
            return build_raw_tree(ax_nodes, self.include_ignored)
        except ValidationError as e:
            raise NoAccessibilityDataError(frame.url, f"malformed tree: {e.error_count()} invalid field(s)") from e
