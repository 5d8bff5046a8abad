"""Filter and index a raw accessibility tree into a serializable tree."""

from typing import Callable, Dict, List, Optional

from ..types import RawAccessibilityNode, RawTreeInput, SimplifiedNode
from .refs import encode

FilterPolicy = Callable[[RawAccessibilityNode], bool]

# Layout roles kept even without a name because they carry document structure
STRUCTURAL_ROLES = frozenset({"generic container", "group", "paragraph", "list", "listitem"})

_FLAGS = ("selected", "checked", "disabled", "required", "focused")


def keep_structural(node: RawAccessibilityNode) -> bool:
    """Drop nodes that have no role, no name and no structural role."""
    if node.role in STRUCTURAL_ROLES:
        return True
    return bool(node.role) or bool(node.name)


def keep_all(node: RawAccessibilityNode) -> bool:
    """Retain every node, including unnamed role-less ones."""
    return True


FILTER_POLICIES: Dict[str, FilterPolicy] = {
    "structural": keep_structural,
    "all": keep_all,
}


def to_raw_node(tree: RawTreeInput) -> Optional[RawAccessibilityNode]:
    """Accept a model or a plain dict; ``None`` and ``{}`` mean no tree."""
    if tree is None:
        return None
    if isinstance(tree, RawAccessibilityNode):
        return tree
    if not tree:
        return None
    return RawAccessibilityNode.model_validate(tree)


class TreeSimplifier:
    """
    Builds a SimplifiedNode tree from one frame's raw tree.

    Element indices are 1-based positions in the pre-order walk of the raw
    tree. Dropped nodes still consume an index, so the IDs of retained nodes
    do not depend on which policy ran. An ID is therefore a whole-tree
    ordinal, not a position among siblings.
    """

    def __init__(self, policy: FilterPolicy = keep_structural):
        self.policy = policy

    def simplify(
        self,
        tree: RawTreeInput,
        frame_index: Optional[int] = None,
        snapshot_index: int = 1,
    ) -> Optional[SimplifiedNode]:
        """
        Simplify a raw tree.

        Args:
            tree: Raw root node (model or dict)
            frame_index: Frame index for the ``f`` segment, ``None`` for the main frame
            snapshot_index: Snapshot generation

        Returns:
            The simplified root, or None when the root itself is filtered out
        """
        root = to_raw_node(tree)
        if root is None:
            return None

        counter = [0]
        nodes = self._visit(root, frame_index, snapshot_index, counter)
        if len(nodes) == 1 and self.policy(root):
            return nodes[0]
        return None

    def _visit(
        self,
        raw: RawAccessibilityNode,
        frame_index: Optional[int],
        snapshot_index: int,
        counter: List[int],
    ) -> List[SimplifiedNode]:
        counter[0] += 1
        element_index = counter[0]

        children: List[SimplifiedNode] = []
        for child in raw.children:
            children.extend(self._visit(child, frame_index, snapshot_index, counter))

        if not self.policy(raw):
            # Splice retained descendants into the parent's child list
            return children

        node = SimplifiedNode(
            id=encode(frame_index, snapshot_index, element_index),
            role=raw.role or "unknown",
            children=children,
        )
        if raw.name:
            node.name = raw.name
        if raw.value:
            node.value = raw.value
        if raw.description:
            node.description = raw.description
        for flag in _FLAGS:
            if getattr(raw, flag):
                setattr(node, flag, True)
        if raw.role == "heading" and raw.level is not None:
            node.level = raw.level
        return [node]
