"""Render simplified trees as text for language-model consumption."""

import re
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

import yaml

from ..core.errors import SerializationFailureError
from ..types import RawTreeInput, SimplifiedNode
from .refs import parse_prefix
from .simplifier import FilterPolicy, TreeSimplifier, keep_structural

OutputStyle = Literal["lines", "yaml"]

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_UNESCAPES = {escaped[1]: raw for raw, escaped in _ESCAPES.items()}

_LINE = re.compile(
    r'(?P<indent> *)- (?P<role>.+?)(?: "(?P<name>(?:[^"\\]|\\.)*)")?'
    r'(?: \[(?:value="(?:[^"\\]|\\.)*"|[^\]"]*)\])*? \[ref=(?P<ref>[^\]]+)\]:?'
)


def escape_string(text: str) -> str:
    """Escape backslash, double quote, newline, carriage return and tab."""
    return "".join(_ESCAPES.get(char, char) for char in text)


def unescape_string(text: str) -> str:
    return re.sub(r"\\(.)", lambda m: _UNESCAPES.get(m.group(1), m.group(1)), text)


class Serializer:
    """
    Single renderer for simplified trees.

    ``lines`` is the canonical low-token format::

        - link "Click Me" [ref=s1e3]:
          - StaticText "Click Me" [ref=s1e4]

    ``yaml`` is a structural dump of the same data.
    """

    def __init__(self, style: OutputStyle = "lines", indent: int = 2):
        if style not in ("lines", "yaml"):
            raise ValueError(f"Unknown output style: {style}")
        self.style = style
        self.indent = indent

    def serialize(self, tree: Union[SimplifiedNode, Dict[str, Any], None]) -> str:
        """Render a tree; empty input renders as an empty string."""
        if not tree:
            return ""
        if not isinstance(tree, SimplifiedNode):
            tree = SimplifiedNode.model_validate(tree)

        if self.style == "yaml":
            return self._dump_yaml(tree)
        return "\n".join(self._render_lines(tree))

    def _render_lines(self, root: SimplifiedNode) -> List[str]:
        lines: List[str] = []
        stack: List[Tuple[SimplifiedNode, int]] = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            lines.append(" " * (self.indent * depth) + self.render_node(node))
            stack.extend((child, depth + 1) for child in reversed(node.children))
        return lines

    @staticmethod
    def render_node(node: SimplifiedNode) -> str:
        """Render one node's line without indentation."""
        line = f"- {node.role}"
        if node.name:
            line += f' "{escape_string(node.name)}"'

        attributes = []
        if node.value:
            attributes.append(f'value="{escape_string(node.value)}"')
        for flag in ("selected", "checked", "disabled", "required", "focused"):
            if getattr(node, flag):
                attributes.append(flag)
        if node.role == "heading" and node.level is not None:
            attributes.append(f"level={node.level}")
        attributes.append(f"ref={node.id}")

        line += " " + " ".join(f"[{attribute}]" for attribute in attributes)
        if node.children:
            line += ":"
        return line

    def _dump_yaml(self, tree: SimplifiedNode) -> str:
        try:
            return yaml.dump(
                tree.to_dict(),
                indent=self.indent,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
                width=float("inf"),
            )
        except yaml.YAMLError as e:
            raise SerializationFailureError(self.style, str(e)) from e


def parse_lines(text: str, indent: int = 2) -> List[Tuple[int, str, Optional[str], str]]:
    """
    Read line-style output back into ``(depth, role, name, ref)`` tuples.

    Only meant for checking rendered output.
    """
    entries = []
    for line in text.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        match = _LINE.fullmatch(line)
        if not match:
            raise ValueError(f"Unparseable snapshot line: {line!r}")
        name = match.group("name")
        entries.append((
            len(match.group("indent")) // indent,
            match.group("role"),
            unescape_string(name) if name is not None else None,
            match.group("ref"),
        ))
    return entries


def format_accessibility_tree(
    tree: RawTreeInput,
    frame_prefix: str = "s1",
    style: OutputStyle = "lines",
    policy: FilterPolicy = keep_structural,
) -> str:
    """Simplify a raw tree under ``frame_prefix`` (``s1``, ``f0s1``...) and render it."""
    frame_index, snapshot_index = parse_prefix(frame_prefix)
    simplified = TreeSimplifier(policy).simplify(tree, frame_index, snapshot_index)
    return Serializer(style).serialize(simplified)
