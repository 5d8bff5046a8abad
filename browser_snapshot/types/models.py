"""Core type definitions for BrowserSnapshot."""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


MatchStrategy = Literal["role_hint", "interactive"]


class RawAccessibilityNode(BaseModel):
    """
    A node of the accessibility tree exactly as the host reported it.

    Produced fresh on every capture and never mutated. Unknown keys are
    ignored so Puppeteer-style dicts and CDP-derived dicts both validate.
    """
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    name: Optional[str] = None
    value: Optional[str] = None
    description: Optional[str] = None
    selected: Optional[bool] = None
    checked: Optional[bool] = None
    disabled: Optional[bool] = None
    required: Optional[bool] = None
    focused: Optional[bool] = None
    level: Optional[int] = None
    children: List['RawAccessibilityNode'] = Field(default_factory=list)

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_value(cls, v: Any) -> Any:
        # Sliders and spinbuttons report numeric values
        if isinstance(v, bool):
            return str(v).lower()
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("checked", mode="before")
    @classmethod
    def _tristate_checked(cls, v: Any) -> Any:
        if v == "mixed":
            return True
        return v

    @field_validator("children", mode="before")
    @classmethod
    def _none_children(cls, v: Any) -> Any:
        return v or []


class SimplifiedNode(BaseModel):
    """A retained node of a simplified tree, addressed by its reference ID."""

    id: str
    role: str
    name: Optional[str] = None
    value: Optional[str] = None
    description: Optional[str] = None
    selected: Optional[bool] = None
    checked: Optional[bool] = None
    disabled: Optional[bool] = None
    required: Optional[bool] = None
    focused: Optional[bool] = None
    level: Optional[int] = None
    children: List['SimplifiedNode'] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with only the attributes that are present."""
        data: Dict[str, Any] = {"id": self.id, "role": self.role}
        for key in ("name", "value", "description"):
            text = getattr(self, key)
            if text:
                data[key] = text
        for key in ("selected", "checked", "disabled", "required", "focused"):
            if getattr(self, key):
                data[key] = True
        if self.level is not None:
            data["level"] = self.level
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def iter_nodes(self):
        """Yield this node and its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class ReferenceId(BaseModel):
    """Decoded element reference: frame, snapshot generation and element position."""
    model_config = ConfigDict(frozen=True)

    frame_index: Optional[int] = Field(default=None, ge=0)
    snapshot_index: int = Field(ge=1)
    element_index: int = Field(ge=1)

    def __str__(self) -> str:
        from ..a11y.refs import encode
        return encode(self.frame_index, self.snapshot_index, self.element_index)


class FrameTree(BaseModel):
    """A frame handle paired with the raw tree captured from it."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    frame_index: int
    frame: Any
    tree: RawAccessibilityNode


class ResolvedElement(BaseModel):
    """
    Tree metadata for the node a reference ID was re-matched to.

    Re-matching is best effort: the node is the first one with the hinted
    (or any interactive) role in the freshly captured tree, which is not
    guaranteed to be the node the reference was issued for.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ref: ReferenceId
    frame: Any
    frame_index: int
    node: RawAccessibilityNode
    strategy: MatchStrategy

    @property
    def role(self) -> Optional[str]:
        return self.node.role

    @property
    def name(self) -> Optional[str]:
        return self.node.name

    def locator(self) -> Any:
        """
        Build a Playwright role locator for the matched node.

        Several elements may share the same role and name.
        """
        if self.node.name:
            return self.frame.get_by_role(self.node.role, name=self.node.name, exact=True)
        return self.frame.get_by_role(self.node.role)


class TextContent(BaseModel):
    """Text block of a tool result."""
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result handed back to the tool dispatch layer."""
    content: List[TextContent] = Field(default_factory=list)
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> 'ToolResult':
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def error(cls, text: str) -> 'ToolResult':
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)


RawTreeInput = Union[RawAccessibilityNode, Dict[str, Any], None]


# Update forward references
RawAccessibilityNode.model_rebuild()
SimplifiedNode.model_rebuild()
