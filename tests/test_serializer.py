"""Tests for snapshot text rendering."""

import pytest
import yaml

from browser_snapshot.a11y.serializer import (
    Serializer,
    escape_string,
    format_accessibility_tree,
    parse_lines,
)
from browser_snapshot.a11y.simplifier import TreeSimplifier
from browser_snapshot.core.errors import SerializationFailureError
from browser_snapshot.types import SimplifiedNode

MOCK_NODE = {
    "role": "WebArea",
    "name": "Document",
    "children": [
        {"role": "heading", "name": "Main Heading", "level": 1},
        {"role": "link", "name": "Click Me", "children": [
            {"role": "StaticText", "name": "Click Me"},
        ]},
    ],
}


class TestLineStyle:
    """Canonical line format"""

    def test_formats_tree(self):
        text = format_accessibility_tree(MOCK_NODE)
        assert text.splitlines() == [
            '- WebArea "Document" [ref=s1e1]:',
            '  - heading "Main Heading" [level=1] [ref=s1e2]',
            '  - link "Click Me" [ref=s1e3]:',
            '    - StaticText "Click Me" [ref=s1e4]',
        ]

    def test_one_ref_per_retained_node(self):
        simplified = TreeSimplifier().simplify(MOCK_NODE)
        text = Serializer().serialize(simplified)
        assert text.count("ref=") == 4
        for node in simplified.iter_nodes():
            assert text.count(f"[ref={node.id}]") == 1

    def test_attribute_order(self):
        node = SimplifiedNode(
            id="s1e9", role="option", name="Pick", value="v",
            selected=True, checked=True, disabled=True, required=True, focused=True,
        )
        assert Serializer.render_node(node) == (
            '- option "Pick" [value="v"] [selected] [checked] [disabled] '
            '[required] [focused] [ref=s1e9]'
        )

    def test_level_rendered_for_headings_only(self):
        node = SimplifiedNode(id="s1e1", role="row", level=3)
        assert "level" not in Serializer.render_node(node)

    def test_no_colon_without_children(self):
        assert not Serializer.render_node(SimplifiedNode(id="s1e1", role="button")).endswith(":")

    def test_custom_frame_prefix(self):
        assert "[ref=f0s1e1]" in format_accessibility_tree(MOCK_NODE, "f0s1")

    def test_custom_indent(self):
        text = Serializer(indent=4).serialize(TreeSimplifier().simplify(MOCK_NODE))
        assert text.splitlines()[1].startswith('    - heading')


class TestEscaping:
    """Quoting of names and values"""

    def test_escape_rules(self):
        assert escape_string('a\\b"c\nd\re\tf') == 'a\\\\b\\"c\\nd\\re\\tf'

    def test_leaves_other_characters(self):
        assert escape_string("naïve [x] 'y'") == "naïve [x] 'y'"

    def test_escaped_name_in_output(self):
        text = format_accessibility_tree({"role": "textbox", "name": 'Say "hi"\n', "value": "a\tb"})
        assert text == '- textbox "Say \\"hi\\"\\n" [value="a\\tb"] [ref=s1e1]'


class TestEmptyInput:
    """Edge cases"""

    @pytest.mark.parametrize("tree", [None, {}])
    def test_empty_renders_empty(self, tree):
        assert format_accessibility_tree(tree) == ""
        assert Serializer().serialize(tree) == ""
        assert Serializer("yaml").serialize(tree) == ""


class TestRoundTrip:
    """Rendered text re-reads into the same triples"""

    def test_parse_lines(self):
        tree = {
            "role": "WebArea", "name": "Doc",
            "children": [
                {"role": "generic container", "children": [
                    {"role": "button", "name": 'Tricky "name" [ref=s9e9]', "value": "x]y"},
                ]},
                {"role": "textbox", "name": "multi\nline\\path", "focused": True},
            ],
        }
        simplified = TreeSimplifier().simplify(tree)
        parsed = parse_lines(Serializer().serialize(simplified))
        expected = []
        stack = [(simplified, 0)]
        while stack:
            node, depth = stack.pop()
            expected.append((depth, node.role, node.name, node.id))
            stack.extend((c, depth + 1) for c in reversed(node.children))
        assert parsed == expected


class TestYamlStyle:
    """Structural dump"""

    def test_yaml_dump(self):
        text = format_accessibility_tree(MOCK_NODE, "f0s1", style="yaml")
        assert "role: WebArea" in text
        assert "name: Document" in text
        assert "id: f0s1e1" in text
        data = yaml.safe_load(text)
        assert data["children"][0] == {"id": "f0s1e2", "role": "heading", "name": "Main Heading", "level": 1}

    def test_yaml_error_wrapped(self, monkeypatch):
        def boom(*args, **kwargs):
            raise yaml.YAMLError("encoder exploded")

        monkeypatch.setattr(yaml, "dump", boom)
        with pytest.raises(SerializationFailureError) as exc_info:
            Serializer("yaml").serialize(SimplifiedNode(id="s1e1", role="button"))
        assert exc_info.value.error_code == "SERIALIZATION_FAILURE"

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            Serializer("xml")
