#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for JSON serialization of expanded trees."""

import json

import pytest

from abbr2markup.api import expand_to_tree
from abbr2markup.ast import ExpandedNode, SourceLocation
from abbr2markup.ast.serialization import SCHEMA_VERSION, dict_to_node, json_to_tree, node_to_dict, tree_to_json


@pytest.mark.unit
class TestNodeToDict:
    """Tests for node_to_dict and dict_to_node."""

    def test_element_fields(self) -> None:
        """Test the dictionary layout of an element."""
        node = ExpandedNode(
            tag="a",
            classes=["btn"],
            id="go",
            attributes={"href": "/", "download": None},
            text="Go",
            source_location=SourceLocation(offset=4, length=3),
        )

        assert node_to_dict(node) == {
            "node_type": "Element",
            "tag": "a",
            "id": "go",
            "classes": ["btn"],
            "attributes": {"href": "/", "download": None},
            "text": "Go",
            "children": [],
            "source_location": {"offset": 4, "length": 3},
        }

    def test_restores_nested_tree(self) -> None:
        """Test that dict_to_node rebuilds children and locations."""
        original = expand_to_tree("ul>li.x$*2")[0]

        assert dict_to_node(node_to_dict(original)) == original

    def test_unknown_node_type(self) -> None:
        """Test that non-element dictionaries are rejected."""
        with pytest.raises(ValueError, match="Unknown node type"):
            dict_to_node({"node_type": "Text", "tag": "p"})

    def test_missing_tag(self) -> None:
        """Test that an element without a tag is rejected."""
        with pytest.raises(ValueError, match="non-empty 'tag'"):
            dict_to_node({"node_type": "Element"})


@pytest.mark.unit
class TestTreeJson:
    """Tests for the versioned JSON envelope."""

    def test_envelope(self) -> None:
        """Test the schema version and node list."""
        data = json.loads(tree_to_json(expand_to_tree("p+p")))

        assert data["schema_version"] == SCHEMA_VERSION
        assert [node["tag"] for node in data["nodes"]] == ["p", "p"]

    def test_unicode_kept(self) -> None:
        """Test that non-ASCII text is written as-is."""
        assert "héllo" in tree_to_json(expand_to_tree("p{héllo}"))

    def test_indent(self) -> None:
        """Test indented output."""
        assert "\n  " in tree_to_json(expand_to_tree("p"), indent=2)
        assert "\n" not in tree_to_json(expand_to_tree("p"))

    def test_unsupported_schema_version(self) -> None:
        """Test that an unknown schema version is rejected by default."""
        payload = json.dumps({"schema_version": 99, "nodes": []})

        with pytest.raises(ValueError, match="Unsupported schema version"):
            json_to_tree(payload)
        assert json_to_tree(payload, validate_schema=False) == []

    def test_wrong_shape(self) -> None:
        """Test that a payload without nodes is rejected."""
        with pytest.raises(ValueError):
            json_to_tree("[]")
