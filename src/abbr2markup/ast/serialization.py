#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/ast/serialization.py
"""JSON serialization and deserialization for expanded trees.

The JSON form is a list of element objects wrapped in a versioned envelope::

    {"schema_version": 1, "nodes": [{"node_type": "Element", "tag": "ul", ...}]}

Examples
--------
    >>> from abbr2markup.api import expand_to_tree
    >>> json_str = tree_to_json(expand_to_tree("ul>li*2"), indent=2)
    >>> json_to_tree(json_str)[0].tag
    'ul'

"""

from __future__ import annotations

import json
import logging
from typing import Any

from abbr2markup.ast.nodes import ExpandedNode, SourceLocation

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _serialize_source_location(location: SourceLocation | None) -> dict[str, Any] | None:
    if location is None:
        return None
    return {"offset": location.offset, "length": location.length}


def node_to_dict(node: ExpandedNode) -> dict[str, Any]:
    """Convert an expanded element and its subtree to a dictionary.

    Parameters
    ----------
    node : ExpandedNode
        The element to convert

    Returns
    -------
    dict
        Dictionary representation of the element

    Examples
    --------
    >>> node_to_dict(ExpandedNode(tag="br"))["tag"]
    'br'

    """
    return {
        "node_type": "Element",
        "tag": node.tag,
        "id": node.id,
        "classes": list(node.classes),
        "attributes": dict(node.attributes),
        "text": node.text,
        "children": [node_to_dict(child) for child in node.children],
        "source_location": _serialize_source_location(node.source_location),
    }


def dict_to_node(data: dict[str, Any]) -> ExpandedNode:
    """Convert a dictionary representation back to an expanded element.

    Parameters
    ----------
    data : dict
        Dictionary produced by ``node_to_dict``

    Returns
    -------
    ExpandedNode
        Reconstructed element

    Raises
    ------
    ValueError
        If the dictionary is not an Element or lacks a tag

    """
    node_type = data.get("node_type")
    if node_type != "Element":
        raise ValueError(f"Unknown node type: {node_type}")
    if not data.get("tag"):
        raise ValueError("Element dictionary must contain a non-empty 'tag' field")

    location_data = data.get("source_location")
    location = None
    if location_data is not None:
        location = SourceLocation(offset=location_data["offset"], length=location_data.get("length", 0))

    return ExpandedNode(
        tag=data["tag"],
        classes=list(data.get("classes", [])),
        id=data.get("id"),
        attributes=dict(data.get("attributes", {})),
        text=data.get("text"),
        children=[dict_to_node(child) for child in data.get("children", [])],
        source_location=location,
    )


def tree_to_json(nodes: list[ExpandedNode], indent: int | None = None) -> str:
    """Serialize a list of expanded elements to a versioned JSON string.

    Parameters
    ----------
    nodes : list of ExpandedNode
        Top-level elements
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON text; Unicode is preserved without escapes

    """
    payload = {"schema_version": SCHEMA_VERSION, "nodes": [node_to_dict(node) for node in nodes]}
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def json_to_tree(json_str: str, validate_schema: bool = True) -> list[ExpandedNode]:
    """Deserialize a JSON string produced by ``tree_to_json``.

    Parameters
    ----------
    json_str : str
        JSON text
    validate_schema : bool, default True
        Reject schema versions other than the supported one. When False,
        a differing version is only logged.

    Returns
    -------
    list of ExpandedNode
        Top-level elements

    Raises
    ------
    ValueError
        If the payload has the wrong shape or an unsupported schema version
    json.JSONDecodeError
        If the JSON string is malformed

    """
    data = json.loads(json_str)
    if not isinstance(data, dict) or "nodes" not in data:
        raise ValueError("JSON payload must be an object with a 'nodes' list")

    schema_version = data.get("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        if validate_schema:
            raise ValueError(
                f"Unsupported schema version: {schema_version}. "
                f"This version of abbr2markup supports schema version {SCHEMA_VERSION} only."
            )
        logger.warning("Schema version %s differs from supported version %d", schema_version, SCHEMA_VERSION)

    return [dict_to_node(item) for item in data["nodes"]]


__all__ = ["node_to_dict", "dict_to_node", "tree_to_json", "json_to_tree", "SCHEMA_VERSION"]
