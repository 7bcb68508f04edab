#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/ast/builder.py
"""Materialize the final expanded tree.

The builder is the last tree-shaped stage: it takes abbreviation nodes that
are already expanded (multiplier 1, placeholders substituted) and resolved
(every element has a tag name), and produces ``ExpandedNode`` elements.
Group nodes disappear here; their members are spliced in order into the
child list of the enclosing element.

Void elements (``br``, ``img``, ...) cannot hold content, so any children
or text given to them are dropped with a warning.

"""

from __future__ import annotations

import logging

from abbr2markup.ast.nodes import AbbreviationNode, ExpandedNode
from abbr2markup.constants import VOID_TAGS

logger = logging.getLogger(__name__)


def build_tree(nodes: list[AbbreviationNode]) -> list[ExpandedNode]:
    """Build the expanded tree for a list of sibling nodes.

    Parameters
    ----------
    nodes : list of AbbreviationNode
        Expanded, resolved sibling nodes

    Returns
    -------
    list of ExpandedNode
        Elements in document order, with groups flattened away

    Raises
    ------
    ValueError
        If an element still lacks a tag name or carries a multiplier,
        meaning an earlier stage was skipped

    """
    elements: list[ExpandedNode] = []
    for node in nodes:
        if node.multiplier != 1:
            raise ValueError(f"Node at position {node.position} was not expanded (multiplier {node.multiplier})")
        if node.is_group:
            elements.extend(build_tree(node.children))
            continue
        if not node.tag_name:
            raise ValueError(f"Node at position {node.position} has no resolved tag name")
        elements.append(_build_element(node))
    return elements


def _build_element(node: AbbreviationNode) -> ExpandedNode:
    assert node.tag_name is not None
    children = build_tree(node.children)
    text = node.text

    if node.tag_name.lower() in VOID_TAGS and (children or text):
        logger.warning(
            "Dropping content of void element <%s> at position %d (%d child element(s)%s)",
            node.tag_name,
            node.position,
            len(children),
            ", text" if text else "",
        )
        children = []
        text = None

    return ExpandedNode(
        tag=node.tag_name,
        classes=list(node.classes),
        id=node.id,
        attributes=dict(node.attributes),
        text=text,
        children=children,
        source_location=node.source_location,
    )
