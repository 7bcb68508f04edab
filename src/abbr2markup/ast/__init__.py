#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/ast/__init__.py
"""Tree model for abbreviation expansion.

The module consists of several components:

- nodes: ``AbbreviationNode`` (parsed form) and ``ExpandedNode`` (final form)
- visitors: visitor base classes and a canonical abbreviation formatter
- builder: turns resolved abbreviation nodes into the expanded tree
- serialization: JSON conversion of expanded trees

Examples
--------
    >>> from abbr2markup.ast import ExpandedNode
    >>> from abbr2markup.renderers.markup import MarkupRenderer
    >>> MarkupRenderer().render_to_string([ExpandedNode(tag="p", text="Hi")])
    '<p>Hi</p>'

"""

from abbr2markup.ast.builder import build_tree
from abbr2markup.ast.nodes import (
    AbbreviationNode,
    ExpandedNode,
    Node,
    SourceLocation,
    count_leaves,
    iter_expanded,
)
from abbr2markup.ast.serialization import dict_to_node, json_to_tree, node_to_dict, tree_to_json
from abbr2markup.ast.visitors import AbbreviationFormatter, AbbreviationVisitor, NodeVisitor

__all__ = [
    "AbbreviationFormatter",
    "AbbreviationNode",
    "AbbreviationVisitor",
    "ExpandedNode",
    "Node",
    "NodeVisitor",
    "SourceLocation",
    "build_tree",
    "count_leaves",
    "dict_to_node",
    "iter_expanded",
    "json_to_tree",
    "node_to_dict",
    "tree_to_json",
]
