#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/ast/nodes.py
"""Node classes for abbreviation trees.

This module defines the two tree shapes the pipeline works with:

- ``AbbreviationNode``: one element or group as written in the
  abbreviation, before repetition and implicit-tag resolution. Tag name
  may be missing, strings may hold numbering placeholders, and
  ``multiplier`` may be greater than one.
- ``ExpandedNode``: one concrete element in the final tree. Every field
  is resolved; the tag is never empty.

Both trees are strictly owned: a parent holds an ordered list of children
and no node refers back to its parent. Ancestor context is passed down as
a function argument by the passes that need it.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Optional


@dataclass(frozen=True)
class SourceLocation:
    """Location of a node's construct in the abbreviation string.

    Parameters
    ----------
    offset : int
        0-based offset of the first character of the element or group
    length : int, default = 0
        Number of characters the construct spans

    """

    offset: int
    length: int = 0


class Node(ABC):
    """Base class for all tree nodes.

    All nodes support the visitor pattern for traversal and rendering.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass
class AbbreviationNode(Node):
    """One element or group of a parsed abbreviation.

    Parameters
    ----------
    tag_name : str or None, default = None
        Explicit tag name; None means implicit, to be resolved from context
    classes : list of str, default = empty list
        Class templates in source order
    id : str or None, default = None
        Id template
    attributes : dict, default = empty dict
        Attribute name to value template; None marks a boolean attribute.
        Insertion ordered, last occurrence of a name wins
    text : str or None, default = None
        Text template from a ``{...}`` block
    multiplier : int, default = 1
        Number of replicas of this node and its subtree
    numbering_start : int, default = 1
        Number shown for the first replica
    numbering_step : int, default = 1
        Increment between consecutive replicas
    numbering_reversed : bool, default = False
        Count replicas from the last one down
    children : list of AbbreviationNode, default = empty list
        Nested nodes, from ``>`` or from group contents
    is_group : bool, default = False
        True for a ``(...)`` group; groups carry no tag or attributes and
        are flattened into their parent when the tree is built
    source_location : SourceLocation or None, default = None
        Where the node starts in the abbreviation

    """

    tag_name: Optional[str] = None
    classes: list[str] = field(default_factory=list)
    id: Optional[str] = None
    attributes: dict[str, Optional[str]] = field(default_factory=dict)
    text: Optional[str] = None
    multiplier: int = 1
    numbering_start: int = 1
    numbering_step: int = 1
    numbering_reversed: bool = False
    children: list[AbbreviationNode] = field(default_factory=list)
    is_group: bool = False
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_abbreviation_node method

        Returns
        -------
        Any
            Result from visitor.visit_abbreviation_node(self)

        """
        return visitor.visit_abbreviation_node(self)

    @property
    def position(self) -> int:
        """Offset of this node in the abbreviation, or 0 when unknown."""
        return self.source_location.offset if self.source_location else 0

    def number_for(self, index: int, count: int) -> int:
        """Return the displayed number for a 1-based replica index.

        Parameters
        ----------
        index : int
            Replica index in ``[1, count]``
        count : int
            Total number of replicas

        Returns
        -------
        int
            ``numbering_start + (i - 1) * numbering_step`` where ``i`` is
            ``index``, or ``count + 1 - index`` when numbering is reversed

        """
        effective = count + 1 - index if self.numbering_reversed else index
        return self.numbering_start + (effective - 1) * self.numbering_step

    def copy_with(self, **changes: Any) -> AbbreviationNode:
        """Return a shallow copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass
class ExpandedNode(Node):
    """A concrete element of the expanded tree.

    Parameters
    ----------
    tag : str
        Resolved tag name, never empty
    classes : list of str, default = empty list
        Class names with numbering substituted
    id : str or None, default = None
        Element id
    attributes : dict, default = empty dict
        Attribute values, None for boolean attributes
    text : str or None, default = None
        Text content
    children : list of ExpandedNode, default = empty list
        Child elements in order
    source_location : SourceLocation or None, default = None
        Offset of the abbreviation element this node came from

    """

    tag: str
    classes: list[str] = field(default_factory=list)
    id: Optional[str] = None
    attributes: dict[str, Optional[str]] = field(default_factory=dict)
    text: Optional[str] = None
    children: list[ExpandedNode] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        """Reject an empty tag name."""
        if not self.tag:
            raise ValueError("ExpandedNode tag must be a non-empty string")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this element.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_element method

        Returns
        -------
        Any
            Result from visitor.visit_element(self)

        """
        return visitor.visit_element(self)

    @property
    def is_leaf(self) -> bool:
        """True when the element has no child elements."""
        return not self.children


def count_leaves(nodes: list[ExpandedNode]) -> int:
    """Count childless elements across a forest of expanded nodes.

    Parameters
    ----------
    nodes : list of ExpandedNode
        Top-level nodes

    Returns
    -------
    int
        Number of leaf elements

    """
    total = 0
    for node in nodes:
        total += count_leaves(node.children) if node.children else 1
    return total


def iter_expanded(nodes: list[ExpandedNode]):  # type: ignore[no-untyped-def]
    """Yield every expanded node depth-first in document order."""
    for node in nodes:
        yield node
        yield from iter_expanded(node.children)
