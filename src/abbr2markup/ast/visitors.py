#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/ast/visitors.py
"""Visitor pattern implementation for tree traversal.

Visitors separate algorithms (rendering, formatting, inspection) from the
node classes. ``NodeVisitor`` walks expanded trees; ``AbbreviationVisitor``
walks parsed abbreviation trees.

Examples
--------
Count elements in an expanded tree:

    >>> class ElementCounter(NodeVisitor):
    ...     def __init__(self):
    ...         self.count = 0
    ...
    ...     def visit_element(self, node):
    ...         self.count += 1
    ...         for child in node.children:
    ...             child.accept(self)

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from abbr2markup.ast.nodes import AbbreviationNode, ExpandedNode


class NodeVisitor(ABC):
    """Abstract base class for visitors over expanded trees."""

    @abstractmethod
    def visit_element(self, node: ExpandedNode) -> Any:
        """Visit an ExpandedNode.

        Parameters
        ----------
        node : ExpandedNode
            The element to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass


class AbbreviationVisitor(ABC):
    """Abstract base class for visitors over parsed abbreviation trees."""

    @abstractmethod
    def visit_abbreviation_node(self, node: AbbreviationNode) -> Any:
        """Visit an AbbreviationNode (element or group).

        Parameters
        ----------
        node : AbbreviationNode
            The node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass


class AbbreviationFormatter(AbbreviationVisitor):
    """Format a parsed abbreviation tree back into canonical abbreviation text.

    The canonical form orders modifiers as tag, id, classes, attributes,
    text, multiplier, writes siblings with ``+`` and children with ``>``,
    and wraps a child list of more than one node in a group. An element
    with children that is followed by a sibling is wrapped in a group too. Numbering
    modifiers are written as an ``@`` suffix on the first placeholder.

    Examples
    --------
        >>> from abbr2markup.parsers import parse_abbreviation
        >>> AbbreviationFormatter().format(parse_abbreviation("ul>li.a$*2"))
        'ul>li.a$*2'

    """

    def format(self, nodes: list[AbbreviationNode]) -> str:
        """Return the canonical text for a list of sibling nodes."""
        parts = []
        for index, node in enumerate(nodes):
            text = node.accept(self)
            # A following sibling would otherwise attach to the last descendant
            if node.children and not node.is_group and index < len(nodes) - 1:
                text = f"({text})"
            parts.append(text)
        return "+".join(parts)

    def visit_abbreviation_node(self, node: AbbreviationNode) -> str:
        """Return the canonical text for one node and its subtree."""
        if node.is_group:
            head = f"({self.format(node.children)})"
        else:
            head = self._format_element(node)
        if node.multiplier > 1:
            head += f"*{node.multiplier}"
        if node.children and not node.is_group:
            inner = self.format(node.children)
            if len(node.children) > 1:
                inner = f"({inner})"
            head += f">{inner}"
        return head

    def _format_element(self, node: AbbreviationNode) -> str:
        parts = [node.tag_name or ""]
        if node.id is not None:
            parts.append(f"#{node.id}")
        parts.extend(f".{name}" for name in node.classes)
        if node.attributes:
            pairs = []
            for name, value in node.attributes.items():
                if value is None:
                    pairs.append(name)
                elif value == "" or any(ch.isspace() or ch == "]" for ch in value):
                    pairs.append(f'{name}="{value}"')
                else:
                    pairs.append(f"{name}={value}")
            parts.append(f"[{' '.join(pairs)}]")
        if node.text is not None:
            parts.append(f"{{{node.text}}}")
        text = "".join(parts)
        return self._with_numbering_modifier(node, text)

    @staticmethod
    def _with_numbering_modifier(node: AbbreviationNode, text: str) -> str:
        if node.numbering_start == 1 and node.numbering_step == 1 and not node.numbering_reversed:
            return text
        index = text.find("$")
        if index < 0:
            return text
        end = index
        while end < len(text) and text[end] == "$":
            end += 1
        modifier = "@" + ("-" if node.numbering_reversed else "")
        if node.numbering_start != 1 or node.numbering_step != 1:
            modifier += str(node.numbering_start)
        if node.numbering_step != 1:
            modifier += f":{node.numbering_step}"
        return text[:end] + modifier + text[end:]


__all__ = ["NodeVisitor", "AbbreviationVisitor", "AbbreviationFormatter"]
