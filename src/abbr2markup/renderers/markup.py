#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/renderers/markup.py
"""Indented markup rendering from expanded trees.

Layout rules
------------
- One element per line, each nesting level indented by one ``indent_unit``.
- A childless element with short single-line text renders on one line:
  ``<p>Hello</p>``. Longer or multi-line text goes on its own indented
  lines between the opening and closing tags.
- An element with both text and children writes the text first.
- Attributes render as ``id``, ``class``, then the attribute block entries
  in insertion order. Boolean attributes render bare.
- Void elements render with the configured self-closing style and never
  carry content.

Output is deterministic: the same tree and options always give the same
string.

"""

from __future__ import annotations

from typing import Optional

from abbr2markup.ast.nodes import ExpandedNode
from abbr2markup.ast.visitors import NodeVisitor
from abbr2markup.constants import SELF_CLOSING_SUFFIXES, VOID_TAGS
from abbr2markup.options.markup import MarkupRendererOptions
from abbr2markup.renderers.base import BaseRenderer
from abbr2markup.utils.escape import escape_attribute, escape_text


class MarkupRenderer(NodeVisitor, BaseRenderer):
    """Render expanded elements to indented markup text.

    Parameters
    ----------
    options : MarkupRendererOptions or None, default = None
        Markup rendering options

    Examples
    --------
        >>> from abbr2markup.ast import ExpandedNode
        >>> tree = [ExpandedNode(tag="ul", children=[ExpandedNode(tag="li", text="One")])]
        >>> print(MarkupRenderer().render_to_string(tree))
        <ul>
          <li>One</li>
        </ul>

    """

    def __init__(self, options: MarkupRendererOptions | None = None):
        """Initialize the markup renderer with options."""
        BaseRenderer._validate_options_type(options, MarkupRendererOptions, "markup")
        options = options or MarkupRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkupRendererOptions = options
        self._lines: list[str] = []
        self._depth = 0

    def render_to_string(self, nodes: list[ExpandedNode]) -> str:
        """Render top-level elements to markup.

        Parameters
        ----------
        nodes : list of ExpandedNode
            Elements to render

        Returns
        -------
        str
            Markup text, top-level elements separated by newlines, without
            a trailing newline

        """
        self._lines = []
        self._depth = 0
        for node in nodes:
            node.accept(self)
        return "\n".join(self._lines)

    def visit_element(self, node: ExpandedNode) -> None:
        """Render one element and its subtree."""
        indent = self.options.indent_unit * self._depth
        opening = f"<{node.tag}{self._render_attributes(node)}"

        if node.tag.lower() in VOID_TAGS:
            self._lines.append(indent + opening + SELF_CLOSING_SUFFIXES[self.options.self_closing_style])
            return

        opening += ">"
        closing = f"</{node.tag}>"
        text = self._render_text(node.text)

        if not node.children:
            if not text:
                self._lines.append(indent + opening + closing)
                return
            if self._fits_inline(text):
                self._lines.append(indent + opening + text + closing)
                return

        self._lines.append(indent + opening)
        self._depth += 1
        if text:
            inner_indent = self.options.indent_unit * self._depth
            self._lines.extend(inner_indent + line if line else line for line in text.split("\n"))
        for child in node.children:
            child.accept(self)
        self._depth -= 1
        self._lines.append(indent + closing)

    def _fits_inline(self, text: str) -> bool:
        return "\n" not in text and len(text) <= self.options.inline_text_max_length

    def _render_text(self, text: Optional[str]) -> str:
        if not text:
            return ""
        return escape_text(text, enabled=self.options.escape_text)

    @staticmethod
    def _render_attributes(node: ExpandedNode) -> str:
        parts: list[str] = []
        if node.id is not None:
            parts.append(f'id="{escape_attribute(node.id)}"')
        if node.classes:
            parts.append(f'class="{escape_attribute(" ".join(node.classes))}"')
        for name, value in node.attributes.items():
            if (name == "id" and node.id is not None) or (name == "class" and node.classes):
                continue
            if value is None:
                parts.append(name)
            else:
                parts.append(f'{name}="{escape_attribute(value)}"')
        return "".join(f" {part}" for part in parts)
