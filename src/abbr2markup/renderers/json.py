#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/renderers/json.py
"""JSON rendering of expanded trees."""

from __future__ import annotations

from abbr2markup.ast.nodes import ExpandedNode
from abbr2markup.ast.serialization import tree_to_json
from abbr2markup.options.markup import JsonRendererOptions
from abbr2markup.renderers.base import BaseRenderer


class JsonRenderer(BaseRenderer):
    """Render expanded elements as versioned JSON.

    Parameters
    ----------
    options : JsonRendererOptions or None, default = None
        JSON rendering options

    """

    def __init__(self, options: JsonRendererOptions | None = None):
        """Initialize the JSON renderer with options."""
        BaseRenderer._validate_options_type(options, JsonRendererOptions, "json")
        options = options or JsonRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: JsonRendererOptions = options

    def render_to_string(self, nodes: list[ExpandedNode]) -> str:
        """Render elements to a JSON document string."""
        return tree_to_json(nodes, indent=self.options.indent)
