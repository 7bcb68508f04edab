#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/renderers/base.py
"""Base classes for tree renderers.

This module defines the abstract base class all renderers inherit from.
A renderer turns a list of top-level ``ExpandedNode`` elements into text.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from abbr2markup.ast.nodes import ExpandedNode
from abbr2markup.exceptions import InvalidOptionsError
from abbr2markup.options.base import BaseRendererOptions
from abbr2markup.utils.io_utils import write_text


class BaseRenderer(ABC):
    """Abstract base class for all renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class TagListRenderer(BaseRenderer):
        ...     def render_to_string(self, nodes):
        ...         return " ".join(node.tag for node in nodes)

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, nodes: list[ExpandedNode]) -> str:
        """Render top-level elements to a string.

        Parameters
        ----------
        nodes : list of ExpandedNode
            Elements to render

        Returns
        -------
        str
            Rendered text

        """
        pass

    def render(self, nodes: list[ExpandedNode], output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render elements and write the text to ``output``.

        Parameters
        ----------
        nodes : list of ExpandedNode
            Elements to render
        output : str, Path, IO[bytes] or IO[str]
            File path or open stream

        """
        write_text(self.render_to_string(nodes), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
