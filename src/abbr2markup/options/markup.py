#  Copyright (c) 2025 Tom Villani, Ph.D.
# abbr2markup/options/markup.py
"""Configuration options for markup and JSON rendering.

This module defines options for serializing an expanded node tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from abbr2markup.constants import (
    DEFAULT_ESCAPE_TEXT,
    DEFAULT_INDENT_UNIT,
    DEFAULT_INLINE_TEXT_MAX_LENGTH,
    DEFAULT_SELF_CLOSING_STYLE,
    SELF_CLOSING_SUFFIXES,
    SelfClosingStyle,
)
from abbr2markup.options.base import BaseRendererOptions


@dataclass(frozen=True)
class MarkupRendererOptions(BaseRendererOptions):
    """Configuration options for indented markup rendering.

    Parameters
    ----------
    indent_unit : str, default "  "
        String added once per nesting level.
    self_closing_style : {"html", "xhtml", "xml"}, default "html"
        How void elements are closed: ``<br>``, ``<br />`` or ``<br/>``.
    inline_text_max_length : int, default 80
        Longest text a childless element may carry and still render on
        a single line with its tags.
    escape_text : bool, default False
        Escape ``&``, ``<`` and ``>`` in text content. Text is emitted
        verbatim by default so it may carry markup of its own.

    Examples
    --------
        >>> from abbr2markup.renderers.markup import MarkupRenderer
        >>> renderer = MarkupRenderer(MarkupRendererOptions(indent_unit="\\t"))

    """

    indent_unit: str = field(
        default=DEFAULT_INDENT_UNIT,
        metadata={"help": "Indentation added per nesting level", "importance": "core"},
    )
    self_closing_style: SelfClosingStyle = field(
        default=DEFAULT_SELF_CLOSING_STYLE,
        metadata={
            "help": "Void element style: html (<br>), xhtml (<br />) or xml (<br/>)",
            "choices": ["html", "xhtml", "xml"],
            "importance": "core",
        },
    )
    inline_text_max_length: int = field(
        default=DEFAULT_INLINE_TEXT_MAX_LENGTH,
        metadata={
            "help": "Longest text rendered on the same line as its tags",
            "type": int,
            "importance": "advanced",
        },
    )
    escape_text: bool = field(
        default=DEFAULT_ESCAPE_TEXT,
        metadata={"help": "Escape &, < and > in element text", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()
        if self.indent_unit.strip():
            raise ValueError(f"indent_unit must contain only whitespace, got {self.indent_unit!r}")
        if self.self_closing_style not in SELF_CLOSING_SUFFIXES:
            raise ValueError(
                f"self_closing_style must be one of {sorted(SELF_CLOSING_SUFFIXES)}, got {self.self_closing_style!r}"
            )
        if self.inline_text_max_length < 0:
            raise ValueError(f"inline_text_max_length must be non-negative, got {self.inline_text_max_length}")


@dataclass(frozen=True)
class JsonRendererOptions(BaseRendererOptions):
    """Configuration options for JSON rendering of the expanded tree.

    Parameters
    ----------
    indent : int or None, default 2
        Spaces of JSON indentation; None for compact output.

    """

    indent: int | None = field(
        default=2,
        metadata={"help": "JSON indentation (None for compact output)", "type": int, "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        super().__post_init__()
        if self.indent is not None and self.indent < 0:
            raise ValueError(f"indent must be non-negative, got {self.indent}")
