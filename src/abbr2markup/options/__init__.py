#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the abbr2markup expansion pipeline.

Options are frozen dataclasses: ``ExpandOptions`` drives tokenizing through
tree building, ``MarkupRendererOptions`` and ``JsonRendererOptions`` drive
serialization.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from abbr2markup.options.base import BaseRendererOptions, CloneFrozenMixin
from abbr2markup.options.expand import ExpandOptions, merge_parent_tag_table
from abbr2markup.options.markup import JsonRendererOptions, MarkupRendererOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a dataclass)
    **kwargs
        Keyword arguments with the field names and new values to update

    Returns
    -------
    Any
        A new options instance with the updated values

    """
    return replace(options, **kwargs)


__all__ = [
    "CloneFrozenMixin",
    "BaseRendererOptions",
    "ExpandOptions",
    "MarkupRendererOptions",
    "JsonRendererOptions",
    "merge_parent_tag_table",
    "create_updated_options",
]
