#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tree transforms run between parsing and tree building.

- numbering: unroll ``*N`` multipliers and substitute ``$`` placeholders
- context: resolve omitted tag names from the parent element
"""

from abbr2markup.transforms.context import resolve_implicit_tag, resolve_implicit_tags
from abbr2markup.transforms.numbering import count_expanded_nodes, expand_repeats, substitute_numbering

__all__ = [
    "count_expanded_nodes",
    "expand_repeats",
    "resolve_implicit_tag",
    "resolve_implicit_tags",
    "substitute_numbering",
]
