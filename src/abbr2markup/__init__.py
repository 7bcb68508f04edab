"""abbr2markup - expand compact abbreviations into indented markup.

abbr2markup implements the abbreviation grammar popularized by Emmet: a
short string such as ``ul#nav>li.item$*3>a{Link $}`` is tokenized, parsed
into a tree, unrolled (``*N`` repetition and ``$`` numbering), completed with
implicit tag names, and serialized as indented markup.

Pipeline
--------
1. Tokenizer (``abbr2markup.parsers.lexer``)
2. Grammar parser (``abbr2markup.parsers.abbreviation``)
3. Repeat and numbering expansion (``abbr2markup.transforms.numbering``)
4. Implicit tag resolution (``abbr2markup.transforms.context``)
5. Tree building (``abbr2markup.ast.builder``)
6. Serialization (``abbr2markup.renderers``)

Each stage is a pure function of its input; nothing is shared between calls.

Requirements
------------
- Python 3.10+

Examples
--------
    >>> from abbr2markup import expand
    >>> print(expand("ul>li.item$*3"))
    <ul>
      <li class="item1"></li>
      <li class="item2"></li>
      <li class="item3"></li>
    </ul>

Errors are raised as structured exceptions:

    >>> from abbr2markup import AbbreviationError
    >>> try:
    ...     expand("div^^")
    ... except AbbreviationError as exc:
    ...     print(exc.kind, exc.position)
    SyntaxError 3

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from abbr2markup.api import expand, expand_to_tree, parse
from abbr2markup.ast import AbbreviationNode, ExpandedNode
from abbr2markup.exceptions import (
    Abbr2MarkupError,
    AbbreviationError,
    AbbreviationLexError,
    AbbreviationSyntaxError,
    InvalidMultiplierError,
    InvalidOptionsError,
    LimitExceededError,
    format_error_context,
)
from abbr2markup.options import ExpandOptions, JsonRendererOptions, MarkupRendererOptions, merge_parent_tag_table

__all__ = [
    "__version__",
    "expand",
    "expand_to_tree",
    "parse",
    "AbbreviationNode",
    "ExpandedNode",
    "ExpandOptions",
    "MarkupRendererOptions",
    "JsonRendererOptions",
    "merge_parent_tag_table",
    "Abbr2MarkupError",
    "AbbreviationError",
    "AbbreviationLexError",
    "AbbreviationSyntaxError",
    "InvalidMultiplierError",
    "InvalidOptionsError",
    "LimitExceededError",
    "format_error_context",
]
