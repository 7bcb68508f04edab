#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the abbr2markup library.

This module centralizes the hardcoded values, lookup tables and default
configuration constants used across the expansion pipeline.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Lexical Rules - Identifier characters and operator symbols
3. Expansion Defaults - Default tag, node limits, multiplier bounds
4. Implicit Tag Resolution - Parent to child tag lookup
5. Markup Rendering - Void tags and serializer defaults
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, Mapping

# =============================================================================
# Type Definitions
# =============================================================================

SelfClosingStyle = Literal["html", "xhtml", "xml"]
OutputFormat = Literal["markup", "json"]

# =============================================================================
# Lexical Rules
# =============================================================================

# Characters allowed in tag names, class and id literals. "$" and "@" are
# allowed so numbering placeholders and their modifiers can live inside names.
IDENTIFIER_PATTERN = r"[A-Za-z0-9\-:_$@]"

OPERATOR_CHILD = ">"
OPERATOR_SIBLING = "+"
OPERATOR_CLIMB = "^"
GROUP_OPEN = "("
GROUP_CLOSE = ")"

NUMBERING_CHAR = "$"

# =============================================================================
# Expansion Defaults
# =============================================================================

DEFAULT_TAG = "div"
DEFAULT_MAX_EXPANDED_NODES = 10_000

# Largest multiplier accepted by the lexer (signed 32-bit range)
MAX_MULTIPLIER = 2**31 - 1

# Deepest nesting of elements and groups accepted by the parser
MAX_NESTING_DEPTH = 100

# =============================================================================
# Implicit Tag Resolution
# =============================================================================

DEFAULT_PARENT_TAG_TABLE: Mapping[str, str] = MappingProxyType(
    {
        "ul": "li",
        "ol": "li",
        "menu": "li",
        "table": "tr",
        "thead": "tr",
        "tbody": "tr",
        "tfoot": "tr",
        "tr": "td",
        "select": "option",
        "optgroup": "option",
        "datalist": "option",
        "colgroup": "col",
        "dl": "dt",
        "audio": "source",
        "video": "source",
        "map": "area",
        # Inline parents only take inline children
        "a": "span",
        "b": "span",
        "i": "span",
        "em": "span",
        "strong": "span",
        "span": "span",
        "label": "span",
    }
)

# =============================================================================
# Markup Rendering
# =============================================================================

DEFAULT_INDENT_UNIT = "  "
DEFAULT_SELF_CLOSING_STYLE: SelfClosingStyle = "html"
DEFAULT_INLINE_TEXT_MAX_LENGTH = 80
DEFAULT_ESCAPE_TEXT = False

VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

SELF_CLOSING_SUFFIXES: Mapping[str, str] = MappingProxyType(
    {
        "html": ">",
        "xhtml": " />",
        "xml": "/>",
    }
)

# =============================================================================
# Command-line Interface
# =============================================================================

CONFIG_FILENAMES = [".abbr2markup.toml", ".abbr2markup.yaml", ".abbr2markup.yml", ".abbr2markup.json"]
ENV_PREFIX = "ABBR2MARKUP_"
