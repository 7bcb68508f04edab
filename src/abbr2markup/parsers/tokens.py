#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/parsers/tokens.py
"""Token model for the abbreviation lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenType(Enum):
    """Lexical token kinds of the abbreviation grammar."""

    TAG_NAME = "TagName"
    CLASS = "ClassLit"
    ID = "IdLit"
    ATTR_BLOCK = "AttrBlock"
    TEXT_BLOCK = "TextBlock"
    MULTIPLIER = "Multiplier"
    OPERATOR = "Op"
    GROUP_OPEN = "GroupOpen"
    GROUP_CLOSE = "GroupClose"
    EOF = "EOF"


# Tokens that may follow a tag name (or a group) on the same element
MODIFIER_TYPES = frozenset(
    {
        TokenType.CLASS,
        TokenType.ID,
        TokenType.ATTR_BLOCK,
        TokenType.TEXT_BLOCK,
        TokenType.MULTIPLIER,
    }
)


@dataclass(frozen=True)
class Token:
    """A lexical unit of an abbreviation.

    Attributes
    ----------
    type : TokenType
        Token kind
    value : str
        Token payload: the name for TagName/ClassLit/IdLit, the raw block
        contents for AttrBlock/TextBlock, the digits for Multiplier, the
        operator character for Op
    position : int
        Offset of the token's first character in the abbreviation
    attributes : tuple of (str, str or None)
        Parsed name/value pairs, only for AttrBlock tokens
    value_offsets : tuple of (int or None)
        Offset of each attribute value in the abbreviation, None for a bare
        name; only for AttrBlock tokens
    number : int or None
        Parsed repetition count, only for Multiplier tokens

    """

    type: TokenType
    value: str
    position: int
    attributes: tuple[tuple[str, Optional[str]], ...] = ()
    value_offsets: tuple[Optional[int], ...] = ()
    number: Optional[int] = None

    def describe(self) -> str:
        """Return a short human-readable description for error messages."""
        if self.type is TokenType.EOF:
            return "end of input"
        if self.type is TokenType.OPERATOR:
            return f"operator '{self.value}'"
        if self.type is TokenType.GROUP_OPEN:
            return "'('"
        if self.type is TokenType.GROUP_CLOSE:
            return "')'"
        return f"{self.type.value} '{self.value}'"

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, pos={self.position})"
