#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/parsers/lexer.py
"""Tokenizer for abbreviation strings.

Splits an abbreviation into typed tokens carrying their source offsets.
The lexer is a single left-to-right scan; it knows just enough about
element boundaries to reject a second ``#id`` on the same element.

Lexical rules
-------------
- ``TagName``: identifier run not preceded by ``.`` or ``#``
- ``ClassLit``: ``.`` + identifier run, may repeat
- ``IdLit``: ``#`` + identifier run, at most one per element
- ``AttrBlock``: ``[`` ... ``]`` holding ``name``, ``name=value``,
  ``name="quoted value"`` or ``name='quoted value'`` pairs
- ``TextBlock``: ``{`` ... ``}``, raw text up to the first ``}``
- ``Multiplier``: ``*`` + digits, value at least 1
- ``>``, ``+``, ``^``, ``(``, ``)``: single-character tokens

"""

from __future__ import annotations

import logging
import re
from typing import Optional

from abbr2markup.constants import (
    GROUP_CLOSE,
    GROUP_OPEN,
    IDENTIFIER_PATTERN,
    MAX_MULTIPLIER,
    OPERATOR_CHILD,
    OPERATOR_CLIMB,
    OPERATOR_SIBLING,
)
from abbr2markup.exceptions import AbbreviationLexError, InvalidMultiplierError
from abbr2markup.parsers.tokens import Token, TokenType

logger = logging.getLogger(__name__)

_IDENTIFIER_RUN = re.compile(f"{IDENTIFIER_PATTERN}+")
_DIGITS = re.compile(r"[0-9]+")
_IDENTIFIER_CHAR = re.compile(IDENTIFIER_PATTERN)

_OPERATORS = frozenset({OPERATOR_CHILD, OPERATOR_SIBLING, OPERATOR_CLIMB})
_ATTR_NAME_STOP = frozenset({"=", "]", '"', "'"})


class AbbreviationLexer:
    """Lexer that turns an abbreviation string into a list of tokens.

    The returned list always ends with an EOF token positioned at the end
    of the input.

    Examples
    --------
        >>> [t.type.value for t in AbbreviationLexer().tokenize("ul>li*2")]
        ['TagName', 'Op', 'TagName', 'Multiplier', 'EOF']

    """

    def tokenize(self, text: str) -> list[Token]:
        """Split an abbreviation into tokens.

        Parameters
        ----------
        text : str
            Abbreviation to tokenize; leading and trailing whitespace is
            skipped, and token offsets index into ``text`` itself

        Returns
        -------
        list of Token
            Tokens in source order, terminated by EOF

        Raises
        ------
        AbbreviationLexError
            On an unterminated block, an invalid character, an empty
            class/id literal, ``*0`` or a second id on one element
        InvalidMultiplierError
            When a multiplier exceeds MAX_MULTIPLIER

        """
        tokens: list[Token] = []
        # Outer whitespace is skipped; offsets stay relative to the full text
        length = len(text.rstrip())
        position = len(text) - len(text.lstrip()) if length else 0
        # Reset at every operator or group boundary
        element_has_id = False

        while position < length:
            char = text[position]

            if char in _OPERATORS:
                tokens.append(Token(TokenType.OPERATOR, char, position))
                element_has_id = False
                position += 1
            elif char == GROUP_OPEN:
                tokens.append(Token(TokenType.GROUP_OPEN, char, position))
                element_has_id = False
                position += 1
            elif char == GROUP_CLOSE:
                tokens.append(Token(TokenType.GROUP_CLOSE, char, position))
                element_has_id = False
                position += 1
            elif char == ".":
                name, position = self._read_literal(text, position, "class name")
                tokens.append(Token(TokenType.CLASS, name, position - len(name) - 1))
            elif char == "#":
                if element_has_id:
                    raise AbbreviationLexError("Element already has an id", position)
                name, position = self._read_literal(text, position, "id")
                tokens.append(Token(TokenType.ID, name, position - len(name) - 1))
                element_has_id = True
            elif char == "[":
                token, position = self._read_attribute_block(text, position)
                tokens.append(token)
            elif char == "{":
                close = text.find("}", position + 1)
                if close < 0:
                    raise AbbreviationLexError("Unterminated text block, missing '}'", position)
                tokens.append(Token(TokenType.TEXT_BLOCK, text[position + 1 : close], position))
                position = close + 1
            elif char == "*":
                token, position = self._read_multiplier(text, position)
                tokens.append(token)
            elif _IDENTIFIER_CHAR.match(char):
                match = _IDENTIFIER_RUN.match(text, position)
                assert match is not None
                tokens.append(Token(TokenType.TAG_NAME, match.group(0), position))
                position = match.end()
            else:
                raise AbbreviationLexError(f"Invalid character '{char}'", position)

        tokens.append(Token(TokenType.EOF, "", length))
        logger.debug("Tokenized %d characters into %d tokens", length, len(tokens))
        return tokens

    @staticmethod
    def _read_literal(text: str, position: int, what: str) -> tuple[str, int]:
        """Read the identifier after a ``.`` or ``#`` starting at ``position``."""
        match = _IDENTIFIER_RUN.match(text, position + 1)
        if match is None:
            raise AbbreviationLexError(f"Expected {what} after '{text[position]}'", position)
        return match.group(0), match.end()

    @staticmethod
    def _read_multiplier(text: str, position: int) -> tuple[Token, int]:
        match = _DIGITS.match(text, position + 1)
        if match is None:
            raise AbbreviationLexError("Expected digits after '*'", position)
        digits = match.group(0)
        # Bound by digit count first so huge runs are never converted
        if len(digits.lstrip("0")) > len(str(MAX_MULTIPLIER)):
            raise InvalidMultiplierError(f"Multiplier {digits} is too large (maximum {MAX_MULTIPLIER})", position)
        number = int(digits)
        if number == 0:
            raise AbbreviationLexError("Multiplier must be at least 1", position)
        if number > MAX_MULTIPLIER:
            raise InvalidMultiplierError(f"Multiplier {digits} is too large (maximum {MAX_MULTIPLIER})", position)
        return Token(TokenType.MULTIPLIER, digits, position, number=number), match.end()

    @staticmethod
    def _read_attribute_block(text: str, start: int) -> tuple[Token, int]:
        """Read a ``[...]`` block starting at ``start``.

        Any way of running off the end of the input, including an
        unterminated quoted value, is reported at the opening bracket.
        """
        length = len(text)
        position = start + 1
        pairs: list[tuple[str, Optional[str]]] = []
        offsets: list[Optional[int]] = []

        while True:
            while position < length and text[position].isspace():
                position += 1
            if position >= length:
                raise AbbreviationLexError("Unterminated attribute block, missing ']'", start)
            if text[position] == "]":
                position += 1
                break

            name_start = position
            while (
                position < length and not text[position].isspace() and text[position] not in _ATTR_NAME_STOP
            ):
                position += 1
            name = text[name_start:position]
            if not name:
                if position >= length:
                    raise AbbreviationLexError("Unterminated attribute block, missing ']'", start)
                raise AbbreviationLexError(f"Expected attribute name, found '{text[position]}'", position)

            value: Optional[str] = None
            value_offset: Optional[int] = None
            if position < length and text[position] == "=":
                position += 1
                if position < length and text[position] in "\"'":
                    quote = text[position]
                    close = text.find(quote, position + 1)
                    if close < 0:
                        raise AbbreviationLexError("Unterminated attribute block, missing ']'", start)
                    value_offset = position + 1
                    value = text[value_offset:close]
                    position = close + 1
                else:
                    value_offset = position
                    while position < length and not text[position].isspace() and text[position] != "]":
                        position += 1
                    value = text[value_offset:position]
            pairs.append((name, value))
            offsets.append(value_offset)

        token = Token(
            TokenType.ATTR_BLOCK,
            text[start + 1 : position - 1],
            start,
            attributes=tuple(pairs),
            value_offsets=tuple(offsets),
        )
        return token, position


def tokenize(text: str) -> list[Token]:
    """Tokenize an abbreviation with a fresh lexer.

    Parameters
    ----------
    text : str
        Abbreviation to tokenize

    Returns
    -------
    list of Token
        Tokens terminated by EOF

    """
    return AbbreviationLexer().tokenize(text)
