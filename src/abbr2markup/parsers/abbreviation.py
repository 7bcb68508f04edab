#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/abbr2markup/parsers/abbreviation.py
"""Recursive descent parser for abbreviations.

This module builds a list of top-level ``AbbreviationNode`` objects from the
token stream produced by ``AbbreviationLexer``.

Grammar
-------
::

    abbreviation := sequence EOF
    sequence     := item ( operator item )*
    operator     := '>' | '+' | '^'+
    item         := element | group
    group        := '(' sequence ')' multiplier?
    element      := TagName? modifier*      (at least one part)
    modifier     := ClassLit | IdLit | AttrBlock | TextBlock | Multiplier

``>`` nests the next item under the previous one, ``+`` appends it to the
current level, and each ``^`` closes one nesting level before the next item
is appended. Climbing above the level a sequence started at (the root, or
the inside of the enclosing group) is a syntax error.

A group that is followed by ``>`` takes the next item as an extra member of
its contents, since a group has no element of its own to nest under.

Numbering modifiers
-------------------
A ``$`` run may be followed by ``@``, an optional ``-`` (count down), an
optional start number and an optional ``:step``: ``$@-``, ``$@3``,
``$$@10:5``. The modifier configures the element's numbering and is removed
from the template, leaving only the ``$`` run.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from abbr2markup.ast.nodes import AbbreviationNode, SourceLocation
from abbr2markup.constants import MAX_NESTING_DEPTH, OPERATOR_CHILD, OPERATOR_CLIMB, OPERATOR_SIBLING
from abbr2markup.exceptions import AbbreviationSyntaxError, LimitExceededError
from abbr2markup.parsers.lexer import AbbreviationLexer
from abbr2markup.parsers.tokens import MODIFIER_TYPES, Token, TokenType

logger = logging.getLogger(__name__)

_NUMBERING_MODIFIER = re.compile(r"(\$+)@(-?)([0-9]*)(?::([0-9]+))?")


@dataclass
class _ElementModifiers:
    """Fixed-arity record filled by a single scan over one element's tokens."""

    tag_token: Optional[Token] = None
    class_tokens: list[Token] = field(default_factory=list)
    id_token: Optional[Token] = None
    attr_token: Optional[Token] = None
    text_token: Optional[Token] = None
    multiplier_token: Optional[Token] = None

    def claim(self, token: Token) -> None:
        """Record a modifier token, rejecting a second one of the same kind."""
        if token.type is TokenType.CLASS:
            self.class_tokens.append(token)
            return
        slot = {
            TokenType.ID: "id_token",
            TokenType.ATTR_BLOCK: "attr_token",
            TokenType.TEXT_BLOCK: "text_token",
            TokenType.MULTIPLIER: "multiplier_token",
        }[token.type]
        if getattr(self, slot) is not None:
            raise AbbreviationSyntaxError(
                f"Duplicate {token.type.value} on one element",
                token.position,
                expected="operator or end of input",
                found=token.describe(),
            )
        setattr(self, slot, token)

    def templates(self) -> list[tuple[str, int]]:
        """Return every numbering template with its offset in the abbreviation."""
        found: list[tuple[str, int]] = []
        if self.tag_token is not None:
            found.append((self.tag_token.value, self.tag_token.position))
        # Class and id literals start after their '.' or '#'
        found.extend((token.value, token.position + 1) for token in self.class_tokens)
        if self.id_token is not None:
            found.append((self.id_token.value, self.id_token.position + 1))
        if self.attr_token is not None:
            for (_, value), offset in zip(self.attr_token.attributes, self.attr_token.value_offsets):
                if value is not None and offset is not None:
                    found.append((value, offset))
        if self.text_token is not None:
            found.append((self.text_token.value, self.text_token.position + 1))
        return found


class AbbreviationParser:
    """Parser turning an abbreviation string into abbreviation nodes.

    A parser instance holds cursor state for one parse at a time; create a
    new instance (or use ``parse_abbreviation``) per abbreviation when
    calling from several threads.

    Parameters
    ----------
    lexer : AbbreviationLexer, optional
        Lexer to tokenize with
    max_depth : int, default MAX_NESTING_DEPTH
        Deepest nesting of elements and groups accepted. Top-level items are
        at depth 1; each ``>`` and each group adds a level.

    Examples
    --------
        >>> nodes = AbbreviationParser().parse("div>p^span")
        >>> [node.tag_name for node in nodes]
        ['div', 'span']

    """

    def __init__(self, lexer: AbbreviationLexer | None = None, max_depth: int = MAX_NESTING_DEPTH):
        """Initialize the parser with an optional lexer instance."""
        self._lexer = lexer or AbbreviationLexer()
        self.max_depth = max_depth
        self._tokens: list[Token] = []
        self._index = 0
        self._group_depth = 0
        # Depth of the container the next item is placed in
        self._depth = 0

    def parse(self, abbreviation: str) -> list[AbbreviationNode]:
        """Parse an abbreviation into its top-level sibling nodes.

        Parameters
        ----------
        abbreviation : str
            The abbreviation to parse

        Returns
        -------
        list of AbbreviationNode
            Top-level siblings in order

        Raises
        ------
        AbbreviationLexError
            If tokenizing fails
        AbbreviationSyntaxError
            If the tokens do not form a valid abbreviation
        LimitExceededError
            If elements or groups nest deeper than ``max_depth``

        """
        self._tokens = self._lexer.tokenize(abbreviation)
        self._index = 0
        self._group_depth = 0
        self._depth = 0
        nodes = self._parse_sequence()
        logger.debug("Parsed %r into %d top-level node(s)", abbreviation, len(nodes))
        return nodes

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.type is not TokenType.EOF:
            self._index += 1
        return token

    def _is_operator(self, symbol: str) -> bool:
        token = self._peek()
        return token.type is TokenType.OPERATOR and token.value == symbol

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _parse_sequence(self) -> list[AbbreviationNode]:
        """Parse items joined by operators until EOF or a closing ``)``."""
        base = self._depth
        root: list[AbbreviationNode] = []
        # levels[-1] is the list the next sibling is appended to; items in
        # levels[k] sit in a container at depth base + k
        levels: list[list[AbbreviationNode]] = [root]

        last = self._parse_item()
        root.append(last)

        while True:
            token = self._peek()

            if token.type is TokenType.EOF:
                self._depth = base
                return root
            if token.type is TokenType.GROUP_CLOSE:
                if self._group_depth == 0:
                    raise AbbreviationSyntaxError(
                        "Unmatched ')'", token.position, expected="operator or end of input", found="')'"
                    )
                self._depth = base
                return root
            if token.type is not TokenType.OPERATOR:
                raise AbbreviationSyntaxError(
                    f"Unexpected {token.describe()}",
                    token.position,
                    expected="operator '>', '+' or '^'",
                    found=token.describe(),
                )

            if self._is_operator(OPERATOR_CHILD):
                operator = self._advance()
                self._depth = base + len(levels)
                child = self._parse_item(operator)
                last.children.append(child)
                levels.append(last.children)
                last = child
            elif self._is_operator(OPERATOR_SIBLING):
                self._advance()
                self._depth = base + len(levels) - 1
                last = self._parse_item()
                levels[-1].append(last)
            elif self._is_operator(OPERATOR_CLIMB):
                while self._is_operator(OPERATOR_CLIMB):
                    climb = self._advance()
                    if len(levels) == 1:
                        raise AbbreviationSyntaxError(
                            "Cannot climb above the root level",
                            climb.position,
                            expected="element",
                            found="operator '^'",
                        )
                    levels.pop()
                self._depth = base + len(levels) - 1
                last = self._parse_item()
                levels[-1].append(last)

    def _parse_item(self, operator: Optional[Token] = None) -> AbbreviationNode:
        """Parse one element or one group.

        ``operator`` is the ``>`` that nests this item, reported when the item
        would exceed the depth limit.
        """
        token = self._peek()
        if self._depth + 1 > self.max_depth and token.type is not TokenType.EOF:
            culprit = token if token.type is TokenType.GROUP_OPEN or operator is None else operator
            raise LimitExceededError(
                f"Nesting depth exceeds the limit of {self.max_depth}",
                culprit.position,
                self.max_depth,
            )
        if token.type is TokenType.GROUP_OPEN:
            return self._parse_group()
        if token.type is TokenType.TAG_NAME or token.type in MODIFIER_TYPES:
            return self._parse_element()
        if token.type is TokenType.GROUP_CLOSE and self._group_depth == 0:
            raise AbbreviationSyntaxError("Unmatched ')'", token.position, expected="element", found="')'")
        raise AbbreviationSyntaxError(
            f"Expected element, found {token.describe()}",
            token.position,
            expected="element",
            found=token.describe(),
        )

    def _parse_group(self) -> AbbreviationNode:
        opener = self._advance()
        container_depth = self._depth
        self._group_depth += 1
        self._depth = container_depth + 1
        contents = self._parse_sequence()
        self._group_depth -= 1
        self._depth = container_depth

        closer = self._peek()
        if closer.type is not TokenType.GROUP_CLOSE:
            raise AbbreviationSyntaxError(
                "Unclosed group, missing ')'", opener.position, expected="')'", found=closer.describe()
            )
        self._advance()

        multiplier = 1
        multiplier_token: Optional[Token] = None
        while self._peek().type in MODIFIER_TYPES:
            token = self._advance()
            if token.type is not TokenType.MULTIPLIER:
                raise AbbreviationSyntaxError(
                    f"A group accepts only a multiplier, found {token.describe()}",
                    token.position,
                    expected="multiplier or operator",
                    found=token.describe(),
                )
            if multiplier_token is not None:
                raise AbbreviationSyntaxError(
                    "Duplicate Multiplier on one group",
                    token.position,
                    expected="operator or end of input",
                    found=token.describe(),
                )
            multiplier_token = token
            multiplier = token.number or 1

        end = self._peek().position
        return AbbreviationNode(
            multiplier=multiplier,
            children=contents,
            is_group=True,
            source_location=SourceLocation(opener.position, end - opener.position),
        )

    def _parse_element(self) -> AbbreviationNode:
        start = self._peek().position
        record = _ElementModifiers()

        if self._peek().type is TokenType.TAG_NAME:
            record.tag_token = self._advance()

        while True:
            token = self._peek()
            if token.type is TokenType.TAG_NAME:
                raise AbbreviationSyntaxError(
                    f"Tag name '{token.value}' must come before modifiers",
                    token.position,
                    expected="modifier or operator",
                    found=token.describe(),
                )
            if token.type not in MODIFIER_TYPES:
                break
            record.claim(self._advance())

        end = self._peek().position
        node = self._build_element(record)
        node.source_location = SourceLocation(start, end - start)
        return node

    @staticmethod
    def _build_element(record: _ElementModifiers) -> AbbreviationNode:
        spec = _numbering_spec(record.templates())

        def strip(template: Optional[str]) -> Optional[str]:
            if template is None or spec is None:
                return template
            return _NUMBERING_MODIFIER.sub(r"\1", template)

        tag_name = strip(record.tag_token.value) if record.tag_token is not None else None
        classes = [strip(token.value) or "" for token in record.class_tokens]
        element_id = strip(record.id_token.value) if record.id_token is not None else None
        attributes: dict[str, Optional[str]] = {}

        if record.attr_token is not None:
            # Later duplicates of a name win
            merged: dict[str, Optional[str]] = {}
            for name, value in record.attr_token.attributes:
                merged[name] = strip(value)
            for name, value in merged.items():
                if name == "class" and value is not None:
                    classes.extend(value.split())
                elif name == "id" and value is not None:
                    if element_id is not None:
                        raise AbbreviationSyntaxError(
                            "Element id given both as '#id' and as an attribute",
                            record.attr_token.position,
                            expected="a single id",
                            found=f"id={value!r}",
                        )
                    element_id = value
                else:
                    attributes[name] = value

        multiplier = 1
        if record.multiplier_token is not None and record.multiplier_token.number is not None:
            multiplier = record.multiplier_token.number

        node = AbbreviationNode(
            tag_name=tag_name,
            classes=classes,
            id=element_id,
            attributes=attributes,
            text=strip(record.text_token.value) if record.text_token is not None else None,
            multiplier=multiplier,
        )
        if spec is not None:
            node.numbering_reversed, node.numbering_start, node.numbering_step = spec
        return node


def _numbering_spec(templates: list[tuple[str, int]]) -> Optional[tuple[bool, int, int]]:
    """Return the element's ``(reversed, start, step)`` numbering modifier.

    ``templates`` pairs each template with its offset in the abbreviation.
    A modifier that differs from the first one in source order is reported
    at its own offset.
    """
    found: list[tuple[int, tuple[bool, int, int], str]] = []
    for template, offset in templates:
        if "@" not in template:
            continue
        for match in _NUMBERING_MODIFIER.finditer(template):
            spec = (
                match.group(2) == "-",
                int(match.group(3)) if match.group(3) else 1,
                int(match.group(4)) if match.group(4) else 1,
            )
            found.append((offset + match.start(), spec, match.group(0)))
    if not found:
        return None

    found.sort(key=lambda item: item[0])
    first = found[0][1]
    for position, spec, text in found[1:]:
        if spec != first:
            raise AbbreviationSyntaxError(
                "Conflicting numbering modifiers on one element",
                position,
                expected=f"the same modifier as '{found[0][2]}'",
                found=f"'{text}'",
            )
    return first


def parse_abbreviation(abbreviation: str) -> list[AbbreviationNode]:
    """Parse an abbreviation with a fresh parser.

    Parameters
    ----------
    abbreviation : str
        The abbreviation to parse

    Returns
    -------
    list of AbbreviationNode
        Top-level siblings in order

    """
    return AbbreviationParser().parse(abbreviation)
