#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tokenizer and grammar parser for abbreviations."""

from abbr2markup.parsers.abbreviation import AbbreviationParser, parse_abbreviation
from abbr2markup.parsers.lexer import AbbreviationLexer, tokenize
from abbr2markup.parsers.tokens import Token, TokenType

__all__ = [
    "AbbreviationLexer",
    "AbbreviationParser",
    "Token",
    "TokenType",
    "parse_abbreviation",
    "tokenize",
]
