#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the abbr2markup library.

This module defines specialized exception classes for the error conditions
that can occur while expanding an abbreviation. Every abbreviation error is
a structured value: it carries a kind, the 0-based offset into the input
where the problem was detected, and a human-readable message.

Exception Hierarchy
-------------------
- Abbr2MarkupError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class or unknown option name)

  - AbbreviationError (malformed or oversized abbreviation input)
    - AbbreviationLexError (malformed token, unterminated block, bad character)
    - AbbreviationSyntaxError (unexpected token, unmatched group, duplicate
      modifier, climb above root)
    - LimitExceededError (expansion would exceed the node budget)
    - InvalidMultiplierError (multiplier too large to represent)

"""

from typing import Any


class Abbr2MarkupError(Exception):
    """Base exception class for all abbr2markup-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Abbr2MarkupError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object or option name is not accepted.

    Parameters
    ----------
    component_name : str
        Name of the component that received the options
    expected_type : type
        The expected options class type
    received_type : type
        The options class type (or value type) actually received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class AbbreviationError(Abbr2MarkupError):
    """Base exception for errors in an abbreviation string.

    The first error encountered aborts the pipeline; no partial output is
    ever produced.

    Parameters
    ----------
    message : str
        Description of the problem
    position : int
        0-based character offset into the abbreviation
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    kind : str
        Error kind name ("LexError", "SyntaxError", "LimitExceeded",
        "InvalidMultiplier")
    position : int
        Offset where the problem was detected

    """

    kind = "AbbreviationError"

    def __init__(self, message: str, position: int, original_error: Exception | None = None):
        """Initialize the abbreviation error with its offset."""
        super().__init__(message, original_error=original_error)
        self.position = position

    def __str__(self) -> str:
        """Return the message prefixed with kind and offset."""
        return f"{self.kind} at position {self.position}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a plain dictionary.

        Returns
        -------
        dict
            Mapping with ``kind``, ``position`` and ``message`` keys

        """
        return {"kind": self.kind, "position": self.position, "message": self.message}


class AbbreviationLexError(AbbreviationError):
    """Raised when the tokenizer meets a malformed token.

    Covers unterminated ``[...]`` and ``{...}`` blocks, characters outside
    the identifier set, empty class/id literals, ``*0``, and a second
    ``#id`` on one element.
    """

    kind = "LexError"


class AbbreviationSyntaxError(AbbreviationError):
    """Raised when the token stream does not form a valid abbreviation.

    Parameters
    ----------
    message : str
        Description of the problem
    position : int
        Offset of the offending token
    expected : str, optional
        What the parser expected at this point
    found : str, optional
        What the parser actually found

    """

    kind = "SyntaxError"

    def __init__(
        self,
        message: str,
        position: int,
        expected: str | None = None,
        found: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the syntax error with expected-vs-found details."""
        super().__init__(message, position, original_error=original_error)
        self.expected = expected
        self.found = found

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a plain dictionary including expectation details."""
        data = super().to_dict()
        data["expected"] = self.expected
        data["found"] = self.found
        return data


class LimitExceededError(AbbreviationError):
    """Raised when expansion would produce more nodes than allowed.

    Parameters
    ----------
    message : str
        Description of the problem
    position : int
        Offset of the element whose repetition crossed the limit
    limit : int
        The configured maximum number of expanded nodes

    """

    kind = "LimitExceeded"

    def __init__(self, message: str, position: int, limit: int):
        """Initialize the limit error."""
        super().__init__(message, position)
        self.limit = limit


class InvalidMultiplierError(AbbreviationError):
    """Raised for a multiplier value that cannot be represented."""

    kind = "InvalidMultiplier"


def format_error_context(abbreviation: str, error: AbbreviationError) -> str:
    """Render the abbreviation with a caret under the error offset.

    Parameters
    ----------
    abbreviation : str
        The abbreviation that failed to expand
    error : AbbreviationError
        The error raised for it

    Returns
    -------
    str
        Two lines: the abbreviation and a caret marker

    Examples
    --------
        >>> print(format_error_context("div^^", AbbreviationSyntaxError("climb", 3)))
        div^^
           ^

    """
    position = max(0, min(error.position, len(abbreviation)))
    return f"{abbreviation}\n{' ' * position}^"


__all__ = [
    "Abbr2MarkupError",
    "ValidationError",
    "InvalidOptionsError",
    "AbbreviationError",
    "AbbreviationLexError",
    "AbbreviationSyntaxError",
    "LimitExceededError",
    "InvalidMultiplierError",
    "format_error_context",
]
