"""Error kinds, their display messages, and the package exception types."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class ErrorKind(IntEnum):
    """Outcome of an evaluation. Values are stable and may be stored as ints."""

    NONE = 0
    OPERAND = 1
    OPEN_PAREN = 2
    CLOSE_PAREN = 3
    OPERATOR = 4
    DIVISION = 5
    FUNCTION = 6  # reserved: identifier resolution never produces it
    VARIABLE_EXPECTED = 7
    VARIABLE_FULL = 8
    VARIABLE_LONG = 9
    HEAP_FULL = 10
    PARAMETER = 11


ERROR_MESSAGES = {
    ErrorKind.NONE: "",
    ErrorKind.OPERAND: "error: invalid operand.",
    ErrorKind.OPEN_PAREN: "error: unmatched left parenthesis.",
    ErrorKind.CLOSE_PAREN: "error: unmatched right parenthesis.",
    ErrorKind.OPERATOR: "error: invalid operator.",
    ErrorKind.DIVISION: "error: division by zero.",
    ErrorKind.FUNCTION: "error: unknown function.",
    ErrorKind.VARIABLE_EXPECTED: "error: variable expected.",
    ErrorKind.VARIABLE_FULL: "error: variable space full.",
    ErrorKind.VARIABLE_LONG: "error: variable name too long.",
    ErrorKind.HEAP_FULL: "error: heap space full.",
    ErrorKind.PARAMETER: "error: function parameter is out of range.",
}

UNKNOWN_ERROR_MESSAGE = "internal error:  Unknown error code."


def error_message(kind: Any) -> str:
    """Return the fixed display message for an error kind.

    Args:
        kind: An ErrorKind or its integer value

    Returns:
        Message text; empty for ErrorKind.NONE, a generic internal-error
        message for anything that is not a known error kind
    """
    if isinstance(kind, bool) or not isinstance(kind, int):
        return UNKNOWN_ERROR_MESSAGE
    try:
        return ERROR_MESSAGES[ErrorKind(kind)]
    except ValueError:
        return UNKNOWN_ERROR_MESSAGE


class EvaluationError(Exception):
    """Raised at the API seams when an operation cannot complete."""

    def __init__(self, message: str, code: ErrorKind = ErrorKind.OPERAND):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class VariableError(EvaluationError):
    """Raised when the variable table cannot create or hold an entry."""

    def __init__(self, code: ErrorKind, message: str | None = None):
        super().__init__(message or error_message(code), code)
