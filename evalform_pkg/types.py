"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterator

from .errors import ErrorKind, error_message


class Operator(IntEnum):
    """Operator kinds, ordered from lowest to highest precedence.

    END_LINE, BEGIN_LINE and the parentheses carry no arithmetic meaning;
    their place in the ordering only controls where recursion stops.
    """

    END_LINE = 0
    BEGIN_LINE = 1
    CLOSE_PAREN = 2
    OPEN_PAREN = 3
    ASSIGN = 4
    ADD = 5
    SUBTRACT = 6
    MULTIPLY = 7
    DIVIDE = 8
    POWER = 9


OPERATOR_CHARS = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
    "^": Operator.POWER,
    ")": Operator.CLOSE_PAREN,
    "=": Operator.ASSIGN,
}


@dataclass
class EvalResult:
    """Result of evaluating a formula.

    Unpacks as ``value, error, cursor`` so callers can treat it as the
    triple returned by the entry point.
    """

    value: float
    error: ErrorKind = ErrorKind.NONE
    cursor: int = 0

    @property
    def ok(self) -> bool:
        return self.error == ErrorKind.NONE

    @property
    def message(self) -> str:
        return error_message(self.error)

    def __iter__(self) -> Iterator[Any]:
        return iter((self.value, self.error, self.cursor))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "cursor": self.cursor}
        if self.ok:
            result_dict["value"] = self.value
        else:
            result_dict["error"] = self.error.name.lower()
            result_dict["message"] = self.message
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error.name}, cursor={self.cursor})"
        return f"EvalResult(ok=True, value={self.value!r}, cursor={self.cursor})"
