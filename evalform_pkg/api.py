"""Public API for evalform.

The functions here work against one process-wide Evaluator and its variable
table, so variables assigned by one call are visible to the next. Callers
that need isolated state (or evaluate from several threads) should build
their own ``Evaluator`` instead; the default instance is not locked.
"""

from __future__ import annotations

import math

from .config import DEFAULT_RETURN, IDENTIFIER_RE, TOKEN_BLANKS, WHITESPACE
from .errors import ErrorKind, VariableError, error_message
from .evaluator import Evaluator
from .types import EvalResult

__all__ = [
    "assign_variable",
    "error_message",
    "evaluate",
    "evaluate_leading_int",
    "evaluate_leading_token",
    "get_default_evaluator",
    "get_or_create_variable",
    "list_variable",
    "list_variables",
    "split_leading_token",
]

_DEFAULT_EVALUATOR = Evaluator()


def get_default_evaluator() -> Evaluator:
    """Return the process-wide evaluator used by the module-level functions."""
    return _DEFAULT_EVALUATOR


def evaluate(formula: str, cursor: int = 0) -> EvalResult:
    """Evaluate a formula.

    Args:
        formula: Formula string (e.g., "a = 5^2", "sqrt(2)*%pi")
        cursor: Offset in ``formula`` to start parsing at

    Returns:
        EvalResult with value, error kind and the stop position

    Example:
        >>> from evalform_pkg.api import evaluate
        >>> evaluate("a = 5^2").value
        25.0
        >>> evaluate("A").value
        25.0
        >>> evaluate("1/0").error
        <ErrorKind.DIVISION: 5>

    Raises:
        RecursionError: parentheses nested deeper than the interpreter's
            recursion limit allows (a few hundred levels by default)
    """
    return _DEFAULT_EVALUATOR.evaluate(formula, cursor)


def _check_name(name: str, max_token_length: int) -> None:
    if IDENTIFIER_RE.fullmatch(name) is None:
        raise VariableError(ErrorKind.OPERAND, f"error: invalid variable name {name!r}.")
    if len(name) >= max_token_length:
        raise VariableError(ErrorKind.VARIABLE_LONG)


def get_or_create_variable(name: str) -> int:
    """Return the stable index of a variable, creating it with value 0.0.

    Raises:
        VariableError: ``code`` is VARIABLE_FULL, HEAP_FULL, VARIABLE_LONG,
            or OPERAND for a name that is not an identifier
    """
    _check_name(name, _DEFAULT_EVALUATOR.max_token_length)
    return _DEFAULT_EVALUATOR.variables.get_or_create(name)


def assign_variable(name: str, value: float) -> int:
    """Set a variable, creating it if needed, and return its index.

    Raises:
        VariableError: same conditions as get_or_create_variable
    """
    _check_name(name, _DEFAULT_EVALUATOR.max_token_length)
    return _DEFAULT_EVALUATOR.variables.assign(name, float(value))


def list_variable(index: int) -> tuple[str, float] | None:
    """Return ``(name, value)`` for the variable at ``index``, or None.

    Example:
        >>> index = 0
        >>> while (entry := list_variable(index)) is not None:
        ...     print(*entry)
        ...     index += 1
    """
    return _DEFAULT_EVALUATOR.variables.entry(index)


def list_variables() -> list[tuple[str, float]]:
    """Return every variable in creation order."""
    return list(_DEFAULT_EVALUATOR.variables)


def split_leading_token(text: str, cursor: int = 0) -> tuple[str, int]:
    """Pull the first whitespace-delimited token out of ``text``.

    Returns:
        Tuple of (token, position of the next token)
    """
    end = len(text)
    start = cursor
    while start < end and text[start] in TOKEN_BLANKS:
        start += 1
    stop = start
    while stop < end and text[stop] not in TOKEN_BLANKS:
        stop += 1
    token = text[start:stop]
    following = stop + 1 if stop < end else stop
    while following < end and text[following] in WHITESPACE:
        following += 1
    return token, following


def evaluate_leading_token(text: str, cursor: int = 0) -> float:
    """Evaluate the first whitespace-delimited token of ``text`` as a formula.

    Error details are discarded; a failed evaluation gives DEFAULT_RETURN.
    The position after the token is not returned: use split_leading_token
    to step through a token stream, passing its next position back in as
    ``cursor``.
    """
    token, _ = split_leading_token(text, cursor)
    result = _DEFAULT_EVALUATOR.evaluate(token)
    return result.value if result.ok else DEFAULT_RETURN


def evaluate_leading_int(text: str, cursor: int = 0) -> int:
    """Like evaluate_leading_token, truncated toward zero.

    Non-finite results give 0.
    """
    value = evaluate_leading_token(text, cursor)
    if not math.isfinite(value):
        return 0
    return int(value)
