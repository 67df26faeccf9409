"""Precedence-climbing formula evaluator.

Tokenizing, precedence resolution and arithmetic happen in one recursive
pass; no syntax tree is built. ``Evaluator.parse_formula`` parses one value,
then applies operators for as long as they bind tighter than the operator
the enclosing call is waiting on, and hands back the operator that stopped
it. The enclosing call compares that operator against its own pending
operator to decide whether to keep going.

Errors never unwind the recursion. The first failing check records its
ErrorKind on the ParseState; from then on no level applies another
operator and every level returns DEFAULT_RETURN.
"""

from __future__ import annotations

from .config import CONSTANTS, DEFAULT_RETURN, MAX_TOKEN_LENGTH
from .errors import ErrorKind, VariableError
from .functions import MathFunction, evaluate_function, lookup_function, power
from .logging_config import get_logger
from .scanner import Scanner
from .types import EvalResult, Operator
from .variables import VariableTable

logger = get_logger("evaluator")

# Operators compared with >= so that repeats group right to left
RIGHT_ASSOCIATIVE = frozenset({Operator.ASSIGN, Operator.POWER})


class ParseState:
    """Mutable state shared by every recursion level of one evaluation."""

    def __init__(self, formula: str, cursor: int = 0):
        self.scanner = Scanner(formula, cursor)
        self.error = ErrorKind.NONE
        self.depth = 0

    @property
    def failed(self) -> bool:
        return self.error != ErrorKind.NONE

    def fail(self, kind: ErrorKind) -> None:
        """Record ``kind`` unless an earlier error is already recorded."""
        if not self.failed:
            self.error = kind


class Evaluator:
    """Evaluates formulas against a variable table it owns or shares.

    Args:
        variables: Table to read and assign variables in (a new one if None)
        max_token_length: Identifiers this long or longer are rejected
        constants: Reserved names mapped to their values
    """

    def __init__(
        self,
        variables: VariableTable | None = None,
        max_token_length: int = MAX_TOKEN_LENGTH,
        constants: dict[str, float] | None = None,
    ):
        self.variables = variables if variables is not None else VariableTable()
        self.max_token_length = max_token_length
        self.constants = dict(CONSTANTS if constants is None else constants)

    def evaluate(self, formula: str, cursor: int = 0) -> EvalResult:
        """Evaluate ``formula`` starting at ``cursor``.

        Returns:
            EvalResult with the value, the error kind and the position where
            parsing stopped (the failure point, or the end of the formula)
        """
        state = ParseState(formula, cursor)
        value, _ = self.parse_formula(state, Operator.BEGIN_LINE)
        if state.failed:
            value = DEFAULT_RETURN
            logger.debug(
                "Evaluation of %r failed: %s at %d",
                formula,
                state.error.name,
                state.scanner.pos,
            )
        else:
            logger.debug("Evaluated %r = %r", formula, value)
        return EvalResult(value, state.error, state.scanner.pos)

    def parse_formula(
        self, state: ParseState, pending: Operator
    ) -> tuple[float, Operator]:
        """Parse a value and every operator that outranks ``pending``.

        Returns:
            Tuple of (value, operator that ended this level)
        """
        value, variable = self._parse_value(state)
        if state.failed:
            return DEFAULT_RETURN, pending

        scanner = state.scanner
        scanner.skip_whitespace()
        current = scanner.read_operator()
        if current is None:
            state.fail(ErrorKind.OPERATOR)
            return DEFAULT_RETURN, pending

        while not state.failed and self._applies(current, pending):
            value, current, variable = self._apply(state, current, value, variable)

        if state.failed:
            return DEFAULT_RETURN, current
        return value, current

    @staticmethod
    def _applies(current: Operator, pending: Operator) -> bool:
        if current in RIGHT_ASSOCIATIVE:
            return current >= pending
        return current > pending

    def _apply(
        self,
        state: ParseState,
        current: Operator,
        value: float,
        variable: int | None,
    ) -> tuple[float, Operator, int | None]:
        """Apply ``current`` to ``value``.

        Returns:
            Tuple of (new value, next operator, variable the new value
            still refers to or None)
        """
        if current is Operator.CLOSE_PAREN:
            # Only reachable at the outermost level, where no group is open
            state.depth -= 1
            if state.depth < 0:
                state.fail(ErrorKind.CLOSE_PAREN)
            return value, current, variable

        if current is Operator.ASSIGN:
            if variable is None:
                state.fail(ErrorKind.VARIABLE_EXPECTED)
                return DEFAULT_RETURN, current, None
            rhs, following = self.parse_formula(state, current)
            if state.failed:
                return DEFAULT_RETURN, following, None
            self.variables.set(variable, rhs)
            return rhs, following, variable

        rhs, following = self.parse_formula(state, current)
        if state.failed:
            return DEFAULT_RETURN, following, None

        if current is Operator.ADD:
            value += rhs
        elif current is Operator.SUBTRACT:
            value -= rhs
        elif current is Operator.MULTIPLY:
            value *= rhs
        elif current is Operator.DIVIDE:
            if rhs == 0.0:
                state.fail(ErrorKind.DIVISION)
                value = 0.0
            else:
                value /= rhs
        elif current is Operator.POWER:
            value = power(value, rhs)
        return value, following, None

    def _parse_value(self, state: ParseState) -> tuple[float, int | None]:
        """Parse one optionally signed value.

        Returns:
            Tuple of (value, variable index when the value is a variable)
        """
        scanner = state.scanner
        scanner.skip_whitespace()
        negative = scanner.consume_sign()

        variable = None
        if scanner.consume("("):
            value = self._parse_group(state)
        elif scanner.at_number():
            value = scanner.read_number()
        else:
            value, variable = self._parse_name(state)

        if state.failed:
            return DEFAULT_RETURN, None
        if negative:
            value = -value
        return value, variable

    def _parse_group(self, state: ParseState) -> float:
        """Parse the inside of a group whose '(' was just consumed."""
        state.depth += 1
        value, closing = self.parse_formula(state, Operator.OPEN_PAREN)
        if state.failed:
            return DEFAULT_RETURN
        if closing is not Operator.CLOSE_PAREN:
            state.fail(ErrorKind.OPEN_PAREN)
            return DEFAULT_RETURN
        state.depth -= 1
        return value

    def _parse_name(self, state: ParseState) -> tuple[float, int | None]:
        """Resolve a constant, function call or variable at the cursor."""
        scanner = state.scanner
        length = scanner.identifier_length()
        if length == 0:
            state.fail(ErrorKind.OPERAND)
            return DEFAULT_RETURN, None
        if length >= self.max_token_length:
            state.fail(ErrorKind.VARIABLE_LONG)
            return DEFAULT_RETURN, None

        name = scanner.read_identifier(length)
        if name in self.constants:
            return self.constants[name], None

        function = lookup_function(name)
        if function is not None:
            return self._call_function(state, function), None

        try:
            index = self.variables.get_or_create(name)
        except VariableError as e:
            state.fail(e.code)
            return DEFAULT_RETURN, None
        return self.variables.value(index), index

    def _call_function(self, state: ParseState, function: MathFunction) -> float:
        scanner = state.scanner
        scanner.skip_whitespace()
        if not scanner.consume("("):
            state.fail(ErrorKind.OPERAND)
            return DEFAULT_RETURN
        argument = self._parse_group(state)
        if state.failed:
            return DEFAULT_RETURN
        value, error = evaluate_function(function, argument)
        if error != ErrorKind.NONE:
            state.fail(error)
            return DEFAULT_RETURN
        return value
