"""Built-in single-argument math functions and their domain checks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from .config import DEFAULT_RETURN
from .errors import ErrorKind


def _positive(x: float) -> bool:
    return x > 0.0


def _unit_interval(x: float) -> bool:
    # Upper bound is exclusive: asin(1) and acos(1) are rejected
    return -1.0 <= x < 1.0


def _truncate(x: float) -> float:
    """Round toward zero, so INT(-1.2) is -1 rather than -2."""
    if not math.isfinite(x):
        return x
    if x < 0:
        return float(math.ceil(x))
    return float(math.floor(x))


@dataclass(frozen=True)
class MathFunction:
    """A named function and the predicate its argument must satisfy."""

    name: str
    func: Callable[[float], float]
    domain: Callable[[float], bool] | None = None

    def accepts(self, x: float) -> bool:
        return self.domain is None or self.domain(x)


MATH_FUNCTIONS = {
    fn.name: fn
    for fn in (
        MathFunction("SIN", math.sin),
        MathFunction("COS", math.cos),
        MathFunction("TAN", math.tan),
        MathFunction("EXP", math.exp),
        MathFunction("LOG", math.log, _positive),
        MathFunction("LOG10", math.log10, _positive),
        MathFunction("ABS", math.fabs),
        MathFunction("ACOS", math.acos, _unit_interval),
        MathFunction("ASIN", math.asin, _unit_interval),
        MathFunction("ATAN", math.atan),
        MathFunction("SQRT", math.sqrt, _positive),
        MathFunction("INT", _truncate),
    )
}


def lookup_function(name: str) -> MathFunction | None:
    """Return the function registered under an upper-cased ``name``."""
    return MATH_FUNCTIONS.get(name)


def evaluate_function(function: MathFunction, x: float) -> tuple[float, ErrorKind]:
    """Apply ``function`` to ``x`` after checking its domain.

    Returns:
        Tuple of (value, error). On a domain failure the value is
        DEFAULT_RETURN and the error is ErrorKind.PARAMETER.
    """
    if not function.accepts(x):
        return DEFAULT_RETURN, ErrorKind.PARAMETER
    try:
        return function.func(x), ErrorKind.NONE
    except OverflowError:
        # exp() of a large argument: C libm returns HUGE_VAL
        return math.inf, ErrorKind.NONE
    except ValueError:
        # sin(inf) and friends: C libm returns NaN
        return math.nan, ErrorKind.NONE


def power(base: float, exponent: float) -> float:
    """Raise ``base`` to ``exponent`` with C ``pow`` results instead of exceptions."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        negative = base < 0 and _is_odd_integer(exponent)
        return -math.inf if negative else math.inf
    except ValueError:
        if base == 0.0:
            # Zero to a negative power
            negative = math.copysign(1.0, base) < 0 and _is_odd_integer(exponent)
            return -math.inf if negative else math.inf
        return math.nan


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x == math.floor(x) and math.fmod(x, 2.0) != 0.0
