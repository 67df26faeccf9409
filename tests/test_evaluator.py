"""Tests for the precedence-climbing evaluator."""

import math

import pytest

from evalform_pkg.config import MAX_VARIABLES
from evalform_pkg.errors import ErrorKind
from evalform_pkg.evaluator import Evaluator
from evalform_pkg.types import EvalResult
from evalform_pkg.variables import VariableTable


@pytest.fixture
def evaluator():
    return Evaluator()


def value_of(evaluator, formula):
    result = evaluator.evaluate(formula)
    assert result.error == ErrorKind.NONE, f"{formula!r} failed with {result.error!r}"
    return result.value


class TestPrecedence:
    """Test operator precedence and associativity."""

    @pytest.mark.parametrize(
        "formula,expected",
        [
            ("1+2*3", 7.0),
            ("(1+2)*3", 9.0),
            ("2*3+4", 10.0),
            ("2+3*4-5", 9.0),
            ("2-3*4+5", -5.0),
            ("10-4-3", 3.0),
            ("1-2+3", 2.0),
            ("1+2-3+4", 4.0),
            ("1-2+3-4", -2.0),
            ("8/2/2", 2.0),
            ("8/2*2", 8.0),
            ("2*3/4*5", 7.5),
            ("10/2*3/5", 3.0),
            ("2*3^2", 18.0),
            ("2^3*2", 16.0),
            ("1e3/4", 250.0),
            (" 1 +\t2 ", 3.0),
        ],
    )
    def test_standard_infix(self, evaluator, formula, expected):
        assert value_of(evaluator, formula) == pytest.approx(expected)

    def test_power_is_right_associative(self, evaluator):
        assert value_of(evaluator, "2^3^2") == 512.0
        assert value_of(evaluator, "(2^3)^2") == 64.0

    def test_unary_sign_binds_tightest(self, evaluator):
        assert value_of(evaluator, "-2^2") == 4.0
        assert value_of(evaluator, "2*-3") == -6.0
        assert value_of(evaluator, "3 - -2") == 5.0
        assert value_of(evaluator, "3-(-2)") == 5.0
        assert value_of(evaluator, "-(2+3)") == -5.0
        assert value_of(evaluator, "+4") == 4.0
        assert value_of(evaluator, "2^-1") == 0.5

    def test_deep_nesting(self, evaluator):
        formula = "(" * 50 + "1+1" + ")" * 50
        assert value_of(evaluator, formula) == 2.0


class TestIdentifiers:
    """Test constants, functions and variables."""

    def test_constants(self, evaluator):
        assert value_of(evaluator, "%pi") == math.pi
        assert value_of(evaluator, "%E") == math.e
        assert len(evaluator.variables) == 0

    def test_bare_constant_names_are_variables(self, evaluator):
        assert value_of(evaluator, "e = 3") == 3.0
        assert value_of(evaluator, "pi") == 0.0
        assert value_of(evaluator, "E * %e") == 3.0 * math.e
        assert list(evaluator.variables) == [("E", 3.0), ("PI", 0.0)]

    @pytest.mark.parametrize(
        "formula,expected",
        [
            ("int(-1.2)", -1.0),
            ("INT(1.8)", 1.0),
            ("abs(-3)", 3.0),
            ("log10(1000)", 3.0),
            ("exp(0)", 1.0),
            ("log(exp(2))", 2.0),
            ("sqrt (16)", 4.0),
            ("SIN(0)", 0.0),
            ("cos(%pi)", -1.0),
            ("tan(0)", 0.0),
            ("atan(1)*4", math.pi),
            ("acos(0)", math.pi / 2),
            ("asin(-1)", -math.pi / 2),
            ("sqrt(sqrt(16)) + 1", 3.0),
        ],
    )
    def test_functions(self, evaluator, formula, expected):
        assert value_of(evaluator, formula) == pytest.approx(expected)

    def test_function_result_is_signed(self, evaluator):
        assert value_of(evaluator, "-sqrt(4)") == -2.0


class TestVariables:
    """Test assignment and lookup-or-create."""

    def test_assignment(self, evaluator):
        result = evaluator.evaluate("a = 5^2")
        assert result.value == 25.0
        assert result.error == ErrorKind.NONE
        index = evaluator.variables.find("A")
        assert evaluator.variables.value(index) == 25.0
        assert value_of(evaluator, "A") == 25.0

    def test_chained_assignment(self, evaluator):
        result = evaluator.evaluate("a0 = a1 = a2 = sqrt(2)")
        assert result.ok
        assert result.value == math.sqrt(2)
        for name in ("a0", "a1", "a2"):
            assert value_of(evaluator, name) == math.sqrt(2)
        assert [name for name, _ in evaluator.variables] == ["A0", "A1", "A2"]

    def test_unset_variable_reads_zero(self, evaluator):
        result = evaluator.evaluate("b + 1")
        assert result.value == 1.0
        assert result.error == ErrorKind.NONE
        assert evaluator.variables.entry(evaluator.variables.find("b")) == ("B", 0.0)

    def test_reread_has_no_side_effect(self, evaluator):
        evaluator.evaluate("a = 25")
        index = evaluator.variables.find("a")
        for _ in range(3):
            assert evaluator.evaluate("a") == EvalResult(25.0, ErrorKind.NONE, 1)
        assert evaluator.variables.find("a") == index
        assert len(evaluator.variables) == 1

    def test_assignment_inside_expression(self, evaluator):
        assert value_of(evaluator, "2 * (x = 3)") == 6.0
        assert value_of(evaluator, "x") == 3.0

    def test_assignment_right_side_sees_earlier_values(self, evaluator):
        evaluator.evaluate("n = 1")
        assert value_of(evaluator, "n = n + 1") == 2.0
        assert value_of(evaluator, "n = n * 10") == 20.0

    def test_assignment_binds_loosest(self, evaluator):
        assert value_of(evaluator, "y = 1 + 2 * 3") == 7.0
        assert value_of(evaluator, "y") == 7.0

    def test_shared_table(self):
        table = VariableTable()
        Evaluator(table).evaluate("shared = 4")
        assert value_of(Evaluator(table), "shared") == 4.0

    def test_capacity(self):
        evaluator = Evaluator(VariableTable(max_variables=4))
        for i in range(4):
            assert evaluator.evaluate(f"v{i} = {i}").ok
        result = evaluator.evaluate("v4 = 1")
        assert result.error == ErrorKind.VARIABLE_FULL
        assert result.value == 0.0
        assert value_of(evaluator, "v3 + 1") == 4.0

    def test_default_capacity(self, evaluator):
        for i in range(MAX_VARIABLES):
            assert evaluator.evaluate(f"x{i}").ok
        assert evaluator.evaluate(f"x{MAX_VARIABLES}").error == ErrorKind.VARIABLE_FULL
        assert len(evaluator.variables) == MAX_VARIABLES

    def test_name_length_limit(self):
        evaluator = Evaluator(max_token_length=4)
        assert evaluator.evaluate("abc").ok
        assert evaluator.evaluate("abcd").error == ErrorKind.VARIABLE_LONG


class TestCursor:
    """Test the reported stop position."""

    def test_cursor_at_end(self, evaluator):
        assert evaluator.evaluate("1+2").cursor == 3
        assert evaluator.evaluate("1 + 2   ").cursor == 8

    def test_cursor_at_invalid_operator(self, evaluator):
        result = evaluator.evaluate("1 $ 2")
        assert result.error == ErrorKind.OPERATOR
        assert result.cursor == 2

    def test_start_offset(self, evaluator):
        result = evaluator.evaluate("xx 1+1", cursor=3)
        assert result.value == 2.0
        assert result.cursor == 6

    def test_result_unpacks(self, evaluator):
        value, error, cursor = evaluator.evaluate("1+1")
        assert (value, error, cursor) == (2.0, ErrorKind.NONE, 3)
