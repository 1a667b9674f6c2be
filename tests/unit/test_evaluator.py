"""Tests for the Lox evaluator and runtime values."""

from __future__ import annotations

import math

import pytest

from lox.core.errors import LoxRuntimeError, RuntimeErrorKind
from lox.core.expression_lang.evaluator import (
    ADDITION_EXPECTED,
    NUMBERS_EXPECTED,
    evaluate,
    is_truthy,
    values_equal,
)
from lox.core.expression_lang.parser import parse, parse_expr
from lox.core.ir.expressions import Binary, Unary
from lox.core.ir.values import (
    FALSE,
    NIL,
    TRUE,
    BooleanValue,
    NumberValue,
    StringValue,
    format_number,
    number,
    string,
)


def run(text: str):
    return evaluate(parse_expr(text))


class TestArithmetic:
    def test_precedence(self) -> None:
        assert run("1 + 2 * 3") == number(7)

    def test_grouping(self) -> None:
        assert run("(1 + 2) * 3") == number(9)

    def test_subtraction_left_associative(self) -> None:
        assert run("10 - 4 - 3") == number(3)

    def test_division(self) -> None:
        assert run("7 / 2") == number(3.5)

    def test_negation(self) -> None:
        assert run("--3") == number(3)

    def test_division_by_zero_is_infinite(self) -> None:
        assert run("1 / 0").value == math.inf
        assert run("-1 / 0").value == -math.inf

    def test_zero_over_zero_is_nan(self) -> None:
        assert math.isnan(run("0 / 0").value)

    def test_jlox_evaluate_fixture(self, lox_fixture) -> None:
        source, expectations = lox_fixture("expressions/evaluate")
        assert [evaluate(parse(source)).describe()] == expectations


class TestStrings:
    def test_concatenation(self) -> None:
        assert run('"a" + "b"') == string("ab")

    def test_concat_fixture(self, lox_fixture) -> None:
        source, expectations = lox_fixture("expressions/concat")
        assert [evaluate(parse(source)).describe()] == expectations


class TestComparison:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1 < 2", True),
            ("2 < 1", False),
            ("2 <= 2", True),
            ("3 > 2", True),
            ("2 >= 3", False),
        ],
    )
    def test_numbers(self, text: str, expected: bool) -> None:
        assert run(text) == BooleanValue(value=expected)


class TestEquality:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1 == 1", True),
            ("1 == 2", False),
            ('"a" == "a"', True),
            ("nil == nil", True),
            ("true == true", True),
            ("true != false", True),
            # values of different types are never equal
            ('1 == "1"', False),
            ("nil == false", False),
            ("0 == false", False),
            ('"" != nil', True),
        ],
    )
    def test_equality(self, text: str, expected: bool) -> None:
        assert run(text) == BooleanValue(value=expected)

    def test_nan_is_not_equal_to_itself(self) -> None:
        nan = number(math.nan)
        assert not values_equal(nan, nan)


class TestTruthiness:
    def test_not_nil(self) -> None:
        assert run("!nil") == TRUE

    def test_not_false(self) -> None:
        assert run("!false") == TRUE

    def test_zero_is_truthy(self) -> None:
        assert run("!0") == FALSE

    def test_empty_string_is_truthy(self) -> None:
        assert run('!""') == FALSE

    def test_is_truthy(self) -> None:
        assert not is_truthy(NIL)
        assert not is_truthy(FALSE)
        assert is_truthy(TRUE)
        assert is_truthy(number(0))
        assert is_truthy(string(""))


class TestRuntimeErrors:
    def test_addition_uses_compound_expectation(self) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            run('"a" + 1')
        error = exc_info.value
        assert error.kind == RuntimeErrorKind.BINARY_OPERANDS
        assert error.expected == ADDITION_EXPECTED == "(number, number) or (string, string)"
        assert error.computed == (string("a"), number(1))
        assert error.message == (
            "invalid operands for binary operator `+': "
            "expected (number, number) or (string, string) but got (string, number)"
        )

    def test_booleans_cannot_be_added(self) -> None:
        with pytest.raises(LoxRuntimeError, match=r"\(string, string\) but got \(boolean, boolean\)"):
            run("true + false")

    def test_comparison_expects_numbers(self) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            run("true < nil")
        assert exc_info.value.expected == NUMBERS_EXPECTED
        assert exc_info.value.message == (
            "invalid operands for binary operator `<': "
            "expected (number, number) but got (boolean, nil)"
        )

    @pytest.mark.parametrize("op", ["-", "*", "/"])
    def test_arithmetic_expects_numbers(self, op: str) -> None:
        with pytest.raises(LoxRuntimeError, match=r"expected \(number, number\) but got \(string, number\)"):
            run(f'"x" {op} 1')

    def test_negation_expects_number(self) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            run('-"x"')
        error = exc_info.value
        assert error.kind == RuntimeErrorKind.UNARY_OPERANDS
        assert error.computed == (string("x"),)
        assert error.message == (
            "invalid operands for unary operator `-': expected (number) but got (string)"
        )

    def test_error_references_failing_node(self) -> None:
        tree = parse_expr("1 + (2 * nil)")
        with pytest.raises(LoxRuntimeError) as exc_info:
            evaluate(tree)
        error = exc_info.value
        assert isinstance(tree, Binary)
        assert isinstance(error.expression, Binary)
        assert error.expression is tree.right.expression
        assert error.token.lexeme == "*"

    def test_nested_unary_error_points_at_operator(self) -> None:
        tree = parse_expr('!-"x"')
        with pytest.raises(LoxRuntimeError) as exc_info:
            evaluate(tree)
        assert isinstance(tree, Unary)
        assert exc_info.value.expression is tree.operand
        assert exc_info.value.token.location.offset == 1

    def test_left_operand_evaluated_first(self) -> None:
        with pytest.raises(LoxRuntimeError) as exc_info:
            run('(-"l") + (-"r")')
        assert exc_info.value.computed == (string("l"),)


class TestValues:
    @pytest.mark.parametrize(
        "n,text",
        [
            (7.0, "7"),
            (-3.0, "-3"),
            (0.0, "0"),
            (-0.0, "-0"),
            (2.5, "2.5"),
            (0.1, "0.1"),
            (math.inf, "inf"),
            (-math.inf, "-inf"),
        ],
    )
    def test_format_number(self, n: float, text: str) -> None:
        assert format_number(n) == text

    @pytest.mark.parametrize("literal", ["0", "1", "42", "1000000"])
    def test_whole_literals_display_without_fraction(self, literal: str) -> None:
        value = run(literal)
        assert value.value == float(literal)
        assert str(value) == literal

    def test_display_forms(self) -> None:
        assert str(NIL) == "nil"
        assert str(TRUE) == "true"
        assert str(string("ab")) == "ab"
        assert string("ab").describe() == '"ab"'
        assert number(1.5).describe() == "1.5"

    def test_type_names(self) -> None:
        assert [v.type_name for v in (NIL, string(""), number(0), TRUE)] == [
            "nil",
            "string",
            "number",
            "boolean",
        ]

    def test_values_are_frozen(self) -> None:
        value = StringValue(value="x")
        with pytest.raises(Exception):
            value.value = "y"  # type: ignore[misc]

    def test_number_coerces_to_float(self) -> None:
        assert isinstance(number(3).value, float)
        assert NumberValue(value=3).value == 3.0
