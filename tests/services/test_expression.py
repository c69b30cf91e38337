"""Tests for the arithmetic evaluator and calculator results."""

import pytest

from contour_engine.services.expression import (
    evaluate,
    evaluate_math,
    format_expression,
    format_number,
    is_math_expression,
    tokenize,
)


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("2 + 3 * 4", 14.0),
        ("(2 + 3) * 4", 20.0),
        ("2 ^ 3 ^ 2", 512.0),
        ("-5 + 3", -2.0),
        ("10 % 3", 1.0),
        ("3 * -2", -6.0),
        ("1.5 * 2", 3.0),
    ],
)
def test_evaluate_precedence(expression, expected):
    """Operators follow the usual precedence with right-associative powers."""
    assert evaluate(expression) == pytest.approx(expected)


@pytest.mark.parametrize("expression", ["1 / 0", "5 % 0", "(1 + 2", "1 + ", "abc", "1.2.3 + 1", ""])
def test_evaluate_rejects_malformed_input(expression):
    """Malformed input and division by zero evaluate to None."""
    assert evaluate(expression) is None


def test_tokenize_folds_leading_minus_into_number():
    """A minus at the start is part of the number literal."""
    tokens = tokenize("-3*2")
    assert [t.kind for t in tokens] == ["number", "operator", "number"]
    assert tokens[0].value == -3.0


def test_is_math_expression():
    """Arithmetic needs a numeric start and a binary operator."""
    assert is_math_expression("5 * 3")
    assert is_math_expression("12 +")
    assert not is_math_expression("hello + world")
    assert not is_math_expression("42")


def test_format_number_groups_and_limits_decimals():
    """Results are grouped and trimmed to six decimals."""
    assert format_number(1234567.0) == "1,234,567"
    assert format_number(1 / 3) == "0.333333"
    assert format_number(0.1 + 0.2) == "0.3"


def test_format_expression_prettifies_operators():
    """Operators are rendered with typographic symbols."""
    assert format_expression("5*3") == "5 × 3"
    assert format_expression("8/2") == "8 ÷ 2"
    assert format_expression("7%2") == "7 mod 2"


def test_evaluate_math_complete_result():
    """A complete expression yields a full calculator result."""
    result = evaluate_math("5*3")
    assert result is not None
    assert result.is_partial is False
    assert result.result == 15.0
    assert result.display_result == "5 × 3 = 15"


def test_evaluate_math_trailing_operator_is_partial():
    """A trailing operator produces a partial result from the prefix."""
    result = evaluate_math("12 +")
    assert result is not None
    assert result.is_partial is True
    assert result.result == 12.0
    assert result.display_result.endswith("...")


def test_evaluate_math_ignores_plain_text():
    """Non-arithmetic text is not a calculator intent."""
    assert evaluate_math("hello there") is None
    assert evaluate_math("1 / 0") is None
