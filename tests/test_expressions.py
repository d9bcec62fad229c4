from __future__ import annotations

import pytest

from shopfloor.data.expressions import ExpressionError, evaluate, expression_sort_key


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3/4", 0.75),
        ("2 + 3 * 4", 14.0),
        ("(2 + 3) * 4", 20.0),
        ("-(1 + 1)", -2.0),
        ("10 - 2.5", 7.5),
        (" 7 ", 7.0),
    ],
)
def test_evaluate_arithmetic(text, expected):
    assert evaluate(text) == pytest.approx(expected)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "2 ** 10",
        "7 // 2",
        "abc",
        "__import__('os').system('true')",
        "(1).real",
        "'3' + '4'",
        "True + 1",
        "1/0",
        "1\x00",
        "3 /",
        "1 + " * 40 + "1",
    ],
)
def test_evaluate_rejects_everything_else(text):
    with pytest.raises(ExpressionError):
        evaluate(text)


def test_expression_error_is_value_error():
    assert issubclass(ExpressionError, ValueError)


def test_expression_sort_key_puts_numbers_first():
    values = ["1/2", "oops", "3/4", "1/10", ""]
    assert sorted(values, key=expression_sort_key) == ["1/10", "1/2", "3/4", "", "oops"]


def test_expression_sort_key_tolerates_null_bytes():
    assert expression_sort_key("1/2\x00") == (1, "1/2\x00")
