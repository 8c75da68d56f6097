import pytest

from clauncher.intent.calculator import (
    ArithmeticEvaluator,
    CalculatorError,
    format_number,
    looks_like_math,
    normalize_expression,
)


def test_basic_arithmetic() -> None:
    evaluator = ArithmeticEvaluator()

    assert evaluator.evaluate("2+2") == 4.0
    assert evaluator.evaluate("10 * (3-1)") == 20.0
    assert evaluator.evaluate("-3 + 5") == 2.0
    assert evaluator.evaluate("2^10") == 1024.0


def test_locale_and_keyboard_variants_normalized() -> None:
    evaluator = ArithmeticEvaluator()

    assert normalize_expression("2 x 3") == "2 * 3"
    assert evaluator.evaluate("2 × 3") == 6.0
    assert evaluator.evaluate("10 ÷ 4") == 2.5
    assert evaluator.evaluate("1,5 + 1") == 2.5
    assert evaluator.evaluate("007 + 1") == 8.0


@pytest.mark.parametrize(
    "expression",
    [
        "1/0",
        "2^99999",
        "(-8)^0.5",
        "__import__('os')",
        "2 +",
        "1.2.3",
        "",
    ],
)
def test_invalid_expressions_rejected(expression: str) -> None:
    with pytest.raises(CalculatorError):
        ArithmeticEvaluator().evaluate(expression)


def test_exponent_bound_is_configurable() -> None:
    evaluator = ArithmeticEvaluator(max_exponent=8)

    assert evaluator.evaluate("2^8") == 256.0
    with pytest.raises(CalculatorError):
        evaluator.evaluate("2^9")


def test_math_heuristic_needs_digit_and_operator() -> None:
    assert looks_like_math("2+2")
    assert looks_like_math("(3")
    assert not looks_like_math("gibberish")
    assert not looks_like_math("c++")
    assert not looks_like_math("2024")


def test_number_formatting() -> None:
    assert format_number(4.0) == "4"
    assert format_number(2.5) == "2.5"
    assert format_number(1 / 3) == "0.333333333333"
    assert format_number(1e20) == "1e+20"


def test_out_of_range_literal_rejected() -> None:
    evaluator = ArithmeticEvaluator(max_length=1000)

    with pytest.raises(CalculatorError):
        evaluator.evaluate("1" + "0" * 400 + "+1")
    with pytest.raises(CalculatorError):
        evaluator.evaluate("9" * 320 + "*2")


def test_deeply_chained_expression_rejected() -> None:
    evaluator = ArithmeticEvaluator(max_length=200_000)

    with pytest.raises(CalculatorError):
        evaluator.evaluate("+".join(["1"] * 50_000))


def test_expression_length_is_bounded() -> None:
    evaluator = ArithmeticEvaluator(max_length=10)

    assert evaluator.evaluate("1+2+3+4+5") == 15.0
    with pytest.raises(CalculatorError):
        evaluator.evaluate("1+2+3+4+5+6")
