"""
Tests for expression evaluator.
"""

import math

import pytest

from grapher.expr import (
    EvaluationContext,
    EvaluationError,
    EvaluationResult,
    Evaluator,
    ExprValue,
    FunctionSpec,
    UnknownIdentifierError,
    evaluate_ast,
    parse,
)


def eval_expr(expression: str, bindings: dict[str, float] | None = None) -> ExprValue:
    """Helper to evaluate an expression and return the value."""
    ast = parse(expression)
    context = EvaluationContext(bindings=bindings or {}, source=expression)
    result = evaluate_ast(ast, context)
    if not result.success:
        raise RuntimeError(result.error)
    return result.value


class TestArithmetic:
    """Tests for arithmetic operators."""

    def test_evaluates_literals(self):
        assert eval_expr("42") == 42.0
        assert eval_expr("0.25") == 0.25

    def test_evaluates_basic_operators(self):
        assert eval_expr("1 + 2") == 3.0
        assert eval_expr("5 - 7") == -2.0
        assert eval_expr("3 * 4") == 12.0
        assert eval_expr("1 / 4") == 0.25

    def test_respects_precedence(self):
        assert eval_expr("2 + 3 * 4") == 14.0
        assert eval_expr("(2 + 3) * 4") == 20.0
        assert eval_expr("2 * 3 ^ 2") == 18.0

    def test_power_is_left_associative(self):
        assert eval_expr("2^3^2") == 64.0

    def test_negation_applies_before_power(self):
        assert eval_expr("-2^2") == 4.0
        assert eval_expr("0 - 2^2") == -4.0

    def test_unary_plus_is_identity(self):
        assert eval_expr("+3") == 3.0
        assert eval_expr("--3") == 3.0


class TestIeeeSemantics:
    """Tests for division and power edge cases."""

    def test_division_by_zero_is_infinite(self):
        assert eval_expr("1/0") == math.inf
        assert eval_expr("-1/0") == -math.inf

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(eval_expr("0/0"))

    def test_fractional_power_of_negative_is_nan(self):
        assert math.isnan(eval_expr("(0-8)^0.5"))

    def test_overflow_is_infinite(self):
        assert eval_expr("10^400") == math.inf

    def test_non_finite_results_are_successful(self):
        result = evaluate_ast(parse("1/x"), EvaluationContext(bindings={"x": 0.0}))
        assert result.success
        assert not result.is_finite


class TestVariables:
    """Tests for variable lookup."""

    def test_reads_bindings(self):
        assert eval_expr("1/x", {"x": 2.0}) == 0.5
        assert eval_expr("x^2", {"x": -3.0}) == 9.0

    def test_accepts_integer_bindings(self):
        assert eval_expr("x + 1", {"x": 2}) == 3.0

    def test_unknown_identifier_raises(self):
        evaluator = Evaluator(EvaluationContext(bindings={"x": 1.0}, source="y+1"))
        with pytest.raises(UnknownIdentifierError) as exc_info:
            evaluator.evaluate(parse("y+1"))
        assert exc_info.value.name == "y"
        assert exc_info.value.position == 0

    def test_non_numeric_binding_raises(self):
        evaluator = Evaluator(EvaluationContext(bindings={"x": "abc"}))
        with pytest.raises(EvaluationError):
            evaluator.evaluate(parse("x"))

    def test_constants_cannot_be_shadowed(self):
        assert eval_expr("pi", {"pi": 3.0}) == math.pi
        assert eval_expr("e", {"e": 0.0}) == math.e


class TestFunctions:
    """Tests for function calls."""

    def test_calls_builtins(self):
        assert eval_expr("sin(0)") == 0.0
        assert eval_expr("logb(2, 8)") == pytest.approx(3.0)
        assert eval_expr("sqrt(abs(0-16))") == 4.0

    def test_calls_injected_functions(self):
        functions = {"double": FunctionSpec("double", 1, lambda v: v * 2)}
        ast = parse("double(x) + 1", functions=functions)
        context = EvaluationContext(bindings={"x": 4.0}, functions=functions)
        assert Evaluator(context).evaluate(ast) == 9.0


class TestEvaluationResult:
    """Tests for the non-raising entry point."""

    def test_reports_success(self):
        result = evaluate_ast(parse("1 + 1"), EvaluationContext(bindings={}))
        assert result == EvaluationResult(value=2.0, success=True)
        assert result.is_finite

    def test_reports_unknown_identifier(self):
        result = evaluate_ast(parse("y + 1"), EvaluationContext(bindings={}))
        assert not result.success
        assert result.value is None
        assert "y" in result.error
        assert not result.is_finite
