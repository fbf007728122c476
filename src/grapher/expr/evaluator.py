"""
Expression evaluator.

Evaluates an AST against a set of variable bindings and returns a float.

Numeric semantics:
- Arithmetic is IEEE-754 double precision; division by zero yields
  +/-inf or nan instead of raising.
- Constants were resolved at compile time and cannot be shadowed by
  bindings.
- A variable missing from the bindings raises UnknownIdentifierError.
"""

import math
from dataclasses import dataclass
from typing import List, Mapping, Optional, cast

from .ast import (
    AstNode,
    BinaryOperator,
    BinaryOpNode,
    ConstantNode,
    FunctionCallNode,
    NumberLiteralNode,
    UnaryOperator,
    UnaryOpNode,
    VariableNode,
)
from .builtins import ExprValue, FunctionRegistry, get_function, ieee_divide, ieee_power
from .errors import EvaluationError, ExpressionError, UnknownFunctionError, UnknownIdentifierError


@dataclass
class EvaluationContext:
    """Evaluation context with variable bindings."""

    bindings: Mapping[str, float]
    """Variable bindings available to expressions."""

    source: Optional[str] = None
    """Source expression for error reporting."""

    functions: Optional[FunctionRegistry] = None
    """Function registry for built-ins and injected helpers."""


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: Optional[ExprValue]
    """The evaluated value, None if evaluation failed."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[str] = None
    """Error message if evaluation failed."""

    @property
    def is_finite(self) -> bool:
        """True when evaluation succeeded with a finite number."""
        return self.success and self.value is not None and math.isfinite(self.value)


class Evaluator:
    """Evaluates an AST node and returns the result."""

    def __init__(self, context: EvaluationContext):
        self._context = context
        self._source = context.source
        self._functions = context.functions

    def evaluate(self, node: AstNode) -> ExprValue:
        """Evaluates an AST node and returns the value."""
        node_type = node.type

        if node_type == "NumberLiteral":
            return cast(NumberLiteralNode, node).value

        if node_type == "Constant":
            return cast(ConstantNode, node).value

        if node_type == "Variable":
            n = cast(VariableNode, node)
            return self._evaluate_variable(n.name, n.position)

        if node_type == "FunctionCall":
            return self._evaluate_function_call(cast(FunctionCallNode, node))

        if node_type == "UnaryOp":
            n = cast(UnaryOpNode, node)
            return self._evaluate_unary_op(n.operator, n.operand)

        if node_type == "BinaryOp":
            return self._evaluate_binary_chain(cast(BinaryOpNode, node))

        raise EvaluationError(f"Unsupported node: {node_type}", node.position, self._source)

    def _evaluate_variable(self, name: str, position: int) -> ExprValue:
        """Looks up a variable in the bindings."""
        if name not in self._context.bindings:
            raise UnknownIdentifierError(name, position, self._source)

        value = self._context.bindings[name]
        try:
            return float(value)
        except OverflowError:
            # Integers beyond float range round to infinity, as IEEE-754 does
            return math.inf if value > 0 else -math.inf
        except (TypeError, ValueError):
            raise EvaluationError(
                f"Binding '{name}' is not a number: {value!r}", position, self._source
            )

    def _evaluate_function_call(self, node: FunctionCallNode) -> ExprValue:
        """Evaluates a function call."""
        spec = get_function(node.name, self._functions)
        if spec is None:
            raise UnknownFunctionError(node.name, node.position, self._source)

        args = [self.evaluate(arg) for arg in node.args]
        return spec.impl(*args)

    def _evaluate_unary_op(self, operator: UnaryOperator, operand: AstNode) -> ExprValue:
        """Evaluates a unary sign."""
        value = self.evaluate(operand)
        return -value if operator == "-" else value

    def _evaluate_binary_chain(self, node: BinaryOpNode) -> ExprValue:
        """
        Evaluates a binary operation and the operations along its left spine.

        Operators associate to the left, so "x+x+...+x" nests on the left.
        The spine is folded in a loop; only right operands recurse.
        """
        spine: List[BinaryOpNode] = []
        current: AstNode = node
        while isinstance(current, BinaryOpNode):
            spine.append(current)
            current = current.left

        value = self.evaluate(current)
        for op in reversed(spine):
            value = self._apply_binary_op(op.operator, value, self.evaluate(op.right))
        return value

    @staticmethod
    def _apply_binary_op(
        operator: BinaryOperator,
        left_value: ExprValue,
        right_value: ExprValue,
    ) -> ExprValue:
        """Applies a binary operator to evaluated operands."""
        if operator == "+":
            return left_value + right_value

        if operator == "-":
            return left_value - right_value

        if operator == "*":
            return left_value * right_value

        if operator == "/":
            return ieee_divide(left_value, right_value)

        return ieee_power(left_value, right_value)


def evaluate_ast(ast: AstNode, context: EvaluationContext) -> EvaluationResult:
    """
    Evaluates an AST against a context and returns the result.

    Expression errors are reported in the result instead of being raised.
    Non-finite values are a successful result; use ``is_finite`` to check.

    Args:
        ast: The AST to evaluate
        context: The evaluation context with bindings

    Returns:
        The evaluation result with value and success status
    """
    try:
        evaluator = Evaluator(context)
        value = evaluator.evaluate(ast)
        return EvaluationResult(value=value, success=True)
    except ExpressionError as error:
        return EvaluationResult(value=None, success=False, error=error.message)
