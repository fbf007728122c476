"""
Compiled expressions.

A CompiledExpression is built once from a token list and then evaluated any
number of times with different bindings. It holds no mutable state, so a
single instance can be shared across threads without locking.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence, Tuple

from .ast import AstNode, collect_variables, count_ast_nodes
from .builtins import ExprValue, FunctionRegistry
from .errors import ExpressionError
from .evaluator import EvaluationContext, EvaluationResult, Evaluator, evaluate_ast
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .normalize import normalize
from .parser import Parser
from .tokenizer import Token, tokenize

logger = logging.getLogger(__name__)

# Name of the free variable used by evaluate_at().
DEFAULT_VARIABLE = "x"


@dataclass(frozen=True)
class CompiledExpression:
    """An expression compiled to an immutable AST."""

    source: Optional[str]
    """The (normalized) source text the tokens were produced from."""

    tokens: Tuple[Token, ...]
    ast: AstNode = field(repr=False)
    functions: Optional[FunctionRegistry] = field(default=None, repr=False, compare=False)

    @property
    def variables(self) -> frozenset:
        """Names the expression expects to find in the bindings."""
        return collect_variables(self.ast)

    def evaluate(self, bindings: Optional[Mapping[str, float]] = None) -> ExprValue:
        """
        Evaluates the expression against the bindings.

        Raises:
            UnknownIdentifierError: If a variable is not bound
        """
        context = EvaluationContext(
            bindings=bindings or {},
            source=self.source,
            functions=self.functions,
        )
        return Evaluator(context).evaluate(self.ast)

    def evaluate_at(self, x: float, variable: str = DEFAULT_VARIABLE) -> Optional[float]:
        """
        Evaluates at a single point of the free variable.

        Returns None wherever the expression is undefined: on any expression
        error and on nan or +/-inf results. Plotting and feature detection
        treat both the same way.
        """
        try:
            value = self.evaluate({variable: x})
        except ExpressionError:
            return None
        if not math.isfinite(value):
            return None
        return value

    def __call__(self, x: float) -> Optional[float]:
        return self.evaluate_at(x)


def compile(
    tokens: Sequence[Token],
    source: Optional[str] = None,
    limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
    functions: Optional[FunctionRegistry] = None,
) -> CompiledExpression:
    """
    Compiles a token list into a reusable expression.

    Args:
        tokens: Tokens produced by tokenize()
        source: The text the tokens came from, for error messages
        limits: Optional expression limits
        functions: Optional function registry (defaults to the built-ins)

    Raises:
        ParseError: If the tokens do not form a valid expression
        LimitExceededError: If the expression is too large or deep
    """
    ast = Parser(tokens, source, limits, functions).parse()
    logger.debug(
        "expression_compiled",
        extra={"source": source, "node_count": count_ast_nodes(ast)},
    )
    return CompiledExpression(
        source=source,
        tokens=tuple(tokens),
        ast=ast,
        functions=functions,
    )


def compile_expression(
    source: str,
    limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
    functions: Optional[FunctionRegistry] = None,
) -> CompiledExpression:
    """
    Normalizes, tokenizes and compiles user input in one step.

    Raises:
        ExpressionError: If the source cannot be compiled
    """
    normalized = normalize(source)
    tokens = tokenize(normalized, limits)
    return compile(tokens, normalized, limits, functions)


def evaluate(
    expression: CompiledExpression, bindings: Optional[Mapping[str, float]] = None
) -> EvaluationResult:
    """Evaluates a compiled expression, reporting errors in the result."""
    context = EvaluationContext(
        bindings=bindings or {},
        source=expression.source,
        functions=expression.functions,
    )
    return evaluate_ast(expression.ast, context)
