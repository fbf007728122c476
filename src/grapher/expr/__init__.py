"""
Mathematical expression engine.

This module turns text such as "2x^2 + sin(x)" into a reusable,
side-effect-free evaluator over one free variable.
"""

from .ast import (
    AstNode,
    AstNodeBase,
    BinaryOperator,
    BinaryOpNode,
    ConstantNode,
    FunctionCallNode,
    NumberLiteralNode,
    UnaryOperator,
    UnaryOpNode,
    VariableNode,
    ast_to_string,
    calculate_ast_depth,
    collect_variables,
    count_ast_nodes,
)
from .builtins import (
    BUILTIN_CONSTANTS,
    BUILTIN_FUNCTIONS,
    BuiltinFunction,
    ExprValue,
    FunctionRegistry,
    FunctionSpec,
    call_builtin,
    get_function,
    ieee_divide,
    ieee_power,
    is_builtin_function,
    is_constant,
)
from .compiler import (
    DEFAULT_VARIABLE,
    CompiledExpression,
    compile,
    compile_expression,
    evaluate,
)
from .errors import (
    ArityError,
    BuiltinError,
    EvaluationError,
    ExpressionError,
    LimitExceededError,
    MissingParenthesisError,
    ParseError,
    TokenizerError,
    UnexpectedCharacterError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnknownFunctionError,
    UnknownIdentifierError,
)
from .evaluator import (
    EvaluationContext,
    EvaluationResult,
    Evaluator,
    evaluate_ast,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_nesting_depth,
    check_ast_node_count,
    check_expression_length,
    check_function_arg_count,
)
from .normalize import normalize
from .parser import Parser, parse
from .tokenizer import Token, Tokenizer, TokenType, tokenize

__all__ = [
    # AST types
    "AstNode",
    "AstNodeBase",
    "NumberLiteralNode",
    "ConstantNode",
    "VariableNode",
    "FunctionCallNode",
    "UnaryOpNode",
    "BinaryOpNode",
    "UnaryOperator",
    "BinaryOperator",
    "count_ast_nodes",
    "calculate_ast_depth",
    "collect_variables",
    "ast_to_string",
    # Errors
    "ExpressionError",
    "TokenizerError",
    "UnexpectedCharacterError",
    "ParseError",
    "MissingParenthesisError",
    "UnexpectedEndOfInputError",
    "UnexpectedTokenError",
    "UnknownFunctionError",
    "EvaluationError",
    "UnknownIdentifierError",
    "BuiltinError",
    "ArityError",
    "LimitExceededError",
    # Limits
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    "check_expression_length",
    "check_nesting_depth",
    "check_ast_node_count",
    "check_function_arg_count",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    "normalize",
    # Parser
    "Parser",
    "parse",
    # Compiler
    "CompiledExpression",
    "DEFAULT_VARIABLE",
    "compile",
    "compile_expression",
    "evaluate",
    # Evaluator
    "EvaluationContext",
    "EvaluationResult",
    "Evaluator",
    "evaluate_ast",
    # Builtins
    "ExprValue",
    "BuiltinFunction",
    "FunctionSpec",
    "FunctionRegistry",
    "BUILTIN_FUNCTIONS",
    "BUILTIN_CONSTANTS",
    "call_builtin",
    "get_function",
    "is_builtin_function",
    "is_constant",
    "ieee_divide",
    "ieee_power",
]
