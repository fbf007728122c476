"""
Parser for mathematical expressions.

Parses a list of tokens into an Abstract Syntax Tree (AST).
Uses recursive descent parsing with operator precedence.

Precedence (lowest to highest):
1. Additive: +, -
2. Multiplicative: *, /
3. Power: ^ (left-associative, so 2^3^2 is (2^3)^2)
4. Unary: +, -
5. Primary: numbers, constants, variables, calls, parentheses

Unary signs bind tighter than '^', so -2^2 is (-2)^2.

Function names and constants are resolved while parsing; only variables
are left for the evaluator.
"""

from typing import List, Optional, Sequence

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
    count_ast_nodes,
)
from .builtins import BUILTIN_CONSTANTS, FunctionRegistry, check_arity, get_function
from .errors import (
    MissingParenthesisError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnknownFunctionError,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_node_count,
    check_function_arg_count,
    check_nesting_depth,
)
from .tokenizer import Token, TokenType, tokenize


def describe_token(token: Token) -> str:
    """Returns the token as it would appear in source text."""
    if token.type == TokenType.NUMBER:
        return format(token.value, "g")
    return str(token.value)


class Parser:
    """Parser for expression token lists."""

    def __init__(
        self,
        tokens: Sequence[Token],
        source: Optional[str] = None,
        limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
        functions: Optional[FunctionRegistry] = None,
    ):
        self._tokens = tuple(tokens)
        self._source = source
        self._limits = limits
        self._functions = functions
        self._current = 0
        self._depth = 0

    def parse(self) -> AstNode:
        """Parses the token list into an AST."""
        ast = self._parse_additive()

        # Trailing input after a complete expression is rejected
        if not self._is_at_end():
            token = self._peek()
            raise UnexpectedTokenError(describe_token(token), token.position, self._source)

        check_ast_node_count(count_ast_nodes(ast), self._limits)

        return ast

    # ============================================================
    # Token Helpers
    # ============================================================

    def _is_at_end(self) -> bool:
        return self._current >= len(self._tokens)

    def _peek(self) -> Token:
        return self._tokens[self._current]

    def _previous(self) -> Token:
        return self._tokens[self._current - 1]

    def _advance(self) -> Token:
        if not self._is_at_end():
            self._current += 1
        return self._previous()

    def _end_position(self) -> int:
        if self._source is not None:
            return len(self._source)
        if self._tokens:
            return self._tokens[-1].position + 1
        return 0

    def _current_position(self) -> int:
        if self._is_at_end():
            return self._end_position()
        return self._peek().position

    def _check(self, token_type: TokenType, value: Optional[str] = None) -> bool:
        if self._is_at_end():
            return False
        token = self._peek()
        return token.type == token_type and (value is None or token.value == value)

    def _match_operator(self, *operators: str) -> bool:
        for operator in operators:
            if self._check(TokenType.OPERATOR, operator):
                self._advance()
                return True
        return False

    def _consume_closing_paren(self) -> Token:
        if self._check(TokenType.OPERATOR, ")"):
            return self._advance()
        raise MissingParenthesisError(self._current_position(), self._source)

    # ============================================================
    # Expression Parsing (by precedence, lowest to highest)
    # ============================================================

    def _parse_additive(self) -> AstNode:
        """Parses additive: +, -"""
        node = self._parse_multiplicative()

        while self._match_operator("+", "-"):
            token = self._previous()
            operator: BinaryOperator = "+" if token.value == "+" else "-"
            right = self._parse_multiplicative()
            node = BinaryOpNode(
                position=token.position,
                operator=operator,
                left=node,
                right=right,
            )

        return node

    def _parse_multiplicative(self) -> AstNode:
        """Parses multiplicative: *, /"""
        node = self._parse_power()

        while self._match_operator("*", "/"):
            token = self._previous()
            operator: BinaryOperator = "*" if token.value == "*" else "/"
            right = self._parse_power()
            node = BinaryOpNode(
                position=token.position,
                operator=operator,
                left=node,
                right=right,
            )

        return node

    def _parse_power(self) -> AstNode:
        """Parses power: ^ (chained left to right)"""
        node = self._parse_unary()

        while self._match_operator("^"):
            position = self._previous().position
            right = self._parse_unary()
            node = BinaryOpNode(
                position=position,
                operator="^",
                left=node,
                right=right,
            )

        return node

    def _parse_unary(self) -> AstNode:
        """Parses unary: +, -"""
        # Open calls of this method are the current nesting of parentheses,
        # call arguments and signs
        self._depth += 1
        try:
            check_nesting_depth(self._depth, self._limits)

            if self._match_operator("+", "-"):
                token = self._previous()
                operator: UnaryOperator = "+" if token.value == "+" else "-"
                operand = self._parse_unary()
                return UnaryOpNode(
                    position=token.position,
                    operator=operator,
                    operand=operand,
                )

            return self._parse_primary()
        finally:
            self._depth -= 1

    def _parse_primary(self) -> AstNode:
        """Parses primary expressions: numbers, identifiers, calls, parentheses."""
        if self._is_at_end():
            raise UnexpectedEndOfInputError(self._end_position(), self._source)

        token = self._peek()
        position = token.position

        if token.type == TokenType.NUMBER:
            self._advance()
            return NumberLiteralNode(position=position, value=float(token.value))

        if self._match_operator("("):
            expr = self._parse_additive()
            self._consume_closing_paren()
            return expr

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            name = str(token.value)

            if self._match_operator("("):
                return self._parse_call(name, position)

            constant = BUILTIN_CONSTANTS.get(name)
            if constant is not None:
                return ConstantNode(position=position, name=name, value=constant)

            return VariableNode(position=position, name=name)

        raise UnexpectedTokenError(describe_token(token), position, self._source)

    def _parse_call(self, name: str, position: int) -> AstNode:
        """Parses a call; the opening paren is already consumed."""
        args = self._parse_argument_list()

        spec = get_function(name, self._functions)
        if spec is None:
            raise UnknownFunctionError(name, position, self._source)

        check_function_arg_count(len(args), self._limits)
        check_arity(spec, len(args), position, self._source)

        return FunctionCallNode(position=position, name=name, args=tuple(args))

    def _parse_argument_list(self) -> List[AstNode]:
        """Parses function argument list (already consumed opening paren)."""
        args: List[AstNode] = []

        if not self._check(TokenType.OPERATOR, ")"):
            args.append(self._parse_additive())
            while self._check(TokenType.COMMA):
                self._advance()
                args.append(self._parse_additive())

        self._consume_closing_paren()
        return args


def parse(
    source: str,
    limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
    functions: Optional[FunctionRegistry] = None,
) -> AstNode:
    """
    Parses an expression string into an AST.

    The source is tokenized as-is; implicit multiplication is not rewritten.

    Args:
        source: The expression string to parse
        limits: Optional expression limits
        functions: Optional function registry (defaults to the built-ins)

    Returns:
        The parsed AST

    Raises:
        TokenizerError: If tokenization fails
        ParseError: If parsing fails
    """
    tokens = tokenize(source, limits)
    parser = Parser(tokens, source, limits, functions)
    return parser.parse()
