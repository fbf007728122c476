"""
Error types for the expression compiler.

All expression errors extend ExpressionError so that a caller can treat a
broken expression as "undefined everywhere" with a single except clause.
"""

from typing import Optional


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class TokenizerError(ExpressionError):
    """
    Error thrown during tokenization (lexical analysis).
    """

    pass


class UnexpectedCharacterError(TokenizerError):
    """
    A character outside the supported set was found in the source.
    """

    def __init__(self, char: str, position: int, expression: Optional[str] = None):
        super().__init__(f"Unexpected character: '{char}'", position, expression)
        self.char = char


class ParseError(ExpressionError):
    """
    Error thrown while compiling tokens into an expression tree.
    """

    pass


class MissingParenthesisError(ParseError):
    def __init__(self, position: Optional[int] = None, expression: Optional[str] = None):
        super().__init__("Missing closing parenthesis", position, expression)


class UnexpectedEndOfInputError(ParseError):
    def __init__(self, position: Optional[int] = None, expression: Optional[str] = None):
        super().__init__("Unexpected end of expression", position, expression)


class UnexpectedTokenError(ParseError):
    """
    A token appeared where it cannot be used, including trailing input
    after a complete expression.
    """

    def __init__(self, token: str, position: Optional[int] = None, expression: Optional[str] = None):
        super().__init__(f"Unexpected token: {token}", position, expression)
        self.token = token


class UnknownFunctionError(ParseError):
    def __init__(self, name: str, position: Optional[int] = None, expression: Optional[str] = None):
        super().__init__(f"Unknown function: {name}", position, expression)
        self.name = name


class EvaluationError(ExpressionError):
    """
    Error thrown during evaluation (runtime error).
    """

    pass


class UnknownIdentifierError(EvaluationError):
    """
    An identifier is neither a constant nor bound to a value.
    """

    def __init__(self, name: str, position: Optional[int] = None, expression: Optional[str] = None):
        super().__init__(f"Unknown identifier: {name}", position, expression)
        self.name = name


class BuiltinError(EvaluationError):
    """
    Error thrown when a built-in function is used incorrectly.
    """

    def __init__(
        self,
        function_name: str,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        full_message = f"{function_name}: {message}"
        super().__init__(full_message, position, expression)
        self.function_name = function_name


class ArityError(BuiltinError):
    """
    A built-in function was called with the wrong number of arguments.
    """

    def __init__(
        self,
        function_name: str,
        expected: int,
        actual: int,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(
            function_name,
            f"expected {expected} argument(s), got {actual}",
            position,
            expression,
        )
        self.expected = expected
        self.actual = actual


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
