"""
Tokenizer (lexer) for mathematical expressions.

Converts expression strings into a flat list of tokens for the compiler.
Implicit multiplication ("2x", ")(") is not handled here; run
:func:`grapher.expr.normalize.normalize` on the source first.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from .errors import UnexpectedCharacterError
from .limits import ExpressionLimits, check_expression_length


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    OPERATOR = "OPERATOR"
    COMMA = "COMMA"


@dataclass(frozen=True)
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: Union[float, str]
    position: int


OPERATOR_CHARS = "+-*/^()"


def _is_digit(ch: str) -> bool:
    """Checks if a character is a digit."""
    return "0" <= ch <= "9"


def _is_letter(ch: str) -> bool:
    """Checks if a character can be part of an identifier."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch.isspace()


class Tokenizer:
    """Tokenizer for expression strings."""

    def __init__(self, source: str, limits: Optional[ExpressionLimits] = None):
        self._source = source
        self._limits = limits
        self._position = 0
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenizes the source expression and returns all tokens."""
        check_expression_length(self._source, self._limits)

        while not self._is_at_end():
            self._scan_token()

        return self._tokens

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self._position]

    def _peek_next(self) -> str:
        if self._position + 1 >= len(self._source):
            return "\0"
        return self._source[self._position + 1]

    def _advance(self) -> str:
        ch = self._source[self._position]
        self._position += 1
        return ch

    def _add_token(self, token_type: TokenType, value: Union[float, str], position: int) -> None:
        self._tokens.append(Token(token_type, value, position))

    def _scan_token(self) -> None:
        ch = self._peek()
        start_position = self._position

        if _is_whitespace(ch):
            self._advance()
            return

        # A leading '.' only starts a number when a digit follows it
        if _is_digit(ch) or (ch == "." and _is_digit(self._peek_next())):
            self._scan_number(start_position)
            return

        if _is_letter(ch):
            self._scan_identifier(start_position)
            return

        if ch in OPERATOR_CHARS:
            self._advance()
            self._add_token(TokenType.OPERATOR, ch, start_position)
            return

        if ch == ",":
            self._advance()
            self._add_token(TokenType.COMMA, ch, start_position)
            return

        raise UnexpectedCharacterError(ch, start_position, self._source)

    def _scan_number(self, start_position: int) -> None:
        value = ""
        seen_dot = False

        while _is_digit(self._peek()) or (self._peek() == "." and not seen_dot):
            ch = self._advance()
            if ch == ".":
                seen_dot = True
            value += ch

        self._add_token(TokenType.NUMBER, float(value), start_position)

    def _scan_identifier(self, start_position: int) -> None:
        value = ""

        while _is_letter(self._peek()):
            value += self._advance()

        self._add_token(TokenType.IDENTIFIER, value, start_position)


def tokenize(source: str, limits: Optional[ExpressionLimits] = None) -> List[Token]:
    """
    Tokenizes an expression string into tokens.

    Args:
        source: The expression string to tokenize
        limits: Optional expression limits

    Returns:
        List of tokens

    Raises:
        UnexpectedCharacterError: If the expression contains an unsupported character
        LimitExceededError: If the expression is too long
    """
    tokenizer = Tokenizer(source, limits)
    return tokenizer.tokenize()
