"""
Abstract Syntax Tree (AST) node types for mathematical expressions.

The AST is produced once by the compiler and walked by the evaluator on
every call, so nodes are frozen and never mutated after construction.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Literal, Sequence, Union

# ============================================================
# Operator Types
# ============================================================

UnaryOperator = Literal["+", "-"]

BinaryOperator = Literal["+", "-", "*", "/", "^"]


# ============================================================
# AST Node Types
# ============================================================


@dataclass(frozen=True)
class AstNodeBase(ABC):
    """Base class for all AST nodes."""

    position: int
    """Position in source expression (for error reporting)."""


@dataclass(frozen=True)
class NumberLiteralNode(AstNodeBase):
    """Number literal node."""

    value: float

    @property
    def type(self) -> Literal["NumberLiteral"]:
        return "NumberLiteral"


@dataclass(frozen=True)
class ConstantNode(AstNodeBase):
    """Named constant resolved at compile time (pi, e)."""

    name: str
    value: float

    @property
    def type(self) -> Literal["Constant"]:
        return "Constant"


@dataclass(frozen=True)
class VariableNode(AstNodeBase):
    """Identifier resolved against the bindings at evaluation time."""

    name: str

    @property
    def type(self) -> Literal["Variable"]:
        return "Variable"


@dataclass(frozen=True)
class FunctionCallNode(AstNodeBase):
    """Call of a registered built-in function."""

    name: str
    args: Sequence["AstNode"]

    @property
    def type(self) -> Literal["FunctionCall"]:
        return "FunctionCall"


@dataclass(frozen=True)
class UnaryOpNode(AstNodeBase):
    """Unary sign node."""

    operator: UnaryOperator
    operand: "AstNode"

    @property
    def type(self) -> Literal["UnaryOp"]:
        return "UnaryOp"


@dataclass(frozen=True)
class BinaryOpNode(AstNodeBase):
    """Binary operator node."""

    operator: BinaryOperator
    left: "AstNode"
    right: "AstNode"

    @property
    def type(self) -> Literal["BinaryOp"]:
        return "BinaryOp"


AstNode = Union[
    NumberLiteralNode,
    ConstantNode,
    VariableNode,
    FunctionCallNode,
    UnaryOpNode,
    BinaryOpNode,
]


# ============================================================
# AST Utilities
# ============================================================


def _children(node: AstNode) -> Sequence[AstNode]:
    if isinstance(node, FunctionCallNode):
        return node.args
    if isinstance(node, UnaryOpNode):
        return (node.operand,)
    if isinstance(node, BinaryOpNode):
        return (node.left, node.right)
    return ()


# The walks below use an explicit stack: a long left-nested chain such as
# "x+x+...+x" can be deeper than the interpreter's recursion limit.


def count_ast_nodes(node: AstNode) -> int:
    """Counts the total number of nodes in an AST."""
    count = 0
    stack = [node]

    while stack:
        current = stack.pop()
        count += 1
        stack.extend(_children(current))

    return count


def calculate_ast_depth(node: AstNode) -> int:
    """Calculates the maximum depth of an AST."""
    max_depth = 0
    stack = [(node, 1)]

    while stack:
        current, depth = stack.pop()
        max_depth = max(max_depth, depth)
        stack.extend((child, depth + 1) for child in _children(current))

    return max_depth


def collect_variables(node: AstNode) -> frozenset:
    """Returns the names of all free variables referenced by an AST."""
    names = set()
    stack = [node]

    while stack:
        current = stack.pop()
        if isinstance(current, VariableNode):
            names.add(current.name)
        stack.extend(_children(current))

    return frozenset(names)


def _node_label(node: AstNode) -> str:
    if isinstance(node, NumberLiteralNode):
        return f"Number: {node.value}"
    if isinstance(node, ConstantNode):
        return f"Constant: {node.name}"
    if isinstance(node, VariableNode):
        return f"Variable: {node.name}"
    if isinstance(node, FunctionCallNode):
        return f"FunctionCall: {node.name}"
    if isinstance(node, UnaryOpNode):
        return f"UnaryOp: {node.operator}"
    if isinstance(node, BinaryOpNode):
        return f"BinaryOp: {node.operator}"
    return f"Unknown: {node}"


def ast_to_string(node: AstNode, indent: int = 0) -> str:
    """Returns a human-readable representation of an AST node for debugging."""
    lines = []
    stack = [(node, indent)]

    while stack:
        current, level = stack.pop()
        lines.append("  " * level + _node_label(current))
        stack.extend((child, level + 1) for child in reversed(_children(current)))

    return "\n".join(lines)
