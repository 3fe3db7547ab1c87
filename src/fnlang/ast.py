"""
fnlang Abstract Syntax Tree (AST) Definitions
=============================================

This module defines the expression node types produced by the parser.

Node Hierarchy
--------------
Expr (base)
├── IntLiteral - signed 64-bit integer constant
├── FloatLiteral - finite float constant
├── Identifier - name reference
├── Unary - prefix operator applied to one operand (-x)
└── Binary - operator applied to two operands, including 'fn' binding

Design Notes
------------
- All nodes are frozen dataclasses; the tree is immutable once built
- Each Binary/Unary node owns its children; there is no sharing
- Nodes carry an optional source span that is excluded from equality,
  so two trees compare equal when their structure matches
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from fnlang.errors import Span


# =============================================================================
# Operators
# =============================================================================

class BinaryOp(Enum):
    """Binary operators, with their source symbol as value."""
    FN_BIND = "fn"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    EQ = "="

    @property
    def symbol(self) -> str:
        return self.value


class UnaryOp(Enum):
    """Prefix operators, with their source symbol as value."""
    NEG = "-"

    @property
    def symbol(self) -> str:
        return self.value


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class Expr:
    """
    Base class for all expression nodes.

    Not instantiated directly; every concrete node is one of the
    subclasses below.
    """

    def children(self) -> tuple["Expr", ...]:
        """Direct child expressions, left to right."""
        return ()


@dataclass(frozen=True)
class IntLiteral(Expr):
    """Integer constant such as 42."""
    value: int
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class FloatLiteral(Expr):
    """Float constant such as 1.5 or .5."""
    value: float
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Identifier(Expr):
    """Reference to a name."""
    name: str
    span: Optional[Span] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Unary(Expr):
    """
    Prefix operation such as -x.

    Attributes:
        op: The prefix operator
        operand: The expression it applies to
    """
    op: UnaryOp
    operand: Expr
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    def children(self) -> tuple[Expr, ...]:
        return (self.operand,)


@dataclass(frozen=True)
class Binary(Expr):
    """
    Binary operation.

    For ``BinaryOp.FN_BIND`` the left child is always the bound
    Identifier and the right child is the function body:

        fn x x+1  ->  Binary(FN_BIND, Identifier('x'), Binary(ADD, ...))

    Attributes:
        op: The operator
        left: Left operand (or bound name)
        right: Right operand (or body)
    """
    op: BinaryOp
    left: Expr
    right: Expr
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    def children(self) -> tuple[Expr, ...]:
        return (self.left, self.right)


def walk(expr: Expr):
    """Yield every node of the tree in pre-order."""
    stack = [expr]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))
