"""
fnlang AST Rendering
====================

Turns expression trees back into text:

- to_source: re-parseable fnlang source with minimal parentheses
- to_sexpr: compact S-expression, handy in tests and logs
- format_tree: indented multi-line tree for humans

For any tree produced by the parser, parse(to_source(tree)) == tree.
Hand-built trees with negative literal values render as unary minus
and therefore come back as Unary nodes.

Example
-------
>>> from fnlang.parser import parse
>>> from fnlang.printer import to_source, to_sexpr
>>> tree = parse("(1+2)*3")
>>> to_source(tree)
'(1 + 2) * 3'
>>> to_sexpr(tree)
'(* (+ 1 2) 3)'
"""

from decimal import Decimal

from fnlang.ast import (
    Binary,
    BinaryOp,
    Expr,
    FloatLiteral,
    Identifier,
    IntLiteral,
    Unary,
)


# Binding strength of each construct, weakest first
PRECEDENCE = {
    BinaryOp.FN_BIND: 0,
    BinaryOp.EQ: 1,
    BinaryOp.ADD: 2,
    BinaryOp.SUB: 2,
    BinaryOp.MUL: 3,
    BinaryOp.DIV: 3,
    BinaryOp.POW: 4,
}
UNARY_PRECEDENCE = 5
ATOM_PRECEDENCE = 6


# =============================================================================
# Source Rendering
# =============================================================================

def to_source(expr: Expr) -> str:
    """
    Render a tree as fnlang source text.

    Args:
        expr: Root of the tree

    Returns:
        Text that parses back to an equal tree
    """
    text, _ = _render(expr)
    return text


def format_float(value: float) -> str:
    """
    Format a float in positional notation the lexer can read back.

    repr() may switch to exponent notation (1e+16), which fnlang has no
    syntax for, so the shortest repr is expanded through Decimal.
    """
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text


def _render(expr: Expr) -> tuple[str, int]:
    """Return (text, precedence) for expr."""
    if isinstance(expr, IntLiteral):
        text = str(expr.value)
        return text, UNARY_PRECEDENCE if expr.value < 0 else ATOM_PRECEDENCE

    if isinstance(expr, FloatLiteral):
        text = format_float(expr.value)
        return text, UNARY_PRECEDENCE if text.startswith("-") else ATOM_PRECEDENCE

    if isinstance(expr, Identifier):
        return expr.name, ATOM_PRECEDENCE

    if isinstance(expr, Unary):
        operand, prec = _render(expr.operand)
        if prec < UNARY_PRECEDENCE:
            operand = f"({operand})"
        return f"{expr.op.symbol}{operand}", UNARY_PRECEDENCE

    if isinstance(expr, Binary):
        if expr.op is BinaryOp.FN_BIND:
            # The body runs to the end of input, so it never needs parentheses
            name, _ = _render(expr.left)
            body, _ = _render(expr.right)
            return f"fn {name} {body}", PRECEDENCE[BinaryOp.FN_BIND]

        prec = PRECEDENCE[expr.op]
        left, left_prec = _render(expr.left)
        right, right_prec = _render(expr.right)

        # '^' groups to the right, '=' does not chain, the rest group left
        if left_prec < prec or (left_prec == prec and expr.op in (BinaryOp.POW, BinaryOp.EQ)):
            left = f"({left})"
        if right_prec < prec or (right_prec == prec and expr.op is not BinaryOp.POW):
            right = f"({right})"

        return f"{left} {expr.op.symbol} {right}", prec

    raise TypeError(f"not an fnlang expression: {expr!r}")


# =============================================================================
# S-Expressions
# =============================================================================

def to_sexpr(expr: Expr) -> str:
    """Render a tree as an S-expression, e.g. (+ 1 (* 2 3))."""
    if isinstance(expr, IntLiteral):
        return str(expr.value)
    if isinstance(expr, FloatLiteral):
        return format_float(expr.value)
    if isinstance(expr, Identifier):
        return expr.name
    if isinstance(expr, Unary):
        return f"(neg {to_sexpr(expr.operand)})"
    if isinstance(expr, Binary):
        return f"({expr.op.symbol} {to_sexpr(expr.left)} {to_sexpr(expr.right)})"
    raise TypeError(f"not an fnlang expression: {expr!r}")


# =============================================================================
# Tree Display
# =============================================================================

def _label(expr: Expr) -> str:
    if isinstance(expr, IntLiteral):
        return f"Int {expr.value}"
    if isinstance(expr, FloatLiteral):
        return f"Float {format_float(expr.value)}"
    if isinstance(expr, Identifier):
        return f"Identifier {expr.name}"
    if isinstance(expr, Unary):
        return f"Unary {expr.op.symbol}"
    if isinstance(expr, Binary):
        return f"Binary {expr.op.symbol}"
    raise TypeError(f"not an fnlang expression: {expr!r}")


def format_tree(expr: Expr) -> str:
    """
    Render a tree one node per line with box-drawing guides:

        Binary +
        ├── Int 1
        └── Binary *
            ├── Int 2
            └── Int 3
    """
    lines = [_label(expr)]
    _format_children(expr, "", lines)
    return "\n".join(lines)


def _format_children(expr: Expr, prefix: str, lines: list[str]) -> None:
    children = expr.children()
    for index, child in enumerate(children):
        last = index == len(children) - 1
        lines.append(f"{prefix}{'└── ' if last else '├── '}{_label(child)}")
        _format_children(child, prefix + ("    " if last else "│   "), lines)
