"""
fnlang - Lexer and Parser for a Small Expression Language
=========================================================

This package provides the front end of fnlang, a tiny expression language
with integer and float literals, identifiers, grouping, single-argument
function binding (``fn x expr``), the arithmetic operators + - * / ^,
unary minus and equality (=).

Main Components
---------------
- **lexer**: Lexer / Token / TokenKind
    Turns source text into a lazy stream of positioned tokens

- **parser**: Parser
    Recursive descent parser building an expression tree

- **ast**: Expression node types (IntLiteral, FloatLiteral, Identifier,
    Unary, Binary)

- **printer**: Renders trees as source, S-expressions or indented trees

- **errors**: Exception hierarchy with span-carrying parse errors

Quick Start
-----------
    >>> from fnlang import parse, to_sexpr
    >>> to_sexpr(parse("fn x x + 1"))
    '(fn x (+ x 1))'

Tokenize:
    >>> from fnlang import tokenize
    >>> [t.kind.value for t in tokenize("a=>1")]
    ['Id', 'Arrow', 'Int']

Or use the command-line tool:
    $ fnparse "1 + 2 * 3"
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from fnlang.errors import (
    FnLangError,
    ParseError,
    UnexpectedTokenError,
    TokenMismatchError,
    UnexpectedEndError,
    LiteralRangeError,
    NestingDepthError,
    InternalError,
    Span,
    SourceLocation,
)
from fnlang.lexer import Lexer, Token, TokenKind, tokenize
from fnlang.ast import (
    Expr,
    IntLiteral,
    FloatLiteral,
    Identifier,
    Unary,
    Binary,
    BinaryOp,
    UnaryOp,
)
from fnlang.parser import Parser, parse
from fnlang.printer import to_source, to_sexpr, format_tree

__all__ = [
    # Version info
    "__version__",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "tokenize",
    # Parser
    "Parser",
    "parse",
    # AST
    "Expr",
    "IntLiteral",
    "FloatLiteral",
    "Identifier",
    "Unary",
    "Binary",
    "BinaryOp",
    "UnaryOp",
    # Rendering
    "to_source",
    "to_sexpr",
    "format_tree",
    # Exception hierarchy
    "FnLangError",
    "ParseError",
    "UnexpectedTokenError",
    "TokenMismatchError",
    "UnexpectedEndError",
    "LiteralRangeError",
    "NestingDepthError",
    "InternalError",
    "Span",
    "SourceLocation",
]
