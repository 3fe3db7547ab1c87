"""
fnlang Parser
=============

This module implements a recursive descent parser for the fnlang
expression language. It pulls tokens from a Lexer one at a time and
builds an AST (see fnlang.ast).

Expression Grammar
------------------
Operator precedence, from lowest to highest:

1. Function binding: fn ID expr (body extends as far as possible)
2. Equality: =  (at most one per expression, non-associative)
3. Addition/Subtraction: + -  (left-associative)
4. Multiplication/Division: * /  (left-associative)
5. Power: ^  (right-associative)
6. Unary: -
7. Operand: number, identifier, (grouped expression)

    expr      := equality
    equality  := add_sub ( '=' add_sub )?
    add_sub   := mul_div ( ('+'|'-') mul_div )*
    mul_div   := power ( ('*'|'/') power )*
    power     := unary ( '^' power )?
    unary     := '-' unary | operand
    operand   := INT | FLOAT | ID | '(' expr ')' | FN ID expr

The parser keeps a single lookahead token and never backtracks, so
parsing is linear in the number of tokens. The first error aborts the
parse; there is no recovery.

Runs of unary minus and chains of '^' are parsed with loops, so they may
be arbitrarily long. Parenthesized groups and fn bodies recurse, and are
limited to Parser.MAX_NESTING_DEPTH levels; deeper input raises
NestingDepthError instead of exhausting the Python stack.

Example Usage
-------------
>>> from fnlang.parser import parse
>>> parse("1+2*3")
Binary(op=<BinaryOp.ADD: '+'>, left=IntLiteral(value=1), right=Binary(...))
"""

import logging
import math
from typing import Optional

from fnlang.ast import (
    Binary,
    BinaryOp,
    Expr,
    FloatLiteral,
    Identifier,
    IntLiteral,
    Unary,
    UnaryOp,
)
from fnlang.errors import (
    InternalError,
    LiteralRangeError,
    NestingDepthError,
    ParseError,
    Span,
    TokenMismatchError,
    UnexpectedEndError,
    UnexpectedTokenError,
)
from fnlang.lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)


INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

# Digits in INT_MAX, ignoring leading zeros
MAX_INT_DIGITS = len(str(INT_MAX))

# Kinds that can start an operand, in the order they are reported
OPERAND_START = [
    TokenKind.INT,
    TokenKind.FLOAT,
    TokenKind.ID,
    TokenKind.LPAREN,
    TokenKind.FN,
    TokenKind.SUB,
]

END_OF_INPUT = "end-of-input"


class Parser:
    """
    Recursive descent parser for fnlang expressions.

    A Parser is single-use: construct one per input text. The text is
    kept alongside the lexer so literal and identifier tokens can be
    sliced from it.

    Usage:
        parser = Parser(text)
        tree = parser.parse()

    Attributes:
        text: The source text being parsed
        filename: Name used in error locations
    """

    ADD_SUB_OPS = {
        TokenKind.ADD: BinaryOp.ADD,
        TokenKind.SUB: BinaryOp.SUB,
    }

    MUL_DIV_OPS = {
        TokenKind.MUL: BinaryOp.MUL,
        TokenKind.DIV: BinaryOp.DIV,
    }

    # Maximum depth of nested groups and fn bodies
    MAX_NESTING_DEPTH = 80

    def __init__(self, text: str, lexer: Optional[Lexer] = None, filename: str = "<input>"):
        """
        Initialize the parser.

        Args:
            text: The source text (used for slicing token text)
            lexer: Token source over the same text (default: a new Lexer)
            filename: Name reported in error locations
        """
        self.text = text
        self.filename = filename
        self._lexer = lexer if lexer is not None else Lexer(text)
        self._current: Optional[Token] = None
        self._depth = 0
        self._used = False

    # =========================================================================
    # Main Parsing Interface
    # =========================================================================

    def parse(self) -> Expr:
        """
        Parse the whole input as one expression.

        Returns:
            The root of the expression tree

        Raises:
            ParseError: On the first syntax error found
            RuntimeError: If this parser has already been used
        """
        if self._used:
            raise RuntimeError("Parser instances are single-use; create a new Parser")
        self._used = True

        logger.debug(f"Parsing {self.filename} ({len(self.text)} chars)")
        self._step()

        try:
            expr = self._parse_expr()

            # Everything must be consumed; a second '=' ends up here
            if self._current is not None:
                self._eat_end()
        except ParseError as e:
            where = "end of input" if e.at_end else str(e.span)
            logger.debug(f"Parse failed at {where}: {e.message}")
            raise

        logger.debug(f"Parsed {self.filename} successfully")
        return expr

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _step(self) -> None:
        """Pull the next token from the lexer into the lookahead slot."""
        self._current = self._lexer.next_token()

    def _current_kind(self) -> Optional[TokenKind]:
        return self._current.kind if self._current is not None else None

    def _text(self, token: Token) -> str:
        return token.text(self.text)

    def _error_context(self) -> dict:
        return {"source": self.text, "filename": self.filename}

    def _eat(self, kind: TokenKind) -> Token:
        """
        Consume a token of the given kind.

        The parser advances past the current token even when it does not
        match, so repeated calls cannot loop forever.

        Raises:
            UnexpectedEndError: If there is no current token
            TokenMismatchError: If the current token has another kind
        """
        current = self._current
        if current is None:
            raise UnexpectedEndError(str(kind), **self._error_context())

        self._step()

        if current.kind is not kind:
            raise TokenMismatchError(
                str(kind),
                str(current.kind),
                current.span,
                **self._error_context(),
            )
        return current

    def _eat_end(self) -> None:
        """Reject a token left over after a complete expression."""
        current = self._current
        self._step()
        raise TokenMismatchError(
            END_OF_INPUT,
            str(current.kind),
            current.span,
            hint=self._trailing_hint(current),
            **self._error_context(),
        )

    def _trailing_hint(self, token: Token) -> Optional[str]:
        if token.kind is TokenKind.EQUAL:
            return "chained equality is not allowed; use parentheses"
        if token.kind is TokenKind.RPAREN:
            return "unbalanced ')'"
        return None

    def _enter(self, token: Token) -> None:
        """Open a nested group or fn body starting at token."""
        if self._depth >= self.MAX_NESTING_DEPTH:
            raise NestingDepthError(
                self.MAX_NESTING_DEPTH,
                token.span,
                **self._error_context(),
            )
        self._depth += 1

    # =========================================================================
    # Recursive Descent Parser
    # =========================================================================

    def _parse_expr(self) -> Expr:
        return self._parse_equality()

    def _parse_equality(self) -> Expr:
        """Parse an optional single '=' (lowest binary precedence)."""
        left = self._parse_add_sub()

        # ')' closes an enclosing group; the group rule checks it
        if self._current_kind() in (None, TokenKind.RPAREN):
            return left

        self._eat(TokenKind.EQUAL)
        right = self._parse_add_sub()
        return Binary(BinaryOp.EQ, left, right, span=self._join(left, right))

    def _parse_add_sub(self) -> Expr:
        """Parse addition and subtraction."""
        left = self._parse_mul_div()

        while self._current_kind() in self.ADD_SUB_OPS:
            op = self.ADD_SUB_OPS[self._current_kind()]
            self._step()
            right = self._parse_mul_div()
            left = Binary(op, left, right, span=self._join(left, right))

        return left

    def _parse_mul_div(self) -> Expr:
        """Parse multiplication and division."""
        left = self._parse_power()

        while self._current_kind() in self.MUL_DIV_OPS:
            op = self.MUL_DIV_OPS[self._current_kind()]
            self._step()
            right = self._parse_power()
            left = Binary(op, left, right, span=self._join(left, right))

        return left

    def _parse_power(self) -> Expr:
        """Parse '^', which is right-associative."""
        operands = [self._parse_unary()]
        while self._current_kind() is TokenKind.POW:
            self._step()
            operands.append(self._parse_unary())

        # Fold from the right: a ^ b ^ c is a ^ (b ^ c)
        exponent = operands.pop()
        while operands:
            base = operands.pop()
            exponent = Binary(BinaryOp.POW, base, exponent, span=self._join(base, exponent))
        return exponent

    def _parse_unary(self) -> Expr:
        """Parse any run of unary minus signs before an operand."""
        starts = []
        while self._current_kind() is TokenKind.SUB:
            starts.append(self._current.start)
            self._step()

        expr = self._parse_operand()
        for start in reversed(starts):
            expr = Unary(UnaryOp.NEG, expr, span=self._join_at(start, expr))
        return expr

    def _parse_operand(self) -> Expr:
        """Parse operands (numbers, identifiers, groups, fn bindings)."""
        tok = self._current
        expected = [str(kind) for kind in OPERAND_START]

        if tok is None:
            raise UnexpectedEndError(" | ".join(expected), **self._error_context())

        if tok.kind is TokenKind.INT:
            self._step()
            return IntLiteral(self._convert_int(tok), span=tok.span)

        if tok.kind is TokenKind.FLOAT:
            self._step()
            return FloatLiteral(self._convert_float(tok), span=tok.span)

        if tok.kind is TokenKind.ID:
            self._step()
            return Identifier(self._text(tok), span=tok.span)

        if tok.kind is TokenKind.LPAREN:
            self._enter(tok)
            self._step()
            expr = self._parse_expr()
            self._eat(TokenKind.RPAREN)
            self._depth -= 1
            return expr

        if tok.kind is TokenKind.FN:
            self._enter(tok)
            self._step()
            name_tok = self._eat(TokenKind.ID)
            name = Identifier(self._text(name_tok), span=name_tok.span)
            body = self._parse_expr()
            self._depth -= 1
            return Binary(BinaryOp.FN_BIND, name, body, span=self._join_at(tok.start, body))

        # Operators, ')', '=>' and Invalid cannot start an operand
        self._step()
        raise UnexpectedTokenError(
            expected,
            str(tok.kind),
            tok.span,
            hint=self._invalid_hint(tok),
            **self._error_context(),
        )

    # =========================================================================
    # Literal Conversion
    # =========================================================================

    def _convert_int(self, tok: Token) -> int:
        text = self._text(tok)
        # Leading zeros are stripped so int() never sees more than 19 digits
        digits = text.lstrip("0") or "0"
        if len(digits) > MAX_INT_DIGITS:
            value = None
        else:
            try:
                value = int(digits)
            except ValueError as e:
                raise InternalError(
                    f"lexer produced unconvertible Int token {text!r} at {tok.span}"
                ) from e

        if value is None or not INT_MIN <= value <= INT_MAX:
            raise LiteralRangeError(
                f"integer literal {text} does not fit in 64 bits",
                tok.span,
                **self._error_context(),
            )
        return value

    def _convert_float(self, tok: Token) -> float:
        text = self._text(tok)
        try:
            value = float(text)
        except ValueError as e:
            raise InternalError(
                f"lexer produced unconvertible Float token {text!r} at {tok.span}"
            ) from e

        if not math.isfinite(value):
            raise LiteralRangeError(
                f"float literal {text} is too large",
                tok.span,
                **self._error_context(),
            )
        return value

    # =========================================================================
    # Helpers
    # =========================================================================

    def _invalid_hint(self, tok: Token) -> Optional[str]:
        """Describe an Invalid token's text for the error hint."""
        if tok.kind is not TokenKind.INVALID:
            return None
        text = self._text(tok)
        if text[0] in Lexer.DIGITS or text[0] == ".":
            return f"malformed number {text!r}"
        return f"unrecognized character {text!r}"

    @staticmethod
    def _join(left: Expr, right: Expr) -> Optional[Span]:
        if left.span is None or right.span is None:
            return None
        return Span(left.span.start, right.span.end)

    @staticmethod
    def _join_at(start: int, last: Expr) -> Optional[Span]:
        if last.span is None:
            return None
        return Span(start, last.span.end)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(text: str, filename: str = "<input>") -> Expr:
    """
    Parse an expression string with a fresh Lexer/Parser pair.

    Args:
        text: Source text
        filename: Name reported in error locations

    Returns:
        The expression tree

    Raises:
        ParseError: On the first syntax error
    """
    return Parser(text, Lexer(text), filename=filename).parse()
