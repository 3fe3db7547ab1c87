"""
fnlang Lexer
============

This module implements the lexer (tokenizer) for the fnlang expression
language. It converts source text into a lazy stream of positioned tokens
that the parser pulls one at a time.

Token Kinds
-----------
- ID: Identifiers ([A-Za-z_][A-Za-z0-9_]*)
- FN: The keyword 'fn'
- INT: Decimal integer literal (123)
- FLOAT: Decimal literal with one '.' (1.5, .5, 1.)
- Operators: + - * / ^ =
- ARROW: '=>' (reserved for future grammar use)
- Delimiters: ( )
- INVALID: Unrecognized character or malformed number (1.2.)

Positions
---------
Every token carries an inclusive [start, end] span of character offsets
into the source string. Spans are produced in increasing order and never
overlap; whitespace between tokens produces nothing.

The lexer never raises. Input it does not understand becomes an INVALID
token, and the parser reports it when it reaches it.

Example
-------
>>> from fnlang.lexer import Lexer
>>> for token in Lexer("fn x x+1"):
...     print(token)
Token(Fn, 0..1)
Token(Id, 3..3)
Token(Id, 5..5)
Token(Add, 6..6)
Token(Int, 7..7)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional
import logging
import string

from fnlang.errors import Span

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the fnlang expression language.

    Each member's value is the display name used in diagnostics.
    """

    # Arithmetic operators
    ADD = "Add"          # +
    SUB = "Sub"          # -
    MUL = "Mul"          # *
    DIV = "Div"          # /
    POW = "Pow"          # ^

    EQUAL = "Equal"      # =
    ARROW = "Arrow"      # =>

    # Values
    INT = "Int"
    FLOAT = "Float"
    ID = "Id"

    # Delimiters
    LPAREN = "LParen"    # (
    RPAREN = "RParen"    # )

    FN = "Fn"            # keyword 'fn'
    INVALID = "Invalid"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A classified, span-tagged piece of the source text.

    Tokens do not copy their text; use ``text(source)`` to slice it.

    Attributes:
        start: Offset of the first character
        end: Offset of the last character (inclusive)
        kind: The TokenKind classification
    """
    start: int
    end: int
    kind: TokenKind

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.start}..{self.end})"

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    def text(self, source: str) -> str:
        """Return the source text this token covers."""
        return source[self.start:self.end + 1]


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Pull-based tokenizer over an in-memory string.

    Call ``next_token()`` repeatedly until it returns None, or iterate
    the lexer directly. The cursor only moves forward: to scan the same
    text again, construct a new Lexer.

    Usage:
        lexer = Lexer("1 + 2")
        tokens = list(lexer)

    Attributes:
        source: The text being tokenized
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    DIGITS = string.digits

    SINGLE_CHAR_TOKENS = {
        "+": TokenKind.ADD,
        "-": TokenKind.SUB,
        "*": TokenKind.MUL,
        "/": TokenKind.DIV,
        "^": TokenKind.POW,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
    }

    KEYWORDS = {
        "fn": TokenKind.FN,
    }

    def __init__(self, source: str):
        """
        Initialize the lexer with source text.

        Args:
            source: The expression text to tokenize
        """
        self.source = source
        self._pos = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    @property
    def position(self) -> int:
        """Offset of the next character to scan."""
        return self._pos

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character."""
        if self._at_end():
            return ""
        char = self.source[self._pos]
        self._pos += 1
        return char

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def next_token(self) -> Optional[Token]:
        """
        Scan and return the next token.

        Returns:
            The next Token, or None at end of input
        """
        while self._peek().isspace():
            self._advance()

        if self._at_end():
            return None

        start = self._pos
        char = self._peek()

        if char in self.DIGITS or char == ".":
            return self._scan_number(start)

        if char in self.IDENT_START:
            return self._scan_identifier(start)

        if char in self.SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(start, start, self.SINGLE_CHAR_TOKENS[char])

        if char == "=":
            self._advance()
            if self._peek() == ">":
                self._advance()
                return Token(start, start + 1, TokenKind.ARROW)
            return Token(start, start, TokenKind.EQUAL)

        self._advance()
        logger.debug(f"Unrecognized character {char!r} at offset {start}")
        return Token(start, start, TokenKind.INVALID)

    def _scan_identifier(self, start: int) -> Token:
        """
        Scan an identifier or keyword.

        Identifiers start with a letter or underscore and continue with
        letters, digits, and underscores.
        """
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()

        name = self.source[start:self._pos]
        kind = self.KEYWORDS.get(name, TokenKind.ID)
        return Token(start, self._pos - 1, kind)

    def _scan_number(self, start: int) -> Token:
        """
        Scan a decimal INT or FLOAT literal.

        A second '.' ends the literal as INVALID, covering everything up
        to and including that '.'. A lone '.' with no digits is INVALID.
        """
        kind = TokenKind.INT
        digits = 0

        while True:
            char = self._peek()
            if char == ".":
                self._advance()
                if kind is TokenKind.FLOAT:
                    logger.debug(
                        f"Malformed number {self.source[start:self._pos]!r} at offset {start}"
                    )
                    return Token(start, self._pos - 1, TokenKind.INVALID)
                kind = TokenKind.FLOAT
            elif char and char in self.DIGITS:
                self._advance()
                digits += 1
            else:
                break

        if digits == 0:
            logger.debug(f"Number without digits at offset {start}")
            return Token(start, self._pos - 1, TokenKind.INVALID)

        return Token(start, self._pos - 1, kind)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str) -> list[Token]:
    """
    Tokenize a whole string eagerly.

    Args:
        source: The expression text

    Returns:
        Every token in source order
    """
    return list(Lexer(source))
