"""
fnlang Error Hierarchy
======================

This module defines the exception hierarchy for the fnlang front end.
All exceptions inherit from FnLangError, allowing callers to catch every
front-end failure with a single except clause if desired.

Exception Hierarchy
-------------------
FnLangError (base)
├── ParseError - any parse-time failure carrying a source span
│   ├── UnexpectedTokenError - wrong token where an operand was required
│   ├── TokenMismatchError - a specific token kind was expected
│   ├── UnexpectedEndError - input ended while more was required
│   ├── LiteralRangeError - numeric literal cannot be represented
│   └── NestingDepthError - groups or fn bodies nested too deeply
└── InternalError - a lexer/parser invariant was broken

The lexer never raises: unrecognized input becomes an Invalid token and
the parser reports it when it reaches it.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^^^^^ (carets under the offending span)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class FnLangError(Exception):
    """
    Base exception for all fnlang errors.

        try:
            tree = parse(text)
        except FnLangError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Positions
# =============================================================================

@dataclass(frozen=True)
class Span:
    """
    Inclusive range of character offsets into the source text.

    Offsets index the Python string (code points), not encoded bytes.

    Attributes:
        start: Offset of the first character
        end: Offset of the last character (inclusive)
    """
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    def slice(self, source: str) -> str:
        """Return the text covered by this span."""
        return source[self.start:self.end + 1]


@dataclass(frozen=True)
class SourceLocation:
    """
    Human-facing location of an offset: filename, line and column.

    Attributes:
        filename: Name of the source (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"

    @classmethod
    def from_offset(cls, source: str, offset: int, filename: str = "<input>") -> "SourceLocation":
        """
        Convert a character offset into a line/column location.

        Offsets past the end of the source are clamped to just after the
        last character.
        """
        offset = max(0, min(offset, len(source)))
        line = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(filename, line, offset - line_start + 1)


# =============================================================================
# Parse Errors
# =============================================================================

class ParseError(FnLangError):
    """
    Base exception for errors found while parsing.

    Carries the offending span so callers can point at the source. When
    the input ends with no token to blame the span is the (0, 0) sentinel
    and ``at_end`` is True; the formatted message then points just past
    the last character instead.

    Attributes:
        message: The error description
        span: Offending character span (inclusive)
        hint: A suggestion for fixing the error (optional)
        source: The full source text, used for context lines (optional)
        filename: Name of the source for the location prefix
        at_end: True when the error was raised at end of input
    """

    def __init__(
        self,
        message: str,
        span: Span = Span(0, 0),
        hint: Optional[str] = None,
        source: Optional[str] = None,
        filename: str = "<input>",
        at_end: bool = False,
    ):
        self.message = message
        self.span = span
        self.hint = hint
        self.source = source
        self.filename = filename
        self.at_end = at_end
        super().__init__(self._format_message())

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end

    @property
    def location(self) -> Optional[SourceLocation]:
        """Line/column of the error, available when the source is known."""
        if self.source is None:
            return None
        offset = len(self.source) if self.at_end else self.span.start
        return SourceLocation.from_offset(self.source, offset, self.filename)

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            <input>:1:3: error: expected Int | Float | Id | LParen | Fn | Sub got Mul
                1 +* 2
                  ^
        """
        location = self.location
        if location is None:
            return f"error: {self.message} at {self.span}"

        parts = [f"{location}: error: {self.message}"]

        lines = self.source.split("\n")
        source_line = lines[location.line - 1]
        parts.append(f"    {source_line}")

        if self.at_end:
            width = 1
        else:
            # Carets stop at the end of the line for spans crossing newlines
            width = min(len(self.span), len(source_line) - location.column + 1)
            width = max(width, 1)
        padding = " " * (4 + location.column - 1)
        parts.append(f"{padding}{'^' * width}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnexpectedTokenError(ParseError):
    """
    A token that cannot start an operand appeared where one was required.

    Raised for operators, closing parentheses, the reserved arrow and
    Invalid tokens (unrecognized characters, malformed numbers).

    Attributes:
        expected: Token kind names that would have been accepted
        found: Display name of the kind that was found
    """

    def __init__(self, expected: list[str], found: str, span: Span, **kwargs):
        self.expected = list(expected)
        self.found = found
        super().__init__(
            f"expected {' | '.join(self.expected)} got {found}",
            span,
            **kwargs,
        )


class TokenMismatchError(ParseError):
    """
    A specific token kind was required but a different one was found.

    Examples:
        - missing identifier after 'fn'
        - group closed by something other than ')'
        - trailing token after a complete expression (e.g. 'a=b=c')
    """

    def __init__(self, expected: str, found: str, span: Span, **kwargs):
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected} got {found}", span, **kwargs)


class UnexpectedEndError(ParseError):
    """Input ended while the parser still required a token."""

    def __init__(self, expected: str, **kwargs):
        self.expected = expected
        kwargs.setdefault("at_end", True)
        super().__init__(f"expected {expected} got end-of-input", Span(0, 0), **kwargs)


class LiteralRangeError(ParseError):
    """
    Numeric literal outside the representable range.

    Integers are limited to signed 64 bits; floats must be finite.
    """
    pass


class NestingDepthError(ParseError):
    """Parentheses or fn bodies nested past the parser's limit."""

    def __init__(self, limit: int, span: Span, **kwargs):
        self.limit = limit
        kwargs.setdefault("hint", "split the expression into smaller parts")
        super().__init__(f"expression nested deeper than {limit} levels", span, **kwargs)


# =============================================================================
# Internal Errors
# =============================================================================

class InternalError(FnLangError):
    """
    A front-end invariant was violated.

    Raised when the lexer produced a token whose text the parser cannot
    convert. This always indicates a bug, never bad user input.
    """
    pass
