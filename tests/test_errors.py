# =============================================================================
# test_errors.py - Error Hierarchy and Diagnostic Formatting Tests
# =============================================================================
# Tests for fnlang.errors.
#
# Test coverage includes:
#   - Exception hierarchy
#   - Span and SourceLocation helpers
#   - Caret diagnostics, hints, and end-of-input errors
# =============================================================================

import pytest
from fnlang.errors import (
    FnLangError,
    InternalError,
    LiteralRangeError,
    NestingDepthError,
    ParseError,
    SourceLocation,
    Span,
    TokenMismatchError,
    UnexpectedEndError,
    UnexpectedTokenError,
)
from fnlang.parser import parse


def parse_error(source: str) -> ParseError:
    """Helper returning the error raised when parsing source."""
    with pytest.raises(ParseError) as exc_info:
        parse(source)
    return exc_info.value


# =============================================================================
# Hierarchy Tests
# =============================================================================

class TestHierarchy:

    @pytest.mark.parametrize("cls", [
        UnexpectedTokenError,
        TokenMismatchError,
        UnexpectedEndError,
        LiteralRangeError,
        NestingDepthError,
    ])
    def test_parse_errors(self, cls):
        assert issubclass(cls, ParseError)
        assert issubclass(cls, FnLangError)

    def test_internal_error_is_not_parse_error(self):
        assert issubclass(InternalError, FnLangError)
        assert not issubclass(InternalError, ParseError)


# =============================================================================
# Position Helpers
# =============================================================================

class TestSpan:

    def test_length_is_inclusive(self):
        assert len(Span(3, 3)) == 1
        assert len(Span(2, 5)) == 4

    def test_slice(self):
        assert Span(1, 3).slice("a=>bc") == "=>b"

    def test_str(self):
        assert str(Span(4, 7)) == "4..7"


class TestSourceLocation:

    def test_first_line(self):
        assert SourceLocation.from_offset("abc", 2) == SourceLocation("<input>", 1, 3)

    def test_later_line(self):
        location = SourceLocation.from_offset("a\nbc\nd", 3, "f.fn")
        assert (location.line, location.column) == (2, 2)
        assert str(location) == "f.fn:2:2"

    def test_offset_past_end_is_clamped(self):
        assert SourceLocation.from_offset("ab", 10).column == 3


# =============================================================================
# Diagnostic Formatting Tests
# =============================================================================

class TestFormatting:

    def test_caret_under_token(self):
        error = parse_error("1 +* 2")
        assert str(error) == "\n".join([
            "<input>:1:4: error: expected Int | Float | Id | LParen | Fn | Sub got Mul",
            "    1 +* 2",
            "       ^",
        ])

    def test_carets_cover_span(self):
        error = parse_error("a + 1.2.3")
        lines = str(error).split("\n")
        assert lines[2] == "        ^^^^"
        assert lines[3] == "hint: malformed number '1.2.'"

    def test_error_on_second_line(self):
        error = parse_error("1 +\n  * 2")
        lines = str(error).split("\n")
        assert lines[0].startswith("<input>:2:3: error:")
        assert lines[1] == "      * 2"
        assert lines[2] == "      ^"

    def test_end_of_input_points_past_last_char(self):
        error = parse_error("(1 + 2")
        assert error.at_end
        assert error.span == Span(0, 0)
        assert str(error).split("\n") == [
            "<input>:1:7: error: expected RParen got end-of-input",
            "    (1 + 2",
            "          ^",
        ]

    def test_chained_equality_hint(self):
        error = parse_error("1=2=3")
        assert str(error).endswith("hint: chained equality is not allowed; use parentheses")

    def test_without_source(self):
        """Errors built without source text still format."""
        error = TokenMismatchError("Id", "Int", Span(3, 3))
        assert error.location is None
        assert str(error) == "error: expected Id got Int at 3..3"

    def test_message_attributes(self):
        error = parse_error("fn 1")
        assert isinstance(error, TokenMismatchError)
        assert error.expected == "Id"
        assert error.found == "Int"
        assert (error.start, error.end) == (3, 3)

    def test_nesting_depth_hint(self):
        error = parse_error("(" * 200 + "1" + ")" * 200)
        assert isinstance(error, NestingDepthError)
        assert str(error).endswith("hint: split the expression into smaller parts")
