# =============================================================================
# test_cli.py - fnparse Command-Line Tests
# =============================================================================
# Tests for the fnparse CLI tool.
#
# Test coverage includes:
#   - Output formats and token dumps
#   - Input from argument, file, and stdin
#   - Exit codes for parse errors and bad arguments
# =============================================================================

import pytest
from click.testing import CliRunner

from fnlang.cli.errors import ExitCode
from fnlang.cli.fnparse import main


@pytest.fixture
def runner(monkeypatch):
    for name in ("FNLANG_FORMAT", "FNLANG_LOG_LEVEL", "FNLANG_SHOW_TOKENS"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


class TestFnparseCLI:
    """Tests for the fnparse CLI tool."""

    def test_cli_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Parse an fnlang expression" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "fnparse" in result.output

    def test_default_sexpr(self, runner):
        result = runner.invoke(main, ["1+2*3"])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "(+ 1 (* 2 3))\n"

    def test_source_format(self, runner):
        result = runner.invoke(main, ["--format", "source", "((1))+(2*3)"])
        assert result.exit_code == 0
        assert result.output == "1 + 2 * 3\n"

    def test_tree_format(self, runner):
        result = runner.invoke(main, ["--format", "tree", "fn x x"])
        assert result.exit_code == 0
        assert result.output == "Binary fn\n├── Identifier x\n└── Identifier x\n"

    def test_format_from_environment(self, runner, monkeypatch):
        monkeypatch.setenv("FNLANG_FORMAT", "source")
        result = runner.invoke(main, ["(a)=(b)"])
        assert result.output == "a = b\n"

    def test_option_overrides_environment(self, runner, monkeypatch):
        monkeypatch.setenv("FNLANG_FORMAT", "source")
        result = runner.invoke(main, ["--format", "sexpr", "a=b"])
        assert result.output == "(= a b)\n"

    def test_tokens(self, runner):
        result = runner.invoke(main, ["--tokens", "x => 1.5"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Id       0..0 'x'",
            "Arrow    2..3 '=>'",
            "Float    5..7 '1.5'",
        ]

    def test_tokens_never_fail(self, runner):
        """Token dumps succeed even for text that does not parse."""
        result = runner.invoke(main, ["-t", "1.2.3 $"])
        assert result.exit_code == 0
        assert "Invalid" in result.output

    def test_read_file(self, runner, tmp_path):
        source = tmp_path / "expr.fn"
        source.write_text("fn x x ^ 2\n", encoding="utf-8")
        result = runner.invoke(main, ["-f", str(source)])
        assert result.exit_code == 0
        assert result.output == "(fn x (^ x 2))\n"

    def test_read_stdin(self, runner):
        result = runner.invoke(main, [], input="a - -b\n")
        assert result.exit_code == 0
        assert result.output == "(- a (neg b))\n"

    def test_parse_error(self, runner):
        result = runner.invoke(main, ["1=2=3"])
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "<input>:1:4: error: expected end-of-input got Equal" in result.output

    def test_deeply_nested_expression(self, runner):
        result = runner.invoke(main, ["(" * 300 + "1" + ")" * 300])
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "nested deeper than" in result.output

    def test_parse_error_names_file(self, runner, tmp_path):
        source = tmp_path / "bad.fn"
        source.write_text("fn\n", encoding="utf-8")
        result = runner.invoke(main, ["--file", str(source)])
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert f"{source}:" in result.output
        assert "expected Id got end-of-input" in result.output

    def test_expression_and_file_conflict(self, runner, tmp_path):
        source = tmp_path / "expr.fn"
        source.write_text("1", encoding="utf-8")
        result = runner.invoke(main, ["2", "-f", str(source)])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_missing_file(self, runner):
        result = runner.invoke(main, ["-f", "does-not-exist.fn"])
        assert result.exit_code == 2

    def test_invalid_format_choice(self, runner):
        result = runner.invoke(main, ["--format", "xml", "1"])
        assert result.exit_code == 2

    def test_verbose(self, runner):
        result = runner.invoke(main, ["-v", "1"])
        assert result.exit_code == 0
        assert "Parsing <input>" in result.output
