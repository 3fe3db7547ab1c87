"""
fnparse - fnlang Parser Command-Line Interface
==============================================

This module implements the command-line interface for the fnlang front
end. It reads one expression, then prints either its token stream or
its parse tree. Syntax errors are reported with a caret diagnostic.

Usage Examples
--------------
Parse an expression given on the command line:
    $ fnparse "1 + 2 * 3"
    (+ 1 (* 2 3))

Show the tree or re-rendered source:
    $ fnparse --format tree "fn x x + 1"
    $ fnparse --format source "((1))+(2)"

Dump tokens:
    $ fnparse --tokens "x => 1"

Read from a file or stdin:
    $ fnparse -f expr.fn
    $ echo "a = b" | fnparse
"""

import logging
from pathlib import Path
from typing import Optional

import click

from fnlang import __version__
from fnlang.cli.errors import handle_cli_exception
from fnlang.config import OUTPUT_FORMATS, FrontendConfig
from fnlang.lexer import Lexer
from fnlang.parser import Parser
from fnlang.printer import format_tree, to_sexpr, to_source


RENDERERS = {
    "sexpr": to_sexpr,
    "tree": format_tree,
    "source": to_source,
}


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("expression", required=False)
@click.option(
    "-f", "--file",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the expression from a file",
)
@click.option(
    "-t", "--tokens",
    is_flag=True,
    help="Print the token stream instead of the tree",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Tree output format. Default: sexpr (or $FNLANG_FORMAT)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging)",
)
@click.version_option(version=__version__, prog_name="fnparse")
def main(
    expression: Optional[str],
    input_file: Optional[Path],
    tokens: bool,
    output_format: Optional[str],
    verbose: bool,
) -> None:
    """
    Parse an fnlang expression and print its tree.

    EXPRESSION is the source text. Without it, the text is read from
    --file or from standard input.

    \b
    Examples:
        fnparse "1 + 2 * 3"          # (+ 1 (* 2 3))
        fnparse --format tree "-x^2"
        fnparse --tokens "fn x x"
    """
    config = FrontendConfig.from_env()
    if output_format is not None:
        config.output_format = output_format.lower()
    if tokens:
        config.show_tokens = True
    if verbose:
        config.log_level = "DEBUG"

    logging.basicConfig(
        level=config.log_level_value,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    try:
        if expression is not None and input_file is not None:
            raise click.UsageError("give either EXPRESSION or --file, not both")

        if expression is not None:
            text, filename = expression, "<input>"
        elif input_file is not None:
            text, filename = input_file.read_text(encoding="utf-8"), str(input_file)
        else:
            text, filename = click.get_text_stream("stdin").read(), "<stdin>"

        if verbose:
            click.echo(f"Parsing {filename} ({len(text)} chars)...", err=True)

        if config.show_tokens:
            for token in Lexer(text):
                click.echo(f"{token.kind.value:<8} {token.start}..{token.end} {token.text(text)!r}")
            return

        tree = Parser(text, Lexer(text), filename=filename).parse()
        click.echo(RENDERERS[config.output_format](tree))

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
