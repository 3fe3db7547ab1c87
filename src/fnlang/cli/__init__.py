"""
fnlang Command-Line Interface
=============================

This package provides the command-line tool for the fnlang front end:

- **fnparse**: tokenize and parse an expression, print its tree

The tool is a Click-based CLI application with consistent error
reporting and exit codes (see fnlang.cli.errors).
"""

__all__ = ["fnparse"]
