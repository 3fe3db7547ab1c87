"""
fnlang Front-End Configuration
==============================

Settings for the fnparse command-line tool. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

The lexer and parser themselves take no configuration.
"""

from dataclasses import dataclass
import logging
import os


OUTPUT_FORMATS = ("sexpr", "tree", "source")


@dataclass
class FrontendConfig:
    """
    Configuration for rendering parse results.

    Attributes:
        output_format: How trees are printed: "sexpr", "tree" or "source"
        log_level: Logging level name for the fnlang loggers
        show_tokens: Print the token stream instead of the tree
    """

    output_format: str = "sexpr"
    log_level: str = "WARNING"
    show_tokens: bool = False

    @classmethod
    def from_env(cls) -> "FrontendConfig":
        """
        Create FrontendConfig from environment variables.

        Environment variables (all optional):
            FNLANG_FORMAT: Output format ("sexpr", "tree", "source")
            FNLANG_LOG_LEVEL: Logging level name (e.g. "DEBUG")
            FNLANG_SHOW_TOKENS: "1", "true" or "yes" to print tokens

        Returns:
            FrontendConfig with values from environment variables
        """
        config = cls()

        if output_format := os.environ.get("FNLANG_FORMAT"):
            if output_format.lower() in OUTPUT_FORMATS:
                config.output_format = output_format.lower()

        if log_level := os.environ.get("FNLANG_LOG_LEVEL"):
            # Ignore names logging does not know
            if isinstance(logging.getLevelName(log_level.upper()), int):
                config.log_level = log_level.upper()

        if show_tokens := os.environ.get("FNLANG_SHOW_TOKENS"):
            config.show_tokens = show_tokens.lower() in ("1", "true", "yes")

        return config

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level)
