#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/cli/builder.py
"""Argument parser generation for the md2term CLI.

Rendering options are not declared by hand: ``DynamicCLIBuilder`` walks the
fields of ``TerminalRendererOptions`` and turns each one into an argument,
reading the flag name, short flag, help text, choices and metavar from the
field metadata.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import MISSING, fields
from typing import Any, Dict, Optional

from md2term.cli.actions import create_env_aware_argument
from md2term.constants import EXIT_INPUT_ERROR, EXIT_OUTPUT_ERROR, EXIT_USAGE_ERROR
from md2term.exceptions import ConfigError, OutputWriteError, ValidationError
from md2term.options.terminal import TerminalRendererOptions

logger = logging.getLogger(__name__)


class DynamicCLIBuilder:
    """Build argparse arguments from the renderer options dataclass.

    Parameters
    ----------
    config_defaults : dict, optional
        Option values loaded from a config file. They replace the dataclass
        defaults but are themselves overridden by environment variables and
        command-line flags.

    """

    def __init__(self, config_defaults: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the builder."""
        self.config_defaults = dict(config_defaults or {})
        self.dest_to_field: Dict[str, str] = {}

    @staticmethod
    def snake_to_kebab(name: str) -> str:
        """Convert snake_case to kebab-case."""
        return name.replace("_", "-")

    def infer_cli_name(self, field: Any) -> str:
        """Return the long flag of a field, honoring ``cli_name`` metadata."""
        return f"--{self.snake_to_kebab(field.metadata.get('cli_name', field.name))}"

    def get_argument_kwargs(self, field: Any) -> Dict[str, Any]:
        """Build ``add_argument`` kwargs for one options field."""
        metadata = field.metadata
        kwargs: Dict[str, Any] = {
            "dest": field.name,
            "help": metadata.get("help", f"Configure {field.name}"),
            "env_dest": metadata.get("cli_name", field.name),
        }

        default = self.config_defaults.get(field.name, field.default)
        if default is MISSING:
            default = None

        if isinstance(field.default, bool):
            kwargs["action"] = "store_true"
            kwargs["default"] = bool(default)
            return kwargs

        kwargs["default"] = default
        if metadata.get("type") in (int, float):
            kwargs["type"] = metadata["type"]
        if "choices" in metadata:
            kwargs["choices"] = list(metadata["choices"])
        if "metavar" in metadata:
            kwargs["metavar"] = metadata["metavar"]
        kwargs["help"] = f"{kwargs['help']} (default: %(default)s)"
        return kwargs

    def add_options_class_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add one argument per ``TerminalRendererOptions`` field."""
        group = parser.add_argument_group("rendering options")
        for field in fields(TerminalRendererOptions):
            flags = []
            if "cli_short" in field.metadata:
                flags.append(f"-{field.metadata['cli_short']}")
            flags.append(self.infer_cli_name(field))

            create_env_aware_argument(group, *flags, **self.get_argument_kwargs(field))
            self.dest_to_field[field.name] = field.name

    def build_parser(self) -> argparse.ArgumentParser:
        """Create the complete argument parser."""
        from md2term import __version__

        parser = argparse.ArgumentParser(
            prog="md2term",
            description="Render Markdown as styled text in the terminal.",
            epilog="Every rendering option can also be set with an MD2TERM_<OPTION> environment "
            "variable, e.g. MD2TERM_CENTER=4 or MD2TERM_SYMBOL=true.",
        )
        parser.add_argument(
            "input",
            nargs="?",
            metavar="FILE",
            help="Markdown file to render; '-' or no file reads standard input",
        )
        parser.add_argument(
            "-f",
            "--file",
            dest="file",
            metavar="FILE",
            help="Markdown file to render (alternative to the positional argument)",
        )

        self.add_options_class_arguments(parser)

        config_group = parser.add_argument_group("configuration")
        config_group.add_argument("--config", metavar="PATH", help="Load options from this config file")
        config_group.add_argument(
            "--no-config",
            action="store_true",
            help="Do not search for .md2term.toml, .md2term.yaml, .md2term.json or pyproject.toml",
        )

        logging_group = parser.add_argument_group("logging")
        create_env_aware_argument(
            logging_group,
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            default="WARNING",
            help="Set logging level for debugging (default: %(default)s)",
        )
        create_env_aware_argument(logging_group, "--log-file", metavar="PATH", help="Also write log messages to PATH")
        create_env_aware_argument(
            logging_group,
            "--trace",
            action="store_true",
            help="Enable trace mode: debug logging with timestamps and logger names",
        )

        parser.add_argument("--version", "-V", action="version", version=f"md2term {__version__}")
        return parser

    def map_args_to_options(self, parsed_args: argparse.Namespace) -> Dict[str, Any]:
        """Collect the option values of parsed arguments by field name."""
        return {name: getattr(parsed_args, dest) for dest, name in self.dest_to_field.items()}


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code.

    Input errors exit with 1, invalid options or configuration with 2 and
    output errors with 3.
    """
    if isinstance(exception, OutputWriteError):
        return EXIT_OUTPUT_ERROR
    if isinstance(exception, (ConfigError, ValidationError, ValueError)):
        return EXIT_USAGE_ERROR
    # File and parsing errors
    return EXIT_INPUT_ERROR
