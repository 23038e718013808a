"""Command-line interface for md2term.

Renders a Markdown file, or standard input, as styled terminal text.

Environment Variable Support
----------------------------
Every rendering option takes its default from an environment variable
named MD2TERM_<OPTION>, with the option's long flag upper-cased and hyphens
replaced by underscores. Config files sit below environment variables and
command-line flags always win.

Examples
--------
Render a file::

    $ md2term README.md

Show the Markdown symbols and indent every line by four spaces::

    $ md2term README.md --symbol --center 4

Read from a pipe::

    $ cat notes.md | md2term -

Use environment variables for defaults::

    $ export MD2TERM_TABLE_STYLE=box
    $ export MD2TERM_SYMBOL=true
    $ md2term notes.md

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys

from md2term.api import render_file
from md2term.cli.builder import DynamicCLIBuilder, get_exit_code_for_exception
from md2term.cli.config import load_config_with_priority
from md2term.constants import ENV_VAR_PREFIX, EXIT_SUCCESS, EXIT_USAGE_ERROR
from md2term.exceptions import ConfigError, Md2TermError, OutputWriteError
from md2term.logging_utils import configure_logging
from md2term.options.terminal import TerminalRendererOptions

logger = logging.getLogger(__name__)


def _parse_config_args(args: list[str] | None) -> argparse.Namespace:
    """Pick ``--config`` and ``--no-config`` out of the arguments.

    The config file has to be loaded before the full parser is built because
    its values become the parser defaults.
    """
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config")
    pre_parser.add_argument("--no-config", action="store_true")
    known, _ = pre_parser.parse_known_args(args)

    if not known.no_config and not known.config:
        known.config = os.environ.get(f"{ENV_VAR_PREFIX}CONFIG")
    return known


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging from ``--log-level``, ``--log-file`` and ``--trace``."""
    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _detach_closed_stdout() -> None:
    """Point stdout at devnull after its reader went away.

    The interpreter flushes stdout on exit; with the pipe closed that flush
    fails again and overrides the exit code.
    """
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError) as e:
        # stdout replaced by an object without a file descriptor
        logger.debug(f"Could not detach stdout: {e}")


def _resolve_input(parsed_args: argparse.Namespace) -> str:
    """Return the input path, ``-`` meaning standard input."""
    if parsed_args.input and parsed_args.file and parsed_args.input != parsed_args.file:
        logger.warning(f"Both FILE and --file given, rendering {parsed_args.file}")
    return parsed_args.file or parsed_args.input or "-"


def main(args: list[str] | None = None) -> int:
    """Execute the md2term command line.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments, ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        Process exit code: 0 on success, 1 for input errors, 2 for invalid
        options or configuration, 3 when output cannot be written

    """
    config_args = _parse_config_args(args)
    try:
        config_defaults = load_config_with_priority(config_args.config, no_config=config_args.no_config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    builder = DynamicCLIBuilder(config_defaults)
    parser = builder.build_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = TerminalRendererOptions(**builder.map_args_to_options(parsed_args))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    source = _resolve_input(parsed_args)
    logger.debug(f"Rendering {source} with {options}")

    try:
        render_file(source, options)
    except Md2TermError as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Rendering failed", exc_info=True)
        if isinstance(e, OutputWriteError) and isinstance(e.original_error, BrokenPipeError):
            _detach_closed_stdout()
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
