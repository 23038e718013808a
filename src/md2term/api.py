#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/api.py
"""Public entry points for rendering Markdown to the terminal.

Examples
--------
Render straight to the terminal:

    >>> from md2term import render_markdown
    >>> render_markdown("# Title\\n\\nSome **bold** text")

Render to plain text, for example in tests:

    >>> from md2term import render_to_string
    >>> render_to_string("**bold**", show_symbols=True)
    '**bold**\\n'

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from rich.console import Console

from md2term.events import Event
from md2term.options.markdown import MarkdownParserOptions
from md2term.options.terminal import TerminalRendererOptions
from md2term.parsers.markdown import markdown_to_events
from md2term.renderers.terminal import TerminalRenderer
from md2term.utils.inputs import read_markdown_input

logger = logging.getLogger(__name__)

__all__ = ["markdown_to_events", "render_file", "render_markdown", "render_to_string", "render_events"]


def _create_options_from_kwargs(
    options: Optional[TerminalRendererOptions],
    **kwargs: Any,
) -> TerminalRendererOptions:
    """Merge keyword overrides into terminal renderer options.

    Unknown keyword arguments are skipped with a debug message.
    """
    options = options or TerminalRendererOptions()
    if not kwargs:
        return options

    option_names = TerminalRendererOptions.field_names()
    valid_kwargs = {k: v for k, v in kwargs.items() if k in option_names}
    missing = [k for k in kwargs if k not in valid_kwargs]
    if missing:
        logger.debug(f"Skipping unknown renderer options: {missing}")
    return options.create_updated(**valid_kwargs)


def render_events(
    events: Iterator[Event],
    options: Optional[TerminalRendererOptions] = None,
    console: Optional[Console] = None,
) -> TerminalRenderer:
    """Render an already parsed event stream.

    Parameters
    ----------
    events : iterator of Event
        Event stream, usually from ``markdown_to_events``
    options : TerminalRendererOptions, optional
        Rendering options
    console : Console, optional
        Output console

    Returns
    -------
    TerminalRenderer
        The renderer used, for inspecting ``renderer.emitter.lines_written``

    """
    renderer = TerminalRenderer(options, console=console)
    renderer.render(events)
    return renderer


def render_markdown(
    text: str,
    options: Optional[TerminalRendererOptions] = None,
    console: Optional[Console] = None,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    **kwargs: Any,
) -> None:
    """Render Markdown text to the terminal.

    Parameters
    ----------
    text : str
        Markdown source
    options : TerminalRendererOptions, optional
        Rendering options
    console : Console, optional
        Output console; stdout when omitted
    parser_options : MarkdownParserOptions, optional
        Parser options
    kwargs : Any
        Individual rendering options (``show_symbols=True``,
        ``center_offset=4``, ...) overriding fields of ``options``

    Raises
    ------
    ParsingError
        If the Markdown parser fails
    OutputWriteError
        If the output stream cannot be written

    """
    options = _create_options_from_kwargs(options, **kwargs)
    render_events(markdown_to_events(text, parser_options), options, console)


def render_to_string(
    text: str,
    options: Optional[TerminalRendererOptions] = None,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    **kwargs: Any,
) -> str:
    """Render Markdown text to a plain string without colors.

    Layout is identical to terminal output: padding, prefixes, markers and
    table borders are all present, only the ANSI styling is left out.

    Parameters
    ----------
    text : str
        Markdown source
    options : TerminalRendererOptions, optional
        Rendering options; ``color`` is ignored
    parser_options : MarkdownParserOptions, optional
        Parser options
    kwargs : Any
        Individual rendering options overriding fields of ``options``

    Returns
    -------
    str
        Rendered lines, each ending with a newline

    """
    options = _create_options_from_kwargs(options, **kwargs)
    renderer = TerminalRenderer(options)
    return renderer.render_to_string(markdown_to_events(text, parser_options))


def render_file(
    path: Union[str, Path],
    options: Optional[TerminalRendererOptions] = None,
    console: Optional[Console] = None,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    **kwargs: Any,
) -> None:
    """Read a Markdown file (or ``-`` for stdin) and render it.

    The whole input is read and decoded before anything is written, so
    input errors never leave partial output behind.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read
    MalformedFileError
        If the file is not valid UTF-8
    OutputWriteError
        If the output stream cannot be written

    """
    text = read_markdown_input(path)
    render_markdown(text, options, console, parser_options=parser_options, **kwargs)
