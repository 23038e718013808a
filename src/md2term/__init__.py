"""md2term - render Markdown as styled terminal text.

md2term parses Markdown with ``mistune`` into a flat stream of start, end and
text events, then renders the stream line by line through ``rich``: headings,
emphasis, strikethrough, blockquotes, code, lists, horizontal rules and
aligned tables.

Examples
--------
Render a document to the terminal:

    >>> from md2term import render_markdown
    >>> render_markdown("# Title\\n\\n| A | B |\\n|---|---|\\n| 1 | 22 |")

Keep the literal Markdown symbols and pad every line:

    >>> from md2term import TerminalRendererOptions, render_markdown
    >>> render_markdown("**bold**", TerminalRendererOptions(show_symbols=True, center_offset=4))

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "md2term requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from md2term.api import markdown_to_events, render_events, render_file, render_markdown, render_to_string
from md2term.exceptions import (
    ConfigError,
    FileAccessError,
    FileError,
    MalformedFileError,
    Md2TermError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from md2term.options import MarkdownParserOptions, TerminalRendererOptions
from md2term.renderers.terminal import TerminalRenderer

__all__ = [
    "ConfigError",
    "FileAccessError",
    "FileError",
    "MalformedFileError",
    "MarkdownParserOptions",
    "Md2TermError",
    "OutputWriteError",
    "ParsingError",
    "RenderingError",
    "TerminalRenderer",
    "TerminalRendererOptions",
    "ValidationError",
    "__version__",
    "markdown_to_events",
    "render_events",
    "render_file",
    "render_markdown",
    "render_to_string",
]
