#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/renderers/emitter.py
"""Write finished styled lines to a rich console."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.text import Text

from md2term.constants import ColorMode
from md2term.exceptions import OutputWriteError
from md2term.renderers.context import StyledLine

logger = logging.getLogger(__name__)


class PipeAwareConsole(Console):
    """Console that lets a closed output pipe surface as ``BrokenPipeError``.

    Rich normally answers a broken pipe by redirecting stdout to devnull and
    exiting with status 1. md2term reports it as an output error instead.
    """

    def on_broken_pipe(self) -> None:
        """Re-raise the ``BrokenPipeError`` rich is currently handling."""
        raise


def create_console(color: ColorMode = "auto", file: Optional[object] = None) -> Console:
    """Create a console configured for line-by-line Markdown output.

    Markup, emoji codes and automatic highlighting are disabled so document
    text is written verbatim. Soft wrapping is on: lines are never wrapped
    or cropped to the terminal width.

    Parameters
    ----------
    color : {"auto", "always", "never"}, default "auto"
        "auto" lets rich detect whether the target is a color terminal
    file : file-like, optional
        Output stream, stdout when omitted

    Returns
    -------
    PipeAwareConsole
        Configured console

    """
    kwargs: dict = {
        "file": file,
        "highlight": False,
        "markup": False,
        "emoji": False,
        "soft_wrap": True,
    }
    if color == "always":
        kwargs["force_terminal"] = True
    elif color == "never":
        kwargs["no_color"] = True
        kwargs["color_system"] = None
    return PipeAwareConsole(**kwargs)


class LineEmitter:
    """Write styled lines, one at a time, in order.

    Parameters
    ----------
    console : Console, optional
        Output sink; a default stdout console is created when omitted

    """

    def __init__(self, console: Optional[Console] = None):
        """Initialize the emitter."""
        self.console = console or create_console()
        self.lines_written = 0

    def emit(self, line: StyledLine) -> None:
        """Write one line: padding spaces, styled segments, newline.

        Rich closes every styled segment with a reset sequence, so styles
        never bleed into the padding or the next line.

        Raises
        ------
        OutputWriteError
            If the underlying stream cannot be written

        """
        text = Text(" " * line.padding, end="\n")
        for segment in line.segments:
            text.append(segment.text, style=segment.style)

        try:
            self.console.print(text, soft_wrap=True)
        except OSError as e:
            raise OutputWriteError(original_error=e) from e
        self.lines_written += 1


class LineRecorder(LineEmitter):
    """Emitter that keeps finished lines in memory instead of writing them."""

    def __init__(self) -> None:
        """Initialize an empty recorder."""
        super().__init__(console=create_console(color="never"))
        self.lines: list[StyledLine] = []

    def emit(self, line: StyledLine) -> None:
        """Store the line."""
        self.lines.append(line)
        self.lines_written += 1
