#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for md2term.

Options are frozen dataclasses. Use ``create_updated`` to derive a modified
copy instead of mutating an instance.
"""

from md2term.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from md2term.options.markdown import MarkdownParserOptions
from md2term.options.terminal import TerminalRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "TerminalRendererOptions",
]
