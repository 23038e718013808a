#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers producing the Markdown event stream."""

from md2term.parsers.markdown import MarkdownEventParser, markdown_to_events

__all__ = ["MarkdownEventParser", "markdown_to_events"]
