#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/parsers/markdown.py
"""Markdown to event stream converter.

This module turns Markdown source into the flat event stream consumed by the
terminal renderer. Parsing itself is done by mistune; this module only walks
mistune's token tree and emits ``Start``/``End``/``Text`` events in document
order.

"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

import mistune

from md2term.events import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    End,
    Event,
    HardBreak,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    Table,
    TableBodyCell,
    TableHead,
    TableHeaderCell,
    TableRow,
    Text,
    ThematicBreak,
)
from md2term.exceptions import ParsingError
from md2term.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

_VALID_ALIGNMENTS = ("left", "center", "right")


class MarkdownEventParser:
    r"""Convert Markdown text to an event stream.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> parser = MarkdownEventParser()
        >>> events = list(parser.parse("# Hello"))
        >>> events[0]
        Start(element=Heading(level=1))

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the parser with options."""
        self.options = options or MarkdownParserOptions()

        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            # Container variants let tables appear inside blockquotes and list items
            plugins.extend(
                [
                    "table",
                    "mistune.plugins.table.table_in_quote",
                    "mistune.plugins.table.table_in_list",
                ]
            )

        # renderer=None makes mistune return its token tree instead of HTML
        self._markdown = mistune.create_markdown(plugins=plugins, renderer=None)

    def parse(self, markdown_content: str) -> Iterator[Event]:
        """Parse Markdown text and yield events in document order.

        Parameters
        ----------
        markdown_content : str
            Markdown source

        Yields
        ------
        Event
            Start, End, Text, SoftBreak and HardBreak events

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        try:
            tokens, _state = self._markdown.parse(markdown_content)
        except Exception as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="tokenize", original_error=e) from e

        if not isinstance(tokens, list):
            logger.debug("Unexpected token container %s, nothing to render", type(tokens).__name__)
            return

        for token in tokens:
            yield from self._block_events(token)

    def _block_events(self, token: dict[str, Any]) -> Iterator[Event]:
        """Yield events for a single block-level token."""
        token_type = token.get("type", "")
        children = token.get("children", [])
        attrs = token.get("attrs") or {}

        if token_type == "heading":
            level = attrs.get("level", 1)
            # mistune only produces 1-6, anything else is clamped
            if not isinstance(level, int) or level < 1 or level > 6:
                level = 1
            yield from self._wrap(Heading(level=level), self._inline_events(children))
        elif token_type in ("paragraph", "block_text"):
            yield from self._wrap(Paragraph(), self._inline_events(children))
        elif token_type == "block_code":
            yield from self._code_block_events(token)
        elif token_type == "block_quote":
            yield from self._wrap(BlockQuote(), self._blocks_events(children))
        elif token_type == "list":
            yield from self._list_events(token)
        elif token_type == "thematic_break":
            yield Start(ThematicBreak())
            yield End(ThematicBreak())
        elif token_type == "table":
            yield from self._table_events(token)
        elif token_type == "blank_line":
            return
        else:
            # block_html and anything a plugin adds are not rendered
            logger.debug("Skipping unsupported block token: %s", token_type)

    def _blocks_events(self, tokens: Any) -> Iterator[Event]:
        if not isinstance(tokens, list):
            return
        for token in tokens:
            if isinstance(token, dict):
                yield from self._block_events(token)

    @staticmethod
    def _wrap(element: Any, inner: Iterator[Event]) -> Iterator[Event]:
        yield Start(element)
        yield from inner
        yield End(element)

    def _code_block_events(self, token: dict[str, Any]) -> Iterator[Event]:
        attrs = token.get("attrs") or {}
        info = attrs.get("info")
        language: Optional[str] = None
        if info:
            # The info string may carry metadata after the language
            parts = info.strip().split(None, 1)
            language = parts[0] if parts else None

        element = CodeBlock(language=language)
        yield Start(element)
        raw = token.get("raw", "")
        if raw:
            yield Text(raw)
        yield End(element)

    def _list_events(self, token: dict[str, Any]) -> Iterator[Event]:
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        if not isinstance(start, int):
            start = 1

        element = List(ordered=ordered, start=start)
        yield Start(element)
        for item in token.get("children", []):
            if not isinstance(item, dict):
                continue
            yield from self._wrap(ListItem(), self._blocks_events(item.get("children", [])))
        yield End(element)

    def _table_events(self, token: dict[str, Any]) -> Iterator[Event]:
        head_cells: list[dict[str, Any]] = []
        body_rows: list[list[dict[str, Any]]] = []

        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                # Header cells are direct children of table_head
                head_cells = [c for c in section.get("children", []) if c.get("type") == "table_cell"]
            elif section_type == "table_body":
                for row in section.get("children", []):
                    body_rows.append([c for c in row.get("children", []) if c.get("type") == "table_cell"])

        alignments = tuple(self._cell_alignment(cell) for cell in head_cells)
        table = Table(alignments=alignments)

        yield Start(table)
        yield Start(TableHead())
        yield Start(TableRow())
        for cell in head_cells:
            header_cell = TableHeaderCell(alignment=self._cell_alignment(cell))
            yield from self._wrap(header_cell, self._inline_events(cell.get("children", [])))
        yield End(TableRow())
        yield End(TableHead())

        for row_cells in body_rows:
            yield Start(TableRow())
            for cell in row_cells:
                body_cell = TableBodyCell(alignment=self._cell_alignment(cell))
                yield from self._wrap(body_cell, self._inline_events(cell.get("children", [])))
            yield End(TableRow())
        yield End(table)

    @staticmethod
    def _cell_alignment(cell: dict[str, Any]) -> Any:
        align = (cell.get("attrs") or {}).get("align")
        return align if align in _VALID_ALIGNMENTS else None

    def _inline_events(self, tokens: Any) -> Iterator[Event]:
        """Yield events for a list of inline tokens."""
        if not isinstance(tokens, list):
            return

        for token in tokens:
            if not isinstance(token, dict):
                continue
            token_type = token.get("type", "")
            children = token.get("children", [])
            attrs = token.get("attrs") or {}

            if token_type == "text":
                raw = token.get("raw", "")
                if raw:
                    yield Text(raw)
            elif token_type == "strong":
                yield from self._wrap(Strong(), self._inline_events(children))
            elif token_type == "emphasis":
                yield from self._wrap(Emphasis(), self._inline_events(children))
            elif token_type == "strikethrough":
                yield from self._wrap(Strikethrough(), self._inline_events(children))
            elif token_type == "codespan":
                yield from self._wrap(Code(), iter([Text(token.get("raw", ""))]))
            elif token_type == "link":
                link = Link(url=attrs.get("url", ""), title=attrs.get("title"))
                yield from self._wrap(link, self._inline_events(children))
            elif token_type == "image":
                image = Image(url=attrs.get("url", ""), title=attrs.get("title"))
                yield from self._wrap(image, self._inline_events(children))
            elif token_type == "softbreak":
                yield SoftBreak()
            elif token_type == "linebreak":
                yield HardBreak()
            else:
                logger.debug("Skipping unsupported inline token: %s", token_type)


def markdown_to_events(markdown_content: str, options: MarkdownParserOptions | None = None) -> Iterator[Event]:
    r"""Convert a Markdown string to an event stream.

    This is a convenience function that creates a parser and parses the
    Markdown in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Iterator[Event]
        Events in document order

    Examples
    --------
    >>> from md2term.parsers.markdown import markdown_to_events
    >>> [type(e).__name__ for e in markdown_to_events("Hi")]
    ['Start', 'Text', 'End']

    """
    return MarkdownEventParser(options).parse(markdown_content)
