#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/renderers/terminal.py
"""Styled terminal rendering of the Markdown event stream.

This module provides the TerminalRenderer class, which consumes events one
at a time and writes styled lines through a ``LineEmitter``:

- Block starts push a frame on the render context; blockquotes and list
  items contribute a prefix to every line written while they are open.
- Inline text is styled with the combined style of every open element and
  appended to the current line.
- Block ends flush the current line. Horizontal rules become a line of
  dashes.
- Tables are buffered until their end event, then laid out by
  ``TableLayout`` and written as one block.

Malformed input never aborts rendering: table cells outside a table, rows
that do not match the header and unmatched end events are logged and shown
as plain text (or dropped) instead.

"""

from __future__ import annotations

import io
import logging
from typing import Callable, Iterable, Optional

from rich.console import Console
from rich.style import Style

from md2term.constants import (
    BULLET_MARKERS,
    DEFAULT_HR_CHAR,
    QUOTE_MARKER,
    SYMBOL_BULLET,
    SYMBOL_CODE_FENCE,
    SYMBOL_QUOTE,
)
from md2term.events import (
    BlockQuote,
    CodeBlock,
    Element,
    End,
    Event,
    HardBreak,
    Heading,
    Link,
    List,
    ListItem,
    Paragraph,
    SoftBreak,
    Start,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Text,
    ThematicBreak,
)
from md2term.options.terminal import TerminalRendererOptions
from md2term.renderers.base import BaseRenderer
from md2term.renderers.context import RenderContext, Segment, TableShapeError
from md2term.renderers.emitter import LineEmitter, create_console
from md2term.renderers.styles import (
    MARKER_STYLE,
    QUOTE_MARKER_STYLE,
    URL_STYLE,
    combined_style,
    markup_for,
    style_for,
)
from md2term.renderers.table import TableLayout

logger = logging.getLogger(__name__)


class TerminalRenderer(BaseRenderer):
    """Render the Markdown event stream as styled terminal lines.

    Parameters
    ----------
    options : TerminalRendererOptions or None, default = None
        Terminal rendering options
    console : Console or None, default = None
        Output console; a stdout console honoring ``options.color`` is
        created when omitted
    emitter : LineEmitter or None, default = None
        Line sink; overrides ``console`` when given

    Examples
    --------
    Basic usage:

        >>> from md2term.parsers.markdown import markdown_to_events
        >>> renderer = TerminalRenderer(TerminalRendererOptions(show_symbols=True))
        >>> print(renderer.render_to_string(markdown_to_events("# Title")))
        # Title

    """

    def __init__(
        self,
        options: TerminalRendererOptions | None = None,
        console: Optional[Console] = None,
        emitter: Optional[LineEmitter] = None,
    ):
        """Initialize the terminal renderer with options."""
        BaseRenderer._validate_options_type(options, TerminalRendererOptions, "terminal")
        options = options or TerminalRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: TerminalRendererOptions = options
        self.emitter = emitter or LineEmitter(console or create_console(options.color))
        self.table_layout = TableLayout(options.table_style)

        self._start_handlers: dict[type[Element], Callable[[Element], None]] = {
            Heading: self._start_heading,
            Paragraph: self._start_block,
            BlockQuote: self._start_block,
            List: self._start_list,
            ListItem: self._start_list_item,
            CodeBlock: self._start_code_block,
            ThematicBreak: self._start_block,
            Table: self._start_table,
        }
        self._end_handlers: dict[type[Element], Callable[[Element], None]] = {
            List: self._end_list,
            ListItem: self._end_list_item,
            CodeBlock: self._end_code_block,
            ThematicBreak: self._end_thematic_break,
            Table: self._end_table,
        }
        self._reset()

    def _reset(self) -> None:
        self.context = RenderContext(self.options.center_offset)
        self._line_open = False
        self._pending_gap = False
        self._in_table_head = False
        self._ignored: list[Element] = []
        self._link_texts: list[str] = []

    # -- public API ---------------------------------------------------------

    def render(self, events: Iterable[Event]) -> None:
        """Consume the event stream and write every line to the emitter.

        Parameters
        ----------
        events : iterable of Event
            Events in document order

        Raises
        ------
        OutputWriteError
            If a line cannot be written

        """
        self._reset()
        for event in events:
            self.handle(event)
        self.finish()

    def render_to_string(self, events: Iterable[Event]) -> str:
        """Render the event stream to plain text, without colors.

        Parameters
        ----------
        events : iterable of Event
            Events in document order

        Returns
        -------
        str
            Rendered lines, each terminated by a newline

        """
        buffer = io.StringIO()
        saved_emitter = self.emitter
        self.emitter = LineEmitter(create_console(color="never", file=buffer))
        try:
            self.render(events)
        finally:
            self.emitter = saved_emitter
        return buffer.getvalue()

    def handle(self, event: Event) -> None:
        """Process a single event."""
        if isinstance(event, Start):
            self._on_start(event.element)
        elif isinstance(event, End):
            self._on_end(event.element)
        elif isinstance(event, Text):
            self._on_text(event.content)
        elif isinstance(event, SoftBreak):
            self._on_text(" ")
        elif isinstance(event, HardBreak):
            self._on_hard_break()
        else:
            logger.debug("Ignoring unknown event: %r", event)

    def finish(self) -> None:
        """Flush whatever is still pending at the end of the stream."""
        if self.context.in_table:
            logger.warning("Document ended inside a table, rendering what was buffered")
            self._finish_table()
        self._flush_line()
        if self.context.stack:
            logger.debug("%d block(s) still open at end of document", self.context.depth)

    # -- dispatch -----------------------------------------------------------

    def _on_start(self, element: Element) -> None:
        if self.context.in_table:
            self._start_in_table(element)
            return

        handler = self._start_handlers.get(type(element))
        if handler is not None:
            handler(element)
        elif isinstance(element, (TableHead, TableRow, TableCell)):
            self._start_stray_table_part(element)
        elif element.is_block:
            self._start_block(element)
        else:
            self._start_inline(element)

    def _on_end(self, element: Element) -> None:
        if self.context.in_table:
            self._end_in_table(element)
            return

        handler = self._end_handlers.get(type(element))
        if handler is not None:
            handler(element)
        elif isinstance(element, (TableHead, TableRow, TableCell)):
            self._end_stray_table_part(element)
        elif element.is_block:
            self._end_block(element)
        else:
            self._end_inline(element)

    def _on_text(self, content: str) -> None:
        if not content:
            return

        if self.context.in_table:
            if self.context.cell is None:
                logger.debug("Dropping text outside of a table cell")
                return
            text = content.replace("\n", " ").replace("\t", "    ")
        elif self.context.in_code_block:
            self._code_text(content)
            return
        else:
            text = content.replace("\n", " ")

        if self._link_texts:
            self._link_texts[-1] += text
        self._append(text, self._current_style())

    def _on_hard_break(self) -> None:
        if self.context.in_table:
            self._append(" ", self._current_style())
        else:
            self._ensure_line()
            self._flush_line()

    # -- block elements -----------------------------------------------------

    def _start_block(self, element: Element) -> None:
        self._begin_block()
        self.context.push(element)

    def _end_block(self, element: Element) -> None:
        self._flush_line()
        self._close_inline()
        self.context.pop_until(type(element))
        self._pending_gap = True

    def _start_heading(self, element: Element) -> None:
        self._start_block(element)
        if self.options.show_symbols:
            opening, _ = markup_for(element)
            self._append(opening, self._current_style())

    def _start_list(self, element: Element) -> None:
        if self.context.in_list_item:
            # Nested lists are tight: they start on the next line
            self._flush_line()
            self._pending_gap = False
        else:
            self._begin_block()
        self.context.push(element)

    def _end_list(self, element: Element) -> None:
        self._flush_line()
        self.context.pop_until(List)
        if not self.context.in_list_item:
            self._pending_gap = True

    def _start_list_item(self, element: Element) -> None:
        self._flush_line()
        self._pending_gap = False
        self.context.push(element, marker=self._list_marker())

    def _end_list_item(self, element: Element) -> None:
        frame = self.context.innermost(ListItem)
        if frame is not None and frame.marker:
            # Empty item: still show its bullet
            self._ensure_line()
        self._flush_line()
        self._close_inline()
        self.context.pop_until(ListItem)
        self._pending_gap = False

    def _list_marker(self) -> str:
        frame = self.context.innermost(List)
        if frame is not None and isinstance(frame.element, List) and frame.element.ordered:
            marker = f"{frame.next_number}. "
            frame.next_number += 1
            return marker
        if self.options.show_symbols:
            return SYMBOL_BULLET
        depth = max(self.context.list_depth - 1, 0)
        return BULLET_MARKERS[depth % len(BULLET_MARKERS)]

    def _start_code_block(self, element: Element) -> None:
        self._start_block(element)
        if self.options.show_symbols:
            language = element.language if isinstance(element, CodeBlock) else None
            self._append(SYMBOL_CODE_FENCE + (language or ""), self._current_style())
            self._flush_line()

    def _end_code_block(self, element: Element) -> None:
        self._flush_line()
        if self.options.show_symbols and self.context.in_code_block:
            self._append(SYMBOL_CODE_FENCE, self._current_style())
            self._flush_line()
        self.context.pop_until(CodeBlock)
        self._pending_gap = True

    def _code_text(self, content: str) -> None:
        style = self._current_style()
        parts = content.split("\n")
        for part in parts[:-1]:
            self._ensure_line()
            self.context.line.append(part, style)
            self._flush_line()
        if parts[-1]:
            self._append(parts[-1], style)

    def _end_thematic_break(self, element: Element) -> None:
        self._flush_line()
        self._append(DEFAULT_HR_CHAR * self.options.hr_width, style_for(ThematicBreak()))
        self._flush_line()
        self.context.pop_until(ThematicBreak)
        self._pending_gap = True

    # -- tables -------------------------------------------------------------

    def _start_table(self, element: Element) -> None:
        self._start_block(element)
        if isinstance(element, Table):
            self.context.open_table(element)
        self._in_table_head = False

    def _end_table(self, element: Element) -> None:
        logger.warning("Table end without an open table, ignoring")
        self.context.pop_until(Table)

    def _start_in_table(self, element: Element) -> None:
        if isinstance(element, TableHead):
            self._in_table_head = True
        elif isinstance(element, TableRow):
            self.context.row = []
        elif isinstance(element, TableCell):
            self.context.open_cell()
        elif element.is_block:
            logger.warning("Ignoring %s inside a table", type(element).__name__)
            self._ignored.append(element)
        else:
            self._start_inline(element)

    def _end_in_table(self, element: Element) -> None:
        if self._ignored and self._ignored[-1] == element:
            self._ignored.pop()
        elif isinstance(element, Table):
            self._finish_table()
        elif isinstance(element, TableHead):
            self._in_table_head = False
        elif isinstance(element, TableRow):
            self._close_table_row()
        elif isinstance(element, TableCell):
            self.context.close_cell(element)
        elif not element.is_block:
            self._end_inline(element)

    def _close_table_row(self) -> None:
        table = self.context.table
        row = self.context.row or []
        self.context.row = None
        if table is None:
            return
        try:
            table.append_row(row, is_header=self._in_table_head)
        except TableShapeError as e:
            logger.warning("Malformed table row (%s), rendering it as plain text", e)
            table.stray_rows.append(tuple(row))

    def _finish_table(self) -> None:
        table = self.context.close_table()
        self.context.pop_until(Table)
        self._close_inline()
        self._ignored.clear()
        self._in_table_head = False
        if table is None:
            return

        padding = self.context.center_offset
        lines = self.table_layout.layout(table, padding=padding)
        lines.extend(self.table_layout.plain_rows(table.stray_rows, padding=padding))
        for line in lines:
            line.segments[:0] = self._prefix()
            self.emitter.emit(line)
        self._pending_gap = True

    def _start_stray_table_part(self, element: Element) -> None:
        logger.warning("%s outside of a table, rendering as plain text", type(element).__name__)
        if isinstance(element, TableRow):
            self._flush_line()
        elif isinstance(element, TableCell) and self._line_open and not self.context.line.is_empty():
            self._append("  ")

    def _end_stray_table_part(self, element: Element) -> None:
        if isinstance(element, TableRow):
            self._flush_line()

    # -- inline elements ----------------------------------------------------

    def _start_inline(self, element: Element) -> None:
        self.context.push_inline(element)
        if isinstance(element, Link):
            self._link_texts.append("")
        if self.options.show_symbols:
            opening, _ = markup_for(element)
            self._append(opening, self._current_style())

    def _end_inline(self, element: Element) -> None:
        if element not in self.context.inline:
            logger.warning("End of %s without a matching start, ignoring", type(element).__name__)
            return

        style = self._current_style()
        link_text = self._link_texts.pop() if isinstance(element, Link) and self._link_texts else None
        if self.options.show_symbols:
            _, closing = markup_for(element)
            self._append(closing, style)
        elif isinstance(element, Link) and element.url and element.url != link_text:
            self._append(f" ({element.url})", URL_STYLE)
        self.context.pop_inline(element)

    def _close_inline(self) -> None:
        if self.context.inline:
            logger.debug("Closing %d unterminated inline element(s)", len(self.context.inline))
            self.context.inline.clear()
            self._link_texts.clear()

    # -- line assembly ------------------------------------------------------

    def _current_style(self) -> Style:
        if self.context.in_table:
            return combined_style(self.context.inline)
        return combined_style(self.context.open_elements())

    def _prefix(self, consume: bool = True) -> list[Segment]:
        """Build the container prefix for the next line.

        Blockquotes contribute a quote marker, list items their marker on
        the first line and matching spaces afterwards.
        """
        quote_marker = SYMBOL_QUOTE if self.options.show_symbols else QUOTE_MARKER
        segments: list[Segment] = []
        for frame in self.context.stack:
            element = frame.element
            if isinstance(element, BlockQuote):
                segments.append(Segment(quote_marker, QUOTE_MARKER_STYLE))
            elif isinstance(element, ListItem):
                if frame.marker and consume:
                    segments.append(Segment(frame.marker, MARKER_STYLE))
                    frame.marker = ""
                else:
                    segments.append(Segment(" " * frame.indent))
            elif isinstance(element, CodeBlock) and not self.options.show_symbols:
                segments.append(Segment(" " * self.options.code_indent))
        return segments

    def _ensure_line(self) -> None:
        if not self._line_open:
            self.context.line.extend(self._prefix())
            self._line_open = True

    def _append(self, text: str, style: Optional[Style] = None) -> None:
        if not text:
            return
        if self.context.in_table:
            if self.context.cell is not None:
                self.context.cell.append(Segment(text, style or Style.null()))
            return
        self._ensure_line()
        self.context.line.append(text, style)

    def _flush_line(self) -> None:
        if self._line_open:
            self.emitter.emit(self.context.reset_line())
            self._line_open = False

    def _begin_block(self) -> None:
        """Close the running line and separate this block from the last one."""
        self._flush_line()
        if not self._pending_gap:
            return
        self._pending_gap = False
        if self.context.in_list_item:
            return

        segments = self._prefix(consume=False)
        while segments and not segments[-1].text.strip():
            segments.pop()
        if segments:
            last = segments[-1]
            segments[-1] = Segment(last.text.rstrip(), last.style)

        gap = self.context.new_line()
        gap.extend(segments)
        self.emitter.emit(gap)
