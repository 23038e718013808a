#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/renderers/table.py
"""Table layout for terminal output.

``TableLayout`` turns a fully buffered ``TableModel`` into bordered,
aligned styled lines:

    +-----+------+
    | A   | B    |
    +-----+------+
    | 1   | 22   |
    +-----+------+

Each column is as wide as its widest cell (measured in terminal cells, so
wide characters count double) plus one space of padding on each side.
Every line of a table therefore has the same display width.

"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from rich.style import Style

from md2term.constants import DEFAULT_TABLE_CELL_PADDING, TABLE_BORDERS, TableStyle
from md2term.events import TableHeaderCell
from md2term.renderers.context import Cell, Segment, StyledLine, TableModel
from md2term.renderers.styles import TABLE_BORDER_STYLE, style_for

logger = logging.getLogger(__name__)


class TableLayout:
    """Compute column widths and draw a buffered table.

    Parameters
    ----------
    table_style : {"ascii", "box"}, default "ascii"
        Border character set
    cell_padding : int, default 1
        Spaces on each side of every cell

    Examples
    --------
        >>> layout = TableLayout()
        >>> table = TableModel()
        >>> table.append_row([Cell((Segment("A"),))], is_header=True)
        >>> [line.plain for line in layout.layout(table)]
        ['+---+', '| A |', '+---+', '+---+']

    """

    def __init__(self, table_style: TableStyle = "ascii", cell_padding: int = DEFAULT_TABLE_CELL_PADDING):
        """Initialize the layout with a border style."""
        if table_style not in TABLE_BORDERS:
            raise ValueError(f"Unknown table style: {table_style!r}")
        self.table_style = table_style
        self.borders = TABLE_BORDERS[table_style]
        self.cell_padding = cell_padding
        self.header_style = style_for(TableHeaderCell())

    def column_widths(self, table: TableModel) -> list[int]:
        """Return the full width of every column, padding included.

        Parameters
        ----------
        table : TableModel
            Buffered table

        Returns
        -------
        list of int
            Widths in terminal cells

        """
        if table.header is None:
            return []

        content_widths = [cell.cell_width for cell in table.header]
        for row in table.rows:
            for i, cell in enumerate(row):
                content_widths[i] = max(content_widths[i], cell.cell_width)

        return [width + 2 * self.cell_padding for width in content_widths]

    def layout(self, table: TableModel, padding: int = 0) -> list[StyledLine]:
        """Render a table to styled lines.

        Parameters
        ----------
        table : TableModel
            Buffered table
        padding : int, default 0
            Centering offset applied to every line

        Returns
        -------
        list of StyledLine
            Top border, header, separator, body rows and bottom border. Empty
            when the table has no header.

        """
        widths = self.column_widths(table)
        if not widths:
            logger.debug("Table without header row, nothing to lay out")
            return []

        b = self.borders
        body: list[list[Segment]] = [
            self._border(widths, b["tl"], b["tm"], b["tr"]),
            self._row(table.header or (), widths, self.header_style),
            self._border(widths, b["ml"], b["mm"], b["mr"]),
        ]
        for row in table.rows:
            body.append(self._row(row, widths, None))
        body.append(self._border(widths, b["bl"], b["bm"], b["br"]))

        lines = []
        for segments in body:
            line = StyledLine(padding=padding)
            line.extend(segments)
            lines.append(line)
        return lines

    def plain_rows(self, rows: Sequence[Sequence[Cell]], padding: int = 0) -> list[StyledLine]:
        """Render rows as plain unaligned text, one line per row.

        Used for rows that do not fit the table's column grid.
        """
        lines = []
        for row in rows:
            line = StyledLine(padding=padding)
            for i, cell in enumerate(row):
                if i:
                    line.append("  ")
                line.extend(list(cell.segments))
            lines.append(line)
        return lines

    def _border(self, widths: list[int], left: str, middle: str, right: str) -> list[Segment]:
        horizontal = self.borders["h"]
        text = left + middle.join(horizontal * width for width in widths) + right
        return [Segment(text, TABLE_BORDER_STYLE)]

    def _row(self, cells: Sequence[Cell], widths: list[int], row_style: Optional[Style]) -> list[Segment]:
        vertical = Segment(self.borders["v"], TABLE_BORDER_STYLE)
        segments = [vertical]
        for cell, width in zip(cells, widths):
            left, right = self._alignment_padding(cell, width - 2 * self.cell_padding)
            segments.append(Segment(" " * (self.cell_padding + left)))
            for segment in cell.segments:
                style = row_style + segment.style if row_style is not None else segment.style
                segments.append(Segment(segment.text, style))
            segments.append(Segment(" " * (right + self.cell_padding)))
            segments.append(vertical)
        return segments

    @staticmethod
    def _alignment_padding(cell: Cell, content_width: int) -> tuple[int, int]:
        """Split the free space of a cell into left and right padding."""
        free = max(content_width - cell.cell_width, 0)
        if cell.alignment == "right":
            return free, 0
        if cell.alignment == "center":
            left = free // 2
            return left, free - left
        return 0, free
