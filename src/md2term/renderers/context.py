#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/renderers/context.py
"""Mutable rendering state: styled lines, buffered tables and the block stack.

A ``RenderContext`` is owned by exactly one rendering run. It tracks which
block elements are currently open, the line being assembled and, while a
table is open, every row of that table. Tables have to be buffered in full
because column widths are only known once the last row has been seen, so a
table's size is bounded by available memory.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from rich.cells import cell_len
from rich.style import Style

from md2term.constants import Alignment
from md2term.events import CodeBlock, Element, List, ListItem, Table, TableCell

logger = logging.getLogger(__name__)


class Segment(NamedTuple):
    """A run of text sharing one style."""

    text: str
    style: Style = Style.null()


@dataclass
class StyledLine:
    """One terminal line made of styled segments.

    Parameters
    ----------
    padding : int, default = 0
        Number of spaces written before the first segment
    segments : list of Segment, default = empty list
        Styled text in display order

    """

    padding: int = 0
    segments: list[Segment] = field(default_factory=list)

    def append(self, text: str, style: Optional[Style] = None) -> None:
        """Append a segment, ignoring empty text."""
        if text:
            self.segments.append(Segment(text, style or Style.null()))

    def extend(self, segments: list[Segment]) -> None:
        """Append several segments in order."""
        for segment in segments:
            self.append(segment.text, segment.style)

    @property
    def plain(self) -> str:
        """Text of the line without padding or styles."""
        return "".join(segment.text for segment in self.segments)

    @property
    def cell_width(self) -> int:
        """Display width of the line content, excluding padding."""
        return cell_len(self.plain)

    def is_empty(self) -> bool:
        """Whether the line has no content yet."""
        return not self.segments


@dataclass(frozen=True)
class Cell:
    """Table cell content with its alignment."""

    segments: tuple[Segment, ...] = ()
    alignment: Alignment = "left"

    @property
    def plain(self) -> str:
        """Cell text without styles."""
        return "".join(segment.text for segment in self.segments)

    @property
    def cell_width(self) -> int:
        """Display width of the cell text."""
        return cell_len(self.plain)


class TableShapeError(ValueError):
    """Raised when a row's cell count differs from the header's."""


@dataclass
class TableModel:
    """A table being buffered until its end event.

    The first row appended is the header; every later row must have the
    same number of cells. Rows that do not fit are kept separately in
    ``stray_rows`` so they can still be shown as plain text.

    Parameters
    ----------
    alignments : tuple, default = ()
        Column alignments from the header delimiter row

    """

    alignments: tuple[Optional[Alignment], ...] = ()
    header: Optional[tuple[Cell, ...]] = None
    rows: list[tuple[Cell, ...]] = field(default_factory=list)
    stray_rows: list[tuple[Cell, ...]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        """Number of columns, fixed by the header row."""
        return len(self.header) if self.header is not None else 0

    def column_alignment(self, index: int) -> Alignment:
        """Alignment of column ``index``, defaulting to left."""
        if index < len(self.alignments) and self.alignments[index]:
            return self.alignments[index]  # type: ignore[return-value]
        return "left"

    def append_row(self, cells: list[Cell], is_header: bool = False) -> None:
        """Append a row, enforcing the header's cell count.

        Parameters
        ----------
        cells : list of Cell
            Cells of the row in column order
        is_header : bool, default = False
            Whether the row is the header row

        Raises
        ------
        TableShapeError
            If the row's cell count differs from the header's

        """
        if is_header or self.header is None:
            if not any(self.alignments):
                self.alignments = tuple(cell.alignment for cell in cells)
            # Cells inherit the column alignment declared by the delimiter row
            self.header = tuple(
                Cell(cell.segments, self.column_alignment(i)) for i, cell in enumerate(cells)
            )
            return

        if len(cells) != self.column_count:
            raise TableShapeError(f"Row has {len(cells)} cells, header has {self.column_count}")

        self.rows.append(tuple(Cell(cell.segments, self.column_alignment(i)) for i, cell in enumerate(cells)))


@dataclass
class BlockFrame:
    """An open block element on the context stack.

    Parameters
    ----------
    element : Element
        The open element
    marker : str, default = ""
        For list items, the bullet or number not yet printed
    indent : int, default = 0
        For list items, the width of the marker; continuation lines are
        indented by this many spaces
    next_number : int, default = 1
        For ordered lists, the number of the next item

    """

    element: Element
    marker: str = ""
    indent: int = 0
    next_number: int = 1


class RenderContext:
    """State of one rendering run.

    Parameters
    ----------
    center_offset : int, default = 0
        Padding applied to every line of the run

    """

    def __init__(self, center_offset: int = 0):
        """Initialize an empty context."""
        if center_offset < 0:
            raise ValueError(f"center_offset must be non-negative, got {center_offset}")
        self.center_offset = center_offset
        self.stack: list[BlockFrame] = []
        self.inline: list[Element] = []
        self.table: Optional[TableModel] = None
        self.row: Optional[list[Cell]] = None
        self.cell: Optional[list[Segment]] = None
        self.line = self.new_line()

    def new_line(self) -> StyledLine:
        """Create an empty line carrying the run's padding."""
        return StyledLine(padding=self.center_offset)

    def reset_line(self) -> StyledLine:
        """Discard the current line and return the finished one."""
        finished = self.line
        self.line = self.new_line()
        return finished

    # -- block stack --------------------------------------------------------

    def push(self, element: Element, marker: str = "") -> BlockFrame:
        """Open a block element."""
        frame = BlockFrame(element=element, marker=marker, indent=cell_len(marker))
        if isinstance(element, List):
            frame.next_number = element.start
        self.stack.append(frame)
        return frame

    def pop(self) -> Optional[BlockFrame]:
        """Close the innermost block element.

        Returns None instead of failing when the stack is already empty.
        """
        if not self.stack:
            logger.warning("Block end without a matching start, ignoring")
            return None
        return self.stack.pop()

    def pop_until(self, kind: type[Element]) -> Optional[BlockFrame]:
        """Close blocks up to and including the innermost one of ``kind``.

        Blocks opened inside it and never closed are closed with it. When no
        block of that kind is open nothing is popped.
        """
        if self.innermost(kind) is None:
            logger.warning("End of %s without a matching start, ignoring", kind.__name__)
            return None

        while self.stack:
            frame = self.stack.pop()
            if isinstance(frame.element, kind):
                return frame
        return None

    @property
    def depth(self) -> int:
        """Number of open block elements."""
        return len(self.stack)

    def innermost(self, kind: type[Element]) -> Optional[BlockFrame]:
        """Return the innermost open frame of the given kind."""
        for frame in reversed(self.stack):
            if isinstance(frame.element, kind):
                return frame
        return None

    @property
    def list_depth(self) -> int:
        """Number of open lists."""
        return sum(1 for frame in self.stack if isinstance(frame.element, List))

    @property
    def in_list_item(self) -> bool:
        """Whether a list item is open."""
        return self.innermost(ListItem) is not None

    @property
    def in_code_block(self) -> bool:
        """Whether the innermost block is a code block."""
        return bool(self.stack) and isinstance(self.stack[-1].element, CodeBlock)

    def open_elements(self) -> list[Element]:
        """Open block and inline elements, outermost first."""
        return [frame.element for frame in self.stack] + list(self.inline)

    # -- inline stack -------------------------------------------------------

    def push_inline(self, element: Element) -> None:
        """Open an inline element."""
        self.inline.append(element)

    def pop_inline(self, element: Optional[Element] = None) -> Optional[Element]:
        """Close an inline element.

        Closes the innermost open element equal to ``element``, or the
        innermost one when ``element`` is None. Unmatched ends are ignored.
        """
        if element is None or (self.inline and self.inline[-1] == element):
            if not self.inline:
                logger.warning("Inline end without a matching start, ignoring")
                return None
            return self.inline.pop()

        for index in range(len(self.inline) - 1, -1, -1):
            if self.inline[index] == element:
                return self.inline.pop(index)

        logger.warning("Inline end for %s without a matching start, ignoring", type(element).__name__)
        return None

    # -- tables -------------------------------------------------------------

    @property
    def in_table(self) -> bool:
        """Whether a table is being buffered."""
        return self.table is not None

    def open_table(self, element: Table) -> TableModel:
        """Allocate a new empty table and make it current."""
        if self.table is not None:
            logger.warning("Nested table start, discarding the open table")
        self.table = TableModel(alignments=tuple(element.alignments))
        self.row = None
        self.cell = None
        return self.table

    def close_table(self) -> Optional[TableModel]:
        """Detach and return the current table."""
        table = self.table
        self.table = None
        self.row = None
        self.cell = None
        return table

    def open_cell(self) -> None:
        """Start collecting segments for a new cell."""
        if self.row is None:
            # Cells outside a row start an implicit one
            self.row = []
        self.cell = []

    def close_cell(self, element: TableCell) -> None:
        """Finish the current cell and add it to the current row."""
        segments = tuple(self.cell or [])
        self.cell = None
        if self.row is None:
            self.row = []
        self.row.append(Cell(segments=segments, alignment=element.alignment or "left"))
