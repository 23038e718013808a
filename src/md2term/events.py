#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/events.py
"""Element kinds and the Markdown event stream.

The renderer never sees a document tree. It consumes a flat, ordered
sequence of events, each one either opening or closing an element, or
carrying inline text:

    Start(Paragraph()) Text("Hello ") Start(Strong()) Text("world")
    End(Strong()) End(Paragraph())

Element Kinds
-------------
Elements are small immutable tagged variants. Block-level kinds:
    - Heading, Paragraph, BlockQuote, CodeBlock
    - List, ListItem, ThematicBreak
    - Table, TableHead, TableRow, TableHeaderCell, TableBodyCell

Inline kinds:
    - Strong, Emphasis, Strikethrough, Code, Link, Image

Leaf constructs are still expressed as start/end pairs: inline code is
``Start(Code()) Text(...) End(Code())`` and a horizontal rule is
``Start(ThematicBreak()) End(ThematicBreak())``.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from md2term.constants import Alignment


@dataclass(frozen=True)
class Element:
    """Base class for every element kind."""

    @property
    def is_block(self) -> bool:
        """Whether this element starts a block-level construct."""
        return False


@dataclass(frozen=True)
class BlockElement(Element):
    """Base class for block-level element kinds."""

    @property
    def is_block(self) -> bool:
        """Block elements always report True."""
        return True


@dataclass(frozen=True)
class Heading(BlockElement):
    """ATX or setext heading.

    Parameters
    ----------
    level : int, default = 1
        Heading level from 1 to 6

    """

    level: int = 1

    def __post_init__(self) -> None:
        """Validate the heading level."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")


@dataclass(frozen=True)
class Paragraph(BlockElement):
    """Paragraph of inline content."""


@dataclass(frozen=True)
class BlockQuote(BlockElement):
    """Block quotation, possibly nested."""


@dataclass(frozen=True)
class CodeBlock(BlockElement):
    """Fenced or indented code block.

    Parameters
    ----------
    language : str or None, default = None
        Language from the fence info string, if any

    """

    language: Optional[str] = None


@dataclass(frozen=True)
class List(BlockElement):
    """List container.

    Parameters
    ----------
    ordered : bool, default = False
        Whether items are numbered
    start : int, default = 1
        First number of an ordered list

    """

    ordered: bool = False
    start: int = 1


@dataclass(frozen=True)
class ListItem(BlockElement):
    """Single list item."""


@dataclass(frozen=True)
class ThematicBreak(BlockElement):
    """Horizontal rule."""


@dataclass(frozen=True)
class Table(BlockElement):
    """Table container.

    Parameters
    ----------
    alignments : tuple, default = ()
        Per-column alignment from the header delimiter row
        ('left', 'center', 'right', or None when unspecified)

    """

    alignments: tuple[Optional[Alignment], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TableHead(BlockElement):
    """Wrapper around the header row of a table."""


@dataclass(frozen=True)
class TableRow(BlockElement):
    """Single table row."""


@dataclass(frozen=True)
class TableCell(BlockElement):
    """Base for table cells.

    Parameters
    ----------
    alignment : {'left', 'center', 'right'} or None, default = None
        Cell alignment from the header delimiter row

    """

    alignment: Optional[Alignment] = None


@dataclass(frozen=True)
class TableHeaderCell(TableCell):
    """Cell of the table header row."""


@dataclass(frozen=True)
class TableBodyCell(TableCell):
    """Cell of a table body row."""


@dataclass(frozen=True)
class Strong(Element):
    """Bold text."""


@dataclass(frozen=True)
class Emphasis(Element):
    """Italic text."""


@dataclass(frozen=True)
class Strikethrough(Element):
    """Struck-through text."""


@dataclass(frozen=True)
class Code(Element):
    """Inline code span."""


@dataclass(frozen=True)
class Link(Element):
    """Hyperlink around inline content.

    Parameters
    ----------
    url : str, default = ""
        Link target
    title : str or None, default = None
        Optional link title

    """

    url: str = ""
    title: Optional[str] = None


@dataclass(frozen=True)
class Image(Element):
    """Image whose inline content is the alt text."""

    url: str = ""
    title: Optional[str] = None


# -----------------------------------------------------------------------------
# Events
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Start:
    """An element opens."""

    element: Element


@dataclass(frozen=True)
class End:
    """An element closes."""

    element: Element


@dataclass(frozen=True)
class Text:
    """Inline text inside the innermost open element."""

    content: str


@dataclass(frozen=True)
class SoftBreak:
    """Line break in the source that renders as a space."""


@dataclass(frozen=True)
class HardBreak:
    """Forced line break."""


Event = Union[Start, End, Text, SoftBreak, HardBreak]
