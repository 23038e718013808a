#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/renderers/styles.py
"""Static style and markup tables for terminal rendering.

Styles are looked up by element kind, never through the elements
themselves. Any kind missing from the table falls back to the null style,
so new element kinds render as plain text until they are given a style.

Nested styles are combined outermost first with ``rich`` style addition,
so the innermost element wins on conflicting attributes (a bold span inside
a blockquote keeps the quote color and adds bold).

"""

from __future__ import annotations

from typing import Iterable

from rich.style import Style

from md2term.constants import (
    SYMBOL_CODE,
    SYMBOL_EMPHASIS,
    SYMBOL_HEADING,
    SYMBOL_STRIKETHROUGH,
    SYMBOL_STRONG,
)
from md2term.events import (
    BlockQuote,
    Code,
    CodeBlock,
    Element,
    Emphasis,
    Heading,
    Image,
    Link,
    Strikethrough,
    Strong,
    TableHeaderCell,
    ThematicBreak,
)

HEADING_STYLES: dict[int, Style] = {
    1: Style(bold=True, underline=True, color="magenta"),
    2: Style(bold=True, color="blue"),
    3: Style(bold=True, color="cyan"),
    4: Style(bold=True, color="green"),
    5: Style(bold=True, color="yellow"),
    6: Style(bold=True, dim=True),
}

STYLE_TABLE: dict[type[Element], Style] = {
    Strong: Style(bold=True),
    Emphasis: Style(italic=True),
    Strikethrough: Style(strike=True),
    BlockQuote: Style(color="green"),
    CodeBlock: Style(color="cyan"),
    Code: Style(bold=True, color="cyan"),
    Link: Style(underline=True, color="blue"),
    Image: Style(italic=True, color="magenta"),
    ThematicBreak: Style(dim=True),
    TableHeaderCell: Style(bold=True),
}

# Decorations that are not element kinds
MARKER_STYLE = Style(bold=True)
QUOTE_MARKER_STYLE = STYLE_TABLE[BlockQuote]
TABLE_BORDER_STYLE = Style(dim=True)
URL_STYLE = Style(dim=True)


def style_for(element: Element) -> Style:
    """Return the style of a single element kind.

    Parameters
    ----------
    element : Element
        Element to look up

    Returns
    -------
    Style
        The element's style, or the null style for unstyled kinds

    """
    if isinstance(element, Heading):
        return HEADING_STYLES.get(element.level, Style.null())
    return STYLE_TABLE.get(type(element), Style.null())


def combined_style(elements: Iterable[Element]) -> Style:
    """Combine the styles of nested elements, outermost first."""
    return Style.combine([Style.null(), *(style_for(element) for element in elements)])


def markup_for(element: Element) -> tuple[str, str]:
    """Return the literal Markdown markup that opens and closes an element.

    Only inline kinds and headings are wrapped this way; block prefixes
    (quote markers, bullets, code fences) are handled by the renderer.

    Parameters
    ----------
    element : Element
        Element to look up

    Returns
    -------
    tuple of str
        Opening and closing markup, empty strings when the kind has none

    """
    if isinstance(element, Heading):
        return SYMBOL_HEADING * element.level + " ", ""
    if isinstance(element, Strong):
        return SYMBOL_STRONG, SYMBOL_STRONG
    if isinstance(element, Emphasis):
        return SYMBOL_EMPHASIS, SYMBOL_EMPHASIS
    if isinstance(element, Strikethrough):
        return SYMBOL_STRIKETHROUGH, SYMBOL_STRIKETHROUGH
    if isinstance(element, Code):
        return SYMBOL_CODE, SYMBOL_CODE
    if isinstance(element, Image):
        return "![", f"]({element.url})"
    if isinstance(element, Link):
        return "[", f"]({element.url})"
    return "", ""
