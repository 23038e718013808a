#  Copyright (c) 2025 Tom Villani, Ph.D.
# md2term/options/terminal.py
"""Configuration options for terminal rendering.

This module defines the options controlling how the event stream is turned
into styled terminal lines: markup symbols, centering, table borders and
color output.
"""

from dataclasses import dataclass, field

from md2term.constants import (
    DEFAULT_CENTER_OFFSET,
    DEFAULT_CODE_INDENT,
    DEFAULT_COLOR_MODE,
    DEFAULT_HR_WIDTH,
    DEFAULT_SHOW_SYMBOLS,
    DEFAULT_TABLE_STYLE,
    ColorMode,
    TableStyle,
)
from md2term.options.base import BaseRendererOptions


@dataclass(frozen=True)
class TerminalRendererOptions(BaseRendererOptions):
    """Configuration options for terminal rendering.

    Parameters
    ----------
    show_symbols : bool, default False
        Emit the literal Markdown markup (``**``, ``#``, ``~~``, ...) next to
        the styling instead of relying on color alone.
    center_offset : int, default 0
        Number of spaces written before every output line.
    table_style : {"ascii", "box"}, default "ascii"
        Border characters used for tables.
    hr_width : int, default 40
        Number of dash characters in a horizontal rule.
    code_indent : int, default 4
        Indentation of code block lines when symbols are hidden.
    color : {"auto", "always", "never"}, default "auto"
        Whether styles are written as ANSI codes. "auto" defers to terminal
        detection.

    Examples
    --------
        >>> options = TerminalRendererOptions(show_symbols=True, center_offset=4)
        >>> options.create_updated(table_style="box").table_style
        'box'

    """

    show_symbols: bool = field(
        default=DEFAULT_SHOW_SYMBOLS,
        metadata={
            "help": "Show the literal Markdown symbols alongside styling",
            "cli_name": "symbol",
            "cli_short": "s",
        },
    )
    center_offset: int = field(
        default=DEFAULT_CENTER_OFFSET,
        metadata={
            "help": "Number of spaces to pad every line with",
            "cli_name": "center",
            "cli_short": "c",
            "type": int,
            "metavar": "N",
        },
    )
    table_style: TableStyle = field(
        default=DEFAULT_TABLE_STYLE,
        metadata={"help": "Table border characters", "choices": ["ascii", "box"]},
    )
    hr_width: int = field(
        default=DEFAULT_HR_WIDTH,
        metadata={"help": "Width of horizontal rules", "type": int, "metavar": "N"},
    )
    code_indent: int = field(
        default=DEFAULT_CODE_INDENT,
        metadata={"help": "Indentation of code block lines", "type": int, "metavar": "N"},
    )
    color: ColorMode = field(
        default=DEFAULT_COLOR_MODE,
        metadata={"help": "When to write colors", "choices": ["auto", "always", "never"]},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and choices.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.center_offset < 0:
            raise ValueError(f"center_offset must be non-negative, got {self.center_offset}")
        if self.hr_width <= 0:
            raise ValueError(f"hr_width must be positive, got {self.hr_width}")
        if self.code_indent < 0:
            raise ValueError(f"code_indent must be non-negative, got {self.code_indent}")
        if self.table_style not in ("ascii", "box"):
            raise ValueError(f"table_style must be 'ascii' or 'box', got {self.table_style!r}")
        if self.color not in ("auto", "always", "never"):
            raise ValueError(f"color must be 'auto', 'always' or 'never', got {self.color!r}")
