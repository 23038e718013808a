#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for md2term.

This module centralizes the hardcoded values used across the renderer,
the command-line interface and the configuration loader.

Constants are organized by category:
1. Type Definitions - Literal types shared by options and renderers
2. Terminal Rendering - Defaults for layout and markup symbols
3. Table Layout - Border character sets
4. Configuration - Config file discovery and environment variables
5. Exit Codes - Process exit status values used by the CLI
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]
TableStyle = Literal["ascii", "box"]
ColorMode = Literal["auto", "always", "never"]

# =============================================================================
# Terminal Rendering Defaults
# =============================================================================

DEFAULT_SHOW_SYMBOLS = False
DEFAULT_CENTER_OFFSET = 0
DEFAULT_HR_WIDTH = 40
DEFAULT_HR_CHAR = "-"
DEFAULT_TABLE_STYLE: TableStyle = "ascii"
DEFAULT_COLOR_MODE: ColorMode = "auto"
DEFAULT_CODE_INDENT = 4
DEFAULT_TABLE_CELL_PADDING = 1

# Markers used when show-symbols mode is off
BULLET_MARKERS = ("• ", "◦ ", "▪ ")
QUOTE_MARKER = "│ "

# Literal Markdown markup emitted in show-symbols mode
SYMBOL_BULLET = "- "
SYMBOL_QUOTE = "> "
SYMBOL_HEADING = "#"
SYMBOL_STRONG = "**"
SYMBOL_EMPHASIS = "*"
SYMBOL_STRIKETHROUGH = "~~"
SYMBOL_CODE = "`"
SYMBOL_CODE_FENCE = "```"

# =============================================================================
# Table Layout
# =============================================================================

# Keys: top-left, top-mid, top-right, mid-left, mid-mid, mid-right,
# bottom-left, bottom-mid, bottom-right, horizontal, vertical
TABLE_BORDERS: dict[str, dict[str, str]] = {
    "ascii": {
        "tl": "+",
        "tm": "+",
        "tr": "+",
        "ml": "+",
        "mm": "+",
        "mr": "+",
        "bl": "+",
        "bm": "+",
        "br": "+",
        "h": "-",
        "v": "|",
    },
    "box": {
        "tl": "┌",
        "tm": "┬",
        "tr": "┐",
        "ml": "├",
        "mm": "┼",
        "mr": "┤",
        "bl": "└",
        "bm": "┴",
        "br": "┘",
        "h": "─",
        "v": "│",
    },
}

# =============================================================================
# Configuration
# =============================================================================

ENV_VAR_PREFIX = "MD2TERM_"
CONFIG_FILENAMES = [".md2term.toml", ".md2term.yaml", ".md2term.yml", ".md2term.json", "pyproject.toml"]
PYPROJECT_TOOL_SECTION = "md2term"

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_INPUT_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_OUTPUT_ERROR = 3
