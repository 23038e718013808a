#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers consuming the Markdown event stream."""

from md2term.renderers.base import BaseRenderer
from md2term.renderers.context import Cell, RenderContext, Segment, StyledLine, TableModel
from md2term.renderers.emitter import LineEmitter, LineRecorder, create_console
from md2term.renderers.table import TableLayout
from md2term.renderers.terminal import TerminalRenderer

__all__ = [
    "BaseRenderer",
    "Cell",
    "LineEmitter",
    "LineRecorder",
    "RenderContext",
    "Segment",
    "StyledLine",
    "TableLayout",
    "TableModel",
    "TerminalRenderer",
    "create_console",
]
