#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers for md2term."""

from md2term.utils.inputs import read_markdown_input

__all__ = ["read_markdown_input"]
