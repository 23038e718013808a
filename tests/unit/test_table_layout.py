#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_table_layout.py
"""Unit tests for TableLayout.

Tests cover:
- Column width computation, including wide characters
- ASCII and box-drawing borders
- Cell alignment
- Header-only tables and rows rendered as plain text

"""

import pytest
from rich.cells import cell_len
from rich.style import Style

from md2term.renderers.context import Cell, Segment, TableModel
from md2term.renderers.table import TableLayout


def make_table(header, *rows, alignments=()) -> TableModel:
    table = TableModel(alignments=tuple(alignments))
    table.append_row([Cell((Segment(text),)) for text in header], is_header=True)
    for row in rows:
        table.append_row([Cell((Segment(text),)) for text in row])
    return table


@pytest.mark.unit
class TestColumnWidths:
    """Tests for column width computation."""

    def test_widest_cell_plus_padding(self) -> None:
        """Test that each column fits its widest cell plus one space per side."""
        table = make_table(["A", "B"], ["1", "22"])
        assert TableLayout().column_widths(table) == [3, 4]

    def test_wide_characters_count_double(self) -> None:
        """Test that CJK characters take two terminal cells."""
        table = make_table(["漢字"], ["x"])
        assert TableLayout().column_widths(table) == [6]

    def test_empty_column_reserves_padding(self) -> None:
        """Test that an empty column is still two cells wide."""
        table = make_table([""], [""])
        assert TableLayout().column_widths(table) == [2]

    def test_table_without_header(self) -> None:
        """Test that a table with no rows lays out to nothing."""
        layout = TableLayout()
        assert layout.column_widths(TableModel()) == []
        assert layout.layout(TableModel()) == []


@pytest.mark.unit
class TestLayout:
    """Tests for table layout output."""

    def test_ascii_table(self) -> None:
        """Test the full ASCII rendering of a small table."""
        table = make_table(["A", "B"], ["1", "22"])
        lines = [line.plain for line in TableLayout().layout(table)]
        assert lines == [
            "+---+----+",
            "| A | B  |",
            "+---+----+",
            "| 1 | 22 |",
            "+---+----+",
        ]

    def test_box_table(self) -> None:
        """Test box-drawing borders."""
        table = make_table(["A", "B"], ["1", "2"])
        lines = [line.plain for line in TableLayout("box").layout(table)]
        assert lines == [
            "┌───┬───┐",
            "│ A │ B │",
            "├───┼───┤",
            "│ 1 │ 2 │",
            "└───┴───┘",
        ]

    def test_header_only_table(self) -> None:
        """Test that a table without body rows still has all borders."""
        lines = [line.plain for line in TableLayout().layout(make_table(["Name"]))]
        assert lines == ["+------+", "| Name |", "+------+", "+------+"]

    def test_all_lines_same_width(self) -> None:
        """Test that every line of a table has the same display width."""
        table = make_table(["a", "漢字漢字", "c"], ["long cell", "", "x"], ["1", "2", "three"])
        widths = {line.cell_width for line in TableLayout().layout(table)}
        assert len(widths) == 1

    def test_padding_applied_to_every_line(self) -> None:
        """Test that the centering offset reaches every table line."""
        lines = TableLayout().layout(make_table(["A"], ["1"]), padding=5)
        assert all(line.padding == 5 for line in lines)

    def test_unknown_style_rejected(self) -> None:
        """Test that an unknown border style raises ValueError."""
        with pytest.raises(ValueError):
            TableLayout("double")  # type: ignore[arg-type]


@pytest.mark.unit
class TestAlignment:
    """Tests for cell alignment."""

    @pytest.mark.parametrize(
        "alignment,expected",
        [
            ("left", "| x      |"),
            ("center", "|   x    |"),
            ("right", "|      x |"),
        ],
    )
    def test_alignment(self, alignment: str, expected: str) -> None:
        """Test left, center and right alignment of a short cell."""
        table = make_table(["header"], ["x"], alignments=[alignment])
        lines = TableLayout().layout(table)
        assert lines[3].plain == expected

    def test_center_puts_extra_space_right(self) -> None:
        """Test that odd free space is split with the extra space on the right."""
        table = make_table(["abcd"], ["x"], alignments=["center"])
        assert TableLayout().layout(table)[3].plain == "|  x   |"


@pytest.mark.unit
class TestStyling:
    """Tests for styles of table segments."""

    def test_header_cells_are_bold(self) -> None:
        """Test that header text is bold and body text keeps its own style."""
        table = TableModel()
        table.append_row([Cell((Segment("H", Style(italic=True)),))], is_header=True)
        table.append_row([Cell((Segment("b"),))])
        lines = TableLayout().layout(table)

        header_text = next(seg for seg in lines[1].segments if seg.text == "H")
        assert header_text.style.bold and header_text.style.italic
        body_text = next(seg for seg in lines[3].segments if seg.text == "b")
        assert not body_text.style.bold

    def test_borders_are_dim(self) -> None:
        """Test that border segments are dimmed."""
        line = TableLayout().layout(make_table(["A"]))[0]
        assert all(segment.style.dim for segment in line.segments)


@pytest.mark.unit
class TestPlainRows:
    """Tests for rows rendered outside the grid."""

    def test_plain_rows(self) -> None:
        """Test that cells are joined with two spaces."""
        rows = [(Cell((Segment("a"),)), Cell((Segment("b"),)))]
        lines = TableLayout().plain_rows(rows, padding=2)
        assert [line.plain for line in lines] == ["a  b"]
        assert lines[0].padding == 2
        assert cell_len(lines[0].plain) == 4
