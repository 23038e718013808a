#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Unit tests for the md2term command line.

Tests cover:
- Rendering files and standard input
- --symbol and --center flags
- Environment variable defaults and their priority
- Exit codes for input, usage and output errors

"""

import io
from pathlib import Path

import pytest

from md2term.cli import main
from md2term.cli.builder import DynamicCLIBuilder, get_exit_code_for_exception
from md2term.constants import EXIT_INPUT_ERROR, EXIT_OUTPUT_ERROR, EXIT_SUCCESS, EXIT_USAGE_ERROR
from md2term.exceptions import ConfigError, FileNotFoundError, MalformedFileError, OutputWriteError


def run(args: list[str]) -> int:
    return main([*args, "--color", "never", "--no-config"])


@pytest.fixture
def doc(tmp_path: Path) -> Path:
    """Write a small Markdown document."""
    path = tmp_path / "doc.md"
    path.write_text("# Title\n\nSome **bold** text\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove md2term environment variables that would change defaults."""
    for name in ("SYMBOL", "CENTER", "TABLE_STYLE", "HR_WIDTH", "CODE_INDENT", "COLOR", "CONFIG", "LOG_LEVEL"):
        monkeypatch.delenv(f"MD2TERM_{name}", raising=False)


@pytest.mark.unit
@pytest.mark.cli
class TestRendering:
    """Tests for basic CLI rendering."""

    def test_render_file(self, doc: Path, capsys) -> None:
        """Test rendering a file given as positional argument."""
        assert run([str(doc)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Title\n\nSome bold text\n"

    def test_file_option(self, doc: Path, capsys) -> None:
        """Test rendering a file given with -f."""
        assert run(["-f", str(doc)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("Title\n")

    def test_symbol_flag(self, doc: Path, capsys) -> None:
        """Test that --symbol keeps the Markdown markup."""
        assert run([str(doc), "--symbol"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "# Title\n\nSome **bold** text\n"

    def test_short_flags(self, doc: Path, capsys) -> None:
        """Test -s and -c together."""
        assert run([str(doc), "-s", "-c", "4"]) == EXIT_SUCCESS
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "    # Title"
        assert all(line.startswith("    ") for line in lines)

    def test_stdin(self, monkeypatch, capsys) -> None:
        """Test reading standard input with '-'."""
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"> quoted\n")))
        assert run(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "│ quoted\n"

    def test_table_style_option(self, tmp_path: Path, capsys) -> None:
        """Test the --table-style flag."""
        path = tmp_path / "t.md"
        path.write_text("| A |\n|---|\n| 1 |\n", encoding="utf-8")
        assert run([str(path), "--table-style", "box"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.splitlines()[0] == "┌───┐"


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Tests for error reporting and exit codes."""

    def test_missing_file(self, tmp_path: Path, capsys) -> None:
        """Test that a missing file exits with 1."""
        assert run([str(tmp_path / "nope.md")]) == EXIT_INPUT_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("Error: File not found")

    def test_invalid_utf8(self, tmp_path: Path, capsys) -> None:
        """Test that non UTF-8 input exits with 1."""
        path = tmp_path / "bad.md"
        path.write_bytes(b"\xff\xfe")
        assert run([str(path)]) == EXIT_INPUT_ERROR
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_negative_center(self, doc: Path, capsys) -> None:
        """Test that a negative centering offset exits with 2."""
        assert run([str(doc), "--center=-1"]) == EXIT_USAGE_ERROR
        assert "center_offset" in capsys.readouterr().err

    def test_non_integer_center(self, doc: Path) -> None:
        """Test that argparse rejects a non-integer offset."""
        with pytest.raises(SystemExit) as exc_info:
            run([str(doc), "--center", "wide"])
        assert exc_info.value.code == EXIT_USAGE_ERROR

    def test_closed_output_pipe(self, doc: Path, monkeypatch, capsys, closed_pipe) -> None:
        """Test that a closed stdout pipe exits with 3 and reports the error."""
        monkeypatch.setattr("sys.stdout", closed_pipe)
        assert run([str(doc)]) == EXIT_OUTPUT_ERROR
        assert capsys.readouterr().err.startswith("Error: Failed to write rendered output")

    def test_version(self, capsys) -> None:
        """Test --version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("md2term ")

    @pytest.mark.parametrize(
        "exception,code",
        [
            (FileNotFoundError("x.md"), EXIT_INPUT_ERROR),
            (MalformedFileError("bad"), EXIT_INPUT_ERROR),
            (ConfigError("bad key"), EXIT_USAGE_ERROR),
            (OutputWriteError(), EXIT_OUTPUT_ERROR),
        ],
    )
    def test_exit_code_mapping(self, exception, code) -> None:
        """Test the exception to exit code mapping."""
        assert get_exit_code_for_exception(exception) == code


@pytest.mark.unit
@pytest.mark.cli
class TestEnvironmentVariables:
    """Tests for MD2TERM_* environment variable defaults."""

    def test_env_symbol(self, doc: Path, monkeypatch, capsys) -> None:
        """Test MD2TERM_SYMBOL."""
        monkeypatch.setenv("MD2TERM_SYMBOL", "true")
        assert run([str(doc)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("# Title\n")

    def test_env_center(self, doc: Path, monkeypatch, capsys) -> None:
        """Test MD2TERM_CENTER."""
        monkeypatch.setenv("MD2TERM_CENTER", "2")
        assert run([str(doc)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("  Title\n")

    def test_cli_beats_env(self, doc: Path, monkeypatch, capsys) -> None:
        """Test that command-line flags override environment variables."""
        monkeypatch.setenv("MD2TERM_CENTER", "2")
        assert run([str(doc), "--center", "0"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("Title\n")

    def test_invalid_env_choice_ignored(self, doc: Path, monkeypatch, capsys) -> None:
        """Test that an invalid choice in the environment falls back to the default."""
        monkeypatch.setenv("MD2TERM_TABLE_STYLE", "fancy")
        assert run([str(doc)]) == EXIT_SUCCESS


@pytest.mark.unit
@pytest.mark.cli
class TestParserBuilder:
    """Tests for the generated argument parser."""

    def test_defaults_from_options(self) -> None:
        """Test that parser defaults mirror the options dataclass."""
        args = DynamicCLIBuilder().build_parser().parse_args([])
        assert args.show_symbols is False
        assert args.center_offset == 0
        assert args.table_style == "ascii"
        assert args.input is None

    def test_config_defaults(self) -> None:
        """Test that config values replace the dataclass defaults."""
        builder = DynamicCLIBuilder({"center_offset": 6, "show_symbols": True})
        args = builder.build_parser().parse_args([])
        options = builder.map_args_to_options(args)
        assert options["center_offset"] == 6
        assert options["show_symbols"] is True

    def test_map_args_to_options(self) -> None:
        """Test that parsed flags map back to option field names."""
        builder = DynamicCLIBuilder()
        args = builder.build_parser().parse_args(["-s", "-c", "3", "--hr-width", "12"])
        assert builder.map_args_to_options(args) == {
            "show_symbols": True,
            "center_offset": 3,
            "table_style": "ascii",
            "hr_width": 12,
            "code_indent": 4,
            "color": "auto",
        }
