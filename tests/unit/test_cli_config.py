"""Unit tests for md2term configuration files.

This module tests config file discovery, loading of each supported format,
key normalization and the priority of config files against environment
variables and command-line flags.
"""

import json
from pathlib import Path

import pytest

from md2term.cli import main
from md2term.cli.config import (
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    normalize_config,
)
from md2term.constants import EXIT_SUCCESS, EXIT_USAGE_ERROR
from md2term.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove md2term environment variables that would change defaults."""
    for name in ("SYMBOL", "CENTER", "TABLE_STYLE", "HR_WIDTH", "CODE_INDENT", "COLOR", "CONFIG"):
        monkeypatch.delenv(f"MD2TERM_{name}", raising=False)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery."""

    def test_find_in_start_dir(self, tmp_path: Path) -> None:
        """Test discovering a config file in the start directory."""
        config = tmp_path / ".md2term.toml"
        config.write_text("symbol = true\n")
        assert find_config_in_parents(tmp_path) == config.resolve()

    def test_find_in_parent(self, tmp_path: Path) -> None:
        """Test discovering a config file in a parent directory."""
        config = tmp_path / ".md2term.yaml"
        config.write_text("center: 2\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_dedicated_file_beats_pyproject(self, tmp_path: Path) -> None:
        """Test that .md2term.* files win over pyproject.toml in the same directory."""
        (tmp_path / "pyproject.toml").write_text("[tool.md2term]\nsymbol = true\n")
        config = tmp_path / ".md2term.json"
        config.write_text("{}")
        assert find_config_in_parents(tmp_path) == config.resolve()

    def test_pyproject_without_section_skipped(self, tmp_path: Path) -> None:
        """Test that a pyproject.toml without [tool.md2term] is not a config file."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        found = find_config_in_parents(tmp_path)
        assert found is None or found.parent != tmp_path.resolve()


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading each config format."""

    def test_toml(self, tmp_path: Path) -> None:
        """Test loading TOML."""
        path = tmp_path / "c.toml"
        path.write_text('symbol = true\ntable_style = "box"\n')
        assert load_config_file(path) == {"symbol": True, "table_style": "box"}

    def test_yaml(self, tmp_path: Path) -> None:
        """Test loading YAML."""
        path = tmp_path / "c.yml"
        path.write_text("center: 3\n")
        assert load_config_file(path) == {"center": 3}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """Test that an empty YAML file is an empty config."""
        path = tmp_path / "c.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path: Path) -> None:
        """Test loading JSON."""
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"hr_width": 10}))
        assert load_config_file(path) == {"hr_width": 10}

    def test_pyproject_section(self, tmp_path: Path) -> None:
        """Test loading the [tool.md2term] section of pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.md2term]\ncenter = 1\n\n[tool.other]\nx = 2\n")
        assert load_config_file(path) == {"center": 1}

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("bad.toml", "symbol = \n"),
            ("bad.json", "{not json"),
            ("bad.yaml", "key: [unclosed"),
            ("list.json", "[1, 2]"),
            ("config.ini", "[x]"),
        ],
    )
    def test_invalid_files(self, tmp_path: Path, filename: str, content: str) -> None:
        """Test that malformed or unsupported files raise ConfigError."""
        path = tmp_path / filename
        path.write_text(content)
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing explicit config raises ConfigError."""
        with pytest.raises(ConfigError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")


@pytest.mark.unit
@pytest.mark.cli
class TestConfigNormalization:
    """Test key aliases and type checks."""

    def test_aliases(self) -> None:
        """Test field names, CLI names and kebab-case keys."""
        config = {"symbol": True, "center-offset": 2, "hr-width": 5, "table_style": "box"}
        assert normalize_config(config) == {
            "show_symbols": True,
            "center_offset": 2,
            "hr_width": 5,
            "table_style": "box",
        }

    def test_unknown_key(self) -> None:
        """Test that unknown keys are rejected."""
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            normalize_config({"colour": "never"})

    @pytest.mark.parametrize("config", [{"center": "4"}, {"center": True}, {"symbol": "yes"}])
    def test_wrong_types(self, config) -> None:
        """Test that values of the wrong type are rejected."""
        with pytest.raises(ConfigError):
            normalize_config(config)

    def test_no_config_disables_discovery(self, tmp_path: Path) -> None:
        """Test that --no-config skips discovery."""
        (tmp_path / ".md2term.toml").write_text("symbol = true\n")
        assert load_config_with_priority(no_config=True, start_dir=tmp_path) == {}
        assert load_config_with_priority(start_dir=tmp_path) == {"show_symbols": True}


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test config files against environment variables and flags."""

    @pytest.fixture
    def project(self, tmp_path: Path, monkeypatch) -> Path:
        """Create a directory with a config file and a document, and enter it."""
        (tmp_path / ".md2term.toml").write_text("symbol = true\ncenter = 2\n")
        (tmp_path / "doc.md").write_text("# Title\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        return tmp_path

    def test_config_applies(self, project: Path, capsys) -> None:
        """Test that a discovered config file sets defaults."""
        assert main(["doc.md", "--color", "never"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "  # Title\n"

    def test_env_beats_config(self, project: Path, monkeypatch, capsys) -> None:
        """Test that environment variables override config values."""
        monkeypatch.setenv("MD2TERM_CENTER", "0")
        assert main(["doc.md", "--color", "never"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "# Title\n"

    def test_cli_beats_config(self, project: Path, capsys) -> None:
        """Test that command-line flags override config values."""
        assert main(["doc.md", "--color", "never", "-c", "1"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == " # Title\n"

    def test_no_config_flag(self, project: Path, capsys) -> None:
        """Test that --no-config ignores the discovered file."""
        assert main(["doc.md", "--color", "never", "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Title\n"

    def test_explicit_config(self, project: Path, capsys) -> None:
        """Test --config with a YAML file."""
        (project / "other.yaml").write_text("hr_width: 3\n")
        (project / "rule.md").write_text("***\n", encoding="utf-8")
        assert main(["rule.md", "--color", "never", "--config", "other.yaml"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "---\n"

    def test_bad_config_exits_2(self, project: Path, capsys) -> None:
        """Test that an invalid config file is a usage error."""
        (project / ".md2term.toml").write_text("nonsense = 1\n")
        assert main(["doc.md", "--color", "never"]) == EXIT_USAGE_ERROR
        assert capsys.readouterr().err.startswith("Error: Unknown configuration key")
