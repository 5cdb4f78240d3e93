"""Tests for the CLI interface."""

from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from PIL import Image
from typer.testing import CliRunner

from styled_text import config
from styled_text.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path: Path):
    """Run each test with fresh settings and no .env file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STYLED_TEXT_IMAGE_DIR", raising=False)
    config._settings = None
    yield
    config._settings = None


@pytest.fixture
def notes(tmp_path: Path) -> Path:
    """A markdown file next to a 1000x500 cat.png."""
    Image.new("RGB", (1000, 500), "orange").save(tmp_path / "cat.png")
    path = tmp_path / "notes.md"
    path.write_text("Hello **bold** ![cat](cat.png) world\n", encoding="utf-8")
    return path


class TestCLI:
    """Tests for CLI commands."""

    def test_version_flag(self):
        """Test --version flag."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Styled Text" in result.stdout

    def test_help_flag(self):
        """Test --help flag."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "Compose a text file" in result.stdout

    def test_missing_file_error(self, tmp_path: Path):
        """Test error when file doesn't exist."""
        result = runner.invoke(app, [str(tmp_path / "nonexistent.md")])

        assert result.exit_code != 0

    def test_terminal_output(self, notes: Path):
        """Test the default terminal preview."""
        result = runner.invoke(app, [str(notes)])

        assert result.exit_code == 0
        assert "[image 800x400 cat.png]" in result.stdout
        assert "**bold**" in result.stdout

    def test_html_output_file(self, notes: Path, tmp_path: Path):
        """Test writing HTML to a file."""
        output = tmp_path / "notes.html"

        result = runner.invoke(
            app, [str(notes), "--format", "html", "--output", str(output)]
        )

        assert result.exit_code == 0
        html = output.read_text(encoding="utf-8")
        assert "<b>**bold**</b>" in html
        assert 'width="800" height="400"' in html

    def test_max_image_width_option(self, notes: Path, tmp_path: Path):
        """Test --max-image-width is passed through."""
        result = runner.invoke(app, [str(notes), "--max-image-width", "200"])

        assert result.exit_code == 0
        assert "[image 200x100 cat.png]" in result.stdout

    def test_images_option(self, notes: Path, tmp_path: Path):
        """Test resolving images from another directory."""
        other = tmp_path / "elsewhere"
        other.mkdir()
        Image.new("RGB", (30, 60)).save(other / "cat.png")

        result = runner.invoke(app, [str(notes), "--images", str(other)])

        assert result.exit_code == 0
        assert "[image 30x60 cat.png]" in result.stdout

    def test_unknown_preset(self, notes: Path):
        """Test error for an unknown preset."""
        result = runner.invoke(app, [str(notes), "--preset", "latex"])

        assert result.exit_code == 2
        assert "Unknown preset" in result.stdout

    def test_non_utf8_input(self, tmp_path: Path):
        """Test that a binary input file exits with an error, not a traceback."""
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe\x00bad")

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 1
        assert "Cannot decode" in result.stdout
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_max_image_width_help_names_setting(self):
        """Test that the width option help points at the settings default."""
        command = typer.main.get_command(app)
        option = next(p for p in command.params if p.name == "max_image_width")

        assert "STYLED_TEXT_MAX_IMAGE_WIDTH" in option.help

    def test_composition_error(self, notes: Path):
        """Test that a failing resolver exits with an error."""
        with patch(
            "styled_text.cli.DirectoryImageResolver.__call__",
            side_effect=OSError("disk failure"),
        ):
            result = runner.invoke(app, [str(notes)])

        assert result.exit_code == 1
        assert "Error composing" in result.stdout
