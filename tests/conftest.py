"""Pytest fixtures for Styled Text tests."""

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from styled_text.core.resolvers import MappingImageResolver


@pytest.fixture
def make_image() -> Callable[[int, int], Image.Image]:
    """Factory for solid-colour test images."""

    def _make(width: int, height: int, color: str = "orange") -> Image.Image:
        return Image.new("RGB", (width, height), color)

    return _make


@pytest.fixture
def cat_image(make_image) -> Image.Image:
    """A 1000x500 image, wider than the default bound."""
    return make_image(1000, 500)


@pytest.fixture
def cat_resolver(cat_image: Image.Image) -> MappingImageResolver:
    """Resolver that only knows about cat.png."""
    return MappingImageResolver({"cat.png": cat_image})


@pytest.fixture
def sample_markdown() -> str:
    """Sample markdown exercising several presets."""
    return (
        "# Title\n"
        "\n"
        "Some **bold** and *italic* text with `code`.\n"
        "\n"
        "> quoted line\n"
        "- [a link](https://example.com)\n"
    )


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Directory holding a 1000x500 cat.png and a 40x20 icon.png."""
    folder = tmp_path / "images"
    folder.mkdir()
    Image.new("RGB", (1000, 500), "orange").save(folder / "cat.png")
    Image.new("RGB", (40, 20), "blue").save(folder / "icon.png")
    return folder
