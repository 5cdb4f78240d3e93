"""Renderers for styled documents."""

from styled_text.formats.base import DocumentRenderer
from styled_text.formats.html_renderer import HTMLRenderer
from styled_text.formats.terminal_renderer import TerminalRenderer

__all__ = [
    "DocumentRenderer",
    "HTMLRenderer",
    "TerminalRenderer",
]

# Map output format names to renderers
RENDERER_MAP: dict[str, type[DocumentRenderer]] = {
    "html": HTMLRenderer,
    "terminal": TerminalRenderer,
}

SUPPORTED_FORMATS = tuple(RENDERER_MAP.keys())


def get_renderer(name: str) -> type[DocumentRenderer]:
    """Get the renderer class for an output format name."""
    key = name.lower()
    if key not in RENDERER_MAP:
        raise ValueError(
            f"Unsupported output format: {key}. "
            f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        )
    return RENDERER_MAP[key]
