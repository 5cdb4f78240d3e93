"""Terminal renderer using rich."""

from typing import Any, Mapping

from rich.console import Console
from rich.style import Style
from rich.text import Text

from styled_text.formats.base import DocumentRenderer
from styled_text.formatting.ir import (
    BACKGROUND_COLOR,
    FONT,
    FOREGROUND_COLOR,
    LINK,
    STRIKETHROUGH,
    UNDERLINE,
    AttachmentNode,
    StyledDocument,
)


def _to_style(attributes: Mapping[str, Any], base_color: str) -> Style:
    """Map an attribute map onto a rich Style."""
    font = attributes.get(FONT)
    color = attributes.get(FOREGROUND_COLOR)
    return Style(
        bold=bool(font and font.bold) or None,
        italic=bool(font and font.italic) or None,
        color=color if color and color != base_color else None,
        bgcolor=attributes.get(BACKGROUND_COLOR),
        underline=bool(attributes.get(UNDERLINE)) or None,
        strike=bool(attributes.get(STRIKETHROUGH)) or None,
        link=attributes.get(LINK),
    )


class TerminalRenderer(DocumentRenderer):
    """Render a styled document for the terminal.

    Attachments are shown as a ``[image WxH source]`` badge on their own
    line, since the terminal cannot draw the image itself.
    """

    @property
    def file_extension(self) -> str:
        return ".txt"

    def to_text(self, document: StyledDocument) -> Text:
        """Build a rich Text carrying the document's styling."""
        base_color = document.base_style.foreground_color
        result = Text()
        for node in document.nodes():
            if isinstance(node, AttachmentNode):
                width, height = node.attachment.size
                result.append(
                    f"[image {width}x{height} {node.attachment.source}]",
                    style="reverse",
                )
            else:
                result.append(node.text, style=_to_style(node.attributes, base_color))
        return result

    def render(self, document: StyledDocument) -> str:
        """Render to plain text with ANSI styling codes."""
        console = Console(force_terminal=True, color_system="truecolor", width=10_000)
        with console.capture() as capture:
            console.print(self.to_text(document), end="", soft_wrap=True)
        return capture.get()
