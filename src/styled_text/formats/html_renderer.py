"""HTML renderer."""

import base64
import html
import io

from styled_text.formats.base import DocumentRenderer
from styled_text.formatting.ir import (
    BACKGROUND_COLOR,
    FONT,
    FOREGROUND_COLOR,
    LINK,
    STRIKETHROUGH,
    UNDERLINE,
    Attachment,
    AttachmentNode,
    StyledDocument,
    TextNode,
)


def image_data_uri(attachment: Attachment) -> str:
    """Encode an attachment's image as a PNG data URI."""
    buffer = io.BytesIO()
    image = attachment.image
    if image.mode not in ("RGB", "RGBA", "L", "LA", "P"):
        image = image.convert("RGBA")
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


class HTMLRenderer(DocumentRenderer):
    """Render a styled document as an HTML fragment.

    Text runs become nested inline elements, attachments become <img>
    tags and line breaks become <br>.
    """

    @property
    def file_extension(self) -> str:
        return ".html"

    def render(self, document: StyledDocument) -> str:
        style = document.base_style
        parts: list[str] = [
            f'<div class="styled-text" style="font-family: {html.escape(style.font.family)}; '
            f'font-size: {style.font.size:g}pt; color: {html.escape(style.foreground_color)}">'
        ]
        for node in document.nodes():
            if isinstance(node, AttachmentNode):
                parts.append(self._attachment_to_html(node.attachment))
            else:
                parts.append(self._text_to_html(node, document))
        parts.append("</div>")
        return "".join(parts)

    def _attachment_to_html(self, attachment: Attachment) -> str:
        width, height = attachment.size
        return (
            f'<img src="{image_data_uri(attachment)}" '
            f'alt="{html.escape(attachment.source)}" '
            f'width="{width}" height="{height}">'
        )

    def _text_to_html(self, node: TextNode, document: StyledDocument) -> str:
        text = html.escape(node.text).replace("\n", "<br>\n")
        attributes = node.attributes

        font = attributes.get(FONT)
        if font is not None:
            if font.monospace:
                text = f"<code>{text}</code>"
            if font.italic:
                text = f"<i>{text}</i>"
            if font.bold:
                text = f"<b>{text}</b>"

        if attributes.get(STRIKETHROUGH):
            text = f"<s>{text}</s>"
        if attributes.get(UNDERLINE):
            text = f"<u>{text}</u>"

        css: list[str] = []
        color = attributes.get(FOREGROUND_COLOR)
        if color is not None and color != document.base_style.foreground_color:
            css.append(f"color: {color}")
        background = attributes.get(BACKGROUND_COLOR)
        if background is not None:
            css.append(f"background-color: {background}")
        if css:
            text = f'<span style="{html.escape("; ".join(css))}">{text}</span>'

        link = attributes.get(LINK)
        if link:
            text = f'<a href="{html.escape(str(link))}">{text}</a>'

        return text
