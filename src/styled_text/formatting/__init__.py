"""Data model and span storage for styled text."""

from styled_text.formatting.ir import (
    ATTACHMENT,
    BACKGROUND_COLOR,
    FONT,
    FOREGROUND_COLOR,
    LINK,
    STRIKETHROUGH,
    UNDERLINE,
    Attachment,
    AttachmentNode,
    BaseStyle,
    Font,
    FontTraits,
    FormattingRule,
    HighlightRule,
    ImagePlaceholder,
    MalformedPatternError,
    Span,
    StyledDocument,
    TextNode,
)
from styled_text.formatting.spans import SpanSet
from styled_text.formatting.presets import get_preset, markdown_rules, url_rules

__all__ = [
    "ATTACHMENT",
    "BACKGROUND_COLOR",
    "FONT",
    "FOREGROUND_COLOR",
    "LINK",
    "STRIKETHROUGH",
    "UNDERLINE",
    "Attachment",
    "AttachmentNode",
    "BaseStyle",
    "Font",
    "FontTraits",
    "FormattingRule",
    "HighlightRule",
    "ImagePlaceholder",
    "MalformedPatternError",
    "Span",
    "SpanSet",
    "StyledDocument",
    "TextNode",
    "get_preset",
    "markdown_rules",
    "url_rules",
]
