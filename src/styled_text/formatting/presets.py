"""Ready-made highlight rule sets."""

import re
from typing import Callable

from styled_text.formatting.ir import (
    BACKGROUND_COLOR,
    FOREGROUND_COLOR,
    IMAGE_MARKER_PATTERN,
    LINK,
    STRIKETHROUGH,
    UNDERLINE,
    FontTraits,
    FormattingRule,
    HighlightRule,
    MatchRange,
)

SYNTAX_COLOR = "#86868b"
CODE_BACKGROUND_COLOR = "#f2f2f7"
LINK_COLOR = "#0a66c2"
QUOTE_COLOR = "#6e6e73"

HEADING_LEVEL = "heading_level"

# Order matters: bold-italic before bold, bold before italic
HEADING_PATTERN = r"^#{1,6}[ \t].*$"
BOLD_ITALIC_PATTERN = r"\*\*\*(.+?)\*\*\*"
BOLD_PATTERN = r"(?<!\*)\*\*(?!\*)(.+?)(?<!\*)\*\*(?!\*)|__(.+?)__"
ITALIC_PATTERN = r"(?<!\*)\*(?![*\s])([^*\n]+?)(?<!\*)\*(?!\*)|(?<![_\w])_(?![_\s])([^_\n]+?)_(?![_\w])"
INLINE_CODE_PATTERN = r"`[^`\n]+`"
CODE_BLOCK_PATTERN = r"^```[^\n]*\n[\s\S]*?^```$"
LINK_PATTERN = r"(?<!!)\[([^\]]+)\]\(([^)\s]+)\)"
IMAGE_PATTERN = IMAGE_MARKER_PATTERN.pattern
QUOTE_PATTERN = r"^>.*$"
LIST_BULLET_PATTERN = r"^[ \t]*(?:[-*+]|\d+\.)(?=[ \t])"
STRIKETHROUGH_PATTERN = r"~~(.+?)~~"
URL_PATTERN = r"https?://[^\s<>\"'()\[\]]+"

_LINK_TARGET = re.compile(r"\]\(([^)\s]+)\)$")


def heading_level(text: str, _range: MatchRange) -> int:
    """Number of leading '#' characters in a heading line."""
    return len(text) - len(text.lstrip("#"))


def link_target(text: str, _range: MatchRange) -> str:
    """Extract the URL from a ``[label](url)`` match."""
    match = _LINK_TARGET.search(text)
    return match.group(1) if match else text


def markdown_rules() -> list[HighlightRule]:
    """Highlight rules for common markdown syntax."""
    return [
        HighlightRule(
            HEADING_PATTERN,
            [
                FormattingRule.traits(FontTraits.BOLD),
                FormattingRule.computed(HEADING_LEVEL, heading_level),
            ],
            flags=re.MULTILINE,
        ),
        HighlightRule.single(
            BOLD_ITALIC_PATTERN,
            FormattingRule.traits(FontTraits.BOLD | FontTraits.ITALIC),
        ),
        HighlightRule.single(BOLD_PATTERN, FormattingRule.traits(FontTraits.BOLD)),
        HighlightRule.single(ITALIC_PATTERN, FormattingRule.traits(FontTraits.ITALIC)),
        HighlightRule.single(
            STRIKETHROUGH_PATTERN, FormattingRule.constant(STRIKETHROUGH, True)
        ),
        HighlightRule(
            INLINE_CODE_PATTERN,
            [
                FormattingRule.traits(FontTraits.MONOSPACE),
                FormattingRule.constant(BACKGROUND_COLOR, CODE_BACKGROUND_COLOR),
            ],
        ),
        HighlightRule(
            CODE_BLOCK_PATTERN,
            [
                FormattingRule.traits(FontTraits.MONOSPACE),
                FormattingRule.constant(BACKGROUND_COLOR, CODE_BACKGROUND_COLOR),
            ],
            flags=re.MULTILINE,
        ),
        HighlightRule(
            LINK_PATTERN,
            [
                FormattingRule.constant(FOREGROUND_COLOR, LINK_COLOR),
                FormattingRule.computed(LINK, link_target),
            ],
        ),
        HighlightRule.single(
            IMAGE_PATTERN, FormattingRule.constant(FOREGROUND_COLOR, SYNTAX_COLOR)
        ),
        HighlightRule(
            QUOTE_PATTERN,
            [
                FormattingRule.traits(FontTraits.ITALIC),
                FormattingRule.constant(FOREGROUND_COLOR, QUOTE_COLOR),
            ],
            flags=re.MULTILINE,
        ),
        HighlightRule.single(
            LIST_BULLET_PATTERN,
            FormattingRule.constant(FOREGROUND_COLOR, SYNTAX_COLOR),
            flags=re.MULTILINE,
        ),
    ]


def url_rules() -> list[HighlightRule]:
    """Highlight bare http(s) URLs as underlined links."""
    return [
        HighlightRule(
            URL_PATTERN,
            [
                FormattingRule.constant(FOREGROUND_COLOR, LINK_COLOR),
                FormattingRule.constant(UNDERLINE, True),
                FormattingRule.computed(LINK, lambda text, _range: text),
            ],
        ),
    ]


PRESETS: dict[str, Callable[[], list[HighlightRule]]] = {
    "markdown": markdown_rules,
    "url": url_rules,
    "none": list,
}


def get_preset(name: str) -> list[HighlightRule]:
    """Build the rule set registered under ``name``."""
    key = name.lower()
    if key not in PRESETS:
        raise ValueError(
            f"Unknown preset: {name}. "
            f"Available presets: {', '.join(PRESETS)}"
        )
    return PRESETS[key]()
