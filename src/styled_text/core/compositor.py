"""Rule-based attribute compositor.

Pipeline for one composition:
1. Apply the base style over the whole text
2. Apply each highlight rule's matches, in rule order
3. Splice image placeholders in, highest offset first
4. Return the finished StyledDocument
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from styled_text.config import Settings, get_settings
from styled_text.core.errors import CompositionError, ImageResolutionError
from styled_text.core.scanner import scan
from styled_text.formatting.ir import (
    ATTACHMENT,
    FONT,
    LINE_BREAK,
    OBJECT_REPLACEMENT_CHARACTER,
    Attachment,
    BaseStyle,
    HighlightRule,
    ImagePlaceholder,
    ImageResolver,
    RuleSet,
    StyledDocument,
)
from styled_text.formatting.spans import SpanSet

logger = logging.getLogger(__name__)

__all__ = [
    "CompositionError",
    "ImageResolutionError",
    "Compositor",
    "apply_rule",
    "compose",
    "compose_text",
]


def apply_rule(spans: SpanSet, text: str, rule: HighlightRule) -> SpanSet:
    """Apply one highlight rule to every match of its pattern.

    Font traits are merged into the representative font active over the
    match, so traits accumulate across rules. Keyed attributes overwrite
    whatever an earlier rule set for the same key.
    """
    for match in rule.pattern.finditer(text):
        start, end = match.span()
        matched = match.group(0)

        for formatting_rule in rule.formatting_rules:
            if formatting_rule.font_traits:
                font = spans.representative_font(start, end)
                if font is not None:
                    spans = spans.set_attribute(
                        start, end, FONT, font.with_traits(formatting_rule.font_traits)
                    )

            if formatting_rule.has_keyed_attribute:
                value = formatting_rule.value_fn(matched, (start, end))
                spans = spans.set_attribute(start, end, formatting_rule.key, value)

    return spans


def _splice_attachments(
    text: str, spans: SpanSet, placeholders: Sequence[ImagePlaceholder]
) -> tuple[str, SpanSet, tuple[Attachment, ...]]:
    """Insert an attachment and a line break before each placeholder offset.

    Placeholders are processed from the highest offset down, so every
    insertion happens at an offset no earlier insertion has moved.
    """
    rendered_text = text
    attachments: list[Attachment] = []

    for placeholder in sorted(placeholders, key=lambda p: p.offset, reverse=True):
        offset = placeholder.offset
        if not 0 <= offset <= len(text):
            raise CompositionError(
                f"Placeholder offset {offset} is outside text of length {len(text)}"
            )
        attachment = Attachment(
            position=offset, source=placeholder.source, image=placeholder.image
        )
        rendered_text = (
            rendered_text[:offset]
            + OBJECT_REPLACEMENT_CHARACTER
            + LINE_BREAK
            + rendered_text[offset:]
        )
        spans = spans.splice(offset, [(1, {ATTACHMENT: attachment}), (1, {})])
        attachments.append(attachment)

    attachments.reverse()
    return rendered_text, spans, tuple(attachments)


def compose(
    text: str,
    rules: RuleSet,
    placeholders: Sequence[ImagePlaceholder] = (),
    base_style: Optional[BaseStyle] = None,
) -> StyledDocument:
    """Compose a styled document from text, rules and resolved placeholders.

    Args:
        text: Raw text; it is never modified
        rules: Highlight rules, applied in order
        placeholders: Resolved image markers (see scanner.scan)
        base_style: Font and colour applied before any rule (default: BaseStyle())

    Returns:
        The complete StyledDocument

    Raises:
        CompositionError: If a placeholder lies outside the text
    """
    if base_style is None:
        base_style = BaseStyle()

    spans = SpanSet.uniform(len(text), base_style.attributes())
    for rule in rules:
        spans = apply_rule(spans, text, rule)

    rendered_text, rendered_spans, attachments = _splice_attachments(
        text, spans, placeholders
    )
    logger.debug(
        "Composed %d characters: %d spans, %d attachments",
        len(text), len(spans), len(attachments),
    )

    return StyledDocument(
        text=text,
        spans=spans.spans,
        attachments=attachments,
        rendered_text=rendered_text,
        rendered_spans=rendered_spans.spans,
        base_style=base_style,
    )


def compose_text(
    text: str,
    rules: RuleSet,
    image_resolver: Optional[ImageResolver] = None,
    max_image_width: Optional[float] = None,
    base_style: Optional[BaseStyle] = None,
) -> StyledDocument:
    """Scan for image markers, then compose.

    Without a resolver no markers are resolved and the document has no
    attachments.

    Raises:
        ImageResolutionError: If the resolver raises; no partial document
            is produced
    """
    placeholders = []
    if image_resolver is not None:
        placeholders = scan(text, image_resolver, max_image_width)
    return compose(text, rules, placeholders, base_style)


class Compositor:
    """Binds a rule set, an image resolver and settings for repeated use.

    Rules are validated once when they are built, so a Compositor can be
    reused for every recomposition of an editor's text.
    """

    def __init__(
        self,
        rules: RuleSet = (),
        image_resolver: Optional[ImageResolver] = None,
        max_image_width: Optional[float] = None,
        base_style: Optional[BaseStyle] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """Initialize the compositor.

        Args:
            rules: Highlight rules, applied in order
            image_resolver: Optional image lookup for markers
            max_image_width: Image bound (default: settings.max_image_width)
            base_style: Base style (default: settings.base_style())
            settings: Settings to read defaults from (default: get_settings())
        """
        settings = settings or get_settings()
        self.rules = tuple(rules)
        self.image_resolver = image_resolver
        self.max_image_width = (
            max_image_width if max_image_width is not None else settings.max_image_width
        )
        self.base_style = base_style or settings.base_style()

    def compose(self, text: str) -> StyledDocument:
        """Compose ``text`` with the bound rules and resolver."""
        return compose_text(
            text,
            self.rules,
            image_resolver=self.image_resolver,
            max_image_width=self.max_image_width,
            base_style=self.base_style,
        )

    def compose_file(self, path: Path) -> StyledDocument:
        """Read a UTF-8 text file and compose its contents.

        Raises:
            CompositionError: If the file does not exist or is not UTF-8
        """
        if not path.exists():
            raise CompositionError(f"Input file not found: {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CompositionError(f"Cannot decode {path}: {e}") from e
        return self.compose(text)
