"""Intermediate Representation for styled text.

This module defines the data structures shared by the scanner, the
compositor and the renderers: font traits, formatting and highlight
rules, image placeholders and the final styled document. Every value
here is immutable; a composition builds fresh instances and never
mutates what the caller passed in.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Flag, auto
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from PIL import Image


# =============================================================================
# Attribute keys
# =============================================================================

FONT = "font"
FOREGROUND_COLOR = "foreground_color"
BACKGROUND_COLOR = "background_color"
UNDERLINE = "underline"
STRIKETHROUGH = "strikethrough"
LINK = "link"
ATTACHMENT = "attachment"

# An attachment occupies one replacement character followed by a line break
OBJECT_REPLACEMENT_CHARACTER = "\ufffc"
LINE_BREAK = "\n"
ATTACHMENT_LENGTH = len(OBJECT_REPLACEMENT_CHARACTER + LINE_BREAK)


class FontTraits(Flag):
    """Font variation flags (combinable with |)."""

    NONE = 0
    BOLD = auto()
    ITALIC = auto()
    MONOSPACE = auto()
    CONDENSED = auto()
    EXPANDED = auto()


@dataclass(frozen=True)
class Font:
    """A font description: family, point size and trait flags."""

    family: str = "system-ui"
    size: float = 13.0
    traits: FontTraits = FontTraits.NONE

    @property
    def bold(self) -> bool:
        """Check if this font is bold."""
        return FontTraits.BOLD in self.traits

    @property
    def italic(self) -> bool:
        """Check if this font is italic."""
        return FontTraits.ITALIC in self.traits

    @property
    def monospace(self) -> bool:
        return FontTraits.MONOSPACE in self.traits

    def with_traits(self, traits: FontTraits) -> "Font":
        """Return a copy of this font with ``traits`` unioned in."""
        return replace(self, traits=self.traits | traits)


DEFAULT_FONT = Font()
DEFAULT_FOREGROUND_COLOR = "#1d1d1f"


@dataclass(frozen=True)
class BaseStyle:
    """Style applied across the whole text before any rule runs.

    Attributes:
        font: Baseline font that trait-merging rules build on
        foreground_color: Default text colour
    """

    font: Font = DEFAULT_FONT
    foreground_color: str = DEFAULT_FOREGROUND_COLOR

    def attributes(self) -> dict[str, Any]:
        """Get the attribute map this style contributes to every span."""
        return {FONT: self.font, FOREGROUND_COLOR: self.foreground_color}


# =============================================================================
# Rules
# =============================================================================

MatchRange = tuple[int, int]
ValueFn = Callable[[str, MatchRange], Any]


class MalformedPatternError(ValueError):
    """A highlight pattern could not be compiled."""

    pass


@dataclass(frozen=True)
class FormattingRule:
    """A unit of style applied to every match of a highlight pattern.

    Attributes:
        key: Attribute to set (e.g. FOREGROUND_COLOR); None for trait-only rules
        value_fn: Called as ``value_fn(matched_text, (start, end))`` per match
        font_traits: Traits merged into the font active over the match
    """

    key: Optional[str] = None
    value_fn: Optional[ValueFn] = None
    font_traits: FontTraits = FontTraits.NONE

    @classmethod
    def constant(cls, key: str, value: Any) -> "FormattingRule":
        """Rule that sets ``key`` to the same value on every match."""
        return cls(key=key, value_fn=lambda _text, _range: value)

    @classmethod
    def computed(cls, key: str, value_fn: ValueFn) -> "FormattingRule":
        """Rule that computes the value of ``key`` from each match."""
        return cls(key=key, value_fn=value_fn)

    @classmethod
    def traits(cls, font_traits: FontTraits) -> "FormattingRule":
        """Rule that only merges font traits."""
        return cls(font_traits=font_traits)

    @property
    def has_keyed_attribute(self) -> bool:
        return self.key is not None and self.value_fn is not None

    @property
    def is_noop(self) -> bool:
        return not self.has_keyed_attribute and not self.font_traits


def compile_pattern(
    pattern: Union[str, "re.Pattern[str]"], flags: int = 0
) -> "re.Pattern[str]":
    """Compile a highlight pattern, raising MalformedPatternError on failure."""
    if isinstance(pattern, re.Pattern):
        if flags:
            raise MalformedPatternError(
                "Flags cannot be combined with an already compiled pattern"
            )
        return pattern
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise MalformedPatternError(f"Invalid pattern {pattern!r}: {e}") from e


@dataclass(frozen=True)
class HighlightRule:
    """A pattern plus the formatting rules applied to each of its matches.

    String patterns are compiled here, so a bad pattern fails when the rule
    set is built rather than on every composition.
    """

    pattern: Union[str, "re.Pattern[str]"]
    formatting_rules: Sequence[FormattingRule] = ()
    flags: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", compile_pattern(self.pattern, self.flags))
        object.__setattr__(self, "formatting_rules", tuple(self.formatting_rules))

    @classmethod
    def single(
        cls,
        pattern: Union[str, "re.Pattern[str]"],
        formatting_rule: FormattingRule,
        flags: int = 0,
    ) -> "HighlightRule":
        """Build a rule with exactly one formatting rule."""
        return cls(pattern=pattern, formatting_rules=(formatting_rule,), flags=flags)


RuleSet = Sequence[HighlightRule]
ImageResolver = Callable[[str], Optional[Image.Image]]


# =============================================================================
# Images
# =============================================================================

# ![alt text](source reference)
IMAGE_MARKER_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")


@dataclass(frozen=True)
class ImagePlaceholder:
    """A resolved image marker waiting to be spliced into the document.

    Attributes:
        offset: Start of the marker in the original text
        source: Reference captured from the marker, as passed to the resolver
        image: The resolved image, already constrained to the width bound
        alt_text: Alt text captured from the marker (informational only)
    """

    offset: int
    source: str
    image: Image.Image
    alt_text: str = ""


@dataclass(frozen=True)
class Attachment:
    """An inline image node in a styled document.

    Attributes:
        position: Offset in the original text the node is inserted before
        source: Reference the image was resolved from
        image: The (possibly scaled) image
    """

    position: int
    source: str
    image: Image.Image

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


# =============================================================================
# Styled document
# =============================================================================

@dataclass(frozen=True)
class Span:
    """A contiguous range of offsets sharing one attribute map."""

    start: int
    end: int
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def length(self) -> int:
        return self.end - self.start

    def __contains__(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(frozen=True)
class TextNode:
    """A run of text in the spliced document."""

    text: str
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AttachmentNode:
    """An inline attachment in the spliced document."""

    attachment: Attachment


@dataclass(frozen=True)
class StyledDocument:
    """Complete styled document produced by one composition.

    Attributes:
        text: The original input text, markers included
        spans: Attribute spans covering ``text`` in original coordinates
        attachments: Inline images, ascending by position
        rendered_text: ``text`` with one replacement character and a line
            break spliced in before each attachment position
        rendered_spans: Attribute spans covering ``rendered_text``
        base_style: The base style the spans were built on
    """

    text: str
    spans: tuple[Span, ...]
    attachments: tuple[Attachment, ...] = ()
    rendered_text: str = ""
    rendered_spans: tuple[Span, ...] = ()
    base_style: BaseStyle = BaseStyle()

    @property
    def plain_text(self) -> str:
        """Get the text content, ignoring attachments."""
        return self.text

    def attributes_at(self, offset: int) -> dict[str, Any]:
        """Get the attributes active at an offset of the original text."""
        for span in self.spans:
            if offset in span:
                return dict(span.attributes)
        raise IndexError(f"Offset {offset} is outside the document")

    def font_at(self, offset: int) -> Font:
        """Get the font active at an offset of the original text."""
        return self.attributes_at(offset)[FONT]

    def runs(self) -> list[tuple[str, Mapping[str, Any]]]:
        """Get (text, attributes) pairs in original coordinates."""
        return [(self.text[span.start:span.end], span.attributes) for span in self.spans]

    def rendered_offset(self, offset: int) -> int:
        """Map an original-text offset to its offset in ``rendered_text``."""
        inserted = sum(1 for a in self.attachments if a.position <= offset)
        return offset + inserted * ATTACHMENT_LENGTH

    def nodes(self) -> list[Union[TextNode, AttachmentNode]]:
        """Get the spliced sequence of text runs and attachment nodes."""
        result: list[Union[TextNode, AttachmentNode]] = []
        for span in self.rendered_spans:
            attachment = span.attributes.get(ATTACHMENT)
            if attachment is not None:
                result.append(AttachmentNode(attachment))
            elif span.length:
                result.append(
                    TextNode(self.rendered_text[span.start:span.end], span.attributes)
                )
        return result


def cursor_position(location: int) -> MatchRange:
    """Selection range for a caret at ``location``."""
    return (location, location)


def selection_range(location: int, length: int) -> MatchRange:
    """Selection range starting at ``location`` spanning ``length`` characters."""
    return (location, location + length)
