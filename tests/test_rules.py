"""Tests for rule construction and the built-in presets."""

import re

import pytest

from styled_text.core.compositor import compose
from styled_text.core.scanner import IMAGE_MARKER_PATTERN as SCANNER_MARKER_PATTERN
from styled_text.formatting.ir import (
    BACKGROUND_COLOR,
    FOREGROUND_COLOR,
    IMAGE_MARKER_PATTERN,
    LINK,
    STRIKETHROUGH,
    UNDERLINE,
    Font,
    FontTraits,
    FormattingRule,
    HighlightRule,
    MalformedPatternError,
    cursor_position,
    selection_range,
)
from styled_text.formatting.presets import (
    CODE_BACKGROUND_COLOR,
    HEADING_LEVEL,
    IMAGE_PATTERN,
    LINK_COLOR,
    QUOTE_COLOR,
    SYNTAX_COLOR,
    get_preset,
    heading_level,
    link_target,
    markdown_rules,
    url_rules,
)


class TestFormattingRule:
    """Tests for FormattingRule constructors."""

    def test_constant(self):
        """Test that constant rules ignore the match."""
        rule = FormattingRule.constant(FOREGROUND_COLOR, "red")

        assert rule.key == FOREGROUND_COLOR
        assert rule.value_fn("anything", (0, 8)) == "red"
        assert rule.font_traits == FontTraits.NONE
        assert rule.has_keyed_attribute

    def test_computed(self):
        """Test that computed rules keep their callback."""
        rule = FormattingRule.computed("length", lambda text, _range: len(text))

        assert rule.value_fn("abc", (0, 3)) == 3

    def test_traits(self):
        """Test trait-only rules."""
        rule = FormattingRule.traits(FontTraits.BOLD | FontTraits.ITALIC)

        assert rule.key is None
        assert not rule.has_keyed_attribute
        assert not rule.is_noop


class TestHighlightRule:
    """Tests for HighlightRule construction."""

    def test_string_pattern_compiled(self):
        """Test that string patterns are compiled at construction."""
        rule = HighlightRule.single(r"\d+", FormattingRule.traits(FontTraits.BOLD))

        assert isinstance(rule.pattern, re.Pattern)
        assert rule.formatting_rules == (FormattingRule.traits(FontTraits.BOLD),)

    def test_compiled_pattern_kept(self):
        """Test that compiled patterns are used as-is."""
        pattern = re.compile("abc", re.IGNORECASE)

        assert HighlightRule(pattern).pattern is pattern

    def test_flags_applied(self):
        """Test that flags are passed to the compiler."""
        rule = HighlightRule("abc", flags=re.IGNORECASE)

        assert rule.pattern.search("ABC") is not None

    def test_malformed_pattern(self):
        """Test that a bad pattern fails when the rule is built."""
        with pytest.raises(MalformedPatternError, match="Invalid pattern"):
            HighlightRule("(unclosed", [FormattingRule.traits(FontTraits.BOLD)])

    def test_malformed_pattern_is_value_error(self):
        """Test that MalformedPatternError can be caught as ValueError."""
        with pytest.raises(ValueError):
            HighlightRule("[")

    def test_flags_with_compiled_pattern(self):
        """Test that flags cannot be added to a compiled pattern."""
        with pytest.raises(MalformedPatternError):
            HighlightRule(re.compile("abc"), flags=re.MULTILINE)


class TestFont:
    """Tests for Font trait merging."""

    def test_with_traits_unions(self):
        """Test that traits are added, never replaced."""
        font = Font(traits=FontTraits.BOLD).with_traits(FontTraits.ITALIC)

        assert font.bold
        assert font.italic
        assert not font.monospace

    def test_with_traits_returns_copy(self):
        """Test that fonts are immutable."""
        font = Font()
        font.with_traits(FontTraits.BOLD)

        assert font.traits == FontTraits.NONE


class TestSelectionHelpers:
    """Tests for selection range helpers."""

    def test_cursor_position(self):
        assert cursor_position(5) == (5, 5)

    def test_selection_range(self):
        assert selection_range(5, 3) == (5, 8)


class TestMarkdownPreset:
    """Tests for the markdown rule set."""

    @pytest.fixture
    def rules(self) -> list[HighlightRule]:
        """Create the markdown rules."""
        return markdown_rules()

    def test_heading(self, rules):
        """Test that headings are bold and carry their level."""
        doc = compose("## Section\nbody", rules)

        assert doc.font_at(0).bold
        assert doc.attributes_at(3)[HEADING_LEVEL] == 2
        assert not doc.font_at(12).bold
        assert HEADING_LEVEL not in doc.attributes_at(12)

    def test_heading_needs_space(self, rules):
        """Test that '#tag' is not a heading."""
        doc = compose("#tag", rules)

        assert HEADING_LEVEL not in doc.attributes_at(0)

    def test_bold_italic_and_plain(self, rules, sample_markdown):
        """Test emphasis styling in a larger sample."""
        doc = compose(sample_markdown, rules)
        bold = sample_markdown.index("**bold**")
        italic = sample_markdown.index("*italic*")
        between = sample_markdown.index(" and ")

        assert doc.font_at(bold).bold and not doc.font_at(bold).italic
        assert doc.font_at(italic + 1).italic and not doc.font_at(italic + 1).bold
        assert doc.font_at(between) == Font()

    def test_bold_italic_markers(self, rules):
        """Test triple-star emphasis."""
        doc = compose("***both***", rules)

        assert doc.font_at(4).traits == FontTraits.BOLD | FontTraits.ITALIC

    def test_underscore_emphasis(self, rules):
        """Test underscore bold and italic."""
        doc = compose("__strong__ _soft_ snake_case", rules)

        assert doc.font_at(2).bold
        assert doc.font_at(12).italic
        assert not doc.font_at(24).italic

    def test_inline_code(self, rules, sample_markdown):
        """Test that inline code is monospace with a background."""
        doc = compose(sample_markdown, rules)
        code = sample_markdown.index("`code`")

        assert doc.font_at(code).monospace
        assert doc.attributes_at(code)[BACKGROUND_COLOR] == CODE_BACKGROUND_COLOR

    def test_code_block(self, rules):
        """Test fenced code blocks."""
        text = "before\n```python\nx = 1\n```\nafter"
        doc = compose(text, rules)

        assert doc.font_at(text.index("x = 1")).monospace
        assert not doc.font_at(0).monospace
        assert not doc.font_at(text.index("after")).monospace

    def test_link(self, rules, sample_markdown):
        """Test that links carry their target."""
        doc = compose(sample_markdown, rules)
        link = sample_markdown.index("[a link]")

        assert doc.attributes_at(link)[LINK] == "https://example.com"
        assert doc.attributes_at(link)[FOREGROUND_COLOR] == LINK_COLOR

    def test_image_marker_not_a_link(self, rules):
        """Test that image markers are dimmed rather than linked."""
        doc = compose("![cat](cat.png)", rules)

        assert LINK not in doc.attributes_at(1)
        assert doc.attributes_at(0)[FOREGROUND_COLOR] == SYNTAX_COLOR

    def test_image_rule_matches_scanner_markers(self):
        """Test that the preset dims exactly what the scanner resolves."""
        assert IMAGE_PATTERN == IMAGE_MARKER_PATTERN.pattern
        assert SCANNER_MARKER_PATTERN is IMAGE_MARKER_PATTERN

    def test_quote_and_bullet(self, rules, sample_markdown):
        """Test block quotes and list bullets."""
        doc = compose(sample_markdown, rules)
        quote = sample_markdown.index("> quoted")
        bullet = sample_markdown.index("- [a link]")

        assert doc.font_at(quote).italic
        assert doc.attributes_at(quote)[FOREGROUND_COLOR] == QUOTE_COLOR
        assert doc.attributes_at(bullet)[FOREGROUND_COLOR] == SYNTAX_COLOR

    def test_strikethrough(self, rules):
        """Test strikethrough text."""
        doc = compose("~~gone~~ kept", rules)

        assert doc.attributes_at(3)[STRIKETHROUGH] is True
        assert STRIKETHROUGH not in doc.attributes_at(10)

    def test_helpers(self):
        """Test the value callbacks used by the preset."""
        assert heading_level("### Title", (0, 9)) == 3
        assert link_target("[label](http://x.org)", (0, 21)) == "http://x.org"


class TestUrlPreset:
    """Tests for the URL rule set."""

    def test_url_linked(self):
        """Test that bare URLs are underlined links."""
        text = "visit https://example.com/path now"
        doc = compose(text, url_rules())
        start = text.index("https")

        attributes = doc.attributes_at(start)
        assert attributes[LINK] == "https://example.com/path"
        assert attributes[UNDERLINE] is True
        assert LINK not in doc.attributes_at(0)
        assert LINK not in doc.attributes_at(len(text) - 1)


class TestGetPreset:
    """Tests for preset lookup."""

    def test_known_presets(self):
        """Test looking up each preset by name."""
        assert len(get_preset("markdown")) == len(markdown_rules())
        assert len(get_preset("URL")) == 1
        assert get_preset("none") == []

    def test_unknown_preset(self):
        """Test error for unknown preset names."""
        with pytest.raises(ValueError, match="Unknown preset"):
            get_preset("latex")
