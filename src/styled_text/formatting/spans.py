"""Immutable span storage for attributed text.

A SpanSet is a sorted tuple of non-overlapping spans that together cover
``[0, length)``. Every operation returns a new SpanSet, so applying a
sequence of rules is a left fold over the rule list.
"""

from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from styled_text.formatting.ir import FONT, Font, Span


def _split_at(spans: list[Span], offset: int) -> list[Span]:
    """Make sure ``offset`` falls on a span boundary."""
    result: list[Span] = []
    for span in spans:
        if span.start < offset < span.end:
            result.append(Span(span.start, offset, span.attributes))
            result.append(Span(offset, span.end, span.attributes))
        else:
            result.append(span)
    return result


def _coalesce(spans: list[Span]) -> list[Span]:
    """Merge neighbours with equal attributes and drop empty spans."""
    merged: list[Span] = []
    for span in spans:
        if span.start == span.end:
            continue
        if merged and merged[-1].end == span.start and merged[-1].attributes == span.attributes:
            merged[-1] = Span(merged[-1].start, span.end, merged[-1].attributes)
        else:
            merged.append(span)
    return merged


class SpanSet:
    """Sorted, non-overlapping attribute spans over a text of fixed length."""

    __slots__ = ("_spans", "_length")

    def __init__(self, spans: Iterable[Span] = (), length: Optional[int] = None) -> None:
        self._spans = tuple(spans)
        if length is None:
            length = self._spans[-1].end if self._spans else 0
        self._length = length

    @classmethod
    def uniform(cls, length: int, attributes: Mapping[str, Any]) -> "SpanSet":
        """One span carrying ``attributes`` over the whole range.

        A zero length still yields a single empty span, so the base style
        of an empty text remains observable.
        """
        return cls((Span(0, length, dict(attributes)),), length)

    @property
    def spans(self) -> tuple[Span, ...]:
        return self._spans

    @property
    def length(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Span]:
        return iter(self._spans)

    def __len__(self) -> int:
        return len(self._spans)

    def __getitem__(self, index: int) -> Span:
        return self._spans[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpanSet):
            return NotImplemented
        return self._length == other._length and self._spans == other._spans

    def __repr__(self) -> str:
        return f"SpanSet(length={self._length}, spans={list(self._spans)!r})"

    def _check_range(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= self._length:
            raise ValueError(
                f"Range ({start}, {end}) is outside the span set of length {self._length}"
            )

    def attributes_in(self, start: int, end: int) -> list[Mapping[str, Any]]:
        """Get the attribute maps of every span overlapping ``[start, end)``."""
        self._check_range(start, end)
        if start == end:
            return []
        return [
            span.attributes
            for span in self._spans
            if span.start < end and span.end > start
        ]

    def representative_font(self, start: int, end: int) -> Optional[Font]:
        """Pick the font to merge traits into for ``[start, end)``.

        When several fonts are active in the range the last one encountered
        wins. Zero-length ranges have no representative.
        """
        fonts = [attrs[FONT] for attrs in self.attributes_in(start, end) if FONT in attrs]
        return fonts[-1] if fonts else None

    def set_attribute(self, start: int, end: int, key: str, value: Any) -> "SpanSet":
        """Overwrite ``key`` with ``value`` over ``[start, end)``."""
        self._check_range(start, end)
        if start == end:
            return self

        spans = _split_at(_split_at(list(self._spans), start), end)
        updated: list[Span] = []
        for span in spans:
            if start <= span.start and span.end <= end:
                attributes = dict(span.attributes)
                attributes[key] = value
                updated.append(Span(span.start, span.end, attributes))
            else:
                updated.append(span)
        return SpanSet(_coalesce(updated), self._length)

    def splice(
        self, offset: int, inserted: Sequence[tuple[int, Mapping[str, Any]]]
    ) -> "SpanSet":
        """Insert new spans before ``offset``, shifting everything after it.

        Args:
            offset: Insertion point; existing text at this offset moves right
            inserted: (length, attributes) pairs for the new spans, in order

        Returns:
            A SpanSet whose length grows by the total inserted length
        """
        self._check_range(offset, offset)
        total = sum(length for length, _ in inserted)

        before: list[Span] = []
        after: list[Span] = []
        for span in _split_at(list(self._spans), offset):
            if span.end <= offset and span.start < offset:
                before.append(span)
            else:
                after.append(Span(span.start + total, span.end + total, span.attributes))

        new_spans: list[Span] = []
        position = offset
        for length, attributes in inserted:
            new_spans.append(Span(position, position + length, dict(attributes)))
            position += length

        return SpanSet(_coalesce(before + new_spans + after), self._length + total)
